import pytest

from app.utils.diff import MARK_CLOSE, MARK_OPEN, highlight
from app.utils.text import (
    SENTENCE_ENDINGS,
    char_len,
    clip_with_ellipsis,
    has_content,
    parse_words,
    truncate_at_sentence,
    within_range,
)


class TestTruncateAtSentence:
    """文末（。！？.）を優先した切り詰め"""

    def test_window_ending_exactly_on_marker(self):
        text = "東京都内の駅近物件です。広々としたリビングがあります。"
        assert truncate_at_sentence(text, 12) == "東京都内の駅近物件です。"

    def test_cuts_at_last_marker_inside_window(self):
        assert truncate_at_sentence("一文目。二文目が長いです", 7) == "一文目。"

    def test_ascii_period_and_fullwidth_marks(self):
        assert truncate_at_sentence("Hello. World again", 10) == "Hello."
        assert truncate_at_sentence("本当？はい", 4) == "本当？"
        assert truncate_at_sentence("見学歓迎！ぜひどうぞ", 7) == "見学歓迎！"

    def test_fitting_text_is_returned_verbatim(self):
        assert truncate_at_sentence("  駅近です。  ", 20) == "  駅近です。  "
        assert truncate_at_sentence("abc", 3) == "abc"

    def test_no_marker_returns_trimmed_window(self):
        text = "  東京の物件 広い部屋があります"
        assert truncate_at_sentence(text, 8) == "東京の物件"

    def test_cut_result_is_trimmed(self):
        assert truncate_at_sentence(" 駅近。 続きの文章です", 5) == "駅近。"

    def test_zero_max(self):
        assert truncate_at_sentence("abc", 0) == ""
        assert truncate_at_sentence("", 0) == ""

    def test_empty_text(self):
        assert truncate_at_sentence("", 10) == ""

    def test_negative_max_rejected(self):
        with pytest.raises(ValueError):
            truncate_at_sentence("abc", -1)

    def test_counts_code_points_not_bytes(self):
        # 絵文字・全角もそれぞれ 1 文字
        text = "🏠駅近。🏠広い。"
        assert char_len(text) == 8
        assert truncate_at_sentence(text, 7) == "🏠駅近。"

    def test_properties_over_many_lengths(self):
        text = "南向きの明るい住まいです。 公園が近く、子育てにも便利！ 周辺には商業施設が充実? Quiet area. 静かな環境"
        for n in range(0, char_len(text) + 3):
            out = truncate_at_sentence(text, n)
            assert char_len(out) <= n
            if char_len(text) <= n:
                assert out == text
                continue
            window = text[:n]
            assert window.strip().startswith(out) or out == ""
            if any(ch in SENTENCE_ENDINGS for ch in window):
                assert out[-1] in SENTENCE_ENDINGS
            else:
                assert out == window.strip()


class TestTruncateThenHighlight:
    def test_overlong_generation_clamped_and_diffed(self):
        sentence = "駅近で暮らしやすい住まいです。"  # 15 文字
        original = sentence * 41 + "あいうえお"
        assert char_len(original) == 620

        truncated = truncate_at_sentence(original, 550)
        assert char_len(truncated) <= 550
        assert truncated.endswith("。")
        assert char_len(truncated) == 540

        marked = highlight(original, truncated)
        assert marked.replace(MARK_OPEN, "").replace(MARK_CLOSE, "") == truncated
        unmarked = marked.split(MARK_OPEN)[0]
        assert original.startswith(unmarked)


class TestHelpers:
    def test_char_len_and_range(self):
        assert char_len(None) == 0
        assert char_len("パークタワー") == 6
        assert within_range("あいう", 3, 5)
        assert not within_range("あい", 3, 5)
        assert not within_range("あいうえおか", 3, 5)

    def test_clip_with_ellipsis(self):
        assert clip_with_ellipsis("あいうえお", 5) == "あいうえお"
        assert clip_with_ellipsis("あいうえおかきくけこ", 5) == "あいうえ…"
        assert char_len(clip_with_ellipsis("あいうえおかきくけこ", 5)) == 5
        assert clip_with_ellipsis("あいう", 0) == ""

    def test_parse_words(self):
        src = "駅徒歩3分 ラウンジ、ペット可/角部屋\n南向き,  　タワー"
        assert parse_words(src) == ["駅徒歩3分", "ラウンジ", "ペット可", "角部屋", "南向き", "タワー"]
        assert parse_words("") == []
        assert parse_words(None) == []

    def test_has_content(self):
        assert has_content("あ")
        assert has_content("3LDK")
        assert not has_content("")
        assert not has_content(None)
        assert not has_content("、。 ！")
