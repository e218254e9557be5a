from app.packs.loader import load_pack
from app.services.compliance import BannedWordFilter, CopyChecker
from app.services.prompt_builder import PromptBuilder


class TestBannedWordFilter:
    def setup_method(self):
        self.f = BannedWordFilter(["最高", "最高級", "日本一", "激安"])

    def test_find_prefers_longest_and_keeps_order(self):
        assert self.f.find("最高級の眺望、日本一の立地。最高です。") == ["最高級", "日本一", "最高"]

    def test_find_nothing(self):
        assert self.f.find("落ち着いた住環境です。") == []
        assert self.f.find("") == []

    def test_strip_tidies_punctuation(self):
        assert self.f.strip("静かで、最高、快適です。") == "静かで、快適です。"
        assert self.f.strip("便利で最高、。") == "便利で。"

    def test_strip_without_hits_is_identity(self):
        text = "  駅徒歩3分です。  "
        assert self.f.strip(text) == text

    def test_empty_vocabulary(self):
        f = BannedWordFilter([])
        assert f.find("最高") == []
        assert f.strip("最高") == "最高"


class TestCopyChecker:
    def setup_method(self):
        self.checker = CopyChecker(BannedWordFilter(["最高"]), min_name_mentions=2)

    def test_clean_text_passes(self):
        text = "パークタワー晴海は駅近です。パークタワー晴海でラウンジを楽しめます。"
        rep = self.checker.check(text, "パークタワー晴海", 10, 100, ["ラウンジ"])
        assert rep.ok
        assert rep.name_mentions == 2
        assert rep.length == len(text)

    def test_reports_every_problem(self):
        rep = self.checker.check("最高の住まいです。", "パークタワー晴海", 50, 100, ["ラウンジ", "ペット可"])
        assert not rep.ok
        assert rep.banned_hits == ["最高"]
        assert rep.missing_words == ["ラウンジ", "ペット可"]
        assert rep.name_mentions == 0
        assert len(rep.issues) == 4

    def test_name_check_skipped_without_name(self):
        rep = self.checker.check("駅近の住まいです。", "", 1, 100)
        assert rep.ok


class TestPackAndPrompts:
    def test_pack_loads_vocabulary_and_templates(self):
        pack = load_pack("mansion")
        words = pack.banned_words()
        assert "最高" in words
        assert len(words) == len(set(words))
        assert all(pack.prompts.values())
        assert "プロフェッショナル" in pack.tone_options("describe")
        assert pack.fallback_tagline("モダン") == "モダンに寄り添う、日常が特別になる。"

    def test_describe_prompt_renders_constraints(self):
        pb = PromptBuilder(load_pack("mansion"))
        system = pb.describe_system("フレンドリー", 450, 550, ["ラウンジ", "駅徒歩3分"])
        assert "450〜550" in system
        assert "トーン：フレンドリー" in system
        assert "ラウンジ、駅徒歩3分" in system
        assert "最高級" in system

    def test_prompt_without_must_words(self):
        pb = PromptBuilder(load_pack("mansion"))
        assert "（指定なし）" in pb.review_system("ニュートラル", 100, 200, [])

    def test_review_block_appends_request(self):
        block = PromptBuilder.review_block("晴海", "https://example.com", "本文です。", "もっと短く")
        assert block.endswith("本文です。\n\n【追加要望】もっと短く")
