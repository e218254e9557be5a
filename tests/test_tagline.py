import asyncio

from app.models.schema import TaglineRequest
from app.packs.loader import load_pack
from app.services.tagline import TaglineService, sanitize_taglines
from tests.fakes import FakeLLM


class TestSanitizeTaglines:
    def test_strict_requires_all_must_words_and_pads(self):
        res = sanitize_taglines(
            strict=["駅近ラウンジの邸宅", "ラウンジのある暮らし"],
            free=["空に近い毎日"],
            must_words=["駅近", "ラウンジ"],
            char_limit=20,
            candidates=4,
            strict_count=2,
            fallback="上質に寄り添う。",
        )
        assert res.strict == ["駅近ラウンジの邸宅", "駅近・ラウンジ"]
        assert res.free == ["空に近い毎日", "上質に寄り添う。"]

    def test_clipping_applies_ellipsis(self):
        res = sanitize_taglines(
            strict=[], free=["あいうえおかきくけこ"], must_words=[],
            char_limit=5, candidates=1, strict_count=0, fallback="x",
        )
        assert res.free == ["あいうえ…"]

    def test_joined_must_words_added_once(self):
        res = sanitize_taglines(
            strict=[], free=[], must_words=["駅近"],
            char_limit=10, candidates=3, strict_count=3, fallback="x",
        )
        assert res.strict == ["駅近"]
        assert res.free == []

    def test_without_must_words_strict_is_unfiltered(self):
        res = sanitize_taglines(
            strict=["a", "b", "c"], free=[], must_words=[],
            char_limit=10, candidates=2, strict_count=2, fallback="x",
        )
        assert res.strict == ["a", "b"]
        assert res.free == []


class TestTaglineService:
    def test_generate_sends_images_and_sanitizes(self):
        llm = FakeLLM(jsons=[{"strict": ["眺望の邸宅", 3], "free": "oops"}])
        req = TaglineRequest(
            photoDataUrl="data:image/png;base64,AAA",
            planDataUrl="data:image/png;base64,BBB",
            mustWords="眺望",
            candidates=3,
            strictCount=1,
            tone="モダン",
        )
        res = asyncio.run(TaglineService(llm, load_pack("mansion")).generate(req))
        assert res.strict == ["眺望の邸宅"]
        assert res.free == ["モダンに寄り添う、日常が特別になる。"] * 2
        kind, prompt, images, _ = llm.calls[0]
        assert kind == "vision"
        assert images == ["data:image/png;base64,AAA", "data:image/png;base64,BBB"]
        assert "上位:1件 / 下位:2件" in prompt
