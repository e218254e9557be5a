# app/services/tagline.py
from dataclasses import dataclass
from typing import Any, List

from app.config import settings
from app.models.schema import TaglineRequest
from app.packs.loader import CopyPack
from app.services.llm_client import LLMClient
from app.services.prompt_builder import PromptBuilder
from app.utils.logger import logger
from app.utils.text import clip_with_ellipsis


@dataclass
class TaglineResult:
    strict: List[str]
    free: List[str]


def _str_list(v: Any) -> List[str]:
    if not isinstance(v, list):
        return []
    return [str(x).strip() for x in v if isinstance(x, str) and x.strip()]


def sanitize_taglines(
    strict: List[str],
    free: List[str],
    must_words: List[str],
    char_limit: int,
    candidates: int,
    strict_count: int,
    fallback: str,
) -> TaglineResult:
    """
    - 全候補を文字数上限でクリップ（超過分は…）
    - 上位(strict)はマストワードを全て含むものだけ残す
    - 不足分は「マストワード連結」→ トーンの定型文で埋める
    """
    free_count = max(0, candidates - strict_count)

    def limit(s: str) -> str:
        return clip_with_ellipsis(s, char_limit)

    def include_all(s: str) -> bool:
        return all(w in s for w in must_words)

    strict = [s for s in map(limit, strict) if (include_all(s) if must_words else True)]
    free = [limit(s) for s in free]

    while len(strict) < strict_count and must_words:
        joined = limit("・".join(must_words))
        if joined in strict:
            break
        strict.append(joined)
    while len(strict) + len(free) < candidates:
        free.append(limit(fallback))

    return TaglineResult(strict=strict[:strict_count], free=free[:free_count])


class TaglineService:
    """Exterior photo (+ floor plan) → short catch copies via a vision model."""

    def __init__(self, llm: LLMClient, pack: CopyPack):
        self.llm = llm
        self.pack = pack
        self.prompts = PromptBuilder(pack)

    async def generate(self, req: TaglineRequest) -> TaglineResult:
        must_words = req.must_word_list()
        free_count = max(0, req.candidates - req.strict_count)
        prompt = self.prompts.tagline_prompt(
            tone=req.tone, target=req.target, char_limit=req.char_limit,
            must_words=must_words, strict_count=req.strict_count, free_count=free_count,
        )
        images = [req.photo_data_url] + ([req.plan_data_url] if req.plan_data_url else [])
        data = await self.llm.complete_vision_json(prompt, images, settings.tagline_temperature)

        result = sanitize_taglines(
            _str_list(data.get("strict")),
            _str_list(data.get("free")),
            must_words=must_words,
            char_limit=req.char_limit,
            candidates=req.candidates,
            strict_count=req.strict_count,
            fallback=self.pack.fallback_tagline(req.tone),
        )
        logger.info(
            f"[tagline] ok images={len(images)} strict={len(result.strict)} free={len(result.free)}"
        )
        return result
