# app/services/describer.py
import time
from dataclasses import dataclass, field
from typing import List, Optional

from app.config import settings
from app.models.schema import DescribeRequest
from app.packs.loader import CopyPack
from app.services.compliance import BannedWordFilter, CopyChecker
from app.services.llm_client import LLMClient
from app.services.page_fetcher import PageFetcher
from app.services.prompt_builder import PromptBuilder
from app.utils.errors import CopyGenError, EmptyGenerationError
from app.utils.logger import logger
from app.utils.text import char_len, has_content, truncate_at_sentence, within_range


@dataclass
class DescribeResult:
    text: str
    corrected: bool = False
    draft: Optional[str] = None
    issues: List[str] = field(default_factory=list)

    @property
    def length(self) -> int:
        return char_len(self.text)


class DescriptionService:
    """
    URL → page text → prompt → LLM → banned-word strip
        → (range外なら補正 1 回) → 文末で truncate.
    """

    def __init__(self, llm: LLMClient, fetcher: PageFetcher, pack: CopyPack):
        self.llm = llm
        self.fetcher = fetcher
        self.prompts = PromptBuilder(pack)
        self.banned = BannedWordFilter(pack.banned_words())
        self.checker = CopyChecker(self.banned, settings.min_name_mentions)

    async def _correct_length(self, req: DescribeRequest, text: str) -> Optional[str]:
        system = self.prompts.correction_system(
            tone=req.tone, min_chars=req.min_chars, max_chars=req.max_chars,
            current_chars=char_len(text),
        )
        try:
            data = await self.llm.complete_json(
                system, PromptBuilder.correction_block(req.name, text), settings.correction_temperature
            )
        except CopyGenError as e:
            logger.warning(f"[describe] correction failed, keeping draft: {e.message}")
            return None
        improved = data.get("improved") or data.get("text")
        if not isinstance(improved, str):
            improved = ""
        # 禁止語除去後に本文が残らなければ初稿を採用
        improved = self.banned.strip(improved.strip())
        if not has_content(improved):
            logger.warning("[describe] correction returned no text, keeping draft")
            return None
        return improved

    async def generate(self, req: DescribeRequest) -> DescribeResult:
        t0 = time.perf_counter()
        must_words = req.must_word_list()

        page_text = await self.fetcher.fetch_text(req.url)
        system = self.prompts.describe_system(
            tone=req.tone, min_chars=req.min_chars, max_chars=req.max_chars,
            must_words=must_words, min_name_mentions=settings.min_name_mentions,
        )
        user = PromptBuilder.listing_block(req.name, req.url, page_text)

        raw = await self.llm.complete_text(system, user, settings.describe_temperature)
        text = self.banned.strip(raw)
        if not has_content(text):
            raise EmptyGenerationError()

        result = DescribeResult(text=text)
        if not within_range(text, req.min_chars, req.max_chars):
            logger.info(
                f"[describe] out of range len={char_len(text)} "
                f"range={req.min_chars}-{req.max_chars}; correcting once"
            )
            fixed = await self._correct_length(req, text)
            if fixed:
                result.draft = text
                result.text = fixed
                result.corrected = True

        result.text = truncate_at_sentence(result.text, req.max_chars)
        report = self.checker.check(result.text, req.name, req.min_chars, req.max_chars, must_words)
        result.issues = report.issues

        logger.info(
            f"[describe] ok len={result.length} corrected={result.corrected} "
            f"issues={len(result.issues)} in {time.perf_counter()-t0:.1f}s"
        )
        return result
