# app/services/reviewer.py
from dataclasses import dataclass, field
from typing import Dict, List

from app.config import settings
from app.models.schema import ReviewRequest
from app.packs.loader import CopyPack
from app.services.compliance import BannedWordFilter, CopyChecker
from app.services.llm_client import LLMClient
from app.services.prompt_builder import PromptBuilder
from app.utils.diff import highlight_html, highlight_spans
from app.utils.errors import LLMResponseError
from app.utils.logger import logger
from app.utils.text import char_len, has_content, truncate_at_sentence

JSON_PARSE_ISSUE = "AI応答のJSON解析に失敗しました。"


@dataclass
class ReviewResult:
    ok: bool
    improved: str
    issues: List[str] = field(default_factory=list)
    highlight_html: str = ""
    spans: List[Dict] = field(default_factory=list)

    @property
    def length(self) -> int:
        return char_len(self.improved)


def _merge_issues(*groups: List[str]) -> List[str]:
    seen, out = set(), []
    for g in groups:
        for it in g or []:
            if isinstance(it, str) and it.strip() and it not in seen:
                seen.add(it)
                out.append(it)
    return out


class ReviewService:
    """Model review pass: {ok, issues, improved} + local checks + diff against the input."""

    def __init__(self, llm: LLMClient, pack: CopyPack):
        self.llm = llm
        self.prompts = PromptBuilder(pack)
        self.banned = BannedWordFilter(pack.banned_words())
        self.checker = CopyChecker(self.banned, settings.min_name_mentions)

    @staticmethod
    def _shape(payload: Dict, text: str) -> Dict:
        # 最低限の形に整える
        ok = payload.get("ok")
        issues = payload.get("issues")
        improved = payload.get("improved")
        return {
            "ok": ok if isinstance(ok, bool) else True,
            "issues": [str(i) for i in issues] if isinstance(issues, list) else [],
            "improved": improved if isinstance(improved, str) else text,
        }

    async def review(self, req: ReviewRequest) -> ReviewResult:
        must_words = req.must_word_list()
        system = self.prompts.review_system(
            tone=req.tone, min_chars=req.min_chars, max_chars=req.max_chars,
            must_words=must_words, min_name_mentions=settings.min_name_mentions,
            request=req.request,
        )
        user = PromptBuilder.review_block(req.name, req.url, req.text, req.request)

        try:
            payload = await self.llm.complete_json(system, user, settings.review_temperature)
        except LLMResponseError as e:
            logger.warning(f"[review] {e.message}; returning input unchanged")
            payload = {"ok": False, "issues": [JSON_PARSE_ISSUE], "improved": req.text}
        shaped = self._shape(payload, req.text)

        improved = self.banned.strip(shaped["improved"])
        if not has_content(improved):
            improved = req.text
        improved = truncate_at_sentence(improved, req.max_chars)

        report = self.checker.check(improved, req.name, req.min_chars, req.max_chars, must_words)
        issues = _merge_issues(shaped["issues"], report.issues)

        result = ReviewResult(
            ok=shaped["ok"] and report.ok,
            improved=improved,
            issues=issues,
            highlight_html=highlight_html(req.text, improved, settings.highlight_class),
            spans=highlight_spans(req.text, improved),
        )
        logger.info(
            f"[review] ok={result.ok} len={char_len(req.text)}->{result.length} "
            f"changed_runs={len(result.spans)} issues={len(issues)} request={bool(req.request)}"
        )
        return result
