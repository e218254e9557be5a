from typing import List, Optional
from jinja2 import Template

from app.packs.loader import CopyPack


class PromptBuilder:
    """Renders the pack's Jinja2 system prompts and assembles the user blocks."""

    def __init__(self, pack: CopyPack):
        self.pack = pack

    def _render(self, key: str, **kw) -> str:
        tpl_text = self.pack.prompts.get(key)
        if not tpl_text:
            raise FileNotFoundError(f"prompt template missing: {key}.j2 (pack v{self.pack.version})")
        kw.setdefault("banned_words", self.pack.banned_words())
        return Template(tpl_text, trim_blocks=True, lstrip_blocks=True).render(**kw).strip()

    # ---------- system prompts ----------
    def describe_system(
        self, tone: str, min_chars: int, max_chars: int, must_words: List[str], min_name_mentions: int = 2
    ) -> str:
        return self._render(
            "describe_system",
            tone=tone, min_chars=min_chars, max_chars=max_chars,
            must_words=must_words, min_name_mentions=min_name_mentions,
        )

    def review_system(
        self, tone: str, min_chars: int, max_chars: int, must_words: List[str],
        min_name_mentions: int = 2, request: Optional[str] = None,
    ) -> str:
        return self._render(
            "review_system",
            tone=tone, min_chars=min_chars, max_chars=max_chars,
            must_words=must_words, min_name_mentions=min_name_mentions, request=request,
        )

    def correction_system(self, tone: str, min_chars: int, max_chars: int, current_chars: int) -> str:
        return self._render(
            "correction_system",
            tone=tone, min_chars=min_chars, max_chars=max_chars, current_chars=current_chars,
        )

    def tagline_prompt(
        self, tone: str, target: str, char_limit: int, must_words: List[str],
        strict_count: int, free_count: int,
    ) -> str:
        return self._render(
            "tagline",
            tone=tone, target=target, char_limit=char_limit, must_words=must_words,
            strict_count=strict_count, free_count=free_count,
        )

    # ---------- user blocks ----------
    @staticmethod
    def listing_block(name: str, url: str, page_text: str) -> str:
        return f"【マンション名】{name}\n【参照URL】{url}\n【ページ本文（抽出）】\n{page_text}".strip()

    @staticmethod
    def review_block(name: str, url: str, text: str, request: Optional[str] = None) -> str:
        body = text
        if request and request.strip():
            body = f"{text}\n\n【追加要望】{request.strip()}"
        return f"【マンション名】{name}\n【参照URL】{url}\n【本文（校正対象）】\n{body}".strip()

    @staticmethod
    def correction_block(name: str, text: str) -> str:
        return f"【マンション名】{name}\n【本文】\n{text}".strip()
