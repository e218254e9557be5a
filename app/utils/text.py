# app/utils/text.py
"""
Code-point based text helpers.

Lengths are counted per Unicode code point (Python ``str`` semantics), so a
全角 character counts as one, exactly like the character counter shown to
copywriters.
"""
import re
from typing import List, Optional

SENTENCE_ENDINGS = frozenset("。！？.")
ELLIPSIS = "…"

_WORD_SPLIT_RE = re.compile(r"[\s,、/]+")


def char_len(text: Optional[str]) -> int:
    return len(text or "")


def within_range(text: Optional[str], min_chars: int, max_chars: int) -> bool:
    n = char_len(text)
    return min_chars <= n <= max_chars


def has_content(text: Optional[str]) -> bool:
    """True when something other than punctuation and whitespace is left."""
    return any(ch.isalnum() for ch in text or "")


def truncate_at_sentence(text: str, max_chars: int) -> str:
    """
    Clamp ``text`` to ``max_chars`` code points, cutting after the last
    sentence ending (。！？.) inside the window when there is one.

    Text that already fits is returned verbatim, whitespace included; a cut
    result is stripped on both ends.
    """
    if max_chars < 0:
        raise ValueError("max_chars must be >= 0")
    if char_len(text) <= max_chars:
        return text

    window = text[:max_chars]
    for k in range(len(window) - 1, -1, -1):
        if window[k] in SENTENCE_ENDINGS:
            return window[: k + 1].strip()
    return window.strip()


def clip_with_ellipsis(text: str, limit: int) -> str:
    """Tagline limiter: ``limit-1`` code points plus ``…`` when too long."""
    if char_len(text) <= limit:
        return text
    if limit <= 0:
        return ""
    return text[: limit - 1] + ELLIPSIS


def parse_words(src: Optional[str]) -> List[str]:
    # 空白/改行/カンマ/読点/スラッシュ区切り
    return [w.strip() for w in _WORD_SPLIT_RE.split(src or "") if w.strip()]
