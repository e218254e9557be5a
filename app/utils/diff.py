# app/utils/diff.py
"""
LCS-based highlighter for showing what a revision pass added or changed.

Only the revised text is rendered: characters outside the longest common
subsequence are marked, characters deleted from the original produce no
output at all.
"""
import html
from typing import Dict, List, Tuple

MARK_OPEN = "<mark>"
MARK_CLOSE = "</mark>"

Segment = Tuple[str, bool]  # (text, changed)


def _lcs_table(a: str, b: str) -> List[List[int]]:
    """dp[i][j] = LCS length of a[i:] and b[j:]."""
    n, m = len(a), len(b)
    dp = [[0] * (m + 1) for _ in range(n + 1)]
    for i in range(n - 1, -1, -1):
        row, below = dp[i], dp[i + 1]
        ai = a[i]
        for j in range(m - 1, -1, -1):
            if ai == b[j]:
                row[j] = below[j + 1] + 1
            else:
                row[j] = below[j] if below[j] >= row[j + 1] else row[j + 1]
    return dp


def _walk(original: str, revised: str) -> List[Tuple[str, bool]]:
    """Per-character (char, changed) flags for ``revised``."""
    n, m = len(original), len(revised)
    dp = _lcs_table(original, revised)
    out: List[Tuple[str, bool]] = []
    i = j = 0
    while i < n and j < m:
        if original[i] == revised[j]:
            out.append((revised[j], False))
            i += 1
            j += 1
        elif dp[i + 1][j] >= dp[i][j + 1]:
            # deletion from original: nothing to show
            i += 1
        else:
            out.append((revised[j], True))
            j += 1
    while j < m:
        out.append((revised[j], True))
        j += 1
    return out


def highlight_segments(original: str, revised: str) -> List[Segment]:
    """Group the walk into runs; joining every run's text gives ``revised``."""
    segments: List[Segment] = []
    buf: List[str] = []
    state = None
    for ch, changed in _walk(original or "", revised or ""):
        if state is not None and changed != state:
            segments.append(("".join(buf), state))
            buf = []
        buf.append(ch)
        state = changed
    if buf:
        segments.append(("".join(buf), bool(state)))
    return segments


def highlight(
    original: str,
    revised: str,
    open_mark: str = MARK_OPEN,
    close_mark: str = MARK_CLOSE,
) -> str:
    parts: List[str] = []
    for text, changed in highlight_segments(original, revised):
        parts.append(f"{open_mark}{text}{close_mark}" if changed else text)
    return "".join(parts)


def highlight_html(original: str, revised: str, css_class: str = "") -> str:
    """HTML rendering: every run escaped, changed runs wrapped in <mark>."""
    open_tag = f'<mark class="{html.escape(css_class)}">' if css_class else MARK_OPEN
    parts: List[str] = []
    for text, changed in highlight_segments(original, revised):
        esc = html.escape(text, quote=False)
        parts.append(f"{open_tag}{esc}{MARK_CLOSE}" if changed else esc)
    return "".join(parts)


def highlight_spans(original: str, revised: str) -> List[Dict]:
    """
    Changed runs as code-point offsets into ``revised``.
    [{"start": 2, "end": 3, "text": "都"}, ...]
    """
    spans: List[Dict] = []
    pos = 0
    for text, changed in highlight_segments(original, revised):
        end = pos + len(text)
        if changed:
            spans.append({"start": pos, "end": end, "text": text})
        pos = end
    return spans
