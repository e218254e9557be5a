# app/services/compliance.py
import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from app.utils.text import char_len

# 禁止語を除去した後に残る「、、」「。、」や空白の重なりを整える
_DUP_COMMA_RE = re.compile(r"([、，,])\s*[、，,]+")
_COMMA_BEFORE_END_RE = re.compile(r"[、，,]\s*([。！？])")
_MULTI_SPACE_RE = re.compile(r"[ \t　]{2,}")


class BannedWordFilter:
    """Single compiled alternation over the vocabulary (longest words first)."""

    def __init__(self, words: Iterable[str]):
        self.words = sorted({w for w in words if w}, key=len, reverse=True)
        self._re = re.compile("|".join(re.escape(w) for w in self.words)) if self.words else None

    def find(self, text: str) -> List[str]:
        if not self._re or not text:
            return []
        seen, hits = set(), []
        for m in self._re.finditer(text):
            w = m.group(0)
            if w not in seen:
                seen.add(w)
                hits.append(w)
        return hits

    def strip(self, text: str) -> str:
        if not self._re or not text:
            return text
        out = self._re.sub("", text)
        if out == text:
            return text
        out = _DUP_COMMA_RE.sub(r"\1", out)
        out = _COMMA_BEFORE_END_RE.sub(r"\1", out)
        out = _MULTI_SPACE_RE.sub(" ", out)
        return out.strip()


@dataclass
class ComplianceReport:
    length: int
    banned_hits: List[str] = field(default_factory=list)
    missing_words: List[str] = field(default_factory=list)
    name_mentions: int = 0
    issues: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.issues


class CopyChecker:
    """Deterministic checks that do not need the model."""

    def __init__(self, banned: BannedWordFilter, min_name_mentions: int = 2):
        self.banned = banned
        self.min_name_mentions = min_name_mentions

    def check(
        self,
        text: str,
        name: Optional[str],
        min_chars: int,
        max_chars: int,
        must_words: Optional[List[str]] = None,
    ) -> ComplianceReport:
        text = text or ""
        n = char_len(text)
        rep = ComplianceReport(length=n)

        if n < min_chars or n > max_chars:
            rep.issues.append(f"文字数が範囲外です（{n}文字／指定 {min_chars}〜{max_chars}文字）。")

        rep.banned_hits = self.banned.find(text)
        if rep.banned_hits:
            rep.issues.append("禁止語が含まれています：" + "、".join(rep.banned_hits))

        if name:
            rep.name_mentions = text.count(name)
            if rep.name_mentions < self.min_name_mentions:
                rep.issues.append(
                    f"マンション名の使用が{rep.name_mentions}回です（{self.min_name_mentions}回以上）。"
                )

        rep.missing_words = [w for w in (must_words or []) if w not in text]
        if rep.missing_words:
            rep.issues.append("必須ワードが未使用です：" + "、".join(rep.missing_words))

        return rep
