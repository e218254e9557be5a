from functools import lru_cache
from pathlib import Path
import yaml
from typing import Dict, List

class CopyPack:
    def __init__(self, root: Path):
        self.root = root

        # 基本リソース
        self.banned = yaml.safe_load((root / "banned_words.yaml").read_text(encoding="utf-8")) or {}
        self.tones = yaml.safe_load((root / "tones.yaml").read_text(encoding="utf-8")) or {}

        # ── プロンプト（存在しない場合は空文字 → 呼び出し側でエラー扱い）
        self.prompts: Dict[str, str] = {
            "describe_system": self._read_prompt("describe_system.j2"),
            "review_system": self._read_prompt("review_system.j2"),
            "correction_system": self._read_prompt("correction_system.j2"),
            "tagline": self._read_prompt("tagline.j2"),
        }

    def _read_prompt(self, filename: str) -> str:
        p = self.root / "prompts" / filename
        return p.read_text(encoding="utf-8") if p.exists() else ""

    @property
    def version(self) -> str:
        return str(self.banned.get("version", "0"))

    def banned_words(self) -> List[str]:
        # 重複除去・順序保持
        seen, ordered = set(), []
        for w in self.banned.get("words", []) or []:
            w = str(w).strip()
            if w and w not in seen:
                seen.add(w)
                ordered.append(w)
        return ordered

    def tone_options(self, kind: str) -> List[str]:
        return list(self.tones.get(kind, []) or [])

    def fallback_tagline(self, tone: str) -> str:
        tpl = self.tones.get("fallback_tagline") or "{tone}に寄り添う、日常が特別になる。"
        return tpl.format(tone=tone)

@lru_cache(maxsize=8)
def load_pack(name: str) -> CopyPack:
    base = Path(__file__).resolve().parent
    path = base / name.lower()
    if not path.exists():
        raise FileNotFoundError(f"Pack not found: {name} (expected at {path})")
    return CopyPack(path)
