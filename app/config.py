# app/config.py
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # === API ===
    api_title: str = "Mansion Copy Generator API"
    api_version: str = "0.3.0"
    cors_allow_origins: List[str] = ["*"]
    log_level: str = "INFO"

    # === LLM (OpenAI) ===
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o-mini"
    openai_timeout_sec: float = 60.0
    describe_temperature: float = 0.5
    review_temperature: float = 0.2
    correction_temperature: float = 0.2
    tagline_temperature: float = 0.9

    # === Listing page fetch ===
    fetch_timeout_sec: float = 20.0
    fetch_user_agent: str = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/118.0.0.0 Safari/537.36"
    )
    page_text_limit: int = 50000     # トークン節約のための上限 (code points)

    # === Description defaults ===
    pack_name: str = "mansion"
    default_tone: str = "プロフェッショナル"
    default_min_chars: int = 450
    default_max_chars: int = 550
    min_name_mentions: int = 2

    # === Taglines ===
    tagline_tone: str = "ラグジュアリー"
    tagline_target: str = "ファミリー"
    tagline_char_limit: int = 50
    tagline_candidates: int = 10
    tagline_strict_count: int = 5

    # === Highlight ===
    # LCS 表は O(n·m)。入力・文字数指定の上限 (code points)
    max_text_chars: int = 5000
    highlight_class: str = "bg-red-50 text-red-600"

settings = Settings()
