# app/models/schema.py
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.config import settings
from app.utils.text import parse_words


class _Model(BaseModel):
    # フロントエンドの camelCase キーと snake_case の両方を受け付ける
    model_config = ConfigDict(populate_by_name=True)


# --------------------------- 共通 ---------------------------

class CopyConstraints(_Model):
    name: str = ""
    url: str = ""
    must_words: str = Field(default="", alias="mustWords", description="空白/改行/カンマ区切り")
    tone: str = Field(default=settings.default_tone)
    min_chars: int = Field(default=settings.default_min_chars, alias="minChars", ge=0, le=settings.max_text_chars)
    max_chars: int = Field(default=settings.default_max_chars, alias="maxChars", ge=1, le=settings.max_text_chars)

    @model_validator(mode="after")
    def _check_range(self):
        if self.min_chars > self.max_chars:
            raise ValueError("最小文字数は最大文字数以下にしてください。")
        return self

    def must_word_list(self) -> List[str]:
        return parse_words(self.must_words)


class DiffSpan(BaseModel):
    start: int
    end: int
    text: str


# --------------------------- 説明文生成 ---------------------------

class DescribeRequest(CopyConstraints):
    name: str = Field(..., min_length=1, description="マンション名")
    url: str = Field(..., pattern=r"^https?://\S+", description="物件URL")


class DescribeResponse(BaseModel):
    ok: bool = True
    text: str
    length: int
    corrected: bool = False
    draft: Optional[str] = Field(default=None, description="補正前の初稿（補正した場合のみ）")
    issues: List[str] = []


# --------------------------- 自動チェック / 要望反映 ---------------------------

class ReviewRequest(CopyConstraints):
    text: str = Field(..., min_length=1, max_length=settings.max_text_chars)
    request: Optional[str] = Field(default=None, max_length=2000, description="追加の修正要望")


class ReviewResponse(BaseModel):
    ok: bool
    issues: List[str] = []
    improved: str
    length: int
    highlight_html: str = ""
    spans: List[DiffSpan] = []


# --------------------------- キャッチコピー ---------------------------

class TaglineRequest(_Model):
    photo_data_url: str = Field(..., min_length=1, alias="photoDataUrl")
    plan_data_url: Optional[str] = Field(default=None, alias="planDataUrl")
    must_words: str = Field(default="", alias="mustWords")
    tone: str = Field(default=settings.tagline_tone)
    char_limit: int = Field(default=settings.tagline_char_limit, alias="charLimit", ge=1, le=200)
    target: str = Field(default=settings.tagline_target)
    candidates: int = Field(default=settings.tagline_candidates, ge=0, le=30)
    strict_count: int = Field(default=settings.tagline_strict_count, alias="strictCount", ge=0, le=30)

    def must_word_list(self) -> List[str]:
        return parse_words(self.must_words)


class TaglineResponse(BaseModel):
    strict: List[str]
    free: List[str]


# --------------------------- テキストユーティリティ ---------------------------

class HighlightRequest(BaseModel):
    original: str = Field(default="", max_length=settings.max_text_chars)
    revised: str = Field(default="", max_length=settings.max_text_chars)


class HighlightResponse(BaseModel):
    marked: str
    html: str
    spans: List[DiffSpan]


class TruncateRequest(_Model):
    text: str = ""
    max_chars: int = Field(..., alias="maxChars", ge=0)


class TruncateResponse(BaseModel):
    text: str
    length: int
    truncated: bool


class CheckRequest(CopyConstraints):
    text: str = ""


class CheckResponse(BaseModel):
    ok: bool
    length: int
    issues: List[str]
    banned_words: List[str]
    missing_words: List[str]
    name_mentions: int


# --------------------------- フォーム選択肢 ---------------------------

class OptionsResponse(BaseModel):
    describe_tones: List[str]
    tagline_tones: List[str]
    default_tone: str
    default_min_chars: int
    default_max_chars: int
    max_text_chars: int
