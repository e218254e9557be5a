# app/api/endpoints.py
from functools import lru_cache
import uuid

from fastapi import APIRouter, Depends, HTTPException

from app.config import settings
from app.models.schema import (
    CheckRequest,
    CheckResponse,
    DescribeRequest,
    DescribeResponse,
    DiffSpan,
    HighlightRequest,
    HighlightResponse,
    OptionsResponse,
    ReviewRequest,
    ReviewResponse,
    TaglineRequest,
    TaglineResponse,
    TruncateRequest,
    TruncateResponse,
)
from app.packs.loader import CopyPack, load_pack
from app.services.compliance import BannedWordFilter, CopyChecker
from app.services.describer import DescriptionService
from app.services.llm_client import LLMClient
from app.services.page_fetcher import PageFetcher
from app.services.reviewer import ReviewService
from app.services.tagline import TaglineService
from app.utils.diff import highlight, highlight_html, highlight_spans
from app.utils.errors import CopyGenError, LLMConfigError
from app.utils.logger import logger
from app.utils.text import char_len, truncate_at_sentence

router = APIRouter()


# --------------------------- 依存関係 ---------------------------

def get_pack() -> CopyPack:
    return load_pack(settings.pack_name)


@lru_cache(maxsize=1)
def _llm_singleton() -> LLMClient:
    return LLMClient()


def get_llm() -> LLMClient:
    try:
        return _llm_singleton()
    except LLMConfigError as e:
        raise HTTPException(status_code=500, detail=e.message)


def get_fetcher() -> PageFetcher:
    return PageFetcher()


def _fail(op: str, exc: Exception) -> HTTPException:
    """Domain errors keep their message; anything else gets an error id."""
    if isinstance(exc, CopyGenError):
        logger.warning(f"{op} failed | {type(exc).__name__}: {exc.message}")
        return HTTPException(status_code=exc.status_code, detail=exc.message)
    err_id = str(uuid.uuid4())
    logger.exception(f"{op} failed | error_id={err_id}")
    return HTTPException(
        status_code=500,
        detail=f"処理中にエラーが発生しました。エラーコード: {err_id}",
    )


# --------------------------- 説明文生成 ---------------------------

@router.post("/describe", response_model=DescribeResponse)
async def describe(
    request: DescribeRequest,
    llm: LLMClient = Depends(get_llm),
    fetcher: PageFetcher = Depends(get_fetcher),
    pack: CopyPack = Depends(get_pack),
):
    """
    物件URLを取得・解析して説明文を生成。
    範囲外の文字数は 1 回だけ補正し、最後に文末で切り詰める。
    """
    try:
        res = await DescriptionService(llm, fetcher, pack).generate(request)
    except Exception as e:
        raise _fail("describe", e)
    return DescribeResponse(
        text=res.text,
        length=res.length,
        corrected=res.corrected,
        draft=res.draft,
        issues=res.issues,
    )


# --------------------------- 自動チェック / 要望反映 ---------------------------

@router.post("/review", response_model=ReviewResponse)
async def review(
    request: ReviewRequest,
    llm: LLMClient = Depends(get_llm),
    pack: CopyPack = Depends(get_pack),
):
    """条件順守を点検し改善版を返す。`request` があれば追加要望として反映。"""
    try:
        res = await ReviewService(llm, pack).review(request)
    except Exception as e:
        raise _fail("review", e)
    return ReviewResponse(
        ok=res.ok,
        issues=res.issues,
        improved=res.improved,
        length=res.length,
        highlight_html=res.highlight_html,
        spans=[DiffSpan(**s) for s in res.spans],
    )


# --------------------------- キャッチコピー ---------------------------

@router.post("/tagline", response_model=TaglineResponse)
async def tagline(
    request: TaglineRequest,
    llm: LLMClient = Depends(get_llm),
    pack: CopyPack = Depends(get_pack),
):
    try:
        res = await TaglineService(llm, pack).generate(request)
    except Exception as e:
        raise _fail("tagline", e)
    return TaglineResponse(strict=res.strict, free=res.free)


# --------------------------- テキストユーティリティ ---------------------------

@router.post("/text/highlight", response_model=HighlightResponse)
async def text_highlight(request: HighlightRequest):
    return HighlightResponse(
        marked=highlight(request.original, request.revised),
        html=highlight_html(request.original, request.revised, settings.highlight_class),
        spans=[DiffSpan(**s) for s in highlight_spans(request.original, request.revised)],
    )


@router.post("/text/truncate", response_model=TruncateResponse)
async def text_truncate(request: TruncateRequest):
    out = truncate_at_sentence(request.text, request.max_chars)
    return TruncateResponse(text=out, length=char_len(out), truncated=out != request.text)


@router.post("/text/check", response_model=CheckResponse)
async def text_check(request: CheckRequest, pack: CopyPack = Depends(get_pack)):
    checker = CopyChecker(BannedWordFilter(pack.banned_words()), settings.min_name_mentions)
    rep = checker.check(
        request.text, request.name, request.min_chars, request.max_chars, request.must_word_list()
    )
    return CheckResponse(
        ok=rep.ok,
        length=rep.length,
        issues=rep.issues,
        banned_words=rep.banned_hits,
        missing_words=rep.missing_words,
        name_mentions=rep.name_mentions,
    )


# --------------------------- フォーム選択肢 ---------------------------

@router.get("/options", response_model=OptionsResponse)
async def options(pack: CopyPack = Depends(get_pack)):
    """フロントエンドのトーン選択肢と文字数の初期値。"""
    return OptionsResponse(
        describe_tones=pack.tone_options("describe"),
        tagline_tones=pack.tone_options("tagline"),
        default_tone=settings.default_tone,
        default_min_chars=settings.default_min_chars,
        default_max_chars=settings.default_max_chars,
        max_text_chars=settings.max_text_chars,
    )
