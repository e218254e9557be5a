# app/utils/errors.py
from typing import Optional


class CopyGenError(Exception):
    """Base class for failures the API maps to a client-facing message."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class PageFetchError(CopyGenError):
    status_code = 400

    def __init__(self, url: str, status_code: Optional[int] = None, reason: str = ""):
        if status_code is not None:
            msg = f"物件URLの取得に失敗しました（{status_code}）"
        else:
            msg = f"物件URLの取得に失敗しました（{reason or 'network error'}）"
        super().__init__(msg)
        self.url = url
        self.upstream_status = status_code


class LLMConfigError(CopyGenError):
    status_code = 500

    def __init__(self, message: str = "OPENAI_API_KEY 未設定です。"):
        super().__init__(message)


class LLMUpstreamError(CopyGenError):
    """OpenAI API returned an error or could not be reached."""

    status_code = 502


class LLMResponseError(CopyGenError):
    """OpenAI answered, but the content is empty or not the expected shape."""

    status_code = 502


class EmptyGenerationError(CopyGenError):
    status_code = 400

    def __init__(self, message: str = "文章が生成できませんでした。"):
        super().__init__(message)
