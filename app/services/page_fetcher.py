# app/services/page_fetcher.py
import re
from typing import Optional

import httpx

from app.config import settings
from app.utils.errors import PageFetchError
from app.utils.logger import logger

_SCRIPT_RE = re.compile(r"<script[\s\S]*?</script>", re.IGNORECASE)
_STYLE_RE = re.compile(r"<style[\s\S]*?</style>", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]+>")
_WS_RE = re.compile(r"\s+")


def strip_html(html: str) -> str:
    s = _SCRIPT_RE.sub("", html or "")
    s = _STYLE_RE.sub("", s)
    s = _TAG_RE.sub(" ", s)
    return _WS_RE.sub(" ", s).strip()


class PageFetcher:
    """Listing page → plain text. Network I/O stays on the event loop (httpx async)."""

    def __init__(self, timeout: Optional[float] = None, user_agent: Optional[str] = None,
                 text_limit: Optional[int] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.timeout = settings.fetch_timeout_sec if timeout is None else timeout
        self.headers = {
            "user-agent": user_agent or settings.fetch_user_agent,
            "accept": "text/html,application/xhtml+xml",
        }
        self.text_limit = settings.page_text_limit if text_limit is None else text_limit
        self.transport = transport

    async def fetch_html(self, url: str) -> str:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, follow_redirects=True, transport=self.transport
            ) as client:
                r = await client.get(url, headers=self.headers)
        except httpx.HTTPError as e:
            logger.warning(f"[fetch] transport error url={url}: {e}")
            raise PageFetchError(url, reason=type(e).__name__)
        if r.status_code < 200 or r.status_code >= 300:
            logger.warning(f"[fetch] status={r.status_code} url={url}")
            raise PageFetchError(url, status_code=r.status_code)
        return r.text

    async def fetch_text(self, url: str) -> str:
        html = await self.fetch_html(url)
        text = strip_html(html)[: self.text_limit]
        logger.info(f"[fetch] ok url={url} html_len={len(html)} text_len={len(text)}")
        return text
