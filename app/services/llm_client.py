import json
import re
from typing import Any, Dict, List, Optional

from openai import AsyncOpenAI, OpenAIError

from app.config import settings
from app.utils.errors import LLMConfigError, LLMResponseError, LLMUpstreamError

_FENCE_START_RE = re.compile(r"^```[\w-]*\n")
_FENCE_END_RE = re.compile(r"\n```$")
_JSON_OBJ_RE = re.compile(r"\{[\s\S]*\}")


def parse_json_object(raw: str) -> Dict[str, Any]:
    """JSON-only model output → dict. Tolerates ```json fences and surrounding chatter."""
    s = (raw or "").strip()
    if s.startswith("```"):
        s = _FENCE_START_RE.sub("", s)
        s = _FENCE_END_RE.sub("", s)
    try:
        data = json.loads(s)
    except json.JSONDecodeError:
        m = _JSON_OBJ_RE.search(s)
        if not m:
            raise LLMResponseError("LLM JSON parse failed")
        try:
            data = json.loads(m.group(0))
        except json.JSONDecodeError:
            raise LLMResponseError("LLM JSON parse failed")
    if not isinstance(data, dict):
        raise LLMResponseError("LLM JSON is not an object")
    return data


class LLMClient:
    """OpenAI chat completions wrapper (text / JSON / vision JSON)."""

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None,
                 client: Optional[AsyncOpenAI] = None):
        key = api_key or settings.openai_api_key
        if client is None and not key:
            raise LLMConfigError()
        self.client = client or AsyncOpenAI(api_key=key, timeout=settings.openai_timeout_sec)
        self.model = model or settings.openai_model

    async def _create(self, messages: List[Dict[str, Any]], temperature: float,
                      json_mode: bool = False) -> str:
        kwargs: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "temperature": temperature,
        }
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}
        try:
            resp = await self.client.chat.completions.create(**kwargs)
        except OpenAIError as e:
            raise LLMUpstreamError(str(e) or "OpenAI API error")
        if not resp.choices:
            return ""
        return (resp.choices[0].message.content or "").strip()

    async def complete_text(self, system: str, user: str, temperature: float) -> str:
        text = await self._create(
            [{"role": "system", "content": system}, {"role": "user", "content": user}],
            temperature,
        )
        if not text:
            raise LLMResponseError("LLM returned empty content")
        return text

    async def complete_json(self, system: str, user: str, temperature: float) -> Dict[str, Any]:
        raw = await self._create(
            [{"role": "system", "content": system}, {"role": "user", "content": user}],
            temperature,
            json_mode=True,
        )
        return parse_json_object(raw)

    async def complete_vision_json(self, prompt: str, image_urls: List[str],
                                   temperature: float) -> Dict[str, Any]:
        content: List[Dict[str, Any]] = [{"type": "text", "text": prompt}]
        for u in image_urls:
            if u:
                content.append({"type": "image_url", "image_url": {"url": u}})
        raw = await self._create([{"role": "user", "content": content}], temperature, json_mode=True)
        return parse_json_object(raw)
