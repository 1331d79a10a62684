from __future__ import annotations
import re
import httpx
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from genbackend.core.config import settings

_FENCE_OPEN = re.compile(r"^```(?:json)?\s*")
_FENCE_CLOSE = re.compile(r"\s*```$")


class CompletionError(Exception):
    """The text-generation service could not be reached or returned no completion."""


def strip_code_fences(content: str) -> str:
    content = _FENCE_OPEN.sub("", content.strip())
    return _FENCE_CLOSE.sub("", content.strip())


@dataclass
class ChatCompletionsClient:
    """Minimal client for an OpenAI-compatible chat completions endpoint."""
    api_key: str
    api_base: str = settings.llm_api_base
    timeout: float = settings.llm_timeout
    transport: Optional[httpx.AsyncBaseTransport] = None

    def _headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    async def complete(
        self,
        messages: List[Dict[str, str]],
        model: str,
        temperature: float,
        max_tokens: int,
        json_mode: bool = True,
    ) -> str:
        """Send one chat completion request and return the first choice's text."""
        payload: Dict[str, Any] = {
            "model": model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        if json_mode:
            payload["response_format"] = {"type": "json_object"}

        url = f"{self.api_base.rstrip('/')}/chat/completions"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                r = await client.post(url, headers=self._headers(), json=payload)
                r.raise_for_status()
                data = r.json()
        except httpx.HTTPStatusError as e:
            raise CompletionError(f"text-generation service returned HTTP {e.response.status_code}") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise CompletionError(f"text-generation service unreachable: {e}") from e
        except ValueError as e:
            raise CompletionError("text-generation service returned a non-JSON envelope") from e

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            content = None
        if not isinstance(content, str) or not content.strip():
            raise CompletionError("No content in text-generation response")
        return strip_code_fences(content)
