"""Google Gemini adapter over the generateContent REST endpoint."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from readme_updater.llm.base import ProviderAdapter
from readme_updater.llm.models import Provider, ProviderRequestError

logger = logging.getLogger(__name__)

_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


class GeminiProvider(ProviderAdapter):
    """Gemini adapter using httpx.

    The API key travels in the ``x-goog-api-key`` header of each request, so
    no process-wide SDK configuration is touched.
    """

    provider = Provider.gemini
    default_model = "gemini-2.0-flash"

    async def _send(self, prompt: str, credential: str, max_tokens: int) -> str:
        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "maxOutputTokens": max_tokens,
                "temperature": self.config.temperature,
            },
        }
        url = f"{_BASE_URL}/models/{self.config.model}:generateContent"
        try:
            async with httpx.AsyncClient(timeout=self.config.timeout) as client:
                resp = await client.post(
                    url,
                    json=payload,
                    headers={"x-goog-api-key": credential},
                )
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPStatusError as e:
            raise ProviderRequestError(
                self.provider,
                _error_message(e.response),
                status=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise ProviderRequestError(self.provider, str(e) or type(e).__name__) from e
        except ValueError as e:
            raise ProviderRequestError(self.provider, "Invalid JSON in Gemini response") from e

        return self._extract_text(data, max_tokens)

    def _extract_text(self, data: Any, max_tokens: int) -> str:
        candidates = data.get("candidates") if isinstance(data, dict) else None
        if not candidates:
            reason = (data.get("promptFeedback") or {}).get("blockReason") if isinstance(data, dict) else None
            message = f"Prompt blocked: {reason}" if reason else "No candidates in Gemini response"
            raise ProviderRequestError(self.provider, message)

        first = candidates[0]
        parts = (first.get("content") or {}).get("parts") or []
        text = "".join(part.get("text", "") for part in parts if isinstance(part, dict))
        if not text:
            raise ProviderRequestError(self.provider, "No text content in Gemini response")
        if first.get("finishReason") == "MAX_TOKENS":
            logger.info("gemini stopped at max_tokens=%d", max_tokens)
        return text


def _error_message(response: httpx.Response) -> str:
    """Pull the API's error message out of a failed response, if it sent one."""
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return response.text or response.reason_phrase
