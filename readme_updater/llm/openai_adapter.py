"""OpenAI ChatGPT adapter."""

from __future__ import annotations

import logging

from openai import APIError, AsyncOpenAI

from readme_updater.llm.base import ProviderAdapter
from readme_updater.llm.models import Provider, ProviderRequestError

logger = logging.getLogger(__name__)


class OpenAIProvider(ProviderAdapter):
    """ChatGPT adapter using the OpenAI async SDK (Chat Completions)."""

    provider = Provider.chatgpt
    default_model = "gpt-4.1"

    async def _send(self, prompt: str, credential: str, max_tokens: int) -> str:
        try:
            async with AsyncOpenAI(
                api_key=credential,
                max_retries=0,
                timeout=self.config.timeout,
            ) as client:
                response = await client.chat.completions.create(
                    model=self.config.model,
                    max_tokens=max_tokens,
                    temperature=self.config.temperature,
                    messages=[{"role": "user", "content": prompt}],
                )
        except APIError as e:
            raise ProviderRequestError(
                self.provider,
                getattr(e, "message", None) or str(e),
                status=getattr(e, "status_code", None),
            ) from e

        if not response.choices:
            raise ProviderRequestError(self.provider, "No choices in OpenAI response")
        choice = response.choices[0]
        content = choice.message.content or ""
        if not content:
            raise ProviderRequestError(self.provider, "Empty message in OpenAI response")
        if choice.finish_reason == "length":
            logger.info("chatgpt stopped at max_tokens=%d", max_tokens)
        return content
