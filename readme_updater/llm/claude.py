"""Anthropic Claude adapter."""

from __future__ import annotations

import logging

from anthropic import APIError, AsyncAnthropic

from readme_updater.llm.base import ProviderAdapter
from readme_updater.llm.models import Provider, ProviderRequestError

logger = logging.getLogger(__name__)


class ClaudeProvider(ProviderAdapter):
    """Claude adapter using the Anthropic async SDK (Messages API)."""

    provider = Provider.claude
    default_model = "claude-sonnet-4-20250514"

    async def _send(self, prompt: str, credential: str, max_tokens: int) -> str:
        try:
            async with AsyncAnthropic(
                api_key=credential,
                max_retries=0,
                timeout=self.config.timeout,
            ) as client:
                message = await client.messages.create(
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

        text = "".join(
            block.text for block in message.content or [] if getattr(block, "type", None) == "text"
        )
        if not text:
            raise ProviderRequestError(self.provider, "No text content in Claude response")
        if message.stop_reason == "max_tokens":
            logger.info("claude stopped at max_tokens=%d", max_tokens)
        return text
