"""Models and error types for the LLM subsystem."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class Provider(str, Enum):
    """Supported text-generation backends."""

    claude = "claude"
    chatgpt = "chatgpt"
    gemini = "gemini"


class GenerationError(Exception):
    """Base class for every error raised by the generation pipeline."""


class MissingCredential(GenerationError):
    """No API key is configured for the selected provider."""

    def __init__(self, provider: Provider | str) -> None:
        self.provider = _provider_name(provider)
        super().__init__(f"{self.provider} API key not configured")


class ProviderRequestError(GenerationError):
    """A provider call failed at the transport or HTTP level.

    ``status`` is the upstream HTTP status when one was received, ``None``
    for transport failures and malformed bodies.
    """

    def __init__(
        self,
        provider: Provider | str,
        message: str,
        status: int | None = None,
    ) -> None:
        self.provider = _provider_name(provider)
        self.status = status
        self.message = message
        detail = f" (status {status})" if status is not None else ""
        super().__init__(f"{self.provider} request failed{detail}: {message}")


class TruncatedOutputError(ProviderRequestError):
    """Provider output still looks cut off after every continuation round."""

    def __init__(self, provider: Provider | str, attempts: int) -> None:
        self.attempts = attempts
        super().__init__(
            provider,
            f"output still truncated after {attempts} continuation round(s)",
        )


class UnsupportedProvider(GenerationError, ValueError):
    """The selected provider has no registered adapter."""

    def __init__(self, provider: object) -> None:
        self.provider = provider
        supported = ", ".join(p.value for p in Provider)
        super().__init__(
            f"Unsupported LLM provider: {provider!r}. Supported: {supported}"
        )


class AdapterConfig(BaseModel):
    """Per-provider request settings, independent of credentials."""

    model_config = ConfigDict(frozen=True)

    model: str
    temperature: float = 0.2
    timeout: float = 120.0


def _provider_name(provider: Provider | str) -> str:
    return provider.value if isinstance(provider, Provider) else str(provider)
