"""LLM provider abstraction layer."""

from readme_updater.config.models import LLMSettings
from readme_updater.llm.base import ProviderAdapter
from readme_updater.llm.claude import ClaudeProvider
from readme_updater.llm.gemini import GeminiProvider
from readme_updater.llm.models import (
    AdapterConfig,
    GenerationError,
    MissingCredential,
    Provider,
    ProviderRequestError,
    TruncatedOutputError,
    UnsupportedProvider,
)
from readme_updater.llm.openai_adapter import OpenAIProvider

_PROVIDER_MAP: dict[Provider, type[ProviderAdapter]] = {
    Provider.claude: ClaudeProvider,
    Provider.chatgpt: OpenAIProvider,
    Provider.gemini: GeminiProvider,
}


def resolve_provider(provider: Provider | str) -> Provider:
    """Coerce a provider name to the enum, raising UnsupportedProvider."""
    try:
        return Provider(provider)
    except ValueError:
        raise UnsupportedProvider(provider) from None


def create_adapter(
    provider: Provider | str,
    config: AdapterConfig | None = None,
) -> ProviderAdapter:
    """Instantiate the adapter registered for ``provider``."""
    cls = _PROVIDER_MAP.get(resolve_provider(provider))
    if cls is None:
        raise UnsupportedProvider(provider)
    return cls(config)


def create_adapters(settings: LLMSettings) -> dict[Provider, ProviderAdapter]:
    """Build one adapter per supported provider from app-level settings."""
    return {
        provider: cls(
            AdapterConfig(
                model=settings.models.get(provider.value, cls.default_model),
                temperature=settings.temperature,
                timeout=settings.timeout,
            )
        )
        for provider, cls in _PROVIDER_MAP.items()
    }


__all__ = [
    "AdapterConfig",
    "ClaudeProvider",
    "GeminiProvider",
    "GenerationError",
    "MissingCredential",
    "OpenAIProvider",
    "Provider",
    "ProviderAdapter",
    "ProviderRequestError",
    "TruncatedOutputError",
    "UnsupportedProvider",
    "create_adapter",
    "create_adapters",
    "resolve_provider",
]
