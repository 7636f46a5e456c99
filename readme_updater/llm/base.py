"""Abstract provider adapter interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from readme_updater.llm.models import AdapterConfig, MissingCredential, Provider


class ProviderAdapter(ABC):
    """Provider-agnostic interface for one-shot README generation.

    Every adapter sends a single prompt to its provider and returns the raw
    response text. Adapters hold no per-call state: the credential and the
    output ceiling are passed on every call, so one instance can serve
    concurrent generations.
    """

    provider: Provider
    default_model: str

    def __init__(self, config: AdapterConfig | None = None) -> None:
        self.config = config or AdapterConfig(model=self.default_model)

    async def invoke(self, prompt: str, credential: str | None, max_tokens: int) -> str:
        """Send ``prompt`` and return the provider's raw text.

        Raises MissingCredential before any network activity when the
        credential is absent, and ProviderRequestError on any failed call.
        """
        if not credential or not credential.strip():
            raise MissingCredential(self.provider)
        return await self._send(prompt, credential, max_tokens)

    @abstractmethod
    async def _send(self, prompt: str, credential: str, max_tokens: int) -> str:
        """Issue the provider request. Credential is already validated."""
        ...
