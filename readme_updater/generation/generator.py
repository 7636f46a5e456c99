"""Generation orchestrator: prompt → provider → normalize → complete."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping

from readme_updater.generation.completion import (
    COMPLETED_DESCRIPTION,
    complete_document,
    is_truncated,
)
from readme_updater.generation.models import (
    GenerationRequest,
    GenerationResult,
    GenerationSettings,
    SizeClass,
)
from readme_updater.generation.normalizer import normalize_output
from readme_updater.generation.prompts import build_prompt, build_size_directive
from readme_updater.llm import create_adapter, resolve_provider
from readme_updater.llm.base import ProviderAdapter
from readme_updater.llm.models import MissingCredential, Provider

logger = logging.getLogger(__name__)

NEW_README_DESCRIPTION = "Created a new README.md based on the repository's recent history."
UPDATED_README_DESCRIPTION = "Updated README.md to reflect recent code changes."


class ReadmeGenerator:
    """Drives one provider through a full README generation.

    Pipeline:
        GenerationRequest → prompt → adapter → normalizer → (continuation) → GenerationResult

    Holds only read-only collaborators, so a single instance can run many
    generations concurrently.
    """

    def __init__(
        self,
        adapters: Mapping[Provider, ProviderAdapter] | None = None,
        settings: GenerationSettings | None = None,
    ) -> None:
        self.adapters = dict(adapters) if adapters is not None else {}
        self.settings = settings or GenerationSettings()

    def adapter_for(self, provider: Provider) -> ProviderAdapter:
        adapter = self.adapters.get(provider)
        if adapter is None:
            return create_adapter(provider)
        return adapter

    async def generate(
        self,
        request: GenerationRequest,
        credentials: Mapping[str, str | None],
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> GenerationResult:
        """Generate a complete README for ``request``.

        Steps:
            1. Resolve the adapter and check the credential (no network yet)
            2. Build the prompt with the size directive's output ceiling
            3. Call the provider once and normalize its output
            4. If the document looks truncated, run the continuation loop
        """
        adapter = self.adapter_for(request.provider)
        credential = _credential_for(credentials, request.provider)
        if not credential:
            raise MissingCredential(request.provider)

        directive = build_size_directive(request.size_class)
        prompt = build_prompt(request)
        logger.debug(
            "generating README with %s (size=%s, max_tokens=%d, prompt=%d chars)",
            request.provider.value,
            request.size_class.value,
            directive.max_tokens,
            len(prompt),
        )

        raw = await adapter.invoke(prompt, credential, directive.max_tokens)
        output = normalize_output(raw)

        if cancel_event is not None and cancel_event.is_set():
            raise asyncio.CancelledError("generation cancelled after initial response")

        if not is_truncated(output.document):
            return GenerationResult(
                document_content=output.document,
                change_description=output.description or _default_description(request),
                provider=request.provider,
            )

        document, rounds = await complete_document(
            adapter,
            credential,
            output.document,
            max_tokens=self.settings.completion_max_tokens,
            max_attempts=self.settings.max_continuations,
            cancel_event=cancel_event,
        )
        return GenerationResult(
            document_content=document,
            change_description=COMPLETED_DESCRIPTION,
            provider=request.provider,
            continuations=rounds,
        )


async def generate(
    current_document: str,
    change_summary: str,
    history_log: str,
    provider: Provider | str,
    size_class: SizeClass | str,
    credentials: Mapping[str, str | None],
    *,
    settings: GenerationSettings | None = None,
    adapters: Mapping[Provider, ProviderAdapter] | None = None,
    cancel_event: asyncio.Event | None = None,
) -> GenerationResult:
    """Regenerate a README from history. An empty ``current_document`` means create new."""
    request = GenerationRequest(
        current_document=current_document,
        change_summary=change_summary,
        history_log=history_log,
        provider=resolve_provider(provider),
        size_class=SizeClass(size_class),
    )
    generator = ReadmeGenerator(adapters=adapters, settings=settings)
    return await generator.generate(request, credentials, cancel_event=cancel_event)


def _credential_for(credentials: Mapping[str, str | None], provider: Provider) -> str | None:
    value = credentials.get(provider.value)
    if value is None:
        value = credentials.get(provider)
    if value is None or not value.strip():
        return None
    return value


def _default_description(request: GenerationRequest) -> str:
    return NEW_README_DESCRIPTION if request.is_new_document else UPDATED_README_DESCRIPTION


__all__ = [
    "NEW_README_DESCRIPTION",
    "ReadmeGenerator",
    "UPDATED_README_DESCRIPTION",
    "generate",
]
