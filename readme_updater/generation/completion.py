"""Truncation detection and the bounded continuation loop."""

from __future__ import annotations

import asyncio
import logging

from readme_updater.generation.normalizer import extract_document
from readme_updater.generation.prompts import build_continuation_prompt
from readme_updater.llm.base import ProviderAdapter
from readme_updater.llm.models import TruncatedOutputError

logger = logging.getLogger(__name__)

COMPLETED_DESCRIPTION = "README.md completed from a truncated draft."

ELLIPSES: tuple[str, ...] = ("...", "…")
INCOMPLETE_MARKERS: tuple[str, ...] = ("[incomplete", "to be continued")


def is_truncated(document: str) -> bool:
    """Heuristic: does the document look like it was cut off?

    True when the text ends with an ellipsis or contains an explicit
    incompleteness marker anywhere. Mid-sentence cutoffs without a marker are
    not detected.
    """
    if document.rstrip().endswith(ELLIPSES):
        return True
    lowered = document.lower()
    return any(marker in lowered for marker in INCOMPLETE_MARKERS)


async def complete_document(
    adapter: ProviderAdapter,
    credential: str | None,
    partial_document: str,
    *,
    max_tokens: int,
    max_attempts: int,
    cancel_event: asyncio.Event | None = None,
) -> tuple[str, int]:
    """Ask the originating provider to finish a truncated README.

    Loops until the document passes ``is_truncated`` or ``max_attempts``
    continuation rounds have run. Returns ``(document, rounds)``.

    Raises TruncatedOutputError when the bound is exhausted, and lets any
    provider error propagate unchanged.
    """
    document = partial_document
    for attempt in range(1, max_attempts + 1):
        if cancel_event is not None and cancel_event.is_set():
            raise asyncio.CancelledError("generation cancelled before continuation")

        logger.info(
            "%s output looks truncated, continuation round %d/%d",
            adapter.provider.value,
            attempt,
            max_attempts,
        )
        raw = await adapter.invoke(build_continuation_prompt(document), credential, max_tokens)
        document = extract_document(raw)
        if not is_truncated(document):
            return document, attempt

    raise TruncatedOutputError(adapter.provider, max_attempts)
