"""README generation pipeline: prompts, normalization, continuation, orchestration."""

from readme_updater.generation.completion import (
    COMPLETED_DESCRIPTION,
    complete_document,
    is_truncated,
)
from readme_updater.generation.generator import ReadmeGenerator, generate
from readme_updater.generation.models import (
    GenerationRequest,
    GenerationResult,
    GenerationSettings,
    NormalizedOutput,
    SizeClass,
    SizeDirective,
)
from readme_updater.generation.normalizer import normalize_output
from readme_updater.generation.prompts import (
    build_continuation_prompt,
    build_prompt,
    build_size_directive,
)

__all__ = [
    "COMPLETED_DESCRIPTION",
    "GenerationRequest",
    "GenerationResult",
    "GenerationSettings",
    "NormalizedOutput",
    "ReadmeGenerator",
    "SizeClass",
    "SizeDirective",
    "build_continuation_prompt",
    "build_prompt",
    "build_size_directive",
    "complete_document",
    "generate",
    "is_truncated",
    "normalize_output",
]
