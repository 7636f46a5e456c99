"""Pydantic models for the generation pipeline."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from readme_updater.llm.models import Provider


class SizeClass(str, Enum):
    """Coarse knob for target README length."""

    small = "small"
    medium = "medium"
    large = "large"


class SizeDirective(BaseModel):
    """Prompt guidance plus the output ceiling passed to the provider."""

    model_config = ConfigDict(frozen=True)

    guidance: str
    max_tokens: int = Field(gt=0)


class GenerationRequest(BaseModel):
    """Inputs for one README generation. Built per call, never mutated."""

    model_config = ConfigDict(frozen=True)

    current_document: str = ""
    change_summary: str = ""
    history_log: str = ""
    provider: Provider = Provider.claude
    size_class: SizeClass = SizeClass.medium

    @property
    def is_new_document(self) -> bool:
        return not self.current_document.strip()


class NormalizedOutput(BaseModel):
    """Document payload and change description split out of raw provider text."""

    model_config = ConfigDict(frozen=True)

    document: str
    description: str


class GenerationResult(BaseModel):
    """Final README content returned to the caller."""

    model_config = ConfigDict(frozen=True)

    document_content: str
    change_description: str
    provider: Provider
    continuations: int = Field(default=0, ge=0)


class GenerationSettings(BaseModel):
    """Knobs for the continuation loop."""

    model_config = ConfigDict(frozen=True)

    completion_max_tokens: int = Field(default=32000, gt=0)
    max_continuations: int = Field(default=3, ge=1)
