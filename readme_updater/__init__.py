"""readme-updater - regenerate a project's README from recent commit history."""

from readme_updater.config import ReadmeUpdaterConfig, load_config
from readme_updater.generation import GenerationResult, ReadmeGenerator, SizeClass, generate
from readme_updater.llm import (
    GenerationError,
    MissingCredential,
    Provider,
    ProviderAdapter,
    ProviderRequestError,
    TruncatedOutputError,
    UnsupportedProvider,
)
from readme_updater.output import ReadmeStore
from readme_updater.vcs import GitHubHistoryProvider, HistoryProvider

__version__ = "0.1.0"

__all__ = [
    "GenerationError",
    "GenerationResult",
    "GitHubHistoryProvider",
    "HistoryProvider",
    "MissingCredential",
    "Provider",
    "ProviderAdapter",
    "ProviderRequestError",
    "ReadmeGenerator",
    "ReadmeStore",
    "ReadmeUpdaterConfig",
    "SizeClass",
    "TruncatedOutputError",
    "UnsupportedProvider",
    "generate",
    "load_config",
]
