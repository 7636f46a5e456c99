from .loader import load_config, resolve_credentials
from .models import (
    LLMSettings,
    OutputConfig,
    ReadmeUpdaterConfig,
    VCSConfig,
)

__all__ = [
    "LLMSettings",
    "OutputConfig",
    "ReadmeUpdaterConfig",
    "VCSConfig",
    "load_config",
    "resolve_credentials",
]
