"""YAML config loading with env var expansion."""

import logging
import os
import re
from collections.abc import Iterator, Mapping
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import LLMSettings, ReadmeUpdaterConfig

logger = logging.getLogger(__name__)

PROJECT_CONFIG = Path("readme-updater.yaml")

# ${VAR} or ${VAR:-fallback}
_ENV_REF_RE = re.compile(r"\$\{(\w+)(?::-([^}]*))?\}")


def load_config(cli_path: str | None = None) -> ReadmeUpdaterConfig:
    """Load config with resolution order: CLI > project-local > user-global > defaults.

    The first file that exists and is non-empty wins; files are never merged.
    Raises ValueError for a missing ``cli_path`` or an unreadable/invalid file.
    """
    if cli_path and not Path(cli_path).exists():
        raise ValueError(f"Config file not found: {cli_path}")

    for path in _candidate_paths(cli_path):
        raw = _read_yaml(path)
        if raw is None:
            continue
        try:
            config = ReadmeUpdaterConfig(**_expand_env_vars(raw))
        except ValidationError as e:
            raise ValueError(f"Invalid config in {path}: {e}") from e
        logger.debug("loaded config from %s", path)
        return config

    return ReadmeUpdaterConfig()


def _candidate_paths(cli_path: str | None) -> Iterator[Path]:
    if cli_path:
        yield Path(cli_path)
    yield PROJECT_CONFIG
    yield Path.home() / ".readme-updater" / "config.yaml"


def _read_yaml(path: Path) -> dict | None:
    """Parsed mapping from ``path``, or None when the file is absent or empty."""
    if not path.is_file():
        return None
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise ValueError(f"Invalid config in {path}: top level must be a mapping")
    return raw


def resolve_credentials(
    settings: LLMSettings,
    environ: Mapping[str, str] | None = None,
) -> dict[str, str | None]:
    """Read each provider's API key from the env var named in settings.

    Missing or empty variables map to None; the generator decides whether
    that matters for the selected provider.
    """
    env = os.environ if environ is None else environ
    return {
        provider: (env.get(var_name) or None)
        for provider, var_name in settings.api_key_envs.items()
    }


def _expand_env_vars(obj):
    """Substitute ``${VAR}`` / ``${VAR:-fallback}`` in every string of a YAML tree.

    Unset variables without a fallback become the empty string.
    """
    if isinstance(obj, dict):
        return {key: _expand_env_vars(value) for key, value in obj.items()}
    if isinstance(obj, list):
        return [_expand_env_vars(item) for item in obj]
    if not isinstance(obj, str):
        return obj
    return _ENV_REF_RE.sub(lambda m: os.environ.get(m.group(1)) or (m.group(2) or ""), obj)


# Default YAML template for `readme-updater config init`
DEFAULT_CONFIG_TEMPLATE = """\
# readme-updater.yaml

# LLM Provider
llm:
  provider: "claude"           # claude | chatgpt | gemini
  size: "medium"               # small | medium | large
  models:
    claude: "claude-sonnet-4-20250514"
    chatgpt: "gpt-4.1"
    gemini: "gemini-2.0-flash"
  api_key_envs:
    claude: "ANTHROPIC_API_KEY"
    chatgpt: "OPENAI_API_KEY"
    gemini: "GEMINI_API_KEY"
  temperature: 0.2
  timeout: 120
  completion_max_tokens: 32000
  max_continuations: 3

# History Provider
vcs:
  provider: "github"
  token_env: "GITHUB_TOKEN"
  # repo: "owner/repo"         # inferred from .git/config when omitted
  # branch: "main"             # inferred from .git/HEAD when omitted
  commit_limit: 10

# Output
output:
  readme_path: "README.md"
  auto_approve: false

# Logging
log_level: "info"              # debug | info | warn | error
log_format: "text"             # text | json
"""
