from pydantic import BaseModel, Field
from typing import Literal


class LLMSettings(BaseModel):
    provider: Literal["claude", "chatgpt", "gemini"] = "claude"
    size: Literal["small", "medium", "large"] = "medium"
    models: dict[str, str] = Field(
        default_factory=lambda: {
            "claude": "claude-sonnet-4-20250514",
            "chatgpt": "gpt-4.1",
            "gemini": "gemini-2.0-flash",
        }
    )
    api_key_envs: dict[str, str] = Field(
        default_factory=lambda: {
            "claude": "ANTHROPIC_API_KEY",
            "chatgpt": "OPENAI_API_KEY",
            "gemini": "GEMINI_API_KEY",
        }
    )
    temperature: float = Field(default=0.2, ge=0, le=2)
    timeout: float = Field(default=120.0, gt=0)
    completion_max_tokens: int = Field(default=32000, gt=0)
    max_continuations: int = Field(default=3, ge=1)


class VCSConfig(BaseModel):
    provider: Literal["github"] = "github"
    token_env: str = "GITHUB_TOKEN"
    repo: str | None = None
    branch: str | None = None
    commit_limit: int = Field(default=10, gt=0, le=100)


class OutputConfig(BaseModel):
    readme_path: str = "README.md"
    auto_approve: bool = False


class ReadmeUpdaterConfig(BaseModel):
    llm: LLMSettings = Field(default_factory=LLMSettings)
    vcs: VCSConfig = Field(default_factory=VCSConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
