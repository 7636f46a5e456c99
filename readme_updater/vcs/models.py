"""Pydantic models for history data."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class RepoInfo(BaseModel):
    """Where the history comes from."""

    owner: str = Field(min_length=1)
    repo: str = Field(min_length=1)
    branch: str = "main"

    @field_validator("owner", "repo")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip() or "/" in v:
            raise ValueError(f"invalid repository name component: {v!r}")
        return v

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


class CommitInfo(BaseModel):
    """A single commit as listed by the history provider."""

    sha: str = Field(min_length=7)
    message: str
    date: datetime | None = None
    author: str = ""

    @property
    def short_sha(self) -> str:
        return self.sha[:7]

    @property
    def summary(self) -> str:
        """First line of the commit message."""
        return self.message.split("\n", 1)[0]

    @property
    def log_line(self) -> str:
        return f"{self.short_sha} - {self.message}"
