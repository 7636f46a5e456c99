"""GitHub history provider using PyGithub."""

from __future__ import annotations

import asyncio
import logging
import os
import re
from functools import cached_property
from pathlib import Path

from github import Auth, Github, GithubException
from github.Repository import Repository

from readme_updater.vcs.base import HistoryProvider
from readme_updater.vcs.models import CommitInfo, RepoInfo

logger = logging.getLogger(__name__)

NO_CHANGES = "No code changes found between these commits."

_ORIGIN_URL_RE = re.compile(
    r'\[remote "origin"\][^\[]*?url\s*=\s*\S*?github\.com[:/]([^/\s]+)/(\S+?)(?:\.git)?\s*$',
    re.MULTILINE,
)
_HEAD_REF_RE = re.compile(r"ref:\s*refs/heads/(\S+)")


def read_repo_info(workspace: str | Path, branch: str | None = None) -> RepoInfo:
    """Infer owner/repo from the origin remote and the branch from HEAD.

    Raises ValueError if the workspace is not a git checkout with a GitHub
    origin.
    """
    git_dir = Path(workspace) / ".git"
    config_path = git_dir / "config"
    if not config_path.is_file():
        raise ValueError(f"Not a git repository: {workspace}")

    match = _ORIGIN_URL_RE.search(config_path.read_text(encoding="utf-8"))
    if not match:
        raise ValueError("Could not find a GitHub remote URL for origin")
    owner, repo = match.group(1), match.group(2)

    if branch is None:
        head_path = git_dir / "HEAD"
        head = head_path.read_text(encoding="utf-8") if head_path.is_file() else ""
        head_match = _HEAD_REF_RE.search(head)
        branch = head_match.group(1) if head_match else "main"

    return RepoInfo(owner=owner, repo=repo, branch=branch)


class GitHubHistoryProvider(HistoryProvider):
    """GitHub implementation of HistoryProvider using PyGithub.

    PyGithub is synchronous, so all blocking calls are wrapped
    with asyncio.to_thread() to avoid blocking the event loop.
    """

    def __init__(self, repo_info: RepoInfo, token: str | None = None):
        self.repo_info = repo_info
        self._token = token or os.environ.get("GITHUB_TOKEN", "")
        if not self._token:
            raise ValueError(
                "GitHub token required. Pass token= or set GITHUB_TOKEN env var."
            )

    @cached_property
    def _client(self) -> Github:
        auth = Auth.Token(self._token)
        return Github(auth=auth)

    def _get_repo(self) -> Repository:
        return self._client.get_repo(self.repo_info.full_name)

    async def get_commit_history(self, count: int = 10) -> list[CommitInfo]:
        """List recent commits on the tracked branch, newest first."""

        def _sync() -> list[CommitInfo]:
            try:
                repo = self._get_repo()
                commits = repo.get_commits(sha=self.repo_info.branch)[:count]
                return [
                    CommitInfo(
                        sha=c.sha,
                        message=c.commit.message,
                        date=c.commit.author.date if c.commit.author else None,
                        author=(c.commit.author.name or "") if c.commit.author else "",
                    )
                    for c in commits
                ]
            except GithubException as e:
                if e.status == 404:
                    raise ValueError(
                        f"Cannot access repository {self.repo_info.full_name}. If this is a "
                        "private repository, make sure your GitHub token has the repo scope."
                    ) from e
                raise

        return await asyncio.to_thread(_sync)

    async def get_code_changes(self, base_sha: str, head_sha: str) -> str:
        """Render the compare view between two commits, skipping README.md."""

        def _sync() -> str:
            comparison = self._get_repo().compare(base_sha, head_sha)
            blocks = []
            for f in comparison.files:
                if f.filename == "README.md":
                    continue
                block = f"File: {f.filename}\nStatus: {f.status}\n"
                if f.patch:
                    block += f"Changes:\n{f.patch}\n"
                blocks.append(block)
            logger.debug(
                "compared %s..%s: %d file(s)", base_sha[:7], head_sha[:7], len(blocks)
            )
            return "\n".join(blocks) if blocks else NO_CHANGES

        return await asyncio.to_thread(_sync)
