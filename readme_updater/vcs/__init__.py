"""History providers for readme-updater."""

import os
from pathlib import Path

from readme_updater.config.models import VCSConfig
from readme_updater.vcs.base import HistoryProvider
from readme_updater.vcs.diff import (
    ParsedDiff,
    format_commit_log,
    generate_diff_summary,
    parse_diff_content,
    select_commit_range,
)
from readme_updater.vcs.github import GitHubHistoryProvider, read_repo_info
from readme_updater.vcs.models import CommitInfo, RepoInfo


def create_history_provider(config: VCSConfig, workspace: str | Path) -> HistoryProvider:
    """Create a history provider from config.

    Resolves the token from the environment variable named in config.token_env
    and the repository from config.repo or the workspace's origin remote.
    """
    if config.provider != "github":
        raise ValueError(
            f"Unsupported VCS provider: {config.provider!r}. "
            "Currently only 'github' is supported."
        )
    token = os.environ.get(config.token_env, "")
    if not token:
        raise ValueError(
            f"GitHub token not found. Set the {config.token_env} environment variable."
        )

    if config.repo:
        owner, _, repo = config.repo.partition("/")
        if not owner or not repo:
            raise ValueError(f"Invalid repo identifier {config.repo!r}: expected 'owner/repo'")
        repo_info = RepoInfo(owner=owner, repo=repo, branch=config.branch or "main")
    else:
        repo_info = read_repo_info(workspace, branch=config.branch)

    return GitHubHistoryProvider(repo_info, token=token)


__all__ = [
    "CommitInfo",
    "GitHubHistoryProvider",
    "HistoryProvider",
    "ParsedDiff",
    "RepoInfo",
    "create_history_provider",
    "format_commit_log",
    "generate_diff_summary",
    "parse_diff_content",
    "read_repo_info",
    "select_commit_range",
]
