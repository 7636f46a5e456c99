"""Helpers that turn raw history into prompt-ready text."""

from __future__ import annotations

import re

from pydantic import BaseModel, Field

from readme_updater.vcs.models import CommitInfo

_FILE_HEADER_RE = re.compile(r"^File: (.+)$")

# Beyond this many files the summary omits the per-file list.
_MAX_LISTED_FILES = 10


class ParsedDiff(BaseModel):
    """Line and file counts extracted from a change listing."""

    added_lines: int = 0
    removed_lines: int = 0
    changed_files: list[str] = Field(default_factory=list)

    @property
    def significant(self) -> bool:
        return (self.added_lines + self.removed_lines > 10) or len(self.changed_files) > 3


def parse_diff_content(diff_content: str) -> ParsedDiff:
    """Count added/removed lines per ``File:`` block of a change listing."""
    added = removed = 0
    files: list[str] = []
    for line in diff_content.splitlines():
        header = _FILE_HEADER_RE.match(line)
        if header:
            if header.group(1) not in files:
                files.append(header.group(1))
            continue
        if line.startswith("+") and not line.startswith("+++"):
            added += 1
        elif line.startswith("-") and not line.startswith("---"):
            removed += 1
    return ParsedDiff(added_lines=added, removed_lines=removed, changed_files=files)


def generate_diff_summary(diff_content: str) -> str:
    parsed = parse_diff_content(diff_content)
    summary = (
        "Changes summary:\n"
        f"- {parsed.added_lines} lines added\n"
        f"- {parsed.removed_lines} lines removed\n"
        f"- {len(parsed.changed_files)} files changed"
    )
    if parsed.changed_files and len(parsed.changed_files) <= _MAX_LISTED_FILES:
        listing = "\n".join(f"- {name}" for name in parsed.changed_files)
        summary += f"\n\nModified files:\n{listing}"
    return summary


def format_commit_log(commits: list[CommitInfo]) -> str:
    """One ``<short sha> - <message>`` line per commit, in the given order."""
    return "\n".join(c.log_line for c in commits)


def select_commit_range(
    commits: list[CommitInfo],
    from_sha: str | None = None,
    to_sha: str | None = None,
) -> tuple[CommitInfo, CommitInfo, list[CommitInfo]]:
    """Pick the (older, latest) pair and the commits between them.

    ``commits`` is newest first, as returned by the history provider. SHAs
    match by prefix. Without explicit SHAs the range spans the whole list.

    Raises ValueError if no history exists, a SHA is unknown, or the older
    commit is not actually older than the latest one.
    """
    if not commits:
        raise ValueError("No commit history found")

    latest_idx = _find_commit(commits, to_sha) if to_sha else 0
    older_idx = _find_commit(commits, from_sha) if from_sha else len(commits) - 1

    if len(commits) > 1 and older_idx <= latest_idx:
        raise ValueError("Not enough commit history to compare changes")

    return commits[older_idx], commits[latest_idx], commits[latest_idx : older_idx + 1]


def _find_commit(commits: list[CommitInfo], sha: str) -> int:
    for idx, commit in enumerate(commits):
        if commit.sha.startswith(sha):
            return idx
    raise ValueError(f"Commit {sha!r} not found in recent history")
