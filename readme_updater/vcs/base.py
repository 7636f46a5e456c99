"""Abstract history interface."""

from abc import ABC, abstractmethod

from readme_updater.vcs.models import CommitInfo


class HistoryProvider(ABC):
    """Source of commit history and code changes for README generation."""

    @abstractmethod
    async def get_commit_history(self, count: int = 10) -> list[CommitInfo]:
        """List the most recent commits on the tracked branch, newest first."""
        ...

    @abstractmethod
    async def get_code_changes(self, base_sha: str, head_sha: str) -> str:
        """Render the changes between two commits as ``File:/Status:/Changes:`` blocks.

        Args:
            base_sha: Older commit of the range.
            head_sha: Newer commit of the range.
        """
        ...
