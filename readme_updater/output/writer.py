"""ReadmeStore — reads and writes the workspace README on disk."""

from __future__ import annotations

import difflib
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class ReadmeStore:
    """File access for a single README inside a workspace.

    An absent README reads as the empty string, which the generator treats
    as "create a new one".
    """

    def __init__(self, workspace: str | Path, readme_path: str = "README.md") -> None:
        self.workspace = Path(workspace)
        self.path = self.workspace / readme_path
        if not self.path.resolve().is_relative_to(self.workspace.resolve()):
            raise ValueError(f"README path escapes workspace: {readme_path}")

    def exists(self) -> bool:
        return self.path.is_file()

    def read(self) -> str:
        if not self.exists():
            logger.debug("no README at %s", self.path)
            return ""
        return self.path.read_text(encoding="utf-8")

    def write(self, content: str, *, dry_run: bool = False) -> Path:
        """Write the approved README. Returns the Path of the written (or would-be) file."""
        if dry_run:
            logger.debug("dry-run: would write %s", self.path)
            return self.path

        self.path.parent.mkdir(parents=True, exist_ok=True)
        text = content if content.endswith("\n") else content + "\n"
        self.path.write_text(text, encoding="utf-8")
        logger.info("wrote %s (%d bytes)", self.path, len(text))
        return self.path

    def diff(self, old: str, new: str) -> str:
        """Unified diff between the current and proposed README."""
        name = self.path.name
        return "".join(
            difflib.unified_diff(
                old.splitlines(keepends=True),
                new.splitlines(keepends=True),
                fromfile=f"a/{name}",
                tofile=f"b/{name}",
            )
        )
