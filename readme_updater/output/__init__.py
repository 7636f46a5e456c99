"""Output subsystem — reads and writes README files."""

from readme_updater.output.writer import ReadmeStore

__all__ = ["ReadmeStore"]
