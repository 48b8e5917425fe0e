"""Port definition for version control operations used by tool bootstrap."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path


class SourceControlError(RuntimeError):
    """Raised when a version control command fails."""


class SourceControl(ABC):
    @abstractmethod
    def is_available(self) -> bool:
        """Return True when the version control executable can be invoked."""

    @abstractmethod
    def is_working_copy(self, path: Path) -> bool:
        """Return True when ``path`` already holds a working copy."""

    @abstractmethod
    def clone(self, url: str, destination: Path) -> None:
        """Clone ``url`` into ``destination``."""

    @abstractmethod
    def pull(self, destination: Path) -> None:
        """Bring the revisions and tags of the working copy at ``destination`` up to date."""

    @abstractmethod
    def latest_tag(self, destination: Path) -> str | None:
        """Describe the most recently tagged revision, or None when untagged."""

    @abstractmethod
    def checkout(self, destination: Path, revision: str) -> None:
        """Check out ``revision`` in the working copy."""


__all__ = ["SourceControl", "SourceControlError"]
