"""Port definition for the package manager that exports the Brewfile."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path


class PackageManagerError(RuntimeError):
    pass


class PackageManager(ABC):
    @abstractmethod
    def is_available(self) -> bool:
        """Return True when the package manager executable can be invoked."""

    @abstractmethod
    def export_manifest(self, destination: Path) -> None:
        """Write the installed package manifest to ``destination``."""


__all__ = ["PackageManager", "PackageManagerError"]
