"""Port definition for installed application discovery."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable


class ApplicationCatalog(ABC):
    @abstractmethod
    def list_applications(self) -> Iterable[str]:
        """Return display names of installed applications."""


__all__ = ["ApplicationCatalog"]
