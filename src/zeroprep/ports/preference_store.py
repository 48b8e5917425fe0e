"""Port definition for the operating system preference store."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable


class PreferenceStoreError(RuntimeError):
    """Raised when the store rejects a domain or key query."""


class PreferenceStore(ABC):
    """Abstraction over ``defaults``-style key/value storage."""

    @abstractmethod
    def list_domains(self) -> Iterable[str]:
        """Return every domain known to the store, in store order."""

    @abstractmethod
    def list_keys(self, domain: str) -> Iterable[str]:
        """Return the top-level keys of ``domain``, in store order."""

    @abstractmethod
    def read(self, domain: str, key: str) -> str:
        """Return the textual value stored under ``domain``/``key``."""


__all__ = ["PreferenceStore", "PreferenceStoreError"]
