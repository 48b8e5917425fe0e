"""Filesystem scan of well-known application install locations."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

from zeroprep.ports.application_catalog import ApplicationCatalog

APP_SUFFIX = ".app"


class FilesystemApplicationCatalog(ApplicationCatalog):
    def __init__(self, directories: Iterable[Path]) -> None:
        self._directories = list(directories)

    def list_applications(self) -> List[str]:
        names: List[str] = []
        seen: set[str] = set()
        for directory in self._directories:
            if not directory.is_dir():
                continue
            try:
                entries = sorted(directory.iterdir(), key=lambda item: item.name)
            except OSError:
                continue
            for entry in entries:
                if not entry.name.endswith(APP_SUFFIX):
                    continue
                name = entry.name[: -len(APP_SUFFIX)]
                if name and name not in seen:
                    seen.add(name)
                    names.append(name)
        return names


__all__ = ["FilesystemApplicationCatalog"]
