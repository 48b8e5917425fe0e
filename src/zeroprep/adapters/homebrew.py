"""Homebrew package manager adapter."""

from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from zeroprep.ports.package_manager import PackageManager, PackageManagerError


@dataclass
class HomebrewPackageManager(PackageManager):
    executable: str = "brew"
    runner: Callable[..., "subprocess.CompletedProcess[str]"] = field(default=subprocess.run)
    which: Callable[[str], str | None] = field(default=shutil.which)

    def is_available(self) -> bool:
        return self.which(self.executable) is not None

    def export_manifest(self, destination: Path) -> None:
        command = [self.executable, "bundle", "dump", f"--file={destination}"]
        try:
            result = self.runner(command, capture_output=True, text=True)
        except OSError as exc:
            raise PackageManagerError(f"{self.executable} unavailable: {exc}") from exc
        if result.returncode != 0:
            detail = (result.stderr or "").strip() or f"exit {result.returncode}"
            raise PackageManagerError(f"brew bundle dump failed: {detail}")


__all__ = ["HomebrewPackageManager"]
