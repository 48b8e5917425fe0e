"""git-backed source control adapter."""

from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from zeroprep.ports.source_control import SourceControl, SourceControlError


@dataclass
class GitSourceControl(SourceControl):
    executable: str = "git"
    runner: Callable[..., "subprocess.CompletedProcess[str]"] = field(default=subprocess.run)
    which: Callable[[str], str | None] = field(default=shutil.which)

    def is_available(self) -> bool:
        return self.which(self.executable) is not None

    def is_working_copy(self, path: Path) -> bool:
        return (path / ".git").exists()

    def clone(self, url: str, destination: Path) -> None:
        destination.parent.mkdir(parents=True, exist_ok=True)
        self._run("clone", url, str(destination))

    def pull(self, destination: Path) -> None:
        # the working copy is left on a detached tag; only refs are refreshed
        self._run("-C", str(destination), "fetch", "--tags", "--prune", "origin")

    def latest_tag(self, destination: Path) -> str | None:
        revision = self._run("-C", str(destination), "rev-list", "--tags", "--date-order", "--max-count=1").strip()
        if not revision:
            return None
        return self._run("-C", str(destination), "describe", "--tags", revision).strip() or None

    def checkout(self, destination: Path, revision: str) -> None:
        self._run("-C", str(destination), "checkout", "--quiet", revision)

    def _run(self, *args: str) -> str:
        command = [self.executable, *args]
        try:
            result = self.runner(command, capture_output=True, text=True)
        except OSError as exc:
            raise SourceControlError(f"{self.executable} unavailable: {exc}") from exc
        if result.returncode != 0:
            detail = (result.stderr or "").strip() or f"exit {result.returncode}"
            raise SourceControlError(f"{' '.join(args)} failed: {detail}")
        return result.stdout or ""


__all__ = ["GitSourceControl"]
