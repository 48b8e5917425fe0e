"""Staging of the zero.sh tool inside a layout."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from zeroprep.ports.source_control import SourceControl, SourceControlError

TOOL_NAME = "zero.sh"
NEW_MACHINE_HINT = (
    "On the new system, clone the repository with --recursive and run 'zero setup' to apply the configuration."
)


@dataclass(frozen=True)
class BootstrapResult:
    status: str
    message: str
    path: Path
    tag: str | None = None

    @property
    def staged(self) -> bool:
        return self.status == "ok"


@dataclass
class ToolBootstrapService:
    """Clone or update the tool into ``tool_dir`` and pin it to its latest tag."""

    source_control: SourceControl
    repo_url: str
    echo: Callable[[str], None] = field(default=print)

    def stage(self, tool_dir: Path) -> BootstrapResult:
        if not self.source_control.is_available():
            return BootstrapResult("missing", "git is not installed; cannot bootstrap zero.sh.", tool_dir)
        try:
            if self.source_control.is_working_copy(tool_dir):
                self.echo(f"Updating {TOOL_NAME} in {tool_dir}...")
                self.source_control.pull(tool_dir)
            else:
                if tool_dir.exists() and any(tool_dir.iterdir()):
                    return BootstrapResult(
                        "failed",
                        f"{tool_dir} exists and is not a git working copy; leaving it untouched.",
                        tool_dir,
                    )
                self.echo(f"Cloning {TOOL_NAME} from {self.repo_url}...")
                self.source_control.clone(self.repo_url, tool_dir)
            tag = self.source_control.latest_tag(tool_dir)
            if tag is None:
                message = f"{TOOL_NAME} has no tags; staged at the default branch."
            else:
                self.source_control.checkout(tool_dir, tag)
                message = f"Pinned {TOOL_NAME} to version: {tag}"
        except SourceControlError as exc:
            return BootstrapResult("failed", f"Bootstrapping {TOOL_NAME} failed: {exc}", tool_dir)
        return BootstrapResult("ok", message, tool_dir, tag)


__all__ = ["BootstrapResult", "NEW_MACHINE_HINT", "ToolBootstrapService"]
