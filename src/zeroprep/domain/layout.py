"""Workspace layout of a zero.sh configuration bundle."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


WORKSPACES_DIR = "workspaces"
BREWFILE = "Brewfile"
DEFAULTS_DOCUMENT = "defaults.yaml"
SYMLINKS_DIR = "symlinks"
RUN_DIR = "run"
TOOL_DIR = "zero"


class LayoutError(ValueError):
    """Raised when a base path or workspace name cannot form a layout."""


@dataclass(frozen=True)
class WorkspaceLayout:
    """Resolved absolute paths of one staging root."""

    base: Path
    workspace: str | None
    root: Path

    @property
    def brewfile(self) -> Path:
        return self.root / BREWFILE

    @property
    def defaults_document(self) -> Path:
        return self.root / DEFAULTS_DOCUMENT

    @property
    def symlinks_dir(self) -> Path:
        return self.root / SYMLINKS_DIR

    @property
    def shell_dir(self) -> Path:
        return self.symlinks_dir / "shell"

    @property
    def git_dir(self) -> Path:
        return self.symlinks_dir / "git"

    @property
    def config_dir(self) -> Path:
        return self.symlinks_dir / "config"

    @property
    def run_before_dir(self) -> Path:
        return self.root / RUN_DIR / "before"

    @property
    def run_after_dir(self) -> Path:
        return self.root / RUN_DIR / "after"

    @property
    def tool_dir(self) -> Path:
        return self.root / TOOL_DIR

    def directories(self) -> list[Path]:
        return [
            self.root,
            self.shell_dir,
            self.git_dir,
            self.config_dir,
            self.run_before_dir,
            self.run_after_dir,
            self.tool_dir,
        ]


def _validate_workspace(name: str) -> str:
    candidate = name.strip()
    if not candidate:
        raise LayoutError("workspace name must be a non-empty string")
    if "/" in candidate or "\\" in candidate or candidate in {".", ".."}:
        raise LayoutError(f"workspace name must be a single path component: {name!r}")
    return candidate


def resolve_layout(base_path: Path | str, workspace_name: str | None = None) -> WorkspaceLayout:
    base = Path(base_path).expanduser().absolute()
    if workspace_name is None:
        return WorkspaceLayout(base=base, workspace=None, root=base)
    workspace = _validate_workspace(workspace_name)
    return WorkspaceLayout(base=base, workspace=workspace, root=base / WORKSPACES_DIR / workspace)


def materialize(layout: WorkspaceLayout) -> WorkspaceLayout:
    """Create every directory of the layout; safe to call repeatedly."""

    layout.base.mkdir(parents=True, exist_ok=True)
    for directory in layout.directories():
        directory.mkdir(parents=True, exist_ok=True)
    return layout


__all__ = [
    "BREWFILE",
    "DEFAULTS_DOCUMENT",
    "LayoutError",
    "WorkspaceLayout",
    "materialize",
    "resolve_layout",
]
