"""Domain exports for zeroprep."""

from .layout import LayoutError, WorkspaceLayout, materialize, resolve_layout
from .preferences import CaptureDocument, DomainProvenance, PreferenceDomain, PreferenceEntry
from .shell import ShellKind, detect_shell

__all__ = [
    "CaptureDocument",
    "DomainProvenance",
    "LayoutError",
    "PreferenceDomain",
    "PreferenceEntry",
    "ShellKind",
    "WorkspaceLayout",
    "detect_shell",
    "materialize",
    "resolve_layout",
]
