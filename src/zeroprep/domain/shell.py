"""Shells whose configuration files can be staged."""

from __future__ import annotations

from enum import Enum
from pathlib import Path, PurePosixPath
from typing import Mapping


class ShellKind(Enum):
    """Supported shells with run-control and login-profile paths relative to ``$HOME``."""

    BASH = ("bash", ".bashrc", ".bash_profile")
    ZSH = ("zsh", ".zshrc", ".zprofile")
    FISH = ("fish", ".config/fish/config.fish", None)
    UNSUPPORTED = ("unsupported", None, None)

    def __init__(self, label: str, rc_template: str | None, profile_template: str | None) -> None:
        self.label = label
        self.rc_template = rc_template
        self.profile_template = profile_template

    @property
    def supported(self) -> bool:
        return self is not ShellKind.UNSUPPORTED

    def rc_file(self, user_home: Path) -> Path | None:
        return user_home / self.rc_template if self.rc_template else None

    def profile_file(self, user_home: Path) -> Path | None:
        return user_home / self.profile_template if self.profile_template else None

    def config_files(self, user_home: Path) -> list[Path]:
        return [path for path in (self.rc_file(user_home), self.profile_file(user_home)) if path is not None]

    @classmethod
    def from_name(cls, name: str) -> "ShellKind":
        for kind in cls:
            if kind.supported and kind.label == name:
                return kind
        return cls.UNSUPPORTED


def shell_name(shell_path: str) -> str:
    return PurePosixPath(shell_path.strip()).name if shell_path.strip() else ""


def detect_shell(env: Mapping[str, str]) -> tuple[ShellKind, str]:
    """Return the shell selected by ``$SHELL`` and the raw name it was derived from."""

    name = shell_name(env.get("SHELL", ""))
    return ShellKind.from_name(name), name


__all__ = ["ShellKind", "detect_shell", "shell_name"]
