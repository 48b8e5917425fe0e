"""Runtime settings for zeroprep."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Mapping

import yaml

from zeroprep import __version__

DEFAULT_BUILTIN_DOMAINS: tuple[str, ...] = (
    "com.apple.dock",
    "com.apple.finder",
    "com.apple.systempreferences",
    "com.apple.screensaver",
    "com.apple.menuextra.clock",
    "com.apple.screencapture",
)
DEFAULT_TOOL_REPO_URL = "https://github.com/zero-sh/zero.sh"
DOMAIN_MATCH_MODES = {"substring", "exact"}
CONFIG_FILENAME = "config.yaml"


class SettingsError(RuntimeError):
    """Raised when the user configuration file cannot be applied."""


@dataclass(frozen=True)
class RuntimeSettings:
    home_dir: Path
    log_dir: Path
    user_home: Path
    default_output_dir: Path
    builtin_domains: tuple[str, ...] = DEFAULT_BUILTIN_DOMAINS
    application_dirs: tuple[Path, ...] = field(default_factory=tuple)
    tool_repo_url: str = DEFAULT_TOOL_REPO_URL
    domain_match: str = "substring"
    cli_version: str = __version__

    @property
    def config_file(self) -> Path:
        return self.home_dir / CONFIG_FILENAME


def _default_home_dir(env: Mapping[str, str], user_home: Path) -> Path:
    override = env.get("ZEROPREP_HOME", "").strip()
    if override:
        return Path(override).expanduser()
    return user_home / ".zeroprep"


def _default_application_dirs(user_home: Path) -> tuple[Path, ...]:
    return (
        Path("/Applications"),
        Path("/System/Applications"),
        user_home / "Applications",
    )


def load_settings(env: Mapping[str, str] | None = None) -> RuntimeSettings:
    env = os.environ if env is None else env
    user_home = Path(env.get("HOME") or Path.home())
    base = _default_home_dir(env, user_home)
    settings = RuntimeSettings(
        home_dir=base,
        log_dir=base / "logs",
        user_home=user_home,
        default_output_dir=user_home / "zero_prep",
        application_dirs=_default_application_dirs(user_home),
    )
    return apply_config_file(settings)


def apply_config_file(settings: RuntimeSettings) -> RuntimeSettings:
    """Overlay values from ``config.yaml`` in the zeroprep home, if present."""

    path = settings.config_file
    if not path.exists():
        return settings
    try:
        payload = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise SettingsError(f"config file invalid YAML: {path}: {exc}") from exc
    if payload is None:
        return settings
    if not isinstance(payload, dict):
        raise SettingsError(f"config file must be a mapping: {path}")
    return replace(settings, **_parse_overrides(payload, settings.user_home))


def _parse_overrides(payload: dict[str, Any], user_home: Path) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    if "builtin_domains" in payload:
        overrides["builtin_domains"] = tuple(_string_list(payload["builtin_domains"], "builtin_domains"))
    if "application_dirs" in payload:
        dirs = _string_list(payload["application_dirs"], "application_dirs")
        overrides["application_dirs"] = tuple(_expand(item, user_home) for item in dirs)
    if "default_output_dir" in payload:
        value = payload["default_output_dir"]
        if not isinstance(value, str) or not value.strip():
            raise SettingsError("default_output_dir must be a non-empty string")
        overrides["default_output_dir"] = _expand(value, user_home)
    if "tool_repo_url" in payload:
        value = payload["tool_repo_url"]
        if not isinstance(value, str) or not value.strip():
            raise SettingsError("tool_repo_url must be a non-empty string")
        overrides["tool_repo_url"] = value.strip()
    if "domain_match" in payload:
        value = payload["domain_match"]
        if value not in DOMAIN_MATCH_MODES:
            raise SettingsError(f"domain_match must be one of {sorted(DOMAIN_MATCH_MODES)}")
        overrides["domain_match"] = value
    return overrides


def _string_list(value: object, name: str) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise SettingsError(f"{name} must be a list of strings")
    return [item.strip() for item in value if item.strip()]


def _expand(value: str, user_home: Path) -> Path:
    if value == "~" or value.startswith("~/"):
        return user_home / value[2:]
    return Path(value)

