"""Packaged resources for zeroprep."""

from __future__ import annotations

from functools import lru_cache
from importlib import resources

__all__ = ["load_script_template"]


@lru_cache(maxsize=None)
def load_script_template(name: str) -> str:
    """Return the placeholder run script shipped under ``resources/scripts``."""

    entry = resources.files(__name__) / "scripts" / name
    if not entry.is_file():
        raise FileNotFoundError(f"unknown script template: {name}")
    return entry.read_text("utf-8")
