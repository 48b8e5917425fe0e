"""``defaults``-backed preference store for macOS."""

from __future__ import annotations

import re
import subprocess
from dataclasses import dataclass, field
from typing import Callable, List

from zeroprep.ports.preference_store import PreferenceStore, PreferenceStoreError

Runner = Callable[..., "subprocess.CompletedProcess[str]"]

_KEY_PATTERN = re.compile(r'^\s*("(?:[^"\\]|\\.)*"|[^\s="]+)\s*=')
_OPENERS = "{("
_CLOSERS = "})"


def _unquote(token: str) -> str:
    if len(token) >= 2 and token.startswith('"') and token.endswith('"'):
        return re.sub(r"\\(.)", r"\1", token[1:-1])
    return token


def _scan_depth(line: str, depth: int, in_string: bool) -> tuple[int, bool]:
    escaped = False
    for char in line:
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char in _OPENERS:
            depth += 1
        elif char in _CLOSERS:
            depth = max(depth - 1, 0)
    return depth, in_string


def parse_top_level_keys(output: str) -> List[str]:
    """Extract top-level keys from ``defaults read <domain>`` output.

    Keys of nested dictionaries and lines inside arrays or multi-line strings
    are ignored. Duplicate keys keep their first position.
    """

    keys: List[str] = []
    seen: set[str] = set()
    depth = 0
    in_string = False
    for line in output.splitlines():
        if depth == 1 and not in_string:
            match = _KEY_PATTERN.match(line)
            if match:
                key = _unquote(match.group(1))
                if key and key not in seen:
                    seen.add(key)
                    keys.append(key)
        depth, in_string = _scan_depth(line, depth, in_string)
    return keys


def parse_domain_list(output: str) -> List[str]:
    """Split ``defaults domains`` output (comma separated) into identifiers."""

    return [item.strip() for item in output.split(",") if item.strip()]


@dataclass
class MacDefaultsStore(PreferenceStore):
    executable: str = "defaults"
    runner: Runner = field(default=subprocess.run)

    def list_domains(self) -> List[str]:
        return parse_domain_list(self._run("domains"))

    def list_keys(self, domain: str) -> List[str]:
        return parse_top_level_keys(self._run("read", domain))

    def read(self, domain: str, key: str) -> str:
        return self._run("read", domain, key).rstrip("\n")

    def _run(self, *args: str) -> str:
        command = [self.executable, *args]
        try:
            result = self.runner(command, capture_output=True, text=True)
        except OSError as exc:
            raise PreferenceStoreError(f"{self.executable} unavailable: {exc}") from exc
        if result.returncode != 0:
            detail = (result.stderr or "").strip() or f"exit {result.returncode}"
            raise PreferenceStoreError(f"{' '.join(command)} failed: {detail}")
        return result.stdout or ""


__all__ = ["MacDefaultsStore", "parse_domain_list", "parse_top_level_keys"]
