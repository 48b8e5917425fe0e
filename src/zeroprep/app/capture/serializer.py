"""YAML rendering of captured preference documents."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Sequence, Tuple

import yaml

from zeroprep.domain.preferences import PreferenceDomain, PreferenceEntry

DOCUMENT_MARKER = "---"


class _DocumentDumper(yaml.SafeDumper):
    """Safe dumper that renders empty domain groups as a bare ``domain:`` line."""


def _represent_none(dumper: yaml.SafeDumper, _value: None) -> yaml.Node:
    return dumper.represent_scalar("tag:yaml.org,2002:null", "")


_DocumentDumper.add_representer(type(None), _represent_none)


def render(groups: Iterable[Tuple[PreferenceDomain, Sequence[PreferenceEntry]]]) -> str:
    payload: dict[str, dict[str, str] | None] = {}
    for domain, entries in groups:
        if domain.identifier in payload:
            # a repeated domain keeps its first rendering
            continue
        mapping: dict[str, str] = {}
        for entry in entries:
            mapping.setdefault(entry.key, entry.value)
        payload[domain.identifier] = mapping or None
    if not payload:
        return DOCUMENT_MARKER + "\n"
    return yaml.dump(
        payload,
        Dumper=_DocumentDumper,
        explicit_start=True,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
        width=float("inf"),
    )


def serialize(groups: Iterable[Tuple[PreferenceDomain, Sequence[PreferenceEntry]]], destination: Path) -> Path:
    """Write ``groups`` to ``destination``, replacing any previous document."""

    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(render(groups), encoding="utf-8")
    return destination


__all__ = ["DOCUMENT_MARKER", "render", "serialize"]
