"""Value objects for captured macOS preference domains."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, List, Tuple


class DomainProvenance(str, Enum):
    BUILTIN = "builtin"
    DISCOVERED = "discovered"


@dataclass(frozen=True)
class PreferenceDomain:
    """Identifier of a preference namespace, e.g. ``com.apple.dock``."""

    identifier: str
    provenance: DomainProvenance = DomainProvenance.BUILTIN

    def __post_init__(self) -> None:
        if not self.identifier or not self.identifier.strip():
            raise ValueError("domain identifier must be a non-empty string")
        object.__setattr__(self, "identifier", self.identifier.strip())

    @property
    def trailing_component(self) -> str:
        """Last dot-separated component; the whole identifier when undotted."""

        return self.identifier.rsplit(".", 1)[-1]


@dataclass(frozen=True)
class PreferenceEntry:
    key: str
    value: str


@dataclass
class CaptureDocument:
    """Ordered domain groups; appended to during a run, never pruned."""

    groups: List[Tuple[PreferenceDomain, List[PreferenceEntry]]] = field(default_factory=list)

    def append(self, domain: PreferenceDomain, entries: Iterable[PreferenceEntry]) -> None:
        self.groups.append((domain, list(entries)))

    def __iter__(self) -> Iterator[Tuple[PreferenceDomain, List[PreferenceEntry]]]:
        return iter(self.groups)

    def __len__(self) -> int:
        return len(self.groups)


__all__ = [
    "CaptureDocument",
    "DomainProvenance",
    "PreferenceDomain",
    "PreferenceEntry",
]
