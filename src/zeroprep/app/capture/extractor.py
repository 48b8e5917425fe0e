"""Key/value extraction for one preference domain."""

from __future__ import annotations

from typing import List

from zeroprep.domain.preferences import PreferenceDomain, PreferenceEntry
from zeroprep.ports.preference_store import PreferenceStore, PreferenceStoreError


def extract(store: PreferenceStore, domain: PreferenceDomain) -> List[PreferenceEntry]:
    """Return the domain's entries in store order; never raises for store failures."""

    try:
        keys = list(store.list_keys(domain.identifier))
    except PreferenceStoreError:
        return []
    entries: List[PreferenceEntry] = []
    seen: set[str] = set()
    for key in keys:
        if key in seen:
            continue
        seen.add(key)
        try:
            value = store.read(domain.identifier, key)
        except PreferenceStoreError:
            continue
        entries.append(PreferenceEntry(key=key, value=str(value)))
    return entries


__all__ = ["extract"]
