"""Selection of the preference domains to capture."""

from __future__ import annotations

from typing import Iterable, List

from zeroprep.domain.preferences import DomainProvenance, PreferenceDomain
from zeroprep.ports.application_catalog import ApplicationCatalog
from zeroprep.ports.preference_store import PreferenceStore, PreferenceStoreError


def matches_application(candidate: str, applications: Iterable[str], *, match_mode: str = "substring") -> bool:
    if not candidate:
        return False
    if match_mode == "exact":
        return any(candidate == name for name in applications)
    return any(candidate in name for name in applications)


def enumerate_domains(
    store: PreferenceStore,
    catalog: ApplicationCatalog,
    builtin_domains: Iterable[str],
    *,
    match_mode: str = "substring",
    deduplicate: bool = True,
) -> List[PreferenceDomain]:
    """Built-in domains first, then store domains owned by installed applications."""

    domains: List[PreferenceDomain] = []
    seen: set[str] = set()

    def emit(domain: PreferenceDomain) -> None:
        if deduplicate and domain.identifier in seen:
            return
        seen.add(domain.identifier)
        domains.append(domain)

    for identifier in builtin_domains:
        emit(PreferenceDomain(identifier, DomainProvenance.BUILTIN))

    try:
        known = list(store.list_domains())
    except PreferenceStoreError:
        return domains
    applications = list(catalog.list_applications())
    if not applications:
        return domains

    for identifier in known:
        if not identifier.strip():
            continue
        domain = PreferenceDomain(identifier, DomainProvenance.DISCOVERED)
        if matches_application(domain.trailing_component, applications, match_mode=match_mode):
            emit(domain)
    return domains


__all__ = ["enumerate_domains", "matches_application"]
