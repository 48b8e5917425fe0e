from __future__ import annotations

from tests._fakes import FakeApplicationCatalog, FakePreferenceStore

from zeroprep.app.capture.enumerator import enumerate_domains, matches_application
from zeroprep.domain.preferences import DomainProvenance

BUILTINS = ("com.apple.dock", "com.apple.finder")


def _identifiers(domains) -> list[str]:
    return [domain.identifier for domain in domains]


def test_builtins_come_first_even_without_store_entries() -> None:
    store = FakePreferenceStore({}, extra_domains=["com.googlecode.iterm2"])
    catalog = FakeApplicationCatalog(["iTerm", "iterm2"])

    domains = enumerate_domains(store, catalog, BUILTINS)

    assert _identifiers(domains) == ["com.apple.dock", "com.apple.finder", "com.googlecode.iterm2"]
    assert [d.provenance for d in domains] == [
        DomainProvenance.BUILTIN,
        DomainProvenance.BUILTIN,
        DomainProvenance.DISCOVERED,
    ]


def test_discovered_domains_keep_store_order() -> None:
    store = FakePreferenceStore(
        {},
        extra_domains=["com.spotify.client", "com.apple.Safari", "org.videolan.vlc", "com.apple.Music"],
    )
    catalog = FakeApplicationCatalog(["Safari", "Music", "VLC"])

    domains = enumerate_domains(store, catalog, ())

    assert _identifiers(domains) == ["com.apple.Safari", "com.apple.Music"]


def test_matching_is_substring_and_case_sensitive() -> None:
    assert matches_application("Mail", ["MailPilot"])
    assert not matches_application("mail", ["Mail"])
    assert not matches_application("MailPilot", ["Mail"], match_mode="exact")
    assert matches_application("Mail", ["Mail"], match_mode="exact")


def test_undotted_domain_uses_whole_identifier() -> None:
    store = FakePreferenceStore({}, extra_domains=["Xcode", "loginwindow"])
    catalog = FakeApplicationCatalog(["Xcode"])

    assert _identifiers(enumerate_domains(store, catalog, ())) == ["Xcode"]


def test_empty_trailing_component_never_matches() -> None:
    store = FakePreferenceStore({}, extra_domains=["com.example."])
    catalog = FakeApplicationCatalog(["Anything"])

    assert enumerate_domains(store, catalog, ()) == []


def test_builtin_also_discovered_is_emitted_once() -> None:
    store = FakePreferenceStore({}, extra_domains=["com.apple.finder"])
    catalog = FakeApplicationCatalog(["Finder", "finder"])

    domains = enumerate_domains(store, catalog, BUILTINS)

    assert _identifiers(domains).count("com.apple.finder") == 1
    assert domains[1].provenance is DomainProvenance.BUILTIN


def test_duplicate_emission_can_be_kept() -> None:
    store = FakePreferenceStore({}, extra_domains=["com.apple.finder"])
    catalog = FakeApplicationCatalog(["finder"])

    domains = enumerate_domains(store, catalog, BUILTINS, deduplicate=False)

    assert _identifiers(domains).count("com.apple.finder") == 2


def test_store_listing_failure_keeps_builtins() -> None:
    store = FakePreferenceStore({}, listing_fails=True)
    catalog = FakeApplicationCatalog(["Safari"])

    assert _identifiers(enumerate_domains(store, catalog, BUILTINS)) == list(BUILTINS)
