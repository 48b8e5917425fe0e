"""Preference capture: enumerate domains, extract entries, write the document."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Sequence

from zeroprep.app.capture.enumerator import enumerate_domains
from zeroprep.app.capture.extractor import extract
from zeroprep.app.capture.serializer import serialize
from zeroprep.domain.preferences import CaptureDocument, DomainProvenance
from zeroprep.ports.application_catalog import ApplicationCatalog
from zeroprep.ports.preference_store import PreferenceStore


@dataclass
class PreferenceCaptureService:
    store: PreferenceStore
    catalog: ApplicationCatalog
    builtin_domains: Sequence[str]
    match_mode: str = "substring"
    echo: Callable[[str], None] = field(default=print)

    def build_document(self) -> CaptureDocument:
        document = CaptureDocument()
        domains = enumerate_domains(
            self.store,
            self.catalog,
            self.builtin_domains,
            match_mode=self.match_mode,
        )
        for domain in domains:
            if domain.provenance is DomainProvenance.BUILTIN:
                self.echo(f"Processing system preference: {domain.identifier}")
            else:
                self.echo(f"Processing application preference: {domain.identifier}")
            document.append(domain, extract(self.store, domain))
        return document

    def capture(self, destination: Path) -> CaptureDocument:
        document = self.build_document()
        serialize(document, destination)
        return document


__all__ = ["PreferenceCaptureService"]
