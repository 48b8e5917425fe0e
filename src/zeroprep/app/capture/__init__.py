"""Preference capture services."""

from .enumerator import enumerate_domains, matches_application
from .extractor import extract
from .serializer import render, serialize
from .service import PreferenceCaptureService

__all__ = [
    "PreferenceCaptureService",
    "enumerate_domains",
    "extract",
    "matches_application",
    "render",
    "serialize",
]
