from __future__ import annotations

import string

import yaml
from hypothesis import given, settings
from hypothesis import strategies as st

from tests._fakes import header_lines

from zeroprep.app.capture.serializer import DOCUMENT_MARKER, render
from zeroprep.domain.preferences import PreferenceDomain, PreferenceEntry

_label = st.text(alphabet=string.ascii_lowercase + string.digits, min_size=1, max_size=8)
_identifier = st.lists(_label, min_size=1, max_size=4).map(".".join)
_text = st.text(alphabet=string.ascii_letters + string.digits + " .,:-_#'\"{}[]()=;*&!%@", max_size=24)
_entries = st.lists(
    st.builds(PreferenceEntry, key=_text.filter(bool), value=_text),
    max_size=5,
)
_groups = st.lists(st.tuples(_identifier.map(PreferenceDomain), _entries), max_size=6)


def _expected(groups: list[tuple[PreferenceDomain, list[PreferenceEntry]]]) -> dict[str, dict[str, str] | None]:
    payload: dict[str, dict[str, str] | None] = {}
    for domain, entries in groups:
        if domain.identifier in payload:
            continue
        mapping: dict[str, str] = {}
        for entry in entries:
            mapping.setdefault(entry.key, entry.value)
        payload[domain.identifier] = mapping or None
    return payload


@settings(max_examples=100)
@given(groups=_groups)
def test_rendered_document_loads_back_to_captured_values(
    groups: list[tuple[PreferenceDomain, list[PreferenceEntry]]],
) -> None:
    text = render(groups)
    expected = _expected(groups)

    assert text.startswith(DOCUMENT_MARKER)
    assert (yaml.safe_load(text) or {}) == expected
    assert list(yaml.safe_load(text) or {}) == list(expected)


@settings(max_examples=100)
@given(groups=_groups)
def test_each_domain_header_appears_once(groups: list[tuple[PreferenceDomain, list[PreferenceEntry]]]) -> None:
    headers = header_lines(render(groups))

    assert headers == list(_expected(groups))
    assert len(headers) == len(set(headers))
