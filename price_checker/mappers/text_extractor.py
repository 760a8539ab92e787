import re
from typing import Any

from bs4 import BeautifulSoup

# Keys that usually hold inclusion/amenity lists, checked before generic text keys
_INCLUSION_HINTS = ("inclusion", "amenit", "feature")
_TEXT_KEYS = ("name", "label", "text", "description", "title", "value")

_DAYS = (
    "monday|tuesday|wednesday|thursday|friday|saturday|sunday"
    "|mon|tue|tues|wed|thu|thur|thurs|fri|sat|sun"
)
_MONTHS = (
    "january|february|march|april|may|june|july|august|september"
    "|october|november|december"
    "|jan|feb|mar|apr|jun|jul|aug|sep|sept|oct|nov|dec"
)
_DATE_CORE = (
    r"\d{1,2}[-/.]\d{1,2}[-/.]\d{4}"
    r"|\d{4}[-/.]\d{1,2}[-/.]\d{1,2}"
    rf"|(?:{_MONTHS})\.?\s+\d{{1,2}}(?:st|nd|rd|th)?(?:,?\s+\d{{4}})?"
    rf"|\d{{1,2}}(?:st|nd|rd|th)?\s+(?:{_MONTHS})\b(?:\s+\d{{4}})?"
)
_DATE_RE = re.compile(
    rf"(?:\b(?:{_DAYS})\b\.?,?\s+)?\b(?:{_DATE_CORE})\b",
    re.IGNORECASE,
)
_BARE_DAY_RE = re.compile(rf"^\s*(?:{_DAYS})\.?\s*$", re.IGNORECASE)
_TAG_RE = re.compile(r"<[a-zA-Z/!][^>]*>")
_EDGE_PUNCT = " \t,;:-|/()"


def strip_dates(text: str) -> str:
    """Remove date-shaped substrings ('Fri 12-05-2025', 'May 3', '2025-05-12')."""
    if _BARE_DAY_RE.match(text):
        return ""
    stripped = _DATE_RE.sub("", text)
    if stripped == text:
        return text
    stripped = re.sub(r"\s+([,;:])", r"\1", stripped)
    stripped = re.sub(r"([,;:])\1+", r"\1", stripped)
    return " ".join(stripped.split()).strip(_EDGE_PUNCT)


def _clean(text: str) -> str:
    if _TAG_RE.search(text):
        text = BeautifulSoup(text, "html.parser").get_text(" ", strip=True)
    text = " ".join(text.split())
    if not any(c.isalnum() for c in text):
        return ""
    text = strip_dates(text)
    return text if any(c.isalnum() for c in text) else ""


def _scalar_text(value: Any) -> str:
    if isinstance(value, str):
        return _clean(value)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def _is_inclusion_key(key: Any) -> bool:
    lowered = str(key).lower()
    return any(hint in lowered for hint in _INCLUSION_HINTS)


def _fragments_from_mapping(data: dict) -> list[str]:
    for key, value in data.items():
        if _is_inclusion_key(key):
            fragments = _fragments(value)
            if fragments:
                return fragments

    for key in _TEXT_KEYS:
        if key in data:
            fragments = _fragments(data[key])
            if fragments:
                return fragments

    # Keyed lists ({"101": {...}, "102": {...}}) contribute every value in order
    out: list[str] = []
    for value in data.values():
        out.extend(_fragments(value))
    return out


def _fragments(data: Any) -> list[str]:
    if isinstance(data, dict):
        return _fragments_from_mapping(data)
    if isinstance(data, (list, tuple)):
        out: list[str] = []
        for item in data:
            out.extend(_fragments(item))
        return out
    text = _scalar_text(data)
    return [text] if text else []


def extract_text(data: Any) -> str:
    """Flatten a free-text field of unknown shape into one readable string.

    Strings are used as-is (markup stripped), mappings are searched for
    inclusion-like keys and then for conventional text keys, falling back
    to every value in order; lists are flattened element by element. Date fragments leaked by the API are
    dropped. Remaining fragments are joined with ', ' in source order.
    """
    seen: set[str] = set()
    parts: list[str] = []
    for fragment in _fragments(data):
        if fragment not in seen:
            seen.add(fragment)
            parts.append(fragment)
    return ", ".join(parts)


def find_inclusions(fields: dict[str, Any]) -> str:
    """Search arbitrary offer fields for an inclusion/amenity/feature value."""
    for key, value in fields.items():
        if _is_inclusion_key(key):
            text = extract_text(value)
            if text:
                return text
    return ""
