"""
Country Normalization

Country names arrive as free text ("UK", "U.K.", '["United Kingdom"]').
Everything that compares or groups countries goes through here first,
otherwise progress milestones and multi-country grouping under-count.
"""

import json
import re
from typing import Dict, Iterable, List, Optional, Union


_CONTAMINATION = re.compile(r'[\[\]"]')
_WHITESPACE = re.compile(r"\s+")

# Upper-cased alias -> (canonical name, lookup key)
_ALIASES: Dict[str, tuple] = {}


def _register(canonical: str, key: str, *aliases: str) -> None:
    for alias in (canonical, *aliases):
        _ALIASES[alias.upper()] = (canonical, key)


_register("United Kingdom", "uk", "UK", "U.K.", "U.K", "Great Britain", "Britain")
_register(
    "United States", "usa",
    "USA", "U.S.A.", "U.S.A", "US", "U.S.", "United States of America", "America",
)
_register("United Arab Emirates", "uae", "UAE", "U.A.E.", "Dubai")
_register("Germany", "germany")
_register("Canada", "canada")
_register("Australia", "australia")
_register("Ireland", "ireland")
_register("France", "france")
_register("Italy", "italy")
_register("Greece", "greece")
_register("Denmark", "denmark")
_register("Finland", "finland")
_register("Singapore", "singapore")
_register("Malta", "malta")

# Joining words kept lower-case inside multi-word names
_LOWER_WORDS = {"and", "of", "the"}


def _title_part(part: str) -> str:
    head, apostrophe, tail = part.partition("'")
    if apostrophe and len(head) == 1 and tail:
        return head + apostrophe + tail.capitalize()
    return part.capitalize()


def _title_word(word: str, first: bool) -> str:
    lower = word.lower()
    if not first and lower in _LOWER_WORDS:
        return lower
    return "-".join(_title_part(part) for part in lower.split("-"))


def clean_country_name(value: Optional[str]) -> str:
    """Strip bracket/quote contamination and collapse whitespace."""
    if not value:
        return ""
    cleaned = _CONTAMINATION.sub("", value)
    return _WHITESPACE.sub(" ", cleaned).strip()


def normalize_country(value: Optional[str]) -> str:
    """
    Canonical display form of a country name.

    Known aliases collapse to one name ("U.K." -> "United Kingdom").
    Other names are title-cased word by word regardless of how they were
    typed, so "New zealand" and "NEW ZEALAND" both give "New Zealand".
    Applying it twice changes nothing.
    """
    cleaned = clean_country_name(value)
    if not cleaned:
        return ""

    known = _ALIASES.get(cleaned.upper())
    if known:
        return known[0]

    return " ".join(
        _title_word(word, first=(index == 0))
        for index, word in enumerate(cleaned.split(" "))
    )


def country_key(value: Optional[str]) -> Optional[str]:
    """Lower-case lookup key ("uk", "usa", ...), or None for blank input."""
    cleaned = clean_country_name(value)
    if not cleaned:
        return None
    known = _ALIASES.get(cleaned.upper())
    if known:
        return known[1]
    return cleaned.lower()


def same_country(a: Optional[str], b: Optional[str]) -> bool:
    """True when both names refer to the same (non-blank) country."""
    key_a = country_key(a)
    return key_a is not None and key_a == country_key(b)


def parse_target_countries(raw: Union[str, Iterable[str], None]) -> List[str]:
    """
    Parse a student's target-country field into normalized names.

    Accepts a JSON list string, a comma separated string, or an iterable.
    Duplicates (after normalization) are dropped, first occurrence wins.
    """
    if raw is None:
        return []

    if isinstance(raw, str):
        text = raw.strip()
        items: List[str] = []
        if text.startswith("["):
            try:
                decoded = json.loads(text)
                if isinstance(decoded, list):
                    items = [str(item) for item in decoded]
            except json.JSONDecodeError:
                items = []
        if not items:
            items = text.split(",")
    else:
        items = [str(item) for item in raw]

    seen = set()
    countries: List[str] = []
    for item in items:
        name = normalize_country(item)
        if not name:
            continue
        key = country_key(name)
        if key in seen:
            continue
        seen.add(key)
        countries.append(name)
    return countries


def group_countries_by_student(profiles: Iterable) -> Dict[object, List[str]]:
    """
    Map student id -> distinct normalized countries, in first-seen order.

    ``profiles`` are objects exposing ``student_id`` and ``country``.
    """
    grouped: Dict[object, List[str]] = {}
    keys: Dict[object, set] = {}
    for profile in profiles:
        name = normalize_country(profile.country)
        if not name:
            continue
        student_keys = keys.setdefault(profile.student_id, set())
        key = country_key(name)
        if key in student_keys:
            continue
        student_keys.add(key)
        grouped.setdefault(profile.student_id, []).append(name)
    return grouped


def students_with_multiple_countries(profiles: Iterable) -> Dict[object, List[str]]:
    """Subset of :func:`group_countries_by_student` with more than one country."""
    return {
        student_id: countries
        for student_id, countries in group_countries_by_student(profiles).items()
        if len(countries) > 1
    }
