from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Mapping

from ..models.address_record import COMPONENT_NAMES, AddressComponents
from .segmenter import segment

"""Rule-based decomposition of a normalized address into components.

Each fragment (comma/semicolon separated) is tested against COMPONENT_RULES
in order; the first matching rule consumes the fragment, even when its
extractor finds nothing. A component slot keeps the first value assigned to
it within a row.
"""

__all__ = [
    "ComponentRule",
    "COMPONENT_RULES",
    "match_rule",
    "classify_components",
]

Slots = Mapping[str, "str | None"]


def _keywords(*words: str) -> str:
    """Alternation of keywords anchored on a left word boundary.

    Keywords ending with a period need no right boundary; bare words must
    not run into a following word character.
    """
    alternatives = []
    for word in sorted(words, key=len, reverse=True):
        escaped = re.escape(word)
        alternatives.append(escaped if word.endswith(".") else escaped + r"(?!\w)")
    return r"(?<!\w)(?:" + "|".join(alternatives) + ")"


_REGION = re.compile(_keywords("обл", "обл.", "область", "край", "респ.", "республика"), re.IGNORECASE)
# "д." is a settlement marker (деревня) only when no house number follows it
_SETTLEMENT_MARKER = re.compile(
    r"(?<!\w)(?:[пс]\.?|х\.?|село)(?!\w)|(?<!\w)д(?!\w)(?!\.?\s*\d)",
    re.IGNORECASE,
)
_STREET = re.compile(
    _keywords(
        "ул.", "улица", "пр.", "проспект", "пер.", "переулок", "ш.", "шоссе",
        "бул.", "бульвар", "наб.", "набережная", "пл.", "площадь",
    ),
    re.IGNORECASE,
)
_HOUSE_KEYWORD = r"(?<!\w)(?:дом(?!\w)|д\.?(?=\s*\d)|корп(?:\.|(?=\s*\d))|стр(?:\.|(?=\s*\d)))"
_HOUSE = re.compile(_HOUSE_KEYWORD, re.IGNORECASE)
_HOUSE_VALUE = re.compile(_HOUSE_KEYWORD + r"\s*(\d+(?:[а-яёa-z](?![а-яёa-z]))?)", re.IGNORECASE)
_APARTMENT = re.compile(_keywords("кв.", "кв", "квартира", "оф.", "оф", "офис"), re.IGNORECASE)
_APARTMENT_VALUE = re.compile(r"(?<!\w)(?:квартира|офис|кв|оф)\.?\s*(\d+)", re.IGNORECASE)
_CITY_PREFIX = re.compile(r"^(?:г\.|город(?!\w))\s*", re.IGNORECASE)
_DISTRICT = re.compile(r"(?<!\w)(?:район|р-н|муниципалитет|округ)", re.IGNORECASE)


@dataclass(frozen=True)
class ComponentRule:
    """One (predicate, action) step of the classification cascade."""
    name: str
    component: str  # slot populated by this rule
    predicate: Callable[[str, Slots], bool]
    extract: Callable[[str], str | None]


def _has(pattern: re.Pattern[str]) -> Callable[[str, Slots], bool]:
    return lambda fragment, _slots: pattern.search(fragment) is not None


def _whole(fragment: str) -> str | None:
    return fragment


def _first_group(pattern: re.Pattern[str]) -> Callable[[str], str | None]:
    def extract(fragment: str) -> str | None:
        m = pattern.search(fragment)
        return m.group(1) if m else None
    return extract


def _strip_city_prefix(fragment: str) -> str | None:
    return _CITY_PREFIX.sub("", fragment, count=1).strip() or None


def _unclaimed(fragment: str, slots: Slots) -> bool:
    return slots.get("settlement") is None and slots.get("region") is None and len(fragment) > 2


COMPONENT_RULES: tuple[ComponentRule, ...] = (
    ComponentRule("region-marker", "region", _has(_REGION), _whole),
    ComponentRule("settlement-marker", "settlement", _has(_SETTLEMENT_MARKER), _whole),
    ComponentRule("street-type", "street", _has(_STREET), _whole),
    ComponentRule("house-number", "house", _has(_HOUSE), _first_group(_HOUSE_VALUE)),
    ComponentRule("apartment-number", "apartment", _has(_APARTMENT), _first_group(_APARTMENT_VALUE)),
    ComponentRule("city-prefix", "settlement", lambda f, _s: _CITY_PREFIX.match(f) is not None, _strip_city_prefix),
    ComponentRule("district", "municipal_district", _has(_DISTRICT), _whole),
    ComponentRule("settlement-fallback", "settlement", _unclaimed, _whole),
)


def match_rule(fragment: str, slots: Slots | None = None) -> ComponentRule | None:
    """First rule whose predicate accepts the fragment, or None (dropped)."""
    current: Slots = slots if slots is not None else dict.fromkeys(COMPONENT_NAMES)
    for rule in COMPONENT_RULES:
        if rule.predicate(fragment, current):
            return rule
    return None


def classify_components(text: str) -> AddressComponents:
    """Classify every fragment of text and collect the component slots."""
    slots: dict[str, str | None] = dict.fromkeys(COMPONENT_NAMES)
    for fragment in segment(text):
        rule = match_rule(fragment, slots)
        if rule is None:
            continue
        value = rule.extract(fragment)
        if value and slots[rule.component] is None:
            slots[rule.component] = value
    return AddressComponents(**slots)
