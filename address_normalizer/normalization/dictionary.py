from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from ..models.config_models import DictionaryExtensions

"""Reference dictionary: canonical names plus abbreviation / misspelling maps.

Built once at process start and shared read-only by every row. Maps are
wrapped in MappingProxyType so that nothing downstream can mutate them.
Iteration order of every map is significant (expansion is applied in order).
"""

__all__ = [
    "ReferenceDictionary",
    "build_reference_dictionary",
    "CITY_ABBREVIATIONS",
    "REGION_NAMES",
    "SPELLING_CORRECTIONS",
    "TYPO_FIXES",
    "CANONICAL_ENTRIES",
]

# Сокращения и варианты названий городов
CITY_ABBREVIATIONS: dict[str, str] = {
    "мск": "Москва",
    "моск": "Москва",
    "москва": "Москва",
    "спб": "Санкт-Петербург",
    "питер": "Санкт-Петербург",
    "ленинград": "Санкт-Петербург",
    "санкт-петербург": "Санкт-Петербург",
    "нн": "Нижний Новгород",
    "н.новгород": "Нижний Новгород",
    "нижний новгород": "Нижний Новгород",
    "краснояр": "Красноярск",
    "красноярск": "Красноярск",
    "екат": "Екатеринбург",
    "екб": "Екатеринбург",
    "екатеринбург": "Екатеринбург",
    "новосибирск": "Новосибирск",
    "казань": "Казань",
    "челябинск": "Челябинск",
    "самара": "Самара",
    "омск": "Омск",
    "ростов-на-дону": "Ростов-на-Дону",
    "ростов": "Ростов-на-Дону",
    "уфа": "Уфа",
    "воронеж": "Воронеж",
    "пермь": "Пермь",
    "волгоград": "Волгоград",
}

# Области и регионы
REGION_NAMES: dict[str, str] = {
    "московская область": "Московская область",
    "московская обл": "Московская область",
    "мо": "Московская область",
    "ленинградская область": "Ленинградская область",
    "ло": "Ленинградская область",
    "свердловская область": "Свердловская область",
    "новосибирская область": "Новосибирская область",
    "республика татарстан": "Республика Татарстан",
    "татарстан": "Республика Татарстан",
    "красноярский край": "Красноярский край",
}

# Long forms and inflected names -> canonical short form
SPELLING_CORRECTIONS: dict[str, str] = {
    "москвы": "Москва",
    "москве": "Москва",
    "москву": "Москва",
    "улица": "ул.",
    "проспект": "пр.",
    "переулок": "пер.",
    "шоссе": "ш.",
    "бульвар": "бул.",
    "набережная": "наб.",
    "площадь": "пл.",
    "дом": "д.",
    "корпус": "корп.",
    "строение": "стр.",
    "квартира": "кв.",
    "офис": "оф.",
}

# Truncated street-type words, fixed before everything else
TYPO_FIXES: dict[str, str] = {
    "шосс": "шоссе",
    "площ": "площадь",
    "бульв": "бульвар",
    "набер": "набережная",
}

CANONICAL_ENTRIES: tuple[str, ...] = (
    # regions
    "Московская область",
    "Ленинградская область",
    "Свердловская область",
    "Новосибирская область",
    "Республика Татарстан",
    "Красноярский край",
    # cities
    "Москва",
    "Санкт-Петербург",
    "Екатеринбург",
    "Новосибирск",
    "Казань",
    "Нижний Новгород",
    "Челябинск",
    "Самара",
    "Омск",
    "Ростов-на-Дону",
    "Уфа",
    "Красноярск",
    "Воронеж",
    "Пермь",
    "Волгоград",
    # regional centres; exact hits keep near-namesakes (Томск/Омск) apart
    "Томск",
    "Тюмень",
    "Тула",
    "Тверь",
    "Курск",
    "Псков",
    "Сочи",
    "Саратов",
    "Иркутск",
    "Хабаровск",
    "Владивосток",
    "Калининград",
    "Ярославль",
    "Ижевск",
    "Барнаул",
    "Оренбург",
    "Рязань",
    "Липецк",
    "Пенза",
    "Астрахань",
    "Калуга",
    "Смоленск",
    "Мурманск",
    "Архангельск",
    "Владимир",
    "Кострома",
    "Иваново",
    "Брянск",
    "Белгород",
    # landmark streets
    "Ленина",
    "Советская",
    "Мира",
    "Кирова",
    "Молодежная",
    "Невский",
    "Тверская",
    "Арбат",
    "Малышева",
    "Красная",
    "Гагарина",
    "Пушкина",
    "Лермонтова",
    # street-type words
    "улица",
    "переулок",
    "проспект",
    "площадь",
    "бульвар",
    "набережная",
    "шоссе",
    "тракт",
    "линия",
)


@dataclass(frozen=True)
class ReferenceDictionary:
    """Immutable reference data shared by all rows."""
    canonical_entries: tuple[str, ...]
    city_abbreviations: Mapping[str, str]
    region_names: Mapping[str, str]
    spelling_corrections: Mapping[str, str]
    typo_fixes: Mapping[str, str]

    def expansion_maps(self) -> tuple[Mapping[str, str], Mapping[str, str]]:
        """City map first, then region map (application order)."""
        return (self.city_abbreviations, self.region_names)

    def known_names(self) -> tuple[str, ...]:
        """Canonical entries plus every expansion target, de-duplicated in order."""
        seen: dict[str, None] = {}
        for name in (*self.canonical_entries, *self.city_abbreviations.values(), *self.region_names.values()):
            seen.setdefault(name, None)
        return tuple(seen)


def _merged(base: Mapping[str, str], extra: Mapping[str, str]) -> Mapping[str, str]:
    merged = {key.lower(): value for key, value in base.items()}
    for key, value in extra.items():
        merged[key.lower()] = value
    return MappingProxyType(merged)


def build_reference_dictionary(extensions: DictionaryExtensions | None = None) -> ReferenceDictionary:
    """Build the process-wide reference dictionary.

    Built-in data is extended (never shrunk) by config extensions. Keys are
    lowercased; matching is case-insensitive anyway.
    """
    ext = extensions or DictionaryExtensions()
    entries: dict[str, None] = dict.fromkeys(CANONICAL_ENTRIES)
    for entry in ext.canonical_entries:
        entry = entry.strip()
        if entry:
            entries.setdefault(entry, None)
    return ReferenceDictionary(
        canonical_entries=tuple(entries),
        city_abbreviations=_merged(CITY_ABBREVIATIONS, ext.city_abbreviations),
        region_names=_merged(REGION_NAMES, ext.region_names),
        spelling_corrections=_merged(SPELLING_CORRECTIONS, ext.spelling_corrections),
        typo_fixes=MappingProxyType(dict(TYPO_FIXES)),
    )
