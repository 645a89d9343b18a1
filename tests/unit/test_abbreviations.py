from __future__ import annotations

from address_normalizer.models.config_models import DictionaryExtensions
from address_normalizer.normalization.abbreviations import (
    apply_corrections,
    expand_abbreviations,
    replace_whole_word,
    whole_word,
)
from address_normalizer.normalization.dictionary import build_reference_dictionary

"""Unit tests for whole-word abbreviation expansion."""


def test_whole_word_is_case_insensitive():
    assert whole_word("мск").search("МСК, ул. Мира")
    assert whole_word("мск").search("Мск")


def test_whole_word_ignores_substrings():
    assert whole_word("мск").search("смск") is None
    assert whole_word("мск").search("мскв") is None


def test_whole_word_respects_hyphenated_names():
    assert whole_word("ростов").search("Ростов-на-Дону") is None
    assert whole_word("ростов").search("Ростов, ул. Мира")


def test_replace_whole_word_keeps_replacement_literal():
    assert replace_whole_word("мск", "мск", r"\1 Москва") == r"\1 Москва"


def test_city_abbreviation_expanded():
    d = build_reference_dictionary()
    assert expand_abbreviations("мск, ул. Мира", d) == "Москва, ул. Мира"
    assert expand_abbreviations("Спб Невский", d) == "Санкт-Петербург Невский"
    assert expand_abbreviations("екб", d) == "Екатеринбург"


def test_abbreviation_inside_longer_word_untouched():
    d = build_reference_dictionary()
    assert expand_abbreviations("смск", d) == "смск"


def test_rostov_expands_once():
    d = build_reference_dictionary()
    assert expand_abbreviations("ростов", d) == "Ростов-на-Дону"
    assert expand_abbreviations("Ростов-на-Дону", d) == "Ростов-на-Дону"


def test_region_abbreviation_after_city_map():
    d = build_reference_dictionary()
    assert expand_abbreviations("мо, Химки", d) == "Московская область, Химки"
    assert expand_abbreviations("Москва", d) == "Москва"


def test_config_extensions_are_merged():
    ext = DictionaryExtensions(city_abbreviations={"ИВН": "Ивантеевка"})
    d = build_reference_dictionary(ext)
    assert d.city_abbreviations["ивн"] == "Ивантеевка"
    assert d.city_abbreviations["мск"] == "Москва"
    assert expand_abbreviations("ивн, ул. Мира", d) == "Ивантеевка, ул. Мира"


def test_apply_corrections_in_order():
    mapping = {"улица": "ул.", "дом": "д."}
    assert apply_corrections("Улица Мира Дом 5", mapping) == "ул. Мира д. 5"


def test_key_nested_in_its_own_expansion_is_left_alone():
    assert replace_whole_word("Республика Татарстан", "татарстан", "Республика Татарстан") == "Республика Татарстан"
    assert replace_whole_word("Татарстан", "татарстан", "Республика Татарстан") == "Республика Татарстан"


def test_canonical_region_expands_once():
    d = build_reference_dictionary()
    assert expand_abbreviations("Республика Татарстан, Казань", d) == "Республика Татарстан, Казань"
    assert expand_abbreviations("республика татарстан", d) == "Республика Татарстан"
    assert expand_abbreviations("татарстан", d) == "Республика Татарстан"
