"""Tests for translation resolution with fallback."""

from dataclasses import dataclass

from now_playing.language import Language
from now_playing.services.translations import resolve_translation


@dataclass(frozen=True)
class Row:
    language: Language
    name: str


HE = Row(Language.HE_IL, "קומדיה")
EN = Row(Language.EN_US, "Comedy")
# Rows only need a hashable language tag; "fr_FR" stands in for an unsupported locale
FR = Row("fr_FR", "Comédie")  # type: ignore[arg-type]


def test_empty_translations_resolve_to_none() -> None:
    assert resolve_translation([], Language.HE_IL) is None
    assert resolve_translation([], Language.HE_IL, (Language.EN_US,)) is None


def test_single_matching_translation() -> None:
    assert resolve_translation([HE], Language.HE_IL) is HE


def test_single_non_matching_translation_is_returned_as_last_resort() -> None:
    assert resolve_translation([EN], Language.HE_IL) is EN


def test_exact_match_wins_over_position() -> None:
    assert resolve_translation([EN, HE], Language.HE_IL) is HE
    assert resolve_translation([HE, EN], Language.EN_US) is EN


def test_exact_match_wins_over_fallback_chain() -> None:
    assert resolve_translation([EN, HE], Language.HE_IL, (Language.EN_US,)) is HE


def test_fallback_chain_match_beats_first_element() -> None:
    assert resolve_translation([FR, EN], Language.HE_IL, (Language.EN_US,)) is EN
    assert resolve_translation([FR, EN], Language.HE_IL) is FR


def test_fallback_chain_is_tried_in_order() -> None:
    rows = [FR, EN, HE]
    chain = ("de_DE", Language.HE_IL, Language.EN_US)
    assert resolve_translation(rows, "it_IT", chain) is HE  # type: ignore[arg-type]


def test_first_element_when_nothing_matches() -> None:
    first = Row(Language.EN_US, "first")
    second = Row(Language.EN_US, "second")
    assert resolve_translation([first, second], Language.HE_IL) is first
    assert resolve_translation([second, first], Language.HE_IL) is second


def test_resolution_is_deterministic() -> None:
    rows = [EN, HE]
    results = {id(resolve_translation(rows, Language.HE_IL)) for _ in range(10)}
    assert results == {id(HE)}
