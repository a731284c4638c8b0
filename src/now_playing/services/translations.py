"""Per-language translation lookup with fallback."""

from collections.abc import Iterable, Sequence
from typing import Protocol, TypeVar

from now_playing.language import Language


class Translated(Protocol):
    """Anything carrying a ``language`` tag, e.g. a translation row."""

    @property
    def language(self) -> Language: ...


T = TypeVar("T", bound=Translated)


def resolve_translation(
    translations: Sequence[T],
    language: Language,
    fallback_chain: Iterable[Language] = (),
) -> T | None:
    """Pick the best translation for ``language``.

    Tries an exact match, then each language of ``fallback_chain`` in order,
    then the first translation as supplied. Returns None only when
    ``translations`` is empty. Default literals for missing fields are the
    caller's concern.

    Args:
        translations: Translation records of a single parent entity.
        language: Requested language.
        fallback_chain: Alternate languages to try, in priority order.
    """
    if not translations:
        return None

    by_language: dict[Language, T] = {}
    for translation in translations:
        # First record wins if a language is somehow duplicated
        by_language.setdefault(translation.language, translation)

    for candidate in (language, *fallback_chain):
        if candidate in by_language:
            return by_language[candidate]

    return translations[0]
