"""Supported content languages."""

from enum import StrEnum


class Language(StrEnum):
    """Locale tags used for translations, stored as ``<lang>_<REGION>``."""

    HE_IL = "he_IL"
    EN_US = "en_US"

    @property
    def tmdb_code(self) -> str:
        """Language code in the ``he-IL`` form that TMDB expects."""
        return self.value.replace("_", "-")
