"""Tests for application settings."""

import pytest
from pydantic import ValidationError

from now_playing.config import Settings
from now_playing.language import Language


def test_defaults() -> None:
    settings = Settings(_env_file=None)

    assert settings.default_language is Language.HE_IL
    assert settings.reference_language is Language.EN_US
    assert settings.search_cache_ttl_seconds == 43200
    assert settings.posters_cache_ttl_seconds == 86400
    assert settings.default_page_size == 24
    assert settings.max_page_size == 100


def test_language_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DEFAULT_LANGUAGE", "en_US")

    assert Settings(_env_file=None).default_language is Language.EN_US


@pytest.mark.parametrize("field", ["search_cache_ttl_seconds", "posters_cache_ttl_seconds"])
def test_ttl_must_be_positive(field: str) -> None:
    with pytest.raises(ValidationError, match="cache TTL"):
        Settings(_env_file=None, **{field: 0})


def test_runtime_warnings() -> None:
    settings = Settings(
        _env_file=None, tmdb_api_key="", omdb_api_key="", debug=True, default_page_size=500
    )

    warnings = settings.validate_runtime_config()

    assert any("TMDB_API_KEY" in w for w in warnings)
    assert any("OMDB_API_KEY" in w for w in warnings)
    assert any("DEFAULT_PAGE_SIZE=500" in w for w in warnings)
    assert any("DEBUG" in w for w in warnings)


def test_no_warnings_when_configured() -> None:
    settings = Settings(_env_file=None, tmdb_api_key="t", omdb_api_key="o", debug=False)

    assert settings.validate_runtime_config() == []
