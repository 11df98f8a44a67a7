"""Tests for the error taxonomy."""

import pytest

from evidence_sources.errors import (
    ClientInputError,
    ConfigurationError,
    ErrorType,
    ProviderError,
    require_key,
)


def test_error_types() -> None:
    assert ClientInputError("x").error_type is ErrorType.CLIENT_INPUT
    assert ConfigurationError("x").error_type is ErrorType.CONFIGURATION
    assert ProviderError("x").error_type is ErrorType.PROVIDER


def test_to_dict() -> None:
    assert ClientInputError("Query parameter is required").to_dict() == {
        "error": "Query parameter is required"
    }


def test_require_key_returns_value() -> None:
    assert require_key("abc", "NEWS_API_KEY", "NewsAPI") == "abc"


@pytest.mark.parametrize("value", [None, ""])
def test_require_key_raises_with_env_name(value: str | None) -> None:
    with pytest.raises(ConfigurationError, match="NEWS_API_KEY") as exc_info:
        require_key(value, "NEWS_API_KEY", "NewsAPI")
    assert exc_info.value.details == {"env_var": "NEWS_API_KEY"}
