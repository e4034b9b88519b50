import pytest

from gemledger.app.db import resolve_database_url


def test_project_specific_url_wins():
    env = {"GEMLEDGER_DATABASE_URL": "sqlite:///gem.db", "DATABASE_URL": "sqlite:///other.db"}
    assert resolve_database_url(env) == "sqlite:///gem.db"


def test_blank_values_fall_through_to_database_url():
    env = {"GEMLEDGER_DATABASE_URL": "  ", "DATABASE_URL": "sqlite:///other.db"}
    assert resolve_database_url(env) == "sqlite:///other.db"


def test_missing_url_is_a_clear_error():
    with pytest.raises(RuntimeError, match="GEMLEDGER_DATABASE_URL"):
        resolve_database_url({})
