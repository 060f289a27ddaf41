import pytest
from pydantic import ValidationError

from concept_insights.config import DEFAULT_URL, ClientConfig


def test_from_env_reads_connection_settings(monkeypatch) -> None:
    monkeypatch.setenv("CONCEPT_INSIGHTS_URL", "https://ci.example.test/api")
    monkeypatch.setenv("CONCEPT_INSIGHTS_USERNAME", "user")
    monkeypatch.setenv("CONCEPT_INSIGHTS_PASSWORD", "secret")
    monkeypatch.setenv("CONCEPT_INSIGHTS_TIMEOUT", "2.5")

    config = ClientConfig.from_env()

    assert config.base_url == "https://ci.example.test/api"
    assert config.credentials == ("user", "secret")
    assert config.timeout_seconds == 2.5


def test_defaults_without_environment(monkeypatch) -> None:
    for name in ("URL", "USERNAME", "PASSWORD", "TIMEOUT"):
        monkeypatch.delenv(f"CONCEPT_INSIGHTS_{name}", raising=False)

    config = ClientConfig.from_env()

    assert config.base_url == DEFAULT_URL
    assert config.credentials is None
    assert config.timeout_seconds is None


def test_partial_credentials_are_not_sent() -> None:
    assert ClientConfig(username="user").credentials is None


def test_timeout_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        ClientConfig(timeout_seconds=0)


def test_malformed_timeout_names_the_field(monkeypatch) -> None:
    monkeypatch.setenv("CONCEPT_INSIGHTS_TIMEOUT", "soon")

    with pytest.raises(ValidationError) as exc_info:
        ClientConfig.from_env()

    assert exc_info.value.errors()[0]["loc"] == ("timeout_seconds",)


def test_empty_timeout_means_no_timeout(monkeypatch) -> None:
    monkeypatch.setenv("CONCEPT_INSIGHTS_TIMEOUT", "")
    assert ClientConfig.from_env().timeout_seconds is None
