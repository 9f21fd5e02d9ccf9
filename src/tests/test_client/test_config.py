from __future__ import annotations

import pytest
from pydantic import ValidationError

from mfwsclient.config import DEFAULT_USER_AGENT, ClientConfig


def test_defaults() -> None:
    cfg = ClientConfig(base_url="https://vault.example.com")
    assert cfg.timeout == 30.0
    assert cfg.verify is True
    assert cfg.user_agent == DEFAULT_USER_AGENT


def test_base_url__trailing_slash_is_dropped() -> None:
    cfg = ClientConfig(base_url="https://vault.example.com/mfws/")
    assert cfg.base_url == "https://vault.example.com/mfws"


@pytest.mark.parametrize("bad", ["", "vault.example.com", "/relative", "ftp://vault.example.com", "https://"])
def test_base_url__must_be_absolute_http(bad: str) -> None:
    with pytest.raises(ValidationError, match="absolute http"):
        ClientConfig(base_url=bad)


def test_base_url__required() -> None:
    with pytest.raises(ValidationError):
        ClientConfig()


def test_timeout__must_be_positive() -> None:
    with pytest.raises(ValidationError):
        ClientConfig(base_url="https://vault.example.com", timeout=0)


def test_env_aliases(monkeypatch: pytest.MonkeyPatch) -> None:
    """Settings are read from MFWS_* variables, including aliases."""
    monkeypatch.setenv("MFWS_URL", "http://kb.example.com/")
    monkeypatch.setenv("MFWS_TIMEOUT", "5")
    monkeypatch.setenv("MFWS_VERIFY_SSL", "false")
    monkeypatch.setenv("MFWS_USER_AGENT", "tests/1.0")

    cfg = ClientConfig()
    assert cfg.base_url == "http://kb.example.com"
    assert cfg.timeout == 5.0
    assert cfg.verify is False
    assert cfg.user_agent == "tests/1.0"


def test_explicit_value_beats_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MFWS_BASE_URL", "http://env.example.com")
    cfg = ClientConfig(base_url="https://arg.example.com")
    assert cfg.base_url == "https://arg.example.com"
