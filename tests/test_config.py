"""Tests for configuration and the local server entrypoint."""

import pytest
from unittest.mock import patch

from nexflow import main
from nexflow.infra.config import config
from nexflow.infra.errors import ConfigurationError


def test_credentials_present():
    config.require_credentials()


def test_both_credentials_reported(monkeypatch):
    monkeypatch.setattr(config, "VEYRAX_API_KEY", None)
    monkeypatch.setattr(config, "OPENAI_API_KEY", None)

    with pytest.raises(ConfigurationError) as exc_info:
        config.require_credentials()

    assert "VEYRAX_API_KEY" in exc_info.value.message
    assert "OPENAI_API_KEY" in exc_info.value.message


def test_run_refuses_without_credentials(monkeypatch):
    monkeypatch.setattr(config, "OPENAI_API_KEY", None)

    with patch("uvicorn.run") as mock_run:
        with pytest.raises(ConfigurationError):
            main.run()

    mock_run.assert_not_called()


def test_run_skips_listen_in_production(monkeypatch):
    monkeypatch.setattr(config, "APP_ENV", "production")

    with patch("uvicorn.run") as mock_run:
        main.run()

    mock_run.assert_not_called()


def test_run_listens_on_configured_port(monkeypatch):
    monkeypatch.setattr(config, "APP_ENV", "development")
    monkeypatch.setattr(config, "PORT", 4321)

    with patch("uvicorn.run") as mock_run:
        main.run()

    mock_run.assert_called_once()
    assert mock_run.call_args[1]["port"] == 4321
    assert mock_run.call_args[0][0] is main.app
