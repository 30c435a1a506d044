"""Tests for credentials and layered client configuration."""

from __future__ import annotations

import pytest
from omegaconf.errors import ValidationError

from oxyjobs.contexts.jobs.config import ApiCredentials, ClientConfig, load_client_config


def test_defaults_without_files() -> None:
    config = load_client_config([])

    assert config == ClientConfig()
    assert config.timeout == 50.0
    assert config.wait_time == 2.0


def test_yaml_overrides_defaults(tmp_path) -> None:
    path = tmp_path / "client.yaml"
    path.write_text("timeout: 10\nwait_time: 0.5\n")

    config = load_client_config([path])

    assert config.timeout == 10.0
    assert config.wait_time == 0.5
    assert config.submit_url == "https://data.oxylabs.io/v1/queries"


def test_later_files_win(tmp_path) -> None:
    base = tmp_path / "base.yaml"
    base.write_text("results_host: https://a.example\nwait_time: 1.0\n")
    override = tmp_path / "override.yaml"
    override.write_text("results_host: https://b.example\n")

    config = load_client_config([base, override])

    assert config.results_host == "https://b.example"
    assert config.wait_time == 1.0
    assert config.results_url("abc") == "https://b.example/v1/queries/abc/results"


def test_bad_type_in_layer_raises(tmp_path) -> None:
    path = tmp_path / "client.yaml"
    path.write_text("wait_time: soon\n")

    with pytest.raises(ValidationError):
        load_client_config([path])


def test_missing_file_raises(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        load_client_config([tmp_path / "nope.yaml"])


def test_invalid_timeout_raises(tmp_path) -> None:
    path = tmp_path / "client.yaml"
    path.write_text("timeout: 0\n")

    with pytest.raises(ValueError, match="timeout"):
        load_client_config([path])


def test_status_url_strips_trailing_slash() -> None:
    config = ClientConfig(results_host="https://data.example.test/")
    assert config.status_url("42") == "https://data.example.test/v1/queries/42"


class TestApiCredentials:
    def test_from_env(self, monkeypatch) -> None:
        monkeypatch.setenv("OXYLABS_USERNAME", "alice")
        monkeypatch.setenv("OXYLABS_PASSWORD", "s3cret")

        creds = ApiCredentials.from_env()

        assert creds == ApiCredentials("alice", "s3cret")
        assert "s3cret" not in repr(creds)

    def test_missing_env_raises(self, monkeypatch) -> None:
        monkeypatch.delenv("OXYLABS_USERNAME", raising=False)
        monkeypatch.setenv("OXYLABS_PASSWORD", "s3cret")

        with pytest.raises(EnvironmentError, match="OXYLABS_USERNAME"):
            ApiCredentials.from_env()

    def test_empty_password_rejected(self) -> None:
        with pytest.raises(ValueError):
            ApiCredentials("alice", "")
