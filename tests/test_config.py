import json

import pytest

from mongoscript import config
from mongoscript.schemas import LiteralErrorPolicy


@pytest.fixture(autouse=True)
def no_token_file(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "TOKEN_FILE", tmp_path / ".token")


def test_load_settings_from_json(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"token": "s3cret", "database": "setup", "on_literal_error": "collect"}))
    settings = config.load_settings(path)
    assert settings.token == "s3cret"
    assert settings.database == "setup"
    assert settings.mongo_uri == "mongodb://localhost:27017/"
    assert settings.on_literal_error is LiteralErrorPolicy.COLLECT


def test_settings_path_from_environment(tmp_path, monkeypatch):
    path = tmp_path / "custom.json"
    path.write_text(json.dumps({"token": "from-env"}))
    monkeypatch.setenv(config.SETTINGS_ENV, str(path))
    assert config.load_settings().token == "from-env"


def test_token_file_fallback(tmp_path):
    (tmp_path / ".token").write_text("plain-token\n")
    assert config.load_settings(tmp_path / "missing.json").token == "plain-token"


def test_missing_token(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"database": "setup"}))
    with pytest.raises(RuntimeError, match="missing 'token'"):
        config.load_settings(path)


def test_nothing_configured(tmp_path):
    with pytest.raises(RuntimeError, match="No settings.json or .token found"):
        config.load_settings(tmp_path / "missing.json")


def test_invalid_json(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{token: nope")
    with pytest.raises(RuntimeError, match="Failed to parse"):
        config.load_settings(path)


def test_invalid_policy(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"token": "t", "on_literal_error": "explode"}))
    with pytest.raises(RuntimeError, match="Invalid settings"):
        config.load_settings(path)
