"""Unit tests for config.py"""

import pytest

from mdcontent.config import load_config


def test_load_config_defaults(tmp_path, monkeypatch):
    """Settings defaults apply when no config.yaml, env var, or override exists."""
    monkeypatch.chdir(tmp_path)
    settings = load_config()
    assert settings.parser_config == "gfm-like"
    assert settings.snippet_context_length == 32
    assert settings.case_sensitive is False
    assert settings.locale is None


def test_load_config_reads_config_yaml(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config.yaml").write_text("snippet_context_length: 10\nlocale: tr_TR\n")
    settings = load_config()
    assert settings.snippet_context_length == 10
    assert settings.locale == "tr_TR"


def test_load_config_env_overrides_config_yaml(tmp_path, monkeypatch):
    """MDCONTENT_SNIPPET_CONTEXT_LENGTH takes precedence over config.yaml."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config.yaml").write_text("snippet_context_length: 10\n")
    monkeypatch.setenv("MDCONTENT_SNIPPET_CONTEXT_LENGTH", "5")
    settings = load_config()
    assert settings.snippet_context_length == 5


def test_load_config_env_bool(tmp_path, monkeypatch):
    """MDCONTENT_CASE_SENSITIVE env var is coerced to bool."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("MDCONTENT_CASE_SENSITIVE", "true")
    assert load_config().case_sensitive is True


def test_load_config_cli_overrides_env(tmp_path, monkeypatch):
    """A non-None CLI override beats the env var."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("MDCONTENT_LOCALE", "az")
    settings = load_config(overrides={"locale": "tr", "parser_config": None})
    assert settings.locale == "tr"
    assert settings.parser_config == "gfm-like"


def test_load_config_invalid_yaml(tmp_path, monkeypatch):
    """load_config raises ValueError when config.yaml contains invalid YAML."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config.yaml").write_text("key: [unclosed\n")
    with pytest.raises(ValueError, match="Invalid config.yaml"):
        load_config()


def test_load_config_rejects_negative_context(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(ValueError):
        load_config(overrides={"snippet_context_length": -1})
