"""
Tests for Config, ConfigManager and credential resolution.

Run with:
    pytest tests/test_config.py -v
"""

import json

import pytest

from autocommit.config import (
    Config,
    ConfigManager,
    CredentialAbsent,
    CredentialPresent,
    resolve_credential,
)


class TestConfig:

    def test_defaults(self):
        config = Config()
        assert config.provider == "gemini"
        assert config.mode == "narrative"
        assert config.max_subject_length == 72
        assert config.max_detail_length == 1000
        assert config.max_ranked_files == 3

    def test_to_dict_excludes_none(self):
        d = Config().to_dict()
        assert "model" not in d
        assert "api_key" not in d
        assert "provider" in d

    def test_from_dict_ignores_unknown_keys(self):
        config = Config.from_dict({"provider": "claude", "unknown_key": "value"})
        assert config.provider == "claude"
        assert not hasattr(config, "unknown_key")

    def test_validate_invalid_provider(self):
        config = Config(provider="gpt4")
        warnings = config.validate()
        assert len(warnings) == 1
        assert config.provider == "gemini"

    def test_validate_invalid_mode(self):
        config = Config(mode="both")
        warnings = config.validate()
        assert len(warnings) == 1
        assert config.mode == "narrative"

    @pytest.mark.parametrize("field, value", [
        ("max_subject_length", -1),
        ("max_detail_length", 0),
        ("max_ranked_files", "3"),
        ("timeout", True),
    ])
    def test_validate_invalid_numbers(self, field, value):
        config = Config(**{field: value})
        warnings = config.validate()
        assert any(field in w for w in warnings)
        assert getattr(config, field) == getattr(Config(), field)

    @pytest.mark.parametrize("field, value", [
        ("max_subject_length", 200),
        ("max_detail_length", 5000),
        ("max_ranked_files", 5),
    ])
    def test_validate_rejects_limits_above_ceiling(self, field, value):
        config = Config(**{field: value})
        warnings = config.validate()
        assert any(field in w for w in warnings)
        assert getattr(config, field) == getattr(Config(), field)

    def test_validate_accepts_lowered_limits(self):
        config = Config(max_subject_length=50, max_detail_length=200, max_ranked_files=1)
        assert config.validate() == []
        assert (config.max_subject_length, config.max_ranked_files) == (50, 1)

    def test_validate_valid_config_no_warnings(self):
        assert Config().validate() == []

    def test_from_dict_triggers_validation(self, capsys):
        Config.from_dict({"mode": "invalid"})
        err = capsys.readouterr().err
        assert "Config warning" in err


class TestConfigManager:

    def test_load_returns_defaults_when_no_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path / "fakehome")
        config = ConfigManager().load()
        assert config.provider == "gemini"
        assert config.mode == "narrative"

    def test_load_reads_local_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".autocommitrc").write_text(json.dumps({"provider": "claude", "mode": "evidence"}))

        config = ConfigManager().load()
        assert config.provider == "claude"
        assert config.mode == "evidence"

    def test_save_and_load_roundtrip(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path))
        monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path)

        ConfigManager().save(Config(provider="ollama", mode="evidence"), global_config=True)

        loaded = ConfigManager().load()
        assert loaded.provider == "ollama"
        assert loaded.mode == "evidence"

    def test_malformed_json_returns_defaults(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".autocommitrc").write_text("not valid json {{{")

        config = ConfigManager().load()
        assert config.provider == "gemini"
        assert "could not read" in capsys.readouterr().err

    def test_non_object_json_returns_defaults(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".autocommitrc").write_text('["gemini"]')

        config = ConfigManager().load()
        assert config.provider == "gemini"
        assert "JSON object" in capsys.readouterr().err

    def test_load_records_path(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".autocommitrc").write_text("{}")

        manager = ConfigManager()
        manager.load()
        assert manager.get_config_path() == tmp_path / ".autocommitrc"


class TestResolveCredential:

    def test_absent(self):
        credential = resolve_credential(Config(), environ={})
        assert isinstance(credential, CredentialAbsent)
        assert "GEMINI_API_KEY" in credential.reason

    def test_from_config_file(self):
        credential = resolve_credential(Config(api_key="file-key-123"), environ={})
        assert credential == CredentialPresent(value="file-key-123", source="config file")

    def test_provider_variable_beats_config(self):
        credential = resolve_credential(
            Config(provider="claude", api_key="file-key"),
            environ={"ANTHROPIC_API_KEY": "env-key"},
        )
        assert credential.value == "env-key"
        assert credential.source == "ANTHROPIC_API_KEY"

    def test_generic_variable_wins(self):
        credential = resolve_credential(
            Config(api_key="file-key"),
            environ={"AUTOCOMMIT_API_KEY": "generic", "GEMINI_API_KEY": "gemini"},
        )
        assert credential.value == "generic"

    @pytest.mark.parametrize("key", ["", "   ", "xxx-xxx-xxx", "your-key-here"])
    def test_placeholders_are_absent(self, key):
        assert isinstance(resolve_credential(Config(api_key=key), environ={}), CredentialAbsent)

    def test_other_providers_variable_ignored(self):
        credential = resolve_credential(Config(provider="gemini"), environ={"ANTHROPIC_API_KEY": "k"})
        assert isinstance(credential, CredentialAbsent)

    def test_local_provider_needs_no_key(self):
        credential = resolve_credential(Config(provider="ollama"), environ={})
        assert isinstance(credential, CredentialPresent)
        assert credential.value is None

    def test_value_is_stripped(self):
        assert resolve_credential(Config(api_key="  key-1  "), environ={}).value == "key-1"
