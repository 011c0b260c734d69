"""Tests for SecureLogOptions and the option loaders."""

import dataclasses

import pytest
import yaml

from secure_log.config import (
    SecureLogOptions,
    load_options_from_yaml,
    options_from_env,
    options_from_mapping,
)
from secure_log.errors import OptionsError


class TestSecureLogOptions:
    """Tests for SecureLogOptions."""

    def test_defaults(self):
        options = SecureLogOptions()

        assert options.warn_only is False
        assert options.disable_on is None
        assert options.disable_console_on is None
        assert options.environment_variable == "APP_ENV"
        assert options.max_depth == 64
        assert options.min_secret_length == 1
        assert options.ignore_secrets == frozenset()
        assert options.strict_surface is False

    def test_frozen(self):
        options = SecureLogOptions()
        with pytest.raises(dataclasses.FrozenInstanceError):
            options.warn_only = True

    def test_ignore_secrets_normalised(self):
        options = SecureLogOptions(ignore_secrets=["PATH", "HOME", "PATH"])
        assert options.ignore_secrets == frozenset({"PATH", "HOME"})

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"max_depth": 0},
            {"min_secret_length": 0},
            {"environment_variable": ""},
            {"ignore_secrets": "PATH"},
        ],
    )
    def test_invalid_values(self, kwargs):
        with pytest.raises(OptionsError):
            SecureLogOptions(**kwargs)

    def test_options_error_is_value_error(self):
        with pytest.raises(ValueError):
            SecureLogOptions(max_depth=-1)

    def test_environment_switches(self):
        options = SecureLogOptions(disable_on="test", disable_console_on="production")

        assert options.is_disabled({"APP_ENV": "test"})
        assert not options.is_disabled({"APP_ENV": "production"})
        assert not options.is_disabled({})
        assert options.is_console_disabled({"APP_ENV": "production"})
        assert not options.is_console_disabled({"APP_ENV": "test"})

    def test_unset_switches_never_match(self):
        options = SecureLogOptions()
        assert not options.is_disabled({})
        assert not options.is_console_disabled({"APP_ENV": ""})

    def test_current_environment_reads_os_environ(self, monkeypatch):
        monkeypatch.setenv("APP_ENV", "staging")
        assert SecureLogOptions().current_environment() == "staging"

    def test_build_scanner(self):
        options = SecureLogOptions(min_secret_length=4, ignore_secrets=["HOME"])
        scanner = options.build_scanner({"HOME": "/root", "PIN": "123", "API_KEY": "sk-123"})

        assert scanner.secrets() == {"API_KEY": "sk-123"}
        assert scanner.max_depth == 64


class TestOptionsFromMapping:
    """Tests for options_from_mapping."""

    def test_parses_values(self):
        options = options_from_mapping(
            {
                "warn_only": "yes",
                "disable_on": "test",
                "max_depth": "10",
                "ignore_secrets": "PATH, HOME",
                "strict_surface": True,
            }
        )

        assert options.warn_only is True
        assert options.disable_on == "test"
        assert options.max_depth == 10
        assert options.ignore_secrets == frozenset({"PATH", "HOME"})
        assert options.strict_surface is True

    def test_unknown_key(self):
        with pytest.raises(OptionsError, match="warnOnly"):
            options_from_mapping({"warnOnly": True})

    def test_invalid_bool(self):
        with pytest.raises(OptionsError):
            options_from_mapping({"warn_only": "maybe"})

    def test_invalid_int(self):
        with pytest.raises(OptionsError):
            options_from_mapping({"max_depth": "deep"})

    def test_bool_is_not_an_int(self):
        with pytest.raises(OptionsError):
            options_from_mapping({"max_depth": True})


class TestLoadOptionsFromYaml:
    """Tests for load_options_from_yaml."""

    def test_section(self, tmp_path):
        path = tmp_path / "secure_log.yaml"
        path.write_text(
            "secure_log:\n"
            "  warn_only: true\n"
            "  disable_console_on: test\n"
            "  ignore_secrets: [PATH, HOME]\n",
            encoding="utf-8",
        )

        options = load_options_from_yaml(path)

        assert options.warn_only is True
        assert options.disable_console_on == "test"
        assert options.ignore_secrets == frozenset({"PATH", "HOME"})

    def test_bare_mapping(self, tmp_path):
        path = tmp_path / "options.yaml"
        path.write_text("min_secret_length: 8\n", encoding="utf-8")

        assert load_options_from_yaml(str(path)).min_secret_length == 8

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        assert load_options_from_yaml(path) == SecureLogOptions()

    def test_empty_section(self, tmp_path):
        path = tmp_path / "empty_section.yaml"
        path.write_text("secure_log:\n", encoding="utf-8")

        assert load_options_from_yaml(path) == SecureLogOptions()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_options_from_yaml(tmp_path / "missing.yaml")

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- warn_only\n", encoding="utf-8")

        with pytest.raises(OptionsError):
            load_options_from_yaml(path)

    def test_malformed(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("secure_log: [unclosed\n", encoding="utf-8")

        with pytest.raises(yaml.YAMLError):
            load_options_from_yaml(path)


class TestOptionsFromEnv:
    """Tests for options_from_env."""

    def test_reads_prefixed_variables(self):
        options = options_from_env(
            {
                "SECURE_LOG_WARN_ONLY": "1",
                "SECURE_LOG_DISABLE_CONSOLE_ON": "test",
                "SECURE_LOG_ENVIRONMENT_VARIABLE": "NODE_ENV",
                "SECURE_LOG_IGNORE_SECRETS": "PATH,HOME",
                "UNRELATED": "value",
            }
        )

        assert options.warn_only is True
        assert options.disable_console_on == "test"
        assert options.environment_variable == "NODE_ENV"
        assert options.ignore_secrets == frozenset({"PATH", "HOME"})

    def test_defaults_without_variables(self):
        assert options_from_env({}) == SecureLogOptions()

    def test_reads_os_environ(self, monkeypatch):
        monkeypatch.setenv("SECURE_LOG_MAX_DEPTH", "12")
        assert options_from_env().max_depth == 12
