"""Tests for configuration module."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from js_complexity.config import RuleConfig, SensorConfig
from js_complexity.exceptions import ConfigError
from js_complexity.rules import JsonProfileRuleSource, StaticRuleSource


class TestRuleConfig:
    """Maximum complexity rule settings."""

    def test_inactive_needs_no_threshold(self):
        config = RuleConfig.inactive()
        assert not config.active
        assert config.max_allowed_complexity is None

    def test_active_requires_threshold(self):
        with pytest.raises(ConfigError, match="integer"):
            RuleConfig(active=True)

    @pytest.mark.parametrize("threshold", [0, -4])
    def test_threshold_must_be_positive(self, threshold):
        with pytest.raises(ConfigError, match="positive"):
            RuleConfig.with_threshold(threshold)

    def test_from_string_params(self):
        config = RuleConfig.from_params({"maxAllowedComplexity": " 12 "})
        assert config == RuleConfig(active=True, max_allowed_complexity=12)

    def test_non_numeric_threshold(self):
        with pytest.raises(ConfigError, match="non-numeric"):
            RuleConfig.from_params({"maxAllowedComplexity": "ten"}, rule_key="my_rule")

    @pytest.mark.parametrize("params", [{}, {"maxAllowedComplexity": ""}])
    def test_missing_threshold(self, params):
        with pytest.raises(ConfigError, match="no maxAllowedComplexity"):
            RuleConfig.from_params(params)

    def test_inactive_params_are_not_validated(self):
        assert RuleConfig.from_params({"maxAllowedComplexity": "junk"}, active=False) == RuleConfig.inactive()


class TestSensorConfig:
    """Run configuration."""

    def test_defaults(self):
        config = SensorConfig()
        assert config.max_allowed_complexity is None
        assert config.max_concurrent == 1
        assert config.file_suffixes == (".js",)
        assert config.use_gitignore

    def test_suffix_normalization(self):
        config = SensorConfig(file_suffixes=("js", " .MJS ", ""))
        assert config.file_suffixes == (".js", ".mjs")

    def test_invalid_concurrency(self):
        with pytest.raises(ConfigError):
            SensorConfig(max_concurrent=0)

    def test_from_env(self):
        env = {
            "JS_COMPLEXITY_MAX": "8",
            "JS_COMPLEXITY_WORKERS": "3",
            "JS_COMPLEXITY_SUFFIXES": ".js,.cjs",
            "JS_COMPLEXITY_USE_GITIGNORE": "false",
            "JS_COMPLEXITY_PROFILE": "/tmp/profile.json",
        }
        with patch.dict(os.environ, env, clear=True):
            config = SensorConfig.from_env()

        assert config.max_allowed_complexity == 8
        assert config.max_concurrent == 3
        assert config.file_suffixes == (".js", ".cjs")
        assert not config.use_gitignore
        assert config.profile_path == Path("/tmp/profile.json")

    def test_from_env_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            config = SensorConfig.from_env()

        assert config == SensorConfig()

    def test_from_env_rejects_non_numeric(self):
        with patch.dict(os.environ, {"JS_COMPLEXITY_MAX": "lots"}, clear=True):
            with pytest.raises(ConfigError, match="JS_COMPLEXITY_MAX"):
                SensorConfig.from_env()

    def test_rule_source_inactive(self):
        source = SensorConfig().rule_source()
        assert isinstance(source, StaticRuleSource)
        assert not source.rule_config("cyclomatic_complexity").active

    def test_rule_source_threshold(self):
        source = SensorConfig(max_allowed_complexity=7).rule_source()
        assert source.rule_config("cyclomatic_complexity") == RuleConfig.with_threshold(7)

    def test_profile_takes_precedence(self, tmp_path):
        profile = tmp_path / "profile.json"
        profile.write_text(
            '{"ruleKeys": ["cyclomatic_complexity"],'
            ' "params": {"cyclomatic_complexity": {"maxAllowedComplexity": "4"}}}',
            encoding="utf-8",
        )
        source = SensorConfig(max_allowed_complexity=7, profile_path=profile).rule_source()

        assert isinstance(source, JsonProfileRuleSource)
        assert source.rule_config("cyclomatic_complexity").max_allowed_complexity == 4
