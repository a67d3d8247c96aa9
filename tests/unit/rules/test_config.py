"""Unit tests for tsx_guard.rules.config module."""

import json

import pytest

from tsx_guard.rules.base import Severity
from tsx_guard.rules.config import (
    CategoryConfig,
    RuleConfig,
    RuleEngineConfig,
    RuleEngineConfigLoader,
    load_config_file,
)


class TestRuleConfig:
    """Tests for RuleConfig dataclass."""

    def test_rule_config_defaults(self):
        """Test default RuleConfig values."""
        config = RuleConfig()
        assert config.enabled is True
        assert config.severity_override is None
        assert config.parameters == {}

    def test_rule_config_from_dict(self):
        """Test creating RuleConfig from dictionary."""
        data = {
            "enabled": False,
            "severity": "high",
            "parameters": {"indent": "  "},
        }
        config = RuleConfig.from_dict(data)
        assert config.enabled is False
        assert config.severity_override == "high"
        assert config.parameters["indent"] == "  "

    def test_rule_config_to_dict_minimal(self):
        """Test RuleConfig serialization with defaults."""
        d = RuleConfig().to_dict()
        assert d == {"enabled": True}


class TestCategoryConfig:
    """Tests for CategoryConfig dataclass."""

    def test_category_config_roundtrip(self):
        """Test CategoryConfig serialization."""
        config = CategoryConfig.from_dict({"enabled": False})
        assert config.enabled is False
        assert config.to_dict() == {"enabled": False}


class TestRuleEngineConfig:
    """Tests for RuleEngineConfig dataclass."""

    def test_defaults(self):
        """Test default engine settings."""
        config = RuleEngineConfig()
        assert config.enabled is True
        assert config.fail_on_severity == Severity.LOW
        assert config.continue_on_error is True
        assert config.max_fix_passes == 10

    def test_is_rule_enabled(self):
        """Test global, category and rule level switches."""
        config = RuleEngineConfig(
            categories={"styling": CategoryConfig(enabled=False)},
            rules={"IMPORTS.DUPLICATE_IMPORTS": RuleConfig(enabled=False)},
        )
        assert config.is_rule_enabled("FORMATTING.JSX_MULTILINE_SPACING", "formatting")
        assert not config.is_rule_enabled("STYLING.PREFER_CN_FOR_CLASSNAME", "styling")
        assert not config.is_rule_enabled("IMPORTS.DUPLICATE_IMPORTS", "imports")

        config.enabled = False
        assert not config.is_rule_enabled("FORMATTING.JSX_MULTILINE_SPACING", "formatting")

    def test_from_dict(self):
        """Test parsing the JSON configuration shape."""
        config = RuleEngineConfig.from_dict(
            {
                "failOnSeverity": "MEDIUM",
                "continueOnError": False,
                "maxFixPasses": 3,
                "categories": {"components": {"enabled": False}},
                "rules": {
                    "SIMPLIFICATION.REDUNDANT_DEFAULT_PROPS": {
                        "severity": "high",
                        "parameters": {"redundantDefaults": {"type": "button"}},
                    }
                },
            }
        )
        assert config.fail_on_severity == Severity.MEDIUM
        assert config.continue_on_error is False
        assert config.max_fix_passes == 3
        assert config.categories["components"].enabled is False
        rule = config.rules["SIMPLIFICATION.REDUNDANT_DEFAULT_PROPS"]
        assert rule.severity_override == "high"
        assert rule.parameters["redundantDefaults"] == {"type": "button"}

    @pytest.mark.parametrize(
        "data",
        [
            [],
            {"failOnSeverity": "fatal"},
            {"maxFixPasses": 0},
            {"maxFixPasses": "10"},
            {"rules": {"X.Y": {"severity": "urgent"}}},
        ],
    )
    def test_from_dict_rejects_invalid(self, data):
        """Test validation errors."""
        with pytest.raises(ValueError):
            RuleEngineConfig.from_dict(data)

    def test_to_dict_roundtrip(self):
        """Test serialization keeps every setting."""
        config = RuleEngineConfig(
            fail_on_severity=Severity.HIGH,
            max_fix_passes=4,
            categories={"imports": CategoryConfig(enabled=False)},
            rules={"X.Y": RuleConfig(severity_override="low")},
        )
        restored = RuleEngineConfig.from_dict(config.to_dict())
        assert restored.fail_on_severity == Severity.HIGH
        assert restored.max_fix_passes == 4
        assert restored.categories["imports"].enabled is False
        assert restored.rules["X.Y"].severity_override == "low"

    def test_merge(self):
        """Test that the other config takes precedence."""
        base = RuleEngineConfig(
            categories={"imports": CategoryConfig(enabled=False)},
            rules={"A.B": RuleConfig(enabled=False)},
        )
        other = RuleEngineConfig(
            fail_on_severity=Severity.HIGH,
            rules={"C.D": RuleConfig(severity_override="high")},
        )
        merged = base.merge(other)
        assert merged.fail_on_severity == Severity.HIGH
        assert merged.categories["imports"].enabled is False
        assert set(merged.rules) == {"A.B", "C.D"}


class TestRuleEngineConfigLoader:
    """Tests for hierarchical configuration loading."""

    @pytest.fixture
    def loader(self, tmp_path, monkeypatch):
        monkeypatch.setattr(
            RuleEngineConfigLoader, "GLOBAL_CONFIG_DIR", tmp_path / "home"
        )
        project = tmp_path / "project"
        project.mkdir()
        return RuleEngineConfigLoader(project)

    def test_defaults_without_files(self, loader):
        """Test that defaults cover every category."""
        config = loader.load()
        assert set(config.categories) == {
            "formatting",
            "simplification",
            "imports",
            "styling",
            "components",
        }

    def test_load_order(self, loader, tmp_path):
        """Test that global, project and local files merge in order."""
        home = tmp_path / "home"
        home.mkdir()
        (home / "tsxguard.json").write_text(
            json.dumps({"rules": {"A.B": {"enabled": False}, "C.D": {"enabled": False}}})
        )
        (loader.project_path / "tsxguard.json").write_text(
            json.dumps({"failOnSeverity": "high", "rules": {"C.D": {"enabled": True}}})
        )
        (loader.project_path / "tsxguard.local.json").write_text(
            json.dumps({"failOnSeverity": "medium"})
        )

        config = loader.load()
        assert config.fail_on_severity == Severity.MEDIUM
        assert not config.is_rule_enabled("A.B")
        assert config.is_rule_enabled("C.D")
        assert loader.loaded_sources == [
            home / "tsxguard.json",
            loader.project_path / "tsxguard.json",
            loader.project_path / "tsxguard.local.json",
        ]

    def test_invalid_file_is_skipped(self, loader, caplog):
        """Test that a broken project file falls back to defaults."""
        (loader.project_path / "tsxguard.json").write_text("{not json")
        config = loader.load()
        assert config.fail_on_severity == Severity.LOW
        assert "Could not load config" in caplog.text
        assert loader.loaded_sources == []


class TestLoadConfigFile:
    """Tests for loading one explicit configuration file."""

    def test_merges_over_defaults(self, tmp_path):
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"maxFixPasses": 2}))
        config = load_config_file(path)
        assert config.max_fix_passes == 2
        assert "imports" in config.categories

    def test_raises_on_invalid_json(self, tmp_path):
        path = tmp_path / "custom.json"
        path.write_text("{")
        with pytest.raises(ValueError):
            load_config_file(path)

    def test_raises_on_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            load_config_file(tmp_path / "missing.json")
