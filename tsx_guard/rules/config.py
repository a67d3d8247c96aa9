"""
Configuration system for the TSX rule engine.

This module provides configuration dataclasses and loaders for
managing rule engine settings, including per-rule overrides,
category settings, and hierarchical configuration merging.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .base import Severity

logger = logging.getLogger(__name__)


@dataclass
class RuleConfig:
    """Configuration for a single rule."""

    enabled: bool = True
    severity_override: str | None = None
    parameters: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuleConfig":
        """Create RuleConfig from dictionary."""
        return cls(
            enabled=data.get("enabled", True),
            severity_override=data.get("severity"),
            parameters=data.get("parameters", {}),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {"enabled": self.enabled}
        if self.severity_override:
            result["severity"] = self.severity_override
        if self.parameters:
            result["parameters"] = self.parameters
        return result


@dataclass
class CategoryConfig:
    """Configuration for a rule category."""

    enabled: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CategoryConfig":
        """Create CategoryConfig from dictionary."""
        return cls(enabled=data.get("enabled", True))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"enabled": self.enabled}


@dataclass
class RuleEngineConfig:
    """Configuration for the rule engine."""

    # Global settings
    enabled: bool = True
    fail_on_severity: Severity = field(default=Severity.LOW)
    continue_on_error: bool = True
    max_fix_passes: int = 10

    # Per-category settings
    categories: dict[str, CategoryConfig] = field(default_factory=dict)

    # Per-rule settings
    rules: dict[str, RuleConfig] = field(default_factory=dict)

    def is_rule_enabled(self, rule_id: str, category: str | None = None) -> bool:
        """Check if a rule is enabled.

        Args:
            rule_id: The rule identifier
            category: The rule's category (optional)

        Returns:
            True if the rule is enabled, False otherwise
        """
        if not self.enabled:
            return False

        # Check category-level setting
        if category and category in self.categories:
            if not self.categories[category].enabled:
                return False

        # Check rule-level setting
        if rule_id in self.rules:
            return self.rules[rule_id].enabled

        return True

    def get_rule_config(self, rule_id: str) -> RuleConfig:
        """Get configuration for a specific rule.

        Args:
            rule_id: The rule identifier

        Returns:
            RuleConfig for the rule (default if not configured)
        """
        return self.rules.get(rule_id, RuleConfig())

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuleEngineConfig":
        """Create RuleEngineConfig from dictionary.

        Raises:
            ValueError: If a value has the wrong shape or an unknown severity
        """
        if not isinstance(data, dict):
            raise ValueError("Configuration root must be a JSON object")

        config = cls(
            enabled=data.get("enabled", True),
            continue_on_error=data.get("continueOnError", True),
        )

        # Parse fail_on_severity
        fail_on = data.get("failOnSeverity", "low")
        config.fail_on_severity = Severity(str(fail_on).lower())

        max_passes = data.get("maxFixPasses", 10)
        if not isinstance(max_passes, int) or max_passes < 1:
            raise ValueError(f"maxFixPasses must be a positive integer, got {max_passes!r}")
        config.max_fix_passes = max_passes

        # Parse category configs
        if "categories" in data:
            for cat_name, cat_data in data["categories"].items():
                config.categories[cat_name] = CategoryConfig.from_dict(cat_data)

        # Parse rule configs
        if "rules" in data:
            for rule_id, rule_data in data["rules"].items():
                rule_config = RuleConfig.from_dict(rule_data)
                if rule_config.severity_override:
                    Severity(rule_config.severity_override.lower())
                config.rules[rule_id] = rule_config

        return config

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "enabled": self.enabled,
            "failOnSeverity": self.fail_on_severity.value,
            "continueOnError": self.continue_on_error,
            "maxFixPasses": self.max_fix_passes,
            "categories": {k: v.to_dict() for k, v in self.categories.items()},
            "rules": {k: v.to_dict() for k, v in self.rules.items()},
        }

    def merge(self, other: "RuleEngineConfig") -> "RuleEngineConfig":
        """Merge another config into this one (other takes precedence).

        Args:
            other: Configuration to merge in

        Returns:
            New RuleEngineConfig with merged settings
        """
        result = RuleEngineConfig(
            enabled=other.enabled,
            fail_on_severity=other.fail_on_severity,
            continue_on_error=other.continue_on_error,
            max_fix_passes=other.max_fix_passes,
        )

        # Merge categories
        result.categories = dict(self.categories)
        result.categories.update(other.categories)

        # Merge rules
        result.rules = dict(self.rules)
        result.rules.update(other.rules)

        return result


class RuleEngineConfigLoader:
    """Loads rule engine configuration from tsxguard.json files."""

    CONFIG_FILENAME = "tsxguard.json"
    LOCAL_CONFIG_FILENAME = "tsxguard.local.json"
    GLOBAL_CONFIG_DIR = Path.home() / ".tsx-guard"

    def __init__(self, project_path: Path | None = None):
        """Initialize the config loader.

        Args:
            project_path: Path to the project root (defaults to CWD)
        """
        self.project_path = project_path or Path.cwd()
        self.loaded_sources: list[Path] = []

    def load(self) -> RuleEngineConfig:
        """Load configuration with hierarchical merging.

        Load order (later overrides earlier):
        1. Built-in defaults
        2. Global config (~/.tsx-guard/tsxguard.json)
        3. Project config (<project>/tsxguard.json)
        4. Local config (<project>/tsxguard.local.json)

        Returns:
            Merged RuleEngineConfig
        """
        config = get_default_config()
        self.loaded_sources = []

        for path in (
            self.GLOBAL_CONFIG_DIR / self.CONFIG_FILENAME,
            self.project_path / self.CONFIG_FILENAME,
            self.project_path / self.LOCAL_CONFIG_FILENAME,
        ):
            if not path.exists():
                continue
            loaded = self._load_file(path)
            if loaded:
                config = config.merge(loaded)
                self.loaded_sources.append(path)
                logger.debug(f"Merged configuration from {path}")

        return config

    def _load_file(self, path: Path) -> RuleEngineConfig | None:
        """Load configuration from a file.

        Args:
            path: Path to the config file

        Returns:
            RuleEngineConfig or None if file couldn't be loaded
        """
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
            return RuleEngineConfig.from_dict(data)
        except (json.JSONDecodeError, OSError, ValueError, AttributeError) as e:
            # Log warning but don't fail
            logger.warning(f"Could not load config from {path}: {e}")
            return None


def load_config_file(path: Path) -> RuleEngineConfig:
    """Load a single explicit configuration file on top of the defaults.

    Unlike the hierarchical loader this raises, since the user asked
    for this file by name.

    Raises:
        OSError: If the file cannot be read
        ValueError: If the file is not valid configuration JSON
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    return get_default_config().merge(RuleEngineConfig.from_dict(data))


def get_default_config() -> RuleEngineConfig:
    """Get the default rule engine configuration.

    Returns:
        RuleEngineConfig with sensible defaults
    """
    return RuleEngineConfig(
        enabled=True,
        fail_on_severity=Severity.LOW,
        continue_on_error=True,
        max_fix_passes=10,
        categories={
            "formatting": CategoryConfig(enabled=True),
            "simplification": CategoryConfig(enabled=True),
            "imports": CategoryConfig(enabled=True),
            "styling": CategoryConfig(enabled=True),
            "components": CategoryConfig(enabled=True),
        },
    )
