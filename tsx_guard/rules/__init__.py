"""
Rule engine for TSX/JSX checks and fixes.

Rules are discovered from the category subpackages (formatting,
simplification, imports, styling, components) and run by RuleEngine,
which also drives the fixed-point fixer.
"""

from .base import BaseRule, Finding, RuleContext, Severity, TraversalContext, Violation
from .config import RuleConfig, RuleEngineConfig, RuleEngineConfigLoader
from .discovery import RuleDiscovery
from .engine import FixResult, RuleEngine, RuleEngineResult, create_rule_engine
from .fix import Edit, EditConflictError, apply_edits

__all__ = [
    "BaseRule",
    "Edit",
    "EditConflictError",
    "Finding",
    "FixResult",
    "RuleConfig",
    "RuleContext",
    "RuleDiscovery",
    "RuleEngine",
    "RuleEngineConfig",
    "RuleEngineConfigLoader",
    "RuleEngineResult",
    "Severity",
    "TraversalContext",
    "Violation",
    "apply_edits",
    "create_rule_engine",
]
