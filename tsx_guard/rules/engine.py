"""
Rule engine coordinator for executing TSX rules.

This module provides the RuleEngine class that orchestrates rule
execution and result aggregation, filtering by category and language,
and the fixed-point fixer that applies rule edits until nothing
fixable remains.
"""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path

from ..guard_logging import LogCategory, get_category_logger
from .base import BaseRule, Finding, RuleContext, Severity
from .config import RuleEngineConfig, RuleEngineConfigLoader
from .discovery import RuleDiscovery
from .fix import Edit, apply_edits, find_overlap, select_compatible

logger = logging.getLogger(__name__)
fix_logger = get_category_logger(LogCategory.FIXER)


@dataclass
class RuleError:
    """Error that occurred during rule execution."""

    rule_id: str
    error_message: str
    exception_type: str | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "rule_id": self.rule_id,
            "error_message": self.error_message,
            "exception_type": self.exception_type,
        }


@dataclass
class RuleExecutionResult:
    """Result of executing a single rule."""

    rule_id: str
    findings: list[Finding] = field(default_factory=list)
    execution_time_ms: float = 0.0
    error: RuleError | None = None

    @property
    def success(self) -> bool:
        """Check if the rule executed successfully."""
        return self.error is None

    @property
    def finding_count(self) -> int:
        """Get the number of findings."""
        return len(self.findings)


@dataclass
class RuleEngineResult:
    """Result of running the engine on one file."""

    file_path: str = ""
    findings: list[Finding] = field(default_factory=list)
    errors: list[RuleError] = field(default_factory=list)
    execution_time_ms: float = 0.0
    rules_executed: int = 0
    rules_skipped: int = 0
    has_syntax_errors: bool = False

    def should_fail(self, severity_threshold: Severity = Severity.LOW) -> bool:
        """Check if any findings meet or exceed the threshold.

        Args:
            severity_threshold: Minimum severity that counts as failure

        Returns:
            True if any findings meet or exceed the threshold
        """
        return any(f.severity >= severity_threshold for f in self.findings)

    @property
    def fixable_count(self) -> int:
        """Get count of findings that carry edits."""
        return sum(1 for f in self.findings if f.can_auto_fix)

    @property
    def critical_count(self) -> int:
        """Get count of critical findings."""
        return sum(1 for f in self.findings if f.severity == Severity.CRITICAL)

    @property
    def high_count(self) -> int:
        """Get count of high findings."""
        return sum(1 for f in self.findings if f.severity == Severity.HIGH)

    @property
    def medium_count(self) -> int:
        """Get count of medium findings."""
        return sum(1 for f in self.findings if f.severity == Severity.MEDIUM)

    @property
    def low_count(self) -> int:
        """Get count of low findings."""
        return sum(1 for f in self.findings if f.severity == Severity.LOW)

    def get_findings_by_severity(self, severity: Severity) -> list[Finding]:
        """Get findings filtered by severity."""
        return [f for f in self.findings if f.severity == severity]

    def get_findings_by_rule(self, rule_id: str) -> list[Finding]:
        """Get findings filtered by rule ID."""
        return [f for f in self.findings if f.rule_id == rule_id]

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "file_path": self.file_path,
            "findings": [f.to_dict() for f in self.findings],
            "errors": [e.to_dict() for e in self.errors],
            "execution_time_ms": self.execution_time_ms,
            "rules_executed": self.rules_executed,
            "rules_skipped": self.rules_skipped,
            "has_syntax_errors": self.has_syntax_errors,
            "summary": {
                "total_findings": len(self.findings),
                "fixable": self.fixable_count,
                "critical": self.critical_count,
                "high": self.high_count,
                "medium": self.medium_count,
                "low": self.low_count,
            },
        }


@dataclass
class FixResult:
    """Outcome of the fixed-point fixer for one file."""

    file_path: str
    original: str
    content: str
    passes: int = 0
    fixes_applied: int = 0
    remaining: RuleEngineResult | None = None

    @property
    def changed(self) -> bool:
        return self.content != self.original

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "file_path": self.file_path,
            "changed": self.changed,
            "passes": self.passes,
            "fixes_applied": self.fixes_applied,
            "remaining": self.remaining.to_dict() if self.remaining else None,
        }


class RuleEngine:
    """Engine for executing TSX rules.

    The RuleEngine orchestrates rule discovery, registration, and execution.
    It supports filtering by category and language, aggregates findings
    with timing information, and drives auto-fixing.

    Example usage:
        engine = RuleEngine()
        engine.load_rules()  # Auto-discover rules

        context = RuleContext.from_file(Path("Card.tsx"))
        result = engine.run(context)

        fixed = engine.fix(context)
        Path("Card.tsx").write_text(fixed.content)
    """

    def __init__(
        self,
        config: RuleEngineConfig | None = None,
        config_loader: RuleEngineConfigLoader | None = None,
    ):
        """Initialize the rule engine.

        Args:
            config: Optional pre-loaded configuration
            config_loader: Optional config loader for loading from files
        """
        if config:
            self.config = config
        elif config_loader:
            self.config = config_loader.load()
        else:
            self.config = RuleEngineConfig()

        self._rules: dict[str, BaseRule] = {}
        self._rules_by_category: dict[str, list[BaseRule]] = {}

    def load_rules(self, discovery: RuleDiscovery | None = None) -> int:
        """Load rules using discovery.

        Args:
            discovery: Optional RuleDiscovery instance

        Returns:
            Number of rules loaded
        """
        if discovery is None:
            discovery = RuleDiscovery()

        rule_classes = discovery.discover_all()
        loaded = 0

        for rule_id, rule_class in rule_classes.items():
            if not self.config.is_rule_enabled(rule_id):
                continue
            try:
                rule = rule_class()
            except Exception as e:
                logger.warning(f"Could not instantiate rule {rule_id}: {e}")
                continue
            if self.register(rule):
                loaded += 1

        logger.info(f"Loaded {loaded} rules")
        return loaded

    def register(self, rule: BaseRule) -> bool:
        """Register a rule with the engine.

        Args:
            rule: Rule instance to register

        Returns:
            True if registered, False if disabled by configuration
        """
        rule_id = rule.rule_id

        # Check if enabled in config
        if not self.config.is_rule_enabled(rule_id, rule.category):
            logger.debug(f"Rule {rule_id} is disabled in config, skipping")
            return False

        self._rules[rule_id] = rule
        self._rules_by_category.setdefault(rule.category, []).append(rule)

        logger.debug(f"Registered rule: {rule_id}")
        return True

    def unregister(self, rule_id: str) -> bool:
        """Unregister a rule from the engine.

        Args:
            rule_id: Rule identifier to unregister

        Returns:
            True if rule was found and removed, False otherwise
        """
        rule = self._rules.pop(rule_id, None)
        if rule is None:
            return False

        category = rule.category
        if category in self._rules_by_category:
            self._rules_by_category[category] = [
                r for r in self._rules_by_category[category] if r.rule_id != rule_id
            ]

        return True

    def get_rule(self, rule_id: str) -> BaseRule | None:
        """Get a rule by its ID."""
        return self._rules.get(rule_id)

    def get_rules_by_category(self, category: str) -> list[BaseRule]:
        """Get all rules for a specific category."""
        return self._rules_by_category.get(category, []).copy()

    def get_all_rules(self) -> list[BaseRule]:
        """Get all registered rules."""
        return list(self._rules.values())

    def _select_rules(
        self,
        rule_ids: list[str] | None,
        categories: list[str] | None,
    ) -> list[BaseRule]:
        if rule_ids:
            return [self._rules[rid] for rid in rule_ids if rid in self._rules]
        if categories:
            rules = []
            for cat in categories:
                rules.extend(self.get_rules_by_category(cat))
            return rules
        return list(self._rules.values())

    def run(
        self,
        context: RuleContext,
        rule_ids: list[str] | None = None,
        categories: list[str] | None = None,
    ) -> RuleEngineResult:
        """Run rules on one file and collect findings.

        Rules run one after another, each over its own traversal. Findings
        keep traversal order within a rule and registration order across
        rules; the engine does not reconcile rules that report the same node.

        Args:
            context: RuleContext with file content and configuration
            rule_ids: Optional list of specific rule IDs to run
            categories: Optional list of categories to run

        Returns:
            RuleEngineResult with findings and execution info
        """
        start_time = time.time()

        if context.config is None:
            context.config = self.config

        selected = self._select_rules(rule_ids, categories)
        rules = self._filter_by_language(selected, context.language)
        rules_skipped = len(selected) - len(rules)

        source = context.source
        if source.has_errors:
            logger.warning(f"{context.file_path} has syntax errors, results may be partial")

        findings: list[Finding] = []
        errors: list[RuleError] = []
        rules_executed = 0

        for rule in rules:
            result = self._execute_rule(rule, context)
            rules_executed += 1

            if result.error:
                errors.append(result.error)
                if not self.config.continue_on_error:
                    break
            else:
                findings.extend(result.findings)

        duration_ms = (time.time() - start_time) * 1000
        logger.debug(
            f"Ran {rules_executed} rules on {context.file_path}",
            extra={
                "operation": "run",
                "file_path": str(context.file_path),
                "finding_count": len(findings),
                "duration_ms": round(duration_ms, 2),
            },
        )

        return RuleEngineResult(
            file_path=str(context.file_path),
            findings=findings,
            errors=errors,
            execution_time_ms=duration_ms,
            rules_executed=rules_executed,
            rules_skipped=rules_skipped,
            has_syntax_errors=source.has_errors,
        )

    def run_category(self, context: RuleContext, category: str) -> RuleEngineResult:
        """Run all rules in a specific category."""
        return self.run(context, categories=[category])

    def fix(
        self,
        context: RuleContext,
        rule_ids: list[str] | None = None,
        categories: list[str] | None = None,
    ) -> FixResult:
        """Apply rule edits until no fixable finding remains.

        Each pass takes fixable findings in source order of their first
        edit and accepts a finding's edits together, deferring it when
        they touch or overlap an edit already accepted in the same pass.
        The text is then re-parsed and all rules run again. The loop ends
        when a pass accepts nothing, the text stops changing, or
        ``max_fix_passes`` is reached.

        Args:
            context: RuleContext for the file to fix
            rule_ids: Optional list of specific rule IDs to run
            categories: Optional list of categories to run

        Returns:
            FixResult with the rewritten content and the remaining findings
        """
        original = context.content
        content = original
        passes = 0
        fixes_applied = 0
        result = self.run(context, rule_ids, categories)

        if result.has_syntax_errors:
            fix_logger.warning(f"Not fixing {context.file_path}: file has syntax errors")
            return FixResult(
                file_path=str(context.file_path),
                original=original,
                content=content,
                remaining=result,
            )

        while passes < self.config.max_fix_passes:
            groups = self._fixable_groups(result.findings)
            accepted, deferred = select_compatible(groups)
            if not accepted:
                break

            edits = [edit for group in accepted for edit in group]
            new_content = apply_edits(content, edits)
            passes += 1
            fixes_applied += len(accepted)
            fix_logger.debug(
                f"Fix pass {passes} on {context.file_path}: "
                f"{len(accepted)} applied, {len(deferred)} deferred"
            )

            if new_content == content:
                break
            content = new_content
            context = RuleContext.from_source(
                content, context.file_path, context.language, config=context.config
            )
            result = self.run(context, rule_ids, categories)
            if result.has_syntax_errors:
                fix_logger.warning(
                    f"Fix pass {passes} produced syntax errors in {context.file_path}"
                )
                break

        return FixResult(
            file_path=str(context.file_path),
            original=original,
            content=content,
            passes=passes,
            fixes_applied=fixes_applied,
            remaining=result,
        )

    def _fixable_groups(self, findings: list[Finding]) -> list[list[Edit]]:
        """Edit groups of fixable findings, in source order of their first edit."""
        groups = []
        for finding in findings:
            if not finding.edits:
                continue
            if find_overlap(finding.edits) is not None:
                logger.warning(
                    f"Rule {finding.rule_id} produced overlapping edits at line "
                    f"{finding.line_number}, skipping its fix"
                )
                continue
            groups.append(finding.edits)
        groups.sort(key=lambda group: min(edit.start for edit in group))
        return groups

    def _execute_rule(self, rule: BaseRule, context: RuleContext) -> RuleExecutionResult:
        """Execute a single rule.

        Args:
            rule: Rule to execute
            context: RuleContext

        Returns:
            RuleExecutionResult with findings or error
        """
        start_time = time.time()

        try:
            findings = rule.check(context)
            return RuleExecutionResult(
                rule_id=rule.rule_id,
                findings=findings,
                execution_time_ms=(time.time() - start_time) * 1000,
            )

        except Exception as e:
            error = RuleError(
                rule_id=rule.rule_id,
                error_message=str(e),
                exception_type=type(e).__name__,
            )

            logger.warning(
                f"Rule {rule.rule_id} failed on {context.file_path}: {e}",
                extra={"rule_id": rule.rule_id, "file_path": str(context.file_path)},
            )

            return RuleExecutionResult(
                rule_id=rule.rule_id,
                execution_time_ms=(time.time() - start_time) * 1000,
                error=error,
            )

    def _filter_by_language(self, rules: list[BaseRule], language: str) -> list[BaseRule]:
        """Filter rules by supported language."""
        result = []
        for rule in rules:
            supported = rule.supported_languages
            if supported is None or language in supported:
                result.append(rule)
        return result


def create_rule_engine(
    config: RuleEngineConfig | None = None,
    project_path: Path | None = None,
    auto_load: bool = True,
) -> RuleEngine:
    """Factory function to create and configure a rule engine.

    Args:
        config: Optional pre-loaded configuration
        project_path: Optional project path for config loading
        auto_load: Whether to auto-load rules

    Returns:
        Configured RuleEngine instance
    """
    if config is None and project_path:
        config_loader = RuleEngineConfigLoader(project_path)
        engine = RuleEngine(config_loader=config_loader)
    else:
        engine = RuleEngine(config=config)

    if auto_load:
        engine.load_rules()

    return engine
