"""
Base classes and types for the TSX rule engine.

This module provides the foundational abstractions for writing rules:
severities, the Violation a rule callback reports, the Finding the
engine hands to users, the per-file RuleContext, the per-traversal
TraversalContext, and the BaseRule contract itself.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ..analysis.nodes import Node, NodeKind, SourceFile
from .fix import Edit

if TYPE_CHECKING:
    from .config import RuleConfig, RuleEngineConfig


class Severity(Enum):
    """Severity levels for findings."""

    CRITICAL = "critical"  # Breaks the build
    HIGH = "high"  # Likely bug or broken markup
    MEDIUM = "medium"  # Structural issue, should be fixed
    LOW = "low"  # Style, informational

    def __lt__(self, other: "Severity") -> bool:
        order = [Severity.LOW, Severity.MEDIUM, Severity.HIGH, Severity.CRITICAL]
        return order.index(self) < order.index(other)

    def __le__(self, other: "Severity") -> bool:
        return self == other or self < other

    def __gt__(self, other: "Severity") -> bool:
        return not self <= other

    def __ge__(self, other: "Severity") -> bool:
        return not self < other


@dataclass
class Evidence:
    """Evidence supporting a finding."""

    description: str
    line_number: int | None = None
    code_snippet: str | None = None
    data: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "description": self.description,
            "line_number": self.line_number,
            "code_snippet": self.code_snippet,
            "data": self.data,
        }


@dataclass
class Violation:
    """What a rule callback reports: a node, a message and optional edits.

    Edits of one violation are pairwise non-overlapping and are applied
    together or not at all.
    """

    node: Node
    message: str
    edits: list[Edit] = field(default_factory=list)
    remediation_hints: list[str] = field(default_factory=list)
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def fixable(self) -> bool:
        return bool(self.edits)


@dataclass
class Finding:
    """A diagnostic produced by a rule for one file."""

    rule_id: str
    severity: Severity
    summary: str
    file_path: str
    line_number: int | None = None
    column: int | None = None
    end_line: int | None = None
    end_column: int | None = None
    evidence: list[Evidence] = field(default_factory=list)
    remediation_hints: list[str] = field(default_factory=list)
    edits: list[Edit] = field(default_factory=list)
    can_auto_fix: bool = False
    created_at: str = field(default_factory=lambda: datetime.now().isoformat())

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "rule_id": self.rule_id,
            "severity": self.severity.value,
            "summary": self.summary,
            "file_path": self.file_path,
            "line_number": self.line_number,
            "column": self.column,
            "end_line": self.end_line,
            "end_column": self.end_column,
            "evidence": [e.to_dict() for e in self.evidence],
            "remediation_hints": self.remediation_hints,
            "edits": [e.to_dict() for e in self.edits],
            "can_auto_fix": self.can_auto_fix,
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Finding":
        """Create Finding from dictionary."""
        return cls(
            rule_id=data["rule_id"],
            severity=Severity(data["severity"]),
            summary=data["summary"],
            file_path=data["file_path"],
            line_number=data.get("line_number"),
            column=data.get("column"),
            end_line=data.get("end_line"),
            end_column=data.get("end_column"),
            evidence=[
                Evidence(
                    description=e["description"],
                    line_number=e.get("line_number"),
                    code_snippet=e.get("code_snippet"),
                    data=e.get("data", {}),
                )
                for e in data.get("evidence", [])
            ],
            remediation_hints=data.get("remediation_hints", []),
            edits=[Edit.from_dict(e) for e in data.get("edits", [])],
            can_auto_fix=data.get("can_auto_fix", False),
            created_at=data.get("created_at", datetime.now().isoformat()),
        )


@dataclass
class RuleContext:
    """Context passed to rules for evaluation."""

    # File context
    file_path: Path
    content: str
    language: str

    # Parsed model (lazy-loaded)
    _source: SourceFile | None = field(default=None, repr=False)

    # Configuration
    config: "RuleEngineConfig | None" = field(default=None, repr=False)

    @property
    def source(self) -> SourceFile:
        """Lazy-parse the content into a SourceFile."""
        if self._source is None:
            from ..analysis.tsx_parser import get_default_parser

            self._source = get_default_parser().parse_source(
                self.content, self.file_path, self.language
            )
        return self._source

    @property
    def lines(self) -> list[str]:
        """Get content as list of lines."""
        return self.content.split("\n")

    def get_line_content(self, line_number: int) -> str | None:
        """Get content of a specific line (1-indexed)."""
        lines = self.lines
        if 1 <= line_number <= len(lines):
            return lines[line_number - 1]
        return None

    @classmethod
    def from_source(
        cls,
        content: str,
        file_path: Path | str = "<input>.tsx",
        language: str | None = None,
        config: "RuleEngineConfig | None" = None,
    ) -> "RuleContext":
        """Create context from in-memory source text."""
        from ..analysis.tsx_parser import TsxParser

        file_path = Path(file_path)
        if language is None:
            language = TsxParser.LANGUAGE_BY_EXTENSION.get(
                file_path.suffix.lower(), "tsx"
            )
        return cls(
            file_path=file_path,
            content=content,
            language=language,
            config=config,
        )

    @classmethod
    def from_file(
        cls,
        file_path: Path,
        language: str | None = None,
        config: "RuleEngineConfig | None" = None,
    ) -> "RuleContext":
        """Create context from a file path, keeping line endings as written."""
        with open(file_path, encoding="utf-8", newline="") as f:
            content = f.read()
        return cls.from_source(content, file_path, language=language, config=config)


@dataclass
class TraversalContext:
    """Per-rule, per-file state handed to every callback.

    ``state`` is created by ``BaseRule.create_state()`` when the
    traversal starts and dropped after ``on_traversal_complete``.
    """

    source: SourceFile
    options: dict[str, Any] = field(default_factory=dict)
    state: Any = None
    ancestors: list[Node] = field(default_factory=list)

    @property
    def parent(self) -> Node | None:
        """Parent of the node currently being visited."""
        return self.ancestors[-1] if self.ancestors else None

    @property
    def file_path(self) -> Path:
        return self.source.path


Callback = Callable[[Node, TraversalContext], list[Violation]]


class BaseRule(ABC):
    """Abstract base class for all rules.

    A rule registers callbacks per node kind through ``listeners()``.
    ``check()`` walks the file pre-order depth-first, calls the
    matching callback for every node, then ``on_traversal_complete``
    once, and converts the collected violations into findings.
    """

    @property
    @abstractmethod
    def rule_id(self) -> str:
        """Unique rule identifier (e.g., 'IMPORTS.DUPLICATE_IMPORTS').

        Format: CATEGORY.RULE_NAME where CATEGORY is uppercase and
        RULE_NAME uses UPPER_SNAKE_CASE.
        """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable rule name."""

    @property
    @abstractmethod
    def category(self) -> str:
        """Rule category: formatting, simplification, imports, styling, components."""

    @property
    @abstractmethod
    def default_severity(self) -> Severity:
        """Default severity level for findings from this rule."""

    @property
    def supported_languages(self) -> list[str] | None:
        """Languages this rule supports. None = all languages."""
        return None

    @property
    def description(self) -> str:
        """Detailed description of what this rule checks."""
        return f"Rule {self.rule_id}: {self.name}"

    @property
    def default_parameters(self) -> dict[str, Any]:
        """Parameters used when the configuration does not set them."""
        return {}

    def listeners(self) -> dict[NodeKind, Callback]:
        """Callbacks keyed by the node kind they handle."""
        return {}

    def create_state(self) -> Any:
        """Fresh per-file state, stored on the TraversalContext."""
        return None

    def on_traversal_complete(self, ctx: TraversalContext) -> list[Violation]:
        """Called once after the last node of a file was visited."""
        return []

    def can_auto_fix(self) -> bool:
        """Whether this rule supports automatic fixes."""
        return False

    def get_severity(self, config: "RuleConfig | None") -> Severity:
        """Get severity from config or use default.

        Args:
            config: Optional rule-specific configuration

        Returns:
            Severity level to use for findings
        """
        if config and config.severity_override:
            return Severity(config.severity_override.lower())
        return self.default_severity

    def get_options(self, config: "RuleConfig | None") -> dict[str, Any]:
        """Default parameters overlaid with configured ones."""
        options = dict(self.default_parameters)
        if config:
            options.update(config.parameters)
        return options

    def visit(
        self, source: SourceFile, options: dict[str, Any] | None = None
    ) -> list[Violation]:
        """Traverse one file and return the violations in report order.

        Args:
            source: Parsed file
            options: Rule parameters (defaults are used when None)

        Returns:
            Violations from callbacks, then from on_traversal_complete
        """
        ctx = TraversalContext(
            source=source,
            options=options if options is not None else self.get_options(None),
            state=self.create_state(),
        )
        handlers = self.listeners()
        violations: list[Violation] = []

        if handlers:
            # (node, leaving) pairs keep the ancestor stack in sync
            stack: list[tuple[Node, bool]] = [(source.program, False)]
            while stack:
                node, leaving = stack.pop()
                if leaving:
                    ctx.ancestors.pop()
                    continue
                handler = handlers.get(node.kind)
                if handler is not None:
                    violations.extend(handler(node, ctx))
                children = node.children()
                if children:
                    ctx.ancestors.append(node)
                    stack.append((node, True))
                    stack.extend((child, False) for child in reversed(children))

        violations.extend(self.on_traversal_complete(ctx))
        return violations

    def check(self, context: RuleContext) -> list[Finding]:
        """Run the rule on a file and return findings.

        Args:
            context: RuleContext with the file content and configuration

        Returns:
            List of Finding objects, in traversal order
        """
        config = context.config.get_rule_config(self.rule_id) if context.config else None
        source = context.source
        violations = self.visit(source, self.get_options(config))
        return [self._create_finding(v, source, config) for v in violations]

    def _create_finding(
        self,
        violation: Violation,
        source: SourceFile,
        config: "RuleConfig | None" = None,
    ) -> Finding:
        """Helper to turn a Violation into a Finding with this rule's ID and severity.

        Args:
            violation: Violation reported by a callback
            source: File the violation was found in
            config: Rule configuration for severity override

        Returns:
            Populated Finding object
        """
        span = violation.node.span
        snippet = source.get_text(span).split("\n", 1)[0].strip()
        return Finding(
            rule_id=self.rule_id,
            severity=self.get_severity(config),
            summary=violation.message,
            file_path=str(source.path),
            line_number=span.start_line,
            column=span.start_column,
            end_line=span.end_line,
            end_column=span.end_column,
            evidence=[
                Evidence(
                    description=violation.message,
                    line_number=span.start_line,
                    code_snippet=snippet,
                    data=violation.data,
                )
            ],
            remediation_hints=violation.remediation_hints,
            edits=list(violation.edits),
            can_auto_fix=violation.fixable,
        )
