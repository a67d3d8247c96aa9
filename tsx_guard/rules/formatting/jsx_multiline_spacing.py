"""
Blank line before multi-line markup elements.

A multi-line element that directly follows another element sibling must
be separated from it by a blank line. This covers both a multi-line
element after any element and a single-line element followed by a
multi-line one; each adjacent pair is reported once, on the later node.
"""

from typing import Any

from ...analysis.nodes import JSXElement, Node, NodeKind
from ..base import BaseRule, Severity, TraversalContext, Violation
from ._spacing import check_pair_spacing


class JsxMultilineSpacingRule(BaseRule):
    """Require a blank line before multi-line JSX elements."""

    MESSAGE = "Multi-line JSX elements should have a blank line before them"

    @property
    def rule_id(self) -> str:
        return "FORMATTING.JSX_MULTILINE_SPACING"

    @property
    def name(self) -> str:
        return "Multi-line JSX Spacing"

    @property
    def category(self) -> str:
        return "formatting"

    @property
    def default_severity(self) -> Severity:
        return Severity.LOW

    @property
    def description(self) -> str:
        return (
            "Enforces a blank line between an element and a following "
            "multi-line element inside the same parent."
        )

    @property
    def default_parameters(self) -> dict[str, Any]:
        return {"indent": " " * 6}

    def can_auto_fix(self) -> bool:
        return True

    def listeners(self):
        return {NodeKind.JSX_ELEMENT: self._check_children}

    def _check_children(self, node: Node, ctx: TraversalContext) -> list[Violation]:
        if not isinstance(node, JSXElement) or node.self_closing:
            return []

        violations = []
        children = node.significant_children()
        for earlier, later in zip(children, children[1:]):
            if not isinstance(earlier, JSXElement) or not isinstance(later, JSXElement):
                continue
            if not later.is_multiline:
                continue
            violation = check_pair_spacing(
                ctx.source, earlier, later, ctx.options["indent"], self.MESSAGE
            )
            if violation is not None:
                violations.append(violation)
        return violations
