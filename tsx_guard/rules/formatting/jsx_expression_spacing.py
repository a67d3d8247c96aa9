"""
Blank line between markup elements and embedded expressions.

An element followed by an ``{expression}`` child, or an expression
followed by an element, must be separated by a blank line.
"""

from typing import Any

from ...analysis.nodes import JSXElement, JSXExpressionContainer, Node, NodeKind
from ..base import BaseRule, Severity, TraversalContext, Violation
from ._spacing import check_pair_spacing


def _is_mixed_pair(earlier: Node, later: Node) -> bool:
    if isinstance(earlier, JSXElement):
        return isinstance(later, JSXExpressionContainer)
    if isinstance(earlier, JSXExpressionContainer):
        return isinstance(later, JSXElement)
    return False


class JsxExpressionSpacingRule(BaseRule):
    """Require a blank line between JSX elements and expression containers."""

    MESSAGE = "JSX elements and expressions should be separated by a newline"

    @property
    def rule_id(self) -> str:
        return "FORMATTING.JSX_EXPRESSION_SPACING"

    @property
    def name(self) -> str:
        return "JSX Expression Spacing"

    @property
    def category(self) -> str:
        return "formatting"

    @property
    def default_severity(self) -> Severity:
        return Severity.LOW

    @property
    def description(self) -> str:
        return (
            "Enforces a blank line between a markup element and an adjacent "
            "{expression} child, in either order."
        )

    @property
    def default_parameters(self) -> dict[str, Any]:
        return {"indent": " " * 16}

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
            if not _is_mixed_pair(earlier, later):
                continue
            violation = check_pair_spacing(
                ctx.source, earlier, later, ctx.options["indent"], self.MESSAGE
            )
            if violation is not None:
                violations.append(violation)
        return violations
