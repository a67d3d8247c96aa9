"""
Redundant default prop detection.

Props that explicitly pass a component's default value (``variant="default"``,
``asChild={false}``) are noise. The fix removes the attribute together with
one adjacent whitespace run so no double spaces or dangling gaps remain.
"""

from typing import Any

from ...analysis.nodes import (
    JSXAttribute,
    JSXElement,
    JSXExpressionContainer,
    Literal,
    Node,
    NodeKind,
)
from ..base import BaseRule, Severity, TraversalContext, Violation
from ..fix import Edit

_MISSING = object()


def literal_value(value: Node | None) -> Any:
    """Value of ``"x"`` or ``{literal}``; ``_MISSING`` for anything else."""
    if isinstance(value, JSXExpressionContainer):
        value = value.expression
    if isinstance(value, Literal):
        return value.value
    return _MISSING


def same_value(left: Any, right: Any) -> bool:
    """Structural equality where booleans never equal numbers."""
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if left is None or right is None:
        return left is None and right is None
    if isinstance(left, (int, float)) and isinstance(right, (int, float)):
        return left == right
    return type(left) is type(right) and left == right


def format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


class RedundantDefaultPropsRule(BaseRule):
    """Detect props that are set to their component default."""

    DEFAULT_PROPS: dict[str, Any] = {
        "asChild": False,
        "size": "default",
        "variant": "default",
    }

    @property
    def rule_id(self) -> str:
        return "SIMPLIFICATION.REDUNDANT_DEFAULT_PROPS"

    @property
    def name(self) -> str:
        return "Redundant Default Props"

    @property
    def category(self) -> str:
        return "simplification"

    @property
    def default_severity(self) -> Severity:
        return Severity.LOW

    @property
    def description(self) -> str:
        return (
            "Detects props passed with the component's default value. "
            "Extend the catalog with the redundantDefaults parameter."
        )

    @property
    def default_parameters(self) -> dict[str, Any]:
        return {"redundantDefaults": {}}

    def can_auto_fix(self) -> bool:
        return True

    def listeners(self):
        return {NodeKind.JSX_ATTRIBUTE: self._check_attribute}

    def _check_attribute(self, node: Node, ctx: TraversalContext) -> list[Violation]:
        if not isinstance(node, JSXAttribute):
            return []
        element = ctx.parent
        if not isinstance(element, JSXElement) or node not in element.attributes:
            return []

        if ctx.state is None:
            # Catalog is built once per file from the configured overrides
            ctx.state = dict(self.DEFAULT_PROPS)
            ctx.state.update(ctx.options.get("redundantDefaults") or {})
        catalog = ctx.state
        if node.name not in catalog:
            return []

        value = literal_value(node.value)
        if value is _MISSING or not same_value(value, catalog[node.name]):
            return []

        shown = format_value(value)
        return [
            Violation(
                node=node,
                message=(
                    f"Redundant prop '{node.name}=\"{shown}\"' - this is the "
                    "default value and can be omitted"
                ),
                edits=[self._removal(node, element, ctx)],
                remediation_hints=[f"Remove {node.name}, the component defaults to {shown}"],
                data={"prop": node.name, "value": value},
            )
        ]

    def _removal(
        self, attribute: JSXAttribute, element: JSXElement, ctx: TraversalContext
    ) -> Edit:
        """Edit removing the attribute and exactly one adjacent whitespace run."""
        source = ctx.source
        attributes = element.attributes
        index = attributes.index(attribute)
        start, end = attribute.start, attribute.end

        if index > 0:
            gap_start = attributes[index - 1].end
            if source.slice(gap_start, start).isspace():
                start = gap_start
        elif len(attributes) > 1:
            gap_end = attributes[1].start
            if source.slice(end, gap_end).isspace():
                end = gap_end
        elif element.name_span is not None:
            gap_start = element.name_span.end
            if source.slice(gap_start, start).isspace():
                start = gap_start

        return Edit(start, end, "")
