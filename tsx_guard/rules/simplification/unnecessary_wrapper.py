"""
Unnecessary wrapper element detection.

A generic container (``<div>`` by default) that carries no meaningful
attribute, no layout class and exactly one element or expression child
adds nothing to the rendered tree and can be replaced by that child.
"""

import re
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


class UnnecessaryWrapperRule(BaseRule):
    """Detect wrapper elements that can be replaced by their only child."""

    MESSAGE = (
        "Unnecessary div wrapper. Consider removing the wrapper or adding "
        "meaningful attributes."
    )

    # Exact attribute names that give the wrapper a purpose
    MEANINGFUL_ATTRIBUTES = {"id", "role", "tabIndex", "ref", "key"}
    MEANINGFUL_PREFIXES = ("aria-", "data-")
    EVENT_HANDLER = re.compile(r"^on[A-Z]")

    CLASS_ATTRIBUTES = ("className", "class")

    # Utility class prefixes that affect layout or appearance
    LAYOUT_PREFIXES = (
        "flex",
        "grid",
        "space-",
        "gap-",
        "p-",
        "px-",
        "py-",
        "m-",
        "mx-",
        "my-",
        "w-",
        "h-",
        "max-w",
        "max-h",
        "min-w",
        "min-h",
        "absolute",
        "relative",
        "fixed",
        "sticky",
        "top-",
        "bottom-",
        "left-",
        "right-",
        "inset-",
        "z-",
        "container",
        "rounded",
        "border",
        "bg-",
        "text-center",
        "text-left",
        "text-right",
        "justify-",
        "items-",
        "self-",
        "overflow-",
        "font-",
        "text-",
    )

    @property
    def rule_id(self) -> str:
        return "SIMPLIFICATION.UNNECESSARY_WRAPPER"

    @property
    def name(self) -> str:
        return "Unnecessary Wrapper Element"

    @property
    def category(self) -> str:
        return "simplification"

    @property
    def default_severity(self) -> Severity:
        return Severity.MEDIUM

    @property
    def description(self) -> str:
        return (
            "Detects container elements without meaningful attributes or "
            "layout classes that wrap a single element or expression."
        )

    @property
    def default_parameters(self) -> dict[str, Any]:
        return {"elements": ["div"]}

    def can_auto_fix(self) -> bool:
        return True

    def listeners(self):
        return {NodeKind.JSX_ELEMENT: self._check_element}

    def _has_meaningful_attribute(self, element: JSXElement) -> bool:
        for attribute in element.attributes:
            if not isinstance(attribute, JSXAttribute):
                # Spread props may carry anything
                return True
            name = attribute.name
            if name in self.MEANINGFUL_ATTRIBUTES:
                return True
            if name.startswith(self.MEANINGFUL_PREFIXES):
                return True
            if self.EVENT_HANDLER.match(name):
                return True
        return False

    def _serves_layout_purpose(self, element: JSXElement) -> bool:
        for attribute_name in self.CLASS_ATTRIBUTES:
            attribute = element.get_attribute(attribute_name)
            if attribute is None or attribute.value is None:
                continue
            if not isinstance(attribute.value, Literal) or not isinstance(
                attribute.value.value, str
            ):
                # Computed classes cannot be checked
                return True
            for token in attribute.value.value.split():
                utility = token.rsplit(":", 1)[-1].lstrip("!")
                if utility.startswith(self.LAYOUT_PREFIXES):
                    return True
        return False

    def _check_element(self, node: Node, ctx: TraversalContext) -> list[Violation]:
        if not isinstance(node, JSXElement) or node.self_closing:
            return []
        if node.name not in ctx.options["elements"]:
            return []
        if self._has_meaningful_attribute(node) or self._serves_layout_purpose(node):
            return []

        children = node.significant_children()
        if len(children) != 1:
            return []
        child = children[0]
        if not isinstance(child, (JSXElement, JSXExpressionContainer)):
            return []

        edits = []
        if isinstance(child, JSXElement) or isinstance(ctx.parent, JSXElement):
            edits.append(Edit(node.start, node.end, ctx.source.get_text(child)))

        return [
            Violation(
                node=node,
                message=self.MESSAGE,
                edits=edits,
                remediation_hints=[
                    "Render the child directly",
                    "Add a layout class or a meaningful attribute if the wrapper is needed",
                ],
                data={"element": node.name},
            )
        ]
