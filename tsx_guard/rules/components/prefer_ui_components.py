"""
Raw HTML element detection.

Elements with inherent browser styling (buttons, headings, form
controls, lists...) should be rendered through the project's UI
components. Diagnostic only; replacing them needs an import and a prop
mapping the rule cannot know.
"""

from typing import Any

from ...analysis.nodes import JSXAttribute, JSXElement, Node, NodeKind
from ..base import BaseRule, Severity, TraversalContext, Violation


class PreferUiComponentsRule(BaseRule):
    """Prefer UI components over raw HTML elements with inherent styling."""

    RESTRICTED_ELEMENTS = {
        "blockquote": "Use Quote or Card component for quoted content",
        "button": "Use Button component from @/components/ui/button",
        "code": "Use Code component or Badge component for inline code",
        "h1": 'Use Typography component with variant="h1"',
        "h2": 'Use Typography component with variant="h2"',
        "h3": 'Use Typography component with variant="h3"',
        "h4": 'Use Typography component with variant="h4"',
        "h5": 'Use Typography component with variant="h5"',
        "h6": 'Use Typography component with variant="h6"',
        "input": "Use Input component from @/components/ui/input",
        "ol": "Use Card or custom component for UI lists (semantic lists are OK)",
        "p": 'Use Typography component with variant="p" or Text component',
        "pre": "Use CodeBlock component for code blocks",
        "select": "Use Select component from @/components/ui/select",
        "textarea": "Use Textarea component from @/components/ui/textarea",
        "ul": "Use Card or custom component for UI lists (semantic lists are OK)",
    }

    SEMANTIC_ATTRIBUTES = {"role", "aria-label", "aria-labelledby", "aria-describedby"}

    @property
    def rule_id(self) -> str:
        return "COMPONENTS.PREFER_UI_COMPONENTS"

    @property
    def name(self) -> str:
        return "Prefer UI Components"

    @property
    def category(self) -> str:
        return "components"

    @property
    def default_severity(self) -> Severity:
        return Severity.LOW

    @property
    def description(self) -> str:
        return (
            "Reports raw HTML elements with inherent styling that should be "
            "rendered through UI components instead."
        )

    @property
    def default_parameters(self) -> dict[str, Any]:
        return {"additionalRestricted": {}, "allowInTests": True}

    def listeners(self):
        return {NodeKind.JSX_ELEMENT: self._check_element}

    def _is_semantic_list(self, element: JSXElement) -> bool:
        if element.name not in ("ul", "ol"):
            return False
        return any(
            isinstance(child, JSXElement) and child.name == "li" for child in element.body
        )

    def _has_semantic_attributes(self, element: JSXElement) -> bool:
        return any(
            isinstance(attribute, JSXAttribute)
            and attribute.name in self.SEMANTIC_ATTRIBUTES
            for attribute in element.attributes
        )

    def _check_element(self, node: Node, ctx: TraversalContext) -> list[Violation]:
        if not isinstance(node, JSXElement) or node.is_fragment:
            return []
        if ctx.options["allowInTests"] and ctx.source.is_test_file:
            return []

        restricted = dict(self.RESTRICTED_ELEMENTS)
        restricted.update(ctx.options.get("additionalRestricted") or {})
        suggestion = restricted.get(node.name)
        if suggestion is None:
            return []
        if self._is_semantic_list(node) or self._has_semantic_attributes(node):
            return []

        return [
            Violation(
                node=node,
                message=(
                    f'Avoid raw "{node.name}" element. {suggestion} This promotes '
                    "consistency and maintainability."
                ),
                remediation_hints=[suggestion],
                data={"element": node.name, "suggestion": suggestion},
            )
        ]
