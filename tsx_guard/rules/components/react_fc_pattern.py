"""React.FC annotation check for arrow function components."""

from ...analysis.nodes import ArrowFunction, Node, NodeKind, VariableDeclarator
from ..base import BaseRule, Severity, TraversalContext, Violation


class ReactFcPatternRule(BaseRule):
    """Require a type annotation on capitalised arrow function components."""

    @property
    def rule_id(self) -> str:
        return "COMPONENTS.REACT_FC_PATTERN"

    @property
    def name(self) -> str:
        return "React.FC Pattern"

    @property
    def category(self) -> str:
        return "components"

    @property
    def default_severity(self) -> Severity:
        return Severity.LOW

    @property
    def supported_languages(self) -> list[str] | None:
        return ["tsx", "typescript"]

    @property
    def description(self) -> str:
        return (
            "Reports component declarations (capitalised names bound to arrow "
            "functions) without a React.FC type annotation."
        )

    def listeners(self):
        return {NodeKind.VARIABLE_DECLARATOR: self._check_declarator}

    def _check_declarator(self, node: Node, ctx: TraversalContext) -> list[Violation]:
        if not isinstance(node, VariableDeclarator) or node.type_annotated:
            return []
        if not node.name[:1].isupper() or not node.name.isidentifier():
            return []
        if not isinstance(node.init, ArrowFunction):
            return []

        return [
            Violation(
                node=node,
                message=f"Component '{node.name}' should use React.FC type annotation",
                remediation_hints=[f"Declare as const {node.name}: React.FC<Props> = ..."],
                data={"component": node.name},
            )
        ]
