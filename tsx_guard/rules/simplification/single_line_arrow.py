"""
Single-statement arrow function condensing.

``(a) => { doThing(a); }`` becomes ``(a) => doThing(a)``. Only block
bodies holding exactly one expression statement qualify; return
statements and multi-statement bodies are left alone.
"""

from ...analysis.nodes import (
    ArrowFunction,
    Block,
    ExpressionStatement,
    Node,
    NodeKind,
    OtherNode,
    SourceFile,
)
from ..base import BaseRule, Severity, TraversalContext, Violation
from ..fix import Edit


def render_parameters(arrow: ArrowFunction, source: SourceFile) -> str:
    """Parameter list for the condensed form.

    A lone plain identifier stays bare; anything else is parenthesised.
    Type parameters and a return type annotation are kept verbatim,
    which also forces the parentheses.
    """
    params = arrow.params
    decorated = arrow.type_parameters is not None or arrow.return_type is not None
    if len(params) == 1 and params[0].is_identifier and not decorated:
        return params[0].name

    rendered = "(" + ", ".join(source.get_text(p) for p in params) + ")"
    if arrow.type_parameters is not None:
        rendered = arrow.type_parameters + rendered
    if arrow.return_type is not None:
        rendered = rendered + arrow.return_type
    return rendered


class SingleLineArrowRule(BaseRule):
    """Condense arrow functions whose block body is one expression statement."""

    MESSAGE = "Arrow function with single statement should be condensed to single line"

    @property
    def rule_id(self) -> str:
        return "SIMPLIFICATION.SINGLE_LINE_ARROW"

    @property
    def name(self) -> str:
        return "Single-Line Arrow Functions"

    @property
    def category(self) -> str:
        return "simplification"

    @property
    def default_severity(self) -> Severity:
        return Severity.LOW

    @property
    def description(self) -> str:
        return (
            "Detects arrow functions with a block body containing a single "
            "expression statement and rewrites them to an expression body."
        )

    def can_auto_fix(self) -> bool:
        return True

    def listeners(self):
        return {NodeKind.ARROW_FUNCTION: self._check_arrow}

    def _check_arrow(self, node: Node, ctx: TraversalContext) -> list[Violation]:
        if not isinstance(node, ArrowFunction) or not isinstance(node.body, Block):
            return []
        block = node.body
        if len(block.body) != 1:
            return []
        statement = block.body[0]
        if not isinstance(statement, ExpressionStatement) or statement.expression is None:
            return []

        edits = []
        if not block.has_comments:
            source = ctx.source
            expression = source.get_text(statement.expression)
            if (
                isinstance(statement.expression, OtherNode)
                and statement.expression.type_name == "sequence_expression"
            ):
                expression = f"({expression})"
            prefix = "async " if node.is_async else ""
            params = render_parameters(node, source)
            edits.append(Edit(node.start, node.end, f"{prefix}{params} => {expression}"))

        return [
            Violation(
                node=node,
                message=self.MESSAGE,
                edits=edits,
                remediation_hints=["Use an expression body instead of a block"],
            )
        ]
