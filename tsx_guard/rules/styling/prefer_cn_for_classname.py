"""
Dynamic class expression normalisation.

Template strings with substitutions in ``className`` are rewritten to
calls of the class-merging helper: ``className={`btn ${size}`}`` becomes
``className={cn("btn ", size)}``. The helper import is added when the
file does not bind the helper name yet.
"""

from typing import Any

from ...analysis.nodes import (
    ExpressionStatement,
    ImportDeclaration,
    JSXAttribute,
    JSXExpressionContainer,
    Literal,
    Node,
    NodeKind,
    Program,
    TemplateLiteral,
)
from ..base import BaseRule, Severity, TraversalContext, Violation
from ..fix import Edit


def quote_chunk(raw: str) -> str:
    """Double-quote a raw template chunk.

    Escape sequences are copied as written; bare double quotes and line
    breaks are escaped so the result is a valid string literal.
    """
    out = []
    i = 0
    while i < len(raw):
        ch = raw[i]
        if ch == "\\" and i + 1 < len(raw):
            out.append(raw[i : i + 2])
            i += 2
            continue
        if ch == '"':
            out.append('\\"')
        elif ch == "\n":
            out.append("\\n")
        elif ch == "\r":
            out.append("\\r")
        else:
            out.append(ch)
        i += 1
    return '"' + "".join(out) + '"'


def helper_arguments(template: TemplateLiteral, ctx: TraversalContext) -> list[str]:
    """Interleaved literal chunks and substitution source texts."""
    arguments = []
    for index, quasi in enumerate(template.quasis):
        if quasi.raw:
            arguments.append(quote_chunk(quasi.raw))
        if index < len(template.expressions):
            arguments.append(ctx.source.get_text(template.expressions[index]))
    return arguments


def is_directive(node: Node) -> bool:
    return (
        isinstance(node, ExpressionStatement)
        and isinstance(node.expression, Literal)
        and isinstance(node.expression.value, str)
    )


class PreferCnForClassnameRule(BaseRule):
    """Prefer the cn() helper over template strings in className."""

    @property
    def rule_id(self) -> str:
        return "STYLING.PREFER_CN_FOR_CLASSNAME"

    @property
    def name(self) -> str:
        return "Prefer cn() for className"

    @property
    def category(self) -> str:
        return "styling"

    @property
    def default_severity(self) -> Severity:
        return Severity.LOW

    @property
    def description(self) -> str:
        return (
            "Rewrites className template strings with substitutions into "
            "calls of the class-merging helper and adds its import."
        )

    @property
    def default_parameters(self) -> dict[str, Any]:
        return {
            "attributes": ["className"],
            "helper": "cn",
            "module": "@/lib/utils",
        }

    def can_auto_fix(self) -> bool:
        return True

    def listeners(self):
        return {NodeKind.JSX_ATTRIBUTE: self._check_attribute}

    def _check_attribute(self, node: Node, ctx: TraversalContext) -> list[Violation]:
        if not isinstance(node, JSXAttribute) or node.name not in ctx.options["attributes"]:
            return []
        container = node.value
        if not isinstance(container, JSXExpressionContainer):
            return []
        template = container.expression
        if not isinstance(template, TemplateLiteral) or not template.expressions:
            return []

        helper = ctx.options["helper"]
        call = f"{helper}({', '.join(helper_arguments(template, ctx))})"
        edits = [Edit(container.start, container.end, "{" + call + "}")]

        import_edit = self._import_edit(ctx)
        if import_edit is not None:
            edits.insert(0, import_edit)

        return [
            Violation(
                node=node,
                message=(
                    f"Use {helper}() utility for dynamic {node.name} instead of "
                    "template literals"
                ),
                edits=edits,
                remediation_hints=[f"Replace with {{{call}}}"],
                data={"helper": helper},
            )
        ]

    def _binds_helper(self, program: Program, helper: str) -> bool:
        for statement in program.body:
            if isinstance(statement, ImportDeclaration) and any(
                specifier.local == helper for specifier in statement.specifiers
            ):
                return True
        return False

    def _import_edit(self, ctx: TraversalContext) -> Edit | None:
        """Insertion of the helper import, or None when it is already bound."""
        if ctx.state is None:
            program = ctx.source.program
            ctx.state = {"has_helper": self._binds_helper(program, ctx.options["helper"])}
        if ctx.state["has_helper"]:
            return None

        statement = f"import {{{ctx.options['helper']}}} from '{ctx.options['module']}';"
        body = ctx.source.program.body
        imports = [s for s in body if isinstance(s, ImportDeclaration)]
        if imports:
            anchor = imports[-1].end
            return Edit(anchor, anchor, ctx.source.newline + statement)

        index = 0
        while index < len(body) and is_directive(body[index]):
            index += 1
        if index == len(body):
            return None
        anchor = body[index].start
        return Edit(anchor, anchor, statement + ctx.source.newline * 2)
