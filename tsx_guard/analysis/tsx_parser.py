"""
TSX/JSX parser that turns tree-sitter parse trees into the node model.

The converter only gives dedicated node classes to the constructs the
rules inspect (imports, re-exports, markup, literals, template strings,
arrow functions, declarators). Everything else becomes an OtherNode
that keeps its children, so nested markup is still reachable.
"""

import bisect
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

from tree_sitter import Node as TSNode

from .base_parsers import TreeSitterParser
from .nodes import (
    ArrowFunction,
    Block,
    ExportDeclaration,
    ExpressionStatement,
    ImportDeclaration,
    JSXAttribute,
    JSXElement,
    JSXExpressionContainer,
    JSXSpreadAttribute,
    JSXText,
    Literal,
    Node,
    OtherNode,
    Parameter,
    Program,
    SourceFile,
    Span,
    Specifier,
    SpecifierKind,
    TemplateElement,
    TemplateLiteral,
    Token,
    VariableDeclarator,
)

logger = logging.getLogger(__name__)

_PARAMETER_TYPES = {
    "identifier",
    "required_parameter",
    "optional_parameter",
    "assignment_pattern",
    "rest_pattern",
    "object_pattern",
    "array_pattern",
}


class _ModelBuilder:
    """Converts one tree-sitter tree into model nodes and tokens."""

    def __init__(self, data: bytes):
        self.data = data
        self._line_starts = [0]
        for index, byte in enumerate(data):
            if byte == 0x0A:
                self._line_starts.append(index + 1)
        self._builders = {
            "program": self._build_program,
            "import_statement": self._build_import,
            "export_statement": self._build_export,
            "jsx_element": self._build_element,
            "jsx_self_closing_element": self._build_self_closing_element,
            "jsx_fragment": self._build_fragment,
            "jsx_expression": self._build_expression_container,
            "jsx_text": self._build_text,
            "html_character_reference": self._build_text,
            "string": self._build_string,
            "number": self._build_number,
            "true": self._build_keyword_literal,
            "false": self._build_keyword_literal,
            "null": self._build_keyword_literal,
            "template_string": self._build_template,
            "arrow_function": self._build_arrow_function,
            "statement_block": self._build_block,
            "expression_statement": self._build_expression_statement,
            "variable_declarator": self._build_variable_declarator,
        }

    # Positions

    def text(self, node: TSNode) -> str:
        return self.data[node.start_byte : node.end_byte].decode("utf-8")

    def span(self, node: TSNode) -> Span:
        return Span(
            start_line=node.start_point[0] + 1,
            start_column=node.start_point[1],
            end_line=node.end_point[0] + 1,
            end_column=node.end_point[1],
            start=node.start_byte,
            end=node.end_byte,
        )

    def span_from_bytes(self, start: int, end: int) -> Span:
        start_row = bisect.bisect_right(self._line_starts, start) - 1
        end_row = bisect.bisect_right(self._line_starts, end) - 1
        return Span(
            start_line=start_row + 1,
            start_column=start - self._line_starts[start_row],
            end_line=end_row + 1,
            end_column=end - self._line_starts[end_row],
            start=start,
            end=end,
        )

    # Generic conversion

    def build(self, node: TSNode) -> Node:
        builder = self._builders.get(node.type)
        if builder is not None:
            result = builder(node)
            if result is not None:
                return result
        return self._build_other(node)

    def _build_other(self, node: TSNode) -> OtherNode:
        return OtherNode(
            span=self.span(node),
            type_name=node.type,
            nodes=tuple(self.build(child) for child in _named(node)),
        )

    def tokens(self, root: TSNode) -> list[Token]:
        tokens = []
        stack = [root]
        while stack:
            node = stack.pop()
            if node.type == "comment":
                continue
            if node.child_count == 0:
                if node.end_byte > node.start_byte:
                    tokens.append(Token(self.span(node), self.text(node), node.type))
                continue
            stack.extend(reversed(node.children))
        return tokens

    # Module structure

    def _build_program(self, node: TSNode) -> Program:
        return Program(
            span=self.span(node),
            body=tuple(self.build(child) for child in _named(node)),
        )

    def _build_source(self, node: TSNode | None) -> Literal | None:
        if node is None or node.type != "string":
            return None
        raw = self.text(node)
        return Literal(span=self.span(node), value=raw[1:-1], raw=raw)

    def _build_import(self, node: TSNode) -> ImportDeclaration | None:
        source = self._build_source(node.child_by_field_name("source"))
        if source is None:
            # import x = require("y") and friends
            return None

        specifiers: list[Specifier] = []
        clause = _first_of_type(node, "import_clause")
        if clause is not None:
            for child in _named(clause):
                if child.type == "identifier":
                    name = self.text(child)
                    specifiers.append(
                        Specifier(
                            span=self.span(child),
                            specifier_kind=SpecifierKind.DEFAULT,
                            imported="default",
                            local=name,
                        )
                    )
                elif child.type == "namespace_import":
                    identifier = _first_of_type(child, "identifier")
                    if identifier is None:
                        return None
                    specifiers.append(
                        Specifier(
                            span=self.span(child),
                            specifier_kind=SpecifierKind.NAMESPACE,
                            imported="*",
                            local=self.text(identifier),
                        )
                    )
                elif child.type == "named_imports":
                    for spec in _named(child):
                        if spec.type != "import_specifier":
                            continue
                        built = self._build_specifier(spec)
                        if built is None:
                            return None
                        specifiers.append(built)

        return ImportDeclaration(
            span=self.span(node),
            source=source,
            specifiers=tuple(specifiers),
            type_only=_has_keyword(node, "type"),
        )

    def _build_specifier(self, node: TSNode) -> Specifier | None:
        name_node = node.child_by_field_name("name")
        if name_node is None:
            return None
        alias_node = node.child_by_field_name("alias")
        imported = self.text(name_node)
        local = self.text(alias_node) if alias_node is not None else imported
        return Specifier(
            span=self.span(node),
            specifier_kind=SpecifierKind.NAMED,
            imported=imported,
            local=local,
            type_only=_has_keyword(node, "type"),
        )

    def _build_export(self, node: TSNode) -> ExportDeclaration | None:
        clause = _first_of_type(node, "export_clause")
        if clause is None:
            # export default ..., export const ..., export * from ...
            return None

        specifiers = []
        for spec in _named(clause):
            if spec.type != "export_specifier":
                continue
            built = self._build_specifier(spec)
            if built is None:
                return None
            specifiers.append(built)

        return ExportDeclaration(
            span=self.span(node),
            source=self._build_source(node.child_by_field_name("source")),
            specifiers=tuple(specifiers),
            type_only=_has_keyword(node, "type"),
        )

    # Markup

    def _element_name(self, tag: TSNode | None) -> tuple[str, Span | None]:
        if tag is None:
            return "", None
        name_node = tag.child_by_field_name("name")
        if name_node is None:
            return "", None
        return self.text(name_node), self.span(name_node)

    def _attributes(self, tag: TSNode | None) -> tuple[Node, ...]:
        if tag is None:
            return ()
        attributes: list[Node] = []
        for child in _named(tag):
            if child.type == "jsx_attribute":
                attributes.append(self._build_attribute(child))
            elif child.type == "jsx_expression":
                inner = _named(child)
                argument = None
                if inner and inner[0].type == "spread_element":
                    argument = self.build(inner[0])
                attributes.append(
                    JSXSpreadAttribute(span=self.span(child), argument=argument)
                )
        return tuple(attributes)

    def _build_attribute(self, node: TSNode) -> JSXAttribute:
        parts = _named(node)
        name_node = parts[0] if parts else None
        value: Node | None = None
        if len(parts) > 1:
            value_node = parts[1]
            if value_node.type == "string":
                raw = self.text(value_node)
                value = Literal(span=self.span(value_node), value=raw[1:-1], raw=raw)
            else:
                value = self.build(value_node)
        return JSXAttribute(
            span=self.span(node),
            name=self.text(name_node) if name_node is not None else "",
            name_span=self.span(name_node) if name_node is not None else None,
            value=value,
        )

    def _build_element(self, node: TSNode) -> JSXElement:
        opening = node.child_by_field_name("open_tag") or _first_of_type(
            node, "jsx_opening_element"
        )
        closing = node.child_by_field_name("close_tag") or _last_of_type(
            node, "jsx_closing_element"
        )
        name, name_span = self._element_name(opening)
        _, closing_name_span = self._element_name(closing)
        body = tuple(
            self.build(child)
            for child in _named(node)
            if child.type not in ("jsx_opening_element", "jsx_closing_element")
        )
        return JSXElement(
            span=self.span(node),
            name=name,
            name_span=name_span,
            opening_span=self.span(opening) if opening is not None else None,
            closing_name_span=closing_name_span,
            attributes=self._attributes(opening),
            body=body,
        )

    def _build_self_closing_element(self, node: TSNode) -> JSXElement:
        name, name_span = self._element_name(node)
        return JSXElement(
            span=self.span(node),
            name=name,
            name_span=name_span,
            opening_span=self.span(node),
            attributes=self._attributes(node),
            self_closing=True,
        )

    def _build_fragment(self, node: TSNode) -> JSXElement:
        return JSXElement(
            span=self.span(node),
            body=tuple(self.build(child) for child in _named(node)),
        )

    def _build_expression_container(self, node: TSNode) -> JSXExpressionContainer:
        inner = _named(node)
        return JSXExpressionContainer(
            span=self.span(node),
            expression=self.build(inner[0]) if inner else None,
        )

    def _build_text(self, node: TSNode) -> JSXText:
        return JSXText(span=self.span(node), value=self.text(node))

    # Literals

    def _build_string(self, node: TSNode) -> Literal | None:
        raw = self.text(node)
        inner = raw[1:-1]
        if "\\" in inner:
            # Escapes would need a full unescape to compare values
            return None
        return Literal(span=self.span(node), value=inner, raw=raw)

    def _build_number(self, node: TSNode) -> Literal | None:
        raw = self.text(node)
        value: int | float
        try:
            value = int(raw, 0)
        except ValueError:
            try:
                value = float(raw.replace("_", ""))
            except ValueError:
                return None
        return Literal(span=self.span(node), value=value, raw=raw)

    def _build_keyword_literal(self, node: TSNode) -> Literal:
        values = {"true": True, "false": False, "null": None}
        return Literal(span=self.span(node), value=values[node.type], raw=node.type)

    def _build_template(self, node: TSNode) -> TemplateLiteral:
        quasis = []
        expressions: list[Node] = []
        cursor = node.start_byte + 1
        for child in node.named_children:
            if child.type != "template_substitution":
                continue
            quasis.append(self._template_element(cursor, child.start_byte))
            inner = _named(child)
            if inner:
                expressions.append(self.build(inner[0]))
            else:
                expressions.append(
                    OtherNode(
                        span=self.span_from_bytes(
                            child.start_byte + 2, child.end_byte - 1
                        ),
                        type_name="empty",
                    )
                )
            cursor = child.end_byte
        quasis.append(self._template_element(cursor, node.end_byte - 1))
        return TemplateLiteral(
            span=self.span(node),
            quasis=tuple(quasis),
            expressions=tuple(expressions),
        )

    def _template_element(self, start: int, end: int) -> TemplateElement:
        return TemplateElement(
            span=self.span_from_bytes(start, end),
            raw=self.data[start:end].decode("utf-8"),
        )

    # Functions and statements

    def _build_parameter(self, node: TSNode) -> Parameter:
        if node.type == "identifier":
            return Parameter(
                span=self.span(node), name=self.text(node), is_identifier=True
            )

        type_node = node.child_by_field_name("type")
        value_node = node.child_by_field_name("value") or node.child_by_field_name(
            "right"
        )
        parts = _named(node)
        is_identifier = (
            node.type == "required_parameter"
            and len(parts) == 1
            and parts[0].type == "identifier"
        )
        return Parameter(
            span=self.span(node),
            name=self.text(node),
            type_annotated=type_node is not None,
            is_identifier=is_identifier,
            default=self.build(value_node) if value_node is not None else None,
        )

    def _build_arrow_function(self, node: TSNode) -> ArrowFunction:
        params: list[Parameter] = []
        single = node.child_by_field_name("parameter")
        if single is not None:
            params.append(self._build_parameter(single))
        else:
            formal = node.child_by_field_name("parameters")
            if formal is not None:
                params.extend(
                    self._build_parameter(child)
                    for child in _named(formal)
                    if child.type in _PARAMETER_TYPES
                )

        body_node = node.child_by_field_name("body")
        type_parameters = node.child_by_field_name("type_parameters")
        return_type = node.child_by_field_name("return_type")
        return ArrowFunction(
            span=self.span(node),
            params=tuple(params),
            body=self.build(body_node) if body_node is not None else None,
            is_async=_has_keyword(node, "async"),
            type_parameters=(
                self.text(type_parameters) if type_parameters is not None else None
            ),
            return_type=self.text(return_type) if return_type is not None else None,
        )

    def _build_block(self, node: TSNode) -> Block:
        return Block(
            span=self.span(node),
            body=tuple(self.build(child) for child in _named(node)),
            has_comments=any(child.type == "comment" for child in node.children),
        )

    def _build_expression_statement(self, node: TSNode) -> ExpressionStatement:
        inner = _named(node)
        return ExpressionStatement(
            span=self.span(node),
            expression=self.build(inner[0]) if inner else None,
        )

    def _build_variable_declarator(self, node: TSNode) -> VariableDeclarator | None:
        name_node = node.child_by_field_name("name")
        if name_node is None:
            return None
        value_node = node.child_by_field_name("value")
        return VariableDeclarator(
            span=self.span(node),
            name=self.text(name_node),
            name_span=self.span(name_node),
            type_annotated=node.child_by_field_name("type") is not None,
            init=self.build(value_node) if value_node is not None else None,
        )


def _named(node: TSNode) -> list[TSNode]:
    """Named children without comments."""
    return [child for child in node.named_children if child.type != "comment"]


def _first_of_type(node: TSNode, type_name: str) -> TSNode | None:
    for child in node.children:
        if child.type == type_name:
            return child
    return None


def _last_of_type(node: TSNode, type_name: str) -> TSNode | None:
    for child in reversed(node.children):
        if child.type == type_name:
            return child
    return None


def _has_keyword(node: TSNode, keyword: str) -> bool:
    """Whether an anonymous keyword token is a direct child of ``node``."""
    return any(
        not child.is_named and child.type == keyword for child in node.children
    )


class TsxParser(TreeSitterParser):
    """Parse JS/TS/TSX files with tree-sitter into SourceFile models."""

    SUPPORTED_EXTENSIONS = [".tsx", ".jsx", ".ts", ".js", ".mjs", ".cjs"]

    LANGUAGE_BY_EXTENSION = {
        ".tsx": "tsx",
        ".ts": "typescript",
        ".jsx": "javascript",
        ".js": "javascript",
        ".mjs": "javascript",
        ".cjs": "javascript",
    }

    def __init__(self, config: dict[str, Any] | None = None):
        import tree_sitter_javascript as tsjs
        import tree_sitter_typescript as tsts

        super().__init__(tsts.language_tsx(), config)
        self._parsers = {
            "tsx": self.parser,
            "typescript": TreeSitterParser(tsts.language_typescript()).parser,
            "javascript": TreeSitterParser(tsjs).parser,
        }

    def language_for(self, file_path: Path) -> str:
        return self.LANGUAGE_BY_EXTENSION.get(file_path.suffix.lower(), "tsx")

    def parse_source(
        self,
        content: str,
        file_path: Path | None = None,
        language: str | None = None,
    ) -> SourceFile:
        """Parse source text into a SourceFile.

        The grammar is chosen by ``language`` when given, otherwise by the
        file extension. Syntax errors never raise: erroneous regions become
        OtherNode subtrees and ``has_errors`` is set on the result.
        """
        file_path = file_path or Path("<input>.tsx")
        language = language or self.language_for(file_path)
        if language not in self._parsers:
            raise ValueError(f"Unsupported language: {language}")
        data = content.encode("utf-8")
        tree = self._parsers[language].parse(data)

        builder = _ModelBuilder(data)
        program = builder.build(tree.root_node)
        if not isinstance(program, Program):
            program = Program(span=program.span, body=program.children())

        has_errors = self._has_syntax_errors(tree)
        if has_errors:
            logger.debug(f"Syntax errors detected in {file_path}")

        return SourceFile(
            path=file_path,
            text=content,
            program=program,
            tokens=builder.tokens(tree.root_node),
            language=language,
            has_errors=has_errors,
            data=data,
        )

    def parse_file(self, file_path: Path) -> SourceFile:
        """Read and parse a file from disk."""
        with open(file_path, encoding="utf-8", newline="") as f:
            content = f.read()
        return self.parse_source(content, file_path)


@lru_cache(maxsize=1)
def get_default_parser() -> TsxParser:
    """Shared parser instance; grammar loading is done once per process."""
    return TsxParser()
