"""
Read-only node and token model for one parsed TSX/JSX file.

Every node class declares exactly one NodeKind, so rules dispatch on a
closed set of kinds instead of comparing free-form type strings. Nodes
are frozen dataclasses owned by the SourceFile they were built for;
rules only hold transient references to them while a traversal runs.
"""

import bisect
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, ClassVar


class NodeKind(Enum):
    """Closed set of node kinds produced by the parser."""

    PROGRAM = "program"
    IMPORT_DECLARATION = "import_declaration"
    EXPORT_DECLARATION = "export_declaration"
    SPECIFIER = "specifier"
    JSX_ELEMENT = "jsx_element"
    JSX_ATTRIBUTE = "jsx_attribute"
    JSX_SPREAD_ATTRIBUTE = "jsx_spread_attribute"
    JSX_EXPRESSION_CONTAINER = "jsx_expression_container"
    JSX_TEXT = "jsx_text"
    LITERAL = "literal"
    TEMPLATE_LITERAL = "template_literal"
    TEMPLATE_ELEMENT = "template_element"
    ARROW_FUNCTION = "arrow_function"
    PARAMETER = "parameter"
    BLOCK = "block"
    EXPRESSION_STATEMENT = "expression_statement"
    VARIABLE_DECLARATOR = "variable_declarator"
    OTHER = "other"


class SpecifierKind(Enum):
    """Binding shape of an import or export specifier."""

    DEFAULT = "default"
    NAMESPACE = "namespace"
    NAMED = "named"


@dataclass(frozen=True)
class Span:
    """Location of a node or token.

    Lines are 1-based, columns are 0-based byte columns, and
    ``start``/``end`` form a half-open byte range into the UTF-8 source.
    """

    start_line: int
    start_column: int
    end_line: int
    end_column: int
    start: int
    end: int

    @property
    def is_multiline(self) -> bool:
        return self.end_line > self.start_line

    def to_dict(self) -> dict[str, int]:
        """Convert to dictionary for JSON serialization."""
        return {
            "start_line": self.start_line,
            "start_column": self.start_column,
            "end_line": self.end_line,
            "end_column": self.end_column,
            "start": self.start,
            "end": self.end,
        }


@dataclass(frozen=True)
class Token:
    """A lexical unit of the source (keyword, identifier, punctuation...)."""

    span: Span
    text: str
    type: str


@dataclass(frozen=True)
class Node:
    """Base class for all nodes."""

    kind: ClassVar[NodeKind] = NodeKind.OTHER

    span: Span

    def children(self) -> tuple["Node", ...]:
        """Child nodes in document order."""
        return ()

    @property
    def start(self) -> int:
        return self.span.start

    @property
    def end(self) -> int:
        return self.span.end

    @property
    def is_multiline(self) -> bool:
        return self.span.is_multiline


@dataclass(frozen=True)
class OtherNode(Node):
    """Any construct the rules do not inspect directly.

    Keeps its children so a traversal still reaches nested markup,
    arrow functions and declarations.
    """

    kind: ClassVar[NodeKind] = NodeKind.OTHER

    type_name: str = ""
    nodes: tuple[Node, ...] = ()

    def children(self) -> tuple[Node, ...]:
        return self.nodes


@dataclass(frozen=True)
class Program(Node):
    kind: ClassVar[NodeKind] = NodeKind.PROGRAM

    body: tuple[Node, ...] = ()

    def children(self) -> tuple[Node, ...]:
        return self.body


@dataclass(frozen=True)
class Literal(Node):
    """A string, number, boolean or null literal.

    ``raw`` is the exact source text, quotes included.
    """

    kind: ClassVar[NodeKind] = NodeKind.LITERAL

    value: Any = None
    raw: str = ""


@dataclass(frozen=True)
class Specifier(Node):
    """One imported or exported binding.

    ``imported`` is the name at the module side, ``local`` the name the
    binding is known by (equal to ``imported`` when there is no alias).
    For re-exports ``imported`` is the local name inside the source module
    and ``local`` the exported alias.
    """

    kind: ClassVar[NodeKind] = NodeKind.SPECIFIER

    specifier_kind: SpecifierKind = SpecifierKind.NAMED
    imported: str = ""
    local: str = ""
    type_only: bool = False

    @property
    def has_alias(self) -> bool:
        return self.imported != self.local


@dataclass(frozen=True)
class ImportDeclaration(Node):
    kind: ClassVar[NodeKind] = NodeKind.IMPORT_DECLARATION

    source: Literal | None = None
    specifiers: tuple[Specifier, ...] = ()
    type_only: bool = False

    def children(self) -> tuple[Node, ...]:
        nodes: tuple[Node, ...] = self.specifiers
        if self.source is not None:
            nodes = nodes + (self.source,)
        return nodes

    @property
    def module(self) -> str | None:
        return self.source.value if self.source is not None else None


@dataclass(frozen=True)
class ExportDeclaration(Node):
    """A named export list, ``export {a, b as c}`` with optional source."""

    kind: ClassVar[NodeKind] = NodeKind.EXPORT_DECLARATION

    source: Literal | None = None
    specifiers: tuple[Specifier, ...] = ()
    type_only: bool = False

    def children(self) -> tuple[Node, ...]:
        nodes: tuple[Node, ...] = self.specifiers
        if self.source is not None:
            nodes = nodes + (self.source,)
        return nodes

    @property
    def module(self) -> str | None:
        return self.source.value if self.source is not None else None

    @property
    def is_reexport(self) -> bool:
        return self.source is not None


@dataclass(frozen=True)
class JSXText(Node):
    kind: ClassVar[NodeKind] = NodeKind.JSX_TEXT

    value: str = ""

    @property
    def is_whitespace(self) -> bool:
        return self.value.strip() == ""


@dataclass(frozen=True)
class JSXExpressionContainer(Node):
    """``{expression}`` inside markup; ``expression`` is None for ``{}``."""

    kind: ClassVar[NodeKind] = NodeKind.JSX_EXPRESSION_CONTAINER

    expression: Node | None = None

    def children(self) -> tuple[Node, ...]:
        return (self.expression,) if self.expression is not None else ()

    @property
    def is_empty(self) -> bool:
        return self.expression is None


@dataclass(frozen=True)
class JSXAttribute(Node):
    kind: ClassVar[NodeKind] = NodeKind.JSX_ATTRIBUTE

    name: str = ""
    name_span: Span | None = None
    value: Node | None = None

    def children(self) -> tuple[Node, ...]:
        return (self.value,) if self.value is not None else ()


@dataclass(frozen=True)
class JSXSpreadAttribute(Node):
    kind: ClassVar[NodeKind] = NodeKind.JSX_SPREAD_ATTRIBUTE

    argument: Node | None = None

    def children(self) -> tuple[Node, ...]:
        return (self.argument,) if self.argument is not None else ()


@dataclass(frozen=True)
class JSXElement(Node):
    """A markup element, self-closing element or fragment.

    ``name`` is the tag name as written (``div``, ``Card.Header``) and is
    empty for fragments. ``closing_name_span`` is None for self-closing
    elements and fragments.
    """

    kind: ClassVar[NodeKind] = NodeKind.JSX_ELEMENT

    name: str = ""
    name_span: Span | None = None
    opening_span: Span | None = None
    closing_name_span: Span | None = None
    attributes: tuple[Node, ...] = ()
    body: tuple[Node, ...] = ()
    self_closing: bool = False

    def children(self) -> tuple[Node, ...]:
        return self.attributes + self.body

    @property
    def is_fragment(self) -> bool:
        return self.name == ""

    def get_attribute(self, name: str) -> JSXAttribute | None:
        for attribute in self.attributes:
            if isinstance(attribute, JSXAttribute) and attribute.name == name:
                return attribute
        return None

    def significant_children(self) -> list[Node]:
        """Children without whitespace-only text and empty ``{}`` placeholders."""
        result = []
        for child in self.body:
            if isinstance(child, JSXText) and child.is_whitespace:
                continue
            if isinstance(child, JSXExpressionContainer) and child.is_empty:
                continue
            result.append(child)
        return result


@dataclass(frozen=True)
class TemplateElement(Node):
    """A literal chunk of a template string, ``raw`` as written in source."""

    kind: ClassVar[NodeKind] = NodeKind.TEMPLATE_ELEMENT

    raw: str = ""


@dataclass(frozen=True)
class TemplateLiteral(Node):
    """A template string.

    ``quasis`` always holds one more chunk than ``expressions``; chunk i
    precedes expression i in the source. Chunks may be empty.
    """

    kind: ClassVar[NodeKind] = NodeKind.TEMPLATE_LITERAL

    quasis: tuple[TemplateElement, ...] = ()
    expressions: tuple[Node, ...] = ()

    def children(self) -> tuple[Node, ...]:
        return tuple(
            sorted(self.quasis + self.expressions, key=lambda node: node.start)
        )


@dataclass(frozen=True)
class Parameter(Node):
    """A formal parameter of a function.

    ``is_identifier`` is True only for a plain name with no type
    annotation, default value, optional marker or modifier.
    """

    kind: ClassVar[NodeKind] = NodeKind.PARAMETER

    name: str = ""
    type_annotated: bool = False
    is_identifier: bool = False
    default: Node | None = None

    def children(self) -> tuple[Node, ...]:
        return (self.default,) if self.default is not None else ()


@dataclass(frozen=True)
class Block(Node):
    kind: ClassVar[NodeKind] = NodeKind.BLOCK

    body: tuple[Node, ...] = ()
    has_comments: bool = False

    def children(self) -> tuple[Node, ...]:
        return self.body


@dataclass(frozen=True)
class ExpressionStatement(Node):
    kind: ClassVar[NodeKind] = NodeKind.EXPRESSION_STATEMENT

    expression: Node | None = None

    def children(self) -> tuple[Node, ...]:
        return (self.expression,) if self.expression is not None else ()


@dataclass(frozen=True)
class ArrowFunction(Node):
    kind: ClassVar[NodeKind] = NodeKind.ARROW_FUNCTION

    params: tuple[Parameter, ...] = ()
    body: Node | None = None
    is_async: bool = False
    type_parameters: str | None = None
    return_type: str | None = None

    def children(self) -> tuple[Node, ...]:
        nodes: tuple[Node, ...] = self.params
        if self.body is not None:
            nodes = nodes + (self.body,)
        return nodes


@dataclass(frozen=True)
class VariableDeclarator(Node):
    kind: ClassVar[NodeKind] = NodeKind.VARIABLE_DECLARATOR

    name: str = ""
    name_span: Span | None = None
    type_annotated: bool = False
    init: Node | None = None

    def children(self) -> tuple[Node, ...]:
        return (self.init,) if self.init is not None else ()


def iter_preorder(node: Node) -> Iterator[Node]:
    """Yield ``node`` and all of its descendants, pre-order depth-first."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children()))


@dataclass
class SourceFile:
    """One parsed file: text, bytes, token stream and node tree.

    All offsets in spans and edits are byte offsets into ``data``.
    """

    path: Path
    text: str
    program: Program
    tokens: list[Token] = field(default_factory=list)
    language: str = "tsx"
    has_errors: bool = False
    data: bytes = field(default=b"", repr=False)
    _token_starts: list[int] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        if not self.data:
            self.data = self.text.encode("utf-8")
        self._token_starts = [token.span.start for token in self.tokens]

    def slice(self, start: int, end: int) -> str:
        """Source text of the half-open byte range ``[start, end)``."""
        return self.data[start:end].decode("utf-8")

    def get_text(self, node: Node | Span) -> str:
        """Exact source text of a node or span."""
        span = node if isinstance(node, Span) else node.span
        return self.slice(span.start, span.end)

    def first_token(self, node: Node) -> Token | None:
        """First token inside the node's span."""
        index = bisect.bisect_left(self._token_starts, node.start)
        if index < len(self.tokens) and self.tokens[index].span.end <= node.end:
            return self.tokens[index]
        return None

    def last_token(self, node: Node) -> Token | None:
        """Last token inside the node's span."""
        index = bisect.bisect_left(self._token_starts, node.end) - 1
        if index >= 0 and self.tokens[index].span.start >= node.start:
            return self.tokens[index]
        return None

    @property
    def newline(self) -> str:
        """Line ending used by the file, for text that inserts line breaks."""
        return "\r\n" if "\r\n" in self.text else "\n"

    @property
    def is_test_file(self) -> bool:
        name = str(self.path)
        return ".test." in name or ".spec." in name or "__tests__" in name
