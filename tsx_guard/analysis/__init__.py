"""Parsing TSX/JSX sources into the immutable node and token model."""

from .nodes import NodeKind, SourceFile, Span, SpecifierKind, Token
from .tsx_parser import TsxParser, get_default_parser

__all__ = [
    "NodeKind",
    "SourceFile",
    "Span",
    "SpecifierKind",
    "Token",
    "TsxParser",
    "get_default_parser",
]
