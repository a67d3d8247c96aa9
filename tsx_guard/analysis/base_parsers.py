from pathlib import Path
from typing import Any

from tree_sitter import Language, Parser, Tree


class TreeSitterParser:
    """Base class for all tree-sitter based parsers with common functionality."""

    # Child classes must define this
    SUPPORTED_EXTENSIONS: list[str] = []

    def __init__(self, language: Any, config: dict[str, Any] | None = None):
        self.config = config or {}
        if hasattr(language, "language"):
            # For tree-sitter packages that expose language as a function
            self.parser = Parser(Language(language.language()))
        else:
            # For language capsules (tree_sitter_typescript.language_tsx())
            self.parser = Parser(Language(language))

    def can_parse(self, file_path: Path) -> bool:
        """Check if this parser can handle the file."""
        return file_path.suffix.lower() in self.SUPPORTED_EXTENSIONS

    def _has_syntax_errors(self, tree: Tree) -> bool:
        """Check if the parse tree contains syntax errors."""
        return tree.root_node.has_error
