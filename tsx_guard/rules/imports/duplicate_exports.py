"""
Duplicate re-export detection.

``export {a} from "./m"; export {b} from "./m";`` becomes
``export {a, b} from "./m";``. Local export lists without a source and
``export * from`` declarations are not grouped.
"""

from ...analysis.nodes import ExportDeclaration, Node
from .consolidation import ConsolidationRule, ImportGroup, MergedBindings, render_export


class DuplicateExportsRule(ConsolidationRule):
    """Detect multiple re-export declarations from the same module."""

    @property
    def rule_id(self) -> str:
        return "IMPORTS.DUPLICATE_EXPORTS"

    @property
    def name(self) -> str:
        return "Duplicate Module Exports"

    @property
    def description(self) -> str:
        return "Prevents multiple re-export declarations from the same module."

    @property
    def message(self) -> str:
        return "Multiple exports from the same module should be combined"

    def collects(self, node: Node) -> bool:
        return isinstance(node, ExportDeclaration) and node.is_reexport

    def render(self, group: ImportGroup, merged: MergedBindings) -> str:
        return render_export(group, merged)
