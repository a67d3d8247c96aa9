"""
Duplicate import detection.

Several import declarations naming the same module are merged into one.
Groups that mix ``import type`` with value imports are left to
IMPORTS.CONSOLIDATE_TYPE_IMPORTS so each group is reported once.
"""

from ...analysis.nodes import ImportDeclaration, Node
from .consolidation import ConsolidationRule, ImportGroup, MergedBindings, render_import


class DuplicateImportsRule(ConsolidationRule):
    """Detect multiple import declarations from the same module."""

    @property
    def rule_id(self) -> str:
        return "IMPORTS.DUPLICATE_IMPORTS"

    @property
    def name(self) -> str:
        return "Duplicate Imports"

    @property
    def description(self) -> str:
        return "Prevents multiple import declarations from the same module."

    @property
    def message(self) -> str:
        return "Multiple imports from the same module should be combined"

    def collects(self, node: Node) -> bool:
        return isinstance(node, ImportDeclaration)

    def reports(self, group: ImportGroup) -> bool:
        return not group.mixes_type_and_value

    def render(self, group: ImportGroup, merged: MergedBindings) -> str:
        return render_import(group, merged)
