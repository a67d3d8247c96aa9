"""
Type/value import consolidation.

``import type {User} from "./api"`` next to ``import {createUser} from "./api"``
becomes ``import {createUser, type User} from "./api";`` using inline
type specifiers.
"""

from ...analysis.nodes import ImportDeclaration, Node
from .consolidation import ConsolidationRule, ImportGroup, MergedBindings, render_import


class ConsolidateTypeImportsRule(ConsolidationRule):
    """Merge separate type-only and value imports of the same module."""

    @property
    def rule_id(self) -> str:
        return "IMPORTS.CONSOLIDATE_TYPE_IMPORTS"

    @property
    def name(self) -> str:
        return "Consolidate Type Imports"

    @property
    def description(self) -> str:
        return (
            "Consolidates separate 'import type' and value imports from the "
            "same module into one declaration with inline type specifiers."
        )

    @property
    def message(self) -> str:
        return "Consolidate separate imports from the same module into a single import"

    @property
    def supported_languages(self) -> list[str] | None:
        return ["tsx", "typescript"]

    def collects(self, node: Node) -> bool:
        return isinstance(node, ImportDeclaration)

    def reports(self, group: ImportGroup) -> bool:
        return group.mixes_type_and_value

    def render(self, group: ImportGroup, merged: MergedBindings) -> str:
        return render_import(group, merged)
