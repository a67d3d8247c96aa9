"""
Import/export consolidation engine.

Declarations that name the same module are collected per file into
ImportGroups, keyed by the exact module string. At the end of the
traversal each group with more than one declaration is classified into
binding buckets, de-duplicated, sorted and rendered back into a single
declaration that replaces the first one; the later declarations are
deleted.

Bindings are ordered value before type-only, then by source name, then
by alias. The rendered module reference is the first declaration's
source text, quotes included.
"""

from abc import abstractmethod
from dataclasses import dataclass, field
from enum import Enum

from ...analysis.nodes import (
    ExportDeclaration,
    ImportDeclaration,
    Node,
    NodeKind,
    Program,
    SpecifierKind,
)
from ..base import BaseRule, Severity, TraversalContext, Violation
from ..fix import Edit

Declaration = ImportDeclaration | ExportDeclaration


class Bucket(Enum):
    """Binding classes a merged declaration is assembled from."""

    DEFAULT = "default"
    NAMESPACE = "namespace"
    NAMED = "named"
    TYPE = "type"


@dataclass(frozen=True)
class Binding:
    bucket: Bucket
    imported: str
    local: str

    def render(self) -> str:
        if self.bucket == Bucket.DEFAULT:
            return self.local
        if self.bucket == Bucket.NAMESPACE:
            return f"* as {self.local}"
        text = self.imported if self.imported == self.local else f"{self.imported} as {self.local}"
        return f"type {text}" if self.bucket == Bucket.TYPE else text

    @property
    def sort_key(self) -> tuple[bool, str, str]:
        return (self.bucket == Bucket.TYPE, self.imported, self.local)


@dataclass
class ImportGroup:
    """All top-level declarations of one file that name the same module."""

    module: str
    declarations: list[Declaration] = field(default_factory=list)

    @property
    def is_duplicate(self) -> bool:
        return len(self.declarations) > 1

    @property
    def mixes_type_and_value(self) -> bool:
        kinds = {declaration.type_only for declaration in self.declarations}
        return kinds == {True, False}

    @property
    def first(self) -> Declaration:
        return self.declarations[0]


@dataclass
class MergedBindings:
    """Classified, de-duplicated bindings of a group."""

    default: Binding | None = None
    namespace: Binding | None = None
    named: list[Binding] = field(default_factory=list)
    unsafe_reason: str | None = None

    @property
    def is_safe(self) -> bool:
        return self.unsafe_reason is None


def classify(group: ImportGroup) -> MergedBindings:
    """Sort every specifier of the group into its bucket.

    Identical bindings collapse; only the first default and the first
    namespace binding are kept. Re-exports only ever produce named and
    type bindings.

    A name bound both as a value and as a type-only name makes the
    group unsafe, since one declaration cannot bind it twice.
    """
    merged = MergedBindings()
    seen: set[Binding] = set()

    for declaration in group.declarations:
        reexport = isinstance(declaration, ExportDeclaration)
        for specifier in declaration.specifiers:
            if not reexport and specifier.specifier_kind == SpecifierKind.DEFAULT:
                bucket = Bucket.DEFAULT
            elif not reexport and specifier.specifier_kind == SpecifierKind.NAMESPACE:
                bucket = Bucket.NAMESPACE
            elif declaration.type_only or specifier.type_only:
                bucket = Bucket.TYPE
            else:
                bucket = Bucket.NAMED

            if declaration.type_only and bucket in (Bucket.DEFAULT, Bucket.NAMESPACE):
                merged.unsafe_reason = (
                    f"type-only {bucket.value} import '{specifier.local}' "
                    "cannot be merged inline"
                )

            binding = Binding(bucket, specifier.imported, specifier.local)
            if binding in seen:
                continue
            seen.add(binding)

            if bucket == Bucket.DEFAULT:
                if merged.default is None:
                    merged.default = binding
            elif bucket == Bucket.NAMESPACE:
                if merged.namespace is None:
                    merged.namespace = binding
            else:
                merged.named.append(binding)

    merged.named.sort(key=lambda binding: binding.sort_key)

    if merged.unsafe_reason is None and merged.namespace and merged.named:
        merged.unsafe_reason = (
            f"namespace import '{merged.namespace.local}' cannot share a "
            "declaration with named imports"
        )

    if merged.unsafe_reason is None:
        value_names = {b.local for b in merged.named if b.bucket == Bucket.NAMED}
        if merged.default is not None:
            value_names.add(merged.default.local)
        type_names = {b.local for b in merged.named if b.bucket == Bucket.TYPE}
        both = sorted(value_names & type_names)
        if both:
            merged.unsafe_reason = f"'{both[0]}' is bound both as a value and as a type"
    return merged


def module_text(group: ImportGroup) -> str:
    source = group.first.source
    return source.raw if source is not None else f'"{group.module}"'


def render_import(group: ImportGroup, merged: MergedBindings) -> str:
    """``import Default, * as ns, {a, b as c, type T} from "m";``"""
    parts = []
    if merged.default is not None:
        parts.append(merged.default.render())
    if merged.namespace is not None:
        parts.append(merged.namespace.render())
    if merged.named:
        parts.append("{" + ", ".join(b.render() for b in merged.named) + "}")

    if not parts:
        return f"import {module_text(group)};"
    return f"import {', '.join(parts)} from {module_text(group)};"


def render_export(group: ImportGroup, merged: MergedBindings) -> str:
    """``export {a, b as c, type T} from "m";``"""
    names = ", ".join(b.render() for b in merged.named)
    return f"export {{{names}}} from {module_text(group)};"


def group_edits(group: ImportGroup, replacement: str) -> list[Edit]:
    """Replace the first declaration, delete the later ones."""
    first = group.first
    edits = [Edit(first.start, first.end, replacement)]
    for declaration in group.declarations[1:]:
        edits.append(Edit(declaration.start, declaration.end, ""))
    return edits


class ConsolidationRule(BaseRule):
    """Shared traversal for rules that merge declarations per module.

    Subclasses choose which declarations are collected, which groups
    are reported and how a merged group is rendered.
    """

    @property
    def category(self) -> str:
        return "imports"

    @property
    def default_severity(self) -> Severity:
        return Severity.MEDIUM

    def can_auto_fix(self) -> bool:
        return True

    @property
    @abstractmethod
    def message(self) -> str:
        """Diagnostic message reported on the first declaration."""

    @abstractmethod
    def collects(self, node: Node) -> bool:
        """Whether a top-level declaration belongs to a group."""

    @abstractmethod
    def render(self, group: ImportGroup, merged: MergedBindings) -> str:
        """Merged declaration text for a safe group."""

    def reports(self, group: ImportGroup) -> bool:
        """Whether a duplicate group is reported by this rule."""
        return True

    def create_state(self) -> dict[str, ImportGroup]:
        return {}

    def listeners(self):
        return {
            NodeKind.IMPORT_DECLARATION: self._collect,
            NodeKind.EXPORT_DECLARATION: self._collect,
        }

    def _collect(self, node: Node, ctx: TraversalContext) -> list[Violation]:
        if not isinstance(ctx.parent, Program) or not self.collects(node):
            return []
        module = node.module
        if module is None:
            return []
        groups: dict[str, ImportGroup] = ctx.state
        groups.setdefault(module, ImportGroup(module)).declarations.append(node)
        return []

    def on_traversal_complete(self, ctx: TraversalContext) -> list[Violation]:
        violations = []
        for group in ctx.state.values():
            if not group.is_duplicate or not self.reports(group):
                continue

            merged = classify(group)
            if merged.is_safe:
                edits = group_edits(group, self.render(group, merged))
                hints = [f"Combine the {len(group.declarations)} declarations into one"]
            else:
                edits = []
                hints = [f"Combine manually: {merged.unsafe_reason}"]

            violations.append(
                Violation(
                    node=group.first,
                    message=self.message,
                    edits=edits,
                    remediation_hints=hints,
                    data={
                        "module": group.module,
                        "declarations": len(group.declarations),
                    },
                )
            )
        return violations
