"""
Unit tests for import and export consolidation rules.

Tests for IMPORTS.DUPLICATE_IMPORTS, IMPORTS.CONSOLIDATE_TYPE_IMPORTS and
IMPORTS.DUPLICATE_EXPORTS, plus the shared consolidation helpers.
"""

import pytest

from tsx_guard.analysis.nodes import ImportDeclaration
from tsx_guard.rules.imports.consolidation import (
    Binding,
    Bucket,
    ImportGroup,
    classify,
    render_import,
)
from tsx_guard.rules.imports.duplicate_exports import DuplicateExportsRule
from tsx_guard.rules.imports.duplicate_imports import DuplicateImportsRule
from tsx_guard.rules.imports.type_imports import ConsolidateTypeImportsRule


def group_for(source, module: str) -> ImportGroup:
    group = ImportGroup(module)
    for statement in source.program.body:
        if isinstance(statement, ImportDeclaration) and statement.module == module:
            group.declarations.append(statement)
    return group


class TestClassify:
    """Tests for binding classification and ordering."""

    def test_value_before_type_then_alphabetical(self, parse):
        source = parse(
            'import {b, type Z} from "m";\nimport type {A} from "m";\nimport {a} from "m";'
        )
        merged = classify(group_for(source, "m"))
        assert [binding.render() for binding in merged.named] == [
            "a",
            "b",
            "type A",
            "type Z",
        ]

    def test_identical_bindings_collapse(self, parse):
        source = parse('import {a} from "m";\nimport {a, b as c} from "m";')
        merged = classify(group_for(source, "m"))
        assert [binding.render() for binding in merged.named] == ["a", "b as c"]

    def test_first_default_kept(self, parse):
        source = parse('import A from "m";\nimport B from "m";')
        merged = classify(group_for(source, "m"))
        assert merged.default == Binding(Bucket.DEFAULT, "default", "A")

    def test_type_only_default_is_unsafe(self, parse):
        source = parse('import type A from "m";\nimport {b} from "m";')
        assert not classify(group_for(source, "m")).is_safe

    def test_namespace_with_named_is_unsafe(self, parse):
        source = parse('import * as m from "m";\nimport {b} from "m";')
        assert not classify(group_for(source, "m")).is_safe

    def test_value_and_type_with_same_name_is_unsafe(self, parse):
        source = parse('import {A} from "m";\nimport type {A} from "m";')
        merged = classify(group_for(source, "m"))
        assert not merged.is_safe
        assert "'A'" in merged.unsafe_reason

    def test_default_and_type_with_same_name_is_unsafe(self, parse):
        source = parse('import A from "m";\nimport type {A} from "m";')
        assert not classify(group_for(source, "m")).is_safe

    def test_aliased_type_is_safe(self, parse):
        source = parse('import {A} from "m";\nimport type {A as AType} from "m";')
        assert classify(group_for(source, "m")).is_safe

    def test_render_keeps_quote_style(self, parse):
        source = parse("import A from 'm';\nimport * as ns from 'm';")
        group = group_for(source, "m")
        assert render_import(group, classify(group)) == "import A, * as ns from 'm';"

    def test_render_side_effect_only(self, parse):
        source = parse('import "./a.css";\nimport "./a.css";')
        group = group_for(source, "./a.css")
        assert render_import(group, classify(group)) == 'import "./a.css";'


class TestDuplicateImportsRule:
    """Tests for IMPORTS.DUPLICATE_IMPORTS rule."""

    @pytest.fixture
    def rule(self):
        return DuplicateImportsRule()

    def test_reports_once_per_group(self, rule, run_rule):
        content = (
            'import {useState} from "react";\n'
            'import {Card} from "./card";\n'
            'import {useEffect} from "react";\n'
        )
        findings = run_rule(rule, content)
        assert len(findings) == 1
        assert findings[0].summary == "Multiple imports from the same module should be combined"
        assert findings[0].line_number == 1

    def test_merges_named_imports(self, rule, fix_with):
        content = 'import {useState} from "react";\nimport {useEffect} from "react";'
        result = fix_with(content, rule)
        assert result.content == 'import {useEffect, useState} from "react";\n'

    def test_default_and_named(self, rule, fix_with):
        """Scenario: default plus named bindings from one module."""
        result = fix_with('import A from "m";\nimport {b} from "m";', rule)
        assert result.content == 'import A, {b} from "m";\n'

    def test_three_named_imports(self, rule, fix_with):
        content = (
            'import {Input} from "./c";\n'
            'import {Button} from "./c";\n'
            'import {Card} from "./c";\n'
        )
        result = fix_with(content, rule)
        assert result.content == 'import {Button, Card, Input} from "./c";\n\n\n'

    def test_aliases_survive(self, rule, fix_with):
        content = 'import {a as x} from "m";\nimport {a} from "m";'
        result = fix_with(content, rule)
        assert result.content == 'import {a, a as x} from "m";\n'

    def test_unsafe_group_reported_without_fix(self, rule, run_rule):
        findings = run_rule(rule, 'import * as m from "m";\nimport {b} from "m";')
        assert len(findings) == 1
        assert not findings[0].can_auto_fix

    def test_mixed_type_groups_left_to_type_rule(self, rule, run_rule):
        content = 'import type {User} from "./api";\nimport {createUser} from "./api";'
        assert run_rule(rule, content) == []

    def test_inline_type_with_same_name_not_fixed(self, rule, fix_with):
        content = 'import {A} from "m";\nimport {type A} from "m";\n'
        result = fix_with(content, rule)
        assert not result.changed
        assert len(result.remaining.findings) == 1
        assert not result.remaining.findings[0].can_auto_fix

    def test_state_resets_between_files(self, rule, run_rule):
        """Test that one rule instance checks each file on its own."""
        assert run_rule(rule, 'import {a} from "m";\n', file_path="a.tsx") == []
        assert run_rule(rule, 'import {b} from "m";\n', file_path="b.tsx") == []

        findings = run_rule(
            rule, 'import {c} from "m";\nimport {d} from "m";\n', file_path="c.tsx"
        )
        assert len(findings) == 1
        assert findings[0].file_path == "c.tsx"
        assert findings[0].line_number == 1

    def test_module_strings_compared_exactly(self, rule, run_rule):
        assert run_rule(rule, 'import {a} from "./m";\nimport {b} from "./m.ts";') == []

    def test_idempotent(self, rule, fix_with):
        first = fix_with('import {b} from "m";\nimport {a} from "m";', rule)
        second = fix_with(first.content, DuplicateImportsRule())
        assert not second.changed

    def test_javascript_files(self, rule, fix_with):
        result = fix_with(
            'import a from "m";\nimport {b} from "m";\n', rule, file_path="index.js"
        )
        assert result.content == 'import a, {b} from "m";\n\n'


class TestConsolidateTypeImportsRule:
    """Tests for IMPORTS.CONSOLIDATE_TYPE_IMPORTS rule."""

    @pytest.fixture
    def rule(self):
        return ConsolidateTypeImportsRule()

    def test_merges_type_and_value(self, rule, fix_with):
        content = 'import type { User } from "./api";\nimport { createUser } from "./api";'
        result = fix_with(content, rule)
        assert result.content == 'import {createUser, type User} from "./api";\n'

    def test_merges_several_declarations(self, rule, fix_with):
        content = (
            'import type { User, Config } from "./types";\n'
            'import { createUser } from "./types";\n'
            'import { deleteUser } from "./types";'
        )
        result = fix_with(content, rule)
        assert result.content == (
            'import {createUser, deleteUser, type Config, type User} from "./types";\n\n'
        )

    def test_message(self, rule, run_rule):
        content = 'import type {User} from "./api";\nimport {createUser} from "./api";'
        findings = run_rule(rule, content)
        assert findings[0].summary == (
            "Consolidate separate imports from the same module into a single import"
        )

    def test_same_name_as_value_and_type_not_fixed(self, rule, run_rule, fix_with):
        content = 'import {A} from "m";\nimport type {A} from "m";\n'
        findings = run_rule(rule, content)
        assert len(findings) == 1
        assert not findings[0].can_auto_fix
        assert "bound both as a value and as a type" in findings[0].remediation_hints[0]

        assert fix_with(content, ConsolidateTypeImportsRule()).content == content

    def test_pure_value_groups_ignored(self, rule, run_rule):
        assert run_rule(rule, 'import {a} from "m";\nimport {b} from "m";') == []

    def test_typescript_only(self, rule):
        assert rule.supported_languages == ["tsx", "typescript"]


class TestDuplicateExportsRule:
    """Tests for IMPORTS.DUPLICATE_EXPORTS rule."""

    @pytest.fixture
    def rule(self):
        return DuplicateExportsRule()

    def test_merges_reexports(self, rule, fix_with):
        content = 'export {b} from "./m";\nexport {a as x} from "./m";'
        result = fix_with(content, rule)
        assert result.content == 'export {a as x, b} from "./m";\n'

    def test_message(self, rule, run_rule):
        findings = run_rule(rule, 'export {a} from "./m";\nexport {b} from "./m";')
        assert findings[0].summary == "Multiple exports from the same module should be combined"

    def test_type_reexports(self, rule, fix_with):
        content = 'export type {Props} from "./m";\nexport {Card} from "./m";'
        result = fix_with(content, rule, file_path="index.ts")
        assert result.content == 'export {Card, type Props} from "./m";\n'

    def test_local_export_lists_ignored(self, rule, run_rule):
        content = "const a = 1;\nconst b = 2;\nexport {a};\nexport {b};"
        assert run_rule(rule, content) == []

    def test_imports_and_exports_are_separate(self, rule, run_rule):
        content = 'import {a} from "./m";\nexport {a} from "./m";'
        assert run_rule(rule, content) == []
