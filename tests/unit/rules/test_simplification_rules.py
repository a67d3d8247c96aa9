"""
Unit tests for simplification rules.

Tests for SIMPLIFICATION.UNNECESSARY_WRAPPER, SIMPLIFICATION.REDUNDANT_DEFAULT_PROPS
and SIMPLIFICATION.SINGLE_LINE_ARROW.
"""

import pytest

from tsx_guard.rules.base import Severity
from tsx_guard.rules.simplification.redundant_default_props import (
    RedundantDefaultPropsRule,
    same_value,
)
from tsx_guard.rules.simplification.single_line_arrow import SingleLineArrowRule
from tsx_guard.rules.simplification.unnecessary_wrapper import UnnecessaryWrapperRule

# =============================================================================
# Unnecessary Wrapper Tests
# =============================================================================


class TestUnnecessaryWrapperRule:
    """Tests for SIMPLIFICATION.UNNECESSARY_WRAPPER rule."""

    @pytest.fixture
    def rule(self):
        return UnnecessaryWrapperRule()

    def test_metadata(self, rule):
        assert rule.rule_id == "SIMPLIFICATION.UNNECESSARY_WRAPPER"
        assert rule.default_severity == Severity.MEDIUM

    def test_detects_bare_wrapper(self, rule, run_rule):
        findings = run_rule(rule, "const A = () => <div><Card /></div>;")
        assert len(findings) == 1
        assert findings[0].summary == (
            "Unnecessary div wrapper. Consider removing the wrapper or adding "
            "meaningful attributes."
        )

    def test_fix_replaces_wrapper_with_child(self, rule, fix_with):
        result = fix_with("const A = () => <div><Card title=\"x\" /></div>;", rule)
        assert result.content == 'const A = () => <Card title="x" />;'

    def test_nested_wrappers_collapse_over_passes(self, rule, fix_with):
        result = fix_with("const A = () => <div><div><Card /></div></div>;", rule)
        assert result.content == "const A = () => <Card />;"
        assert result.passes == 2

    def test_two_children_never_collapsed(self, rule, run_rule):
        """A wrapper with two element children is kept."""
        content = "const A = () => (\n  <div>\n    <A />\n    <B />\n  </div>\n);"
        assert run_rule(rule, content) == []

    def test_text_child_kept(self, rule, run_rule):
        assert run_rule(rule, "const A = () => <div>hello</div>;") == []

    @pytest.mark.parametrize(
        "attributes",
        [
            'id="main"',
            'role="region"',
            'aria-label="x"',
            'data-testid="x"',
            "onClick={go}",
            "key={id}",
            "{...props}",
            'className="flex gap-2"',
            'className="md:p-4"',
            'className="!mt-0 w-full"',
            "className={styles.box}",
        ],
    )
    def test_meaningful_wrapper_kept(self, rule, run_rule, attributes):
        content = f"const A = () => <div {attributes}><Card /></div>;"
        assert run_rule(rule, content) == []

    def test_cosmetic_class_reported(self, rule, run_rule):
        """Classes that do not affect layout do not justify the wrapper."""
        content = 'const A = () => <div className="animate-pulse"><Card /></div>;'
        assert len(run_rule(rule, content)) == 1

    def test_expression_child_in_markup_is_fixed(self, rule, fix_with):
        content = "const A = () => <section><div>{items}</div></section>;"
        result = fix_with(content, rule)
        assert result.content == "const A = () => <section>{items}</section>;"

    def test_expression_child_outside_markup_has_no_edit(self, rule, run_rule):
        findings = run_rule(rule, "const A = () => <div>{items}</div>;")
        assert len(findings) == 1
        assert not findings[0].can_auto_fix

    def test_elements_parameter(self, rule, parse):
        source = parse("const A = () => <span><Card /></span>;")
        assert rule.visit(source) == []
        assert len(rule.visit(source, {"elements": ["div", "span"]})) == 1


# =============================================================================
# Redundant Default Props Tests
# =============================================================================


class TestRedundantDefaultPropsRule:
    """Tests for SIMPLIFICATION.REDUNDANT_DEFAULT_PROPS rule."""

    @pytest.fixture
    def rule(self):
        return RedundantDefaultPropsRule()

    def test_reports_default_variant(self, rule, run_rule):
        findings = run_rule(rule, 'const A = <Button variant="default" />;')
        assert len(findings) == 1
        assert findings[0].summary == (
            "Redundant prop 'variant=\"default\"' - this is the default value "
            "and can be omitted"
        )

    def test_fix_removes_only_attribute(self, rule, fix_with):
        result = fix_with('const A = <Button variant="default" />;', rule)
        assert result.content == "const A = <Button />;"

    def test_fix_removes_first_attribute(self, rule, fix_with):
        result = fix_with('const A = <Button variant="default" size="sm" />;', rule)
        assert result.content == 'const A = <Button size="sm" />;'

    def test_fix_removes_middle_attribute(self, rule, fix_with):
        result = fix_with(
            'const A = <Button type="submit" size="default" disabled />;', rule
        )
        assert result.content == 'const A = <Button type="submit" disabled />;'

    def test_adjacent_redundant_props(self, rule, fix_with):
        """Both props go, one per pass, without leftover whitespace."""
        result = fix_with(
            'const A = <Button variant="default" size="default" asChild={false} />;',
            rule,
        )
        assert result.content == "const A = <Button />;"
        assert result.remaining.findings == []

    def test_multiline_attributes(self, rule, fix_with):
        content = (
            "const A = (\n"
            "  <Button\n"
            '    variant="default"\n'
            "    onClick={go}\n"
            "  >\n"
            "    Go\n"
            "  </Button>\n"
            ");"
        )
        result = fix_with(content, rule)
        assert result.content == (
            "const A = (\n"
            "  <Button\n"
            "    onClick={go}\n"
            "  >\n"
            "    Go\n"
            "  </Button>\n"
            ");"
        )

    def test_boolean_expression_default(self, rule, run_rule):
        findings = run_rule(rule, "const A = <Slot asChild={false} />;")
        assert len(findings) == 1
        assert "asChild=\"false\"" in findings[0].summary

    def test_non_default_values_ignored(self, rule, run_rule):
        assert run_rule(rule, 'const A = <Button variant="ghost" asChild />;') == []
        assert run_rule(rule, "const A = <Button variant={variant} />;") == []

    def test_catalog_extension(self, rule, parse):
        source = parse("const A = <Input type=\"text\" rows={3} />;")
        options = {"redundantDefaults": {"type": "text", "rows": 3}}
        assert len(rule.visit(source, options)) == 2

    def test_booleans_never_equal_numbers(self):
        assert same_value(False, False)
        assert not same_value(False, 0)
        assert not same_value(1, True)
        assert same_value(3, 3.0)
        assert not same_value("3", 3)
        assert same_value(None, None)


# =============================================================================
# Single-Line Arrow Tests
# =============================================================================


class TestSingleLineArrowRule:
    """Tests for SIMPLIFICATION.SINGLE_LINE_ARROW rule."""

    @pytest.fixture
    def rule(self):
        return SingleLineArrowRule()

    def test_reports_single_statement_block(self, rule, run_rule):
        findings = run_rule(rule, "const f = (a) => {\n  run(a);\n};")
        assert len(findings) == 1
        assert findings[0].summary == (
            "Arrow function with single statement should be condensed to single line"
        )

    @pytest.mark.parametrize(
        "source,expected",
        [
            ("const f = (a) => {\n  run(a);\n};", "const f = a => run(a);"),
            ("const f = () => {\n  run();\n};", "const f = () => run();"),
            ("const f = (a, b) => { run(a, b); };", "const f = (a, b) => run(a, b);"),
            (
                "const f = async (a: string) => {\n  await save(a);\n};",
                "const f = async (a: string) => await save(a);",
            ),
            (
                "const f = (): void => {\n  run();\n};",
                "const f = (): void => run();",
            ),
            ("const f = () => {\n  a(), b();\n};", "const f = () => (a(), b());"),
        ],
    )
    def test_fix(self, rule, fix_with, source, expected):
        result = fix_with(source, rule)
        assert result.content == expected

    def test_nested_arrows_fixed_across_passes(self, rule, fix_with):
        content = "const f = () => {\n  items.forEach((i) => {\n    use(i);\n  });\n};"
        result = fix_with(content, rule)
        assert result.content == "const f = () => items.forEach(i => use(i));"

    @pytest.mark.parametrize(
        "content",
        [
            "const f = () => {\n  return 1;\n};",
            "const f = () => {\n  a();\n  b();\n};",
            "const f = () => {};",
            "const f = () => run();",
            "const f = () => {\n  const x = 1;\n};",
        ],
    )
    def test_ignored_shapes(self, rule, run_rule, content):
        assert run_rule(rule, content) == []

    def test_commented_body_reported_without_fix(self, rule, run_rule):
        findings = run_rule(rule, "const f = () => {\n  // keep\n  run();\n};")
        assert len(findings) == 1
        assert not findings[0].can_auto_fix
