"""
Shared fixtures for the tsx-guard test suite.

Provides test fixtures for:
- Parsing TSX/JSX snippets into SourceFile models
- Running a single rule over a snippet
- Running the fixer with a chosen set of rules
- Temporary projects for CLI tests
"""

import logging
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from tsx_guard.analysis.nodes import SourceFile
from tsx_guard.analysis.tsx_parser import get_default_parser
from tsx_guard.rules.base import BaseRule, Finding, RuleContext
from tsx_guard.rules.config import RuleEngineConfig
from tsx_guard.rules.engine import FixResult, RuleEngine


def create_context(content: str, file_path: str = "test.tsx") -> RuleContext:
    """Create a RuleContext for testing."""
    return RuleContext.from_source(content, file_path)


def make_engine(*rules: BaseRule, config: RuleEngineConfig | None = None) -> RuleEngine:
    """Engine with only the given rules registered."""
    engine = RuleEngine(config=config or RuleEngineConfig())
    for rule in rules:
        engine.register(rule)
    return engine


# ---------------------------------------------------------------------------
# Parsing and rule helpers
# ---------------------------------------------------------------------------


@pytest.fixture()
def parse() -> Callable[..., SourceFile]:
    """Parse a snippet; the file name picks the grammar."""

    def _parse(content: str, file_path: str = "test.tsx") -> SourceFile:
        return get_default_parser().parse_source(content, Path(file_path))

    return _parse


@pytest.fixture()
def run_rule() -> Callable[..., list[Finding]]:
    """Run one rule over a snippet and return its findings."""

    def _run(rule: BaseRule, content: str, file_path: str = "test.tsx") -> list[Finding]:
        return rule.check(create_context(content, file_path))

    return _run


@pytest.fixture()
def fix_with() -> Callable[..., FixResult]:
    """Run the fixed-point fixer with only the given rules."""

    def _fix(content: str, *rules: BaseRule, file_path: str = "test.tsx") -> FixResult:
        engine = make_engine(*rules)
        return engine.fix(create_context(content, file_path))

    return _fix


# ---------------------------------------------------------------------------
# Project fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def temp_project(tmp_path_factory) -> Path:
    """Create a small project with TSX sources and ignored directories."""
    project = tmp_path_factory.mktemp("project")

    (project / "src").mkdir()
    (project / "src" / "App.tsx").write_text(
        'import {useState} from "react";\n'
        'import {useEffect} from "react";\n'
        "\n"
        "export const App = () => {\n"
        "  const [count, setCount] = useState(0);\n"
        "  useEffect(() => {\n"
        "    document.title = String(count);\n"
        "  }, [count]);\n"
        "  return <Button variant=\"default\" onClick={() => setCount(count + 1)} />;\n"
        "};\n",
        encoding="utf-8",
    )
    (project / "src" / "clean.ts").write_text(
        "export const add = (a: number, b: number): number => a + b;\n",
        encoding="utf-8",
    )
    (project / "src" / "notes.md").write_text("# not source\n", encoding="utf-8")

    for ignored in ("node_modules", "dist"):
        (project / ignored).mkdir()
        (project / ignored / "index.js").write_text(
            'import a from "m";\nimport {b} from "m";\n', encoding="utf-8"
        )

    return project


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Drop handlers installed by setup_logging between tests."""
    yield
    logger = logging.getLogger("tsx_guard")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
