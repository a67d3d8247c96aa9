"""Click-based CLI interface for tsx-guard."""

import difflib
import json
import sys
import time
from pathlib import Path
from typing import Any

import click

from . import __version__
from .analysis.tsx_parser import get_default_parser
from .cli import (
    CLIError,
    ConfigurationError,
    FileReadError,
    OutputConfig,
    OutputManager,
    UnknownRuleError,
    handle_exception,
)
from .guard_logging import setup_logging
from .rules.base import RuleContext
from .rules.config import RuleEngineConfig, RuleEngineConfigLoader, load_config_file
from .rules.discovery import RuleDiscovery
from .rules.engine import RuleEngine, RuleEngineResult

SKIP_DIRS = {"node_modules", "dist", "build", ".git"}


def common_options(f: Any) -> Any:
    """Options shared by every command."""
    f = click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")(f)
    f = click.option("--quiet", "-q", is_flag=True, help="Suppress non-error output")(f)
    f = click.option("--no-color", is_flag=True, help="Disable colored output")(f)
    f = click.option(
        "--config",
        "config_path",
        type=click.Path(exists=True, dir_okay=False),
        help="Configuration file path (replaces tsxguard.json lookup)",
    )(f)
    f = click.option(
        "--log-file",
        type=click.Path(dir_okay=False),
        help="Also write debug logs to this file",
    )(f)
    f = click.option(
        "--log-format",
        type=click.Choice(["text", "json"]),
        default="text",
        show_default=True,
        help="Log file format",
    )(f)
    return f


def selection_options(f: Any) -> Any:
    """Rule selection options for check and fix."""
    f = click.option(
        "--rule",
        "rule_ids",
        multiple=True,
        help="Only run this rule ID (repeatable)",
    )(f)
    f = click.option(
        "--category",
        "categories",
        multiple=True,
        type=click.Choice(RuleDiscovery.RULE_CATEGORIES),
        help="Only run rules in this category (repeatable)",
    )(f)
    return f


def load_engine_config(config_path: str | None) -> RuleEngineConfig:
    """Load an explicit config file, or the hierarchical project config."""
    if not config_path:
        return RuleEngineConfigLoader(Path.cwd()).load()
    try:
        return load_config_file(Path(config_path))
    except (OSError, ValueError, AttributeError) as e:
        raise ConfigurationError(
            f"Invalid configuration: {e}", config_file=config_path
        ) from e


def build_engine(
    config: RuleEngineConfig,
    rule_ids: tuple[str, ...],
    output: OutputManager,
) -> RuleEngine:
    """Create an engine with discovered rules, validating requested rule IDs."""
    discovery = RuleDiscovery()
    engine = RuleEngine(config=config)
    engine.load_rules(discovery)

    for error in discovery.discovery_errors:
        output.warning(error)

    for rule_id in rule_ids:
        if discovery.get_rule_class(rule_id) is None:
            raise UnknownRuleError(rule_id)
        if engine.get_rule(rule_id) is None:
            output.warning(f"Rule {rule_id} is disabled by configuration")

    return engine


def collect_files(paths: tuple[str, ...], output: OutputManager) -> list[Path]:
    """Expand PATH arguments into the source files to check.

    Directories are walked recursively, skipping dependency and build
    output directories. Explicit files are kept only when their extension
    is supported.
    """
    parser = get_default_parser()
    files: list[Path] = []
    seen: set[Path] = set()

    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            candidates = sorted(
                p
                for p in path.rglob("*")
                if p.is_file()
                and parser.can_parse(p)
                and not SKIP_DIRS.intersection(p.relative_to(path).parts[:-1])
            )
        elif parser.can_parse(path):
            candidates = [path]
        else:
            output.warning(f"Skipping unsupported file: {path}")
            continue

        for candidate in candidates:
            resolved = candidate.resolve()
            if resolved not in seen:
                seen.add(resolved)
                files.append(candidate)

    return files


def read_context(path: Path, config: RuleEngineConfig) -> RuleContext:
    try:
        return RuleContext.from_file(path, config=config)
    except (OSError, UnicodeDecodeError) as e:
        raise FileReadError(str(path), str(e)) from e


def exit_with_error(error: Exception, output: OutputManager) -> None:
    message, exit_code = handle_exception(
        error, use_color=output.config.use_color, verbose=output.config.verbose
    )
    click.echo(message, err=True)
    sys.exit(exit_code)


def make_output(
    verbose: bool,
    quiet: bool,
    no_color: bool,
    log_file: str | None = None,
    log_format: str = "text",
) -> OutputManager:
    setup_logging(
        quiet=quiet,
        verbose=verbose,
        log_file=Path(log_file) if log_file else None,
        log_format=log_format,
    )
    return OutputManager(
        OutputConfig.from_flags(verbose=verbose, quiet=quiet, no_color=no_color)
    )


@click.group()
@click.version_option(version=__version__, prog_name="tsx-guard")
def cli() -> None:
    """tsx-guard - rule-based checks and fixes for TSX/JSX sources."""


@cli.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True))
@click.option("--json", "output_json", is_flag=True, help="Output results as JSON")
@selection_options
@common_options
def check(
    paths: tuple[str, ...],
    output_json: bool,
    rule_ids: tuple[str, ...],
    categories: tuple[str, ...],
    verbose: bool,
    quiet: bool,
    no_color: bool,
    config_path: str | None,
    log_file: str | None,
    log_format: str,
) -> None:
    """Report rule findings for files and directories.

    Exit codes:
        0 = No findings at or above failOnSeverity
        1 = Findings at or above failOnSeverity
        2 = Usage, configuration or file read error

    Examples:
        tsx-guard check src/
        tsx-guard check src/App.tsx --json
        tsx-guard check src/ --rule IMPORTS.DUPLICATE_IMPORTS
    """
    # JSON goes to stdout alone
    output = make_output(verbose, quiet or output_json, no_color, log_file, log_format)
    start_time = time.time()

    try:
        config = load_engine_config(config_path)
        engine = build_engine(config, rule_ids, output)
        files = collect_files(paths, output)
    except CLIError as e:
        exit_with_error(e, output)
        return

    results: list[RuleEngineResult] = []
    exit_code = 0

    for path in files:
        try:
            context = read_context(path, config)
        except FileReadError as e:
            output.error(e.message)
            exit_code = max(exit_code, e.exit_code)
            continue

        result = engine.run(context, list(rule_ids) or None, list(categories) or None)
        results.append(result)
        output.debug(
            f"{path}: {len(result.findings)} findings from "
            f"{result.rules_executed} rules in {result.execution_time_ms:.1f}ms"
        )

        if not output_json:
            for finding in result.findings:
                output.finding(finding)
            for error in result.errors:
                output.warning(
                    f"{path}: rule {error.rule_id} failed: {error.error_message}"
                )

    failed = sum(
        1
        for result in results
        for finding in result.findings
        if finding.severity >= config.fail_on_severity
    )
    total = sum(len(result.findings) for result in results)

    if output_json:
        click.echo(
            json.dumps(
                {
                    "files": [result.to_dict() for result in results],
                    "summary": {
                        "files": len(results),
                        "total_findings": total,
                        "fixable": sum(r.fixable_count for r in results),
                        "failing": failed,
                        "fail_on_severity": config.fail_on_severity.value,
                    },
                },
                indent=2,
            )
        )
    else:
        output.summary(
            total=total,
            fixable=sum(r.fixable_count for r in results),
            failed=failed,
            files=len(results),
            duration_ms=(time.time() - start_time) * 1000,
        )

    if failed and exit_code == 0:
        exit_code = 1
    sys.exit(exit_code)


@cli.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True))
@click.option(
    "--dry-run",
    is_flag=True,
    help="Print a unified diff instead of writing files",
)
@selection_options
@common_options
def fix(
    paths: tuple[str, ...],
    dry_run: bool,
    rule_ids: tuple[str, ...],
    categories: tuple[str, ...],
    verbose: bool,
    quiet: bool,
    no_color: bool,
    config_path: str | None,
    log_file: str | None,
    log_format: str,
) -> None:
    """Apply automatic fixes until no fixable finding remains.

    Remaining findings are reported after fixing; the exit code follows
    the same rules as check.

    Examples:
        tsx-guard fix src/
        tsx-guard fix src/App.tsx --dry-run
    """
    output = make_output(verbose, quiet, no_color, log_file, log_format)
    start_time = time.time()

    try:
        config = load_engine_config(config_path)
        engine = build_engine(config, rule_ids, output)
        files = collect_files(paths, output)
    except CLIError as e:
        exit_with_error(e, output)
        return

    exit_code = 0
    changed_files = 0
    total_remaining = 0
    failed = 0

    for path in files:
        try:
            context = read_context(path, config)
        except FileReadError as e:
            output.error(e.message)
            exit_code = max(exit_code, e.exit_code)
            continue

        result = engine.fix(context, list(rule_ids) or None, list(categories) or None)

        if result.changed:
            changed_files += 1
            if dry_run:
                diff = difflib.unified_diff(
                    result.original.splitlines(keepends=True),
                    result.content.splitlines(keepends=True),
                    fromfile=f"a/{path}",
                    tofile=f"b/{path}",
                )
                click.echo("".join(diff), nl=False)
            else:
                with open(path, "w", encoding="utf-8", newline="") as f:
                    f.write(result.content)
                output.success(
                    f"{path}: {result.fixes_applied} fixes in {result.passes} passes"
                )
        elif result.remaining and result.remaining.has_syntax_errors:
            output.warning(f"{path}: not fixed, file has syntax errors")

        if result.remaining:
            for finding in result.remaining.findings:
                output.finding(finding)
                total_remaining += 1
                if finding.severity >= config.fail_on_severity:
                    failed += 1

    verb = "would change" if dry_run else "changed"
    output.info(f"{changed_files} of {len(files)} files {verb}")
    output.summary(
        total=total_remaining,
        failed=failed,
        files=len(files),
        duration_ms=(time.time() - start_time) * 1000,
    )

    if failed and exit_code == 0:
        exit_code = 1
    sys.exit(exit_code)


@cli.command("rules")
@click.option("--json", "output_json", is_flag=True, help="Output rule list as JSON")
@common_options
def list_rules(
    output_json: bool,
    verbose: bool,
    quiet: bool,
    no_color: bool,
    config_path: str | None,
    log_file: str | None,
    log_format: str,
) -> None:
    """List available rules and whether they are enabled."""
    output = make_output(verbose, quiet, no_color, log_file, log_format)

    try:
        config = load_engine_config(config_path)
    except CLIError as e:
        exit_with_error(e, output)
        return

    discovery = RuleDiscovery()
    rule_classes = discovery.discover_all()

    rows = []
    for rule_id in sorted(rule_classes):
        rule = rule_classes[rule_id]()
        rows.append(
            {
                "rule_id": rule_id,
                "name": rule.name,
                "category": rule.category,
                "severity": rule.get_severity(config.get_rule_config(rule_id)).value,
                "enabled": config.is_rule_enabled(rule_id, rule.category),
                "fixable": rule.can_auto_fix(),
                "languages": rule.supported_languages,
                "description": rule.description,
            }
        )

    if output_json:
        click.echo(json.dumps(rows, indent=2))
        return

    output.header(f"Available rules ({len(rows)})")
    for row in rows:
        status = "on " if row["enabled"] else "off"
        fixable = "fix" if row["fixable"] else "   "
        output.plain(
            f"  [{status}] {fixable} {row['rule_id']:<40} {row['severity']:<8} {row['name']}",
            force=True,
        )
        if verbose:
            output.plain(f"        {row['description']}")


@cli.command("config")
@click.option("--json", "output_json", is_flag=True, help="Output configuration as JSON")
@click.option("--sources", is_flag=True, help="Show which config files were loaded")
@common_options
def show_config(
    output_json: bool,
    sources: bool,
    verbose: bool,
    quiet: bool,
    no_color: bool,
    config_path: str | None,
    log_file: str | None,
    log_format: str,
) -> None:
    """Show the effective configuration after merging config files.

    Examples:
        tsx-guard config
        tsx-guard config --sources --json
    """
    output = make_output(verbose, quiet, no_color, log_file, log_format)

    try:
        if config_path:
            config = load_engine_config(config_path)
            loaded = [Path(config_path)]
        else:
            loader = RuleEngineConfigLoader(Path.cwd())
            config = loader.load()
            loaded = loader.loaded_sources
    except CLIError as e:
        exit_with_error(e, output)
        return

    data = config.to_dict()

    if output_json:
        if sources:
            data["_sources"] = [str(path) for path in loaded]
        click.echo(json.dumps(data, indent=2))
        return

    output.header("Effective configuration")
    output.plain(f"  Enabled:           {config.enabled}", force=True)
    output.plain(f"  Fail on severity:  {config.fail_on_severity.value}", force=True)
    output.plain(f"  Continue on error: {config.continue_on_error}", force=True)
    output.plain(f"  Max fix passes:    {config.max_fix_passes}", force=True)

    for name, category in sorted(config.categories.items()):
        status = "on" if category.enabled else "off"
        output.plain(f"  Category {name}: {status}", force=True)
    for rule_id, rule_config in sorted(config.rules.items()):
        output.plain(f"  Rule {rule_id}: {json.dumps(rule_config.to_dict())}", force=True)

    if sources:
        output.header("Configuration sources (in load order)")
        if not loaded:
            output.plain("  built-in defaults only", force=True)
        for i, path in enumerate(loaded, 1):
            output.plain(f"  {i}. {path}", force=True)

def main() -> None:
    """Entry point for python -m tsx_guard."""
    cli()


if __name__ == "__main__":
    main()
