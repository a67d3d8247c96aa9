"""Centralized output manager for CLI with color and quiet mode support.

This module provides consistent output handling across all CLI commands,
supporting NO_COLOR environment variable, --no-color flag, quiet mode,
and plain symbol fallbacks.

Following the NO_COLOR standard: https://no-color.org/
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TextIO

import click

if TYPE_CHECKING:
    from ..rules.base import Finding


def should_use_color(
    explicit_flag: bool | None = None,
    stream: TextIO | None = None,
) -> bool:
    """Determine if color output should be used.

    Priority order:
    1. Explicit --no-color flag (if passed)
    2. NO_COLOR environment variable (standard convention)
    3. TTY detection (only colorize if output is a terminal)

    Args:
        explicit_flag: Explicit color preference from CLI flag.
            True = force colors, False = force no colors, None = auto-detect
        stream: Output stream to check for TTY. Defaults to stdout.

    Returns:
        True if colors should be used, False otherwise.
    """
    if explicit_flag is not None:
        return explicit_flag

    # Any value (including empty) means "no color"
    if "NO_COLOR" in os.environ:
        return False

    if "FORCE_COLOR" in os.environ:
        return True

    if stream is None:
        stream = sys.stdout
    if hasattr(stream, "isatty") and not stream.isatty():
        return False

    return True


@dataclass
class OutputConfig:
    """Configuration for CLI output behavior.

    Attributes:
        use_color: Whether to use ANSI color codes in output.
        quiet: Suppress all output except errors and findings.
        verbose: Enable detailed debug output.
        stream: Output stream (default: stdout).
        err_stream: Error stream (default: stderr).
    """

    use_color: bool = True
    quiet: bool = False
    verbose: bool = False
    stream: TextIO = field(default_factory=lambda: sys.stdout)
    err_stream: TextIO = field(default_factory=lambda: sys.stderr)

    @classmethod
    def from_flags(
        cls,
        verbose: bool = False,
        quiet: bool = False,
        no_color: bool = False,
    ) -> OutputConfig:
        """Create OutputConfig from CLI flags."""
        use_color = should_use_color(explicit_flag=False if no_color else None)
        return cls(use_color=use_color, quiet=quiet, verbose=verbose)


class OutputManager:
    """Centralized output handler for CLI.

    Example:
        >>> output = OutputManager(OutputConfig(use_color=False))
        >>> output.success("3 files fixed")
        [OK] 3 files fixed
    """

    COLORS = {
        "green": "\033[92m",
        "red": "\033[91m",
        "yellow": "\033[93m",
        "blue": "\033[94m",
        "cyan": "\033[96m",
        "bold": "\033[1m",
        "dim": "\033[2m",
        "reset": "\033[0m",
    }

    SYMBOLS = {
        "success": {"color": "\033[92m✓\033[0m", "plain": "[OK]"},
        "error": {"color": "\033[91m✗\033[0m", "plain": "[FAIL]"},
        "warning": {"color": "\033[93m⚠\033[0m", "plain": "[WARN]"},
        "info": {"color": "\033[94mℹ\033[0m", "plain": "[INFO]"},
    }

    SEVERITY_COLORS = {
        "critical": "red",
        "high": "red",
        "medium": "yellow",
        "low": "cyan",
    }

    def __init__(self, config: OutputConfig | None = None):
        self.config = config or OutputConfig()

    def _get_symbol(self, symbol_type: str) -> str:
        symbol_data = self.SYMBOLS.get(symbol_type, self.SYMBOLS["info"])
        return symbol_data["color"] if self.config.use_color else symbol_data["plain"]

    def _colorize(self, text: str, color: str) -> str:
        if not self.config.use_color:
            return text
        color_code = self.COLORS.get(color, "")
        return f"{color_code}{text}{self.COLORS['reset']}"

    def _output(
        self,
        message: str,
        symbol_type: str | None = None,
        err: bool = False,
        force: bool = False,
    ) -> None:
        """Output a message with optional symbol prefix.

        Args:
            message: Message to output.
            symbol_type: Type of symbol to prefix (or None for no symbol).
            err: Output to stderr instead of stdout.
            force: Output even in quiet mode.
        """
        if self.config.quiet and not err and not force:
            return

        stream = self.config.err_stream if err else self.config.stream
        line = f"{self._get_symbol(symbol_type)} {message}" if symbol_type else message
        click.echo(line, file=stream)

    def success(self, message: str, force: bool = False) -> None:
        self._output(message, symbol_type="success", force=force)

    def error(self, message: str) -> None:
        """Output an error message (always shown, even in quiet mode)."""
        self._output(message, symbol_type="error", err=True, force=True)

    def warning(self, message: str, force: bool = False) -> None:
        self._output(message, symbol_type="warning", force=force)

    def info(self, message: str) -> None:
        self._output(message, symbol_type="info")

    def debug(self, message: str) -> None:
        """Output a debug message (only in verbose mode)."""
        if not self.config.verbose:
            return
        self._output(f"DEBUG: {self._colorize(message, 'dim')}")

    def header(self, title: str) -> None:
        if self.config.quiet:
            return
        self._output(self._colorize(title, "bold"))
        self._output("=" * len(title))

    def plain(self, message: str, force: bool = False) -> None:
        self._output(message, force=force)

    def finding(self, finding: Finding) -> None:
        """Output one finding as ``path:line:col  severity  message  [rule]``.

        Findings are the command's result, so they are shown in quiet mode too.
        """
        location = f"{finding.file_path}:{finding.line_number}:{(finding.column or 0) + 1}"
        severity = finding.severity.value
        color = self.SEVERITY_COLORS.get(severity, "cyan")
        fixable = " (fixable)" if finding.can_auto_fix else ""
        self._output(
            f"{location}  {self._colorize(severity.ljust(8), color)} "
            f"{finding.summary}  {self._colorize(f'[{finding.rule_id}]', 'dim')}{fixable}",
            force=True,
        )

    def summary(
        self,
        total: int,
        fixable: int = 0,
        failed: int = 0,
        files: int | None = None,
        duration_ms: float | None = None,
    ) -> None:
        """Output a summary line with counts.

        Args:
            total: Total findings.
            fixable: Findings that carry an automatic fix.
            failed: Findings at or above the failure threshold.
            files: Number of files checked.
            duration_ms: Operation duration in milliseconds.
        """
        parts = [f"{total} findings"]
        if files is not None:
            parts.insert(0, f"{files} files")
        if fixable > 0:
            parts.append(f"{fixable} fixable")
        if duration_ms is not None:
            if duration_ms < 1000:
                parts.append(f"{duration_ms:.0f}ms")
            else:
                parts.append(f"{duration_ms/1000:.1f}s")

        summary_text = " | ".join(parts)

        if failed > 0:
            self._output(summary_text, symbol_type="error", force=True)
        elif total > 0:
            self._output(summary_text, symbol_type="warning", force=True)
        else:
            self._output(summary_text, symbol_type="success", force=True)
