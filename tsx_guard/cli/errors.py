"""Structured CLI errors carrying an exit code and a recovery suggestion.

Commands raise these from setup steps (config loading, rule selection,
file reading) and turn them into a stderr message plus exit code with
``handle_exception``. Exit code 2 marks usage, configuration and file
read failures.
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import click


class ErrorCategory(Enum):
    CONFIGURATION = "configuration"
    FILE_SYSTEM = "file_system"
    VALIDATION = "validation"


@dataclass
class CLIError(Exception):
    """Base CLI error.

    Attributes:
        category: What kind of input was at fault.
        message: One-line description shown after ``Error:``.
        suggestion: What the user can do about it.
        details: Key/value context printed under the message.
        exit_code: Process exit code when the error ends the command.
    """

    category: ErrorCategory
    message: str
    suggestion: str | None = None
    details: dict[str, Any] = field(default_factory=dict)
    exit_code: int = 2

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def format(self, use_color: bool = True) -> str:
        def style(text: str, **styles: Any) -> str:
            return click.style(text, **styles) if use_color else text

        lines = [f"{style('Error:', fg='red', bold=True)} {self.message}"]
        if self.suggestion:
            lines.append(f"{style('Suggestion:', fg='cyan')} {self.suggestion}")
        lines.extend(style(f"  {key}: {value}", dim=True) for key, value in self.details.items())
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.format(use_color=False)


class FileReadError(CLIError):
    """A source file could not be read or is not UTF-8."""

    def __init__(self, path: str, original_error: str | None = None):
        message = f"Cannot read source file: {path}"
        if original_error:
            message = f"{message}: {original_error}"
        super().__init__(
            category=ErrorCategory.FILE_SYSTEM,
            message=message,
            suggestion="Verify the file exists, is readable and is UTF-8 encoded",
            details={"path": path},
        )


class ConfigurationError(CLIError):
    """An explicit --config file is unreadable or invalid."""

    def __init__(self, message: str, config_file: str | None = None):
        super().__init__(
            category=ErrorCategory.CONFIGURATION,
            message=message,
            suggestion="Check your tsxguard.json syntax and severity names",
            details={"config_file": config_file} if config_file else {},
        )


class UnknownRuleError(CLIError):
    """A --rule option names a rule ID that discovery did not find."""

    def __init__(self, rule_id: str):
        super().__init__(
            category=ErrorCategory.VALIDATION,
            message=f"Unknown rule: {rule_id}",
            suggestion="Run 'tsx-guard rules' to list available rule IDs",
            details={"rule_id": rule_id},
        )


def handle_exception(
    error: Exception,
    use_color: bool = True,
    verbose: bool = False,
) -> tuple[str, int]:
    """Return the message to print for ``error`` and the exit code to use.

    Errors that are not CLIErrors exit with 1. With ``verbose`` the
    current traceback is appended.
    """
    if isinstance(error, CLIError):
        message = error.format(use_color=use_color)
        exit_code = error.exit_code
    else:
        label = click.style("Error:", fg="red", bold=True) if use_color else "Error:"
        message = f"{label} {error}"
        exit_code = 1

    if verbose:
        message += "\n\nTraceback:\n" + traceback.format_exc()

    return message, exit_code
