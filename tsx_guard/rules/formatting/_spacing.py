"""Shared pair check for the markup spacing rules."""

from ...analysis.nodes import Node, SourceFile
from ..base import Violation
from ..fix import Edit


def check_pair_spacing(
    source: SourceFile,
    earlier: Node,
    later: Node,
    indent: str,
    message: str,
) -> Violation | None:
    """Report ``later`` when fewer than two line breaks separate it from ``earlier``.

    The fix rewrites the slice between the last token of ``earlier`` and
    the first token of ``later`` to a blank line plus ``indent``, using the
    file's own line ending. When that slice holds anything but whitespace
    the violation has no edits.
    """
    prev_token = source.last_token(earlier)
    next_token = source.first_token(later)
    if prev_token is None or next_token is None:
        return None

    lines_between = next_token.span.start_line - prev_token.span.end_line
    if lines_between > 1:
        return None

    start = prev_token.span.end
    end = next_token.span.start
    edits = []
    if source.slice(start, end).strip() == "":
        edits.append(Edit(start, end, source.newline * 2 + indent))

    return Violation(
        node=later,
        message=message,
        edits=edits,
        remediation_hints=["Add a blank line between the two siblings"],
        data={"lines_between": lines_between},
    )
