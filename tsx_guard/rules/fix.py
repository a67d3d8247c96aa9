"""
Edit model and edit application for auto-fixes.

An Edit replaces the half-open byte range ``[start, end)`` of a file's
UTF-8 encoding with new text. Rules never apply edits themselves; they
return them inside violations and the engine's fixer splices them in.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any


class EditConflictError(ValueError):
    """Raised when edits passed to apply_edits overlap."""


@dataclass(frozen=True)
class Edit:
    """A byte-range replacement.

    ``start == end`` is a pure insertion, an empty ``text`` a deletion.
    """

    start: int
    end: int
    text: str = ""

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Invalid edit range [{self.start}, {self.end})")

    @property
    def is_insertion(self) -> bool:
        return self.start == self.end

    def overlaps(self, other: "Edit") -> bool:
        """Whether two edits cannot be applied in the same splice.

        Ranges that merely touch are fine; two insertions at the same
        offset are not, since their order would be ambiguous.
        """
        if self.start == other.start:
            return True
        return self.start < other.end and other.start < self.end

    def conflicts(self, other: "Edit") -> bool:
        """Overlapping or touching ranges.

        Used when choosing edits from different findings: a finding that
        ends exactly where another begins may have computed its text
        from a slice the other one rewrites.
        """
        return self.start <= other.end and other.start <= self.end

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"start": self.start, "end": self.end, "text": self.text}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Edit":
        """Create Edit from dictionary."""
        return cls(start=data["start"], end=data["end"], text=data.get("text", ""))


def sort_edits(edits: Iterable[Edit]) -> list[Edit]:
    return sorted(edits, key=lambda edit: (edit.start, edit.end))


def find_overlap(edits: Sequence[Edit]) -> tuple[Edit, Edit] | None:
    """Return the first pair of overlapping edits, if any."""
    ordered = sort_edits(edits)
    for previous, current in zip(ordered, ordered[1:]):
        if previous.overlaps(current):
            return previous, current
    return None


def apply_edits(text: str, edits: Sequence[Edit]) -> str:
    """Apply non-overlapping edits to ``text``.

    Args:
        text: Original source text
        edits: Edits with byte offsets into ``text.encode("utf-8")``

    Returns:
        The rewritten text

    Raises:
        EditConflictError: If two edits overlap or an edit is out of range
    """
    if not edits:
        return text

    overlap = find_overlap(edits)
    if overlap is not None:
        first, second = overlap
        raise EditConflictError(
            f"Edits [{first.start}, {first.end}) and "
            f"[{second.start}, {second.end}) overlap"
        )

    data = text.encode("utf-8")
    parts: list[bytes] = []
    cursor = 0
    for edit in sort_edits(edits):
        if edit.end > len(data):
            raise EditConflictError(
                f"Edit [{edit.start}, {edit.end}) is outside a "
                f"{len(data)}-byte document"
            )
        parts.append(data[cursor : edit.start])
        parts.append(edit.text.encode("utf-8"))
        cursor = edit.end
    parts.append(data[cursor:])
    return b"".join(parts).decode("utf-8")


def select_compatible(
    groups: Iterable[Sequence[Edit]],
) -> tuple[list[Sequence[Edit]], list[Sequence[Edit]]]:
    """Pick edit groups that can be applied together.

    Groups are considered in order and accepted atomically: a group is
    deferred if any of its edits conflicts with an already accepted edit.

    Returns:
        Tuple of (accepted groups, deferred groups)
    """
    accepted: list[Sequence[Edit]] = []
    deferred: list[Sequence[Edit]] = []
    taken: list[Edit] = []
    for group in groups:
        if any(edit.conflicts(other) for edit in group for other in taken):
            deferred.append(group)
            continue
        accepted.append(group)
        taken.extend(group)
    return accepted, deferred
