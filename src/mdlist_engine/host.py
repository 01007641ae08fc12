"""Positions, edits, and the Text Host protocol the list engine talks to.

The engine never owns document state. It reads lines through a
:class:`TextHost` and asks the host to apply :class:`Edit` objects.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Protocol, Tuple

DefaultCommand = Literal["newline", "insertLineAfter", "tab", "outdent", "deleteLeft"]

DEFAULT_COMMANDS: Tuple[str, ...] = (
    "newline",
    "insertLineAfter",
    "tab",
    "outdent",
    "deleteLeft",
)


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """Zero-based ``(line, character)`` location inside a document."""

    line: int
    character: int

    def with_character(self, character: int) -> "Position":
        return Position(self.line, character)

    def as_tuple(self) -> Tuple[int, int]:
        return (self.line, self.character)


@dataclass(frozen=True, slots=True)
class Selection:
    anchor: Position
    active: Position

    @classmethod
    def caret(cls, position: Position) -> "Selection":
        return cls(anchor=position, active=position)

    @property
    def is_empty(self) -> bool:
        return self.anchor == self.active

    @property
    def start(self) -> Position:
        return min(self.anchor, self.active)

    @property
    def end(self) -> Position:
        return max(self.anchor, self.active)


@dataclass(frozen=True, slots=True)
class TextRange:
    start: Position
    end: Position

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError(f"Range end {self.end} precedes start {self.start}")

    @classmethod
    def of(
        cls, start_line: int, start_col: int, end_line: int, end_col: int
    ) -> "TextRange":
        return cls(Position(start_line, start_col), Position(end_line, end_col))

    @property
    def is_empty(self) -> bool:
        return self.start == self.end


@dataclass(frozen=True, slots=True)
class Edit:
    """Replace ``range`` with ``text``; the only mutation the engine emits."""

    range: TextRange
    text: str

    @classmethod
    def insert(cls, position: Position, text: str) -> "Edit":
        return cls(TextRange(position, position), text)

    @classmethod
    def delete(cls, text_range: TextRange) -> "Edit":
        return cls(text_range, "")

    @classmethod
    def replace(cls, text_range: TextRange, text: str) -> "Edit":
        return cls(text_range, text)


@dataclass(frozen=True, slots=True)
class Line:
    """Immutable view of one document row."""

    text: str
    index: int

    @property
    def line_number(self) -> int:
        return self.index + 1

    @property
    def length(self) -> int:
        return len(self.text)

    @property
    def is_blank(self) -> bool:
        return not self.text.strip()

    @property
    def first_non_whitespace(self) -> int:
        stripped = self.text.lstrip()
        if not stripped:
            return len(self.text)
        return len(self.text) - len(stripped)

    @property
    def range(self) -> TextRange:
        return TextRange.of(self.index, 0, self.index, len(self.text))


class HostEditError(RuntimeError):
    """Raised by hosts when an edit or default command cannot be applied."""


class TextHost(Protocol):
    """Editor surface consumed by the engine.

    Implementations apply each edit atomically: reads issued after
    ``apply_edit`` returns must observe the edit.
    """

    def get_line_count(self) -> int: ...

    def get_line_text(self, line: int) -> str: ...

    def get_selection(self) -> Selection: ...

    def set_selection(self, selection: Selection) -> None: ...

    def apply_edit(self, edit: Edit, *, group_with_previous: bool) -> None: ...

    def reveal_line(self, line: int) -> None: ...

    def execute_default_command(self, name: DefaultCommand) -> None: ...


def line_at(host: TextHost, line: int) -> Line:
    return Line(text=host.get_line_text(line), index=line)


__all__ = [
    "DEFAULT_COMMANDS",
    "DefaultCommand",
    "Edit",
    "HostEditError",
    "Line",
    "Position",
    "Selection",
    "TextHost",
    "TextRange",
    "line_at",
]
