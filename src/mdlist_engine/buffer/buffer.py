"""In-memory Text Host combining a document, a selection, and undo history."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import ContextManager, Optional

from mdlist_engine.host import (
    DEFAULT_COMMANDS,
    DefaultCommand,
    Edit,
    Position,
    Selection,
    TextRange,
)
from mdlist_engine.runtime import telemetry

from .document import BufferDocument
from .undo import UndoEntry, UndoTimeline
from .validation import BufferValidationError, ensure_position, ensure_range


@dataclass(slots=True)
class BufferView:
    version: int
    text: str
    selection: Selection


class Buffer:
    """Reference :class:`~mdlist_engine.host.TextHost` used by tests and tools.

    The selection is mapped through every edit the way editor widgets do
    it. Positions at or after the end of the edit shift with the text.
    Positions strictly inside a replaced range land at the end of the
    inserted text.
    """

    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[BufferDocument] = None,
        selection: Optional[Selection] = None,
        undo: Optional[UndoTimeline] = None,
        tab_size: int = 4,
    ) -> None:
        self.name = name
        self.document = document or BufferDocument()
        self.selection = selection or Selection.caret(Position(0, 0))
        self.undo_timeline = undo or UndoTimeline()
        self.tab_size = tab_size
        self.revealed: list[int] = []
        self.default_commands: list[str] = []

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        cursor: tuple[int, int] = (0, 0),
        anchor: Optional[tuple[int, int]] = None,
        name: str = "default",
        tab_size: int = 4,
    ) -> "Buffer":
        document = BufferDocument.from_text(text)
        active = ensure_position(document, Position(*cursor))
        start = ensure_position(document, Position(*anchor)) if anchor else active
        return cls(
            name=name,
            document=document,
            selection=Selection(anchor=start, active=active),
            tab_size=tab_size,
        )

    @property
    def text(self) -> str:
        return self.document.text

    @property
    def lines(self) -> tuple[str, ...]:
        return tuple(self.document.snapshot())

    @property
    def cursor(self) -> tuple[int, int]:
        return self.selection.active.as_tuple()

    def snapshot(self) -> BufferView:
        return BufferView(
            version=self.document.version,
            text=self.document.text,
            selection=self.selection,
        )

    # -- TextHost -----------------------------------------------------------

    def get_line_count(self) -> int:
        return self.document.line_count

    def get_line_text(self, line: int) -> str:
        if not 0 <= line < self.document.line_count:
            raise BufferValidationError("Row out of range", position=Position(line, 0))
        return self.document.get_line(line)

    def get_selection(self) -> Selection:
        return self.selection

    def set_selection(self, selection: Selection) -> None:
        ensure_position(self.document, selection.anchor)
        ensure_position(self.document, selection.active)
        self.selection = selection

    def apply_edit(self, edit: Edit, *, group_with_previous: bool = False) -> None:
        ensure_range(self.document, edit.range)
        with Transaction(self, "apply_edit", merge=group_with_previous) as tx:
            self._splice(edit)
            tx.commit()

    def reveal_line(self, line: int) -> None:
        self.revealed.append(line)

    def execute_default_command(self, name: DefaultCommand) -> None:
        if name not in DEFAULT_COMMANDS:
            raise BufferValidationError(f"Unknown default command '{name}'")
        self.default_commands.append(name)
        with Transaction(self, name) as tx:
            for edit, caret in self._default_edits(name):
                self._splice(edit)
                if caret is not None:
                    self.selection = Selection.caret(caret)
            tx.commit()

    # -- undo ---------------------------------------------------------------

    def undo(self) -> bool:
        entry = self.undo_timeline.undo()
        if entry is None:
            return False
        self.document = BufferDocument.from_text(
            entry.before_text, version=self.document.version + 1
        )
        self.selection = entry.selection_before
        return True

    def redo(self) -> bool:
        entry = self.undo_timeline.redo()
        if entry is None:
            return False
        self.document = BufferDocument.from_text(
            entry.after_text, version=self.document.version + 1
        )
        self.selection = entry.selection_after
        return True

    # -- internals ----------------------------------------------------------

    def _splice(self, edit: Edit) -> None:
        start, end = edit.range.start, edit.range.end
        head = self.document.get_line(start.line)[: start.character]
        tail = self.document.get_line(end.line)[end.character :]
        new_lines = (head + edit.text + tail).split("\n")
        self.document = self.document.update_lines(start.line, end.line + 1, new_lines)

        inserted = edit.text.split("\n")
        if len(inserted) == 1:
            new_end = Position(start.line, start.character + len(edit.text))
        else:
            new_end = Position(start.line + len(inserted) - 1, len(inserted[-1]))
        self.selection = Selection(
            anchor=_map_position(self.selection.anchor, edit.range, new_end),
            active=_map_position(self.selection.active, edit.range, new_end),
        )

    def _default_edits(
        self, name: str
    ) -> list[tuple[Edit, Optional[Position]]]:
        selection = self.selection
        start, end = selection.start, selection.end
        if name == "newline":
            return [(Edit.replace(TextRange(start, end), "\n"), None)]
        if name == "insertLineAfter":
            row = selection.active.line
            eol = Position(row, len(self.document.get_line(row)))
            return [(Edit.insert(eol, "\n"), Position(row + 1, 0))]
        if name == "tab":
            if start.line == end.line:
                return [(Edit.replace(TextRange(start, end), " " * self.tab_size), None)]
            return [
                (Edit.insert(Position(row, 0), " " * self.tab_size), None)
                for row in range(start.line, end.line + 1)
                if self.document.get_line(row)
            ]
        if name == "outdent":
            edits = []
            for row in range(start.line, end.line + 1):
                text = self.document.get_line(row)
                width = min(self.tab_size, len(text) - len(text.lstrip(" ")))
                if width:
                    edits.append((Edit.delete(TextRange.of(row, 0, row, width)), None))
            return edits
        # deleteLeft
        if not selection.is_empty:
            return [(Edit.delete(TextRange(start, end)), None)]
        cursor = selection.active
        if cursor.character > 0:
            left = cursor.with_character(cursor.character - 1)
            return [(Edit.delete(TextRange(left, cursor)), None)]
        if cursor.line > 0:
            previous = Position(
                cursor.line - 1, len(self.document.get_line(cursor.line - 1))
            )
            return [(Edit.delete(TextRange(previous, cursor)), None)]
        return []


def _map_position(position: Position, edited: TextRange, new_end: Position) -> Position:
    if position < edited.start:
        return position
    if position == edited.start and not edited.is_empty:
        return position
    if position >= edited.end:
        if position.line == edited.end.line:
            return Position(
                new_end.line, new_end.character + position.character - edited.end.character
            )
        return Position(
            position.line + new_end.line - edited.end.line, position.character
        )
    return new_end


class Transaction(AbstractContextManager["Transaction"]):
    """Wraps one buffer mutation in a telemetry span and an undo entry."""

    def __init__(self, buffer: Buffer, label: str, *, merge: bool = False) -> None:
        self.buffer = buffer
        self.label = label
        self.merge = merge
        self._span_cm: Optional[ContextManager[object]] = None
        self._before_text = ""
        self._before_selection: Optional[Selection] = None

    def __enter__(self) -> "Transaction":
        self._before_text = self.buffer.document.text
        self._before_selection = self.buffer.selection
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name, "grouped": self.merge},
        )
        self._span_cm.__enter__()
        return self

    def commit(self) -> None:
        assert self._before_selection is not None
        after_text = self.buffer.document.text
        if after_text == self._before_text and not self.merge:
            return
        entry = UndoEntry(
            label=self.label,
            before_text=self._before_text,
            after_text=after_text,
            selection_before=self._before_selection,
            selection_after=self.buffer.selection,
        )
        self.buffer.undo_timeline.push(entry, merge=self.merge)

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


__all__ = ["Buffer", "BufferView", "Transaction"]
