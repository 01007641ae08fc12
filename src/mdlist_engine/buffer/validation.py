"""Validation helpers shared across buffer services."""

from __future__ import annotations

from mdlist_engine.host import HostEditError, Position, TextRange

from .document import BufferDocument


class BufferValidationError(HostEditError):
    """Raised when an edit or selection points outside the document."""

    def __init__(self, message: str, *, position: Position | None = None) -> None:
        super().__init__(message)
        self.position = position


def ensure_position(document: BufferDocument, position: Position) -> Position:
    row, col = position.line, position.character
    if row < 0 or row >= document.line_count:
        raise BufferValidationError("Row out of range", position=position)
    line = document.get_line(row)
    if col < 0 or col > len(line):
        raise BufferValidationError("Column out of range", position=position)
    return position


def ensure_range(document: BufferDocument, text_range: TextRange) -> TextRange:
    ensure_position(document, text_range.start)
    ensure_position(document, text_range.end)
    return text_range


__all__ = ["BufferValidationError", "ensure_position", "ensure_range"]
