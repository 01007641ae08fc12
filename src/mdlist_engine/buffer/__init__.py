"""In-memory Text Host: document storage, selection mapping, and undo."""

from .buffer import Buffer, BufferView, Transaction
from .document import BufferDocument
from .undo import UndoEntry, UndoTimeline
from .validation import BufferValidationError, ensure_position, ensure_range

__all__ = [
    "Buffer",
    "BufferDocument",
    "BufferValidationError",
    "BufferView",
    "Transaction",
    "UndoEntry",
    "UndoTimeline",
    "ensure_position",
    "ensure_range",
]
