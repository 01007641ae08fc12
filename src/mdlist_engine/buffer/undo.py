"""Undo/redo history with grouping for multi-edit keystrokes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from mdlist_engine.host import Selection


@dataclass(slots=True)
class UndoEntry:
    """Whole-text before/after images of one undoable step."""

    label: str
    before_text: str
    after_text: str
    selection_before: Selection
    selection_after: Selection
    edit_count: int = 1


class UndoTimeline:
    """Two stacks: steps that can be undone and steps that can be redone.

    ``push(..., merge=True)`` folds the entry into the newest undoable
    step, which is how a keystroke and the renumbering it triggers come
    back as one undo.
    """

    def __init__(self) -> None:
        self._done: List[UndoEntry] = []
        self._undone: List[UndoEntry] = []

    def __len__(self) -> int:
        return len(self._done) + len(self._undone)

    def push(self, entry: UndoEntry, *, merge: bool = False) -> None:
        self._undone.clear()
        if not (merge and self._done):
            self._done.append(entry)
            return
        step = self._done[-1]
        step.after_text = entry.after_text
        step.selection_after = entry.selection_after
        step.edit_count += entry.edit_count

    def can_undo(self) -> bool:
        return bool(self._done)

    def can_redo(self) -> bool:
        return bool(self._undone)

    def undo(self) -> Optional[UndoEntry]:
        if not self._done:
            return None
        step = self._done.pop()
        self._undone.append(step)
        return step

    def redo(self) -> Optional[UndoEntry]:
        if not self._undone:
            return None
        step = self._undone.pop()
        self._done.append(step)
        return step


__all__ = ["UndoEntry", "UndoTimeline"]
