"""Versioned line storage for the in-memory host."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence


@dataclass(frozen=True, slots=True)
class BufferDocument:
    """A tuple of rows plus a version counter.

    Splicing rows yields a new document one version later; a document
    handed out earlier keeps its rows.
    """

    rows: tuple[str, ...] = ("",)
    version: int = 0

    @classmethod
    def from_text(cls, text: str, *, version: int = 0) -> "BufferDocument":
        # A trailing newline leaves an empty last row, as in an editor.
        return cls(tuple(text.split("\n")), version)

    @property
    def text(self) -> str:
        return "\n".join(self.rows)

    @property
    def line_count(self) -> int:
        return len(self.rows)

    def get_line(self, index: int) -> str:
        return self.rows[index]

    def snapshot(self) -> Sequence[str]:
        return self.rows

    def update_lines(
        self, start: int, end: int, new_lines: Iterable[str]
    ) -> "BufferDocument":
        """Splice ``new_lines`` over rows ``start`` up to ``end``."""

        rows = self.rows[:start] + tuple(new_lines) + self.rows[end:]
        return BufferDocument(rows, self.version + 1)


__all__ = ["BufferDocument"]
