"""Line classification: plain text, quote, bullet, ordered, or task item.

A classification depends on the line text alone, so callers recompute it
from the live document on every keystroke instead of caching it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

QUOTE_RE = re.compile(r"^> ")
UNORDERED_RE = re.compile(r"^(\s*)([-+*])( +)(\[([ xX])\] +)?")
ORDERED_RE = re.compile(r"^(\s*)([0-9]+)([.)])( +)(\[([ xX])\] +)?")

# A marker (and optional checkbox) with nothing typed after it yet.
EMPTY_ITEM_RE = re.compile(r"^(>|([-+*]|[0-9]+[.)])( +\[[ xX]\])?)$")


class ItemKind(str, Enum):
    QUOTE = "quote"
    UNORDERED = "unordered"
    ORDERED = "ordered"
    TASK = "task"


@dataclass(frozen=True, slots=True)
class PlainText:
    """Any line that is not a quote or list item."""

    text: str

    @property
    def kind(self) -> None:
        return None


@dataclass(frozen=True, slots=True)
class ListItemMatch:
    """Decomposed list prefix of a single line.

    ``indent + marker + delimiter + trailing_space + checkbox_text`` is the
    full prefix; the item's own text starts right after it. ``number`` is
    set for ordered items, including ordered task items.
    """

    kind: ItemKind
    indent: str
    marker: str
    trailing_space: str
    delimiter: Optional[str] = None
    checkbox: Optional[str] = None
    checkbox_text: str = ""

    @property
    def leading_spaces(self) -> int:
        return len(self.indent)

    @property
    def indent_level(self) -> int:
        return self.leading_spaces // 2

    @property
    def number(self) -> Optional[int]:
        if self.delimiter is None or not self.marker.isdigit():
            return None
        return int(self.marker)

    @property
    def is_ordered(self) -> bool:
        return self.number is not None

    @property
    def is_task(self) -> bool:
        return self.checkbox is not None

    @property
    def is_list_item(self) -> bool:
        return self.kind is not ItemKind.QUOTE

    @property
    def marker_prefix(self) -> str:
        """Bullet or number, delimiter, and the spaces after them."""

        return self.marker + (self.delimiter or "") + self.trailing_space

    @property
    def prefix(self) -> str:
        return self.indent + self.marker_prefix + self.checkbox_text

    @property
    def prefix_length(self) -> int:
        return len(self.prefix)

    @property
    def content_column(self) -> int:
        """Column where the item body starts, ignoring any checkbox."""

        return self.leading_spaces + len(self.marker_prefix)


LineClass = Union[PlainText, ListItemMatch]


def classify(text: str) -> LineClass:
    """Classify ``text``; unmatched or malformed input is :class:`PlainText`."""

    if QUOTE_RE.match(text):
        return ListItemMatch(
            kind=ItemKind.QUOTE, indent="", marker=">", trailing_space=" "
        )

    match = UNORDERED_RE.match(text)
    if match:
        indent, bullet, spaces, checkbox_text, state = match.groups()
        return ListItemMatch(
            kind=ItemKind.TASK if checkbox_text else ItemKind.UNORDERED,
            indent=indent,
            marker=bullet,
            trailing_space=spaces,
            checkbox=_normalize_checkbox(state),
            checkbox_text=checkbox_text or "",
        )

    match = ORDERED_RE.match(text)
    if match:
        indent, number, delimiter, spaces, checkbox_text, state = match.groups()
        return ListItemMatch(
            kind=ItemKind.TASK if checkbox_text else ItemKind.ORDERED,
            indent=indent,
            marker=number,
            delimiter=delimiter,
            trailing_space=spaces,
            checkbox=_normalize_checkbox(state),
            checkbox_text=checkbox_text or "",
        )

    return PlainText(text)


def list_item(text: str) -> Optional[ListItemMatch]:
    """Return the bullet/ordered/task match for ``text``; quotes are excluded."""

    result = classify(text)
    if isinstance(result, ListItemMatch) and result.is_list_item:
        return result
    return None


def ordered_item(text: str) -> Optional[ListItemMatch]:
    result = classify(text)
    if isinstance(result, ListItemMatch) and result.is_ordered:
        return result
    return None


def is_empty_item(before_cursor: str) -> bool:
    return EMPTY_ITEM_RE.match(before_cursor.strip()) is not None


def _normalize_checkbox(state: Optional[str]) -> Optional[str]:
    if state is None:
        return None
    return state.lower()


__all__ = [
    "ItemKind",
    "LineClass",
    "ListItemMatch",
    "PlainText",
    "classify",
    "is_empty_item",
    "list_item",
    "ordered_item",
]
