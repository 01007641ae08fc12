"""Indentation of list items, parent lookup, and adaptive indent sizing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from mdlist_engine.config import ListEditingConfig
from mdlist_engine.host import TextHost

from .classifier import list_item


@dataclass(frozen=True, slots=True)
class IndentationInfo:
    leading_spaces: int
    indent_level: int


@dataclass(frozen=True, slots=True)
class ParentItem:
    line: int
    indent_level: int


def prefix_length(text: str) -> int:
    """Length of indent + marker + checkbox, or ``0`` for non-list lines."""

    item = list_item(text)
    return item.prefix_length if item else 0


def indentation_of(text: str) -> IndentationInfo:
    item = list_item(text)
    if item is None:
        return IndentationInfo(leading_spaces=0, indent_level=0)
    return IndentationInfo(
        leading_spaces=item.leading_spaces, indent_level=item.indent_level
    )


def leading_whitespace(text: str) -> int:
    return len(text) - len(text.lstrip())


def find_parent_item(
    host: TextHost, line: int, indent_level: int
) -> Optional[ParentItem]:
    """Nearest list item above ``line`` whose level is at most ``indent_level``."""

    for row in range(line - 1, -1, -1):
        item = list_item(host.get_line_text(row))
        if item is not None and item.indent_level <= indent_level:
            return ParentItem(line=row, indent_level=item.indent_level)
    return None


def can_indent(host: TextHost, line: int) -> bool:
    """Indenting is legal at level 0 with no parent, or at the parent's level."""

    level = indentation_of(host.get_line_text(line)).indent_level
    parent = find_parent_item(host, line, level)
    if parent is None:
        return level == 0
    return level == parent.indent_level


def adaptive_indentation_size(
    host: TextHost, line: int, current_indentation: int
) -> Optional[int]:
    """Marker width of the nearest earlier item not deeper than ``current_indentation``."""

    for row in range(line - 1, -1, -1):
        item = list_item(host.get_line_text(row))
        if item is not None and item.leading_spaces <= current_indentation:
            return len(item.marker_prefix)
    return None


def indentation_step(
    host: TextHost, line: int, config: ListEditingConfig
) -> Optional[int]:
    """Width of one indent/outdent step at ``line``.

    ``None`` means adaptive sizing found no earlier list item; callers fall
    back to the host's own indent/outdent command.
    """

    if not config.adaptive:
        return int(config.indentation_size)
    text = host.get_line_text(line)
    return adaptive_indentation_size(host, line, leading_whitespace(text))


__all__ = [
    "IndentationInfo",
    "ParentItem",
    "adaptive_indentation_size",
    "can_indent",
    "find_parent_item",
    "indentation_of",
    "indentation_step",
    "leading_whitespace",
    "prefix_length",
]
