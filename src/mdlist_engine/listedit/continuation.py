"""Enter / Shift+Enter / Ctrl+Enter handling."""

from __future__ import annotations

from typing import Literal

from mdlist_engine.host import Edit, Position, Selection, line_at

from .classifier import ItemKind, ListItemMatch, classify, is_empty_item
from .fence import is_inside_fence
from .renumber import find_next_marker_line, fix_markers
from .session import HandlerResult, ListContext

Modifier = Literal["none", "shift", "ctrl"]


def on_enter(context: ListContext, modifier: Modifier = "none") -> HandlerResult:
    host = context.host
    cursor = host.get_selection().active
    line = line_at(host, cursor.line)
    before = line.text[: cursor.character]
    after = line.text[cursor.character :]

    default = "insertLineAfter" if modifier == "ctrl" else "newline"
    if modifier == "shift":
        return context.passthrough(default, reason="shift_enter")
    if is_inside_fence(host, cursor.line):
        return context.passthrough(default, reason="fenced_code")

    if is_empty_item(before) and not after.strip():
        return _exit_list(context, line.index)

    break_at = cursor
    if modifier == "ctrl":
        break_at = Position(line.index, line.length)

    item = classify(before)
    if not isinstance(item, ListItemMatch):
        return context.passthrough(default, reason="plain_text")

    if item.kind is ItemKind.QUOTE:
        prefix = "> "
    elif item.is_ordered:
        prefix = _next_ordered_prefix(context, item)
    else:
        prefix = item.indent + item.marker_prefix + _unchecked(item)

    context.session.apply(Edit.insert(break_at, "\n" + prefix))
    if modifier == "ctrl" and break_at != cursor:
        context.session.select(Selection.caret(Position(line.index + 1, len(prefix))))

    if item.is_ordered:
        fix_markers(context.session, context.config, line.index + 1)
    context.session.reveal_cursor()
    return context.edited(f"continue_{item.kind.value}")


def _exit_list(context: ListContext, row: int) -> HandlerResult:
    """Drop the empty marker on ``row`` and leave a plain line instead."""

    line = line_at(context.host, row)
    context.session.apply(Edit.replace(line.range, "\n"))
    context.session.reveal_cursor()
    next_marker = find_next_marker_line(
        context.host, context.host.get_selection().start.line
    )
    if next_marker is not None:
        fix_markers(context.session, context.config, next_marker)
    return context.edited("exit_list")


def _unchecked(item: ListItemMatch) -> str:
    # New items never inherit a completed checkbox.
    if not item.checkbox_text:
        return ""
    return "[ ]" + item.checkbox_text[3:]


def _next_ordered_prefix(context: ListContext, item: ListItemMatch) -> str:
    previous = int(item.marker)
    delimiter = item.delimiter or "."
    marker = str(previous + 1) if context.config.increments_markers else "1"
    text_indent = len(item.marker_prefix)
    trailing = " " * max(1, text_indent - len(marker + delimiter))
    return item.indent + marker + delimiter + trailing + _unchecked(item)


__all__ = ["Modifier", "on_enter"]
