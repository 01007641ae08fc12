"""List-style and task-checkbox toggles for the selected lines."""

from __future__ import annotations

import re
from typing import Optional

from mdlist_engine.host import Edit, Position, TextRange

from .classifier import list_item
from .fence import is_inside_fence
from .indent import selected_rows
from .renumber import fix_markers
from .session import HandlerResult, ListContext

SINGLE_DIGIT_DOT_RE = re.compile(r"^\d\. ")
SINGLE_DIGIT_PAREN_RE = re.compile(r"^\d\) ")


def toggle_list_style(text: str, row: int) -> Edit:
    """Advance ``text`` one step along ``- * + 1. 1) plain``."""

    stripped = text.strip()
    indentation = len(text) if not stripped else text.index(stripped)
    body = text[indentation:]

    def span(width: int) -> TextRange:
        return TextRange.of(row, indentation, row, indentation + width)

    if body.startswith("- "):
        return Edit.replace(span(2), "* ")
    if body.startswith("* "):
        return Edit.replace(span(2), "+ ")
    if body.startswith("+ "):
        return Edit.replace(span(2), "1. ")
    if SINGLE_DIGIT_DOT_RE.match(body):
        return Edit.replace(TextRange.of(row, indentation + 1, row, indentation + 2), ")")
    if SINGLE_DIGIT_PAREN_RE.match(body):
        return Edit.delete(span(3))
    return Edit.insert(Position(row, indentation), "- ")


def toggle_task_state(text: str, row: int) -> Optional[Edit]:
    """Flip the checkbox on ``text``, or add an unchecked one to a bare item."""

    item = list_item(text)
    if item is None:
        return None
    box_start = item.content_column
    if item.checkbox is None:
        return Edit.insert(Position(row, box_start), "[ ] ")
    state = " " if item.checkbox == "x" else "x"
    return Edit.replace(TextRange.of(row, box_start + 1, row, box_start + 2), state)


def on_toggle_list(context: ListContext) -> HandlerResult:
    host = context.host
    selection = host.get_selection()
    if is_inside_fence(host, selection.start.line):
        return context.ignored(reason="fenced_code")
    for row in selected_rows(selection):
        context.session.apply(toggle_list_style(host.get_line_text(row), row))
    fix_markers(context.session, context.config)
    return context.edited("toggle_list")


def on_toggle_task(context: ListContext) -> HandlerResult:
    host = context.host
    selection = host.get_selection()
    if is_inside_fence(host, selection.start.line):
        return context.ignored(reason="fenced_code")
    for row in selected_rows(selection):
        edit = toggle_task_state(host.get_line_text(row), row)
        if edit is not None:
            context.session.apply(edit)
    if not context.session.edit_count:
        return context.ignored(reason="no_list_item")
    return context.edited("toggle_task")


__all__ = [
    "on_toggle_list",
    "on_toggle_task",
    "toggle_list_style",
    "toggle_task_state",
]
