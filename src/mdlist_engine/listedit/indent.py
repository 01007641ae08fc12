"""Tab / Shift+Tab handling for list items."""

from __future__ import annotations

from typing import Optional

from mdlist_engine.host import Edit, Position, Selection, TextRange

from .classifier import list_item
from .fence import is_inside_fence
from .indentation import can_indent, indentation_step, leading_whitespace
from .renumber import fix_markers
from .session import HandlerResult, ListContext


def on_tab(context: ListContext, *, outdent: bool = False) -> HandlerResult:
    host = context.host
    selection = host.get_selection()
    row = selection.start.line
    text = host.get_line_text(row)
    default = "outdent" if outdent else "tab"

    if is_inside_fence(host, row):
        return context.passthrough(default, reason="fenced_code")

    item = list_item(text)
    if item is None:
        return context.passthrough(default, reason="not_a_list_item")
    within_marker = selection.start.character <= item.prefix_length
    if not (outdent or not selection.is_empty or within_marker):
        return context.passthrough(default, reason="cursor_in_item_text")

    if outdent:
        outdent_lines(context)
        fix_markers(context.session, context.config)
        return context.edited("outdent")

    if not can_indent(host, row):
        return context.ignored(reason="no_parent_at_level")

    indent_lines(context)
    fix_markers(context.session, context.config)
    return context.edited("indent")


def selected_rows(selection: Selection) -> range:
    """Rows touched by ``selection``; a trailing column-0 end row is excluded."""

    start, end = selection.start, selection.end
    last = end.line
    if not selection.is_empty and end.character == 0 and end.line > start.line:
        last -= 1
    return range(start.line, last + 1)


def indent_lines(context: ListContext) -> None:
    """Indent every selected non-empty line by one step."""

    host = context.host
    selection = host.get_selection()
    step = indentation_step(host, selection.start.line, context.config)
    if step is None:
        context.session.run_default("tab")
        return
    for row in selected_rows(selection):
        if host.get_line_text(row):
            context.session.apply(Edit.insert(Position(row, 0), " " * step))


def outdent_lines(context: ListContext) -> None:
    """Remove up to one step of leading whitespace from every selected line."""

    host = context.host
    selection = host.get_selection()
    step = indentation_step(host, selection.start.line, context.config)
    if step is None:
        context.session.run_default("outdent")
        return
    for row in selected_rows(selection):
        width = _removable(host.get_line_text(row), step)
        if width:
            context.session.apply(Edit.delete(TextRange.of(row, 0, row, width)))


def _removable(text: str, step: int) -> Optional[int]:
    available = len(text) if not text.strip() else leading_whitespace(text)
    return min(step, available) or None


__all__ = ["indent_lines", "on_tab", "outdent_lines", "selected_rows"]
