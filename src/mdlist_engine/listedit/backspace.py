"""Backspace handling right after a list marker or checkbox."""

from __future__ import annotations

import re

from mdlist_engine.host import Edit, TextRange

from .fence import is_inside_fence
from .indent import outdent_lines
from .renumber import find_next_marker_line, fix_markers
from .session import HandlerResult, ListContext

INDENTED_MARKER_RE = re.compile(r"^\s+([-+*]|[0-9]+[.)]) $")
BARE_MARKER_RE = re.compile(r"^([-+*]|[0-9]+[.)]) $")
CHECKBOX_RE = re.compile(r"^\s*([-+*]|[0-9]+[.)]) +(\[[ xX]\] )$")

CHECKBOX_WIDTH = len("[ ] ")


def on_backspace(context: ListContext) -> HandlerResult:
    host = context.host
    selection = host.get_selection()
    cursor = selection.active
    before = host.get_line_text(cursor.line)[: cursor.character]

    if is_inside_fence(host, cursor.line):
        return context.passthrough("deleteLeft", reason="fenced_code")

    if not selection.is_empty:
        context.session.run_default("deleteLeft")
        _fix_from_cursor(context)
        return context.edited("delete_selection")

    if INDENTED_MARKER_RE.match(before):
        # e.g. "  - ", "   1. "
        outdent_lines(context)
        fix_markers(context.session, context.config)
        return context.edited("outdent_marker")

    if BARE_MARKER_RE.match(before):
        # e.g. "- ", "1. "
        context.session.apply(
            Edit.replace(
                TextRange(cursor.with_character(0), cursor), " " * len(before)
            )
        )
        _fix_from_cursor(context)
        return context.edited("clear_marker")

    if CHECKBOX_RE.match(before):
        # e.g. "- [ ] ", "1. [x] ", "  - [x] "
        start = cursor.with_character(cursor.character - CHECKBOX_WIDTH)
        context.session.apply(Edit.delete(TextRange(start, cursor)))
        _fix_from_cursor(context)
        return context.edited("clear_checkbox")

    return context.passthrough("deleteLeft", reason="no_marker_before_cursor")


def _fix_from_cursor(context: ListContext) -> None:
    host = context.host
    start = find_next_marker_line(host, host.get_selection().start.line)
    if start is not None:
        fix_markers(context.session, context.config, start)


__all__ = ["on_backspace"]
