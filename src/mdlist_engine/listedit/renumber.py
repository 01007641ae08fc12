"""Ordered-list marker renumbering.

After a structural edit, :func:`fix_markers` walks forward from the edited
line and rewrites ordered markers so every run stays contiguous. The walk
is an explicit loop; each fix is applied before the next line is read so
line numbers never move underneath it.
"""

from __future__ import annotations

import re
from typing import Optional, Tuple

from mdlist_engine.config import ListEditingConfig
from mdlist_engine.host import Edit, TextHost, TextRange
from mdlist_engine.runtime import telemetry

from .classifier import ListItemMatch, ordered_item
from .session import EditSession

NON_BLANK_RE = re.compile(r"^(\s*)\S")


def find_next_marker_line(host: TextHost, from_line: int) -> Optional[int]:
    """First ordered-item line at or after ``from_line``."""

    for row in range(max(from_line, 0), host.get_line_count()):
        if ordered_item(host.get_line_text(row)) is not None:
            return row
    return None


def look_upward_for_marker(
    host: TextHost, line: int, indentation: int
) -> Optional[int]:
    """Number the item at ``line`` should carry, from the run above it.

    Returns ``previous + 1`` for the nearest ordered item at the same
    indentation, or ``None`` when the upward scan reaches a shallower item
    or shallower text first (``line`` starts its run).
    """

    return _scan_upward(host, line, indentation)[0]


def _scan_upward(
    host: TextHost, line: int, indentation: int
) -> Tuple[Optional[int], bool]:
    """``(next number, nested)``; ``nested`` when an enclosing item ends the scan."""

    for row in range(line - 1, -1, -1):
        text = host.get_line_text(row)
        item = ordered_item(text)
        if item is not None:
            if item.leading_spaces == indentation:
                return int(item.marker) + 1, False
            if _encloses(item, indentation):
                return None, True

        match = NON_BLANK_RE.match(text)
        if match and len(match.group(1)) <= indentation:
            break
    return None, False


def _encloses(item: ListItemMatch, indentation: int) -> bool:
    if "\t" in item.indent:
        return item.leading_spaces + 1 <= indentation
    return item.content_column <= indentation


def expected_marker(
    host: TextHost,
    line: int,
    item: ListItemMatch,
    config: ListEditingConfig,
    *,
    keep_run_start: bool = False,
) -> int:
    """Marker number ``item`` should carry.

    An item opening a nested run under a shallower ordered item restarts at
    1. With ``keep_run_start``, an item with no run above it keeps its own
    number; otherwise it gets 1.
    """

    if not config.increments_markers:
        return 1
    found, nested = _scan_upward(host, line, item.leading_spaces)
    if found is not None:
        return found
    if keep_run_start and not nested:
        return int(item.marker)
    return 1


def marker_edit(line: int, item: ListItemMatch, number: int) -> Optional[Edit]:
    """Edit rewriting ``item``'s marker to ``number``, keeping its text column."""

    if item.marker == str(number):
        return None
    delimiter = item.delimiter or "."
    width = len(item.marker_prefix)
    head = f"{number}{delimiter}"
    replacement = head + " " * max(1, width - len(head))
    start = item.leading_spaces
    return Edit.replace(TextRange.of(line, start, line, start + width), replacement)


def _continues_list(text: str, body_column: int) -> bool:
    return len(text) - len(text.lstrip()) >= body_column


def fix_markers(
    session: EditSession,
    config: ListEditingConfig,
    start_line: Optional[int] = None,
) -> bool:
    """Renumber ordered markers from ``start_line`` onwards.

    ``start_line`` defaults to the first ordered item inside the selection,
    or the active line when there is none. The first line keeps its number
    when nothing above it belongs to its run, so a run's starting number
    survives. The walk follows ordered items at any depth, skips blank
    lines and list body text indented past the current item's marker, and
    stops at the first shallower line. Returns ``True`` when at least one
    marker was rewritten, so a second run without intervening edits
    returns ``False``.
    """

    host = session.host
    if start_line is None:
        selection = host.get_selection()
        start_line = find_next_marker_line(host, selection.start.line)
        if start_line is None or start_line > selection.end.line:
            start_line = selection.active.line
    if not 0 <= start_line < host.get_line_count():
        return False

    row: Optional[int] = start_line
    body_column: Optional[int] = None
    changed = 0
    while row is not None:
        item = ordered_item(host.get_line_text(row))
        if item is None:
            break

        number = expected_marker(
            host, row, item, config, keep_run_start=row == start_line
        )
        edit = marker_edit(row, item, number)
        if edit is not None:
            session.apply(edit)
            changed += 1
            # Re-read: the marker width may have changed.
            item = ordered_item(host.get_line_text(row)) or item

        if body_column is None or item.content_column < body_column:
            body_column = item.content_column
        row = _next_ordered_line(host, row + 1, body_column)

    if changed:
        telemetry.record_event(
            "listedit.renumber",
            level="debug",
            data={"start_line": start_line, "changed": changed},
        )
    return changed > 0


def _next_ordered_line(host: TextHost, row: int, body_column: int) -> Optional[int]:
    while row < host.get_line_count():
        text = host.get_line_text(row)
        if ordered_item(text) is not None:
            return row
        if text.strip() and not _continues_list(text, body_column):
            return None
        row += 1
    return None


__all__ = [
    "expected_marker",
    "find_next_marker_line",
    "fix_markers",
    "look_upward_for_marker",
    "marker_edit",
]
