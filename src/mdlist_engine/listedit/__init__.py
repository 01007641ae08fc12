"""List continuation, indentation, renumbering, and backspace handling."""

from .backspace import on_backspace
from .classifier import (
    ItemKind,
    LineClass,
    ListItemMatch,
    PlainText,
    classify,
    list_item,
    ordered_item,
)
from .continuation import Modifier, on_enter
from .engine import ListEditingEngine
from .fence import is_inside_fence
from .indent import on_tab
from .indentation import (
    adaptive_indentation_size,
    can_indent,
    find_parent_item,
    indentation_step,
    prefix_length,
)
from .renumber import find_next_marker_line, fix_markers, look_upward_for_marker
from .session import EditSession, HandlerResult, ListContext
from .toggle import on_toggle_list, on_toggle_task

__all__ = [
    "EditSession",
    "HandlerResult",
    "ItemKind",
    "LineClass",
    "ListContext",
    "ListEditingEngine",
    "ListItemMatch",
    "Modifier",
    "PlainText",
    "adaptive_indentation_size",
    "can_indent",
    "classify",
    "find_next_marker_line",
    "find_parent_item",
    "fix_markers",
    "indentation_step",
    "is_inside_fence",
    "list_item",
    "look_upward_for_marker",
    "on_backspace",
    "on_enter",
    "on_tab",
    "on_toggle_list",
    "on_toggle_task",
    "ordered_item",
    "prefix_length",
]
