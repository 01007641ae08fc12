"""Built-in bindings for the Markdown list keystrokes."""

from __future__ import annotations

from typing import Callable, Iterable, Sequence

from mdlist_engine.actions import editing as editing_actions

from .models import ActionRef, Binding, KeyStroke, WhenClause
from .registry import KeymapRegistry

MARKDOWN_SCOPE = "markdown"

# Focused, writable editor with no completion popup open.
EDITOR_CONTEXT: tuple[WhenClause, ...] = (
    WhenClause("editor_focus"),
    WhenClause.parse("!read_only"),
    WhenClause.parse("!suggest_visible"),
)

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(
        id="list.enter",
        handler=editing_actions.enter,
        description="Continue or exit the current list item",
    ),
    ActionRef(
        id="list.shift_enter",
        handler=editing_actions.shift_enter,
        description="Insert a plain line break",
    ),
    ActionRef(
        id="list.ctrl_enter",
        handler=editing_actions.ctrl_enter,
        description="Start a new item after the whole line",
    ),
    ActionRef(
        id="list.indent",
        handler=editing_actions.indent,
        description="Indent the current list item",
    ),
    ActionRef(
        id="list.outdent",
        handler=editing_actions.outdent,
        description="Outdent the current list item",
    ),
    ActionRef(
        id="list.backspace",
        handler=editing_actions.backspace,
        description="Collapse the marker or checkbox before the cursor",
    ),
    ActionRef(
        id="list.toggle_list",
        handler=editing_actions.toggle_list,
        description="Cycle the list style of the selected lines",
    ),
    ActionRef(
        id="list.toggle_task",
        handler=editing_actions.toggle_task,
        description="Check or uncheck the selected tasks",
    ),
)


def _binding(binding_id: str, chord: str, action_id: str, description: str) -> Binding:
    return Binding(
        id=binding_id,
        scope=MARKDOWN_SCOPE,
        stroke=KeyStroke.parse(chord),
        action_id=action_id,
        description=description,
        when=EDITOR_CONTEXT,
    )


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    _binding("markdown.enter", "enter", "list.enter", "Continue list"),
    _binding("markdown.shift_enter", "shift+enter", "list.shift_enter", "Line break"),
    _binding("markdown.ctrl_enter", "ctrl+enter", "list.ctrl_enter", "New item below"),
    _binding("markdown.meta_enter", "meta+enter", "list.ctrl_enter", "New item below"),
    _binding("markdown.tab", "tab", "list.indent", "Indent item"),
    _binding("markdown.shift_tab", "shift+tab", "list.outdent", "Outdent item"),
    _binding("markdown.backspace", "backspace", "list.backspace", "Collapse marker"),
    _binding("markdown.toggle_list", "ctrl+l", "list.toggle_list", "Toggle list"),
    _binding("markdown.toggle_task", "alt+c", "list.toggle_task", "Toggle task"),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    include_bindings: Sequence[str] | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> None:
    """Register the list actions and their default chords.

    ``include_bindings`` limits the defaults to the named ids and
    ``exclude_bindings`` drops ids from them. ``extra_bindings`` are
    registered after the defaults and are never filtered.
    """

    wanted = _binding_filter(include_bindings, exclude_bindings)

    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=replace)

    for binding in (*filter(wanted, DEFAULT_BINDINGS), *(extra_bindings or ())):
        registry.register_binding(binding, replace=replace)


def _binding_filter(
    include: Sequence[str] | None, exclude: Sequence[str] | None
) -> Callable[[Binding], bool]:
    skipped = frozenset(exclude or ())
    kept = frozenset(include) if include else None

    def wanted(binding: Binding) -> bool:
        if binding.id in skipped:
            return False
        return kept is None or binding.id in kept

    return wanted


__all__ = [
    "DEFAULT_ACTIONS",
    "DEFAULT_BINDINGS",
    "EDITOR_CONTEXT",
    "MARKDOWN_SCOPE",
    "load_default_keymaps",
]
