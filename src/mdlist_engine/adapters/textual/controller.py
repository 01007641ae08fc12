"""Textual ``TextArea`` host and key adapter for the list engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from textual.widgets.text_area import Selection as AreaSelection

from mdlist_engine.dispatch import KeyDispatcher, KeyInput
from mdlist_engine.host import (
    DefaultCommand,
    Edit,
    HostEditError,
    Position,
    Selection,
)
from mdlist_engine.listedit import HandlerResult
from mdlist_engine.listedit.indent import selected_rows


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


def _to_position(location: tuple[int, int]) -> Position:
    return Position(location[0], location[1])


class TextAreaHost:
    """:class:`~mdlist_engine.host.TextHost` over a Textual ``TextArea``.

    Ungrouped edits start a new history checkpoint so one keystroke plus
    its renumbering undo together.
    """

    def __init__(
        self,
        area: Any,
        *,
        delete_left: Optional[Callable[[], None]] = None,
    ) -> None:
        self.area = area
        self._delete_left = delete_left or area.action_delete_left

    def get_line_count(self) -> int:
        return self.area.document.line_count

    def get_line_text(self, line: int) -> str:
        return self.area.document.get_line(line)

    def get_selection(self) -> Selection:
        selection = self.area.selection
        return Selection(
            anchor=_to_position(selection.start), active=_to_position(selection.end)
        )

    def set_selection(self, selection: Selection) -> None:
        self.area.selection = AreaSelection(
            selection.anchor.as_tuple(), selection.active.as_tuple()
        )

    def apply_edit(self, edit: Edit, *, group_with_previous: bool = False) -> None:
        if not group_with_previous:
            self.area.history.checkpoint()
        cursor = self.get_selection().active
        # Text inserted at the caret pushes the caret past it.
        follow = edit.range.start == cursor
        try:
            self.area.replace(
                edit.text,
                edit.range.start.as_tuple(),
                edit.range.end.as_tuple(),
                maintain_selection_offset=not follow,
            )
        except ValueError as exc:
            raise HostEditError(str(exc)) from exc

    def reveal_line(self, line: int) -> None:
        del line
        self.area.scroll_cursor_visible()

    def execute_default_command(self, name: DefaultCommand) -> None:
        area = self.area
        selection = self.get_selection()
        start, end = selection.start.as_tuple(), selection.end.as_tuple()
        area.history.checkpoint()
        if name == "newline":
            area.replace("\n", start, end, maintain_selection_offset=False)
        elif name == "insertLineAfter":
            row = selection.active.line
            eol = (row, len(self.get_line_text(row)))
            area.replace("\n", eol, eol, maintain_selection_offset=False)
        elif name == "tab":
            area.replace(" " * area.indent_width, start, end, maintain_selection_offset=False)
        elif name == "outdent":
            for row in selected_rows(selection):
                text = self.get_line_text(row)
                width = min(area.indent_width, len(text) - len(text.lstrip(" ")))
                if width:
                    area.replace("", (row, 0), (row, width))
        elif name == "deleteLeft":
            self._delete_left()
        else:
            raise HostEditError(f"Unknown default command '{name}'")


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_status: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


class TextualListAdapter:
    """Translates Textual key names (``shift+tab``) into dispatcher calls."""

    def __init__(
        self, dispatcher: KeyDispatcher, hooks: Optional[TextualUIHooks] = None
    ) -> None:
        self.dispatcher = dispatcher
        self.hooks = hooks or TextualUIHooks()

    def handle_textual_key(
        self, key: str, *, flags: Optional[Dict[str, bool]] = None
    ) -> HandlerResult:
        parts = key.split("+")
        key_input = KeyInput(key=parts[-1], modifiers=tuple(parts[:-1]))
        self.hooks.log(f"key -> {key}")
        result = self.dispatcher.handle_key(key_input, flags=flags)
        if result.status != "unbound":
            self.hooks.update_status(result.message or result.status)
        self.hooks.log(
            f"result <- status={result.status} handled={result.handled} edits={result.edits}"
        )
        return result


__all__ = ["TextAreaHost", "TextualListAdapter", "TextualUIHooks"]
