"""Per-keystroke edit session, handler context, and handler results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from mdlist_engine.config import ListEditingConfig
from mdlist_engine.host import DefaultCommand, Edit, Selection, TextHost
from mdlist_engine.runtime import telemetry

HandlerStatus = Literal["edited", "passthrough", "ignored", "unbound"]


@dataclass(slots=True)
class HandlerResult:
    """Outcome of one keystroke handler.

    ``handled`` is ``True`` only when the engine issued its own edits.
    """

    handled: bool
    status: HandlerStatus = "edited"
    edits: int = 0
    message: Optional[str] = None


class EditSession:
    """Applies every edit of one keystroke as a single undo step.

    The first physical change (an edit or a delegated default command)
    opens the undo step; later edits are grouped with it.
    """

    def __init__(self, host: TextHost, *, label: str = "keystroke") -> None:
        self.host = host
        self.label = label
        self.edit_count = 0
        self.default_commands: list[str] = []
        self._started = False

    def apply(self, edit: Edit) -> None:
        self.host.apply_edit(edit, group_with_previous=self._started)
        self._started = True
        self.edit_count += 1

    def run_default(self, name: DefaultCommand) -> None:
        self.host.execute_default_command(name)
        self._started = True
        self.default_commands.append(name)

    def select(self, selection: Selection) -> None:
        self.host.set_selection(selection)

    def reveal_cursor(self) -> None:
        self.host.reveal_line(self.host.get_selection().active.line)


@dataclass(slots=True)
class ListContext:
    """Services every handler receives."""

    host: TextHost
    config: ListEditingConfig
    session: EditSession

    def passthrough(self, command: DefaultCommand, *, reason: str) -> HandlerResult:
        """Hand the keystroke back to the host's default behaviour."""

        telemetry.record_event(
            "listedit.passthrough",
            level="debug",
            data={"command": command, "reason": reason},
        )
        self.session.run_default(command)
        return HandlerResult(handled=False, status="passthrough", message=reason)

    def ignored(self, *, reason: str) -> HandlerResult:
        telemetry.record_event(
            "listedit.ignored", level="debug", data={"reason": reason}
        )
        return HandlerResult(handled=False, status="ignored", message=reason)

    def edited(self, message: str) -> HandlerResult:
        return HandlerResult(
            handled=True,
            status="edited",
            edits=self.session.edit_count,
            message=message,
        )


__all__ = ["EditSession", "HandlerResult", "HandlerStatus", "ListContext"]
