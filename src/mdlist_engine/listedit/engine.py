"""Facade exposing one method per keystroke the host forwards."""

from __future__ import annotations

from typing import Callable, Optional

from mdlist_engine.config import ListEditingConfig
from mdlist_engine.host import TextHost
from mdlist_engine.runtime import telemetry

from .backspace import on_backspace
from .continuation import Modifier, on_enter
from .indent import on_tab
from .renumber import fix_markers
from .session import EditSession, HandlerResult, ListContext
from .toggle import on_toggle_list, on_toggle_task

Handler = Callable[[ListContext], HandlerResult]


class ListEditingEngine:
    """Runs list handlers against a host, one edit session per keystroke."""

    def __init__(
        self,
        host: TextHost,
        config: Optional[ListEditingConfig] = None,
        *,
        name: str = "default",
    ) -> None:
        self.host = host
        self.config = config or ListEditingConfig()
        self.name = name

    def enter(self, modifier: Modifier = "none") -> HandlerResult:
        return self._run(f"enter.{modifier}", lambda ctx: on_enter(ctx, modifier))

    def tab(self) -> HandlerResult:
        return self._run("tab", on_tab)

    def shift_tab(self) -> HandlerResult:
        return self._run("shift_tab", lambda ctx: on_tab(ctx, outdent=True))

    def backspace(self) -> HandlerResult:
        return self._run("backspace", on_backspace)

    def toggle_list(self) -> HandlerResult:
        return self._run("toggle_list", on_toggle_list)

    def toggle_task(self) -> HandlerResult:
        return self._run("toggle_task", on_toggle_task)

    def fix_markers(self, start_line: Optional[int] = None) -> bool:
        """Renumber ordered markers on demand, e.g. after a paste."""

        session = EditSession(self.host, label="fix_markers")
        with telemetry.span(
            "listedit::fix_markers",
            component="listedit",
            metadata={"engine": self.name, "start_line": start_line},
        ):
            return fix_markers(session, self.config, start_line)

    def _run(self, label: str, handler: Handler) -> HandlerResult:
        session = EditSession(self.host, label=label)
        context = ListContext(host=self.host, config=self.config, session=session)
        with telemetry.span(
            f"listedit::{label}",
            component="listedit",
            metadata={"engine": self.name},
        ) as handle:
            result = handler(context)
            handle.add_metadata("status", result.status)
            handle.add_metadata("edits", session.edit_count)
        return result


__all__ = ["ListEditingEngine"]
