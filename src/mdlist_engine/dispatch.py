"""Key dispatcher routing host key events to list actions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Tuple

from mdlist_engine.keymaps import (
    MARKDOWN_SCOPE,
    KeymapRegistry,
    KeymapResolver,
    KeyStroke,
    ResolutionMatch,
    load_default_keymaps,
)
from mdlist_engine.listedit import HandlerResult, ListEditingEngine
from mdlist_engine.runtime import telemetry


@dataclass(slots=True)
class KeyInput:
    """Normalized key event passed in by host adapters."""

    key: str
    modifiers: Tuple[str, ...] = ()

    @property
    def stroke(self) -> KeyStroke:
        return KeyStroke(self.key, self.modifiers)


DEFAULT_FLAGS: Mapping[str, bool] = {
    "editor_focus": True,
    "read_only": False,
    "suggest_visible": False,
}


class KeyDispatcher:
    """Resolves key events against the keymap and runs the bound action.

    Unbound keys, and keys whose when-clauses fail (read-only editor,
    suggestion popup open), come back as ``status="unbound"`` and the host
    handles them itself.
    """

    def __init__(
        self,
        engine: ListEditingEngine,
        *,
        keymap_registry: KeymapRegistry | None = None,
        keymap_resolver: KeymapResolver | None = None,
        load_defaults: bool = True,
        scope: str = MARKDOWN_SCOPE,
    ) -> None:
        self.engine = engine
        self.scope = scope
        self.keymap_registry = keymap_registry or KeymapRegistry(
            logger_name="mdlist_engine.keymaps"
        )
        if load_defaults and keymap_registry is None:
            load_default_keymaps(self.keymap_registry)
        self.keymap_resolver = keymap_resolver or KeymapResolver(
            self.keymap_registry, logger_name="mdlist_engine.keymaps"
        )
        self.flags: Dict[str, bool] = dict(DEFAULT_FLAGS)

    def set_flag(self, name: str, value: bool) -> None:
        self.flags[name] = value

    def handle_key(
        self, key: KeyInput, *, flags: Optional[Mapping[str, bool]] = None
    ) -> HandlerResult:
        context = {**self.flags, **(flags or {})}
        result = self.keymap_resolver.resolve(self.scope, key.stroke, context=context)
        if result.status != "match" or result.match is None:
            return HandlerResult(handled=False, status="unbound", message=result.token)
        return self._execute_match(result.match)

    def _execute_match(self, match: ResolutionMatch) -> HandlerResult:
        with telemetry.span(
            "keymaps::execute",
            component="keymaps",
            metadata={"binding_id": match.binding.id, "action": match.action.id},
        ):
            outcome = match.action(self.engine, match)

        if isinstance(outcome, HandlerResult):
            return outcome
        return HandlerResult(handled=True)


__all__ = ["DEFAULT_FLAGS", "KeyDispatcher", "KeyInput"]
