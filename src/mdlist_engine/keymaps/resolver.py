"""Key chord resolution with telemetry instrumentation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Mapping, Optional

from mdlist_engine.runtime.telemetry import span

from .models import ActionRef, Binding, KeyStroke
from .registry import KeymapRegistry


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    """Resolved binding paired with its action."""

    binding: Binding
    action: ActionRef


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    """Outcome returned from the resolver."""

    status: Literal["match", "miss"]
    match: Optional[ResolutionMatch] = None
    token: str = ""


class KeymapResolver:
    """Picks the binding a key chord triggers under the current flags.

    Among bindings whose when-clauses hold, the highest ``priority`` wins;
    ties go to the lexically smallest binding id.
    """

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name

    def resolve(
        self,
        scope: str,
        stroke: KeyStroke | str,
        *,
        context: Optional[Mapping[str, bool]] = None,
    ) -> ResolutionResult:
        if isinstance(stroke, str):
            stroke = KeyStroke.parse(stroke)
        token = stroke.token
        flags = context or {}
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"scope": scope, "token": token},
        ) as handle:
            live = [
                binding
                for binding in self._registry.bindings_for(scope, token)
                if binding.allows(flags)
            ]
            if not live:
                handle.add_metadata("status", "miss")
                return ResolutionResult(status="miss", token=token)

            winner = min(live, key=_precedence)
            handle.add_metadata("status", "match")
            handle.add_metadata("binding_id", winner.id)
            match = ResolutionMatch(
                binding=winner, action=self._registry.get_action(winner.action_id)
            )
            return ResolutionResult(status="match", match=match, token=token)


def _precedence(binding: Binding) -> tuple[int, str]:
    return (-binding.priority, binding.id)


__all__ = [
    "KeymapResolver",
    "ResolutionMatch",
    "ResolutionResult",
]
