"""Key chords, when-clauses, actions, and the bindings that tie them together."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Iterable, Mapping

# Host spellings folded onto the names bindings are written with.
MODIFIER_ALIASES = {
    "cmd": "meta",
    "command": "meta",
    "super": "meta",
    "control": "ctrl",
    "option": "alt",
}


def _canonical(name: str) -> str:
    name = name.strip().lower()
    return MODIFIER_ALIASES.get(name, name)


def _modifier_set(modifiers: Iterable[str]) -> tuple[str, ...]:
    return tuple(sorted({_canonical(name) for name in modifiers if name.strip()}))


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """One key plus modifiers; ``token`` is its canonical ``ctrl+shift+enter`` form."""

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        key = self.key.strip().lower()
        if not key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "key", key)
        object.__setattr__(self, "modifiers", _modifier_set(self.modifiers))

    @classmethod
    def parse(cls, chord: str) -> "KeyStroke":
        *modifiers, key = [part for part in chord.split("+") if part.strip()] or [""]
        return cls(key, tuple(modifiers))

    @property
    def token(self) -> str:
        return "+".join((*self.modifiers, self.key))


@dataclass(frozen=True, slots=True)
class WhenClause:
    """``flag`` must equal ``expected``; a missing flag reads as False."""

    flag: str
    expected: bool = True

    def __post_init__(self) -> None:
        if not self.flag:
            raise ValueError("flag cannot be empty")

    @classmethod
    def parse(cls, expression: str) -> "WhenClause":
        text = expression.strip()
        negated = text.startswith("!")
        return cls(text[1:].strip() if negated else text, not negated)

    def evaluate(self, context: Mapping[str, bool]) -> bool:
        return bool(context.get(self.flag)) == self.expected


@dataclass(frozen=True, slots=True)
class ActionRef:
    id: str
    handler: Callable[..., object]
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("action id cannot be empty")
        if not callable(self.handler):
            raise TypeError(f"handler for '{self.id}' must be callable")

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    """A chord in a scope that triggers ``action_id`` while ``when`` holds.

    ``stroke`` may be given as a chord string and ``when`` entries as
    ``"flag"``/``"!flag"`` expressions; both are normalized on creation.
    """

    id: str
    scope: str
    stroke: KeyStroke
    action_id: str
    description: str = ""
    when: tuple[WhenClause, ...] = ()
    priority: int = 0

    def __post_init__(self) -> None:
        for label in ("id", "scope", "action_id"):
            if not getattr(self, label):
                raise ValueError(f"binding {label} cannot be empty")
        if isinstance(self.stroke, str):
            object.__setattr__(self, "stroke", KeyStroke.parse(self.stroke))
        object.__setattr__(self, "when", tuple(map(_as_clause, self.when)))

    @property
    def key_signature(self) -> str:
        return self.stroke.token

    @property
    def when_map(self) -> Mapping[str, bool]:
        return MappingProxyType({clause.flag: clause.expected for clause in self.when})

    def allows(self, context: Mapping[str, bool]) -> bool:
        return all(clause.evaluate(context) for clause in self.when)


def _as_clause(value: WhenClause | str) -> WhenClause:
    return value if isinstance(value, WhenClause) else WhenClause.parse(str(value))


__all__ = [
    "ActionRef",
    "Binding",
    "KeyStroke",
    "WhenClause",
]
