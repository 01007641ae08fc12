"""Action and binding storage for the list keymap."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, replace
from typing import DefaultDict, Dict, Iterable, Iterator, Optional, Sequence, Tuple

from mdlist_engine.runtime.telemetry import SpanHandle, span

from .models import ActionRef, Binding

ChordKey = Tuple[str, str]


@dataclass(slots=True)
class RegistryStats:
    action_count: int
    binding_count: int
    scopes: tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """A binding shares its scope and chord with an active binding."""

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]):
        self.binding = binding
        self.conflicts = tuple(conflicts)
        names = ", ".join(conflict.id for conflict in self.conflicts)
        super().__init__(
            f"Binding '{binding.id}' ({binding.key_signature}) clashes with: {names}"
        )


class KeymapRegistry:
    """Holds actions by id and bindings indexed by ``(scope, chord)``.

    ``revision()`` increases on every binding change so callers holding
    derived state can tell when to rebuild it.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._by_chord: DefaultDict[ChordKey, set[str]] = defaultdict(set)
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def get_action(self, action_id: str) -> ActionRef:
        action = self._actions.get(action_id)
        if action is None:
            raise KeyError(f"Action '{action_id}' is not registered")
        return action

    def get_binding(self, binding_id: str) -> Binding:
        binding = self._bindings.get(binding_id)
        if binding is None:
            raise KeyError(f"Binding '{binding_id}' is not registered")
        return binding

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        with self._span("keymaps::register_action", action_id=action.id):
            if action.id in self._actions and not replace:
                raise ValueError(f"Action '{action.id}' already registered")
            self._actions[action.id] = action
        return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        """Add ``binding``; with ``replace`` it evicts whatever it clashes with."""

        with self._span(
            "keymaps::register_binding", binding_id=binding.id, scope=binding.scope
        ) as handle:
            self._require_action(binding, handle)
            if binding.id in self._bindings and not replace:
                raise ValueError(f"Binding id '{binding.id}' already registered")

            conflicts = self.detect_conflicts(binding, ignore=(binding.id,))
            if conflicts and not replace:
                handle.add_metadata("conflicts", _ids(conflicts))
                raise KeymapConflictError(binding, conflicts)

            for stale in conflicts:
                self._drop(stale.id)
            self._drop(binding.id)
            self._store(binding)
            self._revision += 1
        return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        with self._span("keymaps::unregister_binding", binding_id=binding_id):
            removed = self._drop(binding_id)
            if removed is not None:
                self._revision += 1
            return removed

    def rebind(self, binding_id: str, **changes: object) -> Binding:
        """Replace fields of an existing binding, e.g. move it to another chord."""

        with self._span("keymaps::rebind", binding_id=binding_id) as handle:
            updated = replace(self.get_binding(binding_id), **changes)
            self._require_action(updated, handle)
            conflicts = self.detect_conflicts(updated, ignore=(binding_id,))
            if conflicts:
                handle.add_metadata("conflicts", _ids(conflicts))
                raise KeymapConflictError(updated, conflicts)
            self._drop(binding_id)
            self._store(updated)
            self._revision += 1
        return updated

    def iter_bindings(self, scope: Optional[str] = None) -> Iterator[Binding]:
        for binding_id in sorted(self._bindings):
            binding = self._bindings[binding_id]
            if scope is None or binding.scope == scope:
                yield binding

    def bindings_for(self, scope: str, signature: str) -> list[Binding]:
        ids = self._by_chord.get((scope, signature), ())
        return [self._bindings[binding_id] for binding_id in sorted(ids)]

    def stats(self) -> RegistryStats:
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=len(self._bindings),
            scopes=tuple(sorted({scope for scope, _ in self._by_chord})),
        )

    def detect_conflicts(
        self, binding: Binding, *, ignore: Sequence[str] | None = None
    ) -> list[Binding]:
        skipped = set(ignore or ())
        return [
            other
            for other in self.bindings_for(binding.scope, binding.key_signature)
            if other.id not in skipped and _contexts_overlap(binding, other)
        ]

    def _span(self, name: str, **metadata: object):
        return span(
            name, logger_name=self._logger_name, component="keymaps", metadata=metadata
        )

    def _require_action(self, binding: Binding, handle: SpanHandle) -> None:
        if binding.action_id not in self._actions:
            handle.add_metadata("missing_action", binding.action_id)
            raise KeyError(
                f"Binding '{binding.id}' references unknown action '{binding.action_id}'"
            )

    def _store(self, binding: Binding) -> None:
        self._bindings[binding.id] = binding
        self._by_chord[(binding.scope, binding.key_signature)].add(binding.id)

    def _drop(self, binding_id: str) -> Optional[Binding]:
        binding = self._bindings.pop(binding_id, None)
        if binding is None:
            return None
        key = (binding.scope, binding.key_signature)
        bucket = self._by_chord.get(key)
        if bucket is not None:
            bucket.discard(binding_id)
            if not bucket:
                del self._by_chord[key]
        return binding


def _ids(bindings: Iterable[Binding]) -> str:
    return ",".join(binding.id for binding in bindings)


def _contexts_overlap(left: Binding, right: Binding) -> bool:
    """Whether one flag assignment can satisfy both bindings' when-clauses.

    Bindings with no clauses always overlap each other. A binding with
    clauses never overlaps an unconditional one; it shadows it instead.
    Two conditional bindings overlap only when their clause sets agree.
    """

    if not left.when and not right.when:
        return True
    if not left.when or not right.when:
        return False
    return dict(left.when_map) == dict(right.when_map)


__all__ = [
    "KeymapConflictError",
    "KeymapRegistry",
    "RegistryStats",
]
