from __future__ import annotations

from mdlist_engine.keymaps import (
    ActionRef,
    Binding,
    KeyStroke,
    KeymapRegistry,
    KeymapResolver,
    WhenClause,
)


def make_action(action_id: str) -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    binding_id: str,
    *,
    scope: str = "markdown",
    chord: str = "tab",
    action_id: str = "list.test",
    when: tuple[WhenClause, ...] = (),
    priority: int = 0,
) -> Binding:
    return Binding(
        id=binding_id,
        scope=scope,
        stroke=KeyStroke.parse(chord),
        action_id=action_id,
        when=when,
        priority=priority,
    )


def build_registry(bindings: list[Binding]) -> KeymapRegistry:
    registry = KeymapRegistry()
    action_ids = {binding.action_id for binding in bindings}
    for action_id in action_ids:
        registry.register_action(make_action(action_id))
    for binding in bindings:
        registry.register_binding(binding)
    return registry


def test_resolver_matches_chord() -> None:
    binding = make_binding("markdown.tab")
    resolver = KeymapResolver(build_registry([binding]))

    result = resolver.resolve("markdown", "tab")

    assert result.status == "match"
    assert result.match is not None
    assert result.match.binding.id == binding.id
    assert result.match.action.id == "list.test"


def test_resolver_distinguishes_modifiers() -> None:
    resolver = KeymapResolver(build_registry([make_binding("markdown.tab")]))

    result = resolver.resolve("markdown", KeyStroke("tab", ("shift",)))

    assert result.status == "miss"
    assert result.token == "shift+tab"


def test_resolver_honors_when_clauses() -> None:
    gating = make_binding(
        "markdown.tab.writable",
        when=(WhenClause("editor_focus"), WhenClause.parse("!read_only")),
    )
    resolver = KeymapResolver(build_registry([gating]))

    miss = resolver.resolve("markdown", "tab", context={"editor_focus": True, "read_only": True})
    assert miss.status == "miss"

    hit = resolver.resolve("markdown", "tab", context={"editor_focus": True})
    assert hit.status == "match"
    assert hit.match is not None
    assert hit.match.binding.id == gating.id


def test_resolver_prefers_higher_priority() -> None:
    low = make_binding("a.low", when=(WhenClause("editor_focus"),))
    high = make_binding(
        "b.high",
        action_id="list.other",
        when=(WhenClause("editor_focus"), WhenClause("suggest_visible")),
        priority=10,
    )
    resolver = KeymapResolver(build_registry([low, high]))

    result = resolver.resolve(
        "markdown", "tab", context={"editor_focus": True, "suggest_visible": True}
    )

    assert result.match is not None
    assert result.match.binding.id == "b.high"


def test_resolver_sees_bindings_registered_later() -> None:
    registry = build_registry([])
    resolver = KeymapResolver(registry)

    miss = resolver.resolve("markdown", "ctrl+l")
    assert miss.status == "miss"

    registry.register_action(make_action("list.toggle_list"))
    new_binding = make_binding(
        "markdown.toggle_list", chord="ctrl+l", action_id="list.toggle_list"
    )
    registry.register_binding(new_binding)

    match = resolver.resolve("markdown", "ctrl+l")
    assert match.status == "match"
    assert match.match is not None
    assert match.match.binding.id == new_binding.id
