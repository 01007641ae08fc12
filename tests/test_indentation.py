from __future__ import annotations

from mdlist_engine.buffer import Buffer
from mdlist_engine.config import ListEditingConfig
from mdlist_engine.listedit import (
    adaptive_indentation_size,
    can_indent,
    find_parent_item,
    indentation_step,
    prefix_length,
)


def make_buffer(*lines: str) -> Buffer:
    return Buffer.from_text("\n".join(lines))


def test_prefix_length() -> None:
    assert prefix_length("- a") == 2
    assert prefix_length("   12. [ ] a") == 11
    assert prefix_length("text") == 0


def test_find_parent_item_skips_deeper_items() -> None:
    buffer = make_buffer("- a", "    - deep", "  - b", "  - c")

    parent = find_parent_item(buffer, 3, 1)

    assert parent is not None
    assert parent.line == 2
    assert parent.indent_level == 1


def test_can_indent_needs_sibling_at_same_level() -> None:
    assert can_indent(make_buffer("- a", "- b"), 1)
    assert can_indent(make_buffer("- a", "  - b", "  - c"), 2)
    assert not can_indent(make_buffer("- a", "  - b"), 1)


def test_can_indent_top_level_without_parent() -> None:
    assert can_indent(make_buffer("- a"), 0)
    assert not can_indent(make_buffer("  - a"), 0)


def test_adaptive_size_uses_previous_marker_width() -> None:
    assert adaptive_indentation_size(make_buffer("1. a", "2. b"), 1, 0) == 3
    assert adaptive_indentation_size(make_buffer("- a", "- b"), 1, 0) == 2
    assert adaptive_indentation_size(make_buffer("10.  a", "11.  b"), 1, 0) == 5
    assert adaptive_indentation_size(make_buffer("text", "- b"), 1, 0) is None


def test_indentation_step_fixed_and_adaptive() -> None:
    buffer = make_buffer("1. a", "2. b")

    assert indentation_step(buffer, 1, ListEditingConfig(indentation_size=4)) == 4
    assert indentation_step(buffer, 1, ListEditingConfig()) == 3
    assert indentation_step(buffer, 0, ListEditingConfig()) is None
