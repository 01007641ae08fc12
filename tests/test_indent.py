from __future__ import annotations

from mdlist_engine.buffer import Buffer
from mdlist_engine.config import ListEditingConfig
from mdlist_engine.host import Position, Selection
from mdlist_engine.listedit import ListEditingEngine
from mdlist_engine.listedit.indent import selected_rows


def make_engine(
    text: str,
    *,
    cursor: tuple[int, int],
    anchor: tuple[int, int] | None = None,
    config: ListEditingConfig | None = None,
) -> tuple[ListEditingEngine, Buffer]:
    buffer = Buffer.from_text(text, cursor=cursor, anchor=anchor)
    return ListEditingEngine(buffer, config), buffer


def test_tab_indents_by_sibling_marker_width() -> None:
    engine, buffer = make_engine("- a\n- b", cursor=(1, 2))

    result = engine.tab()

    assert result.message == "indent"
    assert buffer.lines == ("- a", "  - b")
    assert buffer.cursor == (1, 4)


def test_tab_renumbers_nested_and_following_items() -> None:
    engine, buffer = make_engine("1. a\n2. b\n3. c", cursor=(1, 3))

    engine.tab()

    assert buffer.lines == ("1. a", "   1. b", "2. c")
    assert len(buffer.undo_timeline) == 1


def test_tab_uses_fixed_size_when_configured() -> None:
    config = ListEditingConfig(indentation_size=4)
    engine, buffer = make_engine("- a\n- b", cursor=(1, 0), config=config)

    engine.tab()

    assert buffer.lines == ("- a", "    - b")


def test_tab_in_item_text_passes_through() -> None:
    engine, buffer = make_engine("- a\n- bcd", cursor=(1, 4))

    result = engine.tab()

    assert result.status == "passthrough"
    assert buffer.default_commands == ["tab"]


def test_tab_without_parent_at_level_is_ignored() -> None:
    engine, buffer = make_engine("- a\n  - b", cursor=(1, 4))

    result = engine.tab()

    assert result.status == "ignored"
    assert result.handled is False
    assert buffer.lines == ("- a", "  - b")
    assert buffer.default_commands == []


def test_tab_falls_back_to_host_when_no_sibling_width() -> None:
    engine, buffer = make_engine("- a", cursor=(0, 0))

    engine.tab()

    assert buffer.default_commands == ["tab"]
    assert buffer.lines == ("    - a",)


def test_tab_on_plain_text_passes_through() -> None:
    engine, buffer = make_engine("text", cursor=(0, 0))

    result = engine.tab()

    assert result.message == "not_a_list_item"
    assert buffer.default_commands == ["tab"]


def test_tab_inside_fence_passes_through() -> None:
    engine, buffer = make_engine("```\n- a\n- b", cursor=(2, 0))

    result = engine.tab()

    assert result.message == "fenced_code"


def test_tab_indents_every_selected_line() -> None:
    engine, buffer = make_engine("- a\n- b\n- c\n", anchor=(1, 0), cursor=(3, 0))

    engine.tab()

    assert buffer.lines == ("- a", "  - b", "  - c", "")


def test_shift_tab_outdents_item() -> None:
    engine, buffer = make_engine("- a\n  - b", cursor=(1, 4))

    result = engine.shift_tab()

    assert result.message == "outdent"
    assert buffer.lines == ("- a", "- b")
    assert buffer.cursor == (1, 2)


def test_shift_tab_works_with_cursor_in_item_text() -> None:
    engine, buffer = make_engine("1. a\n   1. b\n2. c", cursor=(1, 7))

    engine.shift_tab()

    assert buffer.lines == ("1. a", "2. b", "3. c")


def test_shift_tab_on_plain_text_passes_through() -> None:
    engine, buffer = make_engine("  text", cursor=(0, 2))

    result = engine.shift_tab()

    assert result.status == "passthrough"
    assert buffer.default_commands == ["outdent"]
    assert buffer.lines == ("text",)


def test_selected_rows_excludes_trailing_column_zero() -> None:
    selection = Selection(anchor=Position(1, 0), active=Position(3, 0))

    assert list(selected_rows(selection)) == [1, 2]
    assert list(selected_rows(Selection.caret(Position(2, 0)))) == [2]


def test_second_tab_without_deeper_sibling_is_a_no_op() -> None:
    engine, buffer = make_engine("- A\n- B", cursor=(1, 0))

    assert engine.tab().status == "edited"
    assert buffer.lines == ("- A", "  - B")

    buffer.set_selection(Selection.caret(Position(1, 2)))
    assert engine.tab().status == "ignored"
    assert buffer.lines == ("- A", "  - B")


def test_tab_in_bullet_list_leaves_numbered_list_below_alone() -> None:
    engine, buffer = make_engine(
        "- A\n- B\n\nIntro text\n5. five\n6. six", cursor=(1, 0)
    )

    engine.tab()

    assert buffer.lines == ("- A", "  - B", "", "Intro text", "5. five", "6. six")


def test_shift_tab_keeps_outer_run_start() -> None:
    engine, buffer = make_engine("3. a\n   1. b\n4. c", cursor=(1, 3))

    engine.shift_tab()

    assert buffer.lines == ("3. a", "4. b", "5. c")
