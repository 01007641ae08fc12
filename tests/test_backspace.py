from __future__ import annotations

from mdlist_engine.buffer import Buffer
from mdlist_engine.listedit import ListEditingEngine


def make_engine(
    text: str,
    *,
    cursor: tuple[int, int],
    anchor: tuple[int, int] | None = None,
) -> tuple[ListEditingEngine, Buffer]:
    buffer = Buffer.from_text(text, cursor=cursor, anchor=anchor)
    return ListEditingEngine(buffer), buffer


def test_backspace_outdents_indented_empty_marker() -> None:
    engine, buffer = make_engine("- a\n  - ", cursor=(1, 4))

    result = engine.backspace()

    assert result.message == "outdent_marker"
    assert buffer.lines == ("- a", "- ")
    assert buffer.cursor == (1, 2)


def test_backspace_replaces_bare_marker_with_spaces() -> None:
    engine, buffer = make_engine("- ", cursor=(0, 2))

    result = engine.backspace()

    assert result.message == "clear_marker"
    assert buffer.lines == ("  ",)
    assert buffer.cursor == (0, 2)


def test_clearing_ordered_marker_renumbers_rest_of_run() -> None:
    engine, buffer = make_engine("1. a\n2. \n3. b", cursor=(1, 3))

    engine.backspace()

    assert buffer.lines == ("1. a", "   ", "2. b")
    assert len(buffer.undo_timeline) == 1


def test_backspace_removes_empty_checkbox() -> None:
    engine, buffer = make_engine("- [ ] ", cursor=(0, 6))

    result = engine.backspace()

    assert result.message == "clear_checkbox"
    assert buffer.lines == ("- ",)
    assert buffer.cursor == (0, 2)


def test_backspace_removes_checked_box_on_ordered_item() -> None:
    engine, buffer = make_engine("  1. [x] ", cursor=(0, 9))

    engine.backspace()

    assert buffer.lines == ("  1. ",)


def test_backspace_in_text_passes_through() -> None:
    engine, buffer = make_engine("- abc", cursor=(0, 5))

    result = engine.backspace()

    assert result.status == "passthrough"
    assert buffer.default_commands == ["deleteLeft"]
    assert buffer.lines == ("- ab",)


def test_backspace_with_selection_deletes_then_renumbers() -> None:
    engine, buffer = make_engine("1. a\n2. b\n3. c", anchor=(1, 0), cursor=(2, 0))

    result = engine.backspace()

    assert result.message == "delete_selection"
    assert buffer.lines == ("1. a", "2. c")
    assert len(buffer.undo_timeline) == 1


def test_backspace_inside_fence_passes_through() -> None:
    engine, buffer = make_engine("~~~\n- ", cursor=(1, 2))

    result = engine.backspace()

    assert result.status == "passthrough"
    assert buffer.lines == ("~~~", "-")


def test_clearing_bullet_marker_leaves_numbered_list_below_alone() -> None:
    engine, buffer = make_engine("- a\n- \n\nIntro\n3. x\n4. y", cursor=(1, 2))

    result = engine.backspace()

    assert result.message == "clear_marker"
    assert buffer.lines == ("- a", "  ", "", "Intro", "3. x", "4. y")


def test_clearing_ordered_marker_keeps_run_start() -> None:
    engine, buffer = make_engine("4. a\n5. \n6. b", cursor=(1, 3))

    engine.backspace()

    assert buffer.lines == ("4. a", "   ", "5. b")
