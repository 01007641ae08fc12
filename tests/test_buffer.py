from __future__ import annotations

import pytest

from mdlist_engine.buffer import Buffer, BufferValidationError
from mdlist_engine.host import Edit, HostEditError, Position, TextRange


def make_buffer(text: str = "alpha\nbeta", cursor: tuple[int, int] = (0, 0)) -> Buffer:
    return Buffer.from_text(text, cursor=cursor)


def test_from_text_keeps_trailing_empty_row() -> None:
    buffer = make_buffer("a\n")

    assert buffer.lines == ("a", "")
    assert buffer.get_line_count() == 2


def test_grouped_edits_undo_together() -> None:
    buffer = make_buffer(cursor=(0, 5))

    buffer.apply_edit(Edit.insert(Position(0, 5), "!"), group_with_previous=False)
    buffer.apply_edit(Edit.insert(Position(1, 4), "?"), group_with_previous=True)

    assert buffer.text == "alpha!\nbeta?"
    assert len(buffer.undo_timeline) == 1
    assert buffer.undo() is True
    assert buffer.text == "alpha\nbeta"
    assert buffer.cursor == (0, 5)
    assert buffer.redo() is True
    assert buffer.text == "alpha!\nbeta?"


def test_ungrouped_edits_are_separate_steps() -> None:
    buffer = make_buffer()

    buffer.apply_edit(Edit.insert(Position(0, 0), "1"), group_with_previous=False)
    buffer.apply_edit(Edit.insert(Position(0, 0), "2"), group_with_previous=False)
    buffer.undo()

    assert buffer.text == "1alpha\nbeta"


def test_selection_follows_insertions_before_it() -> None:
    buffer = make_buffer(cursor=(0, 3))

    buffer.apply_edit(Edit.insert(Position(0, 1), "xy"))
    assert buffer.cursor == (0, 5)

    buffer.apply_edit(Edit.insert(Position(0, 0), "line\n"))
    assert buffer.cursor == (1, 5)


def test_selection_before_edit_is_unchanged() -> None:
    buffer = make_buffer(cursor=(0, 2))

    buffer.apply_edit(Edit.replace(TextRange.of(1, 0, 1, 4), "gamma"))

    assert buffer.cursor == (0, 2)
    assert buffer.lines == ("alpha", "gamma")


def test_edit_outside_document_is_rejected() -> None:
    buffer = make_buffer()

    with pytest.raises(BufferValidationError) as excinfo:
        buffer.apply_edit(Edit.insert(Position(5, 0), "x"))

    assert isinstance(excinfo.value, HostEditError)
    assert excinfo.value.position == Position(5, 0)


def test_unknown_default_command_is_rejected() -> None:
    buffer = make_buffer()

    with pytest.raises(HostEditError):
        buffer.execute_default_command("selectAll")  # type: ignore[arg-type]


def test_delete_left_at_column_zero_joins_lines() -> None:
    buffer = make_buffer(cursor=(1, 0))

    buffer.execute_default_command("deleteLeft")

    assert buffer.lines == ("alphabeta",)
    assert buffer.cursor == (0, 5)


def test_outdent_default_command_removes_tab_size() -> None:
    buffer = Buffer.from_text("      text", tab_size=4)

    buffer.execute_default_command("outdent")

    assert buffer.text == "  text"
