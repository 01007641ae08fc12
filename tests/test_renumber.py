from __future__ import annotations

from mdlist_engine.buffer import Buffer
from mdlist_engine.config import ListEditingConfig
from mdlist_engine.listedit import (
    EditSession,
    ListEditingEngine,
    find_next_marker_line,
    fix_markers,
    look_upward_for_marker,
)


def make_buffer(*lines: str, cursor: tuple[int, int] = (0, 0)) -> Buffer:
    return Buffer.from_text("\n".join(lines), cursor=cursor)


def run_fix(
    buffer: Buffer, start_line: int | None, config: ListEditingConfig | None = None
) -> bool:
    return fix_markers(EditSession(buffer), config or ListEditingConfig(), start_line)


def test_fix_markers_renumbers_following_items() -> None:
    buffer = make_buffer("1. a", "1. b", "1. c")

    assert run_fix(buffer, 1) is True
    assert buffer.lines == ("1. a", "2. b", "3. c")


def test_fix_markers_is_idempotent() -> None:
    buffer = make_buffer("1. a", "5. b", "9. c")

    assert run_fix(buffer, 1) is True
    assert run_fix(buffer, 1) is False
    assert buffer.lines == ("1. a", "2. b", "3. c")


def test_fix_markers_keeps_text_column_when_marker_shrinks() -> None:
    buffer = make_buffer("1. a", "10. b")

    run_fix(buffer, 1)

    assert buffer.lines == ("1. a", "2.  b")


def test_fix_markers_grows_marker_with_single_space() -> None:
    buffer = make_buffer("9. a", "9. b")

    run_fix(buffer, 1)

    assert buffer.lines == ("9. a", "10. b")


def test_fix_markers_preserves_delimiter() -> None:
    buffer = make_buffer("1) a", "1) b")

    run_fix(buffer, 0)

    assert buffer.lines == ("1) a", "2) b")


def test_fix_markers_handles_nested_runs() -> None:
    buffer = make_buffer("1. a", "   1. x", "   3. y", "2. b", "5. c")

    run_fix(buffer, 0)

    assert buffer.lines == ("1. a", "   1. x", "   2. y", "2. b", "3. c")


def test_fix_markers_skips_blank_lines_and_body_text() -> None:
    buffer = make_buffer("1. a", "", "   body", "7. b")

    run_fix(buffer, 0)

    assert buffer.lines == ("1. a", "", "   body", "2. b")


def test_fix_markers_stops_at_shallower_text() -> None:
    buffer = make_buffer("1. a", "paragraph", "1. b")

    assert run_fix(buffer, 0) is False
    assert buffer.lines == ("1. a", "paragraph", "1. b")


def test_fix_markers_one_mode_forces_ones() -> None:
    buffer = make_buffer("1. a", "2. b", "3. c")

    run_fix(buffer, 0, ListEditingConfig(ordered_list_marker_mode="one"))

    assert buffer.lines == ("1. a", "1. b", "1. c")


def test_fix_markers_groups_with_the_keystroke_undo_step() -> None:
    buffer = make_buffer("1. a", "1. b", "1. c")

    run_fix(buffer, 1)

    assert len(buffer.undo_timeline) == 1
    assert buffer.undo() is True
    assert buffer.lines == ("1. a", "1. b", "1. c")


def test_find_next_marker_line() -> None:
    buffer = make_buffer("text", "- a", "3. b")

    assert find_next_marker_line(buffer, 0) == 2
    assert find_next_marker_line(buffer, 3) is None


def test_look_upward_for_marker() -> None:
    buffer = make_buffer("1. a", "   1. x", "", "   ")

    assert look_upward_for_marker(buffer, 2, 0) == 2
    assert look_upward_for_marker(buffer, 2, 3) == 2
    assert look_upward_for_marker(buffer, 1, 3) is None


def test_engine_fix_markers_starts_at_selection() -> None:
    buffer = make_buffer("intro", "4. a", "4. b", cursor=(1, 2))
    engine = ListEditingEngine(buffer)

    assert engine.fix_markers() is True
    assert buffer.lines == ("intro", "4. a", "5. b")


def test_engine_fix_markers_ignores_lists_below_the_selection() -> None:
    buffer = make_buffer("intro", "4. a", "4. b", cursor=(0, 2))
    engine = ListEditingEngine(buffer)

    assert engine.fix_markers() is False
    assert buffer.lines == ("intro", "4. a", "4. b")


def test_fix_markers_keeps_starting_number_of_a_run() -> None:
    buffer = make_buffer("Intro text", "5. five", "5. six", "9. seven")

    assert run_fix(buffer, 1) is True
    assert buffer.lines == ("Intro text", "5. five", "6. six", "7. seven")


def test_fix_markers_restarts_a_nested_run_at_one() -> None:
    buffer = make_buffer("1. a", "   4. b", "   4. c")

    run_fix(buffer, 1)

    assert buffer.lines == ("1. a", "   1. b", "   2. c")


def test_fix_markers_one_mode_still_forces_run_start() -> None:
    buffer = make_buffer("3. a", "4. b")

    run_fix(buffer, 0, ListEditingConfig(ordered_list_marker_mode="one"))

    assert buffer.lines == ("1. a", "1. b")
