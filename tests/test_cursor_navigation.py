from __future__ import annotations

from typing import Sequence

from caret_engine.cursor import (
    Cursor,
    MovingRole,
    Position,
    resolve_moving_role,
    write_back,
)


def make_cursor(*lines: str) -> Cursor:
    return Cursor(list(lines))


def caret(cursor: Cursor) -> tuple[int, int]:
    return cursor.extent.key


def press(cursor: Cursor, method: str, times: int = 1, *, extend: bool = False) -> None:
    for _ in range(times):
        getattr(cursor, method)(extend=extend)


def lines_of_length(lengths: Sequence[int]) -> Cursor:
    return Cursor(["x" * length for length in lengths])


def test_empty_construction_behaves_as_one_empty_line() -> None:
    cursor = Cursor([])

    assert cursor.lines == ("",)
    assert caret(cursor) == (0, 0)
    press(cursor, "move_right")
    press(cursor, "move_down")
    assert caret(cursor) == (0, 0)


def test_move_right_wraps_to_next_line_and_stops_at_end() -> None:
    cursor = make_cursor("abc", "", "de")

    press(cursor, "move_right", 3)
    assert caret(cursor) == (0, 3)
    press(cursor, "move_right")
    assert caret(cursor) == (1, 0)
    press(cursor, "move_right")
    assert caret(cursor) == (2, 0)
    press(cursor, "move_right", 2)
    assert caret(cursor) == (2, 2)
    press(cursor, "move_right")
    assert caret(cursor) == (2, 2)


def test_move_left_wraps_to_previous_line_end() -> None:
    cursor = make_cursor("abc", "", "de")

    press(cursor, "move_left")
    assert caret(cursor) == (0, 0)
    press(cursor, "move_down", 2)
    press(cursor, "move_right")
    assert caret(cursor) == (2, 1)
    press(cursor, "move_left")
    assert caret(cursor) == (2, 0)
    press(cursor, "move_left")
    assert caret(cursor) == (1, 0)
    press(cursor, "move_left")
    assert caret(cursor) == (0, 3)


def test_horizontal_moves_keep_anchor_in_sync() -> None:
    cursor = make_cursor("abc")

    press(cursor, "move_right", 2)

    assert cursor.anchor == cursor.extent
    assert cursor.anchor.column_memory == 2
    assert cursor.extent.column_memory == 2
    assert not cursor.has_selection


def test_vertical_moves_stop_at_first_and_last_line() -> None:
    cursor = make_cursor("a", "b")

    press(cursor, "move_down")
    assert cursor.extent.line == 1
    press(cursor, "move_down")
    assert cursor.extent.line == 1
    press(cursor, "move_up")
    assert cursor.extent.line == 0
    press(cursor, "move_up")
    assert cursor.extent.line == 0


def test_sticky_column_through_flat_short_lines() -> None:
    cursor = lines_of_length([3, 1, 1])

    press(cursor, "move_right", 2)
    assert cursor.extent.column == 2
    press(cursor, "move_down")
    assert cursor.extent.column == 1
    press(cursor, "move_down")
    assert cursor.extent.column == 1
    press(cursor, "move_up")
    assert cursor.extent.column == 1
    press(cursor, "move_up")
    assert cursor.extent.column == 2


def test_sticky_column_through_hilly_lines() -> None:
    cursor = lines_of_length([5, 1, 2])

    press(cursor, "move_right", 4)
    press(cursor, "move_down")
    assert cursor.extent.column == 1
    press(cursor, "move_down")
    assert cursor.extent.column == 2
    press(cursor, "move_up")
    assert cursor.extent.column == 1
    press(cursor, "move_up")
    assert cursor.extent.column == 4


def test_sticky_column_restored_after_short_line() -> None:
    cursor = lines_of_length([3, 1, 3])

    press(cursor, "move_right", 3)
    press(cursor, "move_down")
    assert caret(cursor) == (1, 1)
    press(cursor, "move_down")
    assert caret(cursor) == (2, 3)


def test_vertical_movement_never_changes_column_memory() -> None:
    cursor = lines_of_length([4, 0, 2])

    press(cursor, "move_right", 4)
    press(cursor, "move_down", 2)

    assert caret(cursor) == (2, 2)
    assert cursor.extent.column_memory == 4


def test_remembered_column_equal_to_line_length_is_restored() -> None:
    cursor = lines_of_length([3, 1, 3])

    press(cursor, "move_right", 3)
    press(cursor, "move_down", 2)

    assert cursor.extent.column == 3


def test_remembered_column_too_long_clamps_then_restores() -> None:
    cursor = lines_of_length([4, 1, 3])

    press(cursor, "move_right", 4)
    press(cursor, "move_down", 2)
    assert caret(cursor) == (2, 3)
    press(cursor, "move_up")
    assert caret(cursor) == (1, 1)
    press(cursor, "move_up")
    assert caret(cursor) == (0, 4)


def test_same_length_lines_keep_column() -> None:
    cursor = lines_of_length([5, 5, 5])

    press(cursor, "move_right", 3)
    for method in ("move_down", "move_down", "move_up", "move_up"):
        press(cursor, method)
        assert cursor.extent.column == 3


def test_home_toggles_back_to_remembered_column() -> None:
    cursor = lines_of_length([10, 0, 4])

    press(cursor, "move_right", 4)
    press(cursor, "home")
    assert cursor.extent.column == 0
    press(cursor, "home")
    assert cursor.extent.column == 4
    press(cursor, "move_down")
    assert caret(cursor) == (1, 0)
    press(cursor, "home")
    assert cursor.extent.column == 0
    press(cursor, "home")
    assert cursor.extent.column == 0


def test_end_toggles_back_to_remembered_column() -> None:
    cursor = lines_of_length([10, 0, 4])

    press(cursor, "move_right", 4)
    press(cursor, "end")
    assert cursor.extent.column == 10
    press(cursor, "end")
    assert cursor.extent.column == 4
    press(cursor, "move_down")
    press(cursor, "end")
    assert cursor.extent.column == 0
    press(cursor, "end")
    assert cursor.extent.column == 0


def test_home_with_extend_moves_only_the_extent() -> None:
    cursor = lines_of_length([10, 0, 4])

    press(cursor, "move_right", 4)
    press(cursor, "home", extend=True)
    assert cursor.anchor.column == 4
    assert cursor.extent.column == 0
    assert cursor.has_selection
    press(cursor, "home", extend=True)
    assert cursor.extent.column == 4
    assert not cursor.has_selection


def test_end_with_extend_moves_only_the_extent() -> None:
    cursor = lines_of_length([10, 0, 4])

    press(cursor, "move_right", 4)
    press(cursor, "end", extend=True)
    assert (cursor.anchor.column, cursor.extent.column) == (4, 10)
    press(cursor, "end", extend=True)
    assert (cursor.anchor.column, cursor.extent.column) == (4, 4)


def test_extend_down_then_plain_up_collapses_at_destination() -> None:
    cursor = make_cursor("abc", "abc", "abc")

    press(cursor, "move_right")
    press(cursor, "move_down", 2, extend=True)
    assert cursor.anchor.key == (0, 1)
    assert caret(cursor) == (2, 1)

    press(cursor, "move_up")
    assert cursor.anchor.key == (1, 1)
    assert caret(cursor) == (1, 1)
    assert not cursor.has_selection


def test_plain_move_collapses_selection_to_destination() -> None:
    cursor = make_cursor("abcdef")

    press(cursor, "move_right", 3, extend=True)
    press(cursor, "move_left")

    assert cursor.anchor.key == cursor.extent.key == (0, 2)


def test_moving_role_depends_on_extend_and_selection() -> None:
    cursor = make_cursor("abc")

    assert resolve_moving_role(cursor, extend=False) is MovingRole.EXTENT
    assert resolve_moving_role(cursor, extend=True) is MovingRole.ANCHOR
    cursor.move_right(extend=True)
    assert resolve_moving_role(cursor, extend=True) is MovingRole.EXTENT


def test_starting_a_selection_consults_the_anchor_memory() -> None:
    cursor = Cursor(
        ["abcd"], anchor=Position(0, 0, 3), extent=Position(0, 0, 1)
    )

    cursor.home(extend=True)

    assert cursor.anchor.key == (0, 0)
    assert cursor.extent.key == (0, 3)


def test_write_back_respects_extend_flag() -> None:
    cursor = make_cursor("abc", "def")

    write_back(cursor, Position(1, 1, 1), extend=True)
    assert cursor.anchor.key == (0, 0)
    assert cursor.extent.key == (1, 1)

    write_back(cursor, Position(0, 2, 2), extend=False)
    assert cursor.anchor.key == cursor.extent.key == (0, 2)
