"""Tests for the path-data parser."""

import pytest

from tests.conftest import ABSOLUTE_PATH, RELATIVE_PATH, SQUARE_PATH

from errors import UnparsablePathError
from geometry import Point
from path_commands import (ArcCommand, CloseCommand, CubicCurveCommand,
                           HorizontalLineCommand, LineCommand, MoveCommand,
                           VerticalLineCommand)
from path_parser import parse_command, parse_path


def test_move_line_close_without_spaces():
    commands = parse_path("M10,10L20,20Z")
    assert commands == [
        MoveCommand(Point(0, 0), False, Point(10, 10)),
        LineCommand(Point(10, 10), False, Point(20, 20)),
        CloseCommand(Point(20, 20), False),
    ]
    assert commands[1].end == Point(20, 20)


def test_empty_and_blank_input():
    assert parse_path("") == []
    assert parse_path("   \n") == []


def test_square_command_kinds():
    commands = parse_path(SQUARE_PATH)
    assert [type(c) for c in commands] == [
        MoveCommand, LineCommand, LineCommand, LineCommand, CloseCommand,
    ]
    assert all(not c.relative for c in commands)


def test_relative_commands_end_at_start_plus_params():
    commands = parse_path(RELATIVE_PATH)
    assert [type(c) for c in commands] == [
        MoveCommand, LineCommand, HorizontalLineCommand, VerticalLineCommand,
        CubicCurveCommand, ArcCommand,
    ]
    assert all(c.relative for c in commands)

    move, line, horizontal, vertical, cubic, arc = commands
    assert move.end == move.start_point + move.params
    assert line.end == line.start_point + line.params
    assert horizontal.end == Point(horizontal.start_point.x + 3, horizontal.start_point.y)
    assert vertical.end == Point(vertical.start_point.x, vertical.start_point.y + 4)
    assert cubic.end == cubic.start_point + cubic.end_point
    assert arc.end == arc.start_point + arc.arc_end
    assert arc.end == Point(27, 28)


def test_cursor_threads_through_commands():
    commands = parse_path(RELATIVE_PATH)
    for previous, command in zip(commands, commands[1:]):
        assert command.start_point == previous.end


def test_absolute_commands_end_at_params():
    move, horizontal, vertical, line, cubic, arc = parse_path(ABSOLUTE_PATH)
    assert move.end == Point(10, 10)
    assert horizontal.end == Point(30, 10)
    assert vertical.end == Point(30, 40)
    assert line.end == Point(5, 5)
    assert cubic.end == Point(3, 3)
    assert cubic.control1 == Point(1, 1)
    assert cubic.control2 == Point(2, 2)
    assert arc.end == Point(7, 7)
    assert arc.radius == Point(5, 5)
    assert arc.x_axis_rotation == 0


def test_end_does_not_depend_on_magnitude():
    small = parse_path("m1 2 l3 4")
    large = parse_path("m1000.5 2000.25 l3000 4000")
    assert small[1].end == Point(4, 6)
    assert large[1].end == Point(4000.5, 6000.25)


def test_close_does_not_move_the_cursor():
    commands = parse_path("M10 10 L20 20 Z L30 30")
    close, line = commands[2], commands[3]
    assert isinstance(close, CloseCommand)
    assert close.start_point == Point(20, 20)
    assert not close.end.is_finite()
    assert line.start_point == Point(20, 20)


def test_lowercase_close_is_relative():
    close = parse_path("m1 1 z")[-1]
    assert isinstance(close, CloseCommand)
    assert close.relative


def test_decimal_numbers():
    move = parse_path("M1.5 2.25")[0]
    assert move.params == Point(1.5, 2.25)


def test_separator_after_letter_is_optional():
    assert parse_path("M 10 10 L 20 20") == parse_path("M10 10L20 20")


def test_trailing_separators_are_consumed():
    assert len(parse_path("M10 10 , L20 20 ,")) == 2


def test_parsing_is_deterministic():
    assert parse_path(ABSOLUTE_PATH) == parse_path(ABSOLUTE_PATH)


def test_arc_flags_are_dropped():
    with_flags = parse_path("M0 0 A5 5 0 1 1 10 0")[1]
    without_flags = parse_path("M0 0 A5 5 0 0 0 10 0")[1]
    assert with_flags == without_flags


@pytest.mark.parametrize("path_data, remainder", [
    ("M10 10 X5 5", "X5 5"),
    ("M10", "M10"),
    ("M10,,10", "M10,,10"),
    ("M-10 10", "M-10 10"),
    ("M1e3 10", "M1e3 10"),
    ("M.5 10", "M.5 10"),
    ("M10 10 Q1 1 2 2", "Q1 1 2 2"),
    ("M10 10 S1 1 2 2", "S1 1 2 2"),
    ("M10 10 20 20", "20 20"),
    ("L1 1 C1 2 3 4 5", "C1 2 3 4 5"),
    ("M10 10 A5 5 0 0 1 6", "A5 5 0 0 1 6"),
    ("M１0 10", "M１0 10"),
    ("M10 10 L١٢ 5", "L١٢ 5"),
])
def test_malformed_input_raises(path_data, remainder):
    with pytest.raises(UnparsablePathError) as excinfo:
        parse_path(path_data)
    assert excinfo.value.remainder == remainder


def test_unparsable_path_is_a_value_error():
    with pytest.raises(ValueError):
        parse_path("hello")


def test_parse_command_returns_position_after_separators():
    command, pos = parse_command("L5 6  M1 1", 0, Point(1, 2))
    assert command == LineCommand(Point(1, 2), False, Point(5, 6))
    assert pos == 6


def test_parse_command_without_match():
    assert parse_command("Q1 1", 0, Point.ZERO) is None
    assert parse_command("", 0, Point.ZERO) is None
