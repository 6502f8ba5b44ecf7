from __future__ import annotations
import logging
import re
from typing import Callable, List, Sequence, Tuple

from errors import UnparsablePathError
from geometry import Point
from path_commands import (ArcCommand, CloseCommand, CubicCurveCommand,
                           HorizontalLineCommand, LineCommand, MoveCommand,
                           PathCommand, VerticalLineCommand)

logger = logging.getLogger(__name__)

# Unsigned ASCII decimals only: no sign, no exponent, no leading dot.
value_format = r'([0-9]+(?:\.[0-9]+)?)'
separator_format = r'(?:\s+|,)'

number_pattern = re.compile(value_format)
separator_pattern = re.compile(separator_format)
trailing_separators_pattern = re.compile(r'[\s,]*')


def _move(start: Point, relative: bool, values: Sequence[float]) -> PathCommand:
    return MoveCommand(start, relative, Point(values[0], values[1]))


def _line(start: Point, relative: bool, values: Sequence[float]) -> PathCommand:
    return LineCommand(start, relative, Point(values[0], values[1]))


def _horizontal_line(start: Point, relative: bool, values: Sequence[float]) -> PathCommand:
    return HorizontalLineCommand(start, relative, values[0])


def _vertical_line(start: Point, relative: bool, values: Sequence[float]) -> PathCommand:
    return VerticalLineCommand(start, relative, values[0])


def _cubic_curve(start: Point, relative: bool, values: Sequence[float]) -> PathCommand:
    return CubicCurveCommand(start, relative,
                             Point(values[0], values[1]),
                             Point(values[2], values[3]),
                             Point(values[4], values[5]))


def _arc(start: Point, relative: bool, values: Sequence[float]) -> PathCommand:
    large_arc_flag, sweep_flag = values[3], values[4]
    if large_arc_flag or sweep_flag:
        logger.debug("Dropping arc flags large-arc=%s sweep=%s", large_arc_flag, sweep_flag)
    return ArcCommand(start, relative, Point(values[0], values[1]), values[2],
                      Point(values[5], values[6]))


def _close(start: Point, relative: bool, values: Sequence[float]) -> PathCommand:
    return CloseCommand(start, relative)


CommandBuilder = Callable[[Point, bool, Sequence[float]], PathCommand]

COMMANDS: dict[str, Tuple[int, CommandBuilder]] = {
    'm': (2, _move),
    'l': (2, _line),
    'h': (1, _horizontal_line),
    'v': (1, _vertical_line),
    'c': (6, _cubic_curve),
    'a': (7, _arc),
    'z': (0, _close),
}


def _read_arguments(path_str: str, pos: int, arity: int) -> Tuple[List[float], int] | None:
    values = []
    for index in range(arity):
        separator = separator_pattern.match(path_str, pos)
        if separator:
            pos = separator.end()
        elif index > 0:
            return None

        number = number_pattern.match(path_str, pos)
        if not number:
            return None
        values.append(float(number.group(1)))
        pos = number.end()
    return values, pos


def parse_command(path_str: str, pos: int, cursor: Point) -> Tuple[PathCommand, int] | None:
    """Read the command starting at ``pos``.

    Returns the command, built against ``cursor``, and the position right
    after it and its trailing separators, or None when nothing matches.
    """
    if pos >= len(path_str):
        return None

    letter = path_str[pos]
    entry = COMMANDS.get(letter.lower())
    if entry is None:
        return None

    arity, build = entry
    arguments = _read_arguments(path_str, pos + 1, arity)
    if arguments is None:
        return None

    values, pos = arguments
    command = build(cursor, letter.islower(), values)
    pos = trailing_separators_pattern.match(path_str, pos).end()
    return command, pos


def parse_path(path_str: str) -> List[PathCommand]:
    path_str = path_str.strip()
    commands: List[PathCommand] = []
    cursor = Point.ZERO
    pos = 0

    while pos < len(path_str):
        parsed = parse_command(path_str, pos, cursor)
        if parsed is None:
            raise UnparsablePathError(path_str[pos:])

        command, pos = parsed
        commands.append(command)
        if not isinstance(command, CloseCommand):
            cursor = command.end

    logger.debug("Parsed %d path commands", len(commands))
    return commands
