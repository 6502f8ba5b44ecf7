from __future__ import annotations
from dataclasses import dataclass

from canvas import Path
from geometry import UNDEFINED_POINT, Point


@dataclass(frozen=True)
class PathCommand:
    """One instruction of a parsed path.

    ``start_point`` is the cursor position right before the command ran.
    When ``relative`` is set the command's coordinates are deltas from it.
    """

    start_point: Point
    relative: bool

    @property
    def end(self) -> Point:
        raise NotImplementedError

    def add_to_path(self, path: Path):
        raise NotImplementedError

    def _resolve(self, params: Point) -> Point:
        return self.start_point + params if self.relative else params


@dataclass(frozen=True)
class MoveCommand(PathCommand):
    params: Point

    @property
    def end(self) -> Point:
        return self._resolve(self.params)

    def add_to_path(self, path: Path):
        if self.relative:
            path.relative_move_to(self.params.x, self.params.y)
        else:
            path.move_to(self.params.x, self.params.y)


@dataclass(frozen=True)
class LineCommand(PathCommand):
    params: Point

    @property
    def end(self) -> Point:
        return self._resolve(self.params)

    def add_to_path(self, path: Path):
        if self.relative:
            path.relative_line_to(self.params.x, self.params.y)
        else:
            path.line_to(self.params.x, self.params.y)


@dataclass(frozen=True)
class HorizontalLineCommand(PathCommand):
    target_x: float

    @property
    def end(self) -> Point:
        if self.relative:
            return Point(self.start_point.x + self.target_x, self.start_point.y)
        return Point(self.target_x, self.start_point.y)

    def add_to_path(self, path: Path):
        if self.relative:
            path.relative_line_to(self.target_x, 0.0)
        else:
            path.line_to(self.target_x, self.start_point.y)


@dataclass(frozen=True)
class VerticalLineCommand(PathCommand):
    target_y: float

    @property
    def end(self) -> Point:
        if self.relative:
            return Point(self.start_point.x, self.start_point.y + self.target_y)
        return Point(self.start_point.x, self.target_y)

    def add_to_path(self, path: Path):
        if self.relative:
            path.relative_line_to(0.0, self.target_y)
        else:
            path.line_to(self.start_point.x, self.target_y)


@dataclass(frozen=True)
class CubicCurveCommand(PathCommand):
    control1: Point
    control2: Point
    end_point: Point

    @property
    def end(self) -> Point:
        return self._resolve(self.end_point)

    def add_to_path(self, path: Path):
        coords = (self.control1.x, self.control1.y,
                  self.control2.x, self.control2.y,
                  self.end_point.x, self.end_point.y)
        if self.relative:
            path.relative_cubic_to(*coords)
        else:
            path.cubic_to(*coords)


@dataclass(frozen=True)
class ArcCommand(PathCommand):
    # Large-arc and sweep flags are not kept: every arc is replayed as the
    # small, clockwise one.
    radius: Point
    x_axis_rotation: float
    arc_end: Point

    @property
    def end(self) -> Point:
        return self._resolve(self.arc_end)

    def add_to_path(self, path: Path):
        if self.relative:
            path.relative_arc_to_point(self.arc_end, self.radius, self.x_axis_rotation)
        else:
            path.arc_to_point(self.arc_end, self.radius, self.x_axis_rotation)


@dataclass(frozen=True)
class CloseCommand(PathCommand):

    @property
    def end(self) -> Point:
        return UNDEFINED_POINT

    def add_to_path(self, path: Path):
        path.close()
