from __future__ import annotations
import contextlib
from typing import Iterator, List, Optional, Protocol, Tuple

from colors import Color
from drawing_context import ContextStack
from drawing_parameters import LineCap, LineJoin
from geometry import (Point, TransformMatrix, arc_to_cubics, bounding_box,
                      oval_to_cubics, subdivide_cubic_bezier)

FLATTEN_TOLERANCE = 0.25

Polyline = Tuple[List[Tuple[float, float]], bool]


class Path:
    """Path under construction, in the style of a canvas's native path object.

    Segments are kept absolute: ``('move', p)``, ``('line', p)``,
    ``('cubic', c1, c2, p)`` and ``('close',)``. Arcs and ovals are stored as
    cubics so the path survives any affine transform unchanged in shape.
    """

    def __init__(self):
        self._segments: list[tuple] = []
        self._current = Point.ZERO
        self._subpath_start = Point.ZERO
        self._open = False

    @property
    def segments(self) -> tuple[tuple, ...]:
        return tuple(self._segments)

    @property
    def current_point(self) -> Point:
        return self._current

    def _ensure_subpath(self):
        if not self._open:
            self._segments.append(('move', self._current))
            self._subpath_start = self._current
            self._open = True

    def move_to(self, x: float, y: float):
        self._current = Point(x, y)
        self._subpath_start = self._current
        self._segments.append(('move', self._current))
        self._open = True

    def relative_move_to(self, dx: float, dy: float):
        self.move_to(self._current.x + dx, self._current.y + dy)

    def line_to(self, x: float, y: float):
        self._ensure_subpath()
        self._current = Point(x, y)
        self._segments.append(('line', self._current))

    def relative_line_to(self, dx: float, dy: float):
        self.line_to(self._current.x + dx, self._current.y + dy)

    def cubic_to(self, x1: float, y1: float, x2: float, y2: float, x3: float, y3: float):
        self._ensure_subpath()
        self._current = Point(x3, y3)
        self._segments.append(('cubic', Point(x1, y1), Point(x2, y2), self._current))

    def relative_cubic_to(self, dx1: float, dy1: float, dx2: float, dy2: float,
                          dx3: float, dy3: float):
        origin = self._current
        self.cubic_to(origin.x + dx1, origin.y + dy1,
                      origin.x + dx2, origin.y + dy2,
                      origin.x + dx3, origin.y + dy3)

    def arc_to_point(self, end: Point, radius: Point, rotation: float = 0.0,
                     large_arc: bool = False, clockwise: bool = True):
        self._ensure_subpath()
        # y grows downwards, so a clockwise arc is the SVG positive sweep
        for control1, control2, point in arc_to_cubics(
                self._current, radius, rotation, large_arc, clockwise, end):
            self._segments.append(('cubic', control1, control2, point))
        self._current = end

    def relative_arc_to_point(self, delta: Point, radius: Point, rotation: float = 0.0,
                              large_arc: bool = False, clockwise: bool = True):
        self.arc_to_point(self._current + delta, radius, rotation, large_arc, clockwise)

    def add_oval(self, center: Point, rx: float, ry: float = None):
        if ry is None:
            ry = rx
        start, segments = oval_to_cubics(center, rx, ry)
        self.move_to(start.x, start.y)
        for control1, control2, point in segments:
            self._segments.append(('cubic', control1, control2, point))
        self.close()

    def close(self):
        if not self._open:
            return
        self._segments.append(('close',))
        self._current = self._subpath_start
        self._open = False

    def transformed(self, matrix: TransformMatrix) -> 'Path':
        result = Path()
        for segment in self._segments:
            kind = segment[0]
            result._segments.append((kind,) + tuple(matrix.map_point(p) for p in segment[1:]))
        result._current = matrix.map_point(self._current)
        result._subpath_start = matrix.map_point(self._subpath_start)
        result._open = self._open
        return result

    def flatten(self, tolerance: float = FLATTEN_TOLERANCE) -> List[Polyline]:
        polylines: List[Polyline] = []
        points: List[Tuple[float, float]] = []

        for segment in self._segments:
            kind = segment[0]
            if kind == 'move':
                if len(points) > 1:
                    polylines.append((points, False))
                points = [segment[1].as_tuple()]
            elif kind == 'line':
                points.append(segment[1].as_tuple())
            elif kind == 'cubic':
                curve = subdivide_cubic_bezier(points[-1], segment[1].as_tuple(),
                                               segment[2].as_tuple(), segment[3].as_tuple(),
                                               tolerance)
                points.extend(curve[1:])
            else:
                if points:
                    polylines.append((points, True))
                points = []

        if len(points) > 1:
            polylines.append((points, False))
        return polylines

    def bounds(self) -> Optional[tuple[float, float, float, float]]:
        return bounding_box(p for polyline, _ in self.flatten() for p in polyline)

    def __repr__(self) -> str:
        return f"Path({len(self._segments)} segments)"


class StrokeStyle:
    def __init__(self, color: Color, width: float, cap: Optional[LineCap] = None,
                 join: Optional[LineJoin] = None, miter_limit: Optional[float] = None):
        self.color = color
        self.width = width
        self.cap = cap
        self.join = join
        self.miter_limit = miter_limit

    def _key(self) -> tuple:
        return (self.color, self.width, self.cap, self.join, self.miter_limit)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StrokeStyle):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return "StrokeStyle(color={}, width={}, cap={}, join={}, miter_limit={})".format(*self._key())


class Canvas(Protocol):
    def save(self) -> None: ...

    def restore(self) -> None: ...

    def transform(self, matrix: TransformMatrix) -> None: ...

    def translate(self, dx: float, dy: float) -> None: ...

    def scale(self, sx: float, sy: float) -> None: ...

    def fill_path(self, path: Path, color: Color) -> None: ...

    def stroke_path(self, path: Path, stroke: StrokeStyle) -> None: ...


@contextlib.contextmanager
def saved_state(canvas: Canvas) -> Iterator[Canvas]:
    canvas.save()
    try:
        yield canvas
    finally:
        canvas.restore()


class DrawCall:
    def __init__(self, name: str, args: tuple, matrix: TransformMatrix = None):
        self.name = name
        self.args = args
        self.matrix = matrix if matrix is not None else TransformMatrix.identity()

    def device_path(self) -> Path:
        return self.args[0].transformed(self.matrix)

    def __repr__(self) -> str:
        return f"DrawCall({self.name!r}, {self.matrix!r})"


class RecordingCanvas:
    """Canvas that only records what it is asked to draw."""

    def __init__(self):
        self.calls: list[DrawCall] = []
        self._contexts = ContextStack()

    @property
    def depth(self) -> int:
        return self._contexts.depth

    @property
    def current_transform(self) -> TransformMatrix:
        return self._contexts.current.transform.copy()

    def _record(self, name: str, *args):
        self.calls.append(DrawCall(name, args, self.current_transform))

    def save(self):
        self._contexts.push()
        self._record('save')

    def restore(self):
        self._contexts.pop()
        self._record('restore')

    def transform(self, matrix: TransformMatrix):
        self._contexts.transform(matrix)
        self._record('transform', matrix)

    def translate(self, dx: float, dy: float):
        self._contexts.translate(dx, dy)
        self._record('translate', dx, dy)

    def scale(self, sx: float, sy: float):
        self._contexts.scale(sx, sy)
        self._record('scale', sx, sy)

    def fill_path(self, path: Path, color: Color):
        self._record('fill_path', path, color)

    def stroke_path(self, path: Path, stroke: StrokeStyle):
        self._record('stroke_path', path, stroke)

    def drawing_calls(self) -> list[DrawCall]:
        return [call for call in self.calls if call.name in ('fill_path', 'stroke_path')]

    def names(self) -> list[str]:
        return [call.name for call in self.calls]
