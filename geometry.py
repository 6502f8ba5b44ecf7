from __future__ import annotations
import math
import re
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

PX_PER_INCH = 96.0

PX_PER_UNIT = {
    "": 1.0,
    "px": 1.0,
    "in": PX_PER_INCH,
    "cm": PX_PER_INCH / 2.54,
    "mm": PX_PER_INCH / 25.4,
    "pt": PX_PER_INCH / 72.0,
    "pc": PX_PER_INCH / 6.0,
}

# Magic constant for approximating a quarter ellipse with one cubic
KAPPA = 4.0 * (math.sqrt(2.0) - 1.0) / 3.0


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def __add__(self, other: 'Point') -> 'Point':
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: 'Point') -> 'Point':
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> 'Point':
        return Point(self.x * factor, self.y * factor)

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)


Point.ZERO = Point(0.0, 0.0)
UNDEFINED_POINT = Point(math.inf, math.inf)


class TransformMatrix:
    def __init__(self, a: float = 1.0, b: float = 0.0, c: float = 0.0,
                 d: float = 1.0, e: float = 0.0, f: float = 0.0):
        self.a = a
        self.b = b
        self.c = c
        self.d = d
        self.e = e
        self.f = f

    @staticmethod
    def identity() -> 'TransformMatrix':
        return TransformMatrix(1.0, 0.0, 0.0, 1.0, 0.0, 0.0)

    @staticmethod
    def translate(tx: float, ty: float) -> 'TransformMatrix':
        return TransformMatrix(1.0, 0.0, 0.0, 1.0, tx, ty)

    @staticmethod
    def scale(sx: float, sy: float = None) -> 'TransformMatrix':
        if sy is None:
            sy = sx
        return TransformMatrix(sx, 0.0, 0.0, sy, 0.0, 0.0)

    @staticmethod
    def rotate(angle_degrees: float, cx: float = 0.0, cy: float = 0.0) -> 'TransformMatrix':
        angle_rad = math.radians(angle_degrees)
        cos_a = math.cos(angle_rad)
        sin_a = math.sin(angle_rad)
        r = TransformMatrix(cos_a, sin_a, -sin_a, cos_a, 0.0, 0.0)

        if cx != 0.0 or cy != 0.0:
            t1 = TransformMatrix.translate(-cx, -cy)
            t2 = TransformMatrix.translate(cx, cy)
            return t2.multiply(r).multiply(t1)
        return r

    @staticmethod
    def from_values(values: Sequence[float]) -> 'TransformMatrix':
        if len(values) != 6:
            raise ValueError(f"A transform matrix needs 6 values, got {len(values)}")
        return TransformMatrix(*(float(v) for v in values))

    def multiply(self, other: 'TransformMatrix') -> 'TransformMatrix':
        return TransformMatrix(
            self.a * other.a + self.c * other.b,
            self.b * other.a + self.d * other.b,
            self.a * other.c + self.c * other.d,
            self.b * other.c + self.d * other.d,
            self.a * other.e + self.c * other.f + self.e,
            self.b * other.e + self.d * other.f + self.f
        )

    def transform_point(self, x: float, y: float) -> tuple[float, float]:
        new_x = self.a * x + self.c * y + self.e
        new_y = self.b * x + self.d * y + self.f
        return (new_x, new_y)

    def map_point(self, point: Point) -> Point:
        return Point(*self.transform_point(point.x, point.y))

    def linear_scale(self) -> float:
        # Geometric mean of the axis scale factors; exact for uniform scaling.
        return math.sqrt(abs(self.a * self.d - self.b * self.c))

    def copy(self) -> 'TransformMatrix':
        return TransformMatrix(self.a, self.b, self.c, self.d, self.e, self.f)

    def as_tuple(self) -> tuple[float, float, float, float, float, float]:
        return (self.a, self.b, self.c, self.d, self.e, self.f)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TransformMatrix):
            return NotImplemented
        return self.as_tuple() == other.as_tuple()

    def __hash__(self) -> int:
        return hash(self.as_tuple())

    def __repr__(self) -> str:
        return "TransformMatrix(a={}, b={}, c={}, d={}, e={}, f={})".format(*self.as_tuple())


def _midpoint(a: Tuple[float, float], b: Tuple[float, float]) -> Tuple[float, float]:
    return ((a[0] + b[0]) / 2, (a[1] + b[1]) / 2)


def _flatness(p0, p1, p2, p3) -> float:
    # Squared distance bound between the curve and its chord, times 16.
    ux = 3 * p1[0] - 2 * p0[0] - p3[0]
    uy = 3 * p1[1] - 2 * p0[1] - p3[1]
    vx = 3 * p2[0] - 2 * p3[0] - p0[0]
    vy = 3 * p2[1] - 2 * p3[1] - p0[1]
    return max(ux * ux + uy * uy, vx * vx + vy * vy)


def subdivide_cubic_bezier(p0: Tuple[float, float], p1: Tuple[float, float],
                           p2: Tuple[float, float], p3: Tuple[float, float],
                           tolerance: float = 0.5, max_depth: int = 10) -> List[Tuple[float, float]]:
    """Flatten a cubic into points, ``p0`` included, within ``tolerance``."""
    points = [p0]
    limit = 16 * tolerance * tolerance
    pending = [(p0, p1, p2, p3, 0)]

    while pending:
        q0, q1, q2, q3, depth = pending.pop()
        if depth >= max_depth or _flatness(q0, q1, q2, q3) < limit:
            points.append(q3)
            continue

        left1 = _midpoint(q0, q1)
        mid = _midpoint(q1, q2)
        right2 = _midpoint(q2, q3)
        left2 = _midpoint(left1, mid)
        right1 = _midpoint(mid, right2)
        split = _midpoint(left2, right1)

        # right half first so the left half is popped next
        pending.append((split, right1, right2, q3, depth + 1))
        pending.append((q0, left1, left2, split, depth + 1))

    return points


def arc_to_cubics(start: Point, radius: Point, rotation: float,
                  large_arc: bool, sweep: bool, end: Point) -> List[Tuple[Point, Point, Point]]:
    """Convert an SVG endpoint-parameterised arc into cubic segments.

    Returns a list of (control1, control2, end) triples; a degenerate arc
    (zero radius) comes back as a single straight cubic.
    """
    x1, y1 = start.x, start.y
    x2, y2 = end.x, end.y
    if x1 == x2 and y1 == y2:
        return []

    rx = abs(radius.x)
    ry = abs(radius.y)
    if rx == 0 or ry == 0:
        return [(start, end, end)]

    cos_phi = math.cos(math.radians(rotation))
    sin_phi = math.sin(math.radians(rotation))

    dx = (x1 - x2) / 2
    dy = (y1 - y2) / 2
    x1p = cos_phi * dx + sin_phi * dy
    y1p = -sin_phi * dx + cos_phi * dy

    lambda_val = (x1p * x1p) / (rx * rx) + (y1p * y1p) / (ry * ry)
    if lambda_val > 1:
        rx *= math.sqrt(lambda_val)
        ry *= math.sqrt(lambda_val)

    denominator = rx * rx * y1p * y1p + ry * ry * x1p * x1p
    factor = math.sqrt(max(0, (rx * rx * ry * ry - denominator) / denominator))

    if large_arc == sweep:
        factor = -factor

    cxp = factor * rx * y1p / ry
    cyp = -factor * ry * x1p / rx

    cx = cos_phi * cxp - sin_phi * cyp + (x1 + x2) / 2
    cy = sin_phi * cxp + cos_phi * cyp + (y1 + y2) / 2

    theta1 = math.atan2((y1p - cyp) / ry, (x1p - cxp) / rx)
    dtheta = math.atan2((-y1p - cyp) / ry, (-x1p - cxp) / rx) - theta1

    if sweep and dtheta < 0:
        dtheta += 2 * math.pi
    elif not sweep and dtheta > 0:
        dtheta -= 2 * math.pi

    num_segments = max(1, int(math.ceil(abs(dtheta) / (math.pi / 2) - 1e-9)))
    delta = dtheta / num_segments
    handle = 4.0 / 3.0 * math.tan(delta / 4)

    def on_ellipse(theta: float) -> tuple[float, float, float, float]:
        cos_t = math.cos(theta)
        sin_t = math.sin(theta)
        px = cx + rx * cos_t * cos_phi - ry * sin_t * sin_phi
        py = cy + rx * cos_t * sin_phi + ry * sin_t * cos_phi
        # derivative with respect to theta
        tx = -rx * sin_t * cos_phi - ry * cos_t * sin_phi
        ty = -rx * sin_t * sin_phi + ry * cos_t * cos_phi
        return px, py, tx, ty

    segments = []
    theta = theta1
    px, py, tx, ty = on_ellipse(theta)
    for i in range(num_segments):
        next_theta = theta + delta
        qx, qy, ux, uy = on_ellipse(next_theta)
        if i == num_segments - 1:
            qx, qy = x2, y2
        segments.append((
            Point(px + handle * tx, py + handle * ty),
            Point(qx - handle * ux, qy - handle * uy),
            Point(qx, qy),
        ))
        theta = next_theta
        px, py, tx, ty = qx, qy, ux, uy

    return segments


def oval_to_cubics(center: Point, rx: float, ry: float) -> tuple[Point, List[Tuple[Point, Point, Point]]]:
    kx = rx * KAPPA
    ky = ry * KAPPA
    cx, cy = center.x, center.y
    start = Point(cx + rx, cy)
    segments = [
        (Point(cx + rx, cy + ky), Point(cx + kx, cy + ry), Point(cx, cy + ry)),
        (Point(cx - kx, cy + ry), Point(cx - rx, cy + ky), Point(cx - rx, cy)),
        (Point(cx - rx, cy - ky), Point(cx - kx, cy - ry), Point(cx, cy - ry)),
        (Point(cx + kx, cy - ry), Point(cx + rx, cy - ky), Point(cx + rx, cy)),
    ]
    return start, segments


def bounding_box(points: Iterable[Tuple[float, float]]) -> tuple[float, float, float, float] | None:
    xs = []
    ys = []
    for x, y in points:
        xs.append(x)
        ys.append(y)
    if not xs:
        return None
    return (min(xs), min(ys), max(xs), max(ys))


length_pattern = re.compile(r'([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)\s*([a-zA-Z%]*)')


def parse_number_with_unit(value: str) -> tuple[float, str]:
    match = length_pattern.fullmatch(value.strip()) if isinstance(value, str) else None
    if not match:
        raise ValueError(f"Not a number: {value!r}")
    return (float(match.group(1)), match.group(2))


def normalize_unit(value: str) -> float:
    """Convert an SVG length to user units (px); relative units are rejected."""
    number, unit = parse_number_with_unit(value)
    factor = PX_PER_UNIT.get(unit.lower())
    if factor is None:
        raise ValueError(f"Unsupported unit {unit!r} in {value!r}")
    return number * factor
