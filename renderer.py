from __future__ import annotations
import logging
import math
from typing import List, Optional, Sequence, Tuple

import numpy as np
from PIL import Image

from canvas import Path, Polyline, StrokeStyle
from colors import Color, WHITE
from drawing_context import ContextStack
from drawing_parameters import LineCap, LineJoin
from geometry import TransformMatrix, bounding_box

logger = logging.getLogger(__name__)

DEFAULT_MITER_LIMIT = 4.0

PixelPoint = Tuple[float, float]


def _unit(dx: float, dy: float) -> Optional[PixelPoint]:
    length = math.hypot(dx, dy)
    if length == 0:
        return None
    return (dx / length, dy / length)


def _dedupe(points: Sequence[PixelPoint]) -> List[PixelPoint]:
    result = []
    for point in points:
        if not result or point != result[-1]:
            result.append(point)
    return result


class RasterCanvas:
    def __init__(self, width: int, height: int, background: Color = WHITE,
                 anti_aliasing: bool = False):
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")

        self.width = int(width)
        self.height = int(height)
        self.anti_aliasing = anti_aliasing
        self.samples = 4 if anti_aliasing else 1

        self.buffer = np.zeros((self.height, self.width, 4), dtype=np.uint8)
        self.buffer[:, :, 0] = background[0]
        self.buffer[:, :, 1] = background[1]
        self.buffer[:, :, 2] = background[2]
        self.buffer[:, :, 3] = background[3]

        self._contexts = ContextStack()
        logger.debug("Raster canvas %dx%d (anti-aliasing %s)", self.width, self.height, anti_aliasing)

    @property
    def depth(self) -> int:
        return self._contexts.depth

    @property
    def current_transform(self) -> TransformMatrix:
        return self._contexts.current.transform

    def save(self):
        self._contexts.push()

    def restore(self):
        self._contexts.pop()

    def transform(self, matrix: TransformMatrix):
        self._contexts.transform(matrix)

    def translate(self, dx: float, dy: float):
        self._contexts.translate(dx, dy)

    def scale(self, sx: float, sy: float):
        self._contexts.scale(sx, sy)

    def fill_path(self, path: Path, color: Color):
        if color[3] == 0:
            return

        polylines = path.transformed(self.current_transform).flatten()
        mask = self._new_mask()
        self._scan_polygons(mask, polylines)
        self._composite(mask, color)

    def stroke_path(self, path: Path, stroke: StrokeStyle):
        if stroke.width <= 0 or stroke.color[3] == 0:
            return

        matrix = self.current_transform
        half_width = stroke.width * matrix.linear_scale() / 2.0
        if half_width <= 0:
            return

        cap = stroke.cap or LineCap.BUTT
        join = stroke.join or LineJoin.MITER
        miter_limit = stroke.miter_limit if stroke.miter_limit is not None else DEFAULT_MITER_LIMIT

        mask = self._new_mask()
        for points, closed in path.transformed(matrix).flatten():
            points = _dedupe(points)
            if closed and len(points) > 1 and points[0] == points[-1]:
                points = points[:-1]

            if len(points) < 2:
                if points and cap is LineCap.ROUND:
                    self._fill_disc(mask, points[0], half_width)
                continue

            segments = list(zip(points, points[1:]))
            if closed:
                segments.append((points[-1], points[0]))
            for start, end in segments:
                self._stroke_segment(mask, start, end, half_width)

            joints = range(len(points)) if closed else range(1, len(points) - 1)
            for k in joints:
                self._stroke_join(mask, points[k - 1], points[k], points[(k + 1) % len(points)],
                                  half_width, join, miter_limit)

            if not closed:
                self._stroke_cap(mask, points[1], points[0], half_width, cap)
                self._stroke_cap(mask, points[-2], points[-1], half_width, cap)

        self._composite(mask, stroke.color)

    def _new_mask(self) -> np.ndarray:
        n = self.samples
        return np.zeros((self.height * n, self.width * n), dtype=bool)

    def _sample_region(self, bounds):
        if bounds is None:
            return None

        n = self.samples
        min_x, min_y, max_x, max_y = bounds
        j0 = max(0, int(math.floor(min_x * n)))
        j1 = min(self.width * n, int(math.ceil(max_x * n)) + 1)
        i0 = max(0, int(math.floor(min_y * n)))
        i1 = min(self.height * n, int(math.ceil(max_y * n)) + 1)
        if j0 >= j1 or i0 >= i1:
            return None

        xs = (np.arange(j0, j1) + 0.5) / n
        ys = (np.arange(i0, i1) + 0.5) / n
        return i0, i1, j0, j1, xs, ys

    def _scan_polygons(self, mask: np.ndarray, polylines: List[Polyline]):
        # Non-zero winding scanline fill; every polyline is closed implicitly.
        edges = []
        for points, _closed in polylines:
            if len(points) < 2:
                continue
            for k in range(len(points)):
                x0, y0 = points[k - 1]
                x1, y1 = points[k]
                if y0 != y1:
                    edges.append((x0, y0, x1, y1))
        if not edges:
            return

        region = self._sample_region(bounding_box(p for points, _ in polylines for p in points))
        if region is None:
            return
        i0, i1, j0, j1, xs, ys = region

        x0, y0, x1, y1 = np.array(edges, dtype=np.float64).T
        direction = np.where(y1 > y0, 1, -1)
        y_low = np.minimum(y0, y1)
        y_high = np.maximum(y0, y1)

        for row, y in zip(range(i0, i1), ys):
            active = (y_low <= y) & (y < y_high)
            if not active.any():
                continue

            t = (y - y0[active]) / (y1[active] - y0[active])
            crossings = x0[active] + t * (x1[active] - x0[active])
            order = np.argsort(crossings)
            crossings = crossings[order]
            winding = np.cumsum(direction[active][order])

            for k in range(len(crossings) - 1):
                if winding[k] != 0:
                    mask[row, j0:j1] |= (xs >= crossings[k]) & (xs < crossings[k + 1])

    def _fill_disc(self, mask: np.ndarray, center: PixelPoint, radius: float):
        cx, cy = center
        region = self._sample_region((cx - radius, cy - radius, cx + radius, cy + radius))
        if region is None:
            return
        i0, i1, j0, j1, xs, ys = region

        dist_sq = (xs[None, :] - cx) ** 2 + (ys[:, None] - cy) ** 2
        mask[i0:i1, j0:j1] |= dist_sq <= radius * radius

    def _stroke_segment(self, mask: np.ndarray, start: PixelPoint, end: PixelPoint, half_width: float):
        direction = _unit(end[0] - start[0], end[1] - start[1])
        if direction is None:
            return

        nx = -direction[1] * half_width
        ny = direction[0] * half_width
        quad = [
            (start[0] + nx, start[1] + ny),
            (end[0] + nx, end[1] + ny),
            (end[0] - nx, end[1] - ny),
            (start[0] - nx, start[1] - ny),
        ]
        self._scan_polygons(mask, [(quad, True)])

    def _stroke_cap(self, mask: np.ndarray, before: PixelPoint, tip: PixelPoint,
                    half_width: float, cap: LineCap):
        if cap is LineCap.ROUND:
            self._fill_disc(mask, tip, half_width)
        elif cap is LineCap.SQUARE:
            direction = _unit(tip[0] - before[0], tip[1] - before[1])
            if direction is None:
                return
            extended = (tip[0] + direction[0] * half_width, tip[1] + direction[1] * half_width)
            self._stroke_segment(mask, tip, extended, half_width)

    def _stroke_join(self, mask: np.ndarray, before: PixelPoint, at: PixelPoint, after: PixelPoint,
                     half_width: float, join: LineJoin, miter_limit: float):
        if join is LineJoin.ROUND:
            self._fill_disc(mask, at, half_width)
            return

        d1 = _unit(at[0] - before[0], at[1] - before[1])
        d2 = _unit(after[0] - at[0], after[1] - at[1])
        if d1 is None or d2 is None:
            return

        cross = d1[0] * d2[1] - d1[1] * d2[0]
        if abs(cross) < 1e-9 and d1[0] * d2[0] + d1[1] * d2[1] > 0:
            return

        # The gap to fill is on the outside of the turn.
        side = -1.0 if cross > 0 else 1.0
        n1 = (-d1[1] * side, d1[0] * side)
        n2 = (-d2[1] * side, d2[0] * side)
        corner1 = (at[0] + n1[0] * half_width, at[1] + n1[1] * half_width)
        corner2 = (at[0] + n2[0] * half_width, at[1] + n2[1] * half_width)
        polygon = [at, corner1, corner2]

        if join is LineJoin.MITER:
            sx = n1[0] + n2[0]
            sy = n1[1] + n2[1]
            norm_sq = sx * sx + sy * sy
            if norm_sq > 1e-12 and 2.0 / math.sqrt(norm_sq) <= miter_limit:
                reach = 2.0 * half_width / norm_sq
                polygon = [at, corner1, (at[0] + sx * reach, at[1] + sy * reach), corner2]

        self._scan_polygons(mask, [(polygon, True)])

    def _composite(self, mask: np.ndarray, color: Color):
        n = self.samples
        if n > 1:
            coverage = mask.reshape(self.height, n, self.width, n).mean(axis=(1, 3))
        else:
            coverage = mask.astype(np.float64)

        alpha = coverage * (color[3] / 255.0)
        touched = alpha > 0
        if not touched.any():
            return

        src = np.asarray(color[:3], dtype=np.float64)
        dst = self.buffer[touched].astype(np.float64)
        a = alpha[touched][:, None]
        dst_alpha = dst[:, 3:4] / 255.0

        out_alpha = a + dst_alpha * (1.0 - a)
        safe_alpha = np.where(out_alpha > 0, out_alpha, 1.0)
        rgb = (src * a + dst[:, :3] * dst_alpha * (1.0 - a)) / safe_alpha

        self.buffer[touched, :3] = np.clip(np.round(rgb), 0, 255).astype(np.uint8)
        self.buffer[touched, 3] = np.clip(np.round(out_alpha[:, 0] * 255), 0, 255).astype(np.uint8)

    def pixel(self, x: int, y: int) -> Color:
        return tuple(int(v) for v in self.buffer[y, x])

    def get_rgb_buffer(self) -> np.ndarray:
        return self.buffer[:, :, 0:3].copy()

    def get_rgba_buffer(self) -> np.ndarray:
        return self.buffer.copy()

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.get_rgba_buffer(), 'RGBA')

    def save_png(self, output_path: str):
        self.to_image().save(output_path)
        logger.debug("Saved %dx%d PNG to %s", self.width, self.height, output_path)
