from __future__ import annotations
import math
import re
from typing import Mapping, Optional

from colors import Color, parse_color, with_opacity
from drawing_parameters import DrawingParameters, LineCap, LineJoin
from geometry import Point, TransformMatrix, normalize_unit

# Base case of inheritance for documents that do not spell everything out.
DEFAULT_DRAWING_ATTRIBUTES = {
    'fill': 'black',
    'stroke': 'none',
    'stroke-width': '1',
    'stroke-linecap': 'butt',
    'stroke-linejoin': 'miter',
    'stroke-miterlimit': '4',
}

DRAWING_ATTRIBUTES = {
    'fill', 'stroke', 'stroke-width', 'stroke-linecap', 'stroke-linejoin',
    'stroke-miterlimit', 'opacity', 'fill-opacity', 'stroke-opacity', 'transform',
}

transform_pattern = re.compile(
    r'(matrix|translate|rotate|scale|skewX|skewY)\s*\(([^)]*)\)',
    re.IGNORECASE
)


def _padded(params: list[float], defaults: tuple) -> list[float]:
    return list(params) + list(defaults[len(params):])


def _transform_function(name: str, params: list[float]) -> TransformMatrix:
    if name == 'matrix':
        return TransformMatrix.from_values(params)
    if name == 'translate':
        return TransformMatrix.translate(*_padded(params, (0.0, 0.0))[:2])
    if name == 'rotate':
        return TransformMatrix.rotate(*_padded(params, (0.0, 0.0, 0.0))[:3])
    if name == 'scale':
        sx, sy = _padded(params, (1.0, None))[:2]
        return TransformMatrix.scale(sx, sy)

    skew = math.tan(math.radians(_padded(params, (0.0,))[0]))
    if name == 'skewx':
        return TransformMatrix(1.0, 0.0, skew, 1.0, 0.0, 0.0)
    return TransformMatrix(1.0, skew, 0.0, 1.0, 0.0, 0.0)


def parse_transform(transform_str: str) -> tuple[Optional[Point], Optional[TransformMatrix]]:
    """Split an SVG transform list into (translate, transform_matrix).

    A list made of a single ``translate()`` maps onto the translate field,
    anything else is composed into one matrix.
    """
    if not transform_str or not transform_str.strip():
        return (None, None)

    functions = []
    for name, params in transform_pattern.findall(transform_str):
        values = [float(p) for p in re.split(r'[,\s]+', params.strip()) if p]
        functions.append((name.lower(), values))
    if not functions:
        raise ValueError(f"Invalid transform: {transform_str!r}")

    if len(functions) == 1 and functions[0][0] == 'translate':
        tx, ty = _padded(functions[0][1], (0.0, 0.0))[:2]
        return (Point(tx, ty), None)

    transform = TransformMatrix.identity()
    for name, values in functions:
        transform = transform.multiply(_transform_function(name, values))
    return (None, transform)


def _paint(attrs: Mapping[str, str], name: str) -> Optional[Color]:
    value = attrs.get(name)
    if value is None:
        return None

    color = parse_color(value)
    for opacity_attr in ('opacity', f'{name}-opacity'):
        if opacity_attr in attrs:
            color = with_opacity(color, float(attrs[opacity_attr]))
    return color


def drawing_parameters_from_attributes(attrs: Mapping[str, str]) -> DrawingParameters:
    fill_color = _paint(attrs, 'fill')
    stroke_color = _paint(attrs, 'stroke')

    stroke_width = None
    if 'stroke-width' in attrs:
        stroke_width = normalize_unit(attrs['stroke-width'])
        if stroke_width < 0:
            raise ValueError(f"Negative stroke-width: {attrs['stroke-width']}")

    line_cap = None
    if 'stroke-linecap' in attrs:
        line_cap = LineCap(attrs['stroke-linecap'].strip().lower())

    line_join = None
    if 'stroke-linejoin' in attrs:
        line_join = LineJoin(attrs['stroke-linejoin'].strip().lower())

    miter_limit = None
    if 'stroke-miterlimit' in attrs:
        miter_limit = float(attrs['stroke-miterlimit'])

    translate, transform_matrix = parse_transform(attrs.get('transform', ''))

    return DrawingParameters(
        fill_color=fill_color,
        stroke_color=stroke_color,
        stroke_width=stroke_width,
        stroke_line_cap=line_cap,
        stroke_line_join=line_join,
        stroke_line_miter_limit=miter_limit,
        translate=translate,
        transform_matrix=transform_matrix,
    )


def default_drawing_parameters() -> DrawingParameters:
    return drawing_parameters_from_attributes(DEFAULT_DRAWING_ATTRIBUTES)
