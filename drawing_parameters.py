from __future__ import annotations
import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from colors import Color
from errors import MissingRequiredParameterError
from geometry import Point, TransformMatrix


class LineCap(Enum):
    BUTT = 'butt'
    ROUND = 'round'
    SQUARE = 'square'


class LineJoin(Enum):
    MITER = 'miter'
    ROUND = 'round'
    BEVEL = 'bevel'


@dataclass(frozen=True)
class DrawingParameters:
    """Inheritable drawing attributes of a drawable element.

    Every field is optional and ``None`` means "absent": the value is taken
    from the closest ancestor that declares it. Absent is never the same as
    a zero width or a black color.
    """

    fill_color: Optional[Color] = None
    stroke_color: Optional[Color] = None
    stroke_width: Optional[float] = None
    stroke_line_cap: Optional[LineCap] = None
    stroke_line_join: Optional[LineJoin] = None
    stroke_line_miter_limit: Optional[float] = None
    translate: Optional[Point] = None
    transform_matrix: Optional[TransformMatrix] = None

    def is_complete(self) -> bool:
        return all(value is not None for value in self._values().values())

    def absent_fields(self) -> list[str]:
        return [name for name, value in self._values().items() if value is None]

    def with_changes(self, **changes: Any) -> 'DrawingParameters':
        return dataclasses.replace(self, **changes)

    def _values(self) -> dict[str, Any]:
        return {field.name: getattr(self, field.name) for field in dataclasses.fields(self)}


def merge_drawing_parameters(child: DrawingParameters,
                             parent: Optional[DrawingParameters]) -> DrawingParameters:
    """Field by field: the child's value when present, else the parent's.

    Both values may be absent, in which case the result is absent too. A
    missing parent is only legal when the child leaves nothing to inherit.
    """
    if parent is None:
        absent = child.absent_fields()
        if absent:
            raise MissingRequiredParameterError(absent[0], "merge without a parent")
        return child

    merged = {}
    for field in dataclasses.fields(DrawingParameters):
        value = getattr(child, field.name)
        merged[field.name] = value if value is not None else getattr(parent, field.name)
    return DrawingParameters(**merged)


def require(parameters: DrawingParameters, name: str, context: str = None) -> Any:
    value = getattr(parameters, name)
    if value is None:
        raise MissingRequiredParameterError(name, context)
    return value
