from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from canvas import Canvas, Path, StrokeStyle, saved_state
from colors import Color, WHITE
from drawing_parameters import DrawingParameters, merge_drawing_parameters, require
from geometry import Point
from path_commands import PathCommand
from path_parser import parse_path
from renderer import RasterCanvas

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Group:
    children: Tuple['DrawableElement', ...] = ()
    drawing_parameters: DrawingParameters = field(default_factory=DrawingParameters)

    def __post_init__(self):
        object.__setattr__(self, 'children', tuple(self.children))


@dataclass(frozen=True)
class Circle:
    center: Point
    radius: float
    drawing_parameters: DrawingParameters = field(default_factory=DrawingParameters)


@dataclass(frozen=True)
class PathShape:
    commands: Tuple[PathCommand, ...]
    drawing_parameters: DrawingParameters = field(default_factory=DrawingParameters)

    def __post_init__(self):
        object.__setattr__(self, 'commands', tuple(self.commands))

    @classmethod
    def from_path_data(cls, path_data: str,
                       drawing_parameters: Optional[DrawingParameters] = None) -> 'PathShape':
        # Parsed once here; painting only replays the commands.
        return cls(parse_path(path_data), drawing_parameters or DrawingParameters())

    def build_path(self) -> Path:
        path = Path()
        for command in self.commands:
            command.add_to_path(path)
        return path


DrawableElement = Union[Group, Circle, PathShape]


def effective_parameters(element: DrawableElement,
                         inherited: Optional[DrawingParameters]) -> DrawingParameters:
    return merge_drawing_parameters(element.drawing_parameters, inherited)


def _stroke_style(parameters: DrawingParameters, context: str) -> StrokeStyle:
    return StrokeStyle(
        color=require(parameters, 'stroke_color', context),
        width=require(parameters, 'stroke_width', context),
        cap=parameters.stroke_line_cap,
        join=parameters.stroke_line_join,
        miter_limit=parameters.stroke_line_miter_limit,
    )


def _paint_group(group: Group, canvas: Canvas, parameters: DrawingParameters):
    for child in group.children:
        paint_element(child, canvas, parameters)


def _paint_circle(circle: Circle, canvas: Canvas, parameters: DrawingParameters):
    path = Path()
    path.add_oval(circle.center, circle.radius)

    if parameters.fill_color is not None:
        canvas.fill_path(path, parameters.fill_color)

    stroke = _stroke_style(parameters, 'circle')
    canvas.stroke_path(path, StrokeStyle(stroke.color, stroke.width))


def _paint_path_shape(shape: PathShape, canvas: Canvas, parameters: DrawingParameters):
    own = shape.drawing_parameters
    with saved_state(canvas):
        # Transform and translate are local to the shape, never inherited.
        if own.transform_matrix is not None:
            canvas.transform(own.transform_matrix)
        if own.translate is not None:
            canvas.translate(own.translate.x, own.translate.y)

        path = shape.build_path()

        if parameters.fill_color is not None:
            canvas.fill_path(path, parameters.fill_color)

        canvas.stroke_path(path, _stroke_style(parameters, 'path'))


def paint_element(element: DrawableElement, canvas: Canvas,
                  inherited: Optional[DrawingParameters]):
    if not isinstance(element, (Group, Circle, PathShape)):
        raise TypeError(f"Not a drawable element: {type(element).__name__}")

    parameters = effective_parameters(element, inherited)

    if isinstance(element, Group):
        _paint_group(element, canvas, parameters)
    elif isinstance(element, Circle):
        _paint_circle(element, canvas, parameters)
    else:
        _paint_path_shape(element, canvas, parameters)


@dataclass(frozen=True)
class VectorImage:
    """Root elements authored against a square of ``base_image_size`` units."""

    elements: Tuple[DrawableElement, ...]
    base_image_size: float

    def __post_init__(self):
        object.__setattr__(self, 'elements', tuple(self.elements))
        if self.base_image_size is None or self.base_image_size <= 0:
            raise ValueError(f"base_image_size must be positive, got {self.base_image_size}")

    def with_base_image_size(self, base_image_size: float) -> 'VectorImage':
        return VectorImage(self.elements, base_image_size)

    def paint(self, canvas: Canvas, requested_size: float):
        if requested_size is None or requested_size <= 0:
            raise ValueError(f"requested_size must be positive, got {requested_size}")

        factor = requested_size / self.base_image_size
        with saved_state(canvas):
            canvas.scale(factor, factor)
            for element in self.elements:
                # Roots have no ancestor: they inherit from themselves.
                paint_element(element, canvas, element.drawing_parameters)

    def render(self, requested_size: int, background: Color = WHITE,
               anti_aliasing: bool = False) -> RasterCanvas:
        canvas = RasterCanvas(requested_size, requested_size, background, anti_aliasing)
        logger.debug("Rendering %d root element(s) at %dpx (base %s)",
                     len(self.elements), requested_size, self.base_image_size)
        self.paint(canvas, requested_size)
        return canvas
