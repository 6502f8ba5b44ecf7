from __future__ import annotations
import logging
from typing import List, Optional

from attributes import DEFAULT_DRAWING_ATTRIBUTES, DRAWING_ATTRIBUTES, drawing_parameters_from_attributes
from elements import Circle, DrawableElement, Group, PathShape, VectorImage
from geometry import Point, normalize_unit
from svg_parser import Node, is_declaration, is_self_terminating, is_terminator, get_tag, read_svg_file, tokenize_svg

logger = logging.getLogger(__name__)

DEFAULT_BASE_IMAGE_SIZE = 100.0

# Element tags turned into drawables, with the attributes they cannot do without.
REQUIRED_ATTRIBUTES = {
    'g': (),
    'circle': ('r',),
    'path': ('d',),
}


class SVGState:
    def __init__(self, entries: list[str] = ()):
        self.metadata = {}
        self.svg_tree: Optional[Node] = None
        self.viewport_width = None
        self.viewport_height = None
        self.viewbox = None
        self.validation_errors = []
        self.validation_warnings = []
        self.parse_svg_contents(entries)
        self._extract_viewport_info()
        self.validate()

    @classmethod
    def from_string(cls, data: str) -> 'SVGState':
        return cls(tokenize_svg(data))

    @classmethod
    def from_file(cls, path: str) -> 'SVGState':
        return cls(read_svg_file(path))

    def parse_svg_contents(self, entries: list[str]):
        iterator = iter(entries)
        r = None

        for svg_element in iterator:
            tag = get_tag(svg_element)
            if tag == "svg":
                self.svg_tree = Node(svg_element)
                r = self.svg_tree
                break
            self.metadata[tag] = svg_element

        if r is None or is_self_terminating(self.svg_tree.element):
            return

        for svg_element in iterator:
            if r is None:
                return

            if is_declaration(svg_element):
                continue

            if is_terminator(svg_element):
                if r.compare_tag(svg_element):
                    r = r.parent
                continue

            if is_self_terminating(svg_element):
                r.add_child(svg_element)
            else:
                r = r.add_child(svg_element)

    def _extract_viewport_info(self):
        if self.svg_tree is None:
            return

        attrs = self.svg_tree.attributes

        try:
            if 'width' in attrs:
                self.viewport_width = normalize_unit(attrs['width'])
            if 'height' in attrs:
                self.viewport_height = normalize_unit(attrs['height'])
        except ValueError as e:
            self.validation_warnings.append(f"Ignoring viewport size: {e}")

        if 'viewBox' in attrs:
            parts = attrs['viewBox'].replace(',', ' ').split()
            if len(parts) == 4:
                try:
                    self.viewbox = tuple(float(p) for p in parts)
                except ValueError:
                    self.viewbox = None
            if self.viewbox is None:
                self.validation_warnings.append(f"Invalid viewBox: {attrs['viewBox']}")

    @property
    def base_image_size(self) -> float:
        if self.viewbox is not None:
            return self.viewbox[2]
        if self.viewport_width is not None:
            return self.viewport_width
        return DEFAULT_BASE_IMAGE_SIZE

    def validate(self):
        self.validation_errors = []

        if self.svg_tree is None:
            self.validation_errors.append("No root <svg> element found")
        else:
            self._validate_sizes()
            for child in self.svg_tree.children:
                self._validate_node(child)

        for error in self.validation_errors:
            logger.error("SVG validation: %s", error)
        for warning in self.validation_warnings:
            logger.warning("SVG validation: %s", warning)

    def _validate_sizes(self):
        sizes = [('viewport width', self.viewport_width), ('viewport height', self.viewport_height)]

        if self.viewbox is not None:
            min_x, min_y, width, height = self.viewbox
            sizes += [('viewBox width', width), ('viewBox height', height)]
            if (min_x, min_y) != (0, 0):
                self.validation_warnings.append("viewBox origin is ignored, drawing starts at 0,0")
            if width != height:
                self.validation_warnings.append(
                    f"viewBox is not square ({width}x{height}), rendering uses its width")

        for name, value in sizes:
            if value is not None and value <= 0:
                self.validation_errors.append(f"Non-positive {name}: {value}")

    def _validate_node(self, node: Node):
        if node.tag not in REQUIRED_ATTRIBUTES:
            self.validation_warnings.append(f"Unsupported element <{node.tag}> skipped")
            return

        for name in REQUIRED_ATTRIBUTES[node.tag]:
            if not node.get_attribute(name, '').strip():
                self.validation_warnings.append(f"<{node.tag}> without '{name}' is skipped")
        if node.tag != 'path' and 'transform' in node.attributes:
            self.validation_warnings.append(f"transform on <{node.tag}> is ignored")

        for child in node.children:
            self._validate_node(child)

    def is_valid(self) -> bool:
        return not self.validation_errors

    def print_validation_report(self):
        if not self.validation_errors and not self.validation_warnings:
            print("SVG validation: [OK] Valid")
            return

        for label, messages in (('ERROR', self.validation_errors), ('WARNING', self.validation_warnings)):
            for message in messages:
                print(f"  {label}: {message}")

    def _drawing_attributes(self, node: Node) -> dict[str, str]:
        return {k: v for k, v in node.attributes.items() if k in DRAWING_ATTRIBUTES}

    def _build_element(self, node: Node) -> Optional[DrawableElement]:
        parameters = drawing_parameters_from_attributes(self._drawing_attributes(node))

        if node.tag == 'g':
            children = self._build_children(node)
            return Group(children, parameters.with_changes(translate=None, transform_matrix=None))

        if node.tag == 'circle':
            radius = normalize_unit(node.get_attribute('r', '0'))
            if radius <= 0:
                return None
            center = Point(normalize_unit(node.get_attribute('cx', '0')),
                           normalize_unit(node.get_attribute('cy', '0')))
            return Circle(center, radius, parameters.with_changes(translate=None, transform_matrix=None))

        if node.tag == 'path':
            d = node.get_attribute('d', '')
            if not d.strip():
                return None
            return PathShape.from_path_data(d, parameters)

        return None

    def _build_children(self, node: Node) -> List[DrawableElement]:
        children = []
        for child in node.children:
            element = self._build_element(child)
            if element is not None:
                children.append(element)
        return children

    def to_vector_image(self, base_attributes: Optional[dict[str, str]] = None) -> VectorImage:
        if not self.is_valid():
            raise ValueError("; ".join(self.validation_errors))

        root_attributes = dict(DEFAULT_DRAWING_ATTRIBUTES)
        root_attributes.update(base_attributes or {})
        root_attributes.update(self._drawing_attributes(self.svg_tree))
        root_attributes.pop('transform', None)

        root = Group(self._build_children(self.svg_tree),
                     drawing_parameters_from_attributes(root_attributes))
        return VectorImage([root], self.base_image_size)
