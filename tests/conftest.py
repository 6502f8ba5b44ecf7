"""Shared test fixtures."""

from __future__ import annotations

import pytest

from attributes import default_drawing_parameters
from canvas import RecordingCanvas
from drawing_parameters import DrawingParameters


RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)
BLACK = (0, 0, 0, 255)
WHITE = (255, 255, 255, 255)
TRANSPARENT = (0, 0, 0, 0)


# Path data

SQUARE_PATH = "M10 10 L90 10 L90 90 L10 90 Z"

HORIZONTAL_LINE_PATH = "M10 50 L90 50"

RELATIVE_PATH = "m10 10 l5 5 h3 v4 c1 1 2 2 3 3 a5 5 0 0 1 6 6"

ABSOLUTE_PATH = "M10 10 H30 V40 L5 5 C1 1 2 2 3 3 A5 5 0 0 0 7 7"


# SVG documents

SIMPLE_SVG = '''<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" width="100" height="100" viewBox="0 0 100 100" stroke="black" stroke-width="2">
  <!-- a red square with a blue dot on top -->
  <g fill="red">
    <path d="M10 10 L90 10 L90 90 L10 90 Z"/>
  </g>
  <circle cx="50" cy="50" r="10" fill="blue"/>
</svg>'''

VIEWBOX_ONLY_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24">
  <path d="M4 4 L20 4 L20 20 Z"/>
</svg>'''

UNSUPPORTED_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="50" height="50">
  <rect x="0" y="0" width="10" height="10"/>
  <path d="M1 1 L2 2"/>
</svg>'''

BAD_PATH_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="50" height="50">
  <path d="M1 1 Q2 2 3 3"/>
</svg>'''


def solid_parameters(**changes) -> DrawingParameters:
    """Complete parameters (black fill, no stroke) with the given overrides."""
    return default_drawing_parameters().with_changes(**changes)


@pytest.fixture
def canvas() -> RecordingCanvas:
    return RecordingCanvas()


@pytest.fixture
def simple_svg_file(tmp_path):
    path = tmp_path / "simple.svg"
    path.write_text(SIMPLE_SVG, encoding="utf-8")
    return path
