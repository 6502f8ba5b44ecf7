"""Tests for attribute, color and geometry helpers."""

import pytest

from tests.conftest import BLACK, RED, TRANSPARENT

from attributes import default_drawing_parameters, drawing_parameters_from_attributes, parse_transform
from colors import parse_color, with_opacity
from drawing_parameters import DrawingParameters, LineCap, LineJoin
from geometry import Point, TransformMatrix, arc_to_cubics, normalize_unit
from svg_parser import get_tag, parse_attributes, tokenize_svg


@pytest.mark.parametrize("value, expected", [
    ("red", RED),
    ("#f00", RED),
    ("#FF0000", RED),
    ("#ff000080", (255, 0, 0, 128)),
    ("rgb(255, 0, 0)", RED),
    ("rgba(255, 0, 0, 0)", (255, 0, 0, 0)),
    ("none", TRANSPARENT),
    (" Black ", BLACK),
])
def test_parse_color(value, expected):
    assert parse_color(value) == expected


@pytest.mark.parametrize("value", ["currentColor", "#12", "rgb(1, 2)", "url(#gradient)"])
def test_parse_color_rejects_unknown_values(value):
    with pytest.raises(ValueError):
        parse_color(value)


def test_with_opacity_multiplies_alpha():
    assert with_opacity(RED, 0.5) == (255, 0, 0, 128)
    assert with_opacity((0, 0, 0, 100), 2.0) == (0, 0, 0, 100)


def test_default_parameters_are_complete_except_transforms():
    parameters = default_drawing_parameters()
    assert parameters.absent_fields() == ['translate', 'transform_matrix']
    assert parameters.fill_color == BLACK
    assert parameters.stroke_color == TRANSPARENT
    assert parameters.stroke_width == 1.0
    assert parameters.stroke_line_cap is LineCap.BUTT
    assert parameters.stroke_line_join is LineJoin.MITER
    assert parameters.stroke_line_miter_limit == 4.0


def test_only_declared_attributes_are_set():
    parameters = drawing_parameters_from_attributes({'stroke': 'red', 'id': 'shape'})
    assert parameters == DrawingParameters(stroke_color=RED)


def test_line_cap_join_and_width():
    parameters = drawing_parameters_from_attributes({
        'stroke-linecap': 'round',
        'stroke-linejoin': 'bevel',
        'stroke-width': '2.5px',
        'stroke-miterlimit': '8',
    })
    assert parameters.stroke_line_cap is LineCap.ROUND
    assert parameters.stroke_line_join is LineJoin.BEVEL
    assert parameters.stroke_width == 2.5
    assert parameters.stroke_line_miter_limit == 8.0


def test_opacity_applies_to_declared_colors():
    parameters = drawing_parameters_from_attributes({
        'fill': 'red', 'stroke': 'black', 'opacity': '0.5', 'stroke-opacity': '0.5',
    })
    assert parameters.fill_color == (255, 0, 0, 128)
    assert parameters.stroke_color == (0, 0, 0, 64)


@pytest.mark.parametrize("attributes", [
    {'stroke-width': '-1'},
    {'stroke-width': 'wide'},
    {'stroke-linecap': 'pointy'},
    {'stroke-miterlimit': 'x'},
    {'transform': 'flip(1)'},
])
def test_malformed_attributes_raise(attributes):
    with pytest.raises(ValueError):
        drawing_parameters_from_attributes(attributes)


def test_lone_translate_maps_to_translate_field():
    assert parse_transform("translate(4)") == (Point(4, 0), None)
    assert parse_transform("") == (None, None)


def test_transform_list_composes_into_matrix():
    translate, matrix = parse_transform("scale(2) translate(1, 1)")
    assert translate is None
    assert matrix == TransformMatrix(2, 0, 0, 2, 2, 2)


def test_rotate_transform():
    _, matrix = parse_transform("rotate(90)")
    x, y = matrix.transform_point(1, 0)
    assert x == pytest.approx(0, abs=1e-9)
    assert y == pytest.approx(1)


def test_matrix_transform_needs_six_values():
    with pytest.raises(ValueError):
        parse_transform("matrix(1 0 0 1)")


def test_matrix_composition_and_linear_scale():
    matrix = TransformMatrix.scale(3).multiply(TransformMatrix.translate(1, 2))
    assert matrix.as_tuple() == (3, 0, 0, 3, 3, 6)
    assert matrix.linear_scale() == pytest.approx(3)


def test_arc_to_cubics_respects_sweep():
    clockwise = arc_to_cubics(Point(0, 0), Point(5, 5), 0, False, True, Point(10, 0))
    counter = arc_to_cubics(Point(0, 0), Point(5, 5), 0, False, False, Point(10, 0))
    assert clockwise[-1][2] == counter[-1][2] == Point(10, 0)
    # y grows downwards: the clockwise half circle bulges upwards
    assert clockwise[0][0].y < 0
    assert counter[0][0].y > 0


def test_arc_to_same_point_is_empty():
    assert arc_to_cubics(Point(1, 1), Point(5, 5), 0, False, True, Point(1, 1)) == []


@pytest.mark.parametrize("value, expected", [
    ("10", 10.0),
    ("10px", 10.0),
    ("1in", 96.0),
    ("72pt", 96.0),
    ("2.54cm", 96.0),
])
def test_normalize_unit(value, expected):
    assert normalize_unit(value) == pytest.approx(expected)


def test_normalize_unit_rejects_percentages():
    with pytest.raises(ValueError):
        normalize_unit("50%")


def test_tokenizer_drops_comments():
    tokens = tokenize_svg('<svg><!-- <circle r="1"/> --><path d="M1 1"/></svg>')
    assert [get_tag(token) for token in tokens] == ['svg', 'path', 'svg']


def test_parse_attributes_with_style():
    attributes = parse_attributes('<path fill="red" stroke=\'blue\' style="fill: green; stroke-width: 3"/>')
    assert attributes == {'fill': 'green', 'stroke': 'blue', 'stroke-width': '3'}


def test_rotation_half_turn_maps_point():
    matrix = TransformMatrix.rotate(180, 5, 5)
    x, y = matrix.transform_point(0, 0)
    assert (x, y) == (pytest.approx(10), pytest.approx(10))
