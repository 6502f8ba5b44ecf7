from __future__ import annotations
import re

from PIL import ImageColor

Color = tuple[int, int, int, int]

TRANSPARENT: Color = (0, 0, 0, 0)
WHITE: Color = (255, 255, 255, 255)

rgb_pattern = re.compile(r'rgba?\(([^)]+)\)')


def parse_hex_color(hex_str: str) -> Color:
    digits = hex_str.strip().lstrip('#')

    try:
        if len(digits) == 3:
            r, g, b = (int(d, 16) * 17 for d in digits)
            return (r, g, b, 255)
        if len(digits) in (6, 8):
            channels = [int(digits[i:i + 2], 16) for i in range(0, len(digits), 2)]
            if len(channels) == 3:
                channels.append(255)
            return tuple(channels)
    except ValueError:
        pass

    raise ValueError(f"Invalid hex color: #{digits}")


def parse_rgb_color(rgb_str: str) -> Color:
    rgb_str = rgb_str.strip().lower()

    match = rgb_pattern.fullmatch(rgb_str)
    if not match:
        raise ValueError(f"Invalid rgb color: {rgb_str}")

    values = [v.strip() for v in match.group(1).split(',')]
    if len(values) not in (3, 4):
        raise ValueError(f"Invalid rgb color: {rgb_str}")

    r, g, b = (max(0, min(255, int(float(v)))) for v in values[:3])
    alpha = 255
    if len(values) == 4:
        # CSS alpha is a 0..1 fraction
        alpha = int(round(max(0.0, min(1.0, float(values[3]))) * 255))
    return (r, g, b, alpha)


def parse_color(color_str: str) -> Color:
    """Parse an SVG paint value into RGBA.

    ``none`` and ``transparent`` are fully transparent colors, so an element
    painted with them still overrides whatever it would inherit.
    """
    color_str = color_str.strip().lower()

    if color_str in ('none', 'transparent'):
        return TRANSPARENT
    if color_str.startswith('#'):
        return parse_hex_color(color_str)
    if color_str.startswith('rgb'):
        return parse_rgb_color(color_str)
    if color_str in ImageColor.colormap:
        return ImageColor.getrgb(color_str)[:3] + (255,)

    raise ValueError(f"Unknown color: {color_str!r}")


def with_opacity(color: Color, opacity: float) -> Color:
    opacity = max(0.0, min(1.0, opacity))
    r, g, b, a = color
    return (r, g, b, int(round(a * opacity)))
