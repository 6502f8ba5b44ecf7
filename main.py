from __future__ import annotations
import logging
import os
import sys

from attributes import DEFAULT_DRAWING_ATTRIBUTES, drawing_parameters_from_attributes
from elements import Group, PathShape, VectorImage
from errors import VectorPaintError
from svg_state import SVGState

DEFAULT_PATH_OUTPUT = "path.png"

USAGE = """Vector path renderer
Usage: python main.py <svg_file> [options]
       python main.py --path "<path data>" -b BASE [options]

Options:
  --path DATA              Render a raw path-data string instead of an SVG file
  -s, --size SIZE          Requested square size in pixels (default: the base size)
  -b, --base-size SIZE     Intrinsic size the drawing was authored for
  -o, --output PATH        Output PNG file
  --fill COLOR             Base fill color (default: black)
  --stroke COLOR           Base stroke color (default: none)
  --stroke-width WIDTH     Base stroke width (default: 1)
  -aa, --anti-aliasing     Enable anti-aliasing (default: off)
  -v, --verbose            Print detailed information

Examples:
  python main.py icon.svg -s 512
  python main.py --path "M10,10 L90,10 L90,90 Z" -b 100 -s 64 --fill red
  python main.py icon.svg --stroke black --stroke-width 2 -aa"""


def parse_positive(value: str, name: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {value!r}")
    if number <= 0:
        raise ValueError(f"{name} must be positive")
    return number


def build_path_image(path_data: str, base_size: float,
                     base_attributes: dict[str, str]) -> VectorImage:
    attributes = dict(DEFAULT_DRAWING_ATTRIBUTES)
    attributes.update(base_attributes)
    shape = PathShape.from_path_data(path_data)
    root = Group([shape], drawing_parameters_from_attributes(attributes))
    return VectorImage([root], base_size)


def build_svg_image(svg_path: str, base_size: float | None,
                    base_attributes: dict[str, str], verbose: bool) -> VectorImage:
    svg_state = SVGState.from_file(svg_path)

    if verbose:
        print(f"\nProcessing: {svg_path}")
        print(f"Viewport: {svg_state.viewport_width}x{svg_state.viewport_height}")
        if svg_state.viewbox:
            print(f"ViewBox: {svg_state.viewbox}")
        svg_state.print_validation_report()
        if svg_state.svg_tree is not None:
            svg_state.svg_tree.print_tree()

    if not svg_state.is_valid():
        raise ValueError(f"{svg_path} has validation errors")

    image = svg_state.to_vector_image(base_attributes)
    if base_size is not None:
        image = image.with_base_image_size(base_size)
    return image


def render_to_png(image: VectorImage, size: int, output_path: str, anti_aliasing: bool):
    canvas = image.render(size, anti_aliasing=anti_aliasing)
    canvas.save_png(output_path)


def main(argv: list[str] = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)

    if len(args) == 0:
        print(USAGE)
        return 1

    verbose = False
    path_data = None
    size = None
    base_size = None
    output_path = None
    anti_aliasing = False
    base_attributes = {}
    inputs = []

    value_options = {
        '--path': 'path', '-s': 'size', '--size': 'size', '-b': 'base-size',
        '--base-size': 'base-size', '-o': 'output', '--output': 'output',
        '--fill': 'fill', '--stroke': 'stroke', '--stroke-width': 'stroke-width',
    }

    try:
        i = 0
        while i < len(args):
            arg = args[i]
            if arg in ['-v', '--verbose']:
                verbose = True
            elif arg in ['-aa', '--anti-aliasing']:
                anti_aliasing = True
            elif arg in value_options:
                if i + 1 >= len(args):
                    print(f"Error: {arg} requires a value")
                    return 1
                name = value_options[arg]
                value = args[i + 1]
                i += 1
                if name == 'path':
                    path_data = value
                elif name == 'size':
                    size = int(parse_positive(value, "Size"))
                elif name == 'base-size':
                    base_size = parse_positive(value, "Base size")
                elif name == 'output':
                    output_path = value
                else:
                    base_attributes[name] = value
            elif arg.startswith('-'):
                print(f"Unknown option: {arg}")
                return 1
            else:
                inputs.append(arg)
            i += 1
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if path_data is not None and inputs:
        print("Error: give either an SVG file or --path, not both")
        return 1
    if path_data is None and len(inputs) != 1:
        print("Error: exactly one SVG file is required")
        return 1
    if path_data is not None and base_size is None:
        print("Error: --path requires -b/--base-size")
        return 1

    try:
        if path_data is not None:
            image = build_path_image(path_data, base_size, base_attributes)
            if output_path is None:
                output_path = DEFAULT_PATH_OUTPUT
            source = "path data"
        else:
            svg_path = inputs[0]
            if not os.path.exists(svg_path):
                print(f"Error: File not found: {svg_path}")
                return 1
            if not svg_path.lower().endswith('.svg'):
                print(f"Warning: {svg_path} does not have .svg extension")
            image = build_svg_image(svg_path, base_size, base_attributes, verbose)
            if output_path is None:
                base_name = os.path.splitext(os.path.basename(svg_path))[0]
                output_path = f"{base_name}.png"
            source = svg_path

        if size is None:
            size = max(1, int(round(image.base_image_size)))

        if verbose:
            print(f"Output will be: {output_path} ({size}x{size}, base {image.base_image_size})")

        render_to_png(image, size, output_path, anti_aliasing)
        print(f"[OK] {source} -> {output_path}")
        return 0

    except (VectorPaintError, ValueError, OSError) as e:
        print(f"Error: {e}")
        if verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
