import sys
import time
from argparse import ArgumentParser
from pathlib import Path

VERBOSE = False


def log(message, *args, **kwargs):
    if VERBOSE:
        print(message, *args, **kwargs)


from mandelbands import (
    DEFAULT_ESCAPE_RADIUS,
    DEFAULT_MAX_ITERATIONS,
    Bounds,
    RenderParameters,
    Viewport,
    colormap_colorizer,
    default_workers,
    format_from_path,
    is_supported_format,
    load_colormap,
    new_pixel_buffer,
    parse_hex_color,
    render,
    write_image,
)


def parse_pair(text, separator, kind=float):
    """Parse ``text`` as two values of type ``kind`` split at ``separator``.

    Returns None when the separator is missing or either side does not
    convert, e.g. ``parse_pair("10,", ",", int)``.
    """

    index = text.find(separator)
    if index < 0:
        return None
    try:
        return kind(text[:index]), kind(text[index + 1:])
    except ValueError:
        return None


def parse_complex(text):
    pair = parse_pair(text, ',', float)
    if pair is None:
        return None
    return complex(*pair)


def shield_points(argv):
    """Keep points such as ``-1.20,0.35`` from being read as option flags.

    argparse only treats tokens starting with '-' as options, and the
    parsers accept surrounding whitespace, so a leading space is enough.
    """

    return [' ' + arg if arg.startswith('-') and parse_complex(arg) is not None else arg
            for arg in argv]


def build_parser():
    parser = ArgumentParser(
        description='Render the Mandelbrot set over a rectangle of the complex plane.',
        epilog='Example: %(prog)s mandel.png 1000x750 -1.20,0.35 -1,0.20',
    )

    parser.add_argument('output', metavar='FILE', help='image file to write')
    parser.add_argument('pixels', metavar='PIXELS', help='image size as WIDTHxHEIGHT, e.g. 1000x750')
    parser.add_argument('upper_left', metavar='UPPERLEFT', help='upper-left corner as RE,IM')
    parser.add_argument('lower_right', metavar='LOWERRIGHT', help='lower-right corner as RE,IM')

    parser.add_argument('--max-iterations', type=int,
                        dest='max_iterations', help='iteration limit before a point is presumed inside the set',
                        metavar='MAX_ITERATIONS', default=DEFAULT_MAX_ITERATIONS)

    parser.add_argument('--escape-radius', type=float,
                        dest='escape_radius', help='magnitude beyond which a point is considered escaped',
                        metavar='ESCAPE_RADIUS', default=DEFAULT_ESCAPE_RADIUS)

    parser.add_argument('--workers', type=int,
                        dest='workers', help='number of rendering threads (default: one per CPU)',
                        metavar='WORKERS', default=None)

    parser.add_argument('--format', type=str,
                        dest='format', help='image file format. Can be any extension supported by Pillow. '
                                            'Default: taken from FILE, else "png".',
                        metavar='FORMAT', default=None)

    parser.add_argument('--colormap', type=str,
                        dest='colormap', help='matplotlib colormap to colorize the fractal (e.g. "viridis", "inferno")',
                        metavar='COLORMAP', default=None)
    parser.add_argument('--inside-color', type=str, default=None,
                        help='Hex color for points inside the Mandelbrot set. Requires --colormap.')

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose logging.')

    return parser


def resolve_parameters(opt, parser: ArgumentParser) -> RenderParameters:
    size = parse_pair(opt.pixels, 'x', int)
    if size is None:
        parser.error(f"error parsing image dimensions '{opt.pixels}'")
    upper_left = parse_complex(opt.upper_left)
    if upper_left is None:
        parser.error(f"error parsing upper left corner point '{opt.upper_left}'")
    lower_right = parse_complex(opt.lower_right)
    if lower_right is None:
        parser.error(f"error parsing lower right corner point '{opt.lower_right}'")

    width, height = size
    if width <= 0 or height <= 0:
        parser.error("image dimensions must be positive.")
    if opt.max_iterations <= 0:
        parser.error("--max-iterations must be positive.")
    if not opt.escape_radius > 0:
        parser.error("--escape-radius must be positive.")
    if opt.workers is not None and opt.workers <= 0:
        parser.error("--workers must be positive.")

    return RenderParameters(
        bounds=Bounds(width, height),
        viewport=Viewport(upper_left, lower_right),
        max_iterations=opt.max_iterations,
        escape_radius=opt.escape_radius,
        workers=opt.workers,
    )


def resolve_colorizer(opt, parser: ArgumentParser, params: RenderParameters):
    if opt.colormap is None:
        if opt.inside_color is not None:
            parser.error("--inside-color requires --colormap.")
        return None

    try:
        cmap = load_colormap(opt.colormap)
    except ValueError as exc:
        parser.error(f"unknown colormap '{opt.colormap}': {exc}")

    inside = (0, 0, 0)
    if opt.inside_color is not None:
        try:
            inside = parse_hex_color(opt.inside_color)
        except ValueError as exc:
            parser.error(f"invalid --inside-color '{opt.inside_color}': {exc}")

    return colormap_colorizer(cmap, params.max_iterations, inside)


def resolve_format(opt, parser: ArgumentParser, output_path: Path) -> str:
    image_format = (opt.format or format_from_path(output_path)).lower().lstrip(".") or "png"
    if not is_supported_format(image_format):
        parser.error(f"unsupported image format '{image_format}'.")
    return image_format


def main(argv=None):
    parser = build_parser()
    opt = parser.parse_args(shield_points(sys.argv[1:] if argv is None else argv))

    global VERBOSE
    VERBOSE = bool(opt.verbose)

    params = resolve_parameters(opt, parser)
    colorizer = resolve_colorizer(opt, parser, params)

    output_path = Path(opt.output).expanduser()
    image_format = resolve_format(opt, parser, output_path)

    workers = params.workers if params.workers is not None else default_workers()
    log("Rendering %dx%d from %s to %s" % (
        params.bounds.width, params.bounds.height, params.viewport.upper_left, params.viewport.lower_right))
    log("max iterations %d, escape radius %g, %d worker(s)" % (
        params.max_iterations, params.escape_radius, workers))

    pixels = new_pixel_buffer(params.bounds)
    start = time.perf_counter()
    render(
        pixels,
        params.bounds,
        params.viewport,
        params.escape_radius_squared,
        max_iterations=params.max_iterations,
        workers=workers,
        colorizer=colorizer,
    )
    log("Rendered in %.3fs" % (time.perf_counter() - start))

    try:
        write_image(output_path, pixels, params.bounds, image_format)
    except OSError as exc:
        parser.exit(1, f"{parser.prog}: error writing image file '{output_path}': {exc}\n")
    log("Wrote %s" % output_path)
    return 0


if __name__ == '__main__':
    sys.exit(main())
