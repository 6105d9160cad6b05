import os
import sys
import time

_VERBOSE_FLAGS = {"--verbose", "-v"}
_cli_verbose = any(arg in _VERBOSE_FLAGS for arg in sys.argv[1:])
_env_log_level = os.environ.get("TF_CPP_MIN_LOG_LEVEL")
_suppress_messages = (not _cli_verbose) and _env_log_level != "0"

if _suppress_messages and _env_log_level is None:
    os.environ["TF_CPP_MIN_LOG_LEVEL"] = "3"

VERBOSE = _cli_verbose


def log(message, *args, **kwargs):
    if VERBOSE:
        print(message, *args, **kwargs)


import tensorflow as tf

if _suppress_messages:
    tf.get_logger().setLevel("ERROR")
    for handler in tf.get_logger().handlers:
        handler.setLevel("ERROR")

from argparse import ArgumentParser

from mandelbrot import MandelbrotError, parse_bounds, parse_window, render, write_image

USAGE = (
    "Usage: mandelbrot FILE PIXELS UPPER_LEFT LOWER_RIGHT\n"
    "Example: mandelbrot out.png 1280x960 -1.2+0.35i -1+0.2i"
)


def build_parser():
    parser = ArgumentParser(prog="mandelbrot", usage="%(prog)s [options] FILE PIXELS UPPER_LEFT LOWER_RIGHT",
                            description='Plot the Mandelbrot set as a grayscale image.')

    parser.add_argument('--workers', type=int,
                        dest='workers', help='number of threads rendering disjoint row bands',
                        metavar='WORKERS', default=1)

    parser.add_argument('--format', type=str,
                        dest='format', help='image format. Any extension supported by Pillow. Default: inferred from FILE, "png" otherwise.',
                        metavar='FORMAT', default=None)

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose logging, including TensorFlow diagnostics.')

    return parser


def run(file, pixels, upper_left, lower_right, *, workers=1, image_format=None):
    """Parse the raw arguments, render the image and write it to ``file``."""

    bounds = parse_bounds(pixels)
    window = parse_window(upper_left, lower_right)
    log("Rendering %dx%d pixels of window %s .. %s" % (bounds.width, bounds.height, window.upper_left, window.lower_right))

    started = time.perf_counter()
    buffer = render(bounds, window, workers=workers)
    log("Rendered in %.3fs using %d worker(s)" % (time.perf_counter() - started, workers))

    output_path = write_image(file, buffer, bounds, image_format)
    log("Wrote %s" % output_path)
    return output_path


def main(argv=None):
    parser = build_parser()
    # Corners such as -1.2+0.35i look like options to argparse, so the
    # positional arguments are taken from the unparsed remainder.
    opt, arguments = parser.parse_known_args(argv)
    arguments = [arg for arg in arguments if arg != '--']

    global VERBOSE
    VERBOSE = bool(opt.verbose)
    log("TensorFlow version: %s" % tf.__version__)

    if len(arguments) != 4:
        print(USAGE, file=sys.stderr)
        return 1

    if opt.workers < 1:
        print("Error: --workers must be at least 1, got %d" % opt.workers, file=sys.stderr)
        return 2

    file, pixels, upper_left, lower_right = arguments
    try:
        run(file, pixels, upper_left, lower_right, workers=opt.workers, image_format=opt.format)
    except MandelbrotError as e:
        print("Error: %s" % e, file=sys.stderr)
        return 2
    except Exception as e:
        # MemoryError and friends may carry no message.
        print("Error: %s" % (str(e) or type(e).__name__), file=sys.stderr)
        return 2
    return 0


def cli():
    sys.exit(main())


if __name__ == '__main__':
    cli()
