import argparse
import sys
from pathlib import Path

from pixmap.errors import InvalidDimensionsError
from pixmap.mandelbrot import DEFAULT_SIZE, MAX_ITERATIONS, render
from pixmap.pixel import FORMATS, format_from_name
from pixmap.serializer import Mode, save


def main(argv=None):
    parser = argparse.ArgumentParser(description="Render the Mandelbrot set as a Netpbm image")
    parser.add_argument("mode", choices=[m.value for m in Mode], help="Output encoding")
    parser.add_argument("type", choices=list(FORMATS), help="Pixel format of the output")
    parser.add_argument("output", help="Path to write the image to")
    parser.add_argument("--width", type=int, default=DEFAULT_SIZE, help=f"Image width (default: {DEFAULT_SIZE})")
    parser.add_argument("--height", type=int, default=DEFAULT_SIZE, help=f"Image height (default: {DEFAULT_SIZE})")
    parser.add_argument(
        "-i",
        "--iterations",
        type=int,
        default=MAX_ITERATIONS,
        help=f"Maximum escape iterations per pixel (default: {MAX_ITERATIONS})",
    )
    args = parser.parse_args(argv)

    if args.iterations < 1:
        print("Iterations must be at least 1", file=sys.stderr)
        sys.exit(1)

    try:
        pixel_format = format_from_name(args.type)
        image = render(pixel_format, width=args.width, height=args.height, max_iterations=args.iterations)
    except InvalidDimensionsError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    output_path = Path(args.output)
    try:
        written = save(image, output_path, Mode(args.mode))
    except OSError as e:
        print(f"Error writing to file: {e}", file=sys.stderr)
        sys.exit(1)
    print(f"Saved {written} bytes to {output_path}")


if __name__ == "__main__":
    main()
