"""Render a count to a PNG file locally: ``python -m visitor_counter 1234``."""

import argparse
import sys

from .config import DEFAULT_MIN_WIDTH
from .render import render


def main(argv=None):
    parser = argparse.ArgumentParser(prog="visitor_counter", description=__doc__)
    parser.add_argument("count", type=int)
    parser.add_argument("--width", type=int, default=DEFAULT_MIN_WIDTH, help="minimum number of digits")
    parser.add_argument("--group-digits", action="store_true", help="gap between groups of three digits")
    parser.add_argument("--output", "-o", default="test-output.png")
    args = parser.parse_args(argv)

    if args.count < 0 or args.width < 0:
        parser.error("count and width must be non-negative")

    image = render(args.count, args.width, args.group_digits)
    with open(args.output, "wb") as f:
        f.write(image.data)
    print(f"wrote {args.output} ({image.width}x{image.height}, digits {image.digits})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
