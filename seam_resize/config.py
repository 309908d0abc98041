"""
Command-line configuration.

    seam-resize -w 640 photo.jpg
    seam-resize -d 640x480 photo.jpg out.png --debug energy.png -t
"""

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from . import __version__
from .errors import ConfigError
from .io import get_format, default_output_path


@dataclass
class ResizeConfig:
    input_path: Path
    output_path: Optional[Path] = None
    width: Optional[int] = None
    height: Optional[int] = None
    dimensions: Optional[Tuple[int, int]] = None
    debug_path: Optional[Path] = None
    time: bool = False

    def get_output_path(self) -> Path:
        """Output path, defaulting to `<stem>-resized.<ext>` beside the input."""
        if self.output_path is None:
            self.output_path = default_output_path(self.input_path)
        return self.output_path

    def target_size(self) -> Tuple[Optional[int], Optional[int]]:
        """Target (width, height); None leaves that dimension alone."""
        if self.dimensions is not None:
            return self.dimensions
        return self.width, self.height


def parse_dimension(s: str) -> int:
    try:
        n = int(s)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid dimension: {s!r}")
    if n <= 0:
        raise argparse.ArgumentTypeError("Dimension must be greater than zero")
    return n


def parse_dimensions(s: str) -> Tuple[int, int]:
    """Parse `WIDTHxHEIGHT` into a (width, height) tuple."""
    parts = s.lower().split('x')
    if len(parts) != 2:
        raise argparse.ArgumentTypeError(f"Expected WIDTHxHEIGHT, got {s!r}")
    return parse_dimension(parts[0]), parse_dimension(parts[1])


def output_path_type(s: str) -> Path:
    try:
        get_format(s)
    except ConfigError as ex:
        raise argparse.ArgumentTypeError(str(ex))
    return Path(s)


def build_parser() -> argparse.ArgumentParser:
    # -h is the height flag, so help is only available as --help
    parser = argparse.ArgumentParser(
        prog='seam-resize',
        description="Content-aware image resizing by seam carving",
        add_help=False,
    )
    parser.add_argument(
        '--help', action='help',
        help='Show this help message and exit'
    )
    parser.add_argument(
        '--version', action='version', version=f'%(prog)s {__version__}'
    )
    parser.add_argument(
        '-w', '--width', type=parse_dimension, metavar='WIDTH',
        help='Target width in pixels'
    )
    parser.add_argument(
        '-h', '--height', type=parse_dimension, metavar='HEIGHT',
        help='Target height in pixels'
    )
    parser.add_argument(
        '-d', '--dimensions', type=parse_dimensions, metavar='WIDTHxHEIGHT',
        help='Target width and height (cannot be combined with -w/-h)'
    )
    parser.add_argument(
        '--debug', dest='debug_path', type=Path, metavar='DEBUG_PATH',
        help='Write a greyscale energy image to this path'
    )
    parser.add_argument(
        '-t', '--time', action='store_true',
        help='Report the elapsed time'
    )
    parser.add_argument(
        'input_path', type=Path, metavar='INPUT_PATH',
        help='Image to resize'
    )
    parser.add_argument(
        'output_path', type=output_path_type, nargs='?', metavar='OUTPUT_PATH',
        help='Where to write the result (default: <stem>-resized.<ext> beside the input)'
    )
    return parser


def parse_args(argv=None) -> ResizeConfig:
    """Parse command-line arguments into a ResizeConfig.

    Exits with status 2 on usage errors, as argparse does.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.dimensions is not None and (args.width is not None or args.height is not None):
        parser.error("argument -d/--dimensions: not allowed with -w/--width or -h/--height")
    if args.dimensions is None and args.width is None and args.height is None:
        parser.error("one of -d/--dimensions, -w/--width or -h/--height is required")

    return ResizeConfig(
        input_path=args.input_path,
        output_path=args.output_path,
        width=args.width,
        height=args.height,
        dimensions=args.dimensions,
        debug_path=args.debug_path,
        time=args.time,
    )
