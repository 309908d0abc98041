"""
Command-line entry point: load an image, seam-carve it, save the result.
"""

import logging
import sys
import time

from .carving import Carver
from .config import ResizeConfig, parse_args
from .errors import ConfigError, SeamResizeError
from .io import get_writable_format, load_image, save_image, save_energy_image


def run(config: ResizeConfig):
    """Resize the image described by `config` and write it out."""
    start = time.perf_counter()

    output_path = config.get_output_path()
    get_writable_format(output_path)
    if config.debug_path is not None:
        get_writable_format(config.debug_path)

    image = load_image(config.input_path)
    C, H, W = image.shape
    print(f"Loaded {config.input_path}: {W}x{H}")

    carver = Carver(image)
    width, height = config.target_size()
    carver.resize(width=width, height=height)

    if config.debug_path is not None:
        save_energy_image(carver.energy_image(), config.debug_path)
        print(f"Saved energy image: {config.debug_path}")

    save_image(carver.image, output_path)
    print(f"Saved: {output_path} ({carver.width}x{carver.height})")

    if config.time:
        print(f"Elapsed: {time.perf_counter() - start:.3f}s")


def main(argv=None):
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")
    config = parse_args(argv)

    try:
        run(config)
    except ConfigError as ex:
        print(f"Error: {ex}", file=sys.stderr)
        return 1
    except SeamResizeError as ex:
        print(f"Resize failed: {ex}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
