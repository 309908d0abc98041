"""
Image loading/saving and output format inference.

Images are decoded with Pillow into uint8 torch tensors of shape (C, H, W):
one channel for greyscale, three for RGB, four for RGBA.
"""

import numpy as np
import torch
from pathlib import Path
from PIL import Image

from .errors import ConfigError

FORMATS = {
    'png': 'PNG',
    'jpg': 'JPEG',
    'jpeg': 'JPEG',
    'gif': 'GIF',
    'webp': 'WEBP',
    'ppm': 'PPM',
    'tif': 'TIFF',
    'tiff': 'TIFF',
    'tga': 'TGA',
    'bmp': 'BMP',
    'ico': 'ICO',
    'hdr': 'HDR',
}

# Formats Pillow writes without an alpha channel
_NO_ALPHA = {'JPEG', 'PPM'}

_MODES = {1: 'L', 3: 'RGB', 4: 'RGBA'}


def get_extension(path):
    """Lower-case extension without the dot, or None."""
    suffix = Path(path).suffix
    if not suffix:
        return None
    return suffix[1:].lower()


def get_format(path) -> str:
    """Infer the image format from a file extension."""
    extension = get_extension(path)
    if extension is None:
        raise ConfigError("No file extension given.")
    if extension not in FORMATS:
        raise ConfigError(f"Invalid file extension: .{extension}")
    return FORMATS[extension]


def get_writable_format(path) -> str:
    """Format for `path`, checking that Pillow can encode it."""
    fmt = get_format(path)
    Image.init()
    if fmt not in Image.SAVE:
        raise ConfigError(f"Saving {fmt} images is not supported")
    return fmt


def default_output_path(input_path) -> Path:
    """`<stem>-resized.<ext>` next to the input file."""
    input_path = Path(input_path)
    return input_path.with_name(f"{input_path.stem}-resized{input_path.suffix}")


def load_image(path) -> torch.Tensor:
    """Load an image file as a uint8 tensor (C, H, W)."""
    try:
        with Image.open(path) as img:
            if img.mode not in ('L', 'RGB', 'RGBA'):
                has_alpha = 'A' in img.mode or 'transparency' in img.info
                img = img.convert('RGBA' if has_alpha else 'RGB')
            img_array = np.array(img, dtype=np.uint8)
    except FileNotFoundError as ex:
        raise ConfigError(f"Input not found: {path}") from ex
    except OSError as ex:
        raise ConfigError(f"Failed to open image '{path}': {ex}") from ex

    if img_array.ndim == 2:
        img_array = img_array[:, :, np.newaxis]
    return torch.from_numpy(img_array).permute(2, 0, 1).contiguous()


def _to_uint8_array(tensor: torch.Tensor) -> np.ndarray:
    if tensor.dim() == 2:
        tensor = tensor.unsqueeze(0)
    tensor = tensor.detach().cpu()
    if tensor.is_floating_point():
        tensor = (tensor * 255).round()
    img_array = tensor.clamp(0, 255).to(torch.uint8).permute(1, 2, 0).numpy()
    if img_array.shape[2] == 1:
        img_array = img_array[:, :, 0]
    return img_array


def save_image(tensor: torch.Tensor, path):
    """
    Save a (C, H, W) or (H, W) tensor as an image.

    Float tensors are taken to be in [0, 1]; integer tensors in [0, 255].
    The format is inferred from the file extension.
    """
    fmt = get_writable_format(path)

    channels = 1 if tensor.dim() == 2 else tensor.shape[0]
    if channels not in _MODES:
        raise ConfigError(f"Cannot save an image with {channels} channels")

    img = Image.fromarray(_to_uint8_array(tensor))
    if fmt in _NO_ALPHA and img.mode == 'RGBA':
        img = img.convert('RGB')

    try:
        img.save(path, format=fmt)
    except OSError as ex:
        raise ConfigError(f"Failed to save image '{path}': {ex}") from ex


def save_energy_image(energy_image: torch.Tensor, path):
    """Save a greyscale uint8 (H, W) energy visualisation."""
    save_image(energy_image, path)
