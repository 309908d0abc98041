"""
Content-aware image resizing by seam carving.

Seams of low dual-gradient energy are removed or duplicated one at a time
until the image reaches its target size. Vertical resizing rotates the
image and reuses the horizontal algorithm.
"""

__version__ = "0.1.0"

from .errors import (SeamResizeError, EmptyImageError, DimensionExhaustedError,
                     GridTooSmallError, InvalidSeamError, ConfigError)
from .energy import dual_gradient_energy, cumulative_path_energy, normalize_energy, energy_to_image
from .seam import (find_path, validate_path, path_points, path_cost, blend_pixels,
                   remove_seam, insert_seam)
from .grid import EnergyGrid, PixelEnergyPoint
from .carving import Carver, carve_image

__all__ = [
    'SeamResizeError',
    'EmptyImageError',
    'DimensionExhaustedError',
    'GridTooSmallError',
    'InvalidSeamError',
    'ConfigError',
    'dual_gradient_energy',
    'cumulative_path_energy',
    'normalize_energy',
    'energy_to_image',
    'find_path',
    'validate_path',
    'path_points',
    'path_cost',
    'blend_pixels',
    'remove_seam',
    'insert_seam',
    'EnergyGrid',
    'PixelEnergyPoint',
    'Carver',
    'carve_image',
]
