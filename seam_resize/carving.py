"""
High-level carving that keeps an image and its energy grid in lockstep.
"""

import logging

import torch
from typing import Optional

from .errors import DimensionExhaustedError
from .grid import EnergyGrid
from .seam import remove_seam, insert_seam

logger = logging.getLogger(__name__)


class Carver:
    """
    Resizes one image by removing or duplicating seams.

    The Carver owns an image tensor (C, H, W) and an EnergyGrid built from
    it. Every seam applied to the grid is applied to the image with the same
    path, so both always have the same size and the same pixels.
    """

    def __init__(self, image: torch.Tensor):
        """
        Args:
            image: Image tensor (C, H, W) or grayscale (H, W)
        """
        if image.dim() == 2:
            image = image.unsqueeze(0)
        self.grid = EnergyGrid.from_image(image)
        self.image = image.clone()

    @property
    def width(self) -> int:
        return self.image.shape[2]

    @property
    def height(self) -> int:
        return self.image.shape[1]

    def resize_horizontal(self, distance: int):
        """
        Change the width by `distance` seams.

        Negative distances remove seams, positive distances duplicate them.
        Seams are found and applied one at a time on the updated grid.
        """
        if self.width + distance < 1:
            raise DimensionExhaustedError(
                f"Cannot change width {self.width} by {distance}: width must stay >= 1")

        if distance < 0:
            for i in range(-distance):
                self.remove_seam()
        else:
            for i in range(distance):
                self.add_seam()

    def resize_vertical(self, distance: int):
        """
        Change the height by `distance` seams.

        The image and grid are rotated clockwise, carved horizontally, then
        rotated back.
        """
        if self.height + distance < 1:
            raise DimensionExhaustedError(
                f"Cannot change height {self.height} by {distance}: height must stay >= 1")

        self.rotate_clockwise()
        try:
            self.resize_horizontal(distance)
        finally:
            self.rotate_counterclockwise()

    def resize(self, width: Optional[int] = None, height: Optional[int] = None):
        """
        Resize to absolute target dimensions. Width is handled first.

        Args:
            width: Target width, or None to keep the current width
            height: Target height, or None to keep the current height
        """
        for name, target in (('width', width), ('height', height)):
            if target is not None and target < 1:
                raise DimensionExhaustedError(f"Target {name} must be >= 1, got {target}")

        if width is not None and width != self.width:
            logger.info("Resizing width %d -> %d", self.width, width)
            self.resize_horizontal(width - self.width)
        if height is not None and height != self.height:
            logger.info("Resizing height %d -> %d", self.height, height)
            self.resize_vertical(height - self.height)

    def remove_seam(self):
        """Remove the cheapest seam from the grid and the image."""
        seam = self.grid.find_path()
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Removing seam ending at column %d (cost %.4g)",
                         int(seam[-1]), self.grid.min_path_energy())
        seam = self.grid.remove_seam(seam)
        self.image = remove_seam(self.image, seam)

    def add_seam(self):
        """Duplicate the cheapest seam in the grid and the image."""
        seam = self.grid.find_path()
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Duplicating seam ending at column %d (cost %.4g)",
                         int(seam[-1]), self.grid.min_path_energy())
        seam = self.grid.add_seam(seam)
        self.image = insert_seam(self.image, seam)

    def rotate_clockwise(self):
        self.image = torch.rot90(self.image, -1, dims=(1, 2)).contiguous()
        self.grid.rotate_clockwise()

    def rotate_counterclockwise(self):
        self.image = torch.rot90(self.image, 1, dims=(1, 2)).contiguous()
        self.grid.rotate_counterclockwise()

    def energy_image(self) -> torch.Tensor:
        """Greyscale uint8 (H, W) visualisation of the current energy grid."""
        return self.grid.as_image()


def carve_image(image: torch.Tensor, width: Optional[int] = None,
                height: Optional[int] = None) -> torch.Tensor:
    """
    Seam-carve an image to the given target size.

    Args:
        image: Image tensor (C, H, W) or (H, W)
        width: Target width (None keeps the current width)
        height: Target height (None keeps the current height)

    Returns:
        Resized image with the same number of dimensions and dtype as the input
    """
    carver = Carver(image)
    carver.resize(width=width, height=height)

    if image.dim() == 2:
        return carver.image.squeeze(0)
    return carver.image
