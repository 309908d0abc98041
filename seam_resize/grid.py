"""
Energy grid: per-pixel colour, energy and cumulative path energy.

The grid keeps three planes of the same spatial size and mutates them in
place as seams are removed or duplicated. After every structural change the
energy and path energy planes are recomputed so that find_path always works
on a consistent table.
"""

import torch
from typing import NamedTuple

from .energy import dual_gradient_energy, cumulative_path_energy, energy_to_image
from .errors import EmptyImageError, DimensionExhaustedError, GridTooSmallError
from .seam import find_path, validate_path, remove_seam, insert_seam


class PixelEnergyPoint(NamedTuple):
    """State of one grid cell."""
    pixel: torch.Tensor
    energy: float
    path_energy: float


class EnergyGrid:
    """
    Dense grid of pixels with their energy and cumulative path energy.

    Pixels are stored as (C, H, W) in the dtype of the source image; energy
    planes are (H, W) float64. Width and height are always at least 1.
    """

    def __init__(self, pixels: torch.Tensor):
        """
        Args:
            pixels: Image tensor (C, H, W); owned by the grid from now on
        """
        self._pixels = pixels
        H, W = pixels.shape[1:]
        self._energy = torch.zeros(H, W, dtype=torch.float64, device=pixels.device)
        self._path_energy = torch.zeros_like(self._energy)

    @classmethod
    def from_image(cls, image: torch.Tensor) -> 'EnergyGrid':
        """
        Build a grid from an image and run a full energy pass.

        Args:
            image: Image tensor (C, H, W) or grayscale (H, W)

        Returns:
            EnergyGrid with energy and path energy computed
        """
        if image.dim() == 2:
            image = image.unsqueeze(0)
        elif image.dim() != 3:
            raise EmptyImageError(
                f"Expected (C, H, W) or (H, W) image, got shape {tuple(image.shape)}")

        C, H, W = image.shape
        if C == 0 or H == 0 or W == 0:
            raise EmptyImageError(f"Image has no pixels ({W}x{H}, {C} channels)")

        grid = cls(image.clone())
        grid.recalculate_all()
        return grid

    @property
    def width(self) -> int:
        return self._pixels.shape[2]

    @property
    def height(self) -> int:
        return self._pixels.shape[1]

    @property
    def pixels(self) -> torch.Tensor:
        return self._pixels

    @property
    def energy(self) -> torch.Tensor:
        return self._energy

    @property
    def path_energy(self) -> torch.Tensor:
        return self._path_energy

    def point(self, x: int, y: int) -> PixelEnergyPoint:
        return PixelEnergyPoint(
            pixel=self._pixels[:, y, x].clone(),
            energy=self._energy[y, x].item(),
            path_energy=self._path_energy[y, x].item(),
        )

    def recalculate_all(self):
        """Recompute energy for every cell, then path energy top to bottom."""
        self._energy = dual_gradient_energy(self._pixels)
        self._recalculate_path_energy()

    def _recalculate_path_energy(self):
        self._path_energy = cumulative_path_energy(self._energy)

    def find_path(self) -> torch.Tensor:
        """Minimum-cost vertical seam through the current grid."""
        if self.width == 0 or self.height == 0:
            raise GridTooSmallError(f"Grid is empty ({self.width}x{self.height})")
        return find_path(self._path_energy)

    def min_path_energy(self) -> float:
        """Cost of the cheapest seam, i.e. the minimum of the last path energy row."""
        return self._path_energy[-1].min().item()

    def remove_seam(self, seam) -> torch.Tensor:
        """
        Delete one cell per row along the seam; width shrinks by 1.

        Returns:
            The validated seam
        """
        if self.width <= 1:
            raise DimensionExhaustedError("Cannot remove a seam from a grid of width 1")
        seam = validate_path(seam, self.height, self.width)
        self._pixels = remove_seam(self._pixels, seam)
        self.recalculate_all()
        return seam

    def add_seam(self, seam) -> torch.Tensor:
        """
        Insert one averaged cell after the seam in every row; width grows by 1.

        Returns:
            The validated seam
        """
        seam = validate_path(seam, self.height, self.width)
        self._pixels = insert_seam(self._pixels, seam)
        self.recalculate_all()
        return seam

    def rotate_clockwise(self):
        """Rotate the grid 90 degrees clockwise; width and height swap."""
        self._rotate(k=-1)

    def rotate_counterclockwise(self):
        """Rotate the grid 90 degrees counter-clockwise (270 clockwise)."""
        self._rotate(k=1)

    def _rotate(self, k: int):
        self._pixels = torch.rot90(self._pixels, k, dims=(1, 2)).contiguous()
        # Dual-gradient energy is symmetric in x and y, so it rotates with the
        # pixels. Path energy depends on the seam direction and is rebuilt.
        self._energy = torch.rot90(self._energy, k, dims=(0, 1)).contiguous()
        self._recalculate_path_energy()

    def as_image(self) -> torch.Tensor:
        """Greyscale uint8 (H, W) view of the current energy, for debugging."""
        return energy_to_image(self._energy)

    def __repr__(self):
        return f"EnergyGrid(width={self.width}, height={self.height}, channels={self._pixels.shape[0]})"
