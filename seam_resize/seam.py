"""
Seam search and seam application.

A seam is stored as a 1-D long tensor with one column index per row,
ordered top to bottom. Images are (C, H, W) or (H, W) tensors; seams always
run vertically, horizontal seams are handled by rotating the image first.
"""

import torch
from typing import List, Tuple

from .errors import GridTooSmallError, InvalidSeamError


def find_path(path_energy: torch.Tensor) -> torch.Tensor:
    """
    Backtrack the minimum-cost seam from a cumulative path energy table.

    The seam ends at the smallest column of the last row with minimal path
    energy. Going up, each row takes the upper neighbour (x, x-1 or x+1,
    clipped to the grid) with minimal path energy; ties prefer staying in
    the same column, then the smaller column.

    Args:
        path_energy: Cumulative path energy (H, W)

    Returns:
        Seam indices (H,) with column index per row
    """
    H, W = path_energy.shape
    if H == 0 or W == 0:
        raise GridTooSmallError(f"Cannot find a seam in a {W}x{H} grid")

    seam = torch.zeros(H, dtype=torch.long, device=path_energy.device)
    col = int(torch.argmin(path_energy[-1]).item())
    seam[-1] = col

    for i in range(H - 1, 0, -1):
        candidates = [col]
        if col > 0:
            candidates.append(col - 1)
        if col < W - 1:
            candidates.append(col + 1)
        above = path_energy[i - 1]
        col = min(candidates, key=lambda c: above[c].item())
        seam[i - 1] = col

    return seam


def validate_path(seam, height: int, width: int) -> torch.Tensor:
    """Check that a seam fits a height x width grid and is 8-connected.

    Returns:
        The seam as a long tensor
    """
    seam = torch.as_tensor(seam)
    if seam.numel() > 0 and (seam.is_floating_point() or seam.is_complex()
                             or seam.dtype == torch.bool):
        raise InvalidSeamError(f"Seam columns must be integers, got dtype {seam.dtype}")
    seam = seam.to(torch.long)

    if seam.dim() != 1 or seam.shape[0] != height:
        raise InvalidSeamError(
            f"Seam has shape {tuple(seam.shape)}, expected ({height},)")
    if height == 0:
        return seam
    if seam.min().item() < 0 or seam.max().item() >= width:
        raise InvalidSeamError(
            f"Seam columns must lie in [0, {width - 1}], got {seam.tolist()}")
    if height > 1 and (seam[1:] - seam[:-1]).abs().max().item() > 1:
        raise InvalidSeamError(
            f"Adjacent seam columns differ by more than 1: {seam.tolist()}")

    return seam


def path_points(seam: torch.Tensor) -> List[Tuple[int, int]]:
    """Seam as a list of (x, y) grid coordinates, top to bottom."""
    return [(int(col), row) for row, col in enumerate(seam.tolist())]


def path_cost(energy: torch.Tensor, seam: torch.Tensor) -> float:
    """Total energy of the cells the seam passes through."""
    rows = torch.arange(energy.shape[0], device=energy.device)
    return energy[rows, seam.to(energy.device)].sum().item()


def blend_pixels(a: torch.Tensor, b: torch.Tensor) -> torch.Tensor:
    """Channel-wise average of two pixels.

    Float pixels average exactly; integer pixels round half up so that the
    result stays representable in the source dtype.
    """
    if a.is_floating_point():
        return (a + b) / 2
    return ((a.to(torch.int64) + b.to(torch.int64) + 1) // 2).to(a.dtype)


def remove_seam(image: torch.Tensor, seam: torch.Tensor) -> torch.Tensor:
    """
    Remove a vertical seam from an image.

    Args:
        image: Image tensor (C, H, W) or (H, W)
        seam: Seam indices (H,)

    Returns:
        Carved image with one column removed
    """
    if image.dim() == 2:
        image = image.unsqueeze(0)
        squeeze_output = True
    else:
        squeeze_output = False

    C, H, W = image.shape
    carved = torch.empty(C, H, W - 1, dtype=image.dtype, device=image.device)

    for i in range(H):
        col = int(seam[i])
        carved[:, i, :col] = image[:, i, :col]
        carved[:, i, col:] = image[:, i, col + 1:]

    if squeeze_output:
        carved = carved.squeeze(0)

    return carved


def insert_seam(image: torch.Tensor, seam: torch.Tensor) -> torch.Tensor:
    """
    Duplicate a vertical seam in an image.

    A new pixel is inserted right after the seam in every row. Its value is
    the average of the seam pixel and its right neighbour, or a copy of the
    seam pixel on the right border.

    Args:
        image: Image tensor (C, H, W) or (H, W)
        seam: Seam indices (H,)

    Returns:
        Image with one column added
    """
    if image.dim() == 2:
        image = image.unsqueeze(0)
        squeeze_output = True
    else:
        squeeze_output = False

    C, H, W = image.shape
    grown = torch.empty(C, H, W + 1, dtype=image.dtype, device=image.device)

    for i in range(H):
        col = int(seam[i])
        right = min(col + 1, W - 1)
        grown[:, i, :col + 1] = image[:, i, :col + 1]
        grown[:, i, col + 1] = blend_pixels(image[:, i, col], image[:, i, right])
        grown[:, i, col + 2:] = image[:, i, col + 1:]

    if squeeze_output:
        grown = grown.squeeze(0)

    return grown
