"""
Energy functions for seam carving.

The energy function determines which pixels are "important".
Low-energy seams are preferred for removal and duplication.

We use the dual-gradient energy: squared differences between the left/right
and the up/down neighbours, summed over all colour channels.
"""

import torch
import torch.nn.functional as F


def dual_gradient_energy(image: torch.Tensor) -> torch.Tensor:
    """
    Compute dual-gradient energy for an image.

    E(x,y) = sum_c (I(x+1,y) - I(x-1,y))^2 + (I(x,y+1) - I(x,y-1))^2

    A neighbour that falls outside the image is replaced by the pixel
    itself, so border pixels only see the gradient towards the interior.

    Args:
        image: Image tensor (C, H, W) or grayscale (H, W), any numeric dtype

    Returns:
        Energy map (H, W) as float64, non-negative
    """
    if image.dim() == 2:
        image = image.unsqueeze(0)
    elif image.dim() != 3:
        raise ValueError(f"Expected (C, H, W) or (H, W) image, got shape {tuple(image.shape)}")

    img = image.to(torch.float64)

    # Replicate padding: missing neighbours equal the border pixel
    padded = F.pad(img.unsqueeze(0), (1, 1, 1, 1), mode='replicate').squeeze(0)

    dx = padded[:, 1:-1, 2:] - padded[:, 1:-1, :-2]
    dy = padded[:, 2:, 1:-1] - padded[:, :-2, 1:-1]

    energy = (dx ** 2).sum(dim=0) + (dy ** 2).sum(dim=0)
    return energy


def cumulative_path_energy(energy: torch.Tensor) -> torch.Tensor:
    """Minimum cumulative energy of any top-to-bottom path ending at each cell.

    M(x, 0) = E(x, 0)
    M(x, y) = E(x, y) + min(M(x-1, y-1), M(x, y-1), M(x+1, y-1))

    Neighbours outside the grid are excluded from the min. Each row only
    depends on the row above, so the pass runs row by row and is vectorised
    across columns.

    Args:
        energy: Energy map (H, W)

    Returns:
        Cumulative path energy (H, W)
    """
    H, W = energy.shape
    M = torch.empty_like(energy)
    if H == 0 or W == 0:
        return M

    M[0] = energy[0]

    for i in range(1, H):
        M_prev = M[i - 1]
        M_left = torch.full((W,), float('inf'), device=energy.device, dtype=energy.dtype)
        M_left[1:] = M_prev[:-1]
        M_right = torch.full((W,), float('inf'), device=energy.device, dtype=energy.dtype)
        M_right[:-1] = M_prev[1:]

        M[i] = energy[i] + torch.min(torch.min(M_left, M_prev), M_right)

    return M


def normalize_energy(energy: torch.Tensor, eps: float = 1e-8) -> torch.Tensor:
    """Remap energy to [0, 1] range.

    This is a monotonic transform so seam positions are unchanged.

    Args:
        energy: Energy map (H, W)
        eps: Small value to avoid division by zero

    Returns:
        Normalized energy map in [0, 1]
    """
    e_min = energy.min()
    e_max = energy.max()
    return (energy - e_min) / (e_max - e_min + eps)


def energy_to_image(energy: torch.Tensor) -> torch.Tensor:
    """Greyscale visualisation of an energy map.

    Values are normalised and scaled to 0..255 for viewing; they are not
    proportional to the raw energy units across images.

    Args:
        energy: Energy map (H, W)

    Returns:
        uint8 tensor (H, W)
    """
    if energy.numel() == 0:
        return torch.zeros(energy.shape, dtype=torch.uint8)
    scaled = normalize_energy(energy.to(torch.float32)) * 255.0
    return scaled.round().clamp(0, 255).to(torch.uint8)
