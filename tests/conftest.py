"""Shared test fixtures for the seam_resize test suite."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest


@pytest.fixture
def random_image():
    """Seeded 3-channel uint8 image, 12 rows x 16 columns."""
    generator = torch.Generator().manual_seed(42)
    return torch.randint(0, 256, (3, 12, 16), dtype=torch.uint8, generator=generator)


def make_uniform_image(H, W, channels=3, value=128):
    return torch.full((channels, H, W), value, dtype=torch.uint8)


def make_column_image(H, W, col, channels=3):
    """Noisy image with one flat, zero-energy band around column `col`."""
    generator = torch.Generator().manual_seed(7)
    img = torch.randint(0, 256, (channels, H, W), dtype=torch.uint8, generator=generator)
    img[:, :, max(col - 1, 0):col + 2] = 100
    return img
