"""Tests for the EnergyGrid."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest
from seam_resize.grid import EnergyGrid, PixelEnergyPoint
from seam_resize.errors import EmptyImageError, DimensionExhaustedError, InvalidSeamError
from seam_resize.seam import path_points, path_cost
from seam_resize.energy import dual_gradient_energy, cumulative_path_energy

from conftest import make_uniform_image, make_column_image


class TestConstruction:
    def test_dimensions(self, random_image):
        grid = EnergyGrid.from_image(random_image)
        assert (grid.width, grid.height) == (16, 12)
        assert grid.energy.shape == (12, 16)
        assert grid.path_energy.shape == (12, 16)

    def test_energy_computed_on_construction(self, random_image):
        grid = EnergyGrid.from_image(random_image)
        assert torch.equal(grid.energy, dual_gradient_energy(random_image))
        assert torch.equal(grid.path_energy, cumulative_path_energy(grid.energy))

    def test_grayscale(self):
        grid = EnergyGrid.from_image(torch.rand(4, 5))
        assert grid.pixels.shape == (1, 4, 5)

    def test_does_not_alias_input(self, random_image):
        grid = EnergyGrid.from_image(random_image)
        grid.pixels[:, 0, 0] = 0
        random_image[:, 0, 0] = 1
        assert grid.pixels[0, 0, 0].item() == 0

    @pytest.mark.parametrize('shape', [(3, 0, 4), (3, 4, 0), (0, 4, 4), (0, 0)])
    def test_empty_image(self, shape):
        with pytest.raises(EmptyImageError):
            EnergyGrid.from_image(torch.zeros(shape))

    def test_bad_rank(self):
        with pytest.raises(EmptyImageError):
            EnergyGrid.from_image(torch.zeros(1, 3, 4, 4))

    def test_point(self):
        image = torch.tensor([[[0., 1., 4.],
                               [2., 3., 5.]]])
        grid = EnergyGrid.from_image(image)
        point = grid.point(1, 0)
        assert isinstance(point, PixelEnergyPoint)
        assert point.pixel.tolist() == [1.0]
        assert point.energy == pytest.approx(20.0)
        assert point.path_energy == pytest.approx(20.0)


class TestFindPath:
    def test_uniform_3x3_picks_leftmost_column(self):
        grid = EnergyGrid.from_image(make_uniform_image(3, 3))
        assert (grid.energy == 0).all()
        assert path_points(grid.find_path()) == [(0, 0), (0, 1), (0, 2)]

    def test_follows_flat_column(self):
        grid = EnergyGrid.from_image(make_column_image(10, 12, col=6))
        assert grid.find_path().tolist() == [6] * 10
        assert grid.min_path_energy() == 0

    def test_path_invariants(self, random_image):
        grid = EnergyGrid.from_image(random_image)
        seam = grid.find_path()
        assert seam.shape == (grid.height,)
        assert seam.min() >= 0 and seam.max() < grid.width
        assert (seam[1:] - seam[:-1]).abs().max() <= 1

    def test_cost_is_minimum_path_energy(self, random_image):
        grid = EnergyGrid.from_image(random_image)
        seam = grid.find_path()
        assert path_cost(grid.energy, seam) == pytest.approx(grid.min_path_energy())
        assert grid.min_path_energy() == grid.path_energy[-1].min().item()


class TestRemoveSeam:
    def test_width_shrinks_by_one(self, random_image):
        grid = EnergyGrid.from_image(random_image)
        grid.remove_seam(grid.find_path())
        assert (grid.width, grid.height) == (15, 12)
        assert grid.energy.shape == (12, 15)
        assert grid.path_energy.shape == (12, 15)

    def test_tables_are_fresh_after_removal(self, random_image):
        grid = EnergyGrid.from_image(random_image)
        grid.remove_seam(grid.find_path())
        assert torch.equal(grid.energy, dual_gradient_energy(grid.pixels))
        assert torch.equal(grid.path_energy, cumulative_path_energy(grid.energy))

    def test_removes_seam_pixels(self):
        image = torch.arange(4, dtype=torch.float32).expand(1, 2, 4).clone()
        grid = EnergyGrid.from_image(image)
        grid.remove_seam([1, 2])
        assert grid.pixels[0].tolist() == [[0., 2., 3.], [0., 1., 3.]]

    def test_width_one_is_exhausted(self):
        grid = EnergyGrid.from_image(torch.rand(3, 5, 1))
        with pytest.raises(DimensionExhaustedError):
            grid.remove_seam(grid.find_path())

    def test_invalid_seam(self, random_image):
        grid = EnergyGrid.from_image(random_image)
        with pytest.raises(InvalidSeamError):
            grid.remove_seam([0] * (grid.height - 1))
        with pytest.raises(InvalidSeamError):
            grid.remove_seam([0, 5] + [5] * (grid.height - 2))
        assert grid.width == 16

    def test_fractional_seam_leaves_grid_untouched(self):
        grid = EnergyGrid.from_image(torch.rand(3, 3, 4))
        pixels = grid.pixels.clone()
        with pytest.raises(InvalidSeamError):
            grid.remove_seam(torch.tensor([0.9, 1.5, 2.7]))
        with pytest.raises(InvalidSeamError):
            grid.add_seam(torch.tensor([0.9, 1.5, 2.7]))
        assert grid.width == 4
        assert torch.equal(grid.pixels, pixels)

    def test_repeated_removal(self, random_image):
        grid = EnergyGrid.from_image(random_image)
        for expected in range(15, 0, -1):
            grid.remove_seam(grid.find_path())
            assert grid.width == expected
        assert grid.height == 12


class TestAddSeam:
    def test_width_grows_by_one(self, random_image):
        grid = EnergyGrid.from_image(random_image)
        grid.add_seam(grid.find_path())
        assert (grid.width, grid.height) == (17, 12)
        assert torch.equal(grid.path_energy, cumulative_path_energy(grid.energy))

    def test_inserted_pixel_is_average(self):
        image = torch.tensor([[[0., 4., 8.]]])
        grid = EnergyGrid.from_image(image)
        grid.add_seam([1])
        assert grid.pixels[0, 0].tolist() == [0., 4., 6., 8.]

    def test_single_column_grid(self):
        grid = EnergyGrid.from_image(torch.rand(3, 4, 1))
        grid.add_seam(grid.find_path())
        assert grid.width == 2
        assert torch.equal(grid.pixels[:, :, 0], grid.pixels[:, :, 1])


class TestRotation:
    def test_clockwise_swaps_dimensions(self, random_image):
        grid = EnergyGrid.from_image(random_image)
        grid.rotate_clockwise()
        assert (grid.width, grid.height) == (12, 16)
        assert grid.path_energy.shape == (16, 12)

    def test_clockwise_remaps_pixels(self):
        image = torch.tensor([[[1., 2., 3.],
                               [4., 5., 6.]]])
        grid = EnergyGrid.from_image(image)
        grid.rotate_clockwise()
        assert grid.pixels[0].tolist() == [[4., 1.], [5., 2.], [6., 3.]]

    def test_counterclockwise_undoes_clockwise(self, random_image):
        grid = EnergyGrid.from_image(random_image)
        energy = grid.energy.clone()
        path_energy = grid.path_energy.clone()
        grid.rotate_clockwise()
        grid.rotate_counterclockwise()
        assert torch.equal(grid.pixels, random_image)
        assert torch.equal(grid.energy, energy)
        assert torch.equal(grid.path_energy, path_energy)

    def test_rotated_tables_match_full_recompute(self, random_image):
        grid = EnergyGrid.from_image(random_image)
        grid.rotate_clockwise()
        assert torch.equal(grid.energy, dual_gradient_energy(grid.pixels))
        assert torch.equal(grid.path_energy, cumulative_path_energy(grid.energy))


class TestAsImage:
    def test_debug_image(self, random_image):
        grid = EnergyGrid.from_image(random_image)
        image = grid.as_image()
        assert image.dtype == torch.uint8
        assert image.shape == (grid.height, grid.width)
