"""Tests for the two-stage perspective projection."""
import numpy as np
import pytest

from hyperview.projection import Projection, project, project_many


class TestProject:

    @pytest.mark.parametrize("scale", [0.5, 1.0, 2.7])
    def test_origin_maps_to_center(self, scale):
        result = project((0, 0, 0, 0), 800, 600, scale)
        assert (result.screen_x, result.screen_y) == (400.0, 300.0)

    @pytest.mark.parametrize("w", [2.0, 2.5, 10.0])
    def test_behind_4d_camera(self, w):
        assert project((0, 0, 0, w), 800, 600, 1.0) is None

    def test_behind_3d_camera(self):
        # z3 = 7 / 2 = 3.5 >= 3
        assert project((0, 0, 7, 0), 800, 600, 1.0) is None

    def test_known_point(self):
        result = project((1, 0, 0, 0), 800, 600, 1.0)
        # factor4 = 1/2, x3 = 0.5, factor3 = 1/3, 800 * 0.4 = 320
        assert result.screen_x == pytest.approx(400 + 0.5 / 3 * 320)
        assert result.screen_y == pytest.approx(300)
        assert result.depth_factor == pytest.approx(0.5)
        assert result.raw_w == 0

    def test_y_scales_with_width(self):
        result = project((0, 1, 0, 0), 1000, 200, 1.0)
        assert result.screen_y == pytest.approx(100 + 0.5 / 3 * 400)

    def test_depth_factor_and_raw_w(self):
        result = project((0, 0, 0, 1), 800, 600, 1.0)
        assert result.depth_factor == pytest.approx(1.0)
        assert result.raw_w == 1.0

    def test_scale_is_linear_about_center(self):
        one = project((0.5, -0.3, 0.2, 0.1), 800, 600, 1.0)
        two = project((0.5, -0.3, 0.2, 0.1), 800, 600, 2.0)
        assert two.screen_x - 400 == pytest.approx(2 * (one.screen_x - 400))
        assert two.screen_y - 300 == pytest.approx(2 * (one.screen_y - 300))


class TestProjectMany:

    def test_matches_scalar_projection(self):
        points = np.array([
            [0, 0, 0, 0],
            [1, -1, 1, -1],
            [0.3, 0.2, -0.4, 1.5],
            [0, 0, 0, 2.0],
            [0, 0, 7, 0],
        ], dtype=float)
        batch = project_many(points, 640, 480, 1.3)
        assert len(batch) == 5
        for i, point in enumerate(points):
            expected = project(point, 640, 480, 1.3)
            got = batch.get(i)
            if expected is None:
                assert got is None
                assert not batch.visible[i]
            else:
                assert isinstance(got, Projection)
                assert got == pytest.approx(expected)

    def test_invisible_rows_are_nan(self):
        batch = project_many([[0, 0, 0, 3.0]], 800, 600, 1.0)
        assert not batch.visible[0]
        assert np.isnan(batch.screen[0]).all()
        assert batch.raw_w[0] == 3.0

    def test_empty_input(self):
        batch = project_many(np.zeros((0, 4)), 800, 600, 1.0)
        assert len(batch) == 0
