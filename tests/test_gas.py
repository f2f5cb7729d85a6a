"""Tests for gas.py, validated against Anderson MCF Tables A.1 and A.5 (γ=1.4)."""

import numpy as np
import pytest
from mlnozzle.gas import (
    area_mach_ratio,
    mach_angle,
    mach_from_area_ratio,
    mach_from_prandtl_meyer,
    max_prandtl_meyer,
    prandtl_meyer,
)


class TestPrandtlMeyer:
    """Anderson MCF Table A.5 values."""

    @pytest.mark.parametrize("M, expected_deg", [
        (1.0, 0.0),
        (1.5, 11.91),
        (2.0, 26.38),
        (2.4, 36.75),
        (3.0, 49.76),
        (5.0, 76.92),
    ])
    def test_prandtl_meyer(self, M, expected_deg):
        assert np.degrees(prandtl_meyer(M)) == pytest.approx(expected_deg, abs=0.01)

    def test_subsonic_is_zero(self):
        assert prandtl_meyer(0.5) == 0.0

    def test_array_input(self):
        nu = prandtl_meyer(np.array([1.0, 2.0, 3.0]))
        assert nu.shape == (3,)
        assert np.all(np.diff(nu) > 0)

    @pytest.mark.parametrize("M", [1.1, 2.0, 4.0, 8.0])
    def test_inversion(self, M):
        assert mach_from_prandtl_meyer(prandtl_meyer(M)) == pytest.approx(M, rel=1e-9)

    def test_inversion_at_zero(self):
        assert mach_from_prandtl_meyer(0.0) == 1.0

    def test_inversion_beyond_limit(self):
        with pytest.raises(ValueError, match="nu_max"):
            mach_from_prandtl_meyer(max_prandtl_meyer(1.4) + 0.01)

    def test_max_prandtl_meyer(self):
        # 130.45° for γ=1.4
        assert np.degrees(max_prandtl_meyer(1.4)) == pytest.approx(130.45, abs=0.01)


class TestMachAngle:

    def test_sonic(self):
        assert mach_angle(1.0) == pytest.approx(np.pi / 2)

    def test_mach_two(self):
        assert np.degrees(mach_angle(2.0)) == pytest.approx(30.0)


class TestAreaMach:

    @pytest.mark.parametrize("M, expected", [
        (1.0, 1.0),
        (1.5, 1.1762),
        (2.0, 1.6875),
        (2.4, 2.4031),
        (3.0, 4.2346),
    ])
    def test_area_mach_ratio(self, M, expected):
        assert area_mach_ratio(M) == pytest.approx(expected, rel=1e-3)

    @pytest.mark.parametrize("M", [1.5, 2.0, 3.0, 5.0])
    def test_supersonic_inversion(self, M):
        assert mach_from_area_ratio(area_mach_ratio(M)) == pytest.approx(M, rel=1e-9)

    def test_unit_area_ratio(self):
        assert mach_from_area_ratio(1.0) == 1.0

    def test_area_ratio_below_one(self):
        with pytest.raises(ValueError, match=">= 1"):
            mach_from_area_ratio(0.5)
