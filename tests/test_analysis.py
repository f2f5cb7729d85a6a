"""Tests for the design summary against 1-D isentropic theory."""

import pytest
from mlnozzle.analysis import design_summary
from mlnozzle.design import DesignParameters, minimum_length_nozzle
from mlnozzle.moc import CharMesh


class TestDesignSummary:

    def test_keys_and_counts(self, mach2_params):
        mesh = minimum_length_nozzle(mach2_params)
        result = design_summary(mesh, mach2_params)
        assert result['n_points'] == 12
        assert result['n_wall_points'] == 3
        assert result['area_ratio_ideal'] == pytest.approx(1.6875, rel=1e-3)
        assert result['theta_max_deg'] == pytest.approx(13.19, abs=0.01)
        assert result['exit_theta_deg'] == pytest.approx(0.0, abs=1e-10)
        assert result['exit_mach'] == pytest.approx(2.0, abs=1e-5)
        assert result['exit_mach_closed_form'] == pytest.approx(result['exit_mach'],
                                                         abs=1e-5)

    def test_fine_design_matches_theory(self):
        params = DesignParameters(exit_mach=2.4, n_chars=25)
        result = design_summary(minimum_length_nozzle(params), params)
        assert abs(result['area_ratio_error']) < 0.02
        assert result['mach_from_exit_height'] == pytest.approx(2.4, abs=0.05)
        assert result['length'] > result['exit_height']

    def test_empty_mesh(self, mach2_params):
        with pytest.raises(ValueError, match="no wall points"):
            design_summary(CharMesh(), mach2_params)
