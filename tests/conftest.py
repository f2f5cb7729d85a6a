"""Shared fixtures for mlnozzle tests."""

import pytest

from mlnozzle.design import DesignParameters, flow_table_for
from mlnozzle.table import build_flow_table


@pytest.fixture
def gamma_air():
    """Standard gamma for air / cold-gas."""
    return 1.4


@pytest.fixture(scope='session')
def air_table():
    """Flow table for γ=1.4 from M=1 to M=10 in steps of 1e-4."""
    return build_flow_table(1.4, 1.0, 1e-4)


@pytest.fixture
def mach2_params():
    """γ=1.4, M_exit=2.0, three characteristics from θ_min=0.01 rad."""
    return DesignParameters(gamma=1.4, exit_mach=2.0, theta_min=0.01, n_chars=3)


@pytest.fixture
def mach2_table(mach2_params):
    return flow_table_for(mach2_params)
