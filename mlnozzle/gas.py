"""Closed-form isentropic and Prandtl-Meyer relations for a perfect gas.

References:
- Anderson, *Modern Compressible Flow* (MCF), 3rd ed., 2003
- NACA 1135, "Equations, Tables, and Charts for Compressible Flow", 1953
"""

import numpy as np
from scipy.optimize import brentq


def mach_angle(M):
    """Mach angle μ = arcsin(1/M) [radians].

    Anderson MCF Eq. 9.1. Accepts scalars or arrays.
    """
    return np.arcsin(1.0 / np.asarray(M, dtype=float))


def prandtl_meyer(M, gamma=1.4):
    """Prandtl-Meyer angle ν(M) [radians].

    Anderson MCF Eq. 9.42:
        ν = √((γ+1)/(γ-1)) · arctan(√((γ-1)/(γ+1)·(M²-1))) - arctan(√(M²-1))

    Subsonic and sonic inputs give 0. Accepts scalars or arrays.
    """
    M = np.asarray(M, dtype=float)
    gp1 = gamma + 1
    gm1 = gamma - 1
    root = np.sqrt(np.maximum(M**2 - 1, 0.0))
    nu = np.sqrt(gp1 / gm1) * np.arctan(np.sqrt(gm1 / gp1) * root) - np.arctan(root)
    if nu.ndim == 0:
        return float(nu)
    return nu


def max_prandtl_meyer(gamma=1.4):
    """Upper limit of ν as M → ∞: (√((γ+1)/(γ-1)) - 1)·π/2."""
    return (np.sqrt((gamma + 1) / (gamma - 1)) - 1) * np.pi / 2


def mach_from_prandtl_meyer(nu, gamma=1.4):
    """Invert ν(M) with Brent's method. Anderson MCF Section 9.6."""
    if nu <= 0:
        return 1.0
    nu_max = max_prandtl_meyer(gamma)
    if nu >= nu_max:
        raise ValueError(
            f"nu = {np.degrees(nu):.2f}° exceeds nu_max = {np.degrees(nu_max):.2f}°"
        )
    return brentq(lambda M: prandtl_meyer(M, gamma) - nu, 1.0, 500.0)


def area_mach_ratio(M, gamma=1.4):
    """A/A* from the isentropic area-Mach relation.

    Anderson MCF Eq. 5.20:
        A/A* = (1/M) · [(2/(γ+1)) · (1 + (γ-1)/2 · M²)]^((γ+1)/(2(γ-1)))

    For the planar nozzles designed here A/A* is simply the exit
    half-height over the throat half-height.
    """
    gp1 = gamma + 1
    gm1 = gamma - 1
    return (1.0 / M) * ((2.0 / gp1) * (1 + gm1 / 2 * M**2)) ** (gp1 / (2 * gm1))


def mach_from_area_ratio(area_ratio, gamma=1.4):
    """Supersonic root of A/A*(M) = area_ratio."""
    if area_ratio < 1.0:
        raise ValueError(f"area ratio must be >= 1, got {area_ratio}")
    if np.isclose(area_ratio, 1.0, atol=1e-12):
        return 1.0
    return brentq(lambda M: area_mach_ratio(M, gamma) - area_ratio, 1.0, 100.0)
