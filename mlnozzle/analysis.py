"""Checks of a marched MLN design against 1-D isentropic theory.

For a planar nozzle the exit-to-throat area ratio is the ratio of the
half-heights, so the last wall point should sit at y = A/A*(M_exit).
Anderson MCF Section 11.11 compares the MOC contour with this value.
"""

import numpy as np

from mlnozzle.gas import (
    area_mach_ratio, mach_from_area_ratio, mach_from_prandtl_meyer, prandtl_meyer,
)
from mlnozzle.moc import PointType


def design_summary(mesh, params):
    """Summarize a marched mesh.

    Parameters
    ----------
    mesh : CharMesh
        Output of ``minimum_length_nozzle``.
    params : DesignParameters
        Parameters the mesh was built from.

    Returns
    -------
    dict with keys:
        n_points, n_wall_points : int
        length, exit_height : float
            position of the last wall point
        area_ratio_ideal : float
            A/A* at the design exit Mach number
        area_ratio_error : float
            relative error of exit_height
        exit_mach, exit_theta_deg : float
            state at the last wall point
        exit_mach_closed_form : float
            M inverted from the exit ν without the flow table
        theta_max_deg : float
            throat wall angle ν(M_exit)/2
        mach_from_exit_height : float
            quasi-1D Mach implied by exit_height
    """
    wall = mesh.get_points(PointType.WALL)
    if not wall:
        raise ValueError("mesh has no wall points")
    exit_pt = wall[-1]
    ar_ideal = float(area_mach_ratio(params.exit_mach, params.gamma))
    return {
        'n_points': len(mesh.points),
        'n_wall_points': len(wall),
        'length': exit_pt.x,
        'exit_height': exit_pt.y,
        'area_ratio_ideal': ar_ideal,
        'area_ratio_error': (exit_pt.y - ar_ideal) / ar_ideal,
        'exit_mach': exit_pt.M,
        'exit_mach_closed_form': float(mach_from_prandtl_meyer(
            exit_pt.nu, params.gamma)),
        'exit_theta_deg': float(np.degrees(exit_pt.theta)),
        'theta_max_deg': float(np.degrees(
            prandtl_meyer(params.exit_mach, params.gamma) / 2)),
        'mach_from_exit_height': float(mach_from_area_ratio(
            max(exit_pt.y, 1.0), params.gamma)),
    }
