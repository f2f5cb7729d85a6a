"""Minimum-length nozzle (MLN) design by the method of characteristics.

A sharp-cornered throat turns the sonic flow through a centred expansion
fan of `n_chars` characteristics. Each C- characteristic of the fan is
marched across the nozzle, reflected off the centreline and cancelled at
the wall, which is shaped so the exit flow is uniform and parallel.

Symmetry is exploited by mirroring the point nearest the centreline instead
of computing the lower half of the flow, so every marched line starts on
the centreline and ends on the wall.

References:
    Anderson, *Modern Compressible Flow*, 3rd ed., Section 11.11,
    Example 11.1 (γ=1.4, M_exit=2.4, 7 characteristics).
"""

from dataclasses import dataclass

import numpy as np

from mlnozzle.moc import CharMesh, interior_point, mirror, throat_point, wall_point
from mlnozzle.table import DEFAULT_MAX_MACH, build_flow_table


@dataclass(frozen=True)
class DesignParameters:
    """Inputs of a minimum-length nozzle design.

    Attributes
    ----------
    gamma : float
        Ratio of specific heats.
    exit_mach : float
        Design exit Mach number.
    table_min_mach, table_mach_step, table_max_mach : float
        Sampling of the isentropic flow table.
    theta_min : float
        Flow angle of the first fan characteristic [radians]. Must be
        positive; a zero angle collapses the first characteristic.
    n_chars : int
        Number of characteristics in the throat fan (>= 2).
    """
    gamma: float = 1.4
    exit_mach: float = 2.0
    table_min_mach: float = 1.0
    table_mach_step: float = 1e-4
    theta_min: float = np.radians(0.375)
    n_chars: int = 7
    table_max_mach: float = DEFAULT_MAX_MACH

    def __post_init__(self):
        if self.gamma <= 1.0:
            raise ValueError(f"gamma must be > 1, got {self.gamma}")
        if self.exit_mach <= 1.0:
            raise ValueError(f"exit_mach must be supersonic, got {self.exit_mach}")
        if self.table_min_mach < 1.0:
            raise ValueError(
                f"table_min_mach must be >= 1, got {self.table_min_mach}")
        if self.table_mach_step <= 0:
            raise ValueError(
                f"table_mach_step must be positive, got {self.table_mach_step}")
        if self.table_max_mach <= self.table_min_mach:
            raise ValueError(
                f"table_max_mach ({self.table_max_mach}) must exceed "
                f"table_min_mach ({self.table_min_mach})")
        if self.theta_min <= 0:
            raise ValueError(f"theta_min must be positive, got {self.theta_min}")
        if self.n_chars < 2:
            raise ValueError(f"n_chars must be at least 2, got {self.n_chars}")


def flow_table_for(params):
    """Build the isentropic flow table described by `params`."""
    return build_flow_table(params.gamma, params.table_min_mach,
                            params.table_mach_step, params.table_max_mach)


def nozzle_throat_angle(table, exit_mach):
    """Wall angle just after the throat: θ_max = ν(M_exit)/2.

    Anderson MCF Eq. 11.33.
    """
    return 0.5 * table.require_mach(exit_mach).prandtl_meyer


def starting_angles(n, theta_min, theta_max):
    """`n` evenly spaced fan angles on [theta_min, theta_max], ends included."""
    if n < 2:
        raise ValueError(f"need at least 2 characteristics, got {n}")
    dtheta = (theta_max - theta_min) / (n - 1)
    return [theta_min + i * dtheta for i in range(n)]


def throat_fan(table, params):
    """Throat points ordered from the centreline side to the wall side."""
    theta_max = nozzle_throat_angle(table, params.exit_mach)
    angles = starting_angles(params.n_chars, params.theta_min, theta_max)
    return [throat_point(table, angle) for angle in angles]


def next_characteristic(table, point_to_mirror, previous_points, previous_wall):
    """March one C- characteristic from the centreline to the wall.

    The reflection of `point_to_mirror` seeds a running fold of interior
    points over `previous_points`: each new point lies on the C+ line of
    the point before it and on the C- line of the matching previous point.
    The line is closed by a wall point.

    Returns
    -------
    list of Point
        One flow point per entry of `previous_points`, then the wall point.
    """
    line = []
    upstream = mirror(point_to_mirror)
    for p in previous_points:
        upstream = interior_point(table, upstream, p)
        line.append(upstream)
    line.append(wall_point(line[-1], previous_wall))
    return line


def march_characteristics(table, throat_points):
    """March every characteristic of the throat fan to the wall.

    Each new line is one point shorter than the one before: its centreline
    point and wall point drop out of the next working set. Marching stops
    after the line computed from a single-point working set.

    Returns
    -------
    list of Point
        All marched lines concatenated in generation order.
    """
    points = []
    working = list(throat_points)
    to_mirror = working[0]
    wall = working[-1]
    while True:
        line = next_characteristic(table, to_mirror, working, wall)
        points.extend(line)
        if len(working) <= 1:
            return points
        working = line[1:-1]
        to_mirror = working[0]
        wall = line[-1]


def expected_point_count(n_chars):
    """Total points for `n_chars` fan lines: n + Σ_{k=2}^{n+1} k = n(n+5)/2."""
    return n_chars * (n_chars + 5) // 2


def minimum_length_nozzle(params, table=None):
    """Design a minimum-length nozzle.

    Parameters
    ----------
    params : DesignParameters
    table : IsentropicFlowTable or None
        Prebuilt table; built from `params` when omitted.

    Returns
    -------
    mesh : CharMesh
        Throat fan followed by every marched characteristic line.

    Raises
    ------
    TableLookupError
        The exit Mach number or a required ν is outside the table.
    DegenerateGeometryError
        Two characteristics that should intersect are parallel.
    """
    if table is None:
        table = flow_table_for(params)
    mesh = CharMesh(gamma=params.gamma, n_chars=params.n_chars)
    fan = throat_fan(table, params)
    mesh.extend(fan)
    mesh.extend(march_characteristics(table, fan))
    return mesh
