"""Method of Characteristics unit processes for planar supersonic flow.

Point data structure, the characteristic mesh container and the three
point-creation processes used by the minimum-length nozzle design: throat
points, interior (flow) points and wall points.

References:
    Anderson, *Modern Compressible Flow*, 3rd ed., Sections 11.7-11.11.
    Zucrow & Hoffman, *Gas Dynamics* Vol. 2, Wiley 1977, Ch. 11.

Conventions:
    - Coordinates normalized by the throat half-height; throat at x=0, y=1.
    - Ascending invariant R- = ν - θ, constant along the C+ characteristic
    - Descending invariant R+ = ν + θ, constant along the C- characteristic
    - Hence ν = (R- + R+)/2 and θ = (R+ - R-)/2
    - Planar flow, so both invariants are exactly constant along their
      characteristics and no source term appears.
"""

import enum
from dataclasses import dataclass, field, replace

import numpy as np

# Below this the two characteristic slopes are treated as parallel.
PARALLEL_TOL = 1e-14


class DegenerateGeometryError(ValueError):
    """Two characteristic lines that should intersect are parallel."""


class PointType(enum.Enum):
    THROAT = 'Throat'
    FLOW = 'Flow'
    WALL = 'Wall'


@dataclass(frozen=True)
class Point:
    """A point in the characteristic net.

    Attributes
    ----------
    R_minus : float
        Ascending invariant ν - θ, constant along the C+ line through here.
    R_plus : float
        Descending invariant ν + θ, constant along the C- line through here.
    M : float
        Mach number.
    mu : float
        Mach angle [radians].
    theta : float
        Flow angle [radians] from the centreline.
    nu : float
        Prandtl-Meyer angle [radians].
    x, y : float
        Position (throat half-height = 1).
    kind : PointType
        Which process created the point.
    """
    R_minus: float
    R_plus: float
    M: float
    mu: float
    theta: float
    nu: float
    x: float
    y: float
    kind: PointType = PointType.FLOW

    @property
    def riemann_invariants(self):
        return self.R_minus, self.R_plus

    @property
    def position(self):
        return self.x, self.y

    @property
    def characteristic_angles(self):
        """Inclinations (θ + μ, θ - μ) of the C+ and C- lines."""
        return self.theta + self.mu, self.theta - self.mu

    @property
    def is_wall(self):
        return self.kind is PointType.WALL


@dataclass
class CharMesh:
    """Append-only collection of characteristic points in generation order."""
    points: list = field(default_factory=list)
    gamma: float = 1.4
    n_chars: int = 0

    def __len__(self):
        return len(self.points)

    def extend(self, points):
        self.points.extend(points)

    def get_points(self, kind):
        return [p for p in self.points if p.kind is kind]

    def get_wall_contour(self):
        """Wall points as (x, y) arrays in marching order."""
        wall_pts = self.get_points(PointType.WALL)
        x = np.array([p.x for p in wall_pts])
        y = np.array([p.y for p in wall_pts])
        return x, y

    def get_axis_points(self):
        """Centreline flow points as (x, M) arrays sorted by x."""
        axis_pts = [p for p in self.get_points(PointType.FLOW) if abs(p.y) < 1e-9]
        axis_pts.sort(key=lambda p: p.x)
        x = np.array([p.x for p in axis_pts])
        M = np.array([p.M for p in axis_pts])
        return x, M


def mirror(p):
    """Reflect a point across the centreline.

    The invariants swap roles, the flow angle and y change sign; everything
    else is unchanged. Applying it twice returns the original point.
    """
    return replace(p, R_minus=p.R_plus, R_plus=p.R_minus,
                   theta=-p.theta, y=-p.y)


def _intersect(xa, ya, angle_a, xb, yb, angle_b):
    """Intersection of two straight lines given by a point and inclination."""
    tan_a = np.tan(angle_a)
    tan_b = np.tan(angle_b)
    denominator = tan_b - tan_a
    if abs(denominator) < PARALLEL_TOL:
        raise DegenerateGeometryError(
            f"characteristic lines through ({xa:.6g}, {ya:.6g}) and "
            f"({xb:.6g}, {yb:.6g}) are parallel"
        )
    x = (xb * tan_b - xa * tan_a + ya - yb) / denominator
    y = ya + (x - xa) * tan_a
    if not (np.isfinite(x) and np.isfinite(y)):
        raise DegenerateGeometryError(
            f"characteristic intersection is not finite: ({x}, {y})"
        )
    return float(x), float(y)


def throat_point(table, angle):
    """Point at the throat corner (0, 1) with flow angle `angle`.

    The flow at the sharp corner is turned by a centred expansion, so
    ν equals θ there and the ascending invariant is zero.
    """
    row = table.require_prandtl_meyer(angle)
    return Point(
        R_minus=0.0, R_plus=2 * angle,
        M=row.mach, mu=row.mach_angle,
        theta=angle, nu=angle,
        x=0.0, y=1.0,
        kind=PointType.THROAT,
    )


def interior_point(table, a, b):
    """Interior point where the C+ line from `a` meets the C- line from `b`.

    The compatibility relations give the state algebraically:
        ν - θ = R-(a),  ν + θ = R+(b)

    The characteristic lines are straight segments inclined at the mean of
    the angle at the upstream point and at the new point (single pass, no
    corrector).

    Parameters
    ----------
    table : IsentropicFlowTable
    a : Point
        Upstream point on the C+ (ascending) characteristic.
    b : Point
        Upstream point on the C- (descending) characteristic.

    Returns
    -------
    Point
        New point of kind FLOW.
    """
    nu = 0.5 * (a.R_minus + b.R_plus)
    theta = 0.5 * (b.R_plus - a.R_minus)
    row = table.require_prandtl_meyer(nu)
    mu = row.mach_angle

    angle_a = 0.5 * ((a.theta + a.mu) + (theta + mu))
    angle_b = 0.5 * ((b.theta - b.mu) + (theta - mu))
    x, y = _intersect(a.x, a.y, angle_a, b.x, b.y, angle_b)

    return Point(
        R_minus=a.R_minus, R_plus=b.R_plus,
        M=row.mach, mu=mu, theta=theta, nu=nu,
        x=x, y=y, kind=PointType.FLOW,
    )


def wall_point(a, b):
    """Wall point closing the C+ line from interior point `a`.

    The wall is a streamline shaped to cancel the incoming wave, so the
    state is that of `a`. The wall segment from the previous wall point `b`
    is inclined at the mean of the two flow angles; the C+ line keeps the
    inclination θ + μ of `a`.
    """
    x, y = _intersect(a.x, a.y, a.theta + a.mu,
                      b.x, b.y, 0.5 * (a.theta + b.theta))
    return Point(
        R_minus=a.R_minus, R_plus=0.0,
        M=a.M, mu=a.mu, theta=a.theta, nu=a.nu,
        x=x, y=y, kind=PointType.WALL,
    )
