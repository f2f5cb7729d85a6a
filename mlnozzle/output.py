"""Tabular output of characteristic points.

Rows follow the layout of the MLN tables in Anderson MCF Example 11.1:
both invariants (radians), θ, ν, M, μ, θ+μ and θ-μ (degrees) and the
point position.
"""

import string
from pathlib import Path

import numpy as np

from mlnozzle.moc import PointType

# Magnitudes below this are written as exactly zero.
EPS = 1e-8

MAX_LETTERED_CHARS = len(string.ascii_lowercase)

COLUMNS = ('R_minus', 'R_plus', 'theta_deg', 'nu_deg', 'M',
           'mu_deg', 'theta_plus_mu_deg', 'theta_minus_mu_deg', 'x', 'y')


def wall_points(points):
    """Wall points in generation order (the nozzle contour)."""
    return [p for p in points if p.kind is PointType.WALL]


def point_names(n_chars, count=None):
    """Labels for a marched point list.

    Throat points take the letters a, b, c, ...; every later point is
    numbered from 1 in generation order.
    """
    if n_chars > MAX_LETTERED_CHARS:
        raise ValueError(
            f"cannot letter more than {MAX_LETTERED_CHARS} "
            f"throat points, got {n_chars}")
    names = list(string.ascii_lowercase[:n_chars])
    if count is not None:
        names.extend(str(i) for i in range(1, count - n_chars + 1))
    return names


def _row_values(p):
    theta_plus_mu, theta_minus_mu = p.characteristic_angles
    return [p.R_minus, p.R_plus, *np.degrees([p.theta, p.nu]),
            p.M, np.degrees(p.mu),
            np.degrees(theta_plus_mu), np.degrees(theta_minus_mu), p.x, p.y]


def _format(value, decimal_places):
    if abs(value) < EPS:
        value = 0.0
    text = f"{value:.{decimal_places}f}"
    # rounding can still leave a negative zero, e.g. -1e-6 at 4 places
    if float(text) == 0.0:
        text = f"{0.0:.{decimal_places}f}"
    return text


def as_csv_degrees(p, decimal_places=4):
    """One point as comma-separated values, flow angles in degrees.

    The Riemann invariants are written in radians.
    """
    return ','.join(_format(v, decimal_places) for v in _row_values(p))


def csv_header(named=False):
    return ','.join((('name',) if named else ()) + COLUMNS)


def write_points_csv(path, points, names=None, decimal_places=4, title=None):
    """Write the full point table, optionally prefixed with point names."""
    path = Path(path)
    with open(path, 'w') as f:
        if title:
            f.write(f"# {title}\n")
        f.write(csv_header(named=names is not None) + '\n')
        for i, p in enumerate(points):
            row = as_csv_degrees(p, decimal_places)
            if names is not None:
                row = f"{names[i]},{row}"
            f.write(row + '\n')
    return path


def write_contour_csv(path, points, throat_radius_m=None, title=None):
    """Write the wall contour, starting at the throat corner (0, 1).

    Includes dimensional columns (x_mm, y_mm) when throat_radius_m is set.
    """
    path = Path(path)
    x = [0.0] + [p.x for p in wall_points(points)]
    y = [1.0] + [p.y for p in wall_points(points)]
    with open(path, 'w') as f:
        if title:
            f.write(f"# {title}\n")
        if throat_radius_m is not None:
            f.write(f"# throat_radius={throat_radius_m * 1e3:.4f} mm\n")
            f.write("# x/h*,y/h*,x_mm,y_mm\n")
            for xi, yi in zip(x, y):
                f.write(f"{xi:.8f},{yi:.8f},"
                        f"{xi * throat_radius_m * 1e3:.6f},"
                        f"{yi * throat_radius_m * 1e3:.6f}\n")
        else:
            f.write("# x/h*,y/h*\n")
            for xi, yi in zip(x, y):
                f.write(f"{xi:.8f},{yi:.8f}\n")
    return path
