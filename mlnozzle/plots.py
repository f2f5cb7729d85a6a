"""Visualization for MLN contours and characteristic nets.

All plot functions return (fig, ax) tuples for composability.
"""

import matplotlib.pyplot as plt
import numpy as np

from mlnozzle.gas import area_mach_ratio
from mlnozzle.moc import PointType


def plot_contour(mesh, label=None, ax=None, title="Nozzle Contour",
                 mirror=True, show_ideal=True):
    """Plot the designed wall from the throat corner to the exit.

    Parameters
    ----------
    mesh : CharMesh
        Marched design; the wall starts at the throat corner (0, 1).
    label : str or None
        Legend label for the upper wall.
    ax : matplotlib Axes or None
        Existing axes to plot on.
    title : str
    mirror : bool
        Also draw the lower wall.
    show_ideal : bool
        Mark the exit half-height A/A* for the exit Mach number reached.

    Returns
    -------
    fig, ax
    """
    if ax is None:
        fig, ax = plt.subplots(1, 1, figsize=(10, 4))
    else:
        fig = ax.figure

    x_wall, y_wall = mesh.get_wall_contour()
    x = np.concatenate(([0.0], x_wall))
    y = np.concatenate(([1.0], y_wall))

    ax.plot(x, y, 'b.-', linewidth=2, markersize=4, label=label)
    if mirror:
        ax.plot(x, -y, 'b.-', linewidth=2, markersize=4)
    ax.axhline(0, color='k', linewidth=0.5, linestyle='--')
    if show_ideal and len(x_wall):
        exit_pt = mesh.get_points(PointType.WALL)[-1]
        ar = area_mach_ratio(exit_pt.M, mesh.gamma)
        ax.axhline(ar, color='r', linewidth=0.8, linestyle=':',
                   label=f'A/A* = {ar:.4f}')

    ax.set_xlabel("x / h*")
    ax.set_ylabel("y / h*")
    ax.set_title(title)
    ax.set_aspect('equal')
    if label or show_ideal:
        ax.legend()
    fig.tight_layout()
    return fig, ax


def plot_characteristic_net(mesh, ax=None, title="Characteristic Net"):
    """Plot the marched net: point cloud, C- lines and the wall.

    Each marched line is drawn from its centreline point to its wall
    point; the throat fan is drawn as rays from the corner to each flow
    point of the first line.
    """
    if ax is None:
        fig, ax = plt.subplots(1, 1, figsize=(10, 4))
    else:
        fig = ax.figure

    points = mesh.points
    throat = [p for p in points if p.kind is PointType.THROAT]
    marched = points[len(throat):]

    lines = []
    current = []
    for p in marched:
        current.append(p)
        if p.kind is PointType.WALL:
            lines.append(current)
            current = []

    for line in lines:
        ax.plot([p.x for p in line], [p.y for p in line],
                '-', color='0.6', linewidth=0.8)

    for p in marched:
        if p.kind is PointType.FLOW:
            ax.plot(p.x, p.y, 'k.', markersize=3)

    wall = [p for p in marched if p.kind is PointType.WALL]
    ax.plot([0.0] + [p.x for p in wall], [1.0] + [p.y for p in wall],
            'b-', linewidth=2, label='wall')
    if lines:
        first = lines[0]
        for p in first[:-1]:
            ax.plot([0.0, p.x], [1.0, p.y], '-', color='0.6', linewidth=0.8)

    ax.axhline(0, color='k', linewidth=0.5, linestyle='--')
    ax.set_xlabel("x / h*")
    ax.set_ylabel("y / h*")
    ax.set_title(title)
    ax.set_aspect('equal')
    ax.legend()
    fig.tight_layout()
    return fig, ax
