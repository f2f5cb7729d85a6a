"""Sampled isentropic flow table.

The table maps Mach number to Mach angle and Prandtl-Meyer function on a
uniform Mach grid. Both columns increase monotonically with M, so the
table can be searched in either direction. Queries between two samples are
linearly interpolated; queries outside the sampled range return ``None``.
"""

from typing import NamedTuple, Optional

import numpy as np

from mlnozzle.gas import mach_angle, prandtl_meyer

DEFAULT_MAX_MACH = 10.0


class TableLookupError(ValueError):
    """A value required by the design is not covered by the flow table."""

    def __init__(self, quantity, value):
        self.quantity = quantity
        self.value = value
        super().__init__(
            f"table does not contain the requested {quantity} ({value:.6g}); "
            f"widen the table range or reduce the step"
        )


class MachRow(NamedTuple):
    mach_angle: float
    prandtl_meyer: float


class PrandtlMeyerRow(NamedTuple):
    mach: float
    mach_angle: float


class IsentropicFlowTable:
    """Read-only Mach / μ / ν table for a single γ.

    Attributes
    ----------
    gamma : float
        Ratio of specific heats the table was built for.
    mach, mu, nu : ndarray
        Sample columns, all sorted ascending.
    """

    def __init__(self, gamma, mach):
        self.gamma = gamma
        self.mach = np.asarray(mach, dtype=float)
        self.mu = mach_angle(self.mach)
        self.nu = prandtl_meyer(self.mach, gamma)
        for column in (self.mach, self.mu, self.nu):
            column.setflags(write=False)

    def __len__(self):
        return len(self.mach)

    @property
    def mach_range(self):
        return float(self.mach[0]), float(self.mach[-1])

    @property
    def prandtl_meyer_range(self):
        return float(self.nu[0]), float(self.nu[-1])

    def lookup_mach(self, M) -> Optional[MachRow]:
        """Mach angle and ν at Mach number M, or None when out of range."""
        lo, hi = self.mach_range
        if not lo <= M <= hi:
            return None
        return MachRow(
            mach_angle=float(np.interp(M, self.mach, self.mu)),
            prandtl_meyer=float(np.interp(M, self.mach, self.nu)),
        )

    def lookup_prandtl_meyer(self, nu) -> Optional[PrandtlMeyerRow]:
        """Mach number and Mach angle at Prandtl-Meyer value ν, or None."""
        lo, hi = self.prandtl_meyer_range
        if not lo <= nu <= hi:
            return None
        M = float(np.interp(nu, self.nu, self.mach))
        return PrandtlMeyerRow(mach=M, mach_angle=float(np.arcsin(1.0 / M)))

    def require_mach(self, M) -> MachRow:
        row = self.lookup_mach(M)
        if row is None:
            raise TableLookupError("Mach number", M)
        return row

    def require_prandtl_meyer(self, nu) -> PrandtlMeyerRow:
        row = self.lookup_prandtl_meyer(nu)
        if row is None:
            raise TableLookupError("Prandtl-Meyer function", nu)
        return row


def build_flow_table(gamma, min_mach, mach_step, max_mach=DEFAULT_MAX_MACH):
    """Sample the isentropic relations on [min_mach, max_mach].

    Parameters
    ----------
    gamma : float
        Ratio of specific heats.
    min_mach : float
        First sampled Mach number (>= 1).
    mach_step : float
        Spacing between samples.
    max_mach : float
        Last sampled Mach number (included when it falls on the grid).

    Returns
    -------
    IsentropicFlowTable
    """
    if gamma <= 1.0:
        raise ValueError(f"gamma must be > 1, got {gamma}")
    if min_mach < 1.0:
        raise ValueError(f"min_mach must be >= 1, got {min_mach}")
    if mach_step <= 0:
        raise ValueError(f"mach_step must be positive, got {mach_step}")
    if max_mach <= min_mach:
        raise ValueError(
            f"max_mach ({max_mach}) must exceed min_mach ({min_mach})"
        )
    n_samples = int(np.floor((max_mach - min_mach) / mach_step + 1e-9)) + 1
    mach = min_mach + mach_step * np.arange(n_samples)
    return IsentropicFlowTable(gamma, mach)
