"""
This module provides line profiles (CCFs) and the reference profiles of the quiet and active Sun.
"""

from pathlib import Path

import numpy as np
from scipy import interpolate

__all__ = ['LineProfile', 'reference_rv', 'reference_ccf_quiet', 'reference_ccf_active',
           'reference_profiles', 'load_ccf_table']

# ++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++ #
# Reference solar line, analytic stand-in for an observed solar CCF
_ref_rv_halfwidth = 20e3  # m/s
_ref_rv_step = 100.  # m/s
_ref_depth_quiet = 0.6
_ref_depth_active = 0.45
_ref_sigma = 3e3  # m/s
_ref_active_redshift = 300.  # m/s, convective blueshift is suppressed in active regions


def _read_only(array: np.ndarray) -> np.ndarray:
    array.setflags(write=False)
    return array


_REFERENCE_RV = _read_only(np.linspace(-_ref_rv_halfwidth, _ref_rv_halfwidth,
                                       int(round(2*_ref_rv_halfwidth/_ref_rv_step)) + 1))
_REFERENCE_CCF_QUIET = _read_only(1. - _ref_depth_quiet*np.exp(-_REFERENCE_RV**2 / (2*_ref_sigma**2)))
_REFERENCE_CCF_ACTIVE = _read_only(1. - _ref_depth_active*np.exp(-(_REFERENCE_RV-_ref_active_redshift)**2
                                                                  / (2*_ref_sigma**2)))


def reference_rv() -> np.ndarray:
    """Velocity grid of the reference profiles, m/s"""
    return _REFERENCE_RV


def reference_ccf_quiet() -> np.ndarray:
    """Reference line profile of the quiet photosphere"""
    return _REFERENCE_CCF_QUIET


def reference_ccf_active() -> np.ndarray:
    """Reference line profile inside an active region"""
    return _REFERENCE_CCF_ACTIVE


# ++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++ #


class LineProfile:
    """Velocity-indexed line profile that can be Doppler shifted."""
    def __init__(self, rv: np.ndarray, ccf: np.ndarray):
        """Immutable pair of a velocity grid and the line amplitude on that grid

        Parameters
        ----------
        rv
            Strictly increasing velocity grid in m/s
        ccf
            Line amplitude at each velocity
        """
        rv = np.array(rv, dtype=float)
        ccf = np.array(ccf, dtype=float)
        if rv.shape != ccf.shape or rv.ndim != 1:
            raise ValueError("rv and ccf must be 1d arrays of the same length")
        if len(rv) < 4:
            raise ValueError("A line profile needs at least 4 points")
        if np.any(np.diff(rv) <= 0):
            raise ValueError("rv must be strictly increasing")
        self._rv = _read_only(rv)
        self._ccf = _read_only(ccf)
        self._spline = interpolate.CubicSpline(self._rv, self._ccf, extrapolate=False)

    # ------------------------------------------------------------------------------------------------------------ #
    @property
    def rv(self):
        return self._rv

    @property
    def ccf(self):
        return self._ccf

    def __len__(self):
        return len(self._rv)

    # ------------------------------------------------------------------------------------------------------------ #
    def shift(self, velocity: float) -> np.ndarray:
        """Doppler shift the profile and resample it on the original velocity grid

        Points that fall outside the grid take the nearest edge value (the continuum).

        Parameters
        ----------
        velocity
            Shift in m/s, positive moves the line redward

        Returns
        -------
        np.ndarray
            Shifted profile, same length as rv
        """
        if velocity == 0:
            return self._ccf.copy()
        shifted = self._spline(self._rv - velocity)
        shifted[self._rv - velocity < self._rv[0]] = self._ccf[0]
        shifted[self._rv - velocity > self._rv[-1]] = self._ccf[-1]
        return shifted


def reference_profiles() -> (LineProfile, LineProfile):
    """Quiet and active LineProfile built from the reference data"""
    return LineProfile(reference_rv(), reference_ccf_quiet()), LineProfile(reference_rv(), reference_ccf_active())


# ++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++ #
def load_ccf_table(file_path) -> (LineProfile, LineProfile):
    """Read a quiet/active CCF table

    The table has two header lines followed by whitespace separated columns:
    velocity (km/s), quiet amplitude, active amplitude.

    Parameters
    ----------
    file_path
        Location of the table

    Returns
    -------
    (LineProfile, LineProfile)
        quiet profile, active profile, velocities in m/s
    """
    table = np.loadtxt(str(Path(file_path)), skiprows=2, ndmin=2)
    if table.shape[1] < 3:
        raise ValueError("CCF table "+str(file_path)+" must have 3 columns: rv, quiet, active")
    rv = table[:, 0] * 1e3
    return LineProfile(rv, table[:, 1]), LineProfile(rv, table[:, 2])
