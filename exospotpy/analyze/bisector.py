"""
This module provides the line bisector, the midpoint between the two wings of a line at each depth.
"""

import numpy as np

__all__ = ['compute_bisector']

# ++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++ #


def compute_bisector(rv: np.ndarray,
                     ccf: np.ndarray,
                     num_levels: int=50,
                     depth_range: (float, float)=(.05, .95)) -> np.ndarray:
    """Bisector velocities of an absorption line

    Each wing is walked outward from the line minimum and forced to be monotonic,
    then both wings are interpolated at evenly spaced levels between the minimum and the lower wing top.

    Parameters
    ----------
    rv
        Velocity grid
    ccf
        Absorption line profile on rv
    num_levels
        Number of bisector points
    depth_range
        Fractions of the line depth, measured up from the minimum, that bound the levels

    Returns
    -------
    np.ndarray
        Bisector velocity at each level, from the line core outward
        Empty if the line minimum is at the edge of the grid
    """
    rv = np.asarray(rv, dtype=float)
    ccf = np.asarray(ccf, dtype=float)
    min_index = int(np.argmin(ccf))
    if min_index == 0 or min_index == len(ccf) - 1:
        return np.array([])

    left_ccf = np.maximum.accumulate(ccf[min_index::-1])
    left_rv = rv[min_index::-1]
    right_ccf = np.maximum.accumulate(ccf[min_index:])
    right_rv = rv[min_index:]

    bottom = ccf[min_index]
    top = min(left_ccf[-1], right_ccf[-1])
    if top <= bottom:
        return np.array([])
    levels = bottom + (top - bottom) * np.linspace(depth_range[0], depth_range[1], num_levels)

    left_velocity = np.interp(levels, left_ccf, left_rv)
    right_velocity = np.interp(levels, right_ccf, right_rv)
    return (left_velocity + right_velocity) / 2
