"""
This module provides Gaussian fits of line profiles, used to measure radial velocities.
"""

import warnings
from collections import namedtuple

import numpy as np
from scipy import optimize
from astropy.utils.exceptions import AstropyUserWarning

from ..utils.math_operations import gaussian_line, normalize

__all__ = ['GaussianFit', 'initial_guess', 'fit_gaussian_profile', 'fit_rv']

# ++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++ #

GaussianFit = namedtuple('GaussianFit', ['height', 'centroid', 'width', 'offset'])

# Starting width for the fit, m/s
default_width_seed = 2710.


def initial_guess(rv: np.ndarray, ccf: np.ndarray, width: float=default_width_seed) -> GaussianFit:
    """Starting point for a line fit: line depth and position from the middle of the grid, continuum from the edge"""
    mid = len(ccf) // 2
    return GaussianFit(height=ccf[mid] - ccf[0],
                       centroid=rv[mid],
                       width=width,
                       offset=ccf[0])


def fit_gaussian_profile(rv: np.ndarray,
                         ccf: np.ndarray,
                         guess: GaussianFit=None) -> GaussianFit:
    """Least-squares fit of a Gaussian plus offset to a line profile

    Parameters
    ----------
    rv
        Velocity grid, m/s
    ccf
        Line profile on the velocity grid
    guess
        Optional starting parameters, see initial_guess

    Returns
    -------
    GaussianFit
        height, centroid, width, offset
        If the fit does not converge, the guess is returned and a warning is raised
    """
    rv = np.asarray(rv, dtype=float)
    ccf = np.asarray(ccf, dtype=float)
    if guess is None:
        guess = initial_guess(rv, ccf)
    try:
        popt, _ = optimize.curve_fit(gaussian_line, rv, ccf, p0=tuple(guess), maxfev=10000)
    except RuntimeError as err:
        warnings.warn("Line fit did not converge, using initial guess: " + str(err), AstropyUserWarning)
        return guess
    height, centroid, width, offset = popt
    return GaussianFit(height=height, centroid=centroid, width=abs(width), offset=offset)


def fit_rv(rv: np.ndarray, ccf: np.ndarray) -> float:
    """Centroid of the best-fit Gaussian to the normalized profile, m/s"""
    normalized = normalize(ccf)
    return fit_gaussian_profile(rv, normalized, initial_guess(rv, normalized)).centroid
