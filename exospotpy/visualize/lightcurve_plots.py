"""
This module generates plots of the observables for diagnostic and visualization purposes.
"""

import numpy as np
import matplotlib.pyplot as plt
from astropy import units as u

from ..utils import *

__all__ = ['bisector_span', 'plot_flux_rv']

# ++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++ #


def bisector_span(bisector: np.ndarray, low_fraction: float=.25, high_fraction: float=.25) -> float:
    """Bisector inverse slope: mean velocity of the top of the bisector minus the mean of the bottom

    Parameters
    ----------
    bisector
        Bisector velocities ordered from the line core outward
    low_fraction
        Fraction of points, from the core, averaged as the bottom
    high_fraction
        Fraction of points, from the wing tops, averaged as the top

    Returns
    -------
    float
        nan for an empty bisector
    """
    bisector = np.asarray(bisector)
    if len(bisector) == 0:
        return np.nan
    n_low = max(1, int(len(bisector) * low_fraction))
    n_high = max(1, int(len(bisector) * high_fraction))
    return np.mean(bisector[-n_high:]) - np.mean(bisector[:n_low])


def plot_flux_rv(time_domain,
                 flux: np.ndarray,
                 observations: list,
                 save: str=None):
    """Plots the relative flux, the radial velocity, and the bisector span against time

    Parameters
    ----------
    time_domain
        Times of the observations
    flux
        Output of Simulator.observe_flux
    observations
        Output of Simulator.observe_rv
    save
        If None, runs plt.show()
        If filepath str, saves to save location (must include file extension)
    """
    if isinstance(time_domain, u.Quantity):
        x_label = "Time "+u_labelstr(time_domain, add_parentheses=True)
        time_domain = time_domain.value
    else:
        x_label = "Time (d)"

    rv = [obs.rv for obs in observations]
    span = [bisector_span(obs.bisector) for obs in observations]

    fig, (ax_flux, ax_rv, ax_bis) = plt.subplots(3, 1, figsize=(10, 8), sharex=True)
    ax_flux.plot(time_domain, flux, color='k', lw=1)
    ax_flux.set_ylabel("Relative flux")

    ax_rv.plot(time_domain, rv, color='r', lw=1)
    ax_rv.set_ylabel("RV (m/s)")

    ax_bis.plot(time_domain, span, color='b', lw=1)
    ax_bis.set_ylabel("Bisector span (m/s)")
    ax_bis.set_xlabel(x_label)

    plt.tight_layout()
    if save is not None:
        plt.savefig(save)
        plt.close(fig)
    else:
        plt.show()
