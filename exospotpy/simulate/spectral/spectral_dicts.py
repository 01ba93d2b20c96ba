
"""
This module provides specific spectral band properties and limb-darkening laws.
"""

import numpy as np
from astropy import units as u

__all__ = ['johnson_band_center_dict', 'johnson_bandwidth_dict', 'band_limits',
           'limb_dict', 'limb_to_quadratic_coeffs']

johnson_band_center_dict = {"U": 360 * u.nm,
                            "B": 440 * u.nm,
                            "V": 550 * u.nm,
                            "R": 640 * u.nm,
                            "I": 790 * u.nm,
                            "J": 1260 * u.nm,
                            "H": 1600 * u.nm,
                            "K": 2220 * u.nm,
                            "g": 520 * u.nm,
                            "r": 670 * u.nm,
                            "i": 790 * u.nm,
                            "z": 910 * u.nm
                            }

johnson_bandwidth_dict = {"U": 54 * u.nm,
                          "B": 97 * u.nm,
                          "V": 88 * u.nm,
                          "R": 147 * u.nm,
                          "I": 150 * u.nm,
                          "J": 202 * u.nm,
                          "H": 368 * u.nm,
                          "K": 511 * u.nm,
                          "g": 73 * u.nm,
                          "r": 94 * u.nm,
                          "i": 126 * u.nm,
                          "z": 118 * u.nm
                          }


def band_limits(band: str) -> (u.Quantity, u.Quantity):
    """Lower and upper wavelength of a named photometric band

    Parameters
    ----------
    band
        Which band to use, e.g., 'V', and is case-sensitive

    Returns
    -------
    (u.Quantity, u.Quantity)
        band_min, band_max
    """
    if band not in johnson_band_center_dict:
        raise KeyError("Band "+str(band)+" is unknown.")
    center = johnson_band_center_dict[band]
    half_width = johnson_bandwidth_dict[band] / 2
    return (center - half_width).to(u.m), (center + half_width).to(u.m)


# Based on the models from BATMAN
# See https://www.cfa.harvard.edu/~lkreidberg/batman/tutorial.html#limb-darkening-options
# Only laws that are special cases of the quadratic law are kept, the chord integral is closed-form for those

def uniform(mu, *args):
    try:
        return np.ones(len(mu))
    except TypeError:
        return 1.


def linear(mu, *args):
    return 1. - args[0]*(1-mu)


def quadratic(mu, *args):
    return 1. - args[0]*(1-mu) - args[1]*(1-mu)**2


limb_dict = {'uniform': uniform,
             'linear': linear,
             'quadratic': quadratic}


def limb_to_quadratic_coeffs(limb_model: str, coeffs) -> (float, float):
    """Express a limb law from limb_dict as (linear, quadratic) coefficients"""
    if limb_model == 'uniform':
        return 0., 0.
    elif limb_model == 'linear':
        return float(coeffs[0]), 0.
    elif limb_model == 'quadratic':
        return float(coeffs[0]), float(coeffs[1])
    raise KeyError("Unknown limb model: "+str(limb_model))
