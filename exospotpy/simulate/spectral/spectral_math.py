"""
This module provides standard functions useful in computing radiometry.
"""

import numpy as np
from astropy import units as u
from astropy import constants
from scipy import integrate

from ...utils.constants import *

__all__ = ['planck_law', 'planck_integral', 'relative_intensity']

# ++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++ #

_h = constants.h.to(u.J * u.s).value
_c = constants.c.to(u.m / u.s).value
_k_b = constants.k_B.to(u.J / u.K).value


def planck_law(wavelength, temperature: float):
    """Spectral radiance of a blackbody

    Parameters
    ----------
    wavelength
        Wavelength in m, scalar or array
    temperature
        Temperature in K

    Returns
    -------
    float or np.ndarray
        Spectral radiance in W / (m² sr m)
    """
    wavelength = np.asarray(wavelength, dtype=float)
    return 2 * _h * _c**2 / wavelength**5 / np.expm1(_h * _c / (wavelength * _k_b * temperature))


def planck_integral(temperature, band_min, band_max) -> float:
    """Blackbody radiance integrated over a wavelength band

    Parameters
    ----------
    temperature
        Temperature, K if given as a float
    band_min
        Lower wavelength, m if given as a float
    band_max
        Upper wavelength, m if given as a float

    Returns
    -------
    float
        Radiance in W / (m² sr)
    """
    if isinstance(temperature, u.Quantity):
        temperature = temperature.to(lw_temperature_unit, equivalencies=u.temperature()).value
    if isinstance(band_min, u.Quantity):
        band_min = band_min.to(lw_wavelength_unit, equivalencies=u.spectral()).value
    if isinstance(band_max, u.Quantity):
        band_max = band_max.to(lw_wavelength_unit, equivalencies=u.spectral()).value
    if band_max <= band_min:
        raise ValueError("band_max must be larger than band_min")
    if temperature <= 0:
        return 0.
    result, _ = integrate.quad(planck_law, band_min, band_max, args=(temperature,))
    return result


def relative_intensity(temperature, reference_temperature, band_min, band_max) -> float:
    """Ratio of the band radiance at temperature to the band radiance at reference_temperature

    Parameters
    ----------
    temperature
        Temperature of the region
    reference_temperature
        Temperature of the quiet photosphere
    band_min
        Lower wavelength
    band_max
        Upper wavelength

    Returns
    -------
    float
        < 1 for a region cooler than the photosphere, > 1 for a hotter one
    """
    return planck_integral(temperature, band_min, band_max) / planck_integral(reference_temperature,
                                                                               band_min, band_max)
