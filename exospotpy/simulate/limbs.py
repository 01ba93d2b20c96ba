"""
This module provides models for stellar limb darkening and its integral along chords of the disk.
"""

import numpy as np

from .spectral.spectral_dicts import limb_dict, limb_to_quadratic_coeffs


__all__ = ['Limb', 'limb_integral']

# ++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++ #


def _limb_antiderivative(z: float, y: float, limb_linear: float, limb_quadratic: float) -> float:
    """Antiderivative in z of the quadratic law along the chord at fixed y"""
    y2 = y * y
    x = np.sqrt(1. - min(z * z + y2, 1.))
    return (z * (3. * limb_linear * (x - 2.)
                 + 2. * (limb_quadratic * (3. * x + 3. * y2 + z * z - 6.) + 3.))
            - 3. * (y2 - 1.) * (limb_linear + 2. * limb_quadratic) * np.arctan2(z, x)) / 6.


def limb_integral(z_bounds, y: float, limb_linear: float, limb_quadratic: float) -> float:
    """Integral of the quadratic limb-darkening law along the chord y=const, between z_bounds

    Parameters
    ----------
    z_bounds
        Object with lower and upper attributes, in units of the stellar radius
    y
        Position of the chord, in units of the stellar radius
    limb_linear
        Linear limb-darkening coefficient
    limb_quadratic
        Quadratic limb-darkening coefficient

    Returns
    -------
    float
        0. if the bounds are degenerate
    """
    if abs(z_bounds.upper - z_bounds.lower) < np.finfo(float).eps:
        return 0.
    return (_limb_antiderivative(z_bounds.upper, y, limb_linear, limb_quadratic)
            - _limb_antiderivative(z_bounds.lower, y, limb_linear, limb_quadratic))


# ++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++ #


class Limb:
    def __init__(self,
                 limb_model: str='quadratic',
                 coeffs: list=(0., 0.)):
        """A class for handling limb darkening functions

        Based on BATMAN:
        https://www.cfa.harvard.edu/~lkreidberg/batman/tutorial.html#limb-darkening-options

        Parameters
        ----------
        limb_model
            Name of the limb model.  Options:
                - uniform
                - linear
                - quadratic (default)
        coeffs
            Coefficients to pass to the limb model
        """
        try:
            self._limb_function = limb_dict[limb_model]
            self._limb_model = limb_model
            self._limb_args = list(coeffs)
            self._linear, self._quadratic = limb_to_quadratic_coeffs(limb_model, coeffs)
        except (KeyError, IndexError):
            raise AttributeError("Unknown limb model or missing coefficients")

    # ------------------------------------------------------------------------------------------------------------ #
    @property
    def limb_model(self):
        return self._limb_model

    @property
    def coefficients(self) -> (float, float):
        """Equivalent (linear, quadratic) coefficients"""
        return self._linear, self._quadratic

    # ------------------------------------------------------------------------------------------------------------ #
    def brightness(self, mu):
        """Relative intensity as a function of mu, the cosine of the angle from disk center

        Parameters
        ----------
        mu
            [0-1], scalar or array

        Returns
        -------
        float or np.ndarray
            Relative limb intensity, 1 at disk center
        """
        return self._limb_function(mu, *self._limb_args)

    def limb_darkened_radial_position(self, radial_position):
        """Relative intensity as a function of fractional radial position on the star.

        Parameters
        ----------
        radial_position
            Fraction of radius on star, in polar coordinates.  [0-1]

        Returns
        -------
        float
            Relative limb intensity
        """
        cos_phi = np.sqrt(np.clip(1 - np.asarray(radial_position) ** 2, 0, None))
        return self._limb_function(cos_phi, *self._limb_args)

    # ------------------------------------------------------------------------------------------------------------ #
    def chord_integral(self, z_bounds, y: float) -> float:
        """Integrated intensity along the chord at y, see limb_integral"""
        return limb_integral(z_bounds, y, self._linear, self._quadratic)
