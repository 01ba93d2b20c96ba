"""
This module provides the StellarDisk, the quiet, limb-darkened, rotating star that active regions live on.
"""

import numpy as np
from astropy import units as u

from .limbs import *
from .spectral.profiles import LineProfile, reference_profiles
from ..analyze.line_fitting import GaussianFit, fit_gaussian_profile, initial_guess
from ..utils import *
from .spots.geometry import Bounds

__all__ = ['StellarDisk']

# TODO Add differential rotation, spots currently rotate rigidly with the equator

# ++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++ #


class StellarDisk:
    """Quiet, rotating star seen as a limb-darkened disk.  Built once, then only read."""

    # ------------------------------------------------------------------------------------------------------------ #
    def __init__(self,
                 radius: u.Quantity,
                 period: u.Quantity,
                 inclination: u.Quantity,
                 temperature: u.Quantity,
                 spot_temp_diff: u.Quantity,
                 limb_linear: float,
                 limb_quadratic: float,
                 grid_size: int,
                 profile_quiet: LineProfile=None,
                 profile_active: LineProfile=None):
        """Integrates the quiet line profile over the disk and measures its velocity zero-point.

        Parameters
        ----------
        radius
            Stellar radius, solar radii if a float
        period
            Rotation period at the equator, days if a float
        inclination
            Angle between the rotation axis and the line of sight, degrees if a float, 0 is pole-on
        temperature
            Effective temperature of the photosphere, K if a float
        spot_temp_diff
            Temperature difference between the photosphere and its active regions, K if a float
        limb_linear
            Linear limb-darkening coefficient
        limb_quadratic
            Quadratic limb-darkening coefficient
        grid_size
            Number of chords the disk is divided into, must be positive
        profile_quiet
            Line profile of the quiet photosphere, defaults to the reference solar profile
        profile_active
            Line profile inside active regions, defaults to the reference solar profile
        """
        if int(grid_size) != grid_size or grid_size <= 0:
            raise ValueError("grid_size must be a positive integer, got " + str(grid_size))

        self._radius = cast_to_unit(radius, u.R_sun, "radius")
        self._period = cast_to_unit(period, lw_time_unit, "period")
        self._inclination = np.deg2rad(cast_to_unit(inclination, lw_angle_unit, "inclination"))
        self._temperature = cast_to_unit(temperature, lw_temperature_unit, "temperature")
        self._spot_temp_diff = cast_to_unit(spot_temp_diff, lw_temperature_unit, "spot_temp_diff")
        self._grid_size = int(grid_size)
        self._limb = Limb('quadratic', [limb_linear, limb_quadratic])
        if self._period <= 0:
            raise ValueError("period must be positive")

        default_quiet, default_active = reference_profiles()
        self._profile_quiet = default_quiet if profile_quiet is None else profile_quiet
        self._profile_active = default_active if profile_active is None else profile_active
        if len(self._profile_quiet) != len(self._profile_active):
            raise ValueError("Quiet and active line profiles must share a velocity grid")

        edge_velocity = 2 * np.pi * self._radius * solar_radius_m / (self._period * day_s)
        self._equatorial_velocity = edge_velocity * np.sin(self._inclination)

        self._integrated_ccf, self._flux_quiet = self._integrate_disk()

        normalized = normalize(self._integrated_ccf)
        guess = initial_guess(self._profile_quiet.rv, normalized)
        self._fit_result = fit_gaussian_profile(self._profile_quiet.rv, normalized, guess)
        self._zero_rv = self._fit_result.centroid

        self._integrated_ccf.setflags(write=False)

    # ------------------------------------------------------------------------------------------------------------ #
    def _integrate_disk(self) -> (np.ndarray, float):
        """Sum the Doppler-shifted quiet profile over every chord of the disk, weighted by its limb integral"""
        integrated_ccf = np.zeros(len(self._profile_quiet))
        flux_quiet = 0.
        for y in np.linspace(-1., 1., self._grid_size + 1):
            z_bound = np.sqrt(max(1. - y * y, 0.))
            chord_flux = self.limb_integral(Bounds(-z_bound, z_bound), y)
            if chord_flux == 0:
                continue
            integrated_ccf += self._profile_quiet.shift(y * self._equatorial_velocity) * chord_flux
            flux_quiet += chord_flux
        return integrated_ccf, flux_quiet

    # ------------------------------------------------------------------------------------------------------------ #
    def limb_integral(self, z_bounds: Bounds, y: float) -> float:
        """Limb-darkened intensity integrated along the chord at y between z_bounds"""
        return self._limb.chord_integral(z_bounds, y)

    def limb_brightness(self, mu):
        """Limb-darkened intensity at mu = cos(angle from disk center), 1 at disk center"""
        return self._limb.brightness(mu)

    # ------------------------------------------------------------------------------------------------------------ #
    @property
    def radius(self):
        """Radius in solar radii"""
        return self._radius

    @property
    def period(self):
        """Rotation period in days"""
        return self._period

    @property
    def inclination(self):
        """Inclination in radians"""
        return self._inclination

    @property
    def temperature(self):
        return self._temperature

    @property
    def spot_temp_diff(self):
        return self._spot_temp_diff

    @property
    def limb_linear(self):
        return self._limb.coefficients[0]

    @property
    def limb_quadratic(self):
        return self._limb.coefficients[1]

    @property
    def limb(self):
        return self._limb

    @property
    def grid_size(self):
        return self._grid_size

    @property
    def flux_quiet(self):
        """Disk-integrated intensity of the quiet star, the normalization for every flux"""
        return self._flux_quiet

    @property
    def zero_rv(self):
        """Fitted line centroid of the quiet star, m/s, subtracted from every velocity measurement"""
        return self._zero_rv

    @property
    def equatorial_velocity(self):
        """Projected equatorial velocity, v sin(i), m/s"""
        return self._equatorial_velocity

    @property
    def integrated_ccf(self):
        return self._integrated_ccf

    @property
    def fit_result(self) -> GaussianFit:
        return self._fit_result

    @property
    def profile_quiet(self):
        return self._profile_quiet

    @property
    def profile_active(self):
        return self._profile_active

    # ------------------------------------------------------------------------------------------------------------ #
    def __repr__(self):
        return ("StellarDisk(period={}, inclination={}, temperature={}, limb_linear={}, limb_quadratic={}, "
                "grid_size={})".format(self._period, self._inclination, self._temperature,
                                       self.limb_linear, self.limb_quadratic, self._grid_size))
