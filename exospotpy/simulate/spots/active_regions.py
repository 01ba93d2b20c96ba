"""
This module provides the ActiveRegion class, a spot or plage on the surface of a StellarDisk.
"""

import numpy as np
from astropy import units as u

from .geometry import *
from ..spectral.spectral_math import relative_intensity
from ...utils.constants import *

__all__ = ['ActiveRegion']

# ++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++ #

# Every region is scanned with at least this many chords, even when it is smaller than the disk grid
min_region_chords = 10


class ActiveRegion:
    """Transient circular feature on the stellar surface, darker (spot) or brighter (plage) than the photosphere."""
    def __init__(self,
                 star,
                 latitude,
                 longitude,
                 size: float,
                 plage: bool=False,
                 time_appear=-np.inf,
                 time_disappear=np.inf,
                 intensity: float=None):
        """

        Parameters
        ----------
        star
            StellarDisk the region lives on, shared and never modified
        latitude
            Stellar latitude, degrees if a float
        longitude
            Stellar longitude at t=0, degrees if a float
        size
            Fraction of the visible hemisphere covered by the region
        plage
            True for a bright region, False for a dark spot
        time_appear
            First time (days) the region is alive
        time_disappear
            The region is alive strictly before this time (days)
        intensity
            Band radiance relative to the photosphere.
            If None, computed for the visible band.
        """
        if size < 0:
            raise ValueError("size must be non-negative")
        self._star = star
        self._latitude = self._to_degrees(latitude)
        self._longitude = self._to_degrees(longitude)
        self._size = float(size)
        self._radius = np.sqrt(2 * self._size)
        self._plage = bool(plage)
        self.time_appear = self._to_days(time_appear)
        self.time_disappear = self._to_days(time_disappear)

        if self._plage:
            self._temperature = star.temperature + star.spot_temp_diff
        else:
            self._temperature = star.temperature - star.spot_temp_diff

        if intensity is None:
            self.intensity = relative_intensity(self._temperature, star.temperature, *visible_band)
        else:
            self.intensity = intensity

    @staticmethod
    def _to_degrees(angle) -> float:
        if isinstance(angle, u.Quantity):
            return angle.to(u.deg).value
        return float(angle)

    @staticmethod
    def _to_days(time) -> float:
        if isinstance(time, u.Quantity):
            return time.to(lw_time_unit).value
        return float(time)

    # ------------------------------------------------------------------------------------------------------------ #
    @property
    def star(self):
        return self._star

    @property
    def latitude(self):
        """Latitude in degrees"""
        return self._latitude

    @property
    def longitude(self):
        """Longitude at t=0 in degrees"""
        return self._longitude

    @property
    def size(self):
        return self._size

    @property
    def radius(self):
        """Angular radius of the region, radians"""
        return self._radius

    @property
    def fill_factor(self):
        """Fraction of the visible hemisphere covered by the region"""
        return self._radius * self._radius / 2

    @property
    def plage(self):
        return self._plage

    @property
    def temperature(self):
        return self._temperature

    # ------------------------------------------------------------------------------------------------------------ #
    def alive(self, time: float) -> bool:
        return self.time_appear <= time < self.time_disappear

    def overlaps_window(self, other: 'ActiveRegion') -> bool:
        """True if the two lifetime windows share any time"""
        return other.time_appear < self.time_disappear and self.time_appear < other.time_disappear

    def collides_with(self, other: 'ActiveRegion') -> bool:
        """True if the two regions overlap on the stellar surface

        Both regions rotate rigidly with the star, so the separation is the same at all times.
        """
        lat1, lat2 = np.deg2rad(self._latitude), np.deg2rad(other.latitude)
        d_lat = lat2 - lat1
        d_long = np.deg2rad(other.longitude - self._longitude)
        # Haversine, well behaved for the small separations that matter here
        hav = np.sin(d_lat / 2) ** 2 + np.cos(lat1) * np.cos(lat2) * np.sin(d_long / 2) ** 2
        separation = 2 * np.arcsin(np.sqrt(np.clip(hav, 0., 1.)))
        return separation < self._radius + other.radius

    # ------------------------------------------------------------------------------------------------------------ #
    def _chords(self, time: float):
        """Chord positions across the projected region, with the weight that puts them on the disk grid"""
        bounds = BoundingShape(self, time)
        y_bounds = bounds.y_bounds()
        if y_bounds is None or y_bounds.width <= 0:
            return bounds, np.array([]), 0.
        grid_step = 2. / self._star.grid_size
        num_chords = max(int(np.ceil(y_bounds.width / grid_step)), min_region_chords)
        dy = y_bounds.width / num_chords
        y_values = y_bounds.lower + dy * (np.arange(num_chords) + .5)
        return bounds, y_values, dy / grid_step

    def get_flux(self, time: float) -> float:
        """Flux removed from (or, for plages, added to) the quiet disk at the given time

        Same normalization as StellarDisk.flux_quiet.

        Parameters
        ----------
        time
            Days

        Returns
        -------
        float
        """
        if not self.alive(time):
            return 0.
        bounds, y_values, weight = self._chords(time)
        limb_sum = 0.
        for y in y_values:
            for z_bounds in bounds.z_bounds(y):
                limb_sum += self._star.limb_integral(z_bounds, y)
        return (1. - self.intensity) * limb_sum * weight

    def get_ccf(self, time: float) -> np.ndarray:
        """Line profile removed from the quiet disk at the given time

        The quiet profile the region hides is replaced by the active profile scaled by the region intensity.

        Parameters
        ----------
        time
            Days

        Returns
        -------
        np.ndarray
            Same length as the star's reference profiles
        """
        profile = np.zeros(len(self._star.profile_active))
        if not self.alive(time):
            return profile
        bounds, y_values, weight = self._chords(time)
        velocity = self._star.equatorial_velocity
        for y in y_values:
            limb_sum = 0.
            for z_bounds in bounds.z_bounds(y):
                limb_sum += self._star.limb_integral(z_bounds, y)
            if limb_sum == 0:
                continue
            shifted = (self._star.profile_quiet.shift(y * velocity)
                       - self.intensity * self._star.profile_active.shift(y * velocity))
            profile += shifted * limb_sum * weight
        return profile

    # ------------------------------------------------------------------------------------------------------------ #
    def __repr__(self):
        return ("ActiveRegion(latitude={}, longitude={}, size={}, plage={}, time_appear={}, time_disappear={})"
                .format(self._latitude, self._longitude, self._size, self._plage,
                        self.time_appear, self.time_disappear))
