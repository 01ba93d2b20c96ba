"""
This module provides the Simulator, which maintains a population of active regions on a StellarDisk
and observes its flux, radial velocity, and line bisector over time.
"""

import warnings
import threading
from collections import namedtuple

import numpy as np
from scipy import stats
from astropy import units as u
from astropy.utils.exceptions import AstropyUserWarning

from .stars import StellarDisk
from .spots import *
from .spectral.spectral_math import relative_intensity
from ..analyze.line_fitting import fit_rv
from ..analyze.bisector import compute_bisector
from ..utils import *

__all__ = ['Observation', 'Simulator', 'image_size']

# ++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++ #

Observation = namedtuple('Observation', ['rv', 'bisector'])
Observation.__doc__ = """An observed radial velocity (m/s) and line bisector (m/s)"""

# Side length, in pixels, of the square image filled by draw_rgba
image_size = 1000

# Sizes of randomly generated regions: log-normal fill factors, scaled, with the largest ones rejected
_size_scale = 9.4e-6
_size_cutoff = 0.001


class Simulator:
    """A star with spots that can be observed."""

    # ------------------------------------------------------------------------------------------------------------ #
    def __init__(self,
                 star: StellarDisk,
                 active_regions: list=None,
                 dynamic_fill_factor: float=0.,
                 spot_lifetime: u.Quantity=15.,
                 seed: int=None,
                 num_workers: int=None,
                 max_attempts: int=100000):
        """

        Parameters
        ----------
        star
            The quiet star, shared with every active region
        active_regions
            Optional regions present from the start, e.g., from a config file
        dynamic_fill_factor
            Fraction of the visible hemisphere kept covered by randomly generated spots
        spot_lifetime
            Lifetime of randomly generated spots, days if a float
        seed
            Seed of the random generator, None for a fresh one
        num_workers
            Number of threads used by the observation pipelines, defaults to one less than the number of cores
        max_attempts
            Maximum number of draws per call when placing random spots
        """
        if not isinstance(star, StellarDisk):
            raise TypeError("star must be a StellarDisk instance")
        self._star = star
        self._active_regions = []
        self._dynamic_fill_factor = float(dynamic_fill_factor)
        if isinstance(spot_lifetime, u.Quantity):
            self._spot_lifetime = spot_lifetime.to(lw_time_unit).value
        else:
            self._spot_lifetime = float(spot_lifetime)
        self._num_workers = num_workers
        self._max_attempts = int(max_attempts)

        self._generator = np.random.default_rng(seed)
        self._generator_lock = threading.Lock()
        self._generator_poisoned = False

        self._size_pdf = stats.lognorm(s=4.0, scale=np.exp(0.5))
        self._latitude_pdf = stats.uniform(loc=-30., scale=60.)
        self._longitude_pdf = stats.uniform(loc=0., scale=360.)

        self._band = None
        self._intensity_cache = {}
        self._set_band(*visible_band)

        if active_regions is not None:
            self.add_active_regions(*active_regions)

    # ------------------------------------------------------------------------------------------------------------ #
    @classmethod
    def from_config(cls, file_path, **kwargs) -> 'Simulator':
        """Build a Simulator from an INI config file, see exospotpy.io.load_simulation"""
        from ..io.loaders import load_simulation
        return load_simulation(file_path, **kwargs)

    # ------------------------------------------------------------------------------------------------------------ #
    @property
    def star(self):
        return self._star

    @property
    def active_regions(self) -> tuple:
        return tuple(self._active_regions)

    @property
    def dynamic_fill_factor(self):
        return self._dynamic_fill_factor

    @property
    def spot_lifetime(self):
        return self._spot_lifetime

    @property
    def band(self):
        """(band_min, band_max) in m that region intensities are currently computed for"""
        return self._band

    def add_active_regions(self, *active_regions: ActiveRegion):
        """Add active region(s) to the simulation

        Parameters
        ----------
        active_regions
            ActiveRegion(s) on this simulation's star
        """
        for ar in active_regions:
            if not isinstance(ar, ActiveRegion):
                raise TypeError("Active regions must be ActiveRegion class instance")
            if ar.star is not self._star:
                raise ValueError("Active region belongs to a different StellarDisk")
            ar.intensity = self._region_intensity(ar.temperature)
            self._active_regions.append(ar)

    def alive_regions(self, time: float) -> list:
        return [ar for ar in self._active_regions if ar.alive(time)]

    def fill_factor(self, time: float) -> float:
        """Fraction of the visible hemisphere covered by the regions alive at time"""
        return sum(ar.fill_factor for ar in self._active_regions if ar.alive(time))

    # ------------------------------------------------------------------------------------------------------------ #
    def _set_band(self, band_min, band_max):
        """Recompute region intensities if the band changed"""
        if isinstance(band_min, u.Quantity):
            band_min = band_min.to(lw_wavelength_unit, equivalencies=u.spectral()).value
        if isinstance(band_max, u.Quantity):
            band_max = band_max.to(lw_wavelength_unit, equivalencies=u.spectral()).value
        band_min, band_max = float(band_min), float(band_max)
        if band_max <= band_min:
            raise ValueError("band_max must be larger than band_min")
        if self._band == (band_min, band_max):
            return
        self._band = (band_min, band_max)
        self._intensity_cache = {}
        for ar in self._active_regions:
            ar.intensity = self._region_intensity(ar.temperature)

    def _region_intensity(self, temperature: float) -> float:
        if temperature not in self._intensity_cache:
            self._intensity_cache[temperature] = relative_intensity(temperature, self._star.temperature,
                                                                    *self._band)
        return self._intensity_cache[temperature]

    # ------------------------------------------------------------------------------------------------------------ #
    def _draw_size(self) -> float:
        for _ in range(self._max_attempts):
            size = self._size_pdf.rvs(random_state=self._generator) * _size_scale
            if size < _size_cutoff:
                return size
        raise RuntimeError("Could not draw a region size below " + str(_size_cutoff)
                           + " in " + str(self._max_attempts) + " attempts")

    def check_fill_factor(self, time: float):
        """Add random spots until the regions alive at time cover the dynamic fill factor

        New spots appear at time and live for spot_lifetime.
        A candidate is discarded if it touches any region whose lifetime overlaps its own.

        Parameters
        ----------
        time
            Days
        """
        with self._generator_lock:
            current_fill_factor = self.fill_factor(time)
            if current_fill_factor >= self._dynamic_fill_factor:
                return
            if self._generator_poisoned:
                raise RuntimeError("Simulation RNG lock was poisoned by an earlier failure")
            try:
                attempts = 0
                while current_fill_factor < self._dynamic_fill_factor:
                    if attempts >= self._max_attempts:
                        warnings.warn("Gave up placing spots at time " + str(time) + " after "
                                      + str(attempts) + " attempts, fill factor is "
                                      + str(current_fill_factor), AstropyUserWarning)
                        break
                    attempts += 1

                    new_region = ActiveRegion(self._star,
                                              latitude=self._latitude_pdf.rvs(random_state=self._generator),
                                              longitude=self._longitude_pdf.rvs(random_state=self._generator),
                                              size=self._draw_size(),
                                              plage=False,
                                              time_appear=time,
                                              time_disappear=time + self._spot_lifetime,
                                              intensity=self._region_intensity(self._star.temperature
                                                                               - self._star.spot_temp_diff))

                    collides = any(new_region.collides_with(ar) for ar in self._active_regions
                                   if new_region.overlaps_window(ar))
                    if not collides:
                        current_fill_factor += new_region.fill_factor
                        self._active_regions.append(new_region)
            except BaseException:
                self._generator_poisoned = True
                raise

    # ------------------------------------------------------------------------------------------------------------ #
    def _prepare(self, time, band_min, band_max) -> np.ndarray:
        """Set the band, then grow the region population for every time, in order"""
        if isinstance(time, u.Quantity):
            times = np.atleast_1d(time.to(lw_time_unit).value).astype(float)
        else:
            times = np.atleast_1d(np.asarray(time, dtype=float))
        self._set_band(band_min, band_max)
        # Growth runs once per distinct time, in the order the times were given
        for t in dict.fromkeys(times.tolist()):
            self.check_fill_factor(t)
        return times

    def observe_flux(self,
                     time,
                     band_min,
                     band_max) -> np.ndarray:
        """Relative brightness of the star at each time, observed between band_min and band_max

        Parameters
        ----------
        time
            Days if not a Quantity
        band_min
            Lower wavelength, m if a float
        band_max
            Upper wavelength, m if a float

        Returns
        -------
        np.ndarray
            Flux relative to the quiet star, one value per time
        """
        times = self._prepare(time, band_min, band_max)
        regions = tuple(self._active_regions)
        flux_quiet = self._star.flux_quiet

        def flux_at(t):
            region_flux = sum(ar.get_flux(t) for ar in regions if ar.alive(t))
            return (flux_quiet - region_flux) / flux_quiet

        return np.array(ordered_thread_map(flux_at, times, num_workers=self._num_workers), dtype=float)

    def observe_rv(self,
                   time,
                   band_min,
                   band_max) -> list:
        """Radial velocity and line bisector of the star at each time, observed between band_min and band_max

        Parameters
        ----------
        time
            Days if not a Quantity
        band_min
            Lower wavelength, m if a float
        band_max
            Upper wavelength, m if a float

        Returns
        -------
        list
            One Observation per time, velocities in m/s relative to the quiet star
        """
        times = self._prepare(time, band_min, band_max)
        regions = tuple(self._active_regions)
        star = self._star

        def rv_at(t):
            region_profile = np.zeros(len(star.profile_active))
            for ar in regions:
                if ar.alive(t):
                    region_profile += ar.get_ccf(t)
            net_profile = star.integrated_ccf - region_profile

            rv = fit_rv(star.profile_quiet.rv, net_profile) - star.zero_rv
            bisector = compute_bisector(star.profile_quiet.rv, normalize(net_profile)) - star.zero_rv
            return Observation(rv=rv, bisector=bisector)

        return ordered_thread_map(rv_at, times, num_workers=self._num_workers)

    # ------------------------------------------------------------------------------------------------------------ #
    @staticmethod
    def new_image() -> np.ndarray:
        """Blank row-major RGBA buffer for draw_rgba"""
        return np.zeros(image_size * image_size * 4, dtype=np.uint8)

    def draw_rgba(self, time: float, image):
        """Draw the active regions as they would be seen in the visible band, 4000-7000 Angstroms

        Pixels outside of active regions are left untouched.  Where regions share a pixel, the last one drawn wins.

        Parameters
        ----------
        time
            Days
        image
            Writable row-major RGBA buffer of image_size x image_size pixels, e.g., from new_image()
        """
        if isinstance(image, np.ndarray):
            pixels = image.reshape(-1)
            if not np.shares_memory(pixels, image):
                raise ValueError("image must be a contiguous array")
        else:
            pixels = np.frombuffer(image, dtype=np.uint8)
        if pixels.size != image_size * image_size * 4:
            raise ValueError("image must hold " + str(image_size) + "x" + str(image_size) + " RGBA pixels")

        if isinstance(time, u.Quantity):
            time = time.to(lw_time_unit).value
        self._set_band(*visible_band)
        self.check_fill_factor(time)

        grid_interval = 2. / self._star.grid_size
        max_index = image_size - 1

        # The image is row-major, but regions are walked column by column to follow the rotation
        for ar in self.alive_regions(time):
            bounds = BoundingShape(ar, time)
            y_bounds = bounds.y_bounds()
            if y_bounds is None:
                continue
            for y in floatrange(np.round(y_bounds.lower / grid_interval) * grid_interval,
                                np.round(y_bounds.upper / grid_interval) * grid_interval,
                                grid_interval):
                y_index = int(np.clip(np.floor((y + 1.) / 2. * max_index + .5), 0, max_index))
                for z_bounds in bounds.z_bounds(y):
                    z_values = floatrange(np.round(z_bounds.lower / grid_interval) * grid_interval,
                                          np.round(z_bounds.upper / grid_interval) * grid_interval,
                                          grid_interval)
                    if len(z_values) == 0:
                        continue
                    mu = np.sqrt(np.clip(1. - (y * y + z_values * z_values), 0., None))
                    intensity = self._star.limb_brightness(mu) * ar.intensity
                    z_index = np.clip(np.floor((-z_values + 1.) / 2. * max_index + .5), 0, max_index).astype(int)
                    index = 4 * (z_index * image_size + y_index)
                    pixels[index] = np.clip(intensity * 255., 0, 255).astype(np.uint8)
                    pixels[index + 1] = np.clip(intensity * 131., 0, 255).astype(np.uint8)
                    pixels[index + 2] = 0
                    pixels[index + 3] = 255
