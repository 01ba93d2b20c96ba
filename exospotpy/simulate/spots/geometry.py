"""
This module provides the projected geometry of a circular region on the visible stellar disk.

Disk coordinates are in units of the stellar radius: x points at the observer, y lies along the
rotational velocity gradient (receding for y > 0), and z is the projected rotation axis.
"""

import numpy as np

__all__ = ['Bounds', 'BoundingShape', 'region_center_vector']

# ++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++ #


class Bounds:
    """A closed interval [lower, upper]"""
    __slots__ = ('lower', 'upper')

    def __init__(self, lower: float, upper: float):
        self.lower = lower
        self.upper = upper

    @property
    def width(self):
        return self.upper - self.lower

    def __repr__(self):
        return "Bounds({}, {})".format(self.lower, self.upper)

    def __eq__(self, other):
        return isinstance(other, Bounds) and self.lower == other.lower and self.upper == other.upper


def region_center_vector(latitude: float, longitude: float, inclination: float) -> np.ndarray:
    """Unit vector to a point on the star, in disk coordinates

    Parameters
    ----------
    latitude
        Stellar latitude of the point, radians
    longitude
        Stellar longitude of the point (including rotation), radians, 0 faces the observer
    inclination
        Angle between the rotation axis and the line of sight, radians, 0 is pole-on

    Returns
    -------
    np.ndarray
        (x, y, z)
    """
    cos_lat = np.cos(latitude)
    sin_lat = np.sin(latitude)
    return np.array((cos_lat * np.cos(longitude) * np.sin(inclination) + sin_lat * np.cos(inclination),
                     cos_lat * np.sin(longitude),
                     sin_lat * np.sin(inclination) - cos_lat * np.cos(longitude) * np.cos(inclination)))


# ++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++ #


class BoundingShape:
    def __init__(self, active_region, time: float):
        """Scan bounds of a spherical cap projected onto the visible disk

        The cap is every point of the surface within an angle active_region.radius of the region center.

        Parameters
        ----------
        active_region
            ActiveRegion whose outline is scanned
        time
            Time in days, sets the rotation of the region
        """
        star = active_region.star
        longitude = np.deg2rad(active_region.longitude + 360. * time / star.period)
        self._center = region_center_vector(np.deg2rad(active_region.latitude), longitude, star.inclination)
        self._radius = active_region.radius
        self._cos_radius = np.cos(self._radius)

    # ------------------------------------------------------------------------------------------------------------ #
    @property
    def center(self):
        return self._center

    @property
    def visible(self) -> bool:
        """False when the whole cap is behind the limb"""
        return self._center[0] > -np.sin(min(self._radius, np.pi / 2))

    # ------------------------------------------------------------------------------------------------------------ #
    def y_bounds(self):
        """Range of y covered by the cap

        Returns
        -------
        Bounds or None
            None if the cap cannot be seen
        """
        if not self.visible:
            return None
        angle_to_y = np.arccos(np.clip(self._center[1], -1., 1.))
        upper = np.cos(max(angle_to_y - self._radius, 0.))
        lower = np.cos(min(angle_to_y + self._radius, np.pi))
        return Bounds(float(lower), float(upper))

    def z_bounds(self, y: float) -> list:
        """Visible z intervals of the cap along the chord at y

        Parameters
        ----------
        y
            Chord position

        Returns
        -------
        list
            Bounds, ordered by z, empty if the chord misses the cap
        """
        rho_sq = 1. - y * y
        if rho_sq <= 0:
            return []
        rho = np.sqrt(rho_sq)
        c_x, c_y, c_z = self._center
        # Along the chord, x = rho*cos(theta), z = rho*sin(theta), theta in [-pi/2, pi/2]
        # and the cap condition reads amplitude*cos(theta - phase) >= threshold
        amplitude = rho * np.hypot(c_x, c_z)
        threshold = self._cos_radius - c_y * y
        if amplitude <= np.finfo(float).eps:
            return [Bounds(-rho, rho)] if threshold <= 0 else []
        if threshold > amplitude:
            return []
        if threshold <= -amplitude:
            return [Bounds(-rho, rho)]
        phase = np.arctan2(c_z, c_x)
        half_width = np.arccos(threshold / amplitude)
        all_bounds = []
        for shift in (-2 * np.pi, 0., 2 * np.pi):
            lower = max(phase - half_width + shift, -np.pi / 2)
            upper = min(phase + half_width + shift, np.pi / 2)
            if upper > lower:
                all_bounds.append(Bounds(float(rho * np.sin(lower)), float(rho * np.sin(upper))))
        all_bounds.sort(key=lambda b: b.lower)
        return all_bounds
