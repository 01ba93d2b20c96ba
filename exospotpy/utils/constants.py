"""
The handful of physical scales and default units the disk model is built on.
"""

from astropy import units as u

__all__ = ['lw_time_unit', 'lw_wavelength_unit', 'lw_angle_unit', 'lw_temperature_unit',
           'solar_radius_m', 'day_s', 'visible_band']

# ++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++ #


# Base units, often used in lightweight (lw) calculations
lw_time_unit = u.d
lw_wavelength_unit = u.m
lw_angle_unit = u.deg
lw_temperature_unit = u.K


# Unitless scale factors used inside the hot loops
solar_radius_m = u.R_sun.to(u.m)
day_s = u.d.to(u.s)

# Band used to render the disk, 4000-7000 Angstroms
visible_band = (4000e-10, 7000e-10)
