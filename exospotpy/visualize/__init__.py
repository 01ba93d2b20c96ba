"""
This subpackage provides standardized plotting tools for ExoSpotPy.

Typically, the plotting tools are tailored for specific visuals, but are designed to be modular.
"""

from .disk_plots import *
from .lightcurve_plots import *
