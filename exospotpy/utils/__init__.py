"""
This subpackage provides utility functions useful throughout ExoSpotPy.

All functions and classes in this subpackage are designed to be safe for use by the other packages.
"""

from .astropyio import *
from .constants import *
from .math_operations import *
