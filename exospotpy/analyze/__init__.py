"""
This subpackage provides tools for measuring line profiles: Gaussian fits for radial velocity, and line bisectors.
"""

from .line_fitting import *
from .bisector import *
