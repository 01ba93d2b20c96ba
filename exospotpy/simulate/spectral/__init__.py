
"""
This submodule provides line profiles, band definitions, and radiometry.
"""

from .spectral_dicts import *
from .profiles import *
from .spectral_math import *
