
"""
Python package for simulating the flux, radial velocity, and line bisector of spotted, rotating stars.
"""

from . import analyze
from . import simulate
from . import utils
from . import visualize
from . import io
