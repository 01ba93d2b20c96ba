
"""
This submodule contains active regions (spots and plages) and their projected geometry.
"""

from .geometry import *
from .active_regions import *
