
"""
This subpackage provides functionality for simulating rotating stars with spots and plages.
It contains the quiet star model, active regions, line profiles, and the Simulator that observes them.
"""

from .spectral import *
from .spots import *

from .limbs import *
from .stars import *
from .simulation import *
