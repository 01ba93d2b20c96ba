"""
This subpackage provides tools for reading and writing simulation config files.
"""

from .loaders import *
from .system_template import *
