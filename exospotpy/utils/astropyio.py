"""
This module provides interfaces for simplifying interactions with astropy objects.
"""

import warnings
from astropy import units as u
from astropy.utils.exceptions import AstropyUserWarning

__all__ = ['u_labelstr', 'to_quantity', 'cast_to_unit']


# ++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++ #
# Presentation and print support
def u_labelstr(quantity: u.Quantity,
               add_parentheses: bool=False) -> str:
    """Extracts label from a quantity, then converts it to a latex_inline string for plot labels

    Optionally, can add parentheses around the unit (just a shortcut, cuz you're gonna want them anyway)

    Parameters
    ----------
    quantity
        An astropy quantity
    add_parentheses
        Optionally add parentheses around the quantity, e.g., (m/s) instead of m/s

    Returns
    -------
    str
        String derived from the quantity unit
    """
    if isinstance(quantity, u.Quantity):
        if add_parentheses:
            return "("+quantity.unit.to_string('latex_inline')+")"
        else:
            return quantity.unit.to_string('latex_inline')
    else:
        return ""


# ++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++ #
# Import support
def to_quantity(val_unit_tuple: tuple) -> u.Quantity:
    """Helps import values with specific units, typically from external or config files

    Parameters
    ----------
    val_unit_tuple
        (value, unit) to be converted into an astropy Quantity

    Returns
    -------
    u.Quantity
    """
    try:
        val, unit = val_unit_tuple
    except TypeError:
        raise TypeError("Cannot unpack unit, must be in form (value, unit)")
    return u.Quantity(val, unit)


def cast_to_unit(value, unit: u.UnitBase, name: str, equivalencies=None) -> float:
    """Strip a value down to a float in the requested unit

    Quantities are converted, anything else is assumed to already be in `unit` and a warning is raised,
    the same way the StellarDisk properties treat bare numbers.

    Parameters
    ----------
    value
        Quantity or number
    unit
        Unit the float is expressed in
    name
        Name used in the warning message
    equivalencies
        Optional astropy equivalencies, e.g. u.spectral()

    Returns
    -------
    float
    """
    if isinstance(value, u.Quantity):
        return value.to(unit, equivalencies=equivalencies).value
    warnings.warn("Casting " + name + ", input as " + str(value) + ", to " + str(unit), AstropyUserWarning)
    return float(value)
