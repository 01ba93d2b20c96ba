"""
This module provides tools for importing simulation config files and generating Simulators
"""

import configparser

from pathlib import Path
from exospotpy.utils import astropyio
from exospotpy.simulate import *


__all__ = ["ConfigError", "load_simulation", "SimulationGenerator"]


# ++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++ #
# (config key, parameter name, type, unit)
star_fields = [("radius", "radius", float, "R_sun"),
               ("period", "period", float, "d"),
               ("inclination", "inclination", float, "deg"),
               ("Tstar", "temperature", float, "K"),
               ("Tdiff_spot", "spot_temp_diff", float, "K"),
               ("limb1", "limb_linear", float, None),
               ("limb2", "limb_quadratic", float, None),
               ("fillfactor", "dynamic_fill_factor", float, None),
               ("grid_resolution", "grid_size", int, None)]

optional_star_fields = [("spot_lifetime", "spot_lifetime", float, "d"),
                        ("seed", "seed", int, None),
                        ("ccf_file", "ccf_file", str, None)]

spot_fields = [("latitude", "latitude", float, "deg"),
               ("longitude", "longitude", float, "deg"),
               ("size", "size", float, None),
               ("plage", "plage", bool, None)]

optional_spot_fields = [("time_appear", "time_appear", float, "d"),
                        ("time_disappear", "time_disappear", float, "d")]


class ConfigError(ValueError):
    """One or more problems in a config file, all of them are listed in errors"""
    def __init__(self, errors: list):
        self.errors = list(errors)
        super().__init__("One or more errors loading config file:\n" + "\n".join(self.errors))


# ++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++ #
def load_simulation(file_path: (str, Path), **kwargs) -> Simulator:
    """Read a config file and build the Simulator it describes

    Parameters
    ----------
    file_path
        INI file with a [star] section and any number of [spot...] sections
    kwargs
        Passed on to Simulator, e.g., num_workers

    Returns
    -------
    Simulator
    """
    return SimulationGenerator(file_path).gen_simulation(**kwargs)


class SimulationGenerator(dict):
    def __init__(self, file_path: (str, Path)):
        """Import a simulation from an INI file

        Every field is read before anything is built, so all problems in the file are reported at once.

        Keys
        ----------
        'star_parameters'
        'spot_parameters'

        Parameters
        ----------
        file_path
            Location to load the simulation from
        """
        super().__init__()
        self._file_path = Path(file_path)
        parser = configparser.ConfigParser(inline_comment_prefixes=('#', ';'))
        try:
            files_read = parser.read(str(self._file_path))
        except configparser.Error as err:
            raise ConfigError(["Could not parse config file " + str(self._file_path) + ": " + str(err)])
        if not files_read:
            raise ConfigError(["Could not open config file " + str(self._file_path)])
        if not parser.has_section("star"):
            raise ConfigError(["Missing section star in config file " + str(self._file_path)])

        errors = []
        self["star_parameters"] = self._read_section(parser, "star", star_fields, optional_star_fields, errors)
        grid_size = self["star_parameters"].get("grid_size")
        if grid_size is not None and grid_size <= 0:
            errors.append("Field grid_resolution of section star in config file "
                          + str(self._file_path) + " must be positive")

        self["spot_parameters"] = [self._read_section(parser, section, spot_fields, optional_spot_fields, errors)
                                   for section in parser.sections() if section.startswith("spot")]
        if len(errors) > 0:
            raise ConfigError(errors)

    # ------------------------------------------------------------------------------------------------------------ #
    def _read_section(self, parser, section, fields, optional_fields, errors) -> dict:
        values = {}
        for key, name, _type, unit in fields:
            if not parser.has_option(section, key):
                errors.append("Missing field " + key + " of section " + section
                              + " in config file " + str(self._file_path))
                continue
            self._read_field(parser, section, key, name, _type, unit, values, errors)
        for key, name, _type, unit in optional_fields:
            if parser.has_option(section, key):
                self._read_field(parser, section, key, name, _type, unit, values, errors)
        return values

    def _read_field(self, parser, section, key, name, _type, unit, values, errors):
        try:
            if _type is bool:
                val = parser.getboolean(section, key)
            elif _type is int:
                val = parser.getint(section, key)
            elif _type is float:
                val = parser.getfloat(section, key)
            else:
                val = parser.get(section, key)
        except ValueError:
            errors.append("Cannot parse field " + key + " of section " + section
                          + " in config file " + str(self._file_path))
            return
        if unit is not None:
            val = astropyio.to_quantity((val, unit))
        values[name] = val

    # ------------------------------------------------------------------------------------------------------------ #
    def gen_star(self) -> StellarDisk:
        """Generates the StellarDisk requested"""
        params = self["star_parameters"]
        profile_quiet, profile_active = None, None
        if "ccf_file" in params:
            ccf_path = Path(params["ccf_file"])
            if not ccf_path.is_absolute():
                ccf_path = self._file_path.parent / ccf_path
            profile_quiet, profile_active = load_ccf_table(ccf_path)
        return StellarDisk(radius=params["radius"],
                           period=params["period"],
                           inclination=params["inclination"],
                           temperature=params["temperature"],
                           spot_temp_diff=params["spot_temp_diff"],
                           limb_linear=params["limb_linear"],
                           limb_quadratic=params["limb_quadratic"],
                           grid_size=params["grid_size"],
                           profile_quiet=profile_quiet,
                           profile_active=profile_active)

    def gen_active_regions(self, star: StellarDisk) -> list:
        """Generates the statically placed regions, alive for the whole run unless the file gives a lifetime"""
        return [ActiveRegion(star, **spot) for spot in self["spot_parameters"]]

    def gen_simulation(self, **kwargs) -> Simulator:
        star = self.gen_star()
        params = self["star_parameters"]
        sim_kwargs = {"dynamic_fill_factor": params["dynamic_fill_factor"]}
        if "spot_lifetime" in params:
            sim_kwargs["spot_lifetime"] = params["spot_lifetime"]
        if "seed" in params:
            sim_kwargs["seed"] = params["seed"]
        sim_kwargs.update(kwargs)
        return Simulator(star, active_regions=self.gen_active_regions(star), **sim_kwargs)
