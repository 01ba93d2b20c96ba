
"""
This generates a template that includes (hopefully) all relevant simulation parameters.
The template can be loaded with exospotpy.io.load_simulation.

The template values reproduce the Sun, in the spirit of the SOAP 2.0 configs.

Can be initialized from command line to provide a working folder and a filename

"""

import configparser
import sys
import os

from pathlib import Path, PurePath


__all__ = ["create_simulation_template"]


# ++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++ #
# Star parameters
star_parameters = {
    "grid_resolution": 1000,  # Number of chords across the disk
    "radius": 1.0,  # Rsun
    "period": 25.05,  # days, equatorial rotation period
    "inclination": 90.0,  # degrees, 0 is pole-on
    "Tstar": 5778,  # K
    "Tdiff_spot": 663,  # K, Meunier et al. 2010
    "limb1": 0.29,  # Claret & Bloemen 2011, Oshagh et al. 2013
    "limb2": 0.34,
    "fillfactor": 0.0,  # Try to maintain this fill factor by randomly generating spots
    "spot_lifetime": 15.0,  # days, for randomly generated spots
}


# ++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++ #
# Manually placed spots, present at all times unless time_appear / time_disappear are given
spot_parameters = [
    {"latitude": 30.0, "longitude": 180.0, "size": 0.01, "plage": False},
    {"latitude": -30.0, "longitude": 180.0, "size": 0.01, "plage": False},
    {"latitude": 0.0, "longitude": 0.0, "size": 0.01, "plage": False,
     "time_appear": 20.0, "time_disappear": 50.0},
]


# ++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++ #
def create_simulation_template(folder: (str, Path),
                               filename: (str, PurePath)) -> Path:
    """Generates a simulation template file in folder with name filename

    Parameters
    ----------
    folder
        Location to generate the template
    filename
        Filename for the template

    Returns
    -------
    Path
        Location of the new file
    """
    folder = Path(folder)
    if not folder.exists():
        os.mkdir(folder)

    filename = PurePath(filename)
    if filename.suffix == "":
        filename = filename.with_suffix(".cfg")

    config = configparser.ConfigParser()
    config.optionxform = str
    config["star"] = {k: str(v) for k, v in star_parameters.items()}
    for s_i, spot in enumerate(spot_parameters):
        config["spot" + str(s_i + 1)] = {k: str(v) for k, v in spot.items()}

    with open(folder/filename, 'w') as config_file:
        config.write(config_file)
    return folder/filename


# ++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++ #

if __name__ == "__main__":
    init_args = sys.argv
    working_folder = Path(init_args[1]) if len(init_args) > 1 else Path.cwd()
    output_file_name = PurePath(init_args[2]) if len(init_args) > 2 else PurePath("simulation_template.cfg")
    print("Generating template at: ", working_folder/output_file_name)
    create_simulation_template(working_folder, output_file_name)
