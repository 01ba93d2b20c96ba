"""Observe the light curve, radial velocity, and bisector span of a spotted Sun."""

from pathlib import Path

import numpy as np
import matplotlib.pyplot as plt
from astropy import units as u

from exospotpy.simulate import *
from exospotpy.visualize import *


# ++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++ #


def run_static():
    simulator = Simulator.from_config(Path(__file__).parent / "sun.cfg")
    print("Loaded star: ", simulator.star)
    for ar in simulator.active_regions:
        print("  ", ar)

    time_domain = np.linspace(0., 50., 201) * u.d
    band_min, band_max = band_limits('V')

    flux = simulator.observe_flux(time_domain, band_min, band_max)
    observations = simulator.observe_rv(time_domain, band_min, band_max)
    plot_flux_rv(time_domain, flux, observations)

    render_disk(simulator, 25.)

    #  ^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^  #
    # The spot contrast, and so the signal amplitude, shrinks toward the red
    fig, ax = plt.subplots(figsize=(8, 5))
    for band, color in zip(['B', 'V', 'R', 'I'], ['b', 'g', 'r', 'darkred']):
        ax.plot(time_domain, simulator.observe_flux(time_domain, *band_limits(band)), color=color, lw=1,
                label=band)
    ax.set_xlabel("Time (d)")
    ax.set_ylabel("Relative flux")
    ax.legend()
    plt.show()


def run_dynamic():
    star = StellarDisk(radius=1. * u.R_sun,
                       period=25.05 * u.d,
                       inclination=60. * u.deg,
                       temperature=5778 * u.K,
                       spot_temp_diff=663 * u.K,
                       limb_linear=0.29,
                       limb_quadratic=0.34,
                       grid_size=400)
    simulator = Simulator(star, dynamic_fill_factor=0.01, spot_lifetime=15 * u.d, seed=17)

    time_domain = np.linspace(0., 100., 401)
    flux = simulator.observe_flux(time_domain, 4000 * u.AA, 7000 * u.AA)
    observations = simulator.observe_rv(time_domain, 4000 * u.AA, 7000 * u.AA)
    print("Spots generated: ", len(simulator.active_regions))
    plot_flux_rv(time_domain, flux, observations)

    for t in (0., 30., 60.):
        render_disk(simulator, t)


# ++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++ #

if __name__ == "__main__":
    run_static()
    run_dynamic()
