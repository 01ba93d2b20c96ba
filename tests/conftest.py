import pytest
from astropy import units as u

from exospotpy.simulate import StellarDisk, ActiveRegion, Simulator


def make_star(grid_size=101, inclination=90., period=25.05):
    return StellarDisk(radius=1. * u.R_sun,
                       period=period * u.d,
                       inclination=inclination * u.deg,
                       temperature=5778 * u.K,
                       spot_temp_diff=663 * u.K,
                       limb_linear=0.29,
                       limb_quadratic=0.34,
                       grid_size=grid_size)


@pytest.fixture(scope="session")
def star():
    return make_star()


@pytest.fixture
def quiet_simulator(star):
    return Simulator(star, dynamic_fill_factor=0., num_workers=2)


@pytest.fixture
def central_spot_simulator(star):
    spot = ActiveRegion(star, latitude=0., longitude=0., size=0.01, plage=False)
    return Simulator(star, active_regions=[spot], dynamic_fill_factor=0., num_workers=2)


@pytest.fixture(scope="session")
def star_factory():
    return make_star
