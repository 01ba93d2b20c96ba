import numpy as np
import pytest
from astropy import units as u

from exospotpy.simulate import ActiveRegion


def test_size_and_radius(star):
    region = ActiveRegion(star, latitude=10., longitude=20., size=0.005)
    assert region.radius == pytest.approx(np.sqrt(0.01))
    assert region.fill_factor == pytest.approx(0.005)
    assert region.size == 0.005


def test_negative_size(star):
    with pytest.raises(ValueError):
        ActiveRegion(star, latitude=0., longitude=0., size=-0.01)


def test_quantity_inputs(star):
    region = ActiveRegion(star, latitude=10. * u.deg, longitude=np.pi / 2 * u.rad, size=0.001,
                          time_appear=24 * u.h, time_disappear=2 * u.d)
    assert region.latitude == pytest.approx(10.)
    assert region.longitude == pytest.approx(90.)
    assert region.time_appear == pytest.approx(1.)
    assert region.time_disappear == pytest.approx(2.)


def test_alive_window(star):
    region = ActiveRegion(star, latitude=0., longitude=0., size=0.001, time_appear=1., time_disappear=2.)
    assert not region.alive(0.5)
    assert region.alive(1.)
    assert region.alive(1.99)
    assert not region.alive(2.)

    static = ActiveRegion(star, latitude=0., longitude=0., size=0.001)
    assert static.alive(-1e9)
    assert static.alive(1e9)


def test_overlapping_windows(star):
    first = ActiveRegion(star, 0., 0., 0.001, time_appear=0., time_disappear=10.)
    adjacent = ActiveRegion(star, 0., 0., 0.001, time_appear=10., time_disappear=20.)
    overlapping = ActiveRegion(star, 0., 0., 0.001, time_appear=5., time_disappear=20.)
    static = ActiveRegion(star, 0., 0., 0.001)
    assert not first.overlaps_window(adjacent)
    assert not adjacent.overlaps_window(first)
    assert first.overlaps_window(overlapping)
    assert overlapping.overlaps_window(first)
    assert static.overlaps_window(adjacent)


def test_collisions(star):
    # Two regions of size 0.01 collide closer than 2*sqrt(0.02) rad, about 16.2 degrees
    region = ActiveRegion(star, latitude=0., longitude=0., size=0.01)
    assert region.collides_with(ActiveRegion(star, latitude=0., longitude=0., size=0.01))
    assert region.collides_with(ActiveRegion(star, latitude=0., longitude=15., size=0.01))
    assert not region.collides_with(ActiveRegion(star, latitude=0., longitude=17., size=0.01))
    assert not region.collides_with(ActiveRegion(star, latitude=0., longitude=90., size=0.01))
    assert region.collides_with(ActiveRegion(star, latitude=15., longitude=360., size=0.01))
    assert not region.collides_with(ActiveRegion(star, latitude=-17., longitude=0., size=0.01))


def test_temperature_and_intensity(star):
    spot = ActiveRegion(star, latitude=0., longitude=0., size=0.01, plage=False)
    plage = ActiveRegion(star, latitude=0., longitude=0., size=0.01, plage=True)
    assert spot.temperature == pytest.approx(5778 - 663)
    assert plage.temperature == pytest.approx(5778 + 663)
    assert spot.intensity < 1. < plage.intensity


# ++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++ #


def test_flux_of_central_spot(star):
    spot = ActiveRegion(star, latitude=0., longitude=0., size=0.01)
    relative_flux = spot.get_flux(0.) / star.flux_quiet
    projected_area = np.pi * np.sin(spot.radius) ** 2
    disk_area = np.pi * (1 - star.limb_linear / 3 - star.limb_quadratic / 6)
    assert relative_flux == pytest.approx((1 - spot.intensity) * projected_area / disk_area, rel=0.02)


def test_flux_of_hidden_or_dead_region(star):
    spot = ActiveRegion(star, latitude=0., longitude=0., size=0.01, time_appear=0., time_disappear=10.)
    assert spot.get_flux(-1.) == 0.
    assert spot.get_flux(10.) == 0.
    assert spot.get_flux(star.period / 2) == 0.
    assert spot.get_flux(0.) > 0.


def test_plage_adds_flux(star):
    plage = ActiveRegion(star, latitude=0., longitude=0., size=0.01, plage=True)
    assert plage.get_flux(0.) < 0.


def test_flux_shrinks_toward_limb(star):
    spot = ActiveRegion(star, latitude=0., longitude=0., size=0.01)
    fluxes = [spot.get_flux(t) for t in np.linspace(0., star.period / 4, 6)]
    assert all(np.diff(fluxes) < 0)


def test_ccf_continuum_matches_flux(star):
    spot = ActiveRegion(star, latitude=20., longitude=30., size=0.01)
    ccf = spot.get_ccf(1.)
    assert len(ccf) == len(star.profile_quiet)
    assert ccf[0] == pytest.approx(spot.get_flux(1.), rel=1e-6)
    assert ccf[-1] == pytest.approx(spot.get_flux(1.), rel=1e-6)


def test_ccf_of_hidden_region_is_zero(star):
    spot = ActiveRegion(star, latitude=0., longitude=0., size=0.01)
    np.testing.assert_array_equal(spot.get_ccf(star.period / 2), 0.)
