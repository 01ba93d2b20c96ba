import itertools

import numpy as np
import pytest
from astropy import units as u
from astropy.utils.exceptions import AstropyUserWarning

from exospotpy.simulate import *
from exospotpy.simulate.simulation import _size_cutoff
from exospotpy.utils import visible_band


def test_no_times(quiet_simulator):
    assert len(quiet_simulator.observe_flux([], *visible_band)) == 0
    assert quiet_simulator.observe_rv([], *visible_band) == []


def test_quiet_star_flux_and_rv(quiet_simulator):
    times = np.linspace(0., 25., 6)
    np.testing.assert_array_equal(quiet_simulator.observe_flux(times, *visible_band), 1.)
    for obs in quiet_simulator.observe_rv(times, *visible_band):
        assert obs.rv == pytest.approx(0., abs=1e-6)
        assert len(obs.bisector) > 0


def test_spot_transit(star):
    spot = ActiveRegion(star, latitude=0., longitude=0., size=0.01, plage=False)
    simulator = Simulator(star, active_regions=[spot], dynamic_fill_factor=0., num_workers=2)
    flux_transit, flux_hidden = simulator.observe_flux([0., star.period / 2], *visible_band)
    assert flux_transit < 1.
    assert flux_hidden == 1.
    assert flux_transit < flux_hidden


def test_repeated_observations_agree(central_spot_simulator):
    times = np.linspace(-3., 3., 7)
    first = central_spot_simulator.observe_flux(times, *visible_band)
    second = central_spot_simulator.observe_flux(times, *visible_band)
    np.testing.assert_array_equal(first, second)


def test_output_order_follows_input(central_spot_simulator):
    times = np.array([4., -2., 0., 3., -5.])
    flux = central_spot_simulator.observe_flux(times, *visible_band)
    single = [central_spot_simulator.observe_flux([t], *visible_band)[0] for t in times]
    np.testing.assert_array_equal(flux, single)

    rv = [obs.rv for obs in central_spot_simulator.observe_rv(times, *visible_band)]
    single_rv = [central_spot_simulator.observe_rv([t], *visible_band)[0].rv for t in times]
    np.testing.assert_array_equal(rv, single_rv)


def test_quantity_times(central_spot_simulator):
    flux_days = central_spot_simulator.observe_flux([0., 1.], *visible_band)
    flux_hours = central_spot_simulator.observe_flux([0., 24.] * u.h, 400 * u.nm, 700 * u.nm)
    np.testing.assert_allclose(flux_days, flux_hours)


def test_spot_contrast_depends_on_band(central_spot_simulator):
    blue = central_spot_simulator.observe_flux([0.], 400e-9, 500e-9)[0]
    red = central_spot_simulator.observe_flux([0.], 800e-9, 900e-9)[0]
    assert blue < red < 1.


def test_spots_on_either_side_move_rv_opposite_ways(star):
    approaching = ActiveRegion(star, latitude=0., longitude=-30., size=0.01)
    receding = ActiveRegion(star, latitude=0., longitude=30., size=0.01)
    rv_approaching = Simulator(star, [approaching], num_workers=1).observe_rv([0.], *visible_band)[0].rv
    rv_receding = Simulator(star, [receding], num_workers=1).observe_rv([0.], *visible_band)[0].rv
    assert rv_receding < rv_approaching


def test_plage_brightens(star):
    plage = ActiveRegion(star, latitude=0., longitude=0., size=0.01, plage=True)
    simulator = Simulator(star, active_regions=[plage])
    assert simulator.observe_flux([0.], *visible_band)[0] > 1.


# ++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++ #


def test_add_active_regions(star, star_factory):
    simulator = Simulator(star)
    with pytest.raises(TypeError):
        simulator.add_active_regions("spot")
    other_star = star_factory(grid_size=21)
    with pytest.raises(ValueError):
        simulator.add_active_regions(ActiveRegion(other_star, 0., 0., 0.01))
    simulator.add_active_regions(ActiveRegion(star, 0., 0., 0.01), ActiveRegion(star, 40., 0., 0.01))
    assert len(simulator.active_regions) == 2
    assert simulator.fill_factor(0.) == pytest.approx(0.02)


def test_star_type_is_checked():
    with pytest.raises(TypeError):
        Simulator("star")


def test_fill_factor_is_maintained(star):
    simulator = Simulator(star, dynamic_fill_factor=0.003, spot_lifetime=5., seed=42, num_workers=2)
    processed = []
    coverage = []
    for t in np.linspace(0., 20., 11):
        simulator.check_fill_factor(t)
        processed.append(t)
        # At least the target, overshooting by less than one spot
        assert 0.003 <= simulator.fill_factor(t) < 0.003 + _size_cutoff
        # Coverage at the earlier times is never taken away by later growth
        now = [simulator.fill_factor(s) for s in processed]
        assert all(np.array(now[:-1]) >= np.array(coverage))
        coverage = now

    for region in simulator.active_regions:
        assert region.time_disappear - region.time_appear == pytest.approx(5.)
        assert -30. <= region.latitude <= 30.
        assert 0. <= region.longitude <= 360.
        assert region.size < 0.001
        assert not region.plage


def test_random_spots_never_overlap(star):
    simulator = Simulator(star, dynamic_fill_factor=0.005, spot_lifetime=3., seed=7, num_workers=2)
    simulator.observe_flux(np.linspace(0., 10., 21), *visible_band)
    regions = simulator.active_regions
    assert len(regions) > 1
    for first, second in itertools.combinations(regions, 2):
        if first.overlaps_window(second):
            assert not first.collides_with(second)


def test_same_seed_same_spots(star):
    times = np.linspace(0., 10., 5)
    first = Simulator(star, dynamic_fill_factor=0.002, seed=3)
    second = Simulator(star, dynamic_fill_factor=0.002, seed=3)
    np.testing.assert_array_equal(first.observe_flux(times, *visible_band),
                                  second.observe_flux(times, *visible_band))
    assert [ar.latitude for ar in first.active_regions] == [ar.latitude for ar in second.active_regions]


def test_dynamic_spots_dim_the_star(star):
    simulator = Simulator(star, dynamic_fill_factor=0.005, seed=11, num_workers=2)
    flux = simulator.observe_flux(np.linspace(0., 5., 6), *visible_band)
    assert np.all(flux <= 1.)
    assert np.any(flux < 1.)


def test_placement_gives_up_with_warning(star):
    simulator = Simulator(star, dynamic_fill_factor=0.9, seed=1, max_attempts=20)
    with pytest.warns(AstropyUserWarning):
        simulator.check_fill_factor(0.)
    assert simulator.fill_factor(0.) < 0.9


def test_failed_growth_poisons_generator(star, monkeypatch):
    simulator = Simulator(star, dynamic_fill_factor=0.01, seed=1)

    def broken_draw():
        raise RuntimeError("draw failed")

    monkeypatch.setattr(simulator, "_draw_size", broken_draw)
    with pytest.raises(RuntimeError, match="draw failed"):
        simulator.check_fill_factor(0.)
    with pytest.raises(RuntimeError, match="poisoned"):
        simulator.check_fill_factor(1.)


def test_from_config(tmp_path):
    from exospotpy.io import create_simulation_template
    config_path = create_simulation_template(tmp_path, "sun")
    simulator = Simulator.from_config(config_path, num_workers=1)
    assert len(simulator.active_regions) == 3


# ++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++ #


def test_draw_rgba_paints_spot(central_spot_simulator):
    image = central_spot_simulator.new_image()
    central_spot_simulator.draw_rgba(0., image)
    pixels = image.reshape(image_size, image_size, 4)

    painted = np.argwhere(pixels[..., 3] == 255)
    assert len(painted) > 0
    assert np.all(pixels[..., 2] == 0)

    spot = central_spot_simulator.active_regions[0]
    grid_step = 2. / central_spot_simulator.star.grid_size
    coords = painted / (image_size - 1) * 2. - 1.
    assert np.all(np.hypot(coords[:, 0], coords[:, 1]) <= np.sin(spot.radius) + 2 * grid_step)

    red = pixels[..., 0][pixels[..., 3] == 255]
    assert red.max() <= int(spot.intensity * 255) + 1
    assert pixels[0, 0, 3] == 0


def test_draw_rgba_skips_hidden_regions(star):
    spot = ActiveRegion(star, latitude=0., longitude=0., size=0.01)
    simulator = Simulator(star, active_regions=[spot])
    image = simulator.new_image()
    simulator.draw_rgba(star.period / 2, image)
    assert not image.any()


def test_draw_rgba_accepts_bytearray(central_spot_simulator):
    buffer = bytearray(image_size * image_size * 4)
    central_spot_simulator.draw_rgba(0., buffer)
    assert any(buffer)


def test_draw_rgba_checks_size(central_spot_simulator):
    with pytest.raises(ValueError):
        central_spot_simulator.draw_rgba(0., np.zeros(100, dtype=np.uint8))


def test_inverted_band(central_spot_simulator):
    with pytest.raises(ValueError):
        central_spot_simulator.observe_flux([0.], 7e-7, 4e-7)


def test_repeated_times_grow_once(star):
    simulator = Simulator(star, dynamic_fill_factor=0.9, seed=1, max_attempts=50)
    with pytest.warns(AstropyUserWarning, match="Gave up placing spots") as record:
        flux = simulator.observe_flux([0., 0., 0.], *visible_band)
    give_ups = [w for w in record if "Gave up placing spots" in str(w.message)]
    assert len(give_ups) == 1
    assert flux[0] == flux[1] == flux[2]


def test_concurrent_growth_does_not_overfill(star):
    from exospotpy.utils import ordered_thread_map
    simulator = Simulator(star, dynamic_fill_factor=0.003, seed=5)
    ordered_thread_map(simulator.check_fill_factor, [0.] * 8, num_workers=4)
    assert 0.003 <= simulator.fill_factor(0.) < 0.003 + _size_cutoff
