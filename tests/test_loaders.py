import textwrap

import numpy as np
import pytest
from astropy import units as u

from exospotpy.io import *
from exospotpy.simulate import Simulator


_star_section = """
[star]
radius = 1.0
period = 25.05          # days
inclination = 90.0
Tstar = 5778
Tdiff_spot = 663
limb1 = 0.29
limb2 = 0.34
fillfactor = 0.0
grid_resolution = 51
"""


def write_config(folder, text, filename="star.cfg"):
    config_path = folder / filename
    config_path.write_text(textwrap.dedent(text))
    return config_path


def test_star_section_only(tmp_path):
    simulator = load_simulation(write_config(tmp_path, _star_section))
    assert isinstance(simulator, Simulator)
    assert simulator.star.grid_size == 51
    assert simulator.star.period == pytest.approx(25.05)
    assert simulator.star.inclination == pytest.approx(np.pi / 2)
    assert simulator.dynamic_fill_factor == 0.
    assert simulator.active_regions == ()


def test_spot_sections(tmp_path):
    text = _star_section + """
[spot1]
latitude = 30.0
longitude = 180.0
size = 0.01
plage = false

[spot2]
latitude = -10.0
longitude = 45.0
size = 0.002
plage = true
time_appear = 2.0
time_disappear = 12.0

[notes]
comment = ignored
"""
    simulator = load_simulation(write_config(tmp_path, text), num_workers=1)
    first, second = simulator.active_regions
    assert first.latitude == pytest.approx(30.)
    assert not first.plage
    assert first.time_appear == -np.inf
    assert first.time_disappear == np.inf
    assert second.plage
    assert second.time_appear == pytest.approx(2.)
    assert second.time_disappear == pytest.approx(12.)
    assert second.star is simulator.star


def test_optional_star_fields(tmp_path):
    text = _star_section.replace("fillfactor = 0.0", "fillfactor = 0.002\nspot_lifetime = 4.0\nseed = 12")
    generator = SimulationGenerator(write_config(tmp_path, text))
    assert generator["star_parameters"]["spot_lifetime"] == 4. * u.d
    assert generator["star_parameters"]["seed"] == 12
    first = generator.gen_simulation()
    second = generator.gen_simulation()
    assert first.spot_lifetime == pytest.approx(4.)
    np.testing.assert_array_equal(first.observe_flux([0., 1.], 4e-7, 7e-7),
                                  second.observe_flux([0., 1.], 4e-7, 7e-7))


def test_ccf_file_relative_to_config(tmp_path):
    rv_km = np.linspace(-15., 15., 61)
    with open(tmp_path / "line.rdb", 'w') as table_file:
        table_file.write("rv\tquiet\tactive\n--\t--\t--\n")
        for rv in rv_km:
            table_file.write("{}\t{}\t{}\n".format(rv, 1 - 0.5 * np.exp(-rv ** 2 / 18.),
                                                   1 - 0.4 * np.exp(-(rv - 0.3) ** 2 / 18.)))
    text = _star_section.replace("fillfactor = 0.0", "fillfactor = 0.0\nccf_file = line.rdb")
    simulator = load_simulation(write_config(tmp_path, text))
    np.testing.assert_allclose(simulator.star.profile_quiet.rv, rv_km * 1e3)


def test_all_errors_are_reported(tmp_path):
    text = """
[star]
radius = 1.0
period = slow
inclination = 90.0
Tstar = 5778
limb1 = 0.29
limb2 = 0.34
fillfactor = 0.0
grid_resolution = 51

[spot1]
latitude = 30.0
size = 0.01
plage = maybe
"""
    with pytest.raises(ConfigError) as err_info:
        load_simulation(write_config(tmp_path, text))
    errors = err_info.value.errors
    assert len(errors) == 4
    assert any("Missing field Tdiff_spot of section star" in e for e in errors)
    assert any("Cannot parse field period of section star" in e for e in errors)
    assert any("Missing field longitude of section spot1" in e for e in errors)
    assert any("Cannot parse field plage of section spot1" in e for e in errors)
    assert isinstance(err_info.value, ValueError)


def test_grid_resolution_must_be_positive(tmp_path):
    text = _star_section.replace("grid_resolution = 51", "grid_resolution = 0")
    with pytest.raises(ConfigError, match="grid_resolution"):
        load_simulation(write_config(tmp_path, text))


def test_missing_star_section(tmp_path):
    config_path = write_config(tmp_path, "[spot1]\nlatitude = 0.0\n")
    with pytest.raises(ConfigError, match="Missing section star"):
        load_simulation(config_path)


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="Could not open"):
        load_simulation(tmp_path / "nope.cfg")


def test_unparsable_file(tmp_path):
    config_path = write_config(tmp_path, "radius = 1.0\n[star]\n")
    with pytest.raises(ConfigError, match="Could not parse"):
        load_simulation(config_path)


def test_template_round_trip(tmp_path):
    config_path = create_simulation_template(tmp_path / "configs", "sun")
    assert config_path.suffix == ".cfg"
    generator = SimulationGenerator(config_path)
    assert generator["star_parameters"]["grid_size"] == 1000
    assert len(generator["spot_parameters"]) == 3
    assert generator["spot_parameters"][2]["time_appear"] == 20. * u.d
