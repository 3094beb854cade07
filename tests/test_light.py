import pytest

from gtecore.light import Light


def test_initial_parameters():
    params = Light().parameters()
    assert params["ambient"] == (0.7, 0.7, 0.7, 1.0)
    assert params["diffuse"] == (0.8, 0.8, 0.8, 1.0)
    assert params["position"] == (1.5, 2.0, 1.0, 0.0)


def test_setters_force_w_component():
    light = Light()
    light.set_ambient(0.1, 0.2, 0.3)
    light.set_diffuse(0.4, 0.5, 0.6)
    light.set_direction(7, 8, 9)
    params = light.parameters()
    assert params["ambient"] == (0.1, 0.2, 0.3, 1.0)
    assert params["diffuse"] == (0.4, 0.5, 0.6, 1.0)
    assert params["position"] == (7.0, 8.0, 9.0, 0.0)


def test_set_defaults_applies():
    light = Light()
    light.set_defaults()
    assert light.ambient == (0.65, 0.65, 0.65, 1.0)
    assert light.diffuse == (1.0, 1.0, 1.0, 1.0)
    assert light.direction == (2.0, 5.0, 1.0, 0.0)
    assert 0 in light.active
    assert light.applied[0] == light.parameters()


@pytest.mark.parametrize("index", [-1, 3, 10])
def test_select_out_of_range_raises(index):
    light = Light()
    with pytest.raises(ValueError):
        light.select(index)
    assert light.light == 0


def test_enable_and_disable_selected_light():
    light = Light()
    light.select(2)
    light.enable()
    assert light.lighting_enabled
    assert light.active == {2}
    light.disable()
    assert light.active == set()


def test_applied_values_are_a_snapshot():
    light = Light()
    light.select(1)
    light.enable()
    before = light.applied[1]
    light.set_ambient(0.0, 0.0, 0.0)
    assert light.applied[1] == before
    assert light.parameters()["ambient"] == (0.0, 0.0, 0.0, 1.0)


def test_disable_only_affects_selected_light():
    light = Light()
    light.enable()
    light.select(1)
    light.enable()
    light.disable()
    assert light.active == {0}