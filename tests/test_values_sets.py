import pytest

from fuzzy_model import InvalidArgumentError, Model


@pytest.fixture
def model():
    return Model("test")


# ---------------------------------------------------------------------------
# Value
# ---------------------------------------------------------------------------

def test_value_defaults(model):
    temp = model.sets.get(model.sets.add("temperature"))
    cold = temp.get(temp.add("cold"))
    assert cold.min == 0.0
    assert cold.max == 10.0
    assert cold.param_count == 0
    assert cold.function is None
    # bez funkcji stopień prawdy zawsze 0
    assert cold.degree_of_truth(5) == 0.0


def test_value_set_bounds_rejects_inverted_domain(model, add_value):
    value = add_value(model, "temperature", "cold", "S-Curve", 0, 10)
    with pytest.raises(InvalidArgumentError):
        value.set_bounds(10, 0)
    assert (value.min, value.max) == (0.0, 10.0)


def test_value_resize_and_set_param(model, add_value):
    value = add_value(model, "power", "mid", "Triangle", 0, 10)
    value.resize(1)
    assert value.param_count == 1
    assert value.extra_params == [0.0]

    value.set_param(0, 2.0)
    assert value.params == [0.0, 10.0, 2.0]
    assert value.degree_of_truth(1) == pytest.approx(0.5)

    with pytest.raises(InvalidArgumentError):
        value.set_param(1, 3.0)

    value.resize(0)
    assert value.params == [0.0, 10.0]
    with pytest.raises(InvalidArgumentError):
        value.resize(-1)


def test_value_set_function_unknown_returns_none(model, add_value):
    value = add_value(model, "temperature", "cold", "S-Curve")
    assert value.set_function("trapezoid") is None
    assert value.function is None
    h = value.set_function("s-curve")
    assert h == model.catalog.get("S-Curve").handle


def test_degree_of_truth_caches_last_degree(model, add_value):
    value = add_value(model, "temperature", "hot", "S-Curve", 0, 10)
    assert value.degree_of_truth(8) == pytest.approx(0.92)
    assert value.degree == pytest.approx(0.92)
    # membership nie nadpisuje zapamiętanego stopnia
    assert value.membership(2) == pytest.approx(0.08)
    assert value.degree == pytest.approx(0.92)


def test_interpolate_value_ignores_bounds(model, add_value):
    value = add_value(model, "level", "ramp", "Interpolate", 100, 200, extra=(0, 0, 10, 1))
    assert value.membership(5) == pytest.approx(0.5)
    assert value.membership(150) == pytest.approx(1.0)


def test_peak_of_triangle_found_by_climbing(model, add_value):
    value = add_value(model, "power", "mid", "Triangle", 0, 10)
    assert value.peak_x == pytest.approx(5.0, abs=0.05)


def test_peak_of_s_curves_at_domain_edges(model, add_value):
    hot  = add_value(model, "temperature", "hot",  "S-Curve",          0, 10)
    cold = add_value(model, "temperature", "cold", "Inverted S-Curve", 0, 10)
    assert hot.peak_x == pytest.approx(10.0)
    assert cold.peak_x == pytest.approx(0.0)


def test_peak_without_points_falls_back_to_min(model, add_value):
    value = add_value(model, "level", "ramp", "Interpolate", 3, 7)
    assert value.peak_x == 3.0


# ---------------------------------------------------------------------------
# Set
# ---------------------------------------------------------------------------

def test_set_add_is_idempotent_and_normalizes_names(model):
    temp = model.sets.get(model.sets.add("  Temperature "))
    assert temp.name == "temperature"

    h1 = temp.add("Cold")
    h2 = temp.add("  cold")
    assert h1 == h2
    assert len(temp) == 1
    assert "COLD" in temp
    assert temp.get(h1).name == "cold"


def test_set_preserves_definition_order(model):
    temp = model.sets.get(model.sets.add("temperature"))
    for name in ("cold", "warm", "hot"):
        temp.add(name)
    assert [v.name for v in temp] == ["cold", "warm", "hot"]
    assert temp.at(2).name == "hot"
    assert temp.at(3) is None


def test_set_domain_spans_all_values(model, add_value):
    add_value(model, "power", "low",  "Triangle", -5, 50)
    add_value(model, "power", "high", "Triangle", 50, 120)
    power = model.sets.get("power")
    assert power.min() == -5.0
    assert power.max() == 120.0


def test_empty_set_has_no_domain(model):
    empty = model.sets.get(model.sets.add("empty"))
    with pytest.raises(InvalidArgumentError):
        empty.min()
    with pytest.raises(InvalidArgumentError):
        empty.max()


def test_set_degree_of_truth_all(model, add_value):
    add_value(model, "temperature", "cold", "Inverted S-Curve", 0, 10)
    add_value(model, "temperature", "hot",  "S-Curve",          0, 10)
    temp = model.sets.get("temperature")
    degrees = temp.degree_of_truth_all(2)
    assert degrees[temp.get("cold").handle] == pytest.approx(0.92)
    assert degrees[temp.get("hot").handle] == pytest.approx(0.08)


def test_set_remove_and_clear(model):
    temp = model.sets.get(model.sets.add("temperature"))
    h = temp.add("cold")
    temp.add("hot")
    temp.remove(h)
    assert [v.name for v in temp] == ["hot"]
    temp.clear()
    assert len(temp) == 0


# ---------------------------------------------------------------------------
# Sets
# ---------------------------------------------------------------------------

def test_handles_unique_within_model(model, add_value):
    a = add_value(model, "a", "x")
    b = add_value(model, "b", "x")
    handles = [model.sets.get("a").handle, model.sets.get("b").handle, a.handle, b.handle]
    assert len(set(handles)) == 4
    assert 0 not in handles


def test_sets_lookup_helpers(model, add_value):
    cold = add_value(model, "temperature", "cold")
    add_value(model, "power", "high")

    assert model.sets.value("Temperature", "COLD") is cold
    assert model.sets.value("temperature", "missing") is None
    assert model.sets.value("missing", "cold") is None
    assert model.sets.owner_of(cold.handle).name == "temperature"
    assert model.sets.owner_of(9999) is None
    assert model.sets.at(1).name == "power"
    assert "power" in model.sets
    assert "pressure" not in model.sets


def test_model_clear(climate_model):
    climate_model.clear()
    assert len(climate_model.sets) == 0
    assert len(climate_model.rules) == 0


# ---------------------------------------------------------------------------
# Zdegenerowana dziedzina (min == max)
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "function",
    ["Gaussian Bell", "S-Curve", "Inverted S-Curve", "Triangle", "Inverted Triangle"],
)
def test_degenerate_domain_accepted(model, add_value, function):
    value = add_value(model, "a", "x", function, 5, 5)
    assert (value.min, value.max) == (5.0, 5.0)
    assert value.peak_x == 5.0
    assert 0.0 <= value.membership(5) <= 1.0


def test_degenerate_gauss_bell_at_zero(model, add_value):
    value = add_value(model, "a", "x", "Gaussian Bell", 0, 0)
    assert value.membership(0) == 1.0
    assert value.peak_x == 0.0
