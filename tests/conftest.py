import pytest

from fuzzy_model import Model, Value

CLIMATE_INI = """\
; model testowy: temperatura steruje mocą grzania
[model]
name=klimat
description=Sterowanie mocą grzania

[sets]
temperature=2
power=2

[temperature]
cold=Inverted S-Curve
hot=S-Curve

[power]
low=Triangle
high=Triangle

[temperature_cold]
min=0
max=10
count=0

[temperature_hot]
min=0
max=10
count=0

[power_low]
min=0
max=50
count=0

[power_high]
min=50
max=100
count=0

[rules]
rule_001=if temperature.cold then power.high
rule_002=if temperature.hot then power.low
"""


def _add_value(
    model: Model,
    set_name: str,
    value_name: str,
    function: str = "Triangle",
    lo: float = 0.0,
    hi: float = 10.0,
    extra: tuple[float, ...] = (),
) -> Value:
    fuzzy_set = model.sets.get(model.sets.add(set_name))
    value = fuzzy_set.get(fuzzy_set.add(value_name))
    value.set_function(function)
    value.set_bounds(lo, hi)
    value.extra_params = list(extra)
    return value


@pytest.fixture
def add_value():
    return _add_value


@pytest.fixture
def climate_model():
    """temperature (cold, hot) -> power (low, high)."""
    model = Model("klimat")
    _add_value(model, "temperature", "cold", "Inverted S-Curve", 0, 10)
    _add_value(model, "temperature", "hot",  "S-Curve",          0, 10)
    _add_value(model, "power",       "low",  "Triangle",         0, 50)
    _add_value(model, "power",       "high", "Triangle",         50, 100)
    model.rules.add("if temperature.cold then power.high")
    model.rules.add("if temperature.hot then power.low")
    return model


@pytest.fixture
def two_set_model():
    """A.cold (Inverted S-Curve) -> B.result (Triangle, szczyt w 5)."""
    model = Model("dwa zbiory")
    _add_value(model, "a", "cold",   "Inverted S-Curve", 0, 10)
    _add_value(model, "a", "hot",    "S-Curve",          0, 10)
    _add_value(model, "b", "result", "Triangle",         0, 10)
    model.rules.add("if a.cold then b.result")
    return model


@pytest.fixture
def climate_ini(tmp_path):
    path = tmp_path / "klimat.ini"
    path.write_text(CLIMATE_INI, encoding="utf-8")
    return path


@pytest.fixture
def climate_text():
    return CLIMATE_INI
