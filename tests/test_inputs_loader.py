import json

import pytest

from inference import InputsFileError, load_inputs_json, parse_assignment, parse_inputs


# ---------------------------------------------------------------------------
# parse_inputs / load_inputs_json
# ---------------------------------------------------------------------------

def test_parse_inputs_valid():
    case_id, inputs = parse_inputs(
        {"case_id": "pomiar-001", "inputs": {"temperature": 18.5, "humidity": 40}}
    )
    assert case_id == "pomiar-001"
    assert inputs == {"temperature": 18.5, "humidity": 40.0}
    assert isinstance(inputs["humidity"], float)


def test_parse_inputs_case_id_optional():
    case_id, inputs = parse_inputs({"inputs": {}})
    assert case_id == ""
    assert inputs == {}


def test_parse_inputs_missing_inputs():
    with pytest.raises(InputsFileError, match="inputs"):
        parse_inputs({"case_id": "x"})


def test_parse_inputs_rejects_non_numbers():
    with pytest.raises(InputsFileError, match="/inputs/temperature"):
        parse_inputs({"inputs": {"temperature": "ciepło"}})


def test_parse_inputs_rejects_non_object():
    with pytest.raises(InputsFileError):
        parse_inputs([1, 2, 3])


def test_load_inputs_json(tmp_path):
    path = tmp_path / "pomiar.json"
    path.write_text(json.dumps({"case_id": "c1", "inputs": {"a": 2}}), encoding="utf-8")
    assert load_inputs_json(path) == ("c1", {"a": 2.0})


def test_load_inputs_json_bad_json(tmp_path):
    path = tmp_path / "pomiar.json"
    path.write_text("{inputs: ", encoding="utf-8")
    with pytest.raises(InputsFileError, match="JSON"):
        load_inputs_json(path)


def test_load_inputs_json_missing_file(tmp_path):
    with pytest.raises(InputsFileError):
        load_inputs_json(tmp_path / "brak.json")


# ---------------------------------------------------------------------------
# parse_assignment
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "text, expected",
    [
        ("temperature=18.5", ("temperature", 18.5)),
        (" power = -3 ", ("power", -3.0)),
        ("a=1e3", ("a", 1000.0)),
    ],
)
def test_parse_assignment(text, expected):
    assert parse_assignment(text) == expected


@pytest.mark.parametrize("text", ["temperature", "=5", "temperature=ciepło", "temperature="])
def test_parse_assignment_invalid(text):
    with pytest.raises(ValueError):
        parse_assignment(text)
