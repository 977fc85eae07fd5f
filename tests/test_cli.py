import json

import pytest

from fz.cli import build_parser, main


# ---------------------------------------------------------------------------
# Parser argumentów
# ---------------------------------------------------------------------------

def test_build_parser_run_arguments():
    args = build_parser().parse_args(
        ["run", "model.ini", "-i", "a=1", "-i", "b=2", "-o", "power", "heat", "--degrees"]
    )
    assert args.command == "run"
    assert args.model == "model.ini"
    assert args.input == ["a=1", "b=2"]
    assert args.output == ["power", "heat"]
    assert args.degrees is True
    assert args.json_output is False
    assert callable(args.func)


def test_command_is_required():
    with pytest.raises(SystemExit) as exc_info:
        build_parser().parse_args([])
    assert exc_info.value.code == 2


def test_version(capsys):
    with pytest.raises(SystemExit):
        main(["--version"])
    assert "fz 0.1.0" in capsys.readouterr().out


# ---------------------------------------------------------------------------
# fz run
# ---------------------------------------------------------------------------

def test_run_json_output(climate_ini, capsys):
    main(["run", str(climate_ini), "-i", "temperature=1", "--json-output", "--degrees"])
    out = json.loads(capsys.readouterr().out)

    assert out["model"] == "klimat"
    assert out["inputs"] == {"temperature": 1.0}
    assert set(out["outputs"]) == {"power"}
    assert 50.0 < out["outputs"]["power"] < 100.0
    assert set(out["degrees"]["power"]) == {"low", "high"}


def test_run_inputs_file_and_override(climate_ini, tmp_path, capsys):
    inputs = tmp_path / "pomiar.json"
    inputs.write_text(
        json.dumps({"case_id": "p-7", "inputs": {"temperature": 9}}), encoding="utf-8"
    )
    main(["run", str(climate_ini), "--inputs", str(inputs), "--json-output"])
    from_file = json.loads(capsys.readouterr().out)
    assert from_file["case_id"] == "p-7"
    assert from_file["outputs"]["power"] < 50.0

    main([
        "run", str(climate_ini), "--inputs", str(inputs),
        "-i", "temperature=1", "--json-output",
    ])
    overridden = json.loads(capsys.readouterr().out)
    assert overridden["inputs"] == {"temperature": 1.0}
    assert overridden["outputs"]["power"] > 50.0


def test_run_selected_outputs_include_inputs(climate_ini, capsys):
    main(["run", str(climate_ini), "-i", "temperature=2", "-o", "temperature", "--json-output"])
    out = json.loads(capsys.readouterr().out)
    assert out["outputs"] == {"temperature": 2.0}


def test_run_table_output(climate_ini, capsys):
    main(["run", str(climate_ini), "-i", "temperature=2", "--degrees"])
    out = capsys.readouterr().out
    assert "klimat" in out
    assert "power" in out
    assert "high=" in out


def test_run_unknown_input_warns(climate_ini, capsys):
    main(["run", str(climate_ini), "-i", "temperature=2", "-i", "pressure=1", "--json-output"])
    captured = capsys.readouterr()
    assert "pressure" in captured.err
    assert json.loads(captured.out)["inputs"]["pressure"] == 1.0


def test_run_missing_input_fails(climate_ini, capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["run", str(climate_ini)])
    assert exc_info.value.code == 1
    assert "Błąd obliczeń" in capsys.readouterr().out


def test_run_unknown_output_fails(climate_ini):
    with pytest.raises(SystemExit) as exc_info:
        main(["run", str(climate_ini), "-i", "temperature=2", "-o", "pressure"])
    assert exc_info.value.code == 1


def test_run_bad_assignment_fails(climate_ini):
    with pytest.raises(SystemExit) as exc_info:
        main(["run", str(climate_ini), "-i", "temperature"])
    assert exc_info.value.code == 1


def test_run_missing_model_fails(tmp_path):
    with pytest.raises(SystemExit) as exc_info:
        main(["run", str(tmp_path / "brak.ini"), "-i", "temperature=2"])
    assert exc_info.value.code == 1


def test_run_broken_model_fails(tmp_path, climate_text, capsys):
    path = tmp_path / "zly.ini"
    path.write_text(climate_text.replace("then power.high", "then power.medium"), encoding="utf-8")
    with pytest.raises(SystemExit) as exc_info:
        main(["run", str(path), "-i", "temperature=2"])
    assert exc_info.value.code == 1
    assert "E_UNKNOWN_VALUE" in capsys.readouterr().err


def test_run_writes_trace_log(climate_ini, tmp_path, monkeypatch, capsys):
    log_path = tmp_path / "trace.log"
    monkeypatch.setenv("FZ_LOG_FILE", str(log_path))
    monkeypatch.setenv("FZ_CURVE_SAMPLES", "100")
    main(["run", str(climate_ini), "-i", "temperature=2", "--json-output"])
    capsys.readouterr()
    assert "calc set=power" in log_path.read_text(encoding="utf-8")


def test_run_bad_curve_samples(climate_ini, monkeypatch):
    monkeypatch.setenv("FZ_CURVE_SAMPLES", "0")
    with pytest.raises(SystemExit) as exc_info:
        main(["run", str(climate_ini), "-i", "temperature=2"])
    assert exc_info.value.code == 1


# ---------------------------------------------------------------------------
# Pozostałe komendy
# ---------------------------------------------------------------------------

def test_sets_lists_values(climate_ini, capsys):
    main(["sets", str(climate_ini)])
    out = capsys.readouterr().out
    assert "temperature" in out
    assert "Inverted S-Curve" in out
    assert "wyjście" in out


def test_rules_lists_rules(climate_ini, capsys):
    main(["rules", str(climate_ini), "--detail"])
    out = capsys.readouterr().out
    assert "temperature.cold" in out
    assert "power.high" in out
    assert "2 reguły" in out


def test_check_valid_rule(climate_ini, capsys):
    main(["check", str(climate_ini), "if temperature.very.hot then power.low"])
    assert "OK" in capsys.readouterr().out


def test_check_invalid_rule_exits(climate_ini, capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["check", str(climate_ini), "if temperature.warm then power.low"])
    assert exc_info.value.code == 1
    assert "E_UNKNOWN_VALUE" in capsys.readouterr().out


def test_check_rejects_two_conclusions(climate_ini, capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["check", str(climate_ini), "if temperature.hot then power.low and power.high"])
    assert exc_info.value.code == 1
    assert "E_EXTRA_CONSEQUENT" in capsys.readouterr().out


def test_check_json_output(climate_ini, capsys):
    main(["check", str(climate_ini), "if temperature.extremely.hot then power.low", "--json-output"])
    out = capsys.readouterr().out
    payload = json.loads(out[out.index("{"):])
    assert payload["is_valid"] is True
    assert payload["rule"] == "if temperature.hot then power.low"
    assert len(payload["warnings"]) == 1


def test_functions_lists_catalog(capsys):
    main(["functions"])
    out = capsys.readouterr().out
    for name in ("Gaussian Bell", "S-Curve", "Triangle", "Interpolate"):
        assert name in out


def test_hint_prints_guide(capsys):
    main(["hint"])
    out = capsys.readouterr().out
    assert "[rules]" in out
    assert "param_0000" in out
