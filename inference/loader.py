"""
inference/loader.py — wczytywanie wartości wejściowych z JSON.

Publiczne API:
  load_inputs_json(path)   -> (case_id, dict[str, float])
  parse_inputs(raw)        -> (case_id, dict[str, float])
  parse_assignment(text)   -> (set_name, float)     np. "temperature=18.5"
  INPUTS_SCHEMA            schemat JSON pliku wejść
"""

from __future__ import annotations

import json
import pathlib
from typing import Any

import jsonschema

from fuzzy_model.errors import FuzzyError

INPUTS_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": {
        "case_id": {"type": "string"},
        "inputs": {
            "type": "object",
            "additionalProperties": {"type": "number"},
        },
    },
    "required": ["inputs"],
}


class InputsFileError(FuzzyError):
    """Plik wejść nie jest poprawnym JSON albo nie spełnia INPUTS_SCHEMA."""


# ---------------------------------------------------------------------------
# Wejścia z JSON
# ---------------------------------------------------------------------------

def parse_inputs(raw: Any) -> tuple[str, dict[str, float]]:
    """
    Waliduje zdekodowany JSON względem INPUTS_SCHEMA.

    Oczekiwany format::

        {
            "case_id": "pomiar-001",
            "inputs":  {"temperature": 18.5, "humidity": 40}
        }

    Raises:
        InputsFileError z listą wszystkich naruszeń schematu.
    """
    validator = jsonschema.Draft202012Validator(INPUTS_SCHEMA)
    problems: list[str] = []
    for e in validator.iter_errors(raw):
        path = (
            "/" + "/".join(str(p) for p in e.absolute_path)
            if e.absolute_path
            else "/"
        )
        problems.append(f"{path}: {e.message}")

    if problems:
        raise InputsFileError("Niepoprawny plik wejść: " + "; ".join(problems))

    case_id = raw.get("case_id", "")
    inputs  = {str(k): float(v) for k, v in raw["inputs"].items()}
    return case_id, inputs


def load_inputs_json(path: pathlib.Path | str) -> tuple[str, dict[str, float]]:
    """Wczytuje plik wejść i zwraca (case_id, inputs)."""
    path = pathlib.Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise InputsFileError(f"Nie można odczytać pliku wejść {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise InputsFileError(f"Błąd parsowania JSON ({path.name}): {exc}") from exc
    return parse_inputs(raw)


# ---------------------------------------------------------------------------
# Przypisanie z linii poleceń
# ---------------------------------------------------------------------------

def parse_assignment(text: str) -> tuple[str, float]:
    """
    Parsuje "zbiór=liczba".

    Przykłady::

        "temperature=18.5"   → ("temperature", 18.5)
        " power = -3 "       → ("power", -3.0)

    Raises:
        ValueError jeśli format jest nieprawidłowy.
    """
    name, sep, raw = text.partition("=")
    name = name.strip()
    if not sep or not name:
        raise ValueError(f"Nieprawidłowy format wejścia: '{text}' (oczekiwano ZBIÓR=LICZBA)")
    try:
        return name, float(raw)
    except ValueError:
        raise ValueError(f"Wartość wejścia '{name}' nie jest liczbą: '{raw.strip()}'") from None
