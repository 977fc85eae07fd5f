"""
inference — silnik wnioskowania rozmytego.

Publiczne API:
  InferenceEngine(model)        silnik: bind / set_input / recalculate / get_output
  ExecutionNode                 stan obliczeń jednego zbioru
  defuzzify(curve)              wyostrzanie metodą bisekcji pola
  load_inputs_json(path)        → (case_id, dict[str, float])
  parse_assignment(text)        → (set_name, float)
  FL_CRV_COUNT, ExecStatus      stałe i typy
"""

from .engine  import InferenceEngine, ExecutionNode, defuzzify
from .loader  import (
    INPUTS_SCHEMA,
    InputsFileError,
    load_inputs_json,
    parse_inputs,
    parse_assignment,
)
from .types   import FL_CRV_COUNT, Curve, CurvePoint, ExecStatus

__all__ = [
    "InferenceEngine",
    "ExecutionNode",
    "defuzzify",
    "INPUTS_SCHEMA",
    "InputsFileError",
    "load_inputs_json",
    "parse_inputs",
    "parse_assignment",
    "FL_CRV_COUNT",
    "Curve",
    "CurvePoint",
    "ExecStatus",
]
