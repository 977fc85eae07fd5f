"""
inference/types.py — podstawowe typy silnika wnioskowania.
"""

from __future__ import annotations

from enum import StrEnum

# Liczba przedziałów próbkowania krzywej (próbek jest o jedną więcej)
FL_CRV_COUNT = 1000

# Punkt krzywej (x, y) i cała krzywa po rozmyciu
type CurvePoint = tuple[float, float]
type Curve = list[CurvePoint]


class ExecStatus(StrEnum):
    """Stan węzła w bieżącym przebiegu obliczeń."""
    UNSET = "unset"
    SET   = "set"
