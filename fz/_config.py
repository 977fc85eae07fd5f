"""Konfiguracja CLI — przez zmienne środowiskowe."""

from __future__ import annotations

import logging
import os

from inference.types import FL_CRV_COUNT


def curve_samples() -> int:
    return int(os.getenv("FZ_CURVE_SAMPLES", str(FL_CRV_COUNT)))


def log_file() -> str | None:
    return os.getenv("FZ_LOG_FILE") or None


def log_level() -> int:
    name = os.getenv("FZ_LOG_LEVEL", "DEBUG").upper()
    return logging.getLevelNamesMapping().get(name, logging.DEBUG)
