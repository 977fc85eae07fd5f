"""
Wspólne typy pierwotne używane przez values, sets i rules.

  Identity         — para (handle, name) osadzana w każdej encji modelu
  HandleAllocator  — licznik uchwytów należący do jednego modelu
  normalize_name   — przycięcie + małe litery (nazwy są case-insensitive)
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Aliasy typów
# ---------------------------------------------------------------------------

# Uchwyt encji w obrębie jednego modelu; 0 nigdy nie jest wydawane
type Handle = int

INVALID_HANDLE: Handle = 0


def normalize_name(name: str) -> str:
    """Nazwy zbiorów, wartości i funkcji porównujemy po trim + lower."""
    return " ".join(name.split()).lower()


# ---------------------------------------------------------------------------
# Identity
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Identity:
    """
    Tożsamość encji modelu.

    - handle: unikalny w modelu identyfikator liczbowy
    - name:   znormalizowana nazwa (małe litery, bez skrajnych spacji)
    """
    handle: Handle
    name: str

    def __str__(self) -> str:
        return f"{self.name}#{self.handle}"


# ---------------------------------------------------------------------------
# HandleAllocator
# ---------------------------------------------------------------------------

class HandleAllocator:
    """Wydaje kolejne uchwyty (1, 2, 3, ...) dla encji jednego modelu."""

    def __init__(self) -> None:
        self._counter = itertools.count(1)

    def next(self) -> Handle:
        return next(self._counter)

    def identity(self, name: str) -> Identity:
        return Identity(handle=self.next(), name=normalize_name(name))
