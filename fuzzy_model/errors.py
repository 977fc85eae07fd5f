"""
fuzzy_model/errors.py — hierarchia wyjątków biblioteki.

FuzzyError             — wspólna baza
  ParseError           — błędny tekst reguły (ścieżka odwracalna, niesie ParseReport)
  MissingResultError   — reguła odwołuje się do wartości bez policzonego stopnia
  CyclicChainError     — cykl w łańcuchu zależności zbiorów
  DanglingRuleError    — reguła wskazuje usunięty zbiór lub wartość
  InvalidArgumentError — zła liczba/parzystość parametrów, pusta krzywa, złe granice
  ModelFileError       — uszkodzony plik modelu (INI)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rule_parser.types import ParseReport


class FuzzyError(Exception):
    """Baza wszystkich błędów biblioteki."""


class ParseError(FuzzyError):
    """
    Tekst reguły nie daje się sparsować.

    - report: pełny ParseReport (wszystkie błędy i ostrzeżenia)
    - text:   tekst reguły, której dotyczy błąd
    """

    def __init__(self, report: ParseReport, text: str = "") -> None:
        self.report = report
        self.text   = text
        first = report.errors[0].message if report.errors else "nieznany błąd"
        super().__init__(f"Nie można sparsować reguły '{text}': {first}")


class MissingResultError(FuzzyError):
    """Brak zapamiętanego stopnia prawdy dla wartości użytej w regule."""


class CyclicChainError(FuzzyError):
    """Zbiór zależy (pośrednio) od samego siebie."""


class DanglingRuleError(FuzzyError):
    """Reguła modelu odwołuje się do zbioru lub wartości, których już nie ma."""


class InvalidArgumentError(FuzzyError, ValueError):
    """Niepoprawne argumenty funkcji przynależności lub obliczeń."""


class ModelFileError(FuzzyError):
    """Plik modelu nie ma wymaganej sekcji, klucza lub poprawnej liczby."""
