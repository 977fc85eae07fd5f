"""
rule_parser/types.py — kody błędów i struktury raportu parsowania.

ParseIssue  — pojedynczy błąd z kodem, indeksem atomu i komunikatem.
ParseReport — wynik parsowania: is_valid, errors, warnings,
    sparsowana reguła (None gdy są błędy).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from fuzzy_model.rules import Rule


class ErrorCode(StrEnum):
    """Stałe kody błędów parsera reguł."""

    # struktura zdania
    MISSING_IF       = "E_MISSING_IF"
    MISSING_THEN     = "E_MISSING_THEN"
    EMPTY_ATOM       = "E_EMPTY_ATOM"
    EXTRA_CONSEQUENT = "E_EXTRA_CONSEQUENT"

    # atomy set[.mod]*.value
    MISSING_DOT      = "E_MISSING_DOT"
    UNKNOWN_SET      = "E_UNKNOWN_SET"
    UNKNOWN_VALUE    = "E_UNKNOWN_VALUE"


@dataclass(slots=True)
class ParseIssue:
    """
    Pojedynczy błąd parsowania.

    - code:       stały identyfikator klasy błędu (ErrorCode)
    - atom_index: 0-based indeks atomu (None dla błędów całego zdania);
                  ostatni indeks to konkluzja
    - message:    czytelny opis błędu
    """

    code: ErrorCode
    atom_index: int | None
    message: str


@dataclass(slots=True)
class ParseReport:
    """
    Wynik parsowania reguły.

    - is_valid: True gdy brak błędów (warnings nie wpływają)
    - errors:   lista błędów (ParseIssue)
    - warnings: lista ostrzeżeń (np. nieznane modyfikatory)
    - rule:     sparsowana reguła (None gdy są błędy)
    """

    is_valid: bool
    errors: list[ParseIssue] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    rule: Rule | None = None
