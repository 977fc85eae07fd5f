"""
Struktury danych dla reguł rozmytych (rules).

Reguła:  if A.cold and B.very.low then C.high

  RuleAtom — odwołanie do wartości (set_handle, value_handle) + modyfikatory
  Rule     — tekst źródłowy + krotka atomów; ostatni atom to konkluzja,
             wcześniejsze to przesłanki łączone przez AND
  Rules    — uporządkowana kolekcja reguł modelu
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from .common import Handle
from .errors import ParseError

if TYPE_CHECKING:
    from rule_parser.types import ParseReport
    from .sets import Sets


# ---------------------------------------------------------------------------
# Modifier
# ---------------------------------------------------------------------------

class Modifier(StrEnum):
    """Modyfikator lingwistyczny stosowany do stopnia prawdy przesłanki."""
    VERY     = "very"
    SLIGHTLY = "slightly"
    NOT      = "not"

    def apply(self, degree: float) -> float:
        match self:
            case Modifier.VERY:
                return degree * degree
            case Modifier.SLIGHTLY:
                return math.sqrt(degree)
            case Modifier.NOT:
                return 1.0 - degree


# ---------------------------------------------------------------------------
# RuleAtom
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class RuleAtom:
    """
    Jeden człon reguły: set[.modyfikator]*.wartość.

    - set_handle:   uchwyt zbioru
    - value_handle: uchwyt wartości w tym zbiorze
    - modifiers:    modyfikatory w kolejności zapisu (stosowane od lewej)
    - label:        "set.value" do komunikatów
    """
    set_handle: Handle
    value_handle: Handle
    modifiers: tuple[Modifier, ...] = ()
    label: str = ""

    def apply(self, degree: float) -> float:
        """Stosuje modyfikatory po kolei (very.not → najpierw very, potem not)."""
        for modifier in self.modifiers:
            degree = modifier.apply(degree)
        return degree

    def __str__(self) -> str:
        if not self.label:
            return f"{self.set_handle}.{self.value_handle}"
        set_name, _, value_name = self.label.partition(".")
        mods = "".join(f"{m}." for m in self.modifiers)
        return f"{set_name}.{mods}{value_name}"


# ---------------------------------------------------------------------------
# Rule
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Rule:
    """
    Reguła rozmyta: antecedents → consequent.

    Niezmienna po sparsowaniu. atoms ma co najmniej dwa elementy.
    """
    text: str
    atoms: tuple[RuleAtom, ...]

    @property
    def antecedents(self) -> tuple[RuleAtom, ...]:
        return self.atoms[:-1]

    @property
    def consequent(self) -> RuleAtom:
        return self.atoms[-1]

    def references(self, handle: Handle) -> bool:
        """Czy któryś atom wskazuje zbiór lub wartość o tym uchwycie."""
        return any(handle in (a.set_handle, a.value_handle) for a in self.atoms)

    def __str__(self) -> str:
        body = " and ".join(str(a) for a in self.antecedents)
        return f"if {body} then {self.consequent}"


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

class Rules:
    """Reguły modelu; parsowane względem zbiorów tego samego modelu."""

    def __init__(self, sets: Sets) -> None:
        self._sets = sets
        self._rules: list[Rule] = []

    def add(self, text: str) -> Rule:
        """
        Parsuje i dodaje regułę.

        Raises:
            ParseError gdy tekst jest niepoprawny (zbiór/wartość nie istnieje,
            brak 'if'/'then', brak '.').
        """
        report = self.check(text)
        if not report.is_valid or report.rule is None:
            raise ParseError(report, text.strip())
        self._rules.append(report.rule)
        return report.rule

    def check(self, text: str) -> ParseReport:
        """Parsuje tekst reguły bez dodawania — zwraca pełny raport."""
        from rule_parser.parser import RuleParser
        return RuleParser(self._sets).parse(text)

    def remove(self, index: int) -> None:
        if 0 <= index < len(self._rules):
            del self._rules[index]

    def remove_referencing(self, handle: Handle) -> int:
        """Usuwa reguły odwołujące się do zbioru lub wartości; zwraca ich liczbę."""
        before = len(self._rules)
        self._rules = [r for r in self._rules if not r.references(handle)]
        return before - len(self._rules)

    def clear(self) -> None:
        self._rules.clear()

    def __getitem__(self, index: int) -> Rule:
        return self._rules[index]

    def __iter__(self) -> Iterator[Rule]:
        return iter(list(self._rules))

    def __len__(self) -> int:
        return len(self._rules)
