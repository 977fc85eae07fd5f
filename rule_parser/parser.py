"""
rule_parser/parser.py — parser tekstu reguł rozmytych.

RuleParser(sets).parse(text) -> ParseReport

Składnia (po przycięciu i zamianie na małe litery):

    if <atom> [and <atom>]* then <atom>
    atom := set_name[.modyfikator]*.value_name

Modyfikatory:
  very, muy                                   → Modifier.VERY
  slightly, little, few, ligeramente, algo    → Modifier.SLIGHTLY
  not, no                                     → Modifier.NOT

Nieznane modyfikatory są pomijane i raportowane jako ostrzeżenie.
"""

from __future__ import annotations

import logging

from fuzzy_model.rules import Modifier, Rule, RuleAtom
from fuzzy_model.sets import Sets

from .types import ErrorCode, ParseIssue, ParseReport

logger = logging.getLogger(__name__)

MODIFIER_TOKENS: dict[str, Modifier] = {
    "very":        Modifier.VERY,
    "muy":         Modifier.VERY,
    "slightly":    Modifier.SLIGHTLY,
    "little":      Modifier.SLIGHTLY,
    "few":         Modifier.SLIGHTLY,
    "ligeramente": Modifier.SLIGHTLY,
    "algo":        Modifier.SLIGHTLY,
    "not":         Modifier.NOT,
    "no":          Modifier.NOT,
}

_IF   = "if "
_THEN = " then "
_AND  = " and "


def _normalize_ws(s: str) -> str:
    return " ".join(s.split())


# ---------------------------------------------------------------------------
# RuleParser
# ---------------------------------------------------------------------------

class RuleParser:
    """
    Parser reguł względem zbiorów modelu.

    Użycie:
        report = RuleParser(model.sets).parse("if temp.very.cold then heat.high")
        if not report.is_valid:
            for e in report.errors:
                print(e.code, e.atom_index, e.message)
    """

    def __init__(self, sets: Sets) -> None:
        self._sets = sets

    # ------------------------------------------------------------------
    # Publiczny interfejs
    # ------------------------------------------------------------------

    def parse(self, text: str) -> ParseReport:
        errors: list[ParseIssue] = []
        warnings: list[str] = []

        source = _normalize_ws(text).lower()

        if not source.startswith(_IF):
            errors.append(ParseIssue(
                code=ErrorCode.MISSING_IF,
                atom_index=None,
                message="Nie znaleziono klauzuli 'if'.",
            ))
            return ParseReport(is_valid=False, errors=errors, warnings=warnings)

        body = source[len(_IF):]
        conditions, sep, conclusion = body.partition(_THEN)
        if not sep:
            errors.append(ParseIssue(
                code=ErrorCode.MISSING_THEN,
                atom_index=None,
                message="Nie znaleziono klauzuli 'then'.",
            ))
            return ParseReport(is_valid=False, errors=errors, warnings=warnings)

        if _AND in conclusion or _THEN in conclusion:
            errors.append(ParseIssue(
                code=ErrorCode.EXTRA_CONSEQUENT,
                atom_index=len(conditions.split(_AND)),
                message=f"Konkluzja '{conclusion}' musi być pojedynczym atomem.",
            ))
            return ParseReport(is_valid=False, errors=errors, warnings=warnings)

        chunks = [*conditions.split(_AND), conclusion]
        atoms: list[RuleAtom] = []
        for i, chunk in enumerate(chunks):
            atom = self._parse_atom(i, chunk, errors, warnings)
            if atom is not None:
                atoms.append(atom)

        if atoms and not errors and atoms[-1].modifiers:
            warnings.append(
                f"Modyfikatory konkluzji '{atoms[-1]}' nie wpływają na wynik."
            )

        for w in warnings:
            logger.warning("%s [reguła: %s]", w, source)

        if errors:
            return ParseReport(is_valid=False, errors=errors, warnings=warnings)

        return ParseReport(
            is_valid=True,
            errors=errors,
            warnings=warnings,
            rule=Rule(text=source, atoms=tuple(atoms)),
        )

    # ------------------------------------------------------------------
    # Atomy
    # ------------------------------------------------------------------

    def _parse_atom(
        self,
        index: int,
        chunk: str,
        errors: list[ParseIssue],
        warnings: list[str],
    ) -> RuleAtom | None:
        chunk = chunk.strip()
        if not chunk:
            errors.append(ParseIssue(
                code=ErrorCode.EMPTY_ATOM,
                atom_index=index,
                message=f"Atom #{index} jest pusty.",
            ))
            return None

        # Co najmniej jedna kropka: set.value
        if "." not in chunk:
            errors.append(ParseIssue(
                code=ErrorCode.MISSING_DOT,
                atom_index=index,
                message=f"Brak operatora '.' w atomie '{chunk}'.",
            ))
            return None

        set_name, _, rest = chunk.partition(".")
        mods_text, _, value_name = rest.rpartition(".")
        set_name   = set_name.strip()
        value_name = value_name.strip()

        fuzzy_set = self._sets.get(set_name)
        if fuzzy_set is None:
            errors.append(ParseIssue(
                code=ErrorCode.UNKNOWN_SET,
                atom_index=index,
                message=f"Nie istnieje zbiór '{set_name}'.",
            ))
            return None

        value = fuzzy_set.get(value_name)
        if value is None:
            errors.append(ParseIssue(
                code=ErrorCode.UNKNOWN_VALUE,
                atom_index=index,
                message=f"Nie istnieje wartość '{value_name}' w zbiorze '{set_name}'.",
            ))
            return None

        return RuleAtom(
            set_handle=fuzzy_set.handle,
            value_handle=value.handle,
            modifiers=self._parse_modifiers(mods_text, chunk, warnings),
            label=f"{fuzzy_set.name}.{value.name}",
        )

    def _parse_modifiers(
        self,
        mods_text: str,
        chunk: str,
        warnings: list[str],
    ) -> tuple[Modifier, ...]:
        modifiers: list[Modifier] = []
        for token in mods_text.split("."):
            token = token.strip()
            if not token:
                continue
            modifier = MODIFIER_TOKENS.get(token)
            if modifier is None:
                warnings.append(f"Nieznany modyfikator '{token}' w atomie '{chunk}' — pominięty.")
                continue
            modifiers.append(modifier)
        return tuple(modifiers)
