"""
rule_parser — parser tekstu reguł rozmytych względem zbiorów modelu.

Interfejs publiczny:
    RuleParser                        — parser (if ... and ... then ...)
    ParseReport, ParseIssue, ErrorCode — typy raportu
    MODIFIER_TOKENS                    — słowa kluczowe modyfikatorów

Typowe użycie:
    from rule_parser import RuleParser

    report = RuleParser(model.sets).parse("if temp.very.cold then heat.high")
    if not report.is_valid:
        for e in report.errors:
            print(e.code, e.atom_index, e.message)
"""

from .types import ErrorCode, ParseIssue, ParseReport
from .parser import MODIFIER_TOKENS, RuleParser

__all__ = [
    "ErrorCode",
    "ParseIssue",
    "ParseReport",
    "MODIFIER_TOKENS",
    "RuleParser",
]
