import logging

import pytest

from fuzzy_model import Modifier, ParseError
from rule_parser import ErrorCode, RuleParser


@pytest.fixture
def parser(climate_model):
    return RuleParser(climate_model.sets)


def _codes(report):
    return [e.code for e in report.errors]


# ---------------------------------------------------------------------------
# Poprawne reguły
# ---------------------------------------------------------------------------

def test_parse_simple_rule(parser, climate_model):
    report = parser.parse("if temperature.cold then power.high")
    assert report.is_valid
    assert report.errors == []
    assert report.warnings == []

    rule = report.rule
    assert len(rule.antecedents) == 1
    assert rule.antecedents[0].label == "temperature.cold"
    assert rule.consequent.label == "power.high"
    assert rule.consequent.set_handle == climate_model.sets.get("power").handle
    assert rule.consequent.value_handle == climate_model.sets.value("power", "high").handle


def test_parse_normalizes_case_and_whitespace(parser):
    report = parser.parse("   IF  Temperature.Cold   AND temperature.HOT  THEN  power.High ")
    assert report.is_valid
    assert report.rule.text == "if temperature.cold and temperature.hot then power.high"
    assert [a.label for a in report.rule.atoms] == [
        "temperature.cold", "temperature.hot", "power.high",
    ]


def test_parse_modifiers_in_order(parser):
    report = parser.parse("if temperature.muy.no.cold then power.high")
    assert report.is_valid
    assert report.rule.antecedents[0].modifiers == (Modifier.VERY, Modifier.NOT)
    assert str(report.rule.antecedents[0]) == "temperature.very.not.cold"


@pytest.mark.parametrize(
    "token, expected",
    [
        ("very", Modifier.VERY),
        ("muy", Modifier.VERY),
        ("slightly", Modifier.SLIGHTLY),
        ("little", Modifier.SLIGHTLY),
        ("few", Modifier.SLIGHTLY),
        ("ligeramente", Modifier.SLIGHTLY),
        ("algo", Modifier.SLIGHTLY),
        ("not", Modifier.NOT),
        ("no", Modifier.NOT),
    ],
)
def test_modifier_keywords(parser, token, expected):
    report = parser.parse(f"if temperature.{token}.cold then power.high")
    assert report.rule.antecedents[0].modifiers == (expected,)


def test_unknown_modifier_dropped_with_warning(parser, caplog):
    with caplog.at_level(logging.WARNING, logger="rule_parser.parser"):
        report = parser.parse("if temperature.extremely.very.cold then power.high")
    assert report.is_valid
    assert report.rule.antecedents[0].modifiers == (Modifier.VERY,)
    assert len(report.warnings) == 1
    assert "extremely" in report.warnings[0]
    assert "extremely" in caplog.text


def test_consequent_modifiers_warn(parser):
    report = parser.parse("if temperature.cold then power.very.high")
    assert report.is_valid
    assert report.rule.consequent.modifiers == (Modifier.VERY,)
    assert any("power.very.high" in w for w in report.warnings)


# ---------------------------------------------------------------------------
# Błędy
# ---------------------------------------------------------------------------

def test_missing_if(parser):
    report = parser.parse("temperature.cold then power.high")
    assert not report.is_valid
    assert report.rule is None
    assert _codes(report) == [ErrorCode.MISSING_IF]


def test_missing_then(parser):
    report = parser.parse("if temperature.cold power.high")
    assert _codes(report) == [ErrorCode.MISSING_THEN]


def test_missing_dot(parser):
    report = parser.parse("if temperature then power.high")
    assert _codes(report) == [ErrorCode.MISSING_DOT]
    assert report.errors[0].atom_index == 0


def test_unknown_set(parser):
    report = parser.parse("if pressure.low then power.high")
    assert _codes(report) == [ErrorCode.UNKNOWN_SET]
    assert "pressure" in report.errors[0].message


def test_unknown_value(parser):
    report = parser.parse("if temperature.cold then power.medium")
    assert _codes(report) == [ErrorCode.UNKNOWN_VALUE]
    assert report.errors[0].atom_index == 1


def test_all_atom_errors_reported(parser):
    report = parser.parse("if pressure.low and temperature.warm then power")
    assert _codes(report) == [
        ErrorCode.UNKNOWN_SET,
        ErrorCode.UNKNOWN_VALUE,
        ErrorCode.MISSING_DOT,
    ]
    assert [e.atom_index for e in report.errors] == [0, 1, 2]


def test_conclusion_with_and_rejected(parser):
    report = parser.parse("if temperature.cold then power.high and power.low")
    assert not report.is_valid
    assert report.rule is None
    assert _codes(report) == [ErrorCode.EXTRA_CONSEQUENT]
    assert report.errors[0].atom_index == 1


def test_second_then_rejected(parser):
    report = parser.parse("if temperature.cold and temperature.hot then power.high then power.low")
    assert _codes(report) == [ErrorCode.EXTRA_CONSEQUENT]
    assert report.errors[0].atom_index == 2


def test_rules_add_rejects_two_conclusions(climate_model):
    with pytest.raises(ParseError):
        climate_model.rules.add("if temperature.cold then power.high and power.low")
    assert len(climate_model.rules) == 2


# ---------------------------------------------------------------------------
# Rules (kolekcja modelu)
# ---------------------------------------------------------------------------

def test_rules_add_raises_parse_error(climate_model):
    before = len(climate_model.rules)
    with pytest.raises(ParseError) as exc_info:
        climate_model.rules.add("if temperature.warm then power.high")
    assert exc_info.value.report.errors[0].code == ErrorCode.UNKNOWN_VALUE
    assert exc_info.value.text == "if temperature.warm then power.high"
    assert len(climate_model.rules) == before


def test_rules_check_does_not_add(climate_model):
    before = len(climate_model.rules)
    report = climate_model.rules.check("if temperature.hot then power.high")
    assert report.is_valid
    assert len(climate_model.rules) == before


def test_rules_remove_and_index(climate_model):
    assert str(climate_model.rules[0]) == "if temperature.cold then power.high"
    climate_model.rules.remove(0)
    assert len(climate_model.rules) == 1
    assert str(climate_model.rules[0]) == "if temperature.hot then power.low"
    climate_model.rules.remove(5)
    assert len(climate_model.rules) == 1
