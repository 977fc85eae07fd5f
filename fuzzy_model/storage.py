"""
fuzzy_model/storage.py — odczyt i zapis modelu w formacie INI.

Publiczne API:
  load_model(path, catalog=None)        -> Model
  loads_model(text, catalog=None)       -> Model
  save_model(model, path, comments=True)
  dumps_model(model, comments=True)     -> str
  CONFIGURATION_HINT                    przewodnik po formacie (nagłówek pliku)

Układ pliku opisuje CONFIGURATION_HINT.
"""

from __future__ import annotations

import configparser
import pathlib

from .errors import InvalidArgumentError, ModelFileError
from .functions import FunctionCatalog
from .model import Model
from .sets import Set
from .values import Value

SECTION_MODEL = "model"
SECTION_SETS  = "sets"
SECTION_RULES = "rules"

CONFIGURATION_HINT = """\
**********************************************************
    Przewodnik konfiguracji modelu rozmytego
**********************************************************
Plik ma format INI. Obowiązkowe sekcje:

  1. [model]  informacje ogólne: name=<nazwa modelu>
  2. [sets]   lista zbiorów: <nazwa_zbioru>=<liczba_wartości>
  3. [rules]  reguły wiążące zbiory

Dla każdego zbioru z [sets] istnieje sekcja o tej samej nazwie, w której
każda wartość ma wpis <nazwa_wartości>=<nazwa_funkcji>. Funkcje standardowe:

  Gaussian Bell, S-Curve, Inverted S-Curve, Triangle, Inverted Triangle,
  Interpolate

Każda wartość ma własną sekcję [<nazwa_zbioru>_<nazwa_wartości>]:

  min=<liczba>      dolna granica dziedziny funkcji
  max=<liczba>      górna granica dziedziny funkcji
  count=<liczba>    liczba parametrów dodatkowych (0 dla funkcji
                    standardowych; Triangle może mieć 1 = szczyt;
                    Interpolate: 2 na każdy punkt x, y)
  param_0000=...    kolejne parametry dodatkowe (param_0001, ...)

Reguły w sekcji [rules] (rule_001, rule_002, ...):

  if <wejście1> [and <wejście2> ...] then <wyjście>

  wejście := <zbiór>[.<modyfikator>]*.<wartość>
  modyfikator: very, muy, slightly, little, few, ligeramente, algo, not, no

Przykład:

  if temperatura.muy.frio and presion.baja then voltaje.normal
"""


# ---------------------------------------------------------------------------
# Pomocnicze
# ---------------------------------------------------------------------------

def _param_key(index: int) -> str:
    return f"param_{index:04d}"


def _rule_key(index: int) -> str:
    return f"rule_{index + 1:03d}"


def _fmt_number(value: float) -> str:
    value = float(value)
    return str(int(value)) if value.is_integer() else repr(value)


def _new_parser() -> configparser.ConfigParser:
    return configparser.ConfigParser(interpolation=None, delimiters=("=",))


def _section(
    parser: configparser.ConfigParser,
    index: dict[str, str],
    name: str,
) -> configparser.SectionProxy:
    real = index.get(name.lower())
    if real is None:
        raise ModelFileError(f"Brak sekcji [{name}] w pliku modelu.")
    return parser[real]


def _number(section: configparser.SectionProxy, key: str) -> float:
    raw = section.get(key)
    if raw is None:
        raise ModelFileError(f"Brak parametru '{key}' w sekcji [{section.name}].")
    try:
        return float(raw)
    except ValueError:
        raise ModelFileError(
            f"Parametr '{key}' w sekcji [{section.name}] nie jest liczbą: '{raw}'."
        ) from None


# ---------------------------------------------------------------------------
# Odczyt
# ---------------------------------------------------------------------------

def loads_model(text: str, catalog: FunctionCatalog | None = None) -> Model:
    """
    Buduje model z tekstu INI.

    Raises:
        ModelFileError — brak sekcji/klucza, nieznana funkcja, zła liczba
        ParseError     — niepoprawna reguła
    """
    parser = _new_parser()
    try:
        parser.read_string(text)
    except configparser.Error as exc:
        raise ModelFileError(f"Niepoprawny plik INI: {exc}") from exc

    index = {name.lower(): name for name in parser.sections()}

    model_sec = _section(parser, index, SECTION_MODEL)
    model = Model(
        name=model_sec.get("name", ""),
        catalog=catalog,
        description=model_sec.get("description", ""),
    )

    # 1. zbiory
    for set_name in _section(parser, index, SECTION_SETS):
        model.sets.add(set_name)

    # 2. wartości i ich funkcje
    for fuzzy_set in model.sets:
        for value_name, func_name in _section(parser, index, fuzzy_set.name).items():
            value = fuzzy_set.get(fuzzy_set.add(value_name))
            if model.catalog.get(func_name) is None:
                raise ModelFileError(
                    f"Nieznana funkcja '{func_name}' dla wartości "
                    f"'{fuzzy_set.name}.{value_name}'."
                )
            value.set_function(func_name)

    # 3. dziedziny i parametry
    for fuzzy_set in model.sets:
        for value in fuzzy_set:
            _load_value(parser, index, fuzzy_set, value)

    # 4. reguły
    for rule_text in _section(parser, index, SECTION_RULES).values():
        model.rules.add(rule_text)

    return model


def _load_value(
    parser: configparser.ConfigParser,
    index: dict[str, str],
    fuzzy_set: Set,
    value: Value,
) -> None:
    section = _section(parser, index, f"{fuzzy_set.name}_{value.name}")

    count = _number(section, "count")
    if count < 0 or not count.is_integer():
        raise ModelFileError(
            f"Parametr 'count' w sekcji [{section.name}] musi być nieujemną liczbą całkowitą."
        )

    try:
        value.set_bounds(_number(section, "min"), _number(section, "max"))
    except InvalidArgumentError as exc:
        raise ModelFileError(f"Sekcja [{section.name}]: {exc}") from exc

    value.extra_params = [_number(section, _param_key(k)) for k in range(int(count))]


def load_model(path: str | pathlib.Path, catalog: FunctionCatalog | None = None) -> Model:
    """Wczytuje model z pliku INI."""
    path = pathlib.Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ModelFileError(f"Nie można odczytać pliku modelu {path}: {exc}") from exc
    return loads_model(text, catalog)


# ---------------------------------------------------------------------------
# Zapis
# ---------------------------------------------------------------------------

def dumps_model(model: Model, comments: bool = True) -> str:
    """Serializuje model do tekstu INI (z komentarzami gdy comments=True)."""
    out: list[str] = []

    def comment(text: str) -> None:
        if comments:
            out.extend(f"; {line}".rstrip() for line in text.splitlines())

    comment(CONFIGURATION_HINT)
    if comments:
        out.append("")

    # ── [model] ──────────────────────────────────────────────────────────
    comment(model.description)
    out.append(f"[{SECTION_MODEL}]")
    out.append(f"name={model.name}")
    if model.description:
        out.append(f"description={' '.join(model.description.split())}")
    out.append("")

    # ── [sets] ───────────────────────────────────────────────────────────
    comment("Lista zbiorów tworzących model")
    out.append(f"[{SECTION_SETS}]")
    for fuzzy_set in model.sets:
        out.append(f"{fuzzy_set.name}={len(fuzzy_set)}")
    out.append("")

    # ── definicje zbiorów ────────────────────────────────────────────────
    for fuzzy_set in model.sets:
        comment(f"Definicja zbioru {fuzzy_set.name}")
        out.append(f"[{fuzzy_set.name}]")
        for value in fuzzy_set:
            func_name = value.function.name if value.function else ""
            out.append(f"{value.name}={func_name}")
        out.append("")

    # ── definicje wartości ───────────────────────────────────────────────
    for fuzzy_set in model.sets:
        for value in fuzzy_set:
            comment(f"Definicja wartości {fuzzy_set.name}.{value.name}")
            out.append(f"[{fuzzy_set.name}_{value.name}]")
            out.append(f"min={_fmt_number(value.min)}")
            out.append(f"max={_fmt_number(value.max)}")
            out.append(f"count={value.param_count}")
            for k, param in enumerate(value.extra_params):
                out.append(f"{_param_key(k)}={_fmt_number(param)}")
            out.append("")

    # ── [rules] ──────────────────────────────────────────────────────────
    comment("Relacje między zbiorami modelu")
    out.append(f"[{SECTION_RULES}]")
    for i, rule in enumerate(model.rules):
        out.append(f"{_rule_key(i)}={rule.text}")

    return "\n".join(out) + "\n"


def save_model(model: Model, path: str | pathlib.Path, comments: bool = True) -> None:
    """Zapisuje model do pliku INI (UTF-8)."""
    path = pathlib.Path(path)
    try:
        path.write_text(dumps_model(model, comments), encoding="utf-8")
    except OSError as exc:
        raise ModelFileError(f"Nie można zapisać pliku modelu {path}: {exc}") from exc
