"""
fuzzy_model — struktury danych modelu rozmytego.

Użycie:
  from fuzzy_model import Model, load_model, Modifier, ...

Moduły:
  common    — Identity, HandleAllocator, normalize_name
  errors    — FuzzyError i pochodne
  functions — MembershipFunction, FunctionCatalog, standard_catalog, funkcje standardowe
  values    — Value (funkcja + dziedzina [min, max] + parametry)
  sets      — Set, Sets
  rules     — Modifier, RuleAtom, Rule, Rules
  model     — Model (zbiory + reguły + katalog)
  storage   — odczyt/zapis modelu w formacie INI
"""

from .common import (
    Handle,
    INVALID_HANDLE,
    Identity,
    HandleAllocator,
    normalize_name,
)
from .errors import (
    FuzzyError,
    ParseError,
    MissingResultError,
    CyclicChainError,
    DanglingRuleError,
    InvalidArgumentError,
    ModelFileError,
)
from .functions import (
    MembershipFunction,
    FunctionCatalog,
    STANDARD_FUNCTIONS,
    standard_catalog,
    gauss_bell,
    s_curve,
    inverse_s_curve,
    triangle,
    inverse_triangle,
    interpolate,
)
from .values import Value
from .sets import Set, Sets
from .rules import Modifier, RuleAtom, Rule, Rules
from .model import Model
from .storage import (
    CONFIGURATION_HINT,
    load_model,
    loads_model,
    save_model,
    dumps_model,
)

__all__ = [
    # common
    "Handle",
    "INVALID_HANDLE",
    "Identity",
    "HandleAllocator",
    "normalize_name",
    # errors
    "FuzzyError",
    "ParseError",
    "MissingResultError",
    "CyclicChainError",
    "DanglingRuleError",
    "InvalidArgumentError",
    "ModelFileError",
    # functions
    "MembershipFunction",
    "FunctionCatalog",
    "STANDARD_FUNCTIONS",
    "standard_catalog",
    "gauss_bell",
    "s_curve",
    "inverse_s_curve",
    "triangle",
    "inverse_triangle",
    "interpolate",
    # values / sets / rules / model
    "Value",
    "Set",
    "Sets",
    "Modifier",
    "RuleAtom",
    "Rule",
    "Rules",
    "Model",
    # storage
    "CONFIGURATION_HINT",
    "load_model",
    "loads_model",
    "save_model",
    "dumps_model",
]
