"""
inference/engine.py — silnik wnioskowania rozmytego.

Obsługuje:
  - łańcuch przetwarzania: zbiór wyjściowy zależy od zbiorów, których wartości
    występują w przesłankach jego reguł
  - leniwe, rekurencyjne liczenie węzłów z zapamiętaniem wyniku w przebiegu
  - reguły: AND = minimum po przesłankach, OR = maksimum po regułach
    z tą samą konkluzją
  - rozmycie: FL_CRV_COUNT + 1 próbek w [set.min(), set.max()]
  - wyostrzenie: środek pola metodą bisekcji (jedno przejście)

Ograniczenia:
  - Węzeł bez wejść jest czystym wejściem — jego wynik ustawia wywołujący.
  - Cykl w zależnościach zbiorów kończy się CyclicChainError.
"""

from __future__ import annotations

import itertools
import logging
import math
import pathlib
from collections.abc import Mapping
from types import MappingProxyType

from fuzzy_model.common import Handle, normalize_name
from fuzzy_model.errors import (
    CyclicChainError,
    DanglingRuleError,
    InvalidArgumentError,
    MissingResultError,
)
from fuzzy_model.model import Model
from fuzzy_model.rules import Rule, RuleAtom
from fuzzy_model.sets import Set

from .types import FL_CRV_COUNT, Curve, ExecStatus

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(message)s"

_engine_ids = itertools.count(1)


def _sync_logger_level() -> None:
    """Poziom loggera modułu = najniższy poziom otwartych dzienników silników."""
    levels = [h.level for h in logger.handlers]
    logger.setLevel(min(levels) if levels else logging.NOTSET)


# ---------------------------------------------------------------------------
# Wyostrzanie
# ---------------------------------------------------------------------------

def defuzzify(curve: Curve) -> float:
    """
    Wyostrza krzywą metodą bisekcji pola.

    Dwa kursory startują z obu końców krzywej; w każdym kroku przesuwa się ten,
    po którego stronie zgromadzone pole jest mniejsze (remis: lewy), dodając
    jeden trapez. Koniec gdy kursory sąsiadują; wynik to środek między nimi.
    Błąd przybliżenia: ± połowa odstępu próbek.

    Raises:
        InvalidArgumentError gdy krzywa jest pusta.
    """
    if not curve:
        raise InvalidArgumentError("Brak danych do obliczeń — pusta krzywa.")

    left    = 0.0
    right   = 0.0
    i_left  = 0
    i_right = len(curve) - 1
    go_left = True

    while i_left + 1 < i_right:
        if go_left:
            (x0, y0), (x1, y1) = curve[i_left], curve[i_left + 1]
            left   += (x1 - x0) * (y1 + y0) / 2.0
            i_left += 1
        else:
            (x0, y0), (x1, y1) = curve[i_right - 1], curve[i_right]
            right   += (x1 - x0) * (y1 + y0) / 2.0
            i_right -= 1
        go_left = left <= right

    return (curve[i_left][0] + curve[i_right][0]) / 2.0


# ---------------------------------------------------------------------------
# ExecutionNode
# ---------------------------------------------------------------------------

class ExecutionNode:
    """
    Stan obliczeń jednego zbioru.

    Atrybuty publiczne:
      fuzzy_set   — zbiór, którego dotyczy węzeł
      inputs      — węzły, od których zależy (pożyczone z tabeli silnika)
      rules       — reguły z konkluzją w tym zbiorze (pożyczone z modelu)
      limits      — value_handle -> górne ograniczenie z reguł
      result      — ostatni wynik (NaN dopóki nie ustawiony)
      status      — ExecStatus.UNSET | ExecStatus.SET
      evaluations — ile razy węzeł liczył reguły i krzywą
    """

    def __init__(
        self,
        fuzzy_set: Set,
        results: dict[Handle, float],
        curve_samples: int = FL_CRV_COUNT,
        log: logging.Logger | logging.LoggerAdapter = logger,
    ) -> None:
        self.fuzzy_set = fuzzy_set
        self.inputs: dict[Handle, ExecutionNode] = {}
        self.rules: list[Rule] = []
        self.limits: dict[Handle, float] = {v.handle: 0.0 for v in fuzzy_set}
        self.result: float = math.nan
        self.status: ExecStatus = ExecStatus.UNSET
        self.evaluations = 0

        self._results = results
        self._samples = curve_samples
        self._log     = log
        self._busy    = False

    def __repr__(self) -> str:
        return (
            f"ExecutionNode({self.name!r}, inputs={sorted(n.name for n in self.inputs.values())}, "
            f"rules={len(self.rules)}, status={self.status})"
        )

    @property
    def name(self) -> str:
        return self.fuzzy_set.name

    @property
    def is_input(self) -> bool:
        """Czyste wejście: brak zależności, wynik ustawia wywołujący."""
        return not self.inputs

    # ------------------------------------------------------------------
    # Łańcuch przetwarzania
    # ------------------------------------------------------------------

    def add(self, handle: Handle, node: ExecutionNode) -> None:
        """Dodaje węzeł wejściowy; ponowne dodanie tego samego zbioru nic nie zmienia."""
        self.inputs.setdefault(handle, node)

    def remove(self, handle: Handle) -> None:
        self.inputs.pop(handle, None)

    def clear(self) -> None:
        for value in self.fuzzy_set:
            self._results.pop(value.handle, None)
        self.inputs.clear()
        self.rules.clear()

    def set(self) -> None:
        self.status = ExecStatus.SET

    def unset(self) -> None:
        self.status = ExecStatus.UNSET

    # ------------------------------------------------------------------
    # Obliczenia
    # ------------------------------------------------------------------

    def execute(self, x: float) -> float:
        """
        Zapisuje wynik x: liczy stopnie prawdy wszystkich wartości zbioru
        do wspólnej pamięci wyników i oznacza węzeł jako SET.
        """
        if self.result != x or not self._has_degrees():
            self._results.update(self.fuzzy_set.degree_of_truth_all(x))
            self.result = x
        self.status = ExecStatus.SET
        return x

    def calculate(self) -> float:
        """
        Zwraca wynik węzła, licząc go gdy trzeba.

        Czyste wejście i węzeł już policzony w tym przebiegu zwracają wynik
        z pamięci. W przeciwnym razie najpierw liczone są wejścia, potem
        ograniczenia z reguł, krzywa i jej wyostrzenie.

        Raises:
            MissingResultError — przesłanka bez policzonego stopnia prawdy
            CyclicChainError   — węzeł zależy od samego siebie
        """
        if not self.inputs:
            return self.result

        if self.status is ExecStatus.SET:
            return self.result

        if self._busy:
            raise CyclicChainError(
                f"Cykl w łańcuchu zależności: zbiór '{self.name}' zależy od samego siebie."
            )

        self._busy = True
        try:
            for node in self.inputs.values():
                node.calculate()

            self.set_limits()
            result = defuzzify(self.fuzzify())
        finally:
            self._busy = False

        self.evaluations += 1
        if self._log.isEnabledFor(logging.DEBUG):
            limits = {v.name: round(self.limits.get(v.handle, 0.0), 6) for v in self.fuzzy_set}
            self._log.debug("calc set=%s limits=%s result=%.6g", self.name, limits, result)
        return self.execute(result)

    def rule_result(self, atom: RuleAtom) -> float:
        """Stopień prawdy przesłanki po zastosowaniu modyfikatorów."""
        degree = self._results.get(atom.value_handle)
        if degree is None:
            raise MissingResultError(
                f"Brak zapamiętanego wyniku dla wartości '{atom.label or atom.value_handle}'."
            )
        return atom.apply(degree)

    def reset_limits(self) -> None:
        for handle in self.limits:
            self.limits[handle] = 0.0

    def set_limits(self) -> None:
        """AND (minimum) w obrębie reguły, OR (maksimum) między regułami."""
        self.reset_limits()
        for rule in self.rules:
            strength = 1.0
            for atom in rule.antecedents:
                strength = min(strength, self.rule_result(atom))

            target = rule.consequent.value_handle
            self.limits[target] = max(self.limits.get(target, 0.0), strength)

    def fuzzify(self) -> Curve:
        """
        Próbkuje zbiór: dla każdego x maksimum po wartościach z
        min(stopień(x), ograniczenie wartości).
        """
        lo, hi  = self.fuzzy_set.min(), self.fuzzy_set.max()
        values  = list(self.fuzzy_set)
        samples = self._samples
        curve: Curve = []

        for i in range(samples + 1):
            x = lo + i * (hi - lo) / samples
            y = 0.0
            for value in values:
                y = max(y, min(value.membership(x), self.limits.get(value.handle, 0.0)))
            curve.append((x, y))

        return curve

    # ------------------------------------------------------------------

    def _has_degrees(self) -> bool:
        return all(v.handle in self._results for v in self.fuzzy_set)


# ---------------------------------------------------------------------------
# InferenceEngine
# ---------------------------------------------------------------------------

class InferenceEngine:
    """
    Silnik wnioskowania dla jednego modelu.

    Użycie::

        engine = InferenceEngine(model)
        engine.set_input("temperature", 18.5)
        engine.recalculate()
        power = engine.get_output("power")
    """

    def __init__(self, model: Model | None = None, curve_samples: int = FL_CRV_COUNT) -> None:
        if curve_samples < 1:
            raise InvalidArgumentError(f"curve_samples musi być >= 1, podano {curve_samples}.")

        self.curve_samples = curve_samples

        self._model: Model | None = None
        self._nodes: dict[Handle, ExecutionNode] = {}
        self._results: dict[Handle, float] = {}
        self._id  = next(_engine_ids)
        self._log = logging.LoggerAdapter(logger, {"engine": self._id})
        self._log_handler: logging.FileHandler | None = None

        if model is not None:
            self.bind(model)

    # ------------------------------------------------------------------
    # Model i łańcuch przetwarzania
    # ------------------------------------------------------------------

    @property
    def model(self) -> Model | None:
        return self._model

    @property
    def nodes(self) -> Mapping[Handle, ExecutionNode]:
        return MappingProxyType(self._nodes)

    def bind(self, model: Model) -> None:
        """Wiąże silnik z modelem; zmiana modelu przebudowuje łańcuch."""
        if model is self._model:
            return
        self._model = model
        self.rebuild()

    def rebuild(self) -> None:
        """Tworzy węzły od nowa i wypełnia zależności na podstawie reguł."""
        self._destroy_nodes()
        if self._model is None:
            return

        for fuzzy_set in self._model.sets:
            self._nodes[fuzzy_set.handle] = ExecutionNode(
                fuzzy_set, self._results, self.curve_samples, self._log,
            )

        try:
            for rule in self._model.rules:
                self._check_rule(rule)
        except DanglingRuleError:
            self._destroy_nodes()
            raise

        for rule in self._model.rules:
            out_node = self._nodes[rule.consequent.set_handle]
            out_node.rules.append(rule)
            for atom in rule.antecedents:
                out_node.add(atom.set_handle, self._nodes[atom.set_handle])

        self._log.debug(
            "bind model=%s inputs=%s outputs=%s rules=%d",
            self._model.name,
            [n.name for n in self._nodes.values() if n.is_input],
            [n.name for n in self._nodes.values() if not n.is_input],
            len(self._model.rules),
        )

    def _check_rule(self, rule: Rule) -> None:
        for atom in rule.atoms:
            node = self._nodes.get(atom.set_handle)
            if node is None or node.fuzzy_set.get(atom.value_handle) is None:
                raise DanglingRuleError(
                    f"Reguła '{rule.text}' odwołuje się do nieistniejącej wartości "
                    f"'{atom.label or atom.value_handle}'."
                )

    def _destroy_nodes(self) -> None:
        for node in self._nodes.values():
            node.clear()
        self._nodes.clear()
        self._results.clear()

    def node(self, key: str | Handle) -> ExecutionNode | None:
        """Węzeł po uchwycie zbioru lub nazwie zbioru."""
        if isinstance(key, str):
            name = normalize_name(key)
            return next((n for n in self._nodes.values() if n.name == name), None)
        return self._nodes.get(key)

    # ------------------------------------------------------------------
    # Wejścia / obliczenia / wyjścia
    # ------------------------------------------------------------------

    def input(self, key: str | Handle, x: float) -> None:
        """Ustawia wartość czystego wejścia (bez wywołania calculate())."""
        node = self.node(key)
        if node is None:
            self._log.debug("input: nieznany zbiór %r — pominięty", key)
            return
        node.execute(float(x))

    set_input = input

    def calculate(self) -> None:
        """Oznacza wszystkie wyjścia jako nieustawione i liczy cały łańcuch."""
        if self._model is None:
            return

        for node in self._nodes.values():
            if node.inputs:
                node.unset()

        for node in self._nodes.values():
            node.calculate()

    recalculate = calculate

    def output(self, key: str | Handle) -> float:
        """Wynik zbioru; 0.0 gdy zbiór nie istnieje."""
        node = self.node(key)
        return node.result if node is not None else 0.0

    get_output = output

    def get_degree(self, key: Handle | str | tuple[str | Handle, str | Handle]) -> float:
        """
        Ostatni stopień prawdy wartości.

        key: uchwyt wartości, para (zbiór, wartość) albo tekst "zbiór.wartość".
        Zwraca 0.0 gdy wartość nie istnieje lub nie była liczona.
        """
        handle = self._value_handle(key)
        if handle is None:
            return 0.0
        return self._results.get(handle, 0.0)

    def degrees(self, key: str | Handle) -> dict[str, float]:
        """Stopnie prawdy wszystkich wartości zbioru (nazwa -> stopień)."""
        node = self.node(key)
        if node is None:
            return {}
        return {v.name: self._results.get(v.handle, 0.0) for v in node.fuzzy_set}

    def curve(self, key: str | Handle) -> Curve:
        """Krzywa zbioru dla bieżących ograniczeń (diagnostyka, bez zmiany stanu)."""
        node = self.node(key)
        if node is None:
            return []
        return node.fuzzify()

    def _value_handle(self, key: Handle | str | tuple[str | Handle, str | Handle]) -> Handle | None:
        if self._model is None:
            return None
        if isinstance(key, tuple):
            set_key, value_key = key
        elif isinstance(key, str):
            set_key, sep, value_key = key.partition(".")
            if not sep:
                return None
        else:
            owner = self._model.sets.owner_of(key)
            return key if owner is not None else None

        value = self._model.sets.value(set_key, value_key)
        return value.handle if value is not None else None

    # ------------------------------------------------------------------
    # Dziennik obliczeń
    # ------------------------------------------------------------------

    @property
    def is_logging(self) -> bool:
        return self._log_handler is not None

    def log_open(self, path: str | pathlib.Path, level: int = logging.DEBUG) -> bool:
        """
        Otwiera (i czyści) plik dziennika obliczeń tego silnika.

        Wszystkie silniki piszą przez wspólny logger modułu; filtr handlera
        przepuszcza tylko rekordy oznaczone identyfikatorem tego silnika.
        """
        if self._log_handler is None:
            engine_id = self._id
            handler = logging.FileHandler(path, mode="w", encoding="utf-8")
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            handler.setLevel(level)
            handler.addFilter(lambda record: getattr(record, "engine", None) == engine_id)
            logger.addHandler(handler)
            self._log_handler = handler
            _sync_logger_level()
        return True

    def log_close(self) -> bool:
        if self._log_handler is not None:
            logger.removeHandler(self._log_handler)
            self._log_handler.close()
            self._log_handler = None
            _sync_logger_level()
        return True
