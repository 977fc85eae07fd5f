"""
fuzzy_model/values.py — wartość (przymiotnik) zbioru: cold, warm, hot.

Value wiąże funkcję przynależności z katalogu z dziedziną [min, max]
i parametrami dodatkowymi. Parametry trzymane są w jednej liście:

    params = [min, max, extra_0, extra_1, ...]
"""

from __future__ import annotations

from collections.abc import Sequence

from .common import Handle, Identity
from .errors import InvalidArgumentError
from .functions import FunctionCatalog, MembershipFunction

DEFAULT_MIN = 0.0
DEFAULT_MAX = 10.0

# Kryterium stopu wspinaczki: kwadrat zmiany wartości funkcji
PEAK_EPSILON = 1.0e-6

# Zabezpieczenie przed brakiem zbieżności
PEAK_MAX_STEPS = 10_000


class Value:
    """
    Wartość należąca do dokładnie jednego zbioru.

    Atrybuty publiczne:
      identity   — Identity(handle, name)
      set_handle — uchwyt zbioru-rodzica (odwołanie przez id, nie wskaźnik)
      degree     — ostatnio policzony stopień prawdy (diagnostyka)
    """

    def __init__(
        self,
        identity: Identity,
        set_handle: Handle,
        catalog: FunctionCatalog,
    ) -> None:
        if not identity.name:
            raise InvalidArgumentError("Nazwa wartości nie może być pusta.")

        self.identity   = identity
        self.set_handle = set_handle
        self.degree: float = 0.0

        self._catalog = catalog
        self._function: MembershipFunction | None = None
        self._params: list[float] = [DEFAULT_MIN, DEFAULT_MAX]
        self._peak_x: float = DEFAULT_MIN

    def __repr__(self) -> str:
        fn = self._function.name if self._function else None
        return f"Value({self.name!r}, min={self.min}, max={self.max}, function={fn!r})"

    # ------------------------------------------------------------------
    # Tożsamość
    # ------------------------------------------------------------------

    @property
    def handle(self) -> Handle:
        return self.identity.handle

    @property
    def name(self) -> str:
        return self.identity.name

    # ------------------------------------------------------------------
    # Dziedzina i parametry
    # ------------------------------------------------------------------

    @property
    def min(self) -> float:
        return self._params[0]

    @property
    def max(self) -> float:
        return self._params[1]

    def set_bounds(self, min_value: float, max_value: float) -> None:
        """Ustawia dziedzinę [min, max] i przelicza punkt szczytu."""
        if min_value > max_value:
            raise InvalidArgumentError(
                f"Wartość '{self.name}': min ({min_value}) > max ({max_value})."
            )
        self._params[0] = float(min_value)
        self._params[1] = float(max_value)
        self._refresh_peak()

    @property
    def params(self) -> list[float]:
        """Kopia pełnej listy parametrów [min, max, *extra]."""
        return list(self._params)

    @property
    def extra_params(self) -> list[float]:
        return self._params[2:]

    @extra_params.setter
    def extra_params(self, values: Sequence[float]) -> None:
        self._params[2:] = [float(v) for v in values]
        self._refresh_peak()

    @property
    def param_count(self) -> int:
        """Liczba parametrów dodatkowych (bez min/max)."""
        return len(self._params) - 2

    def resize(self, param_count: int) -> None:
        """Zmienia liczbę parametrów dodatkowych; nowe sloty mają wartość 0.0."""
        if param_count < 0:
            raise InvalidArgumentError(f"Ujemna liczba parametrów: {param_count}.")
        size = param_count + 2
        del self._params[size:]
        self._params.extend([0.0] * (size - len(self._params)))
        self._refresh_peak()

    def set_param(self, index: int, value: float) -> None:
        if not 0 <= index < self.param_count:
            raise InvalidArgumentError(
                f"Wartość '{self.name}': brak parametru {index} "
                f"(liczba parametrów: {self.param_count})."
            )
        self._params[index + 2] = float(value)
        self._refresh_peak()

    # ------------------------------------------------------------------
    # Funkcja przynależności
    # ------------------------------------------------------------------

    @property
    def function(self) -> MembershipFunction | None:
        return self._function

    def set_function(self, key: str | Handle) -> Handle | None:
        """
        Przypisuje funkcję z katalogu (po nazwie lub uchwycie).

        Nieznana funkcja odpina bieżącą i zwraca None. Po każdej zmianie
        przeliczany jest punkt szczytu.
        """
        self._function = self._catalog.get(key)
        self._refresh_peak()
        return self._function.handle if self._function else None

    @property
    def peak_x(self) -> float:
        """x, dla którego funkcja osiąga maksimum w [min, max]."""
        return self._peak_x

    def degree_of_truth(self, x: float) -> float:
        """
        Stopień prawdy dla wejścia x.

        Bez przypisanej funkcji zwraca 0.0. Wynik nie jest przycinany —
        poza dziedziną niektóre funkcje mogą wyjść poza [0, 1].
        """
        self.degree = self._evaluate(x)
        return self.degree

    def membership(self, x: float) -> float:
        """Jak degree_of_truth, ale bez zapamiętywania wyniku (próbkowanie krzywej)."""
        return self._evaluate(x)

    # ------------------------------------------------------------------

    def _evaluate(self, x: float) -> float:
        if self._function is None:
            return 0.0
        params = self._params if self._function.bounded else self._params[2:]
        return float(self._function.eval(params, x))

    def _refresh_peak(self) -> None:
        if self._function is None:
            self._peak_x = self.min
            return
        try:
            self._peak_x = self._climb_peak()
        except InvalidArgumentError:
            # parametry jeszcze niekompletne (np. Interpolate bez punktów)
            self._peak_x = self.min

    def _climb_peak(self) -> float:
        """
        Wspinaczka od min krokiem (max - min) / 2; przy spadku wartości krok
        jest połowiony i odwracany. Stop gdy kwadrat zmiany < PEAK_EPSILON
        albo po przekroczeniu granicy dziedziny.
        """
        lo, hi = self.min, self.max
        x    = lo
        y    = 0.0
        step = (hi - lo) / 2.0
        dy   = 2.0

        for _ in range(PEAK_MAX_STEPS):
            if dy <= PEAK_EPSILON:
                break
            x  += step
            prev = y
            y    = self._evaluate(x)
            if y < prev:
                step /= -2.0
            dy = (y - prev) ** 2

            if x > hi:
                return hi
            if x < lo:
                return lo

        return x
