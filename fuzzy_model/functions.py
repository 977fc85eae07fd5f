"""
fuzzy_model/functions.py — katalog funkcji przynależności.

Funkcja przynależności ma postać:
    eval(params, x) -> stopień prawdy (oczekiwany w [0, 1] w dziedzinie wartości)

Katalog jest zwykłym obiektem przekazywanym do modelu (brak stanu globalnego),
więc niezależne modele i testy nie współdzielą rejestracji.

Funkcje standardowe (nazwy jak w plikach modeli):
  Gaussian Bell       (p0, p1)
  S-Curve             (p0, p1)
  Inverted S-Curve    (p0, p1)
  Triangle            (p0, p1[, p2])
  Inverted Triangle   (p0, p1[, p2])
  Interpolate         (x0, y0, x1, y1, ...)

Dla funkcji "bounded" wartość przekazuje parametry [min, max, *extra];
Interpolate dostaje wyłącznie listę punktów (extra).
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass

from .common import Handle, normalize_name
from .errors import InvalidArgumentError

# ---------------------------------------------------------------------------
# Aliasy typów
# ---------------------------------------------------------------------------

type MembershipEval = Callable[[Sequence[float], float], float]


# ---------------------------------------------------------------------------
# MembershipFunction
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class MembershipFunction:
    """
    Zarejestrowana funkcja przynależności.

    - handle:      uchwyt w katalogu
    - name:        nazwa wyświetlana (np. "S-Curve"); porównania bez wielkości liter
    - param_count: liczba parametrów dodatkowych poza min/max
    - eval:        (params, x) -> float
    - bounded:     True  → params = [min, max, *extra]
                   False → params = extra (np. punkty interpolacji)
    """
    handle: Handle
    name: str
    param_count: int
    eval: MembershipEval
    bounded: bool = True

    @property
    def key(self) -> str:
        return normalize_name(self.name)

    def __call__(self, params: Sequence[float], x: float) -> float:
        return self.eval(params, x)


# ---------------------------------------------------------------------------
# Funkcje standardowe
# ---------------------------------------------------------------------------

def _require_bounds(name: str, params: Sequence[float]) -> None:
    if len(params) < 2:
        raise InvalidArgumentError(
            f"{name}: wymagane co najmniej 2 parametry, podano {len(params)}."
        )


def gauss_bell(params: Sequence[float], x: float) -> float:
    _require_bounds("gauss_bell", params)
    p0, p1 = params[0], params[1]
    width  = (abs(p0) + abs(p1)) / 2.0
    center = (p0 + p1) / 2.0
    if width == 0.0:
        # zdegenerowana dziedzina: impuls w środku
        return 1.0 if x == center else 0.0
    attenu = -math.log(0.001) / width / width
    return math.exp(-attenu * (x - center) * (x - center))


def s_curve(params: Sequence[float], x: float) -> float:
    _require_bounds("s_curve", params)
    p0, p1 = params[0], params[1]
    if x < p0:
        return 0.0
    if x > p1 or p0 == p1:
        return 1.0

    a      = 2.0 / (p0 - p1) / (p0 - p1)
    center = (p0 + p1) / 2.0
    if x > center:
        return 1.0 - a * (x - p1) * (x - p1)
    return a * (x - p0) * (x - p0)


def inverse_s_curve(params: Sequence[float], x: float) -> float:
    return 1.0 - s_curve(params, x)


def triangle(params: Sequence[float], x: float) -> float:
    _require_bounds("triangle", params)
    p0, p1 = params[0], params[1]
    if not p0 < x < p1:
        return 0.0

    mid = params[2] if len(params) >= 3 else (p0 + p1) / 2.0
    # nachylenie z tej strony szczytu, po której leży x
    b = 1.0 / (mid - (p0 if x < mid else p1))
    a = 1.0 - b * mid
    return a + b * x


def inverse_triangle(params: Sequence[float], x: float) -> float:
    return 1.0 - triangle(params, x)


def interpolate(params: Sequence[float], x: float) -> float:
    """Interpolacja liniowa po punktach (x0, y0, x1, y1, ...) posortowanych po x."""
    count = len(params)
    if count < 2:
        raise InvalidArgumentError(
            f"interpolate: wymagana co najmniej jedna para (x, y), podano {count} parametrów."
        )
    if count % 2:
        raise InvalidArgumentError(
            f"interpolate: liczba parametrów musi być parzysta, podano {count}."
        )

    points = count // 2
    i = 0
    while i < points and params[2 * i] < x:
        i += 1

    if i >= points:
        return params[2 * points - 1]
    if i == 0:
        return params[1]

    x0, y0 = params[2 * (i - 1)], params[2 * i - 1]
    x1, y1 = params[2 * i], params[2 * i + 1]
    return (x - x0) * (y1 - y0) / (x1 - x0) + y0


# (nazwa, param_count, eval, bounded)
STANDARD_FUNCTIONS: tuple[tuple[str, int, MembershipEval, bool], ...] = (
    ("Gaussian Bell",     0, gauss_bell,       True),
    ("S-Curve",           0, s_curve,          True),
    ("Inverted S-Curve",  0, inverse_s_curve,  True),
    ("Triangle",          1, triangle,         True),
    ("Inverted Triangle", 1, inverse_triangle, True),
    ("Interpolate",       0, interpolate,      False),
)


# ---------------------------------------------------------------------------
# FunctionCatalog
# ---------------------------------------------------------------------------

class FunctionCatalog:
    """
    Rejestr funkcji przynależności (tylko dopisywanie).

    Użycie::

        catalog = standard_catalog()
        h       = catalog.register("Flat", 0, lambda p, x: 1.0)
        fn      = catalog.get("flat")        # po nazwie
        fn      = catalog.get(h)             # po uchwycie
        fn      = catalog.at(0)              # po pozycji
    """

    def __init__(self) -> None:
        self._by_handle: dict[Handle, MembershipFunction] = {}
        self._by_name:   dict[str, MembershipFunction]    = {}
        self._next_handle = 1

    def register(
        self,
        name: str,
        param_count: int,
        eval: MembershipEval,
        bounded: bool = True,
    ) -> Handle:
        """
        Rejestruje funkcję i zwraca jej uchwyt.

        Pierwsza rejestracja danej nazwy wygrywa — ponowna rejestracja tej samej
        nazwy (z dowolną funkcją) zwraca istniejący uchwyt bez zmian.

        Raises:
            InvalidArgumentError gdy nazwa jest pusta lub eval nie jest wywoływalne.
        """
        key = normalize_name(name or "")
        if not key:
            raise InvalidArgumentError("Pusta nazwa funkcji przynależności.")
        if not callable(eval):
            raise InvalidArgumentError(f"Funkcja '{name}' nie jest wywoływalna.")
        if param_count < 0:
            raise InvalidArgumentError(f"Ujemna liczba parametrów dla '{name}'.")

        existing = self._by_name.get(key)
        if existing is not None:
            return existing.handle

        func = MembershipFunction(
            handle=self._next_handle,
            name=" ".join(name.split()),
            param_count=param_count,
            eval=eval,
            bounded=bounded,
        )
        self._next_handle += 1
        self._by_handle[func.handle] = func
        self._by_name[key]           = func
        return func.handle

    def get(self, key: str | Handle) -> MembershipFunction | None:
        """Wyszukuje funkcję po nazwie (bez wielkości liter) lub po uchwycie."""
        if isinstance(key, str):
            return self._by_name.get(normalize_name(key))
        return self._by_handle.get(key)

    def at(self, index: int) -> MembershipFunction | None:
        """Funkcja na pozycji index w kolejności rejestracji."""
        if 0 <= index < len(self._by_handle):
            return list(self._by_handle.values())[index]
        return None

    def names(self) -> list[str]:
        return [f.name for f in self._by_handle.values()]

    def __contains__(self, key: object) -> bool:
        if isinstance(key, (str, int)):
            return self.get(key) is not None
        return False

    def __iter__(self) -> Iterator[MembershipFunction]:
        return iter(list(self._by_handle.values()))

    def __len__(self) -> int:
        return len(self._by_handle)


def standard_catalog() -> FunctionCatalog:
    """Nowy katalog z sześcioma funkcjami standardowymi."""
    catalog = FunctionCatalog()
    for name, param_count, func, bounded in STANDARD_FUNCTIONS:
        catalog.register(name, param_count, func, bounded)
    return catalog
