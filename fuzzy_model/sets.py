"""
fuzzy_model/sets.py — zbiory (Set) i ich kolekcja w modelu (Sets).

Zbiór grupuje powiązane wartości (cold, warm, hot) opisujące jedną cechę
(temperatura) zawsze w określonym kontekście. Kolejność wartości to kolejność
ich definiowania.
"""

from __future__ import annotations

from collections.abc import Iterator

from .common import Handle, HandleAllocator, Identity, normalize_name
from .errors import InvalidArgumentError
from .functions import FunctionCatalog
from .values import Value


# ---------------------------------------------------------------------------
# Set
# ---------------------------------------------------------------------------

class Set:
    """
    Zbiór wartości o wspólnej dziedzinie.

    Nazwy wartości nie muszą być unikalne w systemie, ale powinny być
    unikalne w zbiorze — wyszukiwanie po nazwie zwraca pierwsze trafienie.
    """

    def __init__(
        self,
        identity: Identity,
        handles: HandleAllocator,
        catalog: FunctionCatalog,
    ) -> None:
        if not identity.name:
            raise InvalidArgumentError("Nazwa zbioru nie może być pusta.")
        self.identity = identity
        self._handles = handles
        self._catalog = catalog
        self._values: dict[Handle, Value] = {}

    def __repr__(self) -> str:
        return f"Set({self.name!r}, values={[v.name for v in self]})"

    @property
    def handle(self) -> Handle:
        return self.identity.handle

    @property
    def name(self) -> str:
        return self.identity.name

    # ------------------------------------------------------------------
    # Edycja
    # ------------------------------------------------------------------

    def add(self, name: str) -> Handle:
        """Dodaje wartość; gdy wartość o tej nazwie istnieje, zwraca jej uchwyt."""
        existing = self.get(name)
        if existing is not None:
            return existing.handle
        value = Value(self._handles.identity(name), self.handle, self._catalog)
        self._values[value.handle] = value
        return value.handle

    def remove(self, handle: Handle) -> None:
        self._values.pop(handle, None)

    def clear(self) -> None:
        self._values.clear()

    # ------------------------------------------------------------------
    # Wyszukiwanie
    # ------------------------------------------------------------------

    def get(self, key: str | Handle) -> Value | None:
        """Wartość po nazwie (bez wielkości liter) lub po uchwycie."""
        if isinstance(key, str):
            name = normalize_name(key)
            return next((v for v in self._values.values() if v.name == name), None)
        return self._values.get(key)

    def at(self, index: int) -> Value | None:
        if 0 <= index < len(self._values):
            return list(self._values.values())[index]
        return None

    def __iter__(self) -> Iterator[Value]:
        return iter(list(self._values.values()))

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, key: object) -> bool:
        if isinstance(key, (str, int)):
            return self.get(key) is not None
        return False

    # ------------------------------------------------------------------
    # Dziedzina i rozmywanie
    # ------------------------------------------------------------------

    def min(self) -> float:
        """Najmniejsze min spośród wartości zbioru."""
        if not self._values:
            raise InvalidArgumentError(f"Zbiór '{self.name}' nie ma wartości — brak dziedziny.")
        return min(v.min for v in self._values.values())

    def max(self) -> float:
        """Największe max spośród wartości zbioru."""
        if not self._values:
            raise InvalidArgumentError(f"Zbiór '{self.name}' nie ma wartości — brak dziedziny.")
        return max(v.max for v in self._values.values())

    def degree_of_truth_all(self, x: float) -> dict[Handle, float]:
        """Stopnie prawdy wszystkich wartości dla x (aktualizuje Value.degree)."""
        return {v.handle: v.degree_of_truth(x) for v in self._values.values()}


# ---------------------------------------------------------------------------
# Sets
# ---------------------------------------------------------------------------

class Sets:
    """Uporządkowana kolekcja zbiorów jednego modelu."""

    def __init__(self, handles: HandleAllocator, catalog: FunctionCatalog) -> None:
        self._handles = handles
        self._catalog = catalog
        self._sets: dict[Handle, Set] = {}

    def add(self, name: str) -> Handle:
        """Dodaje zbiór; gdy zbiór o tej nazwie istnieje, zwraca jego uchwyt."""
        existing = self.get(name)
        if existing is not None:
            return existing.handle
        fuzzy_set = Set(self._handles.identity(name), self._handles, self._catalog)
        self._sets[fuzzy_set.handle] = fuzzy_set
        return fuzzy_set.handle

    def remove(self, handle: Handle) -> None:
        self._sets.pop(handle, None)

    def clear(self) -> None:
        self._sets.clear()

    def get(self, key: str | Handle) -> Set | None:
        if isinstance(key, str):
            name = normalize_name(key)
            return next((s for s in self._sets.values() if s.name == name), None)
        return self._sets.get(key)

    def at(self, index: int) -> Set | None:
        if 0 <= index < len(self._sets):
            return list(self._sets.values())[index]
        return None

    def owner_of(self, value_handle: Handle) -> Set | None:
        """Zbiór, do którego należy wartość o podanym uchwycie."""
        return next((s for s in self._sets.values() if s.get(value_handle) is not None), None)

    def value(self, set_key: str | Handle, value_key: str | Handle) -> Value | None:
        fuzzy_set = self.get(set_key)
        return fuzzy_set.get(value_key) if fuzzy_set is not None else None

    def __iter__(self) -> Iterator[Set]:
        return iter(list(self._sets.values()))

    def __len__(self) -> int:
        return len(self._sets)

    def __contains__(self, key: object) -> bool:
        if isinstance(key, (str, int)):
            return self.get(key) is not None
        return False
