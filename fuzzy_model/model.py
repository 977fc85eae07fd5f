"""
fuzzy_model/model.py — model: zbiory + reguły + katalog funkcji.
"""

from __future__ import annotations

from .common import Handle, HandleAllocator
from .functions import FunctionCatalog, standard_catalog
from .rules import Rules
from .sets import Sets


class Model:
    """
    Kompletny model rozmyty przekazywany do silnika wnioskowania.

    Użycie::

        model = Model("klimatyzacja")
        temp  = model.sets.get(model.sets.add("temperature"))
        cold  = temp.get(temp.add("cold"))
        cold.set_bounds(0, 20)
        cold.set_function("Inverted S-Curve")
        ...
        model.rules.add("if temperature.cold then power.high")
    """

    def __init__(
        self,
        name: str = "",
        catalog: FunctionCatalog | None = None,
        description: str = "",
    ) -> None:
        self.name        = name
        self.description = description
        self.catalog     = catalog if catalog is not None else standard_catalog()
        self.handles     = HandleAllocator()
        self.sets        = Sets(self.handles, self.catalog)
        self.rules       = Rules(self.sets)

    def __repr__(self) -> str:
        return f"Model({self.name!r}, sets={len(self.sets)}, rules={len(self.rules)})"

    def remove_set(self, key: str | Handle) -> int:
        """
        Usuwa zbiór razem z regułami, które go używają.

        Zwraca liczbę usuniętych reguł (0 także gdy zbioru nie ma).
        """
        fuzzy_set = self.sets.get(key)
        if fuzzy_set is None:
            return 0
        self.sets.remove(fuzzy_set.handle)
        return self.rules.remove_referencing(fuzzy_set.handle)

    def remove_value(self, set_key: str | Handle, value_key: str | Handle) -> int:
        """Usuwa wartość zbioru razem z regułami, które jej używają."""
        fuzzy_set = self.sets.get(set_key)
        value     = fuzzy_set.get(value_key) if fuzzy_set is not None else None
        if value is None:
            return 0
        fuzzy_set.remove(value.handle)
        return self.rules.remove_referencing(value.handle)

    def clear(self) -> None:
        self.rules.clear()
        self.sets.clear()
