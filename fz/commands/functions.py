"""Komenda: fz functions — standardowe funkcje przynależności."""

from __future__ import annotations

import argparse

from rich.console import Console
from rich.table import Table
from rich import box

from fuzzy_model import standard_catalog

console = Console(width=200)

DESCRIPTIONS: dict[str, str] = {
    "gaussian bell":     "dzwon Gaussa o środku (min+max)/2; 0.001 na krańcach",
    "s-curve":           "0 przed min, 1 za max, kwadratowe przejście",
    "inverted s-curve":  "1 - S-Curve",
    "triangle":          "0 poza (min, max), 1 w szczycie (param_0000 lub środek)",
    "inverted triangle": "1 - Triangle",
    "interpolate":       "liniowa po punktach x0, y0, x1, y1, ... (bez min/max)",
}


def run(args: argparse.Namespace) -> None:
    catalog = standard_catalog()

    table = Table(box=box.SIMPLE_HEAD, show_header=True, header_style="bold white")
    table.add_column("#",          justify="right", no_wrap=True)
    table.add_column("NAZWA",      style="bold cyan", no_wrap=True)
    table.add_column("PARAMETRY",  justify="right", no_wrap=True)
    table.add_column("MIN/MAX",    no_wrap=True)
    table.add_column("OPIS")

    for i, func in enumerate(catalog):
        table.add_row(
            str(i),
            func.name,
            str(func.param_count),
            "tak" if func.bounded else "[dim]nie[/dim]",
            DESCRIPTIONS.get(func.key, ""),
        )

    console.print(table)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "functions",
        help="Listuje standardowe funkcje przynależności.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Listuje funkcje dostępne w plikach modeli. Kolumna PARAMETRY to domyślna
liczba parametrów dodatkowych (poza min/max).

Przykłady:
  fz functions
        """,
    )
    p.set_defaults(func=run)
