"""Komenda: fz rules — listowanie reguł modelu."""

from __future__ import annotations

import argparse

from rich.console import Console
from rich.table import Table
from rich import box
from rich.text import Text

from fuzzy_model import Model, RuleAtom
from fz._model import open_model

console = Console(width=200)


def _fmt_atom(model: Model, atom: RuleAtom) -> str:
    mods = " ".join(str(m) for m in atom.modifiers)
    fuzzy_set = model.sets.get(atom.set_handle)
    value     = model.sets.value(atom.set_handle, atom.value_handle)
    func      = value.function.name if value is not None and value.function else "?"
    set_name  = fuzzy_set.name if fuzzy_set is not None else "?"
    val_name  = value.name if value is not None else "?"
    head      = f"{mods} " if mods else ""
    return f"{head}{set_name}.{val_name} [dim]({func})[/dim]"


def run(args: argparse.Namespace) -> None:
    model = open_model(args.model)

    if not len(model.rules):
        console.print("[yellow]Model nie zawiera reguł.[/yellow]")
        return

    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        row_styles=["", "dim"],
        expand=False,
    )
    table.add_column("#",       no_wrap=True, justify="right")
    table.add_column("JEŚLI",   no_wrap=False, max_width=90)
    table.add_column("TO",      no_wrap=True, style="bold green")

    for i, rule in enumerate(model.rules, start=1):
        if args.detail:
            body = "\n".join(_fmt_atom(model, a) for a in rule.antecedents)
        else:
            body = " and ".join(str(a) for a in rule.antecedents)
        table.add_row(str(i), body, Text(str(rule.consequent)))

    total = len(model.rules)
    console.print()
    console.print(table)
    _pl = "reguła" if total == 1 else ("reguły" if 2 <= total % 10 <= 4 and total % 100 not in range(11, 15) else "reguł")
    console.print(f"  [dim]{total} {_pl}[/dim]\n")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "rules",
        help="Listuje reguły modelu.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Listuje reguły modelu w postaci znormalizowanej (małe litery, modyfikatory
w kolejności zapisu).

Przykłady:
  fz rules klimat.ini
  fz rules klimat.ini --detail
        """,
    )
    p.add_argument(
        "model",
        metavar="PLIK_MODELU",
        help="Ścieżka do pliku modelu (INI).",
    )
    p.add_argument(
        "--detail",
        action="store_true",
        help="Wyświetl każdą przesłankę w osobnej linii wraz z funkcją.",
    )
    p.set_defaults(func=run)
