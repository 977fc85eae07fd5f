"""Komenda: fz sets — listowanie zbiorów i wartości modelu."""

from __future__ import annotations

import argparse

from rich.console import Console
from rich.table import Table
from rich import box
from rich.text import Text

from fz._model import open_model

console = Console(width=200)


def _fmt_number(value: float) -> str:
    return f"{value:.6g}"


def _fmt_params(params: list[float], max_items: int = 8) -> str:
    if not params:
        return "[dim]—[/dim]"
    shown = ", ".join(_fmt_number(p) for p in params[:max_items])
    if len(params) > max_items:
        shown += f", … (+{len(params) - max_items})"
    return shown


def run(args: argparse.Namespace) -> None:
    model = open_model(args.model)

    if not len(model.sets):
        console.print("[yellow]Model nie zawiera zbiorów.[/yellow]")
        return

    # zbiory występujące w konkluzjach są wyjściami
    outputs = {rule.consequent.set_handle for rule in model.rules}

    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        expand=False,
    )
    table.add_column("ZBIÓR",     no_wrap=True, style="bold cyan")
    table.add_column("WARTOŚĆ",   no_wrap=True, style="bold")
    table.add_column("FUNKCJA",   no_wrap=True)
    table.add_column("MIN",       justify="right", no_wrap=True)
    table.add_column("MAX",       justify="right", no_wrap=True)
    table.add_column("SZCZYT",    justify="right", no_wrap=True)
    table.add_column("PARAMETRY", no_wrap=False, max_width=60)

    for fuzzy_set in model.sets:
        kind = "wyjście" if fuzzy_set.handle in outputs else "wejście"
        set_label = Text.assemble(
            (fuzzy_set.name, "bold cyan"), " ", (f"({kind})", "dim"),
        )
        for i, value in enumerate(fuzzy_set):
            func_txt = (
                Text(value.function.name, style="green")
                if value.function is not None
                else Text("brak", style="red")
            )
            table.add_row(
                set_label if i == 0 else "",
                value.name,
                func_txt,
                _fmt_number(value.min),
                _fmt_number(value.max),
                _fmt_number(value.peak_x),
                _fmt_params(value.extra_params),
            )
        if not len(fuzzy_set):
            table.add_row(set_label, Text("(brak wartości)", style="dim"), "", "", "", "", "")
        table.add_section()

    console.print()
    console.print(f"Model: [bold]{model.name or args.model}[/bold]")
    if model.description:
        console.print(f"[dim]{model.description}[/dim]")
    console.print(table)
    n_values = sum(len(s) for s in model.sets)
    console.print(f"  [dim]{len(model.sets)} zbiorów, {n_values} wartości[/dim]\n")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "sets",
        help="Listuje zbiory, wartości i funkcje przynależności modelu.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Wyświetla zbiory modelu wraz z wartościami: funkcja przynależności,
dziedzina [min, max], punkt szczytu i parametry dodatkowe.

Przykłady:
  fz sets klimat.ini
        """,
    )
    p.add_argument(
        "model",
        metavar="PLIK_MODELU",
        help="Ścieżka do pliku modelu (INI).",
    )
    p.set_defaults(func=run)
