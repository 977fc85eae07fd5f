"""Komenda: fz check — parsuje regułę względem zbiorów modelu."""

from __future__ import annotations

import argparse
import json
import sys

from rich import box
from rich.console import Console
from rich.table import Table

from fz._model import open_model

console = Console()


def run(args: argparse.Namespace) -> None:
    model  = open_model(args.model)
    report = model.rules.check(args.rule)

    # --- Wynik na konsoli ------------------------------------------------
    if report.is_valid and report.rule is not None:
        console.print(f"[green]OK[/green]  {report.rule}")
    else:
        console.print(
            f"[red]BŁĄD[/red]  Reguła niepoprawna — {len(report.errors)} błąd(ów)."
        )

        table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
        table.add_column("Kod",  style="yellow", no_wrap=True)
        table.add_column("Atom", style="cyan",   no_wrap=True)
        table.add_column("Komunikat")

        for e in report.errors:
            atom = "—" if e.atom_index is None else str(e.atom_index)
            table.add_row(e.code, atom, e.message)

        console.print(table)

    if report.warnings:
        console.print("[yellow]Ostrzeżenia:[/yellow]")
        for w in report.warnings:
            console.print(f"  [yellow]·[/yellow] {w}")

    # --- Wyjście JSON (opcjonalnie) --------------------------------------
    if args.json_output:
        out: dict = {
            "is_valid": report.is_valid,
            "errors": [
                {"code": str(e.code), "atom_index": e.atom_index, "message": e.message}
                for e in report.errors
            ],
            "warnings": report.warnings,
        }
        if report.rule is not None:
            out["rule"] = str(report.rule)
        print(json.dumps(out, ensure_ascii=False, indent=2))

    if not report.is_valid:
        sys.exit(1)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "check",
        help="Parsuje regułę względem zbiorów modelu (bez dodawania).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Sprawdza tekst reguły względem zbiorów i wartości modelu:

  - obecność klauzul 'if' i 'then'
  - atomy w postaci zbiór[.modyfikator]*.wartość
  - dokładnie jeden atom w konkluzji
  - istnienie zbiorów i wartości
  - nieznane modyfikatory (ostrzeżenie, modyfikator pominięty)

Kod wyjścia 1 gdy reguła jest niepoprawna.

Przykłady:
  fz check klimat.ini "if temperature.very.cold then power.high"
  fz check klimat.ini "if temperature.cold then power.high" --json-output
        """,
    )
    p.add_argument(
        "model",
        metavar="PLIK_MODELU",
        help="Ścieżka do pliku modelu (INI).",
    )
    p.add_argument(
        "rule",
        metavar="REGUŁA",
        help="Tekst reguły, np. \"if temperature.cold then power.high\".",
    )
    p.add_argument(
        "--json-output",
        action="store_true",
        help="Wypisz raport jako JSON na stdout.",
    )
    p.set_defaults(func=run)
