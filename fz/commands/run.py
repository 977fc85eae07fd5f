"""Komenda: fz run — liczy wyjścia modelu dla podanych wejść."""

from __future__ import annotations

import argparse
import json
import math
import pathlib
import sys

from rich.console import Console
from rich.table   import Table
from rich         import box
from rich.text    import Text

from fuzzy_model import FuzzyError
from fz import _config
from fz._model import open_model

console = Console(width=200)


# ---------------------------------------------------------------------------
# Wyświetlanie wyników
# ---------------------------------------------------------------------------

def _fmt_result(value: float) -> Text:
    if math.isnan(value):
        return Text("—", style="dim")
    return Text(f"{value:.6g}", style="bold green")


def _fmt_degrees(degrees: dict[str, float]) -> str:
    return ", ".join(f"{name}={d:.4f}" for name, d in degrees.items())


def _show_results(engine, names: list[str], show_degrees: bool) -> None:
    table = Table(box=box.SIMPLE_HEAD, header_style="bold white", show_header=True)
    table.add_column("ZBIÓR", style="bold cyan", no_wrap=True)
    table.add_column("TYP",   no_wrap=True)
    table.add_column("WYNIK", justify="right", no_wrap=True)
    if show_degrees:
        table.add_column("STOPNIE PRAWDY", no_wrap=False)

    for name in names:
        node = engine.node(name)
        kind = Text("wejście", style="dim") if node.is_input else Text("wyjście", style="yellow")
        row  = [name, kind, _fmt_result(node.result)]
        if show_degrees:
            row.append(_fmt_degrees(engine.degrees(name)))
        table.add_row(*row)

    console.print(table)


# ---------------------------------------------------------------------------
# Główna logika
# ---------------------------------------------------------------------------

def _collect_inputs(args: argparse.Namespace) -> tuple[str, dict[str, float]]:
    from inference import InputsFileError, load_inputs_json, parse_assignment

    case_id = ""
    inputs: dict[str, float] = {}

    if args.inputs:
        inputs_path = pathlib.Path(args.inputs)
        try:
            case_id, inputs = load_inputs_json(inputs_path)
        except InputsFileError as e:
            console.print(f"[red]Błąd wczytywania wejść:[/red] {e}")
            raise SystemExit(1)

    for item in args.input or []:
        try:
            name, x = parse_assignment(item)
        except ValueError as e:
            console.print(f"[red]{e}[/red]")
            raise SystemExit(1)
        inputs[name] = x

    return case_id, inputs


def run(args: argparse.Namespace) -> None:
    from inference import InferenceEngine

    # 1. Model i wejścia
    model            = open_model(args.model)
    case_id, inputs  = _collect_inputs(args)

    try:
        engine = InferenceEngine(model, curve_samples=_config.curve_samples())
    except (FuzzyError, ValueError) as e:
        console.print(f"[red]Błąd konfiguracji silnika:[/red] {e}")
        raise SystemExit(1)

    log_path = _config.log_file()
    if log_path:
        engine.log_open(log_path, _config.log_level())

    # 2. Wejścia
    for name, x in inputs.items():
        node = engine.node(name)
        if node is None:
            print(f"[warn] Nieznany zbiór wejściowy '{name}' — pomijam.", file=sys.stderr)
            continue
        if not node.is_input:
            print(
                f"[warn] Zbiór '{name}' jest wyjściem — wartość zostanie nadpisana.",
                file=sys.stderr,
            )
        engine.set_input(name, x)

    # 3. Obliczenia
    try:
        engine.recalculate()
    except FuzzyError as e:
        console.print(f"[red]Błąd obliczeń:[/red] {e}")
        raise SystemExit(1)
    finally:
        engine.log_close()

    # 4. Wyniki
    if args.output:
        names = [n.strip().lower() for n in args.output]
        unknown = [n for n in names if engine.node(n) is None]
        if unknown:
            console.print(f"[red]Nieznane zbiory wyjściowe:[/red] {', '.join(unknown)}")
            raise SystemExit(1)
    else:
        names = [n.name for n in engine.nodes.values() if not n.is_input]
        if not names:
            names = [n.name for n in engine.nodes.values()]

    if args.json_output:
        out: dict = {
            "case_id": case_id,
            "model":   model.name,
            "inputs":  inputs,
            "outputs": {
                name: (None if math.isnan(engine.output(name)) else engine.output(name))
                for name in names
            },
        }
        if args.degrees:
            out["degrees"] = {name: engine.degrees(name) for name in names}
        print(json.dumps(out, ensure_ascii=False, indent=2))
        return

    console.print(
        f"Model: [bold]{model.name or pathlib.Path(args.model).name}[/bold]  "
        f"case=[cyan]{case_id or '—'}[/cyan]  "
        f"{len(inputs)} wejść, {len(model.rules)} reguł"
    )
    _show_results(engine, names, args.degrees)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "run",
        help="Liczy wyjścia modelu dla podanych wejść.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Wczytuje model (INI), ustawia wejścia i liczy wszystkie zbiory wyjściowe.

Wejścia można podać w linii poleceń (-i ZBIÓR=LICZBA) i/lub w pliku JSON:

  {"case_id": "pomiar-001", "inputs": {"temperature": 18.5}}

Zmienne środowiskowe:
  FZ_CURVE_SAMPLES  liczba przedziałów próbkowania krzywej (domyślnie 1000)
  FZ_LOG_FILE       plik dziennika obliczeń silnika
  FZ_LOG_LEVEL      poziom dziennika (domyślnie DEBUG)

Przykłady:
  fz run klimat.ini -i temperature=18.5 -i humidity=40
  fz run klimat.ini --inputs pomiar.json --degrees
  fz run klimat.ini -i temperature=30 -o power --json-output
        """,
    )
    p.add_argument(
        "model",
        metavar="PLIK_MODELU",
        help="Ścieżka do pliku modelu (INI).",
    )
    p.add_argument(
        "--input", "-i",
        action="append",
        metavar="ZBIÓR=LICZBA",
        help="Wartość wejściowa zbioru (można podać wielokrotnie).",
    )
    p.add_argument(
        "--inputs",
        metavar="PLIK",
        help="Plik JSON z wartościami wejściowymi.",
    )
    p.add_argument(
        "--output", "-o",
        nargs="+",
        metavar="ZBIÓR",
        help="Pokaż tylko wskazane zbiory (domyślnie: wszystkie wyjścia).",
    )
    p.add_argument(
        "--degrees",
        action="store_true",
        help="Pokaż stopnie prawdy wartości każdego zbioru.",
    )
    p.add_argument(
        "--json-output",
        action="store_true",
        help="Wypisz wynik jako JSON na stdout.",
    )
    p.set_defaults(func=run)
