"""Wczytywanie modelu dla komend CLI — błędy kończą program z kodem 1."""

from __future__ import annotations

import pathlib

from rich.console import Console

from fuzzy_model import FuzzyError, Model, ParseError, load_model

console = Console(stderr=True)


def open_model(path: str) -> Model:
    model_path = pathlib.Path(path)
    if not model_path.exists():
        console.print(f"[red]Brak pliku modelu:[/red] {model_path}")
        raise SystemExit(1)

    try:
        return load_model(model_path)
    except ParseError as e:
        console.print(f"[red]Błąd reguły w modelu:[/red] {e}")
        for issue in e.report.errors:
            console.print(f"  [yellow]{issue.code}[/yellow] {issue.message}")
        raise SystemExit(1)
    except FuzzyError as e:
        console.print(f"[red]Błąd wczytywania modelu:[/red] {e}")
        raise SystemExit(1)
