"""Komenda: fz hint — przewodnik po formacie pliku modelu."""

from __future__ import annotations

import argparse

from fuzzy_model import CONFIGURATION_HINT


def run(args: argparse.Namespace) -> None:
    print(CONFIGURATION_HINT)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "hint",
        help="Wyświetla przewodnik po formacie pliku modelu.",
    )
    p.set_defaults(func=run)
