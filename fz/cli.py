"""
fz — narzędzie CLI silnika wnioskowania rozmytego.

Użycie:
  fz <komenda> [opcje]

Komendy:
  run        Liczy wyjścia modelu dla podanych wejść.
  sets       Listuje zbiory, wartości i funkcje przynależności modelu.
  rules      Listuje reguły modelu.
  check      Parsuje regułę względem zbiorów modelu (bez dodawania).
  functions  Listuje standardowe funkcje przynależności.
  hint       Wyświetla przewodnik po formacie pliku modelu.
"""

from __future__ import annotations

import argparse
import sys

# Windows: terminal może używać cp1252, więc wymuszamy UTF-8, żeby polskie znaki
# w tekstach pomocy argparse były wypisywane poprawnie.
if hasattr(sys.stdout, "reconfigure"):
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")
if hasattr(sys.stderr, "reconfigure"):
    sys.stderr.reconfigure(encoding="utf-8", errors="replace")

from fz import __version__
from fz.commands import run as cmd_run
from fz.commands import sets as cmd_sets
from fz.commands import rules as cmd_rules
from fz.commands import check as cmd_check
from fz.commands import functions as cmd_functions
from fz.commands import hint as cmd_hint


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fz",
        description="Silnik wnioskowania rozmytego — narzędzie CLI.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version=f"fz {__version__}"
    )

    subparsers = parser.add_subparsers(
        title="komendy",
        metavar="<komenda>",
        dest="command",
    )
    subparsers.required = True

    cmd_run.add_parser(subparsers)
    cmd_sets.add_parser(subparsers)
    cmd_rules.add_parser(subparsers)
    cmd_check.add_parser(subparsers)
    cmd_functions.add_parser(subparsers)
    cmd_hint.add_parser(subparsers)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
