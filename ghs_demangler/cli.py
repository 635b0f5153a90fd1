"""
CLI for the demangler.
"""

import argparse
import logging
from typing import Iterator, Optional, Sequence

from rich.console import Console
from rich.logging import RichHandler

from ghs_demangler.demangler import GHSDemangler
from ghs_demangler.exceptions import DemangleError
from ghs_demangler.names import Identifier

parser = argparse.ArgumentParser("ghs-demangler", description="Demangler for Green Hills C++ symbols.")
parser.add_argument("symbols", help="Symbols to demangle.", type=str, nargs="*")
parser.add_argument(
    "--file",
    "-f",
    help="Read symbols from a file, one per line.",
    type=argparse.FileType("r"),
)
parser.add_argument(
    "--error-on-failure", "-e", help="Throw an exception if demangling fails", action="store_true"
)
parser.add_argument(
    "--operators",
    "-o",
    help="Spell out constructors, destructors and operators.",
    action="store_true",
)
parser.add_argument(
    "--tree", "-t", help="Print the parsed name tree instead of text.", action="store_true"
)
parser.add_argument("--verbose", "-v", help="Log debug output.", action="store_true")


def _setup_logging(verbose: bool):
    logging.basicConfig(
        level=logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(
                console=Console(stderr=True),
                rich_tracebacks=True,
                markup=False,
            )
        ],
    )
    if verbose:
        logging.getLogger("ghs_demangler").setLevel(logging.DEBUG)


def _symbols(args: argparse.Namespace) -> Iterator[str]:
    yield from args.symbols
    if args.file is not None:
        with args.file:
            for line in args.file:
                line = line.strip()
                if line:
                    yield line


def _demangle_one(demangler: GHSDemangler, symbol: str, args: argparse.Namespace) -> str:
    if not (args.tree or args.error_on_failure):
        return demangler.demangle(symbol, operators=args.operators)

    try:
        name = demangler.parse(symbol)
    except DemangleError:
        if args.error_on_failure:
            raise
        # Unparsed symbols are shown as an opaque name.
        name = Identifier(text=symbol)

    if args.tree:
        return repr(name)
    return demangler.render(name, operators=args.operators)


def main(argv: Optional[Sequence[str]] = None):
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    demangler = GHSDemangler()
    for symbol in _symbols(args):
        print(_demangle_one(demangler, symbol, args))


if __name__ == "__main__":
    main()
