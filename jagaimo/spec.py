"""Parsing a whole specification and the command that reports on it."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .attrs import Attrs
from .rules import Rules
from .syntax import ParseError, TokenStream, tokenize


def parse_spec(text: str, default_root_name=None) -> tuple[Attrs, Rules]:
    """Parse specification text into its attributes and rules."""
    stream = TokenStream(tokenize(text))
    attrs = Attrs.parse(stream, default_root_name)
    rules = Rules.parse(stream)
    return attrs, rules


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="jagaimo", description="Parse a command specification and print its attributes."
    )
    parser.add_argument("spec", nargs="?", default="-", help="specification file, or - for stdin")
    parser.add_argument("--root-name", help="root name to use instead of the crate name")
    args = parser.parse_args(argv)

    text = sys.stdin.read() if args.spec == "-" else Path(args.spec).read_text()
    try:
        attrs, _rules = parse_spec(text, args.root_name)
    except ParseError as error:
        print(f"failed to parse proc-macro input\n[E] -> {error}", file=sys.stderr)
        return 1
    print(attrs)
    return 0


if __name__ == "__main__":
    sys.exit(main())