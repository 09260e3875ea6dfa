"""Command-line tool that lists the atoms found in an MP4 file."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import BinaryIO, TextIO

# Imported for their side effect of registering atom classes.
from . import (  # noqa: F401
    emsg,
    ftyp,
    idat,
    iinf,
    iloc,
    ilst,
    iprp,
    iref,
    mdat,
    moof,
    pitm,
    properties,
)
from .atom import Atom, Unknown, read_any_optional
from .errors import Mp4Error
from .mdat import Mdat


def describe(atom: Atom) -> str:
    """Return a one-line description of an atom, summarising raw payloads by size."""
    if isinstance(atom, Mdat):
        return f"Mdat {{ size: {len(atom.data)} }}"
    if isinstance(atom, Unknown):
        return f"Unknown {{ kind: {atom.kind!r}, size: {len(atom.data)} }}"
    return repr(atom)


def info(stream: BinaryIO, out: TextIO | None = None) -> None:
    """Read atoms from ``stream`` until it ends, writing one description per atom."""
    target = sys.stdout if out is None else out
    while (atom := read_any_optional(stream)) is not None:
        print(describe(atom), file=target)


def main(argv: list[str] | None = None) -> int:
    """Print the atoms of the named file, or of standard input."""
    parser = argparse.ArgumentParser(
        prog="mp4atoms",
        description="Print the top-level atoms of an MP4 file.",
    )
    parser.add_argument("input", nargs="?", help="file to read; standard input if omitted")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.WARNING)

    try:
        if args.input is None:
            info(sys.stdin.buffer)
        else:
            with open(args.input, "rb") as stream:
                info(stream)
    except (Mp4Error, OSError) as err:
        print(f"error: {err}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())