"""mprlist command-line interface.

Usage:
    python3 -m mprlist encode [--type content|mpr-list] [--unsorted] 10:/a 5:/b
    python3 -m mprlist decode [--unsorted] 15141f08...
    python3 -m mprlist decode --input wire.bin
    python3 -m mprlist version
"""

from __future__ import annotations

import argparse
import base64
import binascii
import logging
import sys
from typing import List, Optional, Tuple

from . import (
    MPRList,
    MprListError,
    TLV_CONTENT,
    TLV_MPR_LIST,
    __version__,
)

_TYPES = {"content": TLV_CONTENT, "mpr-list": TLV_MPR_LIST}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mprlist",
        description="Encode and decode NDN delegation lists (MPRList)",
    )
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Log debug output to stderr")
    sub = parser.add_subparsers(dest="command")

    # ── encode ──
    enc_p = sub.add_parser("encode", help="Encode delegations to TLV (hex)")
    enc_p.add_argument("delegations", nargs="+", metavar="PREF:NAME",
                       help="Delegation as preference:name, e.g. 10:/a/b")
    enc_p.add_argument("--type", choices=sorted(_TYPES), default="mpr-list",
                       help="Outer TLV-TYPE (default: mpr-list)")
    enc_p.add_argument("--unsorted", action="store_true",
                       help="Keep argument order and duplicate names")
    enc_p.add_argument("--base64", action="store_true",
                       help="Print base64 instead of hex")

    # ── decode ──
    dec_p = sub.add_parser("decode", help="Decode a TLV list")
    dec_p.add_argument("wire", nargs="?", metavar="HEX",
                       help="Wire bytes as hex")
    dec_p.add_argument("--input", "-i", metavar="FILE",
                       help="Read raw wire bytes from FILE instead")
    dec_p.add_argument("--unsorted", action="store_true",
                       help="Keep wire order instead of sorting")

    # ── version ──
    sub.add_parser("version", help="Print version and exit")

    return parser


def _parse_delegation(arg: str) -> Tuple[int, str]:
    pref, sep, name = arg.partition(":")
    if not sep or not name:
        raise ValueError("expected PREF:NAME, got {!r}".format(arg))
    try:
        return int(pref), name
    except ValueError:
        raise ValueError("preference must be an integer, got {!r}".format(pref))


def _read_wire(args: argparse.Namespace) -> bytes:
    if args.input:
        with open(args.input, "rb") as f:
            return f.read()
    if args.wire is None:
        raise ValueError("give wire bytes as HEX or --input FILE")
    try:
        return binascii.unhexlify("".join(args.wire.split()))
    except binascii.Error as e:
        raise ValueError("bad hex input: {}".format(e))


def _cmd_encode(args: argparse.Namespace) -> None:
    pairs = [_parse_delegation(arg) for arg in args.delegations]
    if args.unsorted:
        lst = MPRList.unsorted(pairs)
    else:
        lst = MPRList(pairs)

    wire = lst.encode(_TYPES[args.type])
    if args.base64:
        print(base64.b64encode(wire).decode("ascii"))
    else:
        print(wire.hex())


def _cmd_decode(args: argparse.Namespace) -> None:
    lst = MPRList.from_wire(_read_wire(args), want_sort=not args.unsorted)
    for d in lst:
        print(d)


def main(argv: Optional[List[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr,
                            format="%(name)s: %(levelname)s: %(message)s")

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "version":
        print(f"mprlist {__version__}")
        return

    try:
        if args.command == "encode":
            _cmd_encode(args)
        elif args.command == "decode":
            _cmd_decode(args)
    except MprListError as e:
        print(f"mprlist: error [{e.code}]: {e}", file=sys.stderr)
        sys.exit(2)
    except (ValueError, TypeError) as e:
        print(f"mprlist: error: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
