#!/usr/bin/env python3
"""
bitbuffer command line interface.

Splits a hex payload into consecutive LSB-first bit fields, which is handy
when working out the layout of a packed record before writing its
dataclass.

Usage:
    python cli.py <hex> <widths>
    python cli.py -x <hex> <widths>

Examples:
    python cli.py 45 3,1,4                 # 0b101, 0b0, 0b0100
    python cli.py -x "c7 09 01" 16,8       # fail if bits are left over
"""

import sys
from dataclasses import make_dataclass

from bitbuffer import DecodeError, Uint64, __version__, bits, decode, decode_exact
from bitbuffer.tag import MAX_BIT_WIDTH

BANNER = """
  _     _ _   _            __  __
 | |__ (_) |_| |__  _   _ / _|/ _| ___ _ __
 | '_ \\| | __| '_ \\| | | | |_| |_ / _ \\ '__|
 | |_) | | |_| |_) | |_| |  _|  _|  __/ |
 |_.__/|_|\\__|_.__/ \\__,_|_| |_|  \\___|_|
"""


def print_version() -> None:
    """Print version information."""
    print(f"bitbuffer {__version__}")


def print_help(prog_name: str) -> None:
    """Print help message."""
    print(BANNER)
    print(f"LSB-first bit-field inspector (v{__version__})")
    print("=" * 42)
    print()
    print("Usage:")
    print(f"  {prog_name} <hex> <widths>")
    print(f"  {prog_name} -x <hex> <widths>")
    print()
    print("Options:")
    print("  -x             Exact: fail if any input bits are left over")
    print("  -h, --help     Show this help message")
    print("  -v, --version  Show version information")
    print()
    print("Arguments:")
    print("  hex            Payload bytes as hex (0x prefix, spaces and colons ignored)")
    print(f"  widths         Comma-separated field widths in bits (1-{MAX_BIT_WIDTH})")
    print()
    print("Fields wider than 64 bits keep only their first 64 bits read.")
    print()
    print("Examples:")
    print(f"  {prog_name} 45 3,1,4")
    print(f'  {prog_name} -x "c7 09 01" 16,8')
    print()


def parse_hex(text: str) -> bytes:
    """Parse a hex payload argument.

    Raises:
        ValueError: If the text is not valid hex.
    """
    cleaned = text.strip()
    if cleaned[:2].lower() == "0x":
        cleaned = cleaned[2:]
    cleaned = cleaned.replace(":", "").replace(" ", "")
    return bytes.fromhex(cleaned)


def parse_widths(text: str) -> list:
    """Parse a comma-separated list of field widths.

    Raises:
        ValueError: If a width is not an integer in range.
    """
    widths = []
    for part in text.split(","):
        width = int(part)
        if width <= 0 or width > MAX_BIT_WIDTH:
            raise ValueError(f"width {width} not in 1-{MAX_BIT_WIDTH}")
        widths.append(width)
    return widths


def do_inspect(payload: bytes, widths: list, exact: bool) -> int:
    """Decode and print the fields.

    Args:
        payload: Input bytes.
        widths: Field widths in bits.
        exact: Require every input bit to be consumed.

    Returns:
        0 on success, 1 on error.
    """
    layout = make_dataclass(
        "Fields",
        [(f"field{i}", Uint64, bits(width=w)) for i, w in enumerate(widths)],
    )

    try:
        if exact:
            fields = decode_exact(payload, layout)
        else:
            fields = decode(payload, layout)
    except DecodeError as e:
        where = f" at {e.field_path}" if e.field_path else ""
        print(f"Error: Decode failed{where}: {e}", file=sys.stderr)
        return 1

    for i, width in enumerate(widths):
        value = getattr(fields, f"field{i}")
        print(f"field{i:<4} {width:>3} bits  0x{value:x} ({value})")

    consumed = sum(widths)
    print()
    print(f"Consumed:    {consumed} bits")
    print(f"Remaining:   {len(payload) * 8 - consumed} bits")

    return 0


def main() -> int:
    """CLI entry point."""
    args = sys.argv
    prog_name = args[0] if args else "cli.py"

    if len(args) < 2:
        print_help(prog_name)
        return 1

    if args[1] in ("-h", "--help"):
        print_help(prog_name)
        return 0

    if args[1] in ("-v", "--version"):
        print_version()
        return 0

    exact = args[1] == "-x"
    arg_offset = 2 if exact else 1

    if len(args) != arg_offset + 2:
        print("Error: Expected <hex> and <widths> arguments", file=sys.stderr)
        print(f"Usage: {prog_name} [-x] <hex> <widths>", file=sys.stderr)
        return 1

    try:
        payload = parse_hex(args[arg_offset])
    except ValueError:
        print("Error: Payload must be a hex string", file=sys.stderr)
        return 1

    try:
        widths = parse_widths(args[arg_offset + 1])
    except ValueError:
        print(
            f"Error: Widths must be comma-separated integers in 1-{MAX_BIT_WIDTH}",
            file=sys.stderr,
        )
        return 1

    return do_inspect(payload, widths, exact)


if __name__ == "__main__":
    sys.exit(main())
