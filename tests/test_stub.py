"""Smoke tests for the package surface."""

from dataclasses import dataclass

import bitbuffer


def test_version() -> None:
    """Test that version is defined."""
    assert bitbuffer.__version__ == "1.0.0"


def test_decode_works() -> None:
    """Test that a two-field record decodes through the package exports."""

    @dataclass
    class Pair:
        a: bitbuffer.Uint8
        b: bitbuffer.Uint8

    assert bitbuffer.decode_exact(b"\x45\x54", Pair) == Pair(a=0x45, b=0x54)
