"""
bitbuffer: schema-driven bit-level binary decoding

Decodes byte payloads into dataclass records, field by field, from an
LSB-first bit stream. Field widths can be overridden per field, nested
dataclasses are packed contiguously, and types with irregular layouts
can decode themselves.
"""

__version__ = "1.0.0"

from bitbuffer.bitreader import BitReader
from bitbuffer.errors import (
    CustomDecodeFailed,
    DecodeError,
    InvalidValidateSyntax,
    InvalidWidthSyntax,
    OutOfData,
    TagError,
    TrailingData,
    UnsupportedFieldType,
    ValidationFailed,
    ZeroWidthNotAllowed,
)
from bitbuffer.tag import TAG_BIT_WIDTH, TAG_VALIDATE, FieldRule, bits, parse_tag
from bitbuffer.types import Uint8, Uint16, Uint32, Uint64, Unmarshaler, Validator
from bitbuffer.unmarshal import decode, decode_exact

__all__ = [
    "BitReader",
    "CustomDecodeFailed",
    "DecodeError",
    "FieldRule",
    "InvalidValidateSyntax",
    "InvalidWidthSyntax",
    "OutOfData",
    "TAG_BIT_WIDTH",
    "TAG_VALIDATE",
    "TagError",
    "TrailingData",
    "Uint8",
    "Uint16",
    "Uint32",
    "Uint64",
    "Unmarshaler",
    "UnsupportedFieldType",
    "ValidationFailed",
    "Validator",
    "ZeroWidthNotAllowed",
    "__version__",
    "bits",
    "decode",
    "decode_exact",
    "parse_tag",
]
