"""
Field storage types and decoder capabilities.

Natural widths:
- bool: 1 bit
- Uint8, Uint16, Uint32, Uint64: 8, 16, 32, 64 bits
- any int subclass with an integer ``bit_width`` class attribute

Types that do not follow plain bit packing implement Unmarshaler; types
whose values can be checked after decoding implement Validator.
"""

from abc import ABC, abstractmethod
from typing import Optional


class Uint8(int):
    """Unsigned 8-bit field."""

    bit_width = 8


class Uint16(int):
    """Unsigned 16-bit field, least significant byte first in the stream."""

    bit_width = 16


class Uint32(int):
    """Unsigned 32-bit field, least significant byte first in the stream."""

    bit_width = 32


class Uint64(int):
    """Unsigned 64-bit field, least significant byte first in the stream."""

    bit_width = 64


def natural_width(field_type) -> Optional[int]:
    """
    Get the natural storage width of a scalar field type.

    Args:
        field_type: Annotated type of the field

    Returns:
        Width in bits, or None if the type is not a scalar
    """
    if field_type is bool:
        return 1
    if isinstance(field_type, type) and issubclass(field_type, int):
        width = getattr(field_type, "bit_width", None)
        if isinstance(width, int) and not isinstance(width, bool) and width > 0:
            return width
    return None


class Unmarshaler(ABC):
    """
    Capability for types that decode themselves.

    The decoder hands over the reader and the field description; the type
    consumes as many bits as it needs and returns the decoded value.
    """

    @classmethod
    @abstractmethod
    def unmarshal(cls, reader, field, tag):
        """
        Decode a value of this type.

        Args:
            reader: BitReader positioned at the field
            field: FieldSpec of the field being decoded, or None when this
                type is the top-level target
            tag: The field's annotation mapping

        Returns:
            The decoded value
        """


class Validator(ABC):
    """Capability for values that can check themselves after decoding."""

    @abstractmethod
    def validate(self) -> None:
        """Raise an exception describing why the value is invalid."""
