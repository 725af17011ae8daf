"""
Field annotations: parsing bit-width and validation rules.

A field's annotation is the metadata mapping of its dataclass field. Two
keys are recognized:

- bbwidth: decimal bit width in [1, 255] overriding the natural width
- bbvalidate: boolean, run the value's validate() hook after decoding

Values are parsed from their string form, so 8 and "8", True and "true"
are equivalent. Other keys are ignored here and handed to custom decoders
untouched.
"""

import dataclasses
from typing import Mapping, Optional

from bitbuffer.errors import InvalidValidateSyntax, InvalidWidthSyntax, ZeroWidthNotAllowed

# Annotation key overriding the bit width of a scalar field
TAG_BIT_WIDTH = "bbwidth"
# Annotation key requesting validation right after the field is decoded
TAG_VALIDATE = "bbvalidate"

# Widths are stored as an unsigned 8-bit value
MAX_BIT_WIDTH = 255

_TRUE_STRINGS = ("1", "t", "T", "TRUE", "true", "True")
_FALSE_STRINGS = ("0", "f", "F", "FALSE", "false", "False")


@dataclasses.dataclass(frozen=True)
class FieldRule:
    """Decode rule derived from a field annotation."""

    bit_width: Optional[int] = None
    validate: bool = False

    def bit_width_or_default(self, default_bit_width: int) -> int:
        """Return the requested width, or default_bit_width if none was set."""
        if self.bit_width is not None:
            return self.bit_width
        return default_bit_width


def parse_bit_width(tag: Mapping) -> Optional[int]:
    """
    Parse the bit-width entry of an annotation.

    Args:
        tag: Field annotation mapping

    Returns:
        The requested width, or None if the annotation has no width entry

    Raises:
        InvalidWidthSyntax: If the value is not a decimal integer in [0, 255]
        ZeroWidthNotAllowed: If the value is zero
    """
    if TAG_BIT_WIDTH not in tag:
        return None

    text = str(tag[TAG_BIT_WIDTH])
    # Digits only: no sign, whitespace or underscores
    if not (text.isascii() and text.isdigit()):
        raise InvalidWidthSyntax(text)

    width = int(text)
    if width > MAX_BIT_WIDTH:
        raise InvalidWidthSyntax(text, "value out of range")
    # An explicit zero would otherwise read as "unset"
    if width == 0:
        raise ZeroWidthNotAllowed()

    return width


def resolve_width(tag: Mapping, natural_width: int) -> int:
    """Return the annotated width of a field, or natural_width if unset."""
    width = parse_bit_width(tag)
    if width is None:
        return natural_width
    return width


def resolve_validate(tag: Mapping) -> bool:
    """
    Parse the validate entry of an annotation.

    Args:
        tag: Field annotation mapping

    Returns:
        True if validation was requested, False if not or if absent

    Raises:
        InvalidValidateSyntax: If the value is not a recognized boolean
    """
    if TAG_VALIDATE not in tag:
        return False

    text = str(tag[TAG_VALIDATE])
    if text in _TRUE_STRINGS:
        return True
    if text in _FALSE_STRINGS:
        return False
    raise InvalidValidateSyntax(text)


def parse_tag(tag: Mapping) -> FieldRule:
    """Parse a whole annotation into a FieldRule."""
    return FieldRule(bit_width=parse_bit_width(tag), validate=resolve_validate(tag))


def bits(width=None, validate=None, **extra):
    """
    Declare a dataclass field with a bit-level annotation.

    Example:
        @dataclass
        class Header:
            version: Uint8 = bits(width=3)
            flag: bool
            level: Level = bits(width=4, validate=True)

    Args:
        width: Bit width override (1-255), or None for the natural width
        validate: Whether to run the value's validate() hook
        **extra: Further annotation entries for custom decoders

    Returns:
        A dataclasses.field carrying the annotation as metadata
    """
    metadata = dict(extra)
    if width is not None:
        metadata[TAG_BIT_WIDTH] = width
    if validate is not None:
        metadata[TAG_VALIDATE] = validate
    return dataclasses.field(metadata=metadata)
