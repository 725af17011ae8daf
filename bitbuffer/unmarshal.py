"""
Composite decoding and the top-level decode entry points.

Decoding walks a composite's schema in declaration order. For each field:
- a type implementing Unmarshaler decodes itself from the reader
- a nested dataclass is decoded recursively from the same reader, with no
  padding or alignment between composites
- a scalar consumes its effective width (annotation or natural width); when
  that exceeds the natural width only the low-order natural-width bits,
  i.e. the earliest-read ones, are kept

A field annotated with bbvalidate is checked right after it is decoded.
The first failure aborts the decode; field values are only assembled into
the result once every field has been decoded.
"""

import dataclasses
import logging

from bitbuffer.bitreader import MAX_READ_BITS, BitReader
from bitbuffer.errors import (
    CustomDecodeFailed,
    DecodeError,
    OutOfData,
    TrailingData,
    ValidationFailed,
)
from bitbuffer.schema import FieldSpec, Strategy, root_spec, schema_for

logger = logging.getLogger(__name__)


def read_wide(reader: BitReader, num_bits: int) -> int:
    """
    Read a field of any width, in chunks of at most 64 bits.

    Args:
        reader: BitReader to consume from
        num_bits: Number of bits to read

    Returns:
        Integer value of the bits, LSB-first

    Raises:
        OutOfData: If not enough bits are available (nothing is consumed)
    """
    if num_bits > reader.remaining:
        raise OutOfData(num_bits, reader.remaining, reader.position)

    value = 0
    shift = 0
    while shift < num_bits:
        take = min(MAX_READ_BITS, num_bits - shift)
        value |= reader.read_bits(take) << shift
        shift += take
    return value


def _decode_scalar(reader: BitReader, spec: FieldSpec):
    width = spec.rule.bit_width_or_default(spec.natural_width)
    raw = read_wide(reader, width)

    if width > spec.natural_width:
        # Later-read bits sit in the high-order positions and are dropped
        raw &= (1 << spec.natural_width) - 1

    if spec.type is bool:
        return raw != 0
    return spec.type(raw)


def decode_field(reader: BitReader, spec: FieldSpec):
    """
    Decode one field according to its strategy.

    Args:
        reader: BitReader positioned at the field
        spec: Field description

    Returns:
        The decoded (and, if requested, validated) value

    Raises:
        DecodeError: On the first failure inside the field
    """
    if spec.strategy is Strategy.CUSTOM:
        field = spec if spec.name else None
        try:
            value = spec.type.unmarshal(reader, field, spec.tag)
        except DecodeError:
            raise
        except Exception as err:
            raise CustomDecodeFailed(spec.name or None, err) from err
    elif spec.strategy is Strategy.COMPOSITE:
        value = decode_into(reader, spec.type)
    else:
        value = _decode_scalar(reader, spec)

    if spec.rule.validate:
        try:
            value.validate()
        except Exception as err:
            raise ValidationFailed(spec.name, err) from err

    return value


def decode_into(reader: BitReader, cls: type):
    """
    Decode a composite from the reader.

    Args:
        reader: BitReader positioned at the composite
        cls: Dataclass type to decode

    Returns:
        A new instance of cls

    Raises:
        DecodeError: On the first failure, with the failing field's path
    """
    values = {}
    for spec in schema_for(cls):
        try:
            values[spec.name] = decode_field(reader, spec)
        except DecodeError as err:
            err.at_field(spec.name)
            raise
    return cls(**values)


def _target_type(target) -> type:
    if isinstance(target, type):
        return target
    if not dataclasses.is_dataclass(target):
        raise TypeError(
            f"decode target must be a type or a dataclass instance, got {target!r}"
        )
    if type(target).__dataclass_params__.frozen:
        raise TypeError(
            f"cannot decode into frozen {type(target).__qualname__} instance, "
            "pass the type instead"
        )
    return type(target)


def _commit(target, decoded):
    if isinstance(target, type):
        return decoded
    # Init fields, not the schema: custom-decoded types may hold any field type
    for field in dataclasses.fields(target):
        if field.init:
            setattr(target, field.name, getattr(decoded, field.name))
    return target


def decode(data: bytes, target):
    """
    Decode a value from the start of data.

    Bits left over after the target are ignored, so data may be a prefix
    of a longer stream.

    Args:
        data: Input bytes
        target: Type to decode (dataclass, Unmarshaler or scalar type), or
            a dataclass instance whose fields are overwritten

    Returns:
        The decoded value (target itself when an instance was given)

    Raises:
        DecodeError: If decoding fails; an instance target is left untouched
    """
    reader = BitReader(data)
    decoded = decode_field(reader, root_spec(_target_type(target)))
    logger.debug(
        "Decoded %s from %d bytes (%d bits remaining)",
        type(decoded).__qualname__,
        len(reader),
        reader.remaining,
    )
    return _commit(target, decoded)


def decode_exact(data: bytes, target):
    """
    Decode a value that must consume every bit of data.

    Args:
        data: Input bytes
        target: Type or dataclass instance, as for decode()

    Returns:
        The decoded value

    Raises:
        TrailingData: If bits remain after the target is decoded
        DecodeError: If decoding fails; an instance target is left untouched
    """
    reader = BitReader(data)
    decoded = decode_field(reader, root_spec(_target_type(target)))
    if reader.remaining != 0:
        raise TrailingData(reader.remaining)
    logger.debug("Decoded %s from exactly %d bytes", type(decoded).__qualname__, len(reader))
    return _commit(target, decoded)
