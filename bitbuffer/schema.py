"""
Schema registration for composite types.

A composite is a dataclass. Its schema is the ordered tuple of FieldSpec
entries, one per init field, built the first time the type is decoded and
reused for every later decode. Building the schema resolves each field's
type hints, its decode strategy and its annotation, so malformed
annotations surface on the first decode of the type.
"""

import dataclasses
import enum
import functools
import logging
import typing
from typing import Mapping, Tuple

from bitbuffer.errors import DecodeError, UnsupportedFieldType
from bitbuffer.tag import FieldRule, parse_tag
from bitbuffer.types import Unmarshaler, Validator, natural_width

logger = logging.getLogger(__name__)

# Most recently used schemas kept
SCHEMA_CACHE_SIZE = 256


class Strategy(enum.Enum):
    """How a field is decoded."""

    CUSTOM = "custom"
    COMPOSITE = "composite"
    SCALAR = "scalar"


@dataclasses.dataclass(frozen=True)
class FieldSpec:
    """Static description of one field of a composite."""

    name: str
    type: type
    tag: Mapping
    rule: FieldRule
    strategy: Strategy
    # Zero for custom and composite fields
    natural_width: int = 0


def is_composite(field_type) -> bool:
    """Check whether a type is a decodable composite (a dataclass type)."""
    return isinstance(field_type, type) and dataclasses.is_dataclass(field_type)


def classify(name: str, field_type, tag: Mapping) -> FieldSpec:
    """
    Build the FieldSpec of a single field.

    Args:
        name: Field name ("" for a top-level target)
        field_type: Resolved type of the field
        tag: Field annotation mapping

    Returns:
        The field description

    Raises:
        TagError: If the annotation is malformed
        UnsupportedFieldType: If the type cannot be decoded, or validation
            is requested on a type without a validate() hook
    """
    rule = parse_tag(tag)
    width = 0
    what = f"field {name!r}" if name else "target"

    if isinstance(field_type, type) and issubclass(field_type, Unmarshaler):
        strategy = Strategy.CUSTOM
    elif is_composite(field_type):
        strategy = Strategy.COMPOSITE
    else:
        width = natural_width(field_type)
        if width is None:
            raise UnsupportedFieldType(f"{what} has unsupported type {field_type!r}")
        strategy = Strategy.SCALAR

    if rule.validate and not issubclass(field_type, Validator):
        raise UnsupportedFieldType(
            f"{what} requests validation but {field_type.__name__} "
            "has no validate() hook"
        )

    return FieldSpec(
        name=name,
        type=field_type,
        tag=tag,
        rule=rule,
        strategy=strategy,
        natural_width=width,
    )


@functools.lru_cache(maxsize=SCHEMA_CACHE_SIZE)
def schema_for(cls: type) -> Tuple[FieldSpec, ...]:
    """
    Get the schema of a composite type.

    Schemas are cached per type, holding a reference to the type, for the
    SCHEMA_CACHE_SIZE most recently used types. An evicted schema is
    rebuilt on its next use.

    Args:
        cls: Dataclass type

    Returns:
        FieldSpec tuple in declaration order

    Raises:
        UnsupportedFieldType: If cls is not a dataclass or a field type
            cannot be decoded
        TagError: If a field annotation is malformed
    """
    if not is_composite(cls):
        raise UnsupportedFieldType(f"{cls!r} is not a dataclass type")

    hints = typing.get_type_hints(cls)
    specs = []
    for field in dataclasses.fields(cls):
        if not field.init:
            continue
        try:
            specs.append(classify(field.name, hints[field.name], field.metadata))
        except DecodeError as err:
            raise err.at_field(field.name)

    logger.debug("Registered schema for %s with %d fields", cls.__qualname__, len(specs))
    return tuple(specs)


def root_spec(target_type) -> FieldSpec:
    """Describe a top-level decode target as an unnamed, unannotated field."""
    return classify("", target_type, {})
