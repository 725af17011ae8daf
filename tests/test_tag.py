"""Tests for field annotation parsing."""

import dataclasses

import pytest

from bitbuffer.errors import (
    InvalidValidateSyntax,
    InvalidWidthSyntax,
    TagError,
    ZeroWidthNotAllowed,
)
from bitbuffer.tag import (
    TAG_BIT_WIDTH,
    TAG_VALIDATE,
    FieldRule,
    bits,
    parse_bit_width,
    parse_tag,
    resolve_validate,
    resolve_width,
)


class TestParseBitWidth:
    """Test the bbwidth entry."""

    def test_absent(self) -> None:
        """Test that a missing width means unset."""
        assert parse_bit_width({}) is None

    @pytest.mark.parametrize("text,expected", [("1", 1), ("8", 8), ("65", 65), ("255", 255)])
    def test_valid(self, text: str, expected: int) -> None:
        """Test widths across the accepted range."""
        assert parse_bit_width({TAG_BIT_WIDTH: text}) == expected

    def test_integer_value(self) -> None:
        """Test that a non-string value is parsed from its string form."""
        assert parse_bit_width({TAG_BIT_WIDTH: 12}) == 12

    def test_invalid_syntax(self) -> None:
        """Test that a non-numeric width carries the offending text."""
        with pytest.raises(InvalidWidthSyntax) as excinfo:
            parse_bit_width({TAG_BIT_WIDTH: "width"})
        assert str(excinfo.value) == 'parsing "width": invalid syntax'
        assert excinfo.value.text == "width"

    @pytest.mark.parametrize("text", ["-1", "+8", " 8", "8 ", "1_0", "0x10", "", "٣"])
    def test_rejects_non_digits(self, text: str) -> None:
        """Test that signs, whitespace and other notations are rejected."""
        with pytest.raises(InvalidWidthSyntax):
            parse_bit_width({TAG_BIT_WIDTH: text})

    def test_out_of_range(self) -> None:
        """Test that widths above 255 are rejected."""
        with pytest.raises(InvalidWidthSyntax) as excinfo:
            parse_bit_width({TAG_BIT_WIDTH: "256"})
        assert str(excinfo.value) == 'parsing "256": value out of range'

    def test_zero(self) -> None:
        """Test that an explicit zero is an error, not "unset"."""
        with pytest.raises(ZeroWidthNotAllowed) as excinfo:
            parse_bit_width({TAG_BIT_WIDTH: "0"})
        assert str(excinfo.value) == "bit width must be greater than zero"

    def test_errors_are_tag_errors(self) -> None:
        """Test that annotation errors share one base class."""
        with pytest.raises(TagError):
            parse_bit_width({TAG_BIT_WIDTH: "0"})
        with pytest.raises(ValueError):
            parse_bit_width({TAG_BIT_WIDTH: "x"})


class TestResolveWidth:
    """Test resolve_width function."""

    def test_falls_back_to_natural_width(self) -> None:
        """Test the natural width is used when unset."""
        assert resolve_width({}, 8) == 8

    def test_override_may_exceed_natural_width(self) -> None:
        """Test that an override wider than the storage type is kept."""
        assert resolve_width({TAG_BIT_WIDTH: "65"}, 8) == 65


class TestResolveValidate:
    """Test the bbvalidate entry."""

    def test_absent(self) -> None:
        """Test that a missing entry means no validation."""
        assert resolve_validate({}) is False

    @pytest.mark.parametrize("text", ["1", "t", "T", "TRUE", "true", "True"])
    def test_true(self, text: str) -> None:
        """Test accepted spellings of true."""
        assert resolve_validate({TAG_VALIDATE: text}) is True

    @pytest.mark.parametrize("text", ["0", "f", "F", "FALSE", "false", "False"])
    def test_false(self, text: str) -> None:
        """Test accepted spellings of false."""
        assert resolve_validate({TAG_VALIDATE: text}) is False

    def test_bool_value(self) -> None:
        """Test that Python booleans are accepted."""
        assert resolve_validate({TAG_VALIDATE: True}) is True
        assert resolve_validate({TAG_VALIDATE: False}) is False

    @pytest.mark.parametrize("text", ["validate", "yes", "tRUE", ""])
    def test_invalid_syntax(self, text: str) -> None:
        """Test that other strings are rejected with the offending text."""
        with pytest.raises(InvalidValidateSyntax) as excinfo:
            resolve_validate({TAG_VALIDATE: text})
        assert str(excinfo.value) == f'parsing "{text}": invalid syntax'


class TestParseTag:
    """Test parse_tag and FieldRule."""

    def test_empty(self) -> None:
        """Test that an empty annotation gives the default rule."""
        assert parse_tag({}) == FieldRule(bit_width=None, validate=False)

    def test_both_entries(self) -> None:
        """Test an annotation with width and validation."""
        rule = parse_tag({TAG_BIT_WIDTH: "4", TAG_VALIDATE: "true"})
        assert rule == FieldRule(bit_width=4, validate=True)

    def test_unknown_keys_ignored(self) -> None:
        """Test that entries meant for custom decoders are ignored."""
        assert parse_tag({"scale": "0.05"}) == FieldRule()

    def test_bit_width_or_default(self) -> None:
        """Test the default width fallback."""
        assert FieldRule().bit_width_or_default(16) == 16
        assert FieldRule(bit_width=3).bit_width_or_default(16) == 3

    def test_width_error_raised_before_validate_parsed(self) -> None:
        """Test that a bad width is reported even with a bad validate entry."""
        with pytest.raises(InvalidWidthSyntax):
            parse_tag({TAG_BIT_WIDTH: "w", TAG_VALIDATE: "v"})


class TestBitsHelper:
    """Test the bits() field declaration helper."""

    def test_metadata(self) -> None:
        """Test that bits() records the annotation as field metadata."""

        @dataclasses.dataclass
        class Record:
            a: int = bits(width=3, validate=True, scale="0.5")

        (field,) = dataclasses.fields(Record)
        assert dict(field.metadata) == {
            TAG_BIT_WIDTH: 3,
            TAG_VALIDATE: True,
            "scale": "0.5",
        }

    def test_no_arguments(self) -> None:
        """Test that bits() without arguments adds no entries."""

        @dataclasses.dataclass
        class Record:
            a: int = bits()

        (field,) = dataclasses.fields(Record)
        assert dict(field.metadata) == {}
