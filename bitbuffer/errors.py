"""
Exception hierarchy for bitbuffer.

Every failure raised while decoding derives from DecodeError, so callers
can catch the whole family at once, or pick out a single kind:

- OutOfData: the input ran out before a field was complete (data problem)
- TagError and its subclasses: a malformed field annotation (schema problem)
- UnsupportedFieldType: a field type the decoder cannot handle (schema problem)
- ValidationFailed: a field's validation hook rejected the decoded value
- CustomDecodeFailed: a custom decoder raised a non-codec exception
- TrailingData: an exact decode left unconsumed bits

The message of an error is never rewritten as it propagates. The names of
the enclosing fields are collected in ``path`` instead.
"""


class DecodeError(Exception):
    """Base exception for all bitbuffer errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        # Field names from the outermost composite inwards
        self.path: list = []

    @property
    def field_path(self) -> str:
        """Dotted path of the field that failed, or "" at the top level."""
        return ".".join(self.path)

    def at_field(self, name: str) -> "DecodeError":
        """Prefix a field name to the error path and return the error."""
        self.path.insert(0, name)
        return self


class OutOfData(DecodeError, EOFError):
    """Raised when fewer bits remain than a read requires."""

    def __init__(self, requested: int, remaining: int, position: int) -> None:
        super().__init__(
            f"not enough bits at bit {position}: need {requested}, have {remaining}"
        )
        self.requested = requested
        self.remaining = remaining
        self.position = position


class TagError(DecodeError, ValueError):
    """Raised when a field annotation cannot be parsed."""


class InvalidWidthSyntax(TagError):
    """Raised when a width annotation is not an integer in [1, 255]."""

    def __init__(self, text: str, reason: str = "invalid syntax") -> None:
        super().__init__(f'parsing "{text}": {reason}')
        self.text = text
        self.reason = reason


class ZeroWidthNotAllowed(TagError):
    """Raised when a width annotation is explicitly zero."""

    def __init__(self) -> None:
        super().__init__("bit width must be greater than zero")


class InvalidValidateSyntax(TagError):
    """Raised when a validate annotation is not a boolean."""

    def __init__(self, text: str) -> None:
        super().__init__(f'parsing "{text}": invalid syntax')
        self.text = text


class UnsupportedFieldType(DecodeError, TypeError):
    """Raised when a field's type has no decode strategy."""


class ValidationFailed(DecodeError):
    """
    Raised when a field's validation hook rejects its value.

    The message is the hook's own message, unchanged.
    """

    def __init__(self, field: str, cause: Exception) -> None:
        super().__init__(str(cause))
        self.field = field
        self.cause = cause


class CustomDecodeFailed(DecodeError):
    """Raised when a custom decoder fails with a non-codec exception."""

    def __init__(self, field: "str | None", cause: Exception) -> None:
        super().__init__(str(cause))
        self.field = field
        self.cause = cause


class TrailingData(DecodeError):
    """Raised by an exact decode when input bits are left over."""

    def __init__(self, bits: int) -> None:
        super().__init__(f"{bits} bits remaining in bitbuffer after unmarshal")
        self.bits = bits
