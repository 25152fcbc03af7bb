"""Exceptions raised by pixel type resolution and conversion."""

from __future__ import annotations


class ConversionError(ValueError):
    """Base class for pixel conversion errors."""


class UnclassifiableTypeError(ConversionError):
    """A pixel type does not resolve to scalar, complex or a composite of either."""


class NotConfiguredError(ConversionError):
    """A converter was used before its input component count was declared."""


class ScalarCountMismatchError(ConversionError):
    """
    Flattened buffer length disagrees with the negotiated scalar count.

    Attributes:
        expected: Scalar count computed during size negotiation
        actual: Number of scalars actually produced by flattening
    """

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Flattened {actual} scalars but size negotiation expected {expected}"
        )


class NonFiniteValueError(ConversionError):
    """A NaN reached a destination that cannot hold it."""
