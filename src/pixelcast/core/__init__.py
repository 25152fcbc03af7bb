"""Pixel types, classification and numeric traits."""

from pixelcast.core.errors import (
    ConversionError,
    NonFiniteValueError,
    NotConfiguredError,
    ScalarCountMismatchError,
    UnclassifiableTypeError,
)
from pixelcast.core.pixel_types import PixelKind, PixelType, classify, leaf_type
from pixelcast.core.registry import PixelTypeRegistry, parse_pixel_type
from pixelcast.core.traits import NumericTraits, numeric_limits

__all__ = [
    "ConversionError",
    "NonFiniteValueError",
    "NotConfiguredError",
    "ScalarCountMismatchError",
    "UnclassifiableTypeError",
    "PixelKind",
    "PixelType",
    "classify",
    "leaf_type",
    "PixelTypeRegistry",
    "parse_pixel_type",
    "NumericTraits",
    "numeric_limits",
]
