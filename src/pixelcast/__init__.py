"""
pixelcast - saturating pixel type conversion.

Converts scalar, complex and vector pixel values between numeric
representations, clamping every scalar to the destination's range.
"""

__version__ = "0.1.0"

from pixelcast.convert import Converter, ConverterState, convert_pixel
from pixelcast.core import (
    ConversionError,
    NonFiniteValueError,
    NotConfiguredError,
    NumericTraits,
    PixelKind,
    PixelType,
    PixelTypeRegistry,
    ScalarCountMismatchError,
    UnclassifiableTypeError,
    classify,
    parse_pixel_type,
)

__all__ = [
    "Converter",
    "ConverterState",
    "convert_pixel",
    "ConversionError",
    "NonFiniteValueError",
    "NotConfiguredError",
    "NumericTraits",
    "PixelKind",
    "PixelType",
    "PixelTypeRegistry",
    "ScalarCountMismatchError",
    "UnclassifiableTypeError",
    "classify",
    "parse_pixel_type",
]
