"""Flatten/clamp/reconstruct conversion kernel."""

from pixelcast.convert.clamp import clamp, saturate
from pixelcast.convert.converter import (
    NAN_POLICIES,
    Converter,
    ConverterState,
    convert_pixel,
)
from pixelcast.convert.flatten import flatten, flatten_value
from pixelcast.convert.reconstruct import reconstruct, reconstruct_value

__all__ = [
    "clamp",
    "saturate",
    "flatten",
    "flatten_value",
    "reconstruct",
    "reconstruct_value",
    "Converter",
    "ConverterState",
    "NAN_POLICIES",
    "convert_pixel",
]
