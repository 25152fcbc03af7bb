"""
Pixel type converter.

Converter turns a pixel value of one PixelType into a value of another,
saturating every scalar to the destination's bounds. Each conversion runs
one flatten -> clamp -> reconstruct cycle:

    value --flatten--> [re, im, ...] --clamp--> [...] --reconstruct--> value

A converter is built once per (source, destination) pair, configured with
the source component count and optional bounds, then called once per pixel.
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Any

import numpy as np

from pixelcast.convert.clamp import clamp
from pixelcast.convert.flatten import flatten_value
from pixelcast.convert.reconstruct import reconstruct_value
from pixelcast.core.errors import (
    NonFiniteValueError,
    NotConfiguredError,
    ScalarCountMismatchError,
)
from pixelcast.core.pixel_types import PixelKind, PixelType
from pixelcast.core.registry import parse_pixel_type
from pixelcast.core.traits import NumericTraits

logger = logging.getLogger(__name__)

NAN_POLICIES = ("propagate", "raise")


class ConverterState(Enum):
    """Configuration state of a Converter."""

    UNCONFIGURED = auto()  # input component count unknown
    SIZE_KNOWN = auto()  # input count set, negotiation pending
    READY = auto()  # output count negotiated


class Converter:
    """
    Saturating converter between two pixel types.

    Bounds default to the numeric limits of the destination's leaf value
    type. Configuration must be finished before a converter is shared
    between threads; ``convert`` itself does not mutate a ready converter.

    Usage:
        converter = Converter("uint8", "int8")
        converter.set_input_component_count(1)
        converter.compute_output_component_count()
        converter.convert(200)  # -> np.int8(127)

    Attributes:
        input_type: Source pixel type
        output_type: Destination pixel type
        nan_policy: "propagate" keeps NaN through the clamp, "raise" rejects it
    """

    def __init__(
        self,
        input_type: PixelType | str,
        output_type: PixelType | str,
        nan_policy: str = "propagate",
    ) -> None:
        if nan_policy not in NAN_POLICIES:
            raise ValueError(
                f"Unknown nan_policy {nan_policy!r}, expected one of {NAN_POLICIES}"
            )

        self.input_type = parse_pixel_type(input_type)
        self.output_type = parse_pixel_type(output_type)
        self.nan_policy = nan_policy

        self._input_traits = NumericTraits(self.input_type)
        self._output_traits = NumericTraits(self.output_type)

        self._lowest = self._output_traits.lowest()
        self._highest = self._output_traits.highest()

        self._input_count: int | None = None
        self._scalar_count: int | None = None
        self._output_count: int | None = None
        self._state = ConverterState.UNCONFIGURED

    @property
    def input_kind(self) -> PixelKind:
        return self._input_traits.kind

    @property
    def output_kind(self) -> PixelKind:
        return self._output_traits.kind

    @property
    def state(self) -> ConverterState:
        return self._state

    @property
    def input_component_count(self) -> int | None:
        return self._input_count

    @property
    def scalar_count(self) -> int | None:
        return self._scalar_count

    @property
    def output_component_count(self) -> int | None:
        return self._output_count

    @property
    def lowest_bound(self) -> float:
        return self._lowest

    @property
    def highest_bound(self) -> float:
        return self._highest

    def set_input_component_count(self, count: int) -> None:
        """
        Declare how many elements the source values hold.

        A complex element counts once. Plain scalar and complex sources
        always hold exactly one element.

        Args:
            count: Number of source elements

        Raises:
            ValueError: If the count cannot describe a source value
        """
        count = int(count)
        if count < 0:
            raise ValueError(f"Input component count must be >= 0, got {count}")
        if not self.input_kind.is_composite and count != 1:
            raise ValueError(
                f"{self.input_type} holds a single component, got count {count}"
            )
        fixed = self._input_traits.length
        if self.input_kind.is_composite and fixed and count > fixed:
            raise ValueError(
                f"{self.input_type} holds at most {fixed} components, got {count}"
            )

        self._input_count = count
        self._scalar_count = None
        self._output_count = None
        self._state = ConverterState.SIZE_KNOWN

    def set_input_component_count_from(self, value: Any) -> int:
        """Declare the input component count from a sample source value."""
        count = self._input_traits.component_count(value)
        self.set_input_component_count(count)
        return count

    def compute_output_component_count(self) -> int:
        """
        Negotiate how many components the destination needs.

        The scalar count doubles the input count for complex sources.
        Variable-length destinations take one component per scalar, or one
        per pair of scalars for complex leaves. Fixed-size destinations
        (including plain scalars and complex values) keep their own length.

        Returns:
            Number of destination components

        Raises:
            NotConfiguredError: If the input component count is not set
        """
        if self._state is ConverterState.UNCONFIGURED:
            raise NotConfiguredError(
                "set_input_component_count must be called before negotiating sizes"
            )

        if self.input_kind.complex_leaf:
            scalar_count = 2 * self._input_count
        else:
            scalar_count = self._input_count

        fixed = self._output_traits.length
        if fixed:
            output_count = fixed
        elif self.output_kind.complex_leaf:
            output_count = (scalar_count + 1) // 2
        else:
            output_count = scalar_count

        self._scalar_count = scalar_count
        self._output_count = output_count
        self._state = ConverterState.READY

        logger.debug(
            "Negotiated %s -> %s: %d input components, %d scalars, %d output components",
            self.input_type,
            self.output_type,
            self._input_count,
            scalar_count,
            output_count,
        )
        return output_count

    def set_lowest_bound(self, value: float) -> None:
        """Set the lower saturation bound for subsequent conversions."""
        self._lowest = float(value)
        logger.debug("Lowest bound of %s converter set to %r", self.output_type, self._lowest)

    def set_highest_bound(self, value: float) -> None:
        """Set the upper saturation bound for subsequent conversions."""
        self._highest = float(value)
        logger.debug("Highest bound of %s converter set to %r", self.output_type, self._highest)

    def convert(self, value: Any) -> Any:
        """
        Convert one pixel value.

        Args:
            value: Source pixel value

        Returns:
            Destination pixel value (numpy scalar or array)

        Raises:
            NotConfiguredError: If the input component count is not set
            ScalarCountMismatchError: If the value does not flatten to the
                negotiated scalar count
            NonFiniteValueError: If a NaN is rejected by the nan policy or
                cannot be stored in the destination
        """
        if self._state is ConverterState.UNCONFIGURED:
            raise NotConfiguredError(
                "set_input_component_count must be called before convert"
            )
        if self._state is ConverterState.SIZE_KNOWN:
            self.compute_output_component_count()

        available = self._input_traits.component_count(value)
        if available < self._input_count:
            per_component = 2 if self.input_kind.complex_leaf else 1
            raise ScalarCountMismatchError(self._scalar_count, available * per_component)

        buffer = flatten_value(value, self._input_count, self.input_kind, self._input_traits)
        if len(buffer) != self._scalar_count:
            raise ScalarCountMismatchError(self._scalar_count, len(buffer))

        complex_out = self.output_kind.complex_leaf
        if complex_out and len(buffer) % 2:
            # Last complex component has no imaginary part
            buffer.append(0.0)

        needed = self._output_count * (2 if complex_out else 1)
        if len(buffer) < needed:
            buffer.extend([0.0] * (needed - len(buffer)))

        scalars = np.asarray(buffer, dtype=np.float64)
        if self.nan_policy == "raise" and np.isnan(scalars).any():
            raise NonFiniteValueError(f"NaN in {self.input_type} value {value!r}")

        clamp(scalars, self._lowest, self._highest)
        return reconstruct_value(scalars, self._output_count, self.output_kind, self._output_traits)

    __call__ = convert

    def __repr__(self) -> str:
        return (
            f"Converter({self.input_type} -> {self.output_type}, "
            f"state={self._state.name}, bounds=[{self._lowest}, {self._highest}])"
        )


def convert_pixel(
    value: Any,
    input_type: PixelType | str,
    output_type: PixelType | str,
    lowest: float | None = None,
    highest: float | None = None,
    nan_policy: str = "propagate",
) -> Any:
    """
    Convert a single pixel value with a throwaway converter.

    The input component count is taken from ``value`` itself.

    Args:
        value: Source pixel value
        input_type: Source type (PixelType, registry name or numpy dtype)
        output_type: Destination type
        lowest: Optional lower bound override
        highest: Optional upper bound override
        nan_policy: "propagate" or "raise"

    Returns:
        Converted pixel value
    """
    converter = Converter(input_type, output_type, nan_policy=nan_policy)
    converter.set_input_component_count_from(value)
    if lowest is not None:
        converter.set_lowest_bound(lowest)
    if highest is not None:
        converter.set_highest_bound(highest)
    converter.compute_output_component_count()
    return converter.convert(value)
