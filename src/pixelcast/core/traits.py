"""
Numeric traits for pixel values.

NumericTraits is the accessor the conversion kernel uses to read, write and
size pixel values of a given PixelType. Component counts always mean
*elements*: a complex value is one component, never two.

Value conventions:
    - Leaf types: a Python or numpy scalar (int, float, complex)
    - Composites: a numpy array with one row per element; a composite of
      fixed-length composites is an array of shape (outer, *inner_shape)
      whose leaf components are addressed in C order
"""

from __future__ import annotations

from typing import Any

import numpy as np

from pixelcast.core.errors import NonFiniteValueError
from pixelcast.core.pixel_types import PixelType, classify, leaf_type


def numeric_limits(dtype: np.dtype) -> tuple[float, float]:
    """
    Lowest and highest finite values of a real dtype, as floats.

    Args:
        dtype: Integer or floating point dtype

    Returns:
        Tuple of (lowest, highest)
    """
    dtype = np.dtype(dtype)
    if dtype.kind in "iu":
        info = np.iinfo(dtype)
    else:
        info = np.finfo(dtype)
    return float(info.min), float(info.max)


def _cast_part(value: float, dtype: np.dtype) -> Any:
    """Cast one real value to ``dtype``, saturating to its finite range."""
    if dtype.kind not in "iu":
        if np.isfinite(value):
            info = np.finfo(dtype)
            value = min(max(value, float(info.min)), float(info.max))
        return dtype.type(value)

    if np.isnan(value):
        raise NonFiniteValueError(f"Cannot store NaN in integer type {dtype}")
    info = np.iinfo(dtype)
    if value >= info.max:
        return dtype.type(info.max)
    if value <= info.min:
        return dtype.type(info.min)
    # Truncate toward zero like a C cast
    return dtype.type(int(value))


class NumericTraits:
    """
    Read/write/size accessor for values of one PixelType.

    Attributes:
        pixel_type: The type this accessor serves
        kind: Classified pixel kind
        leaf: Innermost leaf type
    """

    def __init__(self, pixel_type: PixelType) -> None:
        self.pixel_type = pixel_type
        self.kind = classify(pixel_type)
        self.leaf = leaf_type(pixel_type)
        self._element = (
            NumericTraits(pixel_type.element) if pixel_type.element is not None else None
        )

    @property
    def length(self) -> int:
        """Fixed component count (1 for leaves, 0 for variable-length composites)."""
        return self.pixel_type.fixed_length

    @property
    def shape(self) -> tuple[int, ...]:
        """Array shape of a value of this type (0 marks the variable axis)."""
        if self._element is None:
            return ()
        return (self.pixel_type.length,) + self._element.shape

    def lowest(self) -> float:
        return numeric_limits(self.leaf.value_dtype)[0]

    def highest(self) -> float:
        return numeric_limits(self.leaf.value_dtype)[1]

    def component_count(self, value: Any) -> int:
        """Number of leaf components held by ``value``."""
        if self._element is None:
            return 1
        arr = np.asarray(value)
        if arr.ndim == 0:
            raise ValueError(f"Composite {self.pixel_type} value must be an array")
        return len(arr) * self._element.length

    def get_component(self, value: Any, index: int) -> Any:
        """
        Read the ``index``-th leaf component of ``value``.

        Args:
            value: Pixel value
            index: Component index

        Returns:
            The component as a Python/numpy scalar (complex for complex leaves)
        """
        if self._element is None:
            if index != 0:
                raise IndexError(f"Leaf {self.pixel_type} has no component {index}")
            return value

        arr = np.asarray(value)
        if self._element._element is None:
            return arr[index]
        inner = self._element.length
        return self._element.get_component(arr[index // inner], index % inner)

    def set_component(self, value: Any, index: int, component: Any) -> Any:
        """
        Write the ``index``-th leaf component.

        Composite values are updated in place; leaf values are immutable, so
        the new value is returned in every case.
        """
        if self._element is None:
            if index != 0:
                raise IndexError(f"Leaf {self.pixel_type} has no component {index}")
            return self.cast(component)

        if self._element._element is None:
            value[index] = self._element.cast(component)
            return value
        inner = self._element.length
        self._element.set_component(value[index // inner], index % inner, component)
        return value

    def create(self, count: int) -> Any:
        """
        Create a zeroed value able to hold ``count`` components.

        Fixed-size types ignore ``count``.
        """
        if self._element is None:
            return self.cast(0.0)

        outer = self.pixel_type.length
        if outer == 0:
            inner = self._element.length
            outer = -(-count // inner)
        return np.zeros((outer,) + self._element.shape, dtype=self.leaf.dtype)

    def resize(self, value: Any, count: int) -> Any:
        """Copy ``value`` into a new value of ``count`` components, truncating or zero-padding."""
        if self._element is None:
            return value
        out = self.create(count)
        shared = min(self.component_count(value), self.component_count(out))
        for i in range(shared):
            out = self.set_component(out, i, self.get_component(value, i))
        return out

    def cast(self, component: Any) -> Any:
        """
        Cast a real or complex number to this type's leaf storage type.

        Finite parts are saturated to the part dtype's range and integer
        parts truncated toward zero; NaN cannot be stored in an integer part.
        """
        leaf = self.leaf
        if leaf.dtype.kind == "c":
            component = complex(component)
            real = _cast_part(component.real, leaf.value_dtype)
            imag = _cast_part(component.imag, leaf.value_dtype)
            return leaf.dtype.type(complex(float(real), float(imag)))
        if isinstance(component, (complex, np.complexfloating)):
            component = component.real
        return _cast_part(float(component), leaf.dtype)

    def __repr__(self) -> str:
        return f"NumericTraits({self.pixel_type}, kind={self.kind.name})"