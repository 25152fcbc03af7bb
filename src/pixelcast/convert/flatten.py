"""
Flatten pixel values into a canonical list of real numbers.

Scalar leaves contribute one float per component, complex leaves two
(real part first, then imaginary part). Components are appended in
ascending index order; reconstruction relies on that order.
"""

from __future__ import annotations

from typing import Any

from pixelcast.core.pixel_types import PixelKind
from pixelcast.core.traits import NumericTraits


def flatten(
    value: Any,
    index: int,
    kind: PixelKind,
    traits: NumericTraits,
    buffer: list[float],
) -> list[float]:
    """
    Append the scalars of one component of ``value`` to ``buffer``.

    Composite kinds recurse to their leaf kind; the component is always read
    through ``traits`` of the full (outer) type.

    Args:
        value: Source pixel value
        index: Component index
        kind: Pixel kind of the source type
        traits: Accessor for the source type
        buffer: List the scalars are appended to

    Returns:
        The same buffer
    """
    if kind.is_composite:
        leaf_kind = PixelKind.COMPLEX if kind.complex_leaf else PixelKind.SCALAR
        return flatten(value, index, leaf_kind, traits, buffer)

    component = traits.get_component(value, index)
    if kind is PixelKind.COMPLEX:
        component = complex(component)
        buffer.append(float(component.real))
        buffer.append(float(component.imag))
    else:
        buffer.append(float(component))
    return buffer


def flatten_value(
    value: Any,
    count: int,
    kind: PixelKind,
    traits: NumericTraits,
) -> list[float]:
    """Flatten components ``0..count-1`` of ``value`` into a new list."""
    buffer: list[float] = []
    for i in range(count):
        flatten(value, i, kind, traits, buffer)
    return buffer
