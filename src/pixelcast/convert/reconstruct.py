"""
Rebuild destination pixel values from a flattened component buffer.

Inverse of flatten: scalar leaves consume one buffer slot per component,
complex leaves two (``buffer[2 * i]`` real, ``buffer[2 * i + 1]`` imaginary).
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray

from pixelcast.core.pixel_types import PixelKind
from pixelcast.core.traits import NumericTraits


def reconstruct(
    buffer: NDArray[np.float64],
    index: int,
    kind: PixelKind,
    traits: NumericTraits,
    out: Any,
) -> Any:
    """
    Write destination component ``index`` from ``buffer`` into ``out``.

    Args:
        buffer: Clamped scalars
        index: Destination component index
        kind: Pixel kind of the destination type
        traits: Accessor for the destination type
        out: Destination value

    Returns:
        The destination value. Leaf values are immutable, so callers must
        keep the returned value rather than ``out``.
    """
    if kind.is_composite:
        leaf_kind = PixelKind.COMPLEX if kind.complex_leaf else PixelKind.SCALAR
        return reconstruct(buffer, index, leaf_kind, traits, out)

    if kind is PixelKind.COMPLEX:
        component = complex(buffer[2 * index], buffer[2 * index + 1])
    else:
        component = float(buffer[index])
    return traits.set_component(out, index, component)


def reconstruct_value(
    buffer: NDArray[np.float64],
    count: int,
    kind: PixelKind,
    traits: NumericTraits,
) -> Any:
    """Create a destination value sized for ``count`` components and fill it."""
    out = traits.create(count)
    for i in range(count):
        out = reconstruct(buffer, i, kind, traits, out)
    return out
