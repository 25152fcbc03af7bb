"""Saturating clamp over a flattened component buffer."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


def clamp(buffer: NDArray[np.float64], lowest: float, highest: float) -> NDArray[np.float64]:
    """
    Saturate every scalar of ``buffer`` in place.

    ``x >= highest`` becomes ``highest``; otherwise ``x <= lowest`` becomes
    ``lowest``. NaN compares false on both sides and is left untouched;
    infinities saturate.

    Args:
        buffer: 1D float64 array, modified in place
        lowest: Lower bound
        highest: Upper bound

    Returns:
        The same buffer
    """
    high = buffer >= highest
    low = ~high & (buffer <= lowest)
    buffer[high] = highest
    buffer[low] = lowest
    return buffer


def saturate(value: float, lowest: float, highest: float) -> float:
    """Scalar form of :func:`clamp`."""
    if value >= highest:
        return highest
    if value <= lowest:
        return lowest
    return value
