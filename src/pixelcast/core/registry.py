"""
Named pixel type registry.

Provides a global registry mapping pixel type names (``uint8``, ``cfloat``,
...) to PixelType instances, plus a parser for composite suffixes such as
``uint8[3]`` or ``cfloat[]``.
"""

from __future__ import annotations

import re

import numpy as np

from pixelcast.core.errors import UnclassifiableTypeError
from pixelcast.core.pixel_types import (
    CINT16,
    CINT32,
    COMPLEX64,
    COMPLEX128,
    FLOAT32,
    FLOAT64,
    INT8,
    INT16,
    INT32,
    INT64,
    UINT8,
    UINT16,
    UINT32,
    UINT64,
    PixelType,
    classify,
)

_NAME_RE = re.compile(r"^\s*([A-Za-z_][A-Za-z0-9_]*)\s*((?:\[\s*\d*\s*\]\s*)*)$")
_SUFFIX_RE = re.compile(r"\[\s*(\d*)\s*\]")


def _category_of(pixel_type: PixelType) -> str:
    dtype = pixel_type.leaf.dtype
    if dtype.kind == "c":
        return "Complex"
    if dtype.kind == "f":
        return "Float"
    return "Integer"


class PixelTypeRegistry:
    """
    Global registry of named pixel types.

    Usage:
        # Register a type under a name
        PixelTypeRegistry.register("rgb8", PixelType.vector(UINT8, 3))

        # Look up a type
        pixel_type = PixelTypeRegistry.get("rgb8")

        # Parse a name with composite suffixes
        pixel_type = parse_pixel_type("cfloat[]")
    """

    _registry: dict[str, PixelType] = {}
    _categories: dict[str, list[str]] = {}

    @classmethod
    def register(cls, name: str, pixel_type: PixelType) -> PixelType:
        """
        Register a pixel type under a name.

        Args:
            name: Lookup name (case-insensitive)
            pixel_type: Type to register; must classify

        Returns:
            The registered type
        """
        classify(pixel_type)
        key = name.lower()
        cls._registry[key] = pixel_type

        category = _category_of(pixel_type)
        if category not in cls._categories:
            cls._categories[category] = []
        if key not in cls._categories[category]:
            cls._categories[category].append(key)

        return pixel_type

    @classmethod
    def unregister(cls, name: str) -> bool:
        """
        Unregister a pixel type.

        Returns:
            True if unregistered, False if not found
        """
        key = name.lower()
        if key not in cls._registry:
            return False

        pixel_type = cls._registry.pop(key)
        category = _category_of(pixel_type)
        if category in cls._categories and key in cls._categories[category]:
            cls._categories[category].remove(key)

        return True

    @classmethod
    def get(cls, name: str) -> PixelType | None:
        return cls._registry.get(name.lower())

    @classmethod
    def get_categories(cls) -> dict[str, list[str]]:
        """Get type names organized by category."""
        return {cat: list(names) for cat, names in cls._categories.items()}

    @classmethod
    def get_by_category(cls, category: str) -> list[PixelType]:
        names = cls._categories.get(category, [])
        return [cls._registry[name] for name in names if name in cls._registry]

    @classmethod
    def list_all(cls) -> list[str]:
        return list(cls._registry.keys())

    @classmethod
    def clear(cls) -> None:
        """Clear all registrations (useful for testing)."""
        cls._registry.clear()
        cls._categories.clear()

    @classmethod
    def reset(cls) -> None:
        """Restore the built-in type names."""
        cls.clear()
        for name, pixel_type in _BUILTIN_TYPES.items():
            cls.register(name, pixel_type)


_BUILTIN_TYPES: dict[str, PixelType] = {
    "uint8": UINT8,
    "int8": INT8,
    "uint16": UINT16,
    "int16": INT16,
    "uint32": UINT32,
    "int32": INT32,
    "uint64": UINT64,
    "int64": INT64,
    "float": FLOAT32,
    "float32": FLOAT32,
    "double": FLOAT64,
    "float64": FLOAT64,
    "cint16": CINT16,
    "cint32": CINT32,
    "cfloat": COMPLEX64,
    "complex64": COMPLEX64,
    "cdouble": COMPLEX128,
    "complex128": COMPLEX128,
}

PixelTypeRegistry.reset()


def parse_pixel_type(text) -> PixelType:
    """
    Resolve a pixel type from its name.

    A registered name may be followed by composite suffixes, applied
    innermost first: ``[n]`` wraps in a fixed composite of ``n`` elements
    and ``[]`` in a variable-length composite. ``uint16[3][]`` is a
    variable-length composite of 3-element uint16 vectors.

    Args:
        text: Type name, a numpy dtype, or a PixelType (returned as is)

    Returns:
        The resolved PixelType

    Raises:
        UnclassifiableTypeError: Unknown name or malformed suffix
    """
    if isinstance(text, PixelType):
        return text
    if not isinstance(text, str):
        return dtype_pixel_type(text)

    match = _NAME_RE.match(str(text))
    if match is None:
        raise UnclassifiableTypeError(f"Malformed pixel type name: {text!r}")

    base_name, suffixes = match.groups()
    pixel_type = PixelTypeRegistry.get(base_name)
    if pixel_type is None:
        raise UnclassifiableTypeError(f"Unknown pixel type: {base_name!r}")

    for length in _SUFFIX_RE.findall(suffixes):
        size = int(length) if length else 0
        if length and size == 0:
            raise UnclassifiableTypeError(f"Fixed composite length must be positive: {text!r}")
        pixel_type = PixelType.vector(pixel_type, size)

    classify(pixel_type)
    return pixel_type


def dtype_pixel_type(dtype) -> PixelType:
    """Leaf PixelType matching a numpy dtype (complex dtypes map to complex leaves)."""
    if dtype is None:
        raise UnclassifiableTypeError("Pixel type must not be None")
    try:
        dtype = np.dtype(dtype)
    except TypeError as exc:
        raise UnclassifiableTypeError(f"Not a pixel type: {dtype!r}") from exc
    if dtype.kind == "c":
        return PixelType.complex_of(np.finfo(dtype).dtype, name=dtype.name)
    return PixelType.scalar(dtype)
