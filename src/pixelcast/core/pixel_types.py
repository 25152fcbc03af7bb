"""
Pixel type descriptions and the pixel-kind classifier.

A PixelType describes the *shape* of a pixel: a numeric leaf (integer,
floating point or complex) or a composite holding a fixed or variable
number of elements of another pixel type. Values never carry their type;
the type is resolved once and threaded through conversion.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

import numpy as np

from pixelcast.core.errors import UnclassifiableTypeError

# Deepest composite nesting the classifier will follow
MAX_NESTING = 8

# numpy dtype kinds accepted as leaves
_REAL_KINDS = "iuf"
_COMPLEX_KIND = "c"


class PixelKind(Enum):
    """The four pixel kinds the conversion kernel distinguishes."""

    SCALAR = auto()  # int or float
    COMPLEX = auto()  # real + imaginary
    COMPOSITE_OF_SCALAR = auto()  # vector of scalars
    COMPOSITE_OF_COMPLEX = auto()  # vector of complex values

    @property
    def is_composite(self) -> bool:
        return self in (PixelKind.COMPOSITE_OF_SCALAR, PixelKind.COMPOSITE_OF_COMPLEX)

    @property
    def complex_leaf(self) -> bool:
        """True when the innermost leaf holds a real and an imaginary part."""
        return self in (PixelKind.COMPLEX, PixelKind.COMPOSITE_OF_COMPLEX)


def _as_dtype(value) -> np.dtype:
    if value is None:
        # np.dtype(None) means float64
        raise UnclassifiableTypeError("Pixel dtype must not be None")
    try:
        return np.dtype(value)
    except TypeError as exc:
        raise UnclassifiableTypeError(f"Not a numeric dtype: {value!r}") from exc


@dataclass(frozen=True)
class PixelType:
    """
    Shape of a pixel value.

    Leaf types set ``dtype`` and leave ``element`` unset. Composite types set
    ``element`` and ``length``, where a length of 0 marks a variable-length
    composite whose element count is only known per value.

    Attributes:
        dtype: numpy storage dtype of a leaf
        element: Element type of a composite
        length: Fixed element count of a composite (0 = variable length)
        value_dtype: dtype whose numeric limits bound the leaf. Defaults to
            ``dtype`` for real leaves and the part dtype for complex leaves.
        name: Display name
    """

    dtype: np.dtype | None = None
    element: PixelType | None = None
    length: int = 0
    value_dtype: np.dtype | None = None
    name: str = field(default="", compare=False)

    def __post_init__(self) -> None:
        if self.dtype is not None:
            dtype = _as_dtype(self.dtype)
            object.__setattr__(self, "dtype", dtype)
            if self.value_dtype is None and dtype.kind == _COMPLEX_KIND:
                object.__setattr__(self, "value_dtype", np.finfo(dtype).dtype)
            elif self.value_dtype is None:
                object.__setattr__(self, "value_dtype", dtype)
        if self.value_dtype is not None:
            object.__setattr__(self, "value_dtype", _as_dtype(self.value_dtype))

    @classmethod
    def scalar(cls, dtype, name: str = "") -> PixelType:
        """Create a real (integer or floating point) leaf type."""
        dtype = _as_dtype(dtype)
        return cls(dtype=dtype, name=name or dtype.name)

    @classmethod
    def complex_of(cls, part_dtype, name: str = "") -> PixelType:
        """
        Create a complex leaf whose real and imaginary parts use ``part_dtype``.

        Integer parts are stored in the smallest numpy complex dtype that
        represents them exactly; their limits still come from ``part_dtype``.
        """
        part = _as_dtype(part_dtype)
        if part.kind not in _REAL_KINDS:
            raise UnclassifiableTypeError(f"Complex parts must be real, got {part}")
        storage = np.complex64 if part.itemsize <= 2 or part == np.float32 else np.complex128
        return cls(dtype=np.dtype(storage), value_dtype=part, name=name or f"c{part.name}")

    @classmethod
    def vector(cls, element: PixelType, length: int = 0, name: str = "") -> PixelType:
        """Create a composite of ``length`` elements (0 for variable length)."""
        suffix = f"[{length}]" if length else "[]"
        return cls(element=element, length=length, name=name or f"{element}{suffix}")

    @property
    def is_leaf(self) -> bool:
        return self.element is None

    @property
    def fixed_length(self) -> int:
        """
        Number of leaf components fixed by the type itself.

        1 for leaves, 0 for variable-length composites.
        """
        if self.element is None:
            return 1
        if self.length == 0:
            return 0
        return self.length * self.element.fixed_length

    @property
    def kind(self) -> PixelKind:
        return classify(self)

    @property
    def leaf(self) -> PixelType:
        return leaf_type(self)

    def __str__(self) -> str:
        return self.name or repr(self)


def _resolve_leaf(pixel_type: PixelType, depth: int = 0) -> tuple[PixelType, int]:
    """Follow composite elements down to the first leaf, returning it and its depth."""
    if not isinstance(pixel_type, PixelType):
        raise UnclassifiableTypeError(f"Not a pixel type: {pixel_type!r}")
    if depth > MAX_NESTING:
        raise UnclassifiableTypeError(f"Composite nesting deeper than {MAX_NESTING}")

    if pixel_type.element is None:
        if pixel_type.dtype is None:
            raise UnclassifiableTypeError("Pixel type has neither a dtype nor an element")
        if pixel_type.dtype.kind not in _REAL_KINDS + _COMPLEX_KIND:
            raise UnclassifiableTypeError(f"Unsupported leaf dtype: {pixel_type.dtype}")
        if pixel_type.value_dtype.kind not in _REAL_KINDS:
            raise UnclassifiableTypeError(
                f"Unsupported value dtype: {pixel_type.value_dtype}"
            )
        return pixel_type, depth

    if pixel_type.dtype is not None:
        raise UnclassifiableTypeError("Pixel type sets both a dtype and an element")
    if pixel_type.length < 0:
        raise UnclassifiableTypeError(f"Negative composite length: {pixel_type.length}")
    if depth > 0 and pixel_type.length == 0:
        # Only the outermost composite may be variable length
        raise UnclassifiableTypeError("Nested composites must have a fixed length")

    return _resolve_leaf(pixel_type.element, depth + 1)


def classify(pixel_type: PixelType) -> PixelKind:
    """
    Determine the pixel kind of a type.

    Args:
        pixel_type: Type to classify

    Returns:
        The PixelKind of the type

    Raises:
        UnclassifiableTypeError: If the type is not a numeric leaf or a
            well-formed composite of one
    """
    leaf, depth = _resolve_leaf(pixel_type)
    complex_leaf = leaf.dtype.kind == _COMPLEX_KIND

    if depth == 0:
        return PixelKind.COMPLEX if complex_leaf else PixelKind.SCALAR
    return PixelKind.COMPOSITE_OF_COMPLEX if complex_leaf else PixelKind.COMPOSITE_OF_SCALAR


def leaf_type(pixel_type: PixelType) -> PixelType:
    """Return the innermost leaf type of a (possibly composite) pixel type."""
    return _resolve_leaf(pixel_type)[0]


UINT8 = PixelType.scalar(np.uint8)
INT8 = PixelType.scalar(np.int8)
UINT16 = PixelType.scalar(np.uint16)
INT16 = PixelType.scalar(np.int16)
UINT32 = PixelType.scalar(np.uint32)
INT32 = PixelType.scalar(np.int32)
UINT64 = PixelType.scalar(np.uint64)
INT64 = PixelType.scalar(np.int64)
FLOAT32 = PixelType.scalar(np.float32)
FLOAT64 = PixelType.scalar(np.float64)
CINT16 = PixelType.complex_of(np.int16)
CINT32 = PixelType.complex_of(np.int32)
COMPLEX64 = PixelType.complex_of(np.float32, name="complex64")
COMPLEX128 = PixelType.complex_of(np.float64, name="complex128")
