"""
Tests for pixel type descriptions and the pixel-kind classifier.
"""

import numpy as np
import pytest

from pixelcast.core.errors import UnclassifiableTypeError
from pixelcast.core.pixel_types import (
    CINT16,
    CINT32,
    COMPLEX64,
    COMPLEX128,
    FLOAT32,
    INT16,
    MAX_NESTING,
    UINT8,
    PixelKind,
    PixelType,
    classify,
    leaf_type,
)


class TestPixelType:
    """Tests for PixelType construction."""

    def test_scalar_leaf(self):
        """Test scalar leaf stores dtype and value dtype."""
        assert UINT8.dtype == np.uint8
        assert UINT8.value_dtype == np.uint8
        assert UINT8.is_leaf
        assert UINT8.fixed_length == 1
        assert str(UINT8) == "uint8"

    def test_complex_float_leaf(self):
        """Test complex leaves take their limits from the part dtype."""
        assert COMPLEX64.dtype == np.complex64
        assert COMPLEX64.value_dtype == np.float32
        assert COMPLEX128.value_dtype == np.float64

    def test_complex_integer_leaf(self):
        """Test integer complex leaves use the smallest exact storage."""
        assert CINT16.dtype == np.complex64
        assert CINT16.value_dtype == np.int16
        assert CINT32.dtype == np.complex128
        assert CINT32.value_dtype == np.int32
        assert str(CINT16) == "cint16"

    def test_vector_lengths(self):
        """Test fixed and variable composite lengths."""
        rgb = PixelType.vector(UINT8, 3)
        bands = PixelType.vector(FLOAT32)

        assert rgb.fixed_length == 3
        assert bands.fixed_length == 0
        assert str(rgb) == "uint8[3]"
        assert str(bands) == "float32[]"

    def test_nested_fixed_length(self):
        """Test fixed length multiplies through nesting."""
        nested = PixelType.vector(PixelType.vector(INT16, 2), 4)
        assert nested.fixed_length == 8

    def test_equality_ignores_name(self):
        """Test types compare by shape, not display name."""
        assert PixelType.scalar(np.uint8, name="byte") == UINT8
        assert hash(PixelType.scalar(np.uint8)) == hash(UINT8)

    def test_invalid_dtype(self):
        """Test non-dtype input is rejected."""
        with pytest.raises(UnclassifiableTypeError):
            PixelType.scalar("not-a-dtype")

    def test_complex_of_complex_rejected(self):
        """Test complex parts must be real."""
        with pytest.raises(UnclassifiableTypeError):
            PixelType.complex_of(np.complex64)


class TestClassify:
    """Tests for classify() and leaf_type()."""

    @pytest.mark.parametrize(
        "pixel_type,kind",
        [
            (UINT8, PixelKind.SCALAR),
            (FLOAT32, PixelKind.SCALAR),
            (COMPLEX64, PixelKind.COMPLEX),
            (CINT16, PixelKind.COMPLEX),
            (PixelType.vector(UINT8, 3), PixelKind.COMPOSITE_OF_SCALAR),
            (PixelType.vector(FLOAT32), PixelKind.COMPOSITE_OF_SCALAR),
            (PixelType.vector(COMPLEX64), PixelKind.COMPOSITE_OF_COMPLEX),
            (PixelType.vector(PixelType.vector(CINT16, 2)), PixelKind.COMPOSITE_OF_COMPLEX),
        ],
    )
    def test_kinds(self, pixel_type, kind):
        """Test each shape classifies to the expected kind."""
        assert classify(pixel_type) is kind
        assert pixel_type.kind is kind

    def test_kind_flags(self):
        """Test helper flags on PixelKind."""
        assert PixelKind.COMPOSITE_OF_COMPLEX.is_composite
        assert PixelKind.COMPOSITE_OF_COMPLEX.complex_leaf
        assert PixelKind.COMPLEX.complex_leaf
        assert not PixelKind.COMPLEX.is_composite
        assert not PixelKind.SCALAR.complex_leaf

    def test_leaf_type(self):
        """Test leaf resolution through nesting."""
        nested = PixelType.vector(PixelType.vector(CINT16, 2), 3)
        assert leaf_type(nested) == CINT16
        assert leaf_type(UINT8) == UINT8

    def test_bool_unclassifiable(self):
        """Test boolean leaves are rejected."""
        with pytest.raises(UnclassifiableTypeError):
            classify(PixelType.scalar(np.bool_))

    def test_empty_type_unclassifiable(self):
        """Test a type with neither dtype nor element is rejected."""
        with pytest.raises(UnclassifiableTypeError):
            classify(PixelType())

    def test_ambiguous_type_unclassifiable(self):
        """Test a type with both dtype and element is rejected."""
        with pytest.raises(UnclassifiableTypeError):
            classify(PixelType(dtype=np.uint8, element=UINT8, length=2))

    def test_variable_inner_composite_unclassifiable(self):
        """Test only the outermost composite may be variable length."""
        with pytest.raises(UnclassifiableTypeError):
            classify(PixelType.vector(PixelType.vector(UINT8), 3))

    def test_nesting_limit(self):
        """Test nesting deeper than MAX_NESTING is rejected."""
        pixel_type = UINT8
        for _ in range(MAX_NESTING + 1):
            pixel_type = PixelType.vector(pixel_type, 1)
        with pytest.raises(UnclassifiableTypeError):
            classify(pixel_type)

    def test_not_a_pixel_type(self):
        """Test arbitrary objects are rejected."""
        with pytest.raises(UnclassifiableTypeError):
            classify("uint8")
