"""
Tests for ConverterConfig loading, saving and converter construction.
"""

import json

import numpy as np
import pytest

from pixelcast.config import ConverterConfig
from pixelcast.convert.converter import ConverterState
from pixelcast.core.errors import UnclassifiableTypeError


class TestConverterConfig:
    """Tests for ConverterConfig fields and from_dict()."""

    def test_defaults(self):
        """Test a default config converts double to uint8."""
        cfg = ConverterConfig()
        assert cfg.input_type == "double"
        assert cfg.output_type == "uint8"
        assert cfg.input_components is None
        assert cfg.lowest is None
        assert cfg.highest is None
        assert cfg.nan_policy == "propagate"

    def test_rejects_unknown_nan_policy(self):
        """Test the nan policy is validated on construction."""
        with pytest.raises(ValueError):
            ConverterConfig(nan_policy="skip")

    def test_from_dict_nested_sections(self):
        """Test types, bounds and policy sections are merged; other keys ignored."""
        cfg = ConverterConfig.from_dict(
            {
                "types": {"input_type": "cint16[]", "output_type": "float[]", "input_components": 4},
                "bounds": {"lowest": -1.0, "highest": 1.0},
                "policy": {"nan_policy": "raise"},
                "unrelated": 123,
            }
        )
        assert cfg.input_type == "cint16[]"
        assert cfg.output_type == "float[]"
        assert cfg.input_components == 4
        assert cfg.lowest == -1.0
        assert cfg.highest == 1.0
        assert cfg.nan_policy == "raise"

    def test_from_empty_dict(self):
        """Test missing data falls back to defaults."""
        assert ConverterConfig.from_dict(None) == ConverterConfig()
        assert ConverterConfig.from_dict({}) == ConverterConfig()


class TestBuildConverter:
    """Tests for ConverterConfig.build_converter()."""

    def test_scalar_source_is_ready(self):
        """Test a scalar source is negotiated immediately."""
        converter = ConverterConfig(input_type="double", output_type="int8").build_converter()
        assert converter.state is ConverterState.READY
        assert converter.convert(-500.0) == -128

    def test_applies_bounds(self):
        """Test configured bounds replace the destination limits."""
        cfg = ConverterConfig(
            input_type="double[]", output_type="uint8[]", input_components=2, lowest=10, highest=20
        )
        converter = cfg.build_converter()
        np.testing.assert_array_equal(converter.convert(np.array([0.0, 50.0])), [10, 20])

    def test_fixed_source_length(self):
        """Test a fixed-length source supplies the input count."""
        converter = ConverterConfig(input_type="float[3]", output_type="cfloat[]").build_converter()
        assert converter.input_component_count == 3
        assert converter.output_component_count == 2

    def test_variable_source_unconfigured(self):
        """Test a variable-length source waits for a sample value."""
        converter = ConverterConfig(input_type="uint16[]", output_type="double[]").build_converter()
        assert converter.state is ConverterState.UNCONFIGURED

        value = np.array([1, 2, 3], dtype=np.uint16)
        converter.set_input_component_count_from(value)
        np.testing.assert_array_equal(converter.convert(value), [1.0, 2.0, 3.0])

    def test_unknown_type(self):
        """Test unknown type names are rejected."""
        with pytest.raises(UnclassifiableTypeError):
            ConverterConfig(output_type="rgb").build_converter()

    def test_missing_type(self):
        """Test an unset type name is rejected."""
        with pytest.raises(UnclassifiableTypeError):
            ConverterConfig(input_type=None).build_converter()


class TestConfigFiles:
    """Tests for to_file() and from_file()."""

    def test_json_round_trip(self, tmp_path):
        """Test JSON files are written, with parents created, and read back."""
        cfg = ConverterConfig(input_type="cdouble", output_type="cint16", lowest=-100.0, highest=100.0)
        path = tmp_path / "nested" / "converter.json"
        cfg.to_file(path)

        assert json.loads(path.read_text(encoding="utf-8"))["output_type"] == "cint16"
        assert ConverterConfig.from_file(path) == cfg

    def test_yaml_round_trip(self, tmp_path):
        """Test YAML files are written and read back."""
        pytest.importorskip("yaml")
        cfg = ConverterConfig(input_type="uint8[4]", output_type="float[]", nan_policy="raise")
        path = tmp_path / "converter.yaml"
        cfg.to_file(path)

        assert ConverterConfig.from_file(path) == cfg

    def test_missing_file(self, tmp_path):
        """Test a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            ConverterConfig.from_file(tmp_path / "missing.json")

    def test_empty_json_file(self, tmp_path):
        """Test an empty file loads the defaults."""
        path = tmp_path / "empty.json"
        path.write_text("", encoding="utf-8")
        assert ConverterConfig.from_file(path) == ConverterConfig()
