"""Converter configuration model."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

from pixelcast.convert.converter import NAN_POLICIES, Converter

logger = logging.getLogger(__name__)

_SECTIONS = ("types", "bounds", "policy")


@dataclass(slots=True)
class ConverterConfig:
    # ---- Types ----
    input_type: str = "double"
    output_type: str = "uint8"
    input_components: int | None = None  # None: derive from a sample value

    # ---- Bounds ----
    lowest: float | None = None  # None: destination numeric limits
    highest: float | None = None

    # ---- Policy ----
    nan_policy: str = "propagate"  # "propagate" | "raise"

    def __post_init__(self) -> None:
        if self.nan_policy not in NAN_POLICIES:
            raise ValueError(
                f"Unknown nan_policy {self.nan_policy!r}, expected one of {NAN_POLICIES}"
            )

    def build_converter(self) -> Converter:
        """
        Create a converter from this configuration.

        The input component count comes from ``input_components``, or from the
        source type when it fixes one. Variable-length sources without an
        explicit count are left for ``set_input_component_count_from``.
        """
        converter = Converter(self.input_type, self.output_type, nan_policy=self.nan_policy)

        count = self.input_components
        if count is None:
            fixed = converter.input_type.fixed_length
            count = fixed or None
        if count is not None:
            converter.set_input_component_count(count)
            converter.compute_output_component_count()

        if self.lowest is not None:
            converter.set_lowest_bound(self.lowest)
        if self.highest is not None:
            converter.set_highest_bound(self.highest)
        return converter

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def to_file(self, path: str | Path) -> None:
        output_path = Path(path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        data = self.to_dict()
        if output_path.suffix.lower() == ".json":
            output_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
            return
        try:
            import yaml
        except Exception as exc:
            raise RuntimeError("YAML output requires PyYAML (`pip install pyyaml`).") from exc
        output_path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")

    @classmethod
    def from_dict(cls, raw: dict[str, Any] | None) -> "ConverterConfig":
        if not raw:
            return cls()

        merged = dict(raw)
        for section_name in _SECTIONS:
            section = raw.get(section_name)
            if isinstance(section, dict):
                merged.update(section)

        valid_names = {f.name for f in fields(cls)}
        kwargs = {k: v for k, v in merged.items() if k in valid_names}
        return cls(**kwargs)

    @classmethod
    def from_file(cls, path: str | Path) -> "ConverterConfig":
        cfg_path = Path(path)
        if not cfg_path.exists():
            raise FileNotFoundError(f"Config file not found: {cfg_path}")
        logger.info("Loading converter config from %s", cfg_path)
        text = cfg_path.read_text(encoding="utf-8")
        if cfg_path.suffix.lower() == ".json":
            payload = json.loads(text) if text.strip() else {}
            return cls.from_dict(payload)

        try:
            import yaml
        except Exception as exc:
            raise RuntimeError("YAML config parsing requires PyYAML (`pip install pyyaml`).") from exc
        payload = yaml.safe_load(text) or {}
        if not isinstance(payload, dict):
            raise ValueError(f"Config root must be a mapping, got {type(payload).__name__}")
        return cls.from_dict(payload)
