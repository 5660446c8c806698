"""Configuration helpers for sampling the fixed-point noise field."""
from __future__ import annotations

import json
import os
from dataclasses import dataclass, fields, replace
from typing import Dict, Mapping, Optional, Union

from .fixed import ONE

RawValue = Union[int, str]

DEFAULT_ENV_PREFIX = "FIXEDPOINT_PERLIN"


# //1.- Coerce ints or strings in any base ("4096", "0x1000") to integers.
def _as_int(name: str, raw: RawValue) -> int:
    if isinstance(raw, bool):
        raise ValueError(f"{name} must be an integer, got {raw!r}")
    if isinstance(raw, int):
        return raw
    try:
        return int(str(raw).strip(), 0)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


# //2.- Dataclass describing the rectangular sample grid in Q16.16 units.
@dataclass(frozen=True)
class SamplingSettings:
    """Where and how densely to sample the noise field.

    Origins and ``step`` are Q16.16 integers; ``width`` and ``height`` count
    samples. With ``dimensions == 3`` the plane is a slice at ``origin_z``.
    """

    origin_x: int = 0
    origin_y: int = 0
    origin_z: int = 0
    step: int = ONE // 16
    width: int = 64
    height: int = 64
    dimensions: int = 2

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Sample grid width and height must be positive")
        if self.step == 0:
            raise ValueError("Sample step must be non-zero")
        if self.dimensions not in (2, 3):
            raise ValueError(f"dimensions must be 2 or 3, got {self.dimensions}")

    # //3.- Build settings from a loose mapping, ignoring unknown keys.
    @classmethod
    def from_mapping(cls, payload: Optional[Mapping[str, RawValue]] = None) -> "SamplingSettings":
        if not payload:
            return cls()
        known = {field.name for field in fields(cls)}
        values = {name: _as_int(name, raw) for name, raw in payload.items() if name in known}
        return cls(**values)

    # //4.- Allow overriding individual fields through environment variables.
    @classmethod
    def from_environment(
        cls,
        prefix: str = DEFAULT_ENV_PREFIX,
        env: Optional[Mapping[str, str]] = None,
    ) -> "SamplingSettings":
        source = env if env is not None else os.environ
        mapping: Dict[str, RawValue] = {}
        for field in fields(cls):
            raw = source.get(f"{prefix}_{field.name.upper()}")
            if raw is not None:
                mapping[field.name] = raw
        return cls.from_mapping(mapping)

    def overridden(self, **changes: Optional[int]) -> "SamplingSettings":
        """Copy with every non-``None`` keyword replaced."""
        return replace(self, **{name: value for name, value in changes.items() if value is not None})


# //5.- Load a JSON object from disk.
def _read_json_config(path: str) -> dict:
    with open(path, "r", encoding="utf-8") as handle:
        payload = json.load(handle)
    if not isinstance(payload, dict):
        raise ValueError(f"Sampling config {path} must contain a JSON object")
    return payload


# //6.- Canonical accessor: explicit mapping, then JSON file, then environment.
def load_sampling_settings(
    mapping: Optional[Mapping[str, RawValue]] = None,
    *,
    path: Optional[str] = None,
    env_prefix: str = DEFAULT_ENV_PREFIX,
    env: Optional[Mapping[str, str]] = None,
) -> SamplingSettings:
    if mapping is not None:
        return SamplingSettings.from_mapping(mapping)
    if path is not None:
        return SamplingSettings.from_mapping(_read_json_config(path))
    return SamplingSettings.from_environment(prefix=env_prefix, env=env)
