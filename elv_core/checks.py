"""Argument checks shared by calculator entry points (TypeError / ValueError)."""

from __future__ import annotations

import math


def as_finite(value: float, name: str) -> float:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        raise TypeError(f"{name} must be a number")
    val = float(value)
    if math.isnan(val) or math.isinf(val):
        raise ValueError(f"{name} must be finite")
    return val


def as_positive(value: float, name: str) -> float:
    val = as_finite(value, name)
    if val <= 0.0:
        raise ValueError(f"{name} must be > 0")
    return val


def as_non_negative(value: float, name: str) -> float:
    val = as_finite(value, name)
    if val < 0.0:
        raise ValueError(f"{name} must be >= 0")
    return val


def as_count(value: int, name: str) -> int:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        raise TypeError(f"{name} must be a number")
    val = float(value)
    if math.isnan(val) or math.isinf(val) or not val.is_integer():
        raise ValueError(f"{name} must be an integer")
    if val < 0:
        raise ValueError(f"{name} must be >= 0")
    return int(val)
