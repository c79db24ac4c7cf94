"""
Fiber and transceiver catalog.

Loads data/fiber_catalog.json once and exposes typed records.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

_CATALOG_PATH = Path(__file__).resolve().parent / "data" / "fiber_catalog.json"


@dataclass(frozen=True)
class FiberType:
    key: str
    label: str
    attenuation_db_per_km: float


@dataclass(frozen=True)
class Transceiver:
    key: str
    label: str
    tx_dbm: float | None
    rx_dbm: float | None


@lru_cache(maxsize=1)
def _load() -> dict:
    return json.loads(_CATALOG_PATH.read_text(encoding="utf-8"))


def fiber_types() -> dict[str, FiberType]:
    return {
        row["key"]: FiberType(row["key"], row["label"], float(row["attenuation_db_per_km"]))
        for row in _load()["fiber_types"]
    }


def transceivers() -> dict[str, Transceiver]:
    return {
        row["key"]: Transceiver(row["key"], row["label"], row["tx_dbm"], row["rx_dbm"])
        for row in _load()["transceivers"]
    }


def default_attenuation() -> float:
    return float(_load()["default_attenuation_db_per_km"])


def element_losses() -> dict[str, float]:
    return {k: float(v) for k, v in _load()["element_losses_db"].items()}


def high_margin_warning_db() -> float:
    return float(_load()["high_margin_warning_db"])


def attenuation_for(fiber_key: str) -> float:
    fiber = fiber_types().get(fiber_key)
    return fiber.attenuation_db_per_km if fiber is not None else default_attenuation()
