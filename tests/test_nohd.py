from __future__ import annotations

import math
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from elv_core.nohd import (
    HAZARD_COLLIMATED,
    HAZARD_HIGH,
    HAZARD_LOW,
    HAZARD_MODERATE,
    HAZARD_VERY_HIGH,
    calculate_nohd,
    hazard_class_for,
)


def _expected_nohd(power_w: float, d0_m: float, phi_rad: float, mpe_w_m2: float) -> float:
    return (math.sqrt(4 * power_w / (math.pi * mpe_w_m2)) - d0_m) / phi_rad


def test_green_pointer_nohd() -> None:
    res = calculate_nohd(5, 2, 1, 532, 0.25)
    mpe_w_cm2 = 18.0 * 0.25**0.75 / 0.25 * 1e-4
    assert res.mpe_w_cm2 == pytest.approx(mpe_w_cm2)
    assert res.nohd_m == pytest.approx(_expected_nohd(5e-3, 2e-3, 1e-3, mpe_w_cm2 * 1e4))
    assert res.nohd_m == pytest.approx(13.81, abs=0.01)
    assert res.hazard_class == HAZARD_HIGH
    # at the NOHD the beam irradiance drops to the MPE
    assert res.irradiance_at_nohd_w_cm2 == pytest.approx(res.mpe_w_cm2)
    assert res.initial_power_density_w_cm2 == pytest.approx(5e-3 / (math.pi * 0.1**2))


def test_power_mpe_is_not_divided_by_time() -> None:
    res = calculate_nohd(1000, 5, 2, 10600, 10)
    assert res.mpe_w_cm2 == pytest.approx(0.1)


def test_collimated_beam() -> None:
    res = calculate_nohd(5, 2, 0, 532, 0.25)
    assert math.isinf(res.nohd_m)
    assert math.isinf(res.beam_diameter_at_nohd_mm)
    assert res.hazard_class == HAZARD_COLLIMATED

    safe = calculate_nohd(1e-6, 2, 0, 532, 0.25)
    assert safe.nohd_m == 0.0


def test_weak_source_has_zero_nohd() -> None:
    res = calculate_nohd(1e-6, 7, 1, 532, 0.25)
    assert res.nohd_m == 0.0
    assert res.hazard_class == HAZARD_LOW


def test_hazard_bands() -> None:
    assert hazard_class_for(0.05) == HAZARD_LOW
    assert hazard_class_for(2.0) == HAZARD_MODERATE
    assert hazard_class_for(50.0) == HAZARD_HIGH
    assert hazard_class_for(100.0) == HAZARD_VERY_HIGH


def test_invalid_inputs() -> None:
    with pytest.raises(ValueError):
        calculate_nohd(0, 2, 1, 532, 0.25)
    with pytest.raises(ValueError):
        calculate_nohd(5, 2, -1, 532, 0.25)
    with pytest.raises(TypeError):
        calculate_nohd(5, 2, 1, "532", 0.25)
