from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from elv_core.mpe import (
    MECHANISM_POINT,
    MECHANISM_THERMAL,
    UNIT_J_CM2,
    UNIT_W_CM2,
    comprehensive_mpe,
    eye_mpe,
    skin_mpe,
)
from elv_core.units import UNIT_J_M2, UNIT_W_M2


def test_eye_mpe_point_source() -> None:
    blink = eye_mpe(532, 0.25)
    assert blink.value == pytest.approx(18.0 * 0.25**0.75)
    assert blink.unit == UNIT_J_M2

    assert eye_mpe(532, 100).value == pytest.approx(10.0)
    assert eye_mpe(1064, 10).value == pytest.approx(50.0)
    assert eye_mpe(1064, 10).unit == UNIT_W_M2
    assert eye_mpe(1550, 1).value == pytest.approx(1e4)
    assert eye_mpe(10600, 100).value == pytest.approx(1000.0)


def test_skin_mpe() -> None:
    assert skin_mpe(1064, 1).value == pytest.approx(1000.0)
    assert skin_mpe(532, 100).value == pytest.approx(1.1e4 * 100**0.25)
    assert skin_mpe(532, 5000).unit == UNIT_W_M2


def test_comprehensive_cw_reports_per_cm2() -> None:
    res = comprehensive_mpe(532, 0.25)
    assert res.critical_mpe == pytest.approx(18.0 * 0.25**0.75 * 1e-4)
    assert res.critical_unit == UNIT_J_CM2
    assert res.limiting_mechanism == MECHANISM_POINT
    assert res.wavelength_region == "Visible"
    assert res.c5 == pytest.approx(1.0)
    assert res.c5_details is None

    cw = comprehensive_mpe(1064, 10)
    assert cw.critical_mpe == pytest.approx(5e-3)
    assert cw.critical_unit == UNIT_W_CM2
    assert cw.legacy_factors.ca == pytest.approx(5.0)


def test_comprehensive_pulsed_three_rules() -> None:
    res = comprehensive_mpe(1064, 10, laser_type="pulsed", pulse_width_s=1e-8, repetition_rate_hz=1000)
    assert res.c5 == pytest.approx(0.5)
    assert res.mpe_single_pulse == pytest.approx(0.02e-4)
    assert res.mpe_average == pytest.approx(0.05e-4)
    assert res.mpe_thermal == pytest.approx(0.01e-4)
    assert res.critical_mpe == pytest.approx(1e-6)
    assert res.critical_unit == UNIT_J_CM2
    assert res.limiting_mechanism == MECHANISM_THERMAL


def test_extended_source_not_less_restrictive_than_point() -> None:
    point = comprehensive_mpe(1064, 10)
    extended = comprehensive_mpe(1064, 10, angular_subtense_mrad=20)
    assert extended.critical_mpe >= point.critical_mpe


def test_invalid_laser_type() -> None:
    with pytest.raises(ValueError):
        comprehensive_mpe(532, 1, laser_type="qcw")
