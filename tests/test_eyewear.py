from __future__ import annotations

import math
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from elv_core.eyewear import (
    NOTE_BELOW_MPE,
    NOTE_HIGH_OD,
    SCALE_LONG_PULSE,
    SCALE_MODE_LOCKED,
    SCALE_PULSED,
    calculate_eyewear,
    lb_label,
    scale_letter,
)
from elv_core.mpe import UNIT_J_CM2, UNIT_W_CM2


def test_cw_nd_yag() -> None:
    res = calculate_eyewear(1064, 5, 10, power_mw=1000)
    area = math.pi * 0.25**2
    assert res.mpe == pytest.approx(5e-3)
    assert res.mpe_unit == UNIT_W_CM2
    assert res.exposure_level == pytest.approx(1.0 / area)
    assert res.required_od == pytest.approx(math.log10(1.0 / area / 5e-3))
    assert res.od_rating == 4
    assert res.dir_rating == "D L4"
    assert res.lb_rating == "1064 D LB4"
    assert res.scale_factor == "D (CW)"
    assert any('"1064 D LB4"' in r for r in res.recommendations)


def test_pulsed_uses_most_restrictive_rule() -> None:
    res = calculate_eyewear(
        1064, 5, 10, laser_type="pulsed", pulse_energy_mj=100, pulse_width_ns=10, repetition_rate_hz=1000
    )
    assert res.mpe_unit == UNIT_J_CM2
    # single 2e-6, average 5e-6, train 2e-6 x C5 0.5
    assert res.mpe == pytest.approx(1e-6)
    assert res.od_rating == 6
    assert res.lb_rating == "1064 I LB6"
    assert res.scale_factor == "I (10ns pulse)"


def test_below_mpe_needs_no_od() -> None:
    res = calculate_eyewear(532, 7, 0.25, power_mw=1e-3)
    assert res.required_od == 0.0
    assert res.od_rating == 0
    assert res.recommendations[0] == NOTE_BELOW_MPE


def test_high_od_note() -> None:
    res = calculate_eyewear(1064, 1, 10, power_mw=1e6)
    assert res.od_rating == 8
    assert res.recommendations[-1] == NOTE_HIGH_OD


def test_scale_and_lb_labels() -> None:
    assert scale_letter("pulsed", 0.5) == SCALE_LONG_PULSE
    assert scale_letter("pulsed", 1e-8) == SCALE_PULSED
    assert scale_letter("pulsed", 1e-12) == SCALE_MODE_LOCKED
    assert lb_label(7) == "LB7"
    assert lb_label(11) == "LB10+"


def test_invalid_inputs() -> None:
    with pytest.raises(ValueError):
        calculate_eyewear(1064, 0, 10)
    with pytest.raises(ValueError):
        calculate_eyewear(1064, 5, 10, laser_type="qcw")
