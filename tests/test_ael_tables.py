from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from elv_core.ael import (
    CLASS_1,
    CLASS_3B,
    ael_for_class,
    assess_pulsed_ael,
    class1_ael,
    class2_ael,
    class3b_ael,
    class3r_ael,
)
from elv_core.units import UNIT_J, UNIT_J_M2, UNIT_W, UNIT_W_M2


def test_class1_visible() -> None:
    res = class1_ael(532, 100)
    assert res.value == pytest.approx(3.9e-4)
    assert res.unit == UNIT_W

    short = class1_ael(532, 0.25)
    assert short.value == pytest.approx(7e-4 * 0.25**0.75)
    assert short.unit == UNIT_J


def test_class1_infrared() -> None:
    assert class1_ael(1064, 100).value == pytest.approx(3.9e-4 * 5.0)
    assert class1_ael(1064, 1e-8).value == pytest.approx(7.7e-7)
    assert class1_ael(1550, 100).value == pytest.approx(1e-2)

    far = class1_ael(10600, 100)
    assert far.value == pytest.approx(1000.0)
    assert far.unit == UNIT_W_M2
    assert class1_ael(10600, 1).unit == UNIT_J_M2
    assert class1_ael(10600, 1).value == pytest.approx(5600.0)


def test_c5_applies_only_between_302_5_and_4000_nm() -> None:
    assert class1_ael(1064, 1e-8, c5=0.5).value == pytest.approx(3.85e-7)
    assert class1_ael(10600, 100, c5=0.5).value == pytest.approx(1000.0)


def test_class2() -> None:
    assert class2_ael(532, 0.25).value == pytest.approx(1e-3)
    assert class2_ael(1064, 0.25).value == 0.0


def test_class3r_and_3b() -> None:
    assert class3r_ael(532, 0.25).value == pytest.approx(5e-3)
    assert class3r_ael(1550, 100).value == pytest.approx(5e-2)
    assert class3b_ael(532, 100).value == pytest.approx(0.5)
    assert class3b_ael(532, 0.01).unit == UNIT_J
    assert class3b_ael(532, 0.01).value == pytest.approx(0.03)
    assert class3b_ael(10600, 100).value == pytest.approx(0.5)


def test_extended_source_scales_with_c6() -> None:
    point = class3r_ael(532, 0.25)
    extended = class3r_ael(532, 0.25, angular_subtense_mrad=15)
    assert extended.value == pytest.approx(point.value * 10.0)


def test_ael_for_class_dispatch() -> None:
    assert ael_for_class(CLASS_1, 532, 100).value == pytest.approx(3.9e-4)
    assert ael_for_class(CLASS_3B, 532, 100).value == pytest.approx(0.5)
    with pytest.raises(ValueError):
        ael_for_class("Class 4", 532, 100)


def test_pulsed_assessment_takes_the_minimum() -> None:
    res = assess_pulsed_ael(CLASS_1, 1064, 100, 1000, 0.5, 10)
    assert res.single_pulse.value == pytest.approx(7.7e-7)
    assert res.average_power.value == pytest.approx(1.95e-6)
    assert res.average_power.unit == UNIT_J
    assert res.pulse_train.value == pytest.approx(3.85e-7)
    assert res.most_restrictive == pytest.approx(3.85e-7)


def test_invalid_time() -> None:
    with pytest.raises(ValueError):
        class1_ael(532, 0)
