from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from elv_core.correction_factors import (
    TIME_BASE_BLINK_S,
    TIME_BASE_GENERAL_S,
    TIME_BASE_LONG_TERM_S,
    classification_time_base,
    condition1_applies,
    correction_factors,
    measurement_conditions,
    mpe_correction_factors,
    requires_class_m,
    supports_class_2,
    time_base_ti,
)


def test_visible_point_source_factors() -> None:
    cf = correction_factors(532, 100)
    assert cf.c3 == pytest.approx(10 ** (0.02 * 82))
    assert cf.c6 == pytest.approx(1.0)
    assert cf.t2 == pytest.approx(10.0)
    assert cf.alpha_max == pytest.approx(100.0)
    assert cf.c5 == pytest.approx(1.0)


def test_near_ir_factors() -> None:
    cf = correction_factors(1064, 100)
    assert cf.c4 == pytest.approx(5.0)
    assert cf.c7 == pytest.approx(1.0)

    cf_900 = correction_factors(900, 1)
    assert cf_900.c4 == pytest.approx(10 ** (0.002 * 200))

    cf_1300 = correction_factors(1300, 1)
    assert cf_1300.c7 == pytest.approx(8.0 + 100.0)


def test_uv_factors() -> None:
    cf = correction_factors(300, 1)
    assert cf.c1 == pytest.approx(5.6e3)
    assert cf.t1 == pytest.approx(1e-15 * 10**4)
    assert cf.c2 == pytest.approx(30.0)
    assert correction_factors(310, 1).c2 == pytest.approx(10 ** (0.2 * 15))


def test_extended_source_c6_and_t2() -> None:
    cf = correction_factors(532, 100, angular_subtense_mrad=15)
    assert cf.c6 == pytest.approx(10.0)
    assert cf.t2 == pytest.approx(10.0 * 10 ** (13.5 / 98.5))

    # alpha above alpha_max is capped
    short = correction_factors(532, 1e-3, angular_subtense_mrad=50)
    assert short.alpha_max == pytest.approx(200.0 * 1e-3**0.5)
    assert short.c6 == pytest.approx(short.alpha_max / 1.5)

    assert correction_factors(532, 100, angular_subtense_mrad=150).t2 == pytest.approx(100.0)


def test_mpe_correction_factors() -> None:
    f = mpe_correction_factors(1064)
    assert f.ca == pytest.approx(5.0)
    assert f.cb == pytest.approx(10 ** (0.015 * 364))
    assert f.cc == pytest.approx(1.0)
    assert mpe_correction_factors(2000).cc == pytest.approx(5.0)


def test_time_bases() -> None:
    assert time_base_ti(532) == pytest.approx(5e-6)
    assert time_base_ti(1064) == pytest.approx(13e-6)
    assert time_base_ti(1550) == pytest.approx(10.0)
    assert time_base_ti(10600) == pytest.approx(1e-7)

    assert classification_time_base(532) == TIME_BASE_GENERAL_S
    assert classification_time_base(532, "2") == TIME_BASE_BLINK_S
    assert classification_time_base(1064, "2") == TIME_BASE_GENERAL_S
    assert classification_time_base(300) == TIME_BASE_LONG_TERM_S
    assert classification_time_base(1064, long_term_viewing=True) == TIME_BASE_LONG_TERM_S


def test_measurement_conditions() -> None:
    visible = measurement_conditions(532, 100)
    assert visible.condition1.aperture_mm == pytest.approx(50.0)
    assert visible.condition1.distance_mm == pytest.approx(2000.0)
    assert visible.condition3.aperture_mm == pytest.approx(7.0)

    ir = measurement_conditions(1550, 100)
    assert ir.condition3.aperture_mm == pytest.approx(3.5)
    assert ir.condition1.aperture_mm == pytest.approx(24.5)
    assert measurement_conditions(1550, 0.1).condition3.aperture_mm == pytest.approx(1.0)

    far_ir = measurement_conditions(10600, 100)
    assert far_ir.condition1.aperture_mm == 0.0
    assert far_ir.condition3.aperture_mm == pytest.approx(3.5)


def test_condition_flags() -> None:
    assert condition1_applies(1064)
    assert not condition1_applies(250)
    assert not condition1_applies(10600)

    assert requires_class_m(532, 10)
    assert not requires_class_m(532, 7)
    assert not requires_class_m(10600, 10)

    assert supports_class_2(650)
    assert not supports_class_2(1064)
