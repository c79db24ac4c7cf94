from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from elv_core.pulse import c5_factor, c5_factor_iso


def test_many_short_pulses_use_600_pulse_rule() -> None:
    res = c5_factor(1064, 10, 1000, 10)
    assert res.number_of_pulses == 10000
    assert res.c5 == pytest.approx(0.5)
    assert res.time_base == pytest.approx(13e-6)
    assert res.steps[-1].startswith("Final C5 factor")


def test_c5_floor() -> None:
    res = c5_factor(532, 1, 1e6, 100)
    assert res.c5 == pytest.approx(0.4)


def test_c5_is_one_for_few_or_short() -> None:
    assert c5_factor(532, 10, 100, 1).c5 == pytest.approx(1.0)
    assert c5_factor(532, 10, 1e5, 0.1).c5 == pytest.approx(1.0)

    single = c5_factor(532, 10, 0, 100)
    assert single.c5 == pytest.approx(1.0)
    assert single.pulse_grouping == "Single pulse"

    long_pulse = c5_factor(532, 0.3e9, 1, 100)
    assert long_pulse.c5 == pytest.approx(1.0)


def test_long_pulses_follow_angular_subtense() -> None:
    # 100 us > Ti = 5 us at 532 nm
    assert c5_factor(532, 1e5, 100, 10, angular_subtense_mrad=1.5).c5 == pytest.approx(1.0)
    assert c5_factor(532, 1e5, 100, 10, angular_subtense_mrad=50).c5 == pytest.approx(0.4)
    assert c5_factor(532, 1e5, 3, 10, angular_subtense_mrad=50).c5 == pytest.approx(1.0)
    assert c5_factor(532, 1e5, 100, 10, angular_subtense_mrad=150).c5 == pytest.approx(1.0)


def test_explicit_number_of_pulses() -> None:
    res = c5_factor(1064, 10, 1000, 10, number_of_pulses=625)
    assert res.number_of_pulses == 625
    assert res.c5 == pytest.approx(5.0 * 625**-0.25)


def test_iso_variant() -> None:
    assert c5_factor_iso(532, 1e-8, 1000, 10).c5 == pytest.approx(0.5)
    assert c5_factor_iso(532, 1e-3, 10, 2, angular_subtense_mrad=50).c5 == pytest.approx(20**-0.25)


def test_iso_groups_pulses_within_ti() -> None:
    res = c5_factor_iso(1550, 1e-9, 1000, 100)
    assert res.number_of_pulses == 10
    assert res.c5 == pytest.approx(1.0)


def test_rejects_negative_inputs() -> None:
    with pytest.raises(ValueError):
        c5_factor(532, -1, 1000, 10)
    with pytest.raises(TypeError):
        c5_factor("532", 10, 1000, 10)
