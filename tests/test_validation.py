from __future__ import annotations

import sys
from pathlib import Path

import pandas as pd

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from elv_core.i18n import make_translator
from elv_core.tv_signal import default_chain
from elv_core.validation import (
    check_pulse_parameters,
    validate_eyewear_inputs,
    validate_fiber_inputs,
    validate_nohd_inputs,
    validate_signal_inputs,
    validate_wavelength_rows,
)


def _row(**overrides) -> dict:
    row = {
        "id": "wl-1",
        "wavelength_nm": 532,
        "laser_type": "continuous",
        "power": 1.0,
        "power_unit": "mW",
        "pulse_width_ns": 10.0,
        "repetition_rate_hz": 1000.0,
        "beam_divergence_mrad": 1.5,
        "is_active": True,
    }
    row.update(overrides)
    return row


def test_pulse_parameters() -> None:
    assert check_pulse_parameters(10, 1000) == ([], [])

    errors, _ = check_pulse_parameters(10, 0)
    assert errors == ["repetition rate (0 Hz) must be positive"]
    errors, _ = check_pulse_parameters(0, 1000)
    assert "pulse width (0 ns) must be positive" in errors

    errors, warnings = check_pulse_parameters(2e6, 1000)
    assert "cannot be larger than the period between pulses (1000000.0 ns at 1000 Hz)" in errors[0]
    assert warnings == []

    errors, warnings = check_pulse_parameters(7.5e5, 1000)
    assert errors == []
    assert warnings and "high duty cycle (75.0%)" in warnings[0]


def test_wavelength_rows_statuses() -> None:
    df = pd.DataFrame(
        [
            _row(),
            _row(id="wl-2", wavelength_nm=50, power=0),
            _row(id="wl-3", laser_type="pulsed", pulse_width_ns=2e6),
            _row(id="wl-4", power=-5, is_active=False),
            _row(id="wl-5", laser_type="pulsed", pulse_width_ns=7.5e5),
            _row(id="wl-6", laser_type="pulsed", repetition_rate_hz=0),
        ]
    )
    res = validate_wavelength_rows(df)
    assert res.has_errors
    assert res.row_status == {0: "OK", 1: "INVALID", 2: "INVALID", 3: "SKIPPED", 4: "OK", 5: "OK"}
    joined = "\n".join(res.errors)
    assert "wl-2: wavelength must be within 180..1e+06 nm; power must be > 0" in joined
    assert "wl-3: pulse width" in joined
    assert len(res.warnings) == 1
    assert res.warnings[0].startswith("wl-5: high duty cycle")


def test_wavelength_rows_bad_values() -> None:
    df = pd.DataFrame([_row(wavelength_nm=None, power="x", power_unit="W", laser_type="qcw")])
    res = validate_wavelength_rows(df)
    joined = "\n".join(res.errors)
    assert "wavelength is required" in joined
    assert "power must be a number" in joined
    assert "power_unit must be mW or J" in joined
    assert "laser_type must be continuous or pulsed" in joined


def test_no_active_rows() -> None:
    res = validate_wavelength_rows(pd.DataFrame([_row(is_active=False)]))
    assert res.errors == ["at least one active wavelength is required"]


def test_translated_messages() -> None:
    res = validate_wavelength_rows(pd.DataFrame([_row(power=0)]), translator=make_translator("RU"))
    assert res.errors == ["wl-1: power должно быть > 0"]


def test_nohd_and_eyewear_inputs() -> None:
    good = {"wavelength_nm": 532, "power_mw": 5, "beam_diameter_mm": 2, "divergence_mrad": 1, "exposure_time_s": 0.25}
    assert validate_nohd_inputs(good) == []
    errors = validate_nohd_inputs({**good, "power_mw": 0, "divergence_mrad": -1})
    assert errors == ["power_mw must be > 0", "divergence_mrad must be >= 0"]

    cw = {"wavelength_nm": 1064, "beam_diameter_mm": 5, "exposure_time_s": 10, "laser_type": "continuous", "power_mw": 1000}
    res = validate_eyewear_inputs(cw)
    assert not res.has_errors
    assert res.warnings == []
    pulsed = {
        **cw,
        "laser_type": "pulsed",
        "pulse_energy_mj": 100,
        "pulse_width_ns": 2e6,
        "repetition_rate_hz": 1000,
    }
    res = validate_eyewear_inputs(pulsed)
    assert len(res.errors) == 1
    assert "period between pulses" in res.errors[0]
    assert validate_eyewear_inputs({**cw, "laser_type": "qcw"}).errors == ["laser_type must be continuous or pulsed"]


def test_eyewear_pulse_train_duty_cycle() -> None:
    pulsed = {
        "wavelength_nm": 1064,
        "beam_diameter_mm": 5,
        "exposure_time_s": 10,
        "laser_type": "pulsed",
        "pulse_energy_mj": 100,
        "pulse_width_ns": 7.5e5,
        "repetition_rate_hz": 1000,
    }
    res = validate_eyewear_inputs(pulsed)
    assert res.errors == []
    assert len(res.warnings) == 1
    assert res.warnings[0].startswith("high duty cycle (75.0%)")

    # single pulse: no period to compare against
    single = validate_eyewear_inputs({**pulsed, "pulse_width_ns": 2e6, "repetition_rate_hz": 0})
    assert single.errors == []
    assert single.warnings == []


def test_fiber_inputs() -> None:
    good = {
        "transceiver_type": "lr",
        "transmitter_power_dbm": -3,
        "receiver_sensitivity_dbm": -20,
        "fiber_length_m": 1000,
        "fiber_type": "singlemode1310",
        "connector_count": 2,
        "safety_margin_db": 3,
    }
    assert validate_fiber_inputs(good) == []
    errors = validate_fiber_inputs(
        {**good, "transceiver_type": "qsfp", "fiber_type": "om9", "receiver_sensitivity_dbm": 0, "splices": 1.5}
    )
    assert errors == [
        "unknown transceiver preset: qsfp",
        "unknown fiber type om9; default attenuation will be used",
        "receiver sensitivity must be below transmitter power",
        "splices must be an integer >= 0",
    ]


def test_signal_inputs() -> None:
    data = {"antenna_signal_uv": 500, "outlet_cable_length_m": 40}
    assert validate_signal_inputs(data) == []
    assert validate_signal_inputs(data, default_chain().components) == []
    assert validate_signal_inputs({**data, "antenna_signal_uv": 0}) == ["antenna_signal_uv must be > 0"]
    assert validate_signal_inputs(data, []) == ["signal chain is empty"]

    antenna, *rest = default_chain().components
    assert validate_signal_inputs(data, [*rest, antenna]) == ["signal chain must start with the antenna"]
