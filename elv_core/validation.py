from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable, Iterable

import pandas as pd

from . import catalog
from .units import WAVELENGTH_MAX_NM, WAVELENGTH_MIN_NM

Translator = Callable[..., str]

# English strings used when no translator is provided.
_VALIDATION_EN = {
    "validation.no_active_rows": "at least one active wavelength is required",
    "validation.wavelength_required": "wavelength is required",
    "validation.wavelength_scope": "wavelength must be within {lo:g}..{hi:g} nm",
    "validation.field_required": "{field} is required",
    "validation.field_number": "{field} must be a number",
    "validation.field_positive": "{field} must be > 0",
    "validation.field_gte_zero": "{field} must be >= 0",
    "validation.field_count": "{field} must be an integer >= 0",
    "validation.power_unit": "power_unit must be mW or J",
    "validation.laser_type": "laser_type must be continuous or pulsed",
    "validation.prf_positive": "repetition rate ({prf:g} Hz) must be positive",
    "validation.pulse_width_positive": "pulse width ({pulse_width:g} ns) must be positive",
    "validation.pulse_exceeds_period": (
        "pulse width ({pulse_width:.3f} ns) cannot be larger than the period between pulses "
        "({period:.1f} ns at {prf:g} Hz)"
    ),
    "validation.duty_cycle_high": "high duty cycle ({duty:.1f}%); thermal effects may dominate, consider CW analysis",
    "validation.transceiver_unknown": "unknown transceiver preset: {value}",
    "validation.fiber_type_unknown": "unknown fiber type {value}; default attenuation will be used",
    "validation.budget_not_positive": "receiver sensitivity must be below transmitter power",
    "validation.chain_empty": "signal chain is empty",
    "validation.chain_antenna_first": "signal chain must start with the antenna",
}


def _tr(translator: Translator | None, key: str, **kwargs: Any) -> str:
    if translator is None:
        raw = _VALIDATION_EN.get(key, key)
        return raw.format(**kwargs) if kwargs else raw
    return translator(key, **kwargs)


@dataclass(frozen=True)
class ValidationResult:
    errors: list[str]
    warnings: list[str]
    row_status: dict[int, str]

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)


def is_finite(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    try:
        num = float(value)
    except (TypeError, ValueError):
        return False
    return math.isfinite(num)


def _missing(value: Any) -> bool:
    if value is None or value == "":
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _positive(errors: list[str], value: Any, field: str, translator: Translator | None) -> None:
    if _missing(value):
        errors.append(_tr(translator, "validation.field_required", field=field))
    elif not is_finite(value):
        errors.append(_tr(translator, "validation.field_number", field=field))
    elif float(value) <= 0:
        errors.append(_tr(translator, "validation.field_positive", field=field))


def _non_negative(errors: list[str], value: Any, field: str, translator: Translator | None) -> None:
    if _missing(value):
        errors.append(_tr(translator, "validation.field_required", field=field))
    elif not is_finite(value):
        errors.append(_tr(translator, "validation.field_number", field=field))
    elif float(value) < 0:
        errors.append(_tr(translator, "validation.field_gte_zero", field=field))


def _wavelength(errors: list[str], value: Any, translator: Translator | None) -> None:
    if _missing(value):
        errors.append(_tr(translator, "validation.wavelength_required"))
    elif not is_finite(value):
        errors.append(_tr(translator, "validation.field_number", field="wavelength"))
    elif not WAVELENGTH_MIN_NM <= float(value) <= WAVELENGTH_MAX_NM:
        errors.append(_tr(translator, "validation.wavelength_scope", lo=WAVELENGTH_MIN_NM, hi=WAVELENGTH_MAX_NM))


def check_pulse_parameters(
    pulse_width_ns: float,
    prf_hz: float,
    *,
    translator: Translator | None = None,
) -> tuple[list[str], list[str]]:
    """
    Physical consistency of a pulse train.

    Returns (errors, warnings). A pulse longer than the period is an error,
    a duty cycle above 50 % only a warning.
    """
    if not is_finite(prf_hz) or float(prf_hz) <= 0:
        return [_tr(translator, "validation.prf_positive", prf=float(prf_hz) if is_finite(prf_hz) else 0.0)], []
    if not is_finite(pulse_width_ns) or float(pulse_width_ns) <= 0:
        pw = float(pulse_width_ns) if is_finite(pulse_width_ns) else 0.0
        return [_tr(translator, "validation.pulse_width_positive", pulse_width=pw)], []

    prf = float(prf_hz)
    pw = float(pulse_width_ns)
    period_ns = 1e9 / prf
    if pw > period_ns:
        return [_tr(translator, "validation.pulse_exceeds_period", pulse_width=pw, period=period_ns, prf=prf)], []

    duty = pw / period_ns * 100.0
    if 50.0 < duty <= 100.0:
        return [], [_tr(translator, "validation.duty_cycle_high", duty=duty)]
    return [], []


def validate_wavelength_rows(df: pd.DataFrame, *, translator: Translator | None = None) -> ValidationResult:
    """
    Validates wavelength input rows.

    Expects DataFrame with columns:
    id, wavelength_nm, laser_type, power, power_unit, pulse_width_ns,
    repetition_rate_hz, beam_divergence_mrad, is_active
    Inactive rows are skipped and marked "SKIPPED".
    """
    errors: list[str] = []
    warnings: list[str] = []
    statuses: dict[int, str] = {}
    active_rows = 0

    for idx, row in df.iterrows():
        is_active = row.get("is_active", True)
        if not _missing(is_active) and not bool(is_active):
            statuses[idx] = "SKIPPED"
            continue
        active_rows += 1

        row_errors: list[str] = []
        row_warnings: list[str] = []
        label = str(row.get("id") or f"row#{idx}")

        _wavelength(row_errors, row.get("wavelength_nm"), translator)
        _positive(row_errors, row.get("power"), "power", translator)

        unit = str(row.get("power_unit") or "mW").strip()
        if unit not in ("mW", "J"):
            row_errors.append(_tr(translator, "validation.power_unit"))

        laser_type = str(row.get("laser_type") or "continuous").strip().lower()
        if laser_type not in ("continuous", "pulsed"):
            row_errors.append(_tr(translator, "validation.laser_type"))

        divergence = row.get("beam_divergence_mrad")
        if not _missing(divergence):
            _non_negative(row_errors, divergence, "beam_divergence_mrad", translator)

        if laser_type == "pulsed":
            pw = row.get("pulse_width_ns")
            prf = row.get("repetition_rate_hz")
            _positive(row_errors, pw, "pulse_width_ns", translator)
            _non_negative(row_errors, prf, "repetition_rate_hz", translator)
            # prf 0 is a single pulse, nothing to compare against
            if not row_errors and float(prf) > 0:
                pulse_errors, pulse_warnings = check_pulse_parameters(pw, prf, translator=translator)
                row_errors.extend(pulse_errors)
                row_warnings.extend(pulse_warnings)

        if row_errors:
            errors.append(f"{label}: " + "; ".join(row_errors))
            statuses[idx] = "INVALID"
        else:
            statuses[idx] = "OK"

        if row_warnings:
            warnings.append(f"{label}: " + "; ".join(row_warnings))

    if active_rows == 0:
        errors.append(_tr(translator, "validation.no_active_rows"))

    return ValidationResult(errors=errors, warnings=warnings, row_status=statuses)


def validate_nohd_inputs(data: dict[str, Any], *, translator: Translator | None = None) -> list[str]:
    errors: list[str] = []
    _wavelength(errors, data.get("wavelength_nm"), translator)
    for field in ("power_mw", "beam_diameter_mm", "exposure_time_s"):
        _positive(errors, data.get(field), field, translator)
    _non_negative(errors, data.get("divergence_mrad"), "divergence_mrad", translator)
    return errors


def validate_eyewear_inputs(data: dict[str, Any], *, translator: Translator | None = None) -> ValidationResult:
    """
    Checks an eyewear form. Pulse trains get the same period and duty cycle
    checks as wavelength rows; a single pulse (prf 0) skips them.
    """
    errors: list[str] = []
    warnings: list[str] = []
    _wavelength(errors, data.get("wavelength_nm"), translator)
    for field in ("beam_diameter_mm", "exposure_time_s"):
        _positive(errors, data.get(field), field, translator)

    laser_type = str(data.get("laser_type") or "continuous").strip().lower()
    if laser_type == "continuous":
        _positive(errors, data.get("power_mw"), "power_mw", translator)
    elif laser_type == "pulsed":
        _positive(errors, data.get("pulse_energy_mj"), "pulse_energy_mj", translator)
        _positive(errors, data.get("pulse_width_ns"), "pulse_width_ns", translator)
        prf = data.get("repetition_rate_hz")
        _non_negative(errors, prf, "repetition_rate_hz", translator)
        if not errors and float(prf) > 0:
            pulse_errors, pulse_warnings = check_pulse_parameters(data["pulse_width_ns"], prf, translator=translator)
            errors.extend(pulse_errors)
            warnings.extend(pulse_warnings)
    else:
        errors.append(_tr(translator, "validation.laser_type"))
    return ValidationResult(errors=errors, warnings=warnings, row_status={})


def _count(errors: list[str], value: Any, field: str, translator: Translator | None) -> None:
    if _missing(value):
        return
    if not is_finite(value) or not float(value).is_integer() or float(value) < 0:
        errors.append(_tr(translator, "validation.field_count", field=field))


def validate_fiber_inputs(data: dict[str, Any], *, translator: Translator | None = None) -> list[str]:
    """
    Checks a fiber link form (keys as in FiberLinkInputs).

    An unknown fiber type is reported; the calculation still runs with the
    default attenuation.
    """
    errors: list[str] = []
    preset = data.get("transceiver_type")
    if not _missing(preset) and preset not in catalog.transceivers():
        errors.append(_tr(translator, "validation.transceiver_unknown", value=preset))

    fiber_type = data.get("fiber_type")
    if not _missing(fiber_type) and fiber_type not in catalog.fiber_types():
        errors.append(_tr(translator, "validation.fiber_type_unknown", value=fiber_type))

    tx = data.get("transmitter_power_dbm")
    rx = data.get("receiver_sensitivity_dbm")
    for field, value in (("transmitter_power_dbm", tx), ("receiver_sensitivity_dbm", rx)):
        if _missing(value):
            errors.append(_tr(translator, "validation.field_required", field=field))
        elif not is_finite(value):
            errors.append(_tr(translator, "validation.field_number", field=field))
    if is_finite(tx) and is_finite(rx) and float(rx) >= float(tx):
        errors.append(_tr(translator, "validation.budget_not_positive"))

    _non_negative(errors, data.get("fiber_length_m"), "fiber_length_m", translator)
    safety = data.get("safety_margin_db")
    if not _missing(safety):
        _non_negative(errors, safety, "safety_margin_db", translator)
    for field in ("connector_count", "splices", "mechanical_joints", "patch_panels", "bends", "splitters"):
        _count(errors, data.get(field), field, translator)
    return errors


def validate_signal_inputs(
    data: dict[str, Any],
    components: Iterable[Any] | None = None,
    *,
    translator: Translator | None = None,
) -> list[str]:
    """Outlet path parameters plus, when given, the chain components (antenna first)."""
    errors: list[str] = []
    _positive(errors, data.get("antenna_signal_uv"), "antenna_signal_uv", translator)
    for field in ("outlet_cable_loss_per_m", "outlet_cable_length_m", "cable_joint_loss_db", "outlet_loss_db"):
        value = data.get(field)
        if not _missing(value):
            _non_negative(errors, value, field, translator)

    if components is None:
        return errors
    comps = list(components)
    if comps:
        if comps[0].type != "antenna":
            errors.append(_tr(translator, "validation.chain_antenna_first"))
        for comp in comps:
            for field in ("length_m", "loss_per_meter_db", "loss_db"):
                if getattr(comp, field) < 0:
                    errors.append(f"{comp.id}: " + _tr(translator, "validation.field_gte_zero", field=field))
    else:
        errors.append(_tr(translator, "validation.chain_empty"))
    return errors
