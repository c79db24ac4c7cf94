"""
Maximum permissible exposure, IEC 60825-1:2014 Annex A.

Таблицы A.1 (точечный источник), A.2 (протяжённый источник, 400..1400 нм), A.5 (кожа).
Значения таблиц в J/m² или W/m²; comprehensive_mpe переводит итог в J/cm² / W/cm².
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .checks import as_finite, as_positive
from .correction_factors import (
    DEFAULT_ANGULAR_SUBTENSE_MRAD,
    CorrectionFactors,
    MpeCorrectionFactors,
    correction_factors,
    mpe_correction_factors,
)
from .pulse import C5Result, c5_factor_iso
from .units import M2_TO_CM2, UNIT_J_M2, UNIT_NA, UNIT_W_M2, is_energy_unit, wavelength_region

log = logging.getLogger("elv_core.mpe")

UNIT_J_CM2 = "J/cm²"
UNIT_W_CM2 = "W/cm²"

LASER_CONTINUOUS = "continuous"
LASER_PULSED = "pulsed"

MECHANISM_POINT = "Point Source (Table A.1)"
MECHANISM_EXTENDED = "Extended Source (Table A.2)"
MECHANISM_SINGLE = "Single Pulse (Rule 1)"
MECHANISM_AVERAGE = "Average Power (Rule 2)"
MECHANISM_THERMAL = "Thermal Accumulation with C5 (Rule 3)"


@dataclass(frozen=True)
class MpeValue:
    value: float
    unit: str


def _as_power_density(value: float, unit: str, t: float) -> float:
    return value / t if is_energy_unit(unit) else value


def _eye_point(wl: float, t: float, cf: CorrectionFactors) -> tuple[float, str]:
    if 180 <= wl < 302.5:
        if t < 1e-9:
            return 3e10, UNIT_W_M2
        return 30.0, UNIT_J_M2
    if 302.5 <= wl < 315:
        if t < 1e-9:
            return 3e10, UNIT_W_M2
        if t < 10 and t <= cf.t1:
            return cf.c1, UNIT_J_M2
        return cf.c2, UNIT_J_M2
    if 315 <= wl < 400:
        if t < 1e-9:
            return 3e10, UNIT_W_M2
        if t < 10:
            return cf.c1, UNIT_J_M2
        return 1e4, UNIT_J_M2
    if 400 <= wl < 700:
        if t < 1e-11:
            return 1e-3, UNIT_J_M2
        if t < 5e-6:
            return 2e-3, UNIT_J_M2
        if t < 10:
            return 18.0 * t**0.75, UNIT_J_M2
        if wl < 450:
            if t < 100:
                return 100.0, UNIT_J_M2
            return cf.c3, UNIT_W_M2
        if wl < 500:
            if t < 100:
                return min(100.0 * cf.c3, 10.0 * t), UNIT_J_M2
            return cf.c3, UNIT_W_M2
        return 10.0, UNIT_W_M2
    if 700 <= wl < 1050:
        if t < 1e-11:
            return 1e-3 * cf.c4, UNIT_J_M2
        if t < 5e-6:
            return 2e-3 * cf.c4, UNIT_J_M2
        if t < 10:
            return 18.0 * t**0.75 * cf.c4, UNIT_J_M2
        return 10.0 * cf.c4 * cf.c7, UNIT_W_M2
    if 1050 <= wl <= 1400:
        if t < 1e-11:
            return 1e-3 * cf.c7, UNIT_J_M2
        if t < 13e-6:
            return 2e-2 * cf.c7, UNIT_J_M2
        if t < 10:
            return 90.0 * t**0.75 * cf.c7, UNIT_J_M2
        return 10.0 * cf.c4 * cf.c7, UNIT_W_M2
    if 1400 < wl < 1500:
        if t < 1e-8:
            return 1e12, UNIT_W_M2
        if t < 1e-3:
            return 1e3, UNIT_J_M2
        if t < 10:
            return 5600.0 * t**0.25, UNIT_J_M2
        return 1000.0, UNIT_W_M2
    if 1500 <= wl < 1800:
        if t < 1e-8:
            return 1e13, UNIT_W_M2
        if t < 10:
            return 1e4, UNIT_J_M2
        return 1000.0, UNIT_W_M2
    if 1800 <= wl < 2600:
        if t < 1e-9:
            return 1e12, UNIT_W_M2
        if t < 1e-3:
            return 1e3, UNIT_J_M2
        if t < 10:
            return 5600.0 * t**0.25, UNIT_J_M2
        return 1000.0, UNIT_W_M2
    if 2600 <= wl <= 1e6:
        if t < 1e-9:
            return 1e11, UNIT_W_M2
        if t < 1e-7:
            return 100.0, UNIT_J_M2
        if t < 10:
            return 5600.0 * t**0.25, UNIT_J_M2
        return 1000.0, UNIT_W_M2
    return 0.0, UNIT_NA


def _retinal_thermal(t: float, factor: float, cf: CorrectionFactors) -> tuple[float, str]:
    if t <= cf.t2:
        return factor * t**0.75, UNIT_J_M2
    return factor * cf.t2**-0.25, UNIT_W_M2


def _eye_extended(wl: float, t: float, cf: CorrectionFactors) -> tuple[float, str]:
    if wl < 400 or wl > 1400:
        return 0.0, UNIT_NA
    if wl <= 700:
        if t < 1e-11:
            return 1e-3 * cf.c6, UNIT_J_M2
        if t < 5e-6:
            return 2e-3 * cf.c6, UNIT_J_M2
        if t < 10:
            return 18.0 * t**0.75 * cf.c6, UNIT_J_M2
        thermal = _retinal_thermal(t, 18.0 * cf.c6, cf)
        if wl > 600:
            return thermal
        # 400..600 nm: photochemical vs thermal, whichever is lower as a power density
        photochemical = (100.0 * cf.c3, UNIT_J_M2) if t < 100 else (cf.c3, UNIT_W_M2)
        if _as_power_density(*photochemical, t) <= _as_power_density(*thermal, t):
            return photochemical
        return thermal
    if wl <= 1050:
        if t < 1e-11:
            return 1e-3 * cf.c6, UNIT_J_M2
        if t < 5e-6:
            return 2e-3 * cf.c4 * cf.c6, UNIT_J_M2
        if t < 10:
            return 18.0 * t**0.75 * cf.c4 * cf.c6, UNIT_J_M2
        return _retinal_thermal(t, 18.0 * cf.c4 * cf.c6, cf)
    if t < 1e-11:
        return 1e-3 * cf.c6 * cf.c7, UNIT_J_M2
    if t < 1.3e-5:
        return 2e-2 * cf.c6 * cf.c7, UNIT_J_M2
    if t < 10:
        return 90.0 * t**0.75 * cf.c6 * cf.c7, UNIT_J_M2
    return _retinal_thermal(t, 90.0 * cf.c6 * cf.c7, cf)


def eye_mpe(
    wavelength_nm: float,
    exposure_time_s: float,
    angular_subtense_mrad: float = DEFAULT_ANGULAR_SUBTENSE_MRAD,
) -> MpeValue:
    """Ocular MPE at the cornea: Table A.1 when C6 = 1, Table A.2 otherwise."""
    wl = as_finite(wavelength_nm, "wavelength_nm")
    t = as_positive(exposure_time_s, "exposure_time_s")
    cf = correction_factors(wl, t, angular_subtense_mrad)
    if cf.c6 > 1.0:
        return MpeValue(*_eye_extended(wl, t, cf))
    return MpeValue(*_eye_point(wl, t, cf))


def skin_mpe(wavelength_nm: float, exposure_time_s: float) -> MpeValue:
    """Skin MPE, Table A.5."""
    wl = as_finite(wavelength_nm, "wavelength_nm")
    t = as_positive(exposure_time_s, "exposure_time_s")
    cf = correction_factors(wl, t)

    if 180 <= wl < 302.5:
        return MpeValue(30.0, UNIT_J_M2)
    if 302.5 <= wl < 315:
        if t < 10 and t <= cf.t1:
            return MpeValue(cf.c1, UNIT_J_M2)
        return MpeValue(cf.c2, UNIT_J_M2)
    if 315 <= wl < 400:
        if t < 10:
            return MpeValue(cf.c1, UNIT_J_M2)
        if t < 1000:
            return MpeValue(1e4, UNIT_J_M2)
        return MpeValue(10.0, UNIT_W_M2)
    if 400 <= wl <= 1400:
        scale = 1.0 if wl <= 700 else cf.c4
        if t < 10:
            return MpeValue(200.0 * scale, UNIT_J_M2)
        if t < 1000:
            return MpeValue(1.1e4 * scale * t**0.25, UNIT_J_M2)
        return MpeValue(2000.0 * scale, UNIT_W_M2)
    if 1500 < wl <= 1800:
        return MpeValue(1e4, UNIT_J_M2)
    if 1400 < wl <= 2600:
        if t < 1e-3:
            return MpeValue(1e3, UNIT_J_M2)
        if t < 10:
            return MpeValue(5600.0 * t**0.25, UNIT_J_M2)
        return MpeValue(1000.0, UNIT_W_M2)
    if 2600 < wl <= 1e6:
        if t < 1e-7:
            return MpeValue(100.0, UNIT_J_M2)
        if t < 10:
            return MpeValue(5600.0 * t**0.25, UNIT_J_M2)
        return MpeValue(1000.0, UNIT_W_M2)
    return MpeValue(0.0, UNIT_NA)


@dataclass(frozen=True)
class MpeResult:
    critical_mpe: float
    critical_unit: str
    mpe_single_pulse: float
    mpe_average: float
    mpe_thermal: float
    limiting_mechanism: str
    wavelength_region: str
    c5: float
    skin: MpeValue
    legacy_factors: MpeCorrectionFactors
    c5_details: C5Result | None = None
    steps: list[str] = field(default_factory=list)


def _to_cm2_unit(unit: str) -> str:
    return unit.replace("/m²", "/cm²")


def comprehensive_mpe(
    wavelength_nm: float,
    exposure_time_s: float,
    angular_subtense_mrad: float = DEFAULT_ANGULAR_SUBTENSE_MRAD,
    laser_type: str = LASER_CONTINUOUS,
    pulse_width_s: float | None = None,
    repetition_rate_hz: float | None = None,
) -> MpeResult:
    """
    Most restrictive ocular MPE for the exposure, reported per cm².

    For repetitively pulsed lasers the three rules of A.3 are applied and the minimum wins:
    1) single pulse, 2) average power per pulse, 3) single pulse x C5.
    """
    wl = as_finite(wavelength_nm, "wavelength_nm")
    t = as_positive(exposure_time_s, "exposure_time_s")
    alpha = as_finite(angular_subtense_mrad, "angular_subtense_mrad")
    if laser_type not in (LASER_CONTINUOUS, LASER_PULSED):
        raise ValueError(f"laser_type must be '{LASER_CONTINUOUS}' or '{LASER_PULSED}'")

    steps = [
        f"Wavelength: {wl:g} nm",
        f"Exposure time: {t:g} s",
        f"Angular subtense: {alpha:g} mrad",
        f"Laser type: {laser_type}",
    ]

    cf = correction_factors(wl, t)
    point = MpeValue(*_eye_point(wl, t, cf))
    steps.append(f"Point source MPE (Table A.1): {point.value:.3e} {point.unit}")

    critical = point
    mechanism = MECHANISM_POINT
    if 400 <= wl <= 1400 and alpha > 1.5:
        extended = eye_mpe(wl, t, alpha)
        steps.append(f"Extended source MPE (Table A.2): {extended.value:.3e} {extended.unit}")
        if extended.unit != UNIT_NA:
            ext_value = extended.value
            if is_energy_unit(point.unit) and not is_energy_unit(extended.unit):
                ext_value = extended.value * t
            elif not is_energy_unit(point.unit) and is_energy_unit(extended.unit):
                ext_value = extended.value / t
            if ext_value < point.value:
                critical = extended
                mechanism = MECHANISM_EXTENDED

    skin = skin_mpe(wl, t)
    steps.append(f"Skin MPE (Table A.5): {skin.value:.3e} {skin.unit}")

    critical_value = critical.value
    critical_unit = critical.unit
    single = average = thermal = critical_value
    c5_details = None

    pulsed = laser_type == LASER_PULSED and pulse_width_s and repetition_rate_hz
    if pulsed:
        pw = as_positive(pulse_width_s, "pulse_width_s")
        prf = as_positive(repetition_rate_hz, "repetition_rate_hz")
        c5_details = c5_factor_iso(wl, pw, prf, t, alpha)
        steps.extend(c5_details.steps)

        single_mpe = MpeValue(*_eye_point(wl, pw, correction_factors(wl, pw)))
        single = single_mpe.value
        steps.append(f"Rule 1 - Single pulse MPE: {single:.3e} {single_mpe.unit}")

        if is_energy_unit(point.unit):
            average = point.value / (t * prf)
            steps.append(f"Rule 2 - Average power MPE: {average:.3e} J/m² per pulse")
        else:
            average = point.value / prf
            steps.append(
                f"Rule 2 - Average power MPE: {point.value:.3e} W/m² -> {average:.3e} J/m² per pulse"
            )

        thermal = single * c5_details.c5
        steps.append(
            f"Rule 3 - Thermal accumulation MPE: {single:.3e} x {c5_details.c5:.4f} = {thermal:.3e} J/m²"
        )

        critical_value = min(single, average, thermal)
        if critical_value == single:
            mechanism = MECHANISM_SINGLE
        elif critical_value == average:
            mechanism = MECHANISM_AVERAGE
        else:
            mechanism = MECHANISM_THERMAL
        critical_unit = UNIT_J_M2
        steps.append(f"Most restrictive MPE: {critical_value:.3e} {critical_unit} ({mechanism})")

    per_cm2 = 1.0 / M2_TO_CM2
    critical_value *= per_cm2
    critical_unit = _to_cm2_unit(critical_unit)
    steps.append(f"Critical MPE: {critical_value:.3e} {critical_unit}")
    steps.append(f"Limiting mechanism: {mechanism}")

    log.info("MPE %g nm, t=%g s: %.3e %s (%s)", wl, t, critical_value, critical_unit, mechanism)
    return MpeResult(
        critical_mpe=critical_value,
        critical_unit=critical_unit,
        mpe_single_pulse=single * per_cm2,
        mpe_average=average * per_cm2,
        mpe_thermal=thermal * per_cm2,
        limiting_mechanism=mechanism,
        wavelength_region=wavelength_region(wl),
        c5=c5_details.c5 if c5_details is not None else 1.0,
        skin=skin,
        legacy_factors=mpe_correction_factors(wl),
        c5_details=c5_details,
        steps=steps,
    )
