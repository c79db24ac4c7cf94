"""
Accessible emission limits, IEC 60825-1:2014 Tables 3-8.

Каждая функция возвращает AelResult(value, unit). Единицы: W, J, W/m², J/m², N/A.
Таблицы для протяжённых источников (C6 > 1) применяются только в 400..1400 нм.
C5 умножает результат только для 302.5 <= λ < 4000 нм.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from .checks import as_finite, as_positive
from .correction_factors import DEFAULT_ANGULAR_SUBTENSE_MRAD, CorrectionFactors, correction_factors
from .units import NS_TO_S, UNIT_J, UNIT_J_M2, UNIT_NA, UNIT_W, UNIT_W_M2

CLASS_1 = "Class 1"
CLASS_1M = "Class 1M"
CLASS_2 = "Class 2"
CLASS_2M = "Class 2M"
CLASS_3R = "Class 3R"
CLASS_3B = "Class 3B"
CLASS_4 = "Class 4"

TESTED_CLASSES = (CLASS_1, CLASS_2, CLASS_3R, CLASS_3B)


@dataclass(frozen=True)
class AelResult:
    value: float
    unit: str


def _with_c5(wavelength_nm: float, value: float, unit: str, c5: float) -> AelResult:
    if 302.5 <= wavelength_nm < 4000:
        return AelResult(value * c5, unit)
    return AelResult(value, unit)


def _retinal_photochemical_vs_thermal(
    t: float, photochemical_j: float, thermal: tuple[float, str]
) -> tuple[float, str]:
    # thermal limit is J for t <= T2, W otherwise
    thermal_value, thermal_unit = thermal
    if thermal_unit == UNIT_J:
        return min(photochemical_j, thermal_value), UNIT_J
    if photochemical_j / t <= thermal_value:
        return photochemical_j, UNIT_J
    return thermal_value, thermal_unit


# ---------------------------------------------------------------- Class 1


def _class1_point(wl: float, t: float, cf: CorrectionFactors) -> tuple[float, str]:
    if 180 <= wl < 302.5:
        if t < 1e-8:
            return 3e10, UNIT_W_M2
        return 30.0, UNIT_J_M2
    if 302.5 <= wl < 315:
        if t < 1e-8:
            return 2.4e4, UNIT_W
        if t < 10 and t <= cf.t1:
            return 7.9e-7 * cf.c1, UNIT_J
        return 7.9e-7 * cf.c2, UNIT_J
    if 315 <= wl < 400:
        if t < 1e-8:
            return 2.4e4, UNIT_W
        if t < 10:
            return 7.9e-4 * cf.c1, UNIT_J
        if t < 1000:
            return 7.9e-3, UNIT_J
        return 7.9e-6, UNIT_W
    if 400 <= wl < 700:
        if t < 1e-11:
            return 3.8e-8, UNIT_J
        if t < 5e-6:
            return 7.7e-8, UNIT_J
        if t < 10:
            return 7e-4 * t**0.75 * cf.c6, UNIT_J
        if wl < 450:
            if t < 100:
                return 3.9e-3, UNIT_J
            return 3.9e-5 * cf.c3, UNIT_W
        if wl < 500:
            if t < 100:
                return 3.9e-3 * cf.c3, UNIT_J
            if t < 1000:
                return min(3.9e-3 * cf.c3, 3.9e-4 * t), UNIT_J
            return 3.9e-5 * cf.c3, UNIT_W
        return 3.9e-4, UNIT_W
    if 700 <= wl < 1050:
        if t < 1e-11:
            return 3.8e-8, UNIT_J
        if t < 5e-6:
            return 7.7e-8 * cf.c4, UNIT_J
        if t < 100:
            return 7e-4 * t**0.75 * cf.c4, UNIT_J
        return 3.9e-4 * cf.c4 * cf.c7, UNIT_W
    if 1050 <= wl < 1400:
        if t < 1e-11:
            return 3.8e-8 * cf.c7, UNIT_J
        if t < 1.3e-5:
            return 7.7e-7 * cf.c7, UNIT_J
        if t < 10:
            return 3.5e-3 * t**0.75 * cf.c7, UNIT_J
        return 3.9e-4 * cf.c4 * cf.c7, UNIT_W
    if 1400 <= wl < 1500 or 1800 <= wl < 2600:
        if t < 1e-9:
            return 8e5, UNIT_W
        if t < 1e-3:
            return 8e-4, UNIT_J
        if t < 0.35:
            return 4.4e-3 * t**0.25, UNIT_J
        if t < 10:
            return 1e-2 * t, UNIT_J
        return 1e-2, UNIT_W
    if 1500 <= wl < 1800:
        if t < 1e-9:
            return 8e6, UNIT_W
        if t < 0.35:
            return 8e-3, UNIT_J
        if t < 10:
            return 1.8e-2 * t**0.75, UNIT_J
        return 1e-2, UNIT_W
    if 2600 <= wl < 4000:
        if t < 1e-9:
            return 8e4, UNIT_W
        if t < 1e-7:
            return 8e-5, UNIT_J
        if t < 0.35:
            return 4.4e-3 * t**0.25, UNIT_J
        if t < 10:
            return 1e-2 * t, UNIT_J
        return 1e-2, UNIT_W
    if 4000 <= wl <= 1e6:
        if t < 1e-9:
            return 1e11, UNIT_W_M2
        if t < 1e-7:
            return 100.0, UNIT_J_M2
        if t < 10:
            return 5600.0 * t**0.25, UNIT_J_M2
        return 1000.0, UNIT_W_M2
    return 0.0, UNIT_W


def _class1_extended(wl: float, t: float, cf: CorrectionFactors) -> tuple[float, str]:
    if wl < 400 or wl > 1400:
        return 0.0, UNIT_NA
    if wl < 700:
        if t < 1e-11:
            return 3.8e-8 * cf.c6, UNIT_J
        if t < 5e-6:
            return 7.7e-8 * cf.c6, UNIT_J
        if t < 10:
            return 7e-4 * t**0.75 * cf.c6, UNIT_J
        if t <= cf.t2:
            thermal = (7e-4 * t**0.75 * cf.c6, UNIT_J)
        else:
            thermal = (7e-4 * cf.t2**0.75 * cf.c6 / t, UNIT_W)
        if wl <= 600:
            photochemical = 3.9e-3 * cf.c3 if t < 100 else 3.9e-5 * cf.c3
            return _retinal_photochemical_vs_thermal(t, photochemical, thermal)
        return thermal
    if wl < 1050:
        if t < 1e-11:
            return 3.8e-8 * cf.c4, UNIT_J
        if t < 5e-6:
            return 7.7e-8 * cf.c4 * cf.c6, UNIT_J
        if t < 10:
            return 7e-4 * t**0.75 * cf.c4 * cf.c6, UNIT_J
        t_eff = t if t <= cf.t2 else cf.t2
        return 7e-4 * t_eff**0.75 * cf.c4 * cf.c6 / t, UNIT_W
    if t < 1e-11:
        return 3.8e-8 * cf.c6 * cf.c7, UNIT_J
    if t < 1.3e-5:
        return 7.7e-7 * cf.c6 * cf.c7, UNIT_J
    if t < 10:
        return 3.5e-3 * t**0.75 * cf.c6 * cf.c7, UNIT_J
    t_eff = t if t <= cf.t2 else cf.t2
    return 3.5e-3 * t_eff**0.75 * cf.c6 * cf.c7 / t, UNIT_W


def class1_ael(
    wavelength_nm: float,
    exposure_time_s: float,
    c5: float = 1.0,
    angular_subtense_mrad: float = DEFAULT_ANGULAR_SUBTENSE_MRAD,
) -> AelResult:
    """Class 1 AEL: Table 3 (point source) / Table 4 (extended source)."""
    wl = as_finite(wavelength_nm, "wavelength_nm")
    t = as_positive(exposure_time_s, "exposure_time_s")
    cf = correction_factors(wl, t, angular_subtense_mrad)
    if cf.c6 == 1.0:
        value, unit = _class1_point(wl, t, cf)
    else:
        value, unit = _class1_extended(wl, t, cf)
    return _with_c5(wl, value, unit, c5)


# ---------------------------------------------------------------- Class 2


def class2_ael(
    wavelength_nm: float,
    exposure_time_s: float,
    c5: float = 1.0,
    angular_subtense_mrad: float = DEFAULT_ANGULAR_SUBTENSE_MRAD,
) -> AelResult:
    """Class 2 AEL (Table 5): 1 mW x C6 in 400..700 nm, no Class 2 elsewhere."""
    wl = as_finite(wavelength_nm, "wavelength_nm")
    t = as_positive(exposure_time_s, "exposure_time_s")
    if 400 <= wl <= 700:
        cf = correction_factors(wl, t, angular_subtense_mrad)
        return AelResult(1e-3 * cf.c6 * c5, UNIT_W)
    return AelResult(0.0, UNIT_W)


# ---------------------------------------------------------------- Class 3R


def _class3r_point(wl: float, t: float, cf: CorrectionFactors) -> tuple[float, str]:
    if 180 <= wl < 302.5:
        if t < 1e-9:
            return 1.5e11, UNIT_W_M2
        return 150.0, UNIT_J_M2
    if 302.5 <= wl < 315:
        if t < 1e-9:
            return 1.2e5, UNIT_W
        if t < 10:
            if t <= cf.t1:
                return 4e-6 * cf.c1, UNIT_J
            return 4e-5 * cf.c2, UNIT_J
        return 4e-6 * cf.c2, UNIT_J
    if 315 <= wl < 400:
        if t < 1e-9:
            return 1.2e5, UNIT_W
        if t < 10:
            return 4e-6 * cf.c1, UNIT_J
        if t < 1000:
            return 4e-2, UNIT_J
        return 4e-5, UNIT_W
    if 400 <= wl < 700:
        if t < 1e-11:
            return 1.9e-7, UNIT_J
        if t < 5e-6:
            return 3.8e-7, UNIT_J
        if t < 0.25:
            return 3.5e-3 * t**0.75, UNIT_J
        return 5e-3, UNIT_W
    if 700 <= wl < 1050:
        if t < 1e-11:
            return 1.9e-7, UNIT_J
        if t < 5e-6:
            return 3.8e-7 * cf.c4, UNIT_J
        if t < 10:
            return 3.5e-3 * t**0.75 * cf.c4, UNIT_J
        return 2e-3 * cf.c4 * cf.c7, UNIT_W
    if 1050 <= wl < 1400:
        if t < 1e-11:
            return 1.9e-6 * cf.c7, UNIT_J
        if t < 1.3e-5:
            return 3.8e-6 * cf.c7, UNIT_J
        if t < 10:
            return 1.8e-2 * t**0.75 * cf.c7, UNIT_J
        return 2e-3 * cf.c4 * cf.c7, UNIT_W
    if 1400 <= wl < 1500 or 1800 <= wl < 2600:
        if t < 1e-9:
            return 4e6, UNIT_W
        if t < 1e-3:
            return 4e-3, UNIT_J
        if t < 0.35:
            return 2.2e-2 * t**0.25, UNIT_J
        if t < 10:
            return 5e-2 * t, UNIT_J
        return 5e-2, UNIT_W
    if 1500 <= wl < 1800:
        if t < 1e-9:
            return 4e7, UNIT_W
        if t < 0.35:
            return 4e-2, UNIT_J
        if t < 10:
            return 9e-2 * t**0.75, UNIT_J
        return 5e-2, UNIT_W
    if 2600 <= wl < 4000:
        if t < 1e-9:
            return 4e5, UNIT_W
        if t < 1e-7:
            return 4e-4, UNIT_J
        if t < 0.35:
            return 2.2e-2 * t**0.25, UNIT_J
        if t < 10:
            return 5e-2 * t, UNIT_J
        return 5e-2, UNIT_W
    if 4000 <= wl <= 1e6:
        if t < 1e-9:
            return 5e11, UNIT_W_M2
        if t < 1e-7:
            return 500.0, UNIT_J_M2
        if t < 10:
            return 2.8e4 * t**0.25, UNIT_J_M2
        return 5000.0, UNIT_W_M2
    return 0.0, UNIT_W


def _class3r_extended(wl: float, t: float, cf: CorrectionFactors) -> tuple[float, str]:
    if wl < 400 or wl > 1400:
        return 0.0, UNIT_NA
    if wl < 700:
        value, unit = _class3r_point(wl, t, cf)
        return value * cf.c6, unit
    if wl < 1050:
        if t < 1e-11:
            return 1.9e-7 * cf.c6, UNIT_J
        if t < 5e-6:
            return 3.8e-7 * cf.c4 * cf.c6, UNIT_J
        if t < 10 or t <= cf.t2:
            return 3.5e-3 * t**0.75 * cf.c4 * cf.c6, UNIT_J
        return 3.5e-3 * cf.c4 * cf.c6 * cf.t2**-0.25, UNIT_W
    if t < 1e-11:
        return 1.9e-6 * cf.c6 * cf.c7, UNIT_J
    if t < 1.3e-5:
        return 3.8e-6 * cf.c6 * cf.c7, UNIT_J
    if t < 10:
        return 1.8e-2 * t**0.75 * cf.c6 * cf.c7, UNIT_J
    if t <= cf.t2:
        return 1.75e-2 * t**0.75 * cf.c6 * cf.c7, UNIT_J
    return 1.75e-2 * cf.c6 * cf.c7 * cf.t2**-0.25, UNIT_W


def class3r_ael(
    wavelength_nm: float,
    exposure_time_s: float,
    c5: float = 1.0,
    angular_subtense_mrad: float = DEFAULT_ANGULAR_SUBTENSE_MRAD,
) -> AelResult:
    """Class 3R AEL: Table 6 (point source) / Table 7 (extended source)."""
    wl = as_finite(wavelength_nm, "wavelength_nm")
    t = as_positive(exposure_time_s, "exposure_time_s")
    cf = correction_factors(wl, t, angular_subtense_mrad)
    if cf.c6 == 1.0:
        value, unit = _class3r_point(wl, t, cf)
    else:
        value, unit = _class3r_extended(wl, t, cf)
    return _with_c5(wl, value, unit, c5)


# ---------------------------------------------------------------- Class 3B


def _class3b(wl: float, t: float, cf: CorrectionFactors) -> tuple[float, str]:
    if 180 <= wl < 302.5:
        if t < 1e-9:
            return 3.8e5, UNIT_W
        if t <= 0.25:
            return 3.8e-4, UNIT_J
        return 1.5e-3, UNIT_W
    if 302.5 <= wl < 315:
        if t < 1e-9:
            return 1.25e4 * cf.c2, UNIT_W
        if t <= 0.25:
            return 1.25e-5 * cf.c2, UNIT_J
        return 5e-5 * cf.c2, UNIT_W
    if 315 <= wl < 400:
        if t < 1e-9:
            return 1.25e3, UNIT_W
        if t <= 0.25:
            return 0.125, UNIT_J
        return 0.5, UNIT_W
    if 400 <= wl <= 700:
        if t < 1e-9:
            return 3e5, UNIT_W
        if t < 0.06:
            return 0.03, UNIT_J
        return 0.5, UNIT_W
    if 700 < wl <= 1050:
        if t < 1e-9:
            return 3e7 * cf.c4, UNIT_W
        if t <= 0.25 and t < 0.06 * cf.c4:
            return 0.03 * cf.c4, UNIT_J
        return 0.5, UNIT_W
    if 1050 < wl <= 1400:
        if t < 1e-9:
            return 1.5e8, UNIT_W
        if t <= 0.25:
            return 0.15, UNIT_J
        return 0.5, UNIT_W
    if 1400 < wl <= 1e6:
        if t < 1e-9:
            return 1.25e8, UNIT_W
        if t < 0.25:
            return 0.125, UNIT_J
        return 0.5, UNIT_W
    return 0.0, UNIT_W


def class3b_ael(
    wavelength_nm: float,
    exposure_time_s: float,
    c5: float = 1.0,
    angular_subtense_mrad: float = DEFAULT_ANGULAR_SUBTENSE_MRAD,
) -> AelResult:
    """Class 3B AEL (Table 8)."""
    wl = as_finite(wavelength_nm, "wavelength_nm")
    t = as_positive(exposure_time_s, "exposure_time_s")
    cf = correction_factors(wl, t, angular_subtense_mrad)
    value, unit = _class3b(wl, t, cf)
    return _with_c5(wl, value, unit, c5)


_AEL_BY_CLASS: dict[str, Callable[..., AelResult]] = {
    CLASS_1: class1_ael,
    CLASS_2: class2_ael,
    CLASS_3R: class3r_ael,
    CLASS_3B: class3b_ael,
}


def ael_for_class(class_name: str, wavelength_nm: float, exposure_time_s: float, c5: float = 1.0) -> AelResult:
    fn = _AEL_BY_CLASS.get(class_name)
    if fn is None:
        raise ValueError(f"Unsupported class for AEL lookup: {class_name}")
    return fn(wavelength_nm, exposure_time_s, c5)


# ---------------------------------------------------------------- pulsed


@dataclass(frozen=True)
class PulsedAelAssessment:
    single_pulse: AelResult
    average_power: AelResult
    pulse_train: AelResult
    most_restrictive: float
    steps: list[str] = field(default_factory=list)


def assess_pulsed_ael(
    class_name: str,
    wavelength_nm: float,
    exposure_time_s: float,
    repetition_rate_hz: float,
    c5: float,
    pulse_width_ns: float,
) -> PulsedAelAssessment:
    """
    Three pulse rules for a repetitively pulsed source:
    1) single pulse AEL at the pulse width
    2) average power AEL over the time base, per pulse
    3) pulse train AEL = single pulse AEL x C5
    """
    prf = as_positive(repetition_rate_hz, "repetition_rate_hz")
    pw_ns = as_positive(pulse_width_ns, "pulse_width_ns")
    pw_s = pw_ns * NS_TO_S
    steps = [
        f"Wavelength: {wavelength_nm:g} nm",
        f"Exposure time: {exposure_time_s:g} s",
        f"Repetition rate: {prf:g} Hz",
        f"Pulse width: {pw_ns:g} ns",
        f"C5 factor: {c5:.4f}",
    ]

    single = ael_for_class(class_name, wavelength_nm, pw_s, 1.0)
    steps.append(f"Single pulse AEL (t = {pw_s:.3e} s): {single.value:.3e} {single.unit}")

    avg_raw = ael_for_class(class_name, wavelength_nm, exposure_time_s, 1.0)
    if avg_raw.unit == UNIT_W:
        average = AelResult(avg_raw.value / prf, UNIT_J)
        steps.append(f"Average power AEL: {avg_raw.value:.3e} W")
        steps.append(
            f"Average power AEL per pulse: {avg_raw.value:.3e} / {prf:g} = {average.value:.3e} J/pulse"
        )
    else:
        average = avg_raw
        steps.append(f"Average power AEL (already in energy units): {average.value:.3e} {average.unit}")

    train = AelResult(single.value * c5, UNIT_J)
    steps.append(
        f"Pulse train AEL: {single.value:.3e} x {c5:.4f} = {train.value:.3e} J"
    )

    most_restrictive = min(single.value, average.value, train.value)
    steps.append(
        f"Most restrictive AEL: min({single.value:.3e}, {average.value:.3e}, {train.value:.3e})"
        f" = {most_restrictive:.3e} J"
    )
    return PulsedAelAssessment(
        single_pulse=single,
        average_power=average,
        pulse_train=train,
        most_restrictive=most_restrictive,
        steps=steps,
    )
