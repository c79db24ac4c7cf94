"""
IEC 60825-1:2014 Table 9 correction factors, time bases and Table 10 measurement conditions.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_ANGULAR_SUBTENSE_MRAD = 1.5
ALPHA_MIN_MRAD = 1.5

TIME_BASE_GENERAL_S = 100.0
TIME_BASE_BLINK_S = 0.25
TIME_BASE_LONG_TERM_S = 30000.0

CLASS_M_BEAM_DIAMETER_MM = 7.0


@dataclass(frozen=True)
class CorrectionFactors:
    c1: float
    c2: float
    c3: float
    c4: float
    c5: float
    c6: float
    c7: float
    t1: float
    t2: float
    alpha_max: float


def correction_factors(
    wavelength_nm: float,
    exposure_time_s: float,
    angular_subtense_mrad: float = DEFAULT_ANGULAR_SUBTENSE_MRAD,
) -> CorrectionFactors:
    wl = float(wavelength_nm)
    t = float(exposure_time_s)
    alpha = float(angular_subtense_mrad)

    c1 = 1.0
    t1 = 1.0
    if 180 <= wl <= 400:
        c1 = 5.6e3 * t**0.25
        t1 = 1e-15 * 10 ** (0.8 * (wl - 295))

    c2 = 10 ** (0.2 * (wl - 295)) if 302.5 <= wl <= 315 else 30.0

    t2 = 1.0
    if 400 <= wl <= 1400:
        if alpha <= ALPHA_MIN_MRAD:
            t2 = 10.0
        elif alpha <= 100:
            t2 = 10.0 * 10 ** ((alpha - 1.5) / 98.5)
        else:
            t2 = 100.0

    c3 = 10 ** (0.02 * (wl - 450)) if 450 <= wl <= 600 else 1.0
    c4 = 10 ** (0.002 * (wl - 700)) if 700 <= wl <= 1050 else 5.0

    if t < 625e-6:
        alpha_max = 5.0
    elif t > 0.25:
        alpha_max = 100.0
    else:
        alpha_max = 200.0 * t**0.5

    c6 = 1.0
    if 400 <= wl <= 1400:
        if ALPHA_MIN_MRAD <= alpha <= alpha_max:
            c6 = alpha / ALPHA_MIN_MRAD
        elif alpha > alpha_max:
            c6 = alpha_max / ALPHA_MIN_MRAD

    c7 = 1.0
    if 1150 <= wl <= 1200:
        c7 = 10 ** (0.0018 * (wl - 1150))
    elif 1200 < wl <= 1400:
        c7 = 8.0 + 10 ** (0.04 * (wl - 1250))

    return CorrectionFactors(
        c1=c1, c2=c2, c3=c3, c4=c4, c5=1.0, c6=c6, c7=c7, t1=t1, t2=t2, alpha_max=alpha_max
    )


@dataclass(frozen=True)
class MpeCorrectionFactors:
    ca: float
    cb: float
    cc: float


def mpe_correction_factors(wavelength_nm: float) -> MpeCorrectionFactors:
    """CA/CB/CC factors (ANSI-style naming) reported alongside MPE results."""
    wl = float(wavelength_nm)
    ca = 1.0
    if 700 <= wl <= 1050:
        ca = 10 ** (0.002 * (wl - 700))
    elif 1050 < wl <= 1400:
        ca = 5.0
    cb = 10 ** (0.015 * (wl - 700)) if 700 <= wl <= 1150 else 1.0
    cc = 1.0
    if 1500 <= wl <= 1800:
        cc = 10 ** (0.018 * (wl - 1500))
    elif 1800 < wl <= 2600:
        cc = 5.0
    return MpeCorrectionFactors(ca=ca, cb=cb, cc=cc)


def time_base_ti(wavelength_nm: float) -> float:
    """Ti (Table 2): pulses inside Ti are treated as one pulse."""
    wl = float(wavelength_nm)
    if 400 <= wl < 1050:
        return 5e-6
    if 1050 <= wl < 1400:
        return 13e-6
    if 1400 <= wl < 1500:
        return 1e-3
    if 1500 <= wl < 1800:
        return 10.0
    if 1800 <= wl < 2600:
        return 1e-3
    if 2600 <= wl <= 1e6:
        return 1e-7
    return 1e-3


def classification_time_base(
    wavelength_nm: float,
    class_test: str | None = None,
    *,
    long_term_viewing: bool = False,
) -> float:
    wl = float(wavelength_nm)
    if wl <= 400:
        return TIME_BASE_LONG_TERM_S
    if long_term_viewing:
        return TIME_BASE_LONG_TERM_S
    if 400 <= wl <= 700 and class_test in ("2", "2M", "3R"):
        return TIME_BASE_BLINK_S
    return TIME_BASE_GENERAL_S


@dataclass(frozen=True)
class MeasurementCondition:
    aperture_mm: float
    distance_mm: float


@dataclass(frozen=True)
class MeasurementConditions:
    condition1: MeasurementCondition
    condition3: MeasurementCondition


def _ir_condition3_aperture(exposure_time_s: float) -> float:
    if exposure_time_s <= 0.35:
        return 1.0
    if exposure_time_s < 10:
        return 1.5 * exposure_time_s ** (3.0 / 8.0)
    return 3.5


def measurement_conditions(wavelength_nm: float, exposure_time_s: float) -> MeasurementConditions:
    """Condition 1 (telescope) and condition 3 (unaided eye) apertures/distances, mm."""
    wl = float(wavelength_nm)
    t = float(exposure_time_s)

    if wl < 302.5:
        c1, c3 = (0.0, 0.0), (1.0, 0.0)
    elif wl < 400:
        c1, c3 = (7.0, 2000.0), (1.0, 100.0)
    elif wl < 1400:
        c1, c3 = (50.0, 2000.0), (7.0, 100.0)
    elif wl < 4000:
        ap3 = _ir_condition3_aperture(t)
        c1, c3 = (7.0 * ap3, 2000.0), (ap3, 100.0)
    elif wl < 1e5:
        c1, c3 = (0.0, 0.0), (_ir_condition3_aperture(t), 0.0)
    elif wl <= 1e6:
        c1, c3 = (0.0, 0.0), (11.0, 0.0)
    else:
        c1, c3 = (0.0, 0.0), (0.0, 0.0)

    return MeasurementConditions(
        condition1=MeasurementCondition(aperture_mm=c1[0], distance_mm=c1[1]),
        condition3=MeasurementCondition(aperture_mm=c3[0], distance_mm=c3[1]),
    )


def condition1_applies(wavelength_nm: float) -> bool:
    wl = float(wavelength_nm)
    return not (wl < 302.5 or 4000 <= wl <= 1e6)


def requires_class_m(wavelength_nm: float, beam_diameter_mm: float) -> bool:
    if 302.5 <= wavelength_nm <= 4000:
        return beam_diameter_mm > CLASS_M_BEAM_DIAMETER_MM
    return False


def supports_class_2(wavelength_nm: float) -> bool:
    return 400 <= wavelength_nm <= 700
