"""
Protective eyewear optical density and EN 207 style marking.

OD = log10(H / MPE), где H - экспозиция на роговице (W/cm² для CW, J/cm² на импульс).
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

from .checks import as_finite, as_non_negative, as_positive
from .mpe import UNIT_J_CM2, UNIT_W_CM2, MpeValue, eye_mpe
from .pulse import c5_factor
from .units import MJ_TO_J, MW_TO_W, M2_TO_CM2, NS_TO_S, beam_area_cm2, is_energy_unit

log = logging.getLogger("elv_core.eyewear")

SCALE_CW = "D"
SCALE_PULSED = "I"
SCALE_LONG_PULSE = "R"
SCALE_MODE_LOCKED = "M"

LB_MAX = 10
HIGH_OD_NOTE_ABOVE = 7

NOTE_BELOW_MPE = (
    "Calculated exposure is below MPE. Eyewear may not be required by calculation, "
    "but consider other safety factors."
)
NOTE_HIGH_OD = (
    "High OD requirement may significantly reduce visibility. "
    "Ensure adequate illumination and consider beam path modification."
)


@dataclass(frozen=True)
class EyewearResult:
    required_od: float
    od_rating: int
    exposure_level: float
    mpe: float
    mpe_unit: str
    scale_factor: str
    lb_rating: str
    dir_rating: str
    recommendations: list[str] = field(default_factory=list)
    steps: list[str] = field(default_factory=list)


def scale_letter(laser_type: str, pulse_width_s: float | None = None) -> str:
    if laser_type == "continuous" or pulse_width_s is None:
        return SCALE_CW
    if pulse_width_s >= 0.25:
        return SCALE_LONG_PULSE
    if pulse_width_s >= 1e-9:
        return SCALE_PULSED
    return SCALE_MODE_LOCKED


def lb_label(od_rating: int) -> str:
    return "LB10+" if od_rating > LB_MAX else f"LB{od_rating}"


def _w_cm2(mpe: MpeValue, t: float) -> float:
    value = mpe.value / M2_TO_CM2
    return value / t if is_energy_unit(mpe.unit) else value


def _j_cm2(mpe: MpeValue, t: float) -> float:
    value = mpe.value / M2_TO_CM2
    return value if is_energy_unit(mpe.unit) else value * t


def recommendations_for(wavelength_nm: float, required_od: float, od_rating: int, marking: str) -> list[str]:
    items = [
        f"Select eyewear with Optical Density (OD) ≥ {od_rating} at {wavelength_nm:g} nm.",
        "Ensure eyewear is certified to EN 207 (Europe) or ANSI Z136.1 (USA) standards.",
        f'The EN 207 marking should include: "{marking}".',
        "Check for proper fit, full coverage (including side protection), and comfort.",
        "Inspect eyewear for damage (scratches, cracks, discoloration) before each use.",
        "Verify adequate Visible Light Transmission (VLT) for safe task performance.",
        "Consider alignment procedures for non-visible wavelengths (<400nm or >700nm).",
        "Account for multiple wavelengths if applicable (select highest required OD).",
    ]
    if required_od < 0:
        items.insert(0, NOTE_BELOW_MPE)
    if od_rating > HIGH_OD_NOTE_ABOVE:
        items.append(NOTE_HIGH_OD)
    return items


def calculate_eyewear(
    wavelength_nm: float,
    beam_diameter_mm: float,
    exposure_time_s: float,
    laser_type: str = "continuous",
    power_mw: float = 1000.0,
    pulse_energy_mj: float = 100.0,
    pulse_width_ns: float = 10.0,
    repetition_rate_hz: float = 1000.0,
) -> EyewearResult:
    wl = as_finite(wavelength_nm, "wavelength_nm")
    d_mm = as_positive(beam_diameter_mm, "beam_diameter_mm")
    t = as_positive(exposure_time_s, "exposure_time_s")
    if laser_type not in ("continuous", "pulsed"):
        raise ValueError("laser_type must be 'continuous' or 'pulsed'")

    area_cm2 = beam_area_cm2(d_mm)
    steps = [
        f"Laser type: {laser_type.upper()}",
        f"Wavelength: {wl:g} nm",
        f"Beam diameter: {d_mm:g} mm",
        f"Exposure time: {t:g} s",
        f"Beam area: {area_cm2:.4f} cm²",
    ]

    if laser_type == "continuous":
        p_mw = as_positive(power_mw, "power_mw")
        mpe = eye_mpe(wl, t)
        mpe_value = _w_cm2(mpe, t)
        mpe_unit = UNIT_W_CM2
        exposure = p_mw * MW_TO_W / area_cm2
        letter = SCALE_CW
        scale = f"{letter} (CW)"
        steps.append(f"MPE: {mpe.value:.3e} {mpe.unit} -> {mpe_value:.3e} W/cm²")
        steps.append(f"Exposure level: {p_mw:g} mW / {area_cm2:.4f} cm² = {exposure:.3e} W/cm²")
    else:
        energy_mj = as_positive(pulse_energy_mj, "pulse_energy_mj")
        pw_ns = as_positive(pulse_width_ns, "pulse_width_ns")
        prf = as_non_negative(repetition_rate_hz, "repetition_rate_hz")
        pw_s = pw_ns * NS_TO_S

        c5 = 1.0
        if prf > 0:
            c5_details = c5_factor(wl, pw_ns, prf, t)
            c5 = c5_details.c5
            steps.extend(f"  {s}" for s in c5_details.steps)

        single = _j_cm2(eye_mpe(wl, pw_s), pw_s)
        avg_mpe = eye_mpe(wl, t)
        if prf > 0:
            if is_energy_unit(avg_mpe.unit):
                average = avg_mpe.value / M2_TO_CM2 / (prf * t)
            else:
                average = avg_mpe.value / M2_TO_CM2 / prf
        else:
            average = math.inf
        train = single * c5

        mpe_value = min(single, average, train)
        mpe_unit = UNIT_J_CM2
        exposure = energy_mj * MJ_TO_J / area_cm2
        letter = scale_letter(laser_type, pw_s)
        scale = f"{letter} ({pw_ns:g}ns pulse)"
        steps.append(f"Single pulse MPE: {single:.3e} J/cm²")
        steps.append(f"Average power MPE per pulse: {average:.3e} J/cm²")
        steps.append(f"Pulse train MPE (C5 = {c5:.4f}): {train:.3e} J/cm²")
        steps.append(f"Most restrictive: {mpe_value:.3e} J/cm²")
        steps.append(f"Exposure level: {energy_mj:g} mJ / {area_cm2:.4f} cm² = {exposure:.3e} J/cm²")

    if mpe_value <= 0:
        raise ValueError(f"no MPE defined for {wl:g} nm at {t:g} s")

    od = math.log10(exposure / mpe_value)
    rating = math.ceil(max(0.0, od))
    lb = lb_label(rating)
    marking = f"{wl:g} {letter} {lb}"
    steps.append(f"Required OD = log10({exposure:.3e} / {mpe_value:.3e}) = {od:.3f}")
    steps.append(f"Minimum integer OD: {rating}")
    log.info("Eyewear %g nm (%s): OD %.3f -> %s", wl, laser_type, od, marking)

    return EyewearResult(
        required_od=max(0.0, od),
        od_rating=rating,
        exposure_level=exposure,
        mpe=mpe_value,
        mpe_unit=mpe_unit,
        scale_factor=scale,
        lb_rating=marking,
        dir_rating=f"{letter} L{rating}",
        recommendations=recommendations_for(wl, od, rating, marking),
        steps=steps,
    )
