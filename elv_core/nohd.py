"""
Nominal ocular hazard distance.

Расчёт в м и W/m²; MPE в J/cm² переводится в W/cm² делением на время воздействия.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

from .checks import as_finite, as_non_negative, as_positive
from .mpe import comprehensive_mpe
from .units import M2_TO_CM2, MM_TO_M, MRAD_TO_RAD, MW_TO_W, beam_area_cm2, is_energy_unit

log = logging.getLogger("elv_core.nohd")

HAZARD_COLLIMATED = "Extremely high hazard - Collimated beam exceeding MPE"
HAZARD_LOW = "Low hazard potential - NOHD < 10 cm"
HAZARD_MODERATE = "Moderate hazard potential - NOHD < 3 m"
HAZARD_HIGH = "High hazard potential - NOHD < 100 m"
HAZARD_VERY_HIGH = "Very high hazard potential - NOHD ≥ 100 m"


@dataclass(frozen=True)
class NohdResult:
    nohd_m: float
    mpe_w_cm2: float
    beam_diameter_at_nohd_mm: float
    irradiance_at_nohd_w_cm2: float
    hazard_class: str
    initial_power_density_w_cm2: float
    steps: list[str] = field(default_factory=list)


def hazard_class_for(nohd_m: float) -> str:
    if math.isinf(nohd_m):
        return HAZARD_COLLIMATED
    if nohd_m < 0.1:
        return HAZARD_LOW
    if nohd_m < 3:
        return HAZARD_MODERATE
    if nohd_m < 100:
        return HAZARD_HIGH
    return HAZARD_VERY_HIGH


def calculate_nohd(
    power_mw: float,
    beam_diameter_mm: float,
    divergence_mrad: float,
    wavelength_nm: float,
    exposure_time_s: float,
) -> NohdResult:
    """
    Nominal ocular hazard distance for a CW beam.

    NOHD = (sqrt(4P / (pi * MPE)) - D0) / phi, clamped at 0.
    """
    p_mw = as_positive(power_mw, "power_mw")
    d0_mm = as_positive(beam_diameter_mm, "beam_diameter_mm")
    phi_mrad = as_non_negative(divergence_mrad, "divergence_mrad")
    wl = as_finite(wavelength_nm, "wavelength_nm")
    t = as_positive(exposure_time_s, "exposure_time_s")

    mpe = comprehensive_mpe(wl, t, laser_type="continuous")
    # radiant exposure limits become an irradiance over the exposure time
    mpe_w_cm2 = mpe.critical_mpe / t if is_energy_unit(mpe.critical_unit) else mpe.critical_mpe
    if mpe_w_cm2 <= 0:
        raise ValueError(f"no MPE defined for {wl:g} nm at {t:g} s")

    power_w = p_mw * MW_TO_W
    d0_m = d0_mm * MM_TO_M
    phi_rad = phi_mrad * MRAD_TO_RAD
    mpe_w_m2 = mpe_w_cm2 * M2_TO_CM2

    steps = [
        f"Laser power (P): {p_mw:g} mW = {power_w:.3e} W",
        f"Beam diameter at aperture (D0): {d0_mm:g} mm = {d0_m:.3e} m",
        f"Beam divergence (phi): {phi_mrad:g} mrad = {phi_rad:.3e} rad",
        f"Wavelength: {wl:g} nm",
        f"Exposure time for MPE: {t:g} s",
        f"MPE: {mpe.critical_mpe:.3e} {mpe.critical_unit} -> {mpe_w_cm2:.3e} W/cm² = {mpe_w_m2:.3e} W/m²",
    ]

    if phi_rad > 0:
        term = 4.0 * power_w / (math.pi * mpe_w_m2)
        root = math.sqrt(term)
        nohd_m = max(0.0, (root - d0_m) / phi_rad)
        steps.append(f"4P / (pi x MPE) = {term:.3e} m²")
        steps.append(f"NOHD = ({root:.3e} - {d0_m:.3e}) / {phi_rad:.3e} = {nohd_m:.3f} m")
    else:
        initial_w_m2 = power_w / (math.pi * (d0_m / 2.0) ** 2)
        nohd_m = math.inf if initial_w_m2 > mpe_w_m2 else 0.0
        steps.append(f"Collimated beam: initial irradiance {initial_w_m2:.3e} W/m², NOHD = {nohd_m} m")

    initial_w_cm2 = power_w / beam_area_cm2(d0_mm)
    if math.isinf(nohd_m):
        diameter_at_nohd_mm = math.inf
        irradiance_at_nohd = 0.0
    else:
        diameter_at_nohd_m = d0_m + nohd_m * phi_rad
        irradiance_at_nohd = power_w / (math.pi * (diameter_at_nohd_m / 2.0) ** 2) / M2_TO_CM2
        diameter_at_nohd_mm = diameter_at_nohd_m / MM_TO_M
        steps.append(f"Beam diameter at NOHD: {diameter_at_nohd_mm:.1f} mm")
        steps.append(f"Irradiance at NOHD: {irradiance_at_nohd:.3e} W/cm²")

    hazard = hazard_class_for(nohd_m)
    steps.append(f"Hazard perception: {hazard}")
    log.info("NOHD %g nm, %g mW: %.3f m", wl, p_mw, nohd_m)

    return NohdResult(
        nohd_m=nohd_m,
        mpe_w_cm2=mpe_w_cm2,
        beam_diameter_at_nohd_mm=diameter_at_nohd_mm,
        irradiance_at_nohd_w_cm2=irradiance_at_nohd,
        hazard_class=hazard,
        initial_power_density_w_cm2=initial_w_cm2,
        steps=steps,
    )
