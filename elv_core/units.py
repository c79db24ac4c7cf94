"""
Unit conversion constants and small geometry helpers shared by the laser calculators.

Внутри ядра: длины волн в нм, время в с, апертуры в мм, площади в м² (если не указано иное).
"""

from __future__ import annotations

import math
from dataclasses import dataclass

MJ_TO_J = 1e-3
UJ_TO_J = 1e-6
MW_TO_W = 1e-3
CM2_TO_M2 = 1e-4
M2_TO_CM2 = 1e4
MM_TO_CM = 0.1
MM_TO_M = 1e-3
MM2_TO_M2 = 1e-6
MRAD_TO_RAD = 1e-3
NS_TO_S = 1e-9

# IEC 60825-1 scope: 180 nm .. 1 mm
WAVELENGTH_MIN_NM = 180.0
WAVELENGTH_MAX_NM = 1e6

UNIT_W = "W"
UNIT_J = "J"
UNIT_W_M2 = "W/m²"
UNIT_J_M2 = "J/m²"
UNIT_NA = "N/A"


def is_energy_unit(unit: str) -> bool:
    return "J" in unit


def is_area_unit(unit: str) -> bool:
    return "/m²" in unit or "/cm²" in unit


def in_iec_scope(wavelength_nm: float) -> bool:
    return WAVELENGTH_MIN_NM <= wavelength_nm <= WAVELENGTH_MAX_NM


def wavelength_region(wavelength_nm: float) -> str:
    if 180 <= wavelength_nm < 400:
        return "UV"
    if 400 <= wavelength_nm < 700:
        return "Visible"
    if 700 <= wavelength_nm < 1400:
        return "Near-IR"
    if 1400 <= wavelength_nm < 10600:
        return "IR-B/C"
    return "Far-IR"


def aperture_area_m2(aperture_mm: float) -> float:
    if aperture_mm <= 0:
        return 0.0
    radius_m = aperture_mm * MM_TO_M / 2.0
    return math.pi * radius_m * radius_m


def beam_area_cm2(beam_diameter_mm: float) -> float:
    radius_cm = beam_diameter_mm * MM_TO_CM / 2.0
    return math.pi * radius_cm * radius_cm


@dataclass(frozen=True)
class Irradiance:
    value: float
    unit: str
    aperture_area_m2: float


def irradiance(power_or_energy: float, aperture_mm: float, *, is_energy: bool = False) -> Irradiance:
    unit = UNIT_J_M2 if is_energy else UNIT_W_M2
    area = aperture_area_m2(aperture_mm)
    if area <= 0.0:
        return Irradiance(value=0.0, unit=unit, aperture_area_m2=0.0)
    return Irradiance(value=power_or_energy / area, unit=unit, aperture_area_m2=area)
