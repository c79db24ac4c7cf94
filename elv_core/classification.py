"""
Laser product classification per IEC 60825-1:2014.

Порядок проверки: Class 1 -> 1M -> 2 -> 2M -> 3R -> 3B -> 4.
Каждый класс проверяется по двум условиям измерения (condition 1 / condition 3),
для 3R и 3B дополнительно проверяются предпосылки (превышение нижних классов).
Несколько длин волн: аддитивно (сумма отношений) или независимо (наивысший класс).
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Iterable

from .ael import (
    CLASS_1,
    CLASS_1M,
    CLASS_2,
    CLASS_2M,
    CLASS_3B,
    CLASS_3R,
    CLASS_4,
    AelResult,
    ael_for_class,
    assess_pulsed_ael,
    class1_ael,
    class3b_ael,
)
from .checks import as_finite, as_non_negative, as_positive
from .correction_factors import (
    DEFAULT_ANGULAR_SUBTENSE_MRAD,
    TIME_BASE_BLINK_S,
    TIME_BASE_GENERAL_S,
    classification_time_base,
    condition1_applies,
    correction_factors,
    measurement_conditions,
    requires_class_m,
    supports_class_2,
)
from .pulse import C5Result, c5_factor
from .units import MW_TO_W, NS_TO_S, UNIT_J, UNIT_W, in_iec_scope, irradiance, is_area_unit, is_energy_unit

log = logging.getLogger("elv_core.classification")

LASER_CONTINUOUS = "continuous"
LASER_PULSED = "pulsed"
POWER_UNIT_MW = "mW"
POWER_UNIT_J = "J"

METHOD_SINGLE = "single"
METHOD_ADDITIVE = "additive"
METHOD_INDEPENDENT = "independent"

ADDITIVE_GROUPS: tuple[tuple[str, float, float], ...] = (
    ("Visible Thermal (400-700 nm)", 400.0, 700.0),
    ("Retinal Broad (400-1400 nm)", 400.0, 1400.0),
    ("Lens Damage (380-1400 nm)", 380.0, 1400.0),
    ("UV Photochemical (200-400 nm)", 200.0, 400.0),
)

CLASS_RANK = {
    CLASS_1: 1,
    CLASS_1M: 2,
    CLASS_2: 3,
    CLASS_2M: 4,
    CLASS_3R: 5,
    CLASS_3B: 6,
    CLASS_4: 7,
}

ADDITIVE_CLASS_4_RATIO = 999.0

CLASS_DESCRIPTIONS = {
    CLASS_1: "Safe under all conditions of normal use (IEC 60825-1:2014)",
    CLASS_1M: "Safe for unaided eye, hazardous with optical instruments (IEC 60825-1:2014)",
    CLASS_2: "Safe due to blink reflex protection (IEC 60825-1:2014)",
    CLASS_2M: "Safe for unaided eye due to blink reflex, hazardous with optical instruments (IEC 60825-1:2014)",
    CLASS_3R: "Low risk but potentially hazardous for direct viewing (IEC 60825-1:2014)",
    CLASS_3B: "Direct viewing hazardous, diffuse reflections normally safe (IEC 60825-1:2014)",
    CLASS_4: "Eye and skin hazard, fire hazard, hazardous diffuse reflections (IEC 60825-1:2014)",
}

SAFETY_REQUIREMENTS = {
    CLASS_1: ["No special safety measures required", "Eye-safe under all conditions"],
    CLASS_1M: [
        "Warning label required",
        "Do not view with optical instruments",
        "Safe for unaided eye viewing",
    ],
    CLASS_2: ["Warning label required", "Do not stare into beam", "Blink reflex provides protection"],
    CLASS_2M: [
        "Warning label required",
        "Do not view with optical instruments",
        "Blink reflex protects unaided eye",
    ],
    CLASS_3R: [
        "Warning label required",
        "Avoid direct eye exposure",
        "Use with caution",
        "Safety training recommended",
    ],
    CLASS_3B: [
        "Warning and aperture labels required",
        "Eye protection in hazard zone",
        "Controlled area required",
        "Safety interlocks required",
        "Laser safety officer required",
    ],
    CLASS_4: [
        "All Class 3B requirements plus:",
        "Skin protection may be required",
        "Fire prevention measures",
        "Emergency procedures required",
        "Extensive safety training mandatory",
    ],
}


def class_description(laser_class: str) -> str:
    return CLASS_DESCRIPTIONS.get(laser_class, "Unknown classification")


def safety_requirements(laser_class: str) -> list[str]:
    return list(SAFETY_REQUIREMENTS.get(laser_class, ["Classification-specific requirements apply"]))


@dataclass(frozen=True)
class WavelengthData:
    id: str
    wavelength_nm: float
    laser_type: str = LASER_CONTINUOUS
    power: float = 1.0  # mW, or J when power_unit == "J"
    power_unit: str = POWER_UNIT_MW
    pulse_width_ns: float = 10.0
    repetition_rate_hz: float = 1000.0  # 0 = single pulse
    beam_divergence_mrad: float = DEFAULT_ANGULAR_SUBTENSE_MRAD
    is_active: bool = True


@dataclass(frozen=True)
class ManualPowers:
    """Measured powers (W) through the condition 1 and condition 3 apertures."""

    condition1_w: float
    condition3_w: float


@dataclass(frozen=True)
class Emission:
    emission: float
    unit: str
    condition1: float
    condition3: float
    condition1_unit: str
    condition3_unit: str
    steps: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class EmissionComparison:
    passes: bool
    ratio: float
    details: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ClassTest:
    class_name: str
    time_base_s: float
    ael: AelResult
    condition1_applied: bool
    condition1_pass: bool
    condition3_pass: bool
    condition1_ratio: float
    condition3_ratio: float

    @property
    def both_pass(self) -> bool:
        return self.condition1_pass and self.condition3_pass


@dataclass(frozen=True)
class AdditiveDetails:
    group: str
    wavelengths_nm: list[float]
    ratios: list[float]
    sum_of_ratios: float
    class_sums: dict[str, tuple[float, float]] = field(default_factory=dict)


@dataclass(frozen=True)
class ClassificationResult:
    laser_class: str
    method: str
    ael: float
    ael_unit: str
    emission: float
    emission_unit: str
    ratio: float
    description: str
    safety_requirements: list[str]
    condition1_pass: bool
    condition3_pass: bool
    requires_class_m: bool
    class_tests: list[ClassTest] = field(default_factory=list)
    c5: C5Result | None = None
    additive: AdditiveDetails | None = None
    individual: list["ClassificationResult"] = field(default_factory=list)
    steps: list[str] = field(default_factory=list)


# ---------------------------------------------------------------- emission


def pulse_energy_j(wl: WavelengthData) -> float:
    """
    Energy per pulse: P (mW -> W) x pulse width (ns -> s). CW rows give 0.

    1 mW x 1 ns = 1 pJ. This intentionally differs from the legacy web calculator,
    which reported mW x ns x 1e-6 as mJ (1000x too high).
    """
    if wl.laser_type != LASER_PULSED:
        return 0.0
    return wl.power * MW_TO_W * wl.pulse_width_ns * NS_TO_S


def emission_for(wl: WavelengthData, manual_powers: ManualPowers | None = None) -> Emission:
    steps: list[str] = []
    if manual_powers is not None:
        c1 = as_non_negative(manual_powers.condition1_w, "condition1_w")
        c3 = as_non_negative(manual_powers.condition3_w, "condition3_w")
        steps.append("Manual power input mode:")
        steps.append(f"Condition 1 emission: {c1:.3e} W")
        steps.append(f"Condition 3 emission: {c3:.3e} W")
        return Emission(max(c1, c3), UNIT_W, c1, c3, UNIT_W, UNIT_W, steps)

    if wl.laser_type == LASER_CONTINUOUS:
        if wl.power_unit == POWER_UNIT_MW:
            value, unit = wl.power * MW_TO_W, UNIT_W
        else:
            value, unit = float(wl.power), UNIT_J
        steps.append("Continuous Wave (CW) laser:")
        steps.append(f"Input: {wl.power:g} {wl.power_unit}")
    else:
        energy = pulse_energy_j(wl)
        steps.append("Pulsed laser:")
        steps.append(
            f"Pulse energy: {wl.power:g} mW x {wl.pulse_width_ns:g} ns = {energy:.3e} J"
        )
        if wl.power_unit == POWER_UNIT_J:
            value = float(wl.power)
            steps.append(f"Using energy input: {wl.power:g} J")
        else:
            value = energy
        unit = UNIT_J

    steps.append(f"Final emission: {value:.3e} {unit}")
    return Emission(value, unit, value, value, unit, unit, steps)


def compare_emission(
    emission: float, emission_unit: str, ael: AelResult, aperture_mm: float
) -> EmissionComparison:
    """Emission vs AEL; area-based AELs are compared as irradiance over the aperture."""
    details: list[str] = []

    if is_area_unit(ael.unit):
        if aperture_mm <= 0:
            details.append(f"AEL has irradiance units ({ael.unit}) but aperture diameter is 0 mm")
            return EmissionComparison(False, math.inf, details)
        irr = irradiance(emission, aperture_mm, is_energy=is_energy_unit(ael.unit))
        ratio = irr.value / ael.value if ael.value > 0 else math.inf
        passes = irr.value <= ael.value
        details.append(f"Aperture {aperture_mm:g} mm, area {irr.aperture_area_m2:.3e} m²")
        details.append(f"Irradiance {irr.value:.3e} {irr.unit} vs AEL {ael.value:.3e} {ael.unit}")
        details.append(f"Ratio: {ratio:.4f}")
        return EmissionComparison(passes, ratio, details)

    if is_energy_unit(emission_unit) != is_energy_unit(ael.unit):
        details.append(f"Unit mismatch: emission ({emission_unit}) vs AEL ({ael.unit})")
        return EmissionComparison(False, math.nan, details)

    ratio = emission / ael.value if ael.value > 0 else math.inf
    passes = emission <= ael.value
    details.append(f"Emission {emission:.3e} {emission_unit} vs AEL {ael.value:.3e} {ael.unit}")
    details.append(f"Ratio: {ratio:.4f}")
    return EmissionComparison(passes, ratio, details)


# ---------------------------------------------------------------- single wavelength


def _c5_for_classification(
    wavelength_nm: float,
    exposure_time_s: float,
    pulse_width_ns: float | None,
    repetition_rate_hz: float | None,
    divergence_mrad: float,
    steps: list[str],
) -> C5Result | None:
    if not pulse_width_ns or repetition_rate_hz is None:
        return None
    if repetition_rate_hz == 0:
        steps.append("Single pulse operation (repetition rate = 0 Hz): C5 = 1.0")
        return None

    # C5 is evaluated over the T2 window, not the exposure time
    t2 = correction_factors(wavelength_nm, exposure_time_s, divergence_mrad).t2
    n = math.floor(t2 * repetition_rate_hz)
    steps.append(f"Using T2 = {t2:g} s for C5 calculation")
    if n <= 1:
        steps.append(f"Single pulse in T2 window (N={n}): C5 = 1.0")
        return None
    details = c5_factor(wavelength_nm, pulse_width_ns, repetition_rate_hz, t2, divergence_mrad)
    steps.extend(f"  {s}" for s in details.steps)
    return details


def classify_single(
    wavelength_nm: float,
    emission: float,
    emission_unit: str,
    exposure_time_s: float,
    beam_diameter_mm: float = 7.0,
    laser_type: str = LASER_CONTINUOUS,
    pulse_width_ns: float | None = None,
    repetition_rate_hz: float | None = None,
    beam_divergence_mrad: float | None = None,
    manual_powers: ManualPowers | None = None,
) -> ClassificationResult:
    wl = as_finite(wavelength_nm, "wavelength_nm")
    emission = as_non_negative(emission, "emission")
    t = as_positive(exposure_time_s, "exposure_time_s")
    diameter = as_non_negative(beam_diameter_mm, "beam_diameter_mm")
    if laser_type not in (LASER_CONTINUOUS, LASER_PULSED):
        raise ValueError(f"laser_type must be '{LASER_CONTINUOUS}' or '{LASER_PULSED}'")
    divergence = DEFAULT_ANGULAR_SUBTENSE_MRAD if beam_divergence_mrad is None else beam_divergence_mrad

    steps = [
        f"Wavelength: {wl:g} nm",
        f"Laser type: {laser_type.upper()}",
        f"Emission: {emission:.3e} {emission_unit}",
        f"Beam diameter: {diameter:g} mm",
        f"Exposure time: {t:g} s",
        f"Beam divergence: {divergence:g} mrad",
    ]

    # 1) scope
    if not in_iec_scope(wl):
        raise ValueError(f"wavelength_nm {wl:g} is outside IEC 60825-1 scope (180 nm - 1 mm)")

    # 2) C5
    c5_details = None
    if laser_type == LASER_PULSED:
        c5_details = _c5_for_classification(wl, t, pulse_width_ns, repetition_rate_hz, divergence, steps)
    c5 = c5_details.c5 if c5_details is not None else 1.0

    # 3) measurement conditions
    conditions = measurement_conditions(wl, t)
    c1_applied = condition1_applies(wl)
    ap1 = conditions.condition1.aperture_mm
    ap3 = conditions.condition3.aperture_mm
    if c1_applied:
        steps.append(f"Condition 1: aperture {ap1:.1f} mm at {conditions.condition1.distance_mm:g} mm")
    else:
        steps.append("Condition 1: not applied (wavelength exemption)")
    steps.append(f"Condition 3: aperture {ap3:.1f} mm at {conditions.condition3.distance_mm:g} mm")

    if manual_powers is not None:
        em1, em3 = manual_powers.condition1_w, manual_powers.condition3_w
        unit1 = unit3 = UNIT_W
    else:
        em1 = em3 = emission
        unit1 = unit3 = emission_unit

    pulsed = (
        laser_type == LASER_PULSED
        and repetition_rate_hz is not None
        and repetition_rate_hz >= 0
        and bool(pulse_width_ns)
    )
    tests: list[ClassTest] = []

    def run_test(class_name: str, time_base: float) -> ClassTest:
        steps.append(f"--- Testing {class_name} (time base {time_base:g} s) ---")
        if pulsed:
            # single pulse rows are assessed at 1 Hz
            prf = repetition_rate_hz or 1.0
            assessment = assess_pulsed_ael(class_name, wl, time_base, prf, c5, pulse_width_ns)
            steps.extend(f"  {s}" for s in assessment.steps)
            ael = AelResult(assessment.most_restrictive, UNIT_J)
        else:
            ael = ael_for_class(class_name, wl, time_base, c5)
            steps.append(f"{class_name} AEL = {ael.value:.3e} {ael.unit}")

        c1_pass, c1_ratio = True, 0.0
        if c1_applied:
            cmp1 = compare_emission(em1, unit1, ael, ap1)
            c1_pass, c1_ratio = cmp1.passes, cmp1.ratio
            steps.append(f"Condition 1: {', '.join(cmp1.details)} - {'PASS' if c1_pass else 'FAIL'}")
        cmp3 = compare_emission(em3, unit3, ael, ap3)
        steps.append(f"Condition 3: {', '.join(cmp3.details)} - {'PASS' if cmp3.passes else 'FAIL'}")

        test = ClassTest(
            class_name=class_name,
            time_base_s=time_base,
            ael=ael,
            condition1_applied=c1_applied,
            condition1_pass=c1_pass,
            condition3_pass=cmp3.passes,
            condition1_ratio=c1_ratio,
            condition3_ratio=cmp3.ratio,
        )
        tests.append(test)
        return test

    def m_variant_applies(lower: ClassTest) -> bool:
        if not (c1_applied and requires_class_m(wl, diameter)):
            return False
        limit_3b = class3b_ael(wl, general_time_base, c5)
        within_3b = compare_emission(em1, unit1, limit_3b, ap1).passes
        steps.append(f"Class M check: condition 1 within Class 3B AEL ({limit_3b.value:.3e} {limit_3b.unit}): {within_3b}")
        return not lower.condition1_pass and lower.condition3_pass and within_3b

    def result(laser_class: str, test: ClassTest, c1: bool, c3: bool, class_m: bool) -> ClassificationResult:
        steps.append(f"RESULT: {laser_class}")
        ratio = emission / test.ael.value if test.ael.value > 0 else math.inf
        log.info("Classified %g nm (%s): %s", wl, laser_type, laser_class)
        return ClassificationResult(
            laser_class=laser_class,
            method=METHOD_SINGLE,
            ael=test.ael.value,
            ael_unit=test.ael.unit,
            emission=emission,
            emission_unit=emission_unit,
            ratio=ratio,
            description=class_description(laser_class),
            safety_requirements=safety_requirements(laser_class),
            condition1_pass=c1,
            condition3_pass=c3,
            requires_class_m=class_m,
            class_tests=tests,
            c5=c5_details,
            steps=steps,
        )

    # 4) Class 1 / 1M
    general_time_base = classification_time_base(wl)
    class1 = run_test(CLASS_1, general_time_base)
    if class1.both_pass:
        return result(CLASS_1, class1, class1.condition1_pass, class1.condition3_pass, False)
    if 302.5 <= wl <= 4000 and m_variant_applies(class1):
        return result(CLASS_1M, class1, False, True, True)

    # 5) Class 2 / 2M
    class2 = None
    if supports_class_2(wl):
        class2 = run_test(CLASS_2, TIME_BASE_BLINK_S)
        if class2.both_pass:
            return result(CLASS_2, class2, class2.condition1_pass, class2.condition3_pass, False)
        if m_variant_applies(class2):
            return result(CLASS_2M, class2, False, True, True)

    # 6) Class 3R
    time_base_3r = TIME_BASE_BLINK_S if 400 <= wl <= 700 else general_time_base
    class3r = run_test(CLASS_3R, time_base_3r)
    exceeds_lower = not class1.condition3_pass and not (class2 is not None and class2.condition3_pass)
    if class3r.both_pass:
        if exceeds_lower:
            return result(CLASS_3R, class3r, class3r.condition1_pass, class3r.condition3_pass, False)
        steps.append("Class 3R prerequisites not met: condition 3 does not exceed the lower class AEL")

    # 7) Class 3B
    class3b = run_test(CLASS_3B, general_time_base)
    if class3b.both_pass:
        exceeds_3r = not class3r.both_pass
        if exceeds_3r and exceeds_lower:
            return result(CLASS_3B, class3b, class3b.condition1_pass, class3b.condition3_pass, False)
        steps.append("Class 3B prerequisites not met")
    else:
        steps.append("Emission exceeds Class 3B AEL limits")

    # 8) Class 4
    return result(CLASS_4, class3b, False, False, False)


# ---------------------------------------------------------------- multiple wavelengths


def determine_additive_group(wavelengths_nm: Iterable[float]) -> str | None:
    values = list(wavelengths_nm)
    for name, lo, hi in ADDITIVE_GROUPS:
        if all(lo <= wl <= hi for wl in values):
            return name
    return None


def _c5_for_row(wl: WavelengthData, exposure_time_s: float) -> float:
    if wl.laser_type != LASER_PULSED or wl.repetition_rate_hz <= 0:
        return 1.0
    t2 = correction_factors(wl.wavelength_nm, exposure_time_s, wl.beam_divergence_mrad).t2
    if math.floor(t2 * wl.repetition_rate_hz) <= 1:
        return 1.0
    return c5_factor(wl.wavelength_nm, wl.pulse_width_ns, wl.repetition_rate_hz, t2).c5


def _total_emission(wavelengths: list[WavelengthData]) -> float:
    return sum(emission_for(wl).emission for wl in wavelengths)


def classify_additive(
    wavelengths: list[WavelengthData],
    exposure_time_s: float,
    beam_diameter_mm: float = 7.0,
    manual_powers: ManualPowers | None = None,
    group: str | None = None,
) -> ClassificationResult:
    """Sum-of-ratios test, sum over wavelengths of emission / AEL <= 1 on both conditions."""
    t = as_positive(exposure_time_s, "exposure_time_s")
    as_non_negative(beam_diameter_mm, "beam_diameter_mm")
    if not wavelengths:
        raise ValueError("wavelengths must not be empty")
    values = [as_finite(wl.wavelength_nm, "wavelength_nm") for wl in wavelengths]
    for value in values:
        if not in_iec_scope(value):
            raise ValueError(f"wavelength_nm {value:g} is outside IEC 60825-1 scope (180 nm - 1 mm)")
    group = group or determine_additive_group(values) or "Non-additive"

    steps = [
        f"Additive region: {group}",
        f"Number of wavelengths: {len(wavelengths)}",
        f"Exposure time: {t:g} s",
    ]
    conditions = measurement_conditions(values[0], t)
    ap1 = conditions.condition1.aperture_mm
    ap3 = conditions.condition3.aperture_mm

    c5_by_row = [_c5_for_row(wl, t) for wl in wavelengths]
    emissions = [emission_for(wl, manual_powers) for wl in wavelengths]
    class_sums: dict[str, tuple[float, float]] = {}

    for class_name in (CLASS_1, CLASS_2, CLASS_3R, CLASS_3B):
        steps.append(f"--- Testing {class_name} with additive rule ---")
        sum1 = sum3 = 0.0
        ratios: list[float] = []
        for i, (wl, em, c5) in enumerate(zip(wavelengths, emissions, c5_by_row), start=1):
            if class_name == CLASS_2 and not supports_class_2(wl.wavelength_nm):
                ael = class1_ael(wl.wavelength_nm, t, c5)
            else:
                ael = ael_for_class(class_name, wl.wavelength_nm, t, c5)
            r1 = compare_emission(em.condition1, em.condition1_unit, ael, ap1).ratio
            r3 = compare_emission(em.condition3, em.condition3_unit, ael, ap3).ratio
            ratios.append(max(r1, r3))
            sum1 += r1
            sum3 += r3
            steps.append(
                f"  λ{i} ({wl.wavelength_nm:g} nm): emission {em.emission:.3e} {em.unit}, "
                f"AEL {ael.value:.3e} {ael.unit}, ratios C1={r1:.4f} C3={r3:.4f}"
            )
        class_sums[class_name] = (sum1, sum3)
        steps.append(f"  Sum of ratios: condition 1 = {sum1:.4f}, condition 3 = {sum3:.4f}")

        if sum1 <= 1.0 and sum3 <= 1.0:
            steps.append(f"RESULT: {class_name} (additive classification)")
            return _additive_result(class_name, wavelengths, values, ratios, max(sum1, sum3), group, class_sums, steps)
        steps.append(f"  {class_name} additive test: FAIL (sum > 1.0)")

    steps.append("RESULT: Class 4 (additive classification)")
    return _additive_result(CLASS_4, wavelengths, values, [], ADDITIVE_CLASS_4_RATIO, group, class_sums, steps)


def _additive_result(
    laser_class: str,
    wavelengths: list[WavelengthData],
    values: list[float],
    ratios: list[float],
    sum_of_ratios: float,
    group: str,
    class_sums: dict[str, tuple[float, float]],
    steps: list[str],
) -> ClassificationResult:
    passes = sum_of_ratios <= 1.0
    log.info("Additive classification of %d wavelengths: %s", len(values), laser_class)
    return ClassificationResult(
        laser_class=laser_class,
        method=METHOD_ADDITIVE,
        ael=1.0,
        ael_unit="dimensionless",
        emission=_total_emission(wavelengths),
        emission_unit=UNIT_W,
        ratio=sum_of_ratios,
        description=class_description(laser_class),
        safety_requirements=safety_requirements(laser_class),
        condition1_pass=passes,
        condition3_pass=passes,
        requires_class_m=False,
        additive=AdditiveDetails(
            group=group,
            wavelengths_nm=values,
            ratios=ratios,
            sum_of_ratios=sum_of_ratios,
            class_sums=class_sums,
        ),
        steps=steps,
    )


def classify_independent(
    wavelengths: list[WavelengthData],
    exposure_time_s: float,
    beam_diameter_mm: float = 7.0,
    manual_powers: ManualPowers | None = None,
) -> ClassificationResult:
    """Classify each wavelength on its own and report the highest class.

    Class M flags stay on the individual results; the combined result never
    sets requires_class_m.
    """
    if not wavelengths:
        raise ValueError("wavelengths must not be empty")
    steps = [f"Independent classification of {len(wavelengths)} wavelengths"]
    highest = CLASS_1
    individual: list[ClassificationResult] = []

    for i, wl in enumerate(wavelengths, start=1):
        em = emission_for(wl, manual_powers)
        pulsed = wl.laser_type == LASER_PULSED
        res = classify_single(
            wl.wavelength_nm,
            em.emission,
            em.unit,
            exposure_time_s,
            beam_diameter_mm,
            wl.laser_type,
            wl.pulse_width_ns if pulsed else None,
            wl.repetition_rate_hz if pulsed else None,
            wl.beam_divergence_mrad,
            manual_powers,
        )
        individual.append(res)
        steps.append(f"Wavelength {i} ({wl.wavelength_nm:g} nm): {res.laser_class}")
        if CLASS_RANK[res.laser_class] > CLASS_RANK[highest]:
            highest = res.laser_class

    steps.append(f"RESULT: {highest} (highest individual class)")
    log.info("Independent classification of %d wavelengths: %s", len(wavelengths), highest)
    return ClassificationResult(
        laser_class=highest,
        method=METHOD_INDEPENDENT,
        ael=0.0,
        ael_unit=UNIT_W,
        emission=_total_emission(wavelengths),
        emission_unit=UNIT_W,
        ratio=0.0,
        description=class_description(highest),
        safety_requirements=safety_requirements(highest),
        condition1_pass=True,
        condition3_pass=True,
        requires_class_m=False,
        individual=individual,
        steps=steps,
    )


def auto_time_base(wavelengths: Iterable[WavelengthData]) -> float:
    active = [wl for wl in wavelengths if wl.is_active]
    if not active:
        return TIME_BASE_BLINK_S
    for wl in active:
        if wl.laser_type == LASER_PULSED and wl.repetition_rate_hz == 0:
            return wl.pulse_width_ns * NS_TO_S
    if len(active) == 1:
        return classification_time_base(active[0].wavelength_nm)
    return min([TIME_BASE_GENERAL_S] + [classification_time_base(wl.wavelength_nm) for wl in active])


def classify_wavelengths(
    wavelengths: Iterable[WavelengthData],
    exposure_time_s: float | None = None,
    beam_diameter_mm: float = 7.0,
    manual_powers: ManualPowers | None = None,
) -> ClassificationResult:
    rows = list(wavelengths)
    active = [wl for wl in rows if wl.is_active]
    if not active:
        raise ValueError("at least one active wavelength is required")
    t = auto_time_base(rows) if exposure_time_s is None else exposure_time_s

    if len(active) == 1:
        wl = active[0]
        em = emission_for(wl)
        pulsed = wl.laser_type == LASER_PULSED
        return classify_single(
            wl.wavelength_nm,
            em.emission,
            em.unit,
            t,
            beam_diameter_mm,
            wl.laser_type,
            wl.pulse_width_ns if pulsed else None,
            wl.repetition_rate_hz if pulsed else None,
            wl.beam_divergence_mrad,
            manual_powers,
        )

    group = determine_additive_group(wl.wavelength_nm for wl in active)
    if group is not None:
        return classify_additive(active, t, beam_diameter_mm, manual_powers, group)
    return classify_independent(active, t, beam_diameter_mm, manual_powers)
