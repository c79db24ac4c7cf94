"""
C5 correction for repetitively pulsed lasers (IEC 60825-1:2014).

c5_factor: классификация, N импульсов за окно T2 (или время воздействия).
c5_factor_iso: расчёт MPE, импульсы внутри Ti считаются одним.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

from .checks import as_finite, as_non_negative
from .correction_factors import DEFAULT_ANGULAR_SUBTENSE_MRAD, time_base_ti
from .units import NS_TO_S

log = logging.getLogger("elv_core.pulse")

C5_MIN = 0.4
LONG_PULSE_S = 0.25
SHORT_EXPOSURE_S = 0.25
MANY_PULSES_SHORT = 600
MANY_PULSES_LONG = 40


@dataclass(frozen=True)
class C5Result:
    c5: float
    number_of_pulses: int
    time_base: float
    pulse_grouping: str
    steps: list[str] = field(default_factory=list)


def c5_factor(
    wavelength_nm: float,
    pulse_width_ns: float,
    repetition_rate_hz: float,
    exposure_time_s: float,
    angular_subtense_mrad: float = DEFAULT_ANGULAR_SUBTENSE_MRAD,
    number_of_pulses: int | None = None,
) -> C5Result:
    """
    C5 for classification (pulse width in ns).

    N = floor(t * PRF) unless given. Short pulses (<= Ti) follow the 600-pulse rule,
    longer pulses the angular subtense rule.
    """
    wl = as_finite(wavelength_nm, "wavelength_nm")
    pw_ns = as_non_negative(pulse_width_ns, "pulse_width_ns")
    prf = as_non_negative(repetition_rate_hz, "repetition_rate_hz")
    t = as_non_negative(exposure_time_s, "exposure_time_s")
    alpha = as_finite(angular_subtense_mrad, "angular_subtense_mrad")

    pw_s = pw_ns * NS_TO_S
    ti = time_base_ti(wl)
    steps = [
        f"Wavelength: {wl:g} nm",
        f"Pulse width: {pw_ns:g} ns = {pw_s:.3e} s",
        f"Repetition rate: {prf:g} Hz",
        f"Exposure time: {t:g} s",
        f"Angular subtense: {alpha:g} mrad",
        f"Time base Ti for {wl:g} nm: {ti:.3e} s",
    ]

    n = number_of_pulses
    if n is None or n <= 0:
        n = math.floor(t * prf)
    steps.append(f"Number of pulses in exposure time: N = {n}")

    if pw_s >= LONG_PULSE_S:
        steps.append(f"Pulse width ({pw_s:.3f} s) >= 0.25 s: C5 = 1.0 (not applicable for long pulses)")
        return C5Result(1.0, n, ti, "Long pulse (>=0.25s) - C5 not applicable", steps)

    if n <= 1:
        steps.append("Single pulse (N <= 1): C5 = 1.0")
        return C5Result(1.0, n, ti, "Single pulse", steps)

    if pw_s <= ti:
        steps.append(f"Pulse duration ({pw_s:.3e} s) <= Ti ({ti:.3e} s)")
        if t <= SHORT_EXPOSURE_S:
            c5 = 1.0
            grouping = "Short exposure time (<=0.25s)"
            steps.append(f"Exposure time ({t:g} s) <= 0.25 s: C5 = 1.0")
        elif n <= MANY_PULSES_SHORT:
            c5 = 1.0
            grouping = "Few pulses (N<=600)"
            steps.append(f"N ({n}) <= 600: C5 = 1.0")
        else:
            raw = 5.0 * n**-0.25
            c5 = max(C5_MIN, raw)
            grouping = "Many pulses (N>600) with C5 = 5*N^(-0.25)"
            steps.append(f"N ({n}) > 600: C5 = max(0.4, 5 x N^(-0.25)) = max(0.4, {raw:.4f}) = {c5:.4f}")
    else:
        steps.append(f"Pulse duration ({pw_s:.3e} s) > Ti ({ti:.3e} s)")
        if alpha <= 1.5:
            c5 = 1.0
            grouping = "Small angular subtense (<=1.5 mrad)"
            steps.append(f"Angular subtense ({alpha:g} mrad) <= 1.5 mrad: C5 = 1.0")
        elif alpha <= 100:
            if n <= MANY_PULSES_LONG:
                c5 = 1.0
                grouping = "Medium angular subtense, few pulses"
                steps.append("1.5 mrad < alpha <= 100 mrad, N <= 40: C5 = 1.0")
            else:
                c5 = max(C5_MIN, n**-0.25)
                grouping = "Medium angular subtense, many pulses"
                steps.append(f"1.5 mrad < alpha <= 100 mrad, N > 40: C5 = max(0.4, N^(-0.25)) = {c5:.4f}")
        else:
            c5 = 1.0
            grouping = "Large angular subtense (>100 mrad)"
            steps.append(f"Angular subtense ({alpha:g} mrad) > 100 mrad: C5 = 1.0")

    steps.append(f"Final C5 factor: {c5:.4f}")
    log.debug("C5=%.4f for %g nm, N=%d (%s)", c5, wl, n, grouping)
    return C5Result(c5, n, ti, grouping, steps)


def c5_factor_iso(
    wavelength_nm: float,
    pulse_width_s: float,
    repetition_rate_hz: float,
    exposure_time_s: float,
    angular_subtense_mrad: float = DEFAULT_ANGULAR_SUBTENSE_MRAD,
) -> C5Result:
    """C5 for the MPE path (Annex A.3): pulse width in seconds, pulses within Ti grouped."""
    wl = as_finite(wavelength_nm, "wavelength_nm")
    pw_s = as_non_negative(pulse_width_s, "pulse_width_s")
    prf = as_non_negative(repetition_rate_hz, "repetition_rate_hz")
    t = as_non_negative(exposure_time_s, "exposure_time_s")
    alpha = as_finite(angular_subtense_mrad, "angular_subtense_mrad")

    ti = time_base_ti(wl)
    steps = [
        "C5 calculation per Section A.3:",
        f"Wavelength: {wl:g} nm",
        f"Pulse width: {pw_s:.3e} s",
        f"Repetition rate: {prf:g} Hz",
        f"Exposure time: {t:g} s",
        f"Angular subtense: {alpha:g} mrad",
        f"Ti (Table 2): {ti:.3e} s",
    ]

    n = math.floor(t * prf)
    if prf > 0:
        pulses_in_ti = math.floor(ti * prf)
        if pulses_in_ti > 1:
            n = math.ceil(n / pulses_in_ti)
            steps.append(f"Multiple pulses within Ti counted as single pulse. Effective N = {n}")
    steps.append(f"Number of pulses N = {n}")

    if pw_s < ti:
        steps.append(f"Pulse duration ({pw_s:.3e} s) < Ti")
        if t <= SHORT_EXPOSURE_S:
            c5 = 1.0
            grouping = "Short exposure (<=0.25s)"
            steps.append("Maximum anticipated exposure <= 0.25 s: C5 = 1.0")
        elif n <= MANY_PULSES_SHORT:
            c5 = 1.0
            grouping = "Few pulses (N<=600)"
            steps.append("N <= 600: C5 = 1.0")
        else:
            raw = 5.0 * n**-0.25
            c5 = max(C5_MIN, raw)
            grouping = "Many pulses (N>600)"
            steps.append(f"N > 600: C5 = max(0.4, {raw:.4f}) = {c5:.4f}")
    else:
        steps.append(f"Pulse duration ({pw_s:.3e} s) >= Ti")
        if alpha <= 5:
            c5 = 1.0
            grouping = "Small source (alpha<=5 mrad)"
            steps.append("alpha <= 5 mrad: C5 = 1.0")
        elif alpha <= 100:
            if n <= MANY_PULSES_LONG:
                c5 = n**-0.25 if n > 0 else 1.0
                grouping = "Medium source, few pulses"
                steps.append(f"5 < alpha <= 100 mrad, N <= 40: C5 = N^(-0.25) = {c5:.4f}")
            else:
                c5 = C5_MIN
                grouping = "Medium source, many pulses"
                steps.append("5 < alpha <= 100 mrad, N > 40: C5 = 0.4")
        else:
            c5 = 1.0
            grouping = "Large source (alpha>100 mrad)"
            steps.append("alpha > 100 mrad: C5 = 1.0")

    steps.append(f"Final C5 = {c5:.4f} ({grouping})")
    return C5Result(c5, n, ti, grouping, steps)
