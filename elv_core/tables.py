"""
pandas views over calculator input and results.

Batch input comes in as a DataFrame of wavelength rows; result records go out
as DataFrames ready for display or export.
"""

from __future__ import annotations

import pandas as pd

from .classification import ClassificationResult, WavelengthData
from .fiber_budget import FiberBudgetResult
from .tv_signal import SignalResult

WAVELENGTH_COLUMNS = [
    "id",
    "wavelength_nm",
    "laser_type",
    "power",
    "power_unit",
    "pulse_width_ns",
    "repetition_rate_hz",
    "beam_divergence_mrad",
    "is_active",
]

_DEFAULTS = WavelengthData(id="", wavelength_nm=0.0)


def normalize_wavelength_frame(df: pd.DataFrame) -> pd.DataFrame:
    """Coerce types, fill defaults for optional columns and keep the known columns in order."""
    out = df.copy()
    if "id" not in out.columns:
        out["id"] = [f"wl-{i + 1}" for i in range(len(out))]
    out["id"] = out["id"].where(out["id"].notna(), None)
    out["id"] = out["id"].astype(str).replace({"None": ""})

    for col in ("laser_type", "power_unit"):
        if col not in out.columns:
            out[col] = getattr(_DEFAULTS, col)
        out[col] = out[col].where(out[col].notna(), getattr(_DEFAULTS, col))
        out[col] = out[col].astype(str).str.strip()
    out["laser_type"] = out["laser_type"].str.lower()

    for col in ("wavelength_nm", "power", "pulse_width_ns", "repetition_rate_hz", "beam_divergence_mrad"):
        if col not in out.columns:
            out[col] = getattr(_DEFAULTS, col)
        out[col] = pd.to_numeric(out[col], errors="coerce")
    for col in ("power", "pulse_width_ns", "repetition_rate_hz", "beam_divergence_mrad"):
        out[col] = out[col].fillna(getattr(_DEFAULTS, col))

    if "is_active" not in out.columns:
        out["is_active"] = True
    out["is_active"] = out["is_active"].where(out["is_active"].notna(), True).astype(bool)

    return out[WAVELENGTH_COLUMNS].reset_index(drop=True)


def wavelengths_from_frame(df: pd.DataFrame) -> list[WavelengthData]:
    """Rows without a numeric wavelength are dropped; run validate_wavelength_rows first to report them."""
    norm = normalize_wavelength_frame(df)
    rows: list[WavelengthData] = []
    for idx, row in norm.iterrows():
        if pd.isna(row["wavelength_nm"]):
            continue
        rows.append(
            WavelengthData(
                id=row["id"] or f"wl-{idx + 1}",
                wavelength_nm=float(row["wavelength_nm"]),
                laser_type=row["laser_type"],
                power=float(row["power"]),
                power_unit=row["power_unit"],
                pulse_width_ns=float(row["pulse_width_ns"]),
                repetition_rate_hz=float(row["repetition_rate_hz"]),
                beam_divergence_mrad=float(row["beam_divergence_mrad"]),
                is_active=bool(row["is_active"]),
            )
        )
    return rows


def steps_frame(steps: list[str]) -> pd.DataFrame:
    return pd.DataFrame({"step": range(1, len(steps) + 1), "text": list(steps)})


def class_tests_frame(result: ClassificationResult) -> pd.DataFrame:
    rows = [
        {
            "class": test.class_name,
            "time_base_s": test.time_base_s,
            "ael": test.ael.value,
            "ael_unit": test.ael.unit,
            "condition1_applied": test.condition1_applied,
            "condition1_ratio": test.condition1_ratio,
            "condition3_ratio": test.condition3_ratio,
            "pass": test.both_pass,
        }
        for test in result.class_tests
    ]
    return pd.DataFrame(
        rows,
        columns=[
            "class",
            "time_base_s",
            "ael",
            "ael_unit",
            "condition1_applied",
            "condition1_ratio",
            "condition3_ratio",
            "pass",
        ],
    )


def additive_ratios_frame(result: ClassificationResult) -> pd.DataFrame:
    """Sum of ratios per tested class for an additive classification (empty otherwise)."""
    columns = ["class", "condition1_sum", "condition3_sum", "pass"]
    if result.additive is None:
        return pd.DataFrame(columns=columns)
    rows = [
        {"class": name, "condition1_sum": s1, "condition3_sum": s3, "pass": s1 <= 1.0 and s3 <= 1.0}
        for name, (s1, s3) in result.additive.class_sums.items()
    ]
    return pd.DataFrame(rows, columns=columns)


def fiber_losses_frame(result: FiberBudgetResult) -> pd.DataFrame:
    rows = [
        ("Fiber", result.fiber_loss),
        ("Connectors", result.connector_loss),
        ("Fusion splices", result.splice_loss),
        ("Mechanical joints", result.mechanical_joint_loss),
        ("Patch panels", result.patch_panel_loss),
        ("Bends", result.bend_loss),
        ("Splitters", result.splitter_loss),
        ("Safety margin", result.safety_margin),
    ]
    df = pd.DataFrame(rows, columns=["element", "loss_db"])
    total = pd.DataFrame([("Total", result.total_loss)], columns=["element", "loss_db"])
    return pd.concat([df, total], ignore_index=True)


def signal_levels_frame(result: SignalResult) -> pd.DataFrame:
    rows = [
        {
            "id": lvl.id,
            "type": lvl.type,
            "label": lvl.label,
            "change_db": lvl.change_db,
            "level_dbuv": lvl.level_dbuv,
            "outlet_dbuv": lvl.outlet_dbuv,
        }
        for lvl in result.levels
    ]
    df = pd.DataFrame(rows, columns=["id", "type", "label", "change_db", "level_dbuv", "outlet_dbuv"])
    outlet = pd.DataFrame(
        [
            {
                "id": "outlet",
                "type": "outlet",
                "label": "Outlet",
                "change_db": -result.outlet_path_loss_db,
                "level_dbuv": result.final_dbuv,
                "outlet_dbuv": result.final_dbuv,
            }
        ]
    )
    return pd.concat([df, outlet], ignore_index=True)
