"""
Optical fiber link power budget.

Потери: волокно (dB/km), разъёмы, сварки, механические соединения, патч-панели,
изгибы, сплиттеры 3.5 dB * log2(2n); запас мощности = (Tx - Rx) - потери.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, replace

from . import catalog
from .checks import as_count, as_finite, as_non_negative

log = logging.getLogger("elv_core.fiber_budget")

STATUS_VIABLE = "Viable Link - Sufficient Power Budget"
STATUS_FAILURE = "Link Failure - Insufficient Power Budget"
STATUS_HIGH_MARGIN = "Viable Link - Warning: High Power Margin (consider attenuation)"


@dataclass(frozen=True)
class FiberLinkInputs:
    transceiver_type: str = "custom"
    transmitter_power_dbm: float = 0.0
    receiver_sensitivity_dbm: float = -20.0
    fiber_length_m: float = 300.0
    fiber_type: str = "singlemode1310"
    connector_count: int = 2
    splices: int = 0
    mechanical_joints: int = 0
    patch_panels: int = 0
    bends: int = 0
    splitters: int = 0
    safety_margin_db: float = 3.0


@dataclass(frozen=True)
class FiberBudgetResult:
    connector_loss: float
    fiber_loss: float
    splice_loss: float
    mechanical_joint_loss: float
    patch_panel_loss: float
    bend_loss: float
    splitter_loss: float
    subtotal_loss: float
    safety_margin: float
    total_loss: float
    power_budget: float
    power_margin: float
    is_viable: bool
    link_status: str
    attenuation_db_per_km: float
    steps: list[str] = field(default_factory=list)


def apply_transceiver(inputs: FiberLinkInputs, preset: str) -> FiberLinkInputs:
    """Copy TX/RX levels from a catalog preset; 'custom' keeps the entered values."""
    options = catalog.transceivers()
    if preset not in options:
        raise ValueError(f"Unknown transceiver preset: {preset}")
    tr = options[preset]
    if tr.tx_dbm is None or tr.rx_dbm is None:
        return replace(inputs, transceiver_type=preset)
    return replace(
        inputs,
        transceiver_type=preset,
        transmitter_power_dbm=float(tr.tx_dbm),
        receiver_sensitivity_dbm=float(tr.rx_dbm),
    )


def splitter_loss_db(splitters: int, per_doubling_db: float) -> float:
    return per_doubling_db * math.log2(splitters * 2) if splitters > 0 else 0.0


def calculate_fiber_budget(inputs: FiberLinkInputs) -> FiberBudgetResult:
    length_km = as_non_negative(inputs.fiber_length_m, "fiber_length_m") / 1000.0
    connectors = as_count(inputs.connector_count, "connector_count")
    splices = as_count(inputs.splices, "splices")
    mech = as_count(inputs.mechanical_joints, "mechanical_joints")
    panels = as_count(inputs.patch_panels, "patch_panels")
    bends = as_count(inputs.bends, "bends")
    splitters = as_count(inputs.splitters, "splitters")
    tx = as_finite(inputs.transmitter_power_dbm, "transmitter_power_dbm")
    rx = as_finite(inputs.receiver_sensitivity_dbm, "receiver_sensitivity_dbm")
    margin_db = as_non_negative(inputs.safety_margin_db, "safety_margin_db")

    losses = catalog.element_losses()
    attenuation = catalog.attenuation_for(inputs.fiber_type)

    connector_loss = connectors * losses["connector"]
    fiber_loss = length_km * attenuation
    splice_loss = splices * losses["fusion_splice"]
    mech_loss = mech * losses["mechanical_joint"]
    panel_loss = panels * losses["patch_panel"]
    bend_loss = bends * losses["bend"]
    split_loss = splitter_loss_db(splitters, losses["splitter_per_doubling"])

    subtotal = connector_loss + fiber_loss + splice_loss + mech_loss + panel_loss + bend_loss + split_loss
    total = subtotal + margin_db
    budget = tx - rx
    power_margin = budget - total

    viable = power_margin >= 0
    status = STATUS_VIABLE if viable else STATUS_FAILURE
    if power_margin > catalog.high_margin_warning_db():
        status = STATUS_HIGH_MARGIN

    steps = [
        f"Fiber: {inputs.fiber_type} ({attenuation:g} dB/km) x {length_km:g} km = {fiber_loss:.2f} dB",
        f"Connectors: {connectors} x {losses['connector']:g} dB = {connector_loss:.2f} dB",
        f"Fusion splices: {splices} x {losses['fusion_splice']:g} dB = {splice_loss:.2f} dB",
        f"Mechanical joints: {mech} x {losses['mechanical_joint']:g} dB = {mech_loss:.2f} dB",
        f"Patch panels: {panels} x {losses['patch_panel']:g} dB = {panel_loss:.2f} dB",
        f"Bends: {bends} x {losses['bend']:g} dB = {bend_loss:.2f} dB",
        f"Splitters: {splitters} -> {split_loss:.2f} dB",
        f"Subtotal loss: {subtotal:.2f} dB, with safety margin {margin_db:g} dB: {total:.2f} dB",
        f"Power budget: {tx:g} - ({rx:g}) = {budget:.2f} dB",
        f"Power margin: {power_margin:.2f} dB ({status})",
    ]
    log.info("Fiber link margin %.2f dB: %s", power_margin, status)

    return FiberBudgetResult(
        connector_loss=connector_loss,
        fiber_loss=fiber_loss,
        splice_loss=splice_loss,
        mechanical_joint_loss=mech_loss,
        patch_panel_loss=panel_loss,
        bend_loss=bend_loss,
        splitter_loss=split_loss,
        subtotal_loss=subtotal,
        safety_margin=margin_db,
        total_loss=total,
        power_budget=budget,
        power_margin=power_margin,
        is_viable=viable,
        link_status=status,
        attenuation_db_per_km=attenuation,
        steps=steps,
    )
