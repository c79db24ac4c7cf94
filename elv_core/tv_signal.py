"""
TV distribution signal budget: antenna -> amplifiers / cables / splitters -> outlet.

Уровни в dBµV; 20·log10(µV). Допустимый уровень на розетке 57..77 dBµV.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, replace

from .checks import as_non_negative, as_positive

log = logging.getLogger("elv_core.tv_signal")

ANTENNA = "antenna"
AMPLIFIER = "amplifier"
CABLE = "cable"
SPLITTER = "splitter"
COMPONENT_TYPES = (ANTENNA, AMPLIFIER, CABLE, SPLITTER)

DEFAULT_AMPLIFIER_GAIN_DB = 26.0
DEFAULT_CABLE_LENGTH_M = 50.0
DEFAULT_CABLE_LOSS_DB_PER_M = 0.05
DEFAULT_SPLITTER_LOSS_DB = 10.0

DEFAULT_ANTENNA_SIGNAL_UV = 500.0
DEFAULT_OUTLET_CABLE_LOSS_DB_PER_M = 0.05
DEFAULT_OUTLET_CABLE_LENGTH_M = 40.0
DEFAULT_CABLE_JOINT_LOSS_DB = 3.0
DEFAULT_OUTLET_LOSS_DB = 1.0

ACCEPTABLE_MIN_DBUV = 57.0
ACCEPTABLE_MAX_DBUV = 77.0

STATUS_ACCEPTABLE = "Acceptable"
STATUS_TOO_LOW = "Too Low - Signal Amplification Required"
STATUS_TOO_HIGH = "Too High - Signal Attenuation Required"

NUMERIC_FIELDS = ("gain_db", "length_m", "loss_per_meter_db", "loss_db")


@dataclass(frozen=True)
class DiagramComponent:
    id: str
    type: str
    order: int
    gain_db: float = 0.0
    length_m: float = 0.0
    loss_per_meter_db: float = 0.0
    loss_db: float = 0.0
    can_edit: bool = True

    def change_db(self) -> float:
        """Signal change across the component (gain positive, loss negative)."""
        if self.type == AMPLIFIER:
            return self.gain_db
        if self.type == CABLE:
            return -self.loss_per_meter_db * self.length_m
        if self.type == SPLITTER:
            return -self.loss_db
        return 0.0

    def label(self) -> str:
        if self.type == ANTENNA:
            return "Antenna"
        if self.type == AMPLIFIER:
            return f"Amplifier ({self.gain_db:g}dB)"
        if self.type == CABLE:
            return f"Cable ({self.length_m:g}m)"
        return self.type.capitalize()


def _parse_number(value) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return 0.0 if math.isnan(number) else number


class SignalChain:
    """
    Ordered list of diagram components.

    Components with can_edit=False (the antenna) cannot be moved, deleted or
    updated, so the antenna stays first.
    """

    def __init__(self, components: list[DiagramComponent] | None = None) -> None:
        self._components: list[DiagramComponent] = sorted(components or [], key=lambda c: c.order)

    @classmethod
    def default(cls) -> "SignalChain":
        return cls(
            [
                DiagramComponent("antenna-1", ANTENNA, 1, can_edit=False),
                DiagramComponent("amplifier-1", AMPLIFIER, 2, gain_db=DEFAULT_AMPLIFIER_GAIN_DB),
                DiagramComponent(
                    "cable-1", CABLE, 3, length_m=120.0, loss_per_meter_db=DEFAULT_CABLE_LOSS_DB_PER_M
                ),
                DiagramComponent("splitter-1", SPLITTER, 4, loss_db=DEFAULT_SPLITTER_LOSS_DB),
                DiagramComponent("splitter-2", SPLITTER, 5, loss_db=DEFAULT_SPLITTER_LOSS_DB),
            ]
        )

    @property
    def components(self) -> list[DiagramComponent]:
        return list(self._components)

    def __len__(self) -> int:
        return len(self._components)

    def get(self, component_id: str) -> DiagramComponent:
        for comp in self._components:
            if comp.id == component_id:
                return comp
        raise KeyError(component_id)

    def _index(self, component_id: str) -> int:
        for i, comp in enumerate(self._components):
            if comp.id == component_id:
                return i
        return -1

    def _next_id(self, component_type: str) -> str:
        taken = {c.id for c in self._components}
        n = sum(1 for c in self._components if c.type == component_type) + 1
        while f"{component_type}-{n}" in taken:
            n += 1
        return f"{component_type}-{n}"

    def add_component(self, component_type: str) -> DiagramComponent:
        if component_type not in (AMPLIFIER, CABLE, SPLITTER):
            raise ValueError(f"cannot add component of type {component_type!r}")
        order = max((c.order for c in self._components), default=0) + 1
        comp = DiagramComponent(self._next_id(component_type), component_type, order)
        if component_type == AMPLIFIER:
            comp = replace(comp, gain_db=DEFAULT_AMPLIFIER_GAIN_DB)
        elif component_type == CABLE:
            comp = replace(comp, length_m=DEFAULT_CABLE_LENGTH_M, loss_per_meter_db=DEFAULT_CABLE_LOSS_DB_PER_M)
        else:
            comp = replace(comp, loss_db=DEFAULT_SPLITTER_LOSS_DB)
        self._components.append(comp)
        return comp

    def _locked(self, index: int) -> bool:
        return index != -1 and not self._components[index].can_edit

    def delete_component(self, component_id: str) -> bool:
        if self._locked(self._index(component_id)):
            return False
        before = len(self._components)
        self._components = [c for c in self._components if c.id != component_id]
        return len(self._components) != before

    def _swap(self, i: int, j: int) -> None:
        a, b = self._components[i], self._components[j]
        self._components[i] = replace(a, order=b.order)
        self._components[j] = replace(b, order=a.order)
        self._components.sort(key=lambda c: c.order)

    def move_up(self, component_id: str) -> bool:
        # antenna and the first component after it stay in place
        index = self._index(component_id)
        if index <= 1 or self._locked(index):
            return False
        self._swap(index, index - 1)
        return True

    def move_down(self, component_id: str) -> bool:
        index = self._index(component_id)
        if index == -1 or index >= len(self._components) - 1 or self._locked(index):
            return False
        self._swap(index, index + 1)
        return True

    def update_component(self, component_id: str, field_name: str, value) -> DiagramComponent:
        index = self._index(component_id)
        if index == -1:
            raise KeyError(component_id)
        if self._locked(index):
            raise ValueError(f"component {component_id!r} cannot be edited")
        if field_name in NUMERIC_FIELDS:
            value = _parse_number(value)
        elif field_name not in ("can_edit",):
            raise ValueError(f"field {field_name!r} cannot be updated")
        updated = replace(self._components[index], **{field_name: value})
        self._components[index] = updated
        return updated


def default_chain() -> SignalChain:
    return SignalChain.default()


@dataclass(frozen=True)
class NodeLevel:
    id: str
    type: str
    label: str
    change_db: float
    level_dbuv: float
    outlet_dbuv: float | None = None


@dataclass(frozen=True)
class SignalResult:
    antenna_dbuv: float
    levels: list[NodeLevel]
    splitter_input_dbuv: float | None
    splitter_output_dbuv: float | None
    chain_output_dbuv: float
    outlet_levels: dict[str, float]
    outlet_path_loss_db: float
    final_dbuv: float
    status: str
    steps: list[str] = field(default_factory=list)


def microvolts_to_dbuv(microvolts: float) -> float:
    return 20.0 * math.log10(microvolts)


def signal_status(level_dbuv: float) -> str:
    if ACCEPTABLE_MIN_DBUV <= level_dbuv <= ACCEPTABLE_MAX_DBUV:
        return STATUS_ACCEPTABLE
    if level_dbuv < ACCEPTABLE_MIN_DBUV:
        return STATUS_TOO_LOW
    return STATUS_TOO_HIGH


def calculate_signal(
    chain: SignalChain,
    antenna_signal_uv: float = DEFAULT_ANTENNA_SIGNAL_UV,
    outlet_cable_loss_per_m: float = DEFAULT_OUTLET_CABLE_LOSS_DB_PER_M,
    outlet_cable_length_m: float = DEFAULT_OUTLET_CABLE_LENGTH_M,
    cable_joint_loss_db: float = DEFAULT_CABLE_JOINT_LOSS_DB,
    outlet_loss_db: float = DEFAULT_OUTLET_LOSS_DB,
) -> SignalResult:
    uv = as_positive(antenna_signal_uv, "antenna_signal_uv")
    loss_per_m = as_non_negative(outlet_cable_loss_per_m, "outlet_cable_loss_per_m")
    length_m = as_non_negative(outlet_cable_length_m, "outlet_cable_length_m")
    joint_db = as_non_negative(cable_joint_loss_db, "cable_joint_loss_db")
    outlet_db = as_non_negative(outlet_loss_db, "outlet_loss_db")

    antenna_dbuv = microvolts_to_dbuv(uv)
    steps = [f"Antenna signal: {uv:g} µV = {antenna_dbuv:.1f} dBµV"]

    cable_db = loss_per_m * length_m
    path_loss = cable_db + joint_db + outlet_db

    current = antenna_dbuv
    splitter_in = splitter_out = None
    levels: list[NodeLevel] = []
    outlet_levels: dict[str, float] = {}
    splitter_no = 0
    for comp in chain.components:
        if comp.type == SPLITTER and splitter_in is None:
            splitter_in = current
        change = comp.change_db()
        current += change
        outlet = None
        if comp.type == SPLITTER:
            splitter_out = current
            splitter_no += 1
            label = f"Splitter {splitter_no}"
            outlet = current - path_loss
            outlet_levels[comp.id] = outlet
        else:
            label = comp.label()
        levels.append(NodeLevel(comp.id, comp.type, label, change, current, outlet))
        steps.append(f"{label}: {change:+.1f} dB -> {current:.1f} dBµV")

    # the outlet hangs off the last splitter; without splitters, off the chain end
    before_outlet = splitter_out if splitter_out is not None else current
    final = before_outlet - path_loss
    status = signal_status(final)
    steps.append(
        f"Outlet path: cable {loss_per_m:g} dB/m x {length_m:g} m = {cable_db:.1f} dB, "
        f"joints {joint_db:g} dB, outlet {outlet_db:g} dB"
    )
    for comp_id, level in outlet_levels.items():
        steps.append(f"Outlet at {comp_id}: {level:.1f} dBµV")
    steps.append(f"Final signal: {before_outlet:.1f} - {path_loss:.1f} = {final:.1f} dBµV ({status})")
    log.info("TV signal at outlet: %.1f dBuV (%s)", final, status)

    return SignalResult(
        antenna_dbuv=antenna_dbuv,
        levels=levels,
        splitter_input_dbuv=splitter_in,
        splitter_output_dbuv=splitter_out,
        chain_output_dbuv=current,
        outlet_levels=outlet_levels,
        outlet_path_loss_db=path_loss,
        final_dbuv=final,
        status=status,
        steps=steps,
    )
