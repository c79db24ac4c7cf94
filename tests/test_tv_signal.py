from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from elv_core.tv_signal import (
    STATUS_ACCEPTABLE,
    STATUS_TOO_HIGH,
    STATUS_TOO_LOW,
    SignalChain,
    calculate_signal,
    default_chain,
    microvolts_to_dbuv,
    signal_status,
)

ANTENNA_DBUV = 20 * 2.698970004336019  # 500 uV


def test_default_chain_levels() -> None:
    res = calculate_signal(default_chain())
    assert res.antenna_dbuv == pytest.approx(ANTENNA_DBUV)
    levels = [lvl.level_dbuv for lvl in res.levels]
    assert levels == pytest.approx(
        [ANTENNA_DBUV, ANTENNA_DBUV + 26, ANTENNA_DBUV + 20, ANTENNA_DBUV + 10, ANTENNA_DBUV]
    )
    assert [lvl.label for lvl in res.levels] == [
        "Antenna",
        "Amplifier (26dB)",
        "Cable (120m)",
        "Splitter 1",
        "Splitter 2",
    ]
    assert res.splitter_input_dbuv == pytest.approx(ANTENNA_DBUV + 20)
    assert res.splitter_output_dbuv == pytest.approx(ANTENNA_DBUV)
    assert res.outlet_path_loss_db == pytest.approx(6.0)
    assert res.final_dbuv == pytest.approx(ANTENNA_DBUV - 6.0)
    assert res.status == STATUS_TOO_LOW


def test_default_chain_outlet_per_splitter() -> None:
    res = calculate_signal(default_chain())
    assert res.outlet_levels == pytest.approx(
        {"splitter-1": ANTENNA_DBUV + 10 - 6.0, "splitter-2": ANTENNA_DBUV - 6.0}
    )
    outlets = [lvl.outlet_dbuv for lvl in res.levels]
    assert outlets[:3] == [None, None, None]
    assert outlets[3:] == pytest.approx([ANTENNA_DBUV + 4.0, ANTENNA_DBUV - 6.0])


def test_component_after_last_splitter_does_not_feed_outlet() -> None:
    chain = default_chain()
    amp = chain.add_component("amplifier")
    assert amp.id == "amplifier-2"
    res = calculate_signal(chain)
    assert res.chain_output_dbuv == pytest.approx(ANTENNA_DBUV + 26.0)
    assert res.final_dbuv == pytest.approx(res.splitter_output_dbuv - res.outlet_path_loss_db)
    assert res.final_dbuv == pytest.approx(ANTENNA_DBUV - 6.0)
    assert res.status == STATUS_TOO_LOW


def test_second_amplifier_before_splitters_brings_level_into_window() -> None:
    chain = default_chain()
    chain.add_component("amplifier")
    assert chain.move_up("amplifier-2")
    assert chain.move_up("amplifier-2")
    assert [c.id for c in chain.components][3] == "amplifier-2"
    res = calculate_signal(chain)
    assert res.final_dbuv == pytest.approx(ANTENNA_DBUV - 6.0 + 26.0)
    assert res.status == STATUS_ACCEPTABLE


def test_chain_without_splitter_uses_chain_end() -> None:
    chain = default_chain()
    chain.delete_component("splitter-1")
    chain.delete_component("splitter-2")
    res = calculate_signal(chain)
    assert res.splitter_output_dbuv is None
    assert res.outlet_levels == {}
    assert res.final_dbuv == pytest.approx(ANTENNA_DBUV + 20 - 6.0)


def test_status_window() -> None:
    assert signal_status(57.0) == STATUS_ACCEPTABLE
    assert signal_status(77.0) == STATUS_ACCEPTABLE
    assert signal_status(56.9) == STATUS_TOO_LOW
    assert signal_status(77.1) == STATUS_TOO_HIGH
    assert microvolts_to_dbuv(1000) == pytest.approx(60.0)


def test_chain_editing() -> None:
    chain = SignalChain.default()
    assert not chain.move_up("amplifier-1")
    assert chain.move_up("cable-1")
    assert [c.id for c in chain.components][:3] == ["antenna-1", "cable-1", "amplifier-1"]
    assert not chain.move_down("splitter-2")
    assert chain.move_down("cable-1")

    updated = chain.update_component("cable-1", "length_m", "abc")
    assert updated.length_m == 0.0
    assert chain.update_component("cable-1", "length_m", "30").length_m == pytest.approx(30.0)
    with pytest.raises(ValueError):
        chain.update_component("cable-1", "type", "splitter")
    with pytest.raises(KeyError):
        chain.update_component("cable-9", "length_m", 10)

    assert chain.delete_component("splitter-2")
    assert not chain.delete_component("splitter-2")
    assert len(chain) == 4
    with pytest.raises(ValueError):
        chain.add_component("antenna")


def test_antenna_is_locked() -> None:
    chain = default_chain()
    assert not chain.move_down("antenna-1")
    assert not chain.move_up("antenna-1")
    assert not chain.delete_component("antenna-1")
    assert chain.components[0].id == "antenna-1"
    assert len(chain) == 5
    with pytest.raises(ValueError):
        chain.update_component("antenna-1", "gain_db", 10)
    with pytest.raises(ValueError):
        chain.update_component("antenna-1", "can_edit", True)
    assert chain.get("antenna-1").gain_db == 0.0


def test_added_ids_stay_unique_after_delete() -> None:
    chain = SignalChain.default()
    chain.delete_component("splitter-1")
    added = chain.add_component("splitter")
    assert added.id == "splitter-3"
    assert added.loss_db == pytest.approx(10.0)


def test_invalid_antenna_signal() -> None:
    with pytest.raises(ValueError):
        calculate_signal(default_chain(), antenna_signal_uv=0)
