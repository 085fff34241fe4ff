import json

import pytest

from sci_calculator.history_store import HistoryEntry, HistoryState, HistoryStore, decode_entry
from sci_calculator.ScientificEngine import AngleMode


@pytest.fixture
def store(tmp_path):
    return HistoryStore(tmp_path / "history.json")


def test_missing_file_loads_defaults(store) -> None:
    assert store.load() == HistoryState()
    assert store.load().angle_mode is AngleMode.DEG


def test_saved_history_and_angle_mode_are_restored(store) -> None:
    entries = [
        HistoryEntry("1+2", "3", "2026-01-02 10:00:00"),
        HistoryEntry("sin(30)", "0.5", "2026-01-02 09:59:00"),
    ]
    assert store.save(entries, AngleMode.RAD)

    state = store.load()
    assert state.history == entries
    assert state.angle_mode is AngleMode.RAD


def test_absent_result_and_timestamp_are_restored_as_none(store) -> None:
    store.save([HistoryEntry("2*3")], AngleMode.DEG)
    assert store.load().history == [HistoryEntry("2*3", None, None)]


def test_file_layout(store) -> None:
    store.save([HistoryEntry("1+1", "2", "t")], AngleMode.DEG)
    data = json.loads(store.path.read_text(encoding="utf-8"))
    assert data == {
        "history_entries": [{"expression": "1+1", "result": "2", "timestamp": "t"}],
        "angle_mode": "DEG",
    }


def test_non_ascii_expressions_survive(store) -> None:
    store.save([HistoryEntry("π×2", "6.28318530718")], AngleMode.DEG)
    assert store.load().history[0].expression == "π×2"


@pytest.mark.parametrize("content", ["not json", "[1, 2, 3]", '"text"', ""])
def test_unreadable_file_loads_defaults(store, content: str) -> None:
    store.path.write_text(content, encoding="utf-8")
    assert store.load() == HistoryState()


def test_malformed_entries_are_skipped(store) -> None:
    store.path.write_text(json.dumps({
        "history_entries": [
            {"expression": "1+1", "result": "2", "timestamp": ""},
            {"result": "5"},
            "garbage",
            {"expression": 12},
        ],
        "angle_mode": "RAD",
    }), encoding="utf-8")

    state = store.load()
    assert state.history == [HistoryEntry("1+1", "2", None)]
    assert state.angle_mode is AngleMode.RAD


def test_unknown_angle_mode_falls_back_to_degrees(store) -> None:
    store.path.write_text(json.dumps({"history_entries": [], "angle_mode": "GRAD"}), encoding="utf-8")
    assert store.load().angle_mode is AngleMode.DEG


def test_clear_keeps_angle_mode(store) -> None:
    store.save([HistoryEntry("1", "1")], AngleMode.RAD)
    assert store.clear(AngleMode.RAD)
    assert store.load() == HistoryState(history=[], angle_mode=AngleMode.RAD)


def test_unwritable_location_reports_failure(tmp_path) -> None:
    store = HistoryStore(tmp_path / "missing" / "history.json")
    assert store.save([HistoryEntry("1", "1")], AngleMode.DEG) is False


def test_decode_entry() -> None:
    assert decode_entry({"expression": "1"}) == HistoryEntry("1")
    assert decode_entry(None) is None


def test_undecodable_bytes_load_defaults(store) -> None:
    store.path.write_bytes(b"\xff\xfe\x00garbage")
    assert store.load() == HistoryState()
