# history_store.py
"""Durable storage for the calculation history and the angle mode.

The store is a small JSON document with string keys:

    {
        "history_entries": [{"expression": ..., "result": ..., "timestamp": ...}, ...],
        "angle_mode": "DEG"
    }

A missing or unreadable file restores the default state, and single
malformed entries are skipped, so a damaged file never blocks startup.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from .ScientificEngine import AngleMode

logger = logging.getLogger(__name__)

history_json = Path(__file__).resolve().parent / "history.json"

KEY_HISTORY = "history_entries"
KEY_ANGLE_MODE = "angle_mode"


@dataclass(frozen=True)
class HistoryEntry:
    expression: str
    result: str = None
    timestamp: str = None


@dataclass(frozen=True)
class HistoryState:
    history: list = field(default_factory=list)
    angle_mode: AngleMode = AngleMode.DEG


def encode_entry(entry):
    return {
        "expression": entry.expression,
        "result": entry.result or "",
        "timestamp": entry.timestamp or "",
    }


def decode_entry(raw):
    """Return a HistoryEntry, or None for anything that is not a valid record."""
    if not isinstance(raw, dict) or not isinstance(raw.get("expression"), str):
        return None
    return HistoryEntry(
        expression=raw["expression"],
        result=raw.get("result") or None,
        timestamp=raw.get("timestamp") or None,
    )


def decode_angle_mode(raw):
    try:
        return AngleMode(raw)
    except ValueError:
        return AngleMode.DEG


class HistoryStore:

    def __init__(self, path=None):
        self.path = Path(path) if path is not None else history_json

    def load(self):
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            return HistoryState()
        except (OSError, ValueError) as e:
            logger.warning("History could not be loaded from %s: %s", self.path, e)
            return HistoryState()

        if not isinstance(data, dict):
            return HistoryState()

        raw_entries = data.get(KEY_HISTORY)
        if not isinstance(raw_entries, list):
            raw_entries = []
        history = [entry for entry in map(decode_entry, raw_entries) if entry is not None]
        return HistoryState(history=history, angle_mode=decode_angle_mode(data.get(KEY_ANGLE_MODE)))

    def save(self, history, angle_mode):
        """Write the history and angle mode; returns False if the file could not be written."""
        data = {
            KEY_HISTORY: [encode_entry(entry) for entry in history],
            KEY_ANGLE_MODE: angle_mode.value,
        }
        try:
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=4, ensure_ascii=False)
        except OSError as e:
            logger.error("History could not be saved to %s: %s", self.path, e)
            return False
        return True

    def clear(self, angle_mode):
        return self.save([], angle_mode)
