from __future__ import annotations

from typing import Iterable, List, Mapping, NamedTuple, Optional

import pandas as pd

from .math_tools import MathTools

SIDES = ("L", "R")
SIDE_ALIASES = {
    "l": "L",
    "left": "L",
    "r": "R",
    "right": "R",
}
GRIP_SEPARATOR = " — "


class Observation(NamedTuple):
    duration: float
    load: float


def normalize_side(side: str) -> str:
    """Return ``"L"`` or ``"R"`` for any accepted spelling of a side."""
    key = str(side).strip().lower()
    if key not in SIDE_ALIASES:
        raise ValueError(f"unknown side: {side!r}")
    return SIDE_ALIASES[key]


def grip_from_notes(notes: str | None = "") -> str:
    """Return the grip label stored before the first separator in ``notes``."""
    text = "" if notes is None else str(notes)
    idx = text.find(GRIP_SEPARATOR)
    return (text[:idx] if idx >= 0 else text).strip()


class HistoryProjector:
    """Turn loosely shaped session records into per-side observations.

    Three record layouts are understood:

    * one record per side: ``{"hand": "L", "load": 40, "duration": 55, ...}``
    * a session with nested sides: ``{"left": {"load": ..., "duration": ...},
      "right": {...}, "rest": 180}`` (``"L"``/``"R"`` keys work as well)
    * a flat form row: ``{"leftLoad": "40", "leftDur": "55", ...}``

    All numeric coercion happens here so the estimators only ever see
    positive floats.
    """

    FORM_KEYS = {
        "L": (("leftLoad", "left_load"), ("leftDur", "left_duration")),
        "R": (("rightLoad", "right_load"), ("rightDur", "right_duration")),
    }
    NESTED_KEYS = {"L": ("L", "left"), "R": ("R", "right")}
    SHARED_FIELDS = ("id", "date", "grip", "rest", "notes")

    @classmethod
    def side_entry(cls, record, side: str) -> Optional[dict]:
        """Return the raw fields ``record`` holds for ``side``, if any."""
        if not isinstance(record, Mapping):
            return None
        side = normalize_side(side)
        hand = record.get("hand", record.get("side"))
        if hand is not None:
            try:
                return dict(record) if normalize_side(hand) == side else None
            except ValueError:
                return None
        for key in cls.NESTED_KEYS[side]:
            nested = record.get(key)
            if isinstance(nested, Mapping):
                entry = {k: record[k] for k in cls.SHARED_FIELDS if k in record}
                entry.update(nested)
                entry["hand"] = side
                return entry
        load_keys, dur_keys = cls.FORM_KEYS[side]
        load = next((record[k] for k in load_keys if k in record), None)
        duration = next((record[k] for k in dur_keys if k in record), None)
        if load is None and duration is None:
            return None
        entry = {k: record[k] for k in cls.SHARED_FIELDS if k in record}
        entry.update({"hand": side, "load": load, "duration": duration})
        return entry

    @classmethod
    def project(cls, records: Iterable, side: str) -> List[Observation]:
        """Return the valid ``(duration, load)`` observations for ``side``."""
        side = normalize_side(side)
        out: List[Observation] = []
        for record in records or []:
            entry = cls.side_entry(record, side)
            if entry is None:
                continue
            duration = MathTools.to_float(entry.get("duration"))
            load = MathTools.to_float(entry.get("load"))
            if duration > 0 and load > 0:
                out.append(Observation(duration, load))
        return out

    @classmethod
    def combined_rows(cls, records: Iterable) -> list[dict]:
        """Pair left and right entries logged on the same day with the same grip.

        Rows are ``{"date", "grip", "L", "R"}`` ordered most recent first;
        a side without an entry is ``None``.
        """
        entries = []
        for record in records or []:
            for side in SIDES:
                entry = cls.side_entry(record, side)
                if entry is None:
                    continue
                date = str(entry.get("date") or "")
                grip = entry.get("grip") or grip_from_notes(entry.get("notes"))
                entries.append(
                    {
                        "raw_day": date[:10],
                        "grip": str(grip).strip(),
                        "side": side,
                        "date": date,
                        "record": entry,
                    }
                )
        if not entries:
            return []
        frame = pd.DataFrame(entries)
        frame["when"] = pd.to_datetime(
            frame["date"], errors="coerce", utc=True, format="ISO8601"
        )
        # group on the UTC calendar day, raw date prefix when unparsable
        frame["day"] = frame["when"].dt.strftime("%Y-%m-%d").fillna(frame["raw_day"])
        rows = []
        for (_day, grip), group in frame.groupby(["day", "grip"], sort=False):
            row = {"date": group["date"].iloc[0], "grip": grip, "L": None, "R": None}
            for side, record in zip(group["side"], group["record"]):
                row[side] = record
            rows.append((group["when"].max(), row))
        # undated rows go last
        dated = [item for item in rows if not pd.isna(item[0])]
        undated = [row for when, row in rows if pd.isna(when)]
        dated.sort(key=lambda item: item[0], reverse=True)
        return [row for _when, row in dated] + undated
