"""
Workload files.

A workload is a JSON list of process objects (or an object holding that list
under ``"processes"``), or a CSV file with a header row. Both use the field
names ``pid``, ``arrival_time``, ``burst_time`` and an optional ``priority``
that defaults to 0.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any, Iterator, List, Mapping, Tuple

from .errors import InvalidInputError
from .models import Process

REQUIRED_FIELDS = ("pid", "arrival_time", "burst_time")


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a list of Process objects.

    Malformed files and entries raise ``InvalidInputError`` naming the entry
    (JSON) or line (CSV) at fault.
    """
    path = Path(path)
    loaders = {".json": _json_entries, ".csv": _csv_entries}
    try:
        loader = loaders[path.suffix.lower()]
    except KeyError:
        raise InvalidInputError(f"Unsupported workload format: {path.suffix} (use .json or .csv)") from None

    return [_parse_entry(entry, where) for where, entry in loader(path)]


def _json_entries(path: Path) -> Iterator[Tuple[str, Any]]:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise InvalidInputError(f"{path}: not valid JSON ({exc.msg}, line {exc.lineno})") from exc

    if isinstance(raw, dict):
        raw = raw.get("processes")
    if not isinstance(raw, list):
        raise InvalidInputError(f"{path}: JSON workload must be a list of process objects")

    for idx, entry in enumerate(raw):
        yield f"{path}: entry {idx}", entry


def _csv_entries(path: Path) -> Iterator[Tuple[str, Mapping[str, str]]]:
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        missing = [name for name in REQUIRED_FIELDS if name not in (reader.fieldnames or [])]
        if missing:
            raise InvalidInputError(f"{path}: CSV header is missing {', '.join(missing)}")
        for row in reader:
            yield f"{path}: line {reader.line_num}", row


def _parse_entry(entry: Any, where: str) -> Process:
    if not isinstance(entry, Mapping):
        raise InvalidInputError(f"{where}: expected an object, got {entry!r}")

    missing = [name for name in REQUIRED_FIELDS if entry.get(name) in (None, "")]
    if missing:
        raise InvalidInputError(f"{where}: missing {', '.join(missing)}")

    priority = entry.get("priority")
    try:
        return Process(
            pid=str(entry["pid"]).strip(),
            arrival_time=int(entry["arrival_time"]),
            burst_time=int(entry["burst_time"]),
            priority=0 if priority in (None, "") else int(priority),
        )
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"{where}: {exc}") from exc
