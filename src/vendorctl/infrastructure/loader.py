"""Record files — read and write vendor lists as JSON, CSV, or YAML.

The format is chosen by file suffix. JSON and YAML files hold either a
top-level list of objects or a mapping with a ``records`` list. CSV files
use a header row; integer and decimal cells become numbers and empty
cells become None.
"""

from __future__ import annotations

import csv
import json
import re
from collections.abc import Iterable, Sequence
from io import StringIO
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from vendorctl.domain.types import Record, RecordLike

SUPPORTED_SUFFIXES = (".json", ".csv", ".yaml", ".yml")

_INT_RE = re.compile(r"^-?(0|[1-9]\d*)$")
_FLOAT_RE = re.compile(r"^-?(0|[1-9]\d*)\.\d+$")


class RecordFileError(Exception):
    """A record file could not be read or written."""


def read_records(path: Path) -> list[Record]:
    """Load the records stored in *path*.

    Raises:
        FileNotFoundError: if *path* does not exist.
        RecordFileError: on an unsupported suffix or malformed content.
    """
    suffix = _suffix(path)
    text = path.read_text(encoding="utf-8")

    if suffix == ".csv":
        return _read_csv(text)

    try:
        if suffix == ".json":
            data = json.loads(text) if text.strip() else []
        else:
            data = YAML(typ="safe").load(text)
    except (json.JSONDecodeError, YAMLError) as exc:
        msg = f"Malformed {suffix[1:].upper()} in {path}: {exc}"
        raise RecordFileError(msg) from exc

    return _coerce_record_list(data, path)


def read_operations(path: Path) -> list[Any]:
    """Load an edit script: a JSON or YAML list, or a mapping with ``operations``.

    Entries are returned as-is; checking their shape is the caller's job.

    Raises:
        FileNotFoundError: if *path* does not exist.
        RecordFileError: on an unsupported suffix or malformed content.
    """
    suffix = _suffix(path)
    if suffix == ".csv":
        msg = f"Operation scripts must be JSON or YAML, not CSV: {path}"
        raise RecordFileError(msg)

    text = path.read_text(encoding="utf-8")
    try:
        data = json.loads(text) if suffix == ".json" else YAML(typ="safe").load(text)
    except (json.JSONDecodeError, YAMLError) as exc:
        msg = f"Malformed {suffix[1:].upper()} in {path}: {exc}"
        raise RecordFileError(msg) from exc

    if isinstance(data, dict):
        data = data.get("operations")
    if not isinstance(data, list):
        msg = f"{path} must contain a list of operations or an 'operations' list"
        raise RecordFileError(msg)
    return data


def write_records(path: Path, records: Sequence[RecordLike]) -> None:
    """Write *records* to *path*, creating parent directories as needed."""
    suffix = _suffix(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    if suffix == ".json":
        content = json.dumps([dict(r) for r in records], indent=2, default=str) + "\n"
    elif suffix == ".csv":
        content = _render_csv(records)
    else:
        buf = StringIO()
        yaml = YAML(typ="safe")
        yaml.default_flow_style = False
        yaml.dump([dict(r) for r in records], buf)
        content = buf.getvalue()

    path.write_text(content, encoding="utf-8")


# ---------------------------------------------------------------------------
# Internal
# ---------------------------------------------------------------------------


def _suffix(path: Path) -> str:
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        msg = f"Unsupported record file type {path.suffix!r} (expected one of {SUPPORTED_SUFFIXES})"
        raise RecordFileError(msg)
    return suffix


def _coerce_record_list(data: Any, path: Path) -> list[Record]:
    if data is None:
        return []
    if isinstance(data, dict):
        data = data.get("records")
    if not isinstance(data, list):
        msg = f"{path} must contain a list of records or a 'records' list"
        raise RecordFileError(msg)

    records: list[Record] = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            msg = f"{path}: entry {index} is not an object"
            raise RecordFileError(msg)
        records.append(dict(item))
    return records


def _convert_cell(cell: str) -> Any:
    if cell == "":
        return None
    if _INT_RE.match(cell):
        return int(cell)
    if _FLOAT_RE.match(cell):
        return float(cell)
    return cell


def _read_csv(text: str) -> list[Record]:
    reader = csv.DictReader(StringIO(text))
    return [
        {key: _convert_cell(value or "") for key, value in row.items() if key is not None}
        for row in reader
    ]


def _render_csv(records: Iterable[RecordLike]) -> str:
    rows = [dict(r) for r in records]
    header: list[str] = []
    for row in rows:
        header.extend(key for key in row if key not in header)

    buf = StringIO()
    writer = csv.DictWriter(buf, fieldnames=header, restval="", lineterminator="\n")
    writer.writeheader()
    for row in rows:
        writer.writerow({key: "" if value is None else value for key, value in row.items()})
    return buf.getvalue()
