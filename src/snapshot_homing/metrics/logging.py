"""JSONL run output for vector fields.

This module provides:
- FieldLogWriter: one JSON object per grid cell
- read_field_log: load a written log back as dictionaries
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from snapshot_homing.scenarios.field import CellResult, VectorField


class FieldLogWriter:
    """Writes cell results to a JSONL log file.

    One compact JSON object per line, in the order cells were written.
    """

    def __init__(self, log_path: Path) -> None:
        """Initialize the log writer.

        Args:
            log_path: Path to the JSONL log file (parents are created).
        """
        self._log_path = log_path
        self._log_path.parent.mkdir(parents=True, exist_ok=True)
        self._file = open(self._log_path, "w", encoding="utf-8")
        self._count = 0

    @property
    def path(self) -> Path:
        return self._log_path

    @property
    def count(self) -> int:
        return self._count

    def write(self, cell: CellResult) -> None:
        """Write one cell result."""
        line = json.dumps(cell.to_dict(), separators=(",", ":"))
        self._file.write(line + "\n")
        self._file.flush()
        self._count += 1

    def write_field(self, vector_field: VectorField) -> int:
        """Write every cell of a field. Returns the number of lines."""
        for cell in vector_field.cells:
            self.write(cell)
        return len(vector_field.cells)

    def close(self) -> None:
        """Close the log file."""
        self._file.close()

    def __enter__(self) -> "FieldLogWriter":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def read_field_log(log_path: Path) -> list[dict[str, Any]]:
    """Read a field log written by FieldLogWriter."""
    records = []
    with open(log_path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line:
                records.append(json.loads(line))
    return records
