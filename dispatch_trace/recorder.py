"""
Dispatch recorder: observer that collects InvocationRecords.

Attach to a Dispatcher via observers=[recorder] or add_observer(recorder).
"""

from __future__ import annotations

from dataclasses import asdict

import pandas as pd

from flux_core.invocation import InvocationRecord

COLUMNS = [
    "dispatch_id",
    "token",
    "status",
    "started_at",
    "duration_ms",
    "depth",
    "waited_by",
    "error",
]


class DispatchRecorder:
    """Collects one record per callback invocation, in the order they finished."""

    def __init__(self) -> None:
        self._records: list[InvocationRecord] = []

    def __call__(self, record: InvocationRecord) -> None:
        self._records.append(record)

    @property
    def records(self) -> list[InvocationRecord]:
        return list(self._records)

    def clear(self) -> None:
        self._records = []

    def to_dataframe(self) -> pd.DataFrame:
        """One row per record; status as its string value."""
        rows = []
        for rec in self._records:
            row = asdict(rec)
            row["status"] = rec.status.value
            rows.append(row)
        return pd.DataFrame(rows, columns=COLUMNS)
