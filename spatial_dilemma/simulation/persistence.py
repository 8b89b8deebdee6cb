"""Parquet persistence helpers for buffered log columns."""

from __future__ import annotations

from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq


def new_columns(schema: pa.Schema) -> dict[str, list[object]]:
    """Return an empty column buffer matching *schema*."""
    return {name: [] for name in schema.names}


def buffered_rows(columns: dict[str, list[object]]) -> int:
    return len(columns["run_id"])


def flush_columns(
    columns: dict[str, list[object]],
    schema: pa.Schema,
    path: Path,
    writer: pq.ParquetWriter | None,
) -> pq.ParquetWriter | None:
    """Write accumulated rows to Parquet and clear the in-memory buffers."""
    if not columns["run_id"]:
        return writer
    table = pa.Table.from_pydict(columns, schema=schema)
    if writer is None:
        writer = pq.ParquetWriter(path, schema)
    writer.write_table(table)
    for values in columns.values():
        values.clear()
    return writer
