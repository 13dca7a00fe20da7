from __future__ import annotations

from pathlib import Path

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

from r1cs_core.canonical import render_constraint

CONSTRAINT_SCHEMA = pa.schema(
    [
        ("index", pa.int64()),
        ("a", pa.string()),
        ("b", pa.string()),
        ("c", pa.string()),
        ("a_sign", pa.int8()),
        ("b_sign", pa.int8()),
        ("c_sign", pa.int8()),
        ("a_terms", pa.int32()),
        ("b_terms", pa.int32()),
        ("c_terms", pa.int32()),
        ("equation", pa.string()),
    ]
)


DEFAULT_BATCH_ROWS = 65536


def constraint_rows(r1cs):
    """Yield one table row per constraint, decoding as it goes."""
    prime = r1cs.header.prime
    for i, constraint in enumerate(r1cs.constraints):
        a, b, c = constraint.canonical(prime)
        yield {
            "index": i,
            "a": a.text,
            "b": b.text,
            "c": c.text,
            "a_sign": a.sign,
            "b_sign": b.sign,
            "c_sign": c.sign,
            "a_terms": len(constraint.a),
            "b_terms": len(constraint.b),
            "c_terms": len(constraint.c),
            "equation": render_constraint(a, b, c),
        }


def _batches(rows, size: int):
    batch: list[dict] = []
    for row in rows:
        batch.append(row)
        if len(batch) >= size:
            yield batch
            batch = []
    if batch:
        yield batch


def write_constraint_table(r1cs, out_path: Path, batch_rows: int = DEFAULT_BATCH_ROWS) -> int:
    """Write one Parquet row per constraint, one row group per batch; returns the row count.

    At most ``batch_rows`` rendered rows are held in memory at a time.
    """
    if batch_rows < 1:
        raise ValueError("batch_rows must be positive")
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    written = 0
    with pq.ParquetWriter(out_path, CONSTRAINT_SCHEMA) as writer:
        for batch in _batches(constraint_rows(r1cs), batch_rows):
            df = pd.DataFrame(batch, columns=CONSTRAINT_SCHEMA.names)
            writer.write_table(pa.Table.from_pandas(df, schema=CONSTRAINT_SCHEMA, preserve_index=False))
            written += len(df)
    return written
