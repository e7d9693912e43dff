"""
Line-oriented record storage.

Each store is a text file of pipe-delimited records, one per line.
Records may have different widths within one file (the profile store
mixes PROFILE and DAILY lines), so reading pads short rows with empty
strings.
"""
import csv
import os
import warnings
from pathlib import Path
from typing import List, Sequence

import pandas as pd

SEPARATOR = "|"


def read_records(filepath: Path, max_fields: int) -> List[List[str]]:
    """
    Read all records from a store in file order.

    Args:
        filepath: Store file
        max_fields: Widest record the store may contain; wider lines are skipped

    Returns:
        List of records, each a list of exactly max_fields strings
        (missing trailing fields are ""). Missing or empty files give [].
    """
    filepath = Path(filepath)
    if not filepath.exists() or filepath.stat().st_size == 0:
        return []

    # One extra column catches lines wider than max_fields
    overflow = max_fields
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", pd.errors.ParserWarning)
        df = pd.read_csv(
            filepath,
            sep=SEPARATOR,
            header=None,
            names=list(range(max_fields + 1)),
            index_col=False,
            dtype=str,
            keep_default_na=False,
            quoting=csv.QUOTE_NONE,
            escapechar="\\",
            skip_blank_lines=True,
            engine="python",
            encoding="utf-8",
        )

    records = []
    for row in df.itertuples(index=False, name=None):
        fields = ["" if pd.isna(v) else str(v).strip() for v in row]
        if fields[overflow]:
            continue
        records.append(fields[:max_fields])
    return records


def write_records(filepath: Path, records: Sequence[Sequence[str]]) -> None:
    """
    Write records to a store, replacing its contents.

    The file is written to a temporary sibling first and then moved
    into place, so an interrupted save leaves the previous file intact.

    Args:
        filepath: Store file
        records: Records in the order they should appear
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = filepath.with_name(filepath.name + ".tmp")

    width = max((len(r) for r in records), default=0)
    rows = [list(r) + [""] * (width - len(r)) for r in records]
    df = pd.DataFrame(rows, dtype=str)

    text = ""
    if not df.empty:
        text = df.to_csv(
            None,
            sep=SEPARATOR,
            header=False,
            index=False,
            quoting=csv.QUOTE_NONE,
            escapechar="\\",
            lineterminator="\n",
        )
        # Drop the separators added by padding so short records stay short
        lines = []
        for line, record in zip(text.splitlines(), records):
            padding = width - len(record)
            lines.append(line[:-padding] if padding else line)
        text = "\n".join(lines) + "\n"

    tmp_path.write_text(text, encoding="utf-8")
    os.replace(tmp_path, filepath)


def format_number(value: float) -> str:
    """
    Format a number compactly for storage.

    Example:
        >>> format_number(52.0), format_number(1.5)
        ('52', '1.5')
    """
    return f"{float(value):.10g}"


def parse_number(text: str, default: float = None) -> float:
    """Parse a stored number, returning default when it is malformed."""
    try:
        return float(text)
    except (TypeError, ValueError):
        return default
