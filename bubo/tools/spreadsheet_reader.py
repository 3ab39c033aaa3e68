"""
bubo/tools/spreadsheet_reader.py
================================

Reads local spreadsheet files into lists of records.

Only the **first** sheet of a workbook is read.  The header row supplies the
record keys; every following row becomes one dict.  Empty cells are left out
of their record rather than reported as ``NaN``, and date/time cells are
rendered as ISO-8601 strings so the output is JSON-compatible.

Cell values keep the type they were stored with: a whole number stays an
``int`` even when other cells in its column are empty.

Header keys
-----------
pandas' own header handling (``Unnamed: 1``, ``a.1``) is replaced by the
usual spreadsheet-to-JSON naming:

- a blank header cell becomes ``__EMPTY``, then ``__EMPTY_1``, ``__EMPTY_2``...
- a repeated header gets a numeric suffix: ``a``, ``a_1``, ``a_2``...
"""

import datetime
import logging
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd

logger = logging.getLogger(__name__)

_CSV_SUFFIXES = {".csv"}
EMPTY_HEADER = "__EMPTY"


def _to_json_value(value: Any) -> Any:
    if isinstance(value, (pd.Timestamp, datetime.datetime, datetime.date, datetime.time)):
        return value.isoformat()
    if hasattr(value, "item"):
        # numpy scalar -> Python scalar
        return value.item()
    return value


def header_keys(raw_header: List[Any]) -> List[str]:
    """Turn the raw header row into unique record keys."""
    seen: Dict[str, int] = {}
    keys = []
    for cell in raw_header:
        key = EMPTY_HEADER if pd.isna(cell) or str(cell) == "" else str(_to_json_value(cell))
        counter = seen.get(key, 0)
        if not counter:
            seen[key] = 1
        else:
            while True:
                candidate = f"{key}_{counter}"
                counter += 1
                if candidate not in seen:
                    break
            seen[key] = counter
            seen[candidate] = 1
            key = candidate
        keys.append(key)
    return keys


class SpreadsheetReader:
    """Stateless spreadsheet parser backed by pandas."""

    def read_first_sheet(self, file_path: str) -> pd.DataFrame:
        """Load the first sheet of ``file_path`` with normalised header keys.

        Raises
        ------
        FileNotFoundError
            If ``file_path`` does not exist.
        ValueError
            If the file cannot be parsed as a spreadsheet.
        """
        path = Path(file_path)
        if path.suffix.lower() in _CSV_SUFFIXES:
            raw = pd.read_csv(path, header=None, nrows=1, dtype=object)
            # Nullable dtypes keep whole-number columns integral around blanks
            frame = pd.read_csv(path).convert_dtypes()
        else:
            raw = pd.read_excel(path, sheet_name=0, header=None, nrows=1, dtype=object)
            frame = pd.read_excel(path, sheet_name=0, dtype=object)

        if not raw.empty and len(raw.columns) == len(frame.columns):
            frame.columns = header_keys(list(raw.iloc[0]))
        return frame

    def read_records(self, file_path: str) -> List[Dict[str, Any]]:
        """Return the first sheet of ``file_path`` as an ordered list of records."""
        frame = self.read_first_sheet(file_path)
        records = []
        for row in frame.to_dict(orient="records"):
            records.append({
                str(key): _to_json_value(value)
                for key, value in row.items()
                if not pd.isna(value)
            })
        logger.info("Read %d rows from %s", len(records), file_path)
        return records
