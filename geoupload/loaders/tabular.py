# =============================================================================
# Tabular Loaders
# =============================================================================
# CSV and Excel decoding into row dicts for the normalizer.
# CSV is read with pyarrow (header row + type inference); Excel's first sheet
# is read with pandas. Missing cells become None in both cases.
# =============================================================================

import io
import logging
from typing import Any, Dict, List

import pandas as pd
import pyarrow as pa
import pyarrow.csv as csv

from geoupload.errors import LoaderError

__all__ = ["read_csv_rows", "read_excel_rows"]

logger = logging.getLogger(__name__)

Rows = List[Dict[str, Any]]


def read_csv_rows(data: bytes, filename: str = "<csv>") -> Rows:
    """
    Decode CSV bytes into rows keyed by the header row.

    Numeric, boolean and date columns are typed by pyarrow's inference;
    empty cells become None.

    Args:
        data: Raw CSV bytes
        filename: Name used in log and error messages

    Returns:
        List of row dicts (may be empty for a header-only file)

    Raises:
        LoaderError: If the CSV cannot be parsed
    """
    try:
        table = csv.read_csv(
            io.BytesIO(data),
            parse_options=csv.ParseOptions(delimiter=","),
            read_options=csv.ReadOptions(use_threads=True),
            convert_options=csv.ConvertOptions(strings_can_be_null=True),
        )
    except pa.ArrowException as e:
        raise LoaderError(f"Failed to parse CSV file '{filename}': {e}") from e

    logger.info(f"Read {len(table.column_names)} columns, {len(table)} rows from {filename}")
    return table.to_pylist()


def read_excel_rows(data: bytes, filename: str = "<excel>") -> Rows:
    """
    Decode the first sheet of an Excel workbook into rows.

    Args:
        data: Raw .xlsx/.xls bytes
        filename: Name used in log and error messages

    Returns:
        List of row dicts keyed by the header row

    Raises:
        LoaderError: If the workbook cannot be read
    """
    try:
        frame = pd.read_excel(io.BytesIO(data), sheet_name=0)
    except Exception as e:
        raise LoaderError(f"Failed to parse Excel file '{filename}': {e}") from e

    frame.columns = [str(column) for column in frame.columns]
    frame = frame.astype(object).where(frame.notna(), None)

    logger.info(f"Read {len(frame.columns)} columns, {len(frame)} rows from {filename}")
    return frame.to_dict(orient="records")
