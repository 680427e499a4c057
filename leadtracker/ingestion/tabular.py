"""
Tabular source readers - stream rows out of an uploaded CSV or workbook.
"""
import csv
import io
import logging
import zipfile
from typing import Any, Iterator, List

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from leadtracker.core.exceptions import ImportCancelledError, ImportStructureError

logger = logging.getLogger(__name__)

TEXT_EXTENSIONS = (".csv", ".tsv", ".txt")
WORKBOOK_EXTENSIONS = (".xlsx", ".xlsm")
TEXT_ENCODINGS = ("utf-8-sig", "cp1252")

Row = List[Any]


class CancellationToken:
    """Cooperative cancellation flag checked between rows."""

    def __init__(self):
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def raise_if_cancelled(self, rows_read: int = 0) -> None:
        if self._cancelled:
            raise ImportCancelledError(rows_read)


def decode_text(content: bytes) -> str:
    for encoding in TEXT_ENCODINGS:
        try:
            return content.decode(encoding)
        except UnicodeDecodeError:
            continue
    raise ImportStructureError("File is not valid text")


def iter_csv_rows(content: bytes) -> Iterator[Row]:
    text = decode_text(content)
    sample = text[:4096]
    try:
        dialect = csv.Sniffer().sniff(sample, delimiters=",;\t")
    except csv.Error:
        dialect = csv.excel
    try:
        for row in csv.reader(io.StringIO(text), dialect):
            yield row
    except csv.Error as e:
        raise ImportStructureError(f"Malformed delimited text: {e}")


def iter_workbook_rows(content: bytes) -> Iterator[Row]:
    """Rows of the first sheet only; cells keep their native types."""
    try:
        workbook = load_workbook(io.BytesIO(content), read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as e:
        raise ImportStructureError(f"Could not open workbook: {e}")

    try:
        if not workbook.sheetnames:
            raise ImportStructureError("Workbook has no sheets")
        worksheet = workbook[workbook.sheetnames[0]]
        for row in worksheet.iter_rows(values_only=True):
            yield list(row)
    finally:
        workbook.close()


def iter_table_rows(content: bytes, filename: str) -> Iterator[Row]:
    """Dispatch on file extension. Unknown formats are a structural error."""
    name = (filename or "").lower()
    if name.endswith(TEXT_EXTENSIONS):
        return iter_csv_rows(content)
    if name.endswith(WORKBOOK_EXTENSIONS):
        return iter_workbook_rows(content)
    logger.warning(f"Rejected import of unsupported file type: {filename!r}")
    raise ImportStructureError(f"Unsupported file type: {filename or 'unknown'}")
