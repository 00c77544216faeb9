"""Excel-backed persistence for the store identity fields."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Mapping, Optional
from zipfile import BadZipFile

from openpyxl import Workbook, load_workbook
from openpyxl.utils.exceptions import IllegalCharacterError, InvalidFileException
from openpyxl.worksheet.worksheet import Worksheet

from medbill import config

logger = logging.getLogger(__name__)

HEADER = ("Field", "Value")

_PERSISTENCE_ERRORS = (
    OSError,
    BadZipFile,
    InvalidFileException,
    IllegalCharacterError,
    ValueError,
    KeyError,
    TypeError,
)


def _to_str(value) -> str:
    if value is None:
        return ""
    return str(value)


class StoreDetailsStore:
    """Loads and saves the six store detail fields in a workbook.

    Failures never propagate: they are logged as warnings and the caller
    carries on with whatever details it already has. Values reload as
    saved, except that the workbook XML stores CRLF line breaks as LF.
    """

    def __init__(self, path: Path | str = None, sheet_name: str | None = None) -> None:
        self.path: Path = Path(path) if path else config.STORE_DETAILS_PATH
        self.sheet_name = sheet_name or config.STORE_DETAILS_SHEET_NAME

    def load(self) -> Optional[Dict[str, str]]:
        """Return the saved fields, or None on first run or on failure."""
        if not self.path.exists():
            return None
        try:
            workbook = load_workbook(self.path)
            if self.sheet_name not in workbook.sheetnames:
                raise ValueError(f"Sheet '{self.sheet_name}' not found in {self.path}.")
            return self._read_fields(workbook[self.sheet_name])
        except _PERSISTENCE_ERRORS as exc:
            logger.warning("Failed to load store details from %s: %s", self.path, exc)
            return None

    @staticmethod
    def _read_fields(sheet: Worksheet) -> Dict[str, str]:
        data: Dict[str, str] = {}
        for key, value in sheet.iter_rows(min_row=2, max_col=2, values_only=True):
            key = _to_str(key).strip()
            if key in config.STORE_FIELDS:
                data[key] = _to_str(value)
        return data

    def save(self, details: Mapping[str, str]) -> bool:
        """Write the fields to disk; returns True on success."""
        try:
            workbook = Workbook()
            sheet = workbook.active
            sheet.title = self.sheet_name
            sheet.append(HEADER)
            for key in config.STORE_FIELDS:
                sheet.append([key, _to_str(details.get(key, ""))])
            self.path.parent.mkdir(parents=True, exist_ok=True)
            workbook.save(self.path)
        except _PERSISTENCE_ERRORS as exc:
            logger.warning("Failed to save store details to %s: %s", self.path, exc)
            return False
        logger.debug("Saved store details to %s", self.path)
        return True
