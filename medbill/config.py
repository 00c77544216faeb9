"""Configuration constants for the MedBill invoice generator."""

from pathlib import Path
from typing import Dict, Tuple

# Workbook holding the persisted store details.
STORE_DETAILS_PATH: Path = Path("data/store_details.xlsx")

# Sheet name inside the store details workbook.
STORE_DETAILS_SHEET_NAME: str = "StoreDetails"

# Store identity fields, in display order. These are persisted across runs.
STORE_FIELDS: Tuple[str, ...] = (
    "store_name",
    "store_address",
    "store_subtitle",
    "jurisdiction",
    "dl_number",
    "gst_number",
)

# Values used on the very first run, before anything has been saved.
DEFAULT_STORE_DETAILS: Dict[str, str] = {
    "store_name": "MEDICAL STORE",
    "store_address": "",
    "store_subtitle": "CHEMIST & DRUGGIST",
    "jurisdiction": "BHOPAL",
    "dl_number": "",
    "gst_number": "",
}

# Jurisdiction printed in the footer when the field is left blank.
DEFAULT_JURISDICTION: str = "BHOPAL"

# Quiescence window (ms) for preview recomputation and persistence writes.
DEBOUNCE_MS: int = 300

# How long the "Saved" status message stays visible (ms).
SAVE_INDICATOR_MS: int = 2000

# Print filename parts are capped at this many characters.
FILENAME_PART_MAX: int = 80

# Fallback name used when the customer name sanitises to nothing.
DEFAULT_FILE_NAME: str = "BILL"

# Directory used by "Export PDF".
EXPORT_DIR: Path = Path("bills")

# Name of the printer to target; empty string means the system default.
PRINTER_NAME: str = ""

# Currency symbol shown in front of the payable amount.
CURRENCY_SYMBOL: str = "₹"
