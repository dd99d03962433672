"""
SKU mapping CSV parser.

Parses the admin upload that maps each SKU + SKU Labs warehouse to the
location stock should be booked against.

Format:
    SKU,Warehouse,Location
    ABC-1,Jeddah Club,A-01-03

Header names are matched exactly (case-insensitive, trimmed) and may come in
any order; extra columns are ignored. Rows are split on commas with no
quoting support, so values must not contain commas.
"""

from dataclasses import dataclass, field
from typing import Union
import re
import structlog

from exceptions import MappingMissingColumnsError, MappingParseError
from utils.text_utils import normalize_header, normalize_sku, strip_bom

logger = structlog.get_logger(__name__)


# ===================
# DATA CLASSES
# ===================

@dataclass
class MappingRow:
    """Parsed mapping row. SKU is normalized, other fields trimmed."""
    sku: str
    warehouse: str
    location: str


@dataclass
class MappingParseResult:
    """Result of parsing a mapping CSV."""
    rows: list[MappingRow] = field(default_factory=list)
    columns: dict[str, int] = field(default_factory=dict)

    # Statistics
    total_rows: int = 0
    skipped_rows: int = 0

    @property
    def success(self) -> bool:
        """True if at least one usable row was parsed."""
        return len(self.rows) > 0

    def to_dict(self) -> dict:
        """Convert to dictionary for logging."""
        return {
            "row_count": len(self.rows),
            "total_rows": self.total_rows,
            "skipped_rows": self.skipped_rows,
            "columns": self.columns,
        }


# ===================
# COLUMN MAPPINGS
# ===================

# Logical column -> accepted header names (normalized: trimmed, lowercase).
# Matching is exact; "sku code" does not satisfy "sku".
REQUIRED_COLUMNS = {
    "sku": ["sku"],
    "warehouse": ["warehouse"],
    "location": ["location"],
}

LINE_SPLIT = re.compile(r"\r?\n")


def _find_columns(headers: list[str]) -> dict[str, int]:
    """
    Locate required columns in the header row.

    Raises:
        MappingMissingColumnsError: If any required column is absent
    """
    normalized = [normalize_header(h) for h in headers]
    columns: dict[str, int] = {}

    for logical, names in REQUIRED_COLUMNS.items():
        for idx, header in enumerate(normalized):
            if header in names:
                columns[logical] = idx
                break

    missing = [logical for logical in REQUIRED_COLUMNS if logical not in columns]
    if missing:
        raise MappingMissingColumnsError(
            missing=missing,
            found=[h.strip() for h in headers]
        )

    return columns


def _cell(cols: list[str], idx: int) -> str:
    """Get a trimmed cell, empty if the row is short."""
    if idx >= len(cols):
        return ""
    return cols[idx].strip()


# ===================
# MAIN PARSER
# ===================

def parse_mapping_csv(content: Union[str, bytes]) -> MappingParseResult:
    """
    Parse a SKU mapping CSV.

    Args:
        content: CSV text, or raw bytes in UTF-8 (BOM allowed)

    Returns:
        MappingParseResult with usable rows; rows missing SKU, Warehouse
        or Location are dropped and counted in skipped_rows

    Raises:
        MappingParseError: If bytes are not valid UTF-8
        MappingMissingColumnsError: If required columns are missing
    """
    if isinstance(content, bytes):
        try:
            content = content.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise MappingParseError(
                "CSV must be UTF-8 encoded",
                details={"position": e.start}
            )

    lines = [line for line in LINE_SPLIT.split(content) if line.strip()]
    result = MappingParseResult()

    if not lines:
        logger.info("mapping_csv_empty")
        return result

    header_line = strip_bom(lines[0])
    result.columns = _find_columns(header_line.split(","))

    idx_sku = result.columns["sku"]
    idx_warehouse = result.columns["warehouse"]
    idx_location = result.columns["location"]

    for line in lines[1:]:
        result.total_rows += 1
        cols = line.split(",")

        sku = normalize_sku(_cell(cols, idx_sku))
        warehouse = _cell(cols, idx_warehouse)
        location = _cell(cols, idx_location)

        if not sku or not warehouse or not location:
            result.skipped_rows += 1
            continue

        result.rows.append(MappingRow(sku=sku, warehouse=warehouse, location=location))

    logger.info("mapping_csv_parsed", **result.to_dict())
    return result
