"""
Upload parsers module.
"""

from parsers.mapping_csv_parser import (
    parse_mapping_csv,
    MappingParseResult,
    MappingRow,
)

__all__ = [
    "parse_mapping_csv",
    "MappingParseResult",
    "MappingRow",
]
