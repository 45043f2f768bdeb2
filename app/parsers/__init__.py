"""
app/parsers package marker.
"""

from app.parsers.csv_stream import CSVParseError, iter_csv_rows

__all__ = [
    "CSVParseError",
    "iter_csv_rows",
]
