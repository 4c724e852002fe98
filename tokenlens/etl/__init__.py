"""
ETL package - turns usage exports into UsageRecord sequences.

Main entry points are parse_csv_text() and parse_csv_file().
"""

from .parser import CSVFormatError, parse_csv_file, parse_csv_text

__all__ = ["CSVFormatError", "parse_csv_file", "parse_csv_text"]
