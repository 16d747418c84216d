"""Formatters - turn activities into text, one module per output format."""

from .csv_format import format_csv
from .json_format import format_day_json, format_week_json
from .table import format_day_table, format_week_table
from .taxi import format_taxi_day, format_taxi_week

__all__ = [
    "format_csv",
    "format_day_json",
    "format_week_json",
    "format_day_table",
    "format_week_table",
    "format_taxi_day",
    "format_taxi_week",
]
