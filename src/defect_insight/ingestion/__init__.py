"""CSV ingestion for batch detection."""

from .csv_reader import fetch_csv_url, load_metric_rows, parse_csv_text, read_csv_file

__all__ = ["parse_csv_text", "read_csv_file", "fetch_csv_url", "load_metric_rows"]
