"""Read metric rows from CSV text, files and URLs.

The first non-blank line is the header. Headers and values are trimmed,
blank lines are skipped, and a row whose column count differs from the
header's is dropped without complaint. Values stay strings here; coercion
is the normalizer's job.
"""

from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Iterable, Union

import requests

from ..exceptions import FetchError, NoValidDataError
from ..logging_config import get_logger
from ..metrics.normalizer import has_required_metrics

logger = get_logger(__name__)

RawRow = dict[str, str]


def parse_csv_text(text: str) -> list[RawRow]:
    """Parse CSV text into header-keyed rows.

    Raises:
        NoValidDataError: If the text has no header line at all.
    """
    lines = [line for line in text.splitlines() if line.strip()]
    if not lines:
        raise NoValidDataError("The CSV file is empty.")

    reader = csv.reader(lines)
    headers = [h.strip() for h in next(reader)]

    rows: list[RawRow] = []
    skipped = 0
    for values in reader:
        if len(values) != len(headers):
            skipped += 1
            continue
        rows.append({h: v.strip() for h, v in zip(headers, values)})

    if skipped:
        logger.debug("Dropped %d row(s) with a column count other than %d", skipped, len(headers))
    return rows


def read_csv_file(path: Union[str, Path], encoding: str = "utf-8-sig") -> list[RawRow]:
    """Read and parse a local CSV file.

    ``utf-8-sig`` strips the BOM spreadsheet exports like to prepend.
    """
    text = Path(path).read_text(encoding=encoding)
    return parse_csv_text(text)


def fetch_csv_url(url: str, timeout: float = 30) -> list[RawRow]:
    """Download and parse a CSV file.

    Raises:
        FetchError: On network errors, timeouts or a non-2xx response.
    """
    logger.info("Downloading CSV from: %s", url)
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.Timeout as exc:
        raise FetchError(url, "request timed out") from exc
    except requests.exceptions.HTTPError as exc:
        raise FetchError(url, f"{exc.response.status_code} {exc.response.reason}") from exc
    except requests.exceptions.RequestException as exc:
        raise FetchError(url, str(exc)) from exc

    return parse_csv_text(response.text)


def load_metric_rows(rows: Iterable[RawRow]) -> list[RawRow]:
    """Keep only rows that supply all twenty metrics.

    Raises:
        NoValidDataError: If no row survives.
    """
    rows = list(rows)
    accepted = [row for row in rows if has_required_metrics(row)]
    if len(accepted) < len(rows):
        logger.debug("Dropped %d row(s) missing required metrics", len(rows) - len(accepted))
    if not accepted:
        raise NoValidDataError(rows_read=len(rows))
    return accepted
