"""HTML reports for batch results."""

from .html_report import (
    default_report_name,
    recommendations,
    render_batch_report,
    write_batch_report,
)

__all__ = ["render_batch_report", "write_batch_report", "default_report_name", "recommendations"]
