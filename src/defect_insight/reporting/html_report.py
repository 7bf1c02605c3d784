"""Generate a self-contained HTML report for a classified batch.

The document has no external assets so it can be opened from a file:// path
or attached to a ticket as-is.
"""

from __future__ import annotations

import html
import os
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from ..metrics.models import BatchResult, ModuleResult

DEFECT_RECOMMENDATIONS = (
    "Review the {count} modules flagged as defective, focusing on the reasons provided.",
    "Consider refactoring modules with high cyclomatic complexity (vg > 10).",
    "Improve code structure in modules with high essential complexity (ev > 4).",
    "Add more comments to large modules with low comment ratios.",
    "Simplify modules with high Halstead effort values (e > 1000).",
)

REPORT_SUFFIXES = (".html", ".htm")

CLEAN_RECOMMENDATIONS = (
    "No defects were detected in the analyzed modules. "
    "Continue maintaining the current code quality standards.",
    "Consider implementing automated testing to ensure continued quality.",
    "Regularly monitor code metrics as the codebase evolves.",
)


def default_report_name(when: Optional[datetime] = None) -> str:
    """``defect-batch-report-YYYY-MM-DD.html``"""
    when = when or datetime.now()
    return f"defect-batch-report-{when:%Y-%m-%d}.html"


def recommendations(batch: BatchResult) -> list[str]:
    if batch.defective_modules > 0:
        return [r.format(count=batch.defective_modules) for r in DEFECT_RECOMMENDATIONS]
    return list(CLEAN_RECOMMENDATIONS)


def render_batch_report(batch: BatchResult, generated_at: Optional[datetime] = None) -> str:
    """Render the batch summary and per-module table as an HTML document."""
    generated_at = generated_at or datetime.now()
    report_date = f"{generated_at:%B} {generated_at.day}, {generated_at:%Y %H:%M}"

    rows = "\n".join(_render_row(r) for r in batch.results)
    items = "\n".join(f"    <li>{html.escape(text)}</li>" for text in recommendations(batch))

    return _build_html(
        report_date=report_date,
        year=generated_at.year,
        total=batch.total_modules,
        defective=batch.defective_modules,
        percentage=f"{batch.defect_percentage:.1f}",
        rows=rows,
        recommendations=items,
    )


def write_batch_report(
    batch: BatchResult,
    output_path: Optional[Union[str, Path]] = None,
    generated_at: Optional[datetime] = None,
) -> str:
    """Write the report and return its absolute path.

    ``output_path`` names a directory when it already is one, ends in a
    path separator, or lacks an ``.html``/``.htm`` suffix. The directory is
    created if needed and the default dated file name is used inside it.
    """
    generated_at = generated_at or datetime.now()
    if output_path is None:
        out = Path(default_report_name(generated_at))
    else:
        out = Path(output_path)
        if _is_directory_target(output_path, out):
            out = out / default_report_name(generated_at)
    out = out.resolve()
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(render_batch_report(batch, generated_at), encoding="utf-8")
    return str(out)


# ── Private helpers ──────────────────────────────────────────────────


def _is_directory_target(raw: Union[str, Path], path: Path) -> bool:
    if path.is_dir():
        return True
    # Path() drops a trailing separator, so check the original string
    if isinstance(raw, str) and raw.endswith(("/", os.sep)):
        return True
    return path.suffix.lower() not in REPORT_SUFFIXES


def _fmt(value: float) -> str:
    return f"{value:g}"


def _render_row(result: ModuleResult) -> str:
    detected = result.verdict.defect_detected
    css = "defect-yes" if detected else "defect-no"
    label = "YES" if detected else "NO"
    reason = html.escape(result.verdict.reason or "N/A")
    m = result.metrics
    return (
        f"    <tr><td>{result.index}</td>"
        f'<td class="{css}">{label}</td>'
        f"<td>{reason}</td>"
        f"<td>{_fmt(m.loc)}</td><td>{_fmt(m.vg)}</td><td>{_fmt(m.ev)}</td><td>{_fmt(m.e)}</td></tr>"
    )


def _build_html(
    *,
    report_date: str,
    year: int,
    total: int,
    defective: int,
    percentage: str,
    rows: str,
    recommendations: str,
) -> str:
    # f-string template: {{ / }} produce literal CSS braces.
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>Batch Defect Detection Report</title>
<style>
body {{ font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 1200px; margin: 0 auto; padding: 20px; }}
.header {{ text-align: center; margin-bottom: 30px; padding-bottom: 20px; border-bottom: 1px solid #ddd; }}
.logo {{ font-size: 24px; font-weight: bold; margin-bottom: 10px; }}
.logo span {{ color: #9333ea; }}
.summary {{ background-color: #f8f9fa; padding: 20px; border-radius: 5px; margin-bottom: 30px; }}
.summary-title {{ font-size: 20px; font-weight: bold; margin-bottom: 15px; }}
.summary-stats {{ display: flex; justify-content: space-around; flex-wrap: wrap; }}
.stat-box {{ text-align: center; padding: 15px; background-color: #fff; border-radius: 5px; box-shadow: 0 2px 4px rgba(0,0,0,0.1); min-width: 150px; margin: 10px; }}
.stat-value {{ font-size: 24px; font-weight: bold; margin-bottom: 5px; }}
.stat-label {{ font-size: 14px; color: #666; }}
.modules-table {{ width: 100%; border-collapse: collapse; margin: 20px 0; }}
.modules-table th, .modules-table td {{ border: 1px solid #ddd; padding: 12px; text-align: left; }}
.modules-table th {{ background-color: #f2f2f2; font-weight: bold; }}
.modules-table tr:nth-child(even) {{ background-color: #f9f9f9; }}
.defect-yes {{ color: #ef4444; font-weight: bold; }}
.defect-no {{ color: #22c55e; font-weight: bold; }}
.footer {{ margin-top: 40px; text-align: center; font-size: 12px; color: #666; }}
</style>
</head>
<body>
<div class="header">
  <div class="logo">Defect<span>Insight</span></div>
  <div>Batch Software Defect Detection Report</div>
  <div>Generated on: {report_date}</div>
</div>

<div class="summary">
  <div class="summary-title">Analysis Summary</div>
  <div class="summary-stats">
    <div class="stat-box"><div class="stat-value">{total}</div><div class="stat-label">Total Modules Analyzed</div></div>
    <div class="stat-box"><div class="stat-value">{defective}</div><div class="stat-label">Defective Modules</div></div>
    <div class="stat-box"><div class="stat-value">{percentage}%</div><div class="stat-label">Defect Rate</div></div>
  </div>
</div>

<h2>Module Analysis Results</h2>
<table class="modules-table">
  <tr>
    <th>#</th><th>Defect Detected</th><th>Reason</th><th>LOC</th>
    <th>Cyclomatic Complexity</th><th>Essential Complexity</th><th>Halstead Effort</th>
  </tr>
{rows}
</table>

<h2>Recommendations</h2>
<ul>
{recommendations}
</ul>

<div class="footer">
  <p>This report was generated by Defect Insight, a rule-based software defect detector.</p>
  <p>&copy; {year} Defect Insight.</p>
</div>
</body>
</html>
"""
