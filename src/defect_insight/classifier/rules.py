"""The defect rule chain.

Each rule is a named predicate over a ``MetricsRecord`` plus the reason shown
when it fires. Rules are evaluated in list order and the first match wins, so
order is part of the behaviour: a module with both ``vg=11`` and ``ev=5`` is
reported for cyclomatic complexity, never for essential complexity.

The ground-truth short-circuit (a record carrying ``defects``) is not a rule
here; the classifier checks it before walking the chain.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from ..config import DEFAULT_THRESHOLDS, ThresholdConfig
from ..metrics.models import MetricsRecord

Predicate = Callable[[MetricsRecord], bool]

GROUND_TRUTH_REASON = "Defect detected from provided data"


@dataclass(frozen=True)
class Rule:
    """One ``(predicate, reason)`` entry in the chain."""

    name: str
    reason: str
    predicate: Predicate

    def matches(self, metrics: MetricsRecord) -> bool:
        return self.predicate(metrics)


def ratio(numerator: float, denominator: float) -> float:
    """Divide with the denominator floored at 1."""
    return numerator / max(denominator, 1)


def build_rules(thresholds: ThresholdConfig = DEFAULT_THRESHOLDS) -> tuple[Rule, ...]:
    """Build the ordered rule chain for a set of limits."""
    t = thresholds
    return (
        Rule(
            name="high_cyclomatic_complexity",
            reason=f"High cyclomatic complexity (vg > {t.vg_limit:g})",
            predicate=lambda m: m.vg > t.vg_limit,
        ),
        Rule(
            name="high_essential_complexity",
            reason=f"High essential complexity (ev > {t.ev_limit:g})",
            predicate=lambda m: m.ev > t.ev_limit,
        ),
        Rule(
            name="high_halstead_effort",
            reason=f"High Halstead effort (e > {t.effort_limit:g})",
            predicate=lambda m: m.e > t.effort_limit,
        ),
        Rule(
            name="insufficient_comments",
            reason="Insufficient comments for large code module",
            predicate=lambda m: (
                m.lo_code > t.comment_min_code_lines
                and ratio(m.lo_comment, m.lo_code) < t.comment_ratio_min
            ),
        ),
        Rule(
            name="high_branch_density",
            reason="High branch density in sizeable module",
            predicate=lambda m: (
                m.loc > t.branch_min_loc and ratio(m.branch_count, m.loc) > t.branch_density_max
            ),
        ),
    )


DEFAULT_RULES: tuple[Rule, ...] = build_rules(DEFAULT_THRESHOLDS)
