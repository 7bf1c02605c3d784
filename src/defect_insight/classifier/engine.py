"""Evaluate the rule chain against one metrics record."""

from __future__ import annotations

from typing import Optional, Sequence

from ..config import ThresholdConfig
from ..logging_config import get_logger
from ..metrics.models import DefectVerdict, MetricsRecord
from .rules import DEFAULT_RULES, GROUND_TRUTH_REASON, Rule, build_rules

logger = get_logger(__name__)

NO_DEFECT = DefectVerdict(defect_detected=False, reason=None)


def classify(
    metrics: MetricsRecord,
    thresholds: Optional[ThresholdConfig] = None,
    rules: Optional[Sequence[Rule]] = None,
) -> DefectVerdict:
    """Classify one module.

    A record carrying ``defects`` is decided by that value alone; otherwise
    the first matching rule supplies the reason. No match means no defect.

    Args:
        metrics: Canonical record (see ``normalize``)
        thresholds: Limits to build the chain from; ignored if ``rules`` given
        rules: Explicit rule chain, mostly for tests

    Returns:
        A fresh DefectVerdict. Never raises for a well-formed record.
    """
    if metrics.defects is not None:
        detected = metrics.defects != 0
        logger.debug("Using defect status from provided data: %s", detected)
        return DefectVerdict(
            defect_detected=detected,
            reason=GROUND_TRUTH_REASON if detected else None,
        )

    if rules is None:
        rules = DEFAULT_RULES if thresholds is None else build_rules(thresholds)

    for rule in rules:
        if rule.matches(metrics):
            logger.debug("Rule %s fired: %s", rule.name, rule.reason)
            return DefectVerdict(defect_detected=True, reason=rule.reason)

    logger.debug("No rule fired")
    return NO_DEFECT
