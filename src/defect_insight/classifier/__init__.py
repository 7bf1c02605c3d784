"""Rule-chain defect classifier."""

from .engine import classify
from .rules import DEFAULT_RULES, GROUND_TRUTH_REASON, Rule, build_rules

__all__ = ["classify", "Rule", "build_rules", "DEFAULT_RULES", "GROUND_TRUTH_REASON"]
