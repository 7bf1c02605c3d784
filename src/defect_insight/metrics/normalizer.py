"""Turn heterogeneous metric rows into canonical ``MetricsRecord``s.

Rows arrive from the single-module form (strings typed by a user) or from
CSV files exported by different tools, so the same metric shows up under
several names: ``v(g)`` in the NASA MDP datasets, ``cyclomatic_complexity``
in others. Resolution is a case-sensitive exact match against ``ALIASES``.

Normalization is total: missing or malformed values become 0 and nothing is
raised for a mapping input. Row acceptance for bulk ingestion is a separate
check, :func:`has_required_metrics`.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from typing import Any, Optional, Union

from .models import CANONICAL_FIELDS, DEFECTS_FIELD, MetricsRecord

RawValue = Union[float, int, str, bool, None]

# Alias -> canonical name.
ALIASES: dict[str, str] = {
    "v(g)": "vg",
    "ev(g)": "ev",
    "iv(g)": "iv",
    "branch_count": "branchCount",
    "lines_of_code": "loc",
    "cyclomatic_complexity": "vg",
    "essential_complexity": "ev",
    "design_complexity": "iv",
    "halstead_length": "n",
    "halstead_volume": "v",
    "halstead_level": "l",
    "halstead_difficulty": "d",
    "halstead_intelligence": "i",
    "halstead_effort": "e",
    "halstead_time": "t",
    "lines_of_code_no_comments": "lOCode",
    "lines_of_comments": "lOComment",
    "blank_lines": "lOBlank",
    "code_and_comment_lines": "locCodeAndComment",
    "unique_operators": "uniq_Op",
    "unique_operands": "uniq_Opnd",
    "total_operators": "total_Op",
    "total_operands": "total_Opnd",
}

# NASA MDP graph-complexity columns take priority over the bare canonical key.
GRAPH_COLUMNS: dict[str, str] = {"vg": "v(g)", "ev": "ev(g)", "iv": "iv(g)"}

# Plain decimal or exponent notation; no digit separators, no "inf"/"nan".
_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def _build_candidates() -> dict[str, tuple[str, ...]]:
    """Canonical name -> keys to try.

    ``v(g)``, ``ev(g)`` and ``iv(g)`` come before their canonical key; every
    other field tries the canonical key first. Remaining aliases follow in
    table order.
    """
    candidates: dict[str, list[str]] = {}
    for name in CANONICAL_FIELDS:
        graph_column = GRAPH_COLUMNS.get(name)
        candidates[name] = [graph_column, name] if graph_column else [name]
    for alias, canonical in ALIASES.items():
        if alias not in candidates[canonical]:
            candidates[canonical].append(alias)
    return {name: tuple(keys) for name, keys in candidates.items()}


KEY_CANDIDATES: dict[str, tuple[str, ...]] = _build_candidates()


def coerce_value(value: RawValue) -> float:
    """Coerce one raw value to a finite float.

    Finite numbers and plain decimal strings (``"12"``, ``"-2.5"``, ``"1e3"``)
    pass through; the strings ``"true"``/``"false"`` (any case) and booleans
    map to 1/0; everything else becomes 0, including ``"1_000"``.
    """
    if isinstance(value, bool):
        return 1.0 if value else 0.0

    if isinstance(value, (int, float)):
        number = float(value)
        return number if math.isfinite(number) else 0.0

    if value is None:
        return 0.0

    text = str(value).strip()
    if _NUMBER_RE.fullmatch(text):
        number = float(text)
        if math.isfinite(number):
            return number
        return 0.0

    lowered = text.lower()
    if lowered == "true":
        return 1.0
    if lowered == "false":
        return 0.0
    return 0.0


def resolve_key(raw: Mapping[str, Any], canonical_name: str) -> Optional[str]:
    """Return the key in ``raw`` that supplies ``canonical_name``, if any."""
    for key in KEY_CANDIDATES[canonical_name]:
        if key in raw:
            return key
    return None


def normalize(raw: Mapping[str, RawValue]) -> MetricsRecord:
    """Build a canonical record from a raw key/value row.

    Absent metrics default to 0. ``defects`` is coerced the same way when
    present and stays ``None`` when absent. Unknown keys are ignored.

    Raises:
        TypeError: If ``raw`` is not a mapping at all.
    """
    if isinstance(raw, MetricsRecord):
        return raw
    if not isinstance(raw, Mapping):
        raise TypeError(f"expected a mapping of metric values, got {type(raw).__name__}")

    values: dict[str, Any] = {}
    for canonical_name, attr in CANONICAL_FIELDS.items():
        key = resolve_key(raw, canonical_name)
        values[attr] = coerce_value(raw[key]) if key is not None else 0.0

    if DEFECTS_FIELD in raw:
        values["defects"] = coerce_value(raw[DEFECTS_FIELD])

    return MetricsRecord(**values)


def missing_metrics(raw: Mapping[str, Any]) -> list[str]:
    """Canonical names that no key in ``raw`` resolves to."""
    return [name for name in CANONICAL_FIELDS if resolve_key(raw, name) is None]


def has_required_metrics(raw: Mapping[str, Any]) -> bool:
    """True if all twenty canonical metrics resolve to some key in ``raw``."""
    return not missing_metrics(raw)
