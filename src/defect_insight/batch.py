"""Detection flows: one module at a time, or a whole CSV batch.

Both flows normalize, classify, and then try to persist the verdict for the
current user. Persistence is best effort: a failing store is logged and the
verdict is still returned (or kept in the batch summary).
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from typing import Optional, Union

from .classifier import classify
from .config import DEFAULT_THRESHOLDS, ThresholdConfig
from .exceptions import NoValidDataError, PersistenceError
from .identity import IdentityProvider
from .logging_config import get_logger
from .metrics.models import BatchResult, DefectVerdict, MetricsRecord, ModuleResult
from .metrics.normalizer import RawValue, normalize
from .persistence.store import ResultSink

logger = get_logger(__name__)

Row = Union[MetricsRecord, Mapping[str, RawValue]]


def detect(
    raw: Row,
    *,
    identity: Optional[IdentityProvider] = None,
    store: Optional[ResultSink] = None,
    thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> tuple[MetricsRecord, DefectVerdict]:
    """Classify a single module and record the result for the current user."""
    metrics = normalize(raw)
    verdict = classify(metrics, thresholds=thresholds)
    _persist(identity, store, metrics, verdict)
    return metrics, verdict


def process_batch(
    rows: Sequence[Row],
    *,
    identity: Optional[IdentityProvider] = None,
    store: Optional[ResultSink] = None,
    thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> BatchResult:
    """Classify every row in input order and summarize.

    Args:
        rows: Raw rows or already-normalized records
        identity: Who to persist results for; None or anonymous skips persistence
        store: Where to persist results
        thresholds: Classifier limits

    Returns:
        An immutable BatchResult; ``results[k].index == k + 1``.

    Raises:
        NoValidDataError: If ``rows`` is empty. Callers are expected to
            reject empty input first; this is never reported as 0%.
    """
    if not rows:
        raise NoValidDataError(rows_read=0)

    results: list[ModuleResult] = []
    defective = 0

    for index, raw in enumerate(rows, start=1):
        metrics = normalize(raw)
        verdict = classify(metrics, thresholds=thresholds)
        results.append(
            ModuleResult(
                index=index,
                metrics=metrics,
                verdict=verdict,
                timestamp=datetime.now(timezone.utc).isoformat(),
            )
        )
        if verdict.defect_detected:
            defective += 1

        _persist(identity, store, metrics, verdict)

    total = len(rows)
    logger.info("Batch classified: %d of %d modules defective", defective, total)
    return BatchResult(
        total_modules=total,
        defective_modules=defective,
        defect_percentage=100.0 * defective / total,
        results=tuple(results),
    )


def _persist(
    identity: Optional[IdentityProvider],
    store: Optional[ResultSink],
    metrics: MetricsRecord,
    verdict: DefectVerdict,
) -> None:
    if identity is None or store is None:
        return
    user_id = identity.current_user_id()
    if not user_id:
        return
    try:
        store.save_result(user_id, metrics, verdict)
    except PersistenceError as e:
        logger.warning("Error storing defect result: %s", e)
    except Exception as e:
        logger.warning("Error storing defect result: %s", e, exc_info=True)
