"""Tests for the single-module and batch detection flows."""

import logging

import pytest

from defect_insight.batch import detect, process_batch
from defect_insight.config import ThresholdConfig
from defect_insight.exceptions import NoValidDataError, PersistenceError
from defect_insight.identity import ANONYMOUS, StaticIdentity
from defect_insight.metrics.models import MetricsRecord


class FailingSink:
    """Store that always fails, to check persistence is best effort."""

    def __init__(self, exc):
        self.exc = exc
        self.calls = 0

    def save_result(self, user_id, metrics, verdict):
        self.calls += 1
        raise self.exc


class RecordingSink:
    def __init__(self):
        self.saved = []

    def save_result(self, user_id, metrics, verdict):
        self.saved.append((user_id, metrics, verdict))
        return str(len(self.saved))


class TestDetect:
    def test_returns_record_and_verdict(self):
        metrics, verdict = detect({"v(g)": "12"})
        assert metrics.vg == 12.0
        assert verdict.defect_detected is True

    def test_persists_for_signed_in_user(self):
        sink = RecordingSink()
        detect({"vg": 1}, identity=StaticIdentity("alice"), store=sink)
        assert len(sink.saved) == 1
        assert sink.saved[0][0] == "alice"
        assert sink.saved[0][2].defect_detected is False

    def test_anonymous_is_not_persisted(self):
        sink = RecordingSink()
        detect({"vg": 30}, identity=ANONYMOUS, store=sink)
        assert sink.saved == []

    def test_blank_user_is_anonymous(self):
        sink = RecordingSink()
        detect({"vg": 30}, identity=StaticIdentity("   "), store=sink)
        assert sink.saved == []

    def test_store_failure_still_returns_verdict(self, caplog):
        sink = FailingSink(PersistenceError("write", "disk full"))
        with caplog.at_level(logging.WARNING, logger="defect_insight"):
            _, verdict = detect({"vg": 11}, identity=StaticIdentity("bob"), store=sink)
        assert verdict.defect_detected is True
        assert sink.calls == 1
        assert "Error storing defect result" in caplog.text

    def test_custom_thresholds(self):
        _, verdict = detect({"vg": 6}, thresholds=ThresholdConfig(vg_limit=5))
        assert verdict.defect_detected is True


class TestProcessBatch:
    def test_summary_counts(self, zero_row):
        rows = [dict(zero_row, vg=11), dict(zero_row), dict(zero_row, ev=5), dict(zero_row)]
        batch = process_batch(rows)
        assert batch.total_modules == 4
        assert batch.defective_modules == 2
        assert batch.defect_percentage == 50.0
        assert batch.clean_modules == 2

    def test_results_keep_input_order(self, zero_row):
        rows = [dict(zero_row, loc=n) for n in range(5)]
        batch = process_batch(rows)
        assert [r.index for r in batch.results] == [1, 2, 3, 4, 5]
        assert [r.metrics.loc for r in batch.results] == [0, 1, 2, 3, 4]

    def test_percentage_in_range(self, zero_row):
        batch = process_batch([dict(zero_row, vg=11)] * 3)
        assert batch.defect_percentage == 100.0
        batch = process_batch([dict(zero_row)] * 3)
        assert batch.defect_percentage == 0.0

    def test_one_of_three(self, zero_row):
        batch = process_batch([dict(zero_row, vg=11), dict(zero_row), dict(zero_row)])
        assert batch.defect_percentage == pytest.approx(33.333, rel=1e-3)

    def test_verdicts_match_single_classification(self, zero_row):
        rows = [dict(zero_row, loc=60, branchCount=25), dict(zero_row, e=2000)]
        batch = process_batch(rows)
        for row, result in zip(rows, batch.results):
            assert result.verdict == detect(row)[1]

    def test_timestamps_are_iso_utc(self, zero_row):
        batch = process_batch([zero_row])
        assert batch.results[0].timestamp.endswith("+00:00")

    def test_accepts_records(self):
        batch = process_batch([MetricsRecord(vg=11), MetricsRecord()])
        assert batch.defective_modules == 1

    def test_empty_batch_raises(self):
        with pytest.raises(NoValidDataError) as excinfo:
            process_batch([])
        assert excinfo.value.rows_read == 0

    def test_each_row_persisted(self, zero_row):
        sink = RecordingSink()
        process_batch([zero_row, zero_row], identity=StaticIdentity("carol"), store=sink)
        assert len(sink.saved) == 2

    def test_persistence_failure_does_not_abort(self, zero_row):
        sink = FailingSink(RuntimeError("backend gone"))
        batch = process_batch(
            [dict(zero_row, vg=11), zero_row], identity=StaticIdentity("dave"), store=sink
        )
        assert batch.total_modules == 2
        assert batch.defective_modules == 1
        assert sink.calls == 2

    def test_batch_is_idempotent(self, zero_row):
        rows = [dict(zero_row, vg=11), dict(zero_row, lOCode=200, lOComment=1)]
        first = process_batch(rows)
        second = process_batch(rows)
        assert [r.verdict for r in first.results] == [r.verdict for r in second.results]
        assert first.defect_percentage == second.defect_percentage

    def test_real_store_round_trip(self, zero_row, store):
        process_batch([dict(zero_row, vg=11), zero_row], identity=StaticIdentity("erin"), store=store)
        assert store.summary("erin") == {"total": 2, "defective": 1}
