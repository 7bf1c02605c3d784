"""Tests for the metric value objects."""

import dataclasses

import pytest

from defect_insight.metrics.models import (
    CANONICAL_FIELDS,
    BatchResult,
    DefectVerdict,
    MetricsRecord,
    ModuleResult,
)


class TestMetricsRecord:
    def test_defaults(self):
        record = MetricsRecord()
        assert all(record.get(name) == 0.0 for name in CANONICAL_FIELDS)
        assert record.defects is None
        assert not record.has_ground_truth

    def test_is_frozen(self):
        record = MetricsRecord(loc=10)
        with pytest.raises(dataclasses.FrozenInstanceError):
            record.loc = 20

    def test_to_dict_uses_canonical_names(self):
        data = MetricsRecord(lo_code=120, branch_count=3).to_dict()
        assert list(data) == list(CANONICAL_FIELDS)
        assert data["lOCode"] == 120
        assert data["branchCount"] == 3
        assert "defects" not in data

    def test_to_dict_includes_ground_truth(self):
        data = MetricsRecord(defects=1.0).to_dict()
        assert data["defects"] == 1.0

    def test_from_dict_restores_record(self):
        record = MetricsRecord(loc=60, vg=2, lo_comment=10, defects=0.0)
        assert MetricsRecord.from_dict(record.to_dict()) == record

    def test_every_canonical_name_maps_to_a_field(self):
        names = {f.name for f in dataclasses.fields(MetricsRecord)}
        assert set(CANONICAL_FIELDS.values()) <= names
        assert len(CANONICAL_FIELDS) == 20


class TestBatchResult:
    def test_to_dict_shape(self):
        result = ModuleResult(
            index=1,
            metrics=MetricsRecord(vg=11),
            verdict=DefectVerdict(True, "High cyclomatic complexity (vg > 10)"),
            timestamp="2024-01-01T00:00:00+00:00",
        )
        batch = BatchResult(
            total_modules=2, defective_modules=1, defect_percentage=50.0, results=(result,)
        )
        data = batch.to_dict()
        assert data["totalModules"] == 2
        assert data["defectiveModules"] == 1
        assert data["defectPercentage"] == 50.0
        assert data["results"][0]["index"] == 1
        assert data["results"][0]["defectDetected"] is True
        assert data["results"][0]["metrics"]["vg"] == 11
        assert batch.clean_modules == 1
