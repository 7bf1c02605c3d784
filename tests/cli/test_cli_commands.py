"""End-to-end tests for the typer CLI."""

import json

import pytest
from typer.testing import CliRunner

from defect_insight import __version__
from defect_insight.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("DEFECT_INSIGHT_USER", raising=False)
    monkeypatch.delenv("DEFECT_INSIGHT_DATA_DIR", raising=False)


@pytest.fixture
def invoke(tmp_path):
    data_dir = str(tmp_path / "data")

    def _invoke(*args):
        return runner.invoke(app, ["--data-dir", data_dir, *args])

    return _invoke


@pytest.fixture
def csv_file(tmp_path, nasa_csv):
    path = tmp_path / "kc1.csv"
    path.write_text(nasa_csv, encoding="utf-8")
    return path


class TestMain:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_bad_config_value(self, tmp_path):
        (tmp_path / "defect-insight.toml").write_text("history_limit = 0\n")
        result = runner.invoke(app, ["performance"])
        assert result.exit_code == 1
        assert "Configuration error" in result.output


class TestDetect:
    def test_json_output(self, invoke):
        result = invoke("detect", "-m", "v(g)=12", "-m", "loc=40", "--json")
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["defectDetected"] is True
        assert data["reason"] == "High cyclomatic complexity (vg > 10)"
        assert data["metrics"]["vg"] == 12

    def test_rich_output(self, invoke):
        result = invoke("detect", "-m", "loc=10")
        assert result.exit_code == 0
        assert "No defect detected" in result.output

    def test_input_file(self, invoke, tmp_path):
        path = tmp_path / "module.json"
        path.write_text(json.dumps({"loc": 60, "branchCount": 25}))
        result = invoke("detect", "--input", str(path), "--json")
        assert json.loads(result.stdout)["reason"] == "High branch density in sizeable module"

    def test_no_metrics(self, invoke):
        result = invoke("detect")
        assert result.exit_code == 2

    def test_malformed_metric(self, invoke):
        result = invoke("detect", "-m", "loc")
        assert result.exit_code != 0


class TestBatch:
    def test_json(self, invoke, csv_file):
        result = invoke("batch", "--file", str(csv_file), "--format", "json")
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["totalModules"] == 3
        assert data["defectiveModules"] == 2
        assert [r["index"] for r in data["results"]] == [1, 2, 3]

    def test_rich(self, invoke, csv_file):
        result = invoke("batch", "--file", str(csv_file))
        assert result.exit_code == 0
        assert "Analysis Summary" in result.output
        assert "66.7%" in result.output

    def test_report(self, invoke, csv_file, tmp_path):
        target = tmp_path / "report.html"
        result = invoke("batch", "--file", str(csv_file), "--format", "csv", "--report", str(target))
        assert result.exit_code == 0
        assert "Batch Defect Detection Report" in target.read_text()

    def test_report_into_new_directory(self, invoke, csv_file, tmp_path):
        result = invoke("batch", "--file", str(csv_file), "--report", str(tmp_path / "reports") + "/")
        assert result.exit_code == 0, result.output
        reports = tmp_path / "reports"
        assert reports.is_dir()
        assert len(list(reports.glob("defect-batch-report-*.html"))) == 1

    def test_no_valid_rows(self, invoke, tmp_path):
        path = tmp_path / "bad.csv"
        path.write_text("name,size\nfoo,1\n")
        result = invoke("batch", "--file", str(path))
        assert result.exit_code == 1
        assert "No valid data found" in result.output

    def test_requires_one_source(self, invoke, csv_file):
        assert invoke("batch").exit_code == 2
        assert invoke("batch", "--file", str(csv_file), "--url", "http://x/a.csv").exit_code == 2

    def test_unknown_format(self, invoke, csv_file):
        assert invoke("batch", "--file", str(csv_file), "--format", "xml").exit_code == 2


class TestHistory:
    def test_requires_user(self, invoke):
        result = invoke("history")
        assert result.exit_code == 0
        assert "No user set" in result.output

    def test_records_and_lists(self, invoke, csv_file):
        invoke("--user", "alice", "detect", "-m", "vg=20")
        invoke("--user", "alice", "batch", "--file", str(csv_file), "--format", "json")

        result = invoke("--user", "alice", "history", "--json")
        assert result.exit_code == 0
        entries = json.loads(result.stdout)
        assert len(entries) == 4
        assert all(e["user_id"] == "alice" for e in entries)

        result = invoke("--user", "alice", "history")
        assert "Detection History" in result.output
        assert "3 of 4" in result.output

    def test_anonymous_detect_not_recorded(self, invoke):
        invoke("detect", "-m", "vg=20")
        result = invoke("--user", "alice", "history", "--json")
        assert json.loads(result.stdout) == []

    def test_limit_and_clear(self, invoke):
        for _ in range(3):
            invoke("--user", "bob", "detect", "-m", "vg=1")
        result = invoke("--user", "bob", "history", "--json", "--limit", "2")
        assert len(json.loads(result.stdout)) == 2

        result = invoke("--user", "bob", "history", "--clear")
        assert "Removed 3 result(s)" in result.output
        assert json.loads(invoke("--user", "bob", "history", "--json").stdout) == []


class TestDashboards:
    def test_performance_json(self, invoke):
        result = invoke("performance", "--json")
        assert json.loads(result.stdout)["accuracy"] == 0.87

    def test_performance_rich(self, invoke):
        result = invoke("performance")
        assert "Confusion Matrix" in result.output
        assert "87%" in result.output

    def test_training(self, invoke):
        result = invoke("training")
        assert result.exit_code == 0
        assert "Feature Importance" in result.output
        assert json.loads(invoke("training", "--json").stdout)["defectDistribution"]["defective"] == 100
