"""Tests for configuration loading and validation."""

import os
from pathlib import Path

import pytest

from defect_insight.config import DetectorConfig, ThresholdConfig, load_config
from defect_insight.exceptions import ConfigFileError, InvalidConfigError


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep the user's real home/project config and env out of the tests."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("DEFECT_INSIGHT_"):
            monkeypatch.delenv(key)


class TestDefaults:
    def test_defaults(self):
        config = load_config()
        assert config == DetectorConfig()
        assert config.user is None
        assert config.thresholds.vg_limit == 10
        assert config.db_path == Path(".defect-insight") / "results.db"

    def test_thresholds_match_rule_chain(self):
        t = ThresholdConfig()
        assert (t.vg_limit, t.ev_limit, t.effort_limit) == (10, 4, 1000)
        assert (t.comment_min_code_lines, t.comment_ratio_min) == (100, 0.1)
        assert (t.branch_min_loc, t.branch_density_max) == (50, 0.3)


class TestSources:
    def test_project_file(self, tmp_path):
        (tmp_path / "defect-insight.toml").write_text(
            'user = "alice"\nhistory_limit = 5\n\n[thresholds]\nvg_limit = 15\n'
        )
        config = load_config()
        assert config.user == "alice"
        assert config.history_limit == 5
        assert config.thresholds.vg_limit == 15
        assert config.thresholds.ev_limit == 4

    def test_explicit_file_beats_project_file(self, tmp_path):
        (tmp_path / "defect-insight.toml").write_text('user = "alice"\n')
        explicit = tmp_path / "ci.toml"
        explicit.write_text('user = "ci-bot"\n')
        assert load_config(config_file=explicit).user == "ci-bot"

    def test_env_beats_file(self, tmp_path, monkeypatch):
        (tmp_path / "defect-insight.toml").write_text("history_limit = 5\n")
        monkeypatch.setenv("DEFECT_INSIGHT_HISTORY_LIMIT", "7")
        monkeypatch.setenv("DEFECT_INSIGHT_USER", "env-user")
        config = load_config()
        assert config.history_limit == 7
        assert config.user == "env-user"

    def test_overrides_beat_env(self, monkeypatch):
        monkeypatch.setenv("DEFECT_INSIGHT_USER", "env-user")
        assert load_config(user="cli-user").user == "cli-user"

    def test_none_override_ignored(self, monkeypatch):
        monkeypatch.setenv("DEFECT_INSIGHT_DATA_DIR", "/tmp/results")
        assert load_config(data_dir=None).data_dir == "/tmp/results"

    def test_log_file_from_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("DEFECT_INSIGHT_LOG_FILE", str(tmp_path / "runs.log"))
        assert load_config().log_file == str(tmp_path / "runs.log")
        assert DetectorConfig().log_file is None

    def test_verbosity_flags(self):
        assert load_config(verbose=True).verbosity == "verbose"
        assert load_config(quiet=True).verbosity == "quiet"
        assert load_config(verbose=False, quiet=False).verbosity == "normal"


class TestValidation:
    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigFileError):
            load_config(config_file=tmp_path / "nope.toml")

    def test_unparsable_file(self, tmp_path):
        bad = tmp_path / "bad.toml"
        bad.write_text("user = [unclosed\n")
        with pytest.raises(ConfigFileError):
            load_config(config_file=bad)

    def test_bad_env_int(self, monkeypatch):
        monkeypatch.setenv("DEFECT_INSIGHT_HISTORY_LIMIT", "lots")
        with pytest.raises(InvalidConfigError) as excinfo:
            load_config()
        assert excinfo.value.key == "DEFECT_INSIGHT_HISTORY_LIMIT"

    def test_unknown_key(self, tmp_path):
        (tmp_path / "defect-insight.toml").write_text("colour = 'blue'\n")
        with pytest.raises(InvalidConfigError):
            load_config()

    def test_unknown_threshold(self, tmp_path):
        (tmp_path / "defect-insight.toml").write_text("[thresholds]\nwarp = 9\n")
        with pytest.raises(InvalidConfigError):
            load_config()

    @pytest.mark.parametrize(
        "kwargs",
        [{"vg_limit": -1}, {"comment_ratio_min": 1.5}, {"branch_density_max": -0.1}],
    )
    def test_bad_thresholds(self, kwargs):
        with pytest.raises(InvalidConfigError):
            ThresholdConfig(**kwargs)

    @pytest.mark.parametrize(
        "kwargs",
        [{"history_limit": 0}, {"fetch_timeout_seconds": 0}, {"verbosity": "loud"}, {"db_name": ""}],
    )
    def test_bad_detector_config(self, kwargs):
        with pytest.raises(InvalidConfigError):
            DetectorConfig(**kwargs)
