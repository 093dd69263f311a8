"""Tests for run configuration."""
import pytest
from pydantic import ValidationError

from describekit.config import RunConfig, load_config


class TestRunConfig:
    def test_default_settings(self):
        """Defaults record every guard failure and keep the recap short."""
        cfg = RunConfig()

        assert cfg.before_each_failure == "per_case"
        assert cfg.show_traceback is False
        assert cfg.log_level == "WARNING"

    def test_log_level_is_normalised(self):
        assert RunConfig(log_level="debug").log_level == "DEBUG"

    def test_unknown_log_level(self):
        with pytest.raises(ValidationError):
            RunConfig(log_level="chatty")

    def test_unknown_failure_policy(self):
        with pytest.raises(ValidationError):
            RunConfig(before_each_failure="sometimes")


class TestLoadConfig:
    def test_no_path_gives_defaults(self):
        assert load_config(None) == RunConfig()

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "describekit.yaml"
        path.write_text("before_each_failure: once\nshow_traceback: true\n")

        cfg = load_config(str(path))

        assert cfg.before_each_failure == "once"
        assert cfg.show_traceback is True

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert load_config(str(path)) == RunConfig()
