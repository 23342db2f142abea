"""
Tests for CLI helpers: configuration loading and logging setup.
"""

import json
import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from fixtures import SAMPLE_CONFIG, write_config
from repository_rdf.app.cli.helpers import (
    JSONFormatter,
    load_config,
    print_summary,
    setup_logging,
)

SAMPLE_CONFIG_FILE = Path(__file__).resolve().parents[2] / "config.sample.json"


@pytest.mark.unit
class TestLoadConfig:

    def test_valid_config(self, tmp_path):
        path = write_config(tmp_path, SAMPLE_CONFIG)
        assert load_config(str(path)) == SAMPLE_CONFIG

    def test_empty_path(self):
        with pytest.raises(ValueError):
            load_config("")

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "absent.json"))

    def test_wrong_extension(self, tmp_path):
        path = tmp_path / "config.txt"
        path.write_text("{}", encoding="utf-8")
        with pytest.raises(ValueError, match=".json"):
            load_config(str(path))

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid JSON"):
            load_config(str(path))

    def test_non_object_document(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ValueError, match="JSON object"):
            load_config(str(path))

    def test_namespaces_must_map_strings(self, tmp_path):
        path = write_config(tmp_path, {"namespaces": {"ex": 5}})
        with pytest.raises(ValueError, match="namespaces"):
            load_config(str(path))

    def test_workspaces_must_be_names(self, tmp_path):
        path = write_config(tmp_path, {"workspaces": "default"})
        with pytest.raises(ValueError, match="workspaces"):
            load_config(str(path))

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
    def test_symlink_rejected(self, tmp_path):
        target = write_config(tmp_path, SAMPLE_CONFIG, name="real.json")
        link = tmp_path / "link.json"
        try:
            link.symlink_to(target)
        except OSError:
            pytest.skip("cannot create symlinks here")
        with pytest.raises(PermissionError):
            load_config(str(link))


@pytest.mark.unit
class TestSetupLogging:

    def test_console_only(self):
        assert setup_logging(level="WARNING") is None
        assert logging.getLogger().level == logging.WARNING

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "logs" / "run.log"
        assert setup_logging(config={"level": "INFO", "file": str(log_file)}) == str(log_file)
        logging.getLogger("repository_rdf.test").info("hello")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "hello" in log_file.read_text(encoding="utf-8")

    def test_json_format(self):
        setup_logging(config={"format": "json"})
        formatters = [h.formatter for h in logging.getLogger().handlers]
        assert any(isinstance(f, JSONFormatter) for f in formatters)

    def test_repeat_call_replaces_handlers(self):
        setup_logging(level="INFO")
        count = len(logging.getLogger().handlers)
        setup_logging(level="DEBUG")
        assert len(logging.getLogger().handlers) == count
        assert logging.getLogger().level == logging.DEBUG

    def test_explicit_level_wins_over_config(self):
        setup_logging(level="ERROR", config={"level": "DEBUG"})
        assert logging.getLogger().level == logging.ERROR

    def test_rotation_from_sample_config(self, tmp_path):
        options = dict(load_config(str(SAMPLE_CONFIG_FILE))["logging"], file=str(tmp_path / "run.log"))
        setup_logging(config=options)
        rotating = [h for h in logging.getLogger().handlers if isinstance(h, RotatingFileHandler)]
        assert len(rotating) == 1
        assert rotating[0].backupCount == 5
        assert rotating[0].maxBytes == 10 * 1024 * 1024

    def test_rotation_disabled(self, tmp_path):
        setup_logging(config={"file": str(tmp_path / "run.log"), "rotation": {"enabled": False}})
        file_handlers = [h for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler)]
        assert len(file_handlers) == 1
        assert not isinstance(file_handlers[0], RotatingFileHandler)


@pytest.mark.unit
class TestJSONFormatter:

    def test_payload(self):
        record = logging.LogRecord("repository_rdf", logging.INFO, __file__, 10, "loaded %d", (3,), None)
        record.node = "/books/1"
        payload = json.loads(JSONFormatter().format(record))
        assert payload["message"] == "loaded 3"
        assert payload["level"] == "INFO"
        assert payload["node"] == "/books/1"


@pytest.mark.unit
def test_print_summary(capsys):
    print_summary("Loaded books.ttl", {"mixins": 1, "properties": 3}, width=10)
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.splitlines() == [
        "=" * 10,
        "Loaded books.ttl",
        "=" * 10,
        "  properties: 3",
        "  mixins: 1",
    ]
