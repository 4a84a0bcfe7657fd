"""
List Feed Script Tests

Tests for the list_feed command-line tool:
- Reads the catalog named by --config
- Routes its log output through the shared rotating file setup

To run these tests:
    pytest tests/scripts/test_list_feed.py -v
"""

import json
import logging
import logging.handlers
import sys

import pytest
import yaml

from scripts import list_feed


@pytest.fixture
def restore_root_logging():
    """Remove handlers added to the root logger during a test"""
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    yield root
    for handler in root.handlers[:]:
        if handler not in saved_handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(saved_level)


@pytest.fixture
def catalog_yaml(tmp_path):
    path = tmp_path / "catalog.yaml"
    path.write_text(yaml.safe_dump({"storage_base_path": str(tmp_path / "db")}))
    return path


@pytest.mark.integration
def test_empty_feed_as_json(
    monkeypatch,
    capsys,
    catalog_yaml,
    tmp_path,
    restore_root_logging,
):
    log_file = tmp_path / "feed.log"
    monkeypatch.setattr(
        sys,
        "argv",
        [
            "list_feed.py",
            "--config",
            str(catalog_yaml),
            "--json",
            "--log-file",
            str(log_file),
        ],
    )

    assert list_feed.main() == 0
    assert json.loads(capsys.readouterr().out) == []


@pytest.mark.integration
def test_logging_goes_to_rotating_file(
    monkeypatch,
    catalog_yaml,
    tmp_path,
    restore_root_logging,
):
    log_file = tmp_path / "feed.log"
    monkeypatch.setattr(
        sys,
        "argv",
        ["list_feed.py", "--config", str(catalog_yaml), "--log-file", str(log_file)],
    )

    list_feed.main()

    root = restore_root_logging
    file_handlers = [
        h for h in root.handlers
        if isinstance(h, logging.handlers.TimedRotatingFileHandler)
    ]
    assert [h.baseFilename for h in file_handlers] == [str(log_file)]
    assert root.level == logging.WARNING

    logging.getLogger("scripts.list_feed").warning("catalog is empty")
    for handler in file_handlers:
        handler.flush()
    assert "catalog is empty" in log_file.read_text()
