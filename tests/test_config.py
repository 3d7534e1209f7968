from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from termedit import __version__
from termedit.config import VERSION, EditorConfig, config_from_dict, load_config
from termedit.log import setup_logging


def test_defaults() -> None:
    config = EditorConfig()

    assert config.tab_width == 4
    assert config.max_line_length == 1000
    assert config.quit_times == 2
    assert config.default_filename == "untitled.c"
    assert config.save_directory is None


@pytest.mark.parametrize("field", ["tab_width", "max_line_length"])
def test_rejects_non_positive_sizes(field: str) -> None:
    with pytest.raises(ValueError):
        EditorConfig(**{field: 0})


def test_version_comes_from_package() -> None:
    assert VERSION == __version__


def test_load_missing_file_gives_defaults(tmp_path: Path) -> None:
    assert load_config(str(tmp_path / "absent.json")) == EditorConfig()


def test_load_overrides(tmp_path: Path) -> None:
    path = tmp_path / "termedit.json"
    path.write_text(json.dumps({"tab_width": 8, "save_directory": "docs"}), encoding="utf-8")

    config = load_config(str(path))

    assert config.tab_width == 8
    assert config.save_directory == "docs"
    assert config.max_line_length == 1000


def test_load_malformed_file_gives_defaults(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / "termedit.json"
    path.write_text("{not json", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="termedit.config"):
        assert load_config(str(path)) == EditorConfig()

    assert "Could not read config" in caplog.text


def test_load_non_object_gives_defaults(tmp_path: Path) -> None:
    path = tmp_path / "termedit.json"
    path.write_text("[1, 2]", encoding="utf-8")

    assert load_config(str(path)) == EditorConfig()


def test_bad_values_and_unknown_keys_are_skipped() -> None:
    config = config_from_dict({
        "tab_width": 0,
        "quit_times": True,
        "message_duration": 2.5,
        "split_separator": "",
        "colour": "blue",
    })

    assert config == EditorConfig(message_duration=2.5)


def test_config_from_dict_keeps_base() -> None:
    base = EditorConfig(tab_width=2)

    assert config_from_dict({"quit_times": 5}, base) == EditorConfig(tab_width=2, quit_times=5)


def test_setup_logging_writes_to_file(tmp_path: Path) -> None:
    path = tmp_path / "termedit.log"

    logger = setup_logging(str(path), logging.DEBUG)
    logging.getLogger("termedit.core.editor").info("opened %s", "x.c")
    for handler in logger.handlers:
        handler.flush()

    assert "INFO termedit.core.editor: opened x.c" in path.read_text(encoding="utf-8")

    setup_logging(None)
    assert all(isinstance(h, logging.NullHandler) for h in logger.handlers)
    logger.propagate = True
