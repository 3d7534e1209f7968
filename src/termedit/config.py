"""
Editor settings and the JSON file they can be loaded from.
"""

import json
import logging
import os
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Final, Optional

from . import __version__

logger = logging.getLogger(__name__)

CONFIG_PATH: Final[str] = os.path.join(os.path.expanduser("~"), ".config", "termedit.json")

TAB_SIZE: Final[int] = 4
MAX_LINE_LENGTH: Final[int] = 1000
MESSAGE_DURATION: Final[float] = 5.0
QUIT_TIMES: Final[int] = 2
DEFAULT_FILENAME: Final[str] = "untitled.c"
VERSION: Final[str] = __version__


@dataclass(frozen=True)
class EditorConfig:
    """Settings shared by the document model, renderer and engine."""

    tab_width: int = TAB_SIZE
    max_line_length: int = MAX_LINE_LENGTH
    message_duration: float = MESSAGE_DURATION
    quit_times: int = QUIT_TIMES
    default_filename: str = DEFAULT_FILENAME
    save_directory: Optional[str] = None
    split_separator: str = "|"

    def __post_init__(self) -> None:
        if self.tab_width < 1:
            raise ValueError("tab_width must be at least 1")
        if self.max_line_length < 1:
            raise ValueError("max_line_length must be at least 1")


def _accepts(name: str, value: Any) -> bool:
    """Check that a raw JSON value fits the type of the named setting."""

    if name in ("tab_width", "max_line_length", "quit_times"):
        return isinstance(value, int) and not isinstance(value, bool) and value >= 1
    if name == "message_duration":
        return isinstance(value, (int, float)) and not isinstance(value, bool) and value >= 0
    if name == "save_directory":
        return value is None or isinstance(value, str)
    if name in ("default_filename", "split_separator"):
        return isinstance(value, str) and bool(value)

    return False


def config_from_dict(data: Dict[str, Any], base: Optional[EditorConfig] = None) -> EditorConfig:
    """
    Build a config from a mapping, skipping unknown keys and bad values.

    Args:
        data: Raw settings, usually decoded from JSON
        base: Config whose values are used for anything not overridden

    Returns:
        The merged EditorConfig
    """

    base = base or EditorConfig()
    known = {f.name for f in fields(EditorConfig)}
    overrides: Dict[str, Any] = {}

    for name, value in data.items():
        if name not in known:
            logger.debug("Ignoring unknown config key %r", name)
            continue

        if not _accepts(name, value):
            logger.warning("Ignoring invalid value for %s: %r", name, value)
            continue

        overrides[name] = value

    return replace(base, **overrides)


def load_config(path: Optional[str] = None) -> EditorConfig:
    """
    Load settings from a JSON file.

    A missing, unreadable or malformed file yields the defaults.
    """

    config_path = path or CONFIG_PATH

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return EditorConfig()
    except (OSError, ValueError) as e:
        logger.warning("Could not read config %s: %s", config_path, e)
        return EditorConfig()

    if not isinstance(data, dict):
        logger.warning("Config %s is not a JSON object", config_path)
        return EditorConfig()

    return config_from_dict(data)
