"""Configuration: where boards live.

The config file is YAML::

    storage:
      boards_path: ~/kanban/boards
      data_path: ~/.local/share/mkanban

``MKANBAN_CONFIG`` points at a different config file and
``MKANBAN_BOARDS_PATH`` overrides the boards root outright.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from mkanban.errors import ParseError
from mkanban.fsutil import read_text, safe_write
from mkanban.parser import parse_yaml, serialize_yaml

logger = logging.getLogger(__name__)

CONFIG_ENV = "MKANBAN_CONFIG"
BOARDS_ENV = "MKANBAN_BOARDS_PATH"

DEFAULT_CONFIG_PATH = Path("~/.config/mkanban/config.yml")
DEFAULT_DATA_PATH = Path("~/.local/share/mkanban")
BOARDS_DIR_NAME = "boards"


@dataclass
class Config:
    boards_path: Path
    data_path: Path

    @classmethod
    def default(cls) -> "Config":
        data = DEFAULT_DATA_PATH.expanduser()
        return cls(boards_path=data / BOARDS_DIR_NAME, data_path=data)


def config_path() -> Path:
    return Path(os.environ.get(CONFIG_ENV) or DEFAULT_CONFIG_PATH).expanduser()


def load_config(path: Path | None = None) -> Config:
    """Read the config file, falling back to defaults for anything unset.

    A missing file is not an error. A file that is not a YAML mapping, or
    whose ``storage`` entry is not a mapping, raises ParseError.
    """
    path = path or config_path()
    config = Config.default()

    if path.exists():
        data = parse_yaml(read_text(path), str(path))
        storage = data.get("storage") or {}
        if not isinstance(storage, dict):
            raise ParseError(f"'storage' in {path} must be a mapping")
        data_path = storage.get("data_path")
        if data_path:
            config.data_path = Path(str(data_path)).expanduser()
            config.boards_path = config.data_path / BOARDS_DIR_NAME
        boards_path = storage.get("boards_path")
        if boards_path:
            config.boards_path = Path(str(boards_path)).expanduser()
    else:
        logger.debug("no config file at %s, using defaults", path)

    override = os.environ.get(BOARDS_ENV)
    if override:
        config.boards_path = Path(override).expanduser()

    return config


def save_config(config: Config, path: Path | None = None) -> None:
    path = path or config_path()
    data = {
        "storage": {
            "boards_path": str(config.boards_path),
            "data_path": str(config.data_path),
        }
    }
    safe_write(path, serialize_yaml(data))
