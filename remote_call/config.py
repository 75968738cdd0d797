"""Options consumed from the host project's configuration."""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

CONFIG_KEY = "remoteCall"


class ConfigError(Exception):
    """Invalid or unreadable configuration."""

    def __init__(self, message: str, source: str = ""):
        super().__init__(message)
        self.source = source


@dataclass
class RemoteCallOptions:
    """Options for a discovery pass.

    function_paths holds patterns relative to the project root, e.g.
    ["server/api/*", "server/utils/**"].
    """

    function_paths: list[str] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Any, source: str = "") -> "RemoteCallOptions":
        """Build options from a decoded config object.

        Raises:
            ConfigError: If function_paths is not a list of strings
        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError(f"Options must be an object, got {type(data).__name__}", source)

        paths = data.get("function_paths", [])
        if paths is None:
            paths = []
        if not isinstance(paths, list) or not all(isinstance(p, str) for p in paths):
            raise ConfigError("function_paths must be a list of strings", source)
        return cls(function_paths=list(paths))


def load_options(path: str | Path) -> RemoteCallOptions:
    """Load options from a JSON file.

    The file holds either the options object itself or an object with the
    options under a "remoteCall" key.

    Raises:
        ConfigError: If the file cannot be read or decoded
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Cannot load config {path}: {e}", str(path)) from e

    if isinstance(data, dict) and CONFIG_KEY in data:
        data = data[CONFIG_KEY]
    options = RemoteCallOptions.from_mapping(data, source=str(path))
    logger.info(f"Loaded {len(options.function_paths)} function paths from {path}")
    return options
