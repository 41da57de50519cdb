import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path

from domviz.constants import (
    DEFAULT_HOST, DEFAULT_LOG_LEVEL, DEFAULT_PORT, DEFAULT_SNIPPET_LENGTH
)

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    log_level: str = DEFAULT_LOG_LEVEL
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    snippet_length: int = DEFAULT_SNIPPET_LENGTH
    confirm_deletions: bool = True

    @classmethod
    def from_file(cls, path: str | Path) -> "Settings":
        """
        Load settings from a JSON object.

        A missing file gives the defaults, and unknown keys are ignored.
        A file that is not a JSON object, or a value of the wrong type,
        raises ValueError.
        """
        path = Path(path)
        if not path.exists():
            logger.debug("No config file at %s, using defaults", path)
            return cls()

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid config file {path}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid config file {path}: expected an object")

        types = {f.name: f.type for f in fields(cls)}
        for key in data.keys() - types.keys():
            logger.warning("Ignoring unknown config key %r", key)

        values = {key: value for key, value in data.items() if key in types}
        for key, value in values.items():
            expected = types[key]
            # bool is an int subclass; only bool fields accept true/false.
            if not isinstance(value, expected) or \
                    (isinstance(value, bool) and expected is not bool):
                raise ValueError(
                    f"Invalid config file {path}: {key!r} must be "
                    f"{expected.__name__}, got {type(value).__name__}"
                )
        return cls(**values)
