"""JSON file key-value store."""

import json
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from water_log.services.storage import KeyValueStore

_logger = logging.getLogger(__name__)


@dataclass
class JsonFileStore(KeyValueStore):
    """Keeps every key in a single JSON object on local disk."""

    path: Path

    def get(self, key: str) -> str | None:
        """Return the stored value for a key."""
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> bool:
        """Write a value atomically; OS errors are logged and reported as False."""
        values = self._read_all()
        values[key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(values, handle, ensure_ascii=False, indent=2)
                os.replace(tmp_name, self.path)
            except (OSError, UnicodeError):
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except (OSError, UnicodeError):
            _logger.exception("Failed to write %s to %s", key, self.path)
            return False
        return True

    def _read_all(self) -> dict[str, object]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError:
            _logger.exception("Failed to read %s", self.path)
            return {}
        except UnicodeDecodeError:
            _logger.exception(
                "Store file %s is not valid UTF-8, ignoring it", self.path
            )
            return {}
        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            _logger.exception(
                "Store file %s is not valid JSON, ignoring it", self.path
            )
            return {}
        if not isinstance(data, dict):
            _logger.error("Store file %s does not hold a JSON object", self.path)
            return {}
        return data
