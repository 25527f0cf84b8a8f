"""Per-user preference storage for the selected account."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import orjson
from structlog import get_logger


logger = get_logger(__name__)


class PreferenceStore(ABC):
    """Abstract interface for string-valued user preferences."""

    @abstractmethod
    def get_string(self, key: str) -> str | None:
        """Read a preference.

        Returns:
            The stored string, or None if unset or unreadable

        """

    @abstractmethod
    def set_string(self, key: str, value: str) -> bool:
        """Persist a preference.

        Returns:
            True if saved successfully, False otherwise

        """

    @abstractmethod
    def get_location(self) -> str:
        """Get a human-readable description of where preferences live."""


class JsonFilePreferenceStore(PreferenceStore):
    """Preferences kept in a small JSON object on disk."""

    def __init__(self, file_path: Path) -> None:
        """Initialize storage with file path.

        Args:
            file_path: Path to the JSON preferences file

        """
        self.file_path = file_path

    def _load_all(self) -> dict[str, Any]:
        try:
            data = orjson.loads(self.file_path.read_bytes())
        except FileNotFoundError:
            return {}
        except orjson.JSONDecodeError:
            logger.warning("preferences_json_decode_error", path=str(self.file_path))
            return {}
        except OSError as e:
            logger.warning(
                "preferences_file_read_error", path=str(self.file_path), error=str(e)
            )
            return {}

        if not isinstance(data, dict):
            logger.warning("preferences_unexpected_format", path=str(self.file_path))
            return {}
        return data

    def get_string(self, key: str) -> str | None:
        value = self._load_all().get(key)
        return value if isinstance(value, str) else None

    def set_string(self, key: str, value: str) -> bool:
        data = self._load_all()
        data[key] = value

        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            # Write to temp file first, then rename for atomicity
            temp_path = self.file_path.with_suffix(".json.tmp")
            temp_path.write_bytes(orjson.dumps(data, option=orjson.OPT_INDENT_2))
            temp_path.replace(self.file_path)
        except OSError as e:
            logger.error(
                "preferences_save_failed", path=str(self.file_path), error=str(e)
            )
            return False

        logger.debug("preference_saved", key=key, path=str(self.file_path))
        return True

    def get_location(self) -> str:
        return str(self.file_path)


class InMemoryPreferenceStore(PreferenceStore):
    """Process-local preferences, for tests and embedding."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.values: dict[str, str] = dict(initial or {})

    def get_string(self, key: str) -> str | None:
        return self.values.get(key)

    def set_string(self, key: str, value: str) -> bool:
        self.values[key] = value
        return True

    def get_location(self) -> str:
        return "memory"
