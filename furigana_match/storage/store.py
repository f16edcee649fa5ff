"""
Key-value stores holding string values, in the manner of browser local storage.
"""

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from ..errors import ErrorCategory, ErrorSeverity, ProcessingError, StorageError


class KeyValueStore(ABC):
    """Base interface for string key-value storage."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None when the key is missing."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one."""
        pass


class MemoryStore(KeyValueStore):
    """In-memory store; nothing survives the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStore(KeyValueStore):
    """
    Store backed by a single JSON object file.

    The file is read on every get and rewritten on every set; it is created
    on the first write.
    """

    def __init__(self, path):
        """
        Initialize the store.

        Args:
            path: Path of the JSON file. Path will be resolved to absolute.
        """
        self.path = Path(path).resolve()

    def get(self, key: str) -> Optional[str]:
        data = self._read()
        value = data.get(key)
        return value if value is None else str(value)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + '.tmp')
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        tmp_path.replace(self.path)

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        with open(self.path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise StorageError(ProcessingError(
                category=ErrorCategory.STORAGE,
                severity=ErrorSeverity.WARNING,
                message="Store file is not a JSON object",
                details=f"{self.path} contains {type(data).__name__}, expected an object",
                suggested_actions=[
                    "Delete the store file to start fresh",
                    "Use --store to point at a different file"
                ],
                error_code="STORE_002"
            ))
        return data
