"""Key/value persistence with the browser localStorage contract (string values)."""
import json
import logging
from pathlib import Path

LOG = logging.getLogger(__name__)


class MemoryStorage:
    """In-process storage; lost on exit."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = str(value)

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def clear(self) -> None:
        self._items.clear()


class FileStorage(MemoryStorage):
    """Storage persisted as a JSON object in a file. A corrupt file is treated as empty."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(self._load())

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            LOG.warning("Ignoring unreadable storage file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self._items), encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        super().set_item(key, value)
        self._save()

    def remove_item(self, key: str) -> None:
        super().remove_item(key)
        self._save()

    def clear(self) -> None:
        super().clear()
        self._save()
