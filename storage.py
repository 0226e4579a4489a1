import json
import logging
import os
import threading

from config import FAVORITES_FILE
from errors import StorageError
from models import Spell

logger = logging.getLogger(__name__)


class JsonFileStore:
    """String-keyed store persisted as one JSON object in a local file."""

    def __init__(self, path=FAVORITES_FILE):
        self.path = path
        self._lock = threading.Lock()

    def _read_all(self):
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError, RecursionError) as e:
            raise StorageError(f"cannot read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"{self.path} does not hold a JSON object")
        return data

    def get_item(self, key):
        """Return the stored string for ``key`` or ``None`` if absent."""
        with self._lock:
            value = self._read_all().get(key)
        return value if value is None else str(value)

    def set_item(self, key, value):
        """Store ``value`` under ``key``, rewriting the file atomically."""
        with self._lock:
            try:
                data = self._read_all()
            except StorageError:
                logger.warning("Discarding unreadable store %s", self.path)
                data = {}
            data[key] = value
            tmp_path = f"{self.path}.tmp"
            try:
                with open(tmp_path, "w", encoding="utf-8") as f:
                    json.dump(data, f)
                os.replace(tmp_path, self.path)
            except OSError as e:
                raise StorageError(f"cannot write {self.path}: {e}") from e


# --- FAVORITES CODEC ---
def encode_favorites(favorites):
    """Serialize spells into the JSON array kept under the favorites key."""
    return json.dumps([spell.to_dict() for spell in favorites])

def decode_favorites(raw):
    """Parse a stored favorites array. Raises ``ValueError`` on bad input."""
    try:
        data = json.loads(raw)
    except RecursionError as e:
        raise ValueError("favorites value is nested too deeply") from e
    if not isinstance(data, list):
        raise ValueError("favorites value is not a JSON array")
    return [Spell.from_dict(entry) for entry in data]
