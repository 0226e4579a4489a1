import sys
from pathlib import Path

import pytest
import requests

# Ensure the project root is on the import path when running ``pytest`` directly.
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from errors import StorageError


class MemoryStore:
    """In-memory stand-in for the key-value store."""

    def __init__(self, items=None, fail_reads=False, fail_writes=False):
        self.items = dict(items or {})
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes
        self.writes = []

    def get_item(self, key):
        if self.fail_reads:
            raise StorageError("read failed")
        return self.items.get(key)

    def set_item(self, key, value):
        if self.fail_writes:
            raise StorageError("write failed")
        self.items[key] = value
        self.writes.append(value)


class FakeResponse:
    def __init__(self, payload=None, status_code=200, text=None):
        self.payload = payload
        self.status_code = status_code
        self.text = text

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if self.text is not None:
            raise ValueError("No JSON object could be decoded")
        return self.payload


class FakeSession:
    """Records GETs and answers from a url -> response (or exception) map."""

    def __init__(self, routes):
        self.routes = routes
        self.calls = []

    def get(self, url, headers=None, timeout=None):
        self.calls.append({"url": url, "headers": headers, "timeout": timeout})
        result = self.routes[url]
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def fireball():
    from models import Spell
    return Spell(index="fireball", name="Fireball", desc="A bright streak flashes...")


@pytest.fixture
def shield():
    from models import Spell
    return Spell(index="shield", name="Shield", desc="An invisible barrier of magical force.")
