"""User favorites: an ordered, de-duplicated set of spells persisted locally."""

import concurrent.futures
import logging
import threading
from typing import Callable, List, Optional, Tuple

from config import FAVORITES_KEY
from errors import StorageError
from models import Spell
from state import add_item, contains, dedupe, remove_item
from storage import decode_favorites, encode_favorites

logger = logging.getLogger(__name__)


class FavoritesManager:
    """Manages the favorite set and keeps the key-value store in step with it.

    The in-memory set is the source of truth for the session. Every mutation
    rewrites the whole set to the store on a single background writer, so
    writes land in the order they were issued. Write failures are logged and
    reported through the returned future; they never reach the caller as
    exceptions.
    """

    def __init__(self, store, key: str = FAVORITES_KEY):
        self.store = store
        self.key = key
        self._favorites: Tuple[Spell, ...] = ()
        self._lock = threading.Lock()
        self._writer = concurrent.futures.ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="favorites-writer"
        )
        self._pending: List[concurrent.futures.Future] = []
        self._listeners: List[Callable[[Tuple[Spell, ...]], None]] = []

    # --- READ ---
    @property
    def favorites(self) -> Tuple[Spell, ...]:
        return self._favorites

    @property
    def count(self) -> int:
        return len(self._favorites)

    def is_favorite(self, spell: Spell) -> bool:
        """Check if a spell is in favorites.

        Args:
            spell: Spell to look up; only its ``index`` is compared

        Returns:
            True if an entry with the same index is present
        """
        return contains(self._favorites, spell)

    def subscribe(self, listener: Callable[[Tuple[Spell, ...]], None]):
        """Call ``listener`` with the new set after every change."""
        self._listeners.append(listener)

    # --- LOAD ---
    def load_favorites(self) -> Tuple[Spell, ...]:
        """Replace the set with the persisted one.

        A missing key leaves the set empty. An unreadable or malformed value
        is logged and also leaves the set empty.
        """
        try:
            raw = self.store.get_item(self.key)
            loaded = dedupe(decode_favorites(raw)) if raw is not None else ()
        except (StorageError, ValueError, RecursionError) as e:
            logger.error("Error loading favorites: %s", e)
            loaded = ()
        self._set(loaded)
        logger.info("Loaded %d favorites", len(loaded))
        return loaded

    # --- MUTATE ---
    def add_to_favorites(self, spell: Spell) -> Optional[concurrent.futures.Future]:
        """Add a spell to favorites.

        Args:
            spell: Spell to add

        Returns:
            Future for the persistence write, or None if the spell was
            already a favorite and nothing changed
        """
        with self._lock:
            if contains(self._favorites, spell):
                return None
            updated = add_item(self._favorites, spell)
        return self._commit(updated)

    def remove_from_favorites(self, spell: Spell) -> concurrent.futures.Future:
        """Remove every entry sharing the spell's index and persist the result."""
        with self._lock:
            updated = remove_item(self._favorites, spell)
        return self._commit(updated)

    def toggle_favorite(self, spell: Spell) -> Optional[concurrent.futures.Future]:
        if self.is_favorite(spell):
            return self.remove_from_favorites(spell)
        return self.add_to_favorites(spell)

    def clear(self) -> concurrent.futures.Future:
        return self._commit(())

    # --- PERSIST ---
    def _set(self, favorites: Tuple[Spell, ...]):
        with self._lock:
            self._favorites = favorites
        for listener in list(self._listeners):
            listener(favorites)

    def _commit(self, favorites: Tuple[Spell, ...]) -> concurrent.futures.Future:
        self._set(favorites)
        future = self._writer.submit(self._write, favorites)
        self._pending = [f for f in self._pending if not f.done()] + [future]
        return future

    def _write(self, favorites: Tuple[Spell, ...]) -> bool:
        try:
            self.store.set_item(self.key, encode_favorites(favorites))
        except (StorageError, OSError, TypeError, RecursionError) as e:
            logger.error("Error saving favorites: %s", e)
            return False
        return True

    def flush(self, timeout: Optional[float] = None) -> bool:
        """Wait for pending writes. Returns True if all of them succeeded."""
        pending, self._pending = self._pending, []
        done, not_done = concurrent.futures.wait(pending, timeout=timeout)
        return not not_done and all(f.exception() is None and f.result() for f in done)

    def close(self):
        self.flush()
        self._writer.shutdown(wait=True)
