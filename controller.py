import concurrent.futures
import logging
import threading

from favorites import FavoritesManager
from services import fetch_spells, try_load_catalog
from state import (
    CatalogLoaded,
    CloseDetails,
    FavoritesChanged,
    OpenDetails,
    ScreenState,
    reduce,
)

logger = logging.getLogger(__name__)


class SpellListController:
    """Owns the screen state for the spell list.

    ``start`` issues the catalog fetch and the favorites load side by side;
    neither waits for the other and a failure in one leaves the other intact.
    """

    def __init__(self, store, fetch=fetch_spells):
        self.fetch = fetch
        self.favorites = FavoritesManager(store)
        self._state = ScreenState()
        self._lock = threading.Lock()
        self._loader = concurrent.futures.ThreadPoolExecutor(
            max_workers=2, thread_name_prefix="spell-loader"
        )
        self.favorites.subscribe(lambda spells: self.dispatch(FavoritesChanged(spells)))

    @property
    def state(self):
        return self._state

    def dispatch(self, action):
        with self._lock:
            self._state = reduce(self._state, action)
        return self._state

    # --- STARTUP ---
    def _load_catalog(self):
        spells, error = try_load_catalog(self.fetch)
        self.dispatch(CatalogLoaded(tuple(spells), error=error))

    def start(self):
        """Begin both startup loads; the returned future resolves once both finish."""
        futures = [
            self._loader.submit(self._load_catalog),
            self._loader.submit(self.favorites.load_favorites),
        ]
        done = concurrent.futures.Future()
        settle_lock = threading.Lock()

        def _settle(_):
            with settle_lock:
                if done.done() or not all(f.done() for f in futures):
                    return
                for f in futures:
                    if f.exception() is not None:
                        logger.error("Startup load failed: %s", f.exception())
                done.set_result(self._state)

        for f in futures:
            f.add_done_callback(_settle)
        return done

    # --- USER ACTIONS ---
    def is_favorite(self, spell):
        return self.favorites.is_favorite(spell)

    def toggle_favorite(self, spell):
        return self.favorites.toggle_favorite(spell)

    def open_details(self, spell):
        return self.dispatch(OpenDetails(spell))

    def close_details(self):
        return self.dispatch(CloseDetails())

    def close(self):
        self._loader.shutdown(wait=True)
        self.favorites.close()
