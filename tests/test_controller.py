import json
import threading
import time

from conftest import MemoryStore
from controller import SpellListController
from errors import CatalogError
from models import Spell
from storage import encode_favorites

FIREBALL = Spell(index="fireball", name="Fireball", desc="...")
SHIELD = Spell(index="shield", name="Shield", desc="Barrier.")


def test_start_loads_catalog_and_favorites():
    store = MemoryStore({"favorites": encode_favorites([SHIELD])})
    controller = SpellListController(store, fetch=lambda: [FIREBALL, SHIELD])
    state = controller.start().result(timeout=5)
    assert state.catalog == (FIREBALL, SHIELD)
    assert state.favorites == (SHIELD,)
    assert state.error is None
    controller.close()


def test_catalog_failure_does_not_block_favorites():
    def failing_fetch():
        raise CatalogError("offline")

    store = MemoryStore({"favorites": encode_favorites([FIREBALL])})
    controller = SpellListController(store, fetch=failing_fetch)
    state = controller.start().result(timeout=5)
    assert state.catalog == ()
    assert state.error == "offline"
    assert state.favorites == (FIREBALL,)
    controller.close()


def test_corrupt_favorites_do_not_block_catalog():
    controller = SpellListController(MemoryStore({"favorites": "[oops"}), fetch=lambda: [FIREBALL])
    state = controller.start().result(timeout=5)
    assert state.catalog == (FIREBALL,)
    assert state.favorites == ()
    controller.close()


def test_unexpected_fetch_error_still_settles_startup():
    def broken_fetch():
        raise RuntimeError("bug")

    controller = SpellListController(MemoryStore(), fetch=broken_fetch)
    state = controller.start().result(timeout=5)
    assert state.catalog == ()
    controller.close()


def test_loads_run_concurrently():
    release = threading.Event()

    def slow_fetch():
        release.wait(timeout=5)
        return [FIREBALL]

    store = MemoryStore({"favorites": encode_favorites([SHIELD])})
    controller = SpellListController(store, fetch=slow_fetch)
    done = controller.start()
    # favorites land while the catalog is still in flight
    for _ in range(100):
        if controller.state.favorites:
            break
        time.sleep(0.01)
    assert controller.state.favorites == (SHIELD,)
    assert controller.state.catalog == ()
    release.set()
    assert done.result(timeout=5).catalog == (FIREBALL,)
    controller.close()


def test_toggle_scenario_updates_state_and_store():
    store = MemoryStore()
    controller = SpellListController(store, fetch=lambda: [FIREBALL])
    controller.start().result(timeout=5)

    controller.toggle_favorite(FIREBALL).result()
    assert controller.state.favorites == (FIREBALL,)
    assert controller.is_favorite(FIREBALL)
    assert json.loads(store.items["favorites"]) == [FIREBALL.to_dict()]

    controller.toggle_favorite(FIREBALL).result()
    assert controller.state.favorites == ()
    assert json.loads(store.items["favorites"]) == []
    controller.close()


def test_details_overlay():
    controller = SpellListController(MemoryStore(), fetch=lambda: [FIREBALL])
    state = controller.open_details(SHIELD)
    assert state.selected == SHIELD
    assert state.details_visible
    state = controller.close_details()
    assert not state.details_visible
    controller.close()


def test_dismissed_details_stay_closed_after_toggle():
    controller = SpellListController(MemoryStore(), fetch=lambda: [FIREBALL])
    controller.start().result(timeout=5)
    controller.open_details(FIREBALL)
    controller.close_details()
    controller.toggle_favorite(FIREBALL).result()
    assert not controller.state.details_visible
    assert controller.state.favorites == (FIREBALL,)
    controller.close()


def test_catalog_failure_logged_once(caplog):
    def failing_fetch():
        raise CatalogError("offline")

    controller = SpellListController(MemoryStore(), fetch=failing_fetch)
    controller.start().result(timeout=5)
    assert caplog.text.count("Error fetching spell data") == 1
    controller.close()
