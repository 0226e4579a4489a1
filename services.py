import logging

import requests

from config import REQUEST_TIMEOUT, SPELLS_API_URL, USER_AGENT
from errors import CatalogError
from models import Spell, SpellDetails

logger = logging.getLogger(__name__)

HEADERS = {
    "User-Agent": USER_AGENT,
    "Accept": "application/json",
}

# --- HELPERS ---
def fetch_json(url, session=None):
    """GET ``url`` and decode the JSON body, raising ``CatalogError`` on any failure."""
    http = session or requests
    try:
        response = http.get(url, headers=HEADERS, timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
        return response.json()
    except requests.RequestException as e:
        raise CatalogError(f"request to {url} failed: {e}") from e
    except (ValueError, RecursionError) as e:
        raise CatalogError(f"invalid JSON from {url}: {e}") from e

# --- CATALOG ---
def fetch_spells(session=None, url=SPELLS_API_URL):
    """Fetch the full catalog in server order."""
    payload = fetch_json(url, session)
    results = payload.get("results") if isinstance(payload, dict) else None
    if not isinstance(results, list):
        raise CatalogError(f"response from {url} has no 'results' list")
    try:
        return [Spell.from_dict(entry) for entry in results]
    except ValueError as e:
        raise CatalogError(f"malformed catalog entry: {e}") from e

def try_load_catalog(fetch=fetch_spells):
    """Run a catalog fetch, returning the spells and the failure message, if any.

    On failure the spell list is empty; the error is logged, never raised.
    """
    try:
        spells = fetch()
    except CatalogError as e:
        logger.error("Error fetching spell data: %s", e)
        return [], str(e)
    logger.info("Loaded %d spells", len(spells))
    return list(spells), None

def load_catalog(session=None):
    """Startup load: the catalog, or an empty list if it cannot be fetched."""
    spells, _ = try_load_catalog(lambda: fetch_spells(session))
    return spells

def fetch_spell_details(index, session=None):
    """Detail record for one spell, or ``None`` when it cannot be fetched."""
    url = f"{SPELLS_API_URL.rstrip('/')}/{index}"
    try:
        payload = fetch_json(url, session)
        return SpellDetails.from_dict(payload)
    except CatalogError:
        logger.exception("Error fetching details for %s", index)
    except (ValueError, AttributeError) as e:
        logger.warning("Malformed details for %s: %s", index, e)
    return None
