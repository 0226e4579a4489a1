import logging

import requests

from config import SPELLS_API_URL
from services import load_catalog
from utils import configure_logging

configure_logging(logging.DEBUG)

print(f"\n--- Fetching {SPELLS_API_URL} ---")
with requests.Session() as session:
    spells = load_catalog(session)
print(f"Entries found: {len(spells)}")
if spells:
    print(f"First spell: {spells[0].name} ({spells[0].index})")
else:
    print("Failed to fetch the catalog, see the log above.")
