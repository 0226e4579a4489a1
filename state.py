"""Screen state for the spell list and the pure transitions that change it.

Every transition takes the current ``ScreenState`` and an action and returns
a new state. Nothing here performs I/O; fetching the catalog and persisting
favorites belong to the controller and the favorites manager.
"""

from dataclasses import dataclass, replace
from typing import Optional, Sequence, Tuple

from models import Spell


# --- FAVORITE SET HELPERS ---
def contains(favorites: Sequence[Spell], spell: Spell) -> bool:
    return any(item.index == spell.index for item in favorites)


def add_item(favorites: Sequence[Spell], spell: Spell) -> Tuple[Spell, ...]:
    """Append ``spell`` unless an entry with the same index is already present."""
    if contains(favorites, spell):
        return tuple(favorites)
    return tuple(favorites) + (spell,)


def remove_item(favorites: Sequence[Spell], spell: Spell) -> Tuple[Spell, ...]:
    return tuple(item for item in favorites if item.index != spell.index)


def dedupe(spells: Sequence[Spell]) -> Tuple[Spell, ...]:
    """Keep the first occurrence of each index, preserving order."""
    result: Tuple[Spell, ...] = ()
    for spell in spells:
        result = add_item(result, spell)
    return result


# --- STATE ---
@dataclass(frozen=True)
class ScreenState:
    catalog: Tuple[Spell, ...] = ()
    favorites: Tuple[Spell, ...] = ()
    selected: Optional[Spell] = None
    details_visible: bool = False
    error: Optional[str] = None

    def is_favorite(self, spell: Spell) -> bool:
        return contains(self.favorites, spell)


# --- ACTIONS ---
@dataclass(frozen=True)
class CatalogLoaded:
    spells: Tuple[Spell, ...]
    error: Optional[str] = None


@dataclass(frozen=True)
class FavoritesChanged:
    spells: Tuple[Spell, ...]


@dataclass(frozen=True)
class OpenDetails:
    spell: Spell


@dataclass(frozen=True)
class CloseDetails:
    pass


def reduce(state: ScreenState, action) -> ScreenState:
    """Apply one action to ``state`` and return the resulting state."""
    if isinstance(action, CatalogLoaded):
        return replace(state, catalog=tuple(action.spells), error=action.error)
    if isinstance(action, FavoritesChanged):
        return replace(state, favorites=dedupe(action.spells))
    if isinstance(action, OpenDetails):
        return replace(state, selected=action.spell, details_visible=True)
    if isinstance(action, CloseDetails):
        # selected spell is kept
        return replace(state, details_visible=False)
    raise TypeError(f"unknown action: {action!r}")
