"""Favorites domain components.

``persistence`` owns the keyed record store backing the favorites list while
``movietrack.services.toggle`` decides which store operation a user action
maps to.
"""

from .persistence import FavoritesStore

__all__ = ["FavoritesStore"]
