"""Remote movie catalog access."""

from .client import CatalogClient
from .result import CatalogResult

__all__ = ["CatalogClient", "CatalogResult"]
