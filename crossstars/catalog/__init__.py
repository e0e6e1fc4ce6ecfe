"""
Catalog Module - Card definition lookup.

The engine resolves decklist names through a CardCatalog. Two
implementations ship with the engine:
- InMemoryCatalog: definitions held in a dict
- JsonCatalog: definitions loaded and validated from a JSON file
"""

from .base import CardCatalog, InMemoryCatalog
from .records import CardRecord
from .json_catalog import JsonCatalog
from .cards import SAMPLE_CARDS, SAMPLE_DECKLIST, default_catalog

__all__ = [
    "CardCatalog",
    "InMemoryCatalog",
    "CardRecord",
    "JsonCatalog",
    "SAMPLE_CARDS",
    "SAMPLE_DECKLIST",
    "default_catalog",
]
