"""
JSON Catalog - Loads card definitions from a local JSON file.

File format: a list of card records, or ``{"cards": [...]}``.
Each record is validated with CardRecord before it enters the catalog.
"""

from __future__ import annotations
import json
import logging
from pathlib import Path

from pydantic import ValidationError

from ..engine_core.errors import CatalogUnavailable
from .base import InMemoryCatalog
from .records import CardRecord

logger = logging.getLogger(__name__)


class JsonCatalog(InMemoryCatalog):
    """In-memory catalog populated from a JSON file."""

    def __init__(self, records: list[CardRecord], source: str | None = None):
        super().__init__(record.to_definition() for record in records)
        self.source = source

    @classmethod
    def from_path(cls, path: str | Path) -> JsonCatalog:
        """
        Load and validate a catalog file.

        Raises CatalogUnavailable if the file cannot be read or parsed,
        and ValueError if a record fails validation.
        """
        path = Path(path)
        try:
            with open(path, encoding="utf-8") as f:
                raw = json.load(f)
        except OSError as e:
            raise CatalogUnavailable(f"cannot read {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise CatalogUnavailable(f"invalid JSON in {path}: {e}") from e

        entries = raw.get("cards", []) if isinstance(raw, dict) else raw
        if not isinstance(entries, list):
            raise CatalogUnavailable(f"{path} does not contain a card list")

        records = []
        for i, entry in enumerate(entries):
            try:
                records.append(CardRecord.model_validate(entry))
            except ValidationError as e:
                raise ValueError(f"Invalid card record at index {i} in {path}: {e}") from e

        logger.info("Loaded %d cards from %s", len(records), path)
        return cls(records, source=str(path))
