"""
Game Database.

Handles loading and validation of static game data (unit templates,
skills, items).
"""

import json
import logging
from pathlib import Path
from typing import Any

import jsonschema

from higher_engine.errors import DataNotFoundError

# category folder -> schema file
CATEGORIES: dict[str, str] = {
    "units": "unit.schema.json",
    "skills": "skill.schema.json",
    "items": "item.schema.json",
}


class Database:
    """
    Central storage for static game data.

    Layout on disk:
        <root>/schemas/<name>.schema.json
        <root>/database/<category>/*.json

    Each data file holds a single record or a list of records. Every record
    must carry an ``id`` and validate against its category schema.
    """

    def __init__(self, data_path: Path | str):
        self._data_path = Path(data_path)
        self._schemas: dict[str, Any] = {}

        # Data stores
        self.units: dict[str, dict[str, Any]] = {}
        self.skills: dict[str, dict[str, Any]] = {}
        self.items: dict[str, dict[str, Any]] = {}

        self.logger = logging.getLogger(__name__)

    @property
    def data_path(self) -> Path:
        return self._data_path

    def load_all(self) -> None:
        """Load all data from disk."""
        self._load_schemas()

        self.units = self._load_category("units")
        self.skills = self._load_category("skills")
        self.items = self._load_category("items")

        self.logger.info(
            "Loaded %d units, %d skills, %d items from %s",
            len(self.units),
            len(self.skills),
            len(self.items),
            self._data_path,
        )

    def _load_schemas(self) -> None:
        """Load JSON schemas."""
        schema_dir = self._data_path / "schemas"
        if not schema_dir.exists():
            self.logger.warning("Schema directory not found: %s", schema_dir)
            return

        for schema_file in sorted(schema_dir.glob("*.schema.json")):
            try:
                with open(schema_file, 'r', encoding='utf-8') as f:
                    self._schemas[schema_file.name] = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                self.logger.error("Failed to load schema %s: %s", schema_file, e)

    def _load_category(self, folder: str) -> dict[str, dict[str, Any]]:
        """Load all JSON files in a category folder."""
        category_dir = self._data_path / "database" / folder
        data_store: dict[str, dict[str, Any]] = {}

        if not category_dir.exists():
            self.logger.warning("Data directory not found: %s", category_dir)
            return data_store

        schema_name = CATEGORIES[folder]
        schema = self._schemas.get(schema_name)
        if not schema:
            self.logger.warning("No schema found for %s (%s)", folder, schema_name)
            return data_store

        for file_path in sorted(category_dir.glob("*.json")):
            try:
                with open(file_path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                self.logger.error("Failed to load %s: %s", file_path, e)
                continue

            records = data if isinstance(data, list) else [data]
            for record in records:
                try:
                    jsonschema.validate(instance=record, schema=schema)
                except jsonschema.ValidationError as e:
                    self.logger.error("Validation error in %s: %s", file_path, e.message)
                    continue
                if 'id' in record:
                    data_store[record['id']] = record

        return data_store

    def get_unit(self, unit_id: str) -> dict[str, Any] | None:
        return self.units.get(unit_id)

    def get_skill(self, skill_id: str) -> dict[str, Any] | None:
        return self.skills.get(skill_id)

    def get_item(self, item_id: str) -> dict[str, Any] | None:
        return self.items.get(item_id)

    def require(self, category: str, record_id: str) -> dict[str, Any]:
        """
        Get a record, raising if it does not exist.

        Raises:
            DataNotFoundError: if the category has no such id
        """
        if category not in CATEGORIES:
            raise ValueError(f"Unknown data category: {category!r}")
        store: dict[str, dict[str, Any]] = getattr(self, category)
        record = store.get(record_id)
        if record is None:
            raise DataNotFoundError(category, record_id)
        return record
