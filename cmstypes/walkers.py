#!/usr/bin/env python3
"""
Catalog walkers for content-types.json and sections.json.

Each walker reads one catalog, finds the schema fragments nested inside it and
turns every fragment into a GenerationUnit ready for emission.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from loguru import logger

from cmstypes.errors import CatalogReadError
from cmstypes.naming import IdentifierRegistry
from cmstypes.schema_nodes import parse_schema_node
from cmstypes.translator import translate, type_alias


@dataclass(frozen=True)
class GenerationUnit:
    """One generated schema, ready to be written as {identifier}.ts."""

    identifier: str
    schema_expression: str
    type_alias: str
    source_title: Optional[str] = None
    source_description: Optional[str] = None

    @property
    def file_name(self) -> str:
        return f"{self.identifier}.ts"

    @property
    def export_line(self) -> str:
        return f"export {{ {self.identifier}Schema, {self.identifier}Type }} from './{self.identifier}';"


@dataclass
class WalkResult:
    """Units produced by one walk, in catalog order."""

    units: List[GenerationUnit] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.units)

    @property
    def exports(self) -> List[str]:
        return [unit.export_line for unit in self.units]


UnitObserver = Callable[[GenerationUnit], None]


def log_unit(unit: GenerationUnit) -> None:
    """Default progress observer."""
    if unit.source_title:
        logger.info(f"✅ {unit.identifier} ({unit.source_title})")
    else:
        logger.info(f"✅ {unit.identifier}")


def load_catalog(path: Path) -> List[Any]:
    """
    Read a catalog file.

    Args:
        path: Path to content-types.json or sections.json

    Returns:
        The decoded top-level array

    Raises:
        CatalogReadError: If the file is missing, malformed or not an array
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            catalog = json.load(f)
    except (OSError, ValueError, RecursionError) as e:
        # ValueError covers malformed JSON and invalid UTF-8
        raise CatalogReadError(f"Could not read catalog {path}: {e}") from e

    if not isinstance(catalog, list):
        raise CatalogReadError(f"Catalog {path} must contain a JSON array, got {type(catalog).__name__}")

    return catalog


def _dict_list(value: Any) -> List[Dict[str, Any]]:
    """Entries of a nested collection that are records; anything else is empty."""
    if not isinstance(value, list):
        return []
    return [entry for entry in value if isinstance(entry, dict)]


def _display_name(record: Dict[str, Any]) -> str:
    name = record.get("name")
    return "" if name is None else str(name)


class CatalogWalker:
    """Shared plumbing for the two catalog walkers."""

    def __init__(self, observer: Optional[UnitObserver] = None):
        self.observer = observer or log_unit

    def build_unit(self, identifier: str, raw_schema: Dict[str, Any]) -> GenerationUnit:
        """
        Translate one schema fragment under an already assigned identifier.

        Raises:
            SchemaError: If the schema is cyclic or nested too deeply
        """
        node = parse_schema_node(raw_schema)
        unit = GenerationUnit(
            identifier=identifier,
            schema_expression=translate(node),
            type_alias=type_alias(identifier),
            source_title=node.title,
            source_description=node.description,
        )
        self.observer(unit)
        return unit

    def walk(self, catalog: List[Any]) -> WalkResult:
        raise NotImplementedError

    def walk_file(self, path: Path) -> WalkResult:
        """Load a catalog file and walk it."""
        return self.walk(load_catalog(path))


class ContentTypesWalker(CatalogWalker):
    """
    Walks content-types.json.

    Every configuration schema becomes one unit named after the concatenation
    of its content-type, schema-set and configuration names.
    """

    def walk(self, catalog: List[Any]) -> WalkResult:
        logger.info("📋 Generating Content-Types types...")

        registry = IdentifierRegistry()
        result = WalkResult()

        for content_type in _dict_list(catalog):
            for schema_set in _dict_list(content_type.get("configurationSchemaSets")):
                for config in _dict_list(schema_set.get("configurations")):
                    schema = config.get("schema")
                    if not isinstance(schema, dict):
                        continue

                    # Normalize the joined name once so the digit prefix only applies at the front
                    raw_name = f"{_display_name(content_type)}{_display_name(schema_set)}{_display_name(config)}"
                    identifier = registry.assign(raw_name)
                    result.units.append(self.build_unit(identifier, schema))

        return result


class SectionsWalker(CatalogWalker):
    """
    Walks sections.json.

    Sections without a name are named Section{index} after their position.
    """

    def walk(self, catalog: List[Any]) -> WalkResult:
        logger.info("📄 Generating Sections types...")

        registry = IdentifierRegistry()
        result = WalkResult()

        for index, section in enumerate(catalog):
            if not isinstance(section, dict):
                continue
            schema = section.get("schema")
            if not isinstance(schema, dict):
                continue

            base_name = section.get("name") or f"Section{index}"
            identifier = registry.assign(str(base_name))
            result.units.append(self.build_unit(identifier, schema))

        return result
