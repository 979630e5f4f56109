"""
Read-back utilities for generated @cms-types packages.

Both functions are best effort: missing or unreadable index files are reported,
never raised.
"""

import re
from pathlib import Path
from typing import Dict, List

from loguru import logger

from cmstypes.constants import CONTENT_TYPES_NAMESPACE, PACKAGE_SCOPE, SECTIONS_NAMESPACE

NAMESPACES = [CONTENT_TYPES_NAMESPACE, SECTIONS_NAMESPACE]

_EXPORT_PATTERN = re.compile(r"export \{ \w+Schema, (\w+)Type \}")


def _index_path(output_dir: Path, namespace: str) -> Path:
    return Path(output_dir) / PACKAGE_SCOPE / namespace / "index.ts"


def list_available_types(output_dir: Path) -> Dict[str, List[str]]:
    """
    List the identifiers exported by each generated package.

    Args:
        output_dir: node_modules directory containing @cms-types

    Returns:
        Mapping of namespace to identifiers, in index order; namespaces without
        an index are omitted
    """
    logger.info("📦 Types available for import:")

    available = {}
    for namespace in NAMESPACES:
        index_path = _index_path(output_dir, namespace)
        if not index_path.exists():
            continue

        try:
            content = index_path.read_text(encoding="utf-8")
        except OSError as e:
            logger.error(f"❌ Could not read {index_path}: {e}")
            continue

        identifiers = _EXPORT_PATTERN.findall(content)
        available[namespace] = identifiers

        logger.info(f"{PACKAGE_SCOPE}/{namespace}:")
        for i, identifier in enumerate(identifiers, 1):
            logger.info(f"   {i}. {identifier}Type")

    if not available:
        logger.info("No generated types found. Run the generator first: python -m cmstypes")

    return available


def check_types_status(output_dir: Path) -> bool:
    """
    Report whether both packages have been generated.

    Args:
        output_dir: node_modules directory containing @cms-types

    Returns:
        True if both index files exist
    """
    logger.info("🔍 Types status:")

    all_present = True
    for namespace in NAMESPACES:
        exists = _index_path(output_dir, namespace).exists()
        all_present = all_present and exists
        logger.info(f"   {namespace}: {'✅ generated' if exists else '❌ not found'}")

    if not all_present:
        logger.info("💡 To generate the types: python -m cmstypes")

    return all_present
