#!/usr/bin/env python3
"""
Unified TypeBox type generator for CMS components.

Runs the content-types and sections pipelines. The two pipelines are
independent: a catalog that cannot be read yields zero types without stopping
the other one.

Usage:
    python -m cmstypes
    python -m cmstypes --content-types
    python -m cmstypes --sections
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from loguru import logger

from cmstypes.constants import (
    CONTENT_TYPES_FILE,
    CONTENT_TYPES_NAMESPACE,
    PACKAGE_SCOPE,
    SECTIONS_FILE,
    SECTIONS_NAMESPACE,
)
from cmstypes.config_utils import get_output_dir, get_source_dir
from cmstypes.emitter import CatalogEmitter, FileSystemSink, OutputSink
from cmstypes.errors import CmsTypesError
from cmstypes.walkers import CatalogWalker, ContentTypesWalker, SectionsWalker

SEPARATOR = "=" * 70


@dataclass
class GenerationResult:
    """Type counts for a generation run."""

    content_types: int = 0
    sections: int = 0

    @property
    def total(self) -> int:
        return self.content_types + self.sections


class UnifiedTypeGenerator:
    """Generates both @cms-types packages from the catalogs in source_dir."""

    def __init__(self, source_dir: Path, sink: OutputSink):
        """
        Initialize generator.

        Args:
            source_dir: Directory containing content-types.json and sections.json
            sink: Output sink rooted at the node_modules directory
        """
        self.source_dir = Path(source_dir)
        self.sink = sink
        self.content_types_emitter = CatalogEmitter(sink, CONTENT_TYPES_NAMESPACE)
        self.sections_emitter = CatalogEmitter(sink, SECTIONS_NAMESPACE)

        self.content_types_emitter.ensure_directories()
        self.sections_emitter.ensure_directories()

    def _run_pipeline(self, walker: CatalogWalker, catalog_file: str, emitter: CatalogEmitter) -> int:
        """
        Walk one catalog and emit its package.

        Returns:
            Number of types generated, 0 if the catalog could not be processed
        """
        catalog_path = self.source_dir / catalog_file

        try:
            result = walker.walk_file(catalog_path)
        except CmsTypesError as e:
            logger.error(f"❌ Error generating {emitter.namespace}: {e}")
            return 0

        try:
            return emitter.emit(result.units)
        except OSError as e:
            logger.error(f"❌ Error writing {emitter.package_name}: {e}")
            return 0

    def generate_content_types(self) -> int:
        return self._run_pipeline(ContentTypesWalker(), CONTENT_TYPES_FILE, self.content_types_emitter)

    def generate_sections(self) -> int:
        return self._run_pipeline(SectionsWalker(), SECTIONS_FILE, self.sections_emitter)

    def generate_all(self) -> GenerationResult:
        """
        Generate both packages.

        Returns:
            GenerationResult with per-catalog counts
        """
        logger.info("🔨 Unified CMS TypeBox Type Generator")
        logger.info(SEPARATOR)

        logger.info("📋 CONTENT-TYPES")
        content_types = self.generate_content_types()

        logger.info(SEPARATOR)

        logger.info("📄 SECTIONS")
        sections = self.generate_sections()

        logger.info(SEPARATOR)

        result = GenerationResult(content_types=content_types, sections=sections)

        logger.info("🎉 BUILD COMPLETE!")
        logger.info(f"📊 Total: {result.total} types generated")
        logger.info(f"   📋 Content-types: {result.content_types} types")
        logger.info(f"   📄 Sections: {result.sections} types")
        logger.info(
            f"📚 Usage: import {{ CarouselType }} from \"{PACKAGE_SCOPE}/{SECTIONS_NAMESPACE}\";"
        )

        return result

    def generate_content_types_only(self) -> int:
        logger.info("📋 Generating Content-Types only...")
        count = self.generate_content_types()
        if count > 0:
            logger.info(f"📦 {count} content-types types generated in {PACKAGE_SCOPE}/{CONTENT_TYPES_NAMESPACE}")
        return count

    def generate_sections_only(self) -> int:
        logger.info("📄 Generating Sections only...")
        count = self.generate_sections()
        if count > 0:
            logger.info(f"📦 {count} sections types generated in {PACKAGE_SCOPE}/{SECTIONS_NAMESPACE}")
        return count


def build_generator(source_dir: Optional[Path] = None, output_dir: Optional[Path] = None) -> UnifiedTypeGenerator:
    """Create a generator writing to the filesystem, resolving defaults from the environment."""
    source_dir = Path(source_dir) if source_dir else get_source_dir()
    output_dir = Path(output_dir) if output_dir else get_output_dir()

    return UnifiedTypeGenerator(source_dir, FileSystemSink(output_dir))
