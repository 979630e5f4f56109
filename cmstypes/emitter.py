#!/usr/bin/env python3
"""
Emission of the @cms-types packages.

The emitter never touches paths directly: it writes through an output sink so
the generator can be pointed at node_modules for real runs and at memory in
tests.
"""

import json
from pathlib import Path, PurePosixPath
from typing import Dict, List

from loguru import logger
from tqdm import tqdm

from cmstypes.constants import (
    DEFAULT_DESCRIPTION,
    NAMESPACE_SOURCES,
    PACKAGE_SCOPE,
    PACKAGE_VERSION,
    TYPEBOX_PACKAGE,
    TYPEBOX_VERSION,
)
from cmstypes.translator import schema_declaration
from cmstypes.walkers import GenerationUnit

TYPEBOX_IMPORT = f"import {{ Type, Static }} from '{TYPEBOX_PACKAGE}';"


class OutputSink:
    """Destination for generated files, addressed by '/'-separated relative paths."""

    def ensure_dir(self, rel_path: str) -> None:
        raise NotImplementedError

    def write_text(self, rel_path: str, content: str) -> None:
        raise NotImplementedError

    def read_text(self, rel_path: str) -> str:
        raise NotImplementedError

    def exists(self, rel_path: str) -> bool:
        raise NotImplementedError


class FileSystemSink(OutputSink):
    """Writes below a root directory, normally ./node_modules."""

    def __init__(self, root: Path):
        self.root = Path(root)

    def _resolve(self, rel_path: str) -> Path:
        return self.root.joinpath(*PurePosixPath(rel_path).parts)

    def ensure_dir(self, rel_path: str) -> None:
        self._resolve(rel_path).mkdir(parents=True, exist_ok=True)

    def write_text(self, rel_path: str, content: str) -> None:
        path = self._resolve(rel_path)
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        logger.debug(f"Wrote {path}")

    def read_text(self, rel_path: str) -> str:
        with open(self._resolve(rel_path), "r", encoding="utf-8") as f:
            return f.read()

    def exists(self, rel_path: str) -> bool:
        return self._resolve(rel_path).exists()


class MemorySink(OutputSink):
    """Keeps generated files in a dict."""

    def __init__(self):
        self.files: Dict[str, str] = {}
        self.dirs = set()

    def ensure_dir(self, rel_path: str) -> None:
        path = PurePosixPath(rel_path)
        self.dirs.add(str(path))
        self.dirs.update(str(parent) for parent in path.parents if str(parent) != ".")

    def write_text(self, rel_path: str, content: str) -> None:
        parent = str(PurePosixPath(rel_path).parent)
        if parent != "." and parent not in self.dirs:
            raise FileNotFoundError(f"Directory does not exist: {parent}")
        self.files[rel_path] = content

    def read_text(self, rel_path: str) -> str:
        if rel_path not in self.files:
            raise FileNotFoundError(rel_path)
        return self.files[rel_path]

    def exists(self, rel_path: str) -> bool:
        return rel_path in self.files or rel_path in self.dirs


def _doc_comment(title: str, description: str) -> str:
    lines = [title, *description.splitlines()]
    body = "\n".join(f" * {line}".rstrip() for line in lines)
    return "/**\n" + body.replace("*/", "*\\/") + "\n */"


def create_type_file(unit: GenerationUnit) -> str:
    """Render the {identifier}.ts file for one unit."""
    comment = _doc_comment(
        unit.source_title or unit.identifier,
        unit.source_description or DEFAULT_DESCRIPTION,
    )
    declaration = schema_declaration(unit.identifier, unit.schema_expression)
    return f"{TYPEBOX_IMPORT}\n\n{comment}\n\n{declaration}\n\n{unit.type_alias}\n"


def create_index_file(namespace: str, exports: List[str]) -> str:
    """Render index.ts / index.d.ts for a namespace."""
    source_file = NAMESPACE_SOURCES.get(namespace, namespace)
    return f"""/**
 * TypeBox types generated automatically from {source_file}
 *
 * Usage:
 * import {{ MenuMenuhotbarType, CarouselType }} from '{PACKAGE_SCOPE}/{namespace}';
 */

{chr(10).join(exports)}

// Re-export TypeBox utilities
export {{ Type, Static }} from '{TYPEBOX_PACKAGE}';
"""


def create_package_json(package_name: str, description: str) -> Dict:
    return {
        "name": package_name,
        "version": PACKAGE_VERSION,
        "description": description,
        "main": "index.ts",
        "types": "index.d.ts",
        "private": True,
        "dependencies": {TYPEBOX_PACKAGE: TYPEBOX_VERSION},
    }


class CatalogEmitter:
    """
    Writes one namespace of the @cms-types packages.

    Layout, relative to the sink root:
        @cms-types/{namespace}/{Identifier}.ts
        @cms-types/{namespace}/index.ts, index.d.ts
        @cms-types/{namespace}/package.json
    """

    def __init__(self, sink: OutputSink, namespace: str):
        self.sink = sink
        self.namespace = namespace
        self.package_name = f"{PACKAGE_SCOPE}/{namespace}"
        self.package_dir = f"{PACKAGE_SCOPE}/{namespace}"

    def ensure_directories(self) -> None:
        self.sink.ensure_dir(PACKAGE_SCOPE)
        self.sink.ensure_dir(self.package_dir)

    def emit(self, units: List[GenerationUnit]) -> int:
        """
        Write unit files, then the index and package descriptor.

        The index and package.json are only written when there is at least one
        unit, so a failed catalog leaves a previous generation in place.

        Args:
            units: Units in catalog order

        Returns:
            Number of unit files written
        """
        self.ensure_directories()

        for unit in tqdm(units, desc=f"Writing {self.package_name}", unit="file", leave=False):
            self.sink.write_text(f"{self.package_dir}/{unit.file_name}", create_type_file(unit))

        if not units:
            return 0

        self.write_index([unit.export_line for unit in units])
        self.write_package_file()
        logger.info(f"📦 Package created: {self.package_name}")
        return len(units)

    def write_index(self, exports: List[str]) -> None:
        content = create_index_file(self.namespace, exports)
        self.sink.write_text(f"{self.package_dir}/index.ts", content)
        self.sink.write_text(f"{self.package_dir}/index.d.ts", content)

    def write_package_file(self) -> None:
        source_file = NAMESPACE_SOURCES.get(self.namespace, self.namespace)
        package_json = create_package_json(
            self.package_name, f"Generated TypeBox types from {source_file}"
        )
        self.sink.write_text(f"{self.package_dir}/package.json", json.dumps(package_json, indent=2))
