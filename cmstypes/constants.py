#!/usr/bin/env python3
"""
Constants for the CMS types generator.

File names, package names and the TypeBox dependency shared by the walkers,
the emitter and the status utilities.
"""

# Catalog files, read from the source directory
CONTENT_TYPES_FILE = "content-types.json"
SECTIONS_FILE = "sections.json"

# Output packages live under node_modules/@cms-types/
PACKAGE_SCOPE = "@cms-types"
CONTENT_TYPES_NAMESPACE = "content-types"
SECTIONS_NAMESPACE = "sections"

NAMESPACE_SOURCES = {
    CONTENT_TYPES_NAMESPACE: CONTENT_TYPES_FILE,
    SECTIONS_NAMESPACE: SECTIONS_FILE,
}

PACKAGE_VERSION = "1.0.0"
TYPEBOX_PACKAGE = "@sinclair/typebox"
TYPEBOX_VERSION = "^0.32.0"

# TypeScript identifiers cannot start with a digit
IDENTIFIER_MARKER = "T"
EMPTY_IDENTIFIER_FALLBACK = "Unnamed"

DEFAULT_DESCRIPTION = "Generated automatically from the CMS"

# Deepest schema nesting accepted by the parser
MAX_SCHEMA_DEPTH = 64
