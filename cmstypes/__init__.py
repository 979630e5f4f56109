"""
CMS Types Generator

Build-time generator that turns the JSON-Schema fragments embedded in the CMS
catalogs into TypeBox schemas and TypeScript types for the frontend.

Sources (read from the working directory):
- content-types.json: content-type -> configurationSchemaSets -> configurations -> schema
- sections.json: section -> schema

Output (under node_modules/@cms-types/):
- content-types/: one .ts file per configuration schema, index.ts, index.d.ts, package.json
- sections/: one .ts file per section schema, index.ts, index.d.ts, package.json

Usage:
    python -m cmstypes
    python -m cmstypes --sections
"""

from .generator import GenerationResult, UnifiedTypeGenerator
from .naming import clean_type_name
from .translator import translate_schema

__version__ = "2.0.0"
__all__ = [
    "GenerationResult",
    "UnifiedTypeGenerator",
    "clean_type_name",
    "translate_schema",
]
