"""Exceptions raised by the CMS types generator."""


class CmsTypesError(Exception):
    """Base class for generator errors."""


class CatalogReadError(CmsTypesError):
    """A catalog file is missing, unreadable or not a JSON array."""


class SchemaError(CmsTypesError):
    """A schema node cannot be translated."""


class CyclicSchemaError(SchemaError):
    """A schema node contains itself."""


class SchemaDepthError(SchemaError):
    """A schema is nested deeper than MAX_SCHEMA_DEPTH."""
