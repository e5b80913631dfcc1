"""Definition ingestion exports."""

from .definition_models import POLYMORPHIC_MARKER, Field, SchemaDefinition
from .definition_reader import (
    DefinitionError,
    load_definition_file,
    parse_definition,
    read_definition_documents,
)

__all__ = [
    "POLYMORPHIC_MARKER",
    "DefinitionError",
    "Field",
    "SchemaDefinition",
    "load_definition_file",
    "parse_definition",
    "read_definition_documents",
]
