"""Field to generated type resolution."""

from __future__ import annotations

from collections.abc import Collection, Sequence

from fhir_typegen.definition_ingestion.definition_models import Field, SchemaDefinition

from .graph_errors import UnresolvableTypeError
from .graph_models import Group, TypeRef

PRIMITIVE_TYPES = frozenset(
    {
        "base64Binary",
        "boolean",
        "canonical",
        "code",
        "date",
        "dateTime",
        "decimal",
        "id",
        "instant",
        "integer",
        "integer64",
        "markdown",
        "oid",
        "positiveInt",
        "string",
        "time",
        "unsignedInt",
        "uri",
        "url",
        "uuid",
        "xhtml",
    }
)

# FHIRPath system types used on Element.id, Extension.url and primitive values.
SYSTEM_TYPE_PREFIX = "http://hl7.org/fhirpath/System."
SYSTEM_TYPES = {
    "Boolean": "boolean",
    "Date": "date",
    "DateTime": "dateTime",
    "Decimal": "decimal",
    "Integer": "integer",
    "Integer64": "integer64",
    "String": "string",
    "Time": "time",
}


def primitive_name(type_name: str) -> str | None:
    """Return the primitive vocabulary name for a declared type, if it is one."""
    if type_name in PRIMITIVE_TYPES:
        return type_name
    if type_name.startswith(SYSTEM_TYPE_PREFIX):
        return SYSTEM_TYPES.get(type_name.removeprefix(SYSTEM_TYPE_PREFIX))
    return None


class TypeResolver:
    """Resolves the fields of one definition against that definition's Groups.

    A declared type that names a nested Group stays in the module unless it
    also names one of `known_definitions`, the other definitions of the run.
    """

    def __init__(
        self,
        definition: SchemaDefinition,
        groups: Sequence[Group],
        *,
        known_definitions: Collection[str] = (),
    ) -> None:
        self._definition = definition
        self._known_definitions = frozenset(known_definitions) - {definition.name}
        self._groups_by_path = {group.source_path: group for group in groups}
        self._group_names = {group.name for group in groups}
        self._root_group = next(group for group in groups if group.is_root)

    def resolve(self, field: Field) -> TypeRef:
        """Resolve one field to exactly one non-empty TypeRef."""
        if not field.declared_types and field.content_reference is None:
            raise UnresolvableTypeError(
                "field declares no type", definition_name=self._definition.name, path=field.path
            )

        resolved = self._resolve_single(field)
        if field.is_repeated:
            return TypeRef.array_of(resolved)
        return resolved

    def _resolve_single(self, field: Field) -> TypeRef:
        owned_group = self._groups_by_path.get(field.path)
        if owned_group is not None and not owned_group.is_root:
            return TypeRef.external(owned_group.name, same_module=True)
        if field.content_reference is not None:
            return self._resolve_content_reference(field)

        options = tuple(self._resolve_named(field, type_name) for type_name in field.declared_types)
        if len(options) == 1:
            return options[0]
        return TypeRef.union_of(options)

    def _resolve_content_reference(self, field: Field) -> TypeRef:
        reference = field.content_reference or ""
        target_path = reference.rpartition("#")[2]
        target = self._groups_by_path.get(target_path)
        if target is None:
            raise UnresolvableTypeError(
                f"content reference '{reference}' does not point at a nested structure",
                definition_name=self._definition.name,
                path=field.path,
            )
        return TypeRef.external(target.name, same_module=True)

    def _resolve_named(self, field: Field, type_name: str) -> TypeRef:
        primitive = primitive_name(type_name)
        if primitive is not None:
            return TypeRef.primitive(primitive)
        if type_name == self._definition.name:
            return TypeRef.external(self._root_group.name, same_module=True)
        if type_name in self._group_names and type_name not in self._known_definitions:
            return TypeRef.external(type_name, same_module=True)
        if not type_name.isidentifier():
            raise UnresolvableTypeError(
                f"unknown type '{type_name}'",
                definition_name=self._definition.name,
                path=field.path,
            )
        return TypeRef.external(type_name)
