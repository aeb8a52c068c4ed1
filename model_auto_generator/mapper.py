"""
Field mapping for Model Auto Generator.

Maps storage declarations produced by the synthesizer to Django model field
types and their options. Relationships are rendered separately by the
models code generator; every other slot goes through map_storage_to_django.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from model_auto_generator.constants import (
    DJANGO_FIELD_MAP,
    JSON_CONTAINER_TYPES,
    FALLBACK_FIELD_TYPE,
    DefaultConfig,
    DjangoFieldTypes,
    GenerationOptions,
)
from model_auto_generator.domain.models import AttributeRole, Lifecycle, StorageDeclaration
from model_auto_generator.domain.type_expressions import base_type_name


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MappingOptions:
    """Configurable parts of the type mapping."""

    type_overrides: Dict[str, str] = field(default_factory=dict)
    decimal_max_digits: int = DefaultConfig.DECIMAL_MAX_DIGITS
    decimal_places: int = DefaultConfig.DECIMAL_PLACES


@dataclass(frozen=True)
class Reference:
    """A field option rendered as a dotted name rather than a literal (uuid.uuid4)."""

    path: str


def resolve_field_type(value_type: str, options: MappingOptions = MappingOptions()) -> str:
    """
    Django field class name for a domain type annotation.

    Lookup order: configured overrides, the builtin table, the outer name of
    a generic (List[int] -> List), then the JSON fallback.
    """
    text = value_type.strip()
    if text in options.type_overrides:
        return options.type_overrides[text]
    if text in DJANGO_FIELD_MAP:
        return DJANGO_FIELD_MAP[text]

    outer = base_type_name(text)
    if outer in options.type_overrides:
        return options.type_overrides[outer]
    if outer in JSON_CONTAINER_TYPES:
        return DjangoFieldTypes.JSON_FIELD
    if outer in DJANGO_FIELD_MAP:
        return DJANGO_FIELD_MAP[outer]

    logger.warning(
        f"No Django field mapping for type '{value_type}'. Falling back to {FALLBACK_FIELD_TYPE}."
    )
    return FALLBACK_FIELD_TYPE


def map_storage_to_django(
    decl: StorageDeclaration, options: MappingOptions = MappingOptions()
) -> Tuple[str, Dict[str, Any]]:
    """Maps a non-relation storage declaration to a Django field type and options."""
    if decl.role == AttributeRole.RELATION:
        raise ValueError(f"Relation slot '{decl.slot_name}' is rendered as a ForeignKey, not a field")

    field_options: Dict[str, Any] = {}

    if decl.primary_key:
        field_type = resolve_field_type(decl.value_type or "UUID", options)
        field_options["primary_key"] = True
        field_options["default"] = Reference(".".join(GenerationOptions.IDENTIFIER_FACTORY))
        field_options["editable"] = False
        return field_type, field_options

    if decl.lifecycle is not None:
        field_type = DjangoFieldTypes.DATE_TIME_FIELD
    else:
        field_type = resolve_field_type(decl.value_type or "str", options)

    field_options["db_column"] = decl.column_name

    if decl.nullable:
        field_options["null"] = True
        # Timestamps are stamped by the ORM, not entered by hand
        if decl.lifecycle is None:
            field_options["blank"] = True

    if decl.lifecycle == Lifecycle.CREATE:
        field_options["auto_now_add"] = True
    elif decl.lifecycle == Lifecycle.UPDATE:
        field_options["auto_now"] = True

    if field_type == DjangoFieldTypes.DECIMAL_FIELD:
        field_options["max_digits"] = options.decimal_max_digits
        field_options["decimal_places"] = options.decimal_places

    return field_type, field_options
