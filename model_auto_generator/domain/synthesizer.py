"""
Model synthesis domain logic for Model Auto Generator.

The synthesizer decides *what* the persistence class contains: one storage
declaration per attribute and one conversion statement per attribute in
each direction, all in declaration order. Turning the resulting
ModelDocument into source text is the renderer's job.
"""

import logging
from typing import List, Optional

from .models import (
    AttributeRole,
    ClassifiedAttribute,
    ConversionKind,
    ConversionStatement,
    Lifecycle,
    ModelDocument,
    StorageDeclaration,
)
from .naming import NamingConventions


logger = logging.getLogger(__name__)


class ModelSynthesizer:
    """Builds the structured description of a persistence class."""

    def __init__(self, naming: Optional[NamingConventions] = None):
        self.naming = naming or NamingConventions()

    def synthesize(self, type_name: str, attributes: List[ClassifiedAttribute]) -> ModelDocument:
        """
        Build the model document for a domain type.

        Args:
            type_name: Name of the domain type
            attributes: Classified attributes in declaration order

        Returns:
            The model document; its records follow the attribute order
        """
        document = ModelDocument(
            domain_name=type_name,
            class_name=self.naming.model_class(type_name),
            table_name=self.naming.table_name(type_name),
            storage=tuple(self.storage_declaration(attr) for attr in attributes),
            to_storage=tuple(self.to_storage_statement(attr) for attr in attributes),
            to_domain=tuple(self.to_domain_statement(attr) for attr in attributes),
        )
        logger.debug(
            f"Synthesized {document.class_name} (table '{document.table_name}') "
            f"with {len(document.storage)} storage slots"
        )
        return document

    def storage_declaration(self, attr: ClassifiedAttribute) -> StorageDeclaration:
        role = attr.role

        if role == AttributeRole.IDENTIFIER:
            return StorageDeclaration(
                slot_name=attr.name,
                column_name=attr.column_name,
                role=role,
                value_type=attr.base_type,
                nullable=True,
                primary_key=True,
            )

        if role == AttributeRole.RELATION:
            return StorageDeclaration(
                slot_name=attr.related_entity,
                column_name=attr.column_name,
                role=role,
                related_class=self.naming.related_model_class(attr.related_entity),
            )

        if role.is_timestamp:
            lifecycle = Lifecycle.CREATE if role == AttributeRole.CREATION_TIMESTAMP else Lifecycle.UPDATE
            return StorageDeclaration(
                slot_name=attr.name,
                column_name=attr.column_name,
                role=role,
                value_type=attr.base_type,
                nullable=True,
                lifecycle=lifecycle,
            )

        if role == AttributeRole.ENUMERATION:
            # Stored as the raw string form of the symbolic value
            return StorageDeclaration(
                slot_name=attr.name,
                column_name=attr.column_name,
                role=role,
                value_type="str",
                nullable=attr.is_optional,
            )

        return StorageDeclaration(
            slot_name=attr.name,
            column_name=attr.column_name,
            role=role,
            value_type=attr.base_type,
            nullable=role == AttributeRole.OPTIONAL_SCALAR,
        )

    @staticmethod
    def foreign_key_slot(attr: ClassifiedAttribute) -> str:
        """Attribute holding the raw foreign key value (venue -> venue_id)."""
        return f"{attr.related_entity}_id"

    def to_storage_statement(self, attr: ClassifiedAttribute) -> ConversionStatement:
        if attr.role == AttributeRole.IDENTIFIER:
            # A missing identifier keeps the one generated by the field default
            return ConversionStatement(
                attribute=attr.name, slot=attr.name, kind=ConversionKind.KEEP_DEFAULT
            )
        if attr.role == AttributeRole.RELATION:
            return ConversionStatement(
                attribute=attr.name,
                slot=self.foreign_key_slot(attr),
                kind=ConversionKind.FOREIGN_KEY,
            )
        if attr.role == AttributeRole.ENUMERATION:
            return ConversionStatement(
                attribute=attr.name,
                slot=attr.name,
                kind=ConversionKind.ENUM_VALUE,
                null_safe=attr.is_optional,
                enum_type=attr.enum_type,
            )
        return ConversionStatement(attribute=attr.name, slot=attr.name, kind=ConversionKind.COPY)

    def to_domain_statement(self, attr: ClassifiedAttribute) -> ConversionStatement:
        role = attr.role
        if role == AttributeRole.IDENTIFIER:
            return ConversionStatement(
                attribute=attr.name, slot=attr.name, kind=ConversionKind.IDENTIFIER_DEFAULT
            )
        if role == AttributeRole.RELATION:
            return ConversionStatement(
                attribute=attr.name,
                slot=self.foreign_key_slot(attr),
                kind=ConversionKind.FOREIGN_KEY,
            )
        if role.is_timestamp:
            return ConversionStatement(
                attribute=attr.name, slot=attr.name, kind=ConversionKind.REQUIRE_SET
            )
        if role == AttributeRole.ENUMERATION:
            return ConversionStatement(
                attribute=attr.name,
                slot=attr.name,
                kind=ConversionKind.ENUM_PARSE,
                null_safe=attr.is_optional,
                enum_type=attr.enum_type,
            )
        return ConversionStatement(attribute=attr.name, slot=attr.name, kind=ConversionKind.COPY)
