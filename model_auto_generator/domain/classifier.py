"""
Attribute classification domain logic for Model Auto Generator.

This module assigns every stored attribute of a domain type exactly one
storage role. Rules are evaluated in a fixed order and the first match
wins, so a name-based rule always shadows a type-based one.
"""

import logging
from typing import AbstractSet, Iterable, Optional

from .models import AttributeDescriptor, AttributeRole, ClassifiedAttribute
from .naming import to_snake_case
from .type_expressions import split_optional
from ..constants import DefaultConfig, FieldNames
from ..exceptions import InvalidAttributeError


logger = logging.getLogger(__name__)


class AttributeClassifier:
    """
    Maps an attribute descriptor to a ClassifiedAttribute.

    Precedence:
        1. ``id`` of an identifier type     -> IDENTIFIER
        2. ``createdAt``                     -> CREATION_TIMESTAMP
        3. ``updatedAt``                     -> UPDATE_TIMESTAMP
        4. name ending in ``ID``             -> RELATION (venueID -> venue)
        5. base type in the enum registry    -> ENUMERATION
        6. optional                          -> OPTIONAL_SCALAR
        7. anything else                     -> REQUIRED_SCALAR

    The classifier holds configuration only; classify() depends on nothing
    but its arguments.
    """

    def __init__(self, identifier_types: Optional[Iterable[str]] = None):
        if identifier_types is None:
            identifier_types = DefaultConfig.IDENTIFIER_TYPES
        self.identifier_types = frozenset(identifier_types)

    def classify(
        self,
        descriptor: AttributeDescriptor,
        enum_registry: AbstractSet[str] = frozenset(),
    ) -> Optional[ClassifiedAttribute]:
        """
        Classify one attribute.

        Args:
            descriptor: The attribute as read from the domain type
            enum_registry: Type names to treat as enumerations

        Returns:
            The classified attribute, or None for a computed attribute

        Raises:
            InvalidAttributeError: If the name or declared type is unusable
        """
        if descriptor.is_computed:
            logger.debug(f"Skipping computed attribute '{descriptor.name}'")
            return None

        self._validate(descriptor)

        name = descriptor.name
        base_type, _ = split_optional(descriptor.declared_type)
        related_entity = None
        enum_type = None

        if name == FieldNames.IDENTIFIER and base_type in self.identifier_types:
            role = AttributeRole.IDENTIFIER
        elif name == FieldNames.CREATED_AT:
            role = AttributeRole.CREATION_TIMESTAMP
        elif name == FieldNames.UPDATED_AT:
            role = AttributeRole.UPDATE_TIMESTAMP
        elif name.endswith(FieldNames.RELATION_SUFFIX):
            role = AttributeRole.RELATION
            related_entity = name[:-len(FieldNames.RELATION_SUFFIX)]
        elif base_type in enum_registry:
            role = AttributeRole.ENUMERATION
            enum_type = base_type
        elif descriptor.is_optional:
            role = AttributeRole.OPTIONAL_SCALAR
        else:
            role = AttributeRole.REQUIRED_SCALAR

        logger.debug(f"Classified '{name}: {descriptor.declared_type}' as {role.name}")

        return ClassifiedAttribute(
            name=name,
            column_name=to_snake_case(name),
            role=role,
            is_optional=descriptor.is_optional,
            original_type=descriptor.declared_type,
            base_type=base_type,
            related_entity=related_entity,
            enum_type=enum_type,
        )

    @staticmethod
    def _validate(descriptor: AttributeDescriptor) -> None:
        if not descriptor.name or not descriptor.name.isidentifier():
            raise InvalidAttributeError(
                f"Attribute name '{descriptor.name}' is not a valid identifier",
                attribute=descriptor.name,
            )
        if descriptor.name == FieldNames.RELATION_SUFFIX:
            # A bare "ID" would relate to an entity with an empty name
            raise InvalidAttributeError(
                f"Attribute name '{descriptor.name}' names no related entity",
                attribute=descriptor.name,
            )
        if not descriptor.declared_type or not descriptor.declared_type.strip():
            raise InvalidAttributeError(
                f"Attribute '{descriptor.name}' has no declared type",
                attribute=descriptor.name,
            )
