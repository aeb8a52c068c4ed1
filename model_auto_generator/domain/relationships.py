"""
Relationship resolution domain logic for Model Auto Generator.

Relations are inferred from naming alone (venueID -> Venue). This module
checks that the inferred target type actually exists before any code is
generated for it.
"""

import logging
from typing import Iterable, List, Optional

from .models import AttributeRole, ClassifiedAttribute
from .naming import capitalize
from ..exceptions import UnresolvedRelationError


logger = logging.getLogger(__name__)


class RelationResolver:
    """
    Validates relation targets against the set of declared type names.

    A resolver built without known types trusts every target, matching the
    behavior of a single-type transform where nothing else is visible.
    """

    def __init__(self, known_types: Optional[Iterable[str]] = None):
        self.known_types = frozenset(known_types) if known_types is not None else None

    @property
    def is_strict(self) -> bool:
        return self.known_types is not None

    def target_type(self, attribute: ClassifiedAttribute) -> str:
        """Domain type a relation attribute points at (venue -> Venue)."""
        return capitalize(attribute.related_entity or "")

    def resolve(self, type_name: str, attributes: List[ClassifiedAttribute]) -> None:
        """
        Check every relation of a type.

        Raises:
            UnresolvedRelationError: If a relation targets an undeclared type
        """
        if not self.is_strict:
            return

        for attribute in attributes:
            if attribute.role != AttributeRole.RELATION:
                continue
            target = self.target_type(attribute)
            if target not in self.known_types:
                raise UnresolvedRelationError(
                    f"Relation '{type_name}.{attribute.name}' points at undeclared type '{target}'",
                    source_type=type_name,
                    attribute=attribute.name,
                    target_type=target,
                )
            logger.debug(f"Resolved relation {type_name}.{attribute.name} -> {target}")
