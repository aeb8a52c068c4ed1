"""
Naming convention utilities for Model Auto Generator.

This module converts between the naming conventions used by domain types
(camelCase attributes, PascalCase types) and the persistence layer
(snake_case columns, pluralized lowercase tables, suffixed model classes).
"""

import logging

import inflect

from ..constants import DefaultConfig


logger = logging.getLogger(__name__)

# Initialize inflect engine for the opt-in pluralization strategy
p = inflect.engine()


def to_snake_case(name: str) -> str:
    """
    Convert camelCase or PascalCase to snake_case.

    A separator goes before an uppercase letter when the previous character
    is lowercase, or when it closes a run of uppercase letters and the next
    character is lowercase (an acronym boundary). Everything else is copied,
    lowercased.

    Args:
        name: The identifier to convert

    Returns:
        The converted snake_case string

    Example:
        >>> to_snake_case("phoneNumber")
        'phone_number'
        >>> to_snake_case("venueID")
        'venue_id'
        >>> to_snake_case("HTTPSConnection")
        'https_connection'
    """
    if not isinstance(name, str):
        raise TypeError(f"Expected string, got {type(name).__name__}")

    result = []
    for index, char in enumerate(name):
        if char.isupper() and index > 0:
            prev_is_lower = name[index - 1].islower()
            prev_is_upper = name[index - 1].isupper()
            next_is_lower = index + 1 < len(name) and name[index + 1].islower()
            if prev_is_lower or (prev_is_upper and next_is_lower):
                result.append("_")
        result.append(char.lower())
    return "".join(result)


def pluralize(word: str) -> str:
    """
    Pluralize a word with a deliberately simple English heuristic.

    The word is lowercased first. Irregular plurals are not handled; use
    NamingConventions(pluralization="inflect") for those.

    Example:
        >>> pluralize("Venue")
        'venues'
        >>> pluralize("Category")
        'categories'
        >>> pluralize("Address")
        'addresses'
    """
    lowered = word.lower()
    if lowered.endswith("s"):
        return lowered + "es"
    if lowered.endswith("y"):
        return lowered[:-1] + "ies"
    return lowered + "s"


def class_for(type_name: str, suffix: str = DefaultConfig.MODEL_SUFFIX) -> str:
    """Name of the persistence class for a domain type (Venue -> VenueModel)."""
    return type_name + suffix


def capitalize(word: str) -> str:
    """Uppercase the first character only (venue -> Venue)."""
    if not word:
        return word
    return word[0].upper() + word[1:]


def inflect_pluralize(word: str) -> str:
    """Pluralize using inflect, lowercased like the simple heuristic."""
    if not word:
        return ""
    plural = p.plural(word.lower())
    if not plural:
        logger.warning(f"Inflect could not pluralize '{word}'. Falling back to the simple heuristic.")
        return pluralize(word)
    return plural


class NamingConventions:
    """
    Centralized naming convention utilities.

    Holds the two naming knobs that are configurable (the persistence class
    suffix and the pluralization strategy) so the synthesizer does not need
    to know about configuration.
    """

    STRATEGIES = {
        "simple": pluralize,
        "inflect": inflect_pluralize,
    }

    def __init__(self, model_suffix: str = DefaultConfig.MODEL_SUFFIX, pluralization: str = DefaultConfig.PLURALIZATION):
        if pluralization not in self.STRATEGIES:
            raise ValueError(
                f"Unknown pluralization strategy '{pluralization}'. "
                f"Expected one of: {', '.join(sorted(self.STRATEGIES))}"
            )
        self.model_suffix = model_suffix
        self.pluralization = pluralization
        self._pluralize = self.STRATEGIES[pluralization]

    def table_name(self, type_name: str) -> str:
        """Storage collection name for a domain type."""
        return self._pluralize(type_name)

    def model_class(self, type_name: str) -> str:
        """Persistence class name for a domain type."""
        return class_for(type_name, self.model_suffix)

    def related_model_class(self, entity_name: str) -> str:
        """Persistence class name for a relation target (venue -> VenueModel)."""
        return class_for(capitalize(entity_name), self.model_suffix)

    @staticmethod
    def column_name(attribute_name: str) -> str:
        """Column name for an attribute."""
        return to_snake_case(attribute_name)
