"""
Centralized constants for Model Auto Generator.

This module contains configuration defaults, the domain-type to Django field
mapping, and the reserved attribute names that drive classification.
"""

from typing import Dict, List, Set


# =============================================================================
# CORE CONFIGURATION
# =============================================================================

class DefaultConfig:
    """Default configuration values."""

    OUTPUT_FILE = "./generated/models.py"

    # Persistence class naming
    MODEL_SUFFIX = "Model"
    PLURALIZATION = "simple"

    # Type names treated as enumerations when no configuration is given
    ENUM_TYPES: List[str] = [
        "EventStatus",
        "UserRole",
        "VenueTier",
        "TicketType",
    ]

    # Type names that denote the identifier type
    IDENTIFIER_TYPES: List[str] = ["UUID", "uuid.UUID"]

    # Generation options
    DETECT_ENUMS = True
    STRICT_RELATIONS = True
    ON_DELETE = "CASCADE"
    DECIMAL_MAX_DIGITS = 19
    DECIMAL_PLACES = 4


# =============================================================================
# FIELD TYPE MAPPINGS
# =============================================================================

class DjangoFieldTypes:
    """Django model field types emitted by the generator."""

    # Numeric fields
    INTEGER_FIELD = "IntegerField"
    FLOAT_FIELD = "FloatField"
    DECIMAL_FIELD = "DecimalField"

    # String fields
    TEXT_FIELD = "TextField"

    # Date/time fields
    DATE_FIELD = "DateField"
    DATE_TIME_FIELD = "DateTimeField"
    TIME_FIELD = "TimeField"
    DURATION_FIELD = "DurationField"

    # Other fields
    BOOLEAN_FIELD = "BooleanField"
    UUID_FIELD = "UUIDField"
    JSON_FIELD = "JSONField"
    BINARY_FIELD = "BinaryField"

    # Relationships
    FOREIGN_KEY = "ForeignKey"


# Domain type (as written in an annotation) to Django field mapping
DJANGO_FIELD_MAP: Dict[str, str] = {
    # Numeric
    "int": DjangoFieldTypes.INTEGER_FIELD,
    "float": DjangoFieldTypes.FLOAT_FIELD,
    "Decimal": DjangoFieldTypes.DECIMAL_FIELD,
    "decimal.Decimal": DjangoFieldTypes.DECIMAL_FIELD,

    # Text
    "str": DjangoFieldTypes.TEXT_FIELD,

    # Date/time
    "datetime": DjangoFieldTypes.DATE_TIME_FIELD,
    "datetime.datetime": DjangoFieldTypes.DATE_TIME_FIELD,
    "date": DjangoFieldTypes.DATE_FIELD,
    "datetime.date": DjangoFieldTypes.DATE_FIELD,
    "time": DjangoFieldTypes.TIME_FIELD,
    "datetime.time": DjangoFieldTypes.TIME_FIELD,
    "timedelta": DjangoFieldTypes.DURATION_FIELD,
    "datetime.timedelta": DjangoFieldTypes.DURATION_FIELD,

    # Other
    "bool": DjangoFieldTypes.BOOLEAN_FIELD,
    "UUID": DjangoFieldTypes.UUID_FIELD,
    "uuid.UUID": DjangoFieldTypes.UUID_FIELD,
    "bytes": DjangoFieldTypes.BINARY_FIELD,
    "dict": DjangoFieldTypes.JSON_FIELD,
    "list": DjangoFieldTypes.JSON_FIELD,
}

# Generic containers whose subscripted forms (List[int], dict[str, Any]) are stored as JSON
JSON_CONTAINER_TYPES: Set[str] = {
    "dict", "list", "Dict", "List", "typing.Dict", "typing.List",
    "Mapping", "Sequence", "typing.Mapping", "typing.Sequence", "Any", "typing.Any",
}

FALLBACK_FIELD_TYPE = DjangoFieldTypes.JSON_FIELD

SUPPORTED_ON_DELETE: List[str] = ["CASCADE", "PROTECT", "RESTRICT", "SET_NULL", "DO_NOTHING"]


# =============================================================================
# NAMING CONVENTIONS
# =============================================================================

class FieldNames:
    """Attribute names that carry storage semantics."""

    IDENTIFIER = "id"
    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"

    # Suffix marking a foreign-key attribute (venueID -> venue)
    RELATION_SUFFIX = "ID"

    # Optionality wrappers recognised in annotations
    OPTIONAL_WRAPPERS: Set[str] = {"Optional", "typing.Optional"}
    UNION_WRAPPERS: Set[str] = {"Union", "typing.Union"}

    # Decorators that turn a method into a computed attribute
    COMPUTED_DECORATORS: Set[str] = {
        "property", "cached_property", "functools.cached_property",
    }

    # Base classes that mark a class declaration as an enumeration
    ENUM_BASES: Set[str] = {
        "Enum", "StrEnum", "IntEnum", "enum.Enum", "enum.StrEnum", "enum.IntEnum",
    }


class GenerationOptions:
    """Code generation options."""

    DEFAULT_LINE_LENGTH = 88  # Black default
    TEMPLATE_DIR = "templates"
    MODELS_TEMPLATE = "models.py.j2"

    # Names used inside generated classes
    BLANK_CONSTRUCTOR = "blank"
    FROM_DOMAIN = "from_domain"
    TO_DOMAIN = "to_domain"
    DOMAIN_ARGUMENT = "dto"
    IDENTIFIER_FACTORY = ("uuid", "uuid4")
