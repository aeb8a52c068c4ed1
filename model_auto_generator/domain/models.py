"""
Core domain models for Model Auto Generator.

These models describe the three stages of a transform: the attribute
descriptors read from a domain type, the classified attributes produced
by the classifier, and the structured model document produced by the
synthesizer before it is rendered to source text.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


class AttributeRole(Enum):
    """Semantic storage role of a domain attribute."""

    IDENTIFIER = "identifier"
    REQUIRED_SCALAR = "required_scalar"
    OPTIONAL_SCALAR = "optional_scalar"
    RELATION = "relation"
    CREATION_TIMESTAMP = "creation_timestamp"
    UPDATE_TIMESTAMP = "update_timestamp"
    ENUMERATION = "enumeration"

    @property
    def is_timestamp(self) -> bool:
        return self in (AttributeRole.CREATION_TIMESTAMP, AttributeRole.UPDATE_TIMESTAMP)


class Lifecycle(Enum):
    """When the persistence layer stamps a timestamp slot."""

    CREATE = "create"
    UPDATE = "update"


class ConversionKind(Enum):
    """How one attribute is carried between the domain and persistence forms."""

    COPY = "copy"
    KEEP_DEFAULT = "keep_default"
    FOREIGN_KEY = "foreign_key"
    ENUM_VALUE = "enum_value"
    ENUM_PARSE = "enum_parse"
    IDENTIFIER_DEFAULT = "identifier_default"
    REQUIRE_SET = "require_set"


@dataclass(frozen=True)
class AttributeDescriptor:
    """
    A named, typed member of a domain type as written in its declaration.

    Computed attributes (properties with a getter body) are flagged here and
    dropped before classification.
    """

    name: str
    declared_type: str
    is_optional: bool = False
    is_computed: bool = False


@dataclass(frozen=True)
class TypeDeclaration:
    """A domain type: its name and its attributes in declaration order."""

    name: str
    attributes: Tuple[AttributeDescriptor, ...] = ()
    module: Optional[str] = None

    def __post_init__(self):
        # Accept any iterable but store an immutable tuple
        object.__setattr__(self, "attributes", tuple(self.attributes))

    @property
    def stored_attributes(self) -> List[AttributeDescriptor]:
        return [attr for attr in self.attributes if not attr.is_computed]


@dataclass(frozen=True)
class ClassifiedAttribute:
    """
    An attribute with its storage role resolved.

    related_entity is set only for RELATION (venueID -> "venue") and
    enum_type only for ENUMERATION.
    """

    name: str
    column_name: str
    role: AttributeRole
    is_optional: bool
    original_type: str
    base_type: str
    related_entity: Optional[str] = None
    enum_type: Optional[str] = None


@dataclass(frozen=True)
class StorageDeclaration:
    """One storage slot of the persistence class."""

    slot_name: str
    column_name: str
    role: AttributeRole
    value_type: Optional[str] = None
    nullable: bool = False
    primary_key: bool = False
    related_class: Optional[str] = None
    lifecycle: Optional[Lifecycle] = None


@dataclass(frozen=True)
class ConversionStatement:
    """
    One attribute's line in a conversion function.

    attribute is the domain attribute name, slot the persistence attribute
    written or read (venue_id for a relation, the attribute name otherwise).
    """

    attribute: str
    slot: str
    kind: ConversionKind
    null_safe: bool = False
    enum_type: Optional[str] = None


@dataclass(frozen=True)
class ModelDocument:
    """Structured description of a persistence class, independent of syntax."""

    domain_name: str
    class_name: str
    table_name: str
    storage: Tuple[StorageDeclaration, ...] = ()
    to_storage: Tuple[ConversionStatement, ...] = ()
    to_domain: Tuple[ConversionStatement, ...] = ()

    @property
    def uses_identifier_factory(self) -> bool:
        return any(stmt.kind == ConversionKind.IDENTIFIER_DEFAULT for stmt in self.to_domain)

    @property
    def requires_set_check(self) -> bool:
        return any(stmt.kind == ConversionKind.REQUIRE_SET for stmt in self.to_domain)

    @property
    def parses_enums(self) -> bool:
        return any(stmt.kind == ConversionKind.ENUM_PARSE for stmt in self.to_domain)

    @property
    def enum_types(self) -> List[str]:
        seen: List[str] = []
        for stmt in self.to_domain:
            if stmt.enum_type and stmt.enum_type not in seen:
                seen.append(stmt.enum_type)
        return seen


@dataclass
class SynthesizedModel:
    """The generated persistence class for one domain type."""

    domain_name: str
    class_name: str
    table_name: str
    text: str
    document: ModelDocument
    attributes: List[ClassifiedAttribute] = field(default_factory=list)
