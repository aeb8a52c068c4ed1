"""
Tests for attribute classification and annotation parsing.
"""

from unittest import TestCase

from model_auto_generator.domain.classifier import AttributeClassifier
from model_auto_generator.domain.models import AttributeDescriptor, AttributeRole
from model_auto_generator.domain.type_expressions import base_type_name, split_optional
from model_auto_generator.exceptions import InvalidAttributeError


ENUMS = frozenset({"EventStatus", "TicketType"})


def attr(name, declared_type, is_optional=None, is_computed=False):
    if is_optional is None:
        is_optional = split_optional(declared_type)[1]
    return AttributeDescriptor(name, declared_type, is_optional=is_optional, is_computed=is_computed)


class TestSplitOptional(TestCase):
    """Test cases for split_optional and base_type_name"""

    def test_optional_markers(self):
        cases = {
            "Optional[str]": "str",
            "typing.Optional[int]": "int",
            "Union[UUID, None]": "UUID",
            "EventStatus | None": "EventStatus",
            "None | datetime": "datetime",
            "Optional[dict[str, int]]": "dict[str, int]",
        }
        for given, expected in cases.items():
            with self.subTest(given=given):
                assert split_optional(given) == (expected, True)

    def test_non_optional(self):
        assert split_optional("str") == ("str", False)
        assert split_optional("list[int]") == ("list[int]", False)
        assert split_optional("Union[int, str]") == ("Union[int, str]", False)

    def test_unparseable_text_is_kept_verbatim(self):
        assert split_optional("Map<String, Int>") == ("Map<String, Int>", False)

    def test_base_type_name(self):
        assert base_type_name("dict[str, int]") == "dict"
        assert base_type_name("uuid.UUID") == "uuid.UUID"
        assert base_type_name("typing.List[str]") == "typing.List"


class TestAttributeClassifier(TestCase):
    """Test cases for the classification precedence"""

    def setUp(self):
        self.classifier = AttributeClassifier()

    def classify(self, descriptor, registry=ENUMS):
        return self.classifier.classify(descriptor, registry)

    def test_identifier(self):
        result = self.classify(attr("id", "Optional[UUID]"))
        assert result.role == AttributeRole.IDENTIFIER
        assert result.base_type == "UUID"
        assert result.is_optional is True

    def test_identifier_requires_identifier_type(self):
        result = self.classify(attr("id", "int"))
        assert result.role == AttributeRole.REQUIRED_SCALAR

    def test_identifier_types_are_configurable(self):
        classifier = AttributeClassifier(identifier_types=["uuid.UUID"])
        assert classifier.classify(attr("id", "uuid.UUID")).role == AttributeRole.IDENTIFIER
        assert classifier.classify(attr("id", "UUID")).role == AttributeRole.REQUIRED_SCALAR

    def test_timestamps(self):
        assert self.classify(attr("createdAt", "Optional[datetime]")).role == AttributeRole.CREATION_TIMESTAMP
        assert self.classify(attr("updatedAt", "datetime")).role == AttributeRole.UPDATE_TIMESTAMP

    def test_timestamp_shadows_enumeration_and_optional(self):
        result = self.classify(attr("createdAt", "Optional[EventStatus]"), frozenset({"EventStatus"}))
        assert result.role == AttributeRole.CREATION_TIMESTAMP

    def test_relation_regardless_of_declared_type(self):
        for declared_type in ["UUID", "int", "str", "EventStatus"]:
            with self.subTest(declared_type=declared_type):
                result = self.classify(attr("venueID", declared_type))
                assert result.role == AttributeRole.RELATION
                assert result.related_entity == "venue"
                assert result.column_name == "venue_id"

    def test_relation_suffix_is_case_sensitive(self):
        assert self.classify(attr("paid", "bool")).role == AttributeRole.REQUIRED_SCALAR
        assert self.classify(attr("venueId", "UUID")).role == AttributeRole.REQUIRED_SCALAR

    def test_enumeration(self):
        result = self.classify(attr("status", "EventStatus"))
        assert result.role == AttributeRole.ENUMERATION
        assert result.enum_type == "EventStatus"
        assert result.is_optional is False

    def test_optional_enumeration(self):
        result = self.classify(attr("ticketType", "Optional[TicketType]"))
        assert result.role == AttributeRole.ENUMERATION
        assert result.enum_type == "TicketType"
        assert result.is_optional is True

    def test_enumeration_needs_registry(self):
        result = self.classify(attr("status", "EventStatus"), frozenset())
        assert result.role == AttributeRole.REQUIRED_SCALAR

    def test_scalars(self):
        optional = self.classify(attr("phoneNumber", "Optional[str]"))
        assert optional.role == AttributeRole.OPTIONAL_SCALAR
        assert optional.column_name == "phone_number"
        assert optional.original_type == "Optional[str]"
        assert optional.base_type == "str"

        required = self.classify(attr("title", "str"))
        assert required.role == AttributeRole.REQUIRED_SCALAR
        assert required.column_name == "title"

    def test_optionality_comes_from_descriptor(self):
        result = self.classify(attr("title", "str", is_optional=True))
        assert result.role == AttributeRole.OPTIONAL_SCALAR

    def test_computed_attribute_is_dropped(self):
        assert self.classify(attr("displayName", "str", is_computed=True)) is None

    def test_invalid_names(self):
        for name in ["", "first name", "2fast", "ID"]:
            with self.subTest(name=name):
                with self.assertRaises(InvalidAttributeError):
                    self.classify(attr(name, "str"))

    def test_missing_type(self):
        with self.assertRaises(InvalidAttributeError) as ctx:
            self.classify(AttributeDescriptor("title", "  "))
        assert ctx.exception.attribute == "title"
        assert ctx.exception.error_code == "INVALID_ATTRIBUTE"
