"""
Tests for the generate_model entry point.
"""

import ast
from unittest import TestCase

from model_auto_generator import (
    AttributeDescriptor,
    InvalidAttributeError,
    NotATypeDeclarationError,
    TypeDeclaration,
    UnresolvedRelationError,
    generate_model,
)
from model_auto_generator.config_validation import ToolConfigSchema
from model_auto_generator.domain.models import AttributeRole


EVENT = TypeDeclaration("Event", [
    AttributeDescriptor("id", "Optional[UUID]", is_optional=True),
    AttributeDescriptor("title", "str"),
    AttributeDescriptor("venueID", "UUID"),
    AttributeDescriptor("status", "EventStatus"),
])


class TestGenerateModel(TestCase):
    """Test cases for generate_model"""

    def test_event_scenario(self):
        model = generate_model(EVENT, enum_registry={"EventStatus"}, known_types={"Event", "Venue"})

        assert model.class_name == "EventModel"
        assert model.table_name == "events"
        assert model.domain_name == "Event"
        assert "venue = models.ForeignKey('VenueModel'" in model.text
        assert "model.venue_id = dto.venueID" in model.text
        assert "status=self._parse_enum(EventStatus, self.status)" in model.text
        assert [attr.role for attr in model.attributes] == [
            AttributeRole.IDENTIFIER,
            AttributeRole.REQUIRED_SCALAR,
            AttributeRole.RELATION,
            AttributeRole.ENUMERATION,
        ]

    def test_text_is_valid_python(self):
        tree = ast.parse(generate_model(EVENT).text)
        assert isinstance(tree.body[0], ast.ClassDef)

    def test_default_enum_registry_comes_from_config(self):
        model = generate_model(EVENT)
        assert model.attributes[3].role == AttributeRole.ENUMERATION

        model = generate_model(EVENT, config=ToolConfigSchema(enum_types=[]))
        assert model.attributes[3].role == AttributeRole.REQUIRED_SCALAR

    def test_explicit_registry_replaces_config(self):
        model = generate_model(EVENT, enum_registry=[])
        assert model.attributes[3].role == AttributeRole.REQUIRED_SCALAR

    def test_config_naming(self):
        config = ToolConfigSchema(model_suffix="Record", app_label="ticketing")
        model = generate_model(EVENT, config=config)
        assert model.class_name == "EventRecord"
        assert "ForeignKey('VenueRecord'" in model.text
        assert "app_label = 'ticketing'" in model.text

    def test_accessor_follows_declaration_order(self):
        declaration = TypeDeclaration("Ticket", [
            AttributeDescriptor("updatedAt", "Optional[datetime]", is_optional=True),
            AttributeDescriptor("price", "Decimal"),
            AttributeDescriptor("eventID", "UUID"),
            AttributeDescriptor("id", "UUID"),
            AttributeDescriptor("type", "TicketType"),
        ])
        model = generate_model(declaration)
        to_domain = next(
            node for node in ast.walk(ast.parse(model.text))
            if isinstance(node, ast.FunctionDef) and node.name == "to_domain"
        )
        call = to_domain.body[0].value
        assert [kw.arg for kw in call.keywords] == ["updatedAt", "price", "eventID", "id", "type"]

    def test_computed_attributes_are_excluded(self):
        declaration = TypeDeclaration("Venue", [
            AttributeDescriptor("name", "str"),
            AttributeDescriptor("displayName", "str", is_computed=True),
        ])
        model = generate_model(declaration)
        assert "displayName" not in model.text
        assert [attr.name for attr in model.attributes] == ["name"]

    def test_not_a_type_declaration(self):
        for value in ["class Event: ...", {"name": "Event"}, None]:
            with self.subTest(value=value):
                with self.assertRaises(NotATypeDeclarationError):
                    generate_model(value)

    def test_invalid_type_name(self):
        with self.assertRaises(NotATypeDeclarationError):
            generate_model(TypeDeclaration("not a name", []))

    def test_duplicate_attribute_names(self):
        declaration = TypeDeclaration("Venue", [
            AttributeDescriptor("name", "str"),
            AttributeDescriptor("name", "Optional[str]", is_optional=True),
        ])
        with self.assertRaises(InvalidAttributeError) as ctx:
            generate_model(declaration)
        assert ctx.exception.attribute == "name"

    def test_unresolved_relation(self):
        with self.assertRaises(UnresolvedRelationError) as ctx:
            generate_model(EVENT, known_types={"Event"})
        assert ctx.exception.target_type == "Venue"

    def test_calls_are_independent(self):
        first = generate_model(EVENT)
        second = generate_model(EVENT)
        assert first.text == second.text
        assert first is not second
