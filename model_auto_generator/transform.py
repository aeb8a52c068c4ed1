"""
Transform entry point for Model Auto Generator.

generate_model() is the single operation callers use to turn one domain
type declaration into the source of its Django persistence class:

    declaration -> classify each stored attribute -> resolve relations
                -> synthesize model document -> render text

Every call is independent; nothing is cached between calls.
"""

import logging
from typing import AbstractSet, Iterable, List, Optional

from model_auto_generator.ast_codegen.models import generate_model_code
from model_auto_generator.config_validation import ToolConfigSchema
from model_auto_generator.domain.classifier import AttributeClassifier
from model_auto_generator.domain.models import ClassifiedAttribute, SynthesizedModel, TypeDeclaration
from model_auto_generator.domain.naming import NamingConventions
from model_auto_generator.domain.relationships import RelationResolver
from model_auto_generator.domain.synthesizer import ModelSynthesizer
from model_auto_generator.exceptions import InvalidAttributeError, NotATypeDeclarationError


logger = logging.getLogger(__name__)


class ModelTransformer:
    """
    Drives classification, synthesis and rendering for one configuration.

    A transformer is immutable once built and may be shared between threads.
    """

    def __init__(self, config: Optional[ToolConfigSchema] = None):
        self.config = config or ToolConfigSchema()
        self.classifier = AttributeClassifier(identifier_types=self.config.identifier_types)
        self.synthesizer = ModelSynthesizer(
            NamingConventions(
                model_suffix=self.config.model_suffix,
                pluralization=self.config.pluralization,
            )
        )
        self.render_options = self.config.render_options()

    def classify(
        self, declaration: TypeDeclaration, enum_registry: AbstractSet[str]
    ) -> List[ClassifiedAttribute]:
        """Classify the stored attributes of a declaration, in declaration order."""
        self._check_unique_names(declaration)
        classified = []
        for descriptor in declaration.attributes:
            attribute = self.classifier.classify(descriptor, enum_registry)
            if attribute is not None:
                classified.append(attribute)
        return classified

    def transform(
        self,
        declaration: TypeDeclaration,
        enum_registry: Optional[Iterable[str]] = None,
        known_types: Optional[Iterable[str]] = None,
    ) -> SynthesizedModel:
        """
        Generate the persistence class for a domain type.

        Args:
            declaration: The domain type
            enum_registry: Enumeration type names; the configured set when None
            known_types: Declared type names relations may target; when None
                relation targets are trusted

        Raises:
            NotATypeDeclarationError: If declaration is not a TypeDeclaration
            InvalidAttributeError: For unusable or duplicate attributes
            UnresolvedRelationError: If a relation targets an unknown type
        """
        _check_declaration(declaration)
        registry = frozenset(self.config.enum_types if enum_registry is None else enum_registry)

        logger.debug(f"Generating persistence model for '{declaration.name}'")
        attributes = self.classify(declaration, registry)
        RelationResolver(known_types).resolve(declaration.name, attributes)

        document = self.synthesizer.synthesize(declaration.name, attributes)
        text = generate_model_code(document, self.render_options)

        return SynthesizedModel(
            domain_name=declaration.name,
            class_name=document.class_name,
            table_name=document.table_name,
            text=text,
            document=document,
            attributes=attributes,
        )

    @staticmethod
    def _check_unique_names(declaration: TypeDeclaration) -> None:
        seen = set()
        for descriptor in declaration.attributes:
            if descriptor.name in seen:
                raise InvalidAttributeError(
                    f"Attribute '{descriptor.name}' is declared more than once",
                    attribute=descriptor.name,
                    type_name=declaration.name,
                )
            seen.add(descriptor.name)


def _check_declaration(declaration) -> None:
    if not isinstance(declaration, TypeDeclaration):
        raise NotATypeDeclarationError(
            "Models can only be generated from a type declaration",
            found=type(declaration).__name__,
        )
    if not declaration.name or not declaration.name.isidentifier():
        raise NotATypeDeclarationError(
            f"'{declaration.name}' is not a valid type name",
            found=repr(declaration.name),
        )


def generate_model(
    declaration: TypeDeclaration,
    enum_registry: Optional[Iterable[str]] = None,
    known_types: Optional[Iterable[str]] = None,
    config: Optional[ToolConfigSchema] = None,
) -> SynthesizedModel:
    """
    Generate the Django persistence class for one domain type.

    Example:
        >>> decl = TypeDeclaration("Venue", [AttributeDescriptor("name", "str")])
        >>> generate_model(decl).class_name
        'VenueModel'
    """
    return ModelTransformer(config).transform(declaration, enum_registry, known_types)
