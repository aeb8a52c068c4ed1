"""
Domain module for Model Auto Generator.

Holds the language-neutral core of the generator: attribute
classification, naming rules, relation resolution and model synthesis.
Nothing here knows about Django; rendering lives in ast_codegen.
"""

from .models import (
    AttributeRole,
    Lifecycle,
    ConversionKind,
    AttributeDescriptor,
    TypeDeclaration,
    ClassifiedAttribute,
    StorageDeclaration,
    ConversionStatement,
    ModelDocument,
    SynthesizedModel
)

from .naming import (
    NamingConventions,
    to_snake_case,
    pluralize,
    class_for,
    capitalize,
    inflect_pluralize
)

from .type_expressions import (
    split_optional,
    base_type_name
)

from .classifier import AttributeClassifier
from .relationships import RelationResolver
from .synthesizer import ModelSynthesizer

__all__ = [
    # Core models
    'AttributeRole',
    'Lifecycle',
    'ConversionKind',
    'AttributeDescriptor',
    'TypeDeclaration',
    'ClassifiedAttribute',
    'StorageDeclaration',
    'ConversionStatement',
    'ModelDocument',
    'SynthesizedModel',

    # Naming
    'NamingConventions',
    'to_snake_case',
    'pluralize',
    'class_for',
    'capitalize',
    'inflect_pluralize',

    # Type expressions
    'split_optional',
    'base_type_name',

    # Pipeline stages
    'AttributeClassifier',
    'RelationResolver',
    'ModelSynthesizer'
]
