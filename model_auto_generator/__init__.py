"""
Model Auto Generator: Django persistence models from annotated Python domain types.
"""

from model_auto_generator.domain.models import (
    AttributeDescriptor,
    TypeDeclaration,
    SynthesizedModel,
)
from model_auto_generator.exceptions import (
    ModelAutoGeneratorError,
    ConfigurationError,
    NotATypeDeclarationError,
    InvalidAttributeError,
    UnresolvedRelationError,
    CodeGenerationError,
)
from model_auto_generator.transform import ModelTransformer, generate_model

__version__ = "0.1.0"

__all__ = [
    'AttributeDescriptor',
    'TypeDeclaration',
    'SynthesizedModel',
    'ModelAutoGeneratorError',
    'ConfigurationError',
    'NotATypeDeclarationError',
    'InvalidAttributeError',
    'UnresolvedRelationError',
    'CodeGenerationError',
    'ModelTransformer',
    'generate_model',
]
