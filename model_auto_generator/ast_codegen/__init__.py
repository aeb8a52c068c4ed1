"""
Django AST Code Generator Module

Renders a synthesized model document as the source of a Django model class.
"""

from .models import RenderOptions, generate_model_code, module_imports


__all__ = [
    'RenderOptions',
    'generate_model_code',
    'module_imports'
]
