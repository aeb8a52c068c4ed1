"""
Custom exception hierarchy for Model Auto Generator.

Every failure the generator can report is a subclass of
ModelAutoGeneratorError, carrying context about the offending type or
attribute and a short list of recovery suggestions.
"""

from typing import Dict, Any, Optional, List


class ModelAutoGeneratorError(Exception):
    """
    Base exception for all Model Auto Generator errors.

    Provides rich context and error recovery guidance.
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        error_code: Optional[str] = None
    ):
        """
        Initialize the exception with context and recovery suggestions.

        Args:
            message: Human-readable error message
            context: Additional context about where/why the error occurred
            suggestions: List of potential solutions or next steps
            error_code: Unique error code for programmatic handling
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.suggestions = suggestions or []
        self.error_code = error_code

    def __str__(self) -> str:
        """Return formatted error message with context."""
        lines = [super().__str__()]

        if self.error_code:
            lines.append(f"Error Code: {self.error_code}")

        if self.context:
            lines.append("Context:")
            for key, value in self.context.items():
                lines.append(f"  {key}: {value}")

        if self.suggestions:
            lines.append("Suggestions:")
            for suggestion in self.suggestions:
                lines.append(f"  • {suggestion}")

        return "\n".join(lines)


class ConfigurationError(ModelAutoGeneratorError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str, config_file: str = None, **kwargs):
        context = kwargs.get('context', {})
        if config_file:
            context['config_file'] = config_file

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Check the configuration file syntax",
                "Verify all option names are spelled correctly",
                "Check the README for configuration examples"
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="CONFIG_ERROR"
        )


class NotATypeDeclarationError(ModelAutoGeneratorError):
    """Raised when the input is not a single type declaration with a member list."""

    def __init__(self, message: str, found: str = None, **kwargs):
        context = kwargs.get('context', {})
        if found:
            context['found'] = found

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Pass exactly one class declaration",
                "Make sure the class body declares its attributes with annotations"
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="NOT_A_TYPE_DECLARATION"
        )


class InvalidAttributeError(ModelAutoGeneratorError):
    """Raised when an attribute descriptor cannot be interpreted."""

    def __init__(self, message: str, attribute: str = None, type_name: str = None, **kwargs):
        context = kwargs.get('context', {})
        if attribute is not None:
            context['attribute'] = attribute
        if type_name:
            context['type'] = type_name

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Use a valid Python identifier as the attribute name",
                "Declare every attribute exactly once",
                "Give every stored attribute a type annotation"
            ]

        self.attribute = attribute
        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="INVALID_ATTRIBUTE"
        )


class UnresolvedRelationError(ModelAutoGeneratorError):
    """Raised when a relation points at a type that was never declared."""

    def __init__(
        self,
        message: str,
        source_type: str = None,
        attribute: str = None,
        target_type: str = None,
        **kwargs
    ):
        context = kwargs.get('context', {})
        if source_type:
            context['source_type'] = source_type
        if attribute:
            context['attribute'] = attribute
        if target_type:
            context['target_type'] = target_type

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Declare the related type in the same source file",
                "List the related type under 'external_types' in the configuration",
                "Disable 'strict_relations' to trust relation targets"
            ]

        self.target_type = target_type
        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="UNRESOLVED_RELATION"
        )


class CodeGenerationError(ModelAutoGeneratorError):
    """Raised when rendering or writing generated code fails."""

    def __init__(self, message: str, component: str = None, type_name: str = None, **kwargs):
        context = kwargs.get('context', {})
        if component:
            context['component'] = component  # e.g., 'renderer', 'template', 'writer'
        if type_name:
            context['type'] = type_name

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Check the domain type for unsupported annotations",
                "Check for naming conflicts or reserved words",
                "Verify the output directory is writable"
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="CODE_GENERATION_ERROR"
        )
