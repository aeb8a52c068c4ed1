import ast
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from model_auto_generator.constants import FieldNames
from model_auto_generator.domain.models import AttributeDescriptor, TypeDeclaration
from model_auto_generator.domain.type_expressions import split_optional, base_type_name
from model_auto_generator.exceptions import NotATypeDeclarationError


logger = logging.getLogger(__name__)


# --- Data Structures for Introspection Results ---
@dataclass
class ModuleInfo:
    """Holds the type declarations found in one source module."""
    declarations: List[TypeDeclaration] = field(default_factory=list)
    enum_types: List[str] = field(default_factory=list)  # Enum subclasses declared beside them
    skipped_types: List[str] = field(default_factory=list)  # Filtered out by include/exclude

    @property
    def declared_types(self) -> List[str]:
        """Type names whose models this module generates."""
        return [decl.name for decl in self.declarations]


# --- Helper Functions ---
def _decorator_name(node: ast.expr) -> str:
    if isinstance(node, ast.Call):
        node = node.func
    return ast.unparse(node)


def _is_enum_class(node: ast.ClassDef) -> bool:
    return any(ast.unparse(base) in FieldNames.ENUM_BASES for base in node.bases)


def _is_class_var(annotation: str) -> bool:
    return base_type_name(annotation) in ("ClassVar", "typing.ClassVar")


def _attribute_from_ann_assign(node: ast.AnnAssign) -> Optional[AttributeDescriptor]:
    """Stored attribute from 'name: type [= default]'."""
    if not isinstance(node.target, ast.Name):
        return None
    declared_type = ast.unparse(node.annotation)
    if _is_class_var(declared_type):
        # Class-level constant, not per-instance state
        return AttributeDescriptor(node.target.id, declared_type, is_computed=True)
    _, is_optional = split_optional(declared_type)
    return AttributeDescriptor(
        name=node.target.id,
        declared_type=declared_type,
        is_optional=is_optional,
    )


def _attribute_from_property(node: ast.FunctionDef) -> Optional[AttributeDescriptor]:
    """Computed attribute from an @property / @cached_property method."""
    decorators = {_decorator_name(dec) for dec in node.decorator_list}
    if not decorators & FieldNames.COMPUTED_DECORATORS:
        return None
    declared_type = ast.unparse(node.returns) if node.returns is not None else "Any"
    _, is_optional = split_optional(declared_type)
    return AttributeDescriptor(
        name=node.name,
        declared_type=declared_type,
        is_optional=is_optional,
        is_computed=True,
    )


def declaration_from_class(node: ast.ClassDef, module: Optional[str] = None) -> TypeDeclaration:
    """Builds a TypeDeclaration from a parsed class body."""
    attributes: List[AttributeDescriptor] = []
    for member in node.body:
        attribute = None
        if isinstance(member, ast.AnnAssign):
            attribute = _attribute_from_ann_assign(member)
        elif isinstance(member, (ast.FunctionDef, ast.AsyncFunctionDef)):
            attribute = _attribute_from_property(member)
        if attribute is not None:
            attributes.append(attribute)

    logger.debug(f"Found {len(attributes)} attributes on '{node.name}'")
    return TypeDeclaration(name=node.name, attributes=attributes, module=module)


def _is_docstring(stmt: ast.stmt) -> bool:
    return (
        isinstance(stmt, ast.Expr)
        and isinstance(stmt.value, ast.Constant)
        and isinstance(stmt.value.value, str)
    )


def _parse(source: str) -> ast.Module:
    try:
        return ast.parse(source)
    except SyntaxError as e:
        raise NotATypeDeclarationError(
            f"Source could not be parsed: {e.msg} (line {e.lineno})",
            found="invalid source",
        ) from e


# --- Main Introspection Functions ---
def parse_declaration(source: str, module: Optional[str] = None) -> TypeDeclaration:
    """
    Parses source holding exactly one class into a TypeDeclaration.

    Raises:
        NotATypeDeclarationError: If the source is not a single class declaration
    """
    tree = _parse(source)
    statements = [
        stmt for stmt in tree.body
        if not isinstance(stmt, (ast.Import, ast.ImportFrom)) and not _is_docstring(stmt)
    ]
    if len(statements) != 1 or not isinstance(statements[0], ast.ClassDef):
        found = ", ".join(type(stmt).__name__ for stmt in statements) or "nothing"
        raise NotATypeDeclarationError(
            "Expected exactly one class declaration", found=found
        )
    if _is_enum_class(statements[0]):
        raise NotATypeDeclarationError(
            f"'{statements[0].name}' is an enumeration, not a type with a member list",
            found="Enum",
        )
    return declaration_from_class(statements[0], module)


def introspect_module(
    source: str,
    module: Optional[str] = None,
    include_types: Optional[List[str]] = None,
    exclude_types: Optional[List[str]] = None,
) -> ModuleInfo:
    """Collects every top-level class declaration and enumeration in a source module."""
    tree = _parse(source)
    info = ModuleInfo()

    for node in tree.body:
        if not isinstance(node, ast.ClassDef):
            continue
        if _is_enum_class(node):
            info.enum_types.append(node.name)
            logger.debug(f"Detected enumeration '{node.name}'")
            continue
        if include_types is not None and node.name not in include_types:
            info.skipped_types.append(node.name)
            logger.debug(f"Skipping '{node.name}' (not in include_types)")
            continue
        if exclude_types and node.name in exclude_types:
            info.skipped_types.append(node.name)
            logger.debug(f"Skipping '{node.name}' (in exclude_types)")
            continue
        info.declarations.append(declaration_from_class(node, module))

    logger.info(
        f"Found {len(info.declarations)} type declarations and {len(info.enum_types)} enumerations"
    )
    return info
