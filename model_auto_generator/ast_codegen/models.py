import logging
import ast
from dataclasses import dataclass, field
from typing import List, Optional

from model_auto_generator.ast_codegen.base import (
    add_location, create_assign, create_attribute, create_attribute_call, create_call,
    create_class_def, create_constant, create_docstring, create_function_def,
    create_if_expression, create_import, create_is_none, create_keyword, create_meta_class,
    create_name, create_return, create_string_constant,
)
from model_auto_generator.constants import DefaultConfig, DjangoFieldTypes, GenerationOptions
from model_auto_generator.domain.models import (
    AttributeRole, ConversionKind, ConversionStatement, ModelDocument, StorageDeclaration,
)
from model_auto_generator.mapper import MappingOptions, Reference, map_storage_to_django


logger = logging.getLogger(__name__)

SELF = "self"
CLS = "cls"
INSTANCE = "model"
UNWRAP_HELPER = "_unwrap"
PARSE_ENUM_HELPER = "_parse_enum"


@dataclass(frozen=True)
class RenderOptions:
    """Django-specific choices made while rendering a model document."""

    mapping: MappingOptions = field(default_factory=MappingOptions)
    on_delete: str = DefaultConfig.ON_DELETE
    app_label: Optional[str] = None


def _option_value(value) -> ast.expr:
    if isinstance(value, Reference):
        return create_attribute(value.path)
    return create_constant(value)


def create_model_field(decl: StorageDeclaration, options: RenderOptions) -> ast.Assign:
    """Creates an AST assignment node for a Django model field."""
    django_field_type, field_options = map_storage_to_django(decl, options.mapping)
    keywords = [create_keyword(name, _option_value(value)) for name, value in field_options.items()]
    field_call = create_attribute_call(obj_name="models", attr_name=django_field_type, keywords=keywords)
    return create_assign(target=decl.slot_name, value=field_call)


def create_relationship_field(decl: StorageDeclaration, options: RenderOptions) -> ast.Assign:
    """Creates an AST assignment node for a ForeignKey slot."""
    keywords = [
        create_keyword("on_delete", create_attribute(f"models.{options.on_delete}")),
        create_keyword("db_column", create_string_constant(decl.column_name)),
        # No reverse accessor: several relations may target the same model
        create_keyword("related_name", create_string_constant("+")),
    ]
    field_call = create_attribute_call(
        obj_name="models",
        attr_name=DjangoFieldTypes.FOREIGN_KEY,
        args=[create_string_constant(decl.related_class)],
        keywords=keywords,
    )
    return create_assign(target=decl.slot_name, value=field_call)


def create_storage_field(decl: StorageDeclaration, options: RenderOptions) -> ast.Assign:
    if decl.role == AttributeRole.RELATION:
        return create_relationship_field(decl, options)
    return create_model_field(decl, options)


def create_model_meta(document: ModelDocument, options: RenderOptions) -> ast.ClassDef:
    """Creates the AST node for the inner Meta class of a model."""
    meta_options = [("db_table", create_string_constant(document.table_name))]
    if options.app_label:
        meta_options.append(("app_label", create_string_constant(options.app_label)))
    return create_meta_class(meta_options)


def create_blank_constructor() -> ast.FunctionDef:
    """cls() with no arguments: an empty instance the ORM can populate."""
    return create_function_def(
        name=GenerationOptions.BLANK_CONSTRUCTOR,
        args=[CLS],
        body=[create_return(create_call(CLS))],
        decorators=["classmethod"],
    )


def _enum_value(source: ast.expr, stmt: ConversionStatement) -> ast.expr:
    # Stored as text whatever the member value type is
    member_value = add_location(ast.Attribute(value=source, attr="value", ctx=ast.Load()))
    value = create_call("str", args=[member_value])
    if stmt.null_safe:
        return create_if_expression(create_is_none(source, negate=True), value, create_constant(None))
    return value


def create_to_storage_assignment(stmt: ConversionStatement) -> ast.Assign:
    source = create_attribute(f"{GenerationOptions.DOMAIN_ARGUMENT}.{stmt.attribute}")
    if stmt.kind == ConversionKind.ENUM_VALUE:
        value = _enum_value(source, stmt)
    elif stmt.kind == ConversionKind.KEEP_DEFAULT:
        current = create_attribute(f"{INSTANCE}.{stmt.slot}")
        value = create_if_expression(create_is_none(source, negate=True), source, current)
    else:
        # COPY and FOREIGN_KEY both copy; the slot differs
        value = source
    return create_assign(target=f"{INSTANCE}.{stmt.slot}", value=value)


def create_from_domain(document: ModelDocument) -> ast.FunctionDef:
    """Creates the domain -> persistence classmethod."""
    body: List[ast.stmt] = [
        create_assign(INSTANCE, create_call(f"{CLS}.{GenerationOptions.BLANK_CONSTRUCTOR}"))
    ]
    body.extend(create_to_storage_assignment(stmt) for stmt in document.to_storage)
    body.append(create_return(create_name(INSTANCE)))
    return create_function_def(
        name=GenerationOptions.FROM_DOMAIN,
        args=[CLS, GenerationOptions.DOMAIN_ARGUMENT],
        body=body,
        decorators=["classmethod"],
        annotations={GenerationOptions.DOMAIN_ARGUMENT: document.domain_name},
    )


def create_to_domain_value(stmt: ConversionStatement) -> ast.expr:
    slot = create_attribute(f"{SELF}.{stmt.slot}")

    if stmt.kind == ConversionKind.IDENTIFIER_DEFAULT:
        module, factory = GenerationOptions.IDENTIFIER_FACTORY
        return create_if_expression(
            create_is_none(slot, negate=True), slot, create_call(f"{module}.{factory}")
        )
    if stmt.kind == ConversionKind.REQUIRE_SET:
        return create_call(
            f"{SELF}.{UNWRAP_HELPER}",
            args=[slot, create_string_constant(stmt.attribute)],
        )
    if stmt.kind == ConversionKind.ENUM_PARSE:
        parsed = create_call(
            f"{SELF}.{PARSE_ENUM_HELPER}",
            args=[create_attribute(stmt.enum_type), slot],
        )
        if stmt.null_safe:
            return create_if_expression(create_is_none(slot, negate=True), parsed, create_constant(None))
        return parsed
    return slot


def create_to_domain(document: ModelDocument) -> ast.FunctionDef:
    """Creates the persistence -> domain method; keywords follow declaration order."""
    domain_call = create_call(
        document.domain_name,
        keywords=[create_keyword(stmt.attribute, create_to_domain_value(stmt)) for stmt in document.to_domain],
    )
    return create_function_def(
        name=GenerationOptions.TO_DOMAIN,
        args=[SELF],
        body=[create_return(domain_call)],
    )


def create_unwrap_helper(document: ModelDocument) -> ast.FunctionDef:
    """Static helper that fails loudly on a slot the ORM never populated."""
    message = add_location(ast.JoinedStr(values=[
        create_string_constant(f"{document.class_name}."),
        add_location(ast.FormattedValue(value=create_name("attribute"), conversion=-1, format_spec=None)),
        create_string_constant(" is not set"),
    ]))
    check = add_location(ast.If(
        test=create_is_none(create_name("value")),
        body=[add_location(ast.Raise(exc=create_call("ValueError", args=[message]), cause=None))],
        orelse=[],
    ))
    return create_function_def(
        name=UNWRAP_HELPER,
        args=["value", "attribute"],
        body=[check, create_return(create_name("value"))],
        decorators=["staticmethod"],
    )


def create_parse_enum_helper() -> ast.FunctionDef:
    """Static helper mapping stored text back to the member whose value prints as it."""
    member_text = create_call("str", args=[create_attribute("member.value")])
    match = add_location(ast.If(
        test=add_location(ast.Compare(left=member_text, ops=[ast.Eq()], comparators=[create_name("value")])),
        body=[create_return(create_name("member"))],
        orelse=[],
    ))
    loop = add_location(ast.For(
        target=create_name("member", store=True),
        iter=create_name("enum_type"),
        body=[match],
        orelse=[],
    ))
    message = add_location(ast.JoinedStr(values=[
        add_location(ast.FormattedValue(value=create_name("value"), conversion=ord("r"), format_spec=None)),
        create_string_constant(" is not a valid "),
        add_location(ast.FormattedValue(value=create_attribute("enum_type.__name__"), conversion=-1, format_spec=None)),
    ]))
    failure = add_location(ast.Raise(exc=create_call("ValueError", args=[message]), cause=None))
    return create_function_def(
        name=PARSE_ENUM_HELPER,
        args=["enum_type", "value"],
        body=[loop, failure],
        decorators=["staticmethod"],
    )


def create_model_class(document: ModelDocument, options: RenderOptions = RenderOptions()) -> ast.ClassDef:
    """Creates the AST ClassDef node for a Django model."""
    model_body: List[ast.stmt] = [
        create_docstring(f"Persistence model for '{document.domain_name}', stored in '{document.table_name}'.")
    ]
    model_body.extend(create_storage_field(decl, options) for decl in document.storage)
    model_body.append(create_model_meta(document, options))
    model_body.append(create_blank_constructor())
    model_body.append(create_from_domain(document))
    model_body.append(create_to_domain(document))
    if document.requires_set_check:
        model_body.append(create_unwrap_helper(document))
    if document.parses_enums:
        model_body.append(create_parse_enum_helper())

    return create_class_def(name=document.class_name, bases=["models.Model"], body=model_body)


def generate_model_code(document: ModelDocument, options: RenderOptions = RenderOptions()) -> str:
    """Renders the source text of a single model class."""
    class_node = ast.fix_missing_locations(create_model_class(document, options))
    return ast.unparse(class_node)


def module_imports(documents: List[ModelDocument], domain_module: Optional[str] = None) -> List[str]:
    """Import lines a models module needs for the given documents."""
    imports: List[ast.stmt] = []
    if any(document.uses_identifier_factory for document in documents):
        imports.append(create_import(GenerationOptions.IDENTIFIER_FACTORY[0]))
    imports.append(create_import("django.db", ["models"]))
    if domain_module:
        imports.append(create_import(domain_module, domain_names(documents)))
    return [ast.unparse(node) for node in imports]


def domain_names(documents: List[ModelDocument]) -> List[str]:
    """Domain names a models module must import, in first-use order."""
    names: List[str] = []
    for document in documents:
        for name in [document.domain_name, *document.enum_types]:
            # Dotted enum types are reached through their own module
            if "." not in name and name not in names:
                names.append(name)
    return names
