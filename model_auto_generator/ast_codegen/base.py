import ast
from typing import Any, List, Optional


def add_location(node):
    """Add location info to AST nodes"""
    node.lineno = 1
    node.col_offset = 0
    return node


def create_docstring(content: str) -> ast.Expr:
    """Creates an AST node for a docstring."""
    return add_location(ast.Expr(value=create_string_constant(content)))


def create_import(module: str, names: Optional[List[str]] = None) -> ast.Import | ast.ImportFrom:
    """Creates an AST node for an import statement."""
    if names:
        node = ast.ImportFrom(
            module=module,
            names=[ast.alias(name=name, lineno=1, col_offset=0) for name in names],
            level=0
        )
    else:
        node = ast.Import(names=[ast.alias(name=module, lineno=1, col_offset=0)])
    return add_location(node)


def create_name(name: str, store: bool = False) -> ast.Name:
    """Creates an AST Name node."""
    return add_location(ast.Name(id=name, ctx=ast.Store() if store else ast.Load()))


def create_attribute(path: str, store: bool = False) -> ast.expr:
    """Creates a (possibly dotted) attribute access: 'self.venue_id', 'models.CASCADE'."""
    parts = path.split(".")
    node: ast.expr = create_name(parts[0])
    for index, part in enumerate(parts[1:], start=2):
        is_last = index == len(parts)
        node = add_location(ast.Attribute(
            value=node,
            attr=part,
            ctx=ast.Store() if (store and is_last) else ast.Load()
        ))
    return node


def create_assign(target: str, value: ast.expr) -> ast.Assign:
    """Creates an AST node for an assignment to a name or a dotted attribute."""
    target_node = create_attribute(target, store=True) if "." in target else create_name(target, store=True)
    return add_location(ast.Assign(targets=[target_node], value=value))


def create_call(func_name: str, args: Optional[List[ast.expr]] = None, keywords: Optional[List[ast.keyword]] = None) -> ast.Call:
    """Creates an AST node for a call; func_name may be dotted."""
    return add_location(ast.Call(
        func=create_attribute(func_name),
        args=args or [],
        keywords=keywords or []
    ))


def create_attribute_call(obj_name: str, attr_name: str, args: Optional[List[ast.expr]] = None, keywords: Optional[List[ast.keyword]] = None) -> ast.Call:
    """Creates an AST node for a method call on an object."""
    return create_call(f"{obj_name}.{attr_name}", args=args, keywords=keywords)


def create_class_def(name: str, bases: List[str], body: List[ast.stmt], decorator_list: Optional[List[ast.expr]] = None) -> ast.ClassDef:
    """Creates an AST node for a class definition."""
    node = ast.ClassDef(
        name=name,
        bases=[create_attribute(base) for base in bases],
        keywords=[],
        body=body,
        decorator_list=decorator_list or []
    )
    # Python 3.12+ unparses type parameters
    node.type_params = []
    return add_location(node)


def create_meta_class(options: List[tuple]) -> ast.ClassDef:
    """Creates an AST node for an inner Meta class."""
    return create_class_def(
        name="Meta",
        bases=[],
        body=[create_assign(target=key, value=val) for key, val in options]
    )


def create_function_def(
    name: str,
    args: List[str],
    body: List[ast.stmt],
    decorators: Optional[List[str]] = None,
    annotations: Optional[dict] = None,
) -> ast.FunctionDef:
    """Creates an AST node for a function or method definition."""
    annotations = annotations or {}
    node = ast.FunctionDef(
        name=name,
        args=add_location(ast.arguments(
            posonlyargs=[],
            args=[
                add_location(ast.arg(
                    arg=arg,
                    annotation=create_name(annotations[arg]) if arg in annotations else None
                ))
                for arg in args
            ],
            kwonlyargs=[],
            kw_defaults=[],
            defaults=[],
        )),
        body=body,
        decorator_list=[create_attribute(decorator) for decorator in decorators or []],
        returns=None
    )
    # Python 3.12+ unparses type parameters
    node.type_params = []
    return add_location(node)


def create_return(value: ast.expr) -> ast.Return:
    """Creates an AST node for a return statement."""
    return add_location(ast.Return(value=value))


def create_if_expression(test: ast.expr, body: ast.expr, orelse: ast.expr) -> ast.IfExp:
    """Creates an AST node for 'body if test else orelse'."""
    return add_location(ast.IfExp(test=test, body=body, orelse=orelse))


def create_is_none(value: ast.expr, negate: bool = False) -> ast.Compare:
    """Creates 'value is None' (or 'value is not None')."""
    return add_location(ast.Compare(
        left=value,
        ops=[ast.IsNot() if negate else ast.Is()],
        comparators=[create_none_constant()]
    ))


def create_constant(value: Any) -> ast.Constant:
    """Creates an AST Constant node."""
    return add_location(ast.Constant(value=value))


def create_string_constant(value: str) -> ast.Constant:
    """Creates an AST Constant node for a string."""
    return create_constant(value)


def create_none_constant() -> ast.Constant:
    """Creates an AST Constant node for None."""
    return create_constant(None)


def create_keyword(arg: str, value: ast.expr) -> ast.keyword:
    """Creates an AST keyword argument."""
    return add_location(ast.keyword(arg=arg, value=value))
