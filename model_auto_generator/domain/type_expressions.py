"""
Helpers for reading type annotations written as text.

Annotations arrive as source text (``Optional[str]``, ``EventStatus | None``).
They are parsed with the ``ast`` module so nested generics are handled
correctly; text that does not parse is taken verbatim.
"""

import ast
import logging
from typing import Optional, Tuple

from ..constants import FieldNames


logger = logging.getLogger(__name__)


def _is_none(node: ast.expr) -> bool:
    return isinstance(node, ast.Constant) and node.value is None


def _dotted_name(node: ast.expr) -> Optional[str]:
    """Return 'a.b.c' for Name/Attribute chains, None otherwise."""
    if isinstance(node, ast.Name):
        return node.id
    if isinstance(node, ast.Attribute):
        parent = _dotted_name(node.value)
        return f"{parent}.{node.attr}" if parent else None
    return None


def _unwrap_optional(node: ast.expr) -> Tuple[ast.expr, bool]:
    # X | None, None | X
    if isinstance(node, ast.BinOp) and isinstance(node.op, ast.BitOr):
        if _is_none(node.right):
            return node.left, True
        if _is_none(node.left):
            return node.right, True
        return node, False

    if isinstance(node, ast.Subscript):
        wrapper = _dotted_name(node.value)
        if wrapper in FieldNames.OPTIONAL_WRAPPERS:
            return node.slice, True
        if wrapper in FieldNames.UNION_WRAPPERS and isinstance(node.slice, ast.Tuple):
            members = [elt for elt in node.slice.elts if not _is_none(elt)]
            if len(members) == 1 and len(node.slice.elts) == 2:
                return members[0], True

    return node, False


def split_optional(type_text: str) -> Tuple[str, bool]:
    """
    Strip the optionality marker from an annotation.

    Returns the base type text and whether a marker was present.

    Example:
        >>> split_optional("Optional[str]")
        ('str', True)
        >>> split_optional("EventStatus | None")
        ('EventStatus', True)
        >>> split_optional("list[int]")
        ('list[int]', False)
    """
    text = type_text.strip()
    try:
        node = ast.parse(text, mode="eval").body
    except SyntaxError:
        logger.debug(f"Annotation '{text}' is not a Python expression, keeping it verbatim.")
        return text, False

    base, is_optional = _unwrap_optional(node)
    if not is_optional:
        return text, False
    return ast.unparse(base), True


def base_type_name(type_text: str) -> str:
    """
    Outer name of a type expression, without subscripts.

    Example:
        >>> base_type_name("dict[str, int]")
        'dict'
    """
    try:
        node = ast.parse(type_text.strip(), mode="eval").body
    except SyntaxError:
        return type_text.strip()
    if isinstance(node, ast.Subscript):
        node = node.value
    return _dotted_name(node) or type_text.strip()
