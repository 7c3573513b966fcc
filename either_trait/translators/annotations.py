"""
Structural queries over Python annotation and decorator expressions
"""

import ast
from typing import Optional

from ..core.config import GENERIC_BASES, METADATA_FORMS, SELF_TYPE_NAMES, VALUE_FORMS


class SelfReferenceFinder(ast.NodeVisitor):
    """Finds references to the implementing type (`Self`) in an annotation"""

    def __init__(self):
        self.found = False

    def search(self, node: ast.AST) -> bool:
        self.found = False
        self.visit(node)
        return self.found

    def visit_Name(self, node: ast.Name):
        if node.id in SELF_TYPE_NAMES:
            self.found = True

    def visit_Attribute(self, node: ast.Attribute):
        # typing.Self, typing_extensions.Self
        if node.attr in SELF_TYPE_NAMES:
            self.found = True
        else:
            self.generic_visit(node)

    def visit_Constant(self, node: ast.Constant):
        # Forward references: "Self", "list[Self]"
        if isinstance(node.value, str):
            try:
                inner = ast.parse(node.value.strip(), mode="eval")
            except SyntaxError:
                return
            self.visit(inner.body)

    def visit_Subscript(self, node: ast.Subscript):
        form = decorator_name(node.value)
        if form in VALUE_FORMS:
            # Literal["Self"] holds a value, not a type
            self.visit(node.value)
        elif form in METADATA_FORMS and isinstance(node.slice, ast.Tuple) and node.slice.elts:
            # Annotated[T, ...]: only T is a type
            self.visit(node.value)
            self.visit(node.slice.elts[0])
        else:
            self.generic_visit(node)


def decorator_name(node: ast.expr) -> Optional[str]:
    """
    Name a decorator is known by, ignoring module prefixes and call arguments.

    `@abc.abstractmethod` -> "abstractmethod", `@deprecated("x")` -> "deprecated"
    """
    if isinstance(node, ast.Call):
        node = node.func
    if isinstance(node, ast.Name):
        return node.id
    if isinstance(node, ast.Attribute):
        return node.attr
    return None


def generic_base_params(base: ast.expr) -> Optional[ast.expr]:
    """Subscript of a `Generic[...]` or `Protocol[...]` base, else None"""
    if not isinstance(base, ast.Subscript):
        return None
    if decorator_name(base.value) in GENERIC_BASES:
        return base.slice
    return None
