"""
Python source rendering for interfaces that were not read from Python source
"""

from ..core.models import AssociatedItemKind, InterfaceDefinition
from .forwarding import INDENT, indent_lines, render_signature


def render_interface(interface: InterfaceDefinition) -> str:
    """
    Render an interface definition as a Python class.

    Method bodies are `...`; docstrings and decorators are written as given.
    """
    lines = [f"@{d}" for d in interface.decorators]

    header = f"class {interface.name}"
    if interface.type_params:
        header += "[" + ", ".join(tp.text for tp in interface.type_params) + "]"
    if interface.bases:
        header += "(" + ", ".join(interface.bases) + ")"
    lines.append(header + ":")

    body = []
    if interface.docstring is not None:
        body.append(interface.docstring.literal)

    for item in interface.associated_items:
        if item.kind == AssociatedItemKind.TYPE:
            body.append(f"class {item.name}: ...")
        else:
            body.append(f"{item.name} = ...")

    for method in interface.methods:
        if body:
            body.append("")
        body.extend(f"@{d}" for d in method.decorators)
        body.append(render_signature(method))
        if method.docstring is not None:
            body.append(INDENT + method.docstring.literal)
        body.append(INDENT + "...")

    if not body:
        body.append("pass")

    lines.extend(indent_lines(body, 1))
    return "\n".join(lines)
