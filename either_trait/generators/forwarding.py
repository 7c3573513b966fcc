"""
Forwarding implementation generation for Either
"""

import ast
from typing import List, Tuple

from ..core.config import (
    CASE_BINDINGS,
    DECLARATION_DECORATORS,
    IMPL_SUFFIX,
    RECEIVER_ACCESSORS,
    RECEIVER_NAME,
    RESERVED_TYPE_PARAMS,
)
from ..core.models import (
    GeneratedImplementation,
    InterfaceDefinition,
    MethodSignature,
    Parameter,
    ParameterKind,
    Visibility,
)
from ..translators.annotations import decorator_name

INDENT = "    "


def indent_lines(lines: List[str], level: int) -> List[str]:
    """Indent non-empty lines by `level` steps"""
    return [INDENT * level + line if line else line for line in lines]


def impl_class_name(interface: InterfaceDefinition) -> str:
    """`Example` -> `ExampleEither`; private interfaces stay private"""
    name = f"{interface.name.lstrip('_')}{IMPL_SUFFIX}"
    if interface.visibility == Visibility.PRIVATE:
        return f"_{name}"
    return name


def render_parameter(param: Parameter) -> str:
    text = param.spelling
    if param.annotation is not None:
        text += f": {param.annotation.text}"
        if param.default is not None:
            text += f" = {param.default}"
    elif param.default is not None:
        text += f"={param.default}"
    return text


def render_signature(method: MethodSignature) -> str:
    """The `def` line of a method, spelled the way it was declared"""
    parts = [RECEIVER_NAME] if method.receiver is not None else []
    positional_only = method.receiver_positional_only or any(
        p.kind == ParameterKind.POSITIONAL_ONLY for p in method.parameters
    )
    starred = False

    for param in method.parameters:
        if positional_only and param.kind != ParameterKind.POSITIONAL_ONLY:
            parts.append("/")
            positional_only = False
        if param.kind == ParameterKind.VAR_POSITIONAL:
            starred = True
        elif param.kind == ParameterKind.KEYWORD_ONLY and not starred:
            parts.append("*")
            starred = True
        parts.append(render_parameter(param))

    if positional_only:
        parts.append("/")

    type_params = ""
    if method.type_params:
        type_params = "[" + ", ".join(tp.text for tp in method.type_params) + "]"

    returns = f" -> {method.returns.text}" if method.returns is not None else ""
    prefix = "async def" if method.is_async else "def"
    return f"{prefix} {method.name}{type_params}({', '.join(parts)}){returns}:"


def forwarded_arguments(method: MethodSignature) -> str:
    """Argument list passing every parameter through unchanged"""
    args = []
    for param in method.parameters:
        if param.kind == ParameterKind.KEYWORD_ONLY:
            args.append(f"{param.binding}={param.binding}")
        else:
            args.append(param.spelling)
    return ", ".join(args)


def case_bindings(method: MethodSignature) -> Tuple[str, str]:
    """Names for the held value in each arm, clear of the parameter names"""
    taken = {param.binding for param in method.parameters}
    names = []
    for name in CASE_BINDINGS:
        while name in taken:
            name += "_"
        names.append(name)
    return names[0], names[1]


def is_declaration_marker(decorator: str) -> bool:
    try:
        node = ast.parse(decorator, mode="eval").body
    except SyntaxError:
        return False
    return decorator_name(node) in DECLARATION_DECORATORS


def generate_forwarding_method(method: MethodSignature) -> List[str]:
    """
    Generate one forwarding method.

    The body is a two-arm match on the held variant; each arm calls the same
    method on the held value with the arguments passed through and returns
    its result as-is. The receiver kind picks the Either accessor, so
    by-value methods move the value out of the sum value.
    """
    lines = [f"@{d}" for d in method.decorators if not is_declaration_marker(d)]
    lines.append(render_signature(method))

    body = []
    if method.docstring is not None:
        body.append(method.docstring.literal)

    accessor = RECEIVER_ACCESSORS[method.receiver.value]
    left, right = case_bindings(method)
    args = forwarded_arguments(method)
    call = "await " if method.is_async else ""

    body.extend([
        f"match Either.{accessor}({RECEIVER_NAME}):",
        f"{INDENT}case Left({left}):",
        f"{INDENT * 2}return {call}{left}.{method.name}({args})",
        f"{INDENT}case Right({right}):",
        f"{INDENT * 2}return {call}{right}.{method.name}({args})",
    ])

    return lines + indent_lines(body, 1)


def generate_forwarding_impl(interface: InterfaceDefinition) -> GeneratedImplementation:
    """
    Generate the Either implementation of a validated interface.

    Args:
        interface: Interface that passed validation

    Returns:
        GeneratedImplementation holding the class source
    """
    class_name = impl_class_name(interface)
    left, right = RESERVED_TYPE_PARAMS
    name = interface.name

    lines = [
        f"class {class_name}[{left}: {name}, {right}: {name}]"
        f"(Either[{left}, {right}], {name}):"
    ]

    body = []
    if interface.docstring is not None:
        body.append(interface.docstring.literal)

    for method in interface.methods:
        if body:
            body.append("")
        body.extend(generate_forwarding_method(method))

    if not body:
        body.append("pass")

    lines.extend(indent_lines(body, 1))

    return GeneratedImplementation(
        interface_name=name,
        class_name=class_name,
        methods=tuple(method.name for method in interface.methods),
        source="\n".join(lines)
    )
