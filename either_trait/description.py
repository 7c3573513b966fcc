"""
Structured interface descriptions.

An offline front-end for tools that describe an interface as data instead
of Python source:

    {
        "name": "Example",
        "doc": "An example trait.",
        "methods": [
            {"name": "foo", "params": [{"binding": "x", "type": "int"}], "returns": "int"}
        ]
    }
"""

import ast
from dataclasses import replace
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator

from .core.config import MARKER_DECORATOR, RECEIVER_MARKERS
from .core.models import (
    AssociatedItem,
    AssociatedItemKind,
    Docstring,
    InterfaceDefinition,
    MethodSignature,
    Parameter,
    ParameterKind,
    ReceiverKind,
    SourceLocation,
    TypeParam,
    TypeReference,
    Visibility,
)
from .errors import ParseError
from .generators.interface import render_interface


def _identifier(value: str) -> str:
    if not value.isidentifier():
        raise ValueError(f"'{value}' is not a valid Python identifier")
    return value


class ParameterDescription(BaseModel):
    binding: str
    type: Optional[str] = None
    default: Optional[str] = None
    kind: Literal["positional_only", "positional", "keyword_only"] = "positional"


class MethodDescription(BaseModel):
    name: str
    receiver: Optional[Literal["value", "ref", "mut"]] = "ref"
    params: List[ParameterDescription] = Field(default_factory=list)
    returns: Optional[str] = None
    type_params: List[str] = Field(default_factory=list)
    doc: Optional[str] = None
    decorators: List[str] = Field(default_factory=list)
    is_async: bool = False

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        return _identifier(value)


class InterfaceDescription(BaseModel):
    name: str
    doc: Optional[str] = None
    decorators: List[str] = Field(default_factory=list)
    bases: List[str] = Field(default_factory=list)
    type_params: List[str] = Field(default_factory=list)
    constants: List[str] = Field(default_factory=list)
    types: List[str] = Field(default_factory=list)
    methods: List[MethodDescription] = Field(default_factory=list)
    imports: List[str] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        return _identifier(value)


def load_description(data: Union[str, bytes, Dict[str, Any], InterfaceDescription]) -> InterfaceDescription:
    """
    Validate raw description data.

    Args:
        data: JSON text, a dict, or an already-built InterfaceDescription

    Raises:
        ParseError: If the data does not describe an interface
    """
    if isinstance(data, InterfaceDescription):
        return data
    try:
        if isinstance(data, (str, bytes)):
            return InterfaceDescription.model_validate_json(data)
        return InterfaceDescription.model_validate(data)
    except PydanticValidationError as e:
        error = e.errors()[0]
        where = ".".join(str(part) for part in error["loc"])
        name = data.get("name") if isinstance(data, dict) else None
        raise ParseError(
            f"Invalid interface description at '{where}': {error['msg']}",
            SourceLocation(interface=str(name or "<description>"))
        ) from e


def module_imports(description: InterfaceDescription) -> List[str]:
    """Import lines a rendered description needs, marker import included"""
    markers = [MARKER_DECORATOR]
    for method in description.methods:
        for marker, receiver in RECEIVER_MARKERS.items():
            if method.receiver == receiver and marker not in markers:
                markers.append(marker)
    return list(description.imports) + [f"from either_trait import {', '.join(markers)}"]


def parse_description(data: Union[str, bytes, Dict[str, Any], InterfaceDescription]) -> InterfaceDefinition:
    """
    Build an InterfaceDefinition from a structured description.

    The definition's source is the description rendered as a Python class,
    marked with @either_trait and with receiver markers on the methods.
    """
    description = load_description(data)
    name = description.name
    location = SourceLocation(interface=name)

    decorators = list(description.decorators)
    if MARKER_DECORATOR not in decorators:
        decorators.insert(0, MARKER_DECORATOR)

    methods = []
    seen = set()
    for method in description.methods:
        if method.name in seen:
            raise ParseError(
                f"Method '{method.name}' is described more than once",
                SourceLocation(interface=name, method=method.name)
            )
        seen.add(method.name)
        methods.append(_method(name, method))

    associated = [
        AssociatedItem(item, AssociatedItemKind.CONSTANT, location) for item in description.constants
    ] + [
        AssociatedItem(item, AssociatedItemKind.TYPE, location) for item in description.types
    ]

    definition = InterfaceDefinition(
        name=name,
        visibility=Visibility.PRIVATE if name.startswith("_") else Visibility.PUBLIC,
        methods=tuple(methods),
        location=location,
        source="",
        docstring=Docstring.from_value(description.doc) if description.doc is not None else None,
        decorators=tuple(decorators),
        bases=tuple(description.bases),
        type_params=tuple(_type_param(text, location) for text in description.type_params),
        associated_items=tuple(associated)
    )
    return replace(definition, source=render_interface(definition))


def _method(interface: str, method: MethodDescription) -> MethodSignature:
    location = SourceLocation(interface=interface, method=method.name)

    receiver = ReceiverKind(method.receiver) if method.receiver is not None else None
    decorators = list(method.decorators)
    for marker, kind in RECEIVER_MARKERS.items():
        if method.receiver == kind and marker not in decorators:
            decorators.insert(0, marker)

    parameters = []
    for param in method.params:
        binding = param.binding.strip()
        kind = ParameterKind(param.kind)
        if binding.startswith("**"):
            binding, kind = binding[2:], ParameterKind.VAR_KEYWORD
        elif binding.startswith("*"):
            binding, kind = binding[1:], ParameterKind.VAR_POSITIONAL

        param_location = SourceLocation(interface=interface, method=method.name, parameter=binding)
        if not binding.isidentifier() and not _is_destructuring(binding):
            raise ParseError(f"Invalid parameter binding '{param.binding}'", param_location)

        parameters.append(Parameter(
            binding=binding,
            annotation=_type(param.type, param_location),
            kind=kind,
            location=param_location,
            default=param.default
        ))

    return MethodSignature(
        name=method.name,
        receiver=receiver,
        parameters=tuple(parameters),
        returns=_type(method.returns, location),
        location=location,
        type_params=tuple(_type_param(text, location) for text in method.type_params),
        docstring=Docstring.from_value(method.doc) if method.doc is not None else None,
        decorators=tuple(decorators),
        is_async=method.is_async
    )


def _is_destructuring(binding: str) -> bool:
    """True for tuple/list targets such as `(a, b)` or `[first, *rest]`"""
    try:
        tree = ast.parse(f"{binding} = None")
    except SyntaxError:
        return False
    target = tree.body[0].targets[0]
    return isinstance(target, (ast.Tuple, ast.List))


def _type(text: Optional[str], location: SourceLocation) -> Optional[TypeReference]:
    if text is None:
        return None
    try:
        node = ast.parse(text.strip(), mode="eval").body
    except SyntaxError as e:
        raise ParseError(f"Invalid type expression '{text}': {e.msg}", location) from e
    return TypeReference(text=text.strip(), node=node)


def _type_param(text: str, location: SourceLocation) -> TypeParam:
    name = text.split(":", 1)[0].strip().lstrip("*")
    if not name.isidentifier():
        raise ParseError(f"Invalid type parameter '{text}'", location)
    return TypeParam(name=name, text=text.strip())
