"""
Data models for parsed interfaces and generated implementations
"""

import ast
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from ..translators.annotations import SelfReferenceFinder


class Visibility(str, Enum):
    """Visibility of an interface, from the leading-underscore convention"""
    PUBLIC = "public"
    PRIVATE = "private"


class ReceiverKind(str, Enum):
    """How a method takes its `self` receiver"""
    VALUE = "value"
    REF = "ref"
    MUT_REF = "mut"


class ParameterKind(str, Enum):
    POSITIONAL_ONLY = "positional_only"
    POSITIONAL = "positional"
    VAR_POSITIONAL = "var_positional"
    KEYWORD_ONLY = "keyword_only"
    VAR_KEYWORD = "var_keyword"


class AssociatedItemKind(str, Enum):
    CONSTANT = "constant"
    TYPE = "type"
    PROPERTY = "property"


@dataclass(frozen=True)
class SourceLocation:
    """Where a construct was declared"""
    interface: str
    method: Optional[str] = None
    parameter: Optional[str] = None
    line: Optional[int] = None
    column: Optional[int] = None

    def __str__(self) -> str:
        parts = [self.interface]
        if self.method:
            parts.append(self.method)
        text = ".".join(parts)
        if self.parameter:
            text += f"({self.parameter})"
        if self.line is not None:
            text += f" line {self.line}"
        return text

    def to_dict(self) -> dict:
        return {
            "interface": self.interface,
            "method": self.method,
            "parameter": self.parameter,
            "line": self.line,
            "column": self.column
        }


@dataclass(frozen=True)
class Docstring:
    """A docstring and the literal it was written as"""
    value: str
    literal: str

    @classmethod
    def from_value(cls, value: str) -> "Docstring":
        if '"""' not in value and not value.endswith('"') and "\\" not in value:
            return cls(value=value, literal=f'"""{value}"""')
        return cls(value=value, literal=repr(value))


@dataclass(frozen=True, eq=False)
class TypeReference:
    """A parameter or return annotation, spelled as in the source"""
    text: str
    node: ast.expr

    def refers_to_self(self) -> bool:
        return SelfReferenceFinder().search(self.node)

    def __eq__(self, other) -> bool:
        return isinstance(other, TypeReference) and self.text == other.text

    def __hash__(self) -> int:
        return hash(self.text)


@dataclass(frozen=True)
class TypeParam:
    """A generic parameter, e.g. `T` or `T: int`"""
    name: str
    text: str


@dataclass(frozen=True)
class Parameter:
    """A non-receiver method parameter"""
    binding: str
    annotation: Optional[TypeReference]
    kind: ParameterKind
    location: SourceLocation
    default: Optional[str] = None

    @property
    def spelling(self) -> str:
        """Binding as written in a signature, stars included"""
        if self.kind == ParameterKind.VAR_POSITIONAL:
            return f"*{self.binding}"
        if self.kind == ParameterKind.VAR_KEYWORD:
            return f"**{self.binding}"
        return self.binding

    @property
    def is_pattern(self) -> bool:
        if self.kind in (ParameterKind.VAR_POSITIONAL, ParameterKind.VAR_KEYWORD):
            return True
        return not self.binding.isidentifier()


@dataclass(frozen=True)
class AssociatedItem:
    """A class-level constant, nested type or property"""
    name: str
    kind: AssociatedItemKind
    location: SourceLocation


@dataclass(frozen=True)
class MethodSignature:
    """One method declared by an interface"""
    name: str
    receiver: Optional[ReceiverKind]
    parameters: Tuple[Parameter, ...]
    returns: Optional[TypeReference]
    location: SourceLocation
    type_params: Tuple[TypeParam, ...] = ()
    docstring: Optional[Docstring] = None
    decorators: Tuple[str, ...] = ()
    is_async: bool = False
    # `def m(self, /, ...)`: the receiver alone is positional-only
    receiver_positional_only: bool = False


@dataclass(frozen=True)
class InterfaceDefinition:
    """A parsed interface: everything needed to validate and emit"""
    name: str
    visibility: Visibility
    methods: Tuple[MethodSignature, ...]
    location: SourceLocation
    source: str
    docstring: Optional[Docstring] = None
    decorators: Tuple[str, ...] = ()
    bases: Tuple[str, ...] = ()
    type_params: Tuple[TypeParam, ...] = ()
    associated_items: Tuple[AssociatedItem, ...] = ()

    def method(self, name: str) -> Optional[MethodSignature]:
        for method in self.methods:
            if method.name == name:
                return method
        return None


@dataclass(frozen=True)
class GeneratedImplementation:
    """Forwarding implementation of one interface for Either"""
    interface_name: str
    class_name: str
    methods: Tuple[str, ...] = ()
    source: str = ""
