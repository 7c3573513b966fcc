"""
Tests for structured interface descriptions
"""

import ast
import json
import pytest
from either_trait.core.models import ParameterKind, ReceiverKind
from either_trait.description import (
    InterfaceDescription,
    load_description,
    module_imports,
    parse_description,
)
from either_trait.errors import ParseError, PatternParameterNotSupported
from either_trait.validator import InterfaceValidator


EXAMPLE = {
    "name": "Example",
    "doc": "An example trait.",
    "bases": ["Protocol"],
    "imports": ["from typing import Protocol"],
    "methods": [
        {
            "name": "foo",
            "doc": "Foo.",
            "params": [{"binding": "x", "type": "int"}],
            "returns": "int"
        },
        {
            "name": "bar",
            "receiver": "mut",
            "params": [{"binding": "z", "type": "tuple[int, int]"}]
        }
    ]
}


def test_load_from_json_and_dict():
    """Test descriptions load from JSON text or a dict"""
    from_dict = load_description(EXAMPLE)
    from_json = load_description(json.dumps(EXAMPLE))

    assert isinstance(from_dict, InterfaceDescription)
    assert from_dict == from_json
    assert load_description(from_dict) is from_dict


def test_invalid_description_raises():
    """Test schema violations raise ParseError naming the field"""
    with pytest.raises(ParseError, match="methods"):
        load_description({"name": "Example", "methods": [{"params": []}]})

    with pytest.raises(ParseError, match="not a valid Python identifier"):
        load_description({"name": "not valid"})

    with pytest.raises(ParseError):
        load_description("{not json")


def test_parse_description():
    """Test a description becomes an interface definition"""
    interface = parse_description(EXAMPLE)

    assert interface.name == "Example"
    assert interface.docstring.value == "An example trait."
    assert interface.decorators == ("either_trait",)
    assert [m.name for m in interface.methods] == ["foo", "bar"]

    foo, bar = interface.methods
    assert foo.receiver == ReceiverKind.REF
    assert foo.returns.text == "int"
    assert bar.receiver == ReceiverKind.MUT_REF
    assert bar.decorators == ("mutates",)
    assert bar.returns is None


def test_rendered_source():
    """Test the definition source is the description written as a class"""
    interface = parse_description(EXAMPLE)
    assert interface.source == '''@either_trait
class Example(Protocol):
    """An example trait."""

    def foo(self, x: int) -> int:
        """Foo."""
        ...

    @mutates
    def bar(self, z: tuple[int, int]):
        ...'''


def test_module_imports():
    """Test the imports needed by a rendered description"""
    description = load_description(EXAMPLE)
    assert module_imports(description) == [
        "from typing import Protocol",
        "from either_trait import either_trait, mutates",
    ]


def test_receiver_none_means_no_receiver():
    """Test a null receiver describes a method without self"""
    interface = parse_description({
        "name": "Factory",
        "methods": [{"name": "make", "receiver": None, "returns": "int"}]
    })
    assert interface.methods[0].receiver is None
    assert "def make() -> int:" in interface.source


def test_destructuring_bindings():
    """Test tuple bindings and starred names are pattern parameters"""
    interface = parse_description({
        "name": "Example",
        "methods": [{
            "name": "bar",
            "params": [
                {"binding": "(x, y)", "type": "tuple[int, int]"},
                {"binding": "*rest"},
                {"binding": "**options"}
            ]
        }]
    })
    first, rest, options = interface.methods[0].parameters
    assert first.is_pattern
    assert rest.kind == ParameterKind.VAR_POSITIONAL
    assert options.kind == ParameterKind.VAR_KEYWORD

    with pytest.raises(PatternParameterNotSupported, match=r"\(x, y\)"):
        InterfaceValidator().validate(interface)


def test_invalid_binding_raises():
    """Test bindings that are neither names nor patterns raise"""
    with pytest.raises(ParseError, match="Invalid parameter binding"):
        parse_description({
            "name": "Example",
            "methods": [{"name": "bar", "params": [{"binding": "1 + 2"}]}]
        })


def test_invalid_type_raises():
    """Test type expressions must be valid Python"""
    with pytest.raises(ParseError, match="Invalid type expression") as info:
        parse_description({
            "name": "Example",
            "methods": [{"name": "bar", "params": [{"binding": "x", "type": "list[int"}]}]
        })
    assert info.value.location.parameter == "x"


def test_duplicate_methods_raise():
    """Test a method described twice raises"""
    with pytest.raises(ParseError, match="more than once"):
        parse_description({"name": "Example", "methods": [{"name": "a"}, {"name": "a"}]})


def test_associated_items_and_type_params():
    """Test constants, types and type parameters are carried through"""
    interface = parse_description({
        "name": "Holder",
        "type_params": ["T: int"],
        "constants": ["LIMIT"],
        "types": ["Item"],
        "methods": [{"name": "get", "returns": "T"}]
    })
    assert [tp.name for tp in interface.type_params] == ["T"]
    assert [item.name for item in interface.associated_items] == ["LIMIT", "Item"]

    tree = ast.parse(interface.source)
    assert tree.body[0].name == "Holder"
