"""
Tests for the either-trait REST API
"""

import pytest
from fastapi.testclient import TestClient

from either_trait import __version__
from either_trait.server import app

EXAMPLE = '''
@either_trait
class Example(Protocol):
    """An example trait."""

    def foo(self, x: int) -> int:
        """Foo."""
        ...
'''


@pytest.fixture
def client():
    return TestClient(app)


def test_health(client):
    """Test the health endpoint"""
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "version": __version__}


def test_generate(client):
    """Test generating one interface"""
    response = client.post("/api/generate", json={"source": EXAMPLE})
    data = response.json()

    assert response.status_code == 200
    assert data["success"] is True
    assert data["error"] is None
    assert data["result"]["class_name"] == "ExampleEither"
    assert data["result"]["methods"] == ["foo"]
    assert data["result"]["stage"] == "done"
    assert "match Either.borrow(self):" in data["result"]["output"]


def test_generate_rejection(client):
    """Test rejected interfaces report the error kind and stage"""
    source = '''
@either_trait
class Cloneable:
    def clone(self) -> Self: ...
'''
    data = client.post("/api/generate", json={"source": source}).json()

    assert data["success"] is False
    assert data["result"] is None
    assert data["error"]["kind"] == "SelfInSignature"
    assert data["error"]["stage"] == "validate"
    assert data["error"]["location"]["method"] == "clone"


def test_generate_named_interface_and_options(client):
    """Test selecting an interface and disabling generic methods"""
    source = EXAMPLE + '''

@either_trait
class Mapper:
    def apply[T](self, t: T) -> T: ...
'''
    data = client.post("/api/generate", json={"source": source, "interface": "Mapper"}).json()
    assert data["result"]["class_name"] == "MapperEither"

    data = client.post("/api/generate", json={
        "source": source,
        "interface": "Mapper",
        "allow_generic_methods": False
    }).json()
    assert data["error"]["kind"] == "GenericMethodNotSupported"


def test_generate_parse_error(client):
    """Test unparseable source is a parse-stage error"""
    data = client.post("/api/generate", json={"source": "class Broken(:"}).json()

    assert data["success"] is False
    assert data["error"]["kind"] == "ParseError"
    assert data["error"]["stage"] == "parse"


def test_generate_description(client):
    """Test generating from a structured description"""
    description = {
        "name": "Example",
        "doc": "An example trait.",
        "methods": [{"name": "foo", "params": [{"binding": "x", "type": "int"}], "returns": "int"}]
    }
    data = client.post("/api/generate-description", json={"description": description}).json()

    assert data["success"] is True
    assert data["result"]["output"].startswith("from either_trait import either_trait\n")

    description["methods"][0]["params"][0]["binding"] = "(a, b)"
    data = client.post("/api/generate-description", json={"description": description}).json()
    assert data["error"]["kind"] == "PatternParameterNotSupported"


def test_generate_description_invalid(client):
    """Test malformed descriptions are parse errors"""
    data = client.post("/api/generate-description", json={"description": {"methods": []}}).json()

    assert data["success"] is False
    assert data["error"]["kind"] == "ParseError"


def test_expand_module(client):
    """Test expanding a module with one good and one bad interface"""
    source = EXAMPLE + '''

@either_trait
class Holder:
    LIMIT = 3
'''
    data = client.post("/api/expand-module", json={"source": source}).json()

    assert data["success"] is False
    assert data["generated"] == ["ExampleEither"]
    assert [e["interface"] for e in data["errors"]] == ["Holder"]
    assert data["errors"][0]["error"]["kind"] == "AssociatedItemNotSupported"
    assert "class ExampleEither" in data["output"]


def test_expand_module_syntax_error(client):
    """Test a module that does not parse"""
    data = client.post("/api/expand-module", json={"source": "def broken(:"}).json()

    assert data["success"] is False
    assert data["output"] is None
    assert data["error"]["kind"] == "ParseError"
