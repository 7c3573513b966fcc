"""
Main generation pipeline: parse -> validate -> emit
"""

import ast
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from .config import PRELUDE, GeneratorOptions
from .models import GeneratedImplementation, InterfaceDefinition
from ..description import InterfaceDescription, load_description, module_imports, parse_description
from ..errors import EitherTraitError
from ..generators.forwarding import generate_forwarding_impl
from ..parser import InterfaceParser, source_lines
from ..validator import InterfaceValidator


class Stage(str, Enum):
    """Stages of the generation pipeline"""
    PARSE = "parse"
    VALIDATE = "validate"
    EMIT = "emit"
    DONE = "done"


@dataclass
class GenerationResult:
    """A generated implementation together with the interface it came from"""
    interface: InterfaceDefinition
    implementation: GeneratedImplementation
    output: str
    stage: Stage = Stage.DONE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "interface": self.interface.name,
            "class_name": self.implementation.class_name,
            "methods": list(self.implementation.methods),
            "stage": self.stage.value,
            "output": self.output
        }


@dataclass
class InterfaceFailure:
    """An interface in a module that could not be generated"""
    name: str
    line: int
    stage: Stage
    error: EitherTraitError

    def to_dict(self) -> Dict[str, Any]:
        return {
            "interface": self.name,
            "line": self.line,
            "stage": self.stage.value,
            "error": self.error.to_dict()
        }


@dataclass
class ModuleExpansion:
    """A module with an implementation inserted after each interface"""
    output: str
    results: List[GenerationResult] = field(default_factory=list)
    errors: List[InterfaceFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def combine(interface: InterfaceDefinition, implementation: GeneratedImplementation) -> str:
    """The interface exactly as written, followed by its implementation"""
    return f"{interface.source}\n\n\n{implementation.source}"


def run_stages(parse, options: Optional[GeneratorOptions] = None) -> GenerationResult:
    """
    Drive one interface through the pipeline.

    Args:
        parse: Zero-argument callable producing the InterfaceDefinition
        options: Generator options

    Raises:
        EitherTraitError: The first error from any stage, with `stage` set
            to the stage that raised it
    """
    stage = Stage.PARSE
    try:
        interface = parse()

        stage = Stage.VALIDATE
        InterfaceValidator(options).validate(interface)

        stage = Stage.EMIT
        implementation = generate_forwarding_impl(interface)
    except EitherTraitError as e:
        e.stage = stage
        raise

    return GenerationResult(
        interface=interface,
        implementation=implementation,
        output=combine(interface, implementation)
    )


def generate(source: str,
             name: Optional[str] = None,
             options: Optional[GeneratorOptions] = None) -> GenerationResult:
    """
    Generate the Either implementation of one interface in Python source.

    Args:
        source: Python source holding the interface class
        name: Class to generate for; defaults to the only @either_trait class
        options: Generator options

    Returns:
        GenerationResult whose output is the interface source followed by
        the generated class

    Raises:
        ParseError: If the interface cannot be read
        ValidationError: If the interface is not supported
    """
    return run_stages(lambda: InterfaceParser().parse_source(source, name), options)


def generate_from_description(data: Union[str, bytes, Dict[str, Any], InterfaceDescription],
                              options: Optional[GeneratorOptions] = None) -> GenerationResult:
    """
    Generate from a structured description.

    A description has no surrounding module, so the output is a complete
    module: imports, the rendered interface, then the generated class.
    """
    try:
        description = load_description(data)
    except EitherTraitError as e:
        e.stage = Stage.PARSE
        raise
    result = run_stages(lambda: parse_description(description), options)

    header = module_imports(description) + [PRELUDE]
    result.output = "\n".join(header) + "\n\n\n" + result.output + "\n"
    return result


def expand_module(source: str,
                  options: Optional[GeneratorOptions] = None,
                  filename: str = "<source>") -> ModuleExpansion:
    """
    Generate implementations for every @either_trait class in a module.

    Each interface is handled on its own: one that fails is reported in
    `errors` and left without an implementation, the others still get one.
    The Either import is added after the module docstring and any
    `from __future__` imports.

    Raises:
        ParseError: Only if the module itself is not valid Python
    """
    parser = InterfaceParser()
    try:
        tree = parser.parse_tree(source, filename)
    except EitherTraitError as e:
        e.stage = Stage.PARSE
        raise
    lines = source_lines(source)

    results = []
    errors = []
    insertions = []
    for node in parser.find_interfaces(tree):
        try:
            result = run_stages(lambda: parser.parse_class(node, source), options)
        except EitherTraitError as e:
            errors.append(InterfaceFailure(node.name, node.lineno, e.stage, e))
            continue
        results.append(result)
        insertions.append((node.end_lineno, result.implementation.source))

    for end_line, implementation in reversed(insertions):
        lines[end_line:end_line] = ["", ""] + source_lines(implementation)

    if results:
        at = _prelude_line(tree)
        lines[at:at] = [PRELUDE]

    return ModuleExpansion(output="\n".join(lines), results=results, errors=errors)


def _prelude_line(tree: ast.Module) -> int:
    """Line after the module docstring and `from __future__` imports"""
    line = 0
    for index, stmt in enumerate(tree.body):
        is_docstring = (index == 0 and isinstance(stmt, ast.Expr)
                        and isinstance(stmt.value, ast.Constant)
                        and isinstance(stmt.value.value, str))
        is_future = isinstance(stmt, ast.ImportFrom) and stmt.module == "__future__"
        if not (is_docstring or is_future):
            break
        line = stmt.end_lineno
    return line
