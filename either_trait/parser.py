"""
Parser to extract @either_trait interfaces from Python source.
"""

import ast
import re
from typing import List, Optional

from .core.config import (
    MARKER_DECORATOR,
    NON_RECEIVER_DECORATORS,
    PROPERTY_DECORATORS,
    RECEIVER_MARKERS,
    RECEIVER_NAME,
)
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
from .translators.annotations import decorator_name, generic_base_params


class InterfaceParser:
    """Parse Python modules to find @either_trait decorated classes"""

    def parse_file(self, file_path: str) -> List[InterfaceDefinition]:
        """
        Parse a Python file and extract all @either_trait interfaces.

        Args:
            file_path: Path to Python file

        Returns:
            List of InterfaceDefinition, in source order
        """
        with open(file_path, 'r', encoding='utf-8') as f:
            source = f.read()

        return self.parse_module(source, filename=file_path)

    def parse_module(self, source: str, filename: str = "<source>") -> List[InterfaceDefinition]:
        """Parse every marked top-level class; the first malformed one raises"""
        tree = self.parse_tree(source, filename)
        return [self.parse_class(node, source) for node in self.find_interfaces(tree)]

    def parse_source(self, source: str, name: Optional[str] = None) -> InterfaceDefinition:
        """
        Parse a single interface out of a module.

        Args:
            source: Python source containing the interface
            name: Class to parse. Without it the module must hold exactly one
                @either_trait class.

        Raises:
            ParseError: If the source does not parse or the class is not found
        """
        tree = self.parse_tree(source)

        if name is not None:
            for node in tree.body:
                if isinstance(node, ast.ClassDef) and node.name == name:
                    return self.parse_class(node, source)
            raise ParseError(f"Class '{name}' not found", SourceLocation(interface=name))

        candidates = self.find_interfaces(tree)
        if not candidates:
            raise ParseError(
                f"No @{MARKER_DECORATOR} interface found",
                SourceLocation(interface="<source>")
            )
        if len(candidates) > 1:
            names = ", ".join(node.name for node in candidates)
            raise ParseError(
                f"Several @{MARKER_DECORATOR} interfaces found ({names}); pick one by name",
                SourceLocation(interface="<source>")
            )
        return self.parse_class(candidates[0], source)

    @staticmethod
    def parse_tree(source: str, filename: str = "<source>") -> ast.Module:
        try:
            return ast.parse(source, filename=filename)
        except SyntaxError as e:
            raise ParseError(
                f"Invalid Python syntax: {e.msg}",
                SourceLocation(interface=filename, line=e.lineno, column=e.offset)
            ) from e

    @staticmethod
    def find_interfaces(tree: ast.Module) -> List[ast.ClassDef]:
        """Top-level classes carrying the marker decorator"""
        return [
            node for node in tree.body
            if isinstance(node, ast.ClassDef)
            and any(decorator_name(d) == MARKER_DECORATOR for d in node.decorator_list)
        ]

    def parse_class(self, node: ast.ClassDef, source: str) -> InterfaceDefinition:
        """
        Extract the structure of one interface class.

        No semantic checks happen here: generic parameters, associated items
        and unsupported signatures are recorded as-is for the validator.
        """
        location = SourceLocation(interface=node.name, line=node.lineno, column=node.col_offset)
        docstring = self._docstring(node.body, source)

        bases = [_text(source, base) for base in node.bases]
        bases += [f"{kw.arg}={_text(source, kw.value)}" if kw.arg else f"**{_text(source, kw.value)}"
                  for kw in node.keywords]

        type_params = [self._type_param(source, tp) for tp in getattr(node, "type_params", [])]
        for base in node.bases:
            params = generic_base_params(base)
            if params is not None:
                elts = params.elts if isinstance(params, ast.Tuple) else [params]
                type_params += [
                    TypeParam(name=ast.unparse(elt).lstrip("*"), text=_text(source, elt))
                    for elt in elts
                ]

        methods: List[MethodSignature] = []
        associated: List[AssociatedItem] = []
        seen = set()

        body = node.body[1:] if docstring else node.body
        for stmt in body:
            stmt_location = SourceLocation(
                interface=node.name, line=stmt.lineno, column=stmt.col_offset
            )

            if isinstance(stmt, (ast.FunctionDef, ast.AsyncFunctionDef)):
                names = {decorator_name(d) for d in stmt.decorator_list}
                if names & PROPERTY_DECORATORS:
                    associated.append(AssociatedItem(stmt.name, AssociatedItemKind.PROPERTY, stmt_location))
                    continue
                if stmt.name in seen:
                    raise ParseError(
                        f"Method '{stmt.name}' is defined more than once",
                        SourceLocation(interface=node.name, method=stmt.name,
                                       line=stmt.lineno, column=stmt.col_offset)
                    )
                seen.add(stmt.name)
                methods.append(self._parse_method(stmt, source, node.name))

            elif isinstance(stmt, ast.Assign):
                for target in stmt.targets:
                    associated.append(AssociatedItem(
                        ast.unparse(target), AssociatedItemKind.CONSTANT, stmt_location
                    ))

            elif isinstance(stmt, ast.AnnAssign):
                associated.append(AssociatedItem(
                    ast.unparse(stmt.target), AssociatedItemKind.CONSTANT, stmt_location
                ))

            elif isinstance(stmt, ast.ClassDef):
                associated.append(AssociatedItem(stmt.name, AssociatedItemKind.TYPE, stmt_location))

            elif isinstance(stmt, ast.TypeAlias):
                associated.append(AssociatedItem(stmt.name.id, AssociatedItemKind.TYPE, stmt_location))

            elif isinstance(stmt, ast.Pass) or (
                    isinstance(stmt, ast.Expr) and isinstance(stmt.value, ast.Constant)):
                # `...`, `pass` and stray string literals carry no declaration
                continue

            else:
                raise ParseError(
                    f"Unsupported statement in interface body: {type(stmt).__name__}",
                    stmt_location
                )

        return InterfaceDefinition(
            name=node.name,
            visibility=Visibility.PRIVATE if node.name.startswith("_") else Visibility.PUBLIC,
            methods=tuple(methods),
            location=location,
            source=self._class_source(source, node),
            docstring=docstring,
            decorators=tuple(_text(source, d) for d in node.decorator_list),
            bases=tuple(bases),
            type_params=tuple(type_params),
            associated_items=tuple(associated)
        )

    def _parse_method(self, node, source: str, interface_name: str) -> MethodSignature:
        location = SourceLocation(
            interface=interface_name, method=node.name, line=node.lineno, column=node.col_offset
        )
        decorator_names = [decorator_name(d) for d in node.decorator_list]
        args = node.args
        positional = args.posonlyargs + args.args

        # Receiver: a leading `self` on anything but a static/class method
        receiver = None
        if (positional and positional[0].arg == RECEIVER_NAME
                and not set(decorator_names) & NON_RECEIVER_DECORATORS):
            receiver = ReceiverKind.REF
            for name in decorator_names:
                if name in RECEIVER_MARKERS:
                    receiver = ReceiverKind(RECEIVER_MARKERS[name])

        def param(arg: ast.arg, kind: ParameterKind, default: Optional[ast.expr] = None) -> Parameter:
            return Parameter(
                binding=arg.arg,
                annotation=self._annotation(source, arg.annotation),
                kind=kind,
                location=SourceLocation(
                    interface=interface_name, method=node.name, parameter=arg.arg,
                    line=arg.lineno, column=arg.col_offset
                ),
                default=_text(source, default) if default is not None else None
            )

        parameters = []
        first_default = len(positional) - len(args.defaults)
        for index, arg in enumerate(positional):
            if index == 0 and receiver is not None:
                continue
            default = args.defaults[index - first_default] if index >= first_default else None
            kind = ParameterKind.POSITIONAL_ONLY if index < len(args.posonlyargs) else ParameterKind.POSITIONAL
            parameters.append(param(arg, kind, default))

        if args.vararg:
            parameters.append(param(args.vararg, ParameterKind.VAR_POSITIONAL))
        for arg, default in zip(args.kwonlyargs, args.kw_defaults):
            parameters.append(param(arg, ParameterKind.KEYWORD_ONLY, default))
        if args.kwarg:
            parameters.append(param(args.kwarg, ParameterKind.VAR_KEYWORD))

        return MethodSignature(
            name=node.name,
            receiver=receiver,
            parameters=tuple(parameters),
            returns=self._annotation(source, node.returns),
            location=location,
            type_params=tuple(self._type_param(source, tp) for tp in getattr(node, "type_params", [])),
            docstring=self._docstring(node.body, source),
            decorators=tuple(_text(source, d) for d in node.decorator_list),
            is_async=isinstance(node, ast.AsyncFunctionDef),
            receiver_positional_only=receiver is not None and len(args.posonlyargs) == 1
        )

    @staticmethod
    def _annotation(source: str, node: Optional[ast.expr]) -> Optional[TypeReference]:
        if node is None:
            return None
        return TypeReference(text=_text(source, node), node=node)

    @staticmethod
    def _type_param(source: str, node) -> TypeParam:
        return TypeParam(name=node.name, text=_text(source, node))

    @staticmethod
    def _docstring(body: List[ast.stmt], source: str) -> Optional[Docstring]:
        if not body:
            return None
        first = body[0]
        if (isinstance(first, ast.Expr) and isinstance(first.value, ast.Constant)
                and isinstance(first.value.value, str)):
            literal = ast.get_source_segment(source, first.value) or repr(first.value.value)
            return Docstring(value=first.value.value, literal=literal)
        return None

    @staticmethod
    def _class_source(source: str, node: ast.ClassDef) -> str:
        # Whole lines, decorators included
        lines = source_lines(source)
        start = min([d.lineno for d in node.decorator_list] + [node.lineno])
        return "\n".join(lines[start - 1:node.end_lineno])


def source_lines(source: str) -> List[str]:
    """
    Split source into lines the way `ast` numbers them.

    Only LF, CRLF and CR end a line; form feeds and the other separators
    `str.splitlines` breaks on stay inside their line.
    """
    return re.split(r"\r\n|\r|\n", source)


def _text(source: str, node: ast.AST) -> str:
    """Source text of a node exactly as written"""
    return ast.get_source_segment(source, node) or ast.unparse(node)
