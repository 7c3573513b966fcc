"""
Supportability checks for interfaces before generation
"""

from typing import Callable, List, Optional

from .core.config import EITHER_CONSTRUCTORS, RESERVED_TYPE_PARAMS, RUNTIME_NAMES, GeneratorOptions
from .core.models import InterfaceDefinition, MethodSignature
from .errors import (
    AssociatedItemNotSupported,
    GenericInterfaceNotSupported,
    GenericMethodNotSupported,
    MissingSelfReceiver,
    PatternParameterNotSupported,
    ReservedNameCollision,
    SelfInSignature,
)

MethodCheck = Callable[[MethodSignature], None]


class InterfaceValidator:
    """
    Checks that an Either implementation can be generated for an interface.

    Checks run in a fixed precedence order and the first violation is
    raised. Interface-wide checks come first; each method check then runs
    over all methods in declaration order before the next check starts, so
    the reported error is the highest-precedence one, and among methods
    breaking the same rule, the first declared.
    """

    def __init__(self, options: Optional[GeneratorOptions] = None):
        self.options = options or GeneratorOptions()

    def validate(self, interface: InterfaceDefinition) -> InterfaceDefinition:
        """
        Validate an interface.

        Returns:
            The same interface, unchanged

        Raises:
            ValidationError: The first violated constraint
        """
        self.check_interface_generics(interface)
        self.check_associated_items(interface)

        for check in self.method_checks():
            for method in interface.methods:
                check(method)

        return interface

    def method_checks(self) -> List[MethodCheck]:
        checks = [
            self.check_receiver,
            self.check_self_in_signature,
            self.check_pattern_parameters,
            self.check_reserved_names,
        ]
        if not self.options.allow_generic_methods:
            checks.insert(0, self.check_method_generics)
        return checks

    @staticmethod
    def check_interface_generics(interface: InterfaceDefinition):
        if interface.type_params:
            names = ", ".join(tp.name for tp in interface.type_params)
            raise GenericInterfaceNotSupported(
                f"Interface '{interface.name}' declares type parameters ({names})",
                interface.location
            )

    @staticmethod
    def check_associated_items(interface: InterfaceDefinition):
        if interface.associated_items:
            item = interface.associated_items[0]
            raise AssociatedItemNotSupported(
                f"Interface '{interface.name}' declares associated {item.kind.value} '{item.name}'",
                item.location
            )

    @staticmethod
    def check_method_generics(method: MethodSignature):
        if method.type_params:
            names = ", ".join(tp.name for tp in method.type_params)
            raise GenericMethodNotSupported(
                f"Method '{method.name}' declares type parameters ({names})",
                method.location
            )

    @staticmethod
    def check_receiver(method: MethodSignature):
        if method.receiver is None:
            raise MissingSelfReceiver(
                f"Method '{method.name}' does not take self as its first parameter",
                method.location
            )

    @staticmethod
    def check_self_in_signature(method: MethodSignature):
        for param in method.parameters:
            if param.annotation is not None and param.annotation.refers_to_self():
                raise SelfInSignature(
                    f"Parameter '{param.binding}' of '{method.name}' refers to Self "
                    f"({param.annotation.text})",
                    param.location
                )
        if method.returns is not None and method.returns.refers_to_self():
            raise SelfInSignature(
                f"Return type of '{method.name}' refers to Self ({method.returns.text})",
                method.location
            )

    @staticmethod
    def check_pattern_parameters(method: MethodSignature):
        for param in method.parameters:
            if param.is_pattern:
                raise PatternParameterNotSupported(
                    f"Parameter '{param.spelling}' of '{method.name}' is not bound to a plain name",
                    param.location
                )

    @staticmethod
    def check_reserved_names(method: MethodSignature):
        if method.name in EITHER_CONSTRUCTORS:
            raise ReservedNameCollision(
                f"Method '{method.name}' would replace Either's constructor "
                f"({', '.join(EITHER_CONSTRUCTORS)})",
                method.location
            )
        for tp in method.type_params:
            if tp.name in RESERVED_TYPE_PARAMS + RUNTIME_NAMES:
                raise ReservedNameCollision(
                    f"Type parameter '{tp.name}' of '{method.name}' is reserved by the generated class "
                    f"({', '.join(RESERVED_TYPE_PARAMS + RUNTIME_NAMES)})",
                    method.location
                )
        for param in method.parameters:
            if param.binding in RUNTIME_NAMES:
                raise ReservedNameCollision(
                    f"Parameter '{param.binding}' of '{method.name}' would shadow the Either runtime "
                    f"({', '.join(RUNTIME_NAMES)})",
                    param.location
                )
