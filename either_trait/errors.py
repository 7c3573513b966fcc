"""
Errors raised while generating Either implementations.

Every error is raised at generation time, before any generated code runs,
and names the construct it is about through a SourceLocation.
"""

from typing import Any, Dict, Optional

from .core.models import SourceLocation


class EitherTraitError(Exception):
    """Base class for all generation errors"""

    kind = "EitherTraitError"
    # Pipeline stage that raised, set by the driver
    stage = None

    def __init__(self, message: str, location: Optional[SourceLocation] = None):
        self.message = message
        self.location = location
        text = f"{self.kind}: {message}"
        if location is not None:
            text += f" (at {location})"
        super().__init__(text)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "message": self.message,
            "location": self.location.to_dict() if self.location else None,
            "stage": getattr(self.stage, "value", self.stage)
        }


class ParseError(EitherTraitError, ValueError):
    """The input is not a well-formed interface definition"""
    kind = "ParseError"


class ValidationError(EitherTraitError, NotImplementedError):
    """The interface uses a construct the forwarding generator cannot support"""
    kind = "ValidationError"


class GenericInterfaceNotSupported(ValidationError):
    kind = "GenericInterfaceNotSupported"


class AssociatedItemNotSupported(ValidationError):
    kind = "AssociatedItemNotSupported"


class GenericMethodNotSupported(ValidationError):
    kind = "GenericMethodNotSupported"


class MissingSelfReceiver(ValidationError):
    kind = "MissingSelfReceiver"


class SelfInSignature(ValidationError):
    kind = "SelfInSignature"


class PatternParameterNotSupported(ValidationError):
    kind = "PatternParameterNotSupported"


class ReservedNameCollision(ValidationError):
    kind = "ReservedNameCollision"
