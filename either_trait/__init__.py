"""
either-trait: Either implementations generated from interface definitions
"""

from .decorators import consumes, either_trait, mutates
from .either import Either, Left, MovedValueError, Right
from .errors import EitherTraitError, ParseError, ValidationError
from .core.config import GeneratorOptions
from .core.pipeline import expand_module, generate, generate_from_description

__version__ = "0.1.0"
__all__ = [
    "either_trait",
    "consumes",
    "mutates",
    "Either",
    "Left",
    "Right",
    "MovedValueError",
    "EitherTraitError",
    "ParseError",
    "ValidationError",
    "GeneratorOptions",
    "generate",
    "generate_from_description",
    "expand_module"
]
