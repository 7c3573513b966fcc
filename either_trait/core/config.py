"""
Generator configuration and naming constants
"""

import os
from dataclasses import dataclass

# Class decorator that marks an interface for generation
MARKER_DECORATOR = "either_trait"

# Method decorators that select the receiver kind; undecorated methods borrow
RECEIVER_MARKERS = {
    "consumes": "value",
    "mutates": "mut"
}

# Either accessor used by the generated code for each receiver kind
RECEIVER_ACCESSORS = {
    "value": "take",
    "ref": "borrow",
    "mut": "borrow_mut"
}

RECEIVER_NAME = "self"

# Type parameters of the generated class, standing for the two variants
RESERVED_TYPE_PARAMS = ("L", "R")
CASE_BINDINGS = ("left", "right")

# Names the generated method bodies refer to; parameters may not shadow them
RUNTIME_NAMES = ("Either", "Left", "Right")

# Either members an interface method may not override
EITHER_CONSTRUCTORS = ("__new__", "__init__", "left", "right")

SELF_TYPE_NAMES = frozenset({"Self"})
# Subscripted forms whose arguments are values, or metadata after the first
VALUE_FORMS = frozenset({"Literal"})
METADATA_FORMS = frozenset({"Annotated"})
GENERIC_BASES = frozenset({"Generic", "Protocol"})

NON_RECEIVER_DECORATORS = frozenset({"staticmethod", "classmethod"})
PROPERTY_DECORATORS = frozenset({"property", "cached_property"})

# Declaration-only markers, not carried over to the generated methods
DECLARATION_DECORATORS = frozenset({"abstractmethod"})

EITHER_MODULE = "either_trait.either"
PRELUDE = f"from {EITHER_MODULE} import Either, Left, Right"
IMPL_SUFFIX = "Either"

OUTPUT_DIR = "./either_out"
OUTPUT_SUFFIX = "_either"


@dataclass(frozen=True)
class GeneratorOptions:
    """Knobs for the validator and the file writers"""
    allow_generic_methods: bool = True
    output_dir: str = OUTPUT_DIR

    @classmethod
    def from_env(cls) -> "GeneratorOptions":
        flag = os.getenv("EITHER_TRAIT_ALLOW_GENERIC_METHODS", "1")
        return cls(
            allow_generic_methods=flag.strip().lower() not in ("0", "false", "no", "off"),
            output_dir=os.getenv("EITHER_TRAIT_OUTPUT_DIR", OUTPUT_DIR)
        )
