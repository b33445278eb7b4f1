"""
Utility functions for the Consent Token package
Shape predicates shared by the model parsers and the wire layer
"""

from .validators import (
    is_non_empty_string,
    is_sequence,
    is_strict_bool,
    is_strict_int,
    unique_strings,
    validate_optional_string,
)

__all__ = [
    "is_non_empty_string",
    "is_sequence",
    "is_strict_bool",
    "is_strict_int",
    "unique_strings",
    "validate_optional_string",
]
