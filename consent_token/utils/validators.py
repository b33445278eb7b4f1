"""
Shape validators for the Consent Token package

Predicates used by the ``from_object`` parsers and the wire layer. JSON
decoders hand back plain dicts, lists and scalars; these helpers answer
whether such a value has the expected shape without coercing it.
"""

from typing import Any, List, Optional, Sequence

from ..exceptions import SchemaMismatchError


def is_non_empty_string(value: Any) -> bool:
    """True for ``str`` values with at least one character"""
    return isinstance(value, str) and len(value) > 0


def is_sequence(value: Any) -> bool:
    """True for JSON arrays (lists or tuples), never for strings or mappings"""
    return isinstance(value, (list, tuple))


def is_strict_bool(value: Any) -> bool:
    return isinstance(value, bool)


def is_strict_int(value: Any) -> bool:
    """True for ints, rejecting bools which ``isinstance`` treats as ints"""
    return isinstance(value, int) and not isinstance(value, bool)


def unique_strings(values: Sequence[Any]) -> Optional[List[str]]:
    """
    Collapse duplicates in a sequence of strings, keeping first-seen order.

    Args:
        values: Candidate sequence

    Returns:
        De-duplicated list, or None if any entry is not a string
    """
    if not all(isinstance(value, str) for value in values):
        return None
    return list(dict.fromkeys(values))


def validate_optional_string(value: Any, field_name: str) -> Optional[str]:
    """
    Validate an optional identity field, mapping empty strings to None.

    Raises:
        SchemaMismatchError: If the value is neither None nor a string
    """
    if value is None or isinstance(value, str):
        return value or None
    raise SchemaMismatchError(f"{field_name} must be a string or null", field=field_name)
