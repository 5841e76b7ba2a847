"""
Lenient readers for client-supplied JSON. Wrong types narrow to an empty
default instead of raising.
"""
from typing import Any, Mapping, Optional, Tuple


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def as_int(value: Any, default: int = 0) -> int:
    return int(value) if is_number(value) else default


def as_mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def as_list(value: Any) -> list:
    return list(value) if isinstance(value, (list, tuple)) else []


def as_text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def as_strings(value: Any) -> Tuple[str, ...]:
    """A lone string is one entry, not a sequence of characters."""
    if isinstance(value, str):
        return (value,)
    return tuple(str(v) for v in as_list(value) if v is not None)
