"""
Exception key resolution
------------------------
Ordered fallback lookups shared by every call site, so that sections
never disagree on how a key is chosen.
"""
from typing import Dict, List, Optional

from viewchecker.models.category_item import CategoryItem
from viewchecker.models.exception_request import ExceptionRequest
from viewchecker.models.section import OTHER_SECTION

DEFAULT_EXCLUSION_REASON = "예외 항목"


def first_non_empty(*candidates: Optional[str]) -> str:
    for candidate in candidates:
        if candidate:
            return candidate
    return ""


def exception_key(exception: ExceptionRequest) -> str:
    """item_key -> item_name -> "" (an empty key never matches)."""
    return first_non_empty(exception.item_key, exception.item_name)


def exception_section(exception: ExceptionRequest) -> str:
    """section -> category -> the 'other' bucket."""
    return first_non_empty(exception.section, exception.category) or OTHER_SECTION


def item_key(item: CategoryItem) -> str:
    """section key field -> name -> englishName -> ""."""
    return first_non_empty(item.key, item.name, item.english_name)


def group_by_section(exceptions: List[ExceptionRequest]) -> Dict[str, List[ExceptionRequest]]:
    """Insertion-ordered grouping by resolved section name."""
    grouped: Dict[str, List[ExceptionRequest]] = {}
    for exc in exceptions:
        grouped.setdefault(exception_section(exc), []).append(exc)
    return grouped


def excluded_keys(exceptions: List[ExceptionRequest]) -> List[str]:
    return [key for key in (exception_key(e) for e in exceptions) if key]


def exclusion_reason(exceptions: List[ExceptionRequest], key: str) -> str:
    """Reason of the first exception matching `key`, else the default text."""
    for exc in exceptions:
        if exception_key(exc) == key:
            return exc.reason or DEFAULT_EXCLUSION_REASON
    return DEFAULT_EXCLUSION_REASON
