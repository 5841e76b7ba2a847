from dataclasses import dataclass
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class ExceptionRequest:
    """
    Operator request to treat one finding as intentionally excused.
    All fields are optional; unusable requests simply never match.
    """
    item_key: Optional[str] = None
    item_name: Optional[str] = None
    section: Optional[str] = None
    category: Optional[str] = None
    reason: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ExceptionRequest":
        def text(name: str) -> Optional[str]:
            value = data.get(name)
            return str(value) if value is not None else None

        return cls(
            item_key=text("item_key"),
            item_name=text("item_name"),
            section=text("section"),
            category=text("category"),
            reason=text("reason"),
        )
