from enum import Enum
from typing import Optional


class Section(str, Enum):
    """
    The four fixed finding buckets of a KRDS analysis.
    Values are the Korean labels operators use when filing exceptions.
    """
    DESIGN_STYLES = "디자인 스타일"
    COMPONENTS = "컴포넌트"
    BASIC_PATTERNS = "기본 패턴"
    SERVICE_PATTERNS = "서비스 패턴"

    @property
    def key_field(self) -> str:
        return _KEY_FIELDS[self]

    @property
    def result_field(self) -> str:
        return _RESULT_FIELDS[self]

    @classmethod
    def from_label(cls, label: Optional[str]) -> Optional["Section"]:
        """Returns None for the 'other' bucket and any unknown label."""
        if not label:
            return None
        return _ALIASES.get(label.strip())


# Bucket used when an exception names no section at all.
OTHER_SECTION = "기타"

_KEY_FIELDS = {
    Section.DESIGN_STYLES: "category",
    Section.COMPONENTS: "type",
    Section.BASIC_PATTERNS: "name",
    Section.SERVICE_PATTERNS: "name",
}

_RESULT_FIELDS = {
    Section.DESIGN_STYLES: "designStyles",
    Section.COMPONENTS: "components",
    Section.BASIC_PATTERNS: "basicPatterns",
    Section.SERVICE_PATTERNS: "servicePatterns",
}

_ALIASES = {
    **{s.value: s for s in Section},
    **{s.result_field: s for s in Section},
    "design-styles": Section.DESIGN_STYLES,
    "components": Section.COMPONENTS,
    "basic-patterns": Section.BASIC_PATTERNS,
    "service-patterns": Section.SERVICE_PATTERNS,
}
