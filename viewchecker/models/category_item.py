from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from viewchecker.models.coerce import as_strings, as_text, is_number
from viewchecker.models.section import Section

# Component items report compliance as one of these two strings.
COMPLIANT = "준수"
NON_COMPLIANT = "미준수"


@dataclass(frozen=True)
class CategoryItem:
    """
    A single scored finding inside a Section.

    `key` holds the value of the section's key field
    (category / type / name). Numeric fields stay Optional so that
    partially-populated items coming back from clients are representable.
    """
    key: str
    name: str
    score: Optional[int]
    compliance: Optional[Union[str, int]] = None
    issues: Tuple[str, ...] = ()
    english_name: Optional[str] = None
    krds_url: Optional[str] = None
    count: Optional[int] = None
    excluded: bool = False
    exclusion_reason: Optional[str] = None

    def to_dict(self, section: Section) -> Dict[str, Any]:
        payload: Dict[str, Any] = {section.key_field: self.key}
        if section.key_field != "name":
            payload["name"] = self.name
        if self.english_name is not None:
            payload["englishName"] = self.english_name
        payload["score"] = self.score
        if self.compliance is not None:
            payload["compliance"] = self.compliance
        payload["issues"] = list(self.issues)
        if self.krds_url is not None:
            payload["krdsUrl"] = self.krds_url
        if self.count is not None:
            payload["count"] = self.count
        if self.excluded:
            payload["excluded"] = True
            payload["exclusionReason"] = self.exclusion_reason
        return payload

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], section: Section) -> "CategoryItem":
        """Lenient parse: missing fields fall back to empty values, never raise."""
        raw_score = data.get("score")
        score = raw_score if is_number(raw_score) else None
        compliance = data.get("compliance")
        if not isinstance(compliance, (str, int)) or isinstance(compliance, bool):
            compliance = None
        count = data.get("count")

        return cls(
            key=as_text(data.get(section.key_field)) or "",
            name=as_text(data.get("name")) or "",
            score=score,
            compliance=compliance,
            issues=as_strings(data.get("issues")),
            english_name=as_text(data.get("englishName")),
            krds_url=as_text(data.get("krdsUrl")),
            count=count if isinstance(count, int) and not isinstance(count, bool) else None,
            excluded=bool(data.get("excluded", False)),
            exclusion_reason=as_text(data.get("exclusionReason")),
        )

