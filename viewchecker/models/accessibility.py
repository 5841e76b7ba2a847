from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from viewchecker.models.coerce import as_int, as_list, as_mapping, as_strings, as_text


class Principle(str, Enum):
    PERCEIVABLE = "perceivable"
    OPERABLE = "operable"
    UNDERSTANDABLE = "understandable"
    ROBUST = "robust"


class WcagLevel(str, Enum):
    AA = "AA"
    A = "A"
    NONE = "None"


@dataclass(frozen=True)
class AccessibilityRule:
    """One axe-core rule outcome (a violation or a pass)."""
    rule_id: str
    impact: Optional[str] = None
    tags: Tuple[str, ...] = ()
    description: str = ""
    help: str = ""
    help_url: Optional[str] = None
    node_count: int = 0

    @classmethod
    def from_axe(cls, raw: Mapping[str, Any]) -> "AccessibilityRule":
        nodes = raw.get("nodes")
        return cls(
            rule_id=as_text(raw.get("id")) or "",
            impact=as_text(raw.get("impact")) or None,
            tags=as_strings(raw.get("tags")),
            description=as_text(raw.get("description")) or "",
            help=as_text(raw.get("help")) or "",
            help_url=as_text(raw.get("helpUrl")),
            node_count=len(nodes) if isinstance(nodes, list) else as_int(raw.get("nodeCount")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.rule_id,
            "impact": self.impact,
            "tags": list(self.tags),
            "description": self.description,
            "help": self.help,
            "helpUrl": self.help_url,
            "nodeCount": self.node_count,
        }


@dataclass(frozen=True)
class AccessibilityReport:
    """Raw axe-core audit output, normalised."""
    violations: Tuple[AccessibilityRule, ...] = ()
    passes: Tuple[AccessibilityRule, ...] = ()
    incomplete: Tuple[AccessibilityRule, ...] = ()
    inapplicable: Tuple[AccessibilityRule, ...] = ()
    timestamp: Optional[str] = None

    @classmethod
    def from_axe(cls, raw: Mapping[str, Any]) -> "AccessibilityReport":
        def rules(name: str) -> Tuple[AccessibilityRule, ...]:
            return tuple(
                AccessibilityRule.from_axe(r)
                for r in as_list(raw.get(name))
                if isinstance(r, Mapping)
            )

        return cls(
            violations=rules("violations"),
            passes=rules("passes"),
            incomplete=rules("incomplete"),
            inapplicable=rules("inapplicable"),
            timestamp=as_text(raw.get("timestamp")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "violations": [r.to_dict() for r in self.violations],
            "passes": [r.to_dict() for r in self.passes],
            "incomplete": [r.to_dict() for r in self.incomplete],
            "inapplicable": [r.to_dict() for r in self.inapplicable],
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class LevelSummary:
    total: int
    passed: int
    failed: int
    compliance: int

    def to_dict(self) -> Dict[str, int]:
        return {
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "compliance": self.compliance,
        }


@dataclass(frozen=True)
class KwcagReport:
    overall_compliance: int
    wcag_level: WcagLevel
    violations: int
    passes: int
    by_category: Dict[Principle, int] = field(default_factory=dict)
    level_a: Optional[LevelSummary] = None
    level_aa: Optional[LevelSummary] = None

    @classmethod
    def unavailable(cls) -> "KwcagReport":
        """Report used when the audit tool could not run at all."""
        return cls(
            overall_compliance=0,
            wcag_level=WcagLevel.NONE,
            violations=0,
            passes=0,
            by_category={p: 0 for p in Principle},
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "KwcagReport":
        def level(raw: Any) -> Optional[LevelSummary]:
            if not isinstance(raw, Mapping):
                return None
            return LevelSummary(
                total=as_int(raw.get("total")),
                passed=as_int(raw.get("passed")),
                failed=as_int(raw.get("failed")),
                compliance=as_int(raw.get("compliance")),
            )

        by_category = as_mapping(data.get("byCategory"))
        try:
            wcag_level = WcagLevel(data.get("wcagLevel"))
        except (ValueError, TypeError):
            wcag_level = WcagLevel.NONE

        return cls(
            overall_compliance=as_int(data.get("overallCompliance")),
            wcag_level=wcag_level,
            violations=as_int(data.get("violations")),
            passes=as_int(data.get("passes")),
            by_category={p: as_int(by_category.get(p.value)) for p in Principle},
            level_a=level(data.get("levelA")),
            level_aa=level(data.get("levelAA")),
        )

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "overallCompliance": self.overall_compliance,
            "wcagLevel": self.wcag_level.value,
            "violations": self.violations,
            "passes": self.passes,
            "byCategory": {p.value: self.by_category.get(p, 0) for p in Principle},
        }
        if self.level_a is not None:
            payload["levelA"] = self.level_a.to_dict()
        if self.level_aa is not None:
            payload["levelAA"] = self.level_aa.to_dict()
        return payload
