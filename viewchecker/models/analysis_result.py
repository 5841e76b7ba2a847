from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from viewchecker.models.accessibility import AccessibilityReport, KwcagReport
from viewchecker.models.category_item import CategoryItem
from viewchecker.models.coerce import as_int, as_list, as_mapping, as_strings, as_text, is_number
from viewchecker.models.exception_info import ExceptionInfo
from viewchecker.models.section import Section
from viewchecker.scoring.aggregator import calculate_category_score, calculate_overall_score


@dataclass(frozen=True)
class TokenDetail:
    """Dictionary-shaped mirror of one design-style item."""
    score: Optional[int]
    compliance: Tuple[str, ...] = ()
    issues: Tuple[str, ...] = ()
    passed: Tuple[str, ...] = ()
    excluded: bool = False

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "score": self.score,
            "compliance": list(self.compliance),
            "issues": list(self.issues),
            "passed": list(self.passed),
        }
        if self.excluded:
            payload["excluded"] = True
        return payload

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TokenDetail":
        score = data.get("score")
        return cls(
            score=score if is_number(score) else None,
            compliance=as_strings(data.get("compliance")),
            issues=as_strings(data.get("issues")),
            passed=as_strings(data.get("passed")),
            excluded=bool(data.get("excluded", False)),
        )


@dataclass(frozen=True)
class KrdsCompliance:
    score: int
    design_tokens_detail: Dict[str, TokenDetail] = field(default_factory=dict)
    krds_components: Tuple[CategoryItem, ...] = ()
    basic_patterns_score: int = 0
    service_patterns_score: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "designTokensDetail": {
                key: detail.to_dict() for key, detail in self.design_tokens_detail.items()
            },
            "krdsComponents": [item.to_dict(Section.COMPONENTS) for item in self.krds_components],
            "basicPatterns": {"overallScore": self.basic_patterns_score},
            "servicePatterns": {"overallScore": self.service_patterns_score},
        }


@dataclass(frozen=True)
class AnalysisResult:
    """
    Immutable outcome of one analysis run.

    `overall_score` and `krds_compliance.score` are always derived from the
    four sections (see viewchecker.scoring.aggregator); build instances through
    viewchecker.orchestrator.analyzer.assemble_analysis or the exception
    handler rather than by hand.
    """
    url: str
    viewport: str
    timestamp: str
    execution_time: int
    overall_score: int
    design_styles: Tuple[CategoryItem, ...]
    components: Tuple[CategoryItem, ...]
    basic_patterns: Tuple[CategoryItem, ...]
    service_patterns: Tuple[CategoryItem, ...]
    axe_results: AccessibilityReport
    kwcag_report: KwcagReport
    krds_compliance: KrdsCompliance
    exception_info: Optional[ExceptionInfo] = None

    def section_items(self, section: Section) -> Tuple[CategoryItem, ...]:
        return {
            Section.DESIGN_STYLES: self.design_styles,
            Section.COMPONENTS: self.components,
            Section.BASIC_PATTERNS: self.basic_patterns,
            Section.SERVICE_PATTERNS: self.service_patterns,
        }[section]

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "url": self.url,
            "viewport": self.viewport,
            "timestamp": self.timestamp,
            "executionTime": self.execution_time,
            "overallScore": self.overall_score,
        }
        for section in Section:
            payload[section.result_field] = [
                item.to_dict(section) for item in self.section_items(section)
            ]
        payload["axeResults"] = self.axe_results.to_dict()
        payload["kwcagReport"] = self.kwcag_report.to_dict()
        payload["krdsCompliance"] = self.krds_compliance.to_dict()
        if self.exception_info is not None:
            payload["exceptionInfo"] = self.exception_info.to_dict()
        return payload

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AnalysisResult":
        """
        Lenient parse of the wire shape produced by to_dict.
        Scores are recomputed from the parsed sections, never trusted.
        A previous exceptionInfo is dropped: it is re-derived on adjustment.
        """
        data = as_mapping(data)

        def items(section: Section) -> Tuple[CategoryItem, ...]:
            return tuple(
                CategoryItem.from_dict(raw, section)
                for raw in as_list(data.get(section.result_field))
                if isinstance(raw, Mapping)
            )

        krds = as_mapping(data.get("krdsCompliance"))
        sections = {section: items(section) for section in Section}
        overall = calculate_overall_score(sections.values())

        return cls(
            url=as_text(data.get("url")) or "",
            viewport=as_text(data.get("viewport")) or "desktop",
            timestamp=as_text(data.get("timestamp")) or "",
            execution_time=as_int(data.get("executionTime")),
            overall_score=overall,
            design_styles=sections[Section.DESIGN_STYLES],
            components=sections[Section.COMPONENTS],
            basic_patterns=sections[Section.BASIC_PATTERNS],
            service_patterns=sections[Section.SERVICE_PATTERNS],
            axe_results=AccessibilityReport.from_axe(as_mapping(data.get("axeResults"))),
            kwcag_report=KwcagReport.from_dict(as_mapping(data.get("kwcagReport"))),
            krds_compliance=KrdsCompliance(
                score=overall,
                design_tokens_detail={
                    str(key): TokenDetail.from_dict(detail)
                    for key, detail in as_mapping(krds.get("designTokensDetail")).items()
                    if isinstance(detail, Mapping)
                },
                krds_components=tuple(
                    CategoryItem.from_dict(raw, Section.COMPONENTS)
                    for raw in as_list(krds.get("krdsComponents"))
                    if isinstance(raw, Mapping)
                ),
                basic_patterns_score=calculate_category_score(sections[Section.BASIC_PATTERNS]),
                service_patterns_score=calculate_category_score(sections[Section.SERVICE_PATTERNS]),
            ),
        )
