"""
Exception Override
------------------
Re-interprets operator-selected findings as intentionally excused and
re-derives every dependent score. The input result is never modified;
a new AnalysisResult is built with only the targeted fields rewritten.
"""
import logging
from dataclasses import replace
from typing import Dict, List, Optional, Sequence, Tuple

from viewchecker.controls.exception_keys import (
    excluded_keys,
    exclusion_reason,
    group_by_section,
    item_key,
)
from viewchecker.models.analysis_result import AnalysisResult, KrdsCompliance, TokenDetail
from viewchecker.models.category_item import COMPLIANT, CategoryItem
from viewchecker.models.exception_request import ExceptionRequest
from viewchecker.models.section import Section
from viewchecker.orchestrator.audit_builder import build_exception_info
from viewchecker.scoring.aggregator import calculate_category_score, calculate_overall_score

logger = logging.getLogger("viewchecker.exceptions")

EXCEPTION_PASSED_NOTE = "예외 처리로 완벽 준수"


def apply_exceptions(
    result: AnalysisResult,
    exceptions: Sequence[ExceptionRequest],
    checklist_id: Optional[str] = None,
) -> AnalysisResult:
    """
    Returns `result` itself when there is nothing to apply; otherwise a new
    result with matched items forced to 100 and an ExceptionInfo attached.
    """
    if not exceptions:
        logger.info("No exceptions supplied; returning original score")
        return result

    exceptions = list(exceptions)
    original_score = result.overall_score
    logger.info(
        f"Applying exceptions: original_score={original_score} "
        f"count={len(exceptions)} checklist_id={checklist_id}"
    )

    grouped = group_by_section(exceptions)
    by_section: Dict[Section, List[ExceptionRequest]] = {}
    requested_sections: List[str] = []
    for label, group in grouped.items():
        section = Section.from_label(label)
        if section is None or not group:
            continue
        if section not in by_section:
            requested_sections.append(section.value)
        by_section.setdefault(section, []).extend(group)

    sections = {
        section: adjust_section(result.section_items(section), by_section[section], section)
        if section in by_section
        else result.section_items(section)
        for section in Section
    }

    krds = result.krds_compliance
    tokens_detail = adjust_design_tokens_detail(
        krds.design_tokens_detail, by_section.get(Section.DESIGN_STYLES, [])
    )

    krds_components = krds.krds_components
    if Section.COMPONENTS in by_section:
        krds_components = adjust_section(krds_components, by_section[Section.COMPONENTS], Section.COMPONENTS)

    adjusted_score = calculate_overall_score(sections.values())

    exception_info = build_exception_info(
        checklist_id=checklist_id,
        total_exceptions=len(exceptions),
        original_score=original_score,
        adjusted_score=adjusted_score,
        sections=requested_sections,
    )

    logger.info(
        f"Exceptions applied: original={original_score} adjusted={adjusted_score} "
        f"difference={exception_info.score_difference:+d}"
    )

    return replace(
        result,
        overall_score=adjusted_score,
        kwcag_report=replace(
            result.kwcag_report, by_category=dict(result.kwcag_report.by_category)
        ),
        design_styles=sections[Section.DESIGN_STYLES],
        components=sections[Section.COMPONENTS],
        basic_patterns=sections[Section.BASIC_PATTERNS],
        service_patterns=sections[Section.SERVICE_PATTERNS],
        krds_compliance=KrdsCompliance(
            score=adjusted_score,
            design_tokens_detail=tokens_detail,
            krds_components=krds_components,
            basic_patterns_score=calculate_category_score(sections[Section.BASIC_PATTERNS]),
            service_patterns_score=calculate_category_score(sections[Section.SERVICE_PATTERNS]),
        ),
        exception_info=exception_info,
    )


def adjust_section(
    items: Sequence[CategoryItem],
    exceptions: List[ExceptionRequest],
    section: Section,
) -> Tuple[CategoryItem, ...]:
    if not items:
        return tuple(items)

    keys = excluded_keys(exceptions)
    adjusted: List[CategoryItem] = []
    adjusted_count = 0

    for item in items:
        key = item_key(item)
        if key and key in keys:
            adjusted_count += 1
            adjusted.append(
                replace(
                    item,
                    score=100,
                    compliance=COMPLIANT if isinstance(item.compliance, str) else 100,
                    issues=(),
                    excluded=True,
                    exclusion_reason=exclusion_reason(exceptions, key),
                )
            )
        else:
            adjusted.append(item)

    logger.info(f"  {section.value}: {adjusted_count}/{len(items)} items adjusted")
    return tuple(adjusted)


def adjust_design_tokens_detail(
    detail: Dict[str, TokenDetail],
    exceptions: List[ExceptionRequest],
) -> Dict[str, TokenDetail]:
    keys = excluded_keys(exceptions)
    return {
        key: TokenDetail(
            score=100,
            compliance=(),
            issues=(),
            passed=(EXCEPTION_PASSED_NOTE,),
            excluded=True,
        )
        if key in keys
        else token
        for key, token in detail.items()
    }
