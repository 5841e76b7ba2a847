"""
Analysis orchestration
----------------------
assemble_analysis  : pure; signals + accessibility report -> AnalysisResult
analyze_website    : drives the browser adapters and then assembles
"""
import logging
import time
from datetime import datetime, timezone
from typing import Dict, Optional, Sequence

from viewchecker.adapters.axe_runner import run_axe
from viewchecker.adapters.browser import browser_session, resolve_viewport
from viewchecker.adapters.page_signals import collect_page_signals
from viewchecker.config import Settings, load_settings
from viewchecker.models.accessibility import AccessibilityReport, KwcagReport
from viewchecker.models.analysis_result import AnalysisResult, KrdsCompliance, TokenDetail
from viewchecker.models.category_item import COMPLIANT, CategoryItem
from viewchecker.models.page_signals import PageSignals
from viewchecker.models.section import Section
from viewchecker.rules.rules_wrapper import KrdsRuleEngine
from viewchecker.scoring.aggregator import calculate_category_score, calculate_overall_score
from viewchecker.scoring.thresholds import COMPLIANT_SCORE

logger = logging.getLogger("viewchecker.analyzer")


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def build_design_tokens_detail(items: Sequence[CategoryItem]) -> Dict[str, TokenDetail]:
    detail: Dict[str, TokenDetail] = {}
    for item in items:
        score = item.score if item.score is not None else 0
        detail[item.key.lower()] = TokenDetail(
            score=score,
            issues=tuple(item.issues),
            passed=(COMPLIANT,) if score >= COMPLIANT_SCORE else (),
            excluded=item.excluded,
        )
    return detail


def assemble_analysis(
    url: str,
    viewport: str,
    signals: PageSignals,
    axe_report: AccessibilityReport,
    kwcag_report: KwcagReport,
    execution_time: int = 0,
    timestamp: Optional[str] = None,
    engine: Optional[KrdsRuleEngine] = None,
) -> AnalysisResult:
    engine = engine or KrdsRuleEngine()
    sections = engine.evaluate_all(signals)
    overall = calculate_overall_score(sections.values())

    return AnalysisResult(
        url=url,
        viewport=viewport,
        timestamp=timestamp or utc_timestamp(),
        execution_time=execution_time,
        overall_score=overall,
        design_styles=sections[Section.DESIGN_STYLES],
        components=sections[Section.COMPONENTS],
        basic_patterns=sections[Section.BASIC_PATTERNS],
        service_patterns=sections[Section.SERVICE_PATTERNS],
        axe_results=axe_report,
        kwcag_report=kwcag_report,
        krds_compliance=KrdsCompliance(
            score=overall,
            design_tokens_detail=build_design_tokens_detail(sections[Section.DESIGN_STYLES]),
            krds_components=sections[Section.COMPONENTS],
            basic_patterns_score=calculate_category_score(sections[Section.BASIC_PATTERNS]),
            service_patterns_score=calculate_category_score(sections[Section.SERVICE_PATTERNS]),
        ),
    )


def analyze_website(
    url: str,
    viewport: str = "desktop",
    settings: Optional[Settings] = None,
) -> AnalysisResult:
    """
    Loads `url` in a fresh browser session and returns the unadjusted result.
    Raises viewchecker.adapters.browser.AnalysisError if the page cannot be loaded.
    """
    settings = settings or load_settings()
    viewport = resolve_viewport(viewport)
    start_time = time.perf_counter()

    logger.info(f"Analysis started: url={url} viewport={viewport}")

    with browser_session(url, viewport, settings) as page:
        signals = collect_page_signals(page)
        axe_report, kwcag_report = run_axe(page, settings)

    execution_time = int((time.perf_counter() - start_time) * 1000)
    result = assemble_analysis(
        url,
        viewport,
        signals,
        axe_report,
        kwcag_report,
        execution_time=execution_time,
    )

    logger.info(
        f"Analysis finished: url={url} score={result.overall_score} "
        f"duration={execution_time}ms"
    )
    return result
