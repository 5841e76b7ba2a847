import logging
from typing import Optional, Tuple

from playwright.sync_api import Page

from viewchecker.accessibility.kwcag import generate_kwcag_report
from viewchecker.config import Settings, load_settings
from viewchecker.models.accessibility import AccessibilityReport, KwcagReport

logger = logging.getLogger("viewchecker.axe")

AXE_RUN_OPTIONS = {
    "runOnly": {
        "type": "tag",
        "values": ["wcag2a", "wcag2aa", "wcag21a", "wcag21aa", "best-practice"],
    },
    "resultTypes": ["violations", "passes", "incomplete"],
}

RUN_AXE_JS = "async (options) => await window.axe.run(document, options)"


def inject_axe(page: Page, settings: Settings):
    if settings.axe_script_path:
        page.add_script_tag(path=settings.axe_script_path)
    else:
        page.add_script_tag(url=settings.axe_script_url)


def run_axe(page: Page, settings: Optional[Settings] = None) -> Tuple[AccessibilityReport, KwcagReport]:
    """
    Runs axe-core on the loaded page.
    Any failure yields an empty report and the 'unavailable' KWCAG summary.
    """
    settings = settings or load_settings()
    try:
        inject_axe(page, settings)
        raw = page.evaluate(RUN_AXE_JS, AXE_RUN_OPTIONS)
    except Exception as e:
        logger.warning(f"axe-core audit failed: {e}")
        return AccessibilityReport(), KwcagReport.unavailable()

    if not isinstance(raw, dict):
        logger.warning("axe-core returned no results")
        return AccessibilityReport(), KwcagReport.unavailable()

    report = AccessibilityReport.from_axe(raw)
    logger.info(
        f"axe-core: {len(report.violations)} violations, {len(report.passes)} passes"
    )
    return report, generate_kwcag_report(report)
