from contextlib import contextmanager

import pytest
from playwright.sync_api import Error as PlaywrightError

from viewchecker.adapters.axe_runner import AXE_RUN_OPTIONS, run_axe
from viewchecker.adapters.browser import (
    LAUNCH_ARGS,
    VIEWPORTS,
    AnalysisError,
    browser_session,
    resolve_viewport,
)
from viewchecker.adapters.page_signals import collect_page_signals
from viewchecker.config import Settings
from viewchecker.models.accessibility import AccessibilityReport, KwcagReport, WcagLevel
from viewchecker.models.page_signals import PageSignals
from viewchecker.orchestrator.analyzer import analyze_website


@pytest.fixture
def settings():
    return Settings(page_load_timeout_ms=5000, axe_script_url="https://cdn.example/axe.js")


@pytest.fixture
def fake_browser(mocker):
    playwright = mocker.patch("viewchecker.adapters.browser.sync_playwright")
    p = playwright.return_value.__enter__.return_value
    return p.chromium.launch.return_value


# ============================================================
# BROWSER SESSION
# ============================================================

def test_resolve_viewport():
    assert resolve_viewport("mobile") == "mobile"
    assert resolve_viewport("watch") == "desktop"
    assert resolve_viewport(None) == "desktop"


def test_session_loads_page_and_closes_browser(fake_browser, settings):
    page = fake_browser.new_page.return_value

    with browser_session("https://example.go.kr", "mobile", settings) as yielded:
        assert yielded is page

    fake_browser.new_page.assert_called_once_with(
        viewport=VIEWPORTS["mobile"], user_agent=settings.user_agent
    )
    page.goto.assert_called_once_with(
        "https://example.go.kr", wait_until="networkidle", timeout=5000
    )
    fake_browser.close.assert_called_once()


def test_session_launch_arguments(mocker, settings):
    playwright = mocker.patch("viewchecker.adapters.browser.sync_playwright")
    chromium = playwright.return_value.__enter__.return_value.chromium

    with browser_session("https://example.go.kr", "desktop", settings):
        pass

    chromium.launch.assert_called_once_with(headless=True, args=LAUNCH_ARGS)


def test_page_load_failure_raises_and_still_closes(fake_browser, settings):
    fake_browser.new_page.return_value.goto.side_effect = PlaywrightError("net::ERR_NAME_NOT_RESOLVED")

    with pytest.raises(AnalysisError, match="Page load failed"):
        with browser_session("https://nowhere.invalid", "desktop", settings):
            pass

    fake_browser.close.assert_called_once()


def test_error_inside_session_still_closes(fake_browser, settings):
    with pytest.raises(ValueError):
        with browser_session("https://example.go.kr", "desktop", settings):
            raise ValueError("collector bug")

    fake_browser.close.assert_called_once()


# ============================================================
# AXE RUNNER
# ============================================================

def test_axe_failure_returns_default_reports(mocker, settings):
    page = mocker.Mock()
    page.add_script_tag.side_effect = PlaywrightError("CSP blocked script")

    report, kwcag = run_axe(page, settings)

    assert report == AccessibilityReport()
    assert kwcag == KwcagReport.unavailable()
    page.evaluate.assert_not_called()


def test_axe_success_builds_kwcag(mocker, settings):
    page = mocker.Mock()
    page.evaluate.return_value = {
        "violations": [{"id": "color-contrast", "impact": "serious", "tags": ["wcag2aa"], "nodes": [{}]}],
        "passes": [{"id": "image-alt"}, {"id": "label"}, {"id": "html-has-lang"}],
        "incomplete": [],
    }

    report, kwcag = run_axe(page, settings)

    page.add_script_tag.assert_called_once_with(url="https://cdn.example/axe.js")
    assert page.evaluate.call_args[0][1] == AXE_RUN_OPTIONS
    assert len(report.violations) == 1
    assert kwcag.overall_compliance == 75
    assert kwcag.wcag_level == WcagLevel.NONE


def test_axe_prefers_local_script(mocker):
    page = mocker.Mock()
    page.evaluate.return_value = {}

    run_axe(page, Settings(axe_script_path="/opt/axe/axe.min.js"))

    page.add_script_tag.assert_called_once_with(path="/opt/axe/axe.min.js")


# ============================================================
# SIGNAL COLLECTOR
# ============================================================

def test_collect_page_signals(mocker):
    page = mocker.Mock()
    page.evaluate.return_value = {"colorCount": 11, "hasLang": True}

    signals = collect_page_signals(page)

    assert signals.color_count == 11
    assert signals.has_lang is True


def test_collect_page_signals_empty_payload(mocker):
    page = mocker.Mock()
    page.evaluate.return_value = None

    assert collect_page_signals(page) == PageSignals()


def test_collect_page_signals_failure(mocker):
    page = mocker.Mock()
    page.evaluate.side_effect = PlaywrightError("Execution context was destroyed")

    with pytest.raises(AnalysisError):
        collect_page_signals(page)


# ============================================================
# END-TO-END ORCHESTRATION (no real browser)
# ============================================================

def test_analyze_website_wires_adapters(mocker, settings):
    page = mocker.Mock()
    calls = []

    @contextmanager
    def fake_session(url, viewport, settings):
        calls.append((url, viewport))
        yield page

    mocker.patch("viewchecker.orchestrator.analyzer.browser_session", fake_session)
    mocker.patch(
        "viewchecker.orchestrator.analyzer.collect_page_signals",
        return_value=PageSignals(has_lang=True),
    )
    mocker.patch(
        "viewchecker.orchestrator.analyzer.run_axe",
        return_value=(AccessibilityReport(), KwcagReport.unavailable()),
    )

    result = analyze_website("https://example.go.kr", "phablet", settings)

    assert calls == [("https://example.go.kr", "desktop")]
    assert result.viewport == "desktop"
    assert result.url == "https://example.go.kr"
    assert 0 <= result.overall_score <= 100
    assert result.execution_time >= 0
