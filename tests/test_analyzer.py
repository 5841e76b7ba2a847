from viewchecker.accessibility.kwcag import generate_kwcag_report
from viewchecker.models.accessibility import AccessibilityReport, AccessibilityRule, WcagLevel
from viewchecker.models.category_item import CategoryItem
from viewchecker.models.page_signals import ElementTally, PageSignals
from viewchecker.models.section import Section
from viewchecker.orchestrator.analyzer import assemble_analysis, build_design_tokens_detail
from viewchecker.scoring.aggregator import calculate_category_score, calculate_overall_score


def well_built_page():
    return PageSignals(
        color_count=12,
        font_family_count=2,
        border_radius_count=3,
        box_shadow_count=2,
        has_viewport_meta=True,
        supports_contrast_mode=True,
        has_lang=True,
        button_heights=(48.0, 48.0),
        icons=ElementTally(4, 4),
        links=ElementTally(10, 10),
        components={"button": ElementTally(2, 2), "input": ElementTally(3, 3)},
        landmarks=("header", "nav", "main", "footer"),
        has_skip_link=True,
        h1_count=1,
        heading_levels=(1, 2, 2, 3),
    )


def assemble(signals):
    report = AccessibilityReport(
        violations=(AccessibilityRule("color-contrast", "moderate"),),
        passes=(AccessibilityRule("image-alt"),),
    )
    return assemble_analysis(
        "https://example.go.kr",
        "tablet",
        signals,
        report,
        generate_kwcag_report(report),
        execution_time=321,
        timestamp="2026-01-01T00:00:00+00:00",
    )


def test_overall_score_is_derived_from_sections():
    result = assemble(well_built_page())

    sections = [result.section_items(s) for s in Section]
    assert result.overall_score == calculate_overall_score(sections)
    assert result.krds_compliance.score == result.overall_score
    assert result.krds_compliance.basic_patterns_score == calculate_category_score(result.basic_patterns)
    assert result.exception_info is None


def test_well_built_page_scores_high():
    result = assemble(well_built_page())
    assert result.overall_score >= 90


def test_empty_page_scores_lower_than_well_built_page():
    assert assemble(PageSignals()).overall_score < assemble(well_built_page()).overall_score


def test_accessibility_blocks_are_attached():
    result = assemble(well_built_page())

    assert result.kwcag_report.overall_compliance == 50
    assert result.kwcag_report.wcag_level == WcagLevel.A
    assert len(result.axe_results.violations) == 1


def test_design_tokens_detail_mirrors_design_styles():
    result = assemble(PageSignals())
    detail = result.krds_compliance.design_tokens_detail

    assert list(detail) == [item.key.lower() for item in result.design_styles]
    assert detail["형태"].score == 90
    assert detail["형태"].passed == ("준수",)
    assert detail["색상"].passed == ()
    assert detail["색상"].issues == result.design_styles[0].issues


def test_design_tokens_detail_lowercases_keys():
    detail = build_design_tokens_detail([CategoryItem(key="Color", name="Color", score=85)])
    assert list(detail) == ["color"]


def test_to_dict_wire_shape():
    data = assemble(well_built_page()).to_dict()

    assert data["url"] == "https://example.go.kr"
    assert data["viewport"] == "tablet"
    assert data["executionTime"] == 321
    assert set(data["designStyles"][0]) >= {"category", "name", "score", "compliance", "issues", "krdsUrl"}
    assert set(data["components"][0]) >= {"type", "name", "score", "compliance", "count"}
    assert set(data["basicPatterns"][0]) >= {"name", "englishName", "score", "issues"}
    assert "exceptionInfo" not in data
    krds = data["krdsCompliance"]
    assert krds["score"] == data["overallScore"]
    assert set(krds) == {"score", "designTokensDetail", "krdsComponents", "basicPatterns", "servicePatterns"}
    assert set(data["kwcagReport"]["byCategory"]) == {"perceivable", "operable", "understandable", "robust"}
