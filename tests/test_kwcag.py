import pytest

from viewchecker.accessibility.kwcag import (
    compliance_by_principle,
    determine_wcag_level,
    generate_kwcag_report,
)
from viewchecker.accessibility.principles import categorize_rule
from viewchecker.models.accessibility import (
    AccessibilityReport,
    AccessibilityRule,
    KwcagReport,
    Principle,
    WcagLevel,
)


def rule(rule_id, impact=None, tags=()):
    return AccessibilityRule(rule_id=rule_id, impact=impact, tags=tuple(tags))


@pytest.mark.parametrize(
    "rule_id,expected",
    [
        ("color-contrast", Principle.PERCEIVABLE),
        ("image-alt", Principle.PERCEIVABLE),
        ("focus-order-semantics", Principle.OPERABLE),
        ("html-has-lang", Principle.UNDERSTANDABLE),
        ("label", Principle.UNDERSTANDABLE),
        ("button-name", Principle.ROBUST),
        ("aria-valid-attr", Principle.ROBUST),
        ("region", Principle.PERCEIVABLE),
        ("", Principle.PERCEIVABLE),
        (None, Principle.PERCEIVABLE),
    ],
)
def test_categorize_rule(rule_id, expected):
    assert categorize_rule(rule_id) == expected


def test_first_matching_principle_wins():
    # matches perceivable (image) and understandable (input)
    assert categorize_rule("input-image-alt") == Principle.PERCEIVABLE


def test_zero_violations_is_level_aa():
    assert determine_wcag_level([]) == WcagLevel.AA


def test_critical_violation_is_level_none():
    violations = [rule("region", "minor"), rule("color-contrast", "critical")]
    assert determine_wcag_level(violations) == WcagLevel.NONE


def test_serious_violation_is_level_none():
    assert determine_wcag_level([rule("label", "serious")]) == WcagLevel.NONE


def test_violation_without_impact_is_level_a():
    assert determine_wcag_level([rule("label")]) == WcagLevel.A


def test_three_moderate_violations_seven_passes():
    report = AccessibilityReport(
        violations=tuple(rule(f"region-{i}", "moderate") for i in range(3)),
        passes=tuple(rule(f"pass-{i}") for i in range(7)),
    )

    kwcag = generate_kwcag_report(report)

    assert kwcag.overall_compliance == 70
    assert kwcag.wcag_level == WcagLevel.A
    assert kwcag.violations == 3
    assert kwcag.passes == 7


def test_empty_report_has_zero_compliance_and_full_buckets():
    kwcag = generate_kwcag_report(AccessibilityReport())

    assert kwcag.overall_compliance == 0
    assert kwcag.wcag_level == WcagLevel.AA
    assert kwcag.by_category == {p: 100 for p in Principle}


def test_compliance_by_principle():
    report = AccessibilityReport(
        violations=(rule("color-contrast", "serious"),),
        passes=(rule("image-alt"), rule("document-title"), rule("button-name")),
    )

    by_category = compliance_by_principle(report)

    # perceivable: image-alt, document-title pass; color-contrast fails
    assert by_category[Principle.PERCEIVABLE] == 67
    assert by_category[Principle.ROBUST] == 100
    assert by_category[Principle.OPERABLE] == 100
    assert by_category[Principle.UNDERSTANDABLE] == 100


def test_level_summaries():
    report = AccessibilityReport(
        violations=(rule("color-contrast", "serious", ["wcag2aa"]), rule("region", "moderate")),
        passes=(rule("image-alt", tags=["wcag2a"]), rule("label", tags=["wcag2aa"])),
    )

    kwcag = generate_kwcag_report(report)

    assert kwcag.level_a.total == 4
    assert kwcag.level_a.passed == 2
    assert kwcag.level_a.failed == 2
    assert kwcag.level_a.compliance == kwcag.overall_compliance == 50
    assert kwcag.level_aa.total == 1
    assert kwcag.level_aa.passed == 1
    assert kwcag.level_aa.failed == 1
    assert kwcag.level_aa.compliance == 0


def test_report_from_raw_axe_output_tolerates_missing_fields():
    raw = {
        "violations": [{"id": "color-contrast", "impact": "serious", "nodes": [{}, {}]}, {}],
        "passes": [{"id": "image-alt", "tags": ["wcag2a"]}, "garbage"],
        "timestamp": "2026-01-01T00:00:00Z",
    }

    report = AccessibilityReport.from_axe(raw)

    assert len(report.violations) == 2
    assert report.violations[0].node_count == 2
    assert report.violations[1].rule_id == ""
    assert report.violations[1].impact is None
    assert len(report.passes) == 1
    assert report.incomplete == ()


def test_unavailable_report():
    kwcag = KwcagReport.unavailable()

    assert kwcag.overall_compliance == 0
    assert kwcag.wcag_level == WcagLevel.NONE
    assert kwcag.to_dict()["byCategory"] == {
        "perceivable": 0,
        "operable": 0,
        "understandable": 0,
        "robust": 0,
    }


def test_level_aa_total_counts_only_aa_violations():
    report = AccessibilityReport(
        violations=(rule("color-contrast", "serious", ["wcag2aa"]),),
        passes=(
            rule("label", tags=["wcag2aa"]),
            rule("link-name", tags=["wcag2aa"]),
            rule("image-alt", tags=["wcag2a"]),
        ),
    )

    level_aa = generate_kwcag_report(report).level_aa

    assert level_aa.total == 1
    assert level_aa.passed == 2
    assert level_aa.failed == 1
