"""
KWCAG report builder
--------------------
Turns a raw axe-core report into the localized KWCAG summary:
overall compliance, a conformance level and per-principle compliance.
"""
from typing import Dict, Sequence

from viewchecker.accessibility.principles import categorize_rule
from viewchecker.models.accessibility import (
    AccessibilityReport,
    AccessibilityRule,
    KwcagReport,
    LevelSummary,
    Principle,
    WcagLevel,
)
from viewchecker.scoring.aggregator import round_half_up

# Violations at these impacts rule out even level A.
BLOCKING_IMPACTS = {"critical", "serious"}

AA_TAG = "wcag2aa"


def percentage(passed: int, total: int, empty: int) -> int:
    if total == 0:
        return empty
    return round_half_up(100 * passed / total)


def determine_wcag_level(violations: Sequence[AccessibilityRule]) -> WcagLevel:
    if not violations:
        return WcagLevel.AA
    if not any(v.impact in BLOCKING_IMPACTS for v in violations):
        return WcagLevel.A
    return WcagLevel.NONE


def compliance_by_principle(report: AccessibilityReport) -> Dict[Principle, int]:
    """Empty principle buckets are reported as fully compliant (100)."""
    counts = {p: {"violations": 0, "passes": 0} for p in Principle}

    for rule in report.violations:
        counts[categorize_rule(rule.rule_id)]["violations"] += 1
    for rule in report.passes:
        counts[categorize_rule(rule.rule_id)]["passes"] += 1

    return {
        principle: percentage(c["passes"], c["passes"] + c["violations"], empty=100)
        for principle, c in counts.items()
    }


def generate_kwcag_report(report: AccessibilityReport) -> KwcagReport:
    violations = report.violations
    passes = report.passes
    total = len(violations) + len(passes)
    overall = percentage(len(passes), total, empty=0)

    aa_failed = sum(1 for v in violations if AA_TAG in v.tags)
    aa_passed = sum(1 for p in passes if AA_TAG in p.tags)

    return KwcagReport(
        overall_compliance=overall,
        wcag_level=determine_wcag_level(violations),
        violations=len(violations),
        passes=len(passes),
        by_category=compliance_by_principle(report),
        level_a=LevelSummary(
            total=total,
            passed=len(passes),
            failed=len(violations),
            compliance=overall,
        ),
        # levelAA.total counts AA violations only, not AA passes.
        # TODO: AA compliance is pinned to 0 until product confirms whether it
        # should be aa_passed / (aa_passed + aa_failed).
        level_aa=LevelSummary(
            total=aa_failed,
            passed=aa_passed,
            failed=aa_failed,
            compliance=0,
        ),
    )
