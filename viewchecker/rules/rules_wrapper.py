import logging
from typing import Dict, List, Optional, Sequence, Tuple

from viewchecker.models.category_item import COMPLIANT, NON_COMPLIANT, CategoryItem
from viewchecker.models.page_signals import PageSignals, RuleOutcome
from viewchecker.models.section import Section
from viewchecker.rules.base import PageRule, krds_url
from viewchecker.rules.components import COMPONENT_RULES
from viewchecker.rules.design_styles import DESIGN_STYLE_RULES
from viewchecker.rules.patterns import BASIC_PATTERN_RULES, SERVICE_PATTERN_RULES
from viewchecker.scoring.thresholds import COMPLIANT_SCORE, FAILED_RULE_SCORE

# krds.go.kr path segment per section
KRDS_URL_KINDS = {
    Section.DESIGN_STYLES: "design",
    Section.COMPONENTS: "component",
    Section.BASIC_PATTERNS: "pattern",
    Section.SERVICE_PATTERNS: "service",
}

DEFAULT_RULES: Dict[Section, Tuple[PageRule, ...]] = {
    Section.DESIGN_STYLES: DESIGN_STYLE_RULES,
    Section.COMPONENTS: COMPONENT_RULES,
    Section.BASIC_PATTERNS: BASIC_PATTERN_RULES,
    Section.SERVICE_PATTERNS: SERVICE_PATTERN_RULES,
}


class KrdsRuleEngine:
    """
    Runs every rule of a section against the page signals and shapes the
    outcomes into CategoryItems the way each section reports them.
    """

    def __init__(self, rules: Optional[Dict[Section, Sequence[PageRule]]] = None):
        self.logger = logging.getLogger("viewchecker.rules")
        self.rules = rules if rules is not None else DEFAULT_RULES

    def evaluate_all(self, signals: PageSignals) -> Dict[Section, Tuple[CategoryItem, ...]]:
        return {section: self.evaluate(section, signals) for section in Section}

    def evaluate(self, section: Section, signals: PageSignals) -> Tuple[CategoryItem, ...]:
        items: List[CategoryItem] = []
        for rule in self.rules.get(section, ()):
            outcome = self._safe_run(rule, signals)
            items.append(self._to_item(section, rule, outcome, signals))
        return tuple(items)

    def _safe_run(self, rule: PageRule, signals: PageSignals) -> RuleOutcome:
        try:
            return rule.evaluate(signals)
        except Exception as e:
            self.logger.warning(f"Rule '{rule.label}' failed: {e}")
            return RuleOutcome(FAILED_RULE_SCORE, (f"{rule.label} 분석 실패",))

    def _to_item(
        self,
        section: Section,
        rule: PageRule,
        outcome: RuleOutcome,
        signals: PageSignals,
    ) -> CategoryItem:
        score = max(0, min(100, int(outcome.score)))
        issues = tuple(outcome.issues)
        if score < COMPLIANT_SCORE and not issues:
            issues = (f"{rule.label} 개선 필요",)

        url = krds_url(KRDS_URL_KINDS[section], rule.label)

        if section is Section.DESIGN_STYLES:
            return CategoryItem(
                key=rule.label,
                name=rule.label,
                score=score,
                compliance=score,
                issues=issues,
                krds_url=url,
            )

        if section is Section.COMPONENTS:
            return CategoryItem(
                key=rule.label,
                name=rule.label,
                score=score,
                compliance=COMPLIANT if score >= COMPLIANT_SCORE else NON_COMPLIANT,
                issues=issues,
                krds_url=url,
                count=signals.component(rule.label).count,
            )

        return CategoryItem(
            key=rule.label,
            name=rule.label,
            score=score,
            issues=issues,
            english_name=rule.english_name or rule.label,
            krds_url=url,
        )
