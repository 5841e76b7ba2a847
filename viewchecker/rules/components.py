from viewchecker.models.page_signals import PageSignals, RuleOutcome
from viewchecker.rules.base import PageRule, ratio_score


class ComponentRule(PageRule):
    """
    Scores one component type by the share of its instances that pass
    the type's check. A component absent from the page passes.
    """

    def __init__(self, component_type: str, failure: str):
        self.label = component_type
        self.failure = failure

    def evaluate(self, signals: PageSignals) -> RuleOutcome:
        tally = signals.component(self.label)
        score = ratio_score(tally)
        missing = tally.count - tally.compliant
        if missing > 0:
            return RuleOutcome(score, (f"{self.failure} {missing}개",))
        return RuleOutcome(score)


# Each check is computed in-page; see viewchecker.adapters.page_signals.
COMPONENT_RULES = (
    ComponentRule("button", "최소 높이 44px 미만 버튼"),
    ComponentRule("input", "레이블이 없는 입력 필드"),
    ComponentRule("select", "레이블이 없는 선택 상자"),
    ComponentRule("checkbox", "레이블이 없는 체크박스"),
    ComponentRule("radio", "레이블이 없는 라디오 버튼"),
    ComponentRule("link", "텍스트가 없는 링크"),
    ComponentRule("card", "제목이 없는 카드"),
    ComponentRule("table", "제목 셀(th)이나 캡션이 없는 표"),
)
