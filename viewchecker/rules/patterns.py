from typing import List

from viewchecker.models.page_signals import PageSignals, RuleOutcome
from viewchecker.rules.base import PageRule, clamp_score, ratio_score

# Landmarks every page layout is expected to expose.
REQUIRED_LANDMARKS = ("header", "main", "footer")


# =========================================================
# Basic patterns
# =========================================================
class LayoutPatternRule(PageRule):
    label = "레이아웃"
    english_name = "Layout"

    def evaluate(self, signals: PageSignals) -> RuleOutcome:
        missing = [l for l in REQUIRED_LANDMARKS if l not in signals.landmarks]
        present = len(REQUIRED_LANDMARKS) - len(missing)
        score = clamp_score(100 * present / len(REQUIRED_LANDMARKS))
        return RuleOutcome(score, tuple(f"<{l}> 랜드마크가 없습니다" for l in missing))


class NavigationPatternRule(PageRule):
    label = "네비게이션"
    english_name = "Navigation"

    def evaluate(self, signals: PageSignals) -> RuleOutcome:
        score = 100
        issues: List[str] = []
        if "nav" not in signals.landmarks:
            score -= 50
            issues.append("<nav> 내비게이션 영역이 없습니다")
        if not signals.has_skip_link:
            score -= 20
            issues.append("본문 바로가기 링크가 없습니다")
        return RuleOutcome(clamp_score(score), tuple(issues))


class InformationArchitectureRule(PageRule):
    label = "정보구조"
    english_name = "Information Architecture"

    def evaluate(self, signals: PageSignals) -> RuleOutcome:
        score = 100
        issues: List[str] = []

        if signals.h1_count != 1:
            score -= 20
            issues.append(f"h1 제목이 {signals.h1_count}개입니다")

        skips = 0
        previous = 0
        for level in signals.heading_levels:
            if previous and level > previous + 1:
                skips += 1
            previous = level
        if skips:
            score -= min(30, 10 * skips)
            issues.append(f"제목 수준을 건너뛴 곳이 {skips}곳 있습니다")

        if not signals.has_lang:
            score -= 20
            issues.append("html 요소에 lang 속성이 없습니다")

        return RuleOutcome(clamp_score(score), tuple(issues))


class InteractionPatternRule(PageRule):
    label = "인터랙션"
    english_name = "Interaction"

    def evaluate(self, signals: PageSignals) -> RuleOutcome:
        count = signals.positive_tabindex_count
        if signals.focusable_count == 0 or count == 0:
            return RuleOutcome(100)
        return RuleOutcome(
            clamp_score(100 - min(40, 10 * count)),
            (f"양수 tabindex로 초점 순서를 바꾼 요소 {count}개",),
        )


class StateManagementRule(PageRule):
    label = "상태관리"
    english_name = "State Management"

    def evaluate(self, signals: PageSignals) -> RuleOutcome:
        tally = signals.stateful_controls
        missing = tally.count - tally.compliant
        if missing > 0:
            return RuleOutcome(
                ratio_score(tally),
                (f"aria-expanded 상태가 없는 토글 요소 {missing}개",),
            )
        return RuleOutcome(ratio_score(tally))


class FeedbackPatternRule(PageRule):
    label = "피드백"
    english_name = "Feedback"

    def evaluate(self, signals: PageSignals) -> RuleOutcome:
        if signals.form_count and not signals.live_region_count:
            return RuleOutcome(60, ("입력 결과를 알리는 라이브 영역(aria-live)이 없습니다",))
        return RuleOutcome(100)


BASIC_PATTERN_RULES = (
    LayoutPatternRule(),
    NavigationPatternRule(),
    InformationArchitectureRule(),
    InteractionPatternRule(),
    StateManagementRule(),
    FeedbackPatternRule(),
)


# =========================================================
# Service patterns
# A pattern whose feature is not on the page passes.
# =========================================================
class LoginPatternRule(PageRule):
    label = "로그인"
    english_name = "Login"

    def evaluate(self, signals: PageSignals) -> RuleOutcome:
        tally = signals.password_fields
        missing = tally.count - tally.compliant
        if missing > 0:
            return RuleOutcome(
                ratio_score(tally),
                (f"autocomplete 속성이 없는 비밀번호 필드 {missing}개",),
            )
        return RuleOutcome(100)


class SearchPatternRule(PageRule):
    label = "검색"
    english_name = "Search"

    def evaluate(self, signals: PageSignals) -> RuleOutcome:
        tally = signals.search_fields
        missing = tally.count - tally.compliant
        if missing > 0:
            return RuleOutcome(ratio_score(tally), (f"레이블이 없는 검색 필드 {missing}개",))
        return RuleOutcome(100)


class ListDetailPatternRule(PageRule):
    label = "목록/상세"
    english_name = "List/Detail"

    def evaluate(self, signals: PageSignals) -> RuleOutcome:
        if signals.long_list_count and not signals.has_pagination:
            return RuleOutcome(70, ("긴 목록에 페이지 내비게이션이 없습니다",))
        return RuleOutcome(100)


class CreateEditPatternRule(PageRule):
    label = "등록/수정"
    english_name = "Create/Edit"

    def evaluate(self, signals: PageSignals) -> RuleOutcome:
        tally = signals.required_fields
        missing = tally.count - tally.compliant
        if missing > 0:
            return RuleOutcome(ratio_score(tally), (f"필수 표시가 없는 필수 입력 항목 {missing}개",))
        return RuleOutcome(100)


class NotificationPatternRule(PageRule):
    label = "알림"
    english_name = "Notification"

    def evaluate(self, signals: PageSignals) -> RuleOutcome:
        tally = signals.dialogs
        missing = tally.count - tally.compliant
        if missing > 0:
            return RuleOutcome(ratio_score(tally), (f"접근 가능한 이름이 없는 대화상자 {missing}개",))
        return RuleOutcome(100)


SERVICE_PATTERN_RULES = (
    LoginPatternRule(),
    SearchPatternRule(),
    ListDetailPatternRule(),
    CreateEditPatternRule(),
    NotificationPatternRule(),
)
