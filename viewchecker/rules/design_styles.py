from typing import List

from viewchecker.models.page_signals import PageSignals, RuleOutcome
from viewchecker.rules.base import PageRule, clamp_score, ratio_score
from viewchecker.scoring import thresholds


class ColorRule(PageRule):
    label = "색상"

    def evaluate(self, signals: PageSignals) -> RuleOutcome:
        count = signals.color_count
        if thresholds.COLOR_PALETTE_MIN <= count <= thresholds.COLOR_PALETTE_MAX:
            return RuleOutcome(90)
        if count < thresholds.COLOR_PALETTE_MIN:
            return RuleOutcome(60, (f"사용 색상이 {count}개로 너무 적습니다",))
        return RuleOutcome(70, (f"사용 색상이 {count}개로 너무 많습니다",))


class TypographyRule(PageRule):
    label = "타이포그래피"

    def evaluate(self, signals: PageSignals) -> RuleOutcome:
        count = signals.font_family_count
        if thresholds.FONT_FAMILY_MIN <= count <= thresholds.FONT_FAMILY_MAX:
            return RuleOutcome(90)
        return RuleOutcome(65, (f"글꼴 패밀리가 {count}개 사용되었습니다",))


class ShapeRule(PageRule):
    label = "형태"

    def evaluate(self, signals: PageSignals) -> RuleOutcome:
        count = signals.border_radius_count
        if count <= 4:
            return RuleOutcome(90)
        if count <= 8:
            return RuleOutcome(75, (f"모서리 반경 값이 {count}종류입니다",))
        return RuleOutcome(60, (f"모서리 반경 값이 {count}종류로 일관성이 부족합니다",))


class LayoutRule(PageRule):
    label = "레이아웃"

    def evaluate(self, signals: PageSignals) -> RuleOutcome:
        score = 100
        issues: List[str] = []
        if not signals.has_viewport_meta:
            score -= 30
            issues.append("viewport 메타 태그가 없습니다")
        if signals.has_horizontal_overflow:
            score -= 30
            issues.append("가로 스크롤이 발생합니다")
        return RuleOutcome(clamp_score(score), tuple(issues))


class IconRule(PageRule):
    label = "아이콘"

    def evaluate(self, signals: PageSignals) -> RuleOutcome:
        score = ratio_score(signals.icons)
        missing = signals.icons.count - signals.icons.compliant
        if missing > 0:
            return RuleOutcome(score, (f"대체 텍스트가 없는 아이콘 {missing}개",))
        return RuleOutcome(score)


class ElevationRule(PageRule):
    label = "엘리베이션"

    def evaluate(self, signals: PageSignals) -> RuleOutcome:
        count = signals.box_shadow_count
        if count <= 3:
            return RuleOutcome(90)
        if count <= 6:
            return RuleOutcome(75, (f"그림자 단계가 {count}종류입니다",))
        return RuleOutcome(60, (f"그림자 단계가 {count}종류로 너무 많습니다",))


class HighContrastModeRule(PageRule):
    label = "선명한 화면 모드"

    def evaluate(self, signals: PageSignals) -> RuleOutcome:
        if signals.supports_contrast_mode:
            return RuleOutcome(90)
        return RuleOutcome(60, ("고대비(prefers-contrast / forced-colors) 스타일이 없습니다",))


class LinkRule(PageRule):
    label = "링크"

    def evaluate(self, signals: PageSignals) -> RuleOutcome:
        score = ratio_score(signals.links)
        missing = signals.links.count - signals.links.compliant
        if missing > 0:
            return RuleOutcome(score, (f"식별 가능한 텍스트가 없는 링크 {missing}개",))
        return RuleOutcome(score)


class ButtonRule(PageRule):
    label = "버튼"

    def evaluate(self, signals: PageSignals) -> RuleOutcome:
        heights = signals.button_heights
        if not heights:
            return RuleOutcome(50, ("버튼을 찾을 수 없습니다",))

        compliant = sum(1 for h in heights if h >= thresholds.MIN_BUTTON_HEIGHT_PX)
        score = clamp_score(100 * compliant / len(heights))
        small = len(heights) - compliant
        if small:
            return RuleOutcome(
                score,
                (f"높이 {thresholds.MIN_BUTTON_HEIGHT_PX}px 미만 버튼 {small}개",),
            )
        return RuleOutcome(score)


DESIGN_STYLE_RULES = (
    ColorRule(),
    TypographyRule(),
    ShapeRule(),
    LayoutRule(),
    IconRule(),
    ElevationRule(),
    HighContrastModeRule(),
    LinkRule(),
    ButtonRule(),
)
