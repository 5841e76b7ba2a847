from abc import ABC, abstractmethod
from typing import Optional
from urllib.parse import quote

from viewchecker.models.page_signals import ElementTally, PageSignals, RuleOutcome
from viewchecker.scoring.aggregator import round_half_up

KRDS_BASE_URL = "https://krds.go.kr"

# Characters JavaScript's encodeURIComponent leaves unescaped.
_URI_COMPONENT_SAFE = "-_.!~*'()"


class PageRule(ABC):
    """
    Base class for all KRDS rule evaluators.
    An evaluator is a pure function of PageSignals.
    """

    label: str = ""
    english_name: Optional[str] = None

    @abstractmethod
    def evaluate(self, signals: PageSignals) -> RuleOutcome:
        """Return a 0..100 score and the issues found."""
        pass


def ratio_score(tally: ElementTally, empty: int = 100) -> int:
    """Share of compliant elements as 0..100; `empty` when nothing was found."""
    if tally.count <= 0:
        return empty
    compliant = min(max(tally.compliant, 0), tally.count)
    return round_half_up(100 * compliant / tally.count)


def clamp_score(value: float) -> int:
    return max(0, min(100, round_half_up(value)))


def krds_url(kind: str, label: str) -> str:
    return f"{KRDS_BASE_URL}/{kind}/{quote(label, safe=_URI_COMPONENT_SAFE)}"
