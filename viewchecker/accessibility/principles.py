import re
from typing import Optional

from viewchecker.models.accessibility import Principle

# Keyword heuristic mapping axe rule ids onto the four WCAG principles.
# This is NOT a certified WCAG taxonomy. A rule id can plausibly belong to
# several principles; the first match in this order wins.
PRINCIPLE_PATTERNS = (
    (Principle.PERCEIVABLE, re.compile(r"color|contrast|image|text|alt|audio|video|caption")),
    (Principle.OPERABLE, re.compile(r"keyboard|focus|navigation|timing|seizure|pointer")),
    (Principle.UNDERSTANDABLE, re.compile(r"label|lang|heading|error|input|readable")),
    (Principle.ROBUST, re.compile(r"valid|parse|name|role|value|aria")),
)

DEFAULT_PRINCIPLE = Principle.PERCEIVABLE


def categorize_rule(rule_id: Optional[str]) -> Principle:
    """Unknown or missing ids land in the default bucket."""
    if not rule_id:
        return DEFAULT_PRINCIPLE

    for principle, pattern in PRINCIPLE_PATTERNS:
        if pattern.search(rule_id):
            return principle
    return DEFAULT_PRINCIPLE
