from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class ExceptionInfo:
    """
    Audit record of one exception-override run.
    Built once, attached to the adjusted result, never modified.

    `sections` lists the recognized sections that received exception
    requests, whether or not any item in them actually matched.
    """
    applied: bool
    checklist_id: Optional[str]
    total_exceptions: int
    original_score: int
    adjusted_score: int
    score_difference: int
    sections: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "applied": self.applied,
            "checklistId": self.checklist_id,
            "totalExceptions": self.total_exceptions,
            "originalScore": self.original_score,
            "adjustedScore": self.adjusted_score,
            "scoreDifference": self.score_difference,
            "sections": list(self.sections),
        }

