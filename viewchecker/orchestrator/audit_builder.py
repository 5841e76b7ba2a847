from typing import List, Optional, Sequence

from viewchecker.models.exception_info import ExceptionInfo


def build_exception_info(
    *,
    checklist_id: Optional[str],
    total_exceptions: int,
    original_score: int,
    adjusted_score: int,
    sections: Sequence[str],
) -> ExceptionInfo:
    """
    Builds the single immutable audit record of an override run.
    Section names keep their first-seen order and are listed once.
    """
    if total_exceptions < 0:
        raise ValueError("total_exceptions cannot be negative")

    ordered: List[str] = []
    for name in sections:
        if name and name not in ordered:
            ordered.append(name)

    return ExceptionInfo(
        applied=True,
        checklist_id=checklist_id,
        total_exceptions=total_exceptions,
        original_score=original_score,
        adjusted_score=adjusted_score,
        score_difference=adjusted_score - original_score,
        sections=tuple(ordered),
    )
