from typing import Any, Dict, Iterable, List

from viewchecker.models.analysis_result import AnalysisResult
from viewchecker.models.exception_request import ExceptionRequest
from viewchecker.models.section import Section
from viewchecker.orchestrator.analyzer import utc_timestamp

CATEGORY_BLOCKS = ("axeResults", "kwcagReport", "krdsCompliance")


def exception_requests(models: Iterable[Any]) -> List[ExceptionRequest]:
    """Request-body exception models -> engine ExceptionRequests."""
    return [ExceptionRequest.from_dict(m.model_dump()) for m in models]


def _json_safe_item(item: Dict[str, Any]) -> Dict[str, Any]:
    if item.get("score") is None:
        item["score"] = 0
    return item


def response_payload(result: AnalysisResult, request_url: str) -> Dict[str, Any]:
    """
    Shapes the analyze response. Missing numbers become 0, a missing url the
    requested one and a missing timestamp the current time.
    """
    data = result.to_dict()

    categories: Dict[str, Any] = {
        section.result_field: [_json_safe_item(item) for item in data[section.result_field]]
        for section in Section
    }
    for block in CATEGORY_BLOCKS:
        categories[block] = data[block]

    return {
        "overallScore": data.get("overallScore") or 0,
        "categories": categories,
        "exceptionInfo": data.get("exceptionInfo"),
        "timestamp": data.get("timestamp") or utc_timestamp(),
        "url": data.get("url") or request_url,
    }
