import logging
from datetime import datetime, timezone
from typing import Optional

import requests

from viewchecker.config import Settings, load_settings
from viewchecker.models.analysis_result import AnalysisResult

logger = logging.getLogger("viewchecker.integration")


def trigger_low_score_alert(result: AnalysisResult, settings: Optional[Settings] = None) -> bool:
    """
    Posts a compact alert to the configured webhook when the final score is
    below the alert threshold. Returns True only when an alert was delivered.
    Delivery failures are logged and never raised.
    """
    settings = settings or load_settings()

    if result.overall_score >= settings.alert_score_threshold:
        return False

    if not settings.alert_webhook_url:
        logger.warning(
            f"Low score alert for {result.url} ({result.overall_score}) "
            "but ALERT_WEBHOOK_URL is not set."
        )
        return False

    info = result.exception_info
    payload = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "alert_level": "LOW_SCORE",
        "url": result.url,
        "viewport": result.viewport,
        "overall_score": result.overall_score,
        "original_score": info.original_score if info else result.overall_score,
        "exceptions_applied": info is not None,
        "threshold": settings.alert_score_threshold,
    }

    try:
        response = requests.post(
            settings.alert_webhook_url,
            json=payload,
            timeout=2.0,
            headers={"Content-Type": "application/json"},
        )
        response.raise_for_status()
        logger.info(f"Low score alert sent. Status: {response.status_code}")
        return True
    except requests.exceptions.RequestException as e:
        logger.error(f"Failed to send low score alert: {e}")
        return False
