"""
Service configuration, read from the environment (and a local .env file).
"""
import os
from dataclasses import dataclass
from typing import Optional, Tuple

from dotenv import load_dotenv

load_dotenv()

DEFAULT_CORS_ORIGINS = (
    "https://viewchecker-new.vercel.app",
    "http://localhost:5173",
    "http://localhost:3000",
)
DEFAULT_AXE_SCRIPT_URL = "https://cdnjs.cloudflare.com/ajax/libs/axe-core/4.8.2/axe.min.js"
DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; ViewCheckerBot/1.0)"


@dataclass(frozen=True)
class Settings:
    port: int = 3002
    cors_origins: Tuple[str, ...] = DEFAULT_CORS_ORIGINS
    page_load_timeout_ms: int = 60000
    user_agent: str = DEFAULT_USER_AGENT
    axe_script_path: Optional[str] = None
    axe_script_url: str = DEFAULT_AXE_SCRIPT_URL
    max_browser_sessions: int = 2
    audit_log_file: str = "audit.log"
    alert_webhook_url: Optional[str] = None
    alert_score_threshold: int = 60
    telemetry_connection_string: Optional[str] = None
    environment: str = "development"


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def _origins_env(name: str) -> Tuple[str, ...]:
    raw = os.getenv(name)
    if not raw:
        return DEFAULT_CORS_ORIGINS
    return tuple(o.strip() for o in raw.split(",") if o.strip())


def load_settings() -> Settings:
    """Reads the environment on every call."""
    return Settings(
        port=_int_env("PORT", 3002),
        cors_origins=_origins_env("CORS_ORIGINS"),
        page_load_timeout_ms=_int_env("PAGE_LOAD_TIMEOUT_MS", 60000),
        user_agent=os.getenv("VIEWCHECKER_USER_AGENT", DEFAULT_USER_AGENT),
        axe_script_path=os.getenv("AXE_SCRIPT_PATH") or None,
        axe_script_url=os.getenv("AXE_SCRIPT_URL", DEFAULT_AXE_SCRIPT_URL),
        max_browser_sessions=max(1, _int_env("MAX_BROWSER_SESSIONS", 2)),
        audit_log_file=os.getenv("AUDIT_LOG_FILE", "audit.log"),
        alert_webhook_url=os.getenv("ALERT_WEBHOOK_URL") or None,
        alert_score_threshold=_int_env("ALERT_SCORE_THRESHOLD", 60),
        telemetry_connection_string=os.getenv("AZURE_APPINSIGHTS_CONNECTION_STRING") or None,
        environment=os.getenv("ENVIRONMENT", "development"),
    )
