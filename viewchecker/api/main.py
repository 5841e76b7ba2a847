import logging
import time
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from viewchecker.adapters.browser import resolve_viewport
from viewchecker.api.serializers import exception_requests, response_payload
from viewchecker.config import load_settings
from viewchecker.controls.exception_handler import apply_exceptions
from viewchecker.integration.alerts import trigger_low_score_alert
from viewchecker.models.analysis_result import AnalysisResult
from viewchecker.orchestrator.analyzer import analyze_website, utc_timestamp
from viewchecker.telemetry import emit_analysis_telemetry, emit_exception_telemetry, init_telemetry

API_VERSION = "1.0.0"

settings = load_settings()

# --- 1. AUDIT LOGGING ---
logging.basicConfig(
    filename=settings.audit_log_file,
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
audit_logger = logging.getLogger("audit")

tags_metadata = [
    {
        "name": "Analysis",
        "description": "Runs a KRDS / KWCAG audit of a web page and applies operator exceptions.",
    },
    {
        "name": "System",
        "description": "Health checks and operational metadata.",
    },
]

app = FastAPI(
    title="ViewChecker Analysis Engine",
    description="""
    **KRDS compliance scoring** for public-sector web pages.

    * **Design styles, components, patterns:** deterministic rule evaluators over page signals.
    * **Accessibility:** axe-core audit summarised as a KWCAG report.
    * **Exceptions:** operator overrides with a recomputed score and an audit record.
    """,
    version=API_VERSION,
    openapi_tags=tags_metadata,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

init_telemetry(settings.telemetry_connection_string)


# --- 2. MIDDLEWARE: AUDIT TRAIL ---
@app.middleware("http")
async def audit_middleware(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time

    client = request.client.host if request.client else "unknown"
    audit_logger.info(
        f"METHOD={request.method} PATH={request.url.path} "
        f"STATUS={response.status_code} CLIENT={client} "
        f"DURATION={process_time:.4f}s"
    )
    return response


# --- DATA MODELS ---
class ExceptionModel(BaseModel):
    item_key: Optional[str] = None
    item_name: Optional[str] = None
    section: Optional[str] = None
    category: Optional[str] = None
    reason: Optional[str] = None


class AnalyzeRequest(BaseModel):
    url: Optional[str] = None
    viewport: str = "desktop"
    exceptions: List[ExceptionModel] = []
    checklist_id: Optional[str] = None


class ApplyExceptionsRequest(BaseModel):
    result: Dict[str, Any]
    exceptions: List[ExceptionModel] = []
    checklist_id: Optional[str] = None


def error_response(status_code: int, error: str, **extra: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": error, **extra})


# --- ENDPOINTS ---
@app.get("/health", tags=["System"])
def health():
    return {"status": "healthy", "timestamp": utc_timestamp(), "version": API_VERSION}


@app.post("/api/analyze", tags=["Analysis"])
def analyze(request: AnalyzeRequest):
    """
    Analyse a URL and apply any exceptions submitted with the request.
    """
    url = (request.url or "").strip()
    if not url:
        return error_response(400, "URL is required")

    viewport = resolve_viewport(request.viewport)
    start_time = time.perf_counter()

    try:
        result = analyze_website(url, viewport, settings)
    except Exception as e:
        audit_logger.error(f"ANALYSIS_ERROR: url={url} {type(e).__name__}: {e}")
        emit_exception_telemetry(e)
        return error_response(500, str(e) or type(e).__name__)

    adjusted = apply_exceptions(result, exception_requests(request.exceptions), request.checklist_id)

    emit_analysis_telemetry(
        analysis_latency_ms=int((time.perf_counter() - start_time) * 1000),
        overall_score=int(adjusted.overall_score),
        viewport=viewport,
        exceptions_applied=adjusted.exception_info is not None,
    )
    trigger_low_score_alert(adjusted, settings)

    return {"success": True, "data": response_payload(adjusted, url)}


@app.post("/api/exceptions/apply", tags=["Analysis"])
def apply_exceptions_endpoint(request: ApplyExceptionsRequest):
    """
    Re-apply exceptions to a previously returned analysis result, without a browser.
    """
    original = AnalysisResult.from_dict(request.result)
    adjusted = apply_exceptions(original, exception_requests(request.exceptions), request.checklist_id)
    return {"success": True, "data": adjusted.to_dict()}


# --- ERROR HANDLERS ---
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return error_response(404, "Endpoint not found")
    return error_response(exc.status_code, str(exc.detail))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    audit_logger.error(f"UNHANDLED_ERROR: {type(exc).__name__}: {exc}")
    message = str(exc) if settings.environment == "development" else None
    return error_response(500, "Internal server error", message=message)
