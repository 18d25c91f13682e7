import logging
from typing import Any, Optional
import httpx
from fastapi import Body, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from .models import ErrorDTO, HealthDTO, SummarizeRequest
from ..config import TextbriefConfig
from ..inference import ApiKeyError, InferenceTimeout, ModelLoadingError
from ..service import SummarizationService, SummaryResult
from ..utils import now_iso

log = logging.getLogger(__name__)


def error_response(status: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status, content=ErrorDTO(error=error, message=message).model_dump())


def validate_text(text, cfg: TextbriefConfig) -> Optional[JSONResponse]:
    if not text:
        log.info("rejected: no text provided")
        return error_response(400, "Text is required", "Please provide text to summarize")
    if not isinstance(text, str):
        log.info("rejected: text is %s", type(text).__name__)
        return error_response(400, "Invalid input", "Text must be a string")
    if len(text) < cfg.min_text_length:
        log.info("rejected: text too short (%d characters)", len(text))
        return error_response(
            400, "Text too short", f"Text must be at least {cfg.min_text_length} characters long"
        )
    if len(text) > cfg.max_text_length:
        log.info("rejected: text too long (%d characters)", len(text))
        return error_response(
            400, "Text too long", f"Text must be less than {cfg.max_text_length:,} characters"
        )
    return None


def map_error(ex: Exception) -> JSONResponse:
    if isinstance(ex, ApiKeyError):
        return error_response(401, "API Configuration Error", "Hugging Face API key is not configured properly")
    if isinstance(ex, ModelLoadingError):
        return error_response(
            503, "Model Loading", "The AI model is currently loading. Please try again in a few moments."
        )
    if isinstance(ex, InferenceTimeout):
        return error_response(
            408, "Request Timeout", "The request took too long to process. Please try with shorter text."
        )
    return error_response(
        500, "Internal Server Error", "An error occurred while processing your request. Please try again."
    )


def create_app(cfg: Optional[TextbriefConfig] = None, transport: Optional[httpx.AsyncBaseTransport] = None) -> FastAPI:
    cfg = cfg or TextbriefConfig()
    service = SummarizationService(cfg, transport=transport)

    app = FastAPI(title="Text Summarizer API", version="0.1")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.cfg = cfg
    app.state.service = service

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        log.info("%s %s", request.method, request.url.path)
        return await call_next(request)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            log.info("404: %s %s", request.method, request.url.path)
            return error_response(404, "Not Found", "The requested endpoint does not exist")
        return error_response(exc.status_code, "HTTP Error", str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def bad_body(request: Request, exc: RequestValidationError):
        log.info("rejected: request body is not valid JSON")
        return error_response(400, "Invalid JSON", "Request body must be valid JSON")

    @app.get("/api/health", response_model=HealthDTO)
    def health():
        return HealthDTO(timestamp=now_iso(), mode=cfg.mode)

    @app.post("/api/summarize", response_model=SummaryResult)
    async def summarize(payload: Any = Body(None)):
        log.info("received summarization request")
        # a missing or non-object body is treated like a body without text
        req = SummarizeRequest.model_validate(payload) if isinstance(payload, dict) else SummarizeRequest()
        rejected = validate_text(req.text, cfg)
        if rejected is not None:
            return rejected
        log.info("processing text: %d characters", len(req.text))
        try:
            result = await service.summarize(req.text)
        except Exception as ex:
            log.error("summarization error: %s", str(ex)[:200])
            return map_error(ex)
        log.info("summarization successful (%s mode)", result.mode)
        return result

    return app

