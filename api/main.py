# api/main.py
# FastAPI surface for the multi-LLM proxy.
# - /api/chat, /api/translate, /api/detect-language forward to one provider
# - /api/models, /api/languages, /api/health are static reads
# - every error comes back as {"error": "<message>"} with a 4xx/5xx status
# JSON keys (tokensUsed, executionTime, ...) match what the web UI already reads.

import time
from typing import Any, Dict, List, Literal, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

from multillm.config import Settings
from multillm.errors import ProxyError
from multillm.logging_setup import configure_logging, get_logger
from multillm.observability import REQUEST_COUNT, REQUEST_LATENCY, metrics_app
from multillm.service import MultiLLMService

APP_NAME = "Multi-LLM Proxy API"


class ChatTurnIn(BaseModel):
    role: Literal["user", "assistant", "system"]
    content: str


class ChatRequest(BaseModel):
    provider: Optional[str] = None
    model: Optional[str] = None
    message: Optional[str] = None
    history: List[ChatTurnIn] = Field(default_factory=list)


class TranslateRequest(BaseModel):
    provider: Optional[str] = None
    model: Optional[str] = None
    text: Optional[str] = None
    sourceLang: Optional[str] = "auto"
    targetLang: Optional[str] = None


class DetectRequest(BaseModel):
    provider: Optional[str] = None
    model: Optional[str] = None
    text: Optional[str] = None


def _service(request: Request) -> MultiLLMService:
    return request.app.state.service


def create_app(service: Optional[MultiLLMService] = None, settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()
    configure_logging(settings.LOG_LEVEL, settings.SERVICE_NAME)

    app = FastAPI(title=APP_NAME)
    app.state.service = service or MultiLLMService.from_settings(settings)
    app.mount("/metrics", metrics_app)

    @app.middleware("http")
    async def record_metrics(request: Request, call_next):
        t0 = time.time()
        response = await call_next(request)
        # label by route template; raw paths would add a series per URL
        route = request.scope.get("route")
        endpoint = request.scope.get("root_path", "") + route.path if route is not None else "unmatched"
        REQUEST_COUNT.labels(endpoint=endpoint, method=request.method).inc()
        REQUEST_LATENCY.labels(endpoint=endpoint, method=request.method).observe(time.time() - t0)
        return response

    # ---- error mapping ----

    @app.exception_handler(ProxyError)
    async def proxy_error(request: Request, exc: ProxyError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def bad_body(request: Request, exc: RequestValidationError):
        get_logger().warning("request_rejected", path=request.url.path, error=str(exc.errors()))
        return JSONResponse(status_code=400, content={"error": "Invalid request parameters"})

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return JSONResponse(status_code=404, content={"error": "Route not found"})
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.exception_handler(Exception)
    async def unhandled(request: Request, exc: Exception):
        get_logger().exception("unhandled_error", path=request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    # ---- static reads ----

    @app.get("/api/health")
    def health(request: Request) -> Dict[str, bool]:
        return _service(request).health_check()

    @app.get("/api/models")
    def models(request: Request) -> Dict[str, Dict[str, str]]:
        return _service(request).list_models()

    @app.get("/api/languages")
    def languages(request: Request) -> Dict[str, str]:
        return _service(request).list_languages()

    # ---- provider calls ----

    @app.post("/api/chat")
    async def chat(req: ChatRequest, request: Request) -> Dict[str, Any]:
        res = await _service(request).chat(
            req.provider,
            req.model,
            req.message,
            [t.model_dump() for t in req.history],
        )
        return {
            "response": res.text,
            "provider": res.provider,
            "model": res.model,
            "tokensUsed": res.tokens_used,
            "cost": res.cost_estimate,
            "executionTime": res.elapsed_ms,
            "timestamp": res.timestamp,
        }

    @app.post("/api/translate")
    async def translate(req: TranslateRequest, request: Request) -> Dict[str, Any]:
        res = await _service(request).translate(
            req.provider, req.model, req.text, req.sourceLang, req.targetLang
        )
        return {
            "translatedText": res.translated_text,
            "sourceLang": res.source_lang,
            "targetLang": res.target_lang,
            "provider": res.provider,
            "model": res.model,
            "tokensUsed": res.tokens_used,
            "cost": res.cost_estimate,
            "executionTime": res.elapsed_ms,
            "timestamp": res.timestamp,
        }

    @app.post("/api/detect-language")
    async def detect_language(req: DetectRequest, request: Request) -> Dict[str, Any]:
        res = await _service(request).detect_language(req.provider, req.model, req.text)
        return {
            "detectedLanguage": res.detected_language,
            "languageCode": res.language_code,
            "provider": res.provider,
            "model": res.model,
            "timestamp": res.timestamp,
        }

    return app
