from __future__ import annotations

import logging
import time
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Depends, FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse

from curl_tester import schemas
from curl_tester.config import get_settings
from curl_tester.errors import RelayError
from curl_tester.relay import ChatRelay
from curl_tester.validator import CurlValidator
from curl_tester.web_ui import WEB_UI_HTML

logger = logging.getLogger("curl_tester.api")

_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": schemas.ErrorBody},
    500: {"model": schemas.ErrorBody},
}


def _validate_runtime_configuration(settings) -> None:
    safety_errors = settings.production_safety_errors()
    if not safety_errors:
        return

    for error in safety_errors:
        logger.error("unsafe_production_config error=%s", error)
    raise RuntimeError("Unsafe production configuration; see logs for details")


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    _validate_runtime_configuration(settings)

    if settings.resolved_api_key() is None:
        logger.warning("upstream_credential_missing ai_endpoints_will_fail=true")
    logger.info("curl tester startup complete")
    yield


app = FastAPI(
    title="curl Tester",
    version="0.1.0",
    description=(
        "Browser-based curl command tester with an AI assistant that validates "
        "commands and answers API questions through a hosted completions endpoint."
    ),
    lifespan=lifespan,
)

_cors_origins = get_settings().parsed_cors_allow_origins()
if _cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )


def get_chat_relay() -> ChatRelay:
    settings = get_settings()
    return ChatRelay(
        api_key=settings.resolved_api_key(),
        model=settings.chat_model,
        base_url=settings.upstream_base_url,
        timeout=settings.upstream_timeout_sec,
    )


def get_curl_validator() -> CurlValidator:
    settings = get_settings()
    return CurlValidator(
        api_key=settings.resolved_api_key(),
        model=settings.validator_model,
        base_url=settings.upstream_base_url,
        timeout=settings.upstream_timeout_sec,
    )


@app.exception_handler(RelayError)
async def relay_error_handler(request: Request, exc: RelayError) -> JSONResponse:
    logger.warning(
        "relay_error path=%s status=%s error=%s",
        request.url.path,
        exc.status_code,
        exc,
    )
    return JSONResponse(status_code=exc.status_code, content=exc.payload)


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID", "").strip() or uuid.uuid4().hex
    start = time.perf_counter()

    try:
        response = await call_next(request)
    except Exception:
        duration_ms = (time.perf_counter() - start) * 1000.0
        logger.exception(
            "request_failed method=%s path=%s request_id=%s duration_ms=%.2f",
            request.method,
            request.url.path,
            request_id,
            duration_ms,
        )
        raise

    duration_ms = (time.perf_counter() - start) * 1000.0
    response.headers["X-Request-ID"] = request_id
    logger.info(
        "request_completed method=%s path=%s status=%s request_id=%s duration_ms=%.2f",
        request.method,
        request.url.path,
        response.status_code,
        request_id,
        duration_ms,
    )
    return response


def _field(payload: Any, name: str) -> Any:
    if not isinstance(payload, dict):
        return None
    return payload.get(name)


@app.get("/", response_class=HTMLResponse, include_in_schema=False)
def web_ui() -> str:
    return WEB_UI_HTML


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/health/live")
def health_live() -> dict[str, str]:
    return {"status": "live"}


@app.post("/api/chat", response_model=schemas.ChatReply, responses=_ERROR_RESPONSES)
async def chat(request: Request, relay: ChatRelay = Depends(get_chat_relay)):
    try:
        payload = await request.json()
        content = await run_in_threadpool(relay.reply, _field(payload, "messages"))
        response = JSONResponse(content=schemas.ChatReply(content=content).model_dump())
    except RelayError:
        raise
    except Exception:
        logger.exception("chat_request_failed")
        return JSONResponse(status_code=500, content={"error": "Failed to process chat request"})
    logger.info("chat_response_ready length=%s", len(content))
    return response


@app.post(
    "/api/validate-curl",
    responses={200: {"model": schemas.ValidationVerdict}, **_ERROR_RESPONSES},
)
async def validate_curl(request: Request, validator: CurlValidator = Depends(get_curl_validator)) -> JSONResponse:
    try:
        payload = await request.json()
        verdict = await run_in_threadpool(validator.validate, _field(payload, "curlCommand"))
        response = JSONResponse(content=verdict)
    except RelayError:
        raise
    except Exception as exc:
        logger.exception("validate_curl_request_failed")
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "details": str(exc) or "Unknown error"},
        )
    return response
