"""FastAPI façade over the Gemini generate-content API.

Endpoints:
- GET /
- POST /generate-text          { "prompt": "..." }
- POST /generate-from-image    multipart: image, prompt?
- POST /generate-from-document multipart: document, prompt?
- POST /generate-from-audio    multipart: audio, prompt?

Every response is JSON: `{"result": ...}` on success, `{"message": ...}` on error.
"""
from __future__ import annotations
import json
import logging

from fastapi import FastAPI, File, Form, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from genai_proxy import __version__
from genai_proxy.common.config import Settings
from genai_proxy.common.errors import OriginNotAllowedError, ProxyError, UpstreamError, ValidationError
from genai_proxy.common.prompts import DefaultPrompts, load_prompts
from genai_proxy.common.schema import (
    AudioInput,
    DocumentInput,
    ErrorOut,
    GenerateOut,
    GenerationRequest,
    HealthOut,
    ImageInput,
)
from genai_proxy.serve.invoker import GenerationInvoker
from genai_proxy.serve.normalizer import parse_text_prompt, read_upload, to_content_parts

LOGGER = logging.getLogger("genai_proxy.app")

UPLOAD_FIELDS = ("image", "document", "audio")

ERROR_RESPONSES = {
    400: {"model": ErrorOut},
    403: {"model": ErrorOut},
    413: {"model": ErrorOut},
    500: {"model": ErrorOut},
}

def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorOut(message=message).model_dump())

async def _read_body(request: Request) -> object:
    """Decode a JSON or form body; other content types count as empty."""
    ctype = request.headers.get("content-type", "")
    if "application/x-www-form-urlencoded" in ctype or "multipart/form-data" in ctype:
        form = await request.form()
        return dict(form)
    if "json" not in ctype:
        return {}
    raw = await request.body()
    if not raw:
        return {}
    try:
        return json.loads(raw)
    except ValueError as e:
        raise ValidationError(f"Invalid JSON body: {e}") from e

def create_app(
    settings: Settings | None = None,
    invoker: GenerationInvoker | None = None,
    prompts: DefaultPrompts | None = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Process-wide settings; read from the environment when omitted.
        invoker: Upstream caller; built from `settings` when omitted.
        prompts: Default instructional texts; loaded from `settings.prompts_path` when omitted.
    """
    settings = settings or Settings.from_env()
    invoker = invoker or GenerationInvoker(settings.gemini_api_key, settings.gemini_model)
    prompts = prompts or load_prompts(settings.prompts_path)

    if not settings.gemini_api_key:
        LOGGER.warning("GEMINI_API_KEY not set; generation endpoints will fail.")

    app = FastAPI(title="GenAI Proxy", version=__version__)
    app.state.settings = settings
    app.state.invoker = invoker
    app.state.prompts = prompts

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.allowed_origins) or ["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def _enforce_origin(request: Request, call_next):
        origin = request.headers.get("origin")
        if settings.cors_strict and not settings.origin_allowed(origin):
            err = OriginNotAllowedError()
            LOGGER.warning("Rejected %s %s from origin %s", request.method, request.url.path, origin)
            return _error(err.status_code, err.message)
        return await call_next(request)

    @app.exception_handler(ProxyError)
    async def _proxy_error(request: Request, exc: ProxyError) -> JSONResponse:
        if exc.status_code >= 500:
            LOGGER.error("%s %s failed: %s", request.method, request.url.path, exc.message, exc_info=exc)
        else:
            LOGGER.warning("%s %s rejected (%d): %s", request.method, request.url.path, exc.status_code, exc.message)
        return _error(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def _request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        # A text value in a file field counts as a missing file.
        for e in exc.errors():
            loc = e.get("loc") or ()
            if loc and loc[-1] in UPLOAD_FIELDS:
                return await _proxy_error(request, ValidationError(f"{str(loc[-1]).capitalize()} is required"))
        details = "; ".join(
            f"{e['loc'][-1]}: {e['msg']}" if e.get("loc") else e["msg"] for e in exc.errors()
        )
        LOGGER.warning("%s %s invalid request: %s", request.method, request.url.path, details)
        return _error(400, details or "Invalid request")

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception) -> JSONResponse:
        LOGGER.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error(500, str(exc) or "Internal Server Error")

    async def _generate(request: GenerationRequest) -> GenerateOut:
        parts = to_content_parts(request, app.state.prompts)
        try:
            text = await app.state.invoker.generate(parts)
        except Exception as e:
            raise UpstreamError(str(e) or "Internal Server Error") from e
        return GenerateOut(result=text)

    @app.get("/", response_model=HealthOut)
    def health() -> HealthOut:
        return HealthOut(status="ok")

    @app.post("/generate-text", response_model=GenerateOut, responses=ERROR_RESPONSES)
    async def generate_text(request: Request) -> GenerateOut:
        body = await _read_body(request)
        return await _generate(parse_text_prompt(body))

    @app.post("/generate-from-image", response_model=GenerateOut, responses=ERROR_RESPONSES)
    async def generate_from_image(
        image: UploadFile | None = File(None),
        prompt: str | None = Form(None),
    ) -> GenerateOut:
        data, mime = await read_upload(image, "image", settings.max_upload_bytes)
        return await _generate(ImageInput(data=data, mime_type=mime, prompt=prompt))

    @app.post("/generate-from-document", response_model=GenerateOut, responses=ERROR_RESPONSES)
    async def generate_from_document(
        document: UploadFile | None = File(None),
        prompt: str | None = Form(None),
    ) -> GenerateOut:
        data, mime = await read_upload(document, "document", settings.max_upload_bytes)
        return await _generate(DocumentInput(data=data, mime_type=mime, prompt=prompt))

    @app.post("/generate-from-audio", response_model=GenerateOut, responses=ERROR_RESPONSES)
    async def generate_from_audio(
        audio: UploadFile | None = File(None),
        prompt: str | None = Form(None),
    ) -> GenerateOut:
        data, mime = await read_upload(audio, "audio", settings.max_upload_bytes)
        return await _generate(AudioInput(data=data, mime_type=mime, prompt=prompt))

    return app
