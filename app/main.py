import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import get_settings
from app.errors import ChatPipelineError, RequestDecodeError

logger = logging.getLogger(__name__)


def _error_response(exc: ChatPipelineError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.kind, "detail": exc.detail},
    )


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    app = FastAPI(title=settings.APP_TITLE, debug=settings.DEBUG)

    from app.api import api_router

    app.include_router(api_router)

    @app.exception_handler(ChatPipelineError)
    async def chat_pipeline_error_handler(request: Request, exc: ChatPipelineError):
        logger.warning("%s on %s: %s", exc.kind, request.url.path, exc.detail)
        return _error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def request_decode_error_handler(request: Request, exc: RequestValidationError):
        errors = "; ".join(
            f"{'.'.join(str(p) for p in e.get('loc', ()))}: {e.get('msg', '')}" for e in exc.errors()
        )
        return _error_response(RequestDecodeError(errors or "Malformed request body"))

    # Browser clients on another origin must be allowed to read X-Sources
    origins = [o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()]
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_methods=["GET", "POST"],
            allow_headers=["*"],
            expose_headers=["X-Sources"],
        )

    return app


app = create_app()
