"""FastAPI application serving synthetic statistics."""

import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from ai_cert_dashboard import __version__

from .responses import error_response, success_response
from .routes import api_router

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Build the mock backend application.

    Every response, including errors, uses the ``{code, message, data,
    timestamp}`` envelope.
    """
    app = FastAPI(title="ai-cert-dashboard mock backend", version=__version__)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.detail)
        return JSONResponse(status_code=exc.status_code, content=error_response(str(exc.detail), exc.status_code))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("%s %s failed", request.method, request.url.path)
        return JSONResponse(status_code=500, content=error_response("系统异常，请稍后重试", 500))

    @app.get("/health", tags=["Health"])
    def health():
        return success_response({"status": "ok"}, "mock server works")

    app.include_router(api_router)
    return app
