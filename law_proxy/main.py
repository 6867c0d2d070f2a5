"""FastAPI application serving the law search proxy."""

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.responses import Response

from law_proxy.config import Settings, get_settings
from law_proxy.dependencies import get_search_handler
from law_proxy.exceptions import INTERNAL_ERROR, ConfigurationError, LawProxyError
from law_proxy.middleware.request_logging import RequestLoggingMiddleware
from law_proxy.models import ErrorEnvelope, utc_timestamp
from law_proxy.responses import EnvelopeResponse, preflight_response
from law_proxy.services import INTERNAL_ERROR_MESSAGE, SearchProxyHandler
from law_proxy.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)

SEARCH_PATH = "/law-search"


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application. Configuration is checked when it starts serving."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(
            level=settings.log_level,
            json_format=settings.log_json,
            log_file=settings.log_file,
        )
        if not settings.law_oc:
            raise ConfigurationError("LAW_OC is not configured; refusing to start")
        logger.info(
            f"{settings.app_title} {settings.app_version} ready, upstream {settings.law_api_url}"
        )
        yield

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        description="Proxy for the law.go.kr search API with a uniform JSON envelope",
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.add_middleware(RequestLoggingMiddleware)

    @app.exception_handler(LawProxyError)
    async def law_proxy_error_handler(request: Request, exc: LawProxyError) -> EnvelopeResponse:
        logger.error(
            f"Request failed before reaching the search pipeline: {exc}",
            extra={"code": INTERNAL_ERROR},
        )
        envelope = ErrorEnvelope(
            error=INTERNAL_ERROR_MESSAGE,
            code=INTERNAL_ERROR,
            message=str(exc),
            timestamp=utc_timestamp(),
        )
        return EnvelopeResponse(
            envelope.to_content(), status_code=500, allow_origin=settings.cors_allow_origin
        )

    @app.options(SEARCH_PATH)
    async def law_search_preflight() -> Response:
        """CORS preflight."""
        return preflight_response(settings.cors_allow_origin)

    @app.api_route(SEARCH_PATH, methods=["GET", "POST"])
    async def law_search(
        request: Request,
        handler: SearchProxyHandler = Depends(get_search_handler),
    ) -> EnvelopeResponse:
        """Search laws and precedents; parameters come from the query string."""
        return await handler.handle(request.query_params)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "ok",
            "service": "law-search",
            "version": settings.app_version,
            "api_configured": bool(settings.law_oc),
        }

    return app


app = create_app()
