"""FastAPI dependencies."""

from fastapi import Depends, Request

from law_proxy.config import Settings, get_settings
from law_proxy.exceptions import ConfigurationError
from law_proxy.law_client import LawSearchClient
from law_proxy.services import SearchProxyHandler


def get_app_settings(request: Request) -> Settings:
    """Settings the running app was built with, falling back to the environment."""
    return getattr(request.app.state, "settings", None) or get_settings()


def get_law_client(settings: Settings = Depends(get_app_settings)) -> LawSearchClient:
    """Get law API client instance via dependency injection."""
    if not settings.law_oc:
        raise ConfigurationError("LAW_OC is not configured. Please set it in .env")
    return LawSearchClient(
        oc=settings.law_oc,
        api_url=settings.law_api_url,
        timeout=settings.law_timeout,
        user_agent=settings.law_user_agent,
    )


def get_search_handler(
    client: LawSearchClient = Depends(get_law_client),
    settings: Settings = Depends(get_app_settings),
) -> SearchProxyHandler:
    return SearchProxyHandler(client, allow_origin=settings.cors_allow_origin)
