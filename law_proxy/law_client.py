"""law.go.kr open API client."""

import logging
from typing import Any

import httpx

from law_proxy.config import DEFAULT_LAW_API_URL
from law_proxy.exceptions import ConfigurationError, NetworkError, UpstreamAPIError
from law_proxy.models import SearchRequest

logger = logging.getLogger(__name__)

ACCEPT = "application/json, application/xml, text/xml, */*"


class LawSearchClient:
    """Async client for the law.go.kr ``lawSearch.do`` endpoint."""

    def __init__(
        self,
        oc: str,
        api_url: str = DEFAULT_LAW_API_URL,
        timeout: float = 15.0,
        user_agent: str = "LawSearchProxy/1.0",
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if not oc:
            raise ConfigurationError("LAW_OC is required")
        self.oc = oc
        self.api_url = api_url
        self.timeout = timeout
        self.user_agent = user_agent
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        """Get request headers."""
        return {
            "User-Agent": self.user_agent,
            "Accept": ACCEPT,
            "Accept-Charset": "utf-8",
        }

    def build_params(self, request: SearchRequest) -> dict[str, Any]:
        """
        Map a search request onto upstream query parameters.

        Optional filters only appear when they carry a value; an absent
        filter never shows up as an empty key.
        """
        params: dict[str, Any] = {
            "query": request.query,
            "target": request.target,
            "display": request.display,
            "type": "JSON",
            "page": request.page,
            "search": request.search,
            "OC": self.oc,
        }
        optional = {
            "sort": request.sort,
            "order": request.order,
            "ancYd": request.date_range_start,
            "ancYdEnd": request.date_range_end,
            "department": request.department,
        }
        for key, value in optional.items():
            if value:
                params[key] = value
        return params

    async def search(self, request: SearchRequest) -> str:
        """
        Run a search and return the raw response body.

        Args:
            request: Validated search parameters

        Returns:
            Response body as text (XML or JSON, undetermined)

        Raises:
            UpstreamAPIError: On non-2xx responses
            NetworkError: On transport errors
        """
        params = self.build_params(request)
        logger.info(
            f"Law API request: {self.api_url} target={request.target} "
            f"page={request.page} display={request.display}"
        )

        async with httpx.AsyncClient(
            timeout=self.timeout,
            headers=self._headers(),
            follow_redirects=True,
            transport=self._transport,
        ) as client:
            try:
                response = await client.get(self.api_url, params=params)
                logger.debug(f"Law API response: {response.status_code}")
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                error_text = e.response.text[:1000] if e.response.text else ""
                logger.error(
                    f"Law API error {e.response.status_code}: URL={self.api_url}, "
                    f"Response={error_text}",
                    extra={"upstream_status": e.response.status_code},
                )
                raise UpstreamAPIError(
                    status_code=e.response.status_code, response_text=error_text
                ) from e
            except httpx.RequestError as e:
                logger.error(f"Network error connecting to law API: {e}")
                raise NetworkError(f"Network error connecting to law API: {e}") from e

        body = response.text
        logger.info(
            f"Law API response received, length {len(body)}",
            extra={"upstream_status": response.status_code, "body_length": len(body)},
        )
        logger.debug(f"Law API response head: {body[:1000]}")
        return body
