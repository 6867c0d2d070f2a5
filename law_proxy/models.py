"""Pydantic models for the search request and response envelopes."""

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import BaseModel, Field

from law_proxy.utils.params import clamp, first_value, optional_str, parse_int

# Documented upstream targets; other values are forwarded unchanged.
TARGETS = ("law", "prec", "lawview", "precview")

DEFAULT_TARGET = "law"
DEFAULT_PAGE = 1
DEFAULT_DISPLAY = 20
MAX_DISPLAY = 100
DEFAULT_SEARCH = 0  # 0: all, 1: title, 2: body
SEARCH_MODES = (0, 1, 2)


def utc_timestamp() -> str:
    """Current time as ISO-8601 with millisecond precision, e.g. ``2024-01-02T03:04:05.678Z``."""
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


class SearchRequest(BaseModel):
    """Parameters of one proxied law search."""

    query: str = Field(description="Trimmed search term")
    target: str = Field(default=DEFAULT_TARGET, description="law, prec, lawview or precview")
    page: int = Field(default=DEFAULT_PAGE, ge=1, description="Result page")
    display: int = Field(
        default=DEFAULT_DISPLAY, ge=1, le=MAX_DISPLAY, description="Results per page"
    )
    search: Literal[0, 1, 2] = Field(default=DEFAULT_SEARCH, description="0=all, 1=title, 2=body")
    sort: str | None = Field(default=None, description="date or score; upstream default is date")
    order: str | None = Field(default=None, description="asc or desc; upstream default is desc")
    date_range_start: str | None = Field(default=None, description="Promulgation date from (ancYd)")
    date_range_end: str | None = Field(default=None, description="Promulgation date to (ancYdEnd)")
    department: str | None = Field(default=None, description="Responsible ministry")

    @classmethod
    def from_query_params(cls, params: Mapping[str, str]) -> "SearchRequest":
        """
        Build a request from raw query-string values, applying defaults.

        Missing, empty or non-numeric values fall back to their defaults and
        ``display`` is clamped to 1..100. The query is trimmed but not
        validated here; see :meth:`has_query`.
        """
        def get(key: str) -> str | None:
            return first_value(params, key)

        # An empty q falls through to query; a blank one does not.
        raw_query = get("q") or get("query") or ""
        search = parse_int(get("search"), DEFAULT_SEARCH)
        return cls(
            query=raw_query.strip(),
            target=get("target") or DEFAULT_TARGET,
            page=max(parse_int(get("page"), DEFAULT_PAGE), 1),
            display=clamp(parse_int(get("display"), DEFAULT_DISPLAY), 1, MAX_DISPLAY),
            search=search if search in SEARCH_MODES else DEFAULT_SEARCH,
            sort=optional_str(get("sort")),
            order=optional_str(get("order")),
            date_range_start=optional_str(get("ancYd")),
            date_range_end=optional_str(get("ancYdEnd")),
            department=optional_str(get("department")),
        )

    @property
    def has_query(self) -> bool:
        return bool(self.query)


class SearchMeta(BaseModel):
    """Metadata echoed back alongside successful results."""

    query: str
    target: str
    page: int
    display: int
    timestamp: str = Field(default_factory=utc_timestamp)

    @classmethod
    def for_request(cls, request: SearchRequest) -> "SearchMeta":
        return cls(
            query=request.query,
            target=request.target,
            page=request.page,
            display=request.display,
        )


class SuccessEnvelope(BaseModel):
    """Envelope wrapping the normalized upstream payload."""

    success: Literal[True] = True
    data: Any = None
    meta: SearchMeta


class ErrorEnvelope(BaseModel):
    """Envelope for every failure; unused fields are omitted on the wire."""

    success: Literal[False] = False
    error: str
    code: str
    details: str | None = None
    message: str | None = None
    timestamp: str | None = None

    def to_content(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)
