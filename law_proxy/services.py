"""Search proxy pipeline: parse params, call the law API, normalize, respond."""

from collections.abc import Mapping

from law_proxy.exceptions import (
    INTERNAL_ERROR,
    MISSING_QUERY,
    PARSE_ERROR,
    LawProxyError,
    ResponseParseError,
    UpstreamAPIError,
)
from law_proxy.law_client import LawSearchClient
from law_proxy.models import (
    ErrorEnvelope,
    SearchMeta,
    SearchRequest,
    SuccessEnvelope,
    utc_timestamp,
)
from law_proxy.parsing import FormatDetector, detect_by_leading_char, parse_as
from law_proxy.responses import EnvelopeResponse
from law_proxy.utils.logging import get_logger

logger = get_logger(__name__)

MISSING_QUERY_MESSAGE = "검색어를 입력해주세요"
PARSE_ERROR_MESSAGE = "법제처 API 응답 파싱 실패"
INTERNAL_ERROR_MESSAGE = "법제처 검색 중 오류가 발생했습니다"


class SearchProxyHandler:
    """
    Forward one search to the law API and wrap the outcome in an envelope.

    Each call is independent: the handler holds only its collaborators, so a
    single instance can serve concurrent requests.
    """

    def __init__(
        self,
        client: LawSearchClient,
        detector: FormatDetector = detect_by_leading_char,
        allow_origin: str = "*",
    ):
        self.client = client
        self.detector = detector
        self.allow_origin = allow_origin

    async def handle(self, params: Mapping[str, str]) -> EnvelopeResponse:
        """Run the pipeline for raw query-string ``params``."""
        request = SearchRequest.from_query_params(params)
        logger.info(
            f"Search parameters: target={request.target} page={request.page} "
            f"display={request.display} search={request.search}",
            extra={"target": request.target},
        )

        if not request.has_query:
            logger.warning("Rejected search without a query", extra={"code": MISSING_QUERY})
            return self._error(400, ErrorEnvelope(error=MISSING_QUERY_MESSAGE, code=MISSING_QUERY))

        try:
            body = await self.client.search(request)
            fmt = self.detector(body)
            logger.info(f"Parsing law API response as {fmt.value}", extra={"format": fmt.value})
            data = parse_as(fmt, body)
            envelope = SuccessEnvelope(data=data, meta=SearchMeta.for_request(request))
            # Rendered inside the guard: serialization failures become INTERNAL_ERROR.
            response = EnvelopeResponse(envelope.model_dump(), allow_origin=self.allow_origin)
        except ResponseParseError as e:
            logger.error(
                f"Law API response could not be parsed as {e.format}: {e}",
                extra={"code": PARSE_ERROR, "format": e.format},
            )
            return self._error(
                500,
                ErrorEnvelope(error=PARSE_ERROR_MESSAGE, code=PARSE_ERROR, details=str(e)),
            )
        except LawProxyError as e:
            extra = {"code": INTERNAL_ERROR}
            if isinstance(e, UpstreamAPIError):
                extra["upstream_status"] = e.status_code
            logger.error(f"Law search proxy failed: {e}", extra=extra)
            return self._internal_error(e)
        except Exception as e:
            logger.exception(
                f"Unexpected law search proxy failure: {e}", extra={"code": INTERNAL_ERROR}
            )
            return self._internal_error(e)

        logger.info("Search complete, returning results")
        return response

    def _internal_error(self, exc: Exception) -> EnvelopeResponse:
        return self._error(
            500,
            ErrorEnvelope(
                error=INTERNAL_ERROR_MESSAGE,
                code=INTERNAL_ERROR,
                message=str(exc),
                timestamp=utc_timestamp(),
            ),
        )

    def _error(self, status_code: int, envelope: ErrorEnvelope) -> EnvelopeResponse:
        return EnvelopeResponse(
            envelope.to_content(), status_code=status_code, allow_origin=self.allow_origin
        )
