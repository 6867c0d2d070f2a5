"""Custom exceptions for the law search proxy."""

MISSING_QUERY = "MISSING_QUERY"
PARSE_ERROR = "PARSE_ERROR"
INTERNAL_ERROR = "INTERNAL_ERROR"


class LawProxyError(Exception):
    """Base exception for the law search proxy."""

    code = INTERNAL_ERROR


class ConfigurationError(LawProxyError):
    """Exception raised for configuration errors."""

    pass


class MissingQueryError(LawProxyError):
    """Raised when the caller supplied no usable search term."""

    code = MISSING_QUERY


class ResponseParseError(LawProxyError):
    """Raised when the upstream body is neither valid XML nor valid JSON."""

    code = PARSE_ERROR

    def __init__(self, fmt: str, cause: Exception):
        self.format = fmt
        self.cause = cause
        super().__init__(str(cause))


class UpstreamAPIError(LawProxyError):
    """Exception raised when the law API returns a non-2xx status."""

    def __init__(self, status_code: int, response_text: str = ""):
        self.status_code = status_code
        self.response_text = response_text
        super().__init__(f"법제처 API 응답 오류: {status_code}")


class NetworkError(LawProxyError):
    """Exception raised for network/connection errors."""

    pass
