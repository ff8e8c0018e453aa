"""Error taxonomy: exceptions and the diagnostic wording for each kind.

Only `InvalidJsonPayloadError` is meant to escape the pipeline; every other
failure becomes a `ReportedError` on the `OutcomeReport`.
"""

from __future__ import annotations

from core.domain.models import ErrorKind, ReportedError, UrlErrorKind

INVALID_PROTOCOL_MESSAGE = "The URL does not have a valid base protocol."

URL_ERROR_MESSAGES: dict[UrlErrorKind, str] = {
    UrlErrorKind.RELATIVE_WITHOUT_BASE: INVALID_PROTOCOL_MESSAGE,
    UrlErrorKind.INVALID_PORT: "The URL contains an invalid port number.",
    UrlErrorKind.INVALID_IPV4: "The URL contains an invalid IPv4 address.",
    UrlErrorKind.INVALID_IPV6: "The URL contains an invalid IPv6 address.",
    UrlErrorKind.OTHER: "Some error occurred while parsing the URL.",
}

CONNECT_ERROR_MESSAGE = (
    "Unable to connect to the server. Perhaps the network is offline "
    "or the server hostname cannot be resolved."
)
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"


class UrlParseFailure(ValueError):
    """Raised by the URL parser adapter with an already classified sub-kind."""

    def __init__(self, kind: UrlErrorKind, detail: str | None = None) -> None:
        super().__init__(detail or URL_ERROR_MESSAGES[kind])
        self.kind = kind
        self.detail = detail


class InvalidJsonPayloadError(ValueError):
    """`--json` is not well-formed JSON. Aborts the process."""

    def __init__(self, *, url: str, payload: str) -> None:
        super().__init__(f"Invalid JSON format: {payload}")
        self.url = url
        self.payload = payload


def invalid_protocol() -> ReportedError:
    return ReportedError(kind=ErrorKind.INVALID_PROTOCOL, message=INVALID_PROTOCOL_MESSAGE)


def url_parse_error(failure: UrlParseFailure) -> ReportedError:
    return ReportedError(
        kind=ErrorKind.URL_PARSE,
        message=URL_ERROR_MESSAGES[failure.kind],
        url_error_kind=failure.kind,
        detail=failure.detail,
    )


def unsupported_method(method: str) -> ReportedError:
    return ReportedError(
        kind=ErrorKind.UNSUPPORTED_METHOD,
        message=f"Unsupported HTTP method: {method or '(empty)'}. Only GET and POST are supported.",
    )


def transport_connect_error(detail: str | None = None) -> ReportedError:
    return ReportedError(
        kind=ErrorKind.TRANSPORT_CONNECT,
        message=CONNECT_ERROR_MESSAGE,
        detail=detail or None,
    )


def transport_other_error(detail: str | None = None) -> ReportedError:
    message = f"{UNEXPECTED_ERROR_MESSAGE}: {detail}" if detail else UNEXPECTED_ERROR_MESSAGE
    return ReportedError(
        kind=ErrorKind.TRANSPORT_OTHER,
        message=message,
        detail=detail or None,
    )


def http_status_error(status_code: int) -> ReportedError:
    return ReportedError(
        kind=ErrorKind.HTTP_STATUS,
        message=f"Request failed with status code: {status_code}",
    )
