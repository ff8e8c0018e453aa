"""Domain models (Pydantic v2).

- `RequestSpec` describes *what* is sent: URL, effective method, body mode.
- `OutcomeReport` describes *what* is shown: echoed request fields plus
  either a rendered response body or a classified error.

Neither model knows about httpx, typer or rich.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, model_validator
from pydantic.config import ConfigDict


class HttpMethod(str, Enum):
    """Methods the dispatcher knows how to send."""

    GET = "GET"
    POST = "POST"


class BodyMode(str, Enum):
    NONE = "none"
    FORM = "form"
    RAW_JSON = "raw_json"


class ErrorKind(str, Enum):
    """Classification of every failure the pipeline can report."""

    INVALID_PROTOCOL = "invalid_protocol"
    URL_PARSE = "url_parse"
    UNSUPPORTED_METHOD = "unsupported_method"
    INVALID_JSON_PAYLOAD = "invalid_json_payload"
    TRANSPORT_CONNECT = "transport_connect"
    TRANSPORT_OTHER = "transport_other"
    HTTP_STATUS = "http_status"


class UrlErrorKind(str, Enum):
    """Sub-kinds of `ErrorKind.URL_PARSE`."""

    RELATIVE_WITHOUT_BASE = "relative_without_base"
    INVALID_PORT = "invalid_port"
    INVALID_IPV4 = "invalid_ipv4"
    INVALID_IPV6 = "invalid_ipv6"
    OTHER = "other"


class ResponseBodyKind(str, Enum):
    JSON = "json"
    TEXT = "text"


class RequestSpec(BaseModel):
    """A single request, built once from the command-line inputs.

    Rules:
    - `RAW_JSON` carries `json_payload`; the method is always POST.
    - `FORM` carries `form` and only exists for POST.
    - `NONE` carries neither.
    """

    model_config = ConfigDict(frozen=True)

    url: str = Field(
        ...,
        min_length=1,
        description="Target URL, already validated.",
    )
    method: HttpMethod = Field(
        default=HttpMethod.GET,
        description="Effective method (after the JSON override).",
    )
    body_mode: BodyMode = Field(
        default=BodyMode.NONE,
        description="How the request body is encoded.",
    )
    form: dict[str, str] | None = Field(
        default=None,
        description="Form fields for `BodyMode.FORM`.",
    )
    json_payload: str | None = Field(
        default=None,
        description="Raw JSON text for `BodyMode.RAW_JSON`, sent unmodified.",
    )

    @model_validator(mode="after")
    def _check_body_mode(self) -> "RequestSpec":
        if self.body_mode is BodyMode.RAW_JSON:
            if self.json_payload is None:
                raise ValueError("raw_json body mode requires json_payload")
            if self.method is not HttpMethod.POST:
                raise ValueError("raw_json body mode requires POST")
        elif self.json_payload is not None:
            raise ValueError("json_payload is only valid with raw_json body mode")

        if self.body_mode is BodyMode.FORM:
            if self.form is None:
                raise ValueError("form body mode requires form fields")
            if self.method is not HttpMethod.POST:
                raise ValueError("form body mode requires POST")
        elif self.form is not None:
            raise ValueError("form fields are only valid with form body mode")
        return self


class ReportedError(BaseModel):
    """A non-fatal failure: printed to stderr, then a clean exit."""

    model_config = ConfigDict(frozen=True)

    kind: ErrorKind
    message: str = Field(..., min_length=1)
    url_error_kind: UrlErrorKind | None = Field(
        default=None,
        description="Set only for `ErrorKind.URL_PARSE`.",
    )
    detail: str | None = Field(
        default=None,
        description="Underlying library message, when there is one.",
    )


class OutcomeReport(BaseModel):
    """Everything the terminal output needs about one invocation."""

    url: str
    method: str = Field(
        ...,
        description="Effective method as displayed (may be unsupported).",
    )
    data: str | None = Field(
        default=None,
        description="Raw `--data` argument, echoed for POST.",
    )
    json_payload: str | None = Field(
        default=None,
        description="Raw `--json` argument, echoed for POST.",
    )
    status_code: int | None = Field(
        default=None,
        description="Absent when the transport failed.",
    )
    body_kind: ResponseBodyKind | None = None
    body: str | None = Field(
        default=None,
        description="Rendered response body (sorted JSON or verbatim text).",
    )
    error: ReportedError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
