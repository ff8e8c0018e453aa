"""Single-request pipeline.

Stages, in order:
1. validate the URL (scheme prefix, then full parse);
2. resolve the effective method;
3. build the `RequestSpec` and encode its body;
4. dispatch the request and drain the body;
5. classify the response (status, JSON vs text).

Each stage returns either its value or a `ReportedError`, and `execute`
stops at the first error. Printing is left to the CLI layer: the pipeline
only produces an `OutcomeReport`. The one exception is an invalid `--json`
payload, which raises `InvalidJsonPayloadError` before any network I/O.
"""

from __future__ import annotations

import json
import logging
import math
import time
from dataclasses import dataclass, field
from typing import Any, cast

import httpx

from adapters.http_client import build_async_client
from adapters.url_parser import parse_target_url
from core.config import AppSettings
from core.domain.errors import (
    InvalidJsonPayloadError,
    UrlParseFailure,
    http_status_error,
    invalid_protocol,
    transport_connect_error,
    transport_other_error,
    unsupported_method,
    url_parse_error,
)
from core.domain.models import (
    BodyMode,
    HttpMethod,
    OutcomeReport,
    ReportedError,
    RequestSpec,
    ResponseBodyKind,
)

logger = logging.getLogger(__name__)

_VALID_PREFIXES = ("http://", "https://")


@dataclass(frozen=True)
class RequestArgs:
    """Raw command-line inputs, before any interpretation."""

    url: str
    method: str | None = None
    data: str | None = None
    json_payload: str | None = None


@dataclass(frozen=True)
class EncodedBody:
    """Transport-ready body: at most one of `content` / `form` is set."""

    content: bytes | None = None
    form: dict[str, str] | None = None
    headers: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class DispatchResult:
    status_code: int
    text: str
    elapsed_seconds: float


def _reject_constant(token: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {token}")


def _parse_finite_float(token: str) -> float:
    value = float(token)
    if not math.isfinite(value):
        raise ValueError(f"Number out of range: {token}")
    return value


def load_json_strict(text: str) -> Any:
    """`json.loads` that only accepts finite numbers.

    Rejects `NaN`, `Infinity`, `-Infinity` and literals that overflow a
    double (e.g. `1e400`). Raises `ValueError` (including
    `json.JSONDecodeError`) on bad input.
    """

    return json.loads(text, parse_constant=_reject_constant, parse_float=_parse_finite_float)


def resolve_method(explicit_method: str | None, *, has_json: bool) -> str:
    """Effective method: POST whenever a JSON payload is present."""

    if has_json:
        return HttpMethod.POST.value
    return (explicit_method or HttpMethod.GET.value).strip().upper()


def validate_url(raw_url: str) -> httpx.URL | ReportedError:
    if not raw_url.startswith(_VALID_PREFIXES):
        return invalid_protocol()
    try:
        return parse_target_url(raw_url)
    except UrlParseFailure as exc:
        logger.debug("URL parse failure (%s): %s", exc.kind.value, exc.detail)
        return url_parse_error(exc)


def parse_form_data(raw: str) -> dict[str, str]:
    """Split `key=value&key2=value2` into a mapping.

    Pairs without `=` are dropped; only the first `=` splits, and the last
    occurrence of a key wins.
    """

    fields: dict[str, str] = {}
    for pair in raw.split("&"):
        key, sep, value = pair.partition("=")
        if not sep:
            continue
        fields[key] = value
    return fields


def build_request_spec(
    args: RequestArgs,
    method: str,
    url: httpx.URL,
) -> RequestSpec | ReportedError:
    """Build the spec for the already validated `url`."""

    try:
        http_method = HttpMethod(method)
    except ValueError:
        return unsupported_method(method)

    canonical = str(url)
    if args.json_payload is not None:
        return RequestSpec(
            url=canonical,
            method=HttpMethod.POST,
            body_mode=BodyMode.RAW_JSON,
            json_payload=args.json_payload,
        )
    if http_method is HttpMethod.POST and args.data is not None:
        return RequestSpec(
            url=canonical,
            method=http_method,
            body_mode=BodyMode.FORM,
            form=parse_form_data(args.data),
        )
    return RequestSpec(url=canonical, method=http_method)


def encode_body(spec: RequestSpec) -> EncodedBody:
    """Turn the spec's body mode into what httpx sends.

    Raises `InvalidJsonPayloadError` when the raw JSON is malformed.
    """

    if spec.body_mode is BodyMode.RAW_JSON:
        # RequestSpec guarantees a payload for RAW_JSON.
        payload = cast(str, spec.json_payload)
        try:
            load_json_strict(payload)
        except ValueError as exc:
            raise InvalidJsonPayloadError(url=spec.url, payload=payload) from exc
        return EncodedBody(
            content=payload.encode("utf-8"),
            headers={"Content-Type": "application/json"},
        )
    if spec.body_mode is BodyMode.FORM:
        return EncodedBody(form=dict(spec.form or {}))
    return EncodedBody()


async def dispatch(
    client: httpx.AsyncClient,
    spec: RequestSpec,
    body: EncodedBody,
    *,
    target: httpx.URL | None = None,
) -> DispatchResult | ReportedError:
    """Send exactly one request and read the whole body.

    `target` is the URL already parsed by `validate_url`; `spec.url` is used
    when it is omitted.
    """

    logger.debug("Dispatching %s %s (body: %s)", spec.method.value, spec.url, spec.body_mode.value)
    started = time.perf_counter()
    try:
        async with client.stream(
            spec.method.value,
            target if target is not None else spec.url,
            content=body.content,
            data=body.form,
            headers=body.headers or None,
        ) as response:
            await response.aread()
            text = response.text
            status_code = response.status_code
    except (httpx.ConnectError, httpx.TimeoutException) as exc:
        logger.debug("Connection failure: %r", exc)
        return transport_connect_error(str(exc))
    except httpx.HTTPError as exc:
        logger.debug("Transport failure: %r", exc)
        return transport_other_error(str(exc))

    elapsed = time.perf_counter() - started
    logger.debug("Received HTTP %s in %.3fs", status_code, elapsed)
    return DispatchResult(status_code=status_code, text=text, elapsed_seconds=elapsed)


def render_body(text: str) -> tuple[ResponseBodyKind, str]:
    """Pretty JSON with sorted keys if `text` parses, else `text` unchanged."""

    try:
        value = load_json_strict(text)
    except (ValueError, RecursionError):
        return ResponseBodyKind.TEXT, text
    return ResponseBodyKind.JSON, json.dumps(value, ensure_ascii=False, indent=2, sort_keys=True)


def _report(args: RequestArgs, method: str, **fields: Any) -> OutcomeReport:
    return OutcomeReport(
        url=args.url,
        method=method,
        data=args.data,
        json_payload=args.json_payload,
        **fields,
    )


async def execute(
    args: RequestArgs,
    *,
    settings: AppSettings | None = None,
    client: httpx.AsyncClient | None = None,
) -> OutcomeReport:
    """Run the whole pipeline for one invocation.

    When `client` is omitted, one is built from `settings` and closed before
    returning.
    """

    method = resolve_method(args.method, has_json=args.json_payload is not None)
    logger.debug("Effective method: %s", method)

    url = validate_url(args.url)
    if isinstance(url, ReportedError):
        return _report(args, method, error=url)

    spec = build_request_spec(args, method, url)
    if isinstance(spec, ReportedError):
        return _report(args, method, error=spec)

    body = encode_body(spec)

    if client is None:
        async with build_async_client(settings) as owned:
            result = await dispatch(owned, spec, body, target=url)
    else:
        result = await dispatch(client, spec, body, target=url)
    if isinstance(result, ReportedError):
        return _report(args, method, error=result)

    if not 200 <= result.status_code < 300:
        return _report(
            args,
            method,
            status_code=result.status_code,
            error=http_status_error(result.status_code),
        )

    body_kind, rendered = render_body(result.text)
    return _report(
        args,
        method,
        status_code=result.status_code,
        body_kind=body_kind,
        body=rendered,
    )
