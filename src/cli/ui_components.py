"""CLI output components (Rich).

Output is plain multi-line text:

    Requesting URL: <url>
    Method: <method>
    [JSON: <payload> | Data: <data>]      (POST only)
    Response body[ (JSON with sorted keys)]:
    <body>

Diagnostics use the same header on stderr followed by `Error: <message>`.
Labels are styled when the console is a terminal; values are written as
plain `Text` so markup and emoji codes in user data are never interpreted.
"""

from __future__ import annotations

from rich.console import Console
from rich.text import Text

from core.domain.models import HttpMethod, OutcomeReport, ResponseBodyKind

JSON_BODY_LABEL = "Response body (JSON with sorted keys):"
TEXT_BODY_LABEL = "Response body:"


def make_consoles() -> tuple[Console, Console]:
    """(stdout, stderr) consoles that never wrap or highlight."""

    out = Console(soft_wrap=True, highlight=False)
    err = Console(stderr=True, soft_wrap=True, highlight=False)
    return out, err


def _field(label: str, value: str, *, style: str = "bold cyan") -> Text:
    return Text.assemble((f"{label}:", style), " ", value)


def _print_header(console: Console, url: str, method: str) -> None:
    console.print(_field("Requesting URL", url))
    console.print(_field("Method", method))


def _write_verbatim(console: Console, text: str) -> None:
    # Text() strips control characters such as "\r"; bodies must not change.
    console.file.write(text + "\n")
    console.file.flush()


def print_request_info(console: Console, report: OutcomeReport) -> None:
    """Echo the request: URL, effective method and, for POST, the payload."""

    _print_header(console, report.url, report.method)
    if report.method != HttpMethod.POST.value:
        return
    if report.json_payload is not None:
        console.print(_field("JSON", report.json_payload))
    else:
        console.print(_field("Data", report.data or ""))


def print_diagnostic(console: Console, *, url: str, method: str, message: str) -> None:
    _print_header(console, url, method)
    console.print(_field("Error", message, style="bold red"))


def print_invalid_json_payload(console: Console, *, url: str, payload: str) -> None:
    """Diagnostic emitted right before the process aborts on bad `--json`."""

    _print_header(console, url, HttpMethod.POST.value)
    console.print(_field("JSON", payload, style="bold red"))


def print_outcome(report: OutcomeReport, *, out: Console, err: Console) -> None:
    """Render an `OutcomeReport`: the report on `out`, any error on `err`."""

    if report.error is not None:
        print_diagnostic(err, url=report.url, method=report.method, message=report.error.message)
        return

    print_request_info(out, report)
    label = JSON_BODY_LABEL if report.body_kind is ResponseBodyKind.JSON else TEXT_BODY_LABEL
    out.print(Text(label, style="bold green"))
    _write_verbatim(out, report.body or "")
