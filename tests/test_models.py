from __future__ import annotations

import pytest
from pydantic import ValidationError

from core.domain.models import BodyMode, HttpMethod, OutcomeReport, RequestSpec


def test_request_spec_is_immutable():
    spec = RequestSpec(url="https://example.com")
    with pytest.raises(ValidationError):
        spec.method = HttpMethod.POST


def test_raw_json_requires_post():
    with pytest.raises(ValidationError):
        RequestSpec(
            url="https://example.com",
            method=HttpMethod.GET,
            body_mode=BodyMode.RAW_JSON,
            json_payload="{}",
        )


def test_form_requires_post():
    with pytest.raises(ValidationError):
        RequestSpec(url="https://example.com", body_mode=BodyMode.FORM, form={"a": "1"})


def test_payload_without_matching_mode_is_rejected():
    with pytest.raises(ValidationError):
        RequestSpec(url="https://example.com", method=HttpMethod.POST, json_payload="{}")
    with pytest.raises(ValidationError):
        RequestSpec(url="https://example.com", method=HttpMethod.POST, form={"a": "1"})


def test_outcome_report_ok_flag():
    assert OutcomeReport(url="https://example.com", method="GET", status_code=200).ok
