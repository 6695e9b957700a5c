import json

import httpx
import pytest

from jobboard.core.errors import (
    NoTextExtracted, TransportError, NonSuccessStatus, MalformedEnvelope, MalformedPayload
)
from jobboard.services.gemini_client import (
    build_resume_prompt, parse_completion_envelope, strip_code_fences
)

FIELDS = ("name", "email", "phone", "education", "experience", "skills")


def test_parses_first_choice_into_fields(gemini_client, parser_api):
    parser_api.reply(text_body=(
        '{"choices":[{"text":"{\\"name\\":\\"Jane\\",\\"email\\":\\"j@x.com\\",\\"phone\\":\\"\\",'
        '\\"education\\":\\"\\",\\"experience\\":\\"\\",\\"skills\\":\\"Go\\"}"}]}'
    ))

    parsed = gemini_client.parse_resume("Jane Doe, Go developer")

    assert parsed.name == "Jane"
    assert parsed.email == "j@x.com"
    assert parsed.skills == "Go"
    assert parsed.phone == parsed.education == parsed.experience == ""


def test_request_carries_prompt_sampling_parameters_and_bearer_key(gemini_client, parser_api):
    parser_api.reply_fields(name="Jane")

    gemini_client.parse_resume("Jane Doe\nSenior Go developer")

    request = parser_api.requests[0]
    assert request.method == "POST"
    assert request.url.path.endswith("/completions")
    assert request.headers["Authorization"] == "Bearer test-key"
    body = parser_api.last_json()
    assert "Senior Go developer" in body["prompt"]
    assert body["max_tokens"] == 500
    assert body["temperature"] == 0.3
    assert body["top_p"] == 1.0
    assert body["frequency_penalty"] == 0.0
    assert body["presence_penalty"] == 0.0


def test_prompt_names_all_six_fields():
    prompt = build_resume_prompt("RESUME BODY")
    for field in FIELDS:
        assert f'"{field}"' in prompt
    assert prompt.rstrip().endswith("RESUME BODY")


@pytest.mark.parametrize("text", ["", "   \n\t "])
def test_empty_text_fails_before_any_network_call(gemini_client, parser_api, text):
    with pytest.raises(NoTextExtracted):
        gemini_client.parse_resume(text)
    assert parser_api.calls == 0


@pytest.mark.parametrize("status", [400, 401, 429, 500, 503])
def test_non_success_status_surfaces_body_verbatim(gemini_client, parser_api, status):
    parser_api.reply(status, text_body="quota exceeded for key")

    with pytest.raises(NonSuccessStatus) as exc:
        gemini_client.parse_resume("some resume")

    assert exc.value.remote_status == status
    assert exc.value.body == "quota exceeded for key"
    assert "quota exceeded for key" in exc.value.message
    assert parser_api.calls == 1


def test_connection_failure_is_a_transport_error(gemini_client, parser_api):
    parser_api.fail_with(httpx.ConnectError("connection refused"))

    with pytest.raises(TransportError):
        gemini_client.parse_resume("some resume")


def test_read_timeout_is_a_transport_error_at_parse_stage(gemini_client, parser_api):
    parser_api.fail_with(httpx.ReadTimeout("timed out"))

    with pytest.raises(TransportError) as exc:
        gemini_client.parse_resume("some resume")

    assert exc.value.stage == "parsed"
    assert exc.value.status_code == 502
    assert parser_api.calls == 1


@pytest.mark.parametrize("body", [
    "<html>gateway</html>",
    "[]",
    '{"id": "cmpl-1"}',
    '{"choices": []}',
    '{"choices": {"text": "{}"}}',
    '{"choices": [{"message": {"content": "{}"}}]}',
    '{"choices": [{"text": 42}]}',
])
def test_unexpected_envelope_shape(gemini_client, parser_api, body):
    parser_api.reply(text_body=body)

    with pytest.raises(MalformedEnvelope):
        gemini_client.parse_resume("some resume")


@pytest.mark.parametrize("payload", [
    "Sure! Here is the JSON you asked for.",
    '["Jane", "j@x.com"]',
    '{"name": {"first": "Jane"}}',
    '{"name": "Jane", "email": ',
])
def test_inner_text_that_is_not_parsed_fields(payload):
    body = json.dumps({"choices": [{"text": payload}]})
    with pytest.raises(MalformedPayload):
        parse_completion_envelope(body)


def test_only_the_first_choice_is_used():
    body = json.dumps({"choices": [
        {"text": json.dumps({"name": "First"})},
        {"text": json.dumps({"name": "Second"})},
    ]})
    assert parse_completion_envelope(body).name == "First"


def test_code_fenced_payload_and_list_values_are_accepted():
    payload = '```json\n{"name": "Jane", "skills": ["Go", "SQL"], "phone": null}\n```'
    parsed = parse_completion_envelope(json.dumps({"choices": [{"text": payload}]}))

    assert parsed.name == "Jane"
    assert parsed.skills == "Go, SQL"
    assert parsed.phone == ""


def test_strip_code_fences_leaves_plain_json_alone():
    assert strip_code_fences(' {"a": 1} ') == '{"a": 1}'
    assert strip_code_fences('```\n{"a": 1}\n```') == '{"a": 1}'


def test_each_upload_calls_the_api_again(gemini_client, parser_api):
    parser_api.reply_fields(name="Jane").reply_fields(name="Jane")

    gemini_client.parse_resume("identical resume")
    gemini_client.parse_resume("identical resume")

    assert parser_api.calls == 2
