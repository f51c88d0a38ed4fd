from unittest.mock import Mock, patch

import pytest
import requests

from app.api.v1.gemini_client import EMPTY_ANALYSIS, GeminiClient, extract_candidate_text
from app.api.v1.profiles import PROFILES
from app.core.errors import InvalidUpstreamResponse, UpstreamError


@pytest.fixture
def gemini():
    return GeminiClient(
        api_key="secret",
        model="gemini-1.5-flash-latest",
        base_url="https://generativelanguage.googleapis.com/v1beta/",
        timeout=12.5,
    )


def test_url_uses_model_and_strips_trailing_slash(gemini):
    assert gemini.url == (
        "https://generativelanguage.googleapis.com/v1beta/models/"
        "gemini-1.5-flash-latest:generateContent"
    )


def test_payload_shape(gemini):
    payload = gemini.build_payload("merhaba", PROFILES["analysis"])

    assert payload["contents"] == [{"parts": [{"text": "merhaba"}]}]
    assert payload["generationConfig"] == {
        "temperature": 0.7,
        "maxOutputTokens": 512,
        "topP": 0.8,
        "topK": 40,
    }
    assert {"category": "HARM_CATEGORY_HARASSMENT", "threshold": "BLOCK_MEDIUM_AND_ABOVE"} in payload["safetySettings"]
    assert len(payload["safetySettings"]) == 4


def test_diagnostic_profile_disables_dangerous_content_filter(gemini):
    payload = gemini.build_payload("x", PROFILES["diagnostic"])
    thresholds = {s["category"]: s["threshold"] for s in payload["safetySettings"]}

    assert thresholds["HARM_CATEGORY_DANGEROUS_CONTENT"] == "BLOCK_NONE"
    assert thresholds["HARM_CATEGORY_HATE_SPEECH"] == "BLOCK_MEDIUM_AND_ABOVE"
    assert payload["generationConfig"]["maxOutputTokens"] == 800
    assert payload["generationConfig"]["topP"] == 0.95


def test_generate_sends_key_as_query_param(gemini, gemini_success_body):
    with patch("app.api.v1.gemini_client.requests.post") as mock_post:
        mock_post.return_value = Mock(ok=True, status_code=200, json=Mock(return_value=gemini_success_body))
        text = gemini.generate("prompt", PROFILES["analysis"])

    assert text == "🔍 BULGULAR: kusma"
    _, kwargs = mock_post.call_args
    assert kwargs["params"] == {"key": "secret"}
    assert kwargs["timeout"] == 12.5
    assert "secret" not in mock_post.call_args[0][0]


@pytest.mark.parametrize("status", [400, 403, 429, 503])
def test_non_success_status_carries_code(gemini, status):
    with patch("app.api.v1.gemini_client.requests.post") as mock_post:
        mock_post.return_value = Mock(ok=False, status_code=status, text="upstream says no")
        with pytest.raises(UpstreamError) as exc:
            gemini.generate("prompt", PROFILES["analysis"])

    assert exc.value.upstream_status == status
    assert str(exc.value) == f"Gemini API error: {status}"


def test_connection_error_has_no_status(gemini):
    with patch("app.api.v1.gemini_client.requests.post") as mock_post:
        mock_post.side_effect = requests.ConnectionError("refused")
        with pytest.raises(UpstreamError) as exc:
            gemini.generate("prompt", PROFILES["analysis"])

    assert exc.value.upstream_status is None


def test_non_json_success_body(gemini):
    with patch("app.api.v1.gemini_client.requests.post") as mock_post:
        mock_post.return_value = Mock(ok=True, status_code=200, text="<html>", json=Mock(side_effect=ValueError("bad")))
        with pytest.raises(InvalidUpstreamResponse):
            gemini.generate("prompt", PROFILES["analysis"])


def test_missing_api_key_raises_before_request():
    client = GeminiClient(api_key=None, model="m", base_url="https://example.com")
    with patch("app.api.v1.gemini_client.requests.post") as mock_post:
        with pytest.raises(UpstreamError):
            client.generate("prompt", PROFILES["analysis"])
    mock_post.assert_not_called()


@pytest.mark.parametrize("data", [
    {},
    {"candidates": []},
    {"candidates": [{}]},
    {"candidates": [{"content": {}}]},
    {"candidates": [{"content": {"parts": []}}]},
    {"candidates": [{"content": {"parts": [{}]}}]},
    {"candidates": [{"content": {"parts": [{"text": None}]}}]},
    {"candidates": None},
    [],
])
def test_extract_guards_every_level(data):
    with pytest.raises(InvalidUpstreamResponse):
        extract_candidate_text(data)


def test_extract_empty_text_falls_back():
    data = {"candidates": [{"content": {"parts": [{"text": ""}]}}]}
    assert extract_candidate_text(data) == EMPTY_ANALYSIS


def test_extract_uses_first_candidate_only():
    data = {"candidates": [
        {"content": {"parts": [{"text": "first"}]}},
        {"content": {"parts": [{"text": "second"}]}},
    ]}
    assert extract_candidate_text(data) == "first"
