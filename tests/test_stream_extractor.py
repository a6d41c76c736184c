"""Tests for content extraction across provider response shapes."""

import pytest

from genai_chat.stream.extractor import extract_delta, extract_message_content
from genai_chat.stream.models import Delta, Skip


def test_openai_delta_shape():
    result = extract_delta('{"choices":[{"delta":{"content":"Hi"}}]}')
    assert result == Delta("Hi", shape="choices_delta")


def test_ollama_message_shape():
    result = extract_delta('{"message":{"content":"Hi"}}')
    assert result == Delta("Hi", shape="message")


def test_ollama_response_shape():
    result = extract_delta('{"response":"Hi"}')
    assert result == Delta("Hi", shape="response")


def test_role_only_frame_yields_no_delta():
    assert extract_delta('{"role":"assistant"}') == Skip("no_content")


def test_empty_delta_falls_through_to_next_shape():
    result = extract_delta('{"choices":[{"delta":{"content":""}}],"message":{"content":"x"}}')
    assert result == Delta("x", shape="message")


@pytest.mark.parametrize("payload", [
    '{"choices":[]}',
    '{"choices":[{"delta":{"role":"assistant"}}]}',
    '{"choices":[{"delta":{"content":null}}],"finish_reason":"stop"}',
    '{"message":{"content":["not","text"]}}',
    '{"message":"flat"}',
    '{"done":true,"response":""}',
    '[1, 2, 3]',
    '"just a string"',
    'null',
])
def test_payloads_without_text_are_absorbed(payload):
    result = extract_delta(payload)
    assert isinstance(result, Skip)
    assert result.reason == "no_content"


def test_malformed_json_is_skipped_with_payload():
    result = extract_delta("{not valid json")
    assert result == Skip("malformed_json", payload="{not valid json")


def test_empty_payload_is_skipped():
    assert extract_delta("  ") == Skip("empty_payload")


def test_whitespace_content_is_preserved():
    assert extract_delta('{"choices":[{"delta":{"content":" \\n"}}]}').text == " \n"


@pytest.mark.parametrize("body,expected", [
    ({"choices": [{"message": {"role": "assistant", "content": "Gateway"}}]}, "Gateway"),
    ({"message": {"role": "assistant", "content": "Local"}}, "Local"),
    ({"response": "Generate"}, "Generate"),
    ({"choices": []}, ""),
    ([], ""),
])
def test_extract_message_content(body, expected):
    assert extract_message_content(body) == expected


def test_lone_surrogate_content_is_skipped():
    payload = '{"choices":[{"delta":{"content":"\\ud83d"}}]}'
    assert extract_delta(payload) == Skip("unencodable_content", payload=payload)


def test_escaped_surrogate_pair_is_kept():
    assert extract_delta('{"response":"\\ud83d\\ude42"}').text == "🙂"


def test_deeply_nested_payload_is_skipped():
    payload = "[" * 200_000
    assert extract_delta(payload) == Skip("malformed_json", payload=payload)
