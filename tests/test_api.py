"""Tests for the ElevenLabs API client and response model.

WHY: The client is the only code that talks to the network. Its request
shape (auth header, multipart fields) and its error mapping decide
whether users see "Invalid API key" or a raw traceback.

HOW: httpx.MockTransport stands in for the network; each handler asserts
on the outgoing request and returns a canned response. Async methods are
driven with asyncio.run() inside synchronous tests.

RULES:
- The real ElevenLabs API is never called
- Every client is created with an explicit api_key (no .env dependency)
"""

import asyncio
import json

import httpx
import pytest

from srt_generator.api.client import ElevenLabsAPIError, ElevenLabsClient
from srt_generator.api.models import InvalidResponseError, TranscriptionResult


def _run_transcribe(handler, file_path, **kwargs):
    async def _go():
        async with ElevenLabsClient(
            api_key="test-key",
            base_url="https://api.test/v1",
            transport=httpx.MockTransport(handler),
        ) as client:
            return await client.transcribe_file(file_path, **kwargs)

    return asyncio.run(_go())


def _run_validate(handler):
    async def _go():
        async with ElevenLabsClient(
            api_key="test-key",
            base_url="https://api.test/v1",
            transport=httpx.MockTransport(handler),
        ) as client:
            return await client.validate_api_key()

    return asyncio.run(_go())


@pytest.fixture
def audio_file(tmp_path):
    path = tmp_path / "interview.mp3"
    path.write_bytes(b"fake audio data")
    return path


class TestTranscribeFile:

    def test_sends_multipart_request(self, audio_file, sample_response):
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["key"] = request.headers.get("xi-api-key")
            seen["body"] = request.content
            return httpx.Response(200, json=sample_response)

        _run_transcribe(handler, audio_file, language_code="sv", diarize=True)

        assert seen["method"] == "POST"
        assert seen["path"] == "/v1/speech-to-text"
        assert seen["key"] == "test-key"
        body = seen["body"]
        assert b'name="model_id"' in body
        assert b"scribe_v1" in body
        assert b'name="language_code"' in body
        assert b"sv" in body
        assert b'name="timestamps_granularity"' in body
        assert b'filename="interview.mp3"' in body
        assert b"fake audio data" in body

    def test_returns_parsed_result(self, audio_file, sample_response):
        result = _run_transcribe(lambda request: httpx.Response(200, json=sample_response), audio_file)
        assert isinstance(result, TranscriptionResult)
        assert result.language_code == "en"
        assert len(result.words) == len(sample_response["words"])
        assert result.to_transcript().speakers.display_name("speaker_0") == "Host"

    def test_status_callback(self, audio_file, sample_response):
        messages = []
        _run_transcribe(
            lambda request: httpx.Response(200, json=sample_response),
            audio_file,
            on_status=messages.append,
        )
        assert messages[0] == "Uploading file to ElevenLabs..."
        assert any("words" in m for m in messages)

    @pytest.mark.parametrize("status", [401, 413, 422, 429, 500, 503])
    def test_error_status_raises(self, audio_file, status):
        handler = lambda request: httpx.Response(status, json={"detail": {"message": "nope"}})
        with pytest.raises(ElevenLabsAPIError) as excinfo:
            _run_transcribe(handler, audio_file)
        assert excinfo.value.status_code == status
        assert excinfo.value.message == "nope"

    def test_plain_text_error_body(self, audio_file):
        handler = lambda request: httpx.Response(502, text="Bad Gateway")
        with pytest.raises(ElevenLabsAPIError) as excinfo:
            _run_transcribe(handler, audio_file)
        assert excinfo.value.message == "Bad Gateway"

    def test_response_without_words_is_rejected(self, audio_file):
        handler = lambda request: httpx.Response(200, json={"text": "hi"})
        with pytest.raises(ElevenLabsAPIError, match="missing words"):
            _run_transcribe(handler, audio_file)

    def test_non_json_response_is_rejected(self, audio_file):
        handler = lambda request: httpx.Response(200, text="<html>")
        with pytest.raises(ElevenLabsAPIError, match="not JSON"):
            _run_transcribe(handler, audio_file)

    def test_missing_file(self, tmp_path):
        def handler(request):
            raise AssertionError("no request expected")

        with pytest.raises(FileNotFoundError):
            _run_transcribe(handler, tmp_path / "missing.mp3")

    def test_network_error_propagates(self, audio_file):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(httpx.ConnectError):
            _run_transcribe(handler, audio_file)

    def test_requires_context_manager(self, audio_file):
        client = ElevenLabsClient(api_key="test-key")
        with pytest.raises(RuntimeError):
            asyncio.run(client.transcribe_file(audio_file))


class TestValidateApiKey:

    def test_valid_key(self):
        def handler(request):
            assert request.url.path == "/v1/user"
            assert request.headers["xi-api-key"] == "test-key"
            return httpx.Response(200, json={"subscription": {}})

        assert _run_validate(handler) is True

    def test_rejected_key(self):
        assert _run_validate(lambda request: httpx.Response(401, json={})) is False

    def test_network_error_is_false(self):
        def handler(request):
            raise httpx.ConnectTimeout("timed out", request=request)

        assert _run_validate(handler) is False


class TestTranscriptionResult:

    def test_from_dict_defaults(self):
        result = TranscriptionResult.from_dict({"text": "", "words": []})
        assert result.language_code is None
        assert result.speakers == []

    @pytest.mark.parametrize("data, fragment", [
        (None, "Empty response"),
        ({}, "Empty response"),
        ([1], "expected an object"),
        ({"words": []}, "missing text"),
        ({"text": "hi", "words": None}, "missing words"),
    ])
    def test_from_dict_rejects(self, data, fragment):
        with pytest.raises(InvalidResponseError, match=fragment):
            TranscriptionResult.from_dict(data)

    def test_to_dict_is_json_ready(self, sample_response):
        result = TranscriptionResult.from_dict(sample_response)
        restored = json.loads(json.dumps(result.to_dict()))
        assert restored["words"] == sample_response["words"]
        assert restored["speakers"] == sample_response["speakers"]
