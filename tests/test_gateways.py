import base64
import json
from types import SimpleNamespace

import anthropic
import httpx
import pytest

from tolopani.adapters.gateway.base import TRANSLATE_PROMPT, build_summary_prompt
from tolopani.adapters.gateway.claude_gateway import ClaudeGateway
from tolopani.adapters.gateway.gemini_gateway import GeminiGateway
from tolopani.adapters.gateway.mock_gateway import SAMPLE_PHRASES, MockGateway
from tolopani.orchestrator.errors import GatewayError
from tolopani.services.status_store import StatusStore


def gemini_reply(text):
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


def make_gemini(handler, api_key="test-key"):
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return GeminiGateway(StatusStore(), api_key=api_key, client=client)


def test_summary_prompt_joins_phrases_with_spaces():
    prompt = build_summary_prompt(["Terima kasih", "Sama sama"])
    assert '"Terima kasih Sama sama"' in prompt
    assert "satu kalimat" in prompt


def test_gemini_translate_sends_inline_jpeg():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=gemini_reply("  Halo \n"))

    gw = make_gemini(handler)
    assert gw.ready
    assert gw.translate_image(b"jpeg-bytes") == "Halo"

    req = seen[0]
    assert req.url.path == "/v1beta/models/gemini-2.5-flash:generateContent"
    assert req.headers["x-goog-api-key"] == "test-key"
    parts = json.loads(req.content)["contents"][0]["parts"]
    assert parts[0]["inline_data"] == {
        "mime_type": "image/jpeg",
        "data": base64.standard_b64encode(b"jpeg-bytes").decode(),
    }
    assert parts[1]["text"] == TRANSLATE_PROMPT


def test_gemini_summarize_sends_text_only():
    seen = []

    def handler(request):
        seen.append(json.loads(request.content))
        return httpx.Response(200, json=gemini_reply("Terima kasih, sama sama."))

    gw = make_gemini(handler)
    assert gw.summarize(["Terima kasih", "Sama sama"]) == "Terima kasih, sama sama."
    parts = seen[0]["contents"][0]["parts"]
    assert parts == [{"text": build_summary_prompt(["Terima kasih", "Sama sama"])}]


def test_gemini_no_candidates_is_empty_text():
    gw = make_gemini(lambda request: httpx.Response(200, json={"promptFeedback": {"blockReason": "SAFETY"}}))
    assert gw.translate_image(b"x") == ""


def test_gemini_http_error_raises():
    gw = make_gemini(lambda request: httpx.Response(503, text="overloaded"))
    with pytest.raises(GatewayError):
        gw.translate_image(b"x")


def test_gemini_transport_error_raises():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    gw = make_gemini(handler)
    with pytest.raises(GatewayError):
        gw.summarize(["a", "b"])


@pytest.mark.parametrize(
    "body",
    [
        ["unexpected"],
        {"candidates": [{"content": {"parts": [{"text": None}]}}]},
        {"candidates": ["flat"]},
    ],
)
def test_gemini_malformed_body_raises_gateway_error(body):
    gw = make_gemini(lambda request: httpx.Response(200, json=body))
    with pytest.raises(GatewayError):
        gw.translate_image(b"x")


def test_gemini_non_json_body_raises_gateway_error():
    gw = make_gemini(lambda request: httpx.Response(200, text="<html>proxy error</html>"))
    with pytest.raises(GatewayError):
        gw.summarize(["a", "b"])


def test_gemini_without_key_is_not_ready():
    calls = []
    gw = make_gemini(lambda request: calls.append(request), api_key=None)
    assert not gw.ready
    with pytest.raises(GatewayError):
        gw.translate_image(b"x")
    assert calls == []


class FakeMessages:
    def __init__(self, text="", error=None):
        self.text = text
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(content=[SimpleNamespace(type="text", text=self.text)])


def test_claude_translate_sends_image_block():
    messages = FakeMessages(text=" Apa kabar ")
    gw = ClaudeGateway(StatusStore(), api_key=None, client=SimpleNamespace(messages=messages))
    assert gw.ready
    assert gw.translate_image(b"jpeg") == "Apa kabar"

    content = messages.calls[0]["messages"][0]["content"]
    assert content[0]["source"]["media_type"] == "image/jpeg"
    assert content[0]["source"]["data"] == base64.standard_b64encode(b"jpeg").decode()
    assert content[1] == {"type": "text", "text": TRANSLATE_PROMPT}


def test_claude_summarize():
    messages = FakeMessages(text="Halo, apa kabar?")
    gw = ClaudeGateway(StatusStore(), api_key=None, client=SimpleNamespace(messages=messages))
    assert gw.summarize(["Halo", "Apa kabar"]) == "Halo, apa kabar?"
    assert messages.calls[0]["messages"][0]["content"] == build_summary_prompt(["Halo", "Apa kabar"])


def test_claude_api_error_raises():
    request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
    messages = FakeMessages(error=anthropic.APIConnectionError(request=request))
    gw = ClaudeGateway(StatusStore(), api_key=None, client=SimpleNamespace(messages=messages))
    with pytest.raises(GatewayError):
        gw.translate_image(b"jpeg")


def test_claude_without_key_is_not_ready():
    gw = ClaudeGateway(StatusStore(), api_key=None)
    assert not gw.ready
    with pytest.raises(GatewayError):
        gw.summarize(["a", "b"])


def test_mock_gateway_script_runs_out():
    gw = MockGateway(StatusStore(), translations=["Halo"])
    assert gw.translate_image(b"x") == "Halo"
    assert gw.translate_image(b"x") == ""


def test_mock_gateway_demo_script_cycles():
    gw = MockGateway(StatusStore())
    out = [gw.translate_image(b"x") for _ in range(len(SAMPLE_PHRASES) + 1)]
    assert out == SAMPLE_PHRASES + SAMPLE_PHRASES[:1]
