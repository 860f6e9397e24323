"""
Claude gateway (claude-haiku-4-5 by default) via the Anthropic SDK.

Requires ANTHROPIC_API_KEY in environment (tolopani/.env or system env).
"""
import base64
from typing import List
import anthropic
from tolopani.adapters.gateway.base import InferenceGateway, TRANSLATE_PROMPT, build_summary_prompt
from tolopani.orchestrator.errors import GatewayError
from tolopani.services.config import CLAUDE_DEFAULT_MODEL


class ClaudeGateway(InferenceGateway):
    def __init__(self, status_store, api_key: str | None, model: str = CLAUDE_DEFAULT_MODEL,
                 timeout: float = 30.0, client=None):
        self.status = status_store
        self.model = model
        self._client = client
        self.ready = False
        if self._client is None and api_key:
            self._client = anthropic.Anthropic(api_key=api_key, timeout=timeout)
        if self._client is not None:
            self.ready = True
            self.status.log(f"claude_gateway: ready ({model})")
        else:
            self.status.log("claude_gateway: ANTHROPIC_API_KEY not set")

    def translate_image(self, image_bytes: bytes) -> str:
        b64 = base64.standard_b64encode(image_bytes).decode("utf-8")
        content = [
            {
                "type": "image",
                "source": {
                    "type": "base64",
                    "media_type": "image/jpeg",
                    "data": b64,
                },
            },
            {"type": "text", "text": TRANSLATE_PROMPT},
        ]
        text = self._create(content, what="translate")
        self.status.log(f"claude_gateway: translate -> '{text}'")
        return text

    def summarize(self, phrases: List[str]) -> str:
        text = self._create(build_summary_prompt(phrases), what="summarize")
        self.status.log(f"claude_gateway: summarize -> '{text}'")
        return text

    def _create(self, content, what: str) -> str:
        if not self.ready:
            raise GatewayError("ANTHROPIC_API_KEY is not set")
        try:
            message = self._client.messages.create(
                model=self.model,
                max_tokens=256,
                messages=[{"role": "user", "content": content}],
            )
        except anthropic.APIError as e:
            self.status.log(f"claude_gateway: {what} API error: {e}")
            raise GatewayError(f"Failed to get {what} result from Claude API.") from e
        return "".join(
            block.text for block in message.content if getattr(block, "type", None) == "text"
        ).strip()
