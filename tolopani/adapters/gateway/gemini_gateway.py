"""
Gemini gateway over the generateContent REST endpoint.
Requires GEMINI_API_KEY (or API_KEY) in tolopani/.env or the environment.

No SDK needed: httpx talks to the REST API directly.
"""
import base64
from typing import List
import httpx
from tolopani.adapters.gateway.base import InferenceGateway, TRANSLATE_PROMPT, build_summary_prompt
from tolopani.orchestrator.errors import GatewayError
from tolopani.services.config import GEMINI_DEFAULT_BASE, GEMINI_DEFAULT_MODEL


class GeminiGateway(InferenceGateway):
    def __init__(
        self,
        status_store,
        api_key: str | None,
        model: str = GEMINI_DEFAULT_MODEL,
        base_url: str = GEMINI_DEFAULT_BASE,
        timeout: float = 30.0,
        client: httpx.Client | None = None,
    ):
        self.status = status_store
        self._api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self._http = client or httpx.Client(timeout=timeout)
        self.ready = bool(api_key)
        if self.ready:
            self.status.log(f"gemini_gateway: ready (model={model})")
        else:
            self.status.log("gemini_gateway: GEMINI_API_KEY not set")

    def translate_image(self, image_bytes: bytes) -> str:
        b64 = base64.standard_b64encode(image_bytes).decode("utf-8")
        contents = [
            {
                "role": "user",
                "parts": [
                    {"inline_data": {"mime_type": "image/jpeg", "data": b64}},
                    {"text": TRANSLATE_PROMPT},
                ],
            }
        ]
        text = self._generate(contents, what="translate")
        self.status.log(f"gemini_gateway: translate -> '{text}'")
        return text

    def summarize(self, phrases: List[str]) -> str:
        contents = [{"role": "user", "parts": [{"text": build_summary_prompt(phrases)}]}]
        text = self._generate(contents, what="summarize")
        self.status.log(f"gemini_gateway: summarize -> '{text}'")
        return text

    def _generate(self, contents: list, what: str) -> str:
        if not self.ready:
            raise GatewayError("GEMINI_API_KEY is not set")
        url = f"{self.base_url}/v1beta/models/{self.model}:generateContent"
        headers = {
            "x-goog-api-key": self._api_key,
            "Content-Type": "application/json",
        }
        try:
            resp = self._http.post(url, json={"contents": contents}, headers=headers)
        except httpx.HTTPError as e:
            self.status.log(f"gemini_gateway: {what} transport error: {e}")
            raise GatewayError(f"Failed to get {what} result from Gemini API.") from e

        if not resp.is_success:
            self.status.log(f"gemini_gateway: {what} HTTP {resp.status_code} — {resp.text[:300]}")
            raise GatewayError(f"Failed to get {what} result from Gemini API (HTTP {resp.status_code}).")

        try:
            return self._extract_text(resp.json())
        except (ValueError, AttributeError, TypeError, KeyError, IndexError) as e:
            self.status.log(f"gemini_gateway: {what} unexpected response body: {e}")
            raise GatewayError(f"Failed to get {what} result from Gemini API.") from e

    @staticmethod
    def _extract_text(data: dict) -> str:
        # No candidates (e.g. safety block) counts as an empty answer
        candidates = data.get("candidates") or []
        if not candidates:
            return ""
        parts = (candidates[0].get("content") or {}).get("parts") or []
        return "".join(p["text"] for p in parts if "text" in p).strip()
