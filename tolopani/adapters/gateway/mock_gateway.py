from collections import deque
from typing import Iterable, List
from tolopani.adapters.gateway.base import InferenceGateway
from tolopani.orchestrator.errors import GatewayError

# Offline demo script, repeated forever when no explicit script is given
SAMPLE_PHRASES = ["Halo", "Terima kasih", "Sama sama"]


class MockGateway(InferenceGateway):
    """Scripted gateway. An explicit script is consumed once, then returns ""."""

    def __init__(self, status_store, translations: Iterable[str] | None = None,
                 summary: str = "Halo, terima kasih.", ready: bool = True,
                 translate_error: Exception | None = None, summarize_error: Exception | None = None):
        self.status = status_store
        self._cycle = translations is None
        self._script = deque(SAMPLE_PHRASES if translations is None else translations)
        self._source = list(self._script)
        self.summary = summary
        self.ready = ready
        self.translate_error = translate_error
        self.summarize_error = summarize_error
        self.translate_calls: List[bytes] = []
        self.summarize_calls: List[List[str]] = []

    def translate_image(self, image_bytes: bytes) -> str:
        self.translate_calls.append(image_bytes)
        if self.translate_error is not None:
            raise GatewayError(str(self.translate_error)) from self.translate_error
        if not self._script and self._cycle:
            self._script.extend(self._source)
        text = self._script.popleft() if self._script else ""
        self.status.log(f"mock_gateway: translate -> '{text}'")
        return text

    def summarize(self, phrases: List[str]) -> str:
        self.summarize_calls.append(list(phrases))
        if self.summarize_error is not None:
            raise GatewayError(str(self.summarize_error)) from self.summarize_error
        self.status.log(f"mock_gateway: summarize -> '{self.summary}'")
        return self.summary
