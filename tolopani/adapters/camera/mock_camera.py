"""Mock camera: serves fixed JPEG bytes and counts open/release calls."""
from tolopani.adapters.camera.base import CameraAdapter

# Minimal JPEG SOI/EOI markers; gateways only ever see opaque bytes
PLACEHOLDER_JPEG = b"\xff\xd8\xff\xe0mock-frame\xff\xd9"


class MockCamera(CameraAdapter):
    def __init__(self, status_store, frame: bytes | None = PLACEHOLDER_JPEG, open_error: Exception | None = None):
        self.status = status_store
        self.frame = frame
        self.open_error = open_error
        self.open_calls = 0
        self.release_calls = 0
        self.capture_calls = 0
        self._open = False

    @property
    def is_open(self) -> bool:
        return self._open

    def open(self):
        self.open_calls += 1
        if self.open_error is not None:
            self.status.log(f"mock_camera: open failed ({type(self.open_error).__name__})")
            raise self.open_error
        self._open = True
        self.status.log("mock_camera: opened")

    def capture_bytes(self) -> bytes | None:
        self.capture_calls += 1
        if not self._open:
            return None
        return self.frame

    def release(self):
        if not self._open:
            return
        self._open = False
        self.release_calls += 1
        self.status.log("mock_camera: released")
