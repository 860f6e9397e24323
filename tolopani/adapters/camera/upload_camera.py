"""
Browser-fed camera.

The page owns getUserMedia and posts JPEG stills to /frame; each tick
translates the most recent one. A frame is consumed once so a stalled
browser does not get the same image translated over and over.
"""
from tolopani.adapters.camera.base import CameraAdapter


class UploadCamera(CameraAdapter):
    accepts_pushed_frames = True

    def __init__(self, status_store):
        self.status = status_store
        self._open = False
        self._latest: bytes | None = None

    @property
    def is_open(self) -> bool:
        return self._open

    def open(self):
        self._open = True
        self._latest = None
        self.status.log("upload_camera: waiting for browser frames")

    def push(self, jpeg_bytes: bytes) -> bool:
        if not self._open:
            return False
        self._latest = jpeg_bytes
        return True

    def capture_bytes(self) -> bytes | None:
        frame, self._latest = self._latest, None
        return frame

    def release(self):
        if self._open:
            self.status.log("upload_camera: released")
        self._open = False
        self._latest = None
