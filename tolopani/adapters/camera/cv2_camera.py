"""
OpenCV webcam capture adapter.
CAMERA_INDEX env var (default 0) selects the webcam device.
"""
import os
import cv2
from tolopani.adapters.camera.base import CameraAdapter
from tolopani.orchestrator.errors import CameraAccessError, CameraPermissionError

# Same request the browser build made: 720p from the user-facing camera
_REQUEST_WIDTH = 1280
_REQUEST_HEIGHT = 720


class CV2Camera(CameraAdapter):
    def __init__(self, status_store, index: int | None = None, jpeg_quality: int = 80, max_width: int = 1280):
        self.status = status_store
        self._index = index if index is not None else int(os.getenv("CAMERA_INDEX", "0"))
        self._quality = jpeg_quality
        self._max_width = max_width
        self._cap = None

    @property
    def is_open(self) -> bool:
        return self._cap is not None and self._cap.isOpened()

    def _device_path(self) -> str:
        return f"/dev/video{self._index}"

    def _permission_denied(self) -> bool:
        path = self._device_path()
        return os.path.exists(path) and not os.access(path, os.R_OK | os.W_OK)

    def open(self):
        if self.is_open:
            return
        if self._permission_denied():
            self.status.log(f"cv2_camera: permission denied on {self._device_path()}")
            raise CameraPermissionError()
        cap = cv2.VideoCapture(self._index)
        if not cap.isOpened():
            cap.release()
            self.status.log(f"cv2_camera: failed to open device {self._index}")
            raise CameraAccessError()
        cap.set(cv2.CAP_PROP_FRAME_WIDTH, _REQUEST_WIDTH)
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, _REQUEST_HEIGHT)
        self._cap = cap
        self.status.log(f"cv2_camera: opened device {self._index}")

    def capture_bytes(self) -> bytes | None:
        if not self.is_open:
            return None
        ret, frame = self._cap.read()
        if not ret or frame is None:
            self.status.log("cv2_camera: frame capture failed")
            return None
        h, w = frame.shape[:2]
        if self._max_width and w > self._max_width:
            scale = self._max_width / w
            frame = cv2.resize(frame, (self._max_width, int(h * scale)), interpolation=cv2.INTER_AREA)
        ok, buf = cv2.imencode(".jpg", frame, [cv2.IMWRITE_JPEG_QUALITY, self._quality])
        if not ok:
            return None
        return bytes(buf)

    def release(self):
        if self._cap is not None:
            self._cap.release()
            self._cap = None
            self.status.log("cv2_camera: released")
