from abc import ABC, abstractmethod

class CameraAdapter(ABC):
    accepts_pushed_frames = False

    @abstractmethod
    def open(self):
        """Acquire the video source. Raises CameraAccessError / CameraPermissionError."""
        ...

    @abstractmethod
    def capture_bytes(self) -> bytes | None:
        """Capture one frame. Returns JPEG bytes or None on failure."""
        ...

    @abstractmethod
    def release(self):
        """Release the video source. Safe to call when nothing is held."""
        ...

    @property
    @abstractmethod
    def is_open(self) -> bool:
        ...
