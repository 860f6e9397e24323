from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class SessionState(str, Enum):
    IDLE = "IDLE"
    STARTING = "STARTING"
    CAPTURING = "CAPTURING"
    TRANSLATING = "TRANSLATING"
    STOPPING = "STOPPING"
    ERROR = "ERROR"


# Shown under the camera feed while a session runs
STATUS_MESSAGES: dict[SessionState, str] = {
    SessionState.IDLE: "Arahkan kamera ke bahasa isyarat untuk memulai.",
    SessionState.STARTING: "Menginisialisasi kamera...",
    SessionState.CAPTURING: "Menganalisa gerakan...",
    SessionState.TRANSLATING: "Menerjemahkan isyarat...",
    SessionState.STOPPING: "Menghentikan sesi...",
    SessionState.ERROR: "Terjadi kesalahan.",
}

# Tick period. Bounds the gateway call rate, so it is part of the contract.
CAPTURE_INTERVAL_S = 6.0

# Summarize needs at least this many phrases
MIN_PHRASES_TO_SUMMARIZE = 2


@dataclass(frozen=True)
class SessionSnapshot:
    state: SessionState
    is_active: bool
    busy: bool
    phrases: Tuple[str, ...]
    summary: Optional[str] = None
    summary_stale: bool = False
    summarizing: bool = False
    error: Optional[str] = None
    error_code: Optional[str] = None
    generation: int = 0

    @property
    def can_summarize(self) -> bool:
        return len(self.phrases) >= MIN_PHRASES_TO_SUMMARIZE and not self.summarizing


@dataclass
class CommandResult:
    ok: bool
    state: SessionState
    error_code: Optional[str] = None
    error: Optional[str] = None


@dataclass
class SummaryResult:
    ok: bool
    summary: Optional[str] = None
    cached: bool = False
    error_code: Optional[str] = None
    error: Optional[str] = None
