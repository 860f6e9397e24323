import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from tolopani.orchestrator.contracts import CAPTURE_INTERVAL_S

ENV_PATH = Path(__file__).resolve().parents[1] / ".env"

GEMINI_DEFAULT_MODEL = "gemini-2.5-flash"
GEMINI_DEFAULT_BASE = "https://generativelanguage.googleapis.com"
CLAUDE_DEFAULT_MODEL = "claude-haiku-4-5-20251001"


def _flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    gateway_adapter: str = "gemini"       # gemini | claude | mock
    gemini_api_key: Optional[str] = None
    gemini_model: str = GEMINI_DEFAULT_MODEL
    gemini_api_base: str = GEMINI_DEFAULT_BASE
    anthropic_api_key: Optional[str] = None
    claude_model: str = CLAUDE_DEFAULT_MODEL
    gateway_timeout_s: float = 30.0
    camera_adapter: str = "cv2"           # cv2 | upload | mock
    camera_index: int = 0
    capture_interval_s: float = CAPTURE_INTERVAL_S
    jpeg_quality: int = 80
    frame_max_width: int = 1280
    summary_cache: bool = False           # memoize summaries in the ResultCache (opt-in)

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            gateway_adapter=os.getenv("GATEWAY_ADAPTER", "gemini").lower(),
            # API_KEY is the name the web build used
            gemini_api_key=os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY") or None,
            gemini_model=os.getenv("GEMINI_MODEL", GEMINI_DEFAULT_MODEL),
            gemini_api_base=os.getenv("GEMINI_API_BASE", GEMINI_DEFAULT_BASE),
            anthropic_api_key=os.getenv("ANTHROPIC_API_KEY") or None,
            claude_model=os.getenv("CLAUDE_MODEL", CLAUDE_DEFAULT_MODEL),
            gateway_timeout_s=float(os.getenv("GATEWAY_TIMEOUT_S", "30")),
            camera_adapter=os.getenv("CAMERA_ADAPTER", "cv2").lower(),
            camera_index=int(os.getenv("CAMERA_INDEX", "0")),
            # never faster than the contract period; shorter periods are for tests via the constructor
            capture_interval_s=max(CAPTURE_INTERVAL_S, float(os.getenv("CAPTURE_INTERVAL_S", str(CAPTURE_INTERVAL_S)))),
            jpeg_quality=int(os.getenv("JPEG_QUALITY", "80")),
            frame_max_width=int(os.getenv("FRAME_MAX_WIDTH", "1280")),
            summary_cache=_flag(os.getenv("SUMMARY_CACHE", "0")),
        )


def load_settings(env_path: Path = ENV_PATH) -> Settings:
    load_dotenv(dotenv_path=env_path, override=False)
    return Settings.from_env()
