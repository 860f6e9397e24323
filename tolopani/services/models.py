from pydantic import BaseModel
from typing import Literal, Optional

StateName = Literal["IDLE", "STARTING", "CAPTURING", "TRANSLATING", "STOPPING", "ERROR"]

class CommandResponse(BaseModel):
    ok: bool
    state: StateName
    error_code: Optional[str] = None
    error: Optional[str] = None

class SummarizeResponse(BaseModel):
    ok: bool
    summary: Optional[str] = None
    cached: bool = False
    error_code: Optional[str] = None
    error: Optional[str] = None

class StatusResponse(BaseModel):
    state: StateName
    status_message: str          # localized line shown under the camera feed
    is_active: bool
    busy: bool                   # a tick's capture/translate is outstanding
    phrases: list[str]
    summary: Optional[str] = None
    summary_stale: bool = False  # last summarize failed; summary is from an earlier attempt
    summarizing: bool = False
    can_summarize: bool = False
    error: Optional[str] = None
    error_code: Optional[str] = None
    capture_interval_s: float
    logs: list[str]

class FrameRequest(BaseModel):
    image: str  # base64 JPEG, with or without a data: URL prefix

class FrameResponse(BaseModel):
    ok: bool
    error: Optional[str] = None

class HealthResponse(BaseModel):
    api: bool = True
    gateway_adapter: str
    gateway_ready: bool
    camera_adapter: str
    accepts_pushed_frames: bool
