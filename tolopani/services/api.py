import base64
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from tolopani.services.models import (
    CommandResponse, SummarizeResponse, StatusResponse,
    FrameRequest, FrameResponse, HealthResponse,
)
from tolopani.services.cache import ResultCache
from tolopani.services.config import Settings
from tolopani.services.status_store import StatusStore
from tolopani.orchestrator.contracts import STATUS_MESSAGES
from tolopani.orchestrator.state_machine import TranslationSession

logger = logging.getLogger("tolopani")
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[%(asctime)s] %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
logger.setLevel(logging.INFO)


def build_gateway(settings: Settings, status: StatusStore):
    # Values: gemini | claude | mock  (default: gemini)
    name = settings.gateway_adapter
    if name == "gemini":
        from tolopani.adapters.gateway.gemini_gateway import GeminiGateway
        return GeminiGateway(
            status,
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            base_url=settings.gemini_api_base,
            timeout=settings.gateway_timeout_s,
        )
    if name == "claude":
        from tolopani.adapters.gateway.claude_gateway import ClaudeGateway
        return ClaudeGateway(
            status,
            api_key=settings.anthropic_api_key,
            model=settings.claude_model,
            timeout=settings.gateway_timeout_s,
        )
    if name == "mock":
        from tolopani.adapters.gateway.mock_gateway import MockGateway
        return MockGateway(status)
    raise ValueError(f"unknown GATEWAY_ADAPTER: {name}")


def build_camera(settings: Settings, status: StatusStore):
    # Values: cv2 | upload | mock  (default: cv2)
    name = settings.camera_adapter
    if name == "cv2":
        from tolopani.adapters.camera.cv2_camera import CV2Camera
        return CV2Camera(
            status,
            index=settings.camera_index,
            jpeg_quality=settings.jpeg_quality,
            max_width=settings.frame_max_width,
        )
    if name == "upload":
        from tolopani.adapters.camera.upload_camera import UploadCamera
        return UploadCamera(status)
    if name == "mock":
        from tolopani.adapters.camera.mock_camera import MockCamera
        return MockCamera(status)
    raise ValueError(f"unknown CAMERA_ADAPTER: {name}")


def create_app(settings: Settings | None = None, camera=None, gateway=None, status: StatusStore | None = None) -> FastAPI:
    settings = settings or Settings()
    status = status or StatusStore()
    gateway = gateway or build_gateway(settings, status)
    camera = camera or build_camera(settings, status)
    status.log(f"gateway adapter: {type(gateway).__name__} ready={gateway.ready}")
    status.log(f"camera adapter: {type(camera).__name__}")

    session = TranslationSession(
        camera=camera,
        gateway=gateway,
        status_store=status,
        interval_s=settings.capture_interval_s,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        cache = ResultCache() if settings.summary_cache else None
        session.cache = cache
        status.log("api: startup")
        yield
        session.stop()
        session.cache = None
        if cache is not None:
            cache.clear()
        status.log("api: shutdown")

    app = FastAPI(title="tolopani-sign", lifespan=lifespan)
    app.state.session = session
    app.state.status = status
    app.state.camera = camera
    app.state.gateway = gateway

    def _command(result) -> CommandResponse:
        return CommandResponse(ok=result.ok, state=result.state.value, error_code=result.error_code, error=result.error)

    @app.get("/status", response_model=StatusResponse)
    async def get_status():
        snap = session.snapshot()
        return StatusResponse(
            state=snap.state.value,
            status_message=STATUS_MESSAGES[snap.state],
            is_active=snap.is_active,
            busy=snap.busy,
            phrases=list(snap.phrases),
            summary=snap.summary,
            summary_stale=snap.summary_stale,
            summarizing=snap.summarizing,
            can_summarize=snap.can_summarize,
            error=snap.error,
            error_code=snap.error_code,
            capture_interval_s=session.interval_s,
            logs=status.recent(),
        )

    @app.post("/session/toggle", response_model=CommandResponse)
    async def toggle_session():
        return _command(await session.toggle())

    @app.post("/session/start", response_model=CommandResponse)
    async def start_session():
        return _command(await session.start())

    @app.post("/session/stop", response_model=CommandResponse)
    async def stop_session():
        return _command(session.stop())

    @app.post("/summarize", response_model=SummarizeResponse)
    async def summarize():
        r = await session.summarize()
        return SummarizeResponse(ok=r.ok, summary=r.summary, cached=r.cached, error_code=r.error_code, error=r.error)

    @app.post("/frame", response_model=FrameResponse)
    async def push_frame(req: FrameRequest):
        """Browser pushes a JPEG still (canvas.toDataURL output) for the next tick."""
        if not camera.accepts_pushed_frames:
            return FrameResponse(ok=False, error="camera adapter does not accept pushed frames")
        data = req.image.partition(",")[2] if req.image.startswith("data:") else req.image
        try:
            image_bytes = base64.b64decode(data, validate=True)
        except ValueError as e:
            status.log(f"FRAME decode error: {e}")
            return FrameResponse(ok=False, error="base64 decode failed")
        if not image_bytes:
            return FrameResponse(ok=False, error="empty frame")
        if not camera.push(image_bytes):
            return FrameResponse(ok=False, error="no active session")
        return FrameResponse(ok=True)

    @app.get("/health", response_model=HealthResponse)
    async def health():
        return HealthResponse(
            gateway_adapter=type(gateway).__name__,
            gateway_ready=bool(gateway.ready),
            camera_adapter=type(camera).__name__,
            accepts_pushed_frames=camera.accepts_pushed_frames,
        )

    return app
