import asyncio
from typing import List, Optional
from tolopani.orchestrator.contracts import (
    CAPTURE_INTERVAL_S,
    MIN_PHRASES_TO_SUMMARIZE,
    CommandResult,
    SessionSnapshot,
    SessionState,
    SummaryResult,
)
from tolopani.orchestrator import errors
from tolopani.orchestrator.phrases import append_phrase

_STARTABLE = (SessionState.IDLE, SessionState.ERROR)
_RUNNING = (SessionState.CAPTURING, SessionState.TRANSLATING)


class TranslationSession:
    """
    Capture/translate session, driven from a single asyncio loop.

    start -> camera.open -> ticker every `interval_s`
    tick  -> camera.capture_bytes -> gateway.translate_image -> dedup append
    stop  -> cancel ticker -> camera.release

    Blocking adapter calls go through asyncio.to_thread. Every start/stop bumps
    `generation`; a tick result tagged with an older generation is dropped on
    arrival. Summaries are tagged with `run_id` instead.
    """

    def __init__(self, camera, gateway, status_store, cache=None, interval_s: float = CAPTURE_INTERVAL_S):
        self.camera = camera
        self.gateway = gateway
        self.status = status_store
        self.cache = cache
        self.interval_s = interval_s

        self.state = SessionState.IDLE
        self.is_active = False
        self.busy = False
        self.phrases: List[str] = []
        self.summary: Optional[str] = None
        self.summary_stale = False
        self.summarizing = False
        self.last_error: Optional[errors.SessionError] = None
        self.generation = 0
        # Bumped only by start(); summaries outlive stop() but not a new run
        self.run_id = 0

        self._camera_held = False
        # Set while camera.open runs in a worker thread; a superseded open
        # must settle before another run may use the same adapter.
        self._open_pending = False
        self._ticker: Optional[asyncio.Task] = None
        self._tick_task: Optional[asyncio.Task] = None

    # ----- status -----

    @property
    def error(self) -> Optional[str]:
        return self.last_error.message if self.last_error else None

    @property
    def error_code(self) -> Optional[str]:
        return self.last_error.code if self.last_error else None

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            state=self.state,
            is_active=self.is_active,
            busy=self.busy,
            phrases=tuple(self.phrases),
            summary=self.summary,
            summary_stale=self.summary_stale,
            summarizing=self.summarizing,
            error=self.error,
            error_code=self.error_code,
            generation=self.generation,
        )

    def _result(self) -> CommandResult:
        ok = self.state != SessionState.ERROR
        return CommandResult(ok=ok, state=self.state, error_code=self.error_code, error=self.error)

    def _fail(self, err: errors.SessionError):
        self.last_error = err
        self.status.log(f"session: error {err.code}: {err.message}")

    # ----- commands -----

    async def toggle(self) -> CommandResult:
        if self.state in _STARTABLE:
            return await self.start()
        if self.state in _RUNNING:
            return self.stop()
        self.status.log(f"session: toggle ignored in {self.state.value}")
        return self._result()

    async def start(self) -> CommandResult:
        if self.state not in _STARTABLE:
            self.status.log(f"session: start ignored in {self.state.value}")
            return self._result()

        if not self.gateway.ready:
            self._fail(errors.ConfigurationError())
            self.state = SessionState.ERROR
            return self._result()

        if self._open_pending:
            self.status.log("session: start ignored, previous camera open still pending")
            return CommandResult(ok=False, state=self.state, error_code=errors.ERR_BUSY, error=self.error)

        self.last_error = None
        self.phrases = []
        self.summary = None
        self.summary_stale = False
        self.busy = False
        self.run_id += 1
        self.generation += 1
        gen = self.generation
        self.state = SessionState.STARTING
        self.is_active = True
        self.status.log(f"session: start gen={gen}")

        self._open_pending = True
        try:
            await asyncio.to_thread(self.camera.open)
        except errors.CameraAccessError as e:
            if gen != self.generation:
                return self._result()
            self._fail(e)
            self.state = SessionState.ERROR
            self.is_active = False
            return self._result()
        except OSError as e:
            if gen != self.generation:
                return self._result()
            self.status.log(f"session: camera OSError: {e}")
            self._fail(errors.CameraAccessError())
            self.state = SessionState.ERROR
            self.is_active = False
            return self._result()
        finally:
            self._open_pending = False

        if gen != self.generation:
            # stop() ran while the camera was opening; no newer run can hold
            # the adapter because start() refuses while an open is pending
            self.status.log(f"session: gen={gen} superseded during camera open, releasing")
            self.camera.release()
            return self._result()

        self._camera_held = True
        self.state = SessionState.CAPTURING
        self._ticker = asyncio.create_task(self._run_ticker(gen))
        self.status.log(f"session: capturing every {self.interval_s:g}s")
        return self._result()

    def stop(self) -> CommandResult:
        if self.state == SessionState.IDLE:
            return self._result()

        self.state = SessionState.STOPPING
        self.generation += 1
        self.status.log("session: stopping")

        if self._ticker is not None:
            self._ticker.cancel()
            self._ticker = None
        if self._camera_held:
            self.camera.release()
            self._camera_held = False

        self.is_active = False
        self.busy = False
        self.state = SessionState.IDLE
        self.status.log("session: idle")
        return CommandResult(ok=True, state=self.state, error_code=self.error_code, error=self.error)

    # ----- capture loop -----

    async def _run_ticker(self, gen: int):
        while True:
            await asyncio.sleep(self.interval_s)
            if gen != self.generation or not self.is_active:
                return
            if self.busy:
                self.status.log("session: tick skipped (previous still running)")
                continue
            self._tick_task = asyncio.create_task(self.tick())
            self._tick_task.add_done_callback(self._tick_done)

    def _tick_done(self, task: asyncio.Task):
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            self.status.log(f"session: tick crashed {type(exc).__name__}: {exc}")

    async def tick(self) -> bool:
        """One capture -> translate step. Returns False when skipped."""
        if not self.is_active or self.state not in _RUNNING:
            return False
        if self.busy:
            return False

        gen = self.generation
        self.busy = True
        self.state = SessionState.TRANSLATING
        try:
            frame = await asyncio.to_thread(self.camera.capture_bytes)
            if gen != self.generation:
                return False
            if not frame:
                self.status.log("session: no frame available")
                return True

            try:
                text = await asyncio.to_thread(self.gateway.translate_image, frame)
            except errors.GatewayError as e:
                if gen != self.generation:
                    self.status.log(f"session: late failure from gen={gen} dropped")
                    return False
                self.status.log(f"session: gateway error: {e}")
                self._fail(errors.TranslationError())
                self.stop()
                return True

            if gen != self.generation:
                self.status.log(f"session: late result from gen={gen} dropped")
                return False
            if append_phrase(self.phrases, text):
                self.status.log(f"session: phrase #{len(self.phrases)} '{text}'")
            return True
        finally:
            if gen == self.generation:
                self.busy = False
                if self.is_active:
                    self.state = SessionState.CAPTURING

    # ----- summary -----

    @staticmethod
    def _cache_key(phrases: List[str]) -> str:
        return "summary:" + "\x1f".join(phrases)

    async def summarize(self) -> SummaryResult:
        if len(self.phrases) < MIN_PHRASES_TO_SUMMARIZE:
            return SummaryResult(ok=False, summary=self.summary)
        if self.summarizing:
            return SummaryResult(ok=False, summary=self.summary, error_code=errors.ERR_BUSY)

        phrases = list(self.phrases)
        run = self.run_id
        self.last_error = None

        key = self._cache_key(phrases)
        if self.cache is not None:
            hit = self.cache.get(key)
            if hit is not None:
                self.summary = hit
                self.summary_stale = False
                self.status.log("session: summary from cache")
                return SummaryResult(ok=True, summary=hit, cached=True)

        self.summarizing = True
        self.status.log(f"session: summarizing {len(phrases)} phrases")
        try:
            text = await asyncio.to_thread(self.gateway.summarize, phrases)
        except errors.GatewayError as e:
            self.status.log(f"session: summarize gateway error: {e}")
            if run != self.run_id:
                return SummaryResult(ok=False, summary=self.summary)
            self._fail(errors.SummarizationError())
            if self.summary is not None:
                self.summary_stale = True
            return SummaryResult(ok=False, summary=self.summary, error_code=self.error_code, error=self.error)
        finally:
            self.summarizing = False

        if self.cache is not None:
            self.cache.set(key, text)
        if run != self.run_id:
            self.status.log("session: summary for a previous run dropped")
            return SummaryResult(ok=False, summary=self.summary)
        self.summary = text
        self.summary_stale = False
        return SummaryResult(ok=True, summary=text)
