"""
Lazily loaded, memoized model sessions.
"""
import asyncio
from typing import Optional, Sequence

from ..domain.entities import ModelSessions
from ..domain.protocols import ArtifactStore, SessionFactory
from ...common.exceptions import ModelLoadError
from ...common.logging import setup_logger
from ...common.metrics import MetricsCollector

STAGE_NAMES = ("stage1", "stage2")


class ModelSessionCache:
    """
    Holds the stage1/stage2 sessions for the lifetime of the application.

    The first acquire() loads both artifacts concurrently and builds both
    sessions; later calls return the cached pair without I/O. Concurrent first
    callers share a single load. A failed load leaves the cache empty so the
    next call retries both models from scratch.
    """

    def __init__(
        self,
        artifact_store: ArtifactStore,
        session_factory: SessionFactory,
        metrics_collector: Optional[MetricsCollector] = None,
        stage_names: Sequence[str] = STAGE_NAMES
    ):
        if len(stage_names) != 2:
            raise ValueError("Exactly two stage names are required")
        self.artifact_store = artifact_store
        self.session_factory = session_factory
        self.metrics_collector = metrics_collector
        self.stage_names = tuple(stage_names)
        self.load_count = 0
        self._sessions = ModelSessions()
        # Created on first acquire() so it belongs to the serving event loop
        self._lock: Optional[asyncio.Lock] = None
        self.logger = setup_logger(__name__)

    @property
    def is_loaded(self) -> bool:
        return self._sessions.complete

    async def acquire(self) -> ModelSessions:
        if self._sessions.complete:
            return self._sessions

        if self._lock is None:
            self._lock = asyncio.Lock()
        async with self._lock:
            # Another caller may have finished loading while we waited
            if self._sessions.complete:
                return self._sessions
            self._sessions = await self._load()
            return self._sessions

    async def _load(self) -> ModelSessions:
        self.load_count += 1
        if self.metrics_collector:
            self.metrics_collector.record_artifact_load()
        first, second = self.stage_names
        try:
            buffers = await asyncio.gather(
                asyncio.to_thread(self.artifact_store.load, first),
                asyncio.to_thread(self.artifact_store.load, second)
            )
            sessions = await asyncio.gather(
                *(asyncio.to_thread(self.session_factory.create, buffer) for buffer in buffers)
            )
        except Exception as e:
            self.logger.error(f"Failed to load models: {e}", exc_info=True)
            raise ModelLoadError(f"Failed to load models: {e}") from e

        self.logger.info(f"Loaded model sessions: {first}, {second}")
        return ModelSessions(stage1=sessions[0], stage2=sessions[1])

    def clear(self):
        """Drops cached sessions; the next acquire() reloads from the store."""
        self._sessions = ModelSessions()
