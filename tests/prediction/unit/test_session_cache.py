import pytest
import asyncio
from unittest.mock import MagicMock
from src.prediction.infrastructure.session_cache import ModelSessionCache
from src.common.exceptions import ModelLoadError
from tests.fakes import FakeArtifactStore, FakeSession, FakeSessionFactory

@pytest.fixture
def sessions():
    return {
        "stage1": FakeSession(outputs=[0.1, 0.8, 0.1]),
        "stage2": FakeSession(outputs=[0.9, 0.05, 0.05]),
    }

@pytest.mark.asyncio
async def test_acquire_loads_both_models(sessions):
    store = FakeArtifactStore()
    factory = FakeSessionFactory(sessions)
    cache = ModelSessionCache(store, factory)
    
    loaded = await cache.acquire()
    
    assert loaded.stage1 is sessions["stage1"]
    assert loaded.stage2 is sessions["stage2"]
    assert sorted(store.loads) == ["stage1", "stage2"]
    assert cache.is_loaded

@pytest.mark.asyncio
async def test_second_acquire_does_no_io(sessions):
    store = FakeArtifactStore()
    metrics = MagicMock()
    cache = ModelSessionCache(store, FakeSessionFactory(sessions), metrics_collector=metrics)
    
    first = await cache.acquire()
    second = await cache.acquire()
    
    assert first is second
    assert len(store.loads) == 2
    assert cache.load_count == 1
    metrics.record_artifact_load.assert_called_once()

@pytest.mark.asyncio
async def test_concurrent_first_callers_share_one_load(sessions):
    store = FakeArtifactStore()
    cache = ModelSessionCache(store, FakeSessionFactory(sessions))
    
    results = await asyncio.gather(*(cache.acquire() for _ in range(5)))
    
    assert cache.load_count == 1
    assert len(store.loads) == 2
    assert all(r is results[0] for r in results)

@pytest.mark.asyncio
async def test_failed_load_leaves_cache_empty_and_retries(sessions):
    store = FakeArtifactStore(fail_on="stage2")
    cache = ModelSessionCache(store, FakeSessionFactory(sessions))
    
    with pytest.raises(ModelLoadError) as exc_info:
        await cache.acquire()
    assert "model_stage2.onnx" in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, FileNotFoundError)
    assert not cache.is_loaded
    
    # Store recovers: both models are loaded again from scratch
    store.fail_on = None
    store.loads.clear()
    loaded = await cache.acquire()
    
    assert sorted(store.loads) == ["stage1", "stage2"]
    assert loaded.complete
    assert cache.load_count == 2

@pytest.mark.asyncio
async def test_session_build_failure_is_fatal(sessions):
    factory = MagicMock()
    factory.create.side_effect = [sessions["stage1"], ValueError("corrupt model")]
    cache = ModelSessionCache(FakeArtifactStore(), factory)
    
    with pytest.raises(ModelLoadError):
        await cache.acquire()
    assert not cache.is_loaded

@pytest.mark.asyncio
async def test_clear_forces_reload(sessions):
    store = FakeArtifactStore()
    cache = ModelSessionCache(store, FakeSessionFactory(sessions))
    
    await cache.acquire()
    cache.clear()
    assert not cache.is_loaded
    await cache.acquire()
    
    assert cache.load_count == 2

def test_requires_two_stages():
    with pytest.raises(ValueError):
        ModelSessionCache(FakeArtifactStore(), MagicMock(), stage_names=("stage1",))

def test_cache_built_outside_event_loop_serves_concurrent_callers(sessions):
    # Mirrors run_server.py: the cache is wired before uvicorn starts its loop
    store = FakeArtifactStore()
    cache = ModelSessionCache(store, FakeSessionFactory(sessions))
    assert cache._lock is None

    async def contend():
        return await asyncio.gather(*(cache.acquire() for _ in range(4)))

    results = asyncio.run(contend())

    assert cache.load_count == 1
    assert len(store.loads) == 2
    assert all(r is results[0] for r in results)
