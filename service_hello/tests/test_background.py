"""
Tests for BackgroundTaskScope.
"""

import asyncio

import pytest

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))

from service_hello.app.background import BackgroundTaskScope
from shared.metrics import MetricsCollector


class TestBackgroundTaskScope:
    """Test cases for BackgroundTaskScope."""

    @pytest.fixture
    def metrics(self):
        """Metrics collector with its own registry."""
        return MetricsCollector("hello")

    @pytest.fixture
    def scope(self, metrics):
        """Fresh scope."""
        return BackgroundTaskScope(metrics)

    @pytest.mark.asyncio
    async def test_spawned_task_runs_and_is_forgotten(self, scope, metrics):
        """Test a finished task leaves the scope."""
        async def work():
            return "done"

        task = scope.spawn(work(), name="work")
        assert scope.active == 1

        assert await task == "done"
        await asyncio.sleep(0)

        assert scope.active == 0
        assert metrics.sample_value("background_tasks_active") == 0.0

    @pytest.mark.asyncio
    async def test_failures_are_swallowed(self, scope):
        """Test a failing task does not raise out of the scope."""
        async def boom():
            raise RuntimeError("downstream exploded")

        task = scope.spawn(boom(), name="boom")

        assert await task is None
        assert not task.cancelled()

    @pytest.mark.asyncio
    async def test_shutdown_cancels_pending(self, scope):
        """Test shutdown cancels work that is still running."""
        started = asyncio.Event()

        async def slow():
            started.set()
            await asyncio.sleep(60)

        task = scope.spawn(slow(), name="slow")
        await started.wait()

        await scope.shutdown(timeout=1.0)

        assert task.cancelled()
        assert scope.active == 0
        assert scope.closed is True

    @pytest.mark.asyncio
    async def test_spawn_after_shutdown_is_refused(self, scope):
        """Test a closed scope drops new work."""
        await scope.shutdown()

        async def work():
            return "never"

        assert scope.spawn(work(), name="late") is None
