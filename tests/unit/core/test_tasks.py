"""Tests for deferred background tasks."""

from threads.core.tasks import DeferredTasks


class TestDeferredTasks:
    """Tests for fire-and-forget scheduling."""

    async def test_runs_task(self):
        """Test that spawned work completes on drain."""
        tasks = DeferredTasks()
        done = []

        async def work():
            done.append(True)

        tasks.spawn(work(), name="work")
        await tasks.drain()
        assert done == [True]
        assert tasks.pending == 0

    async def test_failure_is_swallowed(self):
        """Test that a failing task does not raise into the caller."""
        tasks = DeferredTasks()

        async def broken():
            raise RuntimeError("boom")

        tasks.spawn(broken(), name="broken")
        await tasks.drain()
        assert tasks.pending == 0

    async def test_drain_waits_for_nested_tasks(self):
        """Test that tasks spawned by other tasks are also awaited."""
        tasks = DeferredTasks()
        done = []

        async def inner():
            done.append("inner")

        async def outer():
            tasks.spawn(inner(), name="inner")

        tasks.spawn(outer(), name="outer")
        await tasks.drain()
        assert done == ["inner"]
