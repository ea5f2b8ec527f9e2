"""Test isolation for Pulumi mock tests"""

import asyncio

import pytest
from pulumi.runtime.settings import SETTINGS
from pulumi.runtime.sync_await import _ensure_event_loop


@pytest.fixture(autouse=True)
def _drain_pulumi_runtime():
    """Let RPCs left pending by a test finish before the next test starts.

    A test that expects a Pulumi program to raise leaves registrations
    running on the shared event loop; without draining them, their failure
    is reported by whichever test runs next.
    """
    yield
    loop = _ensure_event_loop()
    pending = [task for task in asyncio.all_tasks(loop) if not task.done()]
    if pending and not loop.is_running():
        loop.run_until_complete(
            asyncio.wait(pending, timeout=5)
        )
    SETTINGS.rpc_manager.clear()
    SETTINGS.outputs.clear()
