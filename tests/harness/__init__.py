"""Test harness for scriptmark.

Re-exports all public API for convenient imports:
    from tests.harness import ManualScheduler, FakeRenderContext, run_preview
"""

from tests.harness.scheduler import ManualScheduler, ManualTimer
from tests.harness.contexts import FakeRenderContext
from tests.harness.app_runner import run_preview

__all__ = [
    "ManualScheduler",
    "ManualTimer",
    "FakeRenderContext",
    "run_preview",
]
