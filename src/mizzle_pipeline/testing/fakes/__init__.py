"""Testing fakes – in-memory doubles for pipeline collaborators."""
from mizzle_pipeline.testing.fakes.clock import ManualClock
from mizzle_pipeline.testing.fakes.driver import InMemoryCollectionDriver
from mizzle_pipeline.testing.fakes.logger import LogRecord, RecordingLogger

__all__ = [
    "InMemoryCollectionDriver",
    "LogRecord",
    "ManualClock",
    "RecordingLogger",
]
