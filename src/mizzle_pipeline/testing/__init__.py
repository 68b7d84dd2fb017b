"""Testing support – fakes for loggers, clocks and storage drivers."""

from mizzle_pipeline.testing.fakes import (
    InMemoryCollectionDriver,
    LogRecord,
    ManualClock,
    RecordingLogger,
)

__all__ = [
    "InMemoryCollectionDriver",
    "LogRecord",
    "ManualClock",
    "RecordingLogger",
]
