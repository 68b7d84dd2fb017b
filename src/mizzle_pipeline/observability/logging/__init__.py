"""Observability – structured logging ports and helpers."""
from mizzle_pipeline.observability.logging.protocol import Logger
from mizzle_pipeline.observability.logging.filters import DEFAULT_SENSITIVE_FIELDS, SensitiveFieldsFilter
from mizzle_pipeline.observability.logging.factory import JsonLoggerFactory
from mizzle_pipeline.observability.logging.processors import get_logger

__all__ = [
    "DEFAULT_SENSITIVE_FIELDS",
    "JsonLoggerFactory",
    "Logger",
    "SensitiveFieldsFilter",
    "get_logger",
]
