"""Observability – structured logging ports and helpers."""
from mp_search.observability.logging.factory import JsonLoggerFactory
from mp_search.observability.logging.processors import ExceptionPrefixProcessor, get_logger
from mp_search.observability.logging.protocol import Logger

__all__ = [
    "ExceptionPrefixProcessor",
    "JsonLoggerFactory",
    "Logger",
    "get_logger",
]
