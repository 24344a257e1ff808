"""Observability – structlog processors and get_logger helper."""
from __future__ import annotations

from typing import Any

import structlog

from mp_search.kernel.errors import Prefixes


class ExceptionPrefixProcessor:
    """structlog processor that tags repository log events with their backend.

    Events whose message starts with one of the configured prefixes get a
    ``backend`` key naming it, so JSON log lines can be filtered per search
    engine without parsing the message.

    Usage::

        structlog.configure(processors=[ExceptionPrefixProcessor(), ...])
    """

    def __init__(self, prefixes: dict[str, str] | None = None) -> None:
        self._prefixes = prefixes or {
            Prefixes.ELASTICSEARCH: "elasticsearch",
            Prefixes.OPENSEARCH: "opensearch",
        }

    def __call__(
        self,
        logger: Any,           # noqa: ARG002
        method_name: str,      # noqa: ARG002
        event_dict: dict[str, Any],
    ) -> dict[str, Any]:
        event = event_dict.get("event")
        if isinstance(event, str):
            for prefix, backend in self._prefixes.items():
                if event.startswith(prefix):
                    event_dict.setdefault("backend", backend)
                    break
        return event_dict


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Return a bound structlog logger.

    Parameters
    ----------
    name:
        Logger name (typically ``__name__`` of the calling module).
    **initial_values:
        Key-value pairs to bind on the returned logger.
    """
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger


__all__ = ["ExceptionPrefixProcessor", "get_logger"]
