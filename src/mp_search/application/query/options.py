"""Application query – Optionable mixin with allow-list validation."""
from __future__ import annotations

from typing import Any, Self

from mp_search.kernel.errors import UnknownOptionError


class Optionable:
    """Mixin for nodes carrying a string-keyed options bag.

    Subclasses name the accepted keys in :meth:`available_options`; any other
    key is rejected as soon as it is read or written.
    """

    _options: dict[str, Any]

    def available_options(self) -> tuple[str, ...]:
        return ()

    def get_option(self, name: str) -> Any:
        self._validate_option(name)
        return self._options.get(name)

    def set_option(self, name: str, value: Any) -> Self:
        self._validate_option(name)
        self._options[name] = value
        return self

    @property
    def options(self) -> dict[str, Any]:
        """Options that are allowed and set to a value other than ``None``."""
        allowed = self.available_options()
        return {k: v for k, v in self._options.items() if k in allowed and v is not None}

    def _validate_option(self, name: str) -> None:
        if name not in self.available_options():
            raise UnknownOptionError(name)


__all__ = ["Optionable"]
