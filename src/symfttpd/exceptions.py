from __future__ import annotations

from typing import Any, Dict, Mapping


class SymfttpdError(Exception):
    """Base exception for symfttpd."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class NotFoundError(SymfttpdError, FileNotFoundError):
    """Raised when the project path, web directory or a config file is missing."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        SymfttpdError.__init__(self, message, context=context)
        FileNotFoundError.__init__(self, message)


class ExecutableNotFoundError(SymfttpdError, FileNotFoundError):
    """Raised when an external binary (lighttpd, php-cgi) cannot be located."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        SymfttpdError.__init__(self, message, context=context)
        FileNotFoundError.__init__(self, message)


class RenderError(SymfttpdError, ValueError):
    """Raised when a template cannot be rendered (missing or invalid parameter)."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        SymfttpdError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class ConfigurationError(SymfttpdError, ValueError):
    """Raised when a configuration file is unreadable or fails schema validation."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        SymfttpdError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


__all__ = [
    "SymfttpdError",
    "NotFoundError",
    "ExecutableNotFoundError",
    "RenderError",
    "ConfigurationError",
]
