from __future__ import annotations

from typing import Any, Dict, Mapping


class ComposerError(Exception):
    """Base exception for the configuration composer."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
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


class ConfigurationError(ComposerError, ValueError):
    """Raised when the caller supplies invalid or missing required input."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        ComposerError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class ValidationError(ConfigurationError):
    """Raised when bundle metadata does not match its schema."""

    def __init__(
        self,
        message: str,
        *,
        errors: list[str] | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        if errors:
            ctx["errors"] = list(errors)
        super().__init__(message, context=ctx)
        self.errors = list(errors or [])


class EntityParseError(ConfigurationError):
    """Raised when a single agent, command or hook file cannot be parsed."""

    def __init__(
        self,
        message: str,
        *,
        filename: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        if filename:
            ctx["filename"] = filename
        super().__init__(message, context=ctx)


class BundleLoadError(ComposerError, OSError):
    """Raised when a bundle directory cannot be read."""

    def __init__(
        self,
        message: str = "",
        *,
        path: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        if path:
            ctx["path"] = path
        ComposerError.__init__(self, message, context=ctx)
        OSError.__init__(self, message)


__all__ = [
    "ComposerError",
    "ConfigurationError",
    "ValidationError",
    "EntityParseError",
    "BundleLoadError",
]
