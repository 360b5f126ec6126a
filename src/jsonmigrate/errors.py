"""Error types raised by jsonmigrate."""

from __future__ import annotations


class JsonMigrationError(Exception):
    """Base error for instrumentation and conversion."""

    def __init__(self, msg: str) -> None:
        super().__init__(msg)
        self.msg = msg


class ConfigurationError(JsonMigrationError, ValueError):
    """The input class or the settings are unusable. Raised before any generation."""


class InstrumentationError(JsonMigrationError, RuntimeError):
    """Code synthesis or reflective access failed. The cause is chained."""


class HelperInitError(JsonMigrationError, ImportError):
    """The strategy required by the host version cannot be loaded."""


class ConversionError(JsonMigrationError, TypeError):
    """A tree node could not be converted between representations."""

    def __init__(self, msg: str, kind: str, direction: str) -> None:
        super().__init__(msg)
        self.kind = kind
        self.direction = direction


class UnsupportedSourceKindError(ConversionError):
    """The value being read is of a kind its representation cannot convert."""

    def __init__(self, kind: str, direction: str) -> None:
        super().__init__(f"Unsupported source kind {kind} ({direction})", kind, direction)


class UnsupportedTargetKindError(ConversionError):
    """The target representation cannot build the requested kind."""

    def __init__(self, kind: str, direction: str) -> None:
        super().__init__(f"Unsupported target kind {kind} ({direction})", kind, direction)
