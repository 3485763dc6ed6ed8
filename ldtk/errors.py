"""Exceptions raised by the LDtk ingestion pipeline."""


class LDtkError(Exception):
    """Base class for every error raised while reading LDtk data."""


class ProjectReadError(LDtkError):
    """The project file could not be read from its source."""


class ProjectFormatError(LDtkError):
    """The project document is not valid JSON or does not match the schema."""


class LevelNotFoundError(LDtkError, KeyError):
    """No parsed level exists under the requested identifier."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class FieldNotFoundError(LDtkError, KeyError):
    """An entity instance has no field with the requested name."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class FieldDecodeError(LDtkError, ValueError):
    """A field exists but its value is not of the requested type."""
