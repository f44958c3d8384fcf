class ProcessingFormatsError(Exception):
    """Base class for structural conversion failures."""


class TimeFormatError(ProcessingFormatsError, ValueError):
    pass


class JsonParseError(ProcessingFormatsError, ValueError):
    def __init__(self, reason: str, line: int | None = None, column: int | None = None,
                 position: int | None = None):
        self.reason = reason
        self.line = line
        self.column = column
        self.position = position
        if line is not None and column is not None:
            super().__init__(f"{reason}: line {line} column {column} (char {position})")
        else:
            super().__init__(reason)


class EntityTypeError(ProcessingFormatsError, TypeError):
    """Raised when an entity is built from a JSON node that is not an object."""
