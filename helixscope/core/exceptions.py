from typing import Iterable, Optional


class SequenceEngineError(ValueError):
    """Base class for deterministic input errors raised by the engine."""


class InvalidFormatError(SequenceEngineError):
    pass


class EmptySequenceError(SequenceEngineError):
    pass


class InvalidCharactersError(SequenceEngineError):
    def __init__(self, invalid_characters: Iterable[str], message: Optional[str] = None):
        self.invalid_characters = "".join(sorted(set(invalid_characters)))
        super().__init__(
            message or f"Sequence contains invalid characters: {self.invalid_characters!r}"
        )


class InvalidPositionError(SequenceEngineError):
    def __init__(self, position: int, length: int, message: Optional[str] = None):
        self.position = position
        self.length = length
        super().__init__(message or f"Position {position} is outside sequence of length {length}")


class InvalidRangeError(SequenceEngineError):
    pass
