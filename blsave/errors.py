class BlsError(Exception):
    """Base exception for the blsave reader."""


class HeaderError(BlsError):
    """Raised when the save header cannot be decoded at all."""


class TruncatedHeaderError(HeaderError):
    """Raised when the stream ends before the version and description records."""


class StreamReadError(BlsError, OSError):
    """Raised when the underlying stream reports a read failure."""


class BrickError(BlsError):
    """A single brick record was unreadable; iteration continues past it."""

    def __init__(self, message: str, *, line_number: int = 0) -> None:
        super().__init__(message)
        self.line_number = line_number

    def __str__(self) -> str:
        base = super().__str__()
        if self.line_number:
            return f"line {self.line_number}: {base}"
        return base
