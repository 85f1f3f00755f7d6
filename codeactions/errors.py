"""Exception hierarchy for code-actions-diff."""

from __future__ import annotations


class CodeActionsError(Exception):
    """Base class for errors raised by this package."""


class InvalidEncodingError(CodeActionsError):
    """Offset encoding name is not one of utf-8, utf-16 or utf-32."""

    def __init__(self, encoding: object) -> None:
        super().__init__(f"Invalid encoding: {encoding!r}")
        self.encoding = encoding


class PositionOutOfRangeError(CodeActionsError):
    """Character index points past the end of its line."""

    def __init__(self, index: int, encoding: str) -> None:
        super().__init__(f"Index {index} is out of range for {encoding} line")
        self.index = index
        self.encoding = encoding


class InvalidLineEndingModeError(CodeActionsError):
    """Document declares a file format with no known line terminator."""

    def __init__(self, fileformat: object) -> None:
        super().__init__(f"Invalid fileformat: {fileformat!r}")
        self.fileformat = fileformat


class PayloadError(CodeActionsError):
    """Edit payload does not have the expected protocol shape."""


__all__ = [
    "CodeActionsError",
    "InvalidEncodingError",
    "InvalidLineEndingModeError",
    "PayloadError",
    "PositionOutOfRangeError",
]
