"""
Exceptions raised by s2dood.
"""


class S2DoodError(Exception):
    """Base class for s2dood errors."""


class UnknownFormatError(S2DoodError, ValueError):
    """Raised when an output format name has no writer."""

    def __init__(self, format_name: str):
        super().__init__(f"Unknown output format: {format_name!r}")
        self.format_name = format_name


class WriterStateError(S2DoodError, RuntimeError):
    """Raised when a writer lifecycle method is called out of order."""
