class CleanError(Exception):
    """Base class for failures of a clean run."""


class GoSyntaxError(CleanError):
    """The Go parser rejected the buffer, either the input or an edited intermediate."""

    def __init__(self, message: str, *, source: str, line: int, column: int, line_text: str) -> None:
        super().__init__(message)
        self.source = source
        self.line = line
        self.column = column
        self.line_text = line_text


class IterationLimitError(CleanError):
    def __init__(self, limit: int) -> None:
        super().__init__(f"Blank line removal did not settle within {limit} iterations")
        self.limit = limit
