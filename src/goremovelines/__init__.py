from goremovelines.core.clean import clean, clean_bytes, clean_file
from goremovelines.core.modes import Mode
from goremovelines.errors import CleanError, GoSyntaxError, IterationLimitError
from goremovelines.models import CleanOptions

__all__ = [
    "CleanError",
    "CleanOptions",
    "GoSyntaxError",
    "IterationLimitError",
    "Mode",
    "clean",
    "clean_bytes",
    "clean_file",
]
