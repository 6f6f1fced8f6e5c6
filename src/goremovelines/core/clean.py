import logging
from pathlib import Path

from goremovelines.core.modes import Mode
from goremovelines.core.parser import parse
from goremovelines.core.walker import TreeWalker, snapshot
from goremovelines.errors import IterationLimitError
from goremovelines.models import CleanOptions

logger = logging.getLogger(__name__)


def clean_bytes(source: bytes, options: CleanOptions | None = None) -> bytes:
    """Remove blank lines from ``source`` until a full walk makes no edit.

    Every successful trim invalidates the tree, so the buffer is parsed again
    before the next walk. Each iteration removes one line, which bounds the
    loop by the number of lines in the input.
    """
    options = options or CleanOptions()
    buffer = source
    iterations = 0

    while True:
        if options.debug:
            logger.debug("Cleaning\n%s", snapshot(buffer))
        tree = parse(buffer)
        if options.mode == Mode.NONE:
            return buffer

        edited = TreeWalker(buffer, options).walk(tree)
        if edited is None:
            logger.debug("Settled after %d edit(s)", iterations)
            return buffer

        iterations += 1
        if options.max_iterations is not None and iterations > options.max_iterations:
            raise IterationLimitError(options.max_iterations)
        buffer = edited


def clean(source: str, options: CleanOptions | None = None) -> str:
    return clean_bytes(source.encode("utf-8"), options).decode("utf-8")


def clean_file(path: str | Path, options: CleanOptions | None = None) -> str:
    """Read a Go file and return its cleaned text; the file itself is left untouched."""
    file_path = Path(path)
    try:
        source = file_path.read_bytes()
    except FileNotFoundError:
        raise FileNotFoundError(f"File not found: {path}") from None
    return clean_bytes(source, options).decode("utf-8")
