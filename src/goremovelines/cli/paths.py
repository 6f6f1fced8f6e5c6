import logging
import os
from collections.abc import Callable, Iterable
from pathlib import Path

logger = logging.getLogger(__name__)

_GO_SUFFIX = ".go"
_RECURSIVE_SUFFIX = "/..."


def _is_go_file(path: Path) -> bool:
    return path.suffix == _GO_SUFFIX


def new_path_filter(skip: Iterable[str]) -> Callable[[str], bool]:
    """Return a predicate telling whether a path should be skipped.

    A path is skipped when its base name or the full path is listed in
    ``skip``, or when its base name starts with ``_`` or ``.``.
    """
    names = set(skip)

    def _skip(path: str) -> bool:
        base = os.path.basename(path)
        if base in names or path in names:
            return True
        return base not in (".", "..", "") and base[0] in "_."

    return _skip


def relative_package_path(path: str) -> str:
    if os.path.isabs(path) or path.startswith("."):
        return path
    return "./" + path


def resolve_paths(paths: Iterable[str], skip: Iterable[str] = ()) -> list[str]:
    """Expand ``dir/...`` arguments into the Go files below ``dir``.

    Plain arguments are kept as they are. The result is de-duplicated and
    sorted.
    """
    should_skip = new_path_filter(skip)
    files: set[str] = set()
    for path in paths:
        if path.endswith(_RECURSIVE_SUFFIX):
            root = path[: -len(_RECURSIVE_SUFFIX)] or "."
            files.update(_walk_go_files(root, should_skip))
        else:
            files.add(os.path.normpath(path))

    resolved = sorted(relative_package_path(p) for p in files)
    for p in resolved:
        logger.debug("cleaning path %s", p)
    return resolved


def _walk_go_files(root: str, should_skip: Callable[[str], bool]) -> set[str]:
    found: set[str] = set()
    if should_skip(os.path.normpath(root)):
        return found

    def _on_error(error: OSError) -> None:
        logger.warning("invalid path %r: %s", error.filename, error.strerror)

    for directory, dirnames, filenames in os.walk(root, onerror=_on_error):
        dirnames[:] = sorted(d for d in dirnames if not should_skip(os.path.join(directory, d)))
        for name in filenames:
            full = os.path.join(directory, name)
            if _is_go_file(Path(name)) and not should_skip(full):
                found.add(os.path.normpath(full))
    return found
