"""Path expansion: turns command-line paths into Go source files."""

from __future__ import annotations

import os
import stat
from pathlib import Path
from typing import Iterable, Iterator, Optional, Pattern, Sequence

from ..exceptions import FileAccessError
from ..logging_config import get_logger

logger = get_logger(__name__)


def is_ignored(path: str, ignore: Optional[Pattern[str]]) -> bool:
    return ignore is not None and ignore.search(path) is not None


def _walk_dir(dirname: str, extensions: Sequence[str]) -> Iterator[str]:
    """Yield source files under ``dirname`` in lexical order."""

    def _on_error(err: OSError) -> None:
        logger.warning(f"could not read directory {err.filename!r}: {err.strerror}")

    for root, dirs, files in os.walk(dirname, onerror=_on_error):
        dirs.sort()
        for name in sorted(files):
            if name.endswith(tuple(extensions)):
                yield os.path.join(root, name)


def iter_source_files(
    paths: Iterable[str],
    ignore: Optional[Pattern[str]] = None,
    extensions: Sequence[str] = (".go",),
    errors: Optional[list] = None,
) -> Iterator[str]:
    """Expand paths into source files.

    Directories are walked recursively and only files ending in one of
    ``extensions`` are kept. Files named explicitly are kept whatever their
    suffix. Paths matching ``ignore`` are skipped. A path that does not
    exist is logged, appended to ``errors`` as a FileAccessError, and skipped.
    """
    for path in paths:
        try:
            is_dir = stat.S_ISDIR(os.stat(path).st_mode)
        except OSError as e:
            error = FileAccessError(Path(path), e.strerror or str(e))
            logger.warning(f"could not get file info for path {path!r}: {error.reason}")
            if errors is not None:
                errors.append(error)
            continue

        candidates = _walk_dir(path, extensions) if is_dir else iter([path])
        for candidate in candidates:
            if is_ignored(candidate, ignore):
                logger.debug(f"ignoring {candidate}")
                continue
            yield candidate


def read_source(path: str) -> bytes:
    """Read a source file.

    Raises:
        FileAccessError: If the file cannot be read
    """
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise FileAccessError(Path(path), e.strerror or str(e))
