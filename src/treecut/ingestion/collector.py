"""Concurrent source tree collection.

A producer thread walks the tree and validates every file name, pushing
accepted entries onto a bounded queue that the calling thread drains. The
producer's outcome travels through a separate single-slot queue that is only
read after the result stream has ended, so the producer has always finished
by the time an error is raised.
"""

from __future__ import annotations

import logging
import os
import queue
import stat
import threading
from pathlib import Path
from typing import Callable, List, TypeVar

from treecut.exceptions import CollectionError
from treecut.models import FileRecord
from treecut.utils.files import iter_tree
from treecut.utils.names import ensure_valid_file_name

LOGGER = logging.getLogger(__name__)

QUEUE_CAPACITY = 100

T = TypeVar("T")

_DONE = object()


def _walk_files(root: Path, emit: Callable[[Path, os.stat_result], None]) -> None:
    for path, info in iter_tree(root):
        if stat.S_ISDIR(info.st_mode):
            continue
        ensure_valid_file_name(path.name, path)
        emit(path, info)


def _collect(root: Path, make_item: Callable[[Path, os.stat_result], T]) -> List[T]:
    items: queue.Queue = queue.Queue(maxsize=QUEUE_CAPACITY)
    outcome: queue.Queue = queue.Queue(maxsize=1)

    def produce() -> None:
        try:
            _walk_files(root, lambda path, info: items.put(make_item(path, info)))
        except Exception as exc:  # handed to the consumer below
            outcome.put(exc)
        else:
            outcome.put(None)
        finally:
            items.put(_DONE)

    producer = threading.Thread(target=produce, name="treecut-walk", daemon=True)
    producer.start()

    results: List[T] = []
    while True:
        item = items.get()
        if item is _DONE:
            break
        LOGGER.debug("Collected %s", item)
        results.append(item)
    producer.join()

    error = outcome.get()
    if error is None:
        return results
    if isinstance(error, CollectionError):
        raise error
    if isinstance(error, FileNotFoundError):
        raise CollectionError(f"directory does not exist: {error.filename}") from error
    if isinstance(error, PermissionError):
        raise CollectionError(f"permission denied: {error.filename}") from error
    if isinstance(error, OSError):
        raise CollectionError(f"failed to walk {root}: {error}") from error
    raise error


def collect_paths(source_dir: Path) -> List[Path]:
    """Return every file path under ``source_dir``.

    Raises CollectionError (or InvalidFilenameError) without partial results.
    """
    paths = _collect(Path(source_dir), lambda path, info: path)
    LOGGER.info("Collected %d files from %s", len(paths), source_dir)
    return paths


def collect_with_size(source_dir: Path) -> List[FileRecord]:
    """Like collect_paths, but pair each path with its byte length."""
    records = _collect(
        Path(source_dir), lambda path, info: FileRecord(path=path, size=info.st_size)
    )
    LOGGER.info("Collected %d files from %s", len(records), source_dir)
    return records
