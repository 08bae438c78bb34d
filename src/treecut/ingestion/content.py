"""Content type sniffing and category collection.

Magic signatures are matched with the ``filetype`` library. Content it does
not recognise is classified as ``text/plain`` when the sampled bytes are
NUL-free UTF-8, and as ``application/octet-stream`` otherwise.
"""

from __future__ import annotations

import codecs
import logging
import stat
from collections import defaultdict
from pathlib import Path

import filetype

from treecut.exceptions import CollectionError
from treecut.models import CategoryMap
from treecut.utils.files import iter_tree

LOGGER = logging.getLogger(__name__)

SNIFF_BYTES = 3072
TEXT_MIME = "text/plain"
BINARY_MIME = "application/octet-stream"


def _looks_like_text(sample: bytes) -> bool:
    if b"\x00" in sample:
        return False
    # The sample may end in the middle of a multi-byte sequence.
    decoder = codecs.getincrementaldecoder("utf-8")()
    try:
        decoder.decode(sample, final=False)
    except UnicodeDecodeError:
        return False
    return True


def sniff_mime(sample: bytes) -> str:
    """Return the MIME type for a leading sample of file content."""
    kind = filetype.guess(sample)
    if kind is not None:
        return kind.mime
    if _looks_like_text(sample):
        return TEXT_MIME
    return BINARY_MIME


def detect_mime(path: Path) -> str:
    with open(path, "rb") as handle:
        sample = handle.read(SNIFF_BYTES)
    return sniff_mime(sample)


def detect_category(path: Path) -> str:
    """Return the top-level MIME token for ``path``, e.g. ``image``."""
    return detect_mime(path).split("/", 1)[0]


def collect_with_category(source_dir: Path) -> CategoryMap:
    """Group every non-empty file under ``source_dir`` by content category.

    File names are not validated here. A file whose content cannot be read is
    logged and left out; a failure walking the tree raises CollectionError.
    """
    categories: CategoryMap = defaultdict(list)
    try:
        for path, info in iter_tree(Path(source_dir)):
            if stat.S_ISDIR(info.st_mode) or info.st_size == 0:
                continue
            try:
                category = detect_category(path)
            except OSError as exc:
                LOGGER.warning("Skipping %s, content detection failed: %s", path, exc)
                continue
            LOGGER.debug("Detected %s as %s", path, category)
            categories[category].append(path)
    except FileNotFoundError as exc:
        raise CollectionError(f"directory does not exist: {exc.filename}") from exc
    except OSError as exc:
        raise CollectionError(f"failed to walk {source_dir}: {exc}") from exc

    LOGGER.info(
        "Collected %d files in %d categories from %s",
        sum(len(files) for files in categories.values()),
        len(categories),
        source_dir,
    )
    return dict(categories)
