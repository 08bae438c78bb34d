"""Filename validation against reserved names and characters.

See https://en.wikipedia.org/wiki/Filename#Reserved_characters_and_words
"""

from __future__ import annotations

import re
from typing import Optional, Tuple

from treecut.exceptions import InvalidFilenameError

MAX_NAME_LENGTH = 255

# Some FAT systems also reject @ and !
INVALID_CHARACTERS = re.compile(r'[\x00-\x1f\\/:*?"<>|@!]')
TRAILING_DOTS_OR_SPACES = re.compile(r"[.\t\n\f\r ]+\Z")

DOS_RESERVED_NAMES = frozenset(
    {"CON", "PRN", "AUX", "NUL", "CLOCK$", "CONFIG$", "SCREEN$", "$IDLE$"}
    | {f"COM{digit}" for digit in range(10)}
    | {f"LPT{digit}" for digit in range(10)}
)

NTFS_METADATA_NAMES = frozenset(
    {
        "$MFT",
        "$MFTMIRR",
        "$LOGFILE",
        "$VOLUME",
        "$ATTRDEF",
        "$BITMAP",
        "$BOOT",
        "$BADCLUS",
        "$SECURE",
        "$UPCASE",
        "$EXTEND",
        "$QUOTA",
        "$OBJID",
        "$REPARSE",
    }
)


def strip_extension(name: str) -> str:
    """Drop everything from the last dot onwards."""
    stem, dot, _ = name.rpartition(".")
    return stem if dot else name


def is_valid_file_name(name: str) -> Tuple[bool, Optional[str]]:
    """Check a basename, returning ``(ok, reason)``; reason is None when valid."""
    normalized = name.strip().upper()

    if not normalized:
        return False, "filename cannot be empty"
    if len(normalized.encode("utf-8")) > MAX_NAME_LENGTH:
        return False, "filename exceeds maximum length"
    if INVALID_CHARACTERS.search(normalized):
        return False, "filename contains invalid characters"

    stem = strip_extension(normalized)
    if stem in DOS_RESERVED_NAMES:
        return False, "filename is a reserved DOS name"
    if stem in NTFS_METADATA_NAMES:
        return False, "filename is a reserved filesystem metadata name"

    if TRAILING_DOTS_OR_SPACES.search(name):
        return False, "filename has trailing dots or spaces"

    return True, None


def ensure_valid_file_name(name: str, path=None) -> None:
    """Raise InvalidFilenameError when ``name`` fails validation."""
    ok, reason = is_valid_file_name(name)
    if not ok:
        raise InvalidFilenameError(path if path is not None else name, reason)
