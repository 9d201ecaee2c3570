"""Encoding and decoding of the info section of Maildir filenames.

A message in ``cur`` is named ``<key><sep>2,<flags>`` where ``<flags>`` is a
run of single-letter flags in ascending order, e.g. ``1000.host.1:2,RS``.
"""

import os
from typing import Iterable

from .errors import FlagError

DEFAULT_SEPARATOR = ":"

# Non-alphanumeric characters a generated key can contain (hostnames and the
# \057 / \072 escapes)
KEY_CHARS = ".-_\\"

# Conventional flag letters
DRAFT = "D"
FLAGGED = "F"
PASSED = "P"
REPLIED = "R"
SEEN = "S"
TRASHED = "T"

FLAG_NAMES = {
    DRAFT: "draft",
    FLAGGED: "flagged",
    PASSED: "passed",
    REPLIED: "replied",
    SEEN: "seen",
    TRASHED: "trashed",
}


def validate_separator(separator: str) -> str:
    """Return ``separator`` if it can separate a key from its info section."""
    if len(separator) != 1:
        raise ValueError(f"Separator must be a single character: {separator!r}")
    if separator.isalnum() or separator in KEY_CHARS:
        raise ValueError(f"Separator cannot be {separator!r}: keys contain it")
    if separator in ("/", ",", "\0"):
        raise ValueError(f"Separator cannot be {separator!r}")
    return separator


def split_name(name: str, separator: str = DEFAULT_SEPARATOR) -> tuple[str, str | None]:
    """Split a filename into ``(key, info)``; ``info`` is None if absent.

    The info section ends at the next separator, if any; later fields are
    ignored, so ``k:2,S:x`` has info ``2,S``.
    """
    key, sep, rest = os.path.basename(name).partition(separator)
    if not sep:
        return key, None
    return key, rest.split(separator, 1)[0]


def key_of(name: str, separator: str = DEFAULT_SEPARATOR) -> str:
    """Key portion of a filename: everything before the first separator."""
    return split_name(name, separator)[0]


def decode_info(info: str) -> list[str]:
    """Decode an info section (``2,FS``) into its sorted flags."""
    if len(info) < 2 or info[1] != ",":
        raise FlagError(info)
    if info[0] == "1":
        raise FlagError(info, experimental=True)
    if info[0] != "2":
        raise FlagError(info)
    return sorted(info[2:])


def decode_flags(filename: str, separator: str = DEFAULT_SEPARATOR) -> list[str]:
    """Return the flags encoded in ``filename``, sorted ascending.

    A name without an info section has no flags. Malformed info sections raise
    ``FlagError``; version-1 ones raise it with ``experimental=True``.
    """
    _, info = split_name(filename, separator)
    if info is None:
        return []
    return decode_info(info)


def normalize_flags(flags: Iterable[str]) -> str:
    """Sorted, de-duplicated flag string."""
    out = set()
    for flag in flags:
        if len(flag) != 1:
            raise ValueError(f"Flags must be single characters: {flag!r}")
        if flag in (",", "/", "\0"):
            raise ValueError(f"Invalid flag character: {flag!r}")
        out.add(flag)
    return "".join(sorted(out))


def encode_info(flags: Iterable[str]) -> str:
    """Encode ``flags`` as a version 2 info section, e.g. ``"SR"`` -> ``"2,RS"``."""
    return f"2,{normalize_flags(flags)}"


def describe(flags: Iterable[str]) -> list[str]:
    """Human-readable names for ``flags``; unknown letters are kept as-is."""
    return [FLAG_NAMES.get(f, f) for f in flags]
