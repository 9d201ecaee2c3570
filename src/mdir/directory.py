"""A single Maildir directory (``tmp``/``new``/``cur``).

``Dir`` holds nothing but a path and a separator. Every call goes back to the
filesystem, and every state change is a single ``rename``/``link``, so any
number of processes can share a mailbox without locking.
"""

import glob
import logging
import os
from email import policy as email_policy
from email.message import EmailMessage
from email.parser import BytesParser
from email.policy import Policy
from pathlib import Path
from typing import Iterable

from .errors import KeyMatchError, UnseenError
from .flags import (
    DEFAULT_SEPARATOR,
    SEEN,
    decode_flags,
    encode_info,
    key_of,
    normalize_flags,
    validate_separator,
)
from .keys import KeyGenerator, default_generator
from .parsing import parse_header_file

logger = logging.getLogger(__name__)

SUBDIRS = ("tmp", "new", "cur")
SEEN_INFO = encode_info(SEEN)


class Dir:
    """Handle on one Maildir directory."""

    def __init__(
        self,
        path: str | Path,
        separator: str = DEFAULT_SEPARATOR,
        policy: Policy = email_policy.default,
    ):
        self.path = Path(path)
        self.separator = validate_separator(separator)
        self.policy = policy

    def __repr__(self) -> str:
        return f"Dir({str(self.path)!r})"

    @property
    def tmp(self) -> Path:
        return self.path / "tmp"

    @property
    def new(self) -> Path:
        return self.path / "new"

    @property
    def cur(self) -> Path:
        return self.path / "cur"

    @classmethod
    def create(cls, path: str | Path, mode: int = 0o700, **kwargs) -> "Dir":
        """Create ``path`` with its ``tmp``, ``new`` and ``cur`` subdirectories.

        Existing directories are left alone.
        """
        d = cls(path, **kwargs)
        for sub in SUBDIRS:
            (d.path / sub).mkdir(mode=mode, parents=True, exist_ok=True)
        return d

    def is_maildir(self) -> bool:
        """Whether ``tmp``, ``new`` and ``cur`` all exist."""
        return all((self.path / sub).is_dir() for sub in SUBDIRS)

    def _names(self, sub: Path) -> list[str]:
        """Entry names of ``sub``, skipping dotfiles."""
        return [n for n in os.listdir(sub) if not n.startswith(".")]

    def paths(self, sub: str = "cur") -> list[Path]:
        """Message paths in ``cur`` (or ``new``), skipping dotfiles."""
        if sub not in ("new", "cur"):
            raise ValueError(f"Not a message directory: {sub}")
        base = self.path / sub
        return [base / n for n in self._names(base)]

    # --- Listing and lookup ---

    def keys(self) -> list[str]:
        """Keys of the messages in ``cur``, in directory order."""
        return [key_of(n, self.separator) for n in self._names(self.cur)]

    def new_keys(self) -> list[str]:
        """Keys of the messages waiting in ``new``. Nothing is moved."""
        return [key_of(n, self.separator) for n in self._names(self.new)]

    def filename(self, key: str) -> Path:
        """Path of the single file in ``cur`` whose name starts with ``key``.

        Raises ``KeyMatchError`` when no file or several files match; a key
        that is a prefix of another key is ambiguous, not "first match". A key
        containing a path separator never matches.
        """
        if os.sep in key or (os.altsep and os.altsep in key):
            raise KeyMatchError(key, 0)
        pattern = os.path.join(glob.escape(os.fspath(self.cur)), glob.escape(key) + "*")
        matches = sorted(glob.glob(pattern))
        if len(matches) != 1:
            raise KeyMatchError(key, len(matches))
        return Path(matches[0])

    def flags(self, key: str) -> list[str]:
        """Flags of the message ``key``, sorted ascending."""
        return decode_flags(self.filename(key).name, self.separator)

    # --- State transitions ---

    def unseen(self) -> list[str]:
        """Move every message from ``new`` into ``cur``, marking it seen.

        Returns the keys moved. Each message is one atomic rename; if one
        fails, the ones before it stay moved and ``UnseenError`` reports them.
        A message that vanished before its rename was taken by another reader
        and is skipped.
        """
        moved: list[str] = []
        for name in self._names(self.new):
            key = key_of(name, self.separator)
            src = self.new / name
            dst = self.cur / f"{name}{self.separator}{SEEN_INFO}"
            try:
                os.rename(src, dst)
            except OSError as e:
                if isinstance(e, FileNotFoundError) and not src.exists():
                    logger.warning("%s: %s left new before it could be moved", self.path, name)
                    continue
                raise UnseenError(moved, key, e) from e
            logger.debug("%s: new/%s -> cur/%s", self.path, name, dst.name)
            moved.append(key)
        return moved

    def set_info(self, key: str, info: str) -> Path:
        """Rename message ``key`` to ``<key><sep><info>``.

        ``key`` may be any unambiguous prefix; the stored key is kept.
        ``info`` is written verbatim; use ``set_flags`` for a normalized
        version 2 info section.
        """
        src = self.filename(key)
        dst = self.cur / f"{key_of(src.name, self.separator)}{self.separator}{info}"
        if src != dst:
            os.rename(src, dst)
            logger.debug("%s: cur/%s -> cur/%s", self.path, src.name, dst.name)
        return dst

    def set_flags(self, key: str, flags: Iterable[str]) -> Path:
        """Replace the flags of message ``key``."""
        return self.set_info(key, encode_info(flags))

    def add_flags(self, key: str, flags: Iterable[str]) -> Path:
        return self.set_flags(key, self.flags(key) + list(flags))

    def remove_flags(self, key: str, flags: Iterable[str]) -> Path:
        drop = set(normalize_flags(flags))
        return self.set_flags(key, [f for f in self.flags(key) if f not in drop])

    # --- Delivery ---

    def deliver(
        self,
        raw: bytes,
        generator: KeyGenerator | None = None,
        flags: Iterable[str] | None = None,
    ) -> str:
        """Deliver ``raw`` and return its key.

        The message is written and synced under ``tmp``, then hard-linked into
        ``new`` (or straight into ``cur`` when ``flags`` is given). Linking
        never replaces an existing file, so a duplicate key raises
        ``FileExistsError``.
        """
        key = (generator or default_generator()).generate()
        tmp_path = self.tmp / key
        if flags is None:
            dst = self.new / key
        else:
            dst = self.cur / f"{key}{self.separator}{encode_info(flags)}"

        fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(raw)
                f.flush()
                os.fsync(f.fileno())
            os.link(tmp_path, dst)
        finally:
            tmp_path.unlink(missing_ok=True)
        logger.debug("%s: delivered %s (%d bytes)", self.path, dst.name, len(raw))
        return key

    # --- Message access ---

    def header(self, key: str) -> EmailMessage:
        """Parse just the header block of message ``key``."""
        return parse_header_file(self.filename(key), self.policy)

    def message(self, key: str) -> EmailMessage:
        """Read and parse message ``key``."""
        raw = self.filename(key).read_bytes()
        return BytesParser(policy=self.policy).parsebytes(raw)

    def raw(self, key: str) -> bytes:
        """Bytes of message ``key`` as stored."""
        return self.filename(key).read_bytes()
