"""Exceptions raised by mdir.

Filesystem failures are not wrapped: they surface as the original ``OSError``.
"""


class MaildirError(Exception):
    """Base class for mdir errors."""


class KeyMatchError(MaildirError, LookupError):
    """A key matched zero or more than one file in ``cur``."""

    def __init__(self, key: str, n: int):
        self.key = key
        self.n = n
        super().__init__(key, n)

    def __str__(self) -> str:
        return f"key {self.key} matches {self.n} files"


class FlagError(MaildirError, ValueError):
    """A non-standard info section was encountered.

    ``experimental`` is set for version-1 info sections, which are recognized
    but unsupported; callers may skip those instead of treating them as
    corrupt.
    """

    def __init__(self, info: str, experimental: bool = False):
        self.info = info
        self.experimental = experimental
        super().__init__(info, experimental)

    def __str__(self) -> str:
        if self.experimental:
            return f"experimental info section encountered: {self.info[2:]}"
        return f"bad info section encountered: {self.info}"


class UnseenError(MaildirError, OSError):
    """A rename failed part-way through moving ``new`` into ``cur``.

    Messages listed in ``moved`` were migrated before the failure and stay in
    ``cur``; calling ``Dir.unseen()`` again picks up the rest. ``errno`` and
    ``strerror`` are those of the failed rename, so ``except OSError`` still
    catches it.
    """

    def __init__(self, moved: list[str], key: str, error: OSError):
        self.moved = moved
        self.key = key
        self.error = error
        super().__init__(error.errno, error.strerror)

    def __str__(self) -> str:
        return (
            f"failed to move {self.key} into cur after {len(self.moved)} "
            f"message(s): {self.error}"
        )
