"""Read and write mailboxes in the Maildir format."""

from .config import MdirConfig, load_config, save_config
from .directory import Dir
from .errors import FlagError, KeyMatchError, MaildirError, UnseenError
from .flags import DEFAULT_SEPARATOR, decode_flags, encode_info
from .keys import KeyGenerator, generate_key

__all__ = [
    "DEFAULT_SEPARATOR",
    "Dir",
    "FlagError",
    "KeyGenerator",
    "KeyMatchError",
    "MaildirError",
    "MdirConfig",
    "UnseenError",
    "decode_flags",
    "encode_info",
    "generate_key",
    "load_config",
    "save_config",
]
