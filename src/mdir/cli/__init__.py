"""CLI package for mdir.

This package organizes CLI commands into modules:
- messages.py: deliver, ls, unseen, show
- flag_cmds.py: flags, set-info, set-flags
- misc.py: init, key, config
- utils.py: Shared utilities and helpers
"""

from pathlib import Path

import click
from click import option
from dotenv import load_dotenv

from ..config import MdirConfig, load_config
from .utils import AliasGroup, setup_logging, validate_separator_option

from .flag_cmds import flags, set_flags, set_info
from .messages import deliver, ls, show, unseen
from .misc import config, init, key


# Main group with aliases
@click.group(cls=AliasGroup, aliases={
    'd': 'deliver',
    'f': 'flags',
    'i': 'init',
    'l': 'ls',
    's': 'show',
    'sf': 'set-flags',
    'u': 'unseen',
})
@option('-m', '--maildir', type=click.Path(file_okay=False, path_type=Path),
        help="Maildir path (default: $MAILDIR or config file)")
@option('-S', '--separator', callback=validate_separator_option,
        help="Key/info separator (default ':')")
@option('-v', '--verbose', count=True, help="Log renames and deliveries to stderr")
@click.pass_context
def main(ctx, maildir: Path | None, separator: str | None, verbose: int):
    """Read and write Maildir mailboxes."""
    load_dotenv()
    setup_logging(verbose)
    try:
        loaded = load_config()
    except ValueError as e:
        raise click.UsageError(f"Invalid configuration: {e}")
    ctx.obj = MdirConfig(
        maildir=maildir or loaded.maildir,
        separator=separator or loaded.separator,
    )


main.add_command(config)
main.add_command(deliver)
main.add_command(flags)
main.add_command(init)
main.add_command(key)
main.add_command(ls)
main.add_command(set_flags)
main.add_command(set_info)
main.add_command(show)
main.add_command(unseen)


__all__ = [
    'main',
    'config',
    'deliver',
    'flags',
    'init',
    'key',
    'ls',
    'set_flags',
    'set_info',
    'show',
    'unseen',
]
