"""Flag commands: flags, set-info, set-flags."""

import click
from click import argument, echo, option

from ..directory import Dir
from ..flags import describe

from .utils import report_errors, require_maildir


@click.command()
@report_errors
@require_maildir
@option('-l', '--long', 'long_names', is_flag=True, help="Print flag names instead of letters")
@argument('key')
def flags(d: Dir, long_names: bool, key: str):
    """Print the flags of a message, sorted."""
    fs = d.flags(key)
    if long_names:
        echo(", ".join(describe(fs)))
    else:
        echo("".join(fs))


@click.command('set-info')
@report_errors
@require_maildir
@argument('key')
@argument('info')
def set_info(d: Dir, key: str, info: str):
    """Replace the info section of a message verbatim.

    Use this only for non-standard info sections; see set-flags.
    """
    path = d.set_info(key, info)
    echo(path.name)


@click.command('set-flags')
@report_errors
@require_maildir
@option('-a', '--add', is_flag=True, help="Add FLAGS to the existing flags")
@option('-r', '--remove', is_flag=True, help="Remove FLAGS from the existing flags")
@argument('key')
@argument('flag_letters', metavar='FLAGS', default='')
def set_flags(d: Dir, add: bool, remove: bool, key: str, flag_letters: str):
    """Set a message's flags, always writing a sorted "2," info section.

    \b
    Examples:
      mdir set-flags KEY RS         # Exactly Replied+Seen
      mdir set-flags -a KEY F       # Also Flagged
      mdir set-flags -r KEY S       # Mark unread
      mdir set-flags KEY            # Clear all flags
    """
    if add and remove:
        raise click.UsageError("--add and --remove are mutually exclusive")
    if add:
        path = d.add_flags(key, flag_letters)
    elif remove:
        path = d.remove_flags(key, flag_letters)
    else:
        path = d.set_flags(key, flag_letters)
    echo(path.name)
