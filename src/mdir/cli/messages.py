"""Message commands: deliver, ls, unseen, show."""

from datetime import datetime

import click
import humanize
from click import argument, echo, option
from rich.console import Console
from rich.table import Table

from ..directory import Dir
from ..errors import FlagError, UnseenError
from ..flags import decode_flags, key_of
from ..parsing import extract_body_text, parse_header_file, summary_headers

from .utils import err, report_errors, require_maildir


@click.command()
@report_errors
@require_maildir
@option('-f', '--flags', help="Deliver straight into cur/ with these flags (e.g. 'S')")
@argument('file', type=click.File('rb'), default='-')
def deliver(d: Dir, flags: str | None, file):
    """Deliver a message from FILE (or stdin) and print its key.

    \b
    Examples:
      mdir deliver msg.eml          # Deliver to new/
      mdir deliver -f S msg.eml     # Deliver to cur/ as seen
      cat msg.eml | mdir deliver    # Read from stdin
    """
    raw = file.read()
    key = d.deliver(raw, flags=list(flags) if flags is not None else None)
    echo(key)


@click.command()
@report_errors
@require_maildir
@option('-k', '--keys-only', is_flag=True, help="Print keys only, one per line")
@option('-n', '--new', 'new', is_flag=True, help="List new/ instead of cur/")
@option('-s', '--subject', is_flag=True, help="Include the Subject header")
def ls(d: Dir, keys_only: bool, new: bool, subject: bool):
    """List messages with their flags and sizes.

    \b
    Examples:
      mdir ls                       # Table of cur/
      mdir ls -n                    # Messages waiting in new/
      mdir ls -k | wc -l            # Count messages
    """
    sub = "new" if new else "cur"
    paths = sorted(d.paths(sub))

    if keys_only:
        for path in paths:
            echo(key_of(path.name, d.separator))
        return

    table = Table(box=None)
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Flags")
    table.add_column("Size", justify="right")
    table.add_column("Modified")
    if subject:
        table.add_column("Subject")

    total = 0
    for path in paths:
        stat = path.stat()
        total += stat.st_size
        try:
            flags = "".join(decode_flags(path.name, d.separator))
        except FlagError as e:
            flags = "[yellow]1,…[/]" if e.experimental else "[red]?[/]"
        row = [
            key_of(path.name, d.separator),
            flags,
            humanize.naturalsize(stat.st_size, binary=True),
            humanize.naturaltime(datetime.fromtimestamp(stat.st_mtime)),
        ]
        if subject:
            row.append(str(parse_header_file(path, d.policy).get("Subject", "")))
        table.add_row(*row)

    console = Console()
    if paths:
        console.print(table)
    console.print(f"{len(paths):,} messages in {sub}/ ({humanize.naturalsize(total, binary=True)})")


@click.command()
@report_errors
@require_maildir
def unseen(d: Dir):
    """Move messages from new/ to cur/, marking them seen, and print their keys."""
    try:
        keys = d.unseen()
    except UnseenError as e:
        for k in e.moved:
            echo(k)
        raise
    for k in keys:
        echo(k)


@click.command()
@report_errors
@require_maildir
@option('-H', '--all-headers', is_flag=True, help="Print every header, no body")
@option('-r', '--raw', is_flag=True, help="Print the message file as stored")
@argument('key')
def show(d: Dir, all_headers: bool, raw: bool, key: str):
    """Show a message by KEY (any unambiguous prefix).

    \b
    Examples:
      mdir show 1700000000.host     # Summary headers and text body
      mdir show -H 1700000000.host  # All headers
      mdir show -r 1700000000.host  # Raw file contents
    """
    if raw:
        click.get_binary_stream('stdout').write(d.raw(key))
        return

    if all_headers:
        header = d.header(key)
        for name, value in header.items():
            echo(f"{name}: {value}")
        return

    msg = d.message(key)
    for name, value in summary_headers(msg):
        echo(f"{name}: {value}")
    echo("")
    body = extract_body_text(msg)
    if body:
        echo(body.rstrip("\n"))
    else:
        err("(no text/plain body)")
