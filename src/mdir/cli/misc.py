"""Miscellaneous commands: init, key, config."""

import sys
from pathlib import Path

import click
import yaml
from click import argument, echo, option

from ..config import MdirConfig, get_config_path, load_config, save_config
from ..directory import Dir
from ..keys import KeyGenerator

from .utils import err, get_config, report_errors, validate_separator_option


@click.command()
@report_errors
@argument('path', required=False, type=click.Path(file_okay=False, path_type=Path))
def init(path: Path | None):
    """Create a maildir (tmp/, new/, cur/).

    \b
    Examples:
      mdir init ~/Maildir           # Create ~/Maildir
      mdir -m ~/Maildir init        # Same, using the global option
    """
    config = get_config()
    path = path or config.maildir
    if not path:
        err("No path given. Pass PATH or use 'mdir -m PATH'.")
        sys.exit(1)

    d = Dir(path, separator=config.separator)
    if d.is_maildir():
        echo(f"Already initialized: {d.path}")
        return
    Dir.create(path, separator=config.separator)
    echo(f"Initialized maildir: {d.path}")


@click.command()
@report_errors
@option('-n', '--count', default=1, type=click.IntRange(min=1), help="Number of keys to generate")
def key(count: int):
    """Print freshly generated unique message keys."""
    generator = KeyGenerator()
    for _ in range(count):
        echo(generator.generate())


@click.command()
@report_errors
@option('-m', '--maildir', 'maildir', type=click.Path(file_okay=False, path_type=Path),
        help="Default maildir path")
@option('-S', '--separator', callback=validate_separator_option,
        help="Key/info separator for filesystems that forbid ':'")
def config(maildir: Path | None, separator: str | None):
    """Show or update the config file.

    \b
    Examples:
      mdir config                   # Print the config file
      mdir config -m ~/Maildir      # Set the default maildir
      mdir config -S ';'            # Use ';' instead of ':'
    """
    path = get_config_path()
    current = load_config(path, env=False)

    if maildir is None and separator is None:
        echo(f"# {path}")
        data = {"maildir": str(current.maildir) if current.maildir else None,
                "separator": current.separator}
        echo(yaml.dump(data, default_flow_style=False, sort_keys=False).rstrip())
        return

    updated = MdirConfig(
        maildir=maildir.expanduser().resolve() if maildir else current.maildir,
        separator=separator or current.separator,
    )
    save_config(updated, path)
    echo(f"Saved config: {path}")
