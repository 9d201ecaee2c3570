"""Shared CLI utilities and helpers."""

import logging
import sys
from functools import wraps

import click
from rich.console import Console
from rich.logging import RichHandler

from ..config import MdirConfig
from ..directory import Dir
from ..errors import MaildirError
from ..flags import validate_separator


def err(*args, **kwargs):
    """Print to stderr."""
    print(*args, file=sys.stderr, **kwargs)


def setup_logging(verbose: int = 0) -> None:
    """Send ``mdir`` library logs to stderr through rich."""
    logger = logging.getLogger("mdir")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(console=Console(stderr=True), show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)


def get_config() -> MdirConfig:
    """Config resolved by the top-level ``mdir`` group."""
    return click.get_current_context().find_root().obj


def require_maildir(f):
    """Decorator that passes the configured ``Dir`` as first argument."""
    @wraps(f)
    def wrapper(*args, **kwargs):
        config = get_config()
        if not config.maildir:
            err("No maildir configured. Use 'mdir -m PATH' or set MAILDIR.")
            sys.exit(1)
        d = Dir(config.maildir, separator=config.separator)
        if not d.is_maildir():
            err(f"Not a maildir: {d.path}. Run 'mdir init' first.")
            sys.exit(1)
        return f(d, *args, **kwargs)
    return wrapper


def report_errors(f):
    """Decorator that prints library and filesystem errors and exits 1."""
    @wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except (MaildirError, OSError) as e:
            err(f"Error: {e}")
            sys.exit(1)
    return wrapper


def validate_separator_option(ctx, param, value):
    """Validate a ``--separator`` value."""
    if value is None:
        return value
    try:
        return validate_separator(value)
    except ValueError as e:
        raise click.BadParameter(str(e))


class AliasGroup(click.Group):
    """Click Group that supports command aliases."""

    def __init__(self, *args, aliases: dict[str, str] | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.aliases = aliases or {}
        # Build reverse mapping: command -> list of aliases
        self._cmd_aliases: dict[str, list[str]] = {}
        for alias, cmd in self.aliases.items():
            self._cmd_aliases.setdefault(cmd, []).append(alias)

    def get_command(self, ctx, cmd_name):
        cmd_name = self.aliases.get(cmd_name, cmd_name)
        return super().get_command(ctx, cmd_name)

    def resolve_command(self, ctx, args):
        _, cmd_name, args = super().resolve_command(ctx, args)
        cmd_name = self.aliases.get(cmd_name, cmd_name)
        return _, cmd_name, args

    def format_commands(self, ctx, formatter):
        """Write all commands with their aliases to the formatter."""
        commands = []
        for subcommand in self.list_commands(ctx):
            cmd = self.get_command(ctx, subcommand)
            if cmd is None or cmd.hidden:
                continue
            aliases = self._cmd_aliases.get(subcommand, [])
            if aliases:
                name = f"{subcommand} ({', '.join(sorted(aliases))})"
            else:
                name = subcommand
            help_text = cmd.get_short_help_str(limit=formatter.width)
            commands.append((name, help_text))

        if commands:
            with formatter.section("Commands"):
                formatter.write_dl(commands)
