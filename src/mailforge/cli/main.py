"""
mailforge CLI — `mailforge` command.

Commands:
  mailforge show <file>      Show the parsed fields of a message
  mailforge reply <file>     Reply (or reply-all) to a message
  mailforge forward <file>   Forward a message
  mailforge copy <file>      Copy a message
"""

from pathlib import Path
from typing import Optional

try:
    import click
    from rich.console import Console
except ImportError:
    raise SystemExit("CLI requires extras: pip install mailforge[cli]")

from mailforge import __version__, config
from mailforge.builder import EmailPopulatingBuilder
from mailforge.errors import MailforgeError
from mailforge.mime.converter import email_to_mime
from mailforge.starting import EmailStartingBuilder

console = Console()
err_console = Console(stderr=True)


def _write_message(builder: EmailPopulatingBuilder, output: Optional[Path]) -> None:
    data = email_to_mime(builder.build_email()).as_bytes()
    if output is None:
        click.echo(data, nl=False)
        return
    output.write_bytes(data)
    err_console.print(f"[green]Wrote {output}[/green]")


def _fail(error: MailforgeError) -> None:
    err_console.print(f"[red]{error}[/red]")
    raise SystemExit(1)


@click.group()
@click.version_option(__version__)
@click.option("--config", "config_path", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="Email properties file (default ~/.mailforge/config.json)")
@click.option("--ignore-defaults", is_flag=True, help="Do not apply default email properties.")
@click.option("--ignore-overrides", is_flag=True, help="Do not apply overriding email properties.")
@click.pass_context
def main(ctx, config_path: Optional[Path], ignore_defaults: bool, ignore_overrides: bool):
    """mailforge — derive replies, forwards and copies from existing emails."""
    config.load_properties(config_path)
    starting = EmailStartingBuilder()
    if ignore_defaults:
        starting = starting.ignoring_defaults()
    if ignore_overrides:
        starting = starting.ignoring_overrides()
    ctx.obj = starting


# Register subcommands from separate modules
from mailforge.cli.derive import copy_cmd, forward_cmd, reply_cmd
from mailforge.cli.show import show_cmd

main.add_command(show_cmd)
main.add_command(reply_cmd)
main.add_command(forward_cmd)
main.add_command(copy_cmd)


if __name__ == "__main__":
    main()
