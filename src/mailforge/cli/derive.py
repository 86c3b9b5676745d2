"""CLI: mailforge reply|forward|copy"""

from pathlib import Path
from typing import Optional

import click

from mailforge.errors import MailforgeError
from mailforge.quoting import DEFAULT_QUOTING_MARKUP


def _write_message(builder, output: Optional[Path]) -> None:
    from mailforge.cli.main import _write_message
    _write_message(builder, output)


def _fail(error: MailforgeError) -> None:
    from mailforge.cli.main import _fail
    _fail(error)


output_option = click.option(
    "-o", "--output", type=click.Path(dir_okay=False, path_type=Path), default=None,
    help="Write the derived message here instead of stdout.",
)


@click.command("reply")
@click.argument("message_file", type=click.File("rb"))
@click.option("--all", "reply_all", is_flag=True, help="Reply to all original recipients.")
@click.option("--template", default=DEFAULT_QUOTING_MARKUP, help="HTML quoting template with one %s placeholder.")
@output_option
@click.pass_obj
def reply_cmd(starting, message_file, reply_all: bool, template: str, output: Optional[Path]):
    """Reply to MESSAGE_FILE, quoting its text."""
    try:
        _write_message(starting.replying(message_file.read(), reply_all, template), output)
    except MailforgeError as e:
        _fail(e)


@click.command("forward")
@click.argument("message_file", type=click.File("rb"))
@output_option
@click.pass_obj
def forward_cmd(starting, message_file, output: Optional[Path]):
    """Forward MESSAGE_FILE as an attached message."""
    try:
        _write_message(starting.forwarding(message_file.read()), output)
    except MailforgeError as e:
        _fail(e)


@click.command("copy")
@click.argument("message_file", type=click.File("rb"))
@output_option
@click.pass_obj
def copy_cmd(starting, message_file, output: Optional[Path]):
    """Copy MESSAGE_FILE field by field."""
    try:
        _write_message(starting.copying(message_file.read()), output)
    except MailforgeError as e:
        _fail(e)
