"""CLI: mailforge show"""

import click
from rich.console import Console
from rich.table import Table

from mailforge.errors import MailforgeError
from mailforge.mime.converter import mime_to_email

console = Console()


def _fail(error: MailforgeError) -> None:
    from mailforge.cli.main import _fail
    _fail(error)


@click.command("show")
@click.argument("message_file", type=click.File("rb"))
@click.option("--json-output", "--json", is_flag=True)
def show_cmd(message_file, json_output: bool):
    """Show the parsed fields of MESSAGE_FILE."""
    try:
        email = mime_to_email(message_file.read())
    except MailforgeError as e:
        _fail(e)
        return

    if json_output:
        click.echo(email.model_dump_json(
            indent=2,
            exclude={"email_to_forward", "smime_signed_email"},
        ))
        return

    table = Table(title=email.subject or "(no subject)")
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Message-ID", email.id or "")
    table.add_row("Date", email.sent_date.isoformat() if email.sent_date else "")
    table.add_row("From", email.from_recipient.formatted() if email.from_recipient else "")
    for recipient in email.recipients:
        table.add_row(recipient.type.value if recipient.type else "To", recipient.formatted())
    if email.reply_to_recipients:
        table.add_row("Reply-To", ", ".join(r.formatted() for r in email.reply_to_recipients))
    for name, values in email.headers.items():
        table.add_row(name, "\n".join(values))
    table.add_row("Plain text", f"{len(email.plain_text)} chars" if email.plain_text is not None else "-")
    table.add_row("HTML text", f"{len(email.html_text)} chars" if email.html_text is not None else "-")
    if email.calendar_method is not None:
        table.add_row("Calendar", email.calendar_method.value)
    for attachment in email.attachments:
        table.add_row("Attachment", f"{attachment.name} ({attachment.mime_type}, {len(attachment.data)} bytes)")
    for image in email.embedded_images:
        table.add_row("Embedded image", f"{image.name} ({image.mime_type})")
    table.add_row("S/MIME", email.original_smime_details.smime_mode.value)
    console.print(table)
