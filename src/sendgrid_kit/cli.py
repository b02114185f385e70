"""CLI entrypoint for sendgrid_kit."""

import json
import sys
from pathlib import Path
from typing import Optional, Tuple

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .client import SendGridClient
from .config import SendGridSettings, load_settings
from .exceptions import SendGridKitError, format_exception_chain
from .logging import get_logger, setup_logging
from .models.bulk import FileType
from .models.delivery import MailSettings
from .models.mail import EmailAddress, EmailContent, Personalization, SendGridEmail
from .validators import require_email_address

console = Console()
logger = get_logger(__name__)

VERDICT_STYLES = {"valid": "green", "risky": "yellow", "invalid": "red"}


@click.group()
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False),
    help="YAML or JSON configuration file (default: ./config.yaml)"
)
@click.option(
    "--env-file",
    type=click.Path(dir_okay=False),
    help="Environment file to load (default: ./.env)"
)
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, config_file: Optional[str], env_file: Optional[str], debug: bool):
    """Send email and validate addresses with the SendGrid v3 API."""
    ctx.ensure_object(dict)
    ctx.obj.update(config_file=config_file, env_file=env_file, debug=debug)


@main.command()
@click.option("--to", "to_addresses", multiple=True, required=True, help="Recipient address (repeatable)")
@click.option("--from", "from_address", required=True, help="Sender address")
@click.option("--from-name", help="Sender display name")
@click.option("--subject", "-s", help="Email subject")
@click.option("--text", help="Plain text body")
@click.option("--html", help="HTML body")
@click.option("--template-id", help="Dynamic template id")
@click.option("--data", help="Dynamic template data as a JSON object")
@click.option("--category", "categories", multiple=True, help="Category tag (repeatable)")
@click.option("--sandbox", is_flag=True, help="Validate the request without delivering it")
@click.pass_context
def send(
    ctx,
    to_addresses: Tuple[str, ...],
    from_address: str,
    from_name: Optional[str],
    subject: Optional[str],
    text: Optional[str],
    html: Optional[str],
    template_id: Optional[str],
    data: Optional[str],
    categories: Tuple[str, ...],
    sandbox: bool,
):
    """Send one email to one or more recipients."""
    settings = _setup(ctx)

    if not (text or html or template_id):
        raise click.UsageError("Provide --text, --html or --template-id")

    template_data = None
    if data:
        try:
            template_data = json.loads(data)
        except json.JSONDecodeError as e:
            raise click.BadParameter(f"not valid JSON: {e}", param_hint="--data")
        if not isinstance(template_data, dict):
            raise click.BadParameter("must be a JSON object", param_hint="--data")

    try:
        recipients = [EmailAddress(email=require_email_address(a)) for a in to_addresses]
        sender = EmailAddress(email=require_email_address(from_address), name=from_name)

        content = []
        if text:
            content.append(EmailContent(value=text))
        if html:
            content.append(EmailContent.html(html))

        email = SendGridEmail(
            personalizations=[
                Personalization(to=recipients, dynamic_template_data=template_data)
            ],
            from_=sender,
            subject=subject,
            content=content or None,
            template_id=template_id,
            categories=list(categories) or None,
            mail_settings=MailSettings(sandbox_mode=True) if sandbox else None,
        )

        client = _build_client(settings)
        message_id = client.send(email)
    except (SendGridKitError, ValueError) as e:
        _fail(e)

    console.print(f"[green]✓ Email accepted for {len(recipients)} recipient(s)[/green]")
    if message_id:
        console.print(f"[blue]Message ID: {message_id}[/blue]")


@main.command()
@click.argument("email")
@click.option("--source", help="One-word tag recording where the address came from")
@click.pass_context
def validate(ctx, email: str, source: Optional[str]):
    """Validate a single email address."""
    settings = _setup(ctx)

    try:
        result = _build_client(settings).validate_email(email, source=source)
    except (SendGridKitError, ValueError) as e:
        _fail(e)

    style = VERDICT_STYLES.get(result.verdict.value, "white")
    table = Table(title=f"Validation: {result.email}")
    table.add_column("Check", style="cyan")
    table.add_column("Result")

    table.add_row("Verdict", f"[{style}]{result.verdict.value}[/{style}]")
    table.add_row("Score", f"{result.score:.2f}")
    table.add_row("Host", result.host)
    if result.suggestion:
        table.add_row("Suggestion", result.suggestion)

    checks = result.checks
    table.add_row("Valid syntax", _yes_no(checks.domain.has_valid_address_syntax))
    table.add_row("MX or A record", _yes_no(checks.domain.has_mx_or_a_record))
    table.add_row("Disposable", _yes_no(checks.domain.is_suspected_disposable_address))
    table.add_row("Role address", _yes_no(checks.local_part.is_suspected_role_address))
    table.add_row("Known bounces", _yes_no(checks.additional.has_known_bounces))
    table.add_row("Suspected bounces", _yes_no(checks.additional.has_suspected_bounces))

    console.print(table)


@main.group()
def bulk():
    """Run bulk email validation jobs."""
    pass


@bulk.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--file-type",
    type=click.Choice([t.value for t in FileType], case_sensitive=False),
    help="File format (inferred from the extension if omitted)"
)
@click.pass_context
def upload(ctx, file: str, file_type: Optional[str]):
    """Upload a CSV or ZIP address list and start a validation job."""
    settings = _setup(ctx)
    path = Path(file)

    try:
        resolved = FileType.parse(file_type) if file_type else FileType.from_filename(path.name)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="FILE")

    try:
        result = _build_client(settings).upload_bulk_validation_file(path.read_bytes(), resolved)
    except SendGridKitError as e:
        _fail(e)

    if not result.succeeded:
        console.print(
            f"[red]✗ Upload for job {result.job_id} failed with status {result.status_code}[/red]"
        )
        sys.exit(1)

    console.print(f"[green]✓ Uploaded {path.name}[/green]")
    console.print(f"[blue]Job ID: {result.job_id}[/blue]")


@bulk.command()
@click.argument("job_id")
@click.pass_context
def status(ctx, job_id: str):
    """Show the current state of a validation job."""
    settings = _setup(ctx)

    try:
        job = _build_client(settings).get_bulk_validation_job(job_id)
    except (SendGridKitError, ValueError) as e:
        _fail(e)

    lines = [
        f"Status: {job.status.value if job.status else 'unknown'}",
        f"Started: {job.started_at.isoformat() if job.started_at else '-'}",
        f"Finished: {job.finished_at.isoformat() if job.finished_at else '-'}",
    ]
    if job.segments is not None:
        lines.append(f"Segments: {job.segments_processed or 0}/{job.segments}")
    if job.progress is not None:
        lines.append(f"Progress: {job.progress:.0%}")
    if job.is_download_available is not None:
        lines.append(f"Download available: {_yes_no(job.is_download_available)}")
    for error in job.errors:
        lines.append(f"[red]Error: {error.message or 'unknown error'}[/red]")

    console.print(Panel.fit("\n".join(lines), title=f"Job {job.id}"))


@bulk.command(name="list")
@click.pass_context
def list_jobs(ctx):
    """List bulk validation jobs."""
    settings = _setup(ctx)

    try:
        jobs = _build_client(settings).list_bulk_validation_jobs()
    except SendGridKitError as e:
        _fail(e)

    if not jobs:
        console.print("[yellow]No bulk validation jobs found[/yellow]")
        return

    table = Table(title="Bulk Validation Jobs")
    table.add_column("ID", style="cyan")
    table.add_column("Status")
    table.add_column("Started")
    table.add_column("Finished")

    for job in jobs:
        table.add_row(
            job.id or "-",
            job.status.value if job.status else "unknown",
            job.started_at.isoformat() if job.started_at else "-",
            job.finished_at.isoformat() if job.finished_at else "-",
        )

    console.print(table)


@main.command(name="status")
@click.pass_context
def show_status(ctx):
    """Show configuration and credential status."""
    settings = _setup(ctx)
    client = SendGridClient.from_settings(settings)

    console.print(Panel.fit(
        f"[bold green]SendGrid Kit Status[/bold green]\n"
        f"Version: {__version__}\n"
        f"Base URL: {client.base_url}\n"
        f"Mail send key: {_configured(settings.api_key)}\n"
        f"Email validation key: {_configured(settings.validation_api_key)}\n"
        f"Timeouts: metadata {settings.timeouts.metadata}s, "
        f"listing {settings.timeouts.listing}s, upload {settings.timeouts.upload}s\n"
        f"Debug Mode: {settings.debug}\n"
        f"Logging Level: {settings.logging.level}",
        title="Client Status"
    ))


@main.command()
def version():
    """Show version information."""
    console.print(f"sendgrid-kit version {__version__}")


def _setup(ctx: click.Context) -> SendGridSettings:
    """Load settings and setup logging."""
    options = ctx.find_root().obj or {}
    try:
        settings = load_settings(
            env_file=options.get("env_file"),
            config_file=options.get("config_file"),
        )
    except SendGridKitError as e:
        _fail(e)

    # Loaded settings are cached, so the debug override works on a copy
    if options.get("debug"):
        settings = settings.model_copy(update={
            "debug": True,
            "logging": settings.logging.model_copy(update={"level": "DEBUG"}),
        })

    setup_logging(settings=settings)
    return settings


def _build_client(settings: SendGridSettings) -> SendGridClient:
    return SendGridClient.from_settings(settings)


def _fail(error: Exception) -> None:
    """Print the error chain and exit with status 1."""
    logger.debug("Command failed", exc_info=error)
    console.print(f"[red]Error:[/red] {escape(format_exception_chain(error))}", highlight=False)
    sys.exit(1)


def _yes_no(value: bool) -> str:
    return "yes" if value else "no"


def _configured(value: Optional[str]) -> str:
    return "[green]configured[/green]" if value else "[red]missing[/red]"


if __name__ == "__main__":
    main()
