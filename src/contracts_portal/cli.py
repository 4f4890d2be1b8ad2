# cli.py
import logging
from pathlib import Path

import click

from contracts_api.config.settings import configure_logging
from contracts_portal.app import ContractPortal
from contracts_portal.client import ContractsClient
from contracts_portal.config import get_portal_settings
from contracts_portal.formatting import format_bytes
from contracts_portal.notifications import NotificationKind
from contracts_portal.views import SortMode

logger = logging.getLogger(__name__)

NOTIFICATION_COLORS = {
    NotificationKind.SUCCESS: "green",
    NotificationKind.ERROR: "red",
}


def _flush_notifications(portal: ContractPortal) -> bool:
    """Print and dismiss every active notification. Returns True if any was an error."""
    had_error = False
    for notification in portal.active_notifications():
        click.secho(
            notification.message,
            fg=NOTIFICATION_COLORS[notification.kind],
            err=notification.kind == NotificationKind.ERROR,
        )
        had_error = had_error or notification.kind == NotificationKind.ERROR
        portal.notifications.dismiss(notification.id)
    return had_error


def _load(portal: ContractPortal) -> None:
    if not portal.refresh():
        _flush_notifications(portal)
        raise SystemExit(1)


def _get_contract(portal: ContractPortal, contract_id: str):
    contract = portal.find(contract_id)
    if contract is None:
        raise click.ClickException(f"No contract with id {contract_id}")
    return contract


@click.group()
@click.option("--api-url",
              envvar="CONTRACTS_PORTAL_API_BASE_URL",
              default=None,
              help="Base URL of the Contracts API")
@click.pass_context
def cli(ctx: click.Context, api_url: str):
    """Contract Portal: upload and manage ZIP contract archives"""
    settings = get_portal_settings()
    configure_logging(settings.log_level)
    client = ContractsClient(api_url or settings.api_base_url, timeout=settings.request_timeout)
    ctx.obj = ContractPortal(client, notification_ttl=settings.notification_ttl_seconds)


@cli.command(name="list")
@click.option("--search", default="", help="Only show names containing this text")
@click.option("--sort",
              type=click.Choice([mode.value for mode in SortMode]),
              default=SortMode.DATE_DESC.value,
              help="Sort order")
@click.pass_obj
def list_command(portal: ContractPortal, search: str, sort: str):
    """List uploaded contracts"""
    _load(portal)
    portal.set_search(search)
    portal.set_sort(sort)

    contracts = portal.visible_contracts
    if not contracts:
        click.echo("No contracts found.")
        return
    for contract in contracts:
        uploaded = contract.uploaded_at.astimezone().strftime("%Y-%m-%d %H:%M")
        click.echo(f"{contract.id}  {contract.name}  {format_bytes(contract.size)}  {uploaded}")


@cli.command()
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.pass_obj
def upload(portal: ContractPortal, path: Path):
    """Upload a .zip contract archive"""
    if portal.select_path(path):
        selected = portal.uploader.selected
        click.echo(f"Selected file: {selected.name} ({format_bytes(selected.size)})")
        click.echo("Uploading...")
        portal.upload()
    if _flush_notifications(portal):
        raise SystemExit(1)


@cli.command()
@click.argument("contract_id")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_obj
def delete(portal: ContractPortal, contract_id: str, yes: bool):
    """Delete a contract archive and its record"""
    _load(portal)
    portal.request_delete(_get_contract(portal, contract_id))

    prompt = (
        f'Are you sure you want to delete "{portal.pending_delete.name}"? '
        "This action cannot be undone."
    )
    if yes or click.confirm(prompt, default=False):
        portal.confirm_delete()
    else:
        portal.cancel_delete()
        click.echo("Cancelled.")
    if _flush_notifications(portal):
        raise SystemExit(1)


@cli.command()
@click.argument("contract_id")
@click.argument("destination",
                type=click.Path(file_okay=True, dir_okay=True, path_type=Path),
                default=Path("."))
@click.pass_obj
def download(portal: ContractPortal, contract_id: str, destination: Path):
    """Download a contract archive"""
    _load(portal)
    portal.download(_get_contract(portal, contract_id), destination)
    if _flush_notifications(portal):
        raise SystemExit(1)


if __name__ == "__main__":
    cli()
