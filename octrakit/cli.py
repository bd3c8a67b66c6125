"""
Command-line interface for the Octra wallet toolkit.
"""

from __future__ import annotations

from pathlib import Path

import click

from octrakit.client.client import OctraClient
from octrakit.common.config import Config
from octrakit.common.exceptions import OctraError
from octrakit.wallet.amount import from_atoms, to_atoms
from octrakit.wallet.keys import KeyMaterial
from octrakit.wallet.keystore import encrypt_seed, load_keystore, save_keystore, unlock

keystore_option = click.option(
    "--keystore",
    "keystore_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Keystore file (default: from OCTRA_KEYSTORE env or wallet.json)",
)


def _keystore_path(keystore_path: Path | None) -> Path:
    return keystore_path or Config().KEYSTORE_PATH


def _client(ctx: click.Context) -> OctraClient:
    client = ctx.obj.get("client")
    if client is None:
        client = OctraClient(ctx.obj.get("rpc_url"))
        ctx.obj["client"] = client
        ctx.call_on_close(client.close)
    return client


@click.group()
@click.option(
    "--rpc-url",
    envvar="OCTRA_RPC_URL",
    default=None,
    help="Ledger node URL (default: from OCTRA_RPC_URL env or https://octra.network)",
)
@click.pass_context
def cli(ctx: click.Context, rpc_url: str | None) -> None:
    """Octra wallet toolkit CLI"""
    ctx.ensure_object(dict)
    ctx.obj.setdefault("rpc_url", rpc_url)


@cli.command()
@keystore_option
@click.password_option(envvar="OCTRA_PASSWORD", help="Keystore password")
def new(keystore_path: Path | None, password: str) -> None:
    """Generate a new wallet and save it to an encrypted keystore"""
    path = _keystore_path(keystore_path)
    if path.exists():
        msg = f"Refusing to overwrite existing keystore: {path}"
        raise click.ClickException(msg)
    try:
        key = KeyMaterial.generate()
        save_keystore(path, encrypt_seed(key.seed, password))
    except OctraError as err:
        raise click.ClickException(str(err)) from err
    click.echo(f"Address: {key.address}")
    click.echo(f"Public key: {key.public_key_b64}")
    click.echo(f"Keystore saved to {path}")


@cli.command()
@keystore_option
def address(keystore_path: Path | None) -> None:
    """Show the address stored in a keystore"""
    try:
        record = load_keystore(_keystore_path(keystore_path))
    except (OctraError, FileNotFoundError) as err:
        raise click.ClickException(str(err)) from err
    click.echo(record.address)


@cli.command()
@click.argument("wallet_address")
@click.pass_context
def balance(ctx: click.Context, wallet_address: str) -> None:
    """Show balance and nonce of an address"""
    try:
        info = _client(ctx).get_balance(wallet_address)
    except OctraError as err:
        raise click.ClickException(str(err)) from err
    click.echo(f"Balance: {info.balance} OCT (Raw: {info.balance_raw} Atoms)")
    click.echo(f"Nonce: {info.nonce}")


@cli.command()
@keystore_option
@click.option("--password", prompt=True, hide_input=True, envvar="OCTRA_PASSWORD")
@click.option("--to", "to_address", required=True, help="Destination address")
@click.option("--amount", required=True, help="Amount in OCT")
@click.option("--message", default=None, help="Unsigned note broadcast with the transfer")
@click.option("--wait/--no-wait", default=True, help="Wait for confirmation")
@click.option("--timeout", type=float, default=None, help="Confirmation timeout in seconds")
@click.pass_context
def send(
    ctx: click.Context,
    keystore_path: Path | None,
    password: str,
    to_address: str,
    amount: str,
    message: str | None,
    wait: bool,  # noqa: FBT001
    timeout: float | None,
) -> None:
    """Sign and send a transfer"""
    try:
        key = unlock(load_keystore(_keystore_path(keystore_path)), password)
        result = _client(ctx).transfer(
            key, to_address, amount, message, wait=wait, timeout=timeout
        )
    except (OctraError, FileNotFoundError) as err:
        raise click.ClickException(str(err)) from err

    click.echo(f"Tx hash: {result.tx_hash}")
    if result.outcome is None:
        return
    if not result.confirmed:
        msg = f"Transaction {result.tx_hash} {result.outcome.state.value}"
        raise click.ClickException(msg)
    click.echo("Transaction confirmed")


@cli.command()
@click.argument("tx_hash")
@click.pass_context
def tx(ctx: click.Context, tx_hash: str) -> None:
    """Show a transaction record"""
    try:
        record = _client(ctx).get_transaction(tx_hash)
    except OctraError as err:
        raise click.ClickException(str(err)) from err
    for key, value in record.items():
        click.echo(f"{key}: {value}")


@cli.command()
@click.argument("wallet_address")
@click.option("--limit", type=int, default=10, show_default=True)
@click.pass_context
def history(ctx: click.Context, wallet_address: str, limit: int) -> None:
    """List recent transactions of an address (best effort)"""
    try:
        entries = _client(ctx).get_history(wallet_address, limit)
    except OctraError as err:
        raise click.ClickException(str(err)) from err
    if not entries:
        click.echo("No transactions found.")
        return
    for entry in entries:
        direction = "OUT" if entry.is_outbound(wallet_address) else "IN "
        click.echo(
            f"[{entry.epoch}] {direction} | {entry.hash[:12]} | "
            f"{entry.to[:10]}... | {entry.amount} OCT"
        )


@cli.command()
@click.argument("wallet_address")
@click.pass_context
def stats(ctx: click.Context, wallet_address: str) -> None:
    """Summarize recent inbound and outbound volume"""
    try:
        result = _client(ctx).get_stats(wallet_address)
    except OctraError as err:
        raise click.ClickException(str(err)) from err
    click.echo(f"Total Outbound : {from_atoms(result.total_out)} OCT ({result.total_out} Atoms)")
    click.echo(f"Total Inbound  : {from_atoms(result.total_in)} OCT ({result.total_in} Atoms)")
    click.echo(f"Total Activity : {result.tx_count} Transactions")


@cli.command()
@click.argument("amount")
def atoms(amount: str) -> None:
    """Convert an OCT amount to atoms"""
    try:
        click.echo(to_atoms(amount))
    except OctraError as err:
        raise click.ClickException(str(err)) from err


if __name__ == "__main__":
    cli()
