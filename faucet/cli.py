"""Faucet command-line interface."""

import asyncio
from typing import Optional

import click

from faucet.config import DEVNET, LAMPORTS_PER_SOL, TESTNET, get_settings
from faucet.services.faucet import (
    FaucetService,
    InvalidAddressError,
    describe_rpc_failure,
    validate_address,
)
from faucet.services.rpc_client import RpcCallError, RpcClient


@click.group()
def cli():
    """Solana faucet gateway."""
    pass


@cli.command(name="serve")
@click.option("--host", default=None, help="Bind address (defaults to HOST setting)")
@click.option("--port", default=None, type=int, help="Listen port (defaults to PORT setting)")
@click.option("--reload", is_flag=True, default=False, help="Reload on code changes")
def serve_command(host: Optional[str], port: Optional[int], reload: bool):
    """Run the HTTP gateway under uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "faucet.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


async def _airdrop(endpoint: str, address: str, lamports: int, timeout: float) -> str:
    client = RpcClient(timeout=timeout)
    try:
        return await client.call(endpoint, "requestAirdrop", [address, lamports])
    finally:
        await client.aclose()


@cli.command(name="airdrop")
@click.option("--address", "-a", required=True, help="Solana address to receive the airdrop")
@click.option("--network", "-n", default=DEVNET, show_default=True,
              type=click.Choice([DEVNET, TESTNET]), help="Target network")
@click.option("--rpc", "-r", default=None, help="Custom RPC URL (overrides --network)")
@click.option("--amount", "-m", default=5.0, show_default=True, type=float, help="Amount in SOL")
def airdrop_command(address: str, network: str, rpc: Optional[str], amount: float):
    """Request a single airdrop directly from the RPC node.

    No cooldown is applied; the node's own faucet limits still are.
    """
    settings = get_settings()
    try:
        address = validate_address(address)
    except InvalidAddressError as e:
        raise click.ClickException(str(e))

    lamports = int(round(amount * LAMPORTS_PER_SOL))
    endpoint = rpc or settings.rpc_url_for(network)

    click.echo(f"Address: {address}")
    click.echo(f"Network: {network}")
    click.echo(f"RPC: {endpoint}")
    click.echo(f"Amount: {amount} SOL")

    try:
        signature = asyncio.run(_airdrop(endpoint, address, lamports, settings.rpc_timeout_secs))
    except RpcCallError as e:
        raise click.ClickException(describe_rpc_failure(e))

    click.echo("Success!")
    click.echo(f"Signature: {signature}")


@cli.command(name="status")
def status_command():
    """Print devnet slot and node version."""
    settings = get_settings()

    async def _status():
        client = RpcClient(timeout=settings.rpc_timeout_secs)
        try:
            return await FaucetService(settings, client).get_network_status()
        finally:
            await client.aclose()

    status = asyncio.run(_status())
    click.echo(f"Network: {status.network}")
    click.echo(f"Slot: {status.slot}")
    click.echo(f"Version: {status.version}")


def main():
    cli()


if __name__ == "__main__":
    main()
