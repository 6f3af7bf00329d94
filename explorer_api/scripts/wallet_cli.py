#!/usr/bin/env python3
"""
CLI tool to inspect a Solana wallet.

Usage:
    explorer-wallet <address> [--summary]
"""

import asyncio
import sys
from datetime import datetime, timezone
from typing import Any, Optional, Union

import click

from explorer_api.clients.solana_rpc import SolanaRpcClient
from explorer_api.config import get_solana_config
from explorer_api.constants import LAMPORTS_PER_SOL
from explorer_api.models.wallet import TransactionRecord, WalletInfo, WalletSummary
from explorer_api.services.wallet_service import WalletService
from explorer_api.utils.errors import ExplorerAPIError
from explorer_api.utils.validation import is_valid_address


def format_amount(amount: Optional[float], decimals: int = 9) -> str:
    """Format a raw amount scaled by ``decimals``.

    Values below 0.0001 use exponential notation with two digits; others
    are shown with at most four decimal places.
    """
    if amount is None:
        return "0"
    value = amount / (10 ** decimals)
    if value == 0:
        return "0"
    if value < 0.0001:
        return f"{value:.2e}"
    return f"{value:.{min(4, decimals)}f}"


def format_address(address: Optional[str], visible: int = 4) -> str:
    """Shorten an address to its first and last ``visible`` characters."""
    if not address or len(address) <= visible * 2 + 3:
        return address or ""
    return f"{address[:visible]}...{address[-visible:]}"


def format_timestamp(timestamp: Optional[int]) -> str:
    """Render a block time as UTC, or ``Unknown``."""
    if not timestamp:
        return "Unknown"
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")


def status_label(tx: Union[TransactionRecord, dict]) -> str:
    """``failed`` when the transaction carries an error, else ``success``."""
    err = tx.get("err") if isinstance(tx, dict) else tx.err
    return "failed" if err else "success"


async def fetch_wallet(address: str, summary: bool) -> Union[WalletInfo, WalletSummary]:
    """Fetch a wallet view through a short-lived RPC client."""
    async with SolanaRpcClient(get_solana_config()) as client:
        service = WalletService(client)
        if summary:
            return await service.get_wallet_summary(address)
        return await service.get_wallet_info(address)


def display_wallet(wallet: WalletInfo) -> None:
    """Print balance, token accounts and transactions."""
    click.echo(f"Address: {wallet.address}")
    click.echo(f"Balance: {wallet.balance} SOL\n")

    click.echo(f"Token Accounts ({len(wallet.token_accounts)}):")
    for account in wallet.token_accounts:
        amount = format_amount(_to_number(account.amount), account.decimals)
        click.echo(f"  {format_address(account.mint)}  {amount}")

    click.echo(f"\nTransactions ({len(wallet.transactions)}):")
    for tx in wallet.transactions:
        memo = f"  memo: {tx.memo}" if tx.memo else ""
        click.echo(
            f"  {format_address(tx.signature, 8)}  {format_timestamp(tx.block_time)}  "
            f"{status_label(tx)}{memo}"
        )


def display_summary(summary: WalletSummary) -> None:
    """Print a wallet summary with fee and success statistics."""
    display_wallet(summary.wallet)

    fees = summary.fees
    click.echo("\nFees:")
    click.echo(f"  Total: {format_amount(fees.total * LAMPORTS_PER_SOL)} SOL over {fees.count} transactions")
    click.echo(f"  Average: {format_amount(fees.average * LAMPORTS_PER_SOL)} SOL")

    stats = summary.statistics
    click.echo("\nStatistics:")
    click.echo(f"  Successful: {stats.successful_transactions}/{stats.total_transactions}")
    click.echo(f"  Failed: {stats.failed_transactions}")
    click.echo(f"  Success Rate: {stats.success_rate:.2f}%")


def _to_number(value: Any) -> Optional[float]:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


@click.command()
@click.argument("address")
@click.option("--summary", is_flag=True, help="Include fee analytics and success statistics")
def main(address: str, summary: bool) -> None:
    """Show balance, token accounts and recent transactions of ADDRESS."""
    address = address.strip()
    if not is_valid_address(address):
        click.echo(f"Error: Invalid Solana address: {address}", err=True)
        sys.exit(1)

    click.echo(f"\nFetching wallet data for {address}...\n")
    try:
        result = asyncio.run(fetch_wallet(address, summary))
    except ExplorerAPIError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)

    if summary:
        display_summary(result)
    else:
        display_wallet(result)


if __name__ == "__main__":
    main()
