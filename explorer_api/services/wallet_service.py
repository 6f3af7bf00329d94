"""Wallet service for the Explorer API.

This module builds derived views of a Solana wallet (balance, token accounts,
transaction history, fee analytics and an activity summary) from single
round trips to the Solana RPC node.
"""

import asyncio
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

from explorer_api.clients.solana_rpc import SolanaRpcClient
from explorer_api.constants import (
    DEFAULT_FEES_LIMIT,
    DEFAULT_HISTORY_LIMIT,
    LAMPORTS_PER_SOL,
    MEMO_PROGRAM_IDS,
    MEMO_PROGRAM_NAME,
    SUMMARY_FEES_LIMIT,
    TOKEN_PROGRAM_ID,
)
from explorer_api.models.wallet import (
    FeeSummary,
    LiquidityPoolPosition,
    TokenAccountRecord,
    TransactionFees,
    TransactionRecord,
    WalletInfo,
    WalletStatistics,
    WalletSummary,
)
from explorer_api.services.base_service import BaseService


def compute_ui_amount(amount: Any, decimals: Any) -> Optional[float]:
    """Scale a raw token amount by its decimals, or None if either is unusable."""
    try:
        return float(Decimal(str(amount)) / (Decimal(10) ** int(decimals)))
    except (InvalidOperation, ValueError, TypeError):
        return None


def parse_token_account(account: Dict[str, Any]) -> TokenAccountRecord:
    """Map one ``jsonParsed`` token account entry to a record."""
    info = account["account"]["data"]["parsed"]["info"]
    token_amount = info["tokenAmount"]
    decimals = token_amount["decimals"]
    ui_amount = token_amount.get("uiAmount")
    if ui_amount is None:
        ui_amount = compute_ui_amount(token_amount.get("amount"), decimals)

    return TokenAccountRecord(
        pubkey=account["pubkey"],
        mint=info["mint"],
        owner=info["owner"],
        amount=str(token_amount["amount"]),
        decimals=decimals,
        ui_amount=ui_amount,
    )


def extract_memo(tx_details: Any) -> Optional[Any]:
    """Return the payload of the first memo instruction in a transaction.

    Memo instructions are recognized by the parsed program name or by either
    memo program id. Returns None when there is no memo or the transaction
    does not have the expected shape.
    """
    try:
        instructions = tx_details["transaction"]["message"].get("instructions") or []
    except (KeyError, TypeError, AttributeError):
        return None

    for instruction in instructions:
        if not isinstance(instruction, dict):
            continue
        if (instruction.get("program") == MEMO_PROGRAM_NAME
                or str(instruction.get("programId")) in MEMO_PROGRAM_IDS):
            return instruction.get("parsed") or instruction.get("data")
    return None


def extract_fee_payer(tx_details: Dict[str, Any], default: str) -> str:
    """Return the first account key of a transaction, or ``default``.

    The first key is the fee payer for single-signer transactions; for
    multi-signer transactions this is a best-effort attribution.
    """
    try:
        first_key = tx_details["transaction"]["message"]["accountKeys"][0]
    except (KeyError, IndexError, TypeError):
        return default

    if isinstance(first_key, dict):
        first_key = first_key.get("pubkey")
    return str(first_key) if first_key else default


class WalletService(BaseService):
    """Service for aggregated wallet views."""

    def __init__(self, rpc_client: SolanaRpcClient):
        """Initialize the wallet service.

        Args:
            rpc_client: The shared Solana RPC client
        """
        super().__init__()
        self.client = rpc_client

    async def get_balance(self, address: str) -> float:
        """Get the balance of an address in SOL."""
        lamports = await self.client.get_balance(address)
        return lamports / LAMPORTS_PER_SOL

    async def get_token_accounts(self, address: str) -> List[TokenAccountRecord]:
        """Get the SPL token accounts owned by an address."""
        accounts = await self.client.get_token_accounts_by_owner(address, TOKEN_PROGRAM_ID)
        return [parse_token_account(account) for account in accounts]

    async def get_signatures(self, address: str, limit: int = DEFAULT_HISTORY_LIMIT) -> List[str]:
        """Get up to ``limit`` recent transaction signatures for an address."""
        entries = await self.client.get_signatures_for_address(address, limit)
        return [entry["signature"] for entry in entries]

    async def get_transaction(self, signature: str) -> Optional[Dict[str, Any]]:
        """Get raw parsed transaction details."""
        return await self.client.get_transaction(signature)

    async def get_transaction_history(
        self,
        address: str,
        limit: int = DEFAULT_HISTORY_LIMIT
    ) -> List[TransactionRecord]:
        """Get recent transactions of an address with their details.

        Details are fetched one signature at a time, in signature order. A
        failed or empty detail fetch drops that entry; the rest are returned.

        Args:
            address: The wallet address
            limit: Maximum number of signatures to enumerate

        Returns:
            Transaction records, newest first
        """
        self.log_with_context("info", f"Getting transaction history for {address}", limit=limit)
        entries = await self.client.get_signatures_for_address(address, limit)
        transactions: List[TransactionRecord] = []

        for entry in entries:
            signature = entry["signature"]
            try:
                tx_details = await self.client.get_transaction(signature)
            except Exception as e:
                self.logger.error(f"Failed to get transaction {signature}: {str(e)}")
                continue
            if not tx_details:
                continue

            meta = tx_details.get("meta") or {}
            transactions.append(TransactionRecord(
                signature=signature,
                slot=tx_details.get("slot", entry.get("slot")),
                block_time=tx_details.get("blockTime"),
                confirmation_status=entry.get("confirmationStatus") or tx_details.get("confirmationStatus"),
                err=meta.get("err"),
                memo=extract_memo(tx_details),
            ))

        return transactions

    @staticmethod
    def extract_memo(tx_details: Any) -> Optional[Any]:
        """Return the memo payload of a transaction, or None. Never raises."""
        return extract_memo(tx_details)

    async def get_wallet_info(self, address: str) -> WalletInfo:
        """Get balance, token accounts and recent history, fetched concurrently.

        Any one of the three failing fails the whole call.
        """
        balance, token_accounts, transactions = await asyncio.gather(
            self.get_balance(address),
            self.get_token_accounts(address),
            self.get_transaction_history(address, DEFAULT_HISTORY_LIMIT),
        )
        return WalletInfo(
            address=address,
            balance=balance,
            token_accounts=token_accounts,
            transactions=transactions,
        )

    async def get_transaction_fees(
        self,
        address: str,
        limit: int = DEFAULT_FEES_LIMIT
    ) -> List[TransactionFees]:
        """Get the fee paid by each recent transaction of an address.

        Failed detail fetches and transactions without ``meta`` are skipped.
        """
        signatures = await self.get_signatures(address, limit)
        fees: List[TransactionFees] = []

        for signature in signatures:
            try:
                tx_details = await self.client.get_transaction(signature)
            except Exception as e:
                self.logger.error(f"Failed to get fees for transaction {signature}: {str(e)}")
                continue
            if not tx_details or not tx_details.get("meta"):
                continue

            fees.append(TransactionFees(
                signature=signature,
                fee=tx_details["meta"].get("fee", 0) / LAMPORTS_PER_SOL,
                fee_payer=extract_fee_payer(tx_details, address),
                block_time=tx_details.get("blockTime"),
            ))

        return fees

    @staticmethod
    def summarize_fees(fees: List[TransactionFees]) -> FeeSummary:
        """Total, count and average of a list of fees."""
        total = sum(fee.fee for fee in fees)
        count = len(fees)
        return FeeSummary(
            total=total,
            count=count,
            average=total / count if count else 0.0,
            breakdown=fees,
        )

    async def detect_liquidity_pools(self, address: str) -> List[LiquidityPoolPosition]:
        """Detect liquidity pool positions held by an address.

        Not implemented: detection needs protocol specific parsing of pool
        programs and LP token mints. Always returns an empty list.
        """
        return []

    async def get_wallet_summary(self, address: str) -> WalletSummary:
        """Get wallet info, fee analytics and success statistics for an address."""
        async with self.log_timing(f"Wallet summary for {address}"):
            wallet_info, fees, pools = await asyncio.gather(
                self.get_wallet_info(address),
                self.get_transaction_fees(address, SUMMARY_FEES_LIMIT),
                self.detect_liquidity_pools(address),
            )

        total = len(wallet_info.transactions)
        successful = sum(1 for tx in wallet_info.transactions if tx.succeeded)
        failed = total - successful

        return WalletSummary(
            wallet=wallet_info,
            fees=self.summarize_fees(fees),
            liquidity_pools=pools,
            statistics=WalletStatistics(
                total_transactions=total,
                successful_transactions=successful,
                failed_transactions=failed,
                success_rate=(successful / total) * 100 if total else 0.0,
            ),
        )
