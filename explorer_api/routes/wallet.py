"""Wallet explorer API routes.

This module defines routes for wallet views: balance, token accounts,
transaction history, fee analytics and the aggregated summary.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query

from explorer_api.constants import DEFAULT_FEES_LIMIT, DEFAULT_HISTORY_LIMIT
from explorer_api.dependencies import get_wallet_service
from explorer_api.models.wallet import WalletInfo, WalletSummary
from explorer_api.services.wallet_service import WalletService
from explorer_api.utils.decorators import handle_api_errors
from explorer_api.utils.errors import ValidationError
from explorer_api.utils.validation import is_valid_address, validate_transaction_signature

router = APIRouter(prefix="/api/v1/solana", tags=["wallet"])


def parse_limit(value: Optional[str], default: int) -> int:
    """Parse a ``limit`` query value, falling back to ``default``.

    Missing, non-numeric, zero and negative values all mean the default.
    """
    try:
        limit = int(value)
    except (TypeError, ValueError):
        return default
    return limit if limit > 0 else default


def check_address(address: str) -> None:
    if not is_valid_address(address):
        raise ValidationError("Invalid Solana address")


@router.get(
    "/wallet/{address}",
    response_model=WalletInfo,
    summary="Get wallet information",
    description="Balance, token accounts and the 20 most recent transactions of an address."
)
@handle_api_errors("Failed to fetch wallet information")
async def get_wallet_info(
    address: str = Path(..., description="Wallet address"),
    service: WalletService = Depends(get_wallet_service)
):
    check_address(address)
    return await service.get_wallet_info(address)


@router.get(
    "/wallet/{address}/balance",
    summary="Get wallet balance",
    description="Retrieves the balance of a wallet in SOL."
)
@handle_api_errors("Failed to fetch balance")
async def get_wallet_balance(
    address: str = Path(..., description="Wallet address"),
    service: WalletService = Depends(get_wallet_service)
):
    check_address(address)
    balance = await service.get_balance(address)
    return {"address": address, "balance": balance}


@router.get(
    "/wallet/{address}/tokens",
    summary="Get token accounts",
    description="Retrieves the SPL token accounts owned by a wallet."
)
@handle_api_errors("Failed to fetch token accounts")
async def get_token_accounts(
    address: str = Path(..., description="Wallet address"),
    service: WalletService = Depends(get_wallet_service)
):
    check_address(address)
    token_accounts = await service.get_token_accounts(address)
    return {
        "address": address,
        "tokenAccounts": [account.to_json_dict() for account in token_accounts],
    }


@router.get(
    "/wallet/{address}/transactions",
    summary="Get transaction history",
    description="Retrieves recent transactions of a wallet with their details."
)
@handle_api_errors("Failed to fetch transactions")
async def get_transactions(
    address: str = Path(..., description="Wallet address"),
    limit: Optional[str] = Query(None, description="Maximum number of transactions"),
    service: WalletService = Depends(get_wallet_service)
):
    """Get transaction history for a wallet.

    Args:
        address: The wallet address
        limit: Maximum number of transactions, 20 when absent or invalid
        service: The wallet service

    Returns:
        The address and its transactions
    """
    check_address(address)
    transactions = await service.get_transaction_history(address, parse_limit(limit, DEFAULT_HISTORY_LIMIT))
    return {
        "address": address,
        "transactions": [tx.to_json_dict() for tx in transactions],
    }


@router.get(
    "/wallet/{address}/fees",
    summary="Get transaction fees",
    description="Fee paid by each recent transaction of a wallet, with totals."
)
@handle_api_errors("Failed to fetch fees")
async def get_fees(
    address: str = Path(..., description="Wallet address"),
    limit: Optional[str] = Query(None, description="Maximum number of transactions"),
    service: WalletService = Depends(get_wallet_service)
):
    check_address(address)
    fees = await service.get_transaction_fees(address, parse_limit(limit, DEFAULT_FEES_LIMIT))
    summary = service.summarize_fees(fees)
    return {
        "address": address,
        "totalFees": summary.total,
        "averageFee": summary.average,
        "transactionCount": summary.count,
        "fees": [fee.to_json_dict() for fee in fees],
    }


@router.get(
    "/wallet/{address}/pools",
    summary="Get liquidity pool positions",
    description="Liquidity pool positions held by a wallet. Detection is not implemented yet."
)
@handle_api_errors("Failed to fetch liquidity pools")
async def get_liquidity_pools(
    address: str = Path(..., description="Wallet address"),
    service: WalletService = Depends(get_wallet_service)
):
    check_address(address)
    pools = await service.detect_liquidity_pools(address)
    return {"address": address, "pools": [pool.to_json_dict() for pool in pools]}


@router.get(
    "/wallet/{address}/summary",
    response_model=WalletSummary,
    summary="Get wallet summary",
    description="Wallet information, fee analytics, liquidity pools and success statistics."
)
@handle_api_errors("Failed to fetch wallet summary")
async def get_wallet_summary(
    address: str = Path(..., description="Wallet address"),
    service: WalletService = Depends(get_wallet_service)
):
    check_address(address)
    return await service.get_wallet_summary(address)


@router.get(
    "/transaction/{signature}",
    summary="Get transaction",
    description=(
        "Raw parsed details of a transaction, or null when the node does not know it. "
        "Returns 400 unless the signature is base58 encoded and decodes to 64 bytes."
    )
)
@handle_api_errors("Failed to fetch transaction")
async def get_transaction(
    signature: str = Path(..., description="Transaction signature"),
    service: WalletService = Depends(get_wallet_service)
):
    if not validate_transaction_signature(signature):
        raise ValidationError("Invalid transaction signature")

    transaction = await service.get_transaction(signature)
    return {"signature": signature, "transaction": transaction}
