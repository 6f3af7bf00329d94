"""Solana wallet-connect API routes.

This module defines routes for address validation, signature verification,
and building and submitting transfer transactions.
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, Path

from explorer_api.dependencies import get_transaction_service
from explorer_api.models.requests import (
    CreateTransactionRequest,
    SendTransactionRequest,
    VerifySignatureRequest,
)
from explorer_api.services.transaction_service import TransactionService, sol_to_lamports
from explorer_api.utils.decorators import handle_api_errors
from explorer_api.utils.errors import ValidationError
from explorer_api.utils.validation import (
    is_valid_address,
    validate_transaction_signature,
    verify_signature,
)

router = APIRouter(prefix="/api/v1/solana", tags=["solana"])


@router.get(
    "/validate-address/{address}",
    summary="Validate an address",
    description="Checks whether a string is a well-formed Solana address."
)
@handle_api_errors("Internal server error")
async def validate_address(address: str = Path(..., description="Address to validate")):
    return {"valid": is_valid_address(address), "address": address}


@router.get(
    "/balance/{address}",
    summary="Get balance",
    description="Retrieves the balance of a Solana address in SOL."
)
@handle_api_errors("Failed to get balance")
async def get_balance(
    address: str = Path(..., description="Account address"),
    service: TransactionService = Depends(get_transaction_service)
):
    if not is_valid_address(address):
        raise ValidationError("Invalid Solana address")

    balance = await service.get_balance(address)
    return {"address": address, "balance": balance}


@router.post(
    "/verify-signature",
    summary="Verify a signed message",
    description="Verifies a detached Ed25519 signature (base64 or hex) over a UTF-8 message."
)
@handle_api_errors("Failed to verify signature")
async def verify_signature_route(body: Optional[VerifySignatureRequest] = Body(None)):
    """Verify a message signature.

    Args:
        body: Message, signature and signer public key

    Returns:
        Whether the signature is valid
    """
    body = body or VerifySignatureRequest()
    if not body.message or not body.signature or not body.public_key:
        raise ValidationError("Missing required fields: message, signature, publicKey")

    if not is_valid_address(body.public_key):
        raise ValidationError("Invalid public key")

    valid = verify_signature(body.message, body.signature, body.public_key)
    return {"valid": valid, "message": body.message, "publicKey": body.public_key}


@router.post(
    "/create-transaction",
    summary="Create a transfer transaction",
    description="Builds an unsigned SOL transfer for the sender to sign."
)
@handle_api_errors("Failed to create transaction")
async def create_transaction(
    body: Optional[CreateTransactionRequest] = Body(None),
    service: TransactionService = Depends(get_transaction_service)
):
    """Create an unsigned transfer transaction.

    Args:
        body: Sender, recipient and amount in SOL
        service: The transaction service

    Returns:
        The base64 encoded unsigned transaction and the request fields
    """
    body = body or CreateTransactionRequest()
    if not body.from_pubkey or not body.to_pubkey or "amount" not in body.model_fields_set:
        raise ValidationError("Missing required fields: fromPubkey, toPubkey, amount")

    if not is_valid_address(body.from_pubkey):
        raise ValidationError("Invalid sender address")

    if not is_valid_address(body.to_pubkey):
        raise ValidationError("Invalid recipient address")

    # Raises "Invalid amount" for non-numbers, non-finite values and sub-lamport amounts
    sol_to_lamports(body.amount)

    transaction = await service.create_transfer_transaction(body.from_pubkey, body.to_pubkey, body.amount)
    return {
        "transaction": transaction,
        "fromPubkey": body.from_pubkey,
        "toPubkey": body.to_pubkey,
        "amount": body.amount,
    }


@router.post(
    "/send-transaction",
    summary="Send a signed transaction",
    description="Broadcasts a signed, base64 encoded transaction."
)
@handle_api_errors("Failed to send transaction")
async def send_transaction(
    body: Optional[SendTransactionRequest] = Body(None),
    service: TransactionService = Depends(get_transaction_service)
):
    if body is None or not body.signed_transaction:
        raise ValidationError("Missing required field: signedTransaction")

    signature = await service.send_transaction(body.signed_transaction)
    return {"signature": signature}


@router.get(
    "/transaction-status/{signature}",
    summary="Get transaction status",
    description=(
        "Retrieves the confirmation status of a transaction signature. "
        "Returns 400 unless the signature is base58 encoded and decodes to 64 bytes."
    )
)
@handle_api_errors("Failed to get transaction status")
async def get_transaction_status(
    signature: str = Path(..., description="Transaction signature"),
    service: TransactionService = Depends(get_transaction_service)
):
    if not validate_transaction_signature(signature):
        raise ValidationError("Invalid transaction signature")

    status = await service.get_transaction_status(signature)
    return {"signature": signature, "status": status}


@router.get(
    "/recent-blockhash",
    summary="Get recent blockhash",
    description="Retrieves the latest blockhash."
)
@handle_api_errors("Failed to get recent blockhash")
async def get_recent_blockhash(service: TransactionService = Depends(get_transaction_service)):
    blockhash = await service.get_recent_blockhash()
    return {"blockhash": blockhash}
