"""Transaction service for the Explorer API.

This module builds unsigned SOL transfers for external signing and submits
externally signed transactions to the network.
"""

import base64
import binascii
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional

from solders.hash import Hash
from solders.message import Message
from solders.system_program import TransferParams, transfer
from solders.transaction import Transaction

from explorer_api.clients.solana_rpc import SolanaRpcClient
from explorer_api.constants import LAMPORTS_PER_SOL
from explorer_api.services.base_service import BaseService
from explorer_api.utils.errors import DecodeError, ValidationError
from explorer_api.utils.validation import require_address


def is_positive_amount(amount: Any) -> bool:
    """Check that an amount is a finite number greater than zero.

    Booleans, strings, NaN and infinities are not amounts.
    """
    if isinstance(amount, bool) or not isinstance(amount, (int, float, Decimal)):
        return False
    try:
        value = Decimal(str(amount))
    except InvalidOperation:
        return False
    return value.is_finite() and value > 0


def sol_to_lamports(amount: Any) -> int:
    """Convert a whole-SOL amount to lamports.

    Raises:
        ValidationError: If the amount is not a positive number, or is
            smaller than one lamport
    """
    if not is_positive_amount(amount):
        raise ValidationError("Invalid amount", details={"amount": str(amount)})
    lamports = int(round(Decimal(str(amount)) * LAMPORTS_PER_SOL))
    if lamports <= 0:
        raise ValidationError("Invalid amount", details={"amount": str(amount)})
    return lamports


class TransactionService(BaseService):
    """Service for building and submitting transfer transactions."""

    def __init__(self, rpc_client: SolanaRpcClient):
        """Initialize the transaction service.

        Args:
            rpc_client: The shared Solana RPC client
        """
        super().__init__()
        self.client = rpc_client

    async def get_balance(self, address: str) -> float:
        """Get the balance of an address in SOL.

        Raises:
            InvalidPublicKeyError: If the address does not parse
        """
        pubkey = require_address(address)
        lamports = await self.client.get_balance(str(pubkey))
        return lamports / LAMPORTS_PER_SOL

    async def get_recent_blockhash(self) -> str:
        """Get the latest blockhash."""
        latest = await self.client.get_latest_blockhash()
        return latest["blockhash"]

    async def create_transfer_transaction(self, from_pubkey: str, to_pubkey: str, amount: Any) -> str:
        """Build an unsigned SOL transfer ready for external signing.

        The sender is the fee payer and the latest blockhash is embedded.
        Signature slots are left zeroed.

        Args:
            from_pubkey: Sender address
            to_pubkey: Recipient address
            amount: Amount in SOL

        Returns:
            The serialized transaction, base64 encoded

        Raises:
            InvalidPublicKeyError: If either address does not parse
            ValidationError: If the amount is not positive
        """
        sender = require_address(from_pubkey, "sender address")
        recipient = require_address(to_pubkey, "recipient address")
        lamports = sol_to_lamports(amount)

        instruction = transfer(TransferParams(from_pubkey=sender, to_pubkey=recipient, lamports=lamports))
        blockhash = await self.get_recent_blockhash()
        message = Message.new_with_blockhash([instruction], sender, Hash.from_string(blockhash))
        transaction = Transaction.new_unsigned(message)

        self.log_with_context(
            "info",
            "Created transfer transaction",
            sender=str(sender),
            recipient=str(recipient),
            lamports=lamports,
        )
        return base64.b64encode(bytes(transaction)).decode("ascii")

    async def send_transaction(self, signed_transaction: str) -> str:
        """Submit a signed, base64 encoded transaction.

        Node rejections (bad or missing signatures, stale blockhash) propagate
        unchanged as ``RpcError``.

        Returns:
            The transaction signature

        Raises:
            DecodeError: If the payload is not a serialized transaction
        """
        try:
            raw = base64.b64decode(signed_transaction, validate=True)
            transaction = Transaction.from_bytes(raw)
        except (binascii.Error, ValueError) as e:
            raise DecodeError(f"Invalid signed transaction: {str(e)}") from e

        signature = await self.client.send_raw_transaction(bytes(transaction))
        self.logger.info(f"Transaction sent with signature: {signature}")
        return signature

    async def get_transaction_status(self, signature: str) -> Optional[Dict[str, Any]]:
        """Get the confirmation status of a signature, or None if unknown."""
        return await self.client.get_signature_status(signature)
