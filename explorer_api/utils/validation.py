"""Validation utilities for the Explorer API.

This module provides utilities for validating Solana addresses, transaction
signatures and detached message signatures.
"""

import base64
import binascii
from typing import Any

import base58
from solders.pubkey import Pubkey
from solders.signature import Signature

from explorer_api.constants import PUBKEY_LENGTH, SIGNATURE_LENGTH
from explorer_api.logging_config import get_logger
from explorer_api.utils.errors import DecodeError, InvalidPublicKeyError

logger = get_logger(__name__)


def _b58decode_length(text: Any) -> int:
    """Return the decoded byte length of a base58 string, or -1 if it does not decode.

    ``base58.b58decode`` strips surrounding whitespace, so any whitespace is
    rejected up front.
    """
    if not text or not isinstance(text, str):
        return -1
    if any(char.isspace() for char in text):
        return -1
    try:
        return len(base58.b58decode(text))
    except ValueError:
        return -1


def is_valid_address(address: Any) -> bool:
    """Validate a Solana address.

    An address is valid when it base58-decodes to exactly 32 bytes.

    Args:
        address: The address to validate

    Returns:
        True if the address is valid, False otherwise
    """
    return _b58decode_length(address) == PUBKEY_LENGTH


def validate_transaction_signature(signature: Any) -> bool:
    """Validate a Solana transaction signature (base58, 64 bytes decoded)."""
    return _b58decode_length(signature) == SIGNATURE_LENGTH


def require_address(address: Any, field_name: str = "address") -> Pubkey:
    """Parse an address, raising if it is invalid.

    Args:
        address: The address to parse
        field_name: Name of the field for the error message

    Returns:
        The parsed public key

    Raises:
        InvalidPublicKeyError: If the address is invalid
    """
    message = f"Invalid Solana {field_name}: {address}"
    if not is_valid_address(address):
        raise InvalidPublicKeyError(address, message)
    try:
        return Pubkey.from_string(address)
    except ValueError as e:
        raise InvalidPublicKeyError(address, message) from e


def decode_signature(signature: str) -> bytes:
    """Decode a detached signature sent as base64 or hex.

    Base64 is tried first. Hex digits are also valid base64 characters, so a
    base64 result that is not a 64-byte signature falls through to hex.

    Raises:
        DecodeError: If neither encoding yields a 64-byte signature
    """
    try:
        decoded = base64.b64decode(signature, validate=True)
        if len(decoded) == SIGNATURE_LENGTH:
            return decoded
    except (binascii.Error, ValueError):
        pass

    try:
        decoded = bytes.fromhex(signature)
    except ValueError:
        raise DecodeError("Signature is neither base64 nor hex encoded")

    if len(decoded) != SIGNATURE_LENGTH:
        raise DecodeError(
            f"Signature must be {SIGNATURE_LENGTH} bytes, got {len(decoded)}",
            details={"length": len(decoded)}
        )
    return decoded


def verify_signature(message: str, signature: str, public_key: str) -> bool:
    """Verify a detached Ed25519 signature over a UTF-8 message.

    Args:
        message: The original message that was signed
        signature: The signature, base64 or hex encoded
        public_key: The signer's address

    Returns:
        True if the signature is valid, False for bad input or a failed check
    """
    if not message or not signature or not public_key:
        return False

    try:
        message_bytes = message.encode("utf-8")
        signature_bytes = decode_signature(signature)
        pubkey = require_address(public_key, "public key")
        verified = Signature.from_bytes(signature_bytes).verify(pubkey, message_bytes)
    except (DecodeError, InvalidPublicKeyError, ValueError) as e:
        logger.error(f"Error verifying signature: {str(e)}")
        return False

    logger.debug(f"Signature verification result: {verified}")
    return verified
