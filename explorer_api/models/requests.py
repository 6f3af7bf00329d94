"""Request body models for the API.

Fields are optional so handlers can report missing fields with their own
messages instead of the framework's 422.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class VerifySignatureRequest(BaseModel):
    """Body of a detached signature check."""

    model_config = ConfigDict(populate_by_name=True)

    message: Optional[str] = Field(None, description="The signed message")
    signature: Optional[str] = Field(None, description="Base64 or hex encoded signature")
    public_key: Optional[str] = Field(None, alias="publicKey", description="Signer address")


class CreateTransactionRequest(BaseModel):
    """Body of an unsigned transfer request."""

    model_config = ConfigDict(populate_by_name=True)

    from_pubkey: Optional[str] = Field(None, alias="fromPubkey", description="Sender address")
    to_pubkey: Optional[str] = Field(None, alias="toPubkey", description="Recipient address")
    amount: Optional[Any] = Field(None, description="Amount in SOL")


class SendTransactionRequest(BaseModel):
    """Body of a signed transaction submission."""

    model_config = ConfigDict(populate_by_name=True)

    signed_transaction: Optional[str] = Field(
        None,
        alias="signedTransaction",
        description="Base64 encoded signed transaction"
    )
