"""Wallet and transaction models.

Field names are snake_case in Python and camelCase on the wire.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CamelModel(BaseModel):
    """Base model that serializes with camelCase aliases."""

    model_config = ConfigDict(populate_by_name=True)

    def to_json_dict(self) -> dict:
        """Dump using wire field names."""
        return self.model_dump(by_alias=True, mode="json")


class TokenAccountRecord(CamelModel):
    """A token balance held by a wallet."""

    pubkey: str = Field(..., description="Token account address")
    mint: str = Field(..., description="Token mint address")
    owner: str = Field(..., description="Owner of the token account")
    amount: str = Field(..., description="Raw token amount, arbitrary precision")
    decimals: int = Field(..., description="Token decimals")
    ui_amount: Optional[float] = Field(None, alias="uiAmount", description="Amount scaled by decimals")


class TransactionRecord(CamelModel):
    """A historical on-chain transaction, as fetched."""

    signature: str = Field(..., description="Transaction signature")
    slot: int = Field(..., description="Slot in which the transaction was processed")
    block_time: Optional[int] = Field(None, alias="blockTime", description="Block time (Unix timestamp)")
    confirmation_status: Optional[str] = Field(None, alias="confirmationStatus",
                                               description="Commitment reached")
    err: Optional[Any] = Field(None, description="Error if the transaction failed")
    memo: Optional[Any] = Field(None, description="Memo attached to the transaction")

    @property
    def succeeded(self) -> bool:
        return self.err is None


class WalletInfo(CamelModel):
    """Balance, token accounts and recent transactions of one address."""

    address: str
    balance: float
    token_accounts: List[TokenAccountRecord] = Field(default_factory=list, alias="tokenAccounts")
    transactions: List[TransactionRecord] = Field(default_factory=list)


class TransactionFees(CamelModel):
    """Fee paid by one transaction."""

    signature: str
    fee: float = Field(..., description="Fee in SOL")
    fee_payer: str = Field(..., alias="feePayer",
                           description="First account key, or the queried address when unknown")
    block_time: Optional[int] = Field(None, alias="blockTime")


class PoolToken(CamelModel):
    """One side of a liquidity pool position."""

    mint: str
    amount: str
    symbol: Optional[str] = None


class LiquidityPoolPosition(CamelModel):
    """A liquidity pool position held by a wallet."""

    pool_address: str = Field(..., alias="poolAddress")
    protocol: str
    token_a: PoolToken = Field(..., alias="tokenA")
    token_b: PoolToken = Field(..., alias="tokenB")
    lp_token_amount: str = Field(..., alias="lpTokenAmount")
    value_usd: Optional[float] = Field(None, alias="valueUSD")


class FeeSummary(CamelModel):
    """Aggregate of a list of transaction fees."""

    total: float = 0.0
    count: int = 0
    average: float = 0.0
    breakdown: List[TransactionFees] = Field(default_factory=list)


class WalletStatistics(CamelModel):
    """Success/failure statistics over a wallet's transactions."""

    total_transactions: int = Field(0, alias="totalTransactions")
    successful_transactions: int = Field(0, alias="successfulTransactions")
    failed_transactions: int = Field(0, alias="failedTransactions")
    success_rate: float = Field(0.0, alias="successRate", description="Percentage, 0 with no transactions")


class WalletSummary(CamelModel):
    """Aggregated view of one address."""

    wallet: WalletInfo
    fees: FeeSummary
    liquidity_pools: List[LiquidityPoolPosition] = Field(default_factory=list, alias="liquidityPools")
    statistics: WalletStatistics
