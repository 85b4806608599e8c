"""Type definitions for drips-sdk."""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StrictBytes, StrictInt, field_validator
from web3 import Web3

from .constants import MAX_UINT32, MAX_UINT256

# Bounded integers for fields whose width is fixed by the protocol.
Uint32 = Annotated[StrictInt, Field(ge=0, le=MAX_UINT32)]
Uint256 = Annotated[StrictInt, Field(ge=0, le=MAX_UINT256)]
Bytes32 = Annotated[StrictBytes, Field(min_length=32, max_length=32)]


class DripsReceiverConfig(BaseModel):
    """
    Drips configuration for a single receiver.

    Fields must be ints (bools are rejected) but are unbounded here: range
    checks happen when the config is packed (ConfigRangeError) or validated
    (ReceiverConfigError).

    Example:
        # 1 token unit (wei) per second, starting now, until the balance runs out
        DripsReceiverConfig(amount_per_sec=1 * AMT_PER_SEC_MULTIPLIER)
    """

    start: StrictInt = 0
    """UNIX timestamp when dripping starts. 0 means "when drips are configured"."""

    duration: StrictInt = 0
    """Seconds of dripping. 0 means "until the balance runs out"."""

    amount_per_sec: StrictInt
    """Smallest unit per second, multiplied by AMT_PER_SEC_MULTIPLIER."""

    model_config = {"frozen": True}


class DripsReceiver(BaseModel):
    """A drips receiver: the user ID receiving funds and how."""

    user_id: Uint256
    config: DripsReceiverConfig

    model_config = {"frozen": True}


class SplitsReceiver(BaseModel):
    """
    A splits receiver.

    The receiver gets weight / TOTAL_SPLITS_WEIGHT of the split funds.
    """

    user_id: Uint256
    weight: Uint32

    model_config = {"frozen": True}


class CycleInfo(BaseModel):
    """Position of a point in time within the network's cycles."""

    cycle_duration_secs: int
    current_cycle_secs: int
    current_cycle_start_date: datetime
    next_cycle_start_date: datetime

    model_config = {"frozen": True}


class NetworkMetadata(BaseModel):
    """
    Deployment metadata for a supported chain.

    Contract addresses are optional: when the table does not carry them they
    must be passed to the clients or set in the environment.
    """

    chain_id: int
    name: str
    cycle_secs: int
    subgraph_url: str | None = None
    drips_hub: str | None = None
    address_driver: str | None = None
    drips_hub_logic: str | None = None
    address_driver_logic: str | None = None

    model_config = {"frozen": True}

    @field_validator("drips_hub", "address_driver", "drips_hub_logic", "address_driver_logic")
    @classmethod
    def _checksum(cls, value: str | None) -> str | None:
        return Web3.to_checksum_address(value) if value is not None else None


class ReceivableDrips(BaseModel):
    """Result of receiveDripsResult."""

    receivable_amt: int
    """The amount which would be received."""

    receivable_cycles: int
    """The number of cycles which would still be receivable after the call."""

    model_config = {"frozen": True}


class DripsState(BaseModel):
    """A user's drips state for a single token."""

    drips_hash: bytes
    drips_history_hash: bytes
    update_time: int
    balance: int
    max_end: int

    model_config = {"frozen": True}


class DripsHistory(BaseModel):
    """
    One entry of a sender's drips configuration history, used for squeezing.

    Either drips_hash or receivers is meaningful: when receivers are given,
    drips_hash must be zero and the contract hashes the receivers itself.
    """

    drips_hash: Bytes32 = b"\x00" * 32
    receivers: list[DripsReceiver] = []
    update_time: Uint32
    max_end: Uint32

    model_config = {"frozen": True}


class ReceivableTokenBalance(BaseModel):
    """Receivable drips of a user for one token."""

    token_address: str
    receivable_drips: ReceivableDrips

    model_config = {"frozen": True}


class DripsReceiverSeenEvent(BaseModel):
    """Subgraph row: a receiver present in a DripsSet configuration."""

    id: str
    receiver_user_id: int = Field(alias="receiverUserId")
    config: int

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class DripsSetEvent(BaseModel):
    """Subgraph row: a user changed their drips configuration for an asset."""

    id: str
    user_id: int = Field(alias="userId")
    asset_id: int = Field(alias="assetId")
    receivers_hash: str = Field(alias="receiversHash")
    drips_receiver_seen_events: list[DripsReceiverSeenEvent] = Field(
        default_factory=list, alias="dripsReceiverSeenEvents"
    )
    block_timestamp: int = Field(alias="blockTimestamp")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class GasOptions(BaseModel):
    """
    Gas configuration for transactions.

    By default, uses fixed gas limits and lets the RPC set gas prices.
    Enable estimate_gas for dynamic estimation, or set EIP-1559 fees explicitly.

    Example:
        GasOptions(estimate_gas=True)  # Dynamic estimation with 20% buffer
        GasOptions(max_fee_per_gas=50_000_000_000)  # 50 gwei max fee
    """

    estimate_gas: bool = False
    """Estimate gas dynamically (adds 20% buffer). Default: False (use fixed limits)."""

    gas_limit: int | None = None
    """Override gas limit. If None, uses default or estimation."""

    max_fee_per_gas: int | None = None
    """EIP-1559 max fee per gas in wei. If set, uses type 2 transactions."""

    max_priority_fee_per_gas: int | None = None
    """EIP-1559 priority fee per gas in wei. Defaults to 1 gwei if max_fee is set."""

    model_config = {"frozen": True}
