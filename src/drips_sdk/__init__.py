# Suppress websockets deprecation warning from web3.py (ethereum/web3.py#3530)
# web3.py unconditionally imports LegacyWebSocketProvider even for HTTP-only usage.
# This will be fixed in web3.py v8. Remove this filter after upgrading.
import warnings

warnings.filterwarnings(
    "ignore",
    message="websockets.legacy is deprecated",
    category=DeprecationWarning,
    module=r"websockets\.legacy",
)

"""
Drips SDK

Client library for the Drips protocol: stream funds per second (drips),
split received funds between users, give and collect, and query balances.

Usage:
    import asyncio
    from drips_sdk import (
        AMT_PER_SEC_MULTIPLIER,
        AddressDriverClient,
        DripsReceiver,
        DripsReceiverConfig,
    )

    async def main():
        client = await AddressDriverClient.create(
            rpc_url="https://rpc.ankr.com/eth_goerli",
            private_key="0x...",
        )

        tx_hash = await client.set_drips(
            token_address="0xToken...",
            current_receivers=[],
            new_receivers=[
                DripsReceiver(
                    user_id=receiver_id,
                    config=DripsReceiverConfig(amount_per_sec=1 * AMT_PER_SEC_MULTIPLIER),
                ),
            ],
            transfer_to_address=client.address,
            balance_delta=10**18,
        )

    asyncio.run(main())

Read-only queries:
    from drips_sdk import DripsHubClient

    hub = await DripsHubClient.create_readonly("https://rpc.ankr.com/eth_goerli")
    balances = await hub.get_balances_for_user(user_id)

Codec and validation helpers work offline:
    from drips_sdk import pack_config, unpack_config, format_drips_receivers
"""

from ._exceptions import (
    AddressError,
    ArgumentError,
    ArgumentMissingError,
    ArgumentRangeError,
    ConfigRangeError,
    ConfigurationError,
    DripsError,
    DuplicateReceiverError,
    InsufficientGasError,
    InvalidCycleLengthError,
    ReceiverConfigError,
    SignerMissingError,
    SplitsReceiverError,
    SubgraphError,
    TooManyReceiversError,
    TooManySplitsReceiversError,
    TransactionError,
    TransactionRejectedError,
    TransactionRevertedError,
    UnsupportedNetworkError,
)
from ._version import __version__

# ABIs (for advanced usage)
from .abi import ADDRESS_DRIVER_ABI, DRIPS_HUB_ABI, ERC20_ABI

# Clients
from .address_driver import AddressDriverClient

# Addresses and IDs
from .assets import (
    asset_id_from_token,
    get_user_address,
    token_from_asset_id,
    validate_address,
)

# Codec
from .codec import (
    from_uint,
    pack_config,
    pack_receiver,
    to_int,
    to_uint,
    unpack_config,
    unpack_receiver,
)

# Constants
from .constants import (
    AMT_PER_SEC_EXTRA_DECIMALS,
    AMT_PER_SEC_MULTIPLIER,
    MAX_DRIPS_RECEIVERS,
    MAX_SPLITS_RECEIVERS,
    TOTAL_SPLITS_WEIGHT,
)

# Cycles
from .cycles import count_cycles, get_current_cycle_info, get_cycle_start
from .drips_hub import DripsHubClient

# Networks
from .networks import NETWORKS, SUPPORTED_CHAINS, is_supported_chain, resolve

# Receiver lists
from .receivers import (
    format_drips_receivers,
    format_splits_receivers,
    normalize_drips_receivers,
    normalize_splits_receivers,
    validate_drips_receivers,
    validate_splits_receivers,
)
from .subgraph import DripsSubgraphClient

# Types
from .types import (
    CycleInfo,
    DripsHistory,
    DripsReceiver,
    DripsReceiverConfig,
    DripsReceiverSeenEvent,
    DripsSetEvent,
    DripsState,
    GasOptions,
    NetworkMetadata,
    ReceivableDrips,
    ReceivableTokenBalance,
    SplitsReceiver,
)

__all__ = [
    # Version
    "__version__",
    # Clients
    "AddressDriverClient",
    "DripsHubClient",
    "DripsSubgraphClient",
    # Types
    "DripsReceiverConfig",
    "DripsReceiver",
    "SplitsReceiver",
    "DripsHistory",
    "DripsState",
    "ReceivableDrips",
    "ReceivableTokenBalance",
    "CycleInfo",
    "NetworkMetadata",
    "DripsSetEvent",
    "DripsReceiverSeenEvent",
    "GasOptions",
    # Constants
    "AMT_PER_SEC_EXTRA_DECIMALS",
    "AMT_PER_SEC_MULTIPLIER",
    "MAX_DRIPS_RECEIVERS",
    "MAX_SPLITS_RECEIVERS",
    "TOTAL_SPLITS_WEIGHT",
    # Networks
    "NETWORKS",
    "SUPPORTED_CHAINS",
    "is_supported_chain",
    "resolve",
    # Codec
    "pack_config",
    "unpack_config",
    "pack_receiver",
    "unpack_receiver",
    "to_uint",
    "to_int",
    "from_uint",
    # Receiver lists
    "validate_drips_receivers",
    "validate_splits_receivers",
    "normalize_drips_receivers",
    "normalize_splits_receivers",
    "format_drips_receivers",
    "format_splits_receivers",
    # Cycles
    "get_current_cycle_info",
    "get_cycle_start",
    "count_cycles",
    # Addresses and IDs
    "validate_address",
    "asset_id_from_token",
    "token_from_asset_id",
    "get_user_address",
    # ABIs
    "DRIPS_HUB_ABI",
    "ADDRESS_DRIVER_ABI",
    "ERC20_ABI",
    # Exceptions
    "DripsError",
    "ConfigurationError",
    "ArgumentError",
    "ArgumentMissingError",
    "ArgumentRangeError",
    "ConfigRangeError",
    "AddressError",
    "DuplicateReceiverError",
    "TooManyReceiversError",
    "TooManySplitsReceiversError",
    "ReceiverConfigError",
    "SplitsReceiverError",
    "SignerMissingError",
    "UnsupportedNetworkError",
    "InvalidCycleLengthError",
    "SubgraphError",
    "TransactionError",
    "TransactionRejectedError",
    "TransactionRevertedError",
    "InsufficientGasError",
]
