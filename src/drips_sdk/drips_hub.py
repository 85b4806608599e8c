"""DripsHub client for drips-sdk."""

import asyncio
import logging
import os
from datetime import datetime
from typing import Any

from eth_account.signers.local import LocalAccount
from hexbytes import HexBytes
from web3 import AsyncWeb3

from ._exceptions import ArgumentMissingError, ArgumentRangeError, ConfigurationError, SignerMissingError
from .abi import DRIPS_HUB_ABI
from .assets import token_from_asset_id, validate_address
from .codec import from_uint, to_uint
from .connection import (
    DRIPS_HUB_ENV,
    SUBGRAPH_URL_ENV,
    connect,
    resolve_contract_address,
    resolve_private_key,
)
from .constants import MAX_CYCLES
from .cycles import get_current_cycle_info
from .receivers import format_drips_receivers, validate_drips_receivers
from .subgraph import DripsSubgraphClient
from .transactions import DEFAULT_GAS_RECEIVE_DRIPS, send_transaction
from .types import (
    CycleInfo,
    DripsHistory,
    DripsReceiver,
    DripsState,
    GasOptions,
    NetworkMetadata,
    ReceivableDrips,
    ReceivableTokenBalance,
)

logger = logging.getLogger(__name__)


def _require_user_id(value: Any, name: str, operation: str) -> int:
    if value is None:
        raise ArgumentMissingError(f"Could not {operation}: '{name}' is missing", name)
    return to_uint(value, 256, name)


def _require_max_cycles(max_cycles: Any, operation: str) -> int:
    if max_cycles is None:
        raise ArgumentMissingError(f"Could not {operation}: 'max_cycles' is missing", "max_cycles")
    max_cycles = to_uint(max_cycles, 32, "max_cycles")
    if max_cycles == 0:
        raise ArgumentRangeError(
            f"Could not {operation}: 'max_cycles' must be greater than 0", "max_cycles", max_cycles
        )
    return max_cycles


class DripsHubClient:
    """
    Client for the DripsHub API: balances, receivable and squeezable drips.

    Example:
        >>> import asyncio
        >>> from drips_sdk import DripsHubClient
        >>>
        >>> async def main():
        ...     async with await DripsHubClient.create_readonly("https://rpc.ankr.com/eth_goerli") as hub:
        ...         balances = await hub.get_balances_for_user(user_id)
        ...         for balance in balances:
        ...             print(balance.token_address, balance.receivable_drips.receivable_amt)
        >>>
        >>> asyncio.run(main())
    """

    def __init__(
        self,
        w3: AsyncWeb3,
        network: NetworkMetadata,
        hub_address: str | None = None,
        account: LocalAccount | None = None,
        subgraph: DripsSubgraphClient | None = None,
    ) -> None:
        """
        Prefer the `create` / `create_readonly` factories, which resolve the network.

        Args:
            w3: AsyncWeb3 instance connected to a supported chain
            network: Metadata of that chain
            hub_address: DripsHub address. Falls back to DRIPS_HUB_ADDRESS, then to the
                network metadata.
            account: Signing account for receive_drips; None for a read-only client
            subgraph: Subgraph client. When not provided, one is created for
                DRIPS_SUBGRAPH_URL or the network's subgraph and closed with this client.

        Raises:
            ConfigurationError: If no DripsHub address is available
        """
        self.w3 = w3
        self.network = network
        self.account = account
        self.hub_address = resolve_contract_address(hub_address, DRIPS_HUB_ENV, network.drips_hub, "hub_address")
        self.hub = w3.eth.contract(address=self.hub_address, abi=DRIPS_HUB_ABI)

        self._owns_subgraph = subgraph is None
        if subgraph is None:
            subgraph_url = os.environ.get(SUBGRAPH_URL_ENV) or network.subgraph_url
            subgraph = DripsSubgraphClient(subgraph_url) if subgraph_url else None
        self.subgraph = subgraph

    @classmethod
    async def create(
        cls,
        rpc_url: str | None = None,
        private_key: str | None = None,
        hub_address: str | None = None,
        *,
        w3: AsyncWeb3 | None = None,
        subgraph: DripsSubgraphClient | None = None,
    ) -> "DripsHubClient":
        """
        Create a client that can also submit receive_drips transactions.

        Raises:
            ConfigurationError: If the RPC URL, private key or hub address is missing
            UnsupportedNetworkError: If the provider is connected to an unsupported chain
        """
        account = resolve_private_key(private_key)
        w3, network = await connect(rpc_url, w3)
        return cls(w3, network, hub_address, account, subgraph)

    @classmethod
    async def create_readonly(
        cls,
        rpc_url: str | None = None,
        hub_address: str | None = None,
        *,
        w3: AsyncWeb3 | None = None,
        subgraph: DripsSubgraphClient | None = None,
    ) -> "DripsHubClient":
        """
        Create a query-only client.

        Raises:
            ConfigurationError: If the RPC URL or hub address is missing
            UnsupportedNetworkError: If the provider is connected to an unsupported chain
        """
        w3, network = await connect(rpc_url, w3)
        return cls(w3, network, hub_address, subgraph=subgraph)

    async def close(self) -> None:
        """Close the RPC session and the subgraph client created by this client."""
        if self._owns_subgraph and self.subgraph is not None:
            await self.subgraph.close()
        await self.w3.provider.disconnect()

    async def __aenter__(self) -> "DripsHubClient":
        """Enter async context manager."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context manager and close sessions."""
        await self.close()

    async def get_cycle_secs(self) -> int:
        """Get the cycle length in seconds, as reported by the contract."""
        return from_uint(await self.hub.functions.cycleSecs().call(), 32, "cycle_secs")

    def get_current_cycle_info(self, now: datetime | None = None) -> CycleInfo:
        """Get the current cycle of the network (no network call)."""
        return get_current_cycle_info(self.network.cycle_secs, now)

    async def get_total_balance_for_token(self, token_address: str) -> int:
        """
        Get the total amount of a token currently held by DripsHub.

        Raises:
            AddressError: If token_address is not valid
        """
        token = validate_address(token_address, "token_address")
        return from_uint(await self.hub.functions.totalBalance(token).call(), 256, "balance")

    async def get_receivable_drips_cycles_count(self, user_id: int, token_address: str) -> int:
        """
        Get the number of cycles from which drips can be received.

        Useful to detect if there are too many cycles to receive in one transaction.

        Raises:
            AddressError: If token_address is not valid
            ArgumentMissingError: If user_id is None
        """
        token = validate_address(token_address, "token_address")
        user_id = _require_user_id(user_id, "user_id", "get receivable drips cycles")

        cycles = await self.hub.functions.receivableDripsCycles(user_id, token).call()
        return from_uint(cycles, 32, "cycles")

    async def get_receivable_drips(self, user_id: int, token_address: str, max_cycles: int) -> ReceivableDrips:
        """
        Calculate the drips that receive_drips would receive.

        Args:
            user_id: The user ID
            token_address: The ERC20 token address
            max_cycles: Maximum number of cycles to receive, greater than 0.
                Low values keep receiving cheap but may not cover every cycle.

        Raises:
            AddressError: If token_address is not valid
            ArgumentMissingError: If user_id or max_cycles is None
            ArgumentRangeError: If max_cycles is not in [1, 2**32)
        """
        token = validate_address(token_address, "token_address")
        user_id = _require_user_id(user_id, "user_id", "get receivable drips")
        max_cycles = _require_max_cycles(max_cycles, "get receivable drips")

        receivable_amt, receivable_cycles = await self.hub.functions.receiveDripsResult(
            user_id, token, max_cycles
        ).call()

        return ReceivableDrips(
            receivable_amt=from_uint(receivable_amt, 128, "receivable_amt"),
            receivable_cycles=from_uint(receivable_cycles, 32, "receivable_cycles"),
        )

    async def receive_drips(
        self,
        user_id: int,
        token_address: str,
        max_cycles: int,
        gas: GasOptions | None = None,
    ) -> HexBytes:
        """
        Receive drips of a user, making them splittable (permissionless).

        Raises:
            SignerMissingError: If the client is read-only
            AddressError: If token_address is not valid
            ArgumentMissingError: If user_id or max_cycles is None
            ArgumentRangeError: If max_cycles is not in [1, 2**32)
        """
        if self.account is None:
            raise SignerMissingError("Could not receive drips: the client is read-only")
        token = validate_address(token_address, "token_address")
        user_id = _require_user_id(user_id, "user_id", "receive drips")
        max_cycles = _require_max_cycles(max_cycles, "receive drips")

        return await send_transaction(
            self.w3,
            self.account,
            self.network.chain_id,
            self.hub.functions.receiveDrips(user_id, token, max_cycles),
            DEFAULT_GAS_RECEIVE_DRIPS,
            gas,
        )

    async def get_squeezable_drips(
        self,
        user_id: int,
        token_address: str,
        sender_id: int,
        history_hash: bytes,
        drips_history: list[DripsHistory],
    ) -> int:
        """
        Calculate the amount that can be squeezed from a sender's current cycle.

        Args:
            user_id: The ID of the user receiving drips
            token_address: The ERC20 token address
            sender_id: The ID of the user sending drips
            history_hash: The sender's history hash right before the configurations in drips_history
            drips_history: The sequence of the sender's drips configurations

        Raises:
            AddressError: If token_address is not valid
            ArgumentMissingError: If any argument is None
            ArgumentRangeError: If history_hash is not 32 bytes
            TooManyReceiversError, ReceiverConfigError, DuplicateReceiverError:
                If a history entry has invalid receivers
        """
        token = validate_address(token_address, "token_address")
        user_id = _require_user_id(user_id, "user_id", "get squeezable drips")
        sender_id = _require_user_id(sender_id, "sender_id", "get squeezable drips")

        if history_hash is None:
            raise ArgumentMissingError("Could not get squeezable drips: 'history_hash' is missing", "history_hash")
        if len(history_hash) != 32:
            raise ArgumentRangeError(
                f"'history_hash' must be 32 bytes, got {len(history_hash)}", "history_hash", history_hash
            )
        if drips_history is None:
            raise ArgumentMissingError("Could not get squeezable drips: 'drips_history' is missing", "drips_history")

        for entry in drips_history:
            validate_drips_receivers(entry.receivers, "drips_history.receivers")

        history = [
            (entry.drips_hash, format_drips_receivers(entry.receivers), entry.update_time, entry.max_end)
            for entry in drips_history
        ]

        amount = await self.hub.functions.squeezeDripsResult(user_id, token, sender_id, history_hash, history).call()
        return from_uint(amount, 128, "amt")

    async def get_splittable(self, user_id: int, token_address: str) -> int:
        """
        Get the user's received funds that are not split yet.

        Raises:
            AddressError: If token_address is not valid
            ArgumentMissingError: If user_id is None
        """
        token = validate_address(token_address, "token_address")
        user_id = _require_user_id(user_id, "user_id", "get splittable")
        return from_uint(await self.hub.functions.splittable(user_id, token).call(), 128, "splittable")

    async def get_collectable(self, user_id: int, token_address: str) -> int:
        """
        Get the user's funds that are already split and ready to be collected.

        Raises:
            AddressError: If token_address is not valid
            ArgumentMissingError: If user_id is None
        """
        token = validate_address(token_address, "token_address")
        user_id = _require_user_id(user_id, "user_id", "get collectable")
        return from_uint(await self.hub.functions.collectable(user_id, token).call(), 128, "collectable")

    async def get_drips_state(self, user_id: int, token_address: str) -> DripsState:
        """
        Get the user's drips state for a token.

        Raises:
            AddressError: If token_address is not valid
            ArgumentMissingError: If user_id is None
        """
        token = validate_address(token_address, "token_address")
        user_id = _require_user_id(user_id, "user_id", "get drips state")

        drips_hash, drips_history_hash, update_time, balance, max_end = await self.hub.functions.dripsState(
            user_id, token
        ).call()

        return DripsState(
            drips_hash=drips_hash,
            drips_history_hash=drips_history_hash,
            update_time=from_uint(update_time, 32, "update_time"),
            balance=from_uint(balance, 128, "balance"),
            max_end=from_uint(max_end, 32, "max_end"),
        )

    async def get_balance_at(
        self,
        user_id: int,
        token_address: str,
        receivers: list[DripsReceiver],
        timestamp: int,
    ) -> int:
        """
        Get the user's drips balance at a given timestamp.

        Args:
            user_id: The user ID
            token_address: The ERC20 token address
            receivers: The user's current drips receivers
            timestamp: Not earlier than the last drips update. Timestamps in
                the future are predictions assuming no further updates.

        Raises:
            AddressError: If token_address is not valid
            ArgumentMissingError: If user_id, receivers or timestamp is None
            ArgumentRangeError: If timestamp is not a uint32
            TooManyReceiversError, ReceiverConfigError, DuplicateReceiverError:
                If receivers is invalid
        """
        token = validate_address(token_address, "token_address")
        validate_drips_receivers(receivers)
        user_id = _require_user_id(user_id, "user_id", "get balance")

        if timestamp is None:
            raise ArgumentMissingError("Could not get balance: 'timestamp' is missing", "timestamp")
        timestamp = to_uint(timestamp, 32, "timestamp")

        balance = await self.hub.functions.balanceAt(
            user_id, token, format_drips_receivers(receivers), timestamp
        ).call()
        return from_uint(balance, 128, "balance")

    async def get_balances_for_user(self, user_id: int, max_cycles: int = MAX_CYCLES) -> list[ReceivableTokenBalance]:
        """
        Get the receivable drips of a user for every token they have ever dripped.

        Tokens are discovered from the user's DripsSet events in the subgraph
        and queried concurrently. If any query fails, the whole call fails.

        Args:
            user_id: The user ID
            max_cycles: Maximum number of cycles per token, greater than 0

        Returns:
            One entry per token, in the order tokens first appear in the events

        Raises:
            ArgumentMissingError: If user_id is None
            ArgumentRangeError: If max_cycles is not in [1, 2**32)
            ConfigurationError: If no subgraph is configured
            SubgraphError: If the subgraph query fails
        """
        user_id = _require_user_id(user_id, "user_id", "get balances")
        max_cycles = _require_max_cycles(max_cycles, "get balances")
        if self.subgraph is None:
            raise ConfigurationError(f"Could not get balances: no subgraph URL (set {SUBGRAPH_URL_ENV})")

        events = await self.subgraph.get_drips_set_events_by_user_id(user_id)

        # First event per asset wins.
        asset_ids = list(dict.fromkeys(event.asset_id for event in events))
        tokens = [token_from_asset_id(asset_id) for asset_id in asset_ids]
        logger.debug("User %s has drips in %d tokens", user_id, len(tokens))

        results = await asyncio.gather(
            *(self.get_receivable_drips(user_id, token, max_cycles) for token in tokens)
        )

        return [
            ReceivableTokenBalance(token_address=token, receivable_drips=receivable)
            for token, receivable in zip(tokens, results)
        ]
