"""AddressDriver client for drips-sdk."""

from eth_account.signers.local import LocalAccount
from eth_typing import ChecksumAddress
from hexbytes import HexBytes
from web3 import AsyncWeb3

from ._exceptions import ArgumentMissingError, ArgumentRangeError, SignerMissingError
from .abi import ADDRESS_DRIVER_ABI, ERC20_ABI
from .assets import get_user_address as _get_user_address
from .assets import validate_address
from .codec import from_uint, to_int, to_uint
from .connection import ADDRESS_DRIVER_ENV, connect, resolve_contract_address, resolve_private_key
from .constants import MAX_UINT256
from .receivers import (
    format_drips_receivers,
    format_splits_receivers,
    validate_drips_receivers,
    validate_splits_receivers,
)
from .transactions import (
    DEFAULT_GAS_APPROVE,
    DEFAULT_GAS_COLLECT,
    DEFAULT_GAS_EMIT_METADATA,
    DEFAULT_GAS_GIVE,
    DEFAULT_GAS_SET_DRIPS,
    DEFAULT_GAS_SET_SPLITS,
    send_transaction,
)
from .types import DripsReceiver, GasOptions, NetworkMetadata, SplitsReceiver


class AddressDriverClient:
    """
    Client for managing Drips of a user identified by an Ethereum address.

    Every address controls exactly one AddressDriver user ID, known upfront
    and derived from the address itself; no registration is needed.

    Instances are immutable. Use `create` for a client that signs
    transactions and `create_readonly` for queries only.

    Example:
        >>> import asyncio
        >>> from drips_sdk import AddressDriverClient, DripsReceiver, DripsReceiverConfig
        >>>
        >>> async def main():
        ...     client = await AddressDriverClient.create(
        ...         rpc_url="https://rpc.ankr.com/eth_goerli",
        ...         private_key="0x...",
        ...     )
        ...
        ...     tx_hash = await client.set_drips(
        ...         token_address="0xToken...",
        ...         current_receivers=[],
        ...         new_receivers=[
        ...             DripsReceiver(
        ...                 user_id=receiver_id,
        ...                 config=DripsReceiverConfig(amount_per_sec=10 * AMT_PER_SEC_MULTIPLIER),
        ...             ),
        ...         ],
        ...         transfer_to_address=client.address,
        ...         balance_delta=10**18,
        ...     )
        >>>
        >>> asyncio.run(main())
    """

    def __init__(
        self,
        w3: AsyncWeb3,
        network: NetworkMetadata,
        driver_address: str | None = None,
        account: LocalAccount | None = None,
    ) -> None:
        """
        Prefer the `create` / `create_readonly` factories, which resolve the network.

        Args:
            w3: AsyncWeb3 instance connected to a supported chain
            network: Metadata of that chain
            driver_address: AddressDriver address. Falls back to DRIPS_ADDRESS_DRIVER_ADDRESS,
                then to the network metadata.
            account: Signing account; None for a read-only client

        Raises:
            ConfigurationError: If no AddressDriver address is available
        """
        self.w3 = w3
        self.network = network
        self.account = account
        self.driver_address = resolve_contract_address(
            driver_address, ADDRESS_DRIVER_ENV, network.address_driver, "driver_address"
        )
        self.driver = w3.eth.contract(address=self.driver_address, abi=ADDRESS_DRIVER_ABI)

    @classmethod
    async def create(
        cls,
        rpc_url: str | None = None,
        private_key: str | None = None,
        driver_address: str | None = None,
        *,
        w3: AsyncWeb3 | None = None,
    ) -> "AddressDriverClient":
        """
        Create a client that manages Drips for the signer's address.

        Args:
            rpc_url: RPC endpoint URL. Falls back to DRIPS_RPC_URL env var.
            private_key: Private key for signing. Falls back to DRIPS_PRIVATE_KEY env var.
            driver_address: AddressDriver address. Falls back to DRIPS_ADDRESS_DRIVER_ADDRESS.
            w3: Existing AsyncWeb3 instance to use instead of rpc_url

        Raises:
            ConfigurationError: If the RPC URL, private key or driver address is missing
            UnsupportedNetworkError: If the provider is connected to an unsupported chain
        """
        account = resolve_private_key(private_key)
        w3, network = await connect(rpc_url, w3)
        return cls(w3, network, driver_address, account)

    @classmethod
    async def create_readonly(
        cls,
        rpc_url: str | None = None,
        driver_address: str | None = None,
        *,
        w3: AsyncWeb3 | None = None,
    ) -> "AddressDriverClient":
        """
        Create a client allowing only operations that do not sign.

        Raises:
            ConfigurationError: If the RPC URL or driver address is missing
            UnsupportedNetworkError: If the provider is connected to an unsupported chain
        """
        w3, network = await connect(rpc_url, w3)
        return cls(w3, network, driver_address)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.w3.provider.disconnect()

    async def __aenter__(self) -> "AddressDriverClient":
        """Enter async context manager."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context manager and close session."""
        await self.close()

    @property
    def address(self) -> str | None:
        """Get the wallet address (None for read-only clients)."""
        return self.account.address if self.account else None

    def _require_signer(self, operation: str) -> LocalAccount:
        if self.account is None:
            raise SignerMissingError(f"Could not {operation}: the client is read-only")
        return self.account

    async def _send(self, account: LocalAccount, contract_call, default_gas: int, gas: GasOptions | None) -> HexBytes:
        return await send_transaction(self.w3, account, self.network.chain_id, contract_call, default_gas, gas)

    async def get_allowance(self, token_address: str) -> int:
        """
        Get how much of a token the AddressDriver may spend on the signer's behalf.

        Raises:
            SignerMissingError: If the client is read-only
            AddressError: If token_address is not valid
        """
        account = self._require_signer("get allowance")
        token = validate_address(token_address, "token_address")

        erc20 = self.w3.eth.contract(address=token, abi=ERC20_ABI)
        allowance = await erc20.functions.allowance(account.address, self.driver_address).call()
        return from_uint(allowance, 256, "allowance")

    async def approve(self, token_address: str, gas: GasOptions | None = None) -> HexBytes:
        """
        Give the AddressDriver unlimited allowance over the signer's tokens.

        Returns:
            The submitted transaction hash

        Raises:
            SignerMissingError: If the client is read-only
            AddressError: If token_address is not valid
        """
        account = self._require_signer("approve")
        token = validate_address(token_address, "token_address")

        erc20 = self.w3.eth.contract(address=token, abi=ERC20_ABI)
        call = erc20.functions.approve(self.driver_address, MAX_UINT256)
        return await self._send(account, call, DEFAULT_GAS_APPROVE, gas)

    async def get_user_id(self) -> int:
        """
        Get the user ID controlled by the signer.

        Raises:
            SignerMissingError: If the client is read-only
        """
        account = self._require_signer("get user ID")
        return await self.get_user_id_by_address(account.address)

    async def get_user_id_by_address(self, user_address: str) -> int:
        """
        Get the AddressDriver user ID of an address.

        Raises:
            AddressError: If user_address is not valid
        """
        address = validate_address(user_address, "user_address")
        user_id = await self.driver.functions.calcUserId(address).call()
        return from_uint(user_id, 256, "user_id")

    async def collect(
        self,
        token_address: str,
        transfer_to_address: str,
        gas: GasOptions | None = None,
    ) -> HexBytes:
        """
        Collect received and already split funds and send them to an address.

        Raises:
            SignerMissingError: If the client is read-only
            AddressError: If token_address or transfer_to_address is not valid
        """
        account = self._require_signer("collect")
        token = validate_address(token_address, "token_address")
        transfer_to = validate_address(transfer_to_address, "transfer_to_address")

        return await self._send(account, self.driver.functions.collect(token, transfer_to), DEFAULT_GAS_COLLECT, gas)

    async def give(
        self,
        receiver_user_id: int,
        token_address: str,
        amount: int,
        gas: GasOptions | None = None,
    ) -> HexBytes:
        """
        Give funds to a user, who can collect them immediately.

        Transfers `amount` of the token from the signer's wallet to DripsHub.

        Args:
            receiver_user_id: The receiver user ID
            token_address: The ERC20 token address
            amount: Amount in the token's smallest unit, greater than 0

        Raises:
            SignerMissingError: If the client is read-only
            ArgumentMissingError: If receiver_user_id is None
            AddressError: If token_address is not valid
            ArgumentRangeError: If amount is not in (0, 2**128)
        """
        account = self._require_signer("give")

        if receiver_user_id is None:
            raise ArgumentMissingError("Could not give: 'receiver_user_id' is missing", "receiver_user_id")
        receiver = to_uint(receiver_user_id, 256, "receiver_user_id")
        token = validate_address(token_address, "token_address")

        amount = to_uint(amount, 128, "amount")
        if amount == 0:
            raise ArgumentRangeError("Could not give: 'amount' must be greater than 0", "amount", amount)

        return await self._send(account, self.driver.functions.give(receiver, token, amount), DEFAULT_GAS_GIVE, gas)

    async def set_splits(self, receivers: list[SplitsReceiver], gas: GasOptions | None = None) -> HexBytes:
        """
        Set the splits configuration.

        Each receiver gets weight / TOTAL_SPLITS_WEIGHT of the split funds.
        Pass an empty list to clear all receivers.

        Raises:
            SignerMissingError: If the client is read-only
            ArgumentMissingError: If receivers is None
            TooManySplitsReceiversError: If there are more than MAX_SPLITS_RECEIVERS
            SplitsReceiverError: If a weight is invalid
            DuplicateReceiverError: If a user ID appears twice
        """
        account = self._require_signer("set splits")
        validate_splits_receivers(receivers)

        return await self._send(
            account,
            self.driver.functions.setSplits(format_splits_receivers(receivers)),
            DEFAULT_GAS_SET_SPLITS,
            gas,
        )

    async def set_drips(
        self,
        token_address: str,
        current_receivers: list[DripsReceiver],
        new_receivers: list[DripsReceiver],
        transfer_to_address: str,
        balance_delta: int = 0,
        gas: GasOptions | None = None,
    ) -> HexBytes:
        """
        Set the drips configuration for a token.

        Funds are moved between the signer's wallet and DripsHub to apply
        balance_delta.

        Args:
            token_address: The ERC20 token address
            current_receivers: Receivers set in the last update ([] if this is the first)
            new_receivers: The new receivers ([] to stop dripping)
            transfer_to_address: Where funds go when the balance decreases
            balance_delta: Positive to add funds, negative to withdraw, 0 to keep the balance

        Raises:
            SignerMissingError: If the client is read-only
            AddressError: If token_address or transfer_to_address is not valid
            ArgumentMissingError: If a receivers list is None
            TooManyReceiversError: If a list has more than MAX_DRIPS_RECEIVERS
            ReceiverConfigError: If a receiver config is invalid
            DuplicateReceiverError: If a receiver appears twice in a list
            ArgumentRangeError: If balance_delta does not fit in int128
        """
        account = self._require_signer("set drips")
        token = validate_address(token_address, "token_address")
        validate_drips_receivers(current_receivers, "current_receivers")
        validate_drips_receivers(new_receivers, "new_receivers")
        transfer_to = validate_address(transfer_to_address, "transfer_to_address")
        balance_delta = to_int(balance_delta, 128, "balance_delta")

        return await self._send(
            account,
            self.driver.functions.setDrips(
                token,
                format_drips_receivers(current_receivers),
                balance_delta,
                format_drips_receivers(new_receivers),
                transfer_to,
            ),
            DEFAULT_GAS_SET_DRIPS,
            gas,
        )

    async def emit_user_metadata(self, key: int, value: str, gas: GasOptions | None = None) -> HexBytes:
        """
        Emit metadata for the signer's user ID.

        Keys and values are not standardized by the protocol.

        Args:
            key: Metadata key (uint256)
            value: Metadata value, emitted as UTF-8 bytes

        Raises:
            SignerMissingError: If the client is read-only
            ArgumentMissingError: If key or value is None
            ArgumentRangeError: If key is not a uint256
        """
        account = self._require_signer("emit user metadata")

        if key is None:
            raise ArgumentMissingError("Could not emit user metadata: 'key' is missing", "key")
        if value is None:
            raise ArgumentMissingError("Could not emit user metadata: 'value' is missing", "value")
        key = to_uint(key, 256, "key")

        return await self._send(
            account,
            self.driver.functions.emitUserMetadata(key, value.encode("utf-8")),
            DEFAULT_GAS_EMIT_METADATA,
            gas,
        )

    @staticmethod
    def get_user_address(user_id: int) -> ChecksumAddress:
        """Get the address behind an AddressDriver user ID."""
        return _get_user_address(user_id)
