"""Provider and signer resolution shared by the drips-sdk clients."""

import os

from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_typing import ChecksumAddress
from web3 import AsyncWeb3

from ._exceptions import ConfigurationError
from .assets import validate_address
from .networks import resolve
from .types import NetworkMetadata

RPC_URL_ENV = "DRIPS_RPC_URL"
PRIVATE_KEY_ENV = "DRIPS_PRIVATE_KEY"
SUBGRAPH_URL_ENV = "DRIPS_SUBGRAPH_URL"
DRIPS_HUB_ENV = "DRIPS_HUB_ADDRESS"
ADDRESS_DRIVER_ENV = "DRIPS_ADDRESS_DRIVER_ADDRESS"


def resolve_private_key(private_key: str | None) -> LocalAccount:
    """
    Load the signing account, falling back to DRIPS_PRIVATE_KEY.

    Raises:
        ConfigurationError: If no private key is available
    """
    resolved_key = private_key or os.environ.get(PRIVATE_KEY_ENV)
    if not resolved_key:
        raise ConfigurationError(f"private_key required (or set {PRIVATE_KEY_ENV})")
    return Account.from_key(resolved_key)


async def connect(rpc_url: str | None, w3: AsyncWeb3 | None = None) -> tuple[AsyncWeb3, NetworkMetadata]:
    """
    Build an AsyncWeb3 (unless one is given) and resolve its network.

    Args:
        rpc_url: RPC endpoint URL. Falls back to DRIPS_RPC_URL env var.
        w3: Existing AsyncWeb3 instance; rpc_url is ignored when set.

    Raises:
        ConfigurationError: If neither w3 nor an RPC URL is available
        UnsupportedNetworkError: If the provider's chain is not supported
    """
    if w3 is None:
        resolved_rpc = rpc_url or os.environ.get(RPC_URL_ENV)
        if not resolved_rpc:
            raise ConfigurationError(f"rpc_url required (or set {RPC_URL_ENV})")
        w3 = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(resolved_rpc))

    chain_id = await w3.eth.chain_id
    return w3, resolve(chain_id)


def resolve_contract_address(
    address: str | None,
    env_var: str,
    default: str | None,
    name: str,
) -> ChecksumAddress:
    """
    Pick a contract address: explicit argument, then `env_var`, then the network table.

    Raises:
        ConfigurationError: If no address is available
        AddressError: If the chosen address is not valid
    """
    resolved = address or os.environ.get(env_var) or default
    if not resolved:
        raise ConfigurationError(f"{name} required (or set {env_var}): no deployment is known for this network")
    return validate_address(resolved, name)
