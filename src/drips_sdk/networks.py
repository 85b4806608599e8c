"""Network metadata and chain resolution for drips-sdk."""

from types import MappingProxyType

from ._exceptions import UnsupportedNetworkError
from .types import NetworkMetadata

# Drips deployments per chain. Contract addresses are not bundled: clients take
# them from their arguments or from DRIPS_HUB_ADDRESS / DRIPS_ADDRESS_DRIVER_ADDRESS.
NETWORKS: MappingProxyType[int, NetworkMetadata] = MappingProxyType(
    {
        5: NetworkMetadata(
            chain_id=5,
            name="goerli",
            cycle_secs=604800,  # 1 week
            subgraph_url="https://api.thegraph.com/subgraphs/name/gh0stwheel/drips-on-goerli",
        ),
    }
)

# Supported chain IDs
SUPPORTED_CHAINS: tuple[int, ...] = tuple(NETWORKS)


def is_supported_chain(chain_id: int) -> bool:
    """Check if a chain is supported."""
    return chain_id in NETWORKS


def resolve(chain_id: int) -> NetworkMetadata:
    """
    Get the Drips metadata for a chain.

    Raises:
        UnsupportedNetworkError: If no deployment is known for chain_id
    """
    metadata = NETWORKS.get(chain_id)
    if metadata is None:
        raise UnsupportedNetworkError(chain_id)
    return metadata
