"""Pytest configuration and fixtures for drips-sdk tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from hexbytes import HexBytes

from drips_sdk import resolve

# Anvil's pre-funded test accounts (same as Hardhat/Foundry)
# Private keys are well-known - DO NOT use on mainnet
ANVIL_ACCOUNTS = [
    {
        "address": "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266",
        "private_key": "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80",
    },
    {
        "address": "0x70997970C51812dc3A010C7d01b50e0d17dc79C8",
        "private_key": "0x59c6995e998f97a5a0044966f0945389dc9e86dae88c7a8412f4603b6b78690d",
    },
]

GOERLI_CHAIN_ID = 5

TOKEN = "0x" + "11" * 20
OTHER_TOKEN = "0x" + "22" * 20
TRANSFER_TO = "0x" + "33" * 20

# Contract addresses of the test deployment
HUB_ADDRESS = "0x" + "44" * 20
DRIVER_ADDRESS = "0x" + "55" * 20

TX_HASH = HexBytes(b"\xab" * 32)


class AsyncChainId:
    """Awaitable that returns chain_id each time it's awaited."""

    def __init__(self, chain_id: int):
        self._chain_id = chain_id

    def __await__(self):
        async def _coro():
            return self._chain_id

        return _coro().__await__()


def create_mock_w3(chain_id: int = GOERLI_CHAIN_ID) -> MagicMock:
    """Create a mock AsyncWeb3 that accepts transactions."""
    mock_w3 = MagicMock()
    mock_eth = MagicMock()
    mock_eth.chain_id = AsyncChainId(chain_id)
    mock_eth.get_transaction_count = AsyncMock(return_value=7)
    mock_eth.send_raw_transaction = AsyncMock(return_value=TX_HASH)
    mock_w3.eth = mock_eth
    mock_w3.provider.disconnect = AsyncMock()
    return mock_w3


def create_mock_account(address: str = ANVIL_ACCOUNTS[0]["address"]) -> MagicMock:
    """Create a mock LocalAccount whose signatures are opaque bytes."""
    mock_account = MagicMock()
    mock_account.address = address
    mock_account.sign_transaction.return_value = MagicMock(raw_transaction=b"signed")
    return mock_account


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Tests never see the developer's DRIPS_* configuration."""
    for name in (
        "DRIPS_RPC_URL",
        "DRIPS_PRIVATE_KEY",
        "DRIPS_SUBGRAPH_URL",
        "DRIPS_HUB_ADDRESS",
        "DRIPS_ADDRESS_DRIVER_ADDRESS",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def deployment_env(monkeypatch):
    """Point the clients at the test deployment through the environment."""
    monkeypatch.setenv("DRIPS_HUB_ADDRESS", HUB_ADDRESS)
    monkeypatch.setenv("DRIPS_ADDRESS_DRIVER_ADDRESS", DRIVER_ADDRESS)


@pytest.fixture
def goerli():
    """Goerli network metadata with the test deployment's contracts."""
    return resolve(GOERLI_CHAIN_ID).model_copy(update={"drips_hub": HUB_ADDRESS, "address_driver": DRIVER_ADDRESS})


@pytest.fixture
def mock_w3():
    """Mock AsyncWeb3 connected to Goerli."""
    return create_mock_w3()


@pytest.fixture
def mock_contract(mock_w3):
    """The contract every w3.eth.contract(...) call returns."""
    contract = MagicMock()
    mock_w3.eth.contract.return_value = contract
    return contract


@pytest.fixture
def mock_account():
    """Mock signing account."""
    return create_mock_account()


def stub_call(contract: MagicMock, function: str, return_value=None, side_effect=None) -> MagicMock:
    """Make contract.functions.<function>(...).call() return a value."""
    call = AsyncMock(return_value=return_value, side_effect=side_effect)
    getattr(contract.functions, function).return_value.call = call
    return call


def stub_transaction(contract: MagicMock, function: str) -> AsyncMock:
    """Make contract.functions.<function>(...).build_transaction() succeed."""
    build = AsyncMock(return_value={"gas": 100_000})
    fn = getattr(contract.functions, function).return_value
    fn.build_transaction = build
    fn.fn_name = function
    return build
