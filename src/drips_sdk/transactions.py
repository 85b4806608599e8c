"""Transaction building and submission for drips-sdk."""

import logging
from typing import cast

from eth_account.signers.local import LocalAccount
from eth_typing import ChecksumAddress
from hexbytes import HexBytes
from web3 import AsyncWeb3
from web3.contract.async_contract import AsyncContractFunction
from web3.exceptions import ContractLogicError, Web3Exception

from ._exceptions import (
    InsufficientGasError,
    TransactionError,
    TransactionRejectedError,
    TransactionRevertedError,
)
from .types import GasOptions

logger = logging.getLogger(__name__)

# Type alias for transaction params
TxParams = dict[str, int | str]

# Default gas limits for operations
DEFAULT_GAS_APPROVE = 100_000
DEFAULT_GAS_GIVE = 200_000
DEFAULT_GAS_COLLECT = 300_000
DEFAULT_GAS_EMIT_METADATA = 200_000
DEFAULT_GAS_SET_SPLITS = 1_000_000
DEFAULT_GAS_SET_DRIPS = 2_000_000
DEFAULT_GAS_RECEIVE_DRIPS = 2_000_000
DEFAULT_PRIORITY_FEE = 1_000_000_000  # 1 gwei


async def build_tx_params(
    w3: AsyncWeb3,
    sender: ChecksumAddress | str,
    chain_id: int,
    default_gas: int,
    gas_options: GasOptions | None = None,
    contract_call: AsyncContractFunction | None = None,
) -> TxParams:
    """
    Build transaction parameters with gas options.

    Handles:
    - Gas estimation (with 20% buffer) when estimate_gas=True
    - EIP-1559 type 2 transactions when max_fee_per_gas is set
    - Fallback to legacy transactions otherwise

    Args:
        w3: AsyncWeb3 instance
        sender: Sender address
        chain_id: Chain ID
        default_gas: Default gas limit if not estimating
        gas_options: Optional gas configuration
        contract_call: Contract function call for estimation (required if estimate_gas=True)

    Returns:
        Transaction parameters dict
    """
    nonce = await w3.eth.get_transaction_count(cast(ChecksumAddress, sender))

    tx_params: TxParams = {
        "from": sender,
        "nonce": nonce,
        "chainId": chain_id,
    }

    opts = gas_options or GasOptions()

    # Determine gas limit
    if opts.gas_limit is not None:
        tx_params["gas"] = opts.gas_limit
    elif opts.estimate_gas and contract_call is not None:
        estimated = await contract_call.estimate_gas({"from": sender})
        tx_params["gas"] = int(estimated * 1.2)  # 20% buffer
    else:
        tx_params["gas"] = default_gas

    # EIP-1559 or legacy
    if opts.max_fee_per_gas is not None:
        tx_params["type"] = "0x2"
        tx_params["maxFeePerGas"] = opts.max_fee_per_gas
        tx_params["maxPriorityFeePerGas"] = (
            opts.max_priority_fee_per_gas if opts.max_priority_fee_per_gas is not None else DEFAULT_PRIORITY_FEE
        )

    return tx_params


def classify_transaction_error(e: Exception) -> TransactionError:
    """Map a web3 exception to the matching TransactionError subclass."""
    if isinstance(e, ContractLogicError):
        return TransactionRevertedError(str(e))

    message = str(e).lower()
    if "rejected" in message or "denied" in message:
        return TransactionRejectedError("Transaction rejected")
    if "revert" in message:
        return TransactionRevertedError(str(e))
    if "gas" in message or "insufficient" in message:
        return InsufficientGasError(str(e))
    return TransactionError(str(e))


async def send_transaction(
    w3: AsyncWeb3,
    account: LocalAccount,
    chain_id: int,
    contract_call: AsyncContractFunction,
    default_gas: int,
    gas_options: GasOptions | None = None,
) -> HexBytes:
    """
    Sign and submit a contract call.

    Returns as soon as the node accepts the transaction; waiting for the
    receipt is left to the caller.

    Returns:
        The transaction hash

    Raises:
        TransactionError: Or a subclass, if building or submitting fails
    """
    try:
        tx_params = await build_tx_params(
            w3,
            account.address,
            chain_id,
            default_gas,
            gas_options=gas_options,
            contract_call=contract_call,
        )
        tx = await contract_call.build_transaction(tx_params)

        # Sign and send
        signed = account.sign_transaction(tx)
        tx_hash = await w3.eth.send_raw_transaction(signed.raw_transaction)
    except Web3Exception as e:
        raise classify_transaction_error(e) from e

    logger.debug("Submitted %s from %s: %s", contract_call.fn_name, account.address, HexBytes(tx_hash).hex())
    return HexBytes(tx_hash)
