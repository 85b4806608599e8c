"""Address validation and address <-> ID mapping for drips-sdk."""

from typing import Any

from eth_typing import ChecksumAddress
from web3 import Web3

from ._exceptions import AddressError, ArgumentMissingError
from .codec import to_uint

ADDRESS_BITS = 160
_ADDRESS_MASK = (1 << ADDRESS_BITS) - 1


def validate_address(address: Any, name: str = "address") -> ChecksumAddress:
    """
    Validate an address argument and return it checksummed.

    Raises:
        ArgumentMissingError: If address is None
        AddressError: If address is not a valid 20-byte hex address
    """
    if address is None:
        raise ArgumentMissingError(f"'{name}' is missing", name)
    if not isinstance(address, str) or not Web3.is_address(address):
        raise AddressError(f"'{name}' is not a valid address: {address!r}", name, address)
    return Web3.to_checksum_address(address)


def asset_id_from_token(token_address: str) -> int:
    """
    Get the DripsHub asset ID of an ERC20 token.

    The asset ID is the token address read as a number.
    """
    return int(validate_address(token_address, "token_address"), 16)


def token_from_asset_id(asset_id: int) -> ChecksumAddress:
    """
    Get the ERC20 token address of a DripsHub asset ID.

    Raises:
        ArgumentRangeError: If asset_id does not fit in 160 bits
    """
    asset_id = to_uint(asset_id, ADDRESS_BITS, "asset_id")
    return Web3.to_checksum_address(f"0x{asset_id:040x}")


def get_user_address(user_id: int) -> ChecksumAddress:
    """
    Get the address embedded in an AddressDriver user ID.

    AddressDriver user IDs carry the address in their lowest 160 bits. For
    user IDs issued by other drivers the result is not a meaningful address.
    """
    user_id = to_uint(user_id, 256, "user_id")
    return Web3.to_checksum_address(f"0x{user_id & _ADDRESS_MASK:040x}")
