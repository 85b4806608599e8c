"""Custom exceptions for drips-sdk."""

from typing import Any


class DripsError(Exception):
    """Base exception for drips-sdk."""


class ConfigurationError(DripsError):
    """Invalid configuration (missing RPC URL, private key, etc.)."""


class ArgumentError(DripsError):
    """An argument failed local validation.

    Carries the offending argument name and value so callers can build
    their own messages.
    """

    def __init__(self, message: str, argument: str, value: Any = None) -> None:
        super().__init__(message)
        self.argument = argument
        self.value = value


class ArgumentMissingError(ArgumentError):
    """A required argument was None."""


class ArgumentRangeError(ArgumentError):
    """A numeric argument violated its bit-width or sign constraint."""


class ConfigRangeError(ArgumentRangeError):
    """A drips receiver config field does not fit its packed segment."""


class AddressError(ArgumentError):
    """A string argument is not a valid address."""


class DuplicateReceiverError(ArgumentError):
    """Two receivers share the same identity key."""


class TooManyReceiversError(ArgumentError):
    """More drips receivers than the protocol allows."""


class TooManySplitsReceiversError(TooManyReceiversError):
    """More splits receivers than the protocol allows."""


class ReceiverConfigError(ArgumentError):
    """A drips receiver has an invalid config."""


class SplitsReceiverError(ArgumentError):
    """A splits receiver has an invalid weight."""


class SignerMissingError(DripsError):
    """A write operation was attempted on a read-only client."""


class UnsupportedNetworkError(DripsError):
    """Unsupported chain ID."""

    def __init__(self, chain_id: int) -> None:
        super().__init__(f"Chain {chain_id} is not supported")
        self.chain_id = chain_id


class InvalidCycleLengthError(DripsError):
    """Cycle length must be a positive number of seconds."""

    def __init__(self, cycle_secs: int) -> None:
        super().__init__(f"Cycle length must be greater than 0, got {cycle_secs}")
        self.cycle_secs = cycle_secs


class SubgraphError(DripsError):
    """The subgraph request failed or returned GraphQL errors."""


class TransactionError(DripsError):
    """Transaction failed."""


class TransactionRejectedError(TransactionError):
    """Transaction was rejected by the wallet."""


class TransactionRevertedError(TransactionError):
    """Transaction reverted on-chain."""


class InsufficientGasError(TransactionError):
    """Insufficient gas for transaction."""
