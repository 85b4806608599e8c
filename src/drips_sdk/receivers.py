"""
Receiver list validation and canonical ordering.

DripsHub stores only a hash of the receivers list, so lists must be submitted
sorted by user ID (drips receivers then by packed config) and without
duplicates. Invalid lists are rejected, never repaired: duplicates are not
merged and nothing is dropped.
"""

from collections.abc import Sequence

from ._exceptions import (
    ArgumentMissingError,
    DuplicateReceiverError,
    ReceiverConfigError,
    SplitsReceiverError,
    TooManyReceiversError,
    TooManySplitsReceiversError,
)
from .codec import check_config_ranges, pack_config
from .constants import MAX_DRIPS_RECEIVERS, MAX_SPLITS_RECEIVERS, TOTAL_SPLITS_WEIGHT
from .types import DripsReceiver, SplitsReceiver


def _drips_key(receiver: DripsReceiver) -> tuple[int, int]:
    return (receiver.user_id, pack_config(receiver.config))


def validate_drips_receivers(receivers: Sequence[DripsReceiver] | None, name: str = "receivers") -> None:
    """
    Validate a drips receivers list before it is submitted.

    An empty list is valid (it clears the configuration).

    Raises:
        ArgumentMissingError: If receivers is None
        TooManyReceiversError: If there are more than MAX_DRIPS_RECEIVERS
        ReceiverConfigError: If a config is out of range or has a zero amount_per_sec
        DuplicateReceiverError: If two receivers share user ID and config
    """
    if receivers is None:
        raise ArgumentMissingError(f"'{name}' is missing", name)

    if len(receivers) > MAX_DRIPS_RECEIVERS:
        raise TooManyReceiversError(
            f"Drips receivers: expected at most {MAX_DRIPS_RECEIVERS}, got {len(receivers)}",
            name,
            len(receivers),
        )

    for receiver in receivers:
        check_config_ranges(receiver.config, ReceiverConfigError)
        if receiver.config.amount_per_sec == 0:
            raise ReceiverConfigError(
                f"Drips receiver {receiver.user_id}: 'amount_per_sec' must be greater than 0",
                "amount_per_sec",
                0,
            )

    seen: set[tuple[int, int]] = set()
    for receiver in receivers:
        key = _drips_key(receiver)
        if key in seen:
            raise DuplicateReceiverError(
                f"Duplicate drips receiver: user {receiver.user_id} with config {key[1]}",
                name,
                receiver,
            )
        seen.add(key)


def validate_splits_receivers(receivers: Sequence[SplitsReceiver] | None, name: str = "receivers") -> None:
    """
    Validate a splits receivers list before it is submitted.

    An empty list is valid (everything is collectable by the user).

    Raises:
        ArgumentMissingError: If receivers is None
        TooManySplitsReceiversError: If there are more than MAX_SPLITS_RECEIVERS
        SplitsReceiverError: If a weight is 0 or the weights sum above TOTAL_SPLITS_WEIGHT
        DuplicateReceiverError: If a user ID appears twice
    """
    if receivers is None:
        raise ArgumentMissingError(f"'{name}' is missing", name)

    if len(receivers) > MAX_SPLITS_RECEIVERS:
        raise TooManySplitsReceiversError(
            f"Splits receivers: expected at most {MAX_SPLITS_RECEIVERS}, got {len(receivers)}",
            name,
            len(receivers),
        )

    for receiver in receivers:
        if receiver.weight <= 0:
            raise SplitsReceiverError(
                f"Splits receiver {receiver.user_id}: 'weight' must be greater than 0",
                "weight",
                receiver.weight,
            )

    total = sum(r.weight for r in receivers)
    if total > TOTAL_SPLITS_WEIGHT:
        raise SplitsReceiverError(
            f"Splits weights must sum to at most {TOTAL_SPLITS_WEIGHT}, got {total}",
            "weight",
            total,
        )

    seen: set[int] = set()
    for receiver in receivers:
        if receiver.user_id in seen:
            raise DuplicateReceiverError(
                f"Duplicate splits receiver: user {receiver.user_id}",
                name,
                receiver,
            )
        seen.add(receiver.user_id)


def normalize_drips_receivers(receivers: Sequence[DripsReceiver]) -> list[DripsReceiver]:
    """Sort drips receivers by user ID, then by packed config."""
    return sorted(receivers, key=_drips_key)


def normalize_splits_receivers(receivers: Sequence[SplitsReceiver]) -> list[SplitsReceiver]:
    """Sort splits receivers by user ID."""
    return sorted(receivers, key=lambda r: r.user_id)


def format_drips_receivers(receivers: Sequence[DripsReceiver]) -> list[tuple[int, int]]:
    """Normalize and pack drips receivers into DripsReceiver[] contract tuples."""
    return [_drips_key(r) for r in normalize_drips_receivers(receivers)]


def format_splits_receivers(receivers: Sequence[SplitsReceiver]) -> list[tuple[int, int]]:
    """Normalize splits receivers into SplitsReceiver[] contract tuples."""
    return [(r.user_id, r.weight) for r in normalize_splits_receivers(receivers)]
