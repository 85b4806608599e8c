"""Tests for receiver list validation and canonical ordering."""

import pytest
from pydantic import ValidationError

from drips_sdk import (
    MAX_DRIPS_RECEIVERS,
    MAX_SPLITS_RECEIVERS,
    TOTAL_SPLITS_WEIGHT,
    ArgumentMissingError,
    DripsHistory,
    DripsReceiver,
    DripsReceiverConfig,
    DuplicateReceiverError,
    ReceiverConfigError,
    SplitsReceiver,
    SplitsReceiverError,
    TooManyReceiversError,
    TooManySplitsReceiversError,
    format_drips_receivers,
    format_splits_receivers,
    normalize_drips_receivers,
    normalize_splits_receivers,
    pack_config,
    validate_drips_receivers,
    validate_splits_receivers,
)


def drips(user_id: int, amount_per_sec: int = 1, start: int = 0, duration: int = 0) -> DripsReceiver:
    return DripsReceiver(
        user_id=user_id,
        config=DripsReceiverConfig(start=start, duration=duration, amount_per_sec=amount_per_sec),
    )


def splits(user_id: int, weight: int = 1) -> SplitsReceiver:
    return SplitsReceiver(user_id=user_id, weight=weight)


class TestValidateDripsReceivers:
    """Tests for validate_drips_receivers."""

    def test_empty_list_is_valid(self) -> None:
        """An empty list clears the configuration."""
        validate_drips_receivers([])

    def test_none_is_missing(self) -> None:
        """None is reported with the argument name."""
        with pytest.raises(ArgumentMissingError) as exc_info:
            validate_drips_receivers(None, "new_receivers")

        assert exc_info.value.argument == "new_receivers"

    def test_max_receivers_accepted(self) -> None:
        """Exactly MAX_DRIPS_RECEIVERS is allowed."""
        validate_drips_receivers([drips(i) for i in range(MAX_DRIPS_RECEIVERS)])

    def test_too_many_receivers(self) -> None:
        """MAX_DRIPS_RECEIVERS + 1 is rejected."""
        with pytest.raises(TooManyReceiversError) as exc_info:
            validate_drips_receivers([drips(i) for i in range(MAX_DRIPS_RECEIVERS + 1)])

        assert exc_info.value.value == MAX_DRIPS_RECEIVERS + 1

    def test_zero_amount_rejected(self) -> None:
        """A receiver with amount_per_sec 0 is invalid."""
        with pytest.raises(ReceiverConfigError) as exc_info:
            validate_drips_receivers([drips(1, amount_per_sec=0)])

        assert exc_info.value.argument == "amount_per_sec"

    def test_out_of_range_config_rejected(self) -> None:
        """Config fields wider than their segment are a receiver config error."""
        with pytest.raises(ReceiverConfigError) as exc_info:
            validate_drips_receivers([drips(1, start=2**32)])

        assert exc_info.value.argument == "start"

    def test_duplicates_rejected(self) -> None:
        """Same user and same config twice is a duplicate."""
        with pytest.raises(DuplicateReceiverError):
            validate_drips_receivers([drips(1, 5), drips(2, 5), drips(1, 5)])

    def test_same_user_different_config_allowed(self) -> None:
        """One user may appear with several distinct configs."""
        validate_drips_receivers([drips(1, 5), drips(1, 6)])

    def test_unsorted_list_is_valid(self) -> None:
        """Ordering is applied by normalization, not required on input."""
        validate_drips_receivers([drips(3), drips(1), drips(2)])


class TestValidateSplitsReceivers:
    """Tests for validate_splits_receivers."""

    def test_empty_list_is_valid(self) -> None:
        """An empty list means everything stays collectable."""
        validate_splits_receivers([])

    def test_none_is_missing(self) -> None:
        """None is reported as missing."""
        with pytest.raises(ArgumentMissingError):
            validate_splits_receivers(None)

    def test_max_receivers_accepted(self) -> None:
        """Exactly MAX_SPLITS_RECEIVERS is allowed."""
        validate_splits_receivers([splits(i) for i in range(MAX_SPLITS_RECEIVERS)])

    def test_too_many_receivers(self) -> None:
        """MAX_SPLITS_RECEIVERS + 1 is rejected."""
        with pytest.raises(TooManySplitsReceiversError):
            validate_splits_receivers([splits(i) for i in range(MAX_SPLITS_RECEIVERS + 1)])

    def test_too_many_is_also_too_many_receivers(self) -> None:
        """The splits variant shares the drips error base."""
        with pytest.raises(TooManyReceiversError):
            validate_splits_receivers([splits(i) for i in range(MAX_SPLITS_RECEIVERS + 1)])

    def test_zero_weight_rejected(self) -> None:
        """Weights must be positive."""
        with pytest.raises(SplitsReceiverError) as exc_info:
            validate_splits_receivers([splits(1, weight=0)])

        assert exc_info.value.argument == "weight"

    def test_full_weight_accepted(self) -> None:
        """Weights may sum to exactly TOTAL_SPLITS_WEIGHT."""
        validate_splits_receivers([splits(1, TOTAL_SPLITS_WEIGHT // 2), splits(2, TOTAL_SPLITS_WEIGHT // 2)])

    def test_weight_sum_over_total_rejected(self) -> None:
        """Splitting more than everything is rejected."""
        with pytest.raises(SplitsReceiverError) as exc_info:
            validate_splits_receivers([splits(1, TOTAL_SPLITS_WEIGHT), splits(2, 1)])

        assert exc_info.value.value == TOTAL_SPLITS_WEIGHT + 1

    def test_duplicate_user_rejected(self) -> None:
        """A user may appear only once."""
        with pytest.raises(DuplicateReceiverError):
            validate_splits_receivers([splits(1, 10), splits(1, 20)])


class TestNormalize:
    """Tests for canonical ordering."""

    def test_drips_sorted_by_user_then_config(self) -> None:
        """Ties on user ID are broken by the packed config."""
        receivers = [drips(2, 1), drips(1, 9), drips(1, 3), drips(1, 3, start=1)]

        result = normalize_drips_receivers(receivers)

        assert [(r.user_id, pack_config(r.config)) for r in result] == sorted(
            (r.user_id, pack_config(r.config)) for r in receivers
        )
        assert result[0] == drips(1, 3)
        assert result[-1] == drips(2, 1)

    def test_drips_normalize_is_idempotent(self) -> None:
        """Normalizing twice gives the same list."""
        once = normalize_drips_receivers([drips(5), drips(3), drips(4)])
        assert normalize_drips_receivers(once) == once

    def test_drips_normalize_does_not_mutate_input(self) -> None:
        """The caller's list keeps its order."""
        receivers = [drips(2), drips(1)]
        normalize_drips_receivers(receivers)
        assert [r.user_id for r in receivers] == [2, 1]

    def test_splits_sorted_by_user(self) -> None:
        """Splits receivers order by user ID only."""
        result = normalize_splits_receivers([splits(3, 1), splits(1, 2), splits(2, 3)])
        assert [r.user_id for r in result] == [1, 2, 3]

    def test_splits_normalize_is_idempotent(self) -> None:
        """Normalizing twice gives the same list."""
        once = normalize_splits_receivers([splits(9), splits(7)])
        assert normalize_splits_receivers(once) == once


class TestFormat:
    """Tests for contract tuple formatting."""

    def test_format_drips_receivers(self) -> None:
        """Output is sorted (userId, packedConfig) tuples."""
        result = format_drips_receivers([drips(2, 1), drips(1, 1000)])

        assert result == [(1, 1000 << 64), (2, 1 << 64)]

    def test_format_splits_receivers(self) -> None:
        """Output is sorted (userId, weight) tuples."""
        result = format_splits_receivers([splits(2, 300), splits(1, 700)])

        assert result == [(1, 700), (2, 300)]

    def test_format_empty(self) -> None:
        """Empty lists format to empty lists."""
        assert format_drips_receivers([]) == []
        assert format_splits_receivers([]) == []


class TestModelTypes:
    """Strict field types on the receiver and history models."""

    @pytest.mark.parametrize("field", ["start", "duration", "amount_per_sec"])
    def test_bool_config_field_rejected(self, field: str) -> None:
        """Booleans are not accepted as config integers."""
        with pytest.raises(ValidationError):
            DripsReceiverConfig(**{"amount_per_sec": 1, field: True})

    def test_bool_user_id_rejected(self) -> None:
        """Booleans are not accepted as user IDs."""
        with pytest.raises(ValidationError):
            DripsReceiver(user_id=True, config=DripsReceiverConfig(amount_per_sec=1))

        with pytest.raises(ValidationError):
            SplitsReceiver(user_id=1, weight=True)

    @pytest.mark.parametrize("drips_hash", [b"\x00" * 31, b"\x00" * 33, b""])
    def test_history_hash_must_be_32_bytes(self, drips_hash: bytes) -> None:
        """A history entry's drips_hash is exactly 32 bytes."""
        with pytest.raises(ValidationError):
            DripsHistory(drips_hash=drips_hash, update_time=1, max_end=2)

    def test_history_hash_defaults_to_zero(self) -> None:
        """Entries that carry receivers default to the zero hash."""
        entry = DripsHistory(receivers=[drips(1)], update_time=1, max_end=2)

        assert entry.drips_hash == b"\x00" * 32
